"""
Supabase client initialization.

This module contains *only* the database connection setup and exposes a single
`supabase` client object for the Supabase-backed item store.

It is imported lazily: nothing touches it unless LEDGER_STORE=supabase.

Environment variables required:
- SUPABASE_URL: Your Supabase project URL
- SUPABASE_KEY: Your Supabase API key (use a server-side key only on the backend)
"""

from __future__ import annotations

# The dependency is `supabase` (supabase-py). If your editor can't resolve it,
# install it in your environment: `pip install supabase`.
from supabase import Client, create_client  # type: ignore[import-not-found]

from services.settings import load_settings

_settings = load_settings()

if not _settings.supabase_url:
    raise RuntimeError(
        "Missing environment variable: SUPABASE_URL. "
        "Set SUPABASE_URL to your Supabase project URL."
    )

if not _settings.supabase_key:
    raise RuntimeError(
        "Missing environment variable: SUPABASE_KEY. "
        "Set SUPABASE_KEY to your Supabase API key."
    )

supabase: Client = create_client(_settings.supabase_url, _settings.supabase_key)

__all__ = ["supabase"]

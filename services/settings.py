"""
Runtime configuration.

Values come from the process environment, optionally seeded from a `.env`
file in the project root. Settings are read once into an immutable object.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

# Look for .env in the project root
_ENV_PATH = Path(__file__).parent.parent / ".env"

STORE_MEMORY = "memory"
STORE_SUPABASE = "supabase"
_VALID_STORES = (STORE_MEMORY, STORE_SUPABASE)


@dataclass(frozen=True, slots=True)
class Settings:
    store: str = STORE_MEMORY
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    log_level: str = "INFO"
    cors_origins: Tuple[str, ...] = ("*",)


def load_settings(env_path: Optional[Path] = None) -> Settings:
    """
    Build Settings from the environment.

    Raises:
        RuntimeError: If LEDGER_STORE names an unknown backend
    """
    load_dotenv(dotenv_path=env_path or _ENV_PATH)

    store = os.getenv("LEDGER_STORE", STORE_MEMORY).strip().lower()
    if store not in _VALID_STORES:
        raise RuntimeError(
            f"Invalid LEDGER_STORE '{store}'. Must be one of: {', '.join(_VALID_STORES)}"
        )

    origins = os.getenv("LEDGER_CORS_ORIGINS", "*")
    cors_origins = tuple(o.strip() for o in origins.split(",") if o.strip()) or ("*",)

    return Settings(
        store=store,
        supabase_url=os.getenv("SUPABASE_URL"),
        supabase_key=os.getenv("SUPABASE_KEY"),
        log_level=os.getenv("LEDGER_LOG_LEVEL", "INFO").upper(),
        cors_origins=cors_origins,
    )


__all__ = ["Settings", "load_settings", "STORE_MEMORY", "STORE_SUPABASE"]

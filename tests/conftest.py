"""
Pytest configuration for ledger tests.

This file adds the project root to the Python path so that tests
can import from the domain, repositories, services and api modules.
"""

import sys
from pathlib import Path
from uuid import UUID

import pytest

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from services.ledger_service import ItemLedger  # noqa: E402
from services.transfer_service import InMemoryWallet  # noqa: E402

SELLER = UUID("00000000-0000-0000-0000-00000000000a")
BUYER = UUID("00000000-0000-0000-0000-00000000000b")
STRANGER = UUID("00000000-0000-0000-0000-00000000000c")


@pytest.fixture
def wallet() -> InMemoryWallet:
    return InMemoryWallet()


@pytest.fixture
def ledger(wallet: InMemoryWallet) -> ItemLedger:
    return ItemLedger(transfers=wallet)

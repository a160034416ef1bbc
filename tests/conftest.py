"""
Pytest configuration and fixtures for wallet-ledger-mcp tests.
"""

from decimal import Decimal
from itertools import count
from pathlib import Path
from typing import Any, Callable, List

import pytest

from wallet_ledger_mcp.core.source import InMemoryTransactionSource, JsonLedgerSource
from wallet_ledger_mcp.models.transaction import Transaction

_ids = count(1)


@pytest.fixture(scope="session")
def demo_ledger_path() -> Path:
    """Path to demo ledger for testing."""
    path = Path(__file__).parent / "fixtures" / "demo_ledger.json"
    if not path.exists():
        pytest.skip(f"Demo ledger not found at {path}.")
    return path


@pytest.fixture
def demo_source(demo_ledger_path: Path) -> JsonLedgerSource:
    """Source backed by the demo ledger file."""
    return JsonLedgerSource(demo_ledger_path)


@pytest.fixture
def make_txn() -> Callable[..., Transaction]:
    """Factory for transactions with sensible defaults."""

    def _make(**overrides: Any) -> Transaction:
        fields: dict = {
            "id": f"TXN-{next(_ids):06d}",
            "occurred_at": "2026-01-05T12:00:00Z",
            "kind": "credit",
            "status": "success",
            "amount": Decimal("1000"),
            "fee": Decimal("0"),
            "owner_id": "merchant-001",
        }
        fields.update(overrides)
        for money in ("amount", "fee"):
            if not isinstance(fields[money], Decimal):
                fields[money] = Decimal(str(fields[money]))
        return Transaction(**fields)

    return _make


@pytest.fixture
def ten_transactions(make_txn: Callable[..., Transaction]) -> List[Transaction]:
    """Ten transactions over two owners, three of them failed."""
    statuses = [
        "success", "failed", "success", "pending", "failed",
        "success", "success", "failed", "reversed", "success",
    ]
    return [
        make_txn(
            id=f"TXN-T{i:02d}",
            occurred_at=f"2026-01-{i + 1:02d}T10:00:00Z",
            kind="credit" if i % 2 == 0 else "debit",
            status=status,
            amount=1000 * (i + 1),
            fee=10,
            owner_id="merchant-001" if i < 5 else "merchant-002",
        )
        for i, status in enumerate(statuses)
    ]


@pytest.fixture
def memory_source(ten_transactions: List[Transaction]) -> InMemoryTransactionSource:
    """In-memory source over the ten sample transactions."""
    return InMemoryTransactionSource(
        ten_transactions, accounts={"user-a": ["merchant-001"]}
    )

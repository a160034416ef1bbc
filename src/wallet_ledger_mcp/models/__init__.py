"""
Pydantic models for wallet ledger data structures.
"""

from wallet_ledger_mcp.models.criteria import FilterCriteria, SortKey
from wallet_ledger_mcp.models.results import Analytics, ExportResult, TransactionPage
from wallet_ledger_mcp.models.transaction import (
    Transaction,
    TransactionKind,
    TransactionStatus,
)
from wallet_ledger_mcp.models.wallet import WalletSnapshot

__all__ = [
    "Transaction",
    "TransactionKind",
    "TransactionStatus",
    "FilterCriteria",
    "SortKey",
    "WalletSnapshot",
    "TransactionPage",
    "Analytics",
    "ExportResult",
]

"""
Core functionality for wallet ledger MCP.
"""

from wallet_ledger_mcp.core.analytics import aggregate
from wallet_ledger_mcp.core.decoder import decode_transactions, load_ledger_file
from wallet_ledger_mcp.core.exceptions import (
    DataSourceError,
    DataSourceNotFoundError,
    DecodeError,
    LedgerError,
)
from wallet_ledger_mcp.core.export import export_transactions, to_delimited_text
from wallet_ledger_mcp.core.query import apply_criteria, query
from wallet_ledger_mcp.core.scope import AccessPolicy, AccessScope, UserRole, resolve_scope
from wallet_ledger_mcp.core.source import (
    InMemoryTransactionSource,
    JsonLedgerSource,
    TransactionSource,
)
from wallet_ledger_mcp.core.wallet import compute_wallet

__all__ = [
    "AccessPolicy",
    "AccessScope",
    "UserRole",
    "resolve_scope",
    "compute_wallet",
    "query",
    "apply_criteria",
    "aggregate",
    "to_delimited_text",
    "export_transactions",
    "TransactionSource",
    "InMemoryTransactionSource",
    "JsonLedgerSource",
    "decode_transactions",
    "load_ledger_file",
    "LedgerError",
    "DataSourceError",
    "DataSourceNotFoundError",
    "DecodeError",
]

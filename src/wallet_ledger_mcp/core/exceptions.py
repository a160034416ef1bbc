"""
Custom exceptions for wallet ledger MCP server.
"""


class LedgerError(Exception):
    """Base exception for wallet ledger errors."""
    pass


class DataSourceError(LedgerError):
    """Raised when transaction records cannot be fetched from the source."""
    pass


class DataSourceNotFoundError(DataSourceError):
    """Raised when the ledger file cannot be found."""
    pass


class DecodeError(DataSourceError):
    """Raised when ledger data cannot be decoded."""
    pass

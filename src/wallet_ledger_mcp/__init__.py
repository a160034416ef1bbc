"""
Wallet ledger MCP server: scoped transaction queries, balances, analytics and export.
"""

__version__ = "0.1.0"

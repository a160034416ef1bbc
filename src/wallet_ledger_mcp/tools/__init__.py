"""
MCP tools for wallet ledger MCP.
"""

from wallet_ledger_mcp.tools.tools import LedgerTools, create_tool_schemas

__all__ = ["LedgerTools", "create_tool_schemas"]

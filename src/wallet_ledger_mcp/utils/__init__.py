"""
Utility functions for wallet ledger MCP.
"""

from wallet_ledger_mcp.utils.date_utils import (
    get_month_range,
    parse_period,
    parse_timestamp,
)
from wallet_ledger_mcp.utils.text_utils import format_money, normalize_phone

__all__ = [
    "parse_period",
    "parse_timestamp",
    "get_month_range",
    "normalize_phone",
    "format_money",
]

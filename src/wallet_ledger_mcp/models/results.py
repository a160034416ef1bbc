"""
Result models returned by the query, analytics and export operations.
"""

from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field

from wallet_ledger_mcp.models.transaction import Transaction


class TransactionPage(BaseModel):
    """One page of a filtered and sorted transaction set."""

    model_config = {"frozen": True}

    items: List[Transaction]
    total_matched: int
    page: int
    page_size: int
    total_pages: int
    has_next: bool
    has_prev: bool


class Analytics(BaseModel):
    """Summary figures over a filtered (pre-pagination) transaction set."""

    model_config = {"frozen": True}

    count: int
    total_credit: Decimal
    total_debit: Decimal
    total_fees: Decimal
    net_amount: Decimal
    success_count: int
    failed_count: int
    pending_count: int
    average_amount: Decimal
    success_rate: Decimal = Field(ge=0, le=100)  # percent, one decimal


class ExportResult(BaseModel):
    """A rendered export file ready for download."""

    model_config = {"frozen": True}

    filename: str
    content: bytes
    row_count: int
    media_type: str = "text/csv"

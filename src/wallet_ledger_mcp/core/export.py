"""
Delimited-text (CSV) export of transaction sets.
"""

import csv
import io
from datetime import date
from typing import Iterable, List, Optional

from wallet_ledger_mcp.models.results import ExportResult
from wallet_ledger_mcp.models.transaction import Transaction
from wallet_ledger_mcp.utils.text_utils import format_money

EXPORT_COLUMNS = [
    "Transaction ID",
    "User ID",
    "Phone",
    "Type",
    "Status",
    "Amount",
    "Fee",
    "Net",
    "Description",
    "Counterparty",
    "Date",
]

MISSING = "N/A"


def export_row(txn: Transaction, currency_symbol: str = "₹") -> List[str]:
    """Render one transaction as a list of cells in ``EXPORT_COLUMNS`` order."""
    return [
        txn.id,
        txn.owner_id or MISSING,
        txn.owner_phone or MISSING,
        txn.kind.value.upper(),
        txn.status.value.upper(),
        format_money(txn.amount, currency_symbol),
        format_money(txn.fee, currency_symbol),
        format_money(txn.net, currency_symbol),
        txn.description or MISSING,
        txn.counterparty_label or MISSING,
        txn.occurred_at,
    ]


def to_delimited_text(
    transactions: Iterable[Transaction],
    delimiter: str = ",",
    currency_symbol: str = "₹",
) -> bytes:
    """
    Render transactions as delimited text with a header row.

    Cells containing the delimiter, quotes or line breaks are quoted, so free
    text never breaks the row structure.

    Args:
        transactions: Transactions to export, in output order
        delimiter: Single-character field separator
        currency_symbol: Prefix for the amount, fee and net columns

    Returns:
        UTF-8 encoded file content
    """
    buffer = io.StringIO()
    writer = csv.writer(
        buffer, delimiter=delimiter, quoting=csv.QUOTE_MINIMAL, lineterminator="\n"
    )
    writer.writerow(EXPORT_COLUMNS)
    for txn in transactions:
        writer.writerow(export_row(txn, currency_symbol))
    return buffer.getvalue().encode("utf-8")


def export_filename(prefix: str = "transactions", on: Optional[date] = None) -> str:
    """Build a download filename like ``transactions_2026-01-07.csv``."""
    on = on or date.today()
    return f"{prefix}_{on.isoformat()}.csv"


def export_transactions(
    transactions: Iterable[Transaction],
    prefix: str = "transactions",
    delimiter: str = ",",
    currency_symbol: str = "₹",
    on: Optional[date] = None,
) -> ExportResult:
    """
    Export transactions to a named CSV file payload.

    Returns:
        ExportResult with filename, encoded content and row count
    """
    rows = list(transactions)
    return ExportResult(
        filename=export_filename(prefix, on),
        content=to_delimited_text(rows, delimiter, currency_symbol),
        row_count=len(rows),
    )

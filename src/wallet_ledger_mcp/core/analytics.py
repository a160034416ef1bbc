"""
Analytics over a filtered transaction set.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from wallet_ledger_mcp.models.results import Analytics
from wallet_ledger_mcp.models.transaction import Transaction, TransactionStatus

ZERO = Decimal("0.00")
ONE_PLACE = Decimal("0.1")
CENT = Decimal("0.01")


def success_rate(success_count: int, count: int) -> Decimal:
    """Percentage of successful transactions, to one decimal. Zero for an empty set."""
    if count == 0:
        return Decimal("0.0")
    rate = Decimal(success_count * 100) / Decimal(count)
    return rate.quantize(ONE_PLACE, rounding=ROUND_HALF_UP)


def aggregate(transactions: Iterable[Transaction]) -> Analytics:
    """
    Compute summary analytics.

    Run this over the filtered set before pagination so the figures reflect
    the active filter rather than the visible page.

    Args:
        transactions: Filtered transactions

    Returns:
        Analytics summary
    """
    count = 0
    success_count = 0
    failed_count = 0
    pending_count = 0
    total_credit = ZERO
    total_debit = ZERO
    total_fees = ZERO

    for txn in transactions:
        count += 1
        if txn.status is TransactionStatus.FAILED:
            failed_count += 1
        elif txn.status is TransactionStatus.PENDING:
            pending_count += 1
        if not txn.is_success:
            continue

        success_count += 1
        if txn.is_inflow:
            total_credit += txn.amount
        else:
            total_debit += txn.amount
        total_fees += txn.fee

    if success_count:
        average = ((total_credit + total_debit) / success_count).quantize(
            CENT, rounding=ROUND_HALF_UP
        )
    else:
        average = ZERO

    return Analytics(
        count=count,
        total_credit=total_credit,
        total_debit=total_debit,
        total_fees=total_fees,
        net_amount=total_credit - total_debit,
        success_count=success_count,
        failed_count=failed_count,
        pending_count=pending_count,
        average_amount=average,
        success_rate=success_rate(success_count, count),
    )

"""
Wallet balance calculation over a transaction set.
"""

from decimal import Decimal
from typing import Iterable

from wallet_ledger_mcp.models.transaction import Transaction, TransactionStatus
from wallet_ledger_mcp.models.wallet import WalletSnapshot

ZERO = Decimal("0.00")


def compute_wallet(
    transactions: Iterable[Transaction], currency_code: str = "INR"
) -> WalletSnapshot:
    """
    Compute a wallet snapshot from a transaction set.

    Only successful transactions count. Credits and refunds are credited,
    debits and transfers are debited, and every successful transaction's fee
    is charged. The balance is clamped at zero. Pending outflows are reported
    as ``reserved`` without affecting the balance.

    Args:
        transactions: Transactions to summarize (order does not matter)
        currency_code: Currency label for the snapshot

    Returns:
        WalletSnapshot
    """
    total_credited = ZERO
    total_debited = ZERO
    total_fees = ZERO
    reserved = ZERO
    count = 0

    for txn in transactions:
        count += 1
        if txn.status is TransactionStatus.PENDING and txn.is_outflow:
            reserved += txn.amount
        if not txn.is_success:
            continue
        if txn.is_inflow:
            total_credited += txn.amount
        else:
            total_debited += txn.amount
        total_fees += txn.fee

    balance = max(ZERO, total_credited - total_debited - total_fees)

    return WalletSnapshot(
        balance=balance,
        total_credited=total_credited,
        total_debited=total_debited,
        total_fees=total_fees,
        reserved=reserved,
        currency_code=currency_code,
        transaction_count=count,
    )

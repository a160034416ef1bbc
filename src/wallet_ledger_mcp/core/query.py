"""
Query engine: filter, sort and paginate transaction sets.

All functions are pure and leave their input untouched, so the same criteria
applied to the same set always yield the same ordered result.
"""

import logging
import math
from datetime import datetime
from typing import Iterable, List, Sequence, Tuple

from wallet_ledger_mcp.models.criteria import FilterCriteria, SortKey
from wallet_ledger_mcp.models.results import TransactionPage
from wallet_ledger_mcp.models.transaction import Transaction
from wallet_ledger_mcp.utils.text_utils import normalize_phone

logger = logging.getLogger(__name__)


def matches_search(txn: Transaction, search_text: str, country_code: str = "+91") -> bool:
    """
    Case-insensitive substring search over a transaction's text fields.

    Searches id, description, counterparty label, reference code, owner id and
    owner phone. Phones also match after country-code normalization of both
    sides, so "9876543220" finds "+919876543220" and vice versa.
    """
    term = search_text.strip().lower()
    if not term:
        return True

    fields = (
        txn.id,
        txn.description,
        txn.counterparty_label,
        txn.reference_code,
        txn.owner_id,
        txn.owner_phone,
    )
    if any(field and term in field.lower() for field in fields):
        return True

    if txn.owner_phone:
        phone_term = normalize_phone(term, country_code)
        if phone_term and phone_term in normalize_phone(txn.owner_phone, country_code):
            return True

    return False


def matches(txn: Transaction, criteria: FilterCriteria, country_code: str = "+91") -> bool:
    """
    Check a transaction against every criterion.

    A transaction whose timestamp cannot be parsed passes the date range
    check; such transactions are flagged by ``Transaction.timestamp_unparseable``.
    """
    if criteria.search_text and not matches_search(txn, criteria.search_text, country_code):
        return False

    if criteria.kind is not None and txn.kind is not criteria.kind:
        return False

    if criteria.status is not None and txn.status is not criteria.status:
        return False

    if criteria.date_from is not None or criteria.date_to is not None:
        timestamp = txn.timestamp
        if timestamp is None:
            logger.debug("Unparseable timestamp %r on %s passes date filter", txn.occurred_at, txn.id)
        else:
            day = timestamp.date()
            if criteria.date_from is not None and day < criteria.date_from:
                return False
            if criteria.date_to is not None and day > criteria.date_to:
                return False

    if criteria.amount_from is not None and txn.amount < criteria.amount_from:
        return False
    if criteria.amount_to is not None and txn.amount > criteria.amount_to:
        return False

    return True


def filter_transactions(
    transactions: Iterable[Transaction],
    criteria: FilterCriteria,
    country_code: str = "+91",
) -> List[Transaction]:
    """Keep the transactions matching ``criteria``, preserving their order."""
    return [txn for txn in transactions if matches(txn, criteria, country_code)]


def sort_transactions(
    transactions: Iterable[Transaction], sort_key: SortKey
) -> List[Transaction]:
    """
    Sort transactions by ``sort_key``.

    The sort is stable: ties keep their input order. For date orders,
    transactions with unparseable timestamps go last, in input order.
    """
    items = list(transactions)

    if sort_key in (SortKey.AMOUNT_DESC, SortKey.AMOUNT_ASC):
        return sorted(
            items,
            key=lambda txn: txn.amount,
            reverse=sort_key is SortKey.AMOUNT_DESC,
        )

    dated: List[Tuple[datetime, Transaction]] = []
    undated: List[Transaction] = []
    for txn in items:
        timestamp = txn.timestamp
        if timestamp is None:
            undated.append(txn)
        else:
            dated.append((timestamp, txn))

    # reverse=True still keeps equal keys in input order
    dated.sort(key=lambda pair: pair[0], reverse=sort_key is SortKey.RECENT)
    return [txn for _, txn in dated] + undated


def apply_criteria(
    transactions: Iterable[Transaction],
    criteria: FilterCriteria,
    country_code: str = "+91",
) -> List[Transaction]:
    """Filter then sort: the full result set analytics and export run over."""
    return sort_transactions(
        filter_transactions(transactions, criteria, country_code), criteria.sort_key
    )


def paginate(items: Sequence[Transaction], page: int, page_size: int) -> TransactionPage:
    """
    Slice one page out of an already filtered and sorted set.

    Pages are 1-indexed. A page past the end is empty rather than an error.

    Raises:
        ValueError: If page or page_size is less than 1
    """
    if page < 1:
        raise ValueError(f"Page must be 1 or greater, got {page}")
    if page_size < 1:
        raise ValueError(f"Page size must be 1 or greater, got {page_size}")

    total = len(items)
    total_pages = math.ceil(total / page_size)
    start = (page - 1) * page_size

    return TransactionPage(
        items=list(items[start:start + page_size]),
        total_matched=total,
        page=page,
        page_size=page_size,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_prev=page > 1,
    )


def query(
    transactions: Iterable[Transaction],
    criteria: FilterCriteria,
    page: int = 1,
    page_size: int = 10,
    country_code: str = "+91",
) -> TransactionPage:
    """
    Filter, sort and paginate a transaction set.

    Args:
        transactions: Candidate transactions (usually a resolved scope)
        criteria: Filter and sort criteria
        page: 1-indexed page number
        page_size: Number of items per page
        country_code: Phone prefix ignored when searching by phone

    Returns:
        TransactionPage with the requested slice and the total match count
    """
    return paginate(apply_criteria(transactions, criteria, country_code), page, page_size)

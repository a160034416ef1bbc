"""
Unit tests for the query engine: filtering, sorting and pagination.
"""

from datetime import date
from decimal import Decimal

import pytest

from wallet_ledger_mcp.core.query import (
    apply_criteria,
    filter_transactions,
    matches_search,
    paginate,
    query,
    sort_transactions,
)
from wallet_ledger_mcp.models.criteria import FilterCriteria, SortKey
from wallet_ledger_mcp.models.transaction import TransactionKind, TransactionStatus


pytestmark = pytest.mark.unit


def _ids(transactions):
    return [t.id for t in transactions]


class TestFiltering:
    """Tests for filter criteria."""

    def test_status_filter_with_large_page(self, ten_transactions):
        """Test a status filter returning every match on one page."""
        criteria = FilterCriteria(status=TransactionStatus.FAILED)

        page = query(ten_transactions, criteria, page=1, page_size=15)

        assert page.total_matched == 3
        assert len(page.items) == 3
        assert all(t.status is TransactionStatus.FAILED for t in page.items)

    def test_amount_range_is_inclusive(self, make_txn):
        """Test that both amount bounds are inclusive."""
        txns = [
            make_txn(id="low", amount=999),
            make_txn(id="from", amount=1000),
            make_txn(id="to", amount=5000),
            make_txn(id="high", amount=6000),
        ]
        criteria = FilterCriteria(amount_from=Decimal("1000"), amount_to=Decimal("5000"))

        assert _ids(filter_transactions(txns, criteria)) == ["from", "to"]

    def test_kind_filter(self, ten_transactions):
        criteria = FilterCriteria(kind=TransactionKind.DEBIT)
        result = filter_transactions(ten_transactions, criteria)
        assert _ids(result) == ["TXN-T01", "TXN-T03", "TXN-T05", "TXN-T07", "TXN-T09"]

    def test_date_range_is_inclusive_by_day(self, ten_transactions):
        """Test that date bounds compare on calendar day."""
        criteria = FilterCriteria(date_from=date(2026, 1, 3), date_to=date(2026, 1, 5))
        result = filter_transactions(ten_transactions, criteria)
        assert _ids(result) == ["TXN-T02", "TXN-T03", "TXN-T04"]

    def test_unparseable_timestamp_passes_date_filter(self, make_txn):
        """Test that a bad timestamp is kept by a date filter and flagged."""
        txns = [
            make_txn(id="dated", occurred_at="2025-06-01T00:00:00Z"),
            make_txn(id="undated", occurred_at="not a date"),
        ]
        criteria = FilterCriteria(date_from=date(2026, 1, 1))

        result = filter_transactions(txns, criteria)

        assert _ids(result) == ["undated"]
        assert result[0].timestamp_unparseable is True

    def test_combined_criteria(self, ten_transactions):
        """Test that all criteria must hold at once."""
        criteria = FilterCriteria(
            kind=TransactionKind.CREDIT,
            status=TransactionStatus.SUCCESS,
            amount_from=Decimal("2000"),
        )
        result = filter_transactions(ten_transactions, criteria)
        assert _ids(result) == ["TXN-T02", "TXN-T06"]

    def test_default_criteria_keeps_everything(self, ten_transactions):
        result = filter_transactions(ten_transactions, FilterCriteria())
        assert _ids(result) == _ids(ten_transactions)

    def test_empty_input(self):
        page = query([], FilterCriteria(status=TransactionStatus.FAILED))
        assert page.items == []
        assert page.total_matched == 0
        assert page.total_pages == 0


class TestSearch:
    """Tests for free-text search."""

    @pytest.fixture
    def txn(self, make_txn):
        return make_txn(
            id="TXN-MERCH-002",
            description="Payout to Supplier",
            counterparty_label="Sharma Traders",
            reference_code="REF-MERCH-002",
            owner_id="merchant-001",
            owner_phone="+919876543220",
        )

    @pytest.mark.parametrize(
        "term",
        ["merch-002", "SUPPLIER", "sharma", "ref-merch", "merchant-001", "+9198765", "  payout  "],
    )
    def test_matches_text_fields(self, txn, term):
        """Test case-insensitive substring search over text fields."""
        assert matches_search(txn, term)

    @pytest.mark.parametrize("term", ["9876543220", "+919876543220", "+91 98765 43220", "43220"])
    def test_matches_phone_with_or_without_country_code(self, txn, term):
        """Test that phone search ignores the country code on either side."""
        assert matches_search(txn, term)

    def test_no_match(self, txn):
        assert not matches_search(txn, "salary")

    def test_empty_search_matches(self, txn):
        assert matches_search(txn, "")
        assert matches_search(txn, "   ")

    def test_search_skips_missing_fields(self, make_txn):
        """Test that absent optional fields never match or raise."""
        bare = make_txn(id="TXN-BARE")
        assert not matches_search(bare, "supplier")
        assert not matches_search(bare, "9876543220")


class TestSorting:
    """Tests for sort orders."""

    def test_recent_first(self, ten_transactions):
        result = sort_transactions(ten_transactions, SortKey.RECENT)
        assert _ids(result)[:3] == ["TXN-T09", "TXN-T08", "TXN-T07"]

    def test_oldest_first(self, ten_transactions):
        result = sort_transactions(reversed(ten_transactions), SortKey.OLDEST)
        assert _ids(result) == _ids(ten_transactions)

    def test_amount_orders(self, ten_transactions):
        desc = sort_transactions(ten_transactions, SortKey.AMOUNT_DESC)
        asc = sort_transactions(ten_transactions, SortKey.AMOUNT_ASC)
        assert [t.amount for t in desc] == sorted((t.amount for t in ten_transactions), reverse=True)
        assert _ids(asc) == _ids(ten_transactions)

    @pytest.mark.parametrize("sort_key", list(SortKey))
    def test_ties_keep_input_order(self, make_txn, sort_key):
        """Test that the sort is stable for every order."""
        txns = [
            make_txn(id=f"TIE-{i}", amount=500, occurred_at="2026-01-05T12:00:00Z")
            for i in range(4)
        ]
        assert _ids(sort_transactions(txns, sort_key)) == ["TIE-0", "TIE-1", "TIE-2", "TIE-3"]

    @pytest.mark.parametrize("sort_key", [SortKey.RECENT, SortKey.OLDEST])
    def test_unparseable_timestamps_sort_last(self, make_txn, sort_key):
        txns = [
            make_txn(id="bad-1", occurred_at="garbage"),
            make_txn(id="jan-2", occurred_at="2026-01-02"),
            make_txn(id="bad-2", occurred_at=""),
            make_txn(id="jan-1", occurred_at="2026-01-01"),
        ]
        result = _ids(sort_transactions(txns, sort_key))
        assert result[2:] == ["bad-1", "bad-2"]

    def test_sort_does_not_mutate_input(self, ten_transactions):
        before = _ids(ten_transactions)
        sort_transactions(ten_transactions, SortKey.AMOUNT_DESC)
        assert _ids(ten_transactions) == before


class TestPagination:
    """Tests for paginate and query."""

    def test_pages_cover_the_result_exactly_once(self, ten_transactions):
        """Test that concatenated pages equal the full sorted set."""
        criteria = FilterCriteria(sort_key=SortKey.AMOUNT_DESC)
        full = apply_criteria(ten_transactions, criteria)

        seen = []
        for page_number in range(1, 5):
            page = query(ten_transactions, criteria, page=page_number, page_size=3)
            assert len(page.items) <= 3
            seen.extend(page.items)

        assert _ids(seen) == _ids(full)

    def test_page_metadata(self, ten_transactions):
        page = query(ten_transactions, FilterCriteria(), page=2, page_size=4)

        assert page.total_matched == 10
        assert page.total_pages == 3
        assert page.page == 2
        assert page.page_size == 4
        assert page.has_next is True
        assert page.has_prev is True
        assert _ids(page.items) == ["TXN-T05", "TXN-T04", "TXN-T03", "TXN-T02"]

    def test_last_page_is_partial(self, ten_transactions):
        page = query(ten_transactions, FilterCriteria(), page=3, page_size=4)
        assert len(page.items) == 2
        assert page.has_next is False

    def test_page_past_the_end_is_empty(self, ten_transactions):
        page = query(ten_transactions, FilterCriteria(), page=9, page_size=4)
        assert page.items == []
        assert page.total_matched == 10

    @pytest.mark.parametrize("page, page_size", [(0, 10), (-1, 10), (1, 0)])
    def test_invalid_page_arguments(self, ten_transactions, page, page_size):
        with pytest.raises(ValueError):
            paginate(ten_transactions, page, page_size)

    def test_query_is_idempotent(self, ten_transactions):
        """Test that repeating a query gives the same ordered page."""
        criteria = FilterCriteria(search_text="txn-t0", sort_key=SortKey.OLDEST)
        first = query(ten_transactions, criteria, page=1, page_size=5)
        second = query(ten_transactions, criteria, page=1, page_size=5)
        assert first == second

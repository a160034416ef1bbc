"""
MCP tool definitions for wallet ledger data.

Exposes scope-aware ledger queries through the Model Context Protocol. Every
tool takes the caller's identity explicitly and resolves its scope afresh on
each call.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Union

from wallet_ledger_mcp.core.analytics import aggregate
from wallet_ledger_mcp.core.export import export_transactions
from wallet_ledger_mcp.core.query import apply_criteria, paginate
from wallet_ledger_mcp.core.scope import AccessPolicy, resolve_scope
from wallet_ledger_mcp.core.source import TransactionSource
from wallet_ledger_mcp.core.wallet import compute_wallet
from wallet_ledger_mcp.models.criteria import FilterCriteria, SortKey
from wallet_ledger_mcp.models.transaction import (
    Transaction,
    TransactionKind,
    TransactionStatus,
)
from wallet_ledger_mcp.utils.date_utils import parse_period

Number = Union[int, float, str]


def _to_decimal(name: str, value: Optional[Number]) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Invalid {name}: {value}") from None


def _to_enum(enum_cls: Any, name: str, value: Optional[str]) -> Any:
    if value is None or value == "" or value == "all":
        return None
    try:
        return enum_cls(value)
    except ValueError:
        raise ValueError(f"Unknown {name}: {value}") from None


class LedgerTools:
    """Collection of MCP tools for querying a wallet ledger."""

    def __init__(
        self,
        source: TransactionSource,
        policy: Optional[AccessPolicy] = None,
        currency_code: str = "INR",
        currency_symbol: str = "₹",
        country_code: str = "+91",
        default_page_size: int = 10,
    ):
        """
        Initialize tools with a transaction source.

        Args:
            source: Transaction record source
            policy: Access policy. If None, built per call from the source's
                    account mapping.
            currency_code: Currency label for wallet snapshots
            currency_symbol: Prefix for money columns in exports
            country_code: Phone prefix ignored when searching by phone
            default_page_size: Page size used when a call does not give one
        """
        self.source = source
        self.policy = policy
        self.currency_code = currency_code
        self.currency_symbol = currency_symbol
        self.country_code = country_code
        self.default_page_size = default_page_size

    def _scope(self, caller_id: str, caller_role: str) -> List[Transaction]:
        return resolve_scope(caller_id, caller_role, self.source, self.policy)

    def build_criteria(
        self,
        search: Optional[str] = None,
        kind: Optional[str] = None,
        status: Optional[str] = None,
        period: Optional[str] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        amount_from: Optional[Number] = None,
        amount_to: Optional[Number] = None,
        sort: str = "recent",
    ) -> FilterCriteria:
        """
        Build filter criteria from loosely typed tool arguments.

        ``period`` takes precedence over ``date_from``/``date_to``. A kind or
        status of "all" means no filter.

        Raises:
            ValueError: If any argument is invalid
        """
        if period:
            date_from, date_to = parse_period(period)

        return FilterCriteria(
            search_text=search or "",
            kind=_to_enum(TransactionKind, "transaction kind", kind),
            status=_to_enum(TransactionStatus, "transaction status", status),
            date_from=date_from or None,
            date_to=date_to or None,
            amount_from=_to_decimal("amount_from", amount_from),
            amount_to=_to_decimal("amount_to", amount_to),
            sort_key=_to_enum(SortKey, "sort order", sort) or SortKey.RECENT,
        )

    def get_wallet(self, caller_id: str, caller_role: str) -> Dict[str, Any]:
        """
        Get the caller's wallet balance.

        Computed over the caller's full scope, not any filtered view.

        Args:
            caller_id: Identifier of the calling user
            caller_role: Role of the calling user

        Returns:
            Dict with caller identity and wallet snapshot
        """
        snapshot = compute_wallet(self._scope(caller_id, caller_role), self.currency_code)

        return {
            "caller_id": caller_id,
            "caller_role": caller_role,
            "wallet": snapshot.model_dump(mode="json"),
        }

    def get_transactions(
        self,
        caller_id: str,
        caller_role: str,
        page: int = 1,
        page_size: Optional[int] = None,
        **filters: Any,
    ) -> Dict[str, Any]:
        """
        Get one page of the caller's transactions with optional filters.

        Args:
            caller_id: Identifier of the calling user
            caller_role: Role of the calling user
            page: 1-indexed page number (default: 1)
            page_size: Items per page (default: the tools' default page size)
            **filters: Arguments accepted by ``build_criteria``

        Returns:
            Dict with the page items and pagination metadata
        """
        criteria = self.build_criteria(**filters)
        matched = apply_criteria(
            self._scope(caller_id, caller_role), criteria, self.country_code
        )
        if page_size is None:
            page_size = self.default_page_size
        result = paginate(matched, page, page_size)

        return {
            "count": len(result.items),
            **result.model_dump(mode="json"),
        }

    def get_analytics(
        self, caller_id: str, caller_role: str, **filters: Any
    ) -> Dict[str, Any]:
        """
        Get summary analytics over the caller's filtered transactions.

        Args:
            caller_id: Identifier of the calling user
            caller_role: Role of the calling user
            **filters: Arguments accepted by ``build_criteria``

        Returns:
            Dict with the applied date range and analytics figures
        """
        criteria = self.build_criteria(**filters)
        matched = apply_criteria(
            self._scope(caller_id, caller_role), criteria, self.country_code
        )

        return {
            "period": {
                "date_from": criteria.date_from.isoformat() if criteria.date_from else None,
                "date_to": criteria.date_to.isoformat() if criteria.date_to else None,
            },
            "analytics": aggregate(matched).model_dump(mode="json"),
        }

    def export_transactions(
        self,
        caller_id: str,
        caller_role: str,
        filename_prefix: str = "transactions",
        **filters: Any,
    ) -> Dict[str, Any]:
        """
        Export the caller's filtered transactions as CSV.

        Args:
            caller_id: Identifier of the calling user
            caller_role: Role of the calling user
            filename_prefix: Prefix of the download filename
            **filters: Arguments accepted by ``build_criteria``

        Returns:
            Dict with filename, row count, media type and CSV text
        """
        criteria = self.build_criteria(**filters)
        matched = apply_criteria(
            self._scope(caller_id, caller_role), criteria, self.country_code
        )
        export = export_transactions(
            matched, prefix=filename_prefix, currency_symbol=self.currency_symbol
        )

        return {
            "filename": export.filename,
            "row_count": export.row_count,
            "media_type": export.media_type,
            "content": export.content.decode("utf-8"),
        }

    def get_transaction(
        self, caller_id: str, caller_role: str, transaction_id: str
    ) -> Dict[str, Any]:
        """
        Get a single transaction visible to the caller.

        Args:
            caller_id: Identifier of the calling user
            caller_role: Role of the calling user
            transaction_id: Transaction ID to look up

        Returns:
            Dict with transaction details

        Raises:
            ValueError: If the transaction is not in the caller's scope
        """
        scope = self._scope(caller_id, caller_role)
        txn = next((t for t in scope if t.id == transaction_id), None)

        if not txn:
            raise ValueError(f"Transaction not found: {transaction_id}")

        return txn.model_dump(mode="json")


_CALLER_PROPERTIES: Dict[str, Any] = {
    "caller_id": {
        "type": "string",
        "description": "Identifier of the calling user",
    },
    "caller_role": {
        "type": "string",
        "description": "Role of the calling user: admin, viewer, accountant, merchant, support",
    },
}

_FILTER_PROPERTIES: Dict[str, Any] = {
    "search": {
        "type": "string",
        "description": (
            "Case-insensitive text search over ID, description, counterparty, "
            "reference, user ID and phone"
        ),
    },
    "kind": {
        "type": "string",
        "enum": ["all", "credit", "debit", "transfer", "refund"],
        "description": "Filter by transaction kind",
    },
    "status": {
        "type": "string",
        "enum": ["all", "success", "pending", "failed", "reversed"],
        "description": "Filter by transaction status",
    },
    "period": {
        "type": "string",
        "description": (
            "Period shorthand: today, this_month, last_month, last_7_days, "
            "last_30_days, last_90_days, last_365_days, ytd, this_year, last_year"
        ),
    },
    "date_from": {
        "type": "string",
        "description": "Start date, inclusive (YYYY-MM-DD)",
        "pattern": r"^\d{4}-\d{2}-\d{2}$",
    },
    "date_to": {
        "type": "string",
        "description": "End date, inclusive (YYYY-MM-DD)",
        "pattern": r"^\d{4}-\d{2}-\d{2}$",
    },
    "amount_from": {
        "type": "number",
        "description": "Minimum transaction amount, inclusive",
    },
    "amount_to": {
        "type": "number",
        "description": "Maximum transaction amount, inclusive",
    },
    "sort": {
        "type": "string",
        "enum": ["recent", "oldest", "amount-desc", "amount-asc"],
        "description": "Sort order (default: recent)",
        "default": "recent",
    },
}


def create_tool_schemas() -> List[Dict[str, Any]]:
    """
    Create MCP tool schemas for all tools.

    Returns:
        List of tool schema definitions
    """
    return [
        {
            "name": "get_wallet",
            "description": (
                "Get the caller's wallet balance, total credited, total debited, "
                "fees and reserved funds, computed from their visible transactions."
            ),
            "inputSchema": {
                "type": "object",
                "properties": dict(_CALLER_PROPERTIES),
                "required": ["caller_id", "caller_role"],
            },
        },
        {
            "name": "get_transactions",
            "description": (
                "Get a page of the caller's transactions. Supports text search, "
                "kind, status, date range and amount range filters, and sorting."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {
                    **_CALLER_PROPERTIES,
                    **_FILTER_PROPERTIES,
                    "page": {
                        "type": "integer",
                        "description": "Page number, starting at 1 (default: 1)",
                        "default": 1,
                        "minimum": 1,
                    },
                    "page_size": {
                        "type": "integer",
                        "description": "Items per page",
                        "minimum": 1,
                    },
                },
                "required": ["caller_id", "caller_role"],
            },
        },
        {
            "name": "get_analytics",
            "description": (
                "Get totals (credit, debit, fees), counts and success rate over "
                "the caller's transactions matching the given filters."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {**_CALLER_PROPERTIES, **_FILTER_PROPERTIES},
                "required": ["caller_id", "caller_role"],
            },
        },
        {
            "name": "export_transactions",
            "description": (
                "Export the caller's transactions matching the given filters "
                "as CSV text with a dated filename."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {
                    **_CALLER_PROPERTIES,
                    **_FILTER_PROPERTIES,
                    "filename_prefix": {
                        "type": "string",
                        "description": "Filename prefix (default: transactions)",
                        "default": "transactions",
                    },
                },
                "required": ["caller_id", "caller_role"],
            },
        },
        {
            "name": "get_transaction",
            "description": "Get details of a single transaction visible to the caller.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    **_CALLER_PROPERTIES,
                    "transaction_id": {
                        "type": "string",
                        "description": "Transaction ID to look up",
                    },
                },
                "required": ["caller_id", "caller_role", "transaction_id"],
            },
        },
    ]

"""
Filter criteria model for transaction queries.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, model_validator

from wallet_ledger_mcp.models.transaction import TransactionKind, TransactionStatus

# Sort names used by the dashboard's sort dropdown
_SORT_ALIASES = {
    "amount-high": "amount-desc",
    "amount-low": "amount-asc",
}


class SortKey(str, Enum):
    """Order applied to a filtered transaction set."""

    RECENT = "recent"
    OLDEST = "oldest"
    AMOUNT_DESC = "amount-desc"
    AMOUNT_ASC = "amount-asc"

    @classmethod
    def _missing_(cls, value: object) -> Optional["SortKey"]:
        if isinstance(value, str):
            key = value.strip().lower().replace("_", "-")
            key = _SORT_ALIASES.get(key, key)
            for member in cls:
                if member.value == key:
                    return member
        return None


class FilterCriteria(BaseModel):
    """
    Value object describing which transactions to show and in what order.

    Every omitted criterion is a no-op. Bounds are inclusive. Empty ranges
    (``date_from`` after ``date_to``, ``amount_from`` above ``amount_to``) are
    rejected at construction.
    """

    model_config = {"frozen": True}

    search_text: str = ""
    kind: Optional[TransactionKind] = None
    status: Optional[TransactionStatus] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    amount_from: Optional[Decimal] = None
    amount_to: Optional[Decimal] = None
    sort_key: SortKey = SortKey.RECENT

    @model_validator(mode="after")
    def check_ranges(self) -> "FilterCriteria":
        """Reject ranges that can never match anything."""
        if self.date_from and self.date_to and self.date_from > self.date_to:
            raise ValueError(
                f"date_from {self.date_from} is after date_to {self.date_to}"
            )
        if (
            self.amount_from is not None
            and self.amount_to is not None
            and self.amount_from > self.amount_to
        ):
            raise ValueError(
                f"amount_from {self.amount_from} is greater than amount_to {self.amount_to}"
            )
        return self

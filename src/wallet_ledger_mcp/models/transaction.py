"""
Transaction model for wallet ledger data.
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field, field_validator

from wallet_ledger_mcp.utils.date_utils import parse_timestamp

CENT = Decimal("0.01")

# Kind names used by older dashboard exports
_LEGACY_KINDS = {
    "addmoney": "credit",
    "payin": "credit",
    "payout": "debit",
}


class TransactionKind(str, Enum):
    """Direction of a ledger movement."""

    CREDIT = "credit"
    DEBIT = "debit"
    TRANSFER = "transfer"
    REFUND = "refund"

    @classmethod
    def _missing_(cls, value: object) -> Optional["TransactionKind"]:
        if isinstance(value, str):
            key = value.strip().lower()
            key = _LEGACY_KINDS.get(key, key)
            for member in cls:
                if member.value == key:
                    return member
        return None

    @property
    def is_inflow(self) -> bool:
        """Credits and refunds bring money in; debits and transfers take it out."""
        return self in (TransactionKind.CREDIT, TransactionKind.REFUND)


class TransactionStatus(str, Enum):
    """Settlement state of a transaction."""

    SUCCESS = "success"
    PENDING = "pending"
    FAILED = "failed"
    REVERSED = "reversed"

    @classmethod
    def _missing_(cls, value: object) -> Optional["TransactionStatus"]:
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if member.value == key:
                    return member
        return None


class Transaction(BaseModel):
    """
    Represents a single wallet ledger transaction.

    Instances are immutable. ``occurred_at`` keeps the timestamp text exactly as
    the record source supplied it; ``timestamp`` is the parsed value, or None
    when the text cannot be parsed (see ``timestamp_unparseable``).
    """

    model_config = {"frozen": True}

    # Required fields
    id: str = Field(min_length=1)
    occurred_at: str
    kind: TransactionKind
    status: TransactionStatus
    amount: Decimal = Field(ge=0)
    owner_id: str = Field(min_length=1)

    # Amounts
    fee: Decimal = Field(default=Decimal("0.00"), ge=0)  # fee <= amount is not enforced
    currency_code: str = "INR"

    # Owner contact
    owner_phone: Optional[str] = None

    # Descriptive fields
    description: Optional[str] = None
    counterparty_label: Optional[str] = None
    payment_method: Optional[str] = None  # Card, UPI, IMPS, NEFT, NetBanking
    reference_code: Optional[str] = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def net(self) -> Decimal:
        """Amount left after the fee."""
        return self.amount - self.fee

    @computed_field  # type: ignore[prop-decorator]
    @property
    def timestamp_unparseable(self) -> bool:
        """True when ``occurred_at`` could not be parsed into a timestamp."""
        return self.timestamp is None

    @property
    def timestamp(self) -> Optional[datetime]:
        """Parsed ``occurred_at`` as a naive UTC datetime."""
        return parse_timestamp(self.occurred_at)

    @property
    def is_inflow(self) -> bool:
        return self.kind.is_inflow

    @property
    def is_outflow(self) -> bool:
        return not self.kind.is_inflow

    @property
    def is_success(self) -> bool:
        return self.status is TransactionStatus.SUCCESS

    @field_validator("amount", "fee")
    @classmethod
    def quantize_money(cls, v: Decimal) -> Decimal:
        """Round money values to minor-unit precision."""
        if abs(v) > 10_000_000_000:
            raise ValueError(f"Amount {v} exceeds maximum allowed value")
        return v.quantize(CENT, rounding=ROUND_HALF_UP)

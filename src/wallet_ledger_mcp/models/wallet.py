"""
Wallet snapshot model.
"""

from decimal import Decimal

from pydantic import BaseModel, Field


class WalletSnapshot(BaseModel):
    """
    Balance summary derived from a transaction set.

    Never stored; always recomputed from the transactions it describes.
    """

    model_config = {"frozen": True}

    balance: Decimal = Field(ge=0)
    total_credited: Decimal
    total_debited: Decimal
    total_fees: Decimal
    reserved: Decimal  # pending outflows, not part of the balance formula
    currency_code: str = "INR"
    transaction_count: int = 0

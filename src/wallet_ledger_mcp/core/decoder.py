"""
Decoder for JSON ledger files and raw transaction records.

Raw records may use either the dashboard's camelCase field names
(``userId``, ``phone``, ``date``, ``type``, ``reference``...) or this
package's snake_case names.
"""

import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, NamedTuple, Optional, Tuple

from pydantic import ValidationError

from wallet_ledger_mcp.core.exceptions import DataSourceNotFoundError, DecodeError
from wallet_ledger_mcp.models.transaction import (
    Transaction,
    TransactionKind,
    TransactionStatus,
)

logger = logging.getLogger(__name__)

# Model field -> accepted raw keys, first match wins
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "id": ("id", "transaction_id", "transactionId"),
    "occurred_at": ("occurred_at", "occurredAt", "dateTime", "date", "timestamp"),
    "kind": ("kind", "type", "transactionType"),
    "status": ("status",),
    "amount": ("amount",),
    "fee": ("fee",),
    "owner_id": ("owner_id", "ownerId", "userId", "user_id"),
    "owner_phone": ("owner_phone", "ownerPhone", "phone", "userPhone"),
    "description": ("description",),
    "counterparty_label": ("counterparty_label", "counterpartyLabel", "beneficiary"),
    "payment_method": ("payment_method", "paymentMethod", "mode"),
    "reference_code": ("reference_code", "referenceCode", "reference"),
    "currency_code": ("currency_code", "currencyCode", "currency"),
}


class LedgerFile(NamedTuple):
    """Decoded contents of a ledger file."""

    transactions: List[Transaction]
    accounts: Dict[str, Tuple[str, ...]]


def _pick(record: Mapping[str, Any], keys: Tuple[str, ...]) -> Any:
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def decode_record(record: Mapping[str, Any]) -> Transaction:
    """
    Decode one raw record into a Transaction.

    Args:
        record: Mapping of raw field names to values

    Returns:
        Transaction object

    Raises:
        ValueError: If the record is missing required fields or has invalid
            values (pydantic's ValidationError is a ValueError)
    """
    fields: Dict[str, Any] = {}
    for name, keys in FIELD_ALIASES.items():
        value = _pick(record, keys)
        if value is not None:
            fields[name] = value

    # a record with a missing or non-text timestamp is kept, flagged unparseable
    occurred_at = fields.get("occurred_at")
    fields["occurred_at"] = "" if occurred_at is None else str(occurred_at)

    if "kind" in fields:
        fields["kind"] = TransactionKind(fields["kind"])
    if "status" in fields:
        fields["status"] = TransactionStatus(fields["status"])
    for money in ("amount", "fee"):
        if money in fields and not isinstance(fields[money], Decimal):
            fields[money] = Decimal(str(fields[money]))

    return Transaction(**fields)


def decode_transactions(records: Iterable[Mapping[str, Any]]) -> List[Transaction]:
    """
    Decode raw records into transactions.

    Invalid records are skipped and reported in a single warning. Records
    repeating an already-seen id are dropped, keeping the first.

    Args:
        records: Raw transaction records

    Returns:
        List of Transaction objects in source order
    """
    transactions: List[Transaction] = []
    seen = set()
    skipped = 0

    for record in records:
        if not isinstance(record, Mapping):
            skipped += 1
            continue
        try:
            txn = decode_record(record)
        except (ValidationError, ValueError, TypeError, ArithmeticError) as e:
            logger.debug("Skipping invalid record %r: %s", record.get("id"), e)
            skipped += 1
            continue

        if txn.id in seen:
            logger.debug("Dropping duplicate transaction %s", txn.id)
            continue
        seen.add(txn.id)
        transactions.append(txn)

    if skipped:
        logger.warning("Skipped %d invalid transaction record(s)", skipped)

    return transactions


def decode_accounts(raw: Optional[Mapping[str, Any]]) -> Dict[str, Tuple[str, ...]]:
    """
    Decode the caller -> owner ids mapping of a ledger file.

    Values may be a single owner id or a list of them.
    """
    accounts: Dict[str, Tuple[str, ...]] = {}
    if not raw:
        return accounts

    for caller_id, owners in raw.items():
        if isinstance(owners, str):
            accounts[str(caller_id)] = (owners,)
        elif isinstance(owners, (list, tuple)):
            accounts[str(caller_id)] = tuple(str(owner) for owner in owners)
        else:
            raise DecodeError(
                f"Account entry for {caller_id!r} must be a string or a list"
            )
    return accounts


def load_ledger_file(path: Path) -> LedgerFile:
    """
    Load and decode a JSON ledger file.

    The file holds either a list of transaction records, or an object with a
    ``"transactions"`` list and an optional ``"accounts"`` mapping.

    Args:
        path: Path to the JSON ledger file

    Returns:
        LedgerFile with decoded transactions and account mapping

    Raises:
        DataSourceNotFoundError: If the file does not exist
        DecodeError: If the file is not valid ledger JSON
    """
    if not path.exists():
        raise DataSourceNotFoundError(f"Ledger file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f, parse_float=Decimal)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DecodeError(f"Cannot read ledger file {path}: {e}") from e

    if isinstance(data, list):
        records, accounts = data, None
    elif isinstance(data, dict):
        records = data.get("transactions", [])
        accounts = data.get("accounts")
        if not isinstance(records, list):
            raise DecodeError(f"'transactions' in {path} must be a list")
        if accounts is not None and not isinstance(accounts, dict):
            raise DecodeError(f"'accounts' in {path} must be an object")
    else:
        raise DecodeError(f"Unexpected ledger layout in {path}")

    transactions = decode_transactions(records)
    logger.debug("Loaded %d transactions from %s", len(transactions), path)

    return LedgerFile(transactions=transactions, accounts=decode_accounts(accounts))

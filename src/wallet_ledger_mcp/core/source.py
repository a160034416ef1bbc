"""
Transaction record sources.

A source supplies raw ledger transactions for a scope; everything downstream
(scope resolution, queries, analytics, export) is independent of where the
records come from.
"""

from pathlib import Path
from typing import Collection, Dict, Iterable, List, Mapping, Optional, Protocol, Tuple

from wallet_ledger_mcp.core.decoder import load_ledger_file
from wallet_ledger_mcp.models.transaction import Transaction

DEFAULT_LEDGER_PATH = Path.home() / ".wallet-ledger" / "ledger.json"


class TransactionSource(Protocol):
    """Provider of ledger transactions."""

    def is_available(self) -> bool:
        ...

    def all_transactions(self) -> List[Transaction]:
        ...

    def transactions_for(self, owner_ids: Collection[str]) -> List[Transaction]:
        ...

    def account_map(self) -> Dict[str, Tuple[str, ...]]:
        ...


class InMemoryTransactionSource:
    """Source backed by an in-memory sequence of transactions."""

    def __init__(
        self,
        transactions: Iterable[Transaction] = (),
        accounts: Optional[Mapping[str, Iterable[str]]] = None,
    ):
        """
        Args:
            transactions: Ledger transactions, in source order
            accounts: Optional caller id -> owner ids mapping
        """
        self._transactions = list(transactions)
        self._accounts = {
            caller: tuple(owners) for caller, owners in (accounts or {}).items()
        }

    def is_available(self) -> bool:
        return True

    def all_transactions(self) -> List[Transaction]:
        return self._transactions[:]

    def transactions_for(self, owner_ids: Collection[str]) -> List[Transaction]:
        owners = set(owner_ids)
        return [txn for txn in self._transactions if txn.owner_id in owners]

    def account_map(self) -> Dict[str, Tuple[str, ...]]:
        return dict(self._accounts)


class JsonLedgerSource:
    """
    Source backed by a JSON ledger file.

    The file is decoded on first use and kept for the lifetime of the source.
    """

    def __init__(self, ledger_path: Optional[Path] = None):
        """
        Initialize the source.

        Args:
            ledger_path: Path to the JSON ledger file.
                    If None, uses ~/.wallet-ledger/ledger.json.
        """
        if ledger_path is None:
            ledger_path = DEFAULT_LEDGER_PATH

        self.ledger_path = ledger_path
        self._transactions: Optional[List[Transaction]] = None
        self._accounts: Optional[Dict[str, Tuple[str, ...]]] = None

    def is_available(self) -> bool:
        """Check if the ledger file exists."""
        return self.ledger_path.is_file()

    def _load(self) -> None:
        if self._transactions is None:
            ledger = load_ledger_file(self.ledger_path)
            self._transactions = ledger.transactions
            self._accounts = ledger.accounts

    def all_transactions(self) -> List[Transaction]:
        """
        Get every transaction across all accounts.

        Raises:
            DataSourceError: If the ledger file is missing or cannot be decoded
        """
        self._load()
        return list(self._transactions or [])

    def transactions_for(self, owner_ids: Collection[str]) -> List[Transaction]:
        """
        Get the transactions belonging to the given owner accounts.

        Raises:
            DataSourceError: If the ledger file is missing or cannot be decoded
        """
        owners = set(owner_ids)
        return [txn for txn in self.all_transactions() if txn.owner_id in owners]

    def account_map(self) -> Dict[str, Tuple[str, ...]]:
        """Get the caller id -> owner ids mapping declared in the ledger file."""
        self._load()
        return dict(self._accounts or {})

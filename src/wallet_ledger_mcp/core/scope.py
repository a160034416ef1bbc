"""
Access scope resolution: which transactions a caller may see.

Caller identity is always passed in explicitly; nothing here keeps a
"current user" between calls.
"""

import logging
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, Field

from wallet_ledger_mcp.core.source import TransactionSource
from wallet_ledger_mcp.models.transaction import Transaction

logger = logging.getLogger(__name__)


class UserRole(str, Enum):
    """Roles a dashboard caller can hold."""

    ADMIN = "admin"
    VIEWER = "viewer"
    ACCOUNTANT = "accountant"
    MERCHANT = "merchant"
    SUPPORT = "support"


def parse_role(role: Optional[str]) -> Optional[UserRole]:
    """Look up a role by name, case-insensitively. Returns None if unknown."""
    if not role:
        return None
    try:
        return UserRole(role.strip().lower())
    except ValueError:
        return None


class AccessPolicy(BaseModel):
    """
    Maps callers to the ledger buckets they may read.

    Privileged roles see every account. Everyone else sees the owner accounts
    listed for them in ``account_map``, or, when absent from the map, the
    account whose owner id equals their caller id.
    """

    model_config = {"frozen": True}

    privileged_roles: FrozenSet[UserRole] = frozenset(
        {UserRole.ADMIN, UserRole.VIEWER}
    )
    account_map: Dict[str, Tuple[str, ...]] = Field(default_factory=dict)

    def is_privileged(self, role: UserRole) -> bool:
        return role in self.privileged_roles

    def bucket_for(self, caller_id: str) -> Tuple[str, ...]:
        """Owner ids visible to a non-privileged caller."""
        return self.account_map.get(caller_id, (caller_id,))


class AccessScope(BaseModel):
    """A caller identity, resolved against a source once per request."""

    model_config = {"frozen": True}

    caller_id: str
    caller_role: str

    def resolve(
        self, source: TransactionSource, policy: Optional[AccessPolicy] = None
    ) -> List[Transaction]:
        return resolve_scope(self.caller_id, self.caller_role, source, policy)


def resolve_scope(
    caller_id: str,
    caller_role: str,
    source: TransactionSource,
    policy: Optional[AccessPolicy] = None,
) -> List[Transaction]:
    """
    Get the transactions a caller is entitled to see.

    Unknown roles are denied: they get an empty set, logged as a warning,
    rather than a default view.

    Args:
        caller_id: Identifier of the calling user
        caller_role: Role name of the calling user
        source: Transaction record source
        policy: Access policy. If None, uses the default privileged roles and
            the source's own account mapping.

    Returns:
        List of visible transactions, in source order

    Raises:
        DataSourceError: If the source cannot supply records
    """
    if policy is None:
        policy = AccessPolicy(account_map=source.account_map())

    role = parse_role(caller_role)
    if role is None:
        logger.warning(
            "Denying access for caller %s with unknown role %r", caller_id, caller_role
        )
        return []

    if policy.is_privileged(role):
        return source.all_transactions()

    return source.transactions_for(policy.bucket_for(caller_id))

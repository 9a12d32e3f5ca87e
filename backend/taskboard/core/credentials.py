"""Credential — authenticated caller identity plus granted permissions.

Invariants:
    - Credential is immutable and read-only within a request
    - grants() is the only permission check; unknown permission strings never grant anything
"""

from dataclasses import dataclass, field
from typing import Iterable

from taskboard.core.domain_types import AccountId, UserId, Securable, Permission

Capability = tuple[Securable, Permission]


def parse_capability(token: str) -> Capability | None:
    """'TASK:READ' -> (Securable.TASK, Permission.READ); None when unrecognized."""
    securable, sep, permission = token.strip().upper().partition(":")
    if not sep:
        return None
    try:
        return Securable(securable), Permission(permission)
    except ValueError:
        return None


@dataclass(frozen=True)
class Credential:
    id_account: AccountId
    id_user: UserId
    permissions: frozenset[Capability] = field(default_factory=frozenset)

    @classmethod
    def from_claims(cls, claims: dict) -> "Credential":
        """Build from decoded token claims (idAccount, idUser, permissions)."""
        capabilities = (
            parse_capability(p) for p in claims.get("permissions") or []
            if isinstance(p, str)
        )
        return cls(
            id_account=AccountId(int(claims["idAccount"])),
            id_user=UserId(int(claims["idUser"])),
            permissions=frozenset(c for c in capabilities if c is not None),
        )

    def grants(self, securable: Securable, permission: Permission) -> bool:
        return (securable, permission) in self.permissions

    def missing(self, required: Iterable[Capability]) -> list[str]:
        """Required capabilities not granted, as 'SECURABLE:PERMISSION' strings."""
        return [
            f"{s.value}:{p.value}" for s, p in required if not self.grants(s, p)
        ]

"""Explicit authorisation context handed to every lifecycle operation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from models import ROLE_PERMISSIONS, RoleEnum

from .errors import Forbidden


def permissions_for(role: Optional[RoleEnum]) -> frozenset[tuple[str, str]]:
    if role is None:
        return frozenset()
    pairs = set()
    for entry in ROLE_PERMISSIONS.get(role, ()):
        resource, _, action = entry.partition(":")
        pairs.add((resource, action or "*"))
    return frozenset(pairs)


@dataclass(frozen=True)
class AuthContext:
    user_id: Optional[int]
    role: Optional[RoleEnum] = None
    permissions: frozenset[tuple[str, str]] = field(default_factory=frozenset)
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

    @classmethod
    def for_role(cls, user_id: Optional[int], role: Optional[RoleEnum], **client) -> "AuthContext":
        return cls(user_id=user_id, role=role, permissions=permissions_for(role), **client)

    def can(self, resource: str, action: str) -> bool:
        candidates: Iterable[tuple[str, str]] = (
            (resource, action),
            (resource, "*"),
            ("*", action),
            ("*", "*"),
        )
        return any(candidate in self.permissions for candidate in candidates)

    def require(self, resource: str, action: str) -> None:
        if not self.can(resource, action):
            raise Forbidden(f"Missing permission {resource}:{action}")

    def permission_list(self) -> list[str]:
        return sorted(f"{resource}:{action}" for resource, action in self.permissions)

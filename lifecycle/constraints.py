"""Map database integrity errors onto typed API errors."""

from __future__ import annotations

from typing import Mapping, Optional

from sqlalchemy import Table, UniqueConstraint
from sqlalchemy.exc import IntegrityError


def _haystacks(exc: IntegrityError) -> list[str]:
    orig = getattr(exc, "orig", None)
    diag = getattr(orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None)
    message_detail = getattr(diag, "message_detail", None)

    haystacks: list[str] = []
    if constraint_name:
        haystacks.append(constraint_name.lower())
    if message_detail:
        haystacks.append(message_detail.lower())
    haystacks.append(str(orig if orig is not None else exc).lower())
    return haystacks


def is_unique_violation(exc: IntegrityError, *keywords: str) -> bool:
    """Return ``True`` if ``exc`` mentions every keyword in one of its messages."""

    lowered_keywords = [keyword.lower() for keyword in keywords]
    for haystack in _haystacks(exc):
        if haystack and all(keyword in haystack for keyword in lowered_keywords):
            return True
    return False


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    return any("foreign key" in haystack for haystack in _haystacks(exc))


def _unique_constraint(table: Table, name: str) -> Optional[UniqueConstraint]:
    for constraint in table.constraints:
        if isinstance(constraint, UniqueConstraint) and constraint.name == name:
            return constraint
    return None


def duplicate_code(exc: IntegrityError, table: Table, unique: Mapping[str, str]) -> Optional[str]:
    """Return the ``DUPLICATE_*`` code for the unique constraint ``exc`` hit.

    PostgreSQL and MySQL report the constraint name; SQLite only lists the
    ``table.column`` pairs, so both forms are matched.
    """

    for name, code in unique.items():
        if is_unique_violation(exc, name):
            return code
        constraint = _unique_constraint(table, name)
        if constraint is None:
            continue
        columns = [f"{table.name}.{column.name}" for column in constraint.columns]
        if is_unique_violation(exc, "unique", *columns):
            return code
    return None

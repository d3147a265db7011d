"""Foreign key existence checks performed before any write."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from extensions import db

from .errors import ReferenceNotFound, ValidationFailed


@dataclass(frozen=True)
class Reference:
    field: str
    model: Any
    code: str
    # Set when ``field`` holds a list of item dicts carrying the key.
    item_key: Optional[str] = None

    def targets(self, value: Any) -> list[Any]:
        if self.item_key is None:
            return [value]
        return [item.get(self.item_key) for item in value or ()]


def check_references(references: Iterable[Reference], values: Mapping[str, Any]) -> None:
    """Fail with ``<TARGET>_NOT_FOUND`` for the first dangling reference.

    Only references present in ``values`` are checked; nulls clear an
    optional reference and are accepted as-is.
    """

    for reference in references:
        if reference.field not in values:
            continue
        for target in reference.targets(values[reference.field]):
            if target is None:
                continue
            if db.session.get(reference.model, target) is None:
                raise ReferenceNotFound(
                    f"{reference.model.__name__} {target} not found", reference.code
                )


def check_immutable(fields: Iterable[str], values: Mapping[str, Any], current: Any) -> None:
    for name in fields:
        if name in values and values[name] != getattr(current, name):
            raise ValidationFailed(f"{name} cannot be updated", f"{name.upper()}_IMMUTABLE")

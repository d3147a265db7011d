"""Declarative entity descriptions and the generic lifecycle operations.

A :class:`Resource` bundles everything one REST collection needs: model,
marshmallow schema, references, derived fields, checks, an optional state
machine and list options. :func:`create_entity`, :func:`update_entity` and
:func:`delete_entity` run the same pipeline for every entity::

    validate -> references -> transition gate -> checks -> derive -> write + audit
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from flask import current_app
from marshmallow import Schema
from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError

from extensions import db
from models import AuditAction

from . import audit
from .auth import AuthContext
from .checks import Check
from .constraints import duplicate_code, is_foreign_key_violation
from .errors import ApiError, DuplicateValue, NotFound, ResourceInUse, ValidationFailed
from .listing import Filter, Page, build_query, paginate, parse_window
from .references import Reference, check_immutable, check_references
from .transitions import StateMachine
from .validation import load_payload

Derivation = Callable[[Mapping[str, Any]], Mapping[str, Any]]

_PROTECTED = {"id", "created_at", "updated_at"}


@dataclass
class Resource:
    name: str
    collection: str
    model: Any
    schema: type[Schema]
    search: tuple[str, ...] = ()
    filters: dict[str, Filter] = field(default_factory=dict)
    sortable: tuple[str, ...] = ("created_at",)
    date_column: Optional[str] = "created_at"
    unique: dict[str, str] = field(default_factory=dict)
    references: tuple[Reference, ...] = ()
    immutable: tuple[str, ...] = ()
    machine: Optional[StateMachine] = None
    status_field: str = "status"
    derive: tuple[Derivation, ...] = ()
    checks: tuple[Check, ...] = ()
    owner_field: Optional[str] = None

    @property
    def code(self) -> str:
        return self.name.upper()

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").capitalize()

    @property
    def permission(self) -> str:
        return self.collection

    def dump(self, row) -> dict[str, Any]:
        return self.schema().dump(row)


def now_ms() -> int:
    return int(time.time() * 1000)


def parse_id(raw: Any) -> int:
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        raise ValidationFailed("Valid ID is required", "INVALID_ID") from None
    if value < 1:
        raise ValidationFailed("Valid ID is required", "INVALID_ID")
    return value


def fetch_entity(resource: Resource, raw_id: Any):
    row = db.session.get(resource.model, parse_id(raw_id))
    if row is None:
        raise NotFound(f"{resource.label} not found", f"{resource.code}_NOT_FOUND")
    return row


def list_entities(resource: Resource, args: Mapping[str, str]) -> Page:
    limit, offset = parse_window(
        args,
        default_limit=current_app.config.get("PAGINATION_DEFAULT_LIMIT", 10),
        max_limit=current_app.config.get("PAGINATION_MAX_LIMIT", 100),
    )
    query = build_query(
        resource.model,
        args,
        search=resource.search,
        filters=resource.filters,
        sortable=resource.sortable,
        date_column=resource.date_column,
    )
    return paginate(query, limit=limit, offset=offset)


def _snapshot(row) -> dict[str, Any]:
    return {attr.key: getattr(row, attr.key) for attr in inspect(row).mapper.column_attrs}


def _gate_and_derive(
    resource: Resource,
    values: Mapping[str, Any],
    state: dict[str, Any],
    current_status: Optional[str],
) -> dict[str, Any]:
    check_references(resource.references, values)

    if resource.machine is not None and state.get(resource.status_field) is not None:
        resource.machine.enter(current_status, state[resource.status_field], state)

    for check in resource.checks:
        check(state)

    derived: dict[str, Any] = {}
    for derivation in resource.derive:
        produced = dict(derivation(state))
        state.update(produced)
        derived.update(produced)
    return derived


def _log(event: str, resource: Resource, row_id: Optional[int], auth: AuthContext) -> None:
    current_app.logger.info(
        {"event": event, "resource": resource.collection, "id": row_id, "user_id": auth.user_id}
    )


def _write_error(resource: Resource, exc: IntegrityError) -> ApiError:
    code = duplicate_code(exc, resource.model.__table__, resource.unique)
    if code:
        return DuplicateValue(f"{resource.label} with this value already exists", code)
    current_app.logger.warning(
        {"event": "constraint_violation", "resource": resource.collection, "detail": str(exc.orig)}
    )
    return ValidationFailed("The record violates a data constraint", "CONSTRAINT_VIOLATION")


def create_entity(resource: Resource, payload: Any, auth: AuthContext):
    values = load_payload(resource.schema(), payload, partial=False)
    if resource.owner_field:
        values[resource.owner_field] = auth.user_id

    state = dict(values)
    derived = _gate_and_derive(resource, values, state, None)

    timestamp = now_ms()
    row = resource.model(**{**values, **derived}, created_at=timestamp, updated_at=timestamp)
    db.session.add(row)
    try:
        db.session.flush()
        audit.record(
            auth,
            AuditAction.create,
            resource.name,
            row.id,
            new_values=resource.dump(row),
            timestamp=timestamp,
        )
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise _write_error(resource, exc) from exc

    _log("entity_created", resource, row.id, auth)
    return row


def update_entity(resource: Resource, raw_id: Any, payload: Any, auth: AuthContext):
    row = fetch_entity(resource, raw_id)
    values = load_payload(resource.schema(), payload, partial=True)
    check_immutable(resource.immutable, values, row)

    before = _snapshot(row)
    state = {**before, **values}
    derived = _gate_and_derive(
        resource, values, state, before.get(resource.status_field)
    )

    old_values = resource.dump(row)
    for key, value in {**values, **derived}.items():
        if key not in _PROTECTED:
            setattr(row, key, value)
    # updatedAt strictly increases even when two writes share a millisecond.
    timestamp = max(now_ms(), int(before.get("updated_at") or 0) + 1)
    row.updated_at = timestamp

    try:
        db.session.flush()
        audit.record(
            auth,
            AuditAction.update,
            resource.name,
            row.id,
            old_values=old_values,
            new_values=resource.dump(row),
            timestamp=timestamp,
        )
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise _write_error(resource, exc) from exc

    _log("entity_updated", resource, row.id, auth)
    return row


def delete_entity(resource: Resource, raw_id: Any, auth: AuthContext) -> dict[str, Any]:
    row = fetch_entity(resource, raw_id)
    row_id = row.id
    old_values = resource.dump(row)

    db.session.delete(row)
    try:
        db.session.flush()
        audit.record(
            auth,
            AuditAction.delete,
            resource.name,
            row_id,
            old_values=old_values,
            timestamp=now_ms(),
        )
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        if is_foreign_key_violation(exc):
            raise ResourceInUse(
                f"{resource.label} is referenced by other records", f"{resource.code}_IN_USE"
            ) from exc
        raise _write_error(resource, exc) from exc

    _log("entity_deleted", resource, row_id, auth)
    return old_values

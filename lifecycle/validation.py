"""Translate marshmallow load errors into ``MISSING_*`` / ``INVALID_*`` codes."""

from __future__ import annotations

from typing import Any, Mapping

from marshmallow import Schema, ValidationError
from marshmallow.fields import Field

from .errors import ValidationFailed


def field_code(name: str, field: Field) -> str:
    explicit = (field.metadata or {}).get("code")
    if explicit:
        return explicit
    return (field.attribute or name).upper()


def _flatten(messages: Any) -> list[str]:
    if isinstance(messages, str):
        return [messages]
    if isinstance(messages, (list, tuple)):
        flat: list[str] = []
        for item in messages:
            flat.extend(_flatten(item))
        return flat
    if isinstance(messages, Mapping):
        flat = []
        for key, item in messages.items():
            flat.extend(f"{key}: {text}" for text in _flatten(item))
        return flat
    return [str(messages)]


def _is_missing(field: Field, messages: Any) -> bool:
    if not isinstance(messages, list):
        return False
    absent = {field.error_messages.get("required"), field.error_messages.get("null")}
    return any(message in absent for message in messages)


def first_error(schema: Schema, messages: Mapping[str, Any], *, partial: bool) -> ValidationFailed:
    """Return the error for the first failing field in declaration order."""

    for name, field in schema.fields.items():
        if field.dump_only:
            continue
        key = field.data_key or name
        if key not in messages:
            continue
        code = field_code(name, field)
        if not partial and _is_missing(field, messages[key]):
            return ValidationFailed(f"{key} is required", f"MISSING_{code}")
        detail = "; ".join(_flatten(messages[key])) or "Invalid value"
        return ValidationFailed(f"Invalid {key}: {detail}", f"INVALID_{code}")

    key, value = next(iter(messages.items()))
    detail = "; ".join(_flatten(value)) or "Invalid value"
    code = "PAYLOAD" if key == "_schema" else str(key).upper()
    return ValidationFailed(detail, f"INVALID_{code}")


def load_payload(schema: Schema, payload: Any, *, partial: bool = False) -> dict[str, Any]:
    """Validate ``payload`` against ``schema`` and return snake_case values.

    ``partial`` loads a PUT body: absent fields are skipped and an explicit
    null or blank on a required field is reported as ``INVALID_*``.
    """

    if not isinstance(payload, dict):
        raise ValidationFailed("Request body must be a JSON object", "INVALID_JSON")
    try:
        return schema.load(payload, partial=partial)
    except ValidationError as exc:
        messages = exc.messages if isinstance(exc.messages, Mapping) else {"_schema": exc.messages}
        raise first_error(schema, messages, partial=partial) from exc

"""marshmallow fields shared by the entity schemas."""

from __future__ import annotations

import re
from datetime import date

from marshmallow import fields

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$")


class TrimmedString(fields.String):
    """String that strips surrounding whitespace and can fold case."""

    def __init__(self, *args, case: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.case = case

    def _deserialize(self, value, attr, data, **kwargs):
        text = super()._deserialize(value, attr, data, **kwargs).strip()
        if self.case == "upper":
            return text.upper()
        if self.case == "lower":
            return text.lower()
        return text


class DateString(TrimmedString):
    """``YYYY-MM-DD`` calendar date kept as text."""

    default_error_messages = {"invalid_date": "Date must use the YYYY-MM-DD format."}

    def _deserialize(self, value, attr, data, **kwargs):
        text = super()._deserialize(value, attr, data, **kwargs)
        if not _DATE_RE.match(text):
            raise self.make_error("invalid_date")
        try:
            date.fromisoformat(text)
        except ValueError as exc:
            raise self.make_error("invalid_date") from exc
        return text


class TimeString(TrimmedString):
    """``HH:MM`` or ``HH:MM:SS`` wall clock time kept as text."""

    default_error_messages = {"invalid_time": "Time must use the HH:MM or HH:MM:SS format."}

    def _deserialize(self, value, attr, data, **kwargs):
        text = super()._deserialize(value, attr, data, **kwargs)
        if not _TIME_RE.match(text):
            raise self.make_error("invalid_time")
        return text


def minutes_of_day(value: str) -> int:
    parts = [int(part) for part in value.split(":")]
    return parts[0] * 60 + parts[1]

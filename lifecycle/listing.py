"""Compose list queries from query-string parameters.

Supports ``limit``/``offset`` windows, free text ``q``/``search``, declared
per-entity filters, a ``from``/``to`` date range and an allow-listed
``sort``/``order``. The total comes from a count over the same predicate.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable, Mapping, Optional, Sequence

from sqlalchemy import or_

from .errors import ValidationFailed

_TRUE = {"true", "1", "yes", "y"}
_FALSE = {"false", "0", "no", "n"}
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DAY_MS = 24 * 60 * 60 * 1000


def camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def param_code(param: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", param).upper()


@dataclass(frozen=True)
class Filter:
    column: Optional[str] = None
    kind: str = "str"
    choices: tuple[str, ...] = ()
    expression: Optional[Callable[[Any, Any], Any]] = None

    def parse(self, param: str, raw: str) -> Any:
        code = f"INVALID_{param_code(param)}"
        if self.kind == "int":
            try:
                return int(raw)
            except ValueError as exc:
                raise ValidationFailed(f"{param} must be an integer", code) from exc
        if self.kind == "bool":
            lowered = raw.lower()
            if lowered in _TRUE:
                return True
            if lowered in _FALSE:
                return False
            raise ValidationFailed(f"{param} must be true or false", code)
        if self.kind == "date":
            return _parse_date(param, raw, code)
        if self.choices and raw not in self.choices:
            raise ValidationFailed(f"{param} must be one of: {', '.join(self.choices)}", code)
        return raw

    def clause(self, model, value):
        if self.expression is not None:
            return self.expression(model, value)
        return getattr(model, self.column) == value


def enum_filter(column: str, choices: Sequence[str]) -> Filter:
    return Filter(column=column, choices=tuple(choices))


@dataclass
class Page:
    items: list
    total: int
    limit: int
    offset: int

    @property
    def has_more(self) -> bool:
        return self.offset + self.limit < self.total

    def meta(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "limit": self.limit,
            "offset": self.offset,
            "hasMore": self.has_more,
        }


def _parse_date(param: str, raw: str, code: str) -> str:
    if not _DATE_RE.match(raw):
        raise ValidationFailed(f"{param} must use the YYYY-MM-DD format", code)
    try:
        date.fromisoformat(raw)
    except ValueError as exc:
        raise ValidationFailed(f"{param} is not a valid date", code) from exc
    return raw


def _epoch_ms(day: str) -> int:
    moment = datetime.combine(date.fromisoformat(day), datetime.min.time(), tzinfo=timezone.utc)
    return int(moment.timestamp() * 1000)


def parse_window(args: Mapping[str, str], *, default_limit: int = 10, max_limit: int = 100) -> tuple[int, int]:
    raw_limit = (args.get("limit") or "").strip()
    raw_offset = (args.get("offset") or "").strip()

    limit = default_limit
    if raw_limit:
        try:
            limit = int(raw_limit)
        except ValueError as exc:
            raise ValidationFailed("limit must be a positive integer", "INVALID_LIMIT") from exc
        if limit < 1:
            raise ValidationFailed("limit must be a positive integer", "INVALID_LIMIT")
    limit = min(limit, max_limit)

    offset = 0
    if raw_offset:
        try:
            offset = int(raw_offset)
        except ValueError as exc:
            raise ValidationFailed("offset must be a non-negative integer", "INVALID_OFFSET") from exc
        if offset < 0:
            raise ValidationFailed("offset must be a non-negative integer", "INVALID_OFFSET")
    return limit, offset


def _sort_columns(sortable: Sequence[str]) -> dict[str, str]:
    names: dict[str, str] = {}
    for column in sortable:
        names[column] = column
        names[camel(column)] = column
    return names


def build_query(
    model,
    args: Mapping[str, str],
    *,
    search: Sequence[str] = (),
    filters: Optional[Mapping[str, Filter]] = None,
    sortable: Sequence[str] = ("created_at",),
    date_column: Optional[str] = None,
    default_sort: str = "created_at",
):
    query = model.query

    term = (args.get("q") or args.get("search") or "").strip()
    if term and search:
        pattern = f"%{term}%"
        query = query.filter(or_(*(getattr(model, column).ilike(pattern) for column in search)))

    for param, spec in (filters or {}).items():
        raw = (args.get(param) or "").strip()
        if not raw:
            continue
        query = query.filter(spec.clause(model, spec.parse(param, raw)))

    if date_column:
        column = getattr(model, date_column)
        start = (args.get("from") or "").strip()
        end = (args.get("to") or "").strip()
        epoch = date_column == "created_at"
        if start:
            _parse_date("from", start, "INVALID_FROM_DATE")
            query = query.filter(column >= (_epoch_ms(start) if epoch else start))
        if end:
            _parse_date("to", end, "INVALID_TO_DATE")
            query = query.filter(column < _epoch_ms(end) + _DAY_MS if epoch else column <= end)

    sort_names = _sort_columns(sortable)
    raw_sort = (args.get("sort") or "").strip() or default_sort
    if raw_sort not in sort_names:
        raise ValidationFailed(
            f"sort must be one of: {', '.join(camel(column) for column in sortable)}", "INVALID_SORT"
        )
    order = (args.get("order") or "desc").strip().lower()
    if order not in {"asc", "desc"}:
        raise ValidationFailed("order must be asc or desc", "INVALID_ORDER")

    sort_column = getattr(model, sort_names[raw_sort])
    # id breaks ties so consecutive pages never overlap.
    if order == "asc":
        query = query.order_by(sort_column.asc(), model.id.asc())
    else:
        query = query.order_by(sort_column.desc(), model.id.desc())
    return query


def paginate(query, *, limit: int, offset: int) -> Page:
    total = query.order_by(None).count()
    items = query.limit(limit).offset(offset).all()
    return Page(items=items, total=total, limit=limit, offset=offset)

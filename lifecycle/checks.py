"""Cross-field consistency checks run over the merged row state."""

from __future__ import annotations

from typing import Any, Callable, Mapping

from .derived import payroll_totals
from .errors import ValidationFailed
from .fields import minutes_of_day

Check = Callable[[Mapping[str, Any]], None]


def date_order(start_key: str, end_key: str, code: str = "INVALID_DATE_RANGE") -> Check:
    def check(state: Mapping[str, Any]) -> None:
        start, end = state.get(start_key), state.get(end_key)
        # ISO dates compare correctly as text.
        if start and end and end < start:
            raise ValidationFailed(f"{end_key} cannot be before {start_key}", code)

    return check


def not_self(key: str, code: str) -> Check:
    def check(state: Mapping[str, Any]) -> None:
        if state.get("id") is not None and state.get(key) == state.get("id"):
            raise ValidationFailed(f"{key} cannot reference the same record", code)

    return check


def ledger_amounts(state: Mapping[str, Any]) -> None:
    if not (state.get("debit_amount") or 0) and not (state.get("credit_amount") or 0):
        raise ValidationFailed(
            "At least one of debit or credit amount must be greater than 0", "INVALID_AMOUNTS"
        )


def attendance_times(state: Mapping[str, Any]) -> None:
    check_in, check_out = state.get("check_in"), state.get("check_out")
    if check_in and check_out and minutes_of_day(check_out) < minutes_of_day(check_in):
        raise ValidationFailed("checkOut cannot be before checkIn", "INVALID_CHECK_OUT")


def payroll_balance(state: Mapping[str, Any]) -> None:
    if payroll_totals(state)["net_salary"] < 0:
        raise ValidationFailed("Deductions cannot exceed basic salary plus allowances", "INVALID_DEDUCTIONS")


def notification_recipient(state: Mapping[str, Any]) -> None:
    if state.get("user_id") is None and not state.get("recipient_email"):
        raise ValidationFailed("Either userId or recipientEmail is required", "MISSING_RECIPIENT")

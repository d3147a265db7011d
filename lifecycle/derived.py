"""Server-side derived fields.

Each calculator receives the merged row state (stored values overlaid with
the validated patch, snake_case keys) and returns the derived attributes to
store. Client supplied values for these attributes are never used.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, Mapping

from .fields import minutes_of_day

_WHOLE = Decimal("1")


def _int(value: Any) -> int:
    return int(value or 0)


def invoice_totals(state: Mapping[str, Any]) -> dict[str, int]:
    return {"total_amount": _int(state.get("amount")) + _int(state.get("tax_amount"))}


def payroll_totals(state: Mapping[str, Any]) -> dict[str, int]:
    net = _int(state.get("basic_salary")) + _int(state.get("allowances")) - _int(state.get("deductions"))
    return {"net_salary": net}


def service_quotation_totals(state: Mapping[str, Any]) -> dict[str, int]:
    total = _int(state.get("parts_cost")) + _int(state.get("labor_cost")) + _int(state.get("tax_amount"))
    return {"total_amount": total}


def items_total(items: Iterable[Mapping[str, Any]] | None) -> int:
    return sum(_int(item.get("quantity")) * _int(item.get("unit_price")) for item in items or [])


def purchase_order_totals(state: Mapping[str, Any]) -> dict[str, int]:
    return {"total_amount": items_total(state.get("items"))}


def monthly_installment(principal: int, annual_rate: float, tenure_months: int) -> int:
    """Reducing-balance EMI rounded half-up to whole currency units."""

    amount = Decimal(principal)
    months = int(tenure_months)
    if months <= 0:
        return 0
    rate = Decimal(str(annual_rate)) / Decimal(1200)
    if rate == 0:
        return int((amount / months).quantize(_WHOLE, rounding=ROUND_HALF_UP))
    growth = (1 + rate) ** months
    emi = amount * rate * growth / (growth - 1)
    return int(emi.quantize(_WHOLE, rounding=ROUND_HALF_UP))


def loan_terms(state: Mapping[str, Any]) -> dict[str, int]:
    return {
        "emi_amount": monthly_installment(
            _int(state.get("loan_amount")),
            float(state.get("interest_rate") or 0),
            _int(state.get("tenure_months")),
        )
    }


def leave_days(state: Mapping[str, Any]) -> dict[str, int]:
    start = date.fromisoformat(state["start_date"])
    end = date.fromisoformat(state["end_date"])
    return {"days_count": (end - start).days + 1}


def attendance_minutes(state: Mapping[str, Any]) -> dict[str, int | None]:
    check_in, check_out = state.get("check_in"), state.get("check_out")
    if not check_in or not check_out:
        return {"work_minutes": None}
    return {"work_minutes": max(minutes_of_day(check_out) - minutes_of_day(check_in), 0)}


def ledger_summary(total_debit: Any, total_credit: Any, entries: int) -> dict[str, int]:
    """Credits minus debits; reporting only, never stored."""

    debit, credit = _int(total_debit), _int(total_credit)
    return {"totalDebit": debit, "totalCredit": credit, "net": credit - debit, "entries": int(entries or 0)}

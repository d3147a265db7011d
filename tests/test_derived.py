import pytest

from lifecycle import derived
from lifecycle.checks import attendance_times, date_order, ledger_amounts, not_self, payroll_balance
from lifecycle.errors import ValidationFailed


def test_invoice_total_uses_stored_tax_when_only_amount_changes():
    stored = {"amount": 1000, "tax_amount": 180}
    assert derived.invoice_totals(stored) == {"total_amount": 1180}
    assert derived.invoice_totals({**stored, "amount": 2000}) == {"total_amount": 2180}


def test_payroll_net_salary_defaults_missing_components_to_zero():
    assert derived.payroll_totals({"basic_salary": 30000}) == {"net_salary": 30000}
    assert derived.payroll_totals(
        {"basic_salary": 30000, "allowances": 5000, "deductions": 2000}
    ) == {"net_salary": 33000}


def test_service_quotation_total():
    state = {"parts_cost": 1200, "labor_cost": 800, "tax_amount": 360}
    assert derived.service_quotation_totals(state) == {"total_amount": 2360}


def test_purchase_order_total_sums_item_lines():
    items = [{"quantity": 2, "unit_price": 1500}, {"quantity": 1, "unit_price": 500}]
    assert derived.purchase_order_totals({"items": items}) == {"total_amount": 3500}
    assert derived.items_total(None) == 0


@pytest.mark.parametrize(
    "principal,rate,months,expected",
    [
        (100000, 12, 12, 8885),
        (120000, 0, 12, 10000),
        (100, 0, 3, 33),
    ],
)
def test_monthly_installment(principal, rate, months, expected):
    assert derived.monthly_installment(principal, rate, months) == expected


def test_loan_terms_reads_merged_state():
    state = {"loan_amount": 100000, "interest_rate": 12.0, "tenure_months": 12}
    assert derived.loan_terms(state) == {"emi_amount": 8885}


def test_leave_days_are_inclusive():
    assert derived.leave_days({"start_date": "2024-05-06", "end_date": "2024-05-08"}) == {"days_count": 3}
    assert derived.leave_days({"start_date": "2024-02-28", "end_date": "2024-03-01"}) == {"days_count": 3}


def test_attendance_minutes_need_both_times():
    assert derived.attendance_minutes({"check_in": "09:00", "check_out": "17:30"}) == {"work_minutes": 510}
    assert derived.attendance_minutes({"check_in": "09:00", "check_out": None}) == {"work_minutes": None}


def test_ledger_summary_is_credits_minus_debits():
    summary = derived.ledger_summary(1000, 2500, 2)
    assert summary == {"totalDebit": 1000, "totalCredit": 2500, "net": 1500, "entries": 2}


def test_checks_raise_their_codes():
    with pytest.raises(ValidationFailed) as excinfo:
        date_order("start_date", "end_date")({"start_date": "2024-05-08", "end_date": "2024-05-06"})
    assert excinfo.value.code == "INVALID_DATE_RANGE"

    with pytest.raises(ValidationFailed) as excinfo:
        attendance_times({"check_in": "10:00", "check_out": "09:59"})
    assert excinfo.value.code == "INVALID_CHECK_OUT"

    with pytest.raises(ValidationFailed) as excinfo:
        payroll_balance({"basic_salary": 1000, "deductions": 1001})
    assert excinfo.value.code == "INVALID_DEDUCTIONS"

    with pytest.raises(ValidationFailed) as excinfo:
        ledger_amounts({"debit_amount": 0, "credit_amount": 0})
    assert excinfo.value.code == "INVALID_AMOUNTS"

    with pytest.raises(ValidationFailed) as excinfo:
        not_self("reporting_to", "INVALID_REPORTING_TO")({"id": 4, "reporting_to": 4})
    assert excinfo.value.code == "INVALID_REPORTING_TO"


def test_checks_pass_on_consistent_state():
    date_order("start_date", "end_date")({"start_date": "2024-05-06", "end_date": "2024-05-06"})
    attendance_times({"check_in": "09:00", "check_out": None})
    ledger_amounts({"debit_amount": 0, "credit_amount": 10})
    not_self("reporting_to", "INVALID_REPORTING_TO")({"reporting_to": 4})

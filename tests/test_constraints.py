from sqlalchemy.exc import IntegrityError

from lifecycle.constraints import duplicate_code, is_foreign_key_violation, is_unique_violation
from models import Attendance, Employee


def integrity_error(message):
    return IntegrityError("INSERT ...", {}, Exception(message))


def test_sqlite_unique_message_maps_to_code():
    exc = integrity_error("UNIQUE constraint failed: employees.employee_code")
    unique = {"uq_employees_employee_code": "DUPLICATE_EMPLOYEE_CODE"}
    assert duplicate_code(exc, Employee.__table__, unique) == "DUPLICATE_EMPLOYEE_CODE"


def test_composite_unique_needs_every_column():
    unique = {"uq_attendance_employee_date": "DUPLICATE_ATTENDANCE"}
    full = integrity_error("UNIQUE constraint failed: attendance.employee_id, attendance.date")
    partial = integrity_error("UNIQUE constraint failed: attendance.employee_id")

    assert duplicate_code(full, Attendance.__table__, unique) == "DUPLICATE_ATTENDANCE"
    assert duplicate_code(partial, Attendance.__table__, unique) is None


def test_constraint_name_in_message_maps_to_code():
    exc = integrity_error(
        'duplicate key value violates unique constraint "uq_employees_employee_code"'
    )
    unique = {"uq_employees_employee_code": "DUPLICATE_EMPLOYEE_CODE"}
    assert duplicate_code(exc, Employee.__table__, unique) == "DUPLICATE_EMPLOYEE_CODE"


def test_foreign_key_detection():
    assert is_foreign_key_violation(integrity_error("FOREIGN KEY constraint failed"))
    assert not is_foreign_key_violation(integrity_error("NOT NULL constraint failed: employees.name"))


def test_unique_violation_is_case_insensitive():
    exc = integrity_error("UNIQUE constraint failed: vendors.vendor_code")
    assert is_unique_violation(exc, "UNIQUE", "vendors.vendor_code")
    assert not is_unique_violation(exc, "spare_parts.part_number")

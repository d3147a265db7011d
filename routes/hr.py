from flask import Blueprint

from lifecycle import Filter, Reference, Resource, enum_filter
from lifecycle.checks import attendance_times, date_order, not_self, payroll_balance
from lifecycle.derived import attendance_minutes, leave_days, payroll_totals
from lifecycle.transitions import LEAVE_MACHINE
from models import (
    Attendance,
    AttendanceStatus,
    Employee,
    EmployeeStatus,
    EmploymentType,
    LeaveApplication,
    LeaveStatus,
    LeaveType,
    Payroll,
    PayrollStatus,
    values_of,
)
from routes.crud import register_crud
from schemas import AttendanceSchema, EmployeeSchema, LeaveApplicationSchema, PayrollSchema

bp = Blueprint("hr", __name__, url_prefix="/api")


EMPLOYEES = Resource(
    name="employee",
    collection="employees",
    model=Employee,
    schema=EmployeeSchema,
    search=("employee_code", "name", "email"),
    filters={
        "status": enum_filter("status", values_of(EmployeeStatus)),
        "employmentType": enum_filter("employment_type", values_of(EmploymentType)),
        "department": Filter("department"),
        "branch": Filter("branch"),
        "reportingTo": Filter("reporting_to", kind="int"),
    },
    sortable=("created_at", "name", "employee_code", "date_of_joining", "salary"),
    date_column="date_of_joining",
    unique={"uq_employees_employee_code": "DUPLICATE_EMPLOYEE_CODE"},
    references=(Reference("reporting_to", Employee, "EMPLOYEE_NOT_FOUND"),),
    checks=(not_self("reporting_to", "INVALID_REPORTING_TO"),),
)

ATTENDANCE = Resource(
    name="attendance",
    collection="attendance",
    model=Attendance,
    schema=AttendanceSchema,
    filters={
        "status": enum_filter("status", values_of(AttendanceStatus)),
        "employeeId": Filter("employee_id", kind="int"),
        "date": Filter("date", kind="date"),
    },
    sortable=("created_at", "date"),
    date_column="date",
    unique={"uq_attendance_employee_date": "DUPLICATE_ATTENDANCE"},
    references=(Reference("employee_id", Employee, "EMPLOYEE_NOT_FOUND"),),
    checks=(attendance_times,),
    derive=(attendance_minutes,),
)

PAYROLL = Resource(
    name="payroll",
    collection="payroll",
    model=Payroll,
    schema=PayrollSchema,
    filters={
        "status": enum_filter("status", values_of(PayrollStatus)),
        "employeeId": Filter("employee_id", kind="int"),
        "month": Filter("month", kind="int"),
        "year": Filter("year", kind="int"),
    },
    sortable=("created_at", "year", "month", "net_salary"),
    date_column="payment_date",
    unique={"uq_payroll_employee_period": "DUPLICATE_PAYROLL"},
    references=(Reference("employee_id", Employee, "EMPLOYEE_NOT_FOUND"),),
    checks=(payroll_balance,),
    derive=(payroll_totals,),
)

LEAVE_APPLICATIONS = Resource(
    name="leave_application",
    collection="leave-applications",
    model=LeaveApplication,
    schema=LeaveApplicationSchema,
    search=("reason",),
    filters={
        "status": enum_filter("status", values_of(LeaveStatus)),
        "leaveType": enum_filter("leave_type", values_of(LeaveType)),
        "employeeId": Filter("employee_id", kind="int"),
    },
    sortable=("created_at", "start_date", "end_date", "days_count"),
    date_column="start_date",
    references=(Reference("employee_id", Employee, "EMPLOYEE_NOT_FOUND"),),
    machine=LEAVE_MACHINE,
    checks=(date_order("start_date", "end_date"),),
    derive=(leave_days,),
)


for _resource in (EMPLOYEES, ATTENDANCE, PAYROLL, LEAVE_APPLICATIONS):
    register_crud(bp, _resource)

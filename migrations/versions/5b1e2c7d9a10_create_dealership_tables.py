"""create dealership tables

Revision ID: 5b1e2c7d9a10
Revises:
Create Date: 2026-10-17 00:00:00.000000

"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "5b1e2c7d9a10"
down_revision = None
branch_labels = None
depends_on = None


ROLES = (
    "dealer_admin",
    "sales_executive",
    "service_technician",
    "inventory_manager",
    "finance_manager",
    "customer_support",
    "hr_admin",
)

TIMESTAMPED = (
    "employees",
    "vehicles",
    "leads",
    "quotations",
    "customer_profiles",
    "bookings",
    "test_drives",
    "deliveries",
    "appointments",
    "job_cards",
    "diagnostics",
    "qa_checkpoints",
    "vendors",
    "spare_parts",
    "purchase_orders",
    "service_quotations",
    "invoices",
    "payments",
    "loans",
    "ledger_entries",
    "customer_interactions",
    "marketing_campaigns",
    "loyalty_points",
    "attendance",
    "payroll",
    "leave_applications",
    "notifications",
    "documents",
)


def _timestamps():
    return (
        sa.Column("created_at", sa.BigInteger(), nullable=False),
        sa.Column("updated_at", sa.BigInteger(), nullable=False),
    )


def _status(default):
    return sa.Column("status", sa.String(length=20), nullable=False, server_default=default)


def _fk(column, target, ondelete, nullable=True):
    return sa.Column(column, sa.Integer(), sa.ForeignKey(target, ondelete=ondelete), nullable=nullable)


def upgrade():
    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("email", sa.String(length=120), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(length=256), nullable=False),
        sa.Column("role", sa.Enum(*ROLES, name="roleenum"), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=True),
    )

    op.create_table(
        "employees",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("employee_code", sa.String(length=40), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("designation", sa.String(length=80), nullable=False),
        sa.Column("department", sa.String(length=80), nullable=False),
        sa.Column("branch", sa.String(length=80)),
        sa.Column("email", sa.String(length=120)),
        sa.Column("phone", sa.String(length=20)),
        sa.Column("date_of_joining", sa.String(length=10), nullable=False),
        sa.Column("salary", sa.Integer(), nullable=False),
        sa.Column("employment_type", sa.String(length=20), nullable=False, server_default="full_time"),
        _fk("reporting_to", "employees.id", "SET NULL"),
        sa.Column("bank_account", sa.String(length=40)),
        _status("active"),
        *_timestamps(),
        sa.UniqueConstraint("employee_code", name="uq_employees_employee_code"),
    )

    op.create_table(
        "vehicles",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("vin", sa.String(length=32), nullable=False),
        sa.Column("make", sa.String(length=80), nullable=False),
        sa.Column("model", sa.String(length=80), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("category", sa.String(length=40), nullable=False),
        sa.Column("color", sa.String(length=40), nullable=False),
        sa.Column("price", sa.Integer(), nullable=False),
        sa.Column("stock", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("reorder_point", sa.Integer(), nullable=False, server_default="0"),
        _status("available"),
        *_timestamps(),
        sa.UniqueConstraint("vin", name="uq_vehicles_vin"),
    )

    op.create_table(
        "leads",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("phone", sa.String(length=20), nullable=False),
        sa.Column("email", sa.String(length=120)),
        sa.Column("source", sa.String(length=60), nullable=False),
        _status("new"),
        sa.Column("vehicle_interest", sa.String(length=120)),
        sa.Column("budget_range", sa.String(length=60)),
        _fk("assigned_to", "employees.id", "SET NULL"),
        sa.Column("priority", sa.String(length=10), nullable=False, server_default="medium"),
        sa.Column("last_contacted", sa.String(length=10)),
        *_timestamps(),
    )

    op.create_table(
        "quotations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("number", sa.String(length=40), nullable=False),
        _fk("lead_id", "leads.id", "SET NULL"),
        sa.Column("customer", sa.String(length=120), nullable=False),
        sa.Column("vehicle", sa.String(length=120), nullable=False),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("valid_until", sa.String(length=10)),
        _status("draft"),
        *_timestamps(),
        sa.UniqueConstraint("number", name="uq_quotations_number"),
    )

    op.create_table(
        "customer_profiles",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("email", sa.String(length=120), nullable=False),
        sa.Column("phone", sa.String(length=10), nullable=False),
        sa.Column("address", sa.Text()),
        sa.Column("city", sa.String(length=80)),
        sa.Column("state", sa.String(length=80)),
        sa.Column("pincode", sa.String(length=6)),
        sa.Column("pan", sa.String(length=10)),
        sa.Column("aadhar", sa.String(length=12)),
        sa.Column("gstin", sa.String(length=15)),
        _status("active"),
        *_timestamps(),
        sa.UniqueConstraint("email", name="uq_customer_profiles_email"),
    )

    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), primary_key=True),
        _fk("customer_id", "customer_profiles.id", "SET NULL"),
        _fk("quotation_id", "quotations.id", "SET NULL"),
        sa.Column("customer", sa.String(length=120), nullable=False),
        sa.Column("vehicle", sa.String(length=120), nullable=False),
        sa.Column("booking_date", sa.String(length=10), nullable=False),
        sa.Column("booking_amount", sa.Integer(), nullable=False, server_default="0"),
        _status("pending"),
        *_timestamps(),
    )

    op.create_table(
        "test_drives",
        sa.Column("id", sa.Integer(), primary_key=True),
        _fk("lead_id", "leads.id", "SET NULL"),
        _fk("vehicle_id", "vehicles.id", "SET NULL"),
        sa.Column("customer_name", sa.String(length=120), nullable=False),
        sa.Column("customer_phone", sa.String(length=20), nullable=False),
        sa.Column("scheduled_date", sa.String(length=10), nullable=False),
        sa.Column("time_slot", sa.String(length=8), nullable=False),
        sa.Column("license_number", sa.String(length=40), nullable=False),
        sa.Column("license_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        _status("scheduled"),
        sa.Column("feedback", sa.Text()),
        sa.Column("rating", sa.Integer()),
        *_timestamps(),
    )

    op.create_table(
        "deliveries",
        sa.Column("id", sa.Integer(), primary_key=True),
        _fk("booking_id", "bookings.id", "CASCADE", nullable=False),
        sa.Column("vehicle_vin", sa.String(length=32)),
        sa.Column("rto_status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("rto_number", sa.String(length=40)),
        sa.Column("insurance_status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("insurance_policy", sa.String(length=60)),
        sa.Column("qc_status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("qc_notes", sa.Text()),
        sa.Column("handover_date", sa.String(length=10)),
        _status("pending"),
        *_timestamps(),
        sa.UniqueConstraint("booking_id", name="uq_deliveries_booking_id"),
    )

    op.create_table(
        "appointments",
        sa.Column("id", sa.Integer(), primary_key=True),
        _fk("customer_id", "customer_profiles.id", "SET NULL"),
        sa.Column("customer", sa.String(length=120), nullable=False),
        sa.Column("vehicle", sa.String(length=120), nullable=False),
        sa.Column("date", sa.String(length=10), nullable=False),
        sa.Column("time", sa.String(length=8)),
        sa.Column("service_type", sa.String(length=60), nullable=False),
        sa.Column("notes", sa.Text()),
        _status("scheduled"),
        *_timestamps(),
    )

    op.create_table(
        "job_cards",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("job_no", sa.String(length=40), nullable=False),
        _fk("appointment_id", "appointments.id", "SET NULL"),
        _fk("technician_id", "employees.id", "SET NULL"),
        sa.Column("technician", sa.String(length=120)),
        sa.Column("parts_used", sa.Text()),
        sa.Column("notes", sa.Text()),
        _status("open"),
        *_timestamps(),
        sa.UniqueConstraint("job_no", name="uq_job_cards_job_no"),
    )

    op.create_table(
        "diagnostics",
        sa.Column("id", sa.Integer(), primary_key=True),
        _fk("job_card_id", "job_cards.id", "CASCADE", nullable=False),
        _fk("technician_id", "employees.id", "SET NULL"),
        sa.Column("issue_description", sa.Text(), nullable=False),
        sa.Column("findings", sa.Text()),
        sa.Column("recommendations", sa.Text()),
        sa.Column("completed_at", sa.String(length=10)),
        *_timestamps(),
    )

    op.create_table(
        "qa_checkpoints",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("module", sa.String(length=40), nullable=False),
        sa.Column("checkpoint_name", sa.String(length=120), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("is_mandatory", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )

    op.create_table(
        "vendors",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("vendor_code", sa.String(length=40), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("contact_person", sa.String(length=120)),
        sa.Column("email", sa.String(length=120)),
        sa.Column("phone", sa.String(length=20)),
        sa.Column("address", sa.Text()),
        sa.Column("gstin", sa.String(length=15)),
        sa.Column("payment_terms", sa.String(length=60)),
        sa.Column("rating", sa.Integer()),
        _status("active"),
        *_timestamps(),
        sa.UniqueConstraint("vendor_code", name="uq_vendors_vendor_code"),
    )

    op.create_table(
        "spare_parts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("part_number", sa.String(length=60), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("category", sa.String(length=60), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("unit_price", sa.Integer(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("reorder_point", sa.Integer(), nullable=False),
        _fk("vendor_id", "vendors.id", "SET NULL"),
        sa.Column("location", sa.String(length=60)),
        _status("active"),
        *_timestamps(),
        sa.UniqueConstraint("part_number", name="uq_spare_parts_part_number"),
    )

    op.create_table(
        "purchase_orders",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("po_number", sa.String(length=40), nullable=False),
        _fk("vendor_id", "vendors.id", "RESTRICT", nullable=False),
        sa.Column("items", sa.JSON(), nullable=False),
        sa.Column("total_amount", sa.Integer(), nullable=False),
        sa.Column("ordered_date", sa.String(length=10)),
        sa.Column("expected_delivery_date", sa.String(length=10)),
        sa.Column("received_date", sa.String(length=10)),
        _status("draft"),
        *_timestamps(),
        sa.UniqueConstraint("po_number", name="uq_purchase_orders_po_number"),
    )

    op.create_table(
        "service_quotations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("quotation_number", sa.String(length=40), nullable=False),
        _fk("customer_id", "customer_profiles.id", "SET NULL"),
        _fk("job_card_id", "job_cards.id", "SET NULL"),
        sa.Column("vehicle_registration", sa.String(length=20), nullable=False),
        sa.Column("service_type", sa.String(length=60)),
        sa.Column("items", sa.JSON()),
        sa.Column("parts_cost", sa.Integer(), nullable=False),
        sa.Column("labor_cost", sa.Integer(), nullable=False),
        sa.Column("tax_amount", sa.Integer(), nullable=False),
        sa.Column("total_amount", sa.Integer(), nullable=False),
        sa.Column("valid_until", sa.String(length=10)),
        _status("draft"),
        *_timestamps(),
        sa.UniqueConstraint("quotation_number", name="uq_service_quotations_quotation_number"),
    )

    op.create_table(
        "invoices",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("invoice_number", sa.String(length=40), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False),
        _fk("customer_id", "customer_profiles.id", "SET NULL"),
        sa.Column("reference_type", sa.String(length=40)),
        sa.Column("reference_id", sa.Integer()),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("tax_amount", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_amount", sa.Integer(), nullable=False),
        sa.Column("due_date", sa.String(length=10)),
        sa.Column("notes", sa.Text()),
        _status("draft"),
        *_timestamps(),
        sa.UniqueConstraint("invoice_number", name="uq_invoices_invoice_number"),
    )

    op.create_table(
        "payments",
        sa.Column("id", sa.Integer(), primary_key=True),
        _fk("invoice_id", "invoices.id", "RESTRICT", nullable=False),
        sa.Column("payment_date", sa.String(length=10), nullable=False),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("payment_mode", sa.String(length=20), nullable=False),
        sa.Column("transaction_id", sa.String(length=80)),
        sa.Column("bank_name", sa.String(length=120)),
        _status("completed"),
        *_timestamps(),
    )

    op.create_table(
        "loans",
        sa.Column("id", sa.Integer(), primary_key=True),
        _fk("customer_id", "customer_profiles.id", "CASCADE", nullable=False),
        _fk("booking_id", "bookings.id", "SET NULL"),
        sa.Column("bank_name", sa.String(length=120), nullable=False),
        sa.Column("loan_amount", sa.Integer(), nullable=False),
        sa.Column("interest_rate", sa.Float(), nullable=False),
        sa.Column("tenure_months", sa.Integer(), nullable=False),
        sa.Column("emi_amount", sa.Integer(), nullable=False),
        sa.Column("applied_date", sa.String(length=10), nullable=False),
        sa.Column("approved_date", sa.String(length=10)),
        sa.Column("remarks", sa.Text()),
        _status("pending"),
        *_timestamps(),
    )

    op.create_table(
        "ledger_entries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("entry_date", sa.String(length=10), nullable=False),
        sa.Column("account_type", sa.String(length=40), nullable=False),
        sa.Column("category", sa.String(length=60), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("debit_amount", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("credit_amount", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("reference_type", sa.String(length=40)),
        sa.Column("reference_id", sa.Integer()),
        *_timestamps(),
    )

    op.create_table(
        "customer_interactions",
        sa.Column("id", sa.Integer(), primary_key=True),
        _fk("customer_id", "customer_profiles.id", "CASCADE", nullable=False),
        sa.Column("interaction_type", sa.String(length=20), nullable=False),
        sa.Column("subject", sa.String(length=200)),
        sa.Column("notes", sa.Text()),
        sa.Column("contacted_by", sa.String(length=120)),
        sa.Column("interaction_date", sa.String(length=10)),
        sa.Column("follow_up_date", sa.String(length=10)),
        _status("open"),
        *_timestamps(),
    )

    op.create_table(
        "marketing_campaigns",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("campaign_type", sa.String(length=40)),
        sa.Column("target_segment", sa.String(length=120)),
        sa.Column("start_date", sa.String(length=10), nullable=False),
        sa.Column("end_date", sa.String(length=10), nullable=False),
        sa.Column("budget", sa.Integer()),
        _status("draft"),
        *_timestamps(),
    )

    op.create_table(
        "loyalty_points",
        sa.Column("id", sa.Integer(), primary_key=True),
        _fk("customer_id", "customer_profiles.id", "CASCADE", nullable=False),
        sa.Column("points", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("tier", sa.String(length=20), nullable=False, server_default="bronze"),
        _status("active"),
        *_timestamps(),
        sa.UniqueConstraint("customer_id", name="uq_loyalty_points_customer_id"),
    )

    op.create_table(
        "attendance",
        sa.Column("id", sa.Integer(), primary_key=True),
        _fk("employee_id", "employees.id", "CASCADE", nullable=False),
        sa.Column("date", sa.String(length=10), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("check_in", sa.String(length=8)),
        sa.Column("check_out", sa.String(length=8)),
        sa.Column("work_minutes", sa.Integer()),
        sa.Column("notes", sa.Text()),
        *_timestamps(),
        sa.UniqueConstraint("employee_id", "date", name="uq_attendance_employee_date"),
    )

    op.create_table(
        "payroll",
        sa.Column("id", sa.Integer(), primary_key=True),
        _fk("employee_id", "employees.id", "CASCADE", nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("basic_salary", sa.Integer(), nullable=False),
        sa.Column("allowances", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("deductions", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("net_salary", sa.Integer(), nullable=False),
        sa.Column("payment_date", sa.String(length=10)),
        _status("pending"),
        *_timestamps(),
        sa.UniqueConstraint("employee_id", "month", "year", name="uq_payroll_employee_period"),
    )

    op.create_table(
        "leave_applications",
        sa.Column("id", sa.Integer(), primary_key=True),
        _fk("employee_id", "employees.id", "CASCADE", nullable=False),
        sa.Column("leave_type", sa.String(length=20), nullable=False),
        sa.Column("start_date", sa.String(length=10), nullable=False),
        sa.Column("end_date", sa.String(length=10), nullable=False),
        sa.Column("days_count", sa.Integer(), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("applied_date", sa.String(length=10)),
        sa.Column("approved_date", sa.String(length=10)),
        _status("pending"),
        *_timestamps(),
    )

    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer(), primary_key=True),
        _fk("user_id", "user.id", "CASCADE"),
        sa.Column("recipient_email", sa.String(length=120)),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False, server_default="info"),
        sa.Column("read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("link", sa.String(length=255)),
        *_timestamps(),
    )

    op.create_table(
        "documents",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("reference_type", sa.String(length=40), nullable=False),
        sa.Column("reference_id", sa.Integer(), nullable=False),
        sa.Column("document_name", sa.String(length=200), nullable=False),
        sa.Column("document_type", sa.String(length=40), nullable=False),
        sa.Column("file_url", sa.String(length=500), nullable=False),
        _fk("uploaded_by", "user.id", "SET NULL"),
        _status("active"),
        *_timestamps(),
    )

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Integer(), primary_key=True),
        _fk("user_id", "user.id", "SET NULL"),
        sa.Column("action", sa.String(length=20), nullable=False),
        sa.Column("resource_type", sa.String(length=40), nullable=False),
        sa.Column("resource_id", sa.Integer()),
        sa.Column("old_values", sa.JSON()),
        sa.Column("new_values", sa.JSON()),
        sa.Column("ip_address", sa.String(length=64)),
        sa.Column("user_agent", sa.String(length=255)),
        sa.Column("created_at", sa.BigInteger(), nullable=False),
    )

    for table in TIMESTAMPED:
        op.create_index(f"ix_{table}_created_at", table, ["created_at"])
    op.create_index("ix_audit_logs_user_id", "audit_logs", ["user_id"])
    op.create_index("ix_audit_logs_resource_type", "audit_logs", ["resource_type"])
    op.create_index("ix_audit_logs_created_at", "audit_logs", ["created_at"])


def downgrade():
    op.drop_index("ix_audit_logs_created_at", table_name="audit_logs")
    op.drop_index("ix_audit_logs_resource_type", table_name="audit_logs")
    op.drop_index("ix_audit_logs_user_id", table_name="audit_logs")
    for table in reversed(TIMESTAMPED):
        op.drop_index(f"ix_{table}_created_at", table_name=table)
    op.drop_table("audit_logs")
    for table in reversed(TIMESTAMPED):
        op.drop_table(table)
    op.drop_table("user")
    sa.Enum(name="roleenum").drop(op.get_bind(), checkfirst=True)

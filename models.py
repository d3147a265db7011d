from enum import Enum

from sqlalchemy import UniqueConstraint

from extensions import db
from werkzeug.security import generate_password_hash, check_password_hash


class RoleEnum(str, Enum):
    dealer_admin = "dealer_admin"
    sales_executive = "sales_executive"
    service_technician = "service_technician"
    inventory_manager = "inventory_manager"
    finance_manager = "finance_manager"
    customer_support = "customer_support"
    hr_admin = "hr_admin"


_CRUD = ("view", "create", "edit", "delete")


def _grant(resources, actions=_CRUD) -> set[str]:
    return {f"{resource}:{action}" for resource in resources for action in actions}


_SHARED = _grant(["notifications"], ("view", "edit")) | _grant(["documents"], ("view", "create"))

# Permissions are "<resource>:<action>" pairs; "*" matches any resource or action.
ROLE_PERMISSIONS: dict[RoleEnum, set[str]] = {
    RoleEnum.dealer_admin: {"*:*"},
    RoleEnum.sales_executive: _SHARED
    | _grant(["vehicles"], ("view",))
    | _grant(["leads", "quotations", "bookings", "test-drives", "deliveries"], ("view", "create", "edit"))
    | _grant(["customers", "customer-interactions"], ("view", "create", "edit")),
    RoleEnum.service_technician: _SHARED
    | _grant(["appointments", "job-cards", "diagnostics", "service-quotations"], ("view", "create", "edit"))
    | _grant(["spare-parts", "vehicles", "customers", "qa-checkpoints"], ("view",)),
    RoleEnum.inventory_manager: _SHARED
    | {"vehicles:*", "vendors:*", "spare-parts:*", "purchase-orders:*"}
    | _grant(["qa-checkpoints"], ("view",)),
    RoleEnum.finance_manager: _SHARED
    | {"invoices:*", "payments:*", "loans:*", "ledger-entries:*"}
    | _grant(["customers", "bookings", "purchase-orders", "service-quotations"], ("view",)),
    RoleEnum.customer_support: _SHARED
    | _grant(["customers", "customer-interactions", "campaigns", "loyalty-programs"], ("view", "create", "edit"))
    | _grant(["appointments"], ("view",)),
    RoleEnum.hr_admin: _SHARED
    | {"employees:*", "attendance:*", "payroll:*", "leave-applications:*"},
}


class VehicleStatus(str, Enum):
    available = "available"
    reserved = "reserved"
    sold = "sold"
    in_transit = "in_transit"


class LeadStatus(str, Enum):
    new = "new"
    contacted = "contacted"
    qualified = "qualified"
    proposal = "proposal"
    negotiation = "negotiation"
    won = "won"
    lost = "lost"


class Priority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class QuotationStatus(str, Enum):
    draft = "draft"
    sent = "sent"
    accepted = "accepted"
    rejected = "rejected"
    expired = "expired"


class BookingStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    completed = "completed"


class TestDriveStatus(str, Enum):
    scheduled = "scheduled"
    completed = "completed"
    cancelled = "cancelled"
    no_show = "no-show"


class DeliveryStatus(str, Enum):
    pending = "pending"
    in_progress = "in_progress"
    ready = "ready"
    completed = "completed"
    cancelled = "cancelled"


class ClearanceStatus(str, Enum):
    pending = "pending"
    in_progress = "in-progress"
    completed = "completed"
    failed = "failed"


class AppointmentStatus(str, Enum):
    scheduled = "scheduled"
    in_progress = "in_progress"
    completed = "completed"
    cancelled = "cancelled"


class JobCardStatus(str, Enum):
    open = "open"
    in_progress = "in_progress"
    completed = "completed"
    closed = "closed"


class VendorStatus(str, Enum):
    active = "active"
    inactive = "inactive"
    blacklisted = "blacklisted"


class SparePartStatus(str, Enum):
    active = "active"
    inactive = "inactive"
    discontinued = "discontinued"


class PurchaseOrderStatus(str, Enum):
    draft = "draft"
    sent = "sent"
    confirmed = "confirmed"
    received = "received"
    cancelled = "cancelled"


class ServiceQuotationStatus(str, Enum):
    draft = "draft"
    sent = "sent"
    approved = "approved"
    rejected = "rejected"
    expired = "expired"


class InvoiceType(str, Enum):
    vehicle_sale = "vehicle_sale"
    service = "service"
    parts = "parts"
    other = "other"


class InvoiceStatus(str, Enum):
    draft = "draft"
    sent = "sent"
    paid = "paid"
    overdue = "overdue"
    cancelled = "cancelled"


class PaymentMode(str, Enum):
    cash = "cash"
    card = "card"
    upi = "upi"
    bank_transfer = "bank_transfer"
    cheque = "cheque"


class PaymentStatus(str, Enum):
    pending = "pending"
    completed = "completed"
    failed = "failed"


class LoanStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
    disbursed = "disbursed"


class CustomerStatus(str, Enum):
    active = "active"
    inactive = "inactive"


class InteractionType(str, Enum):
    call = "call"
    email = "email"
    visit = "visit"
    sms = "sms"
    whatsapp = "whatsapp"
    other = "other"


class InteractionStatus(str, Enum):
    open = "open"
    follow_up = "follow_up"
    closed = "closed"


class CampaignStatus(str, Enum):
    draft = "draft"
    active = "active"
    completed = "completed"
    cancelled = "cancelled"


class LoyaltyTier(str, Enum):
    bronze = "bronze"
    silver = "silver"
    gold = "gold"
    platinum = "platinum"


class LoyaltyStatus(str, Enum):
    active = "active"
    suspended = "suspended"


class EmployeeStatus(str, Enum):
    active = "active"
    inactive = "inactive"
    terminated = "terminated"


class EmploymentType(str, Enum):
    full_time = "full_time"
    part_time = "part_time"
    contract = "contract"
    intern = "intern"


class AttendanceStatus(str, Enum):
    present = "present"
    absent = "absent"
    leave = "leave"
    half_day = "half-day"


class PayrollStatus(str, Enum):
    pending = "pending"
    processed = "processed"
    paid = "paid"


class LeaveType(str, Enum):
    casual = "casual"
    sick = "sick"
    earned = "earned"
    unpaid = "unpaid"
    maternity = "maternity"
    paternity = "paternity"


class LeaveStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
    cancelled = "cancelled"


class NotificationType(str, Enum):
    info = "info"
    success = "success"
    warning = "warning"
    error = "error"


class DocumentStatus(str, Enum):
    active = "active"
    archived = "archived"


class AuditAction(str, Enum):
    create = "create"
    update = "update"
    delete = "delete"


def values_of(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


class User(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    role = db.Column(db.Enum(RoleEnum), nullable=False, default=RoleEnum.sales_executive)
    active = db.Column(db.Boolean, default=True)

    def set_password(self, pw): self.password_hash = generate_password_hash(pw)
    def check_password(self, pw): return check_password_hash(self.password_hash, pw)


class TimestampMixin:
    # Epoch milliseconds written by the lifecycle layer, never by the database.
    created_at = db.Column(db.BigInteger, nullable=False, index=True)
    updated_at = db.Column(db.BigInteger, nullable=False)


class Vehicle(TimestampMixin, db.Model):
    __tablename__ = "vehicles"
    __table_args__ = (UniqueConstraint("vin", name="uq_vehicles_vin"),)

    id = db.Column(db.Integer, primary_key=True)
    vin = db.Column(db.String(32), nullable=False)
    make = db.Column(db.String(80), nullable=False)
    model = db.Column(db.String(80), nullable=False)
    year = db.Column(db.Integer, nullable=False)
    category = db.Column(db.String(40), nullable=False)
    color = db.Column(db.String(40), nullable=False)
    price = db.Column(db.Integer, nullable=False)
    stock = db.Column(db.Integer, nullable=False, default=0)
    reorder_point = db.Column(db.Integer, nullable=False, default=0)
    status = db.Column(db.String(20), nullable=False, default=VehicleStatus.available.value)


class Lead(TimestampMixin, db.Model):
    __tablename__ = "leads"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    phone = db.Column(db.String(20), nullable=False)
    email = db.Column(db.String(120))
    source = db.Column(db.String(60), nullable=False)
    status = db.Column(db.String(20), nullable=False, default=LeadStatus.new.value)
    vehicle_interest = db.Column(db.String(120))
    budget_range = db.Column(db.String(60))
    assigned_to = db.Column(db.Integer, db.ForeignKey("employees.id", ondelete="SET NULL"))
    priority = db.Column(db.String(10), nullable=False, default=Priority.medium.value)
    last_contacted = db.Column(db.String(10))


class Quotation(TimestampMixin, db.Model):
    __tablename__ = "quotations"
    __table_args__ = (UniqueConstraint("number", name="uq_quotations_number"),)

    id = db.Column(db.Integer, primary_key=True)
    number = db.Column(db.String(40), nullable=False)
    lead_id = db.Column(db.Integer, db.ForeignKey("leads.id", ondelete="SET NULL"))
    customer = db.Column(db.String(120), nullable=False)
    vehicle = db.Column(db.String(120), nullable=False)
    amount = db.Column(db.Integer, nullable=False)
    valid_until = db.Column(db.String(10))
    status = db.Column(db.String(20), nullable=False, default=QuotationStatus.draft.value)


class Booking(TimestampMixin, db.Model):
    __tablename__ = "bookings"

    id = db.Column(db.Integer, primary_key=True)
    customer_id = db.Column(db.Integer, db.ForeignKey("customer_profiles.id", ondelete="SET NULL"))
    quotation_id = db.Column(db.Integer, db.ForeignKey("quotations.id", ondelete="SET NULL"))
    customer = db.Column(db.String(120), nullable=False)
    vehicle = db.Column(db.String(120), nullable=False)
    booking_date = db.Column(db.String(10), nullable=False)
    booking_amount = db.Column(db.Integer, nullable=False, default=0)
    status = db.Column(db.String(20), nullable=False, default=BookingStatus.pending.value)


class TestDrive(TimestampMixin, db.Model):
    __tablename__ = "test_drives"
    __test__ = False

    id = db.Column(db.Integer, primary_key=True)
    lead_id = db.Column(db.Integer, db.ForeignKey("leads.id", ondelete="SET NULL"))
    vehicle_id = db.Column(db.Integer, db.ForeignKey("vehicles.id", ondelete="SET NULL"))
    customer_name = db.Column(db.String(120), nullable=False)
    customer_phone = db.Column(db.String(20), nullable=False)
    scheduled_date = db.Column(db.String(10), nullable=False)
    time_slot = db.Column(db.String(8), nullable=False)
    license_number = db.Column(db.String(40), nullable=False)
    license_verified = db.Column(db.Boolean, nullable=False, default=False)
    status = db.Column(db.String(20), nullable=False, default=TestDriveStatus.scheduled.value)
    feedback = db.Column(db.Text)
    rating = db.Column(db.Integer)


class Delivery(TimestampMixin, db.Model):
    __tablename__ = "deliveries"
    __table_args__ = (UniqueConstraint("booking_id", name="uq_deliveries_booking_id"),)

    id = db.Column(db.Integer, primary_key=True)
    booking_id = db.Column(db.Integer, db.ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False)
    vehicle_vin = db.Column(db.String(32))
    rto_status = db.Column(db.String(20), nullable=False, default=ClearanceStatus.pending.value)
    rto_number = db.Column(db.String(40))
    insurance_status = db.Column(db.String(20), nullable=False, default=ClearanceStatus.pending.value)
    insurance_policy = db.Column(db.String(60))
    qc_status = db.Column(db.String(20), nullable=False, default=ClearanceStatus.pending.value)
    qc_notes = db.Column(db.Text)
    handover_date = db.Column(db.String(10))
    status = db.Column(db.String(20), nullable=False, default=DeliveryStatus.pending.value)


class Appointment(TimestampMixin, db.Model):
    __tablename__ = "appointments"

    id = db.Column(db.Integer, primary_key=True)
    customer_id = db.Column(db.Integer, db.ForeignKey("customer_profiles.id", ondelete="SET NULL"))
    customer = db.Column(db.String(120), nullable=False)
    vehicle = db.Column(db.String(120), nullable=False)
    date = db.Column(db.String(10), nullable=False)
    time = db.Column(db.String(8))
    service_type = db.Column(db.String(60), nullable=False)
    notes = db.Column(db.Text)
    status = db.Column(db.String(20), nullable=False, default=AppointmentStatus.scheduled.value)


class JobCard(TimestampMixin, db.Model):
    __tablename__ = "job_cards"
    __table_args__ = (UniqueConstraint("job_no", name="uq_job_cards_job_no"),)

    id = db.Column(db.Integer, primary_key=True)
    job_no = db.Column(db.String(40), nullable=False)
    appointment_id = db.Column(db.Integer, db.ForeignKey("appointments.id", ondelete="SET NULL"))
    technician_id = db.Column(db.Integer, db.ForeignKey("employees.id", ondelete="SET NULL"))
    technician = db.Column(db.String(120))
    parts_used = db.Column(db.Text)
    notes = db.Column(db.Text)
    status = db.Column(db.String(20), nullable=False, default=JobCardStatus.open.value)


class Diagnostic(TimestampMixin, db.Model):
    __tablename__ = "diagnostics"

    id = db.Column(db.Integer, primary_key=True)
    job_card_id = db.Column(db.Integer, db.ForeignKey("job_cards.id", ondelete="CASCADE"), nullable=False)
    technician_id = db.Column(db.Integer, db.ForeignKey("employees.id", ondelete="SET NULL"))
    issue_description = db.Column(db.Text, nullable=False)
    findings = db.Column(db.Text)
    recommendations = db.Column(db.Text)
    completed_at = db.Column(db.String(10))


class QaCheckpoint(TimestampMixin, db.Model):
    __tablename__ = "qa_checkpoints"

    id = db.Column(db.Integer, primary_key=True)
    module = db.Column(db.String(40), nullable=False)
    checkpoint_name = db.Column(db.String(120), nullable=False)
    description = db.Column(db.Text)
    is_mandatory = db.Column(db.Boolean, nullable=False, default=True)
    display_order = db.Column(db.Integer, nullable=False, default=0)


class Vendor(TimestampMixin, db.Model):
    __tablename__ = "vendors"
    __table_args__ = (UniqueConstraint("vendor_code", name="uq_vendors_vendor_code"),)

    id = db.Column(db.Integer, primary_key=True)
    vendor_code = db.Column(db.String(40), nullable=False)
    name = db.Column(db.String(120), nullable=False)
    contact_person = db.Column(db.String(120))
    email = db.Column(db.String(120))
    phone = db.Column(db.String(20))
    address = db.Column(db.Text)
    gstin = db.Column(db.String(15))
    payment_terms = db.Column(db.String(60))
    rating = db.Column(db.Integer)
    status = db.Column(db.String(20), nullable=False, default=VendorStatus.active.value)


class SparePart(TimestampMixin, db.Model):
    __tablename__ = "spare_parts"
    __table_args__ = (UniqueConstraint("part_number", name="uq_spare_parts_part_number"),)

    id = db.Column(db.Integer, primary_key=True)
    part_number = db.Column(db.String(60), nullable=False)
    name = db.Column(db.String(120), nullable=False)
    category = db.Column(db.String(60), nullable=False)
    description = db.Column(db.Text)
    unit_price = db.Column(db.Integer, nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    reorder_point = db.Column(db.Integer, nullable=False)
    vendor_id = db.Column(db.Integer, db.ForeignKey("vendors.id", ondelete="SET NULL"))
    location = db.Column(db.String(60))
    status = db.Column(db.String(20), nullable=False, default=SparePartStatus.active.value)


class PurchaseOrder(TimestampMixin, db.Model):
    __tablename__ = "purchase_orders"
    __table_args__ = (UniqueConstraint("po_number", name="uq_purchase_orders_po_number"),)

    id = db.Column(db.Integer, primary_key=True)
    po_number = db.Column(db.String(40), nullable=False)
    vendor_id = db.Column(db.Integer, db.ForeignKey("vendors.id", ondelete="RESTRICT"), nullable=False)
    items = db.Column(db.JSON, nullable=False)
    total_amount = db.Column(db.Integer, nullable=False)
    ordered_date = db.Column(db.String(10))
    expected_delivery_date = db.Column(db.String(10))
    received_date = db.Column(db.String(10))
    status = db.Column(db.String(20), nullable=False, default=PurchaseOrderStatus.draft.value)


class ServiceQuotation(TimestampMixin, db.Model):
    __tablename__ = "service_quotations"
    __table_args__ = (UniqueConstraint("quotation_number", name="uq_service_quotations_quotation_number"),)

    id = db.Column(db.Integer, primary_key=True)
    quotation_number = db.Column(db.String(40), nullable=False)
    customer_id = db.Column(db.Integer, db.ForeignKey("customer_profiles.id", ondelete="SET NULL"))
    job_card_id = db.Column(db.Integer, db.ForeignKey("job_cards.id", ondelete="SET NULL"))
    vehicle_registration = db.Column(db.String(20), nullable=False)
    service_type = db.Column(db.String(60))
    items = db.Column(db.JSON)
    parts_cost = db.Column(db.Integer, nullable=False)
    labor_cost = db.Column(db.Integer, nullable=False)
    tax_amount = db.Column(db.Integer, nullable=False)
    total_amount = db.Column(db.Integer, nullable=False)
    valid_until = db.Column(db.String(10))
    status = db.Column(db.String(20), nullable=False, default=ServiceQuotationStatus.draft.value)


class Invoice(TimestampMixin, db.Model):
    __tablename__ = "invoices"
    __table_args__ = (UniqueConstraint("invoice_number", name="uq_invoices_invoice_number"),)

    id = db.Column(db.Integer, primary_key=True)
    invoice_number = db.Column(db.String(40), nullable=False)
    type = db.Column(db.String(20), nullable=False)
    customer_id = db.Column(db.Integer, db.ForeignKey("customer_profiles.id", ondelete="SET NULL"))
    reference_type = db.Column(db.String(40))
    reference_id = db.Column(db.Integer)
    amount = db.Column(db.Integer, nullable=False)
    tax_amount = db.Column(db.Integer, nullable=False, default=0)
    total_amount = db.Column(db.Integer, nullable=False)
    due_date = db.Column(db.String(10))
    notes = db.Column(db.Text)
    status = db.Column(db.String(20), nullable=False, default=InvoiceStatus.draft.value)


class Payment(TimestampMixin, db.Model):
    __tablename__ = "payments"

    id = db.Column(db.Integer, primary_key=True)
    invoice_id = db.Column(db.Integer, db.ForeignKey("invoices.id", ondelete="RESTRICT"), nullable=False)
    payment_date = db.Column(db.String(10), nullable=False)
    amount = db.Column(db.Integer, nullable=False)
    payment_mode = db.Column(db.String(20), nullable=False)
    transaction_id = db.Column(db.String(80))
    bank_name = db.Column(db.String(120))
    status = db.Column(db.String(20), nullable=False, default=PaymentStatus.completed.value)


class Loan(TimestampMixin, db.Model):
    __tablename__ = "loans"

    id = db.Column(db.Integer, primary_key=True)
    customer_id = db.Column(db.Integer, db.ForeignKey("customer_profiles.id", ondelete="CASCADE"), nullable=False)
    booking_id = db.Column(db.Integer, db.ForeignKey("bookings.id", ondelete="SET NULL"))
    bank_name = db.Column(db.String(120), nullable=False)
    loan_amount = db.Column(db.Integer, nullable=False)
    interest_rate = db.Column(db.Float, nullable=False)
    tenure_months = db.Column(db.Integer, nullable=False)
    emi_amount = db.Column(db.Integer, nullable=False)
    applied_date = db.Column(db.String(10), nullable=False)
    approved_date = db.Column(db.String(10))
    remarks = db.Column(db.Text)
    status = db.Column(db.String(20), nullable=False, default=LoanStatus.pending.value)


class LedgerEntry(TimestampMixin, db.Model):
    __tablename__ = "ledger_entries"

    id = db.Column(db.Integer, primary_key=True)
    entry_date = db.Column(db.String(10), nullable=False)
    account_type = db.Column(db.String(40), nullable=False)
    category = db.Column(db.String(60), nullable=False)
    description = db.Column(db.Text, nullable=False)
    debit_amount = db.Column(db.Integer, nullable=False, default=0)
    credit_amount = db.Column(db.Integer, nullable=False, default=0)
    reference_type = db.Column(db.String(40))
    reference_id = db.Column(db.Integer)


class CustomerProfile(TimestampMixin, db.Model):
    __tablename__ = "customer_profiles"
    __table_args__ = (UniqueConstraint("email", name="uq_customer_profiles_email"),)

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(120), nullable=False)
    phone = db.Column(db.String(10), nullable=False)
    address = db.Column(db.Text)
    city = db.Column(db.String(80))
    state = db.Column(db.String(80))
    pincode = db.Column(db.String(6))
    pan = db.Column(db.String(10))
    aadhar = db.Column(db.String(12))
    gstin = db.Column(db.String(15))
    status = db.Column(db.String(20), nullable=False, default=CustomerStatus.active.value)


class CustomerInteraction(TimestampMixin, db.Model):
    __tablename__ = "customer_interactions"

    id = db.Column(db.Integer, primary_key=True)
    customer_id = db.Column(
        db.Integer, db.ForeignKey("customer_profiles.id", ondelete="CASCADE"), nullable=False
    )
    interaction_type = db.Column(db.String(20), nullable=False)
    subject = db.Column(db.String(200))
    notes = db.Column(db.Text)
    contacted_by = db.Column(db.String(120))
    interaction_date = db.Column(db.String(10))
    follow_up_date = db.Column(db.String(10))
    status = db.Column(db.String(20), nullable=False, default=InteractionStatus.open.value)


class MarketingCampaign(TimestampMixin, db.Model):
    __tablename__ = "marketing_campaigns"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    description = db.Column(db.Text)
    campaign_type = db.Column(db.String(40))
    target_segment = db.Column(db.String(120))
    start_date = db.Column(db.String(10), nullable=False)
    end_date = db.Column(db.String(10), nullable=False)
    budget = db.Column(db.Integer)
    status = db.Column(db.String(20), nullable=False, default=CampaignStatus.draft.value)


class LoyaltyPoints(TimestampMixin, db.Model):
    __tablename__ = "loyalty_points"
    __table_args__ = (UniqueConstraint("customer_id", name="uq_loyalty_points_customer_id"),)

    id = db.Column(db.Integer, primary_key=True)
    customer_id = db.Column(
        db.Integer, db.ForeignKey("customer_profiles.id", ondelete="CASCADE"), nullable=False
    )
    points = db.Column(db.Integer, nullable=False, default=0)
    tier = db.Column(db.String(20), nullable=False, default=LoyaltyTier.bronze.value)
    status = db.Column(db.String(20), nullable=False, default=LoyaltyStatus.active.value)


class Employee(TimestampMixin, db.Model):
    __tablename__ = "employees"
    __table_args__ = (UniqueConstraint("employee_code", name="uq_employees_employee_code"),)

    id = db.Column(db.Integer, primary_key=True)
    employee_code = db.Column(db.String(40), nullable=False)
    name = db.Column(db.String(120), nullable=False)
    designation = db.Column(db.String(80), nullable=False)
    department = db.Column(db.String(80), nullable=False)
    branch = db.Column(db.String(80))
    email = db.Column(db.String(120))
    phone = db.Column(db.String(20))
    date_of_joining = db.Column(db.String(10), nullable=False)
    salary = db.Column(db.Integer, nullable=False)
    employment_type = db.Column(db.String(20), nullable=False, default=EmploymentType.full_time.value)
    reporting_to = db.Column(db.Integer, db.ForeignKey("employees.id", ondelete="SET NULL"))
    bank_account = db.Column(db.String(40))
    status = db.Column(db.String(20), nullable=False, default=EmployeeStatus.active.value)


class Attendance(TimestampMixin, db.Model):
    __tablename__ = "attendance"
    __table_args__ = (UniqueConstraint("employee_id", "date", name="uq_attendance_employee_date"),)

    id = db.Column(db.Integer, primary_key=True)
    employee_id = db.Column(db.Integer, db.ForeignKey("employees.id", ondelete="CASCADE"), nullable=False)
    date = db.Column(db.String(10), nullable=False)
    status = db.Column(db.String(20), nullable=False)
    check_in = db.Column(db.String(8))
    check_out = db.Column(db.String(8))
    work_minutes = db.Column(db.Integer)
    notes = db.Column(db.Text)


class Payroll(TimestampMixin, db.Model):
    __tablename__ = "payroll"
    __table_args__ = (
        UniqueConstraint("employee_id", "month", "year", name="uq_payroll_employee_period"),
    )

    id = db.Column(db.Integer, primary_key=True)
    employee_id = db.Column(db.Integer, db.ForeignKey("employees.id", ondelete="CASCADE"), nullable=False)
    month = db.Column(db.Integer, nullable=False)
    year = db.Column(db.Integer, nullable=False)
    basic_salary = db.Column(db.Integer, nullable=False)
    allowances = db.Column(db.Integer, nullable=False, default=0)
    deductions = db.Column(db.Integer, nullable=False, default=0)
    net_salary = db.Column(db.Integer, nullable=False)
    payment_date = db.Column(db.String(10))
    status = db.Column(db.String(20), nullable=False, default=PayrollStatus.pending.value)


class LeaveApplication(TimestampMixin, db.Model):
    __tablename__ = "leave_applications"

    id = db.Column(db.Integer, primary_key=True)
    employee_id = db.Column(db.Integer, db.ForeignKey("employees.id", ondelete="CASCADE"), nullable=False)
    leave_type = db.Column(db.String(20), nullable=False)
    start_date = db.Column(db.String(10), nullable=False)
    end_date = db.Column(db.String(10), nullable=False)
    days_count = db.Column(db.Integer, nullable=False)
    reason = db.Column(db.Text, nullable=False)
    applied_date = db.Column(db.String(10))
    approved_date = db.Column(db.String(10))
    status = db.Column(db.String(20), nullable=False, default=LeaveStatus.pending.value)


class Notification(TimestampMixin, db.Model):
    __tablename__ = "notifications"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("user.id", ondelete="CASCADE"))
    recipient_email = db.Column(db.String(120))
    title = db.Column(db.String(200), nullable=False)
    message = db.Column(db.Text, nullable=False)
    type = db.Column(db.String(20), nullable=False, default=NotificationType.info.value)
    read = db.Column(db.Boolean, nullable=False, default=False)
    link = db.Column(db.String(255))


class Document(TimestampMixin, db.Model):
    __tablename__ = "documents"

    id = db.Column(db.Integer, primary_key=True)
    reference_type = db.Column(db.String(40), nullable=False)
    reference_id = db.Column(db.Integer, nullable=False)
    document_name = db.Column(db.String(200), nullable=False)
    document_type = db.Column(db.String(40), nullable=False)
    file_url = db.Column(db.String(500), nullable=False)
    uploaded_by = db.Column(db.Integer, db.ForeignKey("user.id", ondelete="SET NULL"))
    status = db.Column(db.String(20), nullable=False, default=DocumentStatus.active.value)


class AuditLog(db.Model):
    __tablename__ = "audit_logs"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("user.id", ondelete="SET NULL"), index=True)
    action = db.Column(db.String(20), nullable=False)
    resource_type = db.Column(db.String(40), nullable=False, index=True)
    resource_id = db.Column(db.Integer)
    old_values = db.Column(db.JSON)
    new_values = db.Column(db.JSON)
    ip_address = db.Column(db.String(64))
    user_agent = db.Column(db.String(255))
    created_at = db.Column(db.BigInteger, nullable=False, index=True)

from marshmallow import EXCLUDE, Schema, ValidationError, fields, pre_load, validates_schema
from marshmallow.validate import Email, Length, OneOf, Range, Regexp, URL

from lifecycle.fields import DateString, TimeString, TrimmedString
from models import (
    AppointmentStatus,
    AttendanceStatus,
    BookingStatus,
    CampaignStatus,
    ClearanceStatus,
    CustomerStatus,
    DeliveryStatus,
    DocumentStatus,
    EmployeeStatus,
    EmploymentType,
    InteractionStatus,
    InteractionType,
    InvoiceStatus,
    InvoiceType,
    JobCardStatus,
    LeadStatus,
    LeaveStatus,
    LeaveType,
    LoanStatus,
    LoyaltyStatus,
    LoyaltyTier,
    NotificationType,
    PaymentMode,
    PaymentStatus,
    PayrollStatus,
    Priority,
    PurchaseOrderStatus,
    QuotationStatus,
    ServiceQuotationStatus,
    SparePartStatus,
    TestDriveStatus,
    VehicleStatus,
    VendorStatus,
    values_of,
)

# --- helpers ---------------------------------------------------------------

PHONE_RE = r"^[6-9]\d{9}$"
PINCODE_RE = r"^\d{6}$"
PAN_RE = r"^[A-Z]{5}\d{4}[A-Z]$"
AADHAR_RE = r"^\d{12}$"
GSTIN_RE = r"^\d{2}[A-Z]{5}\d{4}[A-Z][1-9A-Z]Z[0-9A-Z]$"

AMOUNT = Range(min=0)
POSITIVE = Range(min=0, min_inclusive=False)


def _text(required=False, **kwargs):
    if required:
        return TrimmedString(required=True, **kwargs)
    return TrimmedString(load_default=None, **kwargs)


def _date(required=False, **kwargs):
    if required:
        return DateString(required=True, **kwargs)
    return DateString(load_default=None, **kwargs)


def _choice(enum_cls, default=None, required=False, **kwargs):
    validate = OneOf(values_of(enum_cls))
    if required:
        return TrimmedString(required=True, validate=validate, **kwargs)
    return TrimmedString(load_default=default, validate=validate, **kwargs)


def _email(required=False, **kwargs):
    return _text(required, case="lower", validate=Email(error="Invalid email format."), **kwargs)


def _amount(required=False, default=None, validate=AMOUNT, **kwargs):
    if required:
        return fields.Integer(required=True, validate=validate, **kwargs)
    return fields.Integer(load_default=default, validate=validate, **kwargs)


def _ref(required=False, **kwargs):
    if required:
        return fields.Integer(required=True, **kwargs)
    return fields.Integer(load_default=None, **kwargs)


class PayloadSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    @pre_load
    def _blank_to_none(self, data, **kwargs):
        # Whitespace-only strings count as absent values.
        if not isinstance(data, dict):
            return data
        return {
            key: (None if isinstance(value, str) and not value.strip() else value)
            for key, value in data.items()
        }


class EntitySchema(PayloadSchema):
    """Base for every entity: camelCase JSON, snake_case attributes."""

    id = fields.Int(dump_only=True)
    created_at = fields.Int(data_key="createdAt", dump_only=True)
    updated_at = fields.Int(data_key="updatedAt", dump_only=True)


class UserSchema(Schema):
    id = fields.Int()
    name = fields.Str()
    email = fields.Str()
    role = fields.Function(lambda user: user.role.value if user.role else None)
    active = fields.Bool()


# --- sales -----------------------------------------------------------------


class VehicleSchema(EntitySchema):
    vin = _text(True, case="upper", validate=Length(min=5, max=32))
    make = _text(True)
    model = _text(True)
    year = fields.Integer(required=True, validate=Range(min=1900, max=2100))
    category = _text(True)
    color = _text(True)
    price = _amount(True)
    stock = _amount(default=0)
    reorder_point = _amount(default=0, data_key="reorderPoint")
    status = _choice(VehicleStatus, default=VehicleStatus.available.value)


class LeadSchema(EntitySchema):
    name = _text(True)
    phone = _text(True)
    email = _email()
    source = _text(True)
    status = _choice(LeadStatus, default=LeadStatus.new.value)
    vehicle_interest = _text(data_key="vehicleInterest")
    budget_range = _text(data_key="budgetRange")
    assigned_to = _ref(data_key="assignedTo")
    priority = _choice(Priority, default=Priority.medium.value)
    last_contacted = _date(data_key="lastContacted")


class QuotationSchema(EntitySchema):
    number = _text(True)
    lead_id = _ref(data_key="leadId")
    customer = _text(True)
    vehicle = _text(True)
    amount = _amount(True)
    valid_until = _date(data_key="validUntil")
    status = _choice(QuotationStatus, default=QuotationStatus.draft.value)


class BookingSchema(EntitySchema):
    customer_id = _ref(data_key="customerId")
    quotation_id = _ref(data_key="quotationId")
    customer = _text(True)
    vehicle = _text(True)
    booking_date = _date(True, data_key="bookingDate")
    booking_amount = _amount(default=0, data_key="bookingAmount")
    status = _choice(BookingStatus, default=BookingStatus.pending.value)


class TestDriveSchema(EntitySchema):
    __test__ = False

    lead_id = _ref(data_key="leadId")
    vehicle_id = _ref(data_key="vehicleId")
    customer_name = _text(True, data_key="customerName")
    customer_phone = _text(True, data_key="customerPhone")
    scheduled_date = _date(True, data_key="scheduledDate")
    time_slot = TimeString(required=True, data_key="timeSlot")
    license_number = _text(True, case="upper", data_key="licenseNumber")
    license_verified = fields.Boolean(load_default=False, data_key="licenseVerified")
    status = _choice(TestDriveStatus, default=TestDriveStatus.scheduled.value)
    feedback = _text()
    rating = fields.Integer(load_default=None, validate=Range(min=1, max=5))


class DeliverySchema(EntitySchema):
    booking_id = _ref(True, data_key="bookingId")
    vehicle_vin = _text(case="upper", data_key="vehicleVin")
    rto_status = _choice(ClearanceStatus, default=ClearanceStatus.pending.value, data_key="rtoStatus")
    rto_number = _text(case="upper", data_key="rtoNumber")
    insurance_status = _choice(
        ClearanceStatus, default=ClearanceStatus.pending.value, data_key="insuranceStatus"
    )
    insurance_policy = _text(data_key="insurancePolicy")
    qc_status = _choice(ClearanceStatus, default=ClearanceStatus.pending.value, data_key="qcStatus")
    qc_notes = _text(data_key="qcNotes")
    handover_date = _date(data_key="handoverDate")
    status = _choice(DeliveryStatus, default=DeliveryStatus.pending.value)


# --- service ---------------------------------------------------------------


class AppointmentSchema(EntitySchema):
    customer_id = _ref(data_key="customerId")
    customer = _text(True)
    vehicle = _text(True)
    date = _date(True)
    time = TimeString(load_default=None)
    service_type = _text(True, data_key="serviceType")
    notes = _text()
    status = _choice(AppointmentStatus, default=AppointmentStatus.scheduled.value)


class JobCardSchema(EntitySchema):
    job_no = _text(True, case="upper", data_key="jobNo")
    appointment_id = _ref(data_key="appointmentId")
    technician_id = _ref(data_key="technicianId")
    technician = _text()
    parts_used = _text(data_key="partsUsed")
    notes = _text()
    status = _choice(JobCardStatus, default=JobCardStatus.open.value)


class DiagnosticSchema(EntitySchema):
    job_card_id = _ref(True, data_key="jobCardId")
    technician_id = _ref(data_key="technicianId")
    issue_description = _text(True, data_key="issueDescription")
    findings = _text()
    recommendations = _text()
    completed_at = _date(data_key="completedAt")


class ServiceQuotationItemSchema(PayloadSchema):
    description = _text(True)
    item_type = TrimmedString(load_default="part", validate=OneOf(["part", "labor"]), data_key="itemType")
    quantity = fields.Integer(required=True, validate=Range(min=1))
    unit_price = _amount(True, data_key="unitPrice")
    spare_part_id = _ref(data_key="sparePartId")


class ServiceQuotationSchema(EntitySchema):
    quotation_number = _text(True, case="upper", data_key="quotationNumber")
    customer_id = _ref(data_key="customerId")
    job_card_id = _ref(data_key="jobCardId")
    vehicle_registration = _text(True, case="upper", data_key="vehicleRegistration")
    service_type = _text(data_key="serviceType")
    items = fields.List(fields.Nested(ServiceQuotationItemSchema), load_default=list, allow_none=True)
    parts_cost = _amount(True, data_key="partsCost")
    labor_cost = _amount(True, data_key="laborCost")
    tax_amount = _amount(True, data_key="taxAmount")
    total_amount = fields.Int(data_key="totalAmount", dump_only=True)
    valid_until = _date(data_key="validUntil")
    status = _choice(ServiceQuotationStatus, default=ServiceQuotationStatus.draft.value)


class QaCheckpointSchema(EntitySchema):
    module = _text(True, case="lower")
    checkpoint_name = _text(True, data_key="checkpointName")
    description = _text()
    is_mandatory = fields.Boolean(load_default=True, data_key="isMandatory")
    display_order = _amount(default=0, data_key="displayOrder")


# --- inventory -------------------------------------------------------------


class VendorSchema(EntitySchema):
    vendor_code = _text(True, case="upper", data_key="vendorCode")
    name = _text(True, metadata={"code": "VENDOR_NAME"})
    contact_person = _text(data_key="contactPerson")
    email = _email()
    phone = _text()
    address = _text()
    gstin = _text(case="upper", validate=Regexp(GSTIN_RE, error="Invalid GSTIN."))
    payment_terms = _text(data_key="paymentTerms")
    rating = fields.Integer(load_default=None, validate=Range(min=1, max=5))
    status = _choice(VendorStatus, default=VendorStatus.active.value)


class SparePartSchema(EntitySchema):
    part_number = _text(True, case="upper", data_key="partNumber")
    name = _text(True)
    category = _text(True)
    description = _text()
    unit_price = _amount(True, data_key="unitPrice")
    quantity = _amount(True)
    reorder_point = _amount(True, data_key="reorderPoint")
    vendor_id = _ref(data_key="vendorId")
    location = _text()
    status = _choice(SparePartStatus, default=SparePartStatus.active.value)


class PurchaseOrderItemSchema(PayloadSchema):
    spare_part_id = _ref(data_key="sparePartId")
    description = _text()
    quantity = fields.Integer(required=True, validate=Range(min=1))
    unit_price = _amount(True, data_key="unitPrice")

    @validates_schema
    def _names_the_goods(self, data, **kwargs):
        if data.get("spare_part_id") is None and not data.get("description"):
            raise ValidationError("Item needs a sparePartId or a description.", "description")


class PurchaseOrderSchema(EntitySchema):
    po_number = _text(True, case="upper", data_key="poNumber")
    vendor_id = _ref(True, data_key="vendorId")
    items = fields.List(fields.Nested(PurchaseOrderItemSchema), required=True, validate=Length(min=1))
    total_amount = fields.Int(data_key="totalAmount", dump_only=True)
    ordered_date = _date(data_key="orderedDate")
    expected_delivery_date = _date(data_key="expectedDeliveryDate")
    received_date = _date(data_key="receivedDate")
    status = _choice(PurchaseOrderStatus, default=PurchaseOrderStatus.draft.value)


# --- finance ---------------------------------------------------------------


class InvoiceSchema(EntitySchema):
    invoice_number = _text(True, case="upper", data_key="invoiceNumber")
    type = _choice(InvoiceType, required=True)
    customer_id = _ref(data_key="customerId")
    reference_type = _text(data_key="referenceType")
    reference_id = _ref(data_key="referenceId")
    amount = _amount(True)
    tax_amount = _amount(True, data_key="taxAmount")
    total_amount = fields.Int(data_key="totalAmount", dump_only=True)
    due_date = _date(data_key="dueDate")
    notes = _text()
    status = _choice(InvoiceStatus, default=InvoiceStatus.draft.value)


class PaymentSchema(EntitySchema):
    invoice_id = _ref(True, data_key="invoiceId")
    payment_date = _date(True, data_key="paymentDate")
    amount = _amount(True, validate=POSITIVE)
    payment_mode = _choice(PaymentMode, required=True, data_key="paymentMode")
    transaction_id = _text(data_key="transactionId")
    bank_name = _text(data_key="bankName")
    status = _choice(PaymentStatus, default=PaymentStatus.completed.value)


class LoanSchema(EntitySchema):
    customer_id = _ref(True, data_key="customerId")
    booking_id = _ref(data_key="bookingId")
    bank_name = _text(True, data_key="bankName")
    loan_amount = _amount(True, validate=POSITIVE, data_key="loanAmount")
    interest_rate = fields.Float(required=True, validate=Range(min=0, max=100, min_inclusive=False), data_key="interestRate")
    tenure_months = fields.Integer(
        required=True, validate=Range(min=1, max=480), data_key="tenureMonths", metadata={"code": "TENURE"}
    )
    emi_amount = fields.Int(data_key="emiAmount", dump_only=True)
    applied_date = _date(True, data_key="appliedDate")
    approved_date = _date(data_key="approvedDate")
    remarks = _text()
    status = _choice(LoanStatus, default=LoanStatus.pending.value)


class LedgerEntrySchema(EntitySchema):
    entry_date = _date(True, data_key="entryDate")
    account_type = _text(True, case="lower", data_key="accountType")
    category = _text(True)
    description = _text(True)
    debit_amount = _amount(default=0, data_key="debitAmount")
    credit_amount = _amount(default=0, data_key="creditAmount")
    reference_type = _text(data_key="referenceType")
    reference_id = _ref(data_key="referenceId")


# --- crm -------------------------------------------------------------------


class CustomerSchema(EntitySchema):
    name = _text(True)
    email = _email(True)
    phone = _text(True, validate=Regexp(PHONE_RE, error="Phone must be a 10 digit mobile number."))
    address = _text()
    city = _text()
    state = _text()
    pincode = _text(validate=Regexp(PINCODE_RE, error="Pincode must be 6 digits."))
    pan = _text(case="upper", validate=Regexp(PAN_RE, error="Invalid PAN."))
    aadhar = _text(validate=Regexp(AADHAR_RE, error="Aadhar must be 12 digits."))
    gstin = _text(case="upper", validate=Regexp(GSTIN_RE, error="Invalid GSTIN."))
    status = _choice(CustomerStatus, default=CustomerStatus.active.value)


class CustomerInteractionSchema(EntitySchema):
    customer_id = _ref(True, data_key="customerId")
    interaction_type = _choice(InteractionType, required=True, data_key="interactionType")
    subject = _text()
    notes = _text()
    contacted_by = _text(data_key="contactedBy")
    interaction_date = _date(data_key="interactionDate")
    follow_up_date = _date(data_key="followUpDate")
    status = _choice(InteractionStatus, default=InteractionStatus.open.value)


class CampaignSchema(EntitySchema):
    name = _text(True)
    description = _text()
    campaign_type = _text(data_key="campaignType")
    target_segment = _text(data_key="targetSegment")
    start_date = _date(True, data_key="startDate")
    end_date = _date(True, data_key="endDate")
    budget = _amount()
    status = _choice(CampaignStatus, default=CampaignStatus.draft.value)


class LoyaltySchema(EntitySchema):
    customer_id = _ref(True, data_key="customerId")
    points = _amount(default=0)
    tier = _choice(LoyaltyTier, default=LoyaltyTier.bronze.value)
    status = _choice(LoyaltyStatus, default=LoyaltyStatus.active.value)


# --- hr --------------------------------------------------------------------


class EmployeeSchema(EntitySchema):
    employee_code = _text(True, case="upper", data_key="employeeCode")
    name = _text(True)
    designation = _text(True)
    department = _text(True)
    branch = _text()
    email = _email()
    phone = _text()
    date_of_joining = _date(True, data_key="dateOfJoining")
    salary = _amount(True)
    employment_type = _choice(EmploymentType, default=EmploymentType.full_time.value, data_key="employmentType")
    reporting_to = _ref(data_key="reportingTo")
    bank_account = _text(data_key="bankAccount")
    status = _choice(EmployeeStatus, default=EmployeeStatus.active.value)


class AttendanceSchema(EntitySchema):
    employee_id = _ref(True, data_key="employeeId")
    date = _date(True)
    status = _choice(AttendanceStatus, required=True)
    check_in = TimeString(load_default=None, data_key="checkIn")
    check_out = TimeString(load_default=None, data_key="checkOut")
    work_minutes = fields.Int(data_key="workMinutes", dump_only=True)
    notes = _text()


class PayrollSchema(EntitySchema):
    employee_id = _ref(True, data_key="employeeId")
    month = fields.Integer(required=True, validate=Range(min=1, max=12))
    year = fields.Integer(required=True, validate=Range(min=2000, max=2100))
    basic_salary = _amount(True, data_key="basicSalary")
    allowances = _amount(default=0)
    deductions = _amount(default=0)
    net_salary = fields.Int(data_key="netSalary", dump_only=True)
    payment_date = _date(data_key="paymentDate")
    status = _choice(PayrollStatus, default=PayrollStatus.pending.value)


class LeaveApplicationSchema(EntitySchema):
    employee_id = _ref(True, data_key="employeeId")
    leave_type = _choice(LeaveType, required=True, data_key="leaveType")
    start_date = _date(True, data_key="startDate")
    end_date = _date(True, data_key="endDate")
    days_count = fields.Int(data_key="daysCount", dump_only=True)
    reason = _text(True)
    applied_date = _date(data_key="appliedDate")
    approved_date = _date(data_key="approvedDate")
    status = _choice(LeaveStatus, default=LeaveStatus.pending.value)


# --- workspace -------------------------------------------------------------


class NotificationSchema(EntitySchema):
    user_id = _ref(data_key="userId")
    recipient_email = _email(data_key="recipientEmail")
    title = _text(True)
    message = _text(True)
    type = _choice(NotificationType, default=NotificationType.info.value)
    read = fields.Boolean(load_default=False)
    link = _text()


class DocumentSchema(EntitySchema):
    reference_type = _text(True, case="lower", data_key="referenceType")
    reference_id = fields.Integer(required=True, validate=Range(min=1), data_key="referenceId")
    document_name = _text(True, data_key="documentName")
    document_type = _text(True, case="lower", data_key="documentType")
    file_url = _text(True, validate=URL(relative=True), data_key="fileUrl")
    uploaded_by = fields.Int(data_key="uploadedBy", dump_only=True)
    status = _choice(DocumentStatus, default=DocumentStatus.active.value)


class AuditLogSchema(Schema):
    id = fields.Int()
    user_id = fields.Int(data_key="userId")
    action = fields.Str()
    resource_type = fields.Str(data_key="resourceType")
    resource_id = fields.Int(data_key="resourceId")
    old_values = fields.Raw(data_key="oldValues")
    new_values = fields.Raw(data_key="newValues")
    ip_address = fields.Str(data_key="ipAddress")
    user_agent = fields.Str(data_key="userAgent")
    created_at = fields.Int(data_key="createdAt")

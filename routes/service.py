from flask import Blueprint

from lifecycle import Filter, Reference, Resource, enum_filter
from lifecycle.derived import service_quotation_totals
from lifecycle.transitions import JOB_CARD_MACHINE
from models import (
    Appointment,
    AppointmentStatus,
    CustomerProfile,
    Diagnostic,
    Employee,
    JobCard,
    JobCardStatus,
    ServiceQuotation,
    ServiceQuotationStatus,
    SparePart,
    values_of,
)
from routes.crud import register_crud
from schemas import AppointmentSchema, DiagnosticSchema, JobCardSchema, ServiceQuotationSchema

bp = Blueprint("service", __name__, url_prefix="/api")


APPOINTMENTS = Resource(
    name="appointment",
    collection="appointments",
    model=Appointment,
    schema=AppointmentSchema,
    search=("customer", "vehicle", "service_type"),
    filters={
        "status": enum_filter("status", values_of(AppointmentStatus)),
        "customerId": Filter("customer_id", kind="int"),
        "date": Filter("date", kind="date"),
        "serviceType": Filter("service_type"),
    },
    sortable=("created_at", "date", "time"),
    date_column="date",
    references=(Reference("customer_id", CustomerProfile, "CUSTOMER_NOT_FOUND"),),
)

JOB_CARDS = Resource(
    name="job_card",
    collection="job-cards",
    model=JobCard,
    schema=JobCardSchema,
    search=("job_no", "technician", "notes"),
    filters={
        "status": enum_filter("status", values_of(JobCardStatus)),
        "technicianId": Filter("technician_id", kind="int"),
        "appointmentId": Filter("appointment_id", kind="int"),
    },
    sortable=("created_at", "job_no", "status"),
    unique={"uq_job_cards_job_no": "DUPLICATE_JOB_NO"},
    references=(
        Reference("appointment_id", Appointment, "APPOINTMENT_NOT_FOUND"),
        Reference("technician_id", Employee, "TECHNICIAN_NOT_FOUND"),
    ),
    machine=JOB_CARD_MACHINE,
)

DIAGNOSTICS = Resource(
    name="diagnostic",
    collection="diagnostics",
    model=Diagnostic,
    schema=DiagnosticSchema,
    search=("issue_description", "findings"),
    filters={
        "jobCardId": Filter("job_card_id", kind="int"),
        "technicianId": Filter("technician_id", kind="int"),
    },
    references=(
        Reference("job_card_id", JobCard, "JOB_CARD_NOT_FOUND"),
        Reference("technician_id", Employee, "TECHNICIAN_NOT_FOUND"),
    ),
)

SERVICE_QUOTATIONS = Resource(
    name="service_quotation",
    collection="service-quotations",
    model=ServiceQuotation,
    schema=ServiceQuotationSchema,
    search=("quotation_number", "vehicle_registration", "service_type"),
    filters={
        "status": enum_filter("status", values_of(ServiceQuotationStatus)),
        "customerId": Filter("customer_id", kind="int"),
        "jobCardId": Filter("job_card_id", kind="int"),
    },
    sortable=("created_at", "total_amount", "valid_until"),
    unique={"uq_service_quotations_quotation_number": "DUPLICATE_QUOTATION_NUMBER"},
    references=(
        Reference("customer_id", CustomerProfile, "CUSTOMER_NOT_FOUND"),
        Reference("job_card_id", JobCard, "JOB_CARD_NOT_FOUND"),
        Reference("items", SparePart, "SPARE_PART_NOT_FOUND", item_key="spare_part_id"),
    ),
    derive=(service_quotation_totals,),
)


for _resource in (APPOINTMENTS, JOB_CARDS, DIAGNOSTICS, SERVICE_QUOTATIONS):
    register_crud(bp, _resource)

from flask import Blueprint

from lifecycle import Filter, Reference, Resource, enum_filter
from lifecycle.transitions import DELIVERY_MACHINE
from models import (
    Booking,
    BookingStatus,
    CustomerProfile,
    Delivery,
    DeliveryStatus,
    Employee,
    Lead,
    LeadStatus,
    Priority,
    Quotation,
    QuotationStatus,
    TestDrive,
    TestDriveStatus,
    Vehicle,
    VehicleStatus,
    values_of,
)
from routes.crud import register_crud
from schemas import (
    BookingSchema,
    DeliverySchema,
    LeadSchema,
    QuotationSchema,
    TestDriveSchema,
    VehicleSchema,
)

bp = Blueprint("sales", __name__, url_prefix="/api")


VEHICLES = Resource(
    name="vehicle",
    collection="vehicles",
    model=Vehicle,
    schema=VehicleSchema,
    search=("vin", "make", "model"),
    filters={
        "status": enum_filter("status", values_of(VehicleStatus)),
        "category": Filter("category"),
        "make": Filter("make"),
        "year": Filter("year", kind="int"),
    },
    sortable=("created_at", "price", "year", "make", "stock"),
    unique={"uq_vehicles_vin": "DUPLICATE_VIN"},
)

LEADS = Resource(
    name="lead",
    collection="leads",
    model=Lead,
    schema=LeadSchema,
    search=("name", "phone", "email"),
    filters={
        "status": enum_filter("status", values_of(LeadStatus)),
        "priority": enum_filter("priority", values_of(Priority)),
        "source": Filter("source"),
        "assignedTo": Filter("assigned_to", kind="int"),
    },
    sortable=("created_at", "name", "priority", "last_contacted"),
    references=(Reference("assigned_to", Employee, "EMPLOYEE_NOT_FOUND"),),
)

QUOTATIONS = Resource(
    name="quotation",
    collection="quotations",
    model=Quotation,
    schema=QuotationSchema,
    search=("number", "customer", "vehicle"),
    filters={
        "status": enum_filter("status", values_of(QuotationStatus)),
        "leadId": Filter("lead_id", kind="int"),
    },
    sortable=("created_at", "amount", "valid_until"),
    unique={"uq_quotations_number": "DUPLICATE_NUMBER"},
    references=(Reference("lead_id", Lead, "LEAD_NOT_FOUND"),),
)

BOOKINGS = Resource(
    name="booking",
    collection="bookings",
    model=Booking,
    schema=BookingSchema,
    search=("customer", "vehicle"),
    filters={
        "status": enum_filter("status", values_of(BookingStatus)),
        "customerId": Filter("customer_id", kind="int"),
        "quotationId": Filter("quotation_id", kind="int"),
    },
    sortable=("created_at", "booking_date", "booking_amount"),
    date_column="booking_date",
    references=(
        Reference("customer_id", CustomerProfile, "CUSTOMER_NOT_FOUND"),
        Reference("quotation_id", Quotation, "QUOTATION_NOT_FOUND"),
    ),
)

TEST_DRIVES = Resource(
    name="test_drive",
    collection="test-drives",
    model=TestDrive,
    schema=TestDriveSchema,
    search=("customer_name", "customer_phone", "license_number"),
    filters={
        "status": enum_filter("status", values_of(TestDriveStatus)),
        "vehicleId": Filter("vehicle_id", kind="int"),
        "leadId": Filter("lead_id", kind="int"),
        "licenseVerified": Filter("license_verified", kind="bool"),
        "scheduledDate": Filter("scheduled_date", kind="date"),
    },
    sortable=("created_at", "scheduled_date", "rating"),
    date_column="scheduled_date",
    references=(
        Reference("lead_id", Lead, "LEAD_NOT_FOUND"),
        Reference("vehicle_id", Vehicle, "VEHICLE_NOT_FOUND"),
    ),
)

DELIVERIES = Resource(
    name="delivery",
    collection="deliveries",
    model=Delivery,
    schema=DeliverySchema,
    search=("vehicle_vin", "rto_number", "insurance_policy"),
    filters={
        "status": enum_filter("status", values_of(DeliveryStatus)),
        "bookingId": Filter("booking_id", kind="int"),
    },
    sortable=("created_at", "handover_date"),
    unique={"uq_deliveries_booking_id": "DUPLICATE_BOOKING_ID"},
    references=(Reference("booking_id", Booking, "BOOKING_NOT_FOUND"),),
    immutable=("booking_id",),
    machine=DELIVERY_MACHINE,
)


for _resource in (VEHICLES, LEADS, QUOTATIONS, BOOKINGS, TEST_DRIVES, DELIVERIES):
    register_crud(bp, _resource)

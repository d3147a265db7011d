from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required
from sqlalchemy import func

from extensions import db
from lifecycle import Filter, Reference, Resource, enum_filter
from lifecycle.derived import invoice_totals, ledger_summary, loan_terms
from lifecycle.checks import ledger_amounts
from lifecycle.listing import build_query
from lifecycle.transitions import LOAN_MACHINE
from models import (
    Booking,
    CustomerProfile,
    Invoice,
    InvoiceStatus,
    InvoiceType,
    LedgerEntry,
    Loan,
    LoanStatus,
    Payment,
    PaymentMode,
    PaymentStatus,
    values_of,
)
from routes.crud import authorize, register_crud
from schemas import InvoiceSchema, LedgerEntrySchema, LoanSchema, PaymentSchema

bp = Blueprint("finance", __name__, url_prefix="/api")


INVOICES = Resource(
    name="invoice",
    collection="invoices",
    model=Invoice,
    schema=InvoiceSchema,
    search=("invoice_number", "notes"),
    filters={
        "status": enum_filter("status", values_of(InvoiceStatus)),
        "type": enum_filter("type", values_of(InvoiceType)),
        "customerId": Filter("customer_id", kind="int"),
    },
    sortable=("created_at", "invoice_number", "total_amount", "due_date"),
    unique={"uq_invoices_invoice_number": "DUPLICATE_INVOICE_NUMBER"},
    references=(Reference("customer_id", CustomerProfile, "CUSTOMER_NOT_FOUND"),),
    derive=(invoice_totals,),
)

PAYMENTS = Resource(
    name="payment",
    collection="payments",
    model=Payment,
    schema=PaymentSchema,
    search=("transaction_id", "bank_name"),
    filters={
        "status": enum_filter("status", values_of(PaymentStatus)),
        "paymentMode": enum_filter("payment_mode", values_of(PaymentMode)),
        "invoiceId": Filter("invoice_id", kind="int"),
    },
    sortable=("created_at", "payment_date", "amount"),
    date_column="payment_date",
    references=(Reference("invoice_id", Invoice, "INVOICE_NOT_FOUND"),),
)

LOANS = Resource(
    name="loan",
    collection="loans",
    model=Loan,
    schema=LoanSchema,
    search=("bank_name", "remarks"),
    filters={
        "status": enum_filter("status", values_of(LoanStatus)),
        "customerId": Filter("customer_id", kind="int"),
        "bookingId": Filter("booking_id", kind="int"),
    },
    sortable=("created_at", "applied_date", "loan_amount", "emi_amount"),
    date_column="applied_date",
    references=(
        Reference("customer_id", CustomerProfile, "CUSTOMER_NOT_FOUND"),
        Reference("booking_id", Booking, "BOOKING_NOT_FOUND"),
    ),
    machine=LOAN_MACHINE,
    derive=(loan_terms,),
)

LEDGER_ENTRIES = Resource(
    name="ledger_entry",
    collection="ledger-entries",
    model=LedgerEntry,
    schema=LedgerEntrySchema,
    search=("description", "category"),
    filters={
        "accountType": Filter("account_type"),
        "category": Filter("category"),
        "referenceType": Filter("reference_type"),
        "referenceId": Filter("reference_id", kind="int"),
    },
    sortable=("created_at", "entry_date", "debit_amount", "credit_amount"),
    date_column="entry_date",
    checks=(ledger_amounts,),
)


@bp.get("/ledger-entries/summary")
@jwt_required()
def ledger_entries_summary():
    """Credits minus debits over the filtered ledger entries."""
    authorize(LEDGER_ENTRIES.permission, "view")
    query = build_query(
        LedgerEntry,
        request.args,
        search=LEDGER_ENTRIES.search,
        filters=LEDGER_ENTRIES.filters,
        sortable=LEDGER_ENTRIES.sortable,
        date_column=LEDGER_ENTRIES.date_column,
    ).order_by(None)
    subquery = query.subquery()
    debit, credit, entries = db.session.query(
        func.coalesce(func.sum(subquery.c.debit_amount), 0),
        func.coalesce(func.sum(subquery.c.credit_amount), 0),
        func.count(subquery.c.id),
    ).one()
    return jsonify(ledger_summary(debit, credit, entries))


for _resource in (INVOICES, PAYMENTS, LOANS, LEDGER_ENTRIES):
    register_crud(bp, _resource)

from flask import Blueprint

from lifecycle import Filter, Reference, Resource, enum_filter
from lifecycle.checks import date_order
from models import (
    CampaignStatus,
    CustomerInteraction,
    CustomerProfile,
    CustomerStatus,
    InteractionStatus,
    InteractionType,
    LoyaltyPoints,
    LoyaltyStatus,
    LoyaltyTier,
    MarketingCampaign,
    values_of,
)
from routes.crud import register_crud
from schemas import CampaignSchema, CustomerInteractionSchema, CustomerSchema, LoyaltySchema

bp = Blueprint("crm", __name__, url_prefix="/api")


CUSTOMERS = Resource(
    name="customer",
    collection="customers",
    model=CustomerProfile,
    schema=CustomerSchema,
    search=("name", "email", "phone"),
    filters={
        "status": enum_filter("status", values_of(CustomerStatus)),
        "city": Filter("city"),
        "state": Filter("state"),
    },
    sortable=("created_at", "name", "email", "city"),
    unique={"uq_customer_profiles_email": "DUPLICATE_EMAIL"},
)

CUSTOMER_INTERACTIONS = Resource(
    name="customer_interaction",
    collection="customer-interactions",
    model=CustomerInteraction,
    schema=CustomerInteractionSchema,
    search=("subject", "notes", "contacted_by"),
    filters={
        "status": enum_filter("status", values_of(InteractionStatus)),
        "interactionType": enum_filter("interaction_type", values_of(InteractionType)),
        "customerId": Filter("customer_id", kind="int"),
    },
    sortable=("created_at", "interaction_date", "follow_up_date"),
    date_column="interaction_date",
    references=(Reference("customer_id", CustomerProfile, "CUSTOMER_NOT_FOUND"),),
    checks=(date_order("interaction_date", "follow_up_date", "INVALID_FOLLOW_UP_DATE"),),
)

CAMPAIGNS = Resource(
    name="campaign",
    collection="campaigns",
    model=MarketingCampaign,
    schema=CampaignSchema,
    search=("name", "description", "target_segment"),
    filters={
        "status": enum_filter("status", values_of(CampaignStatus)),
        "campaignType": Filter("campaign_type"),
    },
    sortable=("created_at", "name", "start_date", "end_date", "budget"),
    date_column="start_date",
    checks=(date_order("start_date", "end_date"),),
)

LOYALTY_PROGRAMS = Resource(
    name="loyalty",
    collection="loyalty-programs",
    model=LoyaltyPoints,
    schema=LoyaltySchema,
    filters={
        "status": enum_filter("status", values_of(LoyaltyStatus)),
        "tier": enum_filter("tier", values_of(LoyaltyTier)),
        "customerId": Filter("customer_id", kind="int"),
    },
    sortable=("created_at", "points"),
    unique={"uq_loyalty_points_customer_id": "DUPLICATE_CUSTOMER"},
    references=(Reference("customer_id", CustomerProfile, "CUSTOMER_NOT_FOUND"),),
)


for _resource in (CUSTOMERS, CUSTOMER_INTERACTIONS, CAMPAIGNS, LOYALTY_PROGRAMS):
    register_crud(bp, _resource)

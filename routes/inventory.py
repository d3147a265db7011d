from flask import Blueprint

from lifecycle import Filter, Reference, Resource, enum_filter
from lifecycle.derived import purchase_order_totals
from models import (
    PurchaseOrder,
    PurchaseOrderStatus,
    SparePart,
    SparePartStatus,
    Vendor,
    VendorStatus,
    values_of,
)
from routes.crud import register_crud
from schemas import PurchaseOrderSchema, SparePartSchema, VendorSchema

bp = Blueprint("inventory", __name__, url_prefix="/api")


def _low_stock(model, value):
    if value:
        return model.quantity <= model.reorder_point
    return model.quantity > model.reorder_point


VENDORS = Resource(
    name="vendor",
    collection="vendors",
    model=Vendor,
    schema=VendorSchema,
    search=("vendor_code", "name", "contact_person", "email"),
    filters={
        "status": enum_filter("status", values_of(VendorStatus)),
        "rating": Filter("rating", kind="int"),
    },
    sortable=("created_at", "name", "vendor_code", "rating"),
    unique={"uq_vendors_vendor_code": "DUPLICATE_VENDOR_CODE"},
)

SPARE_PARTS = Resource(
    name="spare_part",
    collection="spare-parts",
    model=SparePart,
    schema=SparePartSchema,
    search=("part_number", "name", "description"),
    filters={
        "status": enum_filter("status", values_of(SparePartStatus)),
        "category": Filter("category"),
        "vendorId": Filter("vendor_id", kind="int"),
        "lowStock": Filter(kind="bool", expression=_low_stock),
    },
    sortable=("created_at", "name", "part_number", "quantity", "unit_price"),
    unique={"uq_spare_parts_part_number": "DUPLICATE_PART_NUMBER"},
    references=(Reference("vendor_id", Vendor, "VENDOR_NOT_FOUND"),),
)

PURCHASE_ORDERS = Resource(
    name="purchase_order",
    collection="purchase-orders",
    model=PurchaseOrder,
    schema=PurchaseOrderSchema,
    search=("po_number",),
    filters={
        "status": enum_filter("status", values_of(PurchaseOrderStatus)),
        "vendorId": Filter("vendor_id", kind="int"),
    },
    sortable=("created_at", "po_number", "total_amount", "ordered_date", "expected_delivery_date"),
    date_column="ordered_date",
    unique={"uq_purchase_orders_po_number": "DUPLICATE_PO_NUMBER"},
    references=(
        Reference("vendor_id", Vendor, "VENDOR_NOT_FOUND"),
        Reference("items", SparePart, "SPARE_PART_NOT_FOUND", item_key="spare_part_id"),
    ),
    derive=(purchase_order_totals,),
)


for _resource in (VENDORS, SPARE_PARTS, PURCHASE_ORDERS):
    register_crud(bp, _resource)

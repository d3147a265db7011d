"""Cross-area utilities: notifications, documents, QA checkpoints, audit logs."""

from flask import Blueprint

from lifecycle import Filter, Reference, Resource, enum_filter
from lifecycle.checks import notification_recipient
from models import (
    AuditAction,
    AuditLog,
    Document,
    DocumentStatus,
    Notification,
    NotificationType,
    QaCheckpoint,
    User,
    values_of,
)
from routes.crud import register_crud
from schemas import AuditLogSchema, DocumentSchema, NotificationSchema, QaCheckpointSchema

bp = Blueprint("workspace", __name__, url_prefix="/api")


NOTIFICATIONS = Resource(
    name="notification",
    collection="notifications",
    model=Notification,
    schema=NotificationSchema,
    search=("title", "message"),
    filters={
        "type": enum_filter("type", values_of(NotificationType)),
        "read": Filter("read", kind="bool"),
        "userId": Filter("user_id", kind="int"),
        "recipientEmail": Filter("recipient_email"),
    },
    references=(Reference("user_id", User, "USER_NOT_FOUND"),),
    checks=(notification_recipient,),
)

DOCUMENTS = Resource(
    name="document",
    collection="documents",
    model=Document,
    schema=DocumentSchema,
    search=("document_name",),
    filters={
        "status": enum_filter("status", values_of(DocumentStatus)),
        "referenceType": Filter("reference_type"),
        "referenceId": Filter("reference_id", kind="int"),
        "documentType": Filter("document_type"),
    },
    sortable=("created_at", "document_name"),
    owner_field="uploaded_by",
)

QA_CHECKPOINTS = Resource(
    name="qa_checkpoint",
    collection="qa-checkpoints",
    model=QaCheckpoint,
    schema=QaCheckpointSchema,
    search=("checkpoint_name", "description"),
    filters={
        "module": Filter("module"),
        "isMandatory": Filter("is_mandatory", kind="bool"),
    },
    sortable=("created_at", "display_order", "checkpoint_name"),
)

AUDIT_LOGS = Resource(
    name="audit_log",
    collection="audit-logs",
    model=AuditLog,
    schema=AuditLogSchema,
    filters={
        "action": enum_filter("action", values_of(AuditAction)),
        "resourceType": Filter("resource_type"),
        "resourceId": Filter("resource_id", kind="int"),
        "userId": Filter("user_id", kind="int"),
    },
)


for _resource in (NOTIFICATIONS, DOCUMENTS, QA_CHECKPOINTS):
    register_crud(bp, _resource)

register_crud(bp, AUDIT_LOGS, read_only=True)

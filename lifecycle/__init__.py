"""Entity validation and lifecycle helpers shared by every REST collection."""

from .auth import AuthContext, permissions_for
from .errors import (
    ApiError,
    DuplicateValue,
    Forbidden,
    InvalidTransition,
    NotFound,
    ReferenceNotFound,
    ResourceInUse,
    Unauthorized,
    ValidationFailed,
)
from .listing import Filter, Page, enum_filter
from .references import Reference
from .resource import (
    Resource,
    create_entity,
    delete_entity,
    fetch_entity,
    list_entities,
    update_entity,
)
from .transitions import StateMachine

__all__ = [
    "AuthContext",
    "permissions_for",
    "ApiError",
    "DuplicateValue",
    "Forbidden",
    "InvalidTransition",
    "NotFound",
    "ReferenceNotFound",
    "ResourceInUse",
    "Unauthorized",
    "ValidationFailed",
    "Filter",
    "Page",
    "enum_filter",
    "Reference",
    "Resource",
    "create_entity",
    "delete_entity",
    "fetch_entity",
    "list_entities",
    "update_entity",
    "StateMachine",
]

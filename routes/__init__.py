from . import (
    auth,
    crm,
    finance,
    hr,
    inventory,
    sales,
    service,
    workspace,
)

__all__ = [
    "auth",
    "crm",
    "finance",
    "hr",
    "inventory",
    "sales",
    "service",
    "workspace",
]

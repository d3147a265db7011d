from __future__ import annotations

from typing import Any, Optional

from extensions import db
from models import AuditAction, AuditLog

from .auth import AuthContext


def record(
    auth: AuthContext,
    action: AuditAction,
    resource_type: str,
    resource_id: Optional[int],
    *,
    old_values: Optional[dict[str, Any]] = None,
    new_values: Optional[dict[str, Any]] = None,
    timestamp: int,
) -> AuditLog:
    """Stage an audit row in the current session; it commits with the write."""

    entry = AuditLog(
        user_id=auth.user_id,
        action=action.value,
        resource_type=resource_type,
        resource_id=resource_id,
        old_values=old_values,
        new_values=new_values,
        ip_address=auth.ip_address,
        user_agent=(auth.user_agent or None) and auth.user_agent[:255],
        created_at=timestamp,
    )
    db.session.add(entry)
    return entry

from flask import g
from metrifi.extensions import db
from metrifi.models.audit_log import AuditLog
from typing import Optional

def log_action(
    *,
    action: str,
    entity_type: str,
    entity_id: Optional[str],
    payload: dict | None = None
):
    """Stage an audit row in the current session; the caller commits."""
    principal = getattr(g, "current_principal", None)

    log = AuditLog()
    log.actor_id = principal.user_id if principal else None
    log.action = action
    log.entity_type = entity_type
    log.entity_id = entity_id
    log.payload = payload or {}

    db.session.add(log)

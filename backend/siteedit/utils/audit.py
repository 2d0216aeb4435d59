from flask import g
from siteedit.extensions import db
from siteedit.models.audit_log import AuditLog
from typing import Optional

def log_action(
    *,
    action: str,
    entity_type: str,
    entity_id: Optional[str],
    payload: dict | None = None
):
    if not hasattr(g, "current_site") or not hasattr(g, "access"):
        return  # Skip logging if site or requester context is missing
    log = AuditLog()

    log.site_id = g.current_site.id
    log.actor_type = g.access.access_type
    log.actor_id = g.access.actor_id
    log.action = action
    log.entity_type = entity_type
    log.entity_id = entity_id
    log.payload = payload or {}

    db.session.add(log)

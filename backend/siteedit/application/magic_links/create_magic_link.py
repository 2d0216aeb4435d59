from datetime import timedelta
from typing import Any, Dict, Optional, Tuple
from flask import current_app
from siteedit.extensions import db
from siteedit.domain.capabilities import Capabilities
from siteedit.models.magic_link import MagicLink
from siteedit.models.site import Site
from siteedit.utils.audit import log_action
from siteedit.utils.timestamps import utc_now
from siteedit.utils.tokens import TOKEN_PREFIX_LENGTH, generate_token, hash_token
from siteedit.utils.transaction import transactional


def default_capabilities() -> Capabilities:
    return Capabilities(
        max_edits_per_day=current_app.config.get("MAGIC_LINK_DEFAULT_MAX_EDITS_PER_DAY", 50)
    )


def create_magic_link(
    *,
    site: Site,
    created_by: Optional[str],
    name: str,
    expires_in_days: Optional[int] = None,
    permissions: Optional[Dict[str, Any]] = None,
    now=None,
) -> Tuple[MagicLink, str]:
    """
    Create a magic link and return it with its raw token.

    The raw token is not stored and cannot be recovered later; only its
    hash is persisted.
    """
    token = generate_token()
    now = now or utc_now()

    link = MagicLink()
    link.site_id = site.id
    link.token_hash = hash_token(token)
    link.token_prefix = token[:TOKEN_PREFIX_LENGTH]
    link.name = name
    link.created_by = created_by
    link.created_at = now
    link.expires_at = now + timedelta(days=expires_in_days) if expires_in_days else None
    link.is_active = True
    link.permissions = default_capabilities().overlay(permissions or {}).to_permissions()
    link.usage_count = 0

    with transactional():
        db.session.add(link)
        db.session.flush()

        log_action(
            action="magic_link.create",
            entity_type="magic_link",
            entity_id=link.id,
            payload={
                "name": link.name,
                "expires_at": link.expires_at.isoformat() if link.expires_at else None,
                "permissions": link.permissions,
            },
        )

    return link, token


def build_magic_link_url(site_id: str, token: str, base_url: Optional[str] = None) -> str:
    base = base_url or current_app.config.get("MAGIC_LINK_BASE_URL", "http://localhost:3000")
    return f"{base.rstrip('/')}/edit/{site_id}/{token}"

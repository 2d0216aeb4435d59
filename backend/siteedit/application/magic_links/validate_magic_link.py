from typing import Optional
from siteedit.errors import Unauthorized
from siteedit.models.magic_link import MagicLink
from siteedit.utils.tokens import hash_token


def validate_magic_link(
    *,
    site_id: str,
    token: Optional[str],
    now=None,
) -> MagicLink:
    """
    Resolve a bearer token to an active, unexpired link on this site.

    Expiry is checked here, at use time; expired links are left untouched.
    """
    if not token:
        raise Unauthorized("Invalid or expired link", reason="missing")

    link = MagicLink.query.filter_by(
        site_id=site_id,
        token_hash=hash_token(token),
        is_active=True,
    ).first()

    if not link:
        raise Unauthorized("Invalid or expired link", reason="invalid")

    if link.is_expired(now):
        raise Unauthorized("This link has expired", reason="expired")

    return link

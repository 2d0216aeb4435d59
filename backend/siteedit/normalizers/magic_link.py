from typing import Any, Dict, Optional


def normalize_magic_link(link, *, url: Optional[str] = None, token: Optional[str] = None) -> Dict[str, Any]:
    """
    Serialize a magic link for its owner.

    The raw `token` and full `url` are only known (and only included) in
    the response to the request that created the link.
    """
    data = {
        "id": link.id,
        "site_id": link.site_id,
        "name": link.name,
        "token_prefix": link.token_prefix,
        "created_by": link.created_by,
        "created_at": link.created_at.isoformat() if link.created_at else None,
        "expires_at": link.expires_at.isoformat() if link.expires_at else None,
        "is_active": link.is_active,
        "permissions": link.permissions,
        "usage_count": link.usage_count,
        "last_used_at": link.last_used_at.isoformat() if link.last_used_at else None,
    }

    if token is not None:
        data["token"] = token
    if url is not None:
        data["url"] = url

    return data

from flask import request
from dateutil.parser import parse
from siteedit.errors import StaleApply, ValidationFailed
from siteedit.utils.timestamps import normalize_ts


def enforce_page_version(page, expected_version):
    """
    Refuse to write over a page whose version has moved past the one the
    caller read. `expected_version=None` skips the check.
    """
    if expected_version is None:
        return

    current = page.version or 1
    if current != expected_version:
        raise StaleApply(expected_version=expected_version, current_version=current)


def enforce_unmodified_since(page):
    """
    Enforces optimistic locking using the If-Unmodified-Since header.
    Raises StaleApply if the page has been modified since.
    """
    client_ts = request.headers.get("If-Unmodified-Since")
    if not client_ts:
        return  # No optimistic lock requested

    try:
        client_ts = normalize_ts(parse(client_ts))
    except (ValueError, OverflowError) as exc:
        raise ValidationFailed(
            "Invalid If-Unmodified-Since header",
            details=[{"field": "If-Unmodified-Since", "message": str(exc)}],
        ) from exc

    server_ts = normalize_ts(page.updated_at)

    if server_ts is not None and server_ts > client_ts:
        raise StaleApply(expected_version=None, current_version=page.version or 1)

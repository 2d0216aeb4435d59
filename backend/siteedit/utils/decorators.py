from functools import wraps
from flask import current_app, g, request
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from siteedit.application.access import resolve_access
from siteedit.errors import Forbidden, NotFound


def _current_site():
    site = getattr(g, "current_site", None)
    if site is None:
        raise NotFound("Site not found")
    return site


def _owner_identity():
    verify_jwt_in_request(optional=True)
    return get_jwt_identity()


def site_access_required(fn):
    """Allow the site owner's session or a valid magic link token."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        site = _current_site()
        token = request.headers.get(current_app.config["MAGIC_LINK_HEADER"])

        g.access = resolve_access(site=site, token=token, user_id=_owner_identity())

        return fn(*args, **kwargs)
    return wrapper


def owner_required(fn):
    """Allow only the site owner's session; a magic link gets 403."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        site = _current_site()
        user_id = _owner_identity()

        if not site.is_owned_by(user_id):
            if user_id is None:
                # Unauthorized unless a valid magic link was presented
                token = request.headers.get(current_app.config["MAGIC_LINK_HEADER"])
                resolve_access(site=site, token=token, user_id=None)
            raise Forbidden("Only the site owner can do this")

        g.access = resolve_access(site=site, token=None, user_id=user_id)
        return fn(*args, **kwargs)
    return wrapper


def magic_link_required(fn):
    """Allow only a valid magic link token (the collaborator landing page)."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        site = _current_site()
        token = request.headers.get(current_app.config["MAGIC_LINK_HEADER"])

        access = resolve_access(site=site, token=token, user_id=None)
        g.access = access
        return fn(*args, **kwargs)
    return wrapper

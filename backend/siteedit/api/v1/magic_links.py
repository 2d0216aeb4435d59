# siteedit/api/v1/magic_links.py
import logging

from flask import g, jsonify

from siteedit.application.magic_links.create_magic_link import build_magic_link_url, create_magic_link
from siteedit.application.magic_links.list_magic_links import list_magic_links
from siteedit.application.magic_links.revoke_magic_link import revoke_magic_link
from siteedit.normalizers.magic_link import normalize_magic_link
from siteedit.utils.decorators import magic_link_required, owner_required
from siteedit.utils.events import log_event
from .schemas import CreateMagicLinkRequest, parse_body
from . import v1_bp


@v1_bp.route("/sites/<site_id>/magic-links", methods=["GET"])
@owner_required
def get_magic_links(site_id):
    links = list_magic_links(site_id=g.current_site.id)
    return jsonify({"links": [normalize_magic_link(link) for link in links]})


@v1_bp.route("/sites/<site_id>/magic-links", methods=["POST"])
@owner_required
def post_magic_link(site_id):
    body = parse_body(CreateMagicLinkRequest)
    site = g.current_site

    link, token = create_magic_link(
        site=site,
        created_by=g.access.user_id,
        name=body.name,
        expires_in_days=body.expires_in_days,
        permissions=body.permissions.to_overrides(),
    )

    log_event(logging.INFO, "magic_link_created", site_id=site.id, link_id=link.id, prefix=link.token_prefix)

    return jsonify(normalize_magic_link(
        link,
        token=token,
        url=build_magic_link_url(site.id, token),
    )), 201


@v1_bp.route("/sites/<site_id>/magic-links/<link_id>", methods=["DELETE"])
@owner_required
def delete_magic_link(site_id, link_id):
    link = revoke_magic_link(
        site=g.current_site,
        link_id=link_id,
        requesting_user_id=g.access.user_id,
    )

    log_event(logging.INFO, "magic_link_revoked", site_id=site_id, link_id=link.id)

    return jsonify(normalize_magic_link(link)), 200


@v1_bp.route("/sites/<site_id>/magic-links/validate", methods=["GET"])
@magic_link_required
def validate_link(site_id):
    link = g.access.magic_link
    site = g.current_site

    return jsonify({
        "valid": True,
        "site": {"id": site.id, "name": site.name},
        "name": link.name,
        "expiresAt": link.expires_at.isoformat() if link.expires_at else None,
        "permissions": link.permissions,
    })

# siteedit/api/v1/edits.py
from flask import current_app, g, jsonify, request

from siteedit.application.edits.apply_edit import apply_edit
from siteedit.application.edits.list_edits import list_edits
from siteedit.application.edits.propose_edit import propose_edit
from siteedit.application.edits.reject_edit import reject_edit
from siteedit.domain.lifecycle.edit import EDIT_STATUSES
from siteedit.errors import ValidationFailed
from siteedit.normalizers.edit import normalize_edit
from siteedit.normalizers.pagination import normalize_pagination
from siteedit.services.interpreter import get_interpreter
from siteedit.utils.decorators import owner_required, site_access_required
from .schemas import ApplyRequest, ProposeRequest, RejectRequest, parse_body
from . import v1_bp


# ------------------------
# Propose
# ------------------------

@v1_bp.route("/sites/<site_id>/edit-natural", methods=["POST"])
@site_access_required
def propose_natural_edit(site_id):
    body = parse_body(ProposeRequest)

    max_length = current_app.config["EDIT_REQUEST_MAX_LENGTH"]
    if len(body.request) > max_length:
        raise ValidationFailed(
            "Request too long",
            details=[{"field": "request", "message": f"at most {max_length} characters"}],
        )

    result = propose_edit(
        site=g.current_site,
        access=g.access,
        request_text=body.request,
        interpreter=get_interpreter(),
        page_id=body.page_id,
    )
    return jsonify(result), 200


# ------------------------
# Apply
# ------------------------

@v1_bp.route("/sites/<site_id>/edit-natural", methods=["PUT"])
@site_access_required
def apply_natural_edit(site_id):
    body = parse_body(ApplyRequest)

    result = apply_edit(
        site=g.current_site,
        access=g.access,
        page_id=body.page_id,
        operations=body.operations,
        edit_id=body.edit_id,
        expected_version=body.expected_version,
    )
    return jsonify(result), 200


# ------------------------
# History
# ------------------------

@v1_bp.route("/sites/<site_id>/edit-natural", methods=["GET"])
@site_access_required
def edit_history(site_id):
    config = current_app.config

    limit = request.args.get("limit", config["HISTORY_DEFAULT_LIMIT"], type=int)
    offset = request.args.get("offset", 0, type=int)
    status = request.args.get("status") or None

    limit = max(1, min(limit, config["HISTORY_MAX_LIMIT"]))
    offset = max(0, offset)

    if status is not None and status not in EDIT_STATUSES:
        raise ValidationFailed(
            "Invalid status filter",
            details=[{"field": "status", "message": f"must be one of {', '.join(EDIT_STATUSES)}"}],
        )

    items, total = list_edits(
        site_id=g.current_site.id,
        access=g.access,
        status=status,
        limit=limit,
        offset=offset,
    )

    return jsonify(normalize_pagination(
        items,
        lambda record: normalize_edit(record, include_content=False),
        total=total,
        limit=limit,
        offset=offset,
        key="edits",
    ))


# ------------------------
# Reject
# ------------------------

@v1_bp.route("/sites/<site_id>/edits/<edit_id>/reject", methods=["POST"])
@owner_required
def reject_pending_edit(site_id, edit_id):
    body = parse_body(RejectRequest)

    record = reject_edit(
        site=g.current_site,
        access=g.access,
        edit_id=edit_id,
        reason=body.reason,
    )
    return jsonify(normalize_edit(record, include_content=False)), 200

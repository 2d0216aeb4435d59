# siteedit/application/edits/apply_edit.py
import logging
from typing import Any, Dict, List, Optional

from siteedit.extensions import db
from siteedit.domain.applier import apply_operations
from siteedit.domain.lifecycle.edit import APPLIED, EXPIRED, assert_edit_transition
from siteedit.domain.operations import Operation, dump_operations
from siteedit.domain.policy import PROPOSAL_REQUIRED_REASON, authorize
from siteedit.domain.validation import effective_risk
from siteedit.errors import Forbidden, NotFound, PermissionDenied, StaleApply, ValidationFailed
from siteedit.models.edit_record import EditRecord
from siteedit.models.site import Site
from siteedit.utils.audit import log_action
from siteedit.utils.events import log_event
from siteedit.utils.optimistic_lock import enforce_page_version, enforce_unmodified_since
from siteedit.utils.timestamps import utc_now
from siteedit.utils.transaction import transactional
from siteedit.utils.versioning import next_version, snapshot_page
from ..access import Access
from ..magic_links.record_usage import record_magic_link_usage
from .pages import load_page
from .quota import count_applied_edits


def _load_pending_record(*, site: Site, edit_id: str, page_id: str, access: Access) -> EditRecord:
    record = EditRecord.query.filter_by(id=edit_id, site_id=site.id).first()
    if not record:
        raise NotFound("Edit not found")

    if record.page_id != page_id:
        raise ValidationFailed(
            "Edit belongs to a different page",
            details=[{"field": "editId", "message": "does not match pageId"}],
        )

    if access.magic_link is not None and record.magic_link_id != access.magic_link.id:
        raise Forbidden("This link cannot apply edits it did not propose")

    assert_edit_transition(from_status=record.status, to_status=APPLIED)
    return record


def _expire(record: EditRecord) -> None:
    with transactional():
        assert_edit_transition(from_status=record.status, to_status=EXPIRED)
        record.status = EXPIRED


def apply_edit(
    *,
    site: Site,
    access: Access,
    page_id: str,
    operations: List[Operation],
    edit_id: Optional[str] = None,
    expected_version: Optional[int] = None,
    now=None,
) -> Dict[str, Any]:
    """
    Apply operations to the page's current stored content.

    Responsibilities:
    - stale-version refusal (expiring the pending record when its base
      version is no longer current)
    - approval-gated links may only apply edits they proposed first
    - capability gate, re-run against the operations actually submitted
    - atomic commit of content, version bump, snapshot, record and usage
    - audit logging
    """
    now = now or utc_now()

    page = load_page(site_id=site.id, page_id=page_id, for_update=True)

    record = None
    if edit_id:
        record = _load_pending_record(site=site, edit_id=edit_id, page_id=page.id, access=access)
    elif access.magic_link is not None and access.capabilities.requires_approval:
        # Risk is only known from a recorded proposal
        log_event(logging.INFO, "apply_denied", page_id=page.id, reasons=1)
        raise PermissionDenied([PROPOSAL_REQUIRED_REASON], requiresApproval=True)

    if record is not None:
        try:
            enforce_page_version(page, record.base_version)
        except StaleApply:
            _expire(record)
            log_event(logging.INFO, "edit_expired", edit_id=record.id, page_id=page.id)
            raise

    # Client preconditions only refuse this request; the proposal stays pending
    enforce_page_version(page, expected_version)
    enforce_unmodified_since(page)

    declared = record.risk_level if record is not None else "low"
    risk_level = effective_risk(declared, operations)

    document = page.document()

    edits_in_window = 0
    if access.magic_link is not None:
        edits_in_window = count_applied_edits(magic_link_id=access.magic_link.id, now=now)

    decision = authorize(
        access.capabilities,
        operations,
        risk_level,
        page_id=page.id,
        edits_in_window=edits_in_window,
        document=document,
    )
    if not decision.allowed:
        log_event(logging.INFO, "apply_denied", page_id=page.id, reasons=len(decision.reasons))
        raise PermissionDenied(decision.reasons)

    updated = apply_operations(document, operations)

    with transactional():
        previous_version = page.version or 1

        db.session.add(snapshot_page(
            page,
            status="nl_edit",
            change_summary=f"Natural language edit via {access.access_type}",
            created_by=access.actor_id,
        ))

        page.content = updated.to_dict()
        page.version = next_version(page)

        if record is None:
            # Direct applies are recorded too so they count toward quotas
            record = EditRecord()
            record.site_id = site.id
            record.page_id = page.id
            record.magic_link_id = access.magic_link.id if access.magic_link else None
            record.request = None
            record.operations = dump_operations(operations)
            record.risk_level = risk_level
            record.access_type = access.access_type
            record.original_content = document.to_dict()
            record.proposed_content = page.content
            record.base_version = previous_version
            db.session.add(record)

        record.status = APPLIED
        record.applied_at = now
        record.applied_version = page.version

        if access.magic_link is not None:
            record_magic_link_usage(access.magic_link, now=now)

        db.session.flush()

        log_action(
            action="page.nl_edit",
            entity_type="page",
            entity_id=page.id,
            payload={
                "edit_id": record.id,
                "from_version": previous_version,
                "to_version": page.version,
                "operations": len(operations),
            },
        )

    log_event(
        logging.INFO,
        "edit_applied",
        page_id=page.id,
        edit_id=record.id,
        version=page.version,
        access=access.access_type,
    )

    return {
        "success": True,
        "pageId": page.id,
        "version": page.version,
        "content": page.content,
        "editId": record.id,
    }

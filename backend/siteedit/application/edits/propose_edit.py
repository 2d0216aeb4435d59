# siteedit/application/edits/propose_edit.py
import logging
from typing import Any, Dict, Optional

from siteedit.extensions import db
from siteedit.domain.applier import apply_operations
from siteedit.domain.diff import summarize
from siteedit.domain.lifecycle.edit import PENDING
from siteedit.domain.operations import dump_operations
from siteedit.domain.policy import authorize, is_risk_veto_only
from siteedit.domain.validation import validate_operations
from siteedit.errors import PermissionDenied, PersistenceError
from siteedit.models.edit_record import EditRecord
from siteedit.models.site import Site
from siteedit.services.interpreter import Interpreter
from siteedit.utils.events import log_event
from siteedit.utils.transaction import transactional
from ..access import Access
from .pages import load_page
from .quota import count_applied_edits


def _record_proposal(*, site, page, access, request_text, proposal, original, preview) -> Optional[str]:
    """Log the proposal as a pending edit. Best-effort: a storage failure is logged, not raised."""
    record = EditRecord()
    record.site_id = site.id
    record.page_id = page.id
    record.magic_link_id = access.magic_link.id if access.magic_link else None
    record.request = request_text
    record.interpretation = proposal.interpretation
    record.summary = proposal.summary
    record.operations = dump_operations(proposal.operations)
    record.risk_level = proposal.risk_level
    record.status = PENDING
    record.access_type = access.access_type
    record.original_content = original
    record.proposed_content = preview
    record.base_version = page.version or 1

    try:
        with transactional():
            db.session.add(record)
            db.session.flush()
    except PersistenceError as exc:
        log_event(logging.WARNING, "edit_record_not_saved", page_id=page.id, error=str(exc.__cause__))
        return None

    return record.id


def propose_edit(
    *,
    site: Site,
    access: Access,
    request_text: str,
    interpreter: Interpreter,
    page_id: Optional[str] = None,
    now=None,
) -> Dict[str, Any]:
    """
    Ask the Interpreter for a proposal and return its preview.

    Never changes the page. An understood proposal is screened by the
    capability gate, previewed against the current content and logged as a
    pending edit record; a proposal blocked only by the approval requirement
    is still logged so the owner can apply it, then refused.
    """
    page = load_page(site_id=site.id, page_id=page_id)
    document = page.document()
    original = document.to_dict()

    proposal = interpreter.interpret(
        request_text,
        document,
        site_context={"siteName": site.name, "industry": site.industry},
    )

    result: Dict[str, Any] = {
        "success": True,
        "pageId": page.id,
        "pageTitle": page.title,
        "pageVersion": page.version or 1,
        "response": proposal.to_wire(),
        "original": original,
        "preview": None,
        "validation": {"valid": True, "warnings": []},
        "diffSummary": [],
        "editId": None,
    }

    if not proposal.understood:
        log_event(logging.INFO, "edit_not_understood", page_id=page.id)
        return result

    edits_in_window = 0
    if access.magic_link is not None:
        edits_in_window = count_applied_edits(magic_link_id=access.magic_link.id, now=now)

    decision = authorize(
        access.capabilities,
        proposal.operations,
        proposal.risk_level,
        page_id=page.id,
        edits_in_window=edits_in_window,
        document=document,
    )

    if not decision.allowed and not is_risk_veto_only(decision):
        log_event(logging.INFO, "edit_denied", page_id=page.id, reasons=len(decision.reasons))
        raise PermissionDenied(decision.reasons)

    preview = apply_operations(document, proposal.operations)
    preview_dict = preview.to_dict()

    edit_id = _record_proposal(
        site=site,
        page=page,
        access=access,
        request_text=request_text,
        proposal=proposal,
        original=original,
        preview=preview_dict,
    )

    if not decision.allowed:
        log_event(logging.INFO, "edit_awaiting_approval", page_id=page.id, edit_id=edit_id)
        raise PermissionDenied(decision.reasons, editId=edit_id, requiresApproval=True)

    log_event(
        logging.INFO,
        "edit_proposed",
        page_id=page.id,
        edit_id=edit_id,
        access=access.access_type,
        operations=len(proposal.operations),
        risk=proposal.risk_level,
    )

    result.update({
        "preview": preview_dict,
        "validation": validate_operations(proposal.operations, proposal.risk_level),
        "diffSummary": summarize(document, preview),
        "editId": edit_id,
    })
    return result

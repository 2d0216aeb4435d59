from typing import Optional
from siteedit.domain.lifecycle.edit import REJECTED, assert_edit_transition
from siteedit.errors import Forbidden, NotFound
from siteedit.models.edit_record import EditRecord
from siteedit.models.site import Site
from siteedit.utils.audit import log_action
from siteedit.utils.timestamps import utc_now
from siteedit.utils.transaction import transactional
from ..access import Access


def reject_edit(
    *,
    site: Site,
    access: Access,
    edit_id: str,
    reason: Optional[str] = None,
    now=None,
) -> EditRecord:
    """
    Owner declines a pending edit. The page is not touched.
    """
    if not access.is_owner:
        raise Forbidden("Only the site owner can reject edits")

    record = EditRecord.query.filter_by(id=edit_id, site_id=site.id).first()
    if not record:
        raise NotFound("Edit not found")

    with transactional():
        assert_edit_transition(from_status=record.status, to_status=REJECTED)

        record.status = REJECTED
        record.rejected_at = now or utc_now()
        record.rejected_by = access.user_id
        record.rejection_reason = reason or None

        log_action(
            action="edit.reject",
            entity_type="edit",
            entity_id=record.id,
            payload={"page_id": record.page_id, "reason": record.rejection_reason},
        )

    return record

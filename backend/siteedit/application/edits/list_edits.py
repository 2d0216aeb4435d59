from typing import List, Optional, Tuple
from siteedit.models.edit_record import EditRecord
from ..access import Access


def list_edits(
    *,
    site_id: str,
    access: Access,
    status: Optional[str] = None,
    limit: int = 20,
    offset: int = 0,
) -> Tuple[List[EditRecord], int]:
    """
    Page through a site's edit records, newest first.

    Magic link requesters only see the edits made through their own link.
    """
    query = EditRecord.query.filter(EditRecord.site_id == site_id)

    if access.magic_link is not None:
        query = query.filter(EditRecord.magic_link_id == access.magic_link.id)

    if status:
        query = query.filter(EditRecord.status == status)

    total = query.count()
    items = (
        query.order_by(EditRecord.created_at.desc(), EditRecord.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return items, total

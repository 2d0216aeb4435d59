from datetime import timedelta
from siteedit.extensions import db
from siteedit.domain.lifecycle.edit import APPLIED
from siteedit.models.edit_record import EditRecord
from siteedit.utils.timestamps import utc_now

QUOTA_WINDOW = timedelta(hours=24)


def count_applied_edits(*, magic_link_id: str, now=None, window: timedelta = QUOTA_WINDOW) -> int:
    """Applied edits made through one magic link in the rolling window ending at `now`."""
    since = (now or utc_now()) - window
    return (
        db.session.query(db.func.count(EditRecord.id))
        .filter(
            EditRecord.magic_link_id == magic_link_id,
            EditRecord.status == APPLIED,
            EditRecord.applied_at >= since,
        )
        .scalar()
        or 0
    )

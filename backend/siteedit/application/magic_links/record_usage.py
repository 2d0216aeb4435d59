from siteedit.models.magic_link import MagicLink
from siteedit.utils.timestamps import utc_now


def record_magic_link_usage(link: MagicLink, now=None) -> None:
    """
    Count one applied edit against the link.

    Runs inside the caller's transaction so usage is recorded together with
    the edit it accounts for; the increment is done in SQL.
    """
    link.usage_count = MagicLink.usage_count + 1
    link.last_used_at = now or utc_now()

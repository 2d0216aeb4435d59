from typing import List
from siteedit.models.magic_link import MagicLink


def list_magic_links(*, site_id: str) -> List[MagicLink]:
    return (
        MagicLink.query
        .filter_by(site_id=site_id)
        .order_by(MagicLink.created_at.desc(), MagicLink.id.desc())
        .all()
    )

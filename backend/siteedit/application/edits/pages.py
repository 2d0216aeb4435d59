from typing import Optional
from sqlalchemy import select
from siteedit.extensions import db
from siteedit.errors import NotFound
from siteedit.models.page import Page


def load_page(*, site_id: str, page_id: Optional[str], for_update: bool = False) -> Page:
    """Fetch a page of the site, defaulting to the homepage when no id is given."""
    query = select(Page).where(Page.site_id == site_id)

    if page_id:
        query = query.where(Page.id == page_id)
    else:
        query = query.where(Page.is_homepage.is_(True))

    if for_update:
        query = query.with_for_update()

    page = db.session.execute(query).scalars().first()
    if not page:
        raise NotFound("Page not found")
    return page

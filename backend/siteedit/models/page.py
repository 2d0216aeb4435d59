from siteedit.extensions import db
from siteedit.domain.document import Document
from .base import BaseModel
from .site_mixin import SiteMixin

class Page(BaseModel, SiteMixin):
    __tablename__ = 'pages'

    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), nullable=False, index=True)
    is_homepage = db.Column(db.Boolean, default=False, nullable=False)

    # Content document: {"sections": [{id, componentType, order, props}, ...], ...}
    content = db.Column(db.JSON, nullable=False, default=dict)
    version = db.Column(db.Integer, nullable=False, default=1)

    __table_args__ = (
        db.UniqueConstraint("site_id", "slug", name="uq_page_slug_per_site"),
    )

    def document(self) -> Document:
        return Document.from_dict(self.content)

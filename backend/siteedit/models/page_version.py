from sqlalchemy import event
from siteedit.extensions import db
from .base import BaseModel
from .site_mixin import SiteMixin

class PageVersion(BaseModel, SiteMixin):
    __tablename__ = "page_versions"

    page_id = db.Column(
        db.String(36),
        db.ForeignKey("pages.id"),
        nullable=False
    )

    # Version number the snapshot was taken at (the content it replaced)
    version = db.Column(db.Integer, nullable=False)
    status = db.Column(db.String(20), nullable=False)
    # nl_edit

    snapshot = db.Column(db.JSON, nullable=False)
    change_summary = db.Column(db.String(255), nullable=True)

    created_by = db.Column(db.String(36), nullable=True)

    __table_args__ = (
        db.UniqueConstraint("page_id", "version", name="uq_page_version"),
        db.Index("idx_page_version_page", "page_id"),
    )

@event.listens_for(PageVersion, 'before_update')
def prevent_version_mutation(mapper, connection, target):
    raise RuntimeError("Page versions are immutable")

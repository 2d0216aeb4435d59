# siteedit/models/edit_record.py
from sqlalchemy import event, inspect
from siteedit.extensions import db
from siteedit.domain.lifecycle.edit import PENDING, is_terminal
from .base import BaseModel
from .site_mixin import SiteMixin


class EditRecord(BaseModel, SiteMixin):
    __tablename__ = "site_edits"

    __table_args__ = (
        db.Index("idx_site_edits_site_created", "site_id", "created_at"),
        db.Index("idx_site_edits_link_status", "magic_link_id", "status", "applied_at"),
    )

    page_id = db.Column(db.String(36), db.ForeignKey("pages.id"), nullable=False, index=True)
    magic_link_id = db.Column(db.String(36), db.ForeignKey("magic_links.id"), nullable=True, index=True)

    request = db.Column(db.Text, nullable=True)  # NULL for direct applies
    interpretation = db.Column(db.Text, nullable=True)
    summary = db.Column(db.Text, nullable=True)
    operations = db.Column(db.JSON, nullable=False, default=list)
    risk_level = db.Column(db.String(10), nullable=False, default="low")

    status = db.Column(db.String(20), nullable=False, default=PENDING, index=True)
    # pending | applied | rejected | expired

    access_type = db.Column(db.String(20), nullable=False)  # owner | magic_link

    original_content = db.Column(db.JSON, nullable=True)
    proposed_content = db.Column(db.JSON, nullable=True)
    base_version = db.Column(db.Integer, nullable=False)

    applied_at = db.Column(db.DateTime(timezone=True), nullable=True)
    applied_version = db.Column(db.Integer, nullable=True)
    rejected_at = db.Column(db.DateTime(timezone=True), nullable=True)
    rejected_by = db.Column(db.String(36), nullable=True)
    rejection_reason = db.Column(db.Text, nullable=True)

    def to_dict(self):
        return {
            "id": self.id,
            "site_id": self.site_id,
            "page_id": self.page_id,
            "magic_link_id": self.magic_link_id,
            "request": self.request,
            "interpretation": self.interpretation,
            "summary": self.summary,
            "operations": self.operations,
            "risk_level": self.risk_level,
            "status": self.status,
            "access_type": self.access_type,
            "original_content": self.original_content,
            "proposed_content": self.proposed_content,
            "base_version": self.base_version,
            "applied_at": self.applied_at.isoformat() if self.applied_at else None,
            "applied_version": self.applied_version,
            "rejected_at": self.rejected_at.isoformat() if self.rejected_at else None,
            "rejected_by": self.rejected_by,
            "rejection_reason": self.rejection_reason,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@event.listens_for(EditRecord, 'before_update')
def prevent_terminal_mutation(mapper, connection, target):
    history = inspect(target).attrs.status.history
    previous = history.deleted[0] if history.deleted else target.status
    if is_terminal(previous):
        raise RuntimeError("Edit records are immutable once terminal")


@event.listens_for(EditRecord, 'before_delete')
def prevent_edit_deletion(mapper, connection, target):
    raise RuntimeError("Edit records cannot be deleted")

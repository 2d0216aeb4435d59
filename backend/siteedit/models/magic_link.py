from siteedit.extensions import db
from siteedit.domain.capabilities import Capabilities
from siteedit.utils.timestamps import normalize_ts, utc_now
from .base import BaseModel
from .site_mixin import SiteMixin

class MagicLink(BaseModel, SiteMixin):
    __tablename__ = "magic_links"

    # Only the sha256 of the bearer token is stored; the raw token is
    # returned once, at creation.
    token_hash = db.Column(db.String(64), unique=True, nullable=False, index=True)
    token_prefix = db.Column(db.String(8), nullable=False)

    name = db.Column(db.String(100), nullable=False)
    created_by = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=True)

    expires_at = db.Column(db.DateTime(timezone=True), nullable=True)  # NULL = never
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    permissions = db.Column(db.JSON, nullable=False, default=dict)

    usage_count = db.Column(db.Integer, nullable=False, default=0)
    last_used_at = db.Column(db.DateTime(timezone=True), nullable=True)

    __table_args__ = (
        db.Index("idx_magic_links_active", "site_id", "is_active"),
    )

    @property
    def capabilities(self) -> Capabilities:
        return Capabilities.from_permissions(self.permissions)

    def is_expired(self, now=None) -> bool:
        if self.expires_at is None:
            return False
        return normalize_ts(self.expires_at) < normalize_ts(now or utc_now())

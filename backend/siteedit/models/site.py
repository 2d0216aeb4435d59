from siteedit.extensions import db
from .base import BaseModel

class Site(BaseModel):
    __tablename__ = "sites"

    name = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=False, index=True)
    is_active = db.Column(db.Boolean, default=True)

    owner_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)

    # industry, branding and other free-form site settings
    settings = db.Column(db.JSON, default=dict)

    owner = db.relationship("User", foreign_keys=[owner_id])

    def is_owned_by(self, user_id) -> bool:
        return user_id is not None and self.owner_id == str(user_id)

    @property
    def industry(self):
        return (self.settings or {}).get("industry")

from datetime import datetime, timezone
from slugregistry.extensions import db
from .base import BaseModel

class Site(BaseModel):
    __tablename__ = "sites"

    # Slugs reference sites by integer id, 0 meaning "no site"
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)

    name = db.Column(db.String(255), nullable=False)
    main_domain = db.Column(db.String(255), nullable=False, index=True)
    domains = db.Column(db.JSON, default=list)
    is_active = db.Column(db.Boolean, default=True)

    created_at = db.Column(
        db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at = db.Column(
        db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc)
    )

from slugregistry.extensions import db
from .base import BaseModel
from .site_mixin import SiteMixin

class UrlSlug(BaseModel, SiteMixin):
    __tablename__ = "object_url_slugs"

    # Integer ids keep insertion order, which slug equality depends on
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)

    object_id = db.Column(db.Integer, nullable=False)
    class_id = db.Column(db.String(50), nullable=False)
    fieldname = db.Column(db.String(70), nullable=False)
    slug = db.Column(db.String(765), nullable=False)

    # Owner address inside the object (see domain.owner_context)
    ownertype = db.Column(db.String(50), nullable=False, default="object")
    ownername = db.Column(db.String(255), nullable=False, default="")
    position = db.Column(db.String(70), nullable=False, default="")

    __table_args__ = (
        db.UniqueConstraint("slug", "site_id", name="uq_object_url_slug_per_site"),
        db.Index("idx_object_url_slug_owner", "object_id", "fieldname"),
    )


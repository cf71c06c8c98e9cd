from slugregistry.extensions import db
from .base import BaseModel
from .site_mixin import SiteMixin

class Document(BaseModel, SiteMixin):
    __tablename__ = "documents"

    path = db.Column(db.String(765), nullable=False, index=True)
    type = db.Column(db.String(50), default="page")  # page, link, folder

    __table_args__ = (
        db.UniqueConstraint("site_id", "path", name="uq_document_path_per_site"),
    )

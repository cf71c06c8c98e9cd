from slugregistry.extensions import db
from .base import BaseModel
from .soft_delete_mixin import SoftDeleteMixin

class DataObject(BaseModel, SoftDeleteMixin):
    __tablename__ = "objects"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    class_id = db.Column(db.String(50), nullable=False, index=True)
    key = db.Column(db.String(255), nullable=False)

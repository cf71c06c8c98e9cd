from slugregistry.extensions import db

class SiteMixin:
    # 0 is the default scope, so there is no foreign key to sites
    site_id = db.Column(
        db.Integer,
        nullable=False,
        default=0,
        server_default="0",
        index=True
    )

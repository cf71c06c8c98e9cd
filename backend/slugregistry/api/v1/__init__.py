from flask import Blueprint
from slugregistry.middleware.site_middleware import site_middleware

# Create the versioned blueprint
v1_bp = Blueprint("v1", __name__)
site_middleware(v1_bp)

# Import route modules so they register with v1_bp
from . import health
from . import slugs

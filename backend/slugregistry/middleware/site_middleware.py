from flask import request, g, jsonify
from slugregistry.models.site import Site

def site_middleware(bp):
    @bp.before_request
    def load_site():
        g.current_site = None

        site_id = request.headers.get('X-Site-ID')
        if not site_id:
            return None  # default scope (site 0)

        try:
            site_id = int(site_id)
        except ValueError:
            return jsonify({"error": "X-Site-ID header must be an integer"}), 400

        site = Site.query.filter_by(id=site_id, is_active=True).first()
        if not site:
            return jsonify({"error": "Invalid site"}), 404

        # Attach site to global context
        g.current_site = site

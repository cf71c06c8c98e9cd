from flask import current_app, jsonify
from slugregistry.domain.invariants.exceptions import (
    InvariantViolation,
    SlugAlreadyOwned,
    SlugPersistenceError,
)

def register_error_handlers(app):
    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        body = {
            "error": type(error).__name__,
            "message": str(error)
        }
        if getattr(error, "path", None) is not None:
            body["slug"] = error.path
            body["site_id"] = error.site_id
        response = jsonify(body)
        response.status_code = 400
        return response

    @app.errorhandler(SlugAlreadyOwned)
    def handle_slug_already_owned(error):
        response = jsonify({
            "error": "SlugAlreadyOwned",
            "message": str(error),
            "slug": error.path,
            "site_id": error.site_id,
            "object_id": error.object_id,
            "fieldname": error.fieldname,
        })
        response.status_code = 409
        return response

    @app.errorhandler(SlugPersistenceError)
    def handle_persistence_error(error):
        current_app.logger.error(f"Slug persistence failure: {error.__cause__ or error}")
        response = jsonify({
            "error": "SlugPersistenceError",
            "message": str(error)
        })
        response.status_code = 500
        return response

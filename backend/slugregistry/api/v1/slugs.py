# slugregistry/api/v1/slugs.py
from flask import g, request, jsonify, Response
from flask_jwt_extended import jwt_required
from slugregistry.application.objects.delete_object import delete_object
from slugregistry.application.slugs.registry import get_registry
from slugregistry.domain.url_slug import from_csv, slug_from_dict, to_csv
from slugregistry.normalizers.owner_context import parse_owner_context
from slugregistry.normalizers.url_slug import normalize_slugs
from slugregistry.utils.decorators import roles_required
from . import v1_bp # import the versioned blueprint


# ------------------------
# Object slugs
# ------------------------

@v1_bp.route("/objects/<int:object_id>/slugs/<fieldname>", methods=["GET"])
def get_object_slugs(object_id, fieldname):
    context = parse_owner_context(object_id, request.args)
    slugs = get_registry().load(context, fieldname)

    if request.args.get("format") == "csv":
        return Response(to_csv(slugs), mimetype="text/csv")

    return jsonify({
        "object_id": object_id,
        "fieldname": fieldname,
        "slugs": normalize_slugs(slugs),
    })


@v1_bp.route("/objects/<int:object_id>/slugs/<fieldname>", methods=["PUT"])
@jwt_required()
@roles_required("admin")
def put_object_slugs(object_id, fieldname):
    data = request.get_json(silent=True) or {}

    class_id = data.get("class_id")
    if not class_id:
        return jsonify({"error": "class_id is required"}), 400

    try:
        if "csv" in data:
            slugs = from_csv(data["csv"])
        else:
            slugs = [slug_from_dict(item) for item in data.get("slugs") or []]
    except (TypeError, ValueError) as exc:
        return jsonify({"error": str(exc)}), 400

    context = parse_owner_context(object_id, request.args)

    try:
        saved = get_registry().save(context, fieldname, slugs, class_id=class_id)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    return jsonify({
        "object_id": object_id,
        "fieldname": fieldname,
        "slugs": normalize_slugs(saved),
    }), 200


@v1_bp.route("/objects/<int:object_id>/slugs", methods=["DELETE"])
@jwt_required()
@roles_required("admin")
def delete_object_slugs(object_id):
    deleted = get_registry().delete_all_for_record(object_id)
    return jsonify({"deleted": deleted}), 200


@v1_bp.route("/objects/<int:object_id>", methods=["DELETE"])
@jwt_required()
@roles_required("admin")
def delete_object_route(object_id):
    try:
        deleted = delete_object(object_id=object_id, hard=request.args.get("hard") == "1")
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 404

    return jsonify({"message": "Object deleted", "slugs_deleted": deleted}), 200


# ------------------------
# Resolution
# ------------------------

@v1_bp.route("/slugs/resolve", methods=["GET"])
def resolve_slug():
    path = request.args.get("path")
    if not path:
        return jsonify({"error": "path is required"}), 400

    site = g.current_site
    slug = get_registry().resolve_slug(path, site.id if site else 0)

    if slug is None:
        return jsonify({"error": "Slug not found"}), 404

    return jsonify(normalize_slugs([slug])[0])

# slugregistry/normalizers/owner_context.py
from typing import Any, Mapping

from werkzeug.exceptions import BadRequest

from slugregistry.domain.owner_context import (
    OWNER_FIELDCOLLECTION,
    OWNER_LOCALIZEDFIELD,
    OWNER_OBJECT,
    OWNER_OBJECTBRICK,
    CollectionItem,
    Localized,
    OwnerContext,
    PlainRecord,
    SubBlockVariant,
)


def _require(args: Mapping[str, Any], name: str) -> str:
    value = args.get(name)
    if value in (None, ""):
        raise BadRequest(f"Missing '{name}' for this owner context")
    return str(value)


def _index(args: Mapping[str, Any]) -> int:
    try:
        return int(_require(args, "index"))
    except ValueError as exc:
        raise BadRequest("'index' must be an integer") from exc


def _container(record_id: int, args: Mapping[str, Any]):
    container = args.get("container")
    if not container:
        return None
    if container == OWNER_FIELDCOLLECTION:
        return CollectionItem(record_id, _require(args, "collection"), _index(args))
    if container == OWNER_OBJECTBRICK:
        return SubBlockVariant(record_id, _require(args, "brick"), _require(args, "variant"))
    raise BadRequest(f"Invalid container: {container}")


def parse_owner_context(record_id: int, args: Mapping[str, Any]) -> OwnerContext:
    """
    Build an owner context from request arguments.

    context=object (default) | localizedfield | fieldcollection | objectbrick
    """
    kind = args.get("context") or OWNER_OBJECT

    if kind == OWNER_OBJECT:
        return PlainRecord(record_id)

    if kind == OWNER_FIELDCOLLECTION:
        return CollectionItem(record_id, _require(args, "collection"), _index(args))

    if kind == OWNER_OBJECTBRICK:
        return SubBlockVariant(record_id, _require(args, "brick"), _require(args, "variant"))

    if kind == OWNER_LOCALIZEDFIELD:
        return Localized(record_id, _require(args, "locale"), _container(record_id, args))

    raise BadRequest(f"Invalid owner context: {kind}")

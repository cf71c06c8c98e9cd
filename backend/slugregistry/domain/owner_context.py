# slugregistry/domain/owner_context.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, NamedTuple, Optional, Type, Union

OWNER_OBJECT = "object"
OWNER_FIELDCOLLECTION = "fieldcollection"
OWNER_OBJECTBRICK = "objectbrick"
OWNER_LOCALIZEDFIELD = "localizedfield"


@dataclass(frozen=True)
class PlainRecord:
    record_id: int


@dataclass(frozen=True)
class CollectionItem:
    record_id: int
    collection_field: str
    index: int


@dataclass(frozen=True)
class SubBlockVariant:
    record_id: int
    block_field: str
    variant_type: str


@dataclass(frozen=True)
class Localized:
    """
    A translation of a field. `container` is set when the localized fields
    live inside a collection item or a sub-block variant.
    """
    record_id: int
    locale: str
    container: Optional[Union[CollectionItem, SubBlockVariant]] = None


OwnerContext = Union[PlainRecord, Localized, CollectionItem, SubBlockVariant]


class OwnerAddress(NamedTuple):
    ownertype: str
    ownername: Optional[str] = None
    position: Optional[str] = None


# -------------------------------------------------
# Address resolution (one resolver per context type)
# -------------------------------------------------

LIKE_ESCAPE = "\\"


def _like_prefix(value: str) -> str:
    for char in (LIKE_ESCAPE, "%", "_"):
        value = value.replace(char, LIKE_ESCAPE + char)
    return value + "%"


def _container_path(container: Union[CollectionItem, SubBlockVariant]) -> str:
    if isinstance(container, CollectionItem):
        return f"/{OWNER_FIELDCOLLECTION}~{container.collection_field}/{container.index}/"
    return f"/{OWNER_OBJECTBRICK}~{container.block_field}/{container.variant_type}/"


def _resolve_plain(ctx: PlainRecord) -> OwnerAddress:
    return OwnerAddress(OWNER_OBJECT)


def _resolve_collection_item(ctx: CollectionItem) -> OwnerAddress:
    return OwnerAddress(OWNER_FIELDCOLLECTION, ctx.collection_field, str(ctx.index))


def _resolve_sub_block(ctx: SubBlockVariant) -> OwnerAddress:
    return OwnerAddress(OWNER_OBJECTBRICK, ctx.block_field, ctx.variant_type)


def _resolve_localized(ctx: Localized) -> OwnerAddress:
    ownername = _container_path(ctx.container) if ctx.container is not None else None
    return OwnerAddress(OWNER_LOCALIZEDFIELD, ownername, ctx.locale)


_RESOLVERS: Dict[Type, Callable[..., OwnerAddress]] = {
    PlainRecord: _resolve_plain,
    CollectionItem: _resolve_collection_item,
    SubBlockVariant: _resolve_sub_block,
    Localized: _resolve_localized,
}


def resolve_address(ctx: OwnerContext) -> OwnerAddress:
    """
    Map an owner context to the (ownertype, ownername, position) triple that
    scopes its slug rows. Pure and deterministic.
    """
    try:
        resolver = _RESOLVERS[type(ctx)]
    except KeyError:
        raise TypeError(f"Unsupported owner context: {type(ctx).__name__}") from None
    return resolver(ctx)


def load_filter(ctx: OwnerContext) -> OwnerAddress:
    """
    Filter used to read slugs back for a context.

    Translations nested in a container are matched by ownername prefix
    (a trailing `%`, with `%` and `_` in field names escaped),
    disambiguated by locale.
    """
    address = resolve_address(ctx)

    if isinstance(ctx, Localized):
        if ctx.container is None:
            return address._replace(ownername="")
        if isinstance(ctx.container, CollectionItem):
            prefix = _container_path(ctx.container)
        else:
            prefix = f"/{OWNER_OBJECTBRICK}~{ctx.container.block_field}/"
        return address._replace(ownername=_like_prefix(prefix))

    return address

# slugregistry/domain/url_slug.py
from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence


@dataclass(frozen=True)
class SlugValue:
    """
    A slug as held by an object field.

    Values are immutable; use `dataclasses.replace` (or `with_action`) to
    derive a changed copy. `action` is only set after a resolve-by-lookup.
    """
    path: str
    site_id: Optional[int] = None
    action: Optional[str] = None

    @property
    def storage_site_id(self) -> int:
        return self.site_id or 0

    def with_action(self, action: Optional[str]) -> "SlugValue":
        return dataclasses.replace(self, action=action)

    @classmethod
    def from_row(cls, row: Any) -> "SlugValue":
        return cls(path=row.slug, site_id=row.site_id)


@dataclass(frozen=True)
class SlugRow:
    """Persistable projection of a slug for one owner address."""
    path: str
    site_id: int
    object_id: int
    class_id: str
    fieldname: str
    ownertype: str
    ownername: Optional[str] = None
    position: Optional[str] = None


def is_empty(slugs: Optional[Iterable[SlugValue]]) -> bool:
    """A slug set is empty when no item carries a path."""
    if not slugs:
        return True
    return not any(slug.path for slug in slugs)


def _comparable(slugs):
    if isinstance(slugs, (list, tuple)):
        return [[slug.path, slug.storage_site_id] for slug in slugs]
    return slugs


def slugs_equal(old: Optional[Sequence[SlugValue]], new: Optional[Sequence[SlugValue]]) -> bool:
    """
    Ordered comparison of (path, site_id) pairs.

    An unset site id compares equal to site 0, which is how it is stored.

    A reordering of the same slugs counts as a change.
    """
    return json.dumps(_comparable(old)) == json.dumps(_comparable(new))


# -------------------------------------------------
# Flat text interchange: "/a:1,/b:"
# -------------------------------------------------

def to_csv(slugs: Optional[Iterable[SlugValue]]) -> str:
    items = []
    for slug in slugs or []:
        site = "" if slug.site_id is None else str(slug.site_id)
        items.append(f"{slug.path}:{site}")
    return ",".join(items)


def from_csv(value: Optional[str]) -> List[SlugValue]:
    if not value:
        return []

    result = []
    for item in value.split(","):
        item = item.strip()
        if ":" in item:
            path, site = item.rsplit(":", 1)
        else:
            path, site = item, ""

        try:
            site_id = int(site) if site != "" else None
        except ValueError as exc:
            raise ValueError(f"Invalid site id in slug import: {item!r}") from exc
        result.append(SlugValue(path=path, site_id=site_id))
    return result


# -------------------------------------------------
# Webservice export / import
# -------------------------------------------------

def slug_to_dict(slug: SlugValue) -> Dict[str, Any]:
    return {
        "slug": slug.path,
        "site_id": slug.site_id,
        "action": slug.action,
    }


def slug_from_dict(data: Dict[str, Any]) -> SlugValue:
    if "slug" not in data:
        raise ValueError("Slug item requires a 'slug' key")

    site_id = data.get("site_id", data.get("siteId"))
    if site_id in ("", None):
        site_id = None
    else:
        try:
            site_id = int(site_id)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid site id: {site_id!r}") from exc

    return SlugValue(
        path=data.get("slug") or "",
        site_id=site_id,
        action=data.get("action"),
    )

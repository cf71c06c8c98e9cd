# slugregistry/normalizers/url_slug.py
from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Optional

from slugregistry.domain.url_slug import SlugValue, slug_to_dict
from slugregistry.extensions import db
from slugregistry.models.site import Site


def lookup_site(site_id: int) -> Optional[Site]:
    if not site_id:
        return None
    return db.session.get(Site, site_id)


def normalize_slug(
    slug: SlugValue,
    *,
    site_lookup: Callable[[int], Optional[Site]] = lookup_site,
) -> Dict[str, Any]:
    """
    Normalizes a slug into API-safe JSON.

    Notes:
    - domain is display-only and null when the slug has no (known) site
    """
    data = slug_to_dict(slug)

    site = site_lookup(slug.site_id) if slug.site_id else None
    data["domain"] = site.main_domain if site else None

    return data


def normalize_slugs(slugs: Iterable[SlugValue], **kwargs) -> List[Dict[str, Any]]:
    return [normalize_slug(slug, **kwargs) for slug in slugs]


def preview_slugs(slugs: Iterable[SlugValue], line_break: str = "<br />") -> Optional[str]:
    lines = []
    for slug in slugs:
        line = slug.path
        if slug.site_id:
            line += f" : {slug.site_id}"
        lines.append(line)

    return line_break.join(lines) if lines else None

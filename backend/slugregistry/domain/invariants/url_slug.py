from typing import Callable, Iterable, List, Optional
from .exceptions import SlugValidationError


def validate_slug_path(
    path: str,
    *,
    document_exists: Callable[[str], bool],
    sanitize_key: Callable[[str], str],
    site_id: Optional[int] = None,
) -> List[str]:
    """
    Check a single slug path and return its segments.

    An empty path is valid and yields no segments.
    """
    if not path:
        return []

    if len(path) < 2 or path[0] != "/":
        raise SlugValidationError(
            "Slug must be at least 2 characters long and start with a slash",
            path=path, site_id=site_id,
        )

    if document_exists(path):
        raise SlugValidationError(
            f'Found conflict with document path "{path}"',
            path=path, site_id=site_id,
        )

    trimmed = path[1:]
    if trimmed.endswith("/"):
        trimmed = trimmed[:-1]

    segments = trimmed.split("/")
    for segment in segments:
        if not segment:
            raise SlugValidationError(
                f'Slug "{path}" not valid', path=path, site_id=site_id
            )
        if sanitize_key(segment) != segment:
            raise SlugValidationError(
                f'Slug part "{segment}" not valid', path=path, site_id=site_id
            )

    return segments


def assert_slugs(
    slugs: Iterable,
    *,
    mandatory: bool = False,
    available_sites: Optional[Iterable[int]] = None,
    document_exists: Callable[[str], bool],
    sanitize_key: Callable[[str], str],
) -> None:
    """
    Validate a whole slug set for one field. Raises on the first offending
    item; nothing is modified.
    """
    allowed_sites = set(available_sites) if available_sites else None
    found_slug = False
    seen = set()

    for slug in slugs:
        validate_slug_path(
            slug.path,
            document_exists=document_exists,
            sanitize_key=sanitize_key,
            site_id=slug.site_id,
        )
        if slug.path:
            found_slug = True

            key = (slug.path, slug.site_id or 0)
            if key in seen:
                raise SlugValidationError(
                    f'Slug "{slug.path}" is listed twice for site {key[1]}',
                    path=slug.path, site_id=slug.site_id,
                )
            seen.add(key)

        if allowed_sites is not None and slug.site_id and slug.site_id not in allowed_sites:
            raise SlugValidationError(
                f"Site {slug.site_id} is not available for this field",
                path=slug.path, site_id=slug.site_id,
            )

    if mandatory and not found_slug:
        raise SlugValidationError("Mandatory check failed")

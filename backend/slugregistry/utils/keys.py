import re
from unidecode import unidecode

MAX_KEY_LENGTH = 255

# Characters allowed in a document key; everything else collapses to "-"
_DOCUMENT_INVALID = re.compile(r"[^a-zA-Z0-9\-._~]+")
_DASHES = re.compile(r"-{2,}")


def get_valid_key(key: str, element_type: str = "document") -> str:
    """
    Return the canonical, URL-safe form of a single path key.

    Used as a validation oracle only: callers compare the result with the
    input and never store the sanitized value.
    """
    if element_type != "document":
        raise ValueError(f"Unsupported element type: {element_type}")

    key = unidecode(key or "").strip()
    key = _DOCUMENT_INVALID.sub("-", key)
    key = _DASHES.sub("-", key)
    key = key.strip("-")

    # Leading dots would make the key a hidden/relative path
    key = key.lstrip(".")

    return key[:MAX_KEY_LENGTH]

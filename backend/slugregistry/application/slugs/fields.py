# slugregistry/application/slugs/fields.py
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional


@dataclass(frozen=True)
class SlugFieldDefinition:
    """
    Declares a slug field on an object class.

    `action` is what a resolved slug points to (e.g. a controller
    reference); `available_sites` restricts which site ids may be used.
    """
    class_id: str
    name: str
    action: str = ""
    mandatory: bool = False
    available_sites: Optional[FrozenSet[int]] = None

    @classmethod
    def from_config(cls, data: Dict[str, Any]) -> "SlugFieldDefinition":
        try:
            class_id = str(data["class_id"])
            name = data["name"]
        except KeyError as exc:
            raise ValueError(f"Slug field config is missing {exc}") from exc

        sites = data.get("available_sites")
        return cls(
            class_id=class_id,
            name=name,
            action=data.get("action") or "",
            mandatory=bool(data.get("mandatory", False)),
            available_sites=frozenset(int(s) for s in sites) if sites else None,
        )

# slugregistry/application/slugs/registry.py
from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from flask import current_app, g

from slugregistry.application.slugs.fields import SlugFieldDefinition
from slugregistry.application.slugs.store import InsertStatus, SlugStore
from slugregistry.domain.invariants.exceptions import (
    SlugActionUnavailable,
    SlugAlreadyOwned,
    SlugPersistenceError,
)
from slugregistry.domain.invariants.url_slug import assert_slugs
from slugregistry.domain.owner_context import (
    Localized,
    OwnerContext,
    SubBlockVariant,
    load_filter,
    resolve_address,
)
from slugregistry.domain.url_slug import SlugRow, SlugValue, is_empty, slugs_equal
from slugregistry.extensions import db
from slugregistry.models.data_object import DataObject
from slugregistry.models.document import Document
from slugregistry.models.url_slug import UrlSlug
from slugregistry.utils.keys import get_valid_key

CacheKey = Tuple[OwnerContext, str]


def document_exists_at_path(path: str) -> bool:
    candidates = {path, path.rstrip("/") or "/"}
    return (
        Document.query
        .filter(Document.path.in_(candidates))
        .first()
    ) is not None


class SlugRegistry:
    """
    Assigns, validates, persists and resolves object URL slugs.

    A save is a full replace for one (field, owner address): existing rows
    are deleted first, then the new rows are inserted one by one. The unique
    constraint on (slug, site_id) is the only coordination between
    concurrent savers.
    """

    def __init__(
        self,
        store: Optional[SlugStore] = None,
        *,
        document_exists: Callable[[str], bool] = document_exists_at_path,
        sanitize_key: Callable[[str], str] = get_valid_key,
    ):
        self.store = store or SlugStore()
        self.document_exists = document_exists
        self.sanitize_key = sanitize_key
        self._fields: Dict[Tuple[str, str], SlugFieldDefinition] = {}

    @classmethod
    def from_config(cls, config) -> "SlugRegistry":
        registry = cls()
        for item in config.get("SLUG_FIELDS", []):
            registry.register_field(SlugFieldDefinition.from_config(item))
        return registry

    # -------------------------------------------------
    # Field definitions
    # -------------------------------------------------

    def register_field(self, definition: SlugFieldDefinition) -> None:
        self._fields[(definition.class_id, definition.name)] = definition

    def get_field(self, class_id: str, fieldname: str) -> Optional[SlugFieldDefinition]:
        return self._fields.get((str(class_id), fieldname))

    # -------------------------------------------------
    # Per-(owner, field) cache, scoped to the app context
    # -------------------------------------------------

    @staticmethod
    def _cache() -> Dict[CacheKey, Tuple[SlugValue, ...]]:
        if "slug_cache" not in g:
            g.slug_cache = {}
        return g.slug_cache

    def is_loaded(self, context: OwnerContext, fieldname: str) -> bool:
        return (context, fieldname) in self._cache()

    def invalidate(self, context: OwnerContext, fieldname: str) -> None:
        self._cache().pop((context, fieldname), None)

    def _evict(self, record_id: int, fieldname: Optional[str] = None) -> None:
        # nested translation filters overlap across variants
        cache = self._cache()
        for key in [
            k for k in cache
            if k[0].record_id == record_id and fieldname in (None, k[1])
        ]:
            del cache[key]

    # -------------------------------------------------
    # Operations
    # -------------------------------------------------

    def validate(self, slugs: Iterable[SlugValue], definition: SlugFieldDefinition) -> None:
        assert_slugs(
            slugs,
            mandatory=definition.mandatory,
            available_sites=definition.available_sites,
            document_exists=self.document_exists,
            sanitize_key=self.sanitize_key,
        )

    def save(
        self,
        context: OwnerContext,
        fieldname: str,
        slugs: Optional[Sequence[SlugValue]],
        *,
        class_id: str,
    ) -> List[SlugValue]:
        """
        Replace the slugs of one field at one owner address.

        Raises SlugValidationError before anything is written,
        SlugAlreadyOwned when a live owner holds one of the slugs and
        SlugPersistenceError on storage failures. Rows deleted before a
        failing insert stay deleted.
        """
        definition = self.get_field(class_id, fieldname)
        if definition is None:
            raise ValueError(f"Unknown slug field {class_id}.{fieldname}")

        slugs = list(slugs or [])
        self.validate(slugs, definition)

        address = resolve_address(context)
        rows = [
            SlugRow(
                path=slug.path,
                site_id=slug.storage_site_id,
                object_id=context.record_id,
                class_id=definition.class_id,
                fieldname=fieldname,
                ownertype=address.ownertype,
                ownername=address.ownername,
                position=address.position,
            )
            for slug in slugs
            if slug.path
        ]

        self._evict(context.record_id, fieldname)
        self.store.delete_where(fieldname, context.record_id, address)

        for row in rows:
            self._insert(row)

        saved = tuple(SlugValue(path=row.path, site_id=row.site_id) for row in rows)
        # a sub-block translation loads the rows of every variant
        if not (isinstance(context, Localized) and isinstance(context.container, SubBlockVariant)):
            self._cache()[(context, fieldname)] = saved

        current_app.logger.debug(
            f"Saved {len(saved)} slug(s) for object {context.record_id} "
            f"field {fieldname} ({address.ownertype})"
        )
        return list(saved)

    def _insert(self, row: SlugRow) -> None:
        retried = False

        while True:
            result = self.store.insert(row)

            if result.status is InsertStatus.OK:
                return

            if result.status is InsertStatus.FATAL:
                current_app.logger.error(
                    f"Failed to store slug {row.path} (site {row.site_id}): {result.error}"
                )
                raise SlugPersistenceError(
                    f'Could not store slug "{row.path}"'
                ) from result.error

            current_app.logger.warning(
                f"Slug {row.path} (site {row.site_id}) conflicts with an existing row"
            )
            existing = self.store.find_by_path_and_site(row.path, row.site_id)

            if retried:
                if existing is not None:
                    raise self._owned_error(existing)
                raise SlugPersistenceError(
                    f'Could not store slug "{row.path}" after retry'
                ) from result.error

            # A failing probe drops the stale row, so one retry may succeed
            if existing is not None and self._owner_is_live(existing):
                raise self._owned_error(existing)

            retried = True

    def _owner_is_live(self, existing: UrlSlug) -> bool:
        try:
            self.resolve_action(existing)
        except SlugActionUnavailable:
            return False
        return True

    @staticmethod
    def _owned_error(existing: UrlSlug) -> SlugAlreadyOwned:
        return SlugAlreadyOwned(
            path=existing.slug,
            site_id=existing.site_id,
            fieldname=existing.fieldname,
            object_id=existing.object_id,
            class_id=existing.class_id,
        )

    def load(
        self,
        context: OwnerContext,
        fieldname: str,
        *,
        force: bool = False,
    ) -> List[SlugValue]:
        key = (context, fieldname)
        cache = self._cache()

        if not force and key in cache:
            return list(cache[key])

        address = load_filter(context)
        rows = self.store.load_by_owner(
            context.record_id,
            fieldname,
            address.ownertype,
            address.ownername,
            address.position,
        )

        values = tuple(SlugValue.from_row(row) for row in rows)
        cache[key] = values
        return list(values)

    def delete_all_for_record(self, record_id: int) -> int:
        deleted = self.store.delete_all_for_record(record_id)
        self._evict(record_id)

        current_app.logger.debug(f"Deleted {deleted} slug(s) of object {record_id}")
        return deleted

    def resolve_action(self, row: UrlSlug) -> str:
        """
        Resolve what a stored slug points to.

        If the owning object or the field definition is gone the row is
        deleted and SlugActionUnavailable is raised.
        """
        owner = db.session.get(DataObject, row.object_id)
        definition = self.get_field(row.class_id, row.fieldname)

        reason = None
        if owner is None or owner.is_deleted:
            reason = f"object {row.object_id} does not exist"
        elif owner.class_id != row.class_id:
            reason = f"object {row.object_id} is no longer of class {row.class_id}"
        elif definition is None:
            reason = f"class {row.class_id} has no slug field {row.fieldname}"

        if reason is not None:
            current_app.logger.warning(
                f"Dropping stale slug {row.slug} (site {row.site_id}): {reason}"
            )
            self._evict(row.object_id, row.fieldname)
            self.store.delete_row(row)
            raise SlugActionUnavailable(reason)

        return definition.action

    def resolve_slug(self, path: str, site_id: Optional[int] = 0) -> Optional[SlugValue]:
        """
        Look up a slug for a site, falling back to site-less slugs.
        Returns None when nothing live is registered under the path.
        """
        site_id = site_id or 0
        row = self.store.find_by_path_and_site(path, site_id)
        if row is None and site_id:
            row = self.store.find_by_path_and_site(path, 0)
        if row is None:
            return None

        try:
            action = self.resolve_action(row)
        except SlugActionUnavailable:
            return None

        return SlugValue.from_row(row).with_action(action)

    @staticmethod
    def is_empty(slugs: Optional[Iterable[SlugValue]]) -> bool:
        return is_empty(slugs)

    @staticmethod
    def equals(old: Optional[Sequence[SlugValue]], new: Optional[Sequence[SlugValue]]) -> bool:
        return slugs_equal(old, new)


def get_registry() -> SlugRegistry:
    return current_app.extensions["slug_registry"]

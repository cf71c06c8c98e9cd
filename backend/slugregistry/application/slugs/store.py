# slugregistry/application/slugs/store.py
from __future__ import annotations

import enum
from typing import List, NamedTuple, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from slugregistry.domain.owner_context import LIKE_ESCAPE, OwnerAddress
from slugregistry.domain.url_slug import SlugRow
from slugregistry.domain.invariants.exceptions import SlugPersistenceError
from slugregistry.extensions import db
from slugregistry.models.url_slug import UrlSlug
from slugregistry.utils.transaction import transactional

# SQLSTATE for unique_violation (PostgreSQL, and MySQL via 23000 + 1062)
UNIQUE_VIOLATION_CODES = {"23505", "1062"}


class InsertStatus(enum.Enum):
    OK = "ok"
    CONFLICT = "conflict"
    FATAL = "fatal"


class InsertResult(NamedTuple):
    status: InsertStatus
    error: Optional[Exception] = None


def is_unique_violation(exc: IntegrityError) -> bool:
    """
    Tell a unique-constraint violation apart from other integrity errors
    (NOT NULL, foreign keys) across database drivers.
    """
    orig = getattr(exc, "orig", None)

    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code is None and getattr(orig, "args", None):
        code = orig.args[0]
    if str(code) in UNIQUE_VIOLATION_CODES:
        return True

    message = str(orig if orig is not None else exc).lower()
    return "unique" in message or "duplicate" in message


class SlugStore:
    """
    Persistence for `object_url_slugs`.

    Every write is committed on its own; there is no transaction spanning
    a full save.
    """

    def delete_where(self, fieldname: str, object_id: int, address: OwnerAddress) -> int:
        try:
            with transactional():
                return (
                    UrlSlug.query
                    .filter_by(
                        object_id=object_id,
                        fieldname=fieldname,
                        ownertype=address.ownertype,
                        ownername=address.ownername or "",
                        position=address.position or "",
                    )
                    .delete(synchronize_session="fetch")
                )
        except SQLAlchemyError as exc:
            raise SlugPersistenceError("Could not delete existing slugs") from exc

    def insert(self, row: SlugRow) -> InsertResult:
        record = UrlSlug()
        record.slug = row.path
        record.site_id = row.site_id
        record.object_id = row.object_id
        record.class_id = row.class_id
        record.fieldname = row.fieldname
        record.ownertype = row.ownertype
        record.ownername = row.ownername or ""
        record.position = row.position or ""

        try:
            with transactional():
                db.session.add(record)
        except IntegrityError as exc:
            if is_unique_violation(exc):
                return InsertResult(InsertStatus.CONFLICT, exc)
            return InsertResult(InsertStatus.FATAL, exc)
        except SQLAlchemyError as exc:
            return InsertResult(InsertStatus.FATAL, exc)

        return InsertResult(InsertStatus.OK)

    def find_by_path_and_site(self, path: str, site_id: int) -> Optional[UrlSlug]:
        try:
            return UrlSlug.query.filter_by(slug=path, site_id=site_id).first()
        except SQLAlchemyError as exc:
            raise SlugPersistenceError("Could not look up slug") from exc

    def load_by_owner(
        self,
        object_id: int,
        fieldname: str,
        ownertype: str,
        ownername: Optional[str] = None,
        position: Optional[str] = None,
    ) -> List[UrlSlug]:
        """
        Rows for one owner. `None` filters are skipped; an ownername
        containing `%` is matched as a LIKE pattern escaped with
        `LIKE_ESCAPE`.
        """
        query = UrlSlug.query.filter_by(
            object_id=object_id,
            fieldname=fieldname,
            ownertype=ownertype,
        )

        if ownername is not None:
            if "%" in ownername:
                query = query.filter(UrlSlug.ownername.like(ownername, escape=LIKE_ESCAPE))
            else:
                query = query.filter(UrlSlug.ownername == ownername)

        if position is not None:
            query = query.filter(UrlSlug.position == str(position))

        try:
            return query.order_by(UrlSlug.id.asc()).all()
        except SQLAlchemyError as exc:
            raise SlugPersistenceError("Could not load slugs") from exc

    def delete_row(self, record: UrlSlug) -> None:
        try:
            with transactional():
                db.session.delete(record)
        except SQLAlchemyError as exc:
            raise SlugPersistenceError("Could not delete slug") from exc

    def delete_all_for_record(self, object_id: int) -> int:
        try:
            with transactional():
                return (
                    UrlSlug.query
                    .filter_by(object_id=object_id)
                    .delete(synchronize_session="fetch")
                )
        except SQLAlchemyError as exc:
            raise SlugPersistenceError("Could not delete object slugs") from exc

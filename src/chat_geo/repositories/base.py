"""Generic CRUD repository shared by all entities.

Repositories own SQL and transaction boundaries: every write commits (or rolls
back) before returning, and storage failures are translated into the error
taxonomy in :mod:`chat_geo.core.errors`.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import AbstractContextManager, contextmanager
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import Select, literal_column, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from chat_geo.core.errors import (
    ConflictError,
    InternalError,
    InvalidArgumentError,
    NotFoundError,
    StoreError,
)
from chat_geo.db.session import Base
from chat_geo.db.time import utcnow

__all__ = ["CrudRepository", "translate_store_errors"]

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


def _is_foreign_key_violation(exc: IntegrityError) -> bool:
    return "foreign key" in str(exc.orig).lower()


@contextmanager
def translate_store_errors(session: Session, entity_name: str, operation: str) -> Iterator[None]:
    """Roll back and re-raise storage failures as taxonomy errors."""
    try:
        yield
    except StoreError:
        raise
    except IntegrityError as exc:
        session.rollback()
        if _is_foreign_key_violation(exc):
            if operation == "delete":
                raise ConflictError(
                    f"{entity_name} is still referenced and cannot be deleted"
                ) from exc
            raise InvalidArgumentError(
                f"{entity_name} references a channel or user that does not exist"
            ) from exc
        raise ConflictError(f"{entity_name} violates a uniqueness constraint") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Storage failure during %s %s", operation, entity_name)
        raise InternalError(f"Failed to {operation} {entity_name.lower()}: {exc}") from exc


class CrudRepository(Generic[ModelT]):
    """Create, read, sparse-update and delete rows of a single model."""

    model: ClassVar[type[Base]]
    entity_name: ClassVar[str]
    response_schema: ClassVar[type[BaseModel]]
    updatable_fields: ClassVar[frozenset[str]] = frozenset()
    # Nullable columns that an explicit None clears instead of leaving untouched.
    clearable_fields: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def _translate_errors(self, operation: str) -> AbstractContextManager[None]:
        return translate_store_errors(self.session, self.entity_name, operation)

    def _oldest_first(self, stmt: Select[Any]) -> Select[Any]:
        """Order by creation time, breaking timestamp ties by insertion order.

        SQLite exposes insertion order as ``rowid``; other backends fall back to
        the uuid so that ties at least come back in a stable order.
        """
        table = self.model.__tablename__
        if self.session.get_bind().dialect.name == "sqlite":
            tiebreak = literal_column(f'"{table}".rowid')
        else:
            tiebreak = self.model.uuid  # type: ignore[attr-defined]
        return stmt.order_by(self.model.created_on, tiebreak)  # type: ignore[attr-defined]

    def find(self, uuid: str) -> ModelT | None:
        """Return the row with ``uuid`` or None."""
        with self._translate_errors("read"):
            return self.session.get(self.model, uuid)  # type: ignore[return-value]

    def get(self, uuid: str) -> ModelT:
        """Return the row with ``uuid``; raise NotFoundError when absent."""
        row = self.find(uuid)
        if row is None:
            raise NotFoundError(f"{self.entity_name} not found")
        return row

    def list_all(self) -> list[ModelT]:
        """Return every row, oldest first."""
        with self._translate_errors("list"):
            stmt = self._oldest_first(select(self.model))
            return list(self.session.scalars(stmt))

    def _insert(self, row: ModelT) -> ModelT:
        now = utcnow()
        row.created_on = now  # type: ignore[attr-defined]
        row.modified_on = now  # type: ignore[attr-defined]
        with self._translate_errors("create"):
            self.session.add(row)
            self.session.commit()
            self.session.refresh(row)
        logger.debug("Created %s %s", self.entity_name, row.uuid)  # type: ignore[attr-defined]
        return row

    def _validate_changes(self, row: ModelT, changes: dict[str, Any]) -> None:
        """Hook for entity-specific checks before changes are applied."""

    def _apply_changes(self, row: ModelT, changes: dict[str, Any]) -> None:
        for field, value in changes.items():
            setattr(row, field, value)

    def update(self, uuid: str, changes: Mapping[str, Any]) -> ModelT:
        """Apply the supplied fields and return the row as re-read from the store.

        Absent fields are left untouched. None clears a field listed in
        ``clearable_fields`` and is ignored for every other field. An empty change
        set is rejected before anything is read or written.
        """
        fields = {
            key: value
            for key, value in changes.items()
            if value is not None or key in self.clearable_fields
        }
        if not fields:
            raise InvalidArgumentError("At least one field must be provided for update")
        unknown = set(fields) - self.updatable_fields
        if unknown:
            raise InvalidArgumentError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")

        row = self.get(uuid)
        self._validate_changes(row, fields)
        with self._translate_errors("update"):
            self._apply_changes(row, fields)
            row.modified_on = utcnow()  # type: ignore[attr-defined]
            self.session.commit()
            self.session.refresh(row)
        return row

    def delete(self, uuid: str) -> BaseModel:
        """Delete the row and return a snapshot taken before deletion."""
        row = self.get(uuid)
        snapshot = self.response_schema.model_validate(row)
        with self._translate_errors("delete"):
            self.session.delete(row)
            self.session.commit()
        logger.debug("Deleted %s %s", self.entity_name, uuid)
        return snapshot

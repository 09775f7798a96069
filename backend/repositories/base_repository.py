"""
Base repository providing common CRUD operations.

Repositories hand out domain entities, never ORM records. Writes are
version-checked: update() only succeeds if the row still carries the
version the entity was loaded with.
"""

from typing import Generic, TypeVar, List, Optional, Type, Dict, Any
from sqlalchemy import update as sql_update, delete as sql_delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, Query

from domain.entities.base import Entity
from exceptions import ApplicationError, ConcurrencyConflictError, DatabaseError, NotFoundError
from .specifications import Specification

E = TypeVar('E', bound=Entity)
R = TypeVar('R')


class BaseRepository(Generic[E, R]):
    """
    Generic base repository providing common CRUD operations.
    All specific repositories should inherit from this class.

    Subclasses supply the mapping between entity and record via
    _to_entity() and _to_columns().
    """

    entity_name = "Entity"

    def __init__(self, db: Session, model: Type[R]):
        """
        Initialize the repository.

        Args:
            db: SQLAlchemy database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    # Mapping hooks

    def _to_entity(self, record: R) -> E:
        raise NotImplementedError

    def _to_columns(self, entity: E) -> Dict[str, Any]:
        """Column values for every persisted field except id and version."""
        raise NotImplementedError

    def _integrity_error(self, entity: E, exc: IntegrityError) -> ApplicationError:
        """Translate a constraint failure on insert into an application error."""
        return DatabaseError("insert", f"Could not insert {self.entity_name} {entity.id}: {exc.orig}")

    # Queries

    def _query(self) -> Query:
        # populate_existing: always reflect the row, not a stale identity-map copy
        return self.db.query(self.model).populate_existing()

    def _to_entities(self, records: List[R]) -> List[E]:
        return [self._to_entity(r) for r in records]

    def get_by_id(self, id: str) -> Optional[E]:
        """
        Retrieve an entity by its ID.

        Args:
            id: Primary key value

        Returns:
            Entity or None if not found
        """
        record = self._query().filter(self.model.id == id).first()
        return self._to_entity(record) if record is not None else None

    def get_all(self, limit: Optional[int] = None, offset: int = 0) -> List[E]:
        """
        Retrieve all entities, oldest first.

        Args:
            limit: Maximum number of entities to return
            offset: Number of entities to skip

        Returns:
            List of entities
        """
        query = self._query().order_by(self.model.created_at, self.model.id).offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return self._to_entities(query.all())

    def find(self, spec: Specification[E]) -> List[E]:
        """
        Find entities using a Specification.

        Args:
            spec: Specification to match entities against

        Returns:
            List of entities matching the specification
        """
        query = self._query().filter(spec.to_sql_filter()).order_by(self.model.created_at, self.model.id)
        return self._to_entities(query.all())

    def find_one(self, spec: Specification[E]) -> Optional[E]:
        """
        Find first entity matching a Specification.

        Returns:
            First matching entity, or None
        """
        record = self._query().filter(spec.to_sql_filter()).first()
        return self._to_entity(record) if record is not None else None

    def count(self, spec: Optional[Specification[E]] = None) -> int:
        """
        Count entities, optionally restricted by a Specification.

        Returns:
            Number of matching records
        """
        query = self.db.query(self.model)
        if spec is not None:
            query = query.filter(spec.to_sql_filter())
        return query.count()

    def exists(self, id: str) -> bool:
        """
        Check if an entity exists by ID.

        Args:
            id: Primary key value

        Returns:
            True if exists, False otherwise
        """
        return self.db.query(self.model).filter(self.model.id == id).count() > 0

    # Writes

    def add(self, entity: E) -> E:
        """
        Insert a new entity.

        A constraint failure rolls back the current transaction.

        Args:
            entity: Entity to persist

        Returns:
            The same entity

        Raises:
            ApplicationError: From _integrity_error() when a constraint fails
        """
        record = self.model(id=entity.id, version=entity.version, **self._to_columns(entity))
        self.db.add(record)
        try:
            self.db.flush()
        except IntegrityError as e:
            self.db.rollback()
            raise self._integrity_error(entity, e) from e
        return entity

    def update(self, entity: E) -> E:
        """
        Replace the stored entity, keyed by id, if nobody changed it since it was loaded.

        Args:
            entity: Entity carrying the version it was loaded with

        Returns:
            The same entity with its version bumped

        Raises:
            NotFoundError: If the row no longer exists
            ConcurrencyConflictError: If the stored version differs
        """
        stmt = (
            sql_update(self.model)
            .where(self.model.id == entity.id, self.model.version == entity.version)
            .values(version=entity.version + 1, **self._to_columns(entity))
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        if result.rowcount == 0:
            if not self.exists(entity.id):
                raise NotFoundError(self.entity_name, entity.id)
            raise ConcurrencyConflictError(self.entity_name, entity.id)

        entity.version += 1
        return entity

    def delete(self, id: str) -> bool:
        """
        Delete an entity by its ID.

        Args:
            id: Primary key value

        Returns:
            True if deleted, False if not found
        """
        stmt = sql_delete(self.model).where(self.model.id == id).execution_options(synchronize_session=False)
        result = self.db.execute(stmt)
        return result.rowcount > 0

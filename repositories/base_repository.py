"""
Base Repository - Abstract base class for soft-delete aware repositories
Implements common database operations following the Repository Pattern
"""

from abc import ABC, abstractmethod
from typing import TypeVar, Generic, List, Optional, Type
from sqlalchemy.orm import Session, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import inspect, desc, asc
from dataclasses import dataclass
from enum import Enum
from utils.datetime_utils import utc_now
from repositories.exceptions import NotFoundError
import logging

logger = logging.getLogger(__name__)

# Type variable for model classes
T = TypeVar('T')

# Columns owned by the persistence layer, never copied from caller input
MANAGED_COLUMNS = frozenset({'id', 'created_at', 'updated_at', 'deleted_at'})


class SortOrder(Enum):
    """Sort order options"""
    ASC = "asc"
    DESC = "desc"


@dataclass
class PaginationParams:
    """Parameters for pagination"""
    page: int = 1
    per_page: int = 20

    @property
    def offset(self) -> int:
        """Calculate offset for query"""
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        """Get limit for query"""
        return self.per_page


@dataclass
class PaginatedResult(Generic[T]):
    """Result of a paginated query"""
    items: List[T]
    total: int
    page: int
    per_page: int

    @property
    def pages(self) -> int:
        """Calculate total number of pages"""
        return (self.total + self.per_page - 1) // self.per_page if self.per_page > 0 else 0

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.pages


class BaseRepository(ABC, Generic[T]):
    """
    Abstract base repository with soft-delete aware CRUD operations.

    Managed models must have an integer ``id`` primary key and nullable
    ``created_at``/``updated_at``/``deleted_at`` timestamp columns. Every
    default read is restricted to rows whose ``deleted_at`` is NULL; the
    ``*_unscoped`` methods are the explicit override for reaching deleted rows.
    Each write commits on its own, so one call is one atomic request.
    """

    def __init__(self, session: Session, model_class: Type[T]):
        """
        Initialize repository with database session and model class.

        Args:
            session: SQLAlchemy database session
            model_class: The model class this repository manages
        """
        self.session = session
        self.model_class = model_class

    @property
    def model_name(self) -> str:
        return self.model_class.__name__

    # CREATE Operations

    def create(self, entity: T) -> T:
        """
        Insert a new entity.

        The passed instance is the one persisted, so after a successful call
        it carries its generated id and timestamps.

        Args:
            entity: Transient model instance

        Returns:
            The same instance, now persistent

        Raises:
            SQLAlchemyError: If database operation fails
        """
        # One instant for both stamps so a fresh row reads as never updated
        now = utc_now()
        if entity.created_at is None:
            entity.created_at = now
        if entity.updated_at is None:
            entity.updated_at = entity.created_at

        self.session.add(entity)
        self._commit(f"creating {self.model_name}")
        logger.debug(f"Created {self.model_name} with id {entity.id}")
        return entity

    # READ Operations

    def find_all(self, order_by: Optional[str] = 'id',
                 order: SortOrder = SortOrder.ASC) -> List[T]:
        """
        Get all entities that are not soft-deleted.

        Args:
            order_by: Field name to order by
            order: Sort order (ASC or DESC)

        Returns:
            List of entities, empty if there are none
        """
        query = self._apply_order(self._active_query(), order_by, order)
        return self._run(query.all, f"listing {self.model_name}")

    def find_by_id(self, entity_id: int) -> T:
        """
        Get an entity that is not soft-deleted by ID.

        Raises:
            NotFoundError: If the entity is absent or soft-deleted
        """
        entity = self._find_active(entity_id)
        if entity is None:
            raise NotFoundError(self.model_name, entity_id)
        return entity

    def find_by_id_unscoped(self, entity_id: int) -> Optional[T]:
        """
        Get entity by ID whether or not it is soft-deleted.

        Returns:
            Entity instance or None if no row exists
        """
        return self._run(
            lambda: self.session.get(self.model_class, entity_id),
            f"getting {self.model_name} {entity_id}"
        )

    def find_all_unscoped(self, order_by: Optional[str] = 'id',
                          order: SortOrder = SortOrder.ASC) -> List[T]:
        """Get all entities, including soft-deleted ones."""
        query = self._apply_order(self.session.query(self.model_class), order_by, order)
        return self._run(query.all, f"listing all {self.model_name}")

    def find_deleted(self) -> List[T]:
        """Get only the soft-deleted entities, most recently deleted first."""
        query = self.session.query(self.model_class)\
            .filter(self.model_class.deleted_at.isnot(None))\
            .order_by(desc(self.model_class.deleted_at))
        return self._run(query.all, f"listing deleted {self.model_name}")

    def get_paginated(self,
                      pagination: PaginationParams,
                      order_by: Optional[str] = 'id',
                      order: SortOrder = SortOrder.ASC) -> PaginatedResult[T]:
        """
        Get a page of entities that are not soft-deleted.

        Args:
            pagination: Pagination parameters
            order_by: Field name to order by
            order: Sort order

        Returns:
            PaginatedResult with items and metadata
        """
        query = self._active_query()
        total = self._run(query.count, f"counting {self.model_name}")
        query = self._apply_order(query, order_by, order)
        items = self._run(
            query.offset(pagination.offset).limit(pagination.limit).all,
            f"paginating {self.model_name}"
        )
        return PaginatedResult(
            items=items,
            total=total,
            page=pagination.page,
            per_page=pagination.per_page
        )

    def count(self) -> int:
        """Count entities that are not soft-deleted."""
        return self._run(self._active_query().count, f"counting {self.model_name}")

    # UPDATE Operations

    def update(self, entity: T) -> T:
        """
        Persist every caller-owned field of entity onto its active row.

        The entity may be the persistent instance itself or a detached/transient
        copy carrying the id; either way updated_at is refreshed.

        Args:
            entity: Instance whose id names an existing, non-deleted row

        Returns:
            The persistent instance

        Raises:
            NotFoundError: If the id is unknown or soft-deleted
            SQLAlchemyError: If database operation fails
        """
        with self.session.no_autoflush:
            current = self._find_active(entity.id)
        if current is None:
            # Drop any pending changes made to a row we refuse to update
            self.session.rollback()
            raise NotFoundError(self.model_name, entity.id)

        if current is not entity:
            for field in self._writable_columns():
                setattr(current, field, getattr(entity, field))
        current.updated_at = utc_now()
        self._commit(f"updating {self.model_name} {entity.id}")

        if current is not entity:
            entity.created_at = current.created_at
            entity.updated_at = current.updated_at
        logger.debug(f"Updated {self.model_name} with id {current.id}")
        return current

    def restore(self, entity_id: int) -> T:
        """
        Clear deleted_at on a soft-deleted entity.

        Raises:
            NotFoundError: If no row with that id exists at all
        """
        entity = self.find_by_id_unscoped(entity_id)
        if entity is None:
            raise NotFoundError(self.model_name, entity_id)
        if entity.deleted_at is not None:
            entity.deleted_at = None
            self._commit(f"restoring {self.model_name} {entity_id}")
            logger.info(f"Restored {self.model_name} with id {entity_id}")
        return entity

    # DELETE Operations

    def delete(self, entity: T) -> bool:
        """
        Soft-delete an entity by stamping deleted_at. The row is kept.

        Deleting an unknown or already deleted entity is a no-op.

        Returns:
            True if a row was soft-deleted, False otherwise
        """
        with self.session.no_autoflush:
            current = self._find_active(entity.id)
        if current is None:
            logger.debug(f"{self.model_name} {entity.id} already deleted or missing")
            return False

        deleted_at = utc_now()
        current.deleted_at = deleted_at
        self._commit(f"deleting {self.model_name} {entity.id}")
        if current is not entity:
            entity.deleted_at = deleted_at
        logger.debug(f"Soft-deleted {self.model_name} with id {entity.id}")
        return True

    def delete_by_id(self, entity_id: int) -> bool:
        """Soft-delete entity by ID; see delete()."""
        entity = self._find_active(entity_id)
        if entity is None:
            return False
        return self.delete(entity)

    # Transaction Management

    def commit(self) -> None:
        """Commit the current transaction."""
        self._commit("committing transaction")

    def rollback(self) -> None:
        """Rollback the current transaction."""
        self.session.rollback()

    # Helper Methods

    def _active_query(self) -> Query:
        """Query restricted to rows that are not soft-deleted."""
        return self.session.query(self.model_class)\
            .filter(self.model_class.deleted_at.is_(None))

    def _find_active(self, entity_id: int) -> Optional[T]:
        query = self._active_query().filter(self.model_class.id == entity_id)
        return self._run(query.one_or_none, f"getting {self.model_name} {entity_id}")

    def _apply_order(self, query: Query, order_by: Optional[str],
                     order: SortOrder) -> Query:
        if order_by:
            order_field = getattr(self.model_class, order_by, None)
            if order_field is not None:
                query = query.order_by(
                    desc(order_field) if order == SortOrder.DESC else asc(order_field)
                )
        return query

    def _writable_columns(self) -> List[str]:
        return [
            attr.key for attr in inspect(self.model_class).column_attrs
            if attr.key not in MANAGED_COLUMNS
        ]

    def _run(self, operation, action: str):
        try:
            return operation()
        except SQLAlchemyError as e:
            logger.error(f"Error {action}: {e}")
            raise

    def _commit(self, action: str) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error {action}: {e}")
            self.session.rollback()
            raise

    # Abstract Methods (to be implemented by subclasses)

    @abstractmethod
    def search(self, query: str, fields: Optional[List[str]] = None,
               limit: Optional[int] = None) -> List[T]:
        """
        Search entities that are not soft-deleted by text query.

        Args:
            query: Search query string
            fields: Fields to search in (None for default fields)
            limit: Maximum number of results

        Returns:
            List of matching entities
        """
        pass

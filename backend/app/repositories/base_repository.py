# backend/app/repositories/base_repository.py
"""
Base Repository Pattern for the SkillBridge platform.

Provides the foundation for all repository classes with:
- Common CRUD operations
- Type safety with generics
- Transaction support (managed by services)
- Query builder helpers

Repositories never commit; they flush so generated ids are available and
leave commit/rollback to the service layer.
"""

from abc import ABC, abstractmethod
import logging
from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from ..core.exceptions import DuplicateRecordException, RepositoryException

# Type variable for generic model support
T = TypeVar("T")

logger = logging.getLogger(__name__)


class IRepository(ABC, Generic[T]):
    """
    Abstract repository interface defining core data access methods.
    """

    @abstractmethod
    def get_by_id(self, id: str, load_relationships: bool = True) -> Optional[T]:
        """Retrieve an entity by its primary key."""

    @abstractmethod
    def create(self, **kwargs: Any) -> T:
        """
        Create a new entity.

        Raises:
            DuplicateRecordException: If a unique constraint is violated
            RepositoryException: If creation fails
        """

    @abstractmethod
    def delete(self, id: str) -> bool:
        """Delete an entity by its primary key, returning False when missing."""

    @abstractmethod
    def exists(self, **kwargs: Any) -> bool:
        """Check if an entity exists with given criteria."""


class BaseRepository(IRepository[T]):
    """
    SQLAlchemy implementation of ``IRepository``.

    Subclasses pass their model to ``__init__`` and may override
    ``_apply_eager_loading`` to load relationships with ``selectinload``.
    """

    def __init__(self, db: Session, model: Type[T]):
        """
        Initialize repository with database session and model.

        Args:
            db: SQLAlchemy session (managed by service layer)
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    def get_by_id(self, id: str, load_relationships: bool = True) -> Optional[T]:
        try:
            query = self.db.query(self.model).filter(self.model.id == id)
            if load_relationships:
                query = self._apply_eager_loading(query)
            return query.first()
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting {self.model.__name__} by id {id}: {str(e)}")
            raise RepositoryException(f"Failed to retrieve {self.model.__name__}: {str(e)}") from e

    def create(self, **kwargs: Any) -> T:
        """
        Create a new entity.

        Note: Does NOT commit - transaction management is handled by service layer.
        """
        entity = self.model(**kwargs)
        try:
            self.db.add(entity)
            self.db.flush()  # Get ID without committing
            return entity
        except IntegrityError as exc:
            self.logger.warning("Integrity error creating %s: %s", self.model.__name__, exc.orig)
            raise DuplicateRecordException(f"Integrity constraint violated: {exc.orig}") from exc
        except SQLAlchemyError as e:
            self.logger.error(f"Error creating {self.model.__name__}: {str(e)}")
            raise RepositoryException(f"Failed to create {self.model.__name__}: {str(e)}") from e

    def update_entity(self, entity: T, **kwargs: Any) -> T:
        try:
            for key, value in kwargs.items():
                if hasattr(entity, key):
                    setattr(entity, key, value)
            self.db.flush()
            return entity
        except IntegrityError as exc:
            self.logger.warning("Integrity error updating %s: %s", self.model.__name__, exc.orig)
            raise DuplicateRecordException(f"Integrity constraint violated: {exc.orig}") from exc
        except SQLAlchemyError as e:
            self.logger.error(f"Error updating {self.model.__name__}: {str(e)}")
            raise RepositoryException(f"Failed to update {self.model.__name__}: {str(e)}") from e

    def delete(self, id: str) -> bool:
        """
        Delete an entity by its primary key.

        Returns False if entity not found, raises exception for constraint violations.
        """
        entity = self.get_by_id(id, load_relationships=False)
        if not entity:
            return False
        try:
            self.db.delete(entity)
            self.db.flush()
            return True
        except IntegrityError as e:
            self.logger.error(f"Cannot delete {self.model.__name__} {id} due to constraints: {str(e)}")
            raise RepositoryException(f"Cannot delete due to existing references: {str(e)}") from e
        except SQLAlchemyError as e:
            self.logger.error(f"Error deleting {self.model.__name__} {id}: {str(e)}")
            raise RepositoryException(f"Failed to delete {self.model.__name__}: {str(e)}") from e

    def exists(self, **kwargs: Any) -> bool:
        try:
            return self.db.query(self.model).filter_by(**kwargs).first() is not None
        except SQLAlchemyError as e:
            self.logger.error(f"Error checking existence: {str(e)}")
            raise RepositoryException(f"Failed to check existence: {str(e)}") from e

    def find_one_by(self, **kwargs: Any) -> Optional[T]:
        """Find a single entity by exact-match criteria."""
        try:
            return self.db.query(self.model).filter_by(**kwargs).first()
        except SQLAlchemyError as e:
            self.logger.error(f"Error finding one by criteria: {str(e)}")
            raise RepositoryException(f"Failed to find record: {str(e)}") from e

    # Protected helper methods for use by subclasses

    def _apply_eager_loading(self, query: Query) -> Query:
        """
        Apply eager loading to relationships.

        Override in subclasses to specify which relationships to load.
        """
        return query

    def _build_query(self) -> Query:
        """Get base query for the model."""
        return self.db.query(self.model)

    def _execute_query(self, query: Query) -> List[T]:
        """Execute query with error handling."""
        try:
            return query.all()
        except SQLAlchemyError as e:
            self.logger.error(f"Query execution error: {str(e)}")
            raise RepositoryException(f"Query failed: {str(e)}") from e

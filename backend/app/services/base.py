# backend/app/services/base.py
"""
Base Service Pattern for the SkillBridge platform.

Provides common functionality for all service classes including:
- Transaction management
- Logging
- Error handling
- Performance monitoring
"""

from contextlib import contextmanager
from functools import wraps
import logging
import time
from typing import Any, Callable, Iterator, TypeVar, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import DomainException, RepositoryException, ServiceException

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

SLOW_OPERATION_SECONDS = 1.0


class BaseService:
    """
    Base class for all service layer components.

    Provides common patterns for:
    - Database session management
    - Logging
    - Transaction handling
    - Performance monitoring
    """

    def __init__(self, db: Session):
        """
        Initialize base service.

        Args:
            db: Database session
        """
        self.db = db
        self.logger = logging.getLogger(self.__class__.__name__)

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        Context manager for database transactions.

        Usage:
            with self.transaction():
                # Do multiple operations
                self.db.add(entity)
                # Note: commit is handled automatically
        """
        try:
            yield self.db
            self.db.commit()
            self.logger.debug("Transaction committed successfully")
        except SQLAlchemyError as e:
            self.logger.error(f"Transaction failed: {str(e)}")
            self.db.rollback()
            raise ServiceException(f"Database operation failed: {str(e)}") from e
        except (DomainException, RepositoryException) as e:
            self.logger.info(f"Transaction rolled back: {type(e).__name__}: {str(e)}")
            self.db.rollback()
            raise
        except Exception as e:
            self.logger.error(f"Unexpected error in transaction: {str(e)}")
            self.db.rollback()
            raise

    @contextmanager
    def savepoint(self) -> Iterator[Session]:
        """
        Run a block inside a SAVEPOINT so a failed insert does not discard
        the rest of the surrounding transaction.
        """
        nested = self.db.begin_nested()
        try:
            yield self.db
            nested.commit()
        except Exception:
            nested.rollback()
            raise

    @staticmethod
    def measure_operation(operation_name: str) -> Callable[[F], F]:
        """
        Decorator to measure operation performance.

        Usage:
            @BaseService.measure_operation("create_booking")
            def create_booking(self, data):
                # Method implementation
        """

        def decorator(func: F) -> F:
            @wraps(func)
            def wrapper(self: "BaseService", *args: Any, **kwargs: Any) -> Any:
                start_time = time.perf_counter()
                try:
                    return func(self, *args, **kwargs)
                finally:
                    elapsed = time.perf_counter() - start_time
                    if elapsed > SLOW_OPERATION_SECONDS:
                        self.logger.warning(f"Slow operation detected: {operation_name} took {elapsed:.2f}s")

            return cast(F, wrapper)

        return decorator

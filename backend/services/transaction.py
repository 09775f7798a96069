"""
Transaction helper shared by the services.

Every use case runs as one database transaction: all of its writes commit
together or none do. Repositories check each aggregate's version on write;
when another writer got there first the whole use case is rolled back and
re-run from a fresh read, up to max_retries times.
"""

import logging
from typing import Callable, Optional, TypeVar

from sqlalchemy.orm import Session

from config.settings import settings
from exceptions import ConcurrencyConflictError

logger = logging.getLogger(__name__)

T = TypeVar('T')


class TransactionalService:
    """Base for services that own a database session."""

    def __init__(self, db: Session, max_retries: Optional[int] = None):
        """
        Args:
            db: Database session
            max_retries: Extra attempts after a concurrency conflict
                (defaults to LIBRARY_MAX_CONFLICT_RETRIES)
        """
        self.db = db
        self.max_retries = settings.max_conflict_retries if max_retries is None else max_retries

    def run_in_transaction(self, operation_name: str, work: Callable[[], T]) -> T:
        """
        Run work() and commit, retrying on version conflicts.

        work must re-load every aggregate it touches, so that a retry sees
        the other writer's changes.

        Args:
            operation_name: Name used in log messages
            work: Callable performing reads, domain calls and repository writes

        Returns:
            Whatever work() returned

        Raises:
            ConcurrencyConflictError: If every attempt conflicted
            Exception: Anything work() raised, after rolling back
        """
        attempt = 0
        while True:
            attempt += 1
            try:
                result = work()
                self.db.commit()
                return result
            except ConcurrencyConflictError as e:
                self.db.rollback()
                if attempt > self.max_retries:
                    logger.error(f"{operation_name}: giving up after {attempt} conflicting attempt(s): {e.message}")
                    raise
                logger.warning(f"{operation_name}: {e.message}, retrying (attempt {attempt + 1})")
            except Exception:
                self.db.rollback()
                raise

import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from extensions import db


logger = logging.getLogger("db_context")


class StorageError(Exception):
    """A database operation failed; the session has been rolled back."""

    def __init__(self, operation: str, message: str = "Database operation failed"):
        super().__init__(f"{operation}: {message}")
        self.operation = operation
        self.message = message


@contextmanager
def db_context(operation: str):
    """Provide a transactional scope around a series of DB operations."""
    try:
        yield db.session
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception(f"[{operation}] Database error: {e}")
        raise StorageError(operation) from e

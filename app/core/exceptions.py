# app/core/exceptions.py
import functools
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(AppError):
    """A referenced entity does not exist."""

    status_code = 404


class BadRequestError(AppError):
    """A business rule was violated."""

    status_code = 400


def ensure_active(entity, message: str) -> None:
    if not entity.is_active:
        raise BadRequestError(message)


def translate_errors(message: str, integrity_message: Optional[str] = None):
    """Wrap a crud function so only AppError escapes it.

    The wrapped function must take the db session as its first argument.
    Anything that is not an AppError rolls the session back and becomes a
    BadRequestError with a fixed message.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(db: Session, *args, **kwargs):
            try:
                return func(db, *args, **kwargs)
            except AppError:
                raise
            except IntegrityError:
                db.rollback()
                logger.warning("Integrity error in %s", func.__name__, exc_info=True)
                raise BadRequestError(integrity_message or message)
            except Exception:
                db.rollback()
                logger.exception("Unexpected error in %s", func.__name__)
                raise BadRequestError(message)

        return wrapper

    return decorator

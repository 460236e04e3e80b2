import functools
import logging
from sqlalchemy.exc import SQLAlchemyError
from patient_records.exceptions import ServiceError, StoreError

logger = logging.getLogger(__name__)


def store_operation(message: str):
    """
    Wrap an async service method so store failures surface as StoreError(message).
    Domain errors raised inside the method pass through untouched.
    """
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except ServiceError:
                raise
            except SQLAlchemyError as e:
                logger.exception(message)
                raise StoreError(message, error=str(e)) from e
        return wrapper
    return decorator

"""
Centralized error handling decorators and utilities.
Provides consistent error translation across the route, service and repository layers.
"""

from functools import wraps
from typing import Callable, Any

from pymongo.errors import PyMongoError

from app.core.exceptions import AppException, PersistenceError
from app.utils.logger import get_logger

logger = get_logger(__name__)


def api_error_handler(failure_message: str):
    """
    Decorator for consistent persistence error reporting in API endpoints.

    Service exceptions (validation, not found) pass through untouched so the
    registered exception handlers map them to 400/404. Persistence failures are
    re-raised with an endpoint-specific message while keeping the raw driver
    error for diagnostics.

    Args:
        failure_message: Message returned to the client on a storage failure
            (e.g., "Failed to fetch feedbacks")

    Usage:
        @router.get("/")
        @api_error_handler("Failed to fetch feedbacks")
        async def list_feedbacks(...):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            try:
                return await func(*args, **kwargs)
            except PersistenceError as e:
                raise PersistenceError(failure_message, error=e.error or e.message, details=e.details) from e
            except AppException:
                raise

        return wrapper
    return decorator


def service_error_handler(service_name: str, operation_name: str):
    """
    Decorator for error handling in service layer.

    Logs unexpected errors with context but doesn't translate them
    (services shouldn't know about HTTP).

    Args:
        service_name: Name of the service (e.g., "FeedbackService")
        operation_name: Name of the operation (e.g., "submit")
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            try:
                return await func(*args, **kwargs)
            except AppException:
                raise
            except Exception as e:
                logger.error(
                    f"{service_name}.{operation_name} failed: {str(e)}",
                    exc_info=True,
                    extra={
                        "service": service_name,
                        "operation": operation_name,
                        "error_type": type(e).__name__,
                        "error_message": str(e)
                    }
                )
                # Re-raise for caller to handle
                raise

        return wrapper
    return decorator


def repository_error_handler(repository_name: str, operation_name: str):
    """
    Decorator for error handling in repository layer.

    Driver errors are logged and translated into PersistenceError so callers
    never depend on pymongo exception types.

    Args:
        repository_name: Name of the repository (e.g., "FeedbackRepository")
        operation_name: Name of the operation (e.g., "create")
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            try:
                return await func(*args, **kwargs)
            except PyMongoError as e:
                logger.error(
                    f"{repository_name}.{operation_name} failed: {str(e)}",
                    exc_info=True,
                    extra={
                        "repository": repository_name,
                        "operation": operation_name,
                        "error_type": type(e).__name__,
                        "error_message": str(e),
                        "layer": "repository"
                    }
                )
                raise PersistenceError(
                    f"{repository_name}.{operation_name} failed",
                    error=str(e),
                ) from e

        return wrapper
    return decorator

"""
Centralized error handling decorators for database operations.

Service methods are wrapped with these decorators so that database failures
are classified and logged in one place, transactions are committed or rolled
back consistently, and the original exception still reaches the endpoint
(which translates it into an HTTP status).
"""
import functools
import inspect
import logging
import traceback
from typing import Any, Callable, Optional

from sqlalchemy.exc import (
    DisconnectionError,
    IntegrityError,
    OperationalError,
    SQLAlchemyError,
    StatementError,
    TimeoutError,
)
from sqlalchemy.ext.asyncio import AsyncSession


logger = logging.getLogger(__name__)


class DatabaseErrorHandler:
    """Centralized database error classification utilities."""

    DATABASE_EXCEPTIONS = (SQLAlchemyError, ConnectionError)

    @staticmethod
    def handle_database_error(
        exc: Exception,
        operation: str,
        context: Optional[dict] = None
    ) -> tuple[bool, str]:
        """
        Classify a database error and log it.

        Args:
            exc: The exception that occurred
            operation: Description of the database operation
            context: Additional context information

        Returns:
            Tuple of (is_recoverable, error_message)
        """
        context_str = f" | Context: {context}" if context else ""

        if isinstance(exc, IntegrityError):
            error_msg = f"Database integrity error during {operation}: {exc}{context_str}"
            logger.warning(error_msg)
            return False, error_msg

        if isinstance(exc, (ConnectionError, DisconnectionError)):
            error_msg = f"Database connection error during {operation}: {exc}{context_str}"
            logger.error(error_msg)
            return True, error_msg

        if isinstance(exc, TimeoutError):
            error_msg = f"Database timeout during {operation}: {exc}{context_str}"
            logger.warning(error_msg)
            return True, error_msg

        if isinstance(exc, OperationalError):
            error_msg = f"Database operational error during {operation}: {exc}{context_str}"
            logger.error(error_msg)
            return True, error_msg

        if isinstance(exc, StatementError):
            error_msg = f"Database statement error during {operation}: {exc}{context_str}"
            logger.warning(error_msg)
            return False, error_msg

        error_msg = (
            f"Unexpected database error during {operation}: "
            f"{type(exc).__name__}: {exc}{context_str}"
        )
        logger.error(f"{error_msg}\nTraceback: {traceback.format_exc()}")
        return False, error_msg


def _find_session(args, kwargs) -> Optional[AsyncSession]:
    for value in list(args) + list(kwargs.values()):
        if isinstance(value, AsyncSession):
            return value
    return None


def _named(func, operation_name: Optional[str]) -> Callable:
    """Support bare, empty-call and positional-name decorator usage."""
    def wrap(decorator_factory):
        if func is None:
            return lambda f: decorator_factory(operation_name)(f)
        if callable(func):
            return decorator_factory(operation_name)(func)
        # First positional argument is the operation name
        return lambda f: decorator_factory(func)(f)
    return wrap


def handle_database_exceptions(
    operation_name: Optional[str] = None,
    log_level: str = "error"
) -> Callable:
    """
    Decorator that logs database failures of an async operation and re-raises.

    Args:
        operation_name: Name of the operation for logging (defaults to function name)
        log_level: Logging level for classified database errors

    Returns:
        Decorated coroutine function
    """
    def decorator(func: Callable) -> Callable:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"{func.__name__} must be a coroutine function")

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs) -> Any:
            operation = operation_name or func.__name__
            context = {
                "function": func.__name__,
                "kwargs_keys": list(kwargs.keys()) if kwargs else [],
            }

            try:
                result = await func(*args, **kwargs)
                logger.debug(f"Successfully completed {operation}")
                return result

            except DatabaseErrorHandler.DATABASE_EXCEPTIONS as exc:
                _, error_msg = DatabaseErrorHandler.handle_database_error(
                    exc, operation, context
                )
                getattr(logger, log_level)(error_msg)
                raise

        return async_wrapper

    return decorator


def database_transaction(
    operation_name: Optional[str] = None,
    commit_on_success: bool = True,
    rollback_on_error: bool = True
) -> Callable:
    """
    Decorator to commit the session passed to the operation on success and
    roll it back on error.
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs) -> Any:
            operation = operation_name or func.__name__
            db_session = _find_session(args, kwargs)

            if db_session is None:
                logger.warning(f"No AsyncSession found for transaction operation {operation}")
                return await func(*args, **kwargs)

            try:
                result = await func(*args, **kwargs)

                if commit_on_success:
                    await db_session.commit()
                    logger.debug(f"Transaction committed for {operation}")

                return result

            except Exception:
                if rollback_on_error:
                    try:
                        await db_session.rollback()
                        logger.debug(f"Transaction rolled back for {operation} due to error")
                    except SQLAlchemyError as rollback_exc:
                        logger.error(f"Failed to rollback transaction for {operation}: {rollback_exc}")
                raise

        return async_wrapper

    return decorator


def log_database_operation(
    operation: str,
    level: str = "debug"
) -> Callable:
    """
    Decorator to log the start, completion and failure of an operation.

    Args:
        operation: Description of the operation
        level: Logging level ('debug', 'info', 'warning', 'error')
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs) -> Any:
            logger_method = getattr(logger, level)
            logger_method(f"Starting {operation} via {func.__name__}")

            try:
                result = await func(*args, **kwargs)
                logger_method(f"Completed {operation} via {func.__name__}")
                return result
            except Exception as exc:
                logger_method(f"Failed {operation} via {func.__name__}: {exc}")
                raise

        return async_wrapper

    return decorator


def critical_database_operation(func=None, operation_name: Optional[str] = None) -> Callable:
    """
    Error-logging decorator for reads and writes that must surface failures.

    Can be used with or without parentheses:
        @critical_database_operation
        @critical_database_operation()
        @critical_database_operation("custom name")
    """
    return _named(func, operation_name)(
        lambda name: handle_database_exceptions(operation_name=name, log_level="error")
    )


def transactional_database_operation(func=None, operation_name: Optional[str] = None) -> Callable:
    """
    Combined decorator for write operations: commit/rollback plus error logging.

    Can be used with or without parentheses:
        @transactional_database_operation
        @transactional_database_operation()
        @transactional_database_operation("operation_name")
    """
    def factory(name):
        def decorator(f: Callable) -> Callable:
            transaction_decorated = database_transaction(operation_name=name)(f)
            return handle_database_exceptions(operation_name=name)(transaction_decorated)
        return decorator

    return _named(func, operation_name)(factory)

"""
Error handling utilities for the keybind menu.

Provides the logging-plus-raise and logging-plus-fallback patterns used by
the terminal guard and the config loader.
"""

import logging
from typing import Optional, Any, Type

logger = logging.getLogger('KeybindMenu.ErrorHandler')


class ErrorHandlerUtil:
    """Static helpers for consistent error logging and raising."""

    @staticmethod
    def log_and_raise(
        message: str,
        exception_class: Type[Exception] = RuntimeError,
        logger_instance: Optional[logging.Logger] = None,
        cause: Optional[Exception] = None,
        log_level: int = logging.ERROR
    ) -> None:
        """
        Log an error message and raise an exception.

        Args:
            message: Error message to log and include in exception
            exception_class: Type of exception to raise (default: RuntimeError)
            logger_instance: Logger to use (default: module logger)
            cause: Original exception to chain from (using 'from cause')
            log_level: Logging level to use (default: ERROR)

        Raises:
            The specified exception_class with the provided message
        """
        log_instance = logger_instance or logger
        log_instance.log(log_level, message)

        if cause:
            raise exception_class(message) from cause
        raise exception_class(message)

    @staticmethod
    def log_and_raise_initialization_error(
        component_name: str,
        exception_class: Type[Exception] = RuntimeError,
        logger_instance: Optional[logging.Logger] = None,
        cause: Optional[Exception] = None
    ) -> None:
        """Standard pattern for component initialization failures."""
        message = f"{component_name} failed to initialize"
        if cause is not None:
            message += f": {cause}"
        ErrorHandlerUtil.log_and_raise(
            message=message,
            exception_class=exception_class,
            logger_instance=logger_instance,
            cause=cause
        )

    @staticmethod
    def handle_with_fallback(
        operation_callable,
        fallback_value: Any = None,
        error_message: str = "Operation failed",
        logger_instance: Optional[logging.Logger] = None,
        log_level: int = logging.WARNING
    ) -> Any:
        """
        Execute an operation, returning fallback_value if it raises.

        Args:
            operation_callable: Function/callable to execute
            fallback_value: Value to return if operation fails
            error_message: Message to log on failure
            logger_instance: Logger to use (default: module logger)
            log_level: Logging level for errors (default: WARNING)
        """
        try:
            return operation_callable()
        except Exception as e:
            log_instance = logger_instance or logger
            log_instance.log(log_level, f"{error_message}: {e}")
            return fallback_value

    @staticmethod
    def log_and_continue(
        error: Exception,
        context: str = "Operation",
        logger_instance: Optional[logging.Logger] = None,
        log_level: int = logging.ERROR
    ) -> None:
        """Log an error and continue execution (no exception raised)."""
        log_instance = logger_instance or logger
        log_instance.log(log_level, f"{context} failed: {error}")

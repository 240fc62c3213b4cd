"""
Error types and centralized error handling for license-notice.

Provides the exception hierarchy raised by the record layer plus a small
structured error handler used by the CLI to report problems consistently.
"""

import logging
import sys
import traceback
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional


class LicenseNoticeError(Exception):
    """Base class for all license-notice errors."""


class InvalidRecordError(LicenseNoticeError, ValueError):
    """Raised when a dependency record cannot be built or rendered."""

    def __init__(
        self,
        message: str,
        missing_fields: Optional[List[str]] = None,
        record_name: Optional[str] = None,
    ):
        super().__init__(message)
        self.missing_fields = list(missing_fields or [])
        self.record_name = record_name


class ErrorLevel(Enum):
    """Error severity levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ErrorCategory(Enum):
    """Error categories for better classification."""

    VALIDATION = "VALIDATION"
    PARSING = "PARSING"
    CONFIGURATION = "CONFIGURATION"
    FILESYSTEM = "FILESYSTEM"


@dataclass
class ErrorContext:
    """Structured error context information."""

    level: ErrorLevel
    category: ErrorCategory
    message: str
    module: str
    function: str
    details: Dict[str, Any] = field(default_factory=dict)
    exception: Optional[Exception] = None
    traceback_info: Optional[str] = None
    suggestions: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error context to dictionary for logging."""
        return {
            "level": self.level.value,
            "category": self.category.value,
            "message": self.message,
            "module": self.module,
            "function": self.function,
            "details": self.details,
            "exception_type": type(self.exception).__name__ if self.exception else None,
            "exception_message": str(self.exception) if self.exception else None,
            "traceback": self.traceback_info,
            "suggestions": self.suggestions,
        }


DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Error callback type
ErrorCallback = Callable[[ErrorContext], None]

_LEVEL_MAP = {
    ErrorLevel.DEBUG: logging.DEBUG,
    ErrorLevel.INFO: logging.INFO,
    ErrorLevel.WARNING: logging.WARNING,
    ErrorLevel.ERROR: logging.ERROR,
    ErrorLevel.CRITICAL: logging.CRITICAL,
}


class ErrorHandler:
    """
    Centralized error handler.

    Logs every handled error, keeps per-category counters and fans the
    error context out to registered callbacks.
    """

    def __init__(
        self,
        logger_name: str = "license_notice",
        log_level: int = logging.WARNING,
        enable_callbacks: bool = True,
        log_format: str = DEFAULT_LOG_FORMAT,
    ):
        self.logger = logging.getLogger(logger_name)
        self.logger.setLevel(log_level)
        if not self.logger.handlers:
            self.logger.addHandler(logging.StreamHandler(sys.stderr))
        for handler in self.logger.handlers:
            handler.setFormatter(logging.Formatter(log_format))

        self.enable_callbacks = enable_callbacks
        self.error_callbacks: Dict[ErrorCategory, List[ErrorCallback]] = {}
        self.global_callbacks: List[ErrorCallback] = []
        self.error_stats: Dict[str, int] = {}

    def register_callback(
        self, callback: ErrorCallback, category: Optional[ErrorCategory] = None
    ):
        """
        Register error callback.

        Args:
            callback: Function to call on errors
            category: Error category to filter, None for all errors
        """
        if not self.enable_callbacks:
            return

        if category is None:
            self.global_callbacks.append(callback)
        else:
            self.error_callbacks.setdefault(category, []).append(callback)

    def handle_error(
        self,
        level: ErrorLevel,
        category: ErrorCategory,
        message: str,
        module: str,
        function: str,
        exception: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ) -> ErrorContext:
        """
        Handle an error with logging and callbacks.

        Returns:
            ErrorContext: The created error context
        """
        context = ErrorContext(
            level=level,
            category=category,
            message=message,
            module=module,
            function=function,
            details=details or {},
            exception=exception,
            traceback_info=traceback.format_exc() if exception else None,
            suggestions=suggestions or [],
        )

        stat_key = f"{category.value}_{level.value}"
        self.error_stats[stat_key] = self.error_stats.get(stat_key, 0) + 1

        log_data = {
            "category": category.value,
            "module": module,
            "function": function,
            "details": context.details,
        }
        if exception:
            log_data["exception"] = type(exception).__name__
        self.logger.log(_LEVEL_MAP[level], f"{message} | {log_data}")

        if self.enable_callbacks:
            callbacks = self.error_callbacks.get(category, []) + self.global_callbacks
            for callback in callbacks:
                try:
                    callback(context)
                except Exception as cb_error:
                    self.logger.error(f"Error in callback: {cb_error}")

        return context

    def warning(
        self,
        category: ErrorCategory,
        message: str,
        module: str,
        function: str,
        **kwargs,
    ) -> ErrorContext:
        """Handle warning level error."""
        return self.handle_error(
            ErrorLevel.WARNING, category, message, module, function, **kwargs
        )

    def error(
        self,
        category: ErrorCategory,
        message: str,
        module: str,
        function: str,
        **kwargs,
    ) -> ErrorContext:
        """Handle error level error."""
        return self.handle_error(
            ErrorLevel.ERROR, category, message, module, function, **kwargs
        )

    def get_error_stats(self) -> Dict[str, int]:
        """Get error statistics."""
        return self.error_stats.copy()

    def reset_stats(self):
        """Reset error statistics."""
        self.error_stats.clear()


# Global error handler instance
_global_error_handler: Optional[ErrorHandler] = None


def get_error_handler() -> ErrorHandler:
    """Get the global error handler instance."""
    global _global_error_handler
    if _global_error_handler is None:
        _global_error_handler = ErrorHandler()
    return _global_error_handler


def setup_error_handling(
    log_level: int = logging.WARNING,
    enable_callbacks: bool = True,
    logger_name: str = "license_notice",
    log_format: str = DEFAULT_LOG_FORMAT,
) -> ErrorHandler:
    """Replace the global error handler with a freshly configured one."""
    global _global_error_handler
    _global_error_handler = ErrorHandler(
        logger_name, log_level, enable_callbacks, log_format
    )
    return _global_error_handler


def log_validation_error(
    error: InvalidRecordError,
    module: str,
    function: str,
    source: Optional[str] = None,
) -> ErrorContext:
    """
    Convenience function for reporting an invalid dependency record.

    Args:
        error: The validation failure
        module: Module name
        function: Function name
        source: Name of the document the record came from
    """
    details: Dict[str, Any] = {"missing_fields": error.missing_fields}
    if error.record_name:
        details["record"] = error.record_name
    if source is not None:
        details["source"] = source

    return get_error_handler().error(
        ErrorCategory.VALIDATION,
        str(error),
        module,
        function,
        details=details,
        exception=error,
        suggestions=["Every record needs name, version and license"],
    )

"""
Exception types and the shared error reporting helper.

Configuration problems raise ValidationError. Repository and metrics-source
failures raise StorageError and MetricsSourceError so a historian tick can
report them without stopping the sampling loop.
"""

import logging
import sys
from enum import Enum
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


# Log level and whether the traceback is attached.
_SEVERITY_LEVELS = {
    ErrorSeverity.DEBUG: (logging.DEBUG, True),
    ErrorSeverity.INFO: (logging.INFO, False),
    ErrorSeverity.WARNING: (logging.WARNING, True),
    ErrorSeverity.ERROR: (logging.ERROR, False),
    ErrorSeverity.CRITICAL: (logging.CRITICAL, True),
}


class ValidationError(Exception):
    """A configuration value or command-line argument failed validation."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


class StorageError(Exception):
    """Raised by a sample repository when a read or append cannot be completed."""


class MetricsSourceError(Exception):
    """Raised by a metrics source when the runtime figures cannot be read."""


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Log ``error`` as "Error in <context>: <error>" and optionally re-raise it.

    Args:
        error: The exception that occurred
        context: Where the error occurred, e.g. "historian tick"
        severity: An ErrorSeverity or its lower-case name
        reraise: Whether to re-raise the exception after logging
        logger: Logger instance to use (defaults to this module's logger)
    """
    effective_logger = logger or globals()['logger']
    if isinstance(severity, str):
        severity = ErrorSeverity(severity.lower())

    level, with_traceback = _SEVERITY_LEVELS[severity]
    effective_logger.log(level, f"Error in {context}: {error}", exc_info=with_traceback)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)


def handle_storage_error(error: Exception, context: str, **kwargs) -> None:
    """Handle repository-related errors."""
    handle_error(error, f"storage {context}", **kwargs)


def handle_cli_error(error: Exception, context: str, **kwargs) -> None:
    """Log a CLI error and exit with ``exit_code`` (default 1)."""
    exit_code = kwargs.pop('exit_code', 1)
    kwargs.setdefault('severity', ErrorSeverity.ERROR)
    handle_error(error, f"CLI {context}", reraise=False, **kwargs)
    sys.exit(exit_code)

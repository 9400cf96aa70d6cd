"""
Validation and error handling for the mystats package.

This module provides input validation and error handling with consistent
error reporting across the application.
"""

# Core exception classes and error handling
from .exceptions import (
    ErrorSeverity,
    MetricsSourceError,
    StorageError,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
    handle_storage_error,
)

# Validation functions
from .validators import (
    validate_cut_points,
    validate_enum_choice,
    validate_node_id,
    validate_positive_float,
    validate_positive_integer,
)

__all__ = [
    # Core functionality
    "ErrorSeverity",
    "MetricsSourceError",
    "StorageError",
    "ValidationError",
    "handle_cli_error",
    "handle_config_error",
    "handle_error",
    "handle_storage_error",
    # Validators
    "validate_cut_points",
    "validate_enum_choice",
    "validate_node_id",
    "validate_positive_float",
    "validate_positive_integer",
]

"""Error Handling

Key components:
- ErrorCode: error code taxonomy (validation, usage, internal)
- AppError: immutable error with context and metadata
- AppErrorException and its subclasses: raised for API misuse

Usage:
    from unival.core.errors import FormUsageError, invalid_config

    if not isinstance(config, list):
        raise invalid_config(config, origin="builder")
"""
from .types import (
    AppError,
    AppErrorException,
    ErrorCode,
    ErrorContext,
    FormUsageError,
    RuleConfigurationError,
)

from .builders import (
    usage_error,
    invalid_config,
    missing_adapter,
    invalid_pattern,
    invalid_options,
)

__all__ = [
    "AppError",
    "AppErrorException",
    "ErrorCode",
    "ErrorContext",
    "FormUsageError",
    "RuleConfigurationError",
    "usage_error",
    "invalid_config",
    "missing_adapter",
    "invalid_pattern",
    "invalid_options",
]

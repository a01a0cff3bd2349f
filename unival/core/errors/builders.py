"""Error Builders

Ergonomic constructors for the usage errors raised by the builder and the
validation engine.
"""
from typing import Any

from .types import AppError, ErrorCode, ErrorContext, FormUsageError, RuleConfigurationError


def usage_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E7000_USAGE_GENERIC,
    origin: str = "",
    cause: Exception | None = None,
    **metadata,
) -> AppError:
    """Create a configuration/usage error."""
    return AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        metadata={k: v for k, v in metadata.items() if v is not None},
        cause=cause,
    )


def invalid_config(config: Any, origin: str = "") -> FormUsageError:
    return FormUsageError(usage_error(
        f"config must be a list of field entries, got {type(config).__name__}",
        code=ErrorCode.E7001_INVALID_ARGUMENT,
        origin=origin,
        argument="config",
        received=type(config).__name__,
    ))


def missing_adapter(origin: str = "") -> FormUsageError:
    return FormUsageError(usage_error(
        "an adapter is required to render the form",
        code=ErrorCode.E7002_MISSING_ADAPTER,
        origin=origin,
        argument="adapter",
    ))


def invalid_pattern(
    source: str, cause: Exception, *, field: str | None = None, origin: str = ""
) -> RuleConfigurationError:
    where = f" for field '{field}'" if field else ""
    return RuleConfigurationError(usage_error(
        f"Invalid pattern{where}: {source!r} ({cause})",
        code=ErrorCode.E7011_INVALID_PATTERN,
        origin=origin,
        cause=cause,
        field=field,
        pattern=source,
    ))


def invalid_options(cause: Exception, origin: str = "") -> FormUsageError:
    return FormUsageError(usage_error(
        f"render options could not be resolved: {cause}",
        code=ErrorCode.E7001_INVALID_ARGUMENT,
        origin=origin,
        cause=cause,
        argument="options",
    ))

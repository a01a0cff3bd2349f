"""Error Types

Typed error codes and an immutable AppError carrying full context. Usage
errors are raised as AppErrorException subclasses; per-field validation
failures are never raised and only reuse the E2xxx codes.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4


class ErrorCode(Enum):
    """Hierarchical error code taxonomy.

    E2xxx: Field validation failures
    E7xxx: Configuration / API usage errors
    """
    # Validation (E2xxx)
    E2000_VALIDATION_GENERIC = 2000
    E2001_REQUIRED_FIELD_MISSING = 2001
    E2002_INVALID_FORMAT = 2002
    E2003_OUT_OF_RANGE = 2003
    E2010_INVALID_EMAIL = 2010
    E2013_INVALID_URL = 2013
    E2014_INVALID_NUMBER = 2014
    E2030_CUSTOM_RULE_FAILED = 2030

    # Configuration / usage (E7xxx)
    E7000_USAGE_GENERIC = 7000
    E7001_INVALID_ARGUMENT = 7001
    E7002_MISSING_ADAPTER = 7002
    E7011_INVALID_PATTERN = 7011

    @property
    def category(self) -> str:
        """Human-readable error category."""
        return "validation" if 2000 <= self.value < 3000 else "usage"


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Immutable context for error tracing and debugging."""
    correlation_id: str = field(default_factory=lambda: str(uuid4())[:8])
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    origin: str = ""


@dataclass(frozen=True, slots=True)
class AppError:
    """Base application error with full context.

    All errors carry:
    - Typed error code from taxonomy
    - Human-readable message
    - Structured metadata for debugging
    - Optional cause for error chaining
    """
    code: ErrorCode
    message: str
    context: ErrorContext = field(default_factory=ErrorContext)
    metadata: dict = field(default_factory=dict)
    cause: Exception | None = None

    @property
    def error_id(self) -> str:
        """Unique identifier for this error instance."""
        return f"{self.code.name}:{self.context.correlation_id}"

    def to_dict(self) -> dict:
        """Serialize error for machine-readable output."""
        return {
            "error": {
                "code": self.code.name,
                "code_num": self.code.value,
                "message": self.message,
                "category": self.code.category,
                "correlation_id": self.context.correlation_id,
                "origin": self.context.origin,
                "timestamp": self.context.timestamp.isoformat(),
                "metadata": self.metadata,
            }
        }

    def __str__(self) -> str:
        return f"[{self.code.name}] {self.message}"


class AppErrorException(Exception):
    """Exception wrapper for AppError.

    Raised where a caller misuses the API; the wrapped AppError keeps the
    code and metadata for reporting.
    """

    def __init__(self, error: AppError):
        self.error = error
        super().__init__(str(error))

    @property
    def code(self) -> ErrorCode:
        return self.error.code


class FormUsageError(AppErrorException, TypeError):
    """Invalid arguments passed to the form builder."""


class RuleConfigurationError(AppErrorException, ValueError):
    """A rule that cannot be evaluated, such as a malformed pattern."""

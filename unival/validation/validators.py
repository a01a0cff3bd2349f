"""Compositional Validator System

Atomic validators for the built-in field rules. Every check works on the
string form of a value, the way submitted form data arrives. Validators
are chained with ``AllOf``, which stops at the first failing check.

Features:
- Frozen dataclass validators for immutability
- Rich validation metadata for error context
- Short-circuit evaluation
"""
from __future__ import annotations

import math
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit

from unival.core.errors import ErrorCode

# Loose shape: non-blank local part, "@", non-blank domain with a dot
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

URL_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")

# Schemes whose URLs always carry a host; "http:foo" names host "foo"
HOST_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss"})

# ASCII decimal literal: no digit separators, no non-ASCII digits
DECIMAL_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$", re.ASCII)

# Unsigned hex, binary and octal integer literals
PREFIXED_INTEGER = re.compile(r"^0(?:[xX][0-9a-fA-F]+|[bB][01]+|[oO][0-7]+)$")


def as_text(value: Any) -> str:
    """String form of a submitted value."""
    if value is None: return ""
    if isinstance(value, bool): return "true" if value else "false"
    if isinstance(value, float) and value.is_integer(): return str(int(value))
    return str(value)


def is_empty(value: Any) -> bool:
    return value is None or as_text(value).strip() == ""


def parse_number(text: str) -> float | None:
    """Finite number from a numeric literal, or None."""
    stripped = text.strip()
    if PREFIXED_INTEGER.match(stripped):
        return float(int(stripped, 0))
    if not DECIMAL_NUMBER.match(stripped):
        return None
    num = float(stripped)
    return num if math.isfinite(num) else None


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Result of a single check with rich context."""
    is_valid: bool
    error_message: str | None = None
    error_code: ErrorCode | None = None
    constraint: str | None = None
    expected: Any = None
    actual: Any = None

    @classmethod
    def valid(cls) -> CheckResult: return cls(is_valid=True)

    @classmethod
    def invalid(cls, message: str, code: ErrorCode = ErrorCode.E2000_VALIDATION_GENERIC, *,
                constraint: str | None = None, expected: Any = None, actual: Any = None) -> CheckResult:
        return cls(is_valid=False, error_message=message, error_code=code, constraint=constraint,
            expected=expected, actual=actual)


class AtomicValidator(ABC):
    """Base class for atomic validators.

    Validators are immutable; chain them with AllOf.
    """

    @abstractmethod
    def validate(self, value: Any) -> CheckResult:
        """Validate a value. Returns CheckResult."""

    @property
    @abstractmethod
    def constraint_name(self) -> str:
        """Constraint name reported with a failure."""

    def __call__(self, value: Any) -> CheckResult: return self.validate(value)

    def with_message(self, message: str) -> WithMessage: return WithMessage(self, message)


# ============================================================================
# Presence
# ============================================================================

@dataclass(frozen=True, slots=True)
class Required(AtomicValidator):
    """Value must be present and not blank."""

    @property
    def constraint_name(self) -> str:
        return "required"

    def validate(self, value: Any) -> CheckResult:
        if is_empty(value):
            return CheckResult.invalid(
                "This field is required",
                ErrorCode.E2001_REQUIRED_FIELD_MISSING,
                constraint=self.constraint_name,
                expected="non-empty value",
                actual=value,
            )
        return CheckResult.valid()


# ============================================================================
# Format Validators
# ============================================================================

@dataclass(frozen=True, slots=True)
class EmailFormat(AtomicValidator):
    """Loose email shape check."""

    @property
    def constraint_name(self) -> str:
        return "email"

    def validate(self, value: Any) -> CheckResult:
        if not EMAIL_PATTERN.match(text := as_text(value)):
            return CheckResult.invalid(
                "Invalid email address",
                ErrorCode.E2010_INVALID_EMAIL,
                constraint=self.constraint_name,
                expected="local@domain.tld",
                actual=text,
            )
        return CheckResult.valid()


@dataclass(frozen=True, slots=True)
class URLFormat(AtomicValidator):
    """Value must parse as an absolute URL."""

    @property
    def constraint_name(self) -> str:
        return "url"

    def _parses(self, text: str) -> bool:
        text = text.strip()
        if any(ch.isspace() for ch in text): return False
        try:
            parts = urlsplit(text)
        except ValueError:
            return False
        if not parts.scheme or not URL_SCHEME.match(parts.scheme): return False
        if parts.scheme.lower() not in HOST_SCHEMES: return bool(text.partition(":")[2])
        host = parts.netloc or parts.path.lstrip("/").split("/", 1)[0]
        return bool(host)

    def validate(self, value: Any) -> CheckResult:
        if not self._parses(text := as_text(value)):
            return CheckResult.invalid(
                "Invalid URL",
                ErrorCode.E2013_INVALID_URL,
                constraint=self.constraint_name,
                expected="absolute URL with scheme",
                actual=text[:50] + ("..." if len(text) > 50 else ""),
            )
        return CheckResult.valid()


@dataclass(frozen=True, slots=True)
class NumericFormat(AtomicValidator):
    """Value must read as a finite number."""

    @property
    def constraint_name(self) -> str:
        return "number"

    def validate(self, value: Any) -> CheckResult:
        if parse_number(text := as_text(value)) is None:
            return CheckResult.invalid(
                "Must be a number",
                ErrorCode.E2014_INVALID_NUMBER,
                constraint=self.constraint_name,
                expected="finite number",
                actual=text,
            )
        return CheckResult.valid()


# ============================================================================
# Length / Range / Pattern
# ============================================================================

@dataclass(frozen=True, slots=True)
class StringLength(AtomicValidator):
    """Length bounds on the string form of the value."""
    min_length: int | None = None
    max_length: int | None = None

    @property
    def constraint_name(self) -> str:
        if self.min_length is not None and self.max_length is not None:
            return f"length[{self.min_length},{self.max_length}]"
        if self.min_length is not None:
            return f"min_length[{self.min_length}]"
        if self.max_length is not None:
            return f"max_length[{self.max_length}]"
        return "string_length"

    def validate(self, value: Any) -> CheckResult:
        length = len(as_text(value))

        if self.min_length is not None and length < self.min_length:
            return CheckResult.invalid(
                f"Must be at least {self.min_length} characters",
                ErrorCode.E2003_OUT_OF_RANGE,
                constraint=f"min_length[{self.min_length}]",
                expected=f">= {self.min_length} characters",
                actual=f"{length} characters",
            )

        if self.max_length is not None and length > self.max_length:
            return CheckResult.invalid(
                f"Must be at most {self.max_length} characters",
                ErrorCode.E2003_OUT_OF_RANGE,
                constraint=f"max_length[{self.max_length}]",
                expected=f"<= {self.max_length} characters",
                actual=f"{length} characters",
            )

        return CheckResult.valid()


@dataclass(frozen=True, slots=True)
class NumericRange(AtomicValidator):
    """Inclusive numeric bounds. Non-numeric values are skipped, not failed."""
    min_value: float | int | None = None
    max_value: float | int | None = None

    @property
    def constraint_name(self) -> str:
        parts = []
        if self.min_value is not None: parts.append(f">={self.min_value}")
        if self.max_value is not None: parts.append(f"<={self.max_value}")
        return f"range[{', '.join(parts)}]" if parts else "numeric"

    def validate(self, value: Any) -> CheckResult:
        if (num := parse_number(as_text(value))) is None:
            return CheckResult.valid()

        if self.min_value is not None and num < self.min_value:
            return CheckResult.invalid(
                f"Must be at least {self.min_value}",
                ErrorCode.E2003_OUT_OF_RANGE,
                constraint=f"min_value[{self.min_value}]",
                expected=f">= {self.min_value}",
                actual=num,
            )

        if self.max_value is not None and num > self.max_value:
            return CheckResult.invalid(
                f"Must be at most {self.max_value}",
                ErrorCode.E2003_OUT_OF_RANGE,
                constraint=f"max_value[{self.max_value}]",
                expected=f"<= {self.max_value}",
                actual=num,
            )

        return CheckResult.valid()


@dataclass(frozen=True, slots=True)
class RegexPattern(AtomicValidator):
    """String form must contain a match for the compiled pattern."""
    pattern: re.Pattern

    @property
    def constraint_name(self) -> str:
        return f"pattern[{self.pattern.pattern}]"

    def validate(self, value: Any) -> CheckResult:
        if not self.pattern.search(text := as_text(value)):
            return CheckResult.invalid(
                "Invalid format",
                ErrorCode.E2002_INVALID_FORMAT,
                constraint=self.constraint_name,
                expected=f"match pattern '{self.pattern.pattern}'",
                actual=text[:50] + ("..." if len(text) > 50 else ""),
            )
        return CheckResult.valid()


# ============================================================================
# Combinators
# ============================================================================

@dataclass(frozen=True, slots=True)
class AllOf(AtomicValidator):
    """All validators must pass, evaluated in order."""
    validators: tuple[AtomicValidator, ...]

    def __init__(self, *validators: AtomicValidator):
        object.__setattr__(self, "validators", tuple(validators))

    @property
    def constraint_name(self) -> str:
        return f"all_of[{', '.join(v.constraint_name for v in self.validators)}]"

    def validate(self, value: Any) -> CheckResult:
        for v in self.validators:
            if not (result := v.validate(value)).is_valid: return result
        return CheckResult.valid()


@dataclass(frozen=True, slots=True)
class WithMessage(AtomicValidator):
    """Wrapper to override error message."""
    validator: AtomicValidator
    message: str

    @property
    def constraint_name(self) -> str:
        return self.validator.constraint_name

    def validate(self, value: Any) -> CheckResult:
        if (result := self.validator.validate(value)).is_valid: return result
        return CheckResult.invalid(self.message, result.error_code or ErrorCode.E2000_VALIDATION_GENERIC,
            constraint=result.constraint, expected=result.expected, actual=result.actual)

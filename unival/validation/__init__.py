"""Declarative Field Validation

Rules are written per field as a compact string or as a mapping, and are
normalized into a RuleDescriptor before evaluation.

Usage:
    from unival.validation import validate

    result = await validate(
        {"email": "ada@example.com", "age": "17"},
        {"email": "required|email", "age": "number|minValue:18"},
    )
    result.is_valid   # False
    result.errors     # {"age": "Must be at least 18"}
"""
from .rules import (
    RuleDescriptor,
    UIOptions,
    normalize_rules,
)

from .validators import (
    CheckResult,
    AtomicValidator,
    Required,
    EmailFormat,
    URLFormat,
    NumericFormat,
    StringLength,
    NumericRange,
    RegexPattern,
    AllOf,
    WithMessage,
    as_text,
    is_empty,
    parse_number,
)

from .engine import (
    FieldViolation,
    ValidationResult,
    build_validator,
    check_value,
    validate,
    validate_sync,
)

__all__ = [
    # Rules
    "RuleDescriptor",
    "UIOptions",
    "normalize_rules",
    # Validators
    "CheckResult",
    "AtomicValidator",
    "Required",
    "EmailFormat",
    "URLFormat",
    "NumericFormat",
    "StringLength",
    "NumericRange",
    "RegexPattern",
    "AllOf",
    "WithMessage",
    "as_text",
    "is_empty",
    "parse_number",
    # Engine
    "FieldViolation",
    "ValidationResult",
    "build_validator",
    "check_value",
    "validate",
    "validate_sync",
]

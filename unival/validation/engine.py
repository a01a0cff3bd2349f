"""Validation Engine

Evaluates normalized rules against a record. Each field runs as its own
coroutine and stops at the first failing rule, in this order:

    required -> (empty? stop) -> email | url | number -> min -> max
    -> min_value -> max_value -> pattern -> custom validator

Field coroutines only write their own key of the result, so they are
joined with ``asyncio.gather`` and need no lock. No timeout is applied;
wrap the call in ``asyncio.wait_for`` when a deadline is needed.
"""
from __future__ import annotations

import asyncio
import inspect
import re
from dataclasses import dataclass, field
from typing import Any, Mapping

from unival.core.errors import ErrorCode
from unival.core.logging import validation_logger

from .rules import RuleDescriptor, normalize_rules
from .validators import (
    AllOf,
    AtomicValidator,
    CheckResult,
    EmailFormat,
    NumericFormat,
    NumericRange,
    RegexPattern,
    Required,
    StringLength,
    URLFormat,
    is_empty,
)

log = validation_logger()

DEFAULT_INVALID_MESSAGE = "Invalid value"


@dataclass(frozen=True, slots=True)
class FieldViolation:
    """The single failure reported for a field."""
    field: str
    constraint: str
    message: str
    code: ErrorCode = ErrorCode.E2000_VALIDATION_GENERIC

    @classmethod
    def from_check(cls, field_name: str, result: CheckResult) -> FieldViolation:
        return cls(field=field_name, constraint=result.constraint or "invalid",
            message=result.error_message or DEFAULT_INVALID_MESSAGE,
            code=result.error_code or ErrorCode.E2000_VALIDATION_GENERIC)

    def to_dict(self) -> dict[str, Any]:
        return {"field": self.field, "constraint": self.constraint, "message": self.message, "code": self.code.name}


@dataclass(slots=True)
class ValidationResult:
    """Outcome of validating a record.

    ``errors`` holds one message per failed field and nothing for fields
    that passed; ``details`` carries the matching FieldViolation.
    """
    details: dict[str, FieldViolation] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.details

    @property
    def errors(self) -> dict[str, str]:
        return {name: violation.message for name, violation in self.details.items()}

    def to_dict(self) -> dict[str, Any]:
        """Serialize as ``{"isValid": ..., "errors": {...}}``."""
        return {"isValid": self.is_valid, "errors": self.errors}


def _messages(descriptor: RuleDescriptor) -> Mapping[str, str]:
    messages = descriptor.extras.get("messages")
    return messages if isinstance(messages, Mapping) else {}


def build_validator(descriptor: RuleDescriptor, pattern: re.Pattern | None = None) -> AllOf:
    """Chain of built-in checks applied to a non-empty value, in evaluation order.

    ``pattern`` is the compiled form of ``descriptor.pattern``; it is compiled
    here when not given.
    """
    messages = _messages(descriptor)
    steps: list[tuple[str, AtomicValidator]] = []

    # Exactly one type check, email first
    if descriptor.email:
        steps.append(("email", EmailFormat()))
    elif descriptor.url:
        steps.append(("url", URLFormat()))
    elif descriptor.number:
        steps.append(("number", NumericFormat()))

    if descriptor.min is not None:
        steps.append(("min", StringLength(min_length=descriptor.min)))
    if descriptor.max is not None:
        steps.append(("max", StringLength(max_length=descriptor.max)))
    if descriptor.min_value is not None:
        steps.append(("min_value", NumericRange(min_value=descriptor.min_value)))
    if descriptor.max_value is not None:
        steps.append(("max_value", NumericRange(max_value=descriptor.max_value)))

    if pattern is None:
        pattern = descriptor.compiled_pattern()
    if pattern is not None:
        steps.append(("pattern", RegexPattern(pattern)))

    return AllOf(*(v.with_message(messages[key]) if key in messages else v for key, v in steps))


def check_value(
    descriptor: RuleDescriptor,
    value: Any,
    *,
    field_name: str = "",
    pattern: re.Pattern | None = None,
) -> FieldViolation | None:
    """Run the built-in rules for one value. Returns the first violation, if any."""
    if descriptor.required:
        required = Required()
        if "required" in (messages := _messages(descriptor)):
            required = required.with_message(messages["required"])
        if not (result := required.validate(value)).is_valid:
            return FieldViolation.from_check(field_name, result)

    if is_empty(value):
        return None

    if not (result := build_validator(descriptor, pattern).validate(value)).is_valid:
        return FieldViolation.from_check(field_name, result)
    return None


async def _run_custom(
    field_name: str, descriptor: RuleDescriptor, value: Any, record: Mapping[str, Any]
) -> FieldViolation | None:
    message = _messages(descriptor).get("custom", DEFAULT_INVALID_MESSAGE)
    try:
        outcome = descriptor.validate(value, record)
        if inspect.isawaitable(outcome):
            outcome = await outcome
    except Exception:
        # Only this field fails; the rest of the batch still settles
        log.exception("custom_validator_failed", field=field_name)
        return FieldViolation(field=field_name, constraint="custom", message=message,
            code=ErrorCode.E2030_CUSTOM_RULE_FAILED)

    if isinstance(outcome, str):
        return FieldViolation(field=field_name, constraint="custom", message=outcome,
            code=ErrorCode.E2030_CUSTOM_RULE_FAILED)
    if outcome is False:
        return FieldViolation(field=field_name, constraint="custom", message=message,
            code=ErrorCode.E2030_CUSTOM_RULE_FAILED)
    return None


async def validate(data: Mapping[str, Any] | None, rules: Mapping[str, Any] | None) -> ValidationResult:
    """Validate ``data`` against per-field ``rules``.

    Only fields named in ``rules`` are checked. Rules are normalized and
    patterns compiled before any field runs, so a malformed pattern raises
    RuleConfigurationError instead of producing a field error.
    """
    record: Mapping[str, Any] = data or {}
    prepared: dict[str, tuple[RuleDescriptor, re.Pattern | None]] = {}
    for name, raw in (rules or {}).items():
        descriptor = normalize_rules(raw)
        prepared[name] = (descriptor, descriptor.compiled_pattern(name))

    result = ValidationResult()

    async def run_field(name: str, descriptor: RuleDescriptor, pattern: re.Pattern | None) -> None:
        value = record.get(name)
        violation = check_value(descriptor, value, field_name=name, pattern=pattern)
        if violation is None and descriptor.validate is not None and not is_empty(value):
            violation = await _run_custom(name, descriptor, value, record)
        if violation is not None:
            result.details[name] = violation

    await asyncio.gather(*(run_field(name, d, p) for name, (d, p) in prepared.items()))

    log.debug("validation_completed", fields=len(prepared), errors=len(result.details))
    return result


def validate_sync(data: Mapping[str, Any] | None, rules: Mapping[str, Any] | None) -> ValidationResult:
    """Blocking variant of ``validate`` for callers without a running event loop."""
    return asyncio.run(validate(data, rules))

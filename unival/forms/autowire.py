"""Submit coordination for a rendered form.

The page-side layer (capturing the submit event, reading the controls,
painting messages, sending the request) lives outside this package. It
plugs in through two capabilities:

- FormSurface: read submitted values and paint errors on the page
- Submitter: deliver a valid payload to the form's action

SubmitCoordinator drives one submit cycle against them. Neither the
validation engine nor the renderers import this module.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Protocol, runtime_checkable

from unival.core.config import get_settings
from unival.core.logging import render_logger

from .form import Form

log = render_logger()


@runtime_checkable
class FormSurface(Protocol):
    """Where values are read from and errors are painted."""

    def read_values(self) -> dict[str, Any]: ...

    def clear_errors(self) -> None: ...

    def show_error(self, field: str, message: str) -> None: ...

    def mark_invalid(self, field: str, css_class: str) -> None: ...


@dataclass(frozen=True, slots=True)
class SubmitResponse:
    """What the submitter got back from the form action."""
    ok: bool
    body: dict[str, Any] = field(default_factory=dict)
    status: int | None = None


@runtime_checkable
class Submitter(Protocol):
    """Delivers a validated payload, as JSON, to the form action."""

    async def submit(self, action: str, method: str, payload: Mapping[str, Any]) -> SubmitResponse: ...


class OutcomeStatus(str, Enum):
    INVALID = "invalid"        # client-side validation failed, nothing sent
    SUBMITTED = "submitted"    # action accepted the payload
    REJECTED = "rejected"      # action answered with a non-ok response
    FAILED = "failed"          # submitter raised


@dataclass(slots=True)
class Outcome:
    status: OutcomeStatus
    errors: dict[str, str] = field(default_factory=dict)
    response: SubmitResponse | None = None
    exception: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.SUBMITTED


class SubmitCoordinator:
    """Validate, paint errors, then submit through the injected capabilities."""

    def __init__(
        self,
        form: Form,
        surface: FormSurface,
        submitter: Submitter,
        *,
        action: str | None = None,
        method: str | None = None,
    ):
        self.form, self.surface, self.submitter = form, surface, submitter
        self.action = action or get_settings().FORM_ACTION
        self.method = method or get_settings().FORM_METHOD

    def paint_errors(self, errors: Mapping[str, Any]) -> None:
        for name, message in errors.items():
            self.surface.show_error(name, str(message))
            self.surface.mark_invalid(name, self.form.input_error_class)

    async def handle_submit(self) -> Outcome:
        """Run one submit cycle and report what happened."""
        self.surface.clear_errors()
        data = self.surface.read_values()

        result = await self.form.validate(data)
        if not result.is_valid:
            self.paint_errors(result.errors)
            return Outcome(OutcomeStatus.INVALID, errors=result.errors)

        try:
            response = await self.submitter.submit(self.action, self.method, data)
        except Exception as exc:
            log.exception("submission_failed", action=self.action, method=self.method)
            return Outcome(OutcomeStatus.FAILED, exception=exc)

        if response.ok:
            return Outcome(OutcomeStatus.SUBMITTED, response=response)

        server_errors = response.body.get("errors")
        errors = {str(k): str(v) for k, v in server_errors.items()} if isinstance(server_errors, Mapping) else {}
        self.paint_errors(errors)
        return Outcome(OutcomeStatus.REJECTED, errors=errors, response=response)

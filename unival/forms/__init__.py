"""Form Schema Building and Rendering

Usage:
    from unival.forms import FormSchemaBuilder, HtmlAdapter

    html = FormSchemaBuilder.generate(
        [
            {"name": "email", "rules": "required|email"},
            {"name": "age", "rules": "number|minValue:18", "ui": {"variant": "floating"}},
            {"type": "submit", "value": "Join"},
        ],
        HtmlAdapter(),
        {"form": {"id": "join", "action": "/join"}},
    )
"""
from .options import (
    RenderOptions,
    FormOptions,
    SubmitOptions,
    ClassOptions,
    resolve_options,
)
from .schema import FormSchema
from .adapters import (
    FieldView,
    FormRenderer,
    RenderContext,
    HtmlAdapter,
    build_attrs,
    escape,
    to_html_attributes,
    render_basic_form,
)
from .builder import FormSchemaBuilder, generate
from .form import Form
from .autowire import (
    FormSurface,
    Submitter,
    SubmitResponse,
    SubmitCoordinator,
    Outcome,
    OutcomeStatus,
)

__all__ = [
    "RenderOptions",
    "FormOptions",
    "SubmitOptions",
    "ClassOptions",
    "resolve_options",
    "FormSchema",
    "FieldView",
    "FormRenderer",
    "RenderContext",
    "HtmlAdapter",
    "build_attrs",
    "escape",
    "to_html_attributes",
    "render_basic_form",
    "FormSchemaBuilder",
    "generate",
    "Form",
    "FormSurface",
    "Submitter",
    "SubmitResponse",
    "SubmitCoordinator",
    "Outcome",
    "OutcomeStatus",
]

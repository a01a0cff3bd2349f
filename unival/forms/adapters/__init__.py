"""Form output adapters.

Usage:
    from unival.forms import FormSchemaBuilder
    from unival.forms.adapters import HtmlAdapter

    html = FormSchemaBuilder.generate(config, HtmlAdapter(), {"submit": {"text": "Send"}})
"""
from .base import FieldView, FormRenderer, RenderContext
from .html import (
    HtmlAdapter,
    ControlRenderer,
    build_attrs,
    escape,
    join_classes,
    prettify,
    to_html_attributes,
)
from .basic import render_basic_form

__all__ = [
    "FieldView",
    "FormRenderer",
    "RenderContext",
    "HtmlAdapter",
    "ControlRenderer",
    "build_attrs",
    "escape",
    "join_classes",
    "prettify",
    "to_html_attributes",
    "render_basic_form",
]

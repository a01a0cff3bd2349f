"""Schema-bound convenience object.

Keeps one rules mapping around so the same definition drives validation
and rendering:

    form = Form({"email": "required|email", "password": "required|min:8"})
    html = form.render({"form": {"id": "signup"}})
    result = await form.validate({"email": "ada@example.com", "password": "x"})
"""
from __future__ import annotations

from typing import Any, Mapping, Sequence

from unival.core.config import get_settings
from unival.validation import ValidationResult, validate

from .adapters.basic import render_basic_form
from .builder import FormSchemaBuilder
from .options import RenderOptions, resolve_options


class Form:
    """Rules plus the render/validate entry points that use them."""

    def __init__(self, rules: Mapping[str, Any] | None = None, *, input_error_class: str | None = None):
        self.rules: dict[str, Any] = dict(rules or {})
        self.config: list[Any] | None = None
        self.form_id = get_settings().FORM_ID
        self.input_error_class = input_error_class or get_settings().INPUT_ERROR_CLASS

    @classmethod
    def from_config(cls, config: Sequence[Any], **kwargs) -> Form:
        """Bind the fields of a builder config list; the submit entry is kept for ``generate``."""
        schema, _ = FormSchemaBuilder.build(config)
        form = cls({name: schema[name] for name in schema}, **kwargs)
        form.config = list(config)
        return form

    async def validate(self, data: Mapping[str, Any] | None) -> ValidationResult:
        return await validate(data, self.rules)

    def render(self, options: Mapping[str, Any] | RenderOptions | None = None) -> str:
        """Render with the basic renderer and remember the form id used."""
        resolved = resolve_options(options)
        self.form_id = resolved.form.id
        return render_basic_form(self.rules, resolved)

    def generate(self, adapter: Any, options: Mapping[str, Any] | RenderOptions | None = None) -> Any:
        """Render through the builder and ``adapter``."""
        config = self.config if self.config is not None else [
            {"name": name, "rules": rules} for name, rules in self.rules.items()
        ]
        resolved = resolve_options(options)
        self.form_id = resolved.form.id
        return FormSchemaBuilder.generate(config, adapter, resolved)

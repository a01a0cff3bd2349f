"""Form Schema Builder

Consumes an ordered field-config list:

    [
        {"name": "email", "rules": "required|email", "label": "Your email"},
        {"name": "bio", "rules": {"max": 280}, "ui": {"control": "textarea"}},
        {"type": "submit", "value": "Sign up"},
    ]

Each named entry is merged with its normalized rules (the rules win) into a
FormSchema; the submit entry only updates the submit options. The schema
and the resolved options are handed to the adapter's ``render_form``, or to
the basic renderer when the adapter has none.
"""
from __future__ import annotations

from typing import Any, Mapping, Sequence

from unival.core.errors import invalid_config, missing_adapter
from unival.core.logging import render_logger
from unival.validation import RuleDescriptor, UIOptions, normalize_rules

from .adapters.basic import render_basic_form
from .options import RenderOptions, resolve_options
from .schema import FormSchema

log = render_logger()


def _field_descriptor(entry: Mapping[str, Any]) -> RuleDescriptor:
    base = RuleDescriptor.from_dict({k: v for k, v in entry.items() if k not in ("rules", "ui")})
    merged = base.merged_with(normalize_rules(entry.get("rules")))
    ui = entry.get("ui")
    merged.ui = ui if isinstance(ui, UIOptions) else UIOptions.from_dict(ui) if isinstance(ui, Mapping) else None
    return merged


def _apply_submit(entry: Mapping[str, Any], options: RenderOptions) -> None:
    if entry.get("value"):
        options.submit.text = str(entry["value"])
    class_name = entry.get("className", entry.get("class_name"))
    if class_name:
        options.submit.class_name = str(class_name)
    if isinstance(attrs := entry.get("attrs"), Mapping):
        options.submit.attrs = {**options.submit.attrs, **attrs}


class FormSchemaBuilder:
    """Build a FormSchema from field configs and render it through an adapter."""

    @staticmethod
    def build(
        config: Sequence[Any],
        options: Mapping[str, Any] | RenderOptions | None = None,
    ) -> tuple[FormSchema, RenderOptions]:
        """Normalize ``config`` into a schema plus resolved options.

        Raises FormUsageError when ``config`` is not a list, and
        RuleConfigurationError when a field carries a malformed pattern.
        """
        if not isinstance(config, (list, tuple)):
            raise invalid_config(config, origin="builder")

        resolved = resolve_options(options)
        schema = FormSchema()

        for entry in config:
            if not isinstance(entry, Mapping):
                continue
            if entry.get("type") == "submit":
                _apply_submit(entry, resolved)
                continue
            if not (name := entry.get("name")):
                continue

            descriptor = _field_descriptor(entry)
            descriptor.compiled_pattern(str(name))
            schema.add(str(name), descriptor)

        return schema, resolved

    @classmethod
    def generate(
        cls,
        config: Sequence[Any],
        adapter: Any,
        options: Mapping[str, Any] | RenderOptions | None = None,
    ) -> Any:
        """Build the schema and render it with ``adapter``.

        ``adapter`` may be an instance or a class; a class is instantiated
        with no arguments.
        """
        if not isinstance(config, (list, tuple)):
            raise invalid_config(config, origin="builder")
        if adapter is None:
            raise missing_adapter(origin="builder")

        schema, resolved = cls.build(config, options)

        if isinstance(adapter, type):
            adapter = adapter()
        render_form = getattr(adapter, "render_form", None)

        log.debug("form_generated", fields=len(schema), adapter=type(adapter).__name__,
            fallback=not callable(render_form))

        if callable(render_form):
            return render_form(schema, resolved)
        return render_basic_form(schema, resolved)


generate = FormSchemaBuilder.generate

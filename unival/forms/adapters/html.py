"""HTML Adapter

Default renderer: turns an ordered schema into HTML5 form markup whose
native attributes mirror the validation rules, so the browser can enforce
them before any script runs.

Per field it emits a group container holding the label, the control, an
optional hint and an always-present error placeholder addressable both by
id (``error-<name>``) and by ``data-error-for="<name>"``.

Layouts:
    default   label, control, hint, error
    floating  control then label, in a ``form-floating`` group

Controls are pluggable per adapter instance; ``input``, ``textarea`` and
``select`` ship by default and unknown kinds render as ``input``.
"""
from __future__ import annotations

import html
from typing import Any, Callable, Iterable, Mapping

from unival.validation import RuleDescriptor, as_text, normalize_rules

from ..options import RenderOptions, resolve_options
from .base import FieldView, FormRenderer, RenderContext

ControlRenderer = Callable[[FieldView, RenderContext], str]

# Input types passed through to the type attribute; anything else becomes "text"
INPUT_TYPES = frozenset({
    "text", "email", "password", "number", "url", "date", "tel", "search",
    "time", "datetime-local", "month", "week", "color", "range", "hidden",
    "checkbox", "radio", "file",
})

FLOATING_CLASS = "form-floating"

# Attributes that have no meaning on the non-input controls
TEXTAREA_DROPPED = frozenset({"type", "pattern", "min", "max", "value"})
SELECT_DROPPED = frozenset({"type", "pattern", "min", "max", "minlength", "maxlength", "placeholder", "value"})


def escape(value: Any) -> str:
    """Escape text or an attribute value (``&``, ``<``, ``>``, quotes)."""
    return html.escape(as_text(value), quote=True)


def build_attrs(attrs: Mapping[str, Any]) -> str:
    """Serialize attributes. ``True`` renders a bare name; ``False``/``None`` are omitted."""
    parts = []
    for key, value in attrs.items():
        if value is None or value is False:
            continue
        if value is True:
            parts.append(escape(key))
        else:
            parts.append(f'{escape(key)}="{escape(value)}"')
    return " ".join(parts)


def join_classes(*names: str | None) -> str:
    """Join class names, dropping empty parts."""
    return " ".join(n.strip() for n in names if n and n.strip())


def prettify(name: str) -> str:
    """``first_name`` -> ``First Name``."""
    words = name.replace("_", " ").replace("-", " ").replace(".", " ").split()
    return " ".join(w[:1].upper() + w[1:] for w in words)


def to_html_attributes(descriptor: RuleDescriptor | None) -> dict[str, Any]:
    """Map validation rules to native HTML5 constraint attributes."""
    if descriptor is None: return {}

    attrs: dict[str, Any] = {}
    if descriptor.type:
        attrs["type"] = descriptor.type if descriptor.type in INPUT_TYPES else "text"
    if descriptor.required: attrs["required"] = True
    if descriptor.min is not None: attrs["minlength"] = descriptor.min
    if descriptor.max is not None: attrs["maxlength"] = descriptor.max
    if descriptor.min_value is not None: attrs["min"] = descriptor.min_value
    if descriptor.max_value is not None: attrs["max"] = descriptor.max_value
    if descriptor.pattern_source: attrs["pattern"] = descriptor.pattern_source
    return attrs


def _tag(name: str, attrs: Mapping[str, Any]) -> str:
    rendered = build_attrs(attrs)
    return f"<{name} {rendered}>" if rendered else f"<{name}>"


def _option_pairs(options: Any) -> Iterable[tuple[Any, Any]]:
    """Normalize select options: mapping, (value, label) pairs, dicts or scalars."""
    if isinstance(options, Mapping):
        yield from options.items()
        return
    for option in options or ():
        if isinstance(option, Mapping):
            value = option.get("value")
            yield value, option.get("label", value)
        elif isinstance(option, (tuple, list)) and len(option) == 2:
            yield option[0], option[1]
        else:
            yield option, option


class HtmlAdapter(FormRenderer):
    """Render an ordered schema as HTML form markup."""

    def __init__(self, controls: Mapping[str, ControlRenderer] | None = None):
        self.controls: dict[str, ControlRenderer] = {
            "input": self.render_input,
            "textarea": self.render_textarea,
            "select": self.render_select,
        }
        if controls:
            self.controls.update(controls)

    def register_control(self, kind: str, renderer: ControlRenderer) -> None:
        self.controls[kind] = renderer

    def context(self, options: RenderOptions) -> RenderContext:
        return RenderContext(build_attrs=build_attrs, escape=escape, options=options, adapter=self)

    # ------------------------------------------------------------------
    # Form / submit
    # ------------------------------------------------------------------

    def render_form(self, schema: Mapping[str, RuleDescriptor], options: RenderOptions | Mapping[str, Any] | None = None) -> str:
        opts = options if isinstance(options, RenderOptions) else resolve_options(options)
        form_attrs = {
            "id": opts.form.id,
            "action": opts.form.action,
            "method": opts.form.method,
            "class": opts.form.class_name or None,
            **opts.form.attrs,
        }
        lines = [_tag("form", form_attrs)]
        lines.extend(self.render_field(name, normalize_rules(schema[name]), opts) for name in schema)
        lines.append(self.render_submit(opts))
        lines.append("</form>")
        return "\n".join(lines)

    def render_submit(self, options: RenderOptions) -> str:
        attrs = {"type": "submit", "class": options.submit.class_name or None, **options.submit.attrs}
        return f"{_tag('button', attrs)}{escape(options.submit.text)}</button>"

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------

    def field_view(self, name: str, field: RuleDescriptor, options: RenderOptions) -> FieldView:
        """Resolve label, classes and control attributes for one field."""
        ui = field.ui
        classes = options.classes
        label = (ui.label if ui else None) or field.label or prettify(name)
        variant = (ui.variant if ui else None) or "default"

        native = to_html_attributes(field)
        attrs: dict[str, Any] = {
            "type": native.pop("type", "text"),
            "name": name,
            "id": field.id or name,
            **native,
        }
        placeholder = field.placeholder
        if placeholder is None and variant == "floating":
            placeholder = label
        attrs["placeholder"] = placeholder
        attrs["class"] = join_classes(classes.input, field.class_name, ui.input_class if ui else None) or None
        attrs.update(field.attrs)
        if ui:
            attrs.update(ui.attrs)

        return FieldView(
            name=name,
            label=label,
            control=(ui.control if ui else None) or "input",
            variant=variant,
            attrs=attrs,
            descriptor=field,
            hint=(ui.hint if ui else None) or field.hint,
            group_class=join_classes(
                classes.field_group,
                FLOATING_CLASS if variant == "floating" else None,
                ui.wrapper_class if ui else None,
            ),
            label_class=join_classes(classes.label, ui.label_class if ui else None),
            error_class=join_classes(classes.error, ui.error_class if ui else None),
            hint_class=classes.hint,
        )

    def render_field(self, name: str, field: RuleDescriptor, options: RenderOptions) -> str:
        view = self.field_view(name, field, options)
        ctx = self.context(options)

        if (override := field.render_override) is not None:
            return str(override(view, ctx))

        control = self.controls.get(view.control, self.controls["input"])(view, ctx)
        label = f'{_tag("label", {"for": view.id, "class": view.label_class or None})}{escape(view.label)}</label>'

        parts = [control, label] if view.variant == "floating" else [label, control]
        if view.hint:
            parts.append(self.render_hint(view))
        parts.append(self.render_error(view))

        inner = "\n".join(f"  {part}" for part in parts)
        group = _tag("div", {"class": view.group_class or None, "data-field": name})
        return f"{group}\n{inner}\n</div>"

    def render_hint(self, view: FieldView) -> str:
        attrs = {"class": view.hint_class or None, "id": f"hint-{view.name}"}
        return f"{_tag('small', attrs)}{escape(view.hint)}</small>"

    def render_error(self, view: FieldView) -> str:
        attrs = {"class": view.error_class or None, "id": view.error_id, "data-error-for": view.name}
        return f"{_tag('span', attrs)}</span>"

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------

    def render_input(self, view: FieldView, ctx: RenderContext) -> str:
        return _tag("input", view.attrs)

    def render_textarea(self, view: FieldView, ctx: RenderContext) -> str:
        attrs = {k: v for k, v in view.attrs.items() if k not in TEXTAREA_DROPPED}
        content = view.attrs.get("value", view.descriptor.extras.get("value"))
        return f"{_tag('textarea', attrs)}{escape(content)}</textarea>"

    def render_select(self, view: FieldView, ctx: RenderContext) -> str:
        attrs = {k: v for k, v in view.attrs.items() if k not in SELECT_DROPPED}
        selected = view.attrs.get("value", view.descriptor.extras.get("value"))
        selected = None if selected is None else as_text(selected)

        lines = [_tag("select", attrs)]
        if view.descriptor.placeholder:
            lines.append(f'  <option value="">{escape(view.descriptor.placeholder)}</option>')
        for value, label in _option_pairs(view.descriptor.extras.get("options")):
            option_attrs = {"value": as_text(value), "selected": selected is not None and as_text(value) == selected}
            lines.append(f"  {_tag('option', option_attrs)}{escape(label)}</option>")
        lines.append("</select>")
        return "\n".join(lines)

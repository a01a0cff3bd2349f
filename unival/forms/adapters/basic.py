"""Minimal built-in renderer, used when an adapter has no ``render_form``."""
from __future__ import annotations

from typing import Any, Mapping

from unival.validation import normalize_rules

from ..options import RenderOptions, resolve_options
from .html import build_attrs, escape


def render_basic_form(schema: Mapping[str, Any], options: RenderOptions | Mapping[str, Any] | None = None) -> str:
    """Plain label/input/error markup for each field, in schema order.

    Schema values may be descriptors or raw rules; they are normalized here.
    """
    opts = options if isinstance(options, RenderOptions) else resolve_options(options)
    groups = []

    for name in schema:
        rules = normalize_rules(schema[name])
        label = rules.label or name[:1].upper() + name[1:]
        attrs = {
            "type": rules.type or "text",
            "name": name,
            "id": name,
            "required": rules.required,
            "minlength": rules.min,
            "maxlength": rules.max,
        }
        group_attrs = build_attrs({"class": opts.classes.field_group or None})
        error_attrs = {"class": opts.classes.error or None, "id": f"error-{name}", "data-error-for": name}
        groups.append("\n".join([
            f"<div {group_attrs}>" if group_attrs else "<div>",
            f'  <label for="{escape(name)}">{escape(label)}</label>',
            f"  <input {build_attrs(attrs)}>",
            f"  <span {build_attrs(error_attrs)}></span>",
            "</div>",
        ]))

    form_attrs = {
        "action": opts.form.action,
        "method": opts.form.method,
        "class": opts.form.class_name or None,
        "id": opts.form.id,
    }
    return "\n".join([
        f"<form {build_attrs(form_attrs)}>",
        *groups,
        f'<button type="submit">{escape(opts.submit.text)}</button>',
        "</form>",
    ])

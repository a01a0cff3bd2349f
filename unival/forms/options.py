"""Render Options

Pydantic models for the options handed to a renderer. Keys are accepted in
snake_case or camelCase (``class_name`` / ``className``), and defaults come
from Settings so a deployment can restyle every form through the
environment.
"""
from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from unival.core.config import get_settings
from unival.core.errors import invalid_options


class OptionsModel(BaseModel):
    """Base for option models: camelCase aliases, unknown keys ignored."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class FormOptions(OptionsModel):
    id: str = Field(default_factory=lambda: get_settings().FORM_ID)
    action: str = Field(default_factory=lambda: get_settings().FORM_ACTION)
    method: str = Field(default_factory=lambda: get_settings().FORM_METHOD)
    class_name: str = Field(default_factory=lambda: get_settings().FORM_CLASS)
    attrs: dict[str, Any] = Field(default_factory=dict)


class SubmitOptions(OptionsModel):
    text: str = Field(default_factory=lambda: get_settings().SUBMIT_TEXT)
    class_name: str = ""
    attrs: dict[str, Any] = Field(default_factory=dict)


class ClassOptions(OptionsModel):
    field_group: str = Field(default_factory=lambda: get_settings().FIELD_GROUP_CLASS)
    label: str = ""
    input: str = ""
    error: str = Field(default_factory=lambda: get_settings().ERROR_CLASS)
    hint: str = Field(default_factory=lambda: get_settings().HINT_CLASS)


class RenderOptions(OptionsModel):
    """Fully resolved options: form container, submit control, CSS classes."""
    form: FormOptions = Field(default_factory=FormOptions)
    submit: SubmitOptions = Field(default_factory=SubmitOptions)
    classes: ClassOptions = Field(default_factory=ClassOptions)


def _section(raw: Mapping[str, Any], key: str) -> dict[str, Any]:
    value = raw.get(key)
    # "_" in the key means snake_case; camelCase keys pass through untouched
    return {(to_camel(k) if "_" in k else k): v for k, v in value.items() if v is not None} if isinstance(value, Mapping) else {}


def resolve_options(options: Mapping[str, Any] | RenderOptions | None = None) -> RenderOptions:
    """Resolve raw options against the defaults.

    Besides the nested ``form`` / ``submit`` / ``classes`` sections, the
    flat keys ``action``, ``method``, ``className``, ``formId`` and
    ``submitText`` are honored; nested values win. Empty form ids and
    submit texts fall back to the defaults.
    """
    if isinstance(options, RenderOptions):
        return options.model_copy(deep=True)
    raw: Mapping[str, Any] = options or {}
    if not isinstance(raw, Mapping):
        raise invalid_options(TypeError(f"expected a mapping, got {type(raw).__name__}"), origin="options")

    form = {
        "id": raw.get("formId"),
        "action": raw.get("action"),
        "method": raw.get("method"),
        "className": raw.get("className", raw.get("class_name")),
    }
    form = {k: v for k, v in form.items() if v is not None}
    form.update(_section(raw, "form"))
    if not form.get("id"): form.pop("id", None)

    submit = {"text": raw.get("submitText")} if raw.get("submitText") else {}
    submit.update(_section(raw, "submit"))
    if not submit.get("text"): submit.pop("text", None)

    try:
        return RenderOptions(form=form, submit=submit, classes=_section(raw, "classes"))
    except ValidationError as exc:
        raise invalid_options(exc, origin="options") from exc

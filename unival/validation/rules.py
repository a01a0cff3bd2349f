"""Rule Normalization

Turns a raw field rule into a canonical RuleDescriptor. Two input shapes are
accepted:

    "required|email|min:8"                      # rule string
    {"required": True, "type": "email", ...}    # rule mapping

Rule string grammar: tokens separated by ``|`` or ``,``; each token is
``name`` or ``name:arg`` where ``arg`` is the rest of the token after the
first colon. Unknown names are ignored.

Normalization never fails: anything unparseable is dropped and the best
descriptor that can be built is returned. Compiling a pattern is the only
step that can raise, and it happens on demand (``compiled_pattern``).
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass, field, fields, replace
from typing import Any, Callable, Mapping

from unival.core.errors import invalid_pattern
from unival.core.logging import validation_logger
from unival.validation.validators import parse_number

log = validation_logger()

# Token separators in a rule string
TOKEN_SPLIT = re.compile(r"[|,]")

INT_PREFIX = re.compile(r"^\s*([+-]?\d+)", re.ASCII)

# Canonical attribute -> accepted source keys, highest precedence first
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "min": ("min", "minLength", "min_length"),
    "max": ("max", "maxLength", "max_length"),
    "min_value": ("minValue", "min_value"),
    "max_value": ("maxValue", "max_value"),
    "class_name": ("class_name", "className"),
}

# Attributes merged key by key rather than replaced
COLLECTION_FIELDS = frozenset({"attrs", "extras", "provided"})

FORMAT_FLAGS = ("email", "url", "number")

UI_ALIASES: dict[str, tuple[str, ...]] = {
    "wrapper_class": ("wrapper_class", "wrapperClass"),
    "label_class": ("label_class", "labelClass"),
    "input_class": ("input_class", "inputClass"),
    "error_class": ("error_class", "errorClass"),
}


def _to_int(value: Any) -> int | None:
    """Leading-integer parse; None when there is no integer prefix."""
    if value is None or isinstance(value, bool): return None
    if isinstance(value, int): return value
    if isinstance(value, float): return int(value) if math.isfinite(value) else None
    match = INT_PREFIX.match(str(value))
    return int(match.group(1)) if match else None


def _to_number(value: Any) -> int | float | None:
    """Finite number parse; integral values come back as int."""
    if value is None or isinstance(value, bool): return None
    if isinstance(value, int): return value
    num = value if isinstance(value, float) else parse_number(str(value))
    if num is None or not math.isfinite(num): return None
    return int(num) if num.is_integer() else num


def _pick(raw: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if raw.get(key) is not None:
            return raw[key]
    return None


def _coerce_ui(ui: Any) -> "UIOptions | None":
    if isinstance(ui, UIOptions): return ui
    if isinstance(ui, Mapping): return UIOptions.from_dict(ui)
    return None


@dataclass(slots=True)
class UIOptions:
    """Per-field presentation overrides."""
    variant: str | None = None          # "default" | "floating"
    control: str | None = None          # "input" | "textarea" | "select" | custom
    label: str | None = None
    hint: str | None = None
    wrapper_class: str | None = None
    label_class: str | None = None
    input_class: str | None = None
    error_class: str | None = None
    render: Callable[..., str] | None = None
    attrs: dict[str, Any] = field(default_factory=dict)
    extras: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UIOptions:
        """Parse UI options, accepting camelCase or snake_case keys."""
        consumed = {key for keys in UI_ALIASES.values() for key in keys}
        known = {"variant", "control", "label", "hint", "render", "attrs"}
        attrs = data.get("attrs")
        render = data.get("render")
        return cls(
            variant=data.get("variant"),
            control=data.get("control"),
            label=data.get("label"),
            hint=data.get("hint"),
            render=render if callable(render) else None,
            attrs=dict(attrs) if isinstance(attrs, Mapping) else {},
            extras={k: v for k, v in data.items() if k not in consumed | known},
            **{name: _pick(data, keys) for name, keys in UI_ALIASES.items()},
        )


@dataclass(slots=True)
class RuleDescriptor:
    """Canonical, de-aliased representation of one field's constraints.

    Holds both the validation rules and the presentation hints used by the
    renderer. Keys of the source mapping that have no dedicated attribute
    (``name``, select ``options``, ...) are kept in ``extras``.
    """
    required: bool = False
    type: str | None = None
    email: bool = False
    url: bool = False
    number: bool = False
    min: int | None = None
    max: int | None = None
    min_value: int | float | None = None
    max_value: int | float | None = None
    pattern: str | re.Pattern | None = None
    validate: Callable[[Any, Mapping[str, Any]], Any] | None = None
    label: str | None = None
    hint: str | None = None
    placeholder: str | None = None
    id: str | None = None
    class_name: str | None = None
    attrs: dict[str, Any] = field(default_factory=dict)
    ui: UIOptions | None = None
    extras: dict[str, Any] = field(default_factory=dict)
    # Attributes the source set explicitly, including explicit False
    provided: frozenset[str] = field(default=frozenset(), compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RuleDescriptor:
        """Build from a rule mapping. Never raises."""
        consumed = {key for keys in FIELD_ALIASES.values() for key in keys}
        simple = {"required", "type", "email", "url", "number", "pattern", "validate",
                  "label", "hint", "placeholder", "id", "attrs", "ui", "rules"}

        rule_type = data.get("type")
        rule_type = str(rule_type) if rule_type is not None else None
        validate = data.get("validate")
        attrs = data.get("attrs")
        ui = data.get("ui")
        pattern = data.get("pattern")

        present = {key for key, value in data.items() if value is not None}
        provided = {key for key in simple - {"rules"} if key in present}
        provided |= {name for name, keys in FIELD_ALIASES.items() if present.intersection(keys)}
        if "type" in present:
            provided.update(FORMAT_FLAGS)

        return cls(
            required=bool(data.get("required")),
            type=rule_type,
            # Flags follow the declared type unless set explicitly
            email=bool(data.get("email")) or rule_type == "email",
            url=bool(data.get("url")) or rule_type == "url",
            number=bool(data.get("number")) or rule_type == "number",
            min=_to_int(_pick(data, FIELD_ALIASES["min"])),
            max=_to_int(_pick(data, FIELD_ALIASES["max"])),
            min_value=_to_number(_pick(data, FIELD_ALIASES["min_value"])),
            max_value=_to_number(_pick(data, FIELD_ALIASES["max_value"])),
            pattern=pattern if isinstance(pattern, (str, re.Pattern)) and pattern else None,
            validate=validate if callable(validate) else None,
            label=data.get("label"),
            hint=data.get("hint"),
            placeholder=data.get("placeholder"),
            id=data.get("id"),
            class_name=_pick(data, FIELD_ALIASES["class_name"]),
            attrs=dict(attrs) if isinstance(attrs, Mapping) else {},
            ui=_coerce_ui(ui),
            extras={k: v for k, v in data.items() if k not in consumed | simple},
            provided=frozenset(provided),
        )

    @property
    def name(self) -> str | None:
        return self.extras.get("name")

    @property
    def pattern_source(self) -> str | None:
        """Regex source as text, for markup attributes."""
        if isinstance(self.pattern, re.Pattern): return self.pattern.pattern
        return self.pattern or None

    @property
    def render_override(self) -> Callable[..., str] | None:
        """Custom render function, from ``ui.render`` or a top-level ``render``."""
        if self.ui and self.ui.render: return self.ui.render
        render = self.extras.get("render")
        return render if callable(render) else None

    def compiled_pattern(self, field_name: str | None = None) -> re.Pattern | None:
        """Compile ``pattern``. Raises RuleConfigurationError on a bad source."""
        if self.pattern is None: return None
        if isinstance(self.pattern, re.Pattern): return self.pattern
        try:
            return re.compile(self.pattern)
        except re.error as exc:
            raise invalid_pattern(self.pattern, exc, field=field_name, origin="rules") from exc

    def explicit_fields(self) -> frozenset[str]:
        """Attributes set by the source.

        Descriptors built directly, without a tracked source, count every
        attribute that holds something other than None or False.
        """
        if self.provided: return self.provided
        return frozenset(
            f.name for f in fields(self)
            if f.name not in COLLECTION_FIELDS
            and getattr(self, f.name) is not None and getattr(self, f.name) is not False
        )

    def merged_with(self, other: RuleDescriptor) -> RuleDescriptor:
        """Return a copy where every attribute ``other`` set wins, explicit False included."""
        explicit = other.explicit_fields()
        updates: dict[str, Any] = {name: getattr(other, name) for name in explicit}
        updates["attrs"] = {**self.attrs, **other.attrs}
        updates["extras"] = {**self.extras, **other.extras}
        updates["provided"] = self.explicit_fields() | explicit
        return replace(self, **updates)


def _parse_rule_string(raw: str) -> RuleDescriptor:
    out = RuleDescriptor()
    tokens = [t.strip() for t in TOKEN_SPLIT.split(raw)]

    for token in filter(None, tokens):
        name, _, arg = token.partition(":")
        name, arg = name.strip(), arg.strip()

        match name:
            case "required":
                out.required = True
            case "string":
                out.type = out.type or "text"
            case "email":
                out.type, out.email = "email", True
            case "password":
                out.type = "password"
            case "number" | "numeric":
                out.type, out.number = "number", True
            case "url":
                out.type, out.url = "url", True
            case "min":
                out.min = _to_int(arg)
            case "max":
                out.max = _to_int(arg)
            case "minValue" | "min_value":
                out.min_value = _to_number(arg)
            case "maxValue" | "max_value":
                out.max_value = _to_number(arg)
            case "pattern":
                if arg: out.pattern = arg
            case _:
                log.debug("rule_token_ignored", token=token)

    # Tokens only ever set values, so whatever is set was provided
    out.provided = out.explicit_fields()
    return out


def normalize_rules(raw: Any) -> RuleDescriptor:
    """Normalize a raw rule (string, mapping or descriptor) into a new RuleDescriptor."""
    if not raw: return RuleDescriptor()
    if isinstance(raw, RuleDescriptor): return replace(raw, attrs=dict(raw.attrs), extras=dict(raw.extras))
    if isinstance(raw, Mapping): return RuleDescriptor.from_dict(raw)
    if isinstance(raw, str): return _parse_rule_string(raw)
    return RuleDescriptor()

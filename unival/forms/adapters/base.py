"""Renderer contract shared by all output adapters."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from unival.validation import RuleDescriptor

from ..options import RenderOptions


@dataclass(frozen=True, slots=True)
class FieldView:
    """Everything the renderer resolved for one field.

    Handed to custom render functions and control renderers so they can
    reuse the label, classes and control attributes instead of recomputing
    them.
    """
    name: str
    label: str
    control: str
    variant: str
    attrs: dict[str, Any]
    descriptor: RuleDescriptor
    hint: str | None = None
    group_class: str = ""
    label_class: str = ""
    error_class: str = ""
    hint_class: str = ""

    @property
    def id(self) -> str:
        return str(self.attrs.get("id") or self.name)

    @property
    def error_id(self) -> str:
        return f"error-{self.name}"


@dataclass(frozen=True, slots=True)
class RenderContext:
    """Helpers exposed to custom render functions."""
    build_attrs: Callable[[Mapping[str, Any]], str]
    escape: Callable[[Any], str]
    options: RenderOptions
    adapter: FormRenderer


class FormRenderer(ABC):
    """Base class for form output adapters.

    ``render_form`` is the only required capability; ``render_field`` and
    ``render_submit`` are provided by adapters that build forms piecewise.
    """

    @abstractmethod
    def render_form(self, schema: Mapping[str, RuleDescriptor], options: RenderOptions) -> Any:
        """Render the whole form for an ordered schema."""

"""Form Schema

Name -> RuleDescriptor mapping whose iteration order is the order of the
field config list, tracked explicitly rather than inherited from the dict.
"""
from __future__ import annotations

from collections.abc import Iterator, Mapping

from unival.validation import RuleDescriptor


class FormSchema(Mapping[str, RuleDescriptor]):
    """Ordered field schema produced by the builder."""

    def __init__(self) -> None:
        self._fields: dict[str, RuleDescriptor] = {}
        self.order: list[str] = []

    def add(self, name: str, descriptor: RuleDescriptor) -> None:
        """Add or redefine a field. A redefined field keeps its first position."""
        if name not in self._fields:
            self.order.append(name)
        self._fields[name] = descriptor

    def __getitem__(self, name: str) -> RuleDescriptor:
        return self._fields[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.order)

    def __len__(self) -> int:
        return len(self.order)

    def __repr__(self) -> str:
        return f"FormSchema({self.order!r})"

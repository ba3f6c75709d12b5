# pagebind — attribute-directive templating for static pages
# Copyright (C) 2024-2026 Dr Horst Herb
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""Binding contexts and loop frames.

A :class:`BindingContext` is immutable.  Entering a ``:loop`` produces a
new context whose :class:`LoopFrame` shadows the enclosing one; the outer
context is left untouched and simply goes out of use when the loop's
subtree has been rendered.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from pagebind.config import RenderConfig
from pagebind.errors import EvalError, EvalErrorKind
from pagebind.models import Resolvable, unknown_field


@dataclass(frozen=True, eq=False)
class LoopFrame(Resolvable):
    """Current iteration of a ``:loop``: ``it``, ``index``, ``first``, ``last``."""

    it: Any
    index: int
    count: int
    parent: LoopFrame | None = None

    type_name = "loop"

    def get_field(self, name: str, context: BindingContext) -> Any:
        if name == "it":
            return self.it
        if name == "index":
            return self.index
        if name == "first":
            return self.index == 0
        if name == "last":
            return self.index == self.count - 1
        if name == "parent" and self.parent is not None:
            return self.parent
        raise unknown_field(self.type_name, name)


@dataclass(frozen=True, eq=False)
class BindingContext:
    """Namespace table plus the innermost loop frame."""

    namespaces: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    frame: LoopFrame | None = None
    config: RenderConfig = field(default_factory=RenderConfig)

    def __post_init__(self) -> None:
        if not isinstance(self.namespaces, MappingProxyType):
            object.__setattr__(self, "namespaces", MappingProxyType(dict(self.namespaces)))

    def lookup(self, namespace: str) -> Any:
        """Resolve a root namespace name to its value."""
        if namespace == "loop":
            if self.frame is None:
                raise EvalError(EvalErrorKind.NO_LOOP, "$loop used outside of a :loop")
            return self.frame
        if namespace not in self.namespaces:
            raise EvalError(
                EvalErrorKind.UNKNOWN_NAMESPACE,
                f"namespace {namespace!r} is not bound in this context",
            )
        return self.namespaces[namespace]

    def enter_loop(self, item: Any, index: int, count: int) -> BindingContext:
        """Return a child context for one loop iteration."""
        return replace(self, frame=LoopFrame(it=item, index=index, count=count, parent=self.frame))

    def with_namespaces(self, **extra: Any) -> BindingContext:
        merged = dict(self.namespaces)
        merged.update(extra)
        return replace(self, namespaces=merged)

    def link_resolver(self) -> Any:
        return self.lookup("link")


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

"""The ``$block`` and ``$section`` namespaces used inside page bodies.

``$block.collapsible(false)`` is a rendering hint for the body renderer;
``$section.id("comparison")`` declares an anchor other pages can target
with ``$link.ref``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from markupsafe import Markup

from pagebind.errors import EvalError, EvalErrorKind
from pagebind.models import Resolvable, unknown_field, unknown_method

if TYPE_CHECKING:
    from pagebind.expr.context import BindingContext

DEFAULT_BLOCK_HINTS: Mapping[str, type] = {"collapsible": bool}


@dataclass(frozen=True)
class BlockHint(Resolvable):
    """A presentation hint attached to the current content block."""

    name: str
    value: Any

    type_name = "block_hint"

    def __html__(self) -> str:
        return ""

    def get_field(self, name: str, context: BindingContext) -> Any:
        if name == "name":
            return self.name
        if name == "value":
            return self.value
        raise unknown_field(self.type_name, name)


@dataclass(frozen=True)
class SectionAnchor(Resolvable):
    """An anchor declared in the body; renders as an empty ``<a id>``."""

    id: str

    type_name = "section_anchor"

    def __html__(self) -> str:
        return Markup('<a id="{}"></a>').format(self.id)

    def get_field(self, name: str, context: BindingContext) -> Any:
        if name == "id":
            return self.id
        raise unknown_field(self.type_name, name)


def _check_single(owner: str, name: str, args: Sequence[Any], expected: type) -> Any:
    if len(args) != 1:
        raise unknown_method(owner, name, len(args))
    value = args[0]
    if not isinstance(value, expected) or (isinstance(value, bool) and expected is not bool):
        raise EvalError(
            EvalErrorKind.BAD_ARGUMENT,
            f"${owner}.{name}() needs a {expected.__name__}, got {type(value).__name__}",
        )
    return value


class BlockNamespace(Resolvable):
    """``$block.<hint>(value)`` for each registered hint name."""

    type_name = "block"

    def __init__(self, hints: Mapping[str, type] | None = None) -> None:
        self.hints = dict(DEFAULT_BLOCK_HINTS if hints is None else hints)

    def invoke(self, name: str, args: Sequence[Any], context: BindingContext) -> Any:
        expected = self.hints.get(name)
        if expected is None:
            raise unknown_method(self.type_name, name, len(args))
        return BlockHint(name, _check_single(self.type_name, name, args, expected))


class SectionNamespace(Resolvable):
    """``$section.id("anchor")``."""

    type_name = "section"

    def invoke(self, name: str, args: Sequence[Any], context: BindingContext) -> Any:
        if name != "id":
            raise unknown_method(self.type_name, name, len(args))
        anchor = _check_single(self.type_name, name, args, str)
        if not anchor.strip():
            raise EvalError(EvalErrorKind.BAD_ARGUMENT, "$section.id() needs a non-empty id")
        return SectionAnchor(anchor)


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

"""The closed set of template directives: ``:loop``, ``:text``, ``:html``.

Each directive receives a continuation, ``render_next(context, body=None)``,
that renders the element with the directives after it.  ``:loop`` calls it
once per item with a fresh loop frame; ``:text`` and ``:html`` call it once
with the element body replaced.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ClassVar

from markupsafe import Markup, escape

from pagebind.errors import PagebindError, ParseError
from pagebind.expr.context import BindingContext
from pagebind.expr.evaluator import evaluate, to_sequence, to_text
from pagebind.expr.nodes import Expression
from pagebind.expr.parser import parse_expression
from pagebind.render.tree import Element

RenderNext = Callable[..., str]


def _resolve(
    binding: DirectiveBinding, context: BindingContext, convert: Callable[[Any], Any],
) -> Any:
    """Evaluate and convert a directive value, naming its expression on failure."""
    try:
        return convert(evaluate(binding.expression, context))
    except PagebindError as e:
        raise e.with_context(source=binding.expression.source)


class Directive(ABC):
    attribute: ClassVar[str]
    precedence: ClassVar[int]
    replaces_body: ClassVar[bool] = False

    @abstractmethod
    def apply(
        self,
        binding: DirectiveBinding,
        context: BindingContext,
        render_next: RenderNext,
    ) -> str:
        """Render ``binding.element`` under this directive."""


class LoopDirective(Directive):
    attribute = ":loop"
    precedence = 0

    def apply(self, binding, context, render_next):
        items = _resolve(binding, context, to_sequence)
        count = len(items)
        return "".join(
            render_next(context.enter_loop(item, index, count))
            for index, item in enumerate(items)
        )


class TextDirective(Directive):
    attribute = ":text"
    precedence = 1
    replaces_body = True

    def apply(self, binding, context, render_next):
        text = _resolve(binding, context, to_text)
        return render_next(context, escape(str(text)))


class HtmlDirective(Directive):
    attribute = ":html"
    precedence = 2
    replaces_body = True

    def apply(self, binding, context, render_next):
        return render_next(context, Markup(_resolve(binding, context, to_text)))


DIRECTIVES: dict[str, Directive] = {
    d.attribute: d for d in (LoopDirective(), TextDirective(), HtmlDirective())
}


@dataclass(frozen=True, eq=False)
class DirectiveBinding:
    """One directive attribute on one element, with its parsed expression."""

    element: Element
    directive: Directive
    expression: Expression

    @property
    def attribute(self) -> str:
        return self.directive.attribute


def is_directive(attribute: str) -> bool:
    return attribute in DIRECTIVES


def bind(element: Element, namespaces=None) -> list[DirectiveBinding]:
    """Directive bindings of ``element`` in application order.

    Raises:
        ParseError: a directive without a value, a malformed expression, or
            :text/:html on a void element.
    """
    bindings: list[DirectiveBinding] = []
    for name, value in element.attrs:
        directive = DIRECTIVES.get(name)
        if directive is None:
            continue
        if directive.replaces_body and element.is_void:
            raise ParseError(
                f"{name} cannot set the content of void element <{element.tag}>",
                source=f"{name}=\"{value or ''}\"",
                location=element.location,
            )
        if value is None or not value.strip():
            raise ParseError(
                f"{name} needs an expression", source=f"{name}=\"\"", location=element.location
            )
        try:
            expression = parse_expression(value, namespaces)
        except ParseError as e:
            raise e.with_context(location=element.location)
        bindings.append(DirectiveBinding(element, directive, expression))
    bindings.sort(key=lambda b: b.directive.precedence)
    return bindings

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

"""Directive processor: template tree + binding context → HTML.

Traversal is a top-down walk in document order.  On each element the
directives run in the fixed order ``:loop``, ``:text``, ``:html``; other
attributes pass through, with inline ``$...`` expressions in their values
substituted and escaped.  Text nodes are copied unchanged.

A failure anywhere aborts the whole render; the raised error names the
expression and the element it came from.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from markupsafe import Markup, escape

from pagebind.errors import PagebindError
from pagebind.expr.context import BindingContext
from pagebind.expr.evaluator import evaluate, to_text
from pagebind.expr.nodes import Expression
from pagebind.expr.scanner import has_expressions, substitute
from pagebind.render.directives import DirectiveBinding, bind, is_directive
from pagebind.render.tree import Element, Node, Raw, TemplateTree, parse_template

logger = logging.getLogger(__name__)


class DirectiveProcessor:
    """Render template trees against binding contexts.

    Args:
        namespaces: Extra namespace names (beyond ``page``, ``loop``,
            ``link``, ``block``, ``section``) that expressions may use.
    """

    def __init__(self, namespaces: Iterable[str] | None = None) -> None:
        self.namespaces = tuple(namespaces) if namespaces is not None else None

    def render(self, template: TemplateTree | str, context: BindingContext) -> str:
        if isinstance(template, str):
            template = parse_template(template)
        logger.debug("Rendering template %s", template.name or "<string>")
        return self._render_nodes(template.children, context)

    # -- Traversal -----------------------------------------------------------

    def _render_nodes(self, nodes: Iterable[Node], context: BindingContext) -> str:
        return "".join(self._render_node(node, context) for node in nodes)

    def _render_node(self, node: Node, context: BindingContext) -> str:
        if isinstance(node, Raw):
            return node.text
        try:
            bindings = bind(node, self.namespaces)
            return self._apply(node, bindings, 0, context, None)
        except PagebindError as e:
            raise e.with_context(location=node.location)

    def _apply(
        self,
        element: Element,
        bindings: list[DirectiveBinding],
        position: int,
        context: BindingContext,
        body: Markup | None,
    ) -> str:
        if position == len(bindings):
            return self._emit(element, context, body)
        binding = bindings[position]

        def render_next(next_context: BindingContext, next_body: Markup | None = None) -> str:
            return self._apply(
                element,
                bindings,
                position + 1,
                next_context,
                next_body if next_body is not None else body,
            )

        return binding.directive.apply(binding, context, render_next)

    # -- Output --------------------------------------------------------------

    def _emit(self, element: Element, context: BindingContext, body: Markup | None) -> str:
        start = self._start_tag(element, context)
        if element.is_void:
            return start
        if body is None:
            if element.self_closing:
                return start
            inner = self._render_nodes(element.children, context)
        else:
            inner = str(body)
        end = ""
        if element.closed or body is not None:
            end = f"</{element.source_tag or element.tag}>"
        return f"{start}{inner}{end}"

    def _start_tag(self, element: Element, context: BindingContext) -> str:
        changed = False
        parts = [f"<{element.source_tag or element.tag}"]
        written = element.source_names or tuple(name for name, _ in element.attrs)
        for written_name, (name, value) in zip(written, element.attrs):
            if is_directive(name):
                changed = True
                continue
            if value is None:
                parts.append(f" {written_name}")
                continue
            if has_expressions(value):
                changed = True
                value = self._interpolate(value, context)
            parts.append(f' {written_name}="{escape(value)}"')
        if not changed and element.raw_start:
            return element.raw_start
        parts.append(" />" if element.self_closing and element.is_void else ">")
        return "".join(parts)

    def _interpolate(self, value: str, context: BindingContext) -> str:
        def _render(expr: Expression) -> str:
            try:
                return str(to_text(evaluate(expr, context)))
            except PagebindError as e:
                raise e.with_context(source=expr.source)

        return substitute(value, _render, self.namespaces)


_default_processor = DirectiveProcessor()


def render(template: TemplateTree | str, context: BindingContext) -> str:
    """Render ``template`` against ``context`` and return the HTML string."""
    return _default_processor.render(template, context)

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

"""Inline directives in page bodies.

Prose such as ``see $link.ref("comparison")`` or a block opener carrying
``$block.collapsible(false)`` is resolved through the same evaluator as
template attributes.  Link results replace the call as text; block hints
and section anchors are also collected so the body renderer can act on
them.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from markupsafe import escape

from pagebind.expr.context import BindingContext
from pagebind.expr.evaluator import evaluate, to_text
from pagebind.expr.nodes import Expression
from pagebind.expr.scanner import substitute
from pagebind.namespaces import BlockHint, SectionAnchor


@dataclass
class BodyResult:
    """Substituted body text plus the hints and anchors found in it."""

    html: str
    hints: list[BlockHint] = field(default_factory=list)
    anchors: list[str] = field(default_factory=list)

    @property
    def collapsible(self) -> bool | None:
        """Last ``$block.collapsible(...)`` value, or ``None`` if unset."""
        for hint in reversed(self.hints):
            if hint.name == "collapsible":
                return bool(hint.value)
        return None


def render_body(
    text: str,
    context: BindingContext,
    *,
    escape_text: bool = False,
    namespaces: Iterable[str] | None = None,
) -> BodyResult:
    """Substitute every inline expression in ``text``.

    Args:
        text: Body source (markup or plain text).
        context: Binding context exposing ``link``, ``block``, ``section``.
        escape_text: Escape scalar results as HTML; leave off when the
            body is handed to a markdown renderer afterwards.
        namespaces: Extra namespace names the body may use.
    """
    result = BodyResult(html="")

    def _render(expr: Expression) -> str:
        value = evaluate(expr, context)
        if isinstance(value, BlockHint):
            result.hints.append(value)
        elif isinstance(value, SectionAnchor):
            result.anchors.append(value.id)
        out = to_text(value)
        if escape_text:
            return str(escape(out))
        return str(out)

    result.html = substitute(text, _render, namespaces)
    return result

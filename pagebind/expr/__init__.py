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

"""Expression language: ``$namespace.field.method(args)`` chains.

Usage::

    from pagebind.expr import BindingContext, evaluate, parse_expression

    tree = parse_expression("$page.title.upper()")
    evaluate(tree, BindingContext(namespaces={"page": {"title": "Pipe Syntax"}}))
"""

from pagebind.expr.context import BindingContext, LoopFrame
from pagebind.expr.evaluator import evaluate, to_sequence, to_text
from pagebind.expr.nodes import CallStep, Expression, FieldStep, Literal
from pagebind.expr.parser import DEFAULT_NAMESPACES, parse_expression, parse_prefix
from pagebind.expr.scanner import Segment, scan, substitute

__all__ = [
    "DEFAULT_NAMESPACES",
    "BindingContext",
    "CallStep",
    "Expression",
    "FieldStep",
    "Literal",
    "LoopFrame",
    "Segment",
    "evaluate",
    "parse_expression",
    "parse_prefix",
    "scan",
    "substitute",
    "to_sequence",
    "to_text",
]

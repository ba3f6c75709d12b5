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

"""Evaluate expression trees against a binding context.

Resolution walks the step chain left to right.  Values implementing
:class:`~pagebind.models.Resolvable` answer field and method lookups
themselves; mappings are viewed as :class:`~pagebind.models.PlainRecord`;
everything else gets a small set of built-in fields plus the methods in
the formatter registry.  Any name that cannot be resolved raises
:class:`~pagebind.errors.EvalError`, never a placeholder.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date, datetime
from typing import Any

from markupsafe import Markup

from pagebind.errors import EvalError, EvalErrorKind, PagebindError
from pagebind.expr.context import BindingContext
from pagebind.expr.nodes import Argument, CallStep, Expression, Literal
from pagebind.formatters.registry import get_formatter
from pagebind.models import PlainRecord, Resolvable, unknown_field, unknown_method


def type_label(value: Any) -> str:
    if isinstance(value, Resolvable):
        return value.type_name
    if value is None:
        return "none"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (date, datetime)):
        return "timestamp"
    if isinstance(value, Mapping):
        return "record"
    if isinstance(value, Sequence):
        return "sequence"
    return type(value).__name__


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def get_field(value: Any, name: str, context: BindingContext) -> Any:
    if isinstance(value, Resolvable):
        return value.get_field(name, context)
    if isinstance(value, Mapping):
        return PlainRecord(value).get_field(name, context)
    if isinstance(value, (date, datetime)):
        if name in ("year", "month", "day"):
            return getattr(value, name)
        if isinstance(value, datetime) and name in ("hour", "minute", "second"):
            return getattr(value, name)
    if _is_sequence(value):
        if name == "len":
            return len(value)
        if name in ("first", "last"):
            formatter = get_formatter(value, name)
            return formatter(value, (), context)
    raise unknown_field(type_label(value), name)


def invoke(value: Any, name: str, args: Sequence[Any], context: BindingContext) -> Any:
    if isinstance(value, Resolvable):
        return value.invoke(name, args, context)
    if isinstance(value, Mapping):
        return PlainRecord(value).invoke(name, args, context)
    formatter = get_formatter(value, name) if value is not None else None
    if formatter is None:
        raise unknown_method(type_label(value), name, len(args))
    return formatter(value, args, context)


def _argument(arg: Argument, context: BindingContext) -> Any:
    if isinstance(arg, Literal):
        return arg.value
    return evaluate(arg, context)


def evaluate(expr: Expression, context: BindingContext) -> Any:
    """Resolve ``expr`` to a value.

    Pure: the same tree and context always give the same result.

    Raises:
        EvalError: unknown namespace, field, or method; arity mismatch;
            ``$loop`` outside a loop.
        LinkError: a ``$link`` call names an unknown page or anchor.
    """
    try:
        value = context.lookup(expr.namespace)
        for step in expr.steps:
            if isinstance(step, CallStep):
                args = [_argument(a, context) for a in step.args]
                value = invoke(value, step.name, args, context)
            else:
                value = get_field(value, step.name, context)
    except PagebindError as e:
        raise e.with_context(source=expr.source)
    return value


def to_text(value: Any) -> str:
    """Convert an evaluated value to text for output.

    Only scalar values convert implicitly.  Timestamps need an explicit
    ``format(...)``/``iso()`` call and sequences or records cannot be
    printed at all.  ``None`` (an unset optional field) renders as empty.
    """
    if value is None:
        return ""
    if isinstance(value, Markup):
        return value
    if hasattr(value, "__html__"):
        return Markup(value.__html__())
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    hint = " (use .format(layout) or .iso())" if isinstance(value, (date, datetime)) else ""
    raise EvalError(
        EvalErrorKind.BAD_VALUE,
        f"cannot render a {type_label(value)} as text{hint}",
    )


def to_sequence(value: Any) -> Sequence[Any]:
    """Return ``value`` as a sequence for ``:loop`` or fail."""
    if not _is_sequence(value) or isinstance(value, Mapping):
        raise EvalError(
            EvalErrorKind.BAD_VALUE,
            f":loop needs a sequence, got {type_label(value)}",
        )
    return value

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

"""Formatter registry.

Formatters are the methods expressions may call on plain values
(strings, timestamps, sequences).  They are registered per value type and
name, and lazily populated with built-ins on first access.  New formatters
can be registered at runtime via :func:`register_formatter`.

All formatters share one calling convention::

    func(value, *args, context=context)

where ``args`` has already been checked against the declared arity and
argument types.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from pagebind.errors import EvalError, EvalErrorKind
from pagebind.formatters.dates import format_layout

if TYPE_CHECKING:
    from pagebind.expr.context import BindingContext


@dataclass(frozen=True)
class Formatter:
    """A named, arity-checked transform on one value type."""

    value_type: type
    name: str
    func: Callable[..., Any]
    arg_types: tuple[type, ...] = ()
    description: str = ""

    @property
    def arity(self) -> int:
        return len(self.arg_types)

    def __call__(self, value: Any, args: Sequence[Any], context: BindingContext) -> Any:
        if len(args) != self.arity:
            raise EvalError(
                EvalErrorKind.UNKNOWN_METHOD,
                f"{self.name}() takes {self.arity} argument(s), got {len(args)}",
            )
        for i, (arg, expected) in enumerate(zip(args, self.arg_types)):
            # bool is an int subclass; never accept it where a number is expected
            if not isinstance(arg, expected) or (isinstance(arg, bool) and expected is not bool):
                raise EvalError(
                    EvalErrorKind.BAD_ARGUMENT,
                    f"argument {i + 1} of {self.name}() must be "
                    f"{expected.__name__}, got {type(arg).__name__}",
                )
        return self.func(value, *args, context=context)


# Registry: (value type, name) -> formatter
_REGISTRY: dict[tuple[type, str], Formatter] = {}
_builtins_loaded = False
_builtins_lock = threading.Lock()


def register_formatter(
    value_type: type,
    name: str,
    func: Callable[..., Any],
    arg_types: tuple[type, ...] = (),
    description: str = "",
) -> Formatter:
    """Register ``func`` as method ``name`` on values of ``value_type``."""
    _ensure_builtins()
    return _store(value_type, name, func, arg_types, description)


def _store(
    value_type: type,
    name: str,
    func: Callable[..., Any],
    arg_types: tuple[type, ...] = (),
    description: str = "",
) -> Formatter:
    formatter = Formatter(value_type, name, func, tuple(arg_types), description)
    _REGISTRY[(value_type, name)] = formatter
    return formatter


def get_formatter(value: Any, name: str) -> Formatter | None:
    """Return the formatter for ``value.name()``, most specific type first."""
    _ensure_builtins()
    for klass in type(value).__mro__:
        formatter = _REGISTRY.get((klass, name))
        if formatter is not None:
            return formatter
    if isinstance(value, Sequence) and not isinstance(value, str):
        return _REGISTRY.get((Sequence, name))
    return None


def list_formatters(value_type: type | None = None) -> list[Formatter]:
    """Return registered formatters, optionally for one value type."""
    _ensure_builtins()
    return [
        f for (vt, _), f in _REGISTRY.items() if value_type is None or vt is value_type
    ]


def formatter_names(value_type: type) -> list[str]:
    return sorted(f.name for f in list_formatters(value_type))


# ---------------------------------------------------------------------------
# Lazy built-in registration
# ---------------------------------------------------------------------------


def _ensure_builtins() -> None:
    """Lazily register built-in formatters on first access."""
    global _builtins_loaded
    if _builtins_loaded:
        return
    with _builtins_lock:
        if _builtins_loaded:
            return
        _register_builtins()
        _builtins_loaded = True


def _localize(value: date | datetime, context: BindingContext) -> date | datetime:
    tz = context.config.timezone
    if tz is not None and isinstance(value, datetime) and value.tzinfo is not None:
        return value.astimezone(tz)
    return value


def _format_date(value: date | datetime, layout: str, *, context: BindingContext) -> str:
    return format_layout(_localize(value, context), layout)


def _iso_date(value: date | datetime, *, context: BindingContext) -> str:
    return _localize(value, context).isoformat()


def _limit(value: Sequence[Any], n: int, *, context: BindingContext) -> tuple[Any, ...]:
    if n < 0:
        raise EvalError(EvalErrorKind.BAD_ARGUMENT, f"limit() needs n >= 0, got {n}")
    return tuple(value[:n])


def _join(value: Sequence[Any], sep: str, *, context: BindingContext) -> str:
    from pagebind.expr.evaluator import to_text

    return sep.join(to_text(v) for v in value)


def _first(value: Sequence[Any], *, context: BindingContext) -> Any:
    if not value:
        raise EvalError(EvalErrorKind.BAD_VALUE, "first() of an empty sequence")
    return value[0]


def _last(value: Sequence[Any], *, context: BindingContext) -> Any:
    if not value:
        raise EvalError(EvalErrorKind.BAD_VALUE, "last() of an empty sequence")
    return value[-1]


def _register_builtins() -> None:
    """Register all built-in formatters."""
    for klass in (datetime, date):
        _store(klass, "format", _format_date, (str,), "Format with a reference-time layout")
        _store(klass, "iso", _iso_date, (), "ISO-8601 representation")

    _store(str, "upper", lambda v, *, context: v.upper(), (), "Upper-case")
    _store(str, "lower", lambda v, *, context: v.lower(), (), "Lower-case")
    _store(str, "trim", lambda v, *, context: v.strip(), (), "Strip surrounding whitespace")

    _store(Sequence, "len", lambda v, *, context: len(v), (), "Number of items")
    _store(Sequence, "first", _first, (), "First item")
    _store(Sequence, "last", _last, (), "Last item")
    _store(
        Sequence, "reverse", lambda v, *, context: tuple(reversed(v)), (), "Items in reverse order"
    )
    _store(Sequence, "limit", _limit, (int,), "At most n leading items")
    _store(Sequence, "join", _join, (str,), "Items joined as text")

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

"""Locate inline expressions embedded in free text.

Used for interpolated attribute values (``href="$loop.it.link()"``) and for
body prose (``see $link.ref("comparison")``).  ``$$`` produces a literal
dollar sign; a ``$`` not followed by a letter is left alone, so prices such
as ``$5`` need no escaping.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass

from pagebind.expr.nodes import Expression
from pagebind.expr.parser import parse_prefix


@dataclass(frozen=True)
class Segment:
    """A literal run of text or an embedded expression."""

    start: int
    end: int
    text: str
    expression: Expression | None = None


def scan(text: str, namespaces: Iterable[str] | None = None) -> Iterator[Segment]:
    """Split ``text`` into literal and expression segments, in order."""
    extra = tuple(namespaces) if namespaces is not None else None
    buf: list[str] = []
    buf_start = 0
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch != "$":
            buf.append(ch)
            i += 1
            continue
        if i + 1 < n and text[i + 1] == "$":
            buf.append("$")
            i += 2
            continue
        if i + 1 >= n or not (text[i + 1].isalpha() or text[i + 1] == "_"):
            buf.append(ch)
            i += 1
            continue
        if buf:
            yield Segment(buf_start, i, "".join(buf))
            buf = []
        expr, end = parse_prefix(text, i, extra)
        yield Segment(i, end, text[i:end], expr)
        i = end
        buf_start = end
    if buf:
        yield Segment(buf_start, n, "".join(buf))


def has_expressions(text: str) -> bool:
    """Cheap check used to skip scanning plain attribute values."""
    return "$" in text


def substitute(
    text: str,
    render: Callable[[Expression], str],
    namespaces: Iterable[str] | None = None,
) -> str:
    """Replace every embedded expression with ``render(expression)``."""
    parts: list[str] = []
    for segment in scan(text, namespaces):
        if segment.expression is None:
            parts.append(segment.text)
        else:
            parts.append(render(segment.expression))
    return "".join(parts)

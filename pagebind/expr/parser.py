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

"""Recursive-descent parser for ``$namespace.path(args)`` expressions.

Grammar::

    expr     := '$' IDENT ( '.' segment )*
    segment  := IDENT | IDENT '(' [ arg ( ',' arg )* ] ')'
    arg      := STRING | NUMBER | 'true' | 'false' | expr

Parsing never evaluates anything, so results are cached per source string
and shared freely between renders.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from functools import lru_cache

from pagebind.errors import ParseError
from pagebind.expr.nodes import Argument, CallStep, Expression, FieldStep, Literal, Step

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACES = frozenset({"page", "loop", "link", "block", "section"})

_ESCAPES = {"n": "\n", "t": "\t", "\\": "\\", '"': '"', "'": "'"}


def _is_ident_start(ch: str) -> bool:
    return ch.isalpha() or ch == "_"


def _is_ident_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


class _Parser:
    """Single-use cursor over one source string."""

    def __init__(self, text: str, pos: int, namespaces: frozenset[str], strict: bool) -> None:
        self.text = text
        self.pos = pos
        self.namespaces = namespaces
        self.strict = strict

    # -- Cursor helpers ------------------------------------------------------

    def _peek(self, offset: int = 0) -> str:
        i = self.pos + offset
        return self.text[i] if i < len(self.text) else ""

    def _error(self, message: str) -> ParseError:
        return ParseError(f"{message} (offset {self.pos})", source=self.text)

    def _skip_ws(self) -> None:
        while self._peek() and self._peek().isspace():
            self.pos += 1

    def _ident(self) -> str:
        start = self.pos
        if not _is_ident_start(self._peek()):
            raise self._error("empty path segment")
        while self._peek() and _is_ident_char(self._peek()):
            self.pos += 1
        return self.text[start : self.pos]

    # -- Grammar -------------------------------------------------------------

    def expression(self) -> Expression:
        start = self.pos
        if self._peek() != "$":
            raise self._error("expression must start with '$'")
        self.pos += 1
        if not _is_ident_start(self._peek()):
            raise self._error("missing namespace after '$'")
        namespace = self._ident()
        if namespace not in self.namespaces:
            raise ParseError(
                f"unknown namespace ${namespace}; expected one of "
                f"{sorted(self.namespaces)}",
                source=self.text,
            )

        steps: list[Step] = []
        while self._peek() == ".":
            if not _is_ident_start(self._peek(1)):
                if self.strict:
                    self.pos += 1
                    raise self._error("empty path segment")
                break
            self.pos += 1
            steps.append(self._segment())
        return Expression(source=self.text[start : self.pos], namespace=namespace, steps=tuple(steps))

    def _segment(self) -> Step:
        name = self._ident()
        if self._peek() != "(":
            return FieldStep(name)
        self.pos += 1
        args: list[Argument] = []
        self._skip_ws()
        if self._peek() == ")":
            self.pos += 1
            return CallStep(name, ())
        while True:
            self._skip_ws()
            args.append(self._argument())
            self._skip_ws()
            ch = self._peek()
            if ch == ",":
                self.pos += 1
                continue
            if ch == ")":
                self.pos += 1
                return CallStep(name, tuple(args))
            if ch == "":
                raise self._error(f"unterminated call to {name}()")
            raise self._error(f"unexpected {ch!r} in arguments of {name}()")

    def _argument(self) -> Argument:
        ch = self._peek()
        if ch == "":
            raise self._error("unterminated call")
        if ch in "\"'":
            return Literal(self._string(ch))
        if ch == "$":
            return self._nested()
        if ch.isdigit() or (ch in "-+." and (self._peek(1).isdigit() or self._peek(1) == ".")):
            return Literal(self._number())
        if _is_ident_start(ch):
            word = self._ident()
            if word == "true":
                return Literal(True)
            if word == "false":
                return Literal(False)
            raise self._error(f"bare word {word!r} is not a valid argument")
        if ch == ")":
            raise self._error("empty argument")
        raise self._error(f"unexpected {ch!r} in arguments")

    def _nested(self) -> Expression:
        # Nested expressions end at ',' or ')', so they are parsed non-strictly
        # and their source is the slice they actually consumed.
        sub = _Parser(self.text, self.pos, self.namespaces, strict=False)
        expr = sub.expression()
        self.pos = sub.pos
        return expr

    def _string(self, quote: str) -> str:
        self.pos += 1
        out: list[str] = []
        while True:
            ch = self._peek()
            if ch == "":
                raise self._error("unbalanced quotes")
            self.pos += 1
            if ch == quote:
                return "".join(out)
            if ch == "\\":
                nxt = self._peek()
                if nxt == "":
                    raise self._error("unbalanced quotes")
                self.pos += 1
                out.append(_ESCAPES.get(nxt, "\\" + nxt))
            else:
                out.append(ch)

    def _number(self) -> int | float:
        start = self.pos
        if self._peek() in "+-":
            self.pos += 1
        while self._peek() and (self._peek().isdigit() or self._peek() == "."):
            self.pos += 1
        raw = self.text[start : self.pos]
        try:
            return float(raw) if "." in raw else int(raw)
        except ValueError:
            raise self._error(f"malformed number {raw!r}") from None


@lru_cache(maxsize=2048)
def _parse_cached(source: str, namespaces: frozenset[str]) -> Expression:
    logger.debug("Parsing expression %r", source)
    text = source.strip()
    parser = _Parser(text, 0, namespaces, strict=True)
    expr = parser.expression()
    parser._skip_ws()
    if parser.pos != len(text):
        raise ParseError(
            f"unexpected {text[parser.pos]!r} after expression (offset {parser.pos})",
            source=text,
        )
    return expr


def _namespace_set(namespaces: Iterable[str] | None) -> frozenset[str]:
    if namespaces is None:
        return DEFAULT_NAMESPACES
    return DEFAULT_NAMESPACES | frozenset(namespaces)


def parse_expression(source: str, namespaces: Iterable[str] | None = None) -> Expression:
    """Parse a complete expression string.

    Args:
        source: Text such as ``"$page.title"``; surrounding whitespace is ignored.
        namespaces: Extra namespace names accepted besides the defaults.

    Raises:
        ParseError: on unknown namespace, unterminated call, unbalanced
            quotes or parentheses, empty path segment, or trailing text.
    """
    return _parse_cached(source, _namespace_set(namespaces))


def parse_prefix(
    text: str,
    start: int,
    namespaces: Iterable[str] | None = None,
) -> tuple[Expression, int]:
    """Parse the expression beginning at ``text[start]`` (a ``$``).

    Parsing stops at the first character that cannot continue the chain, so
    a sentence-ending period is not swallowed.  Returns the tree and the
    offset just past it.
    """
    parser = _Parser(text, start, _namespace_set(namespaces), strict=False)
    try:
        expr = parser.expression()
    except ParseError as e:
        e.source = _excerpt(text, start)
        raise
    return expr, parser.pos


def _excerpt(text: str, start: int, width: int = 60) -> str:
    end = text.find("\n", start)
    if end == -1 or end - start > width:
        end = min(len(text), start + width)
    return text[start:end]

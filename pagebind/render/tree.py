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

"""HTML template tree.

Built with the standard library's event-driven :class:`html.parser.HTMLParser`.
Text, comments, doctype and entity references are kept exactly as written
so that anything without a directive is copied through byte for byte.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import Union

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Raw:
    """Verbatim markup: text, entity references, comments, declarations."""

    text: str


@dataclass(frozen=True, eq=False)
class Element:
    tag: str
    attrs: tuple[tuple[str, str | None], ...]
    children: tuple[Node, ...] = ()
    raw_start: str = ""
    closed: bool = False
    self_closing: bool = False
    line: int = 0
    column: int = 0
    source_tag: str = ""
    source_names: tuple[str, ...] = ()

    @property
    def location(self) -> str:
        return f"<{self.tag}> at line {self.line}, column {self.column}"

    @property
    def is_void(self) -> bool:
        return self.tag in VOID_ELEMENTS

    def get(self, name: str) -> str | None:
        for key, value in self.attrs:
            if key == name:
                return value
        return None


Node = Union[Raw, Element]


@dataclass(frozen=True)
class TemplateTree:
    """A parsed template: top-level nodes in document order."""

    children: tuple[Node, ...]
    name: str | None = None

    def iter_elements(self):
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            if isinstance(node, Element):
                yield node
                stack.extend(reversed(node.children))


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------

# Attribute names as written; html.parser only reports them lowercased.
_ATTR_NAME_RE = re.compile(r"""([^\s/>=][^\s/=>]*)(?:\s*=+\s*('[^']*'|"[^"]*"|(?!['"])[^>\s]*))?""")


def _source_names(
    raw: str, tag: str, attrs: list[tuple[str, str | None]],
) -> tuple[str, tuple[str, ...]]:
    """Tag and attribute names of a start tag in their original case."""
    written_tag = raw[1 : 1 + len(tag)]
    if written_tag.lower() != tag:
        written_tag = tag
    names = tuple(m.group(1) for m in _ATTR_NAME_RE.finditer(raw, 1 + len(tag)))
    if [n.lower() for n in names] != [name for name, _ in attrs]:
        names = tuple(name for name, _ in attrs)
    return written_tag, names


@dataclass
class _OpenElement:
    tag: str
    attrs: list[tuple[str, str | None]]
    raw_start: str
    line: int
    column: int
    source_tag: str = ""
    source_names: tuple[str, ...] = ()
    children: list[Node] = field(default_factory=list)

    def build(self, closed: bool) -> Element:
        return Element(
            tag=self.tag,
            attrs=tuple(self.attrs),
            children=tuple(self.children),
            raw_start=self.raw_start,
            closed=closed,
            line=self.line,
            column=self.column,
            source_tag=self.source_tag,
            source_names=self.source_names,
        )


class _TreeBuilder(HTMLParser):
    """HTMLParser handler that assembles an element tree."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=False)
        self.root: list[Node] = []
        self.stack: list[_OpenElement] = []

    # -- Helpers -------------------------------------------------------------

    def _append(self, node: Node) -> None:
        target = self.stack[-1].children if self.stack else self.root
        if isinstance(node, Raw) and target and isinstance(target[-1], Raw):
            target[-1] = Raw(target[-1].text + node.text)
        else:
            target.append(node)

    def _close_top(self, closed: bool) -> None:
        open_el = self.stack.pop()
        self._append(open_el.build(closed))

    # -- Parser events -------------------------------------------------------

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        line, col = self.getpos()
        raw = self.get_starttag_text() or ""
        written_tag, names = _source_names(raw, tag, attrs)
        if tag in VOID_ELEMENTS:
            self._append(
                Element(
                    tag=tag,
                    attrs=tuple(attrs),
                    raw_start=raw,
                    line=line,
                    column=col + 1,
                    source_tag=written_tag,
                    source_names=names,
                )
            )
            return
        self.stack.append(
            _OpenElement(tag, list(attrs), raw, line, col + 1, written_tag, names)
        )

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        line, col = self.getpos()
        raw = self.get_starttag_text() or ""
        written_tag, names = _source_names(raw, tag, attrs)
        self._append(
            Element(
                tag=tag,
                attrs=tuple(attrs),
                raw_start=raw,
                self_closing=True,
                line=line,
                column=col + 1,
                source_tag=written_tag,
                source_names=names,
            )
        )

    def handle_endtag(self, tag: str) -> None:
        if not any(el.tag == tag for el in self.stack):
            # Stray end tag: keep it as written.
            self._append(Raw(f"</{tag}>"))
            return
        while self.stack[-1].tag != tag:
            self._close_top(closed=False)
        self._close_top(closed=True)

    def handle_data(self, data: str) -> None:
        self._append(Raw(data))

    def handle_entityref(self, name: str) -> None:
        self._append(Raw(f"&{name};"))

    def handle_charref(self, name: str) -> None:
        self._append(Raw(f"&#{name};"))

    def handle_comment(self, data: str) -> None:
        self._append(Raw(f"<!--{data}-->"))

    def handle_decl(self, decl: str) -> None:
        self._append(Raw(f"<!{decl}>"))

    def handle_pi(self, data: str) -> None:
        self._append(Raw(f"<?{data}>"))

    def unknown_decl(self, data: str) -> None:
        self._append(Raw(f"<![{data}]>"))

    def finish(self) -> tuple[Node, ...]:
        self.close()
        while self.stack:
            self._close_top(closed=False)
        return tuple(self.root)


def parse_template(source: str, name: str | None = None) -> TemplateTree:
    """Parse an HTML template into a :class:`TemplateTree`."""
    builder = _TreeBuilder()
    builder.feed(source)
    return TemplateTree(children=builder.finish(), name=name)

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

"""Data models for pages and the values expressions navigate into.

Every value an expression can step into either implements
:class:`Resolvable` (pages, loop frames, records, namespaces) or is a
plain Python value adapted by the evaluator (strings, numbers, booleans,
timestamps, sequences).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from markupsafe import Markup

from pagebind.errors import EvalError, EvalErrorKind

if TYPE_CHECKING:
    from pagebind.expr.context import BindingContext


def unknown_field(owner: str, name: str) -> EvalError:
    return EvalError(EvalErrorKind.UNKNOWN_FIELD, f"{owner} has no field {name!r}")


def unknown_method(owner: str, name: str, arity: int) -> EvalError:
    return EvalError(
        EvalErrorKind.UNKNOWN_METHOD,
        f"{owner} has no method {name!r} taking {arity} argument(s)",
    )


# ---------------------------------------------------------------------------
# Capability interface
# ---------------------------------------------------------------------------


class Resolvable:
    """Capability interface for values with named fields and methods.

    Subclasses override :meth:`get_field` and :meth:`invoke`; the defaults
    reject every name so unknown access always surfaces as a typed error.
    The binding context is passed explicitly so that values never depend on
    ambient state.
    """

    type_name = "value"

    def get_field(self, name: str, context: BindingContext) -> Any:
        raise unknown_field(self.type_name, name)

    def invoke(self, name: str, args: Sequence[Any], context: BindingContext) -> Any:
        raise unknown_method(self.type_name, name, len(args))


class PlainRecord(Resolvable):
    """Read-only wrapper exposing mapping keys as fields.

    A zero-argument call on a key returns the stored value, so
    ``$page.subpages()`` works the same whether ``page`` is a
    :class:`Page` or plain data.  Callable values are invoked with the
    call's arguments.
    """

    type_name = "record"

    def __init__(self, data: Mapping[str, Any]) -> None:
        self._data = MappingProxyType(dict(data))

    def __repr__(self) -> str:
        return f"PlainRecord({dict(self._data)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PlainRecord):
            return dict(self._data) == dict(other._data)
        return NotImplemented

    def __hash__(self) -> int:
        return id(self)

    @property
    def data(self) -> Mapping[str, Any]:
        return self._data

    def get_field(self, name: str, context: BindingContext) -> Any:
        if name not in self._data:
            raise unknown_field(self.type_name, name)
        return self._data[name]

    def invoke(self, name: str, args: Sequence[Any], context: BindingContext) -> Any:
        if name not in self._data:
            raise unknown_method(self.type_name, name, len(args))
        value = self._data[name]
        if callable(value):
            try:
                return value(*args)
            except TypeError as e:
                raise unknown_method(self.type_name, name, len(args)) from e
        if args:
            raise unknown_method(self.type_name, name, len(args))
        return value


# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------


def _to_timestamp(value: str | date | datetime | None) -> datetime | None:
    """Normalise a frontmatter date value to a ``datetime``."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return datetime.fromisoformat(str(value).strip())


def _to_tags(value: str | Iterable[str] | None) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(t.strip() for t in value.split(",") if t.strip())
    return tuple(str(t) for t in value)


_PAGE_FIELDS = frozenset({"title", "date", "author", "tags", "layout", "path", "params"})


@dataclass(frozen=True, eq=False)
class Page(Resolvable):
    """One renderable document.

    ``body`` and ``children`` may be given eagerly or as zero-argument
    callables; the engine only touches them through :meth:`content` and
    :meth:`subpages`, so the external page-tree collaborator decides when
    the work happens.
    """

    path: str
    title: str = ""
    date: datetime | None = None
    author: str = ""
    tags: tuple[str, ...] = ()
    layout: str | None = None
    params: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    anchors: tuple[str, ...] = ()
    source: str = ""
    body: str | Callable[[], str] = ""
    children: Sequence[Page] | Callable[[], Sequence[Page]] = ()

    type_name = "page"

    def __post_init__(self) -> None:
        if not isinstance(self.params, MappingProxyType):
            object.__setattr__(self, "params", MappingProxyType(dict(self.params)))
        if not isinstance(self.tags, tuple):
            object.__setattr__(self, "tags", _to_tags(self.tags))

    @classmethod
    def from_frontmatter(
        cls,
        path: str,
        fields: Mapping[str, Any],
        *,
        content: str | Callable[[], str] = "",
        source: str = "",
        subpages: Sequence[Page] | Callable[[], Sequence[Page]] = (),
    ) -> Page:
        """Build a page from already-parsed frontmatter values.

        Keys other than the known fields are kept in :attr:`params`.
        """
        known = {"title", "date", "author", "layout", "tags", "anchors"}
        extra = {k: v for k, v in fields.items() if k not in known}
        return cls(
            path=path,
            title=str(fields.get("title") or ""),
            date=_to_timestamp(fields.get("date")),
            author=str(fields.get("author") or ""),
            tags=_to_tags(fields.get("tags")),
            layout=fields.get("layout"),
            params=extra,
            anchors=tuple(fields.get("anchors") or ()),
            source=source,
            body=content,
            children=subpages,
        )

    def content(self) -> Markup:
        """Rendered HTML body, trusted as markup."""
        body = self.body() if callable(self.body) else self.body
        return Markup(body)

    def subpages(self) -> tuple[Page, ...]:
        children = self.children() if callable(self.children) else self.children
        return tuple(children)

    def get_field(self, name: str, context: BindingContext) -> Any:
        if name in _PAGE_FIELDS:
            return getattr(self, name)
        if name in self.params:
            return self.params[name]
        raise unknown_field(self.type_name, name)

    def invoke(self, name: str, args: Sequence[Any], context: BindingContext) -> Any:
        if args:
            raise unknown_method(self.type_name, name, len(args))
        if name == "content":
            return self.content()
        if name == "subpages":
            return self.subpages()
        if name == "link":
            return context.link_resolver().page_url(self)
        raise unknown_method(self.type_name, name, len(args))

    def __str__(self) -> str:
        return self.title

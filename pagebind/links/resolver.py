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

"""The ``$link`` namespace."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from pagebind.errors import EvalError, EvalErrorKind, LinkError, LinkErrorKind
from pagebind.links.index import LinkIndex
from pagebind.models import Page, Resolvable, unknown_method

if TYPE_CHECKING:
    from pagebind.expr.context import BindingContext


class LinkResolver(Resolvable):
    """Resolve symbolic page and anchor references to URLs.

    ``$link.page("blog/2-dbt-testing")`` gives the page's URL;
    ``$link.ref("comparison")`` gives ``<current page URL>#comparison``, and
    ``$link.ref("blog/2-dbt-testing#setup")`` targets another page's anchor.
    """

    type_name = "link"

    def __init__(self, index: LinkIndex, current_page: Page | None = None) -> None:
        self.index = index
        self.current_page = current_page

    def for_page(self, page: Page | None) -> LinkResolver:
        return LinkResolver(self.index, page)

    def resolve_page(self, page_id: str) -> str:
        return self.index.page_url(page_id)

    def resolve_ref(self, fragment_id: str) -> str:
        if "#" in fragment_id:
            page_id, _, anchor = fragment_id.partition("#")
            if page_id.strip():
                return self.index.anchor_url(page_id, anchor)
            # "#anchor" is the same-page form
            fragment_id = anchor
        if self.current_page is None:
            raise LinkError(
                LinkErrorKind.NOT_FOUND,
                f"anchor {fragment_id!r} has no current page to resolve against",
            )
        return self.index.anchor_url(self.current_page.path, fragment_id)

    def page_url(self, page: Page) -> str:
        return self.index.page_url(page.path)

    def invoke(self, name: str, args: Sequence[Any], context: BindingContext) -> Any:
        if name not in ("page", "ref") or len(args) != 1:
            raise unknown_method(self.type_name, name, len(args))
        target = args[0]
        if not isinstance(target, str):
            raise EvalError(
                EvalErrorKind.BAD_ARGUMENT,
                f"$link.{name}() needs a string id, got {type(target).__name__}",
            )
        if name == "page":
            return self.resolve_page(target)
        return self.resolve_ref(target)

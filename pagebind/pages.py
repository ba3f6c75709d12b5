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

"""Per-page entry points used by a build driver.

Usage::

    from pagebind import LayoutLoader, LinkIndex, RenderConfig, render_page

    config = RenderConfig.from_env()
    index = LinkIndex.from_pages(root_page, config=config)
    loader = LayoutLoader(config.user_layout_dir, config.default_layout_dir)
    html = render_page(page, loader, index, config)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pagebind.config import RenderConfig
from pagebind.errors import PagebindError
from pagebind.expr.context import BindingContext
from pagebind.layouts.loader import LayoutLoader
from pagebind.links.index import LinkIndex
from pagebind.links.resolver import LinkResolver
from pagebind.models import Page
from pagebind.namespaces import BlockNamespace, SectionNamespace
from pagebind.render.processor import DirectiveProcessor

logger = logging.getLogger(__name__)


def build_context(
    page: Any,
    link_index: LinkIndex | None = None,
    config: RenderConfig | None = None,
    extra: Mapping[str, Any] | None = None,
) -> BindingContext:
    """Root binding context for rendering ``page``.

    ``$link`` is only bound when a link index is given, so templates that
    use it without one fail with an unknown-namespace error instead of
    producing dead links.
    """
    namespaces: dict[str, Any] = {
        "page": page,
        "block": BlockNamespace(),
        "section": SectionNamespace(),
    }
    if link_index is not None:
        current = page if isinstance(page, Page) else None
        namespaces["link"] = LinkResolver(link_index, current)
    if extra:
        namespaces.update(extra)
    return BindingContext(namespaces=namespaces, config=config or RenderConfig())


def render_page(
    page: Page,
    loader: LayoutLoader,
    link_index: LinkIndex | None = None,
    config: RenderConfig | None = None,
    extra: Mapping[str, Any] | None = None,
) -> str:
    """Render ``page`` with its layout and return the HTML document.

    Raises:
        PagebindError: any parse, evaluation, or link error; the page is
            not rendered at all in that case.
        jinja2.TemplateNotFound: the page's layout does not exist.
    """
    if not page.layout:
        raise PagebindError(f"page {page.path!r} has no layout")
    tree = loader.load(page.layout)
    context = build_context(page, link_index, config, extra)
    processor = DirectiveProcessor(namespaces=extra.keys() if extra else None)
    html = processor.render(tree, context)
    logger.debug("Rendered %s with %s (%d chars)", page.path, page.layout, len(html))
    return html

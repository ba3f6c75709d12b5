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

"""Pre-built index of page URLs and in-page anchors.

The index is built once from the page tree handed over by the discovery
collaborator and is read-only afterwards, so resolving a link never
touches the filesystem.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from pagebind.config import DEFAULT_BASE_URL, RenderConfig
from pagebind.errors import LinkError, LinkErrorKind
from pagebind.models import Page

logger = logging.getLogger(__name__)

_SECTION_ID_RE = re.compile(r"""(?<!\$)\$section\.id\(\s*(["'])(.+?)\1\s*\)""")
_STRIP_SUFFIXES = (".md", ".html")


def normalize_id(page_id: str) -> str:
    """Canonical form of a page identifier.

    ``"/blog/2-dbt-testing/"``, ``"blog/2-dbt-testing.md"`` and
    ``"blog/2-dbt-testing"`` all normalise to ``"blog/2-dbt-testing"``;
    ``"index"`` and ``"/"`` normalise to the root id ``""``.
    """
    pid = page_id.strip().strip("/")
    for suffix in _STRIP_SUFFIXES:
        if pid.endswith(suffix):
            pid = pid[: -len(suffix)]
            break
    if pid == "index":
        return ""
    if pid.endswith("/index"):
        pid = pid[: -len("/index")]
    return pid


def find_section_ids(source: str) -> list[str]:
    """Anchor ids declared with ``$section.id("...")`` in raw body text."""
    return [m.group(2) for m in _SECTION_ID_RE.finditer(source)]


@dataclass(frozen=True)
class LinkIndex:
    """Immutable page-id → URL and page-id → anchors lookup."""

    urls: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    anchors: Mapping[str, frozenset[str]] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "urls", MappingProxyType({normalize_id(k): v for k, v in self.urls.items()})
        )
        object.__setattr__(
            self,
            "anchors",
            MappingProxyType({normalize_id(k): frozenset(v) for k, v in self.anchors.items()}),
        )

    @classmethod
    def from_pages(
        cls,
        pages: Page | Iterable[Page],
        *,
        base_url: str | None = None,
        trailing_slash: bool | None = None,
        config: RenderConfig | None = None,
    ) -> LinkIndex:
        """Index a page tree (or forest), descending through ``subpages()``.

        Raises:
            ValueError: if two pages normalise to the same identifier.
        """
        cfg = config or RenderConfig()
        prefix = base_url if base_url is not None else cfg.base_url
        slash = trailing_slash if trailing_slash is not None else cfg.trailing_slash

        roots = [pages] if isinstance(pages, Page) else list(pages)
        urls: dict[str, str] = {}
        anchors: dict[str, frozenset[str]] = {}
        stack = list(reversed(roots))
        while stack:
            page = stack.pop()
            pid = normalize_id(page.path)
            if pid in urls:
                raise ValueError(f"Duplicate page id {pid!r} (from {page.path!r})")
            urls[pid] = build_url(prefix, pid, slash)
            anchors[pid] = frozenset(page.anchors) | frozenset(find_section_ids(page.source))
            stack.extend(reversed(page.subpages()))

        logger.debug("Indexed %d pages", len(urls))
        return cls(urls=urls, anchors=anchors)

    def __contains__(self, page_id: object) -> bool:
        return isinstance(page_id, str) and normalize_id(page_id) in self.urls

    def __len__(self) -> int:
        return len(self.urls)

    def page_url(self, page_id: str) -> str:
        pid = normalize_id(page_id)
        url = self.urls.get(pid)
        if url is None:
            raise LinkError(LinkErrorKind.NOT_FOUND, f"no page with id {page_id!r}")
        return url

    def anchor_url(self, page_id: str, anchor: str) -> str:
        pid = normalize_id(page_id)
        url = self.page_url(pid)
        if anchor not in self.anchors.get(pid, frozenset()):
            raise LinkError(
                LinkErrorKind.NOT_FOUND,
                f"page {pid or '/'!r} has no anchor {anchor!r}",
            )
        return f"{url}#{anchor}"


def build_url(base_url: str, page_id: str, trailing_slash: bool) -> str:
    base = (base_url or DEFAULT_BASE_URL).rstrip("/")
    if not page_id:
        return f"{base}/"
    url = f"{base}/{page_id}"
    return f"{url}/" if trailing_slash else url

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

"""Layout loader with directory fallback.

Resolution order when loading ``loader.load("layouts/post.html")``:

1. ``<user_dir>/layouts/post.html``: site's customised version
2. ``<default_dir>/layouts/post.html``: shipped default

Parsed layouts are cached and re-parsed only when the file changes on disk.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from pathlib import Path

from jinja2 import BaseLoader, Environment, TemplateNotFound

from pagebind.render.tree import TemplateTree, parse_template

logger = logging.getLogger(__name__)

LAYOUT_SUFFIXES = (".html", ".htm")


class _FallbackLoader(BaseLoader):
    """Jinja2 loader that checks the user dir first, then the default dir."""

    def __init__(
        self,
        user_dir: Path | None = None,
        default_dir: Path | None = None,
    ) -> None:
        self.user_dir = user_dir
        self.default_dir = default_dir

    def get_source(
        self, environment: Environment, template: str,
    ) -> tuple[str, str, Callable[[], bool]]:
        for directory in (self.user_dir, self.default_dir):
            if directory is None:
                continue
            path = directory / template
            if path.is_file():
                source = path.read_text(encoding="utf-8")
                mtime = path.stat().st_mtime
                return source, str(path), lambda: path.is_file() and path.stat().st_mtime == mtime
        raise TemplateNotFound(template)


class LayoutLoader:
    """Load and cache parsed layout templates from disk.

    Args:
        user_dir: Site override directory (checked first).
        default_dir: Default layout directory (fallback).
    """

    def __init__(
        self,
        user_dir: Path | None = None,
        default_dir: Path | None = None,
    ) -> None:
        self.user_dir = Path(user_dir).expanduser() if user_dir else None
        self.default_dir = Path(default_dir).expanduser() if default_dir else None
        self._env = Environment(loader=_FallbackLoader(self.user_dir, self.default_dir))
        self._cache: dict[str, tuple[TemplateTree, Callable[[], bool]]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def normalize(layout: str) -> str:
        name = layout.strip().lstrip("/")
        if not name.endswith(LAYOUT_SUFFIXES):
            name += LAYOUT_SUFFIXES[0]
        return name

    def load(self, layout: str) -> TemplateTree:
        """Return the parsed layout tree.

        Raises ``jinja2.TemplateNotFound`` if the layout exists in neither
        directory.
        """
        name = self.normalize(layout)
        with self._lock:
            cached = self._cache.get(name)
        if cached is not None and cached[1]():
            logger.debug("Layout cache hit: %s", name)
            return cached[0]

        source, filename, uptodate = self._env.loader.get_source(self._env, name)
        tree = parse_template(source, name=filename)
        with self._lock:
            self._cache[name] = (tree, uptodate)
        logger.debug("Loaded layout %s from %s", name, filename)
        return tree


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

"""Render configuration.

Explicit arguments always win; unset values fall back to environment
variables so a build driver can configure rendering without code changes:

==========================  ==============================================
``PAGEBIND_BASE_URL``       prefix for generated page URLs (default ``/``)
``PAGEBIND_TRAILING_SLASH`` ``1``/``true`` to end page URLs with ``/``
``PAGEBIND_TIMEZONE``       IANA zone aware timestamps are converted to
``PAGEBIND_LAYOUT_DIR``     user layout directory (checked before defaults)
==========================  ==============================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo

DEFAULT_BASE_URL = "/"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


def _env_flag(name: str) -> bool | None:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return None
    return raw.strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class RenderConfig:
    """Settings threaded through a render call.

    Args:
        base_url: Prefix for page URLs produced by the link index.
        trailing_slash: Whether page URLs end with ``/``.
        timezone: Zone that timezone-aware timestamps are converted to
            before formatting.  ``None`` formats them as given.
        user_layout_dir: Directory checked first for layout files.
        default_layout_dir: Fallback layout directory.
    """

    base_url: str = DEFAULT_BASE_URL
    trailing_slash: bool = True
    timezone: tzinfo | None = None
    user_layout_dir: Path | None = None
    default_layout_dir: Path | None = None

    @classmethod
    def from_env(
        cls,
        *,
        base_url: str | None = None,
        trailing_slash: bool | None = None,
        timezone: str | tzinfo | None = None,
        user_layout_dir: str | Path | None = None,
        default_layout_dir: str | Path | None = None,
    ) -> RenderConfig:
        """Build a config from explicit values with environment fallback."""
        resolved_base = base_url or os.environ.get("PAGEBIND_BASE_URL") or DEFAULT_BASE_URL

        resolved_slash = trailing_slash
        if resolved_slash is None:
            resolved_slash = _env_flag("PAGEBIND_TRAILING_SLASH")
        if resolved_slash is None:
            resolved_slash = True

        tz = timezone or os.environ.get("PAGEBIND_TIMEZONE") or None
        if isinstance(tz, str):
            tz = ZoneInfo(tz)

        user_dir = user_layout_dir or os.environ.get("PAGEBIND_LAYOUT_DIR") or None

        return cls(
            base_url=resolved_base,
            trailing_slash=resolved_slash,
            timezone=tz,
            user_layout_dir=Path(user_dir).expanduser() if user_dir else None,
            default_layout_dir=(
                Path(default_layout_dir).expanduser() if default_layout_dir else None
            ),
        )

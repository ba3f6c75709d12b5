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

"""Value formatters callable from expressions.

Usage::

    from pagebind.formatters import register_formatter

    register_formatter(str, "slug", lambda v, *, context: v.lower().replace(" ", "-"))

after which ``$page.title.slug()`` is available in every template.
"""

from pagebind.formatters.dates import format_layout
from pagebind.formatters.registry import (
    Formatter,
    formatter_names,
    get_formatter,
    list_formatters,
    register_formatter,
)

__all__ = [
    "Formatter",
    "format_layout",
    "formatter_names",
    "get_formatter",
    "list_formatters",
    "register_formatter",
]

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

"""Layout templates loaded from disk with user-directory override.

Usage::

    from pagebind.layouts import LayoutLoader

    loader = LayoutLoader(
        user_dir=Path("site/layouts"),
        default_dir=Path(__file__).parent / "defaults",
    )
    tree = loader.load("layouts/post.html")
"""

from pagebind.layouts.loader import LayoutLoader

__all__ = ["LayoutLoader"]

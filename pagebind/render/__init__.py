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

"""Directive processing for HTML templates.

Usage::

    from pagebind.render import parse_template, render

    tree = parse_template('<h1 :text="$page.title"></h1>')
    html = render(tree, context)
"""

from pagebind.render.body import BodyResult, render_body
from pagebind.render.directives import (
    DIRECTIVES,
    Directive,
    DirectiveBinding,
    HtmlDirective,
    LoopDirective,
    TextDirective,
    bind,
)
from pagebind.render.processor import DirectiveProcessor, render
from pagebind.render.tree import Element, Raw, TemplateTree, parse_template

__all__ = [
    "DIRECTIVES",
    "BodyResult",
    "Directive",
    "DirectiveBinding",
    "DirectiveProcessor",
    "Element",
    "HtmlDirective",
    "LoopDirective",
    "Raw",
    "TemplateTree",
    "TextDirective",
    "bind",
    "parse_template",
    "render",
    "render_body",
]

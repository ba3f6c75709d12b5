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

"""pagebind: bind page data into HTML layouts through element attributes.

Usage::

    from pagebind import BindingContext, render

    html = render(
        '<h1 :text="$page.title"></h1>',
        BindingContext(namespaces={"page": {"title": "Pipe Syntax"}}),
    )
"""

from pagebind.config import RenderConfig
from pagebind.errors import (
    EvalError,
    EvalErrorKind,
    LinkError,
    LinkErrorKind,
    PagebindError,
    ParseError,
)
from pagebind.expr import BindingContext, LoopFrame, evaluate, parse_expression
from pagebind.layouts import LayoutLoader
from pagebind.links import LinkIndex, LinkResolver
from pagebind.models import Page, PlainRecord, Resolvable
from pagebind.namespaces import BlockHint, BlockNamespace, SectionAnchor, SectionNamespace
from pagebind.pages import build_context, render_page
from pagebind.render import BodyResult, TemplateTree, parse_template, render, render_body

__all__ = [
    "BindingContext",
    "BlockHint",
    "BlockNamespace",
    "BodyResult",
    "EvalError",
    "EvalErrorKind",
    "LayoutLoader",
    "LinkError",
    "LinkErrorKind",
    "LinkIndex",
    "LinkResolver",
    "LoopFrame",
    "Page",
    "PagebindError",
    "ParseError",
    "PlainRecord",
    "RenderConfig",
    "Resolvable",
    "SectionAnchor",
    "SectionNamespace",
    "TemplateTree",
    "build_context",
    "evaluate",
    "parse_expression",
    "parse_template",
    "render",
    "render_body",
    "render_page",
]

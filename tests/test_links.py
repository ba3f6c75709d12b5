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

"""Tests for pagebind.links (index and $link resolver)."""

import pytest

from pagebind.config import RenderConfig
from pagebind.errors import EvalError, EvalErrorKind, LinkError, LinkErrorKind
from pagebind.expr import BindingContext, evaluate, parse_expression
from pagebind.links import LinkIndex, LinkResolver, find_section_ids, normalize_id
from pagebind.models import Page


@pytest.fixture
def site() -> Page:
    dbt = Page(
        path="blog/2-dbt-testing.md",
        title="dbt testing",
        source='Intro\n$section.id("setup")\n...\n$section.id(\'results\')',
    )
    pipe = Page(path="blog/pipe-syntax", title="Pipe Syntax", anchors=("comparison",))
    blog = Page(path="blog", title="Blog", children=(dbt, pipe))
    return Page(path="index", title="Home", children=(blog,))


class TestNormalizeId:
    @pytest.mark.parametrize(
        "raw",
        ["blog/2-dbt-testing", "/blog/2-dbt-testing/", "blog/2-dbt-testing.md", " blog/2-dbt-testing.html "],
    )
    def test_equivalent_forms(self, raw):
        assert normalize_id(raw) == "blog/2-dbt-testing"

    def test_root_forms(self):
        assert normalize_id("index") == ""
        assert normalize_id("/") == ""
        assert normalize_id("index.md") == ""
        assert normalize_id("blog/index") == "blog"


class TestFindSectionIds:
    def test_both_quote_styles(self):
        assert find_section_ids("""$section.id("a") and $section.id( 'b' )""") == ["a", "b"]

    def test_escaped_dollar_ignored(self):
        assert find_section_ids('$$section.id("a")') == []


class TestLinkIndex:
    def test_urls(self, site):
        index = LinkIndex.from_pages(site)
        assert len(index) == 4
        assert index.page_url("") == "/"
        assert index.page_url("blog") == "/blog/"
        assert index.page_url("blog/2-dbt-testing") == "/blog/2-dbt-testing/"
        assert "blog/pipe-syntax.md" in index

    def test_anchors_from_source_and_frontmatter(self, site):
        index = LinkIndex.from_pages(site)
        assert index.anchors["blog/2-dbt-testing"] == frozenset({"setup", "results"})
        assert index.anchor_url("blog/pipe-syntax", "comparison") == "/blog/pipe-syntax/#comparison"

    def test_base_url_without_trailing_slash(self, site):
        index = LinkIndex.from_pages(site, base_url="https://example.org/docs/", trailing_slash=False)
        assert index.page_url("blog") == "https://example.org/docs/blog"
        assert index.page_url("index") == "https://example.org/docs/"

    def test_config_defaults(self, site):
        config = RenderConfig(base_url="/site", trailing_slash=False)
        index = LinkIndex.from_pages(site, config=config)
        assert index.page_url("blog/pipe-syntax") == "/site/blog/pipe-syntax"

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValueError, match="Duplicate page id"):
            LinkIndex.from_pages([Page(path="a"), Page(path="a.md")])

    def test_missing_page(self, site):
        index = LinkIndex.from_pages(site)
        with pytest.raises(LinkError) as exc:
            index.page_url("blog/missing")
        assert exc.value.kind is LinkErrorKind.NOT_FOUND

    def test_missing_anchor(self, site):
        index = LinkIndex.from_pages(site)
        with pytest.raises(LinkError, match="no anchor"):
            index.anchor_url("blog/pipe-syntax", "nowhere")

    def test_lazy_children_are_walked(self):
        child = Page(path="docs/intro")
        root = Page(path="docs", children=lambda: [child])
        assert "docs/intro" in LinkIndex.from_pages(root)


class TestLinkResolver:
    def test_resolve_page(self, site):
        resolver = LinkResolver(LinkIndex.from_pages(site))
        assert resolver.resolve_page("blog/2-dbt-testing") == "/blog/2-dbt-testing/"

    def test_ref_on_current_page(self, site):
        index = LinkIndex.from_pages(site)
        pipe = site.subpages()[0].subpages()[1]
        resolver = LinkResolver(index, pipe)
        assert resolver.resolve_ref("comparison") == "/blog/pipe-syntax/#comparison"

    def test_leading_hash_targets_current_page(self, site):
        index = LinkIndex.from_pages(site)
        pipe = site.subpages()[0].subpages()[1]
        resolver = LinkResolver(index, pipe)
        assert resolver.resolve_ref("#comparison") == "/blog/pipe-syntax/#comparison"
        assert resolver.resolve_ref("#comparison") == resolver.resolve_ref("comparison")

    def test_leading_hash_without_current_page(self, site):
        resolver = LinkResolver(LinkIndex.from_pages(site))
        with pytest.raises(LinkError, match="no current page"):
            resolver.resolve_ref("#comparison")

    def test_ref_to_other_page(self, site):
        resolver = LinkResolver(LinkIndex.from_pages(site))
        assert resolver.resolve_ref("blog/2-dbt-testing#setup") == "/blog/2-dbt-testing/#setup"

    def test_ref_without_current_page(self, site):
        resolver = LinkResolver(LinkIndex.from_pages(site))
        with pytest.raises(LinkError):
            resolver.resolve_ref("comparison")

    def test_for_page(self, site):
        resolver = LinkResolver(LinkIndex.from_pages(site))
        bound = resolver.for_page(site)
        assert bound.index is resolver.index
        assert bound.current_page is site

    def test_invoke_through_expressions(self, site):
        index = LinkIndex.from_pages(site)
        ctx = BindingContext(namespaces={"page": site, "link": LinkResolver(index, site)})
        assert evaluate(parse_expression('$link.page("blog/pipe-syntax")'), ctx) == "/blog/pipe-syntax/"
        assert evaluate(parse_expression("$page.link()"), ctx) == "/"

    def test_unknown_page_through_expressions(self, site):
        ctx = BindingContext(namespaces={"link": LinkResolver(LinkIndex.from_pages(site))})
        with pytest.raises(LinkError) as exc:
            evaluate(parse_expression('$link.page("missing/page")'), ctx)
        assert exc.value.kind is LinkErrorKind.NOT_FOUND
        assert "missing/page" in str(exc.value)

    def test_bad_calls(self, site):
        ctx = BindingContext(namespaces={"link": LinkResolver(LinkIndex.from_pages(site))})
        with pytest.raises(EvalError) as exc:
            evaluate(parse_expression("$link.page()"), ctx)
        assert exc.value.kind is EvalErrorKind.UNKNOWN_METHOD
        with pytest.raises(EvalError) as exc:
            evaluate(parse_expression("$link.page(3)"), ctx)
        assert exc.value.kind is EvalErrorKind.BAD_ARGUMENT
        with pytest.raises(EvalError) as exc:
            evaluate(parse_expression('$link.home("x")'), ctx)
        assert exc.value.kind is EvalErrorKind.UNKNOWN_METHOD

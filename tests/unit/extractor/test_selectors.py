"""
Unit tests for candidate selection.
"""

import pytest

from snippetcore.config import ExtractionSettings
from snippetcore.extractor.dom import load
from snippetcore.extractor.selectors import SimpleSelector, select_all, select_candidates


@pytest.mark.unit
class TestSimpleSelector:
    """Test selector parsing and matching."""

    @pytest.mark.parametrize(
        "selector,expected",
        [
            ("article", SimpleSelector(tag="article")),
            (".content", SimpleSelector(class_name="content")),
            ("#content", SimpleSelector(element_id="content")),
            ("div.post", SimpleSelector(tag="div", class_name="post")),
            ("DIV#main", SimpleSelector(tag="div", element_id="main")),
            ('div[itemprop="articleBody"]', SimpleSelector(tag="div", attribute=("itemprop", "articleBody"))),
        ],
    )
    def test_parse(self, selector, expected):
        assert SimpleSelector.parse(selector) == expected

    @pytest.mark.parametrize("selector", ["", "div > p", "div p", "a:hover", ".a.b", "[x=y]"])
    def test_parse_rejects_unsupported(self, selector):
        with pytest.raises(ValueError):
            SimpleSelector.parse(selector)

    def test_default_selectors_all_parse(self):
        for selector in ExtractionSettings().candidate_selectors:
            SimpleSelector.parse(selector)

    def test_class_match_is_token_based(self):
        tree = load('<html><body><div class="main content">a</div><div class="contents">b</div></body></html>')
        divs = tree.find_all(tree.root, ["div"])
        selector = SimpleSelector.parse(".content")

        assert selector.matches(tree.node(divs[0]))
        assert not selector.matches(tree.node(divs[1]))

    def test_attribute_match_is_exact(self):
        tree = load(
            '<html><body><div itemprop="articleBody">a</div><div itemprop="articleBodyX">b</div></body></html>'
        )
        divs = tree.find_all(tree.root, ["div"])
        selector = SimpleSelector.parse('div[itemprop="articleBody"]')

        assert [selector.matches(tree.node(d)) for d in divs] == [True, False]


@pytest.mark.unit
class TestSelectCandidates:
    """Test selector-driven and fallback enumeration."""

    def test_candidates_in_document_order_without_duplicates(self):
        html = (
            "<html><body>"
            '<div class="post content" id="content">one</div>'
            "<section>two</section>"
            "<main><article>three</article></main>"
            '<div itemprop="articleBody">four</div>'
            "<div>ignored</div>"
            "</body></html>"
        )
        tree = load(html)
        candidates = select_candidates(tree, ExtractionSettings().candidate_selectors)

        assert [tree.tag(i) for i in candidates] == ["div", "section", "main", "article", "div"]
        assert candidates == sorted(candidates)
        assert [tree.text(i) for i in candidates] == ["one", "two", "three", "three", "four"]

    def test_no_candidates(self):
        tree = load("<html><body><div>plain</div></body></html>")
        assert select_candidates(tree, ["article", "#content"]) == []

    def test_select_all_skips_style_script_svg_subtrees(self):
        html = (
            "<html><body>"
            "<div><svg><g><text>chart</text></g></svg><p>kept</p></div>"
            "<script>var x;</script><style>p{}</style>"
            "</body></html>"
        )
        tree = load(html, noise_tags=())
        elements = select_all(tree)

        assert [tree.tag(i) for i in elements] == ["html", "body", "div", "p"]

    def test_select_all_excludes_text_nodes_and_root(self, article_html):
        tree = load(article_html)
        elements = select_all(tree)

        assert tree.root not in elements
        assert all(tree.node(i).is_element for i in elements)
        assert elements == sorted(elements)

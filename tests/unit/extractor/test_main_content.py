"""
Tests for the end-to-end main content extraction.
"""

import re
from unittest.mock import patch

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from snippetcore.config import Config
from snippetcore.extractor import Extractor, MainContentExtractor, ParseError, extract_main_content
from snippetcore.extractor.main_content import MainContentPipeline

TERMINAL = set(".!?。；！？")


def _is_sound(paragraph: str) -> bool:
    return (
        len(paragraph) > 80
        and sum(1 for c in paragraph if c in TERMINAL) > 1
        and re.fullmatch(r"[0-9a-zA-Z]+", paragraph) is None
    )


@pytest.mark.integration
class TestExtractMainContent:
    """Scenarios over whole documents."""

    def test_article_paragraphs_in_order(self, article_html, flood_paragraphs):
        assert extract_main_content(article_html) == flood_paragraphs

    def test_bytes_input(self, article_html, flood_paragraphs):
        assert extract_main_content(article_html.encode("utf-8")) == flood_paragraphs

    def test_short_blocks_give_empty_result(self, short_blocks_html):
        assert extract_main_content(short_blocks_html) == []

    def test_empty_document(self):
        assert extract_main_content("") == []
        assert extract_main_content(b"<html><body></body></html>") == []

    def test_vetoed_container_is_skipped(self, flood_paragraphs):
        good = "\n\n".join(f"<p>{p}</p>" for p in flood_paragraphs)
        html = (
            "<html><body>"
            f'<div class="content main-nav footer-widget">\n\n{good}\n\n</div>'
            "</body></html>"
        )
        pipeline = MainContentPipeline()
        tree = pipeline.load(html)
        div = tree.find_all(tree.root, ["div"])[0]
        best = pipeline.locate(tree)

        assert pipeline.scorer.score(tree, div) == 0
        assert best.index != div
        assert best.score > 1

    def test_cjk_page(self):
        sentence = "市议会周一开会讨论沿河新建自行车道的计划，预计下个月作出决定。居民可以在网上提交意见！"
        paragraphs = [sentence * 2, sentence.replace("周一", "周二") * 2]
        body = "\n\n".join(f"<p>{p}</p>" for p in paragraphs)
        html = f'<html><body><nav class="menu">首页 新闻 体育</nav><div class="post">\n{body}\n</div></body></html>'

        assert extract_main_content(html) == paragraphs

    def test_boilerplate_phrase_stripped(self, flood_paragraphs):
        first = flood_paragraphs[0]
        html = f"<html><body><article><p>复制本文内容{first}</p></article></body></html>"
        assert extract_main_content(html) == [first]

    def test_config_changes_thresholds(self, article_html):
        config = Config()
        config.extraction.min_quality_length = 1000
        assert extract_main_content(article_html, config) == []

    def test_parse_error_propagates(self):
        with patch("snippetcore.extractor.dom.BeautifulSoup", side_effect=RuntimeError("bad markup")):
            with pytest.raises(ParseError):
                extract_main_content("<html>")

    def test_pipeline_reports_winning_node(self, article_html):
        result = MainContentPipeline().run(article_html, url="https://example.com/flood")

        assert result.url == "https://example.com/flood"
        assert result.node_path == "html > body > article"
        assert result.score > 1
        assert len(result.paragraphs) == 3

    def test_deterministic(self, article_html):
        runs = [extract_main_content(article_html) for _ in range(3)]
        assert runs[0] == runs[1] == runs[2]


_paragraph = st.text(alphabet="abcdefgh XYZ0123.!?,中文。\n", min_size=0, max_size=200)


@pytest.mark.unit
class TestExtractionProperties:
    """Property-based checks over generated documents."""

    @given(blocks=st.lists(_paragraph, min_size=0, max_size=6), wrapper=st.sampled_from(["div", "article", "section"]))
    @settings(max_examples=60, deadline=None, suppress_health_check=[HealthCheck.too_slow])
    def test_output_is_deterministic_and_sound(self, blocks, wrapper):
        inner = "\n\n".join(f"<p>{block}</p>" for block in blocks)
        html = f"<html><body><{wrapper}>{inner}</{wrapper}></body></html>"

        first = extract_main_content(html)
        second = extract_main_content(html)

        assert first == second
        assert all(_is_sound(p) for p in first)

    @given(text=st.text(min_size=0, max_size=300))
    @settings(max_examples=60, deadline=None)
    def test_total_over_arbitrary_text(self, text):
        try:
            result = extract_main_content(text)
        except ParseError:
            return
        assert isinstance(result, list)
        assert all(_is_sound(p) for p in result)


@pytest.mark.unit
class TestMainContentExtractor:
    """Async extractor wrapper."""

    def test_protocol_compliance(self):
        extractor = MainContentExtractor()
        assert isinstance(extractor, Extractor)
        assert extractor.name == "main_content"

    @pytest.mark.asyncio
    async def test_extract(self, article_html, flood_paragraphs):
        result = await MainContentExtractor().extract(article_html, url="https://example.com")

        assert result.url == "https://example.com"
        assert list(result.paragraphs) == flood_paragraphs
        assert result.text == " ".join(flood_paragraphs)

    @pytest.mark.asyncio
    async def test_extract_empty_html(self):
        result = await MainContentExtractor().extract("   ", url="https://example.com")

        assert result.is_empty
        assert result.url == "https://example.com"

    @pytest.mark.asyncio
    async def test_parse_error_downgraded_to_empty(self):
        extractor = MainContentExtractor()
        with patch("snippetcore.extractor.dom.BeautifulSoup", side_effect=RuntimeError("boom")):
            result = await extractor.extract("<html><body>x</body></html>", url="https://example.com/bad")

        assert result.is_empty
        assert result.url == "https://example.com/bad"

    @pytest.mark.asyncio
    async def test_unexpected_errors_propagate(self):
        extractor = MainContentExtractor()
        with patch.object(extractor.pipeline, "run", side_effect=KeyError("bug")):
            with pytest.raises(KeyError):
                await extractor.extract("<html></html>")

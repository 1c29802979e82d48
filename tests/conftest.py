"""
Shared test configuration for SnippetCore.

Provides markers, configuration fixtures and sample documents used across
the extractor and search test modules.
"""

from pathlib import Path
from typing import Generator

import pytest

from snippetcore.config import Config

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Tests across the whole extraction pipeline")
    config.addinivalue_line("markers", "network: Tests exercising the HTTP layer (mocked)")


# ============================================================================
# Sample Content
# ============================================================================

FLOOD_PARAGRAPHS = [
    "The river rose slowly through the night and by morning it had covered the lower fields. "
    "Farmers moved their cattle to the ridge before the roads closed.",
    "Officials said the flood barriers held along most of the town, although two streets near "
    "the old mill were evacuated. Nobody was reported injured.",
    "Forecasters expect the water to recede over the weekend. Residents are asked to avoid the "
    "riverside paths until the council has inspected them.",
]

LEAD_TEXT = (
    "The flood barrier on the east bank held through the night, according to the council. "
    "Engineers had raised the wall by half a metre last spring after the previous flood. "
    "Water reached its highest level shortly after three in the morning. "
    "The pumps at the old mill ran without interruption. "
    "By dawn the river had started to fall again, and the roads into the centre reopened at eight. "
    "Shops on the high street opened as usual. "
    "The council thanked the volunteers who filled sandbags on Tuesday. "
    "A full inspection of the wall is planned for next week."
)

MARKED_UP_UPDATE = (
    "<p><b>Update:</b> the pumps kept running. <i>Crews</i> checked every seal at dawn. "
    "<b>More</b> rain is <i>expected</i> on Friday.</p>"
)


@pytest.fixture
def flood_paragraphs():
    return list(FLOOD_PARAGRAPHS)


@pytest.fixture
def article_html() -> str:
    """An article with three good paragraphs next to a short sidebar."""
    body = "\n\n".join(f"<p>{p}</p>" for p in FLOOD_PARAGRAPHS)
    return f"""<!DOCTYPE html>
<html>
<head>
    <title>Flood update</title>
    <script>window.analytics = {{}};</script>
</head>
<body>
<div class="sidebar">
    <p>Related: weather, traffic</p>
    <a href="/weather">More weather</a>
</div>
<article>
{body}
</article>
</body>
</html>
"""


@pytest.fixture
def short_blocks_html() -> str:
    """A page made only of short navigation-like blocks."""
    blocks = ["Home", "About us", "Weather maps", "Contact the newsroom", "Sign in"]
    items = "\n\n".join(f"<div>{b}</div>" for b in blocks)
    return f"<html><body>\n{items}\n</body></html>"


@pytest.fixture
def nested_story_html() -> str:
    """Content whose outer div clearly outscores each of its marked-up paragraphs."""
    updates = MARKED_UP_UPDATE * 3
    return (
        "<html><body>"
        f'<div id="story">{LEAD_TEXT}<h2>River levels falling</h2>{updates}</div>'
        "</body></html>"
    )


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def test_config() -> Config:
    """Provide test configuration."""
    config = Config()
    config.fetch.timeout = 2.0
    config.fetch.max_concurrency = 2
    config.snippet.max_chars = 120
    return config


@pytest.fixture
def config_file(tmp_path) -> Generator[Path, None, None]:
    path = tmp_path / "snippetcore.yaml"
    path.write_text(
        "snippet:\n"
        "  max_chars: 80\n"
        "extraction:\n"
        "  boilerplate_phrases: ['Read more in the app']\n"
        "scoring:\n"
        "  text_density: 2.5\n",
        encoding="utf-8",
    )
    yield path

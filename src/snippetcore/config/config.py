"""
Configuration management for SnippetCore using Pydantic.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Setup Logging ---
log = logging.getLogger(__name__)

# Simple selector grammar: tag, .class, #id, tag.class, tag#id, tag[attr="value"].
SELECTOR_RE = re.compile(
    r"""^(?P<tag>[a-zA-Z][\w-]*)?
        (?:
            \.(?P<cls>[\w-]+)
          | \#(?P<id>[\w-]+)
          | \[(?P<attr>[\w-]+)="(?P<value>[^"]*)"\]
        )?$""",
    re.VERBOSE,
)

# --- Nested Configuration Models ---


class ScoringWeights(BaseModel):
    """Coefficients of the content desirability score."""

    text_density: float = Field(default=3.0, description="Weight of text length over compressed markup length.")
    cjk_ratio: float = Field(default=0.5, description="Weight of the CJK ideograph fraction.")
    punctuation_density: float = Field(default=2.0, description="Weight of the sentence-terminal mark fraction.")
    link_density: float = Field(default=-2.0, description="Weight of anchor text over total text.")
    semantic_bonus: float = Field(default=0.2, description="Flat bonus for semantic container tags.")
    heading_step: float = 0.1
    heading_cap: float = 0.3
    paragraph_step: float = 0.05
    paragraph_cap: float = 0.2
    space_ratio: float = Field(default=-2.0, description="Weight of long whitespace runs in the raw markup.")
    min_text_length: int = Field(default=50, ge=0, description="Blocks with less text than this score 0.")


class ExtractionSettings(BaseModel):
    """Configuration for main content location and paragraph segmentation."""

    parser: str = Field(default="html.parser", description="BeautifulSoup tree builder.")
    noise_tags: List[str] = Field(default_factory=lambda: ["script", "style", "a", "iframe", "noscript"])
    candidate_selectors: List[str] = Field(
        default_factory=lambda: [
            "article",
            "main",
            "section",
            ".content",
            "#content",
            "div.content",
            "div.post",
            'div[itemprop="articleBody"]',
        ],
        description="Selectors tried before the full-tree fallback scan.",
    )
    fallback_skip_tags: List[str] = Field(default_factory=lambda: ["style", "script", "svg"])
    semantic_tags: List[str] = Field(default_factory=lambda: ["article", "main", "content"])
    negative_terms: List[str] = Field(
        default_factory=lambda: ["footer", "header", "nav", "menu", "sidebar", "comment", "广告"],
        description="class+id fragments that zero a candidate's score.",
    )
    fallback_threshold: float = Field(default=1.0, description="Run the full-tree scan below this best score.")
    promotion_factor: float = Field(default=1.1, description="A parent must beat best score times this factor.")
    boilerplate_phrases: List[str] = Field(default_factory=lambda: ["复制本文内容", "在APP中打开"])
    min_paragraph_length: int = 50
    min_quality_length: int = 80
    min_terminal_marks: int = 2

    @field_validator("candidate_selectors")
    @classmethod
    def validate_selectors(cls, v: List[str]) -> List[str]:
        """Ensure every selector is a supported simple selector."""
        if not v:
            raise ValueError("candidate_selectors must contain at least one selector")
        for selector in v:
            if not selector or not SELECTOR_RE.match(selector.strip()):
                raise ValueError(f"Unsupported selector: {selector!r}")
        return v

    @field_validator("negative_terms")
    @classmethod
    def validate_negative_terms(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("negative_terms must contain at least one term")
        for term in v:
            if not term.strip():
                raise ValueError("negative_terms must not contain blank terms")
        return v

    @field_validator("promotion_factor")
    @classmethod
    def validate_promotion_factor(cls, v: float) -> float:
        if v < 1.0:
            raise ValueError("promotion_factor must be at least 1.0")
        return v

    @property
    def negative_pattern(self) -> re.Pattern[str]:
        """Case-insensitive alternation of the negative terms."""
        return re.compile("|".join(re.escape(term) for term in self.negative_terms), re.IGNORECASE)


class FetchConfig(BaseModel):
    """Page fetching configuration."""

    timeout: float = Field(default=10.0, gt=0, description="Per-page request timeout in seconds.")
    user_agent: str = Field(default="SnippetCoreBot/0.1", description="User-Agent string for HTTP requests.")
    max_concurrency: int = Field(default=5, ge=1, description="Maximum pages fetched at once.")


class SnippetConfig(BaseModel):
    """How extracted paragraphs are overlaid onto result descriptions."""

    max_chars: int = Field(default=300, ge=1, description="Character budget of an overlaid description.")


class MonitoringConfig(BaseModel):
    """Configuration for logging."""

    log_level: str = Field(default="INFO", description="Logging level (e.g., DEBUG, INFO, WARNING).")
    log_file: str | None = Field(default=None, description="Path to log file. If None, logs to console.")

    @field_validator("log_file", mode="before")
    @classmethod
    def create_parent_dir(cls, v: str | Path | None) -> str | None:
        if v is None:
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)


# --- Main Configuration Class ---


class Config(BaseSettings):
    project_name: str = "SnippetCore"
    version: str = "0.1.0"
    scoring: ScoringWeights = Field(default_factory=ScoringWeights)
    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    snippet: SnippetConfig = Field(default_factory=SnippetConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    model_config = SettingsConfigDict(env_prefix="SNIPPET_", env_nested_delimiter="__", case_sensitive=False)

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        log.debug("Loading configuration from YAML file: %s", path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found or is not a file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
        if not yaml_data:
            log.warning("Configuration file is empty: %s. Using default settings.", path)
            return cls.model_validate({})
        return cls.model_validate(yaml_data)


def find_config_file() -> Path | None:
    current_dir = Path.cwd()
    for path in (current_dir / "snippetcore.yaml", current_dir / "snippetcore.yml"):
        if path.exists():
            return path
    return None


def load_config(path: Path | None = None) -> Config:
    """Load configuration from an explicit path, a discovered file, or defaults."""
    path = path or find_config_file()
    if path is None:
        return Config()
    return Config.from_yaml(path)

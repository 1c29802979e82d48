from .config import (
    Config,
    ExtractionSettings,
    FetchConfig,
    MonitoringConfig,
    ScoringWeights,
    SnippetConfig,
    find_config_file,
    load_config,
)

__all__ = [
    "Config",
    "ExtractionSettings",
    "FetchConfig",
    "MonitoringConfig",
    "ScoringWeights",
    "SnippetConfig",
    "find_config_file",
    "load_config",
]

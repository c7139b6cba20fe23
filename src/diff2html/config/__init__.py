"""Configuration loading, schema, and defaults."""

from diff2html.config.loader import ConfigError, load_config, validate_config
from diff2html.config.schema import (
    AppConfig,
    Diff2HtmlConfig,
    FileListConfig,
    ParserConfig,
    RenderConfig,
)

__all__ = [
    "AppConfig",
    "ConfigError",
    "Diff2HtmlConfig",
    "FileListConfig",
    "ParserConfig",
    "RenderConfig",
    "load_config",
    "validate_config",
]

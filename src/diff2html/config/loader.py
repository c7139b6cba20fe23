"""Load and merge configuration from .diff2html.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from diff2html.config.schema import (
    COLOR_SCHEMES,
    DESTINATIONS,
    DIFF_STYLES,
    FORMATS,
    INPUT_SOURCES,
    MATCHINGS,
    STYLES,
    SUMMARIES,
    AppConfig,
    InputConfig,
    OutputConfig,
    ParserConfig,
    RenderConfig,
)

CONFIG_FILENAME = ".diff2html.toml"


class ConfigError(Exception):
    """Raised when config is malformed, unreadable or out of range."""


def find_config_file(base_dir: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = base_dir / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str, base=None):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.get(section, {}).items() if k in valid_fields}
    if base is not None:
        return dataclasses.replace(base, **filtered)
    return cls(**filtered)


def _int_env(name: str) -> Optional[int]:
    val = os.environ.get(name)
    if not val:
        return None
    try:
        return int(val)
    except ValueError:
        return None


def _merge_env_overrides(cfg: AppConfig) -> None:
    """Apply DIFF2HTML_* environment variable overrides."""
    if (val := os.environ.get("DIFF2HTML_STYLE")) in STYLES:
        cfg.output.style = val  # type: ignore[assignment]
    if (val := os.environ.get("DIFF2HTML_FORMAT")) in FORMATS:
        cfg.output.format = val  # type: ignore[assignment]
    if (val := os.environ.get("DIFF2HTML_COLOR_SCHEME")) in COLOR_SCHEMES:
        cfg.render.color_scheme = val  # type: ignore[assignment]
    if (val := os.environ.get("DIFF2HTML_MATCHING")) in MATCHINGS:
        cfg.render.matching = val  # type: ignore[assignment]
    if (n := _int_env("DIFF2HTML_DIFF_MAX_CHANGES")) is not None:
        cfg.parser.diff_max_changes = n
    if (n := _int_env("DIFF2HTML_DIFF_MAX_LINE_LENGTH")) is not None:
        cfg.parser.diff_max_line_length = n
    if val := os.environ.get("DIFF2HTML_IGNORE"):
        cfg.input.ignore.extend(p.strip() for p in val.split(os.pathsep) if p.strip())


def _is_count(value: Any) -> bool:
    # bool is an int subclass; TOML `true` is not a count
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _check_choice(value: Any, choices, name: str) -> None:
    if value not in choices:
        raise ConfigError(f"Invalid {name}: {value!r} (expected one of {', '.join(choices)})")


def validate_config(cfg: AppConfig) -> None:
    """Reject values the renderers and parser cannot work with."""
    render = cfg.render
    _check_choice(cfg.output.style, STYLES, "style")
    _check_choice(cfg.output.format, FORMATS, "format")
    _check_choice(cfg.output.destination, DESTINATIONS, "output")
    _check_choice(cfg.output.summary, SUMMARIES, "summary")
    _check_choice(cfg.input.source, INPUT_SOURCES, "input")
    _check_choice(render.diff_style, DIFF_STYLES, "diff style")
    _check_choice(render.color_scheme, COLOR_SCHEMES, "color scheme")
    _check_choice(render.matching, MATCHINGS, "matching")

    threshold = render.match_words_threshold
    if (
        isinstance(threshold, bool)
        or not isinstance(threshold, (int, float))
        or not 0.0 <= threshold <= 1.0
    ):
        raise ConfigError(
            f"match_words_threshold must be between 0.0 and 1.0, got {render.match_words_threshold}"
        )
    for name in (
        "max_line_length_highlight",
        "matching_max_comparisons",
        "max_line_size_in_block_for_comparison",
    ):
        value = getattr(render, name)
        if not _is_count(value):
            raise ConfigError(f"{name} must be a non-negative integer")
    for name in ("diff_max_changes", "diff_max_line_length"):
        value = getattr(cfg.parser, name)
        if value is not None and not _is_count(value):
            raise ConfigError(f"{name} must be a non-negative integer")
    message = cfg.parser.diff_too_big_message
    if message is not None and not callable(message):
        raise ConfigError("diff_too_big_message can only be set from Python code")


def load_config(
    base_dir: Path,
    config_override: Optional[str] = None,
) -> AppConfig:
    """Load, validate, and return an AppConfig."""
    config_path = find_config_file(base_dir, config_override)

    if config_path is None:
        cfg = AppConfig()
    else:
        raw = _parse_toml(config_path)
        defaults = AppConfig()
        try:
            cfg = AppConfig(
                version=raw.get("version", "1.0"),
                parser=_build_section(raw, ParserConfig, "parser"),
                render=_build_section(raw, RenderConfig, "render", base=defaults.render),
                output=_build_section(raw, OutputConfig, "output"),
                input=_build_section(raw, InputConfig, "input"),
            )
        except (TypeError, AttributeError) as exc:
            raise ConfigError(f"Invalid configuration in {config_path}: {exc}") from exc

    _merge_env_overrides(cfg)
    validate_config(cfg)
    return cfg

"""Configuration schema: dataclasses for the library and every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Literal, Optional

Style = Literal["line", "side"]
DiffStyle = Literal["word", "char"]
ColorScheme = Literal["auto", "dark", "light"]
Matching = Literal["lines", "words", "none"]
Format = Literal["html", "json"]
InputSource = Literal["file", "command", "stdin"]
Destination = Literal["preview", "stdout"]
Summary = Literal["closed", "open", "hidden"]

STYLES = ("line", "side")
DIFF_STYLES = ("word", "char")
COLOR_SCHEMES = ("auto", "dark", "light")
MATCHINGS = ("lines", "words", "none")
FORMATS = ("html", "json")
INPUT_SOURCES = ("file", "command", "stdin")
DESTINATIONS = ("preview", "stdout")
SUMMARIES = ("closed", "open", "hidden")

DEFAULT_TOO_BIG_MESSAGE = "Diff too big to be displayed"


@dataclass
class ParserConfig:
    src_prefix: Optional[str] = None  # stripped in addition to a/ b/ i/ w/ c/ o/
    dst_prefix: Optional[str] = None
    diff_max_changes: Optional[int] = None
    diff_max_line_length: Optional[int] = None
    # Called with the index of the file being marked too big
    diff_too_big_message: Optional[Callable[[int], str]] = None

    def too_big_message(self, file_index: int) -> str:
        if self.diff_too_big_message is not None:
            return self.diff_too_big_message(file_index)
        return DEFAULT_TOO_BIG_MESSAGE


@dataclass
class RenderConfig:
    matching: Matching = "none"
    match_words_threshold: float = 0.25
    max_line_length_highlight: int = 10000
    diff_style: DiffStyle = "word"
    color_scheme: ColorScheme = "light"
    render_nothing_when_empty: bool = False
    matching_max_comparisons: int = 2500
    max_line_size_in_block_for_comparison: int = 200


@dataclass
class FileListConfig:
    color_scheme: ColorScheme = "light"


@dataclass
class Diff2HtmlConfig:
    """Everything needed to go from diff text to an HTML fragment."""

    parser: ParserConfig = field(default_factory=ParserConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    output_format: Style = "line"
    draw_file_list: bool = True

    def to_file_list_config(self) -> FileListConfig:
        return FileListConfig(color_scheme=self.render.color_scheme)


# --- .diff2html.toml sections (CLI) ---


@dataclass
class InputConfig:
    source: InputSource = "command"
    ignore: List[str] = field(default_factory=list)  # paths excluded from git diff


@dataclass
class OutputConfig:
    style: Style = "line"
    format: Format = "html"
    destination: Destination = "preview"
    file: Optional[str] = None  # overrides destination
    title: Optional[str] = None
    summary: Summary = "closed"
    file_content_toggle: bool = True
    synchronised_scroll: bool = True
    highlight_code: bool = True
    html_wrapper_template: Optional[str] = None


@dataclass
class AppConfig:
    version: str = "1.0"
    parser: ParserConfig = field(default_factory=ParserConfig)
    render: RenderConfig = field(
        default_factory=lambda: RenderConfig(color_scheme="auto", matching_max_comparisons=1000)
    )
    output: OutputConfig = field(default_factory=OutputConfig)
    input: InputConfig = field(default_factory=InputConfig)

    def to_diff2html_config(self) -> Diff2HtmlConfig:
        return Diff2HtmlConfig(
            parser=self.parser,
            render=self.render,
            output_format=self.output.style,
            draw_file_list=self.output.summary != "hidden",
        )

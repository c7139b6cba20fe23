"""diff2html: parse unified diffs and render them as HTML or JSON.

    >>> import diff2html
    >>> files = diff2html.parse(diff_text)
    >>> page_fragment = diff2html.html(diff_text)
"""

from __future__ import annotations

from typing import List, Optional

from diff2html.config.schema import Diff2HtmlConfig, FileListConfig, ParserConfig, RenderConfig
from diff2html.git.diff_parser import parse
from diff2html.git.models import DiffBlock, DiffFile, DiffLine, LineType
from diff2html.output import json_report
from diff2html.output.file_list import render_file_list
from diff2html.output.line_by_line import render_line_by_line
from diff2html.output.side_by_side import render_side_by_side

__version__ = "0.1.0"


def html_from_diff_files(files: List[DiffFile], config: Optional[Diff2HtmlConfig] = None) -> str:
    """Render already-parsed files: optional file list followed by the diff view."""
    config = config or Diff2HtmlConfig()
    file_list = render_file_list(files, config.to_file_list_config()) if config.draw_file_list else ""
    if config.output_format == "side":
        return file_list + render_side_by_side(files, config.render)
    return file_list + render_line_by_line(files, config.render)


def html(diff_text: str, config: Optional[Diff2HtmlConfig] = None) -> str:
    config = config or Diff2HtmlConfig()
    return html_from_diff_files(parse(diff_text, config.parser), config)


def json_from_diff_files(files: List[DiffFile], *, pretty: bool = False) -> str:
    return json_report.render(files, pretty=pretty)


def json(diff_text: str, config: Optional[Diff2HtmlConfig] = None, *, pretty: bool = False) -> str:
    config = config or Diff2HtmlConfig()
    return json_from_diff_files(parse(diff_text, config.parser), pretty=pretty)


__all__ = [
    "Diff2HtmlConfig",
    "DiffBlock",
    "DiffFile",
    "DiffLine",
    "FileListConfig",
    "LineType",
    "ParserConfig",
    "RenderConfig",
    "__version__",
    "html",
    "html_from_diff_files",
    "json",
    "json_from_diff_files",
    "parse",
]

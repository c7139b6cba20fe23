"""Standalone HTML page around a rendered diff, plus file and browser output."""

from __future__ import annotations

import logging
import tempfile
import webbrowser
from pathlib import Path
from typing import Optional

from diff2html.config.schema import ColorScheme, Format, OutputConfig
from diff2html.output.templates import CSS
from diff2html.output.utils import escape_for_html

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Diff to HTML"

DEFAULT_WRAPPER_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en-us">
  <head>
    <meta charset="utf-8" />
    <title><!--diff2html-title--></title>
    <!--diff2html-css-->
    <!--diff2html-js-ui-->
    <script>
      document.addEventListener('DOMContentLoaded', () => {
        const targetElement = document.getElementById('diff');
        const diff2htmlUi = new Diff2HtmlUI(targetElement);
        //diff2html-fileListToggle
        //diff2html-fileContentToggle
        //diff2html-synchronisedScroll
        //diff2html-highlightCode
      });
    </script>
  </head>
  <body style="text-align: center; font-family: 'Source Sans Pro', sans-serif">
    <h1><!--diff2html-header--></h1>
    <div id="diff">
      <!--diff2html-diff-->
    </div>
  </body>
</html>
"""

_HLJS_BASE = "https://cdnjs.cloudflare.com/ajax/libs/highlight.js/11.9.0/styles"
_GITHUB_THEME = {
    "light": f'<link rel="stylesheet" href="{_HLJS_BASE}/github.min.css" />',
    "dark": f'<link rel="stylesheet" href="{_HLJS_BASE}/github-dark.min.css" />',
    "auto": (
        f'<link rel="stylesheet" href="{_HLJS_BASE}/github.min.css" '
        'media="screen and (prefers-color-scheme: light)" />\n'
        f'<link rel="stylesheet" href="{_HLJS_BASE}/github-dark.min.css" '
        'media="screen and (prefers-color-scheme: dark)" />'
    ),
}

_LIGHT_RULES = """\
body {
  background-color: var(--d2h-bg-color);
}
h1 {
  color: var(--d2h-light-color);
}"""

_DARK_RULES = """\
body {
  background-color: rgb(13, 17, 23);
}
h1 {
  color: var(--d2h-dark-color);
}"""

_BASE_STYLE = {
    "light": f"<style>\n{_LIGHT_RULES}\n</style>",
    "dark": f"<style>\n{_DARK_RULES}\n</style>",
    "auto": (
        "<style>\n"
        f"@media screen and (prefers-color-scheme: light) {{\n{_LIGHT_RULES}\n}}\n"
        f"@media screen and (prefers-color-scheme: dark) {{\n{_DARK_RULES}\n}}\n"
        "</style>"
    ),
}

DIFF2HTML_UI_JS = (
    '<script src="https://cdnjs.cloudflare.com/ajax/libs/diff2html/3.4.48/'
    'diff2html-ui.min.js"></script>'
)


class PageError(Exception):
    """Raised when the wrapper template or an output file cannot be read or written."""


def _load_wrapper(template_path: Optional[str]) -> str:
    if not template_path:
        return DEFAULT_WRAPPER_TEMPLATE
    path = Path(template_path)
    if not path.is_file():
        raise PageError(f"Template ('{template_path}') not found!")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise PageError(f"Failed to read template {template_path}: {exc}") from exc


def prepare_html(diff_html: str, output: OutputConfig, color_scheme: ColorScheme = "auto") -> str:
    """Substitute the ``<!--diff2html-*-->`` placeholders of the wrapper template.

    The title doubles as the page header. The file list starts expanded only
    when ``summary`` is ``"open"``.
    """
    template = _load_wrapper(output.html_wrapper_template)
    title = escape_for_html(output.title or DEFAULT_TITLE)

    css = f"{_BASE_STYLE[color_scheme]}\n{_GITHUB_THEME[color_scheme]}\n<style>\n{CSS}\n</style>"
    show_files_open = "true" if output.summary == "open" else "false"

    replacements = (
        ("<!--diff2html-title-->", title),
        ("<!--diff2html-css-->", css),
        ("<!--diff2html-js-ui-->", DIFF2HTML_UI_JS),
        ("//diff2html-fileListToggle", f"diff2htmlUi.fileListToggle({show_files_open});"),
        (
            "//diff2html-fileContentToggle",
            "diff2htmlUi.fileContentToggle();" if output.file_content_toggle else "",
        ),
        (
            "//diff2html-synchronisedScroll",
            "diff2htmlUi.synchronisedScroll();" if output.synchronised_scroll else "",
        ),
        (
            "//diff2html-highlightCode",
            "diff2htmlUi.highlightCode();" if output.highlight_code else "",
        ),
        ("<!--diff2html-header-->", title),
    )
    for placeholder, value in replacements:
        template = template.replace(placeholder, value)
    # Last, so placeholder-looking text inside the diff is left alone
    return template.replace("<!--diff2html-diff-->", diff_html)


def write_file(path: str, content: str) -> None:
    try:
        Path(path).write_text(content, encoding="utf-8")
    except OSError as exc:
        raise PageError(f"Failed to write to file: {path}: {exc}") from exc


def preview(content: str, fmt: Format) -> Path:
    """Write *content* to ``diff.<fmt>`` in the temp dir and open it in a browser."""
    path = Path(tempfile.gettempdir()) / f"diff.{fmt}"
    write_file(str(path), content)
    logger.info("Opening %s in the browser", path)
    if not webbrowser.open(path.as_uri()):
        raise PageError(f"Failed to open file in browser: {path}")
    return path

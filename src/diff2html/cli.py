"""diff2html CLI: Typer application with render and init commands."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from diff2html import __version__

app = typer.Typer(
    name="diff2html",
    help="Turn git diff output into pretty HTML or JSON.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)
logger = logging.getLogger(__name__)

EXIT_ERROR = 1
EXIT_EMPTY_INPUT = 3

EMPTY_INPUT_MESSAGE = (
    "The input is empty. Try piping diff output to diff2html or specify input arguments."
)


class InputError(Exception):
    """Raised when the diff cannot be read from a file or stdin."""


def _read_input(source: str, extra_args: List[str], ignore: List[str]) -> str:
    """Fetch diff text from a file, stdin, or ``git diff``."""
    from diff2html.git.adapter import get_diff

    if source == "file":
        if not extra_args:
            raise InputError("No file path provided. Use: diff2html render -i file -- <path>")
        path = Path(extra_args[0])
        logger.info("Reading diff from %s", path)
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise InputError(f"Failed to read file: {path}: {exc}") from exc
    if source == "stdin":
        logger.info("Reading diff from stdin")
        try:
            return sys.stdin.read()
        except OSError as exc:
            raise InputError(f"Failed to read from stdin: {exc}") from exc

    logger.info("Running git diff")
    return get_diff(extra_args, ignore)


def _fail(label: str, exc: Exception) -> typer.Exit:
    console.print(f"[bold red]{label}:[/bold red] {escape(str(exc))}")
    return typer.Exit(code=EXIT_ERROR)


# ── render ────────────────────────────────────────────────────────────────────


@app.command()
def render(
    extra_args: Optional[List[str]] = typer.Argument(
        None, help="Input file (with -i file) or arguments passed to git diff, after --"
    ),
    style: Optional[str] = typer.Option(None, "--style", "-s", help="Output style: line | side"),
    diff_style: Optional[str] = typer.Option(None, "--diffStyle", "-d", help="Highlight: word | char"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: html | json"),
    input_source: Optional[str] = typer.Option(
        None, "--input", "-i", help="Diff source: file | command | stdin"
    ),
    destination: Optional[str] = typer.Option(None, "--output", "-o", help="Destination: preview | stdout"),
    file: Optional[str] = typer.Option(None, "--file", "-F", help="Write output to this file"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Page title and header"),
    color_scheme: Optional[str] = typer.Option(None, "--colorScheme", help="Colors: auto | light | dark"),
    summary: Optional[str] = typer.Option(None, "--summary", help="File list: closed | open | hidden"),
    matching: Optional[str] = typer.Option(None, "--matching", help="Line matching: lines | words | none"),
    match_words_threshold: Optional[float] = typer.Option(
        None, "--matchWordsThreshold", help="Similarity threshold for word matching (0-1)"
    ),
    matching_max_comparisons: Optional[int] = typer.Option(
        None, "--matchingMaxComparisons", help="Skip matching above this many line comparisons"
    ),
    diff_max_changes: Optional[int] = typer.Option(
        None, "--diffMaxChanges", help="Collapse files with more changed lines"
    ),
    diff_max_line_length: Optional[int] = typer.Option(
        None, "--diffMaxLineLength", help="Collapse files with a longer line"
    ),
    render_nothing_when_empty: Optional[bool] = typer.Option(
        None, "--renderNothingWhenEmpty/--no-renderNothingWhenEmpty", help="Hide files without hunks"
    ),
    max_line_size_in_block_for_comparison: Optional[int] = typer.Option(
        None, "--maxLineSizeInBlockForComparison", help="Skip matching for blocks with longer lines"
    ),
    max_line_length_highlight: Optional[int] = typer.Option(
        None, "--maxLineLengthHighlight", help="Skip highlighting for longer lines"
    ),
    file_content_toggle: Optional[bool] = typer.Option(
        None, "--fileContentToggle/--no-fileContentToggle", help="Show the viewed checkbox"
    ),
    synchronised_scroll: Optional[bool] = typer.Option(
        None, "--synchronisedScroll/--no-synchronisedScroll", help="Scroll both sides together"
    ),
    highlight_code: Optional[bool] = typer.Option(
        None, "--highlightCode/--no-highlightCode", help="Syntax highlight code in the page"
    ),
    html_wrapper_template: Optional[str] = typer.Option(
        None, "--htmlWrapperTemplate", help="Custom HTML page template"
    ),
    ignore: Optional[List[str]] = typer.Option(
        None, "--ignore", "-g", help="Path to exclude from git diff (repeatable)"
    ),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .diff2html.toml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output with timestamps"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Also write log output to this file"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Summarize parsed files without rendering"),
) -> None:
    """Render a diff as an HTML page or JSON."""
    import diff2html
    from diff2html.config.loader import ConfigError, load_config, validate_config
    from diff2html.git.adapter import GitError
    from diff2html.git.diff_parser import parse
    from diff2html.logging_utils import configure_logging
    from diff2html.output import json_report, page, terminal
    from diff2html.output.json_report import SerializationError
    from diff2html.output.page import PageError

    if debug:
        configure_logging(logging.DEBUG, log_file=log_file, trace_mode=True)
    elif verbose:
        configure_logging(logging.INFO, log_file=log_file)
    else:
        configure_logging(logging.WARNING, log_file=log_file)

    # --- Load config ---
    try:
        cfg = load_config(Path.cwd(), config)
    except ConfigError as exc:
        raise _fail("Config error", exc) from exc

    # --- CLI overrides ---
    overrides = (
        (cfg.output, "style", style),
        (cfg.output, "format", format),
        (cfg.output, "destination", destination),
        (cfg.output, "file", file),
        (cfg.output, "title", title),
        (cfg.output, "summary", summary),
        (cfg.output, "file_content_toggle", file_content_toggle),
        (cfg.output, "synchronised_scroll", synchronised_scroll),
        (cfg.output, "highlight_code", highlight_code),
        (cfg.output, "html_wrapper_template", html_wrapper_template),
        (cfg.input, "source", input_source),
        (cfg.render, "diff_style", diff_style),
        (cfg.render, "color_scheme", color_scheme),
        (cfg.render, "matching", matching),
        (cfg.render, "match_words_threshold", match_words_threshold),
        (cfg.render, "matching_max_comparisons", matching_max_comparisons),
        (cfg.render, "render_nothing_when_empty", render_nothing_when_empty),
        (cfg.render, "max_line_size_in_block_for_comparison", max_line_size_in_block_for_comparison),
        (cfg.render, "max_line_length_highlight", max_line_length_highlight),
        (cfg.parser, "diff_max_changes", diff_max_changes),
        (cfg.parser, "diff_max_line_length", diff_max_line_length),
    )
    for section, name, value in overrides:
        if value is not None:
            setattr(section, name, value)
    if ignore:
        cfg.input.ignore.extend(ignore)

    try:
        validate_config(cfg)
    except ConfigError as exc:
        raise _fail("Config error", exc) from exc

    # --- Get diff ---
    try:
        diff_text = _read_input(cfg.input.source, list(extra_args or []), cfg.input.ignore)
    except InputError as exc:
        raise _fail("Input error", exc) from exc
    except GitError as exc:
        raise _fail("Git error", exc) from exc

    if not diff_text.strip():
        console.print(f"[yellow]{EMPTY_INPUT_MESSAGE}[/yellow]")
        raise typer.Exit(code=EXIT_EMPTY_INPUT)

    files = parse(diff_text, cfg.parser)
    logger.info("Parsed %d file(s)", len(files))

    if dry_run:
        terminal.render(files, console)
        raise typer.Exit(code=0)

    # --- Render ---
    try:
        if cfg.output.format == "json":
            content = json_report.render(files)
        else:
            fragment = diff2html.html_from_diff_files(files, cfg.to_diff2html_config())
            content = page.prepare_html(fragment, cfg.output, cfg.render.color_scheme)
    except (SerializationError, PageError) as exc:
        raise _fail("Output error", exc) from exc

    # --- Write ---
    try:
        if cfg.output.file:
            page.write_file(cfg.output.file, content)
            logger.info("Output written to %s", cfg.output.file)
        elif cfg.output.destination == "stdout":
            typer.echo(content)
        else:
            page.preview(content, cfg.output.format)
    except PageError as exc:
        raise _fail("Output error", exc) from exc


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
) -> None:
    """Generate a starter .diff2html.toml in the current directory."""
    from diff2html.config.defaults import DEFAULT_TOML
    from diff2html.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists() and not force:
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {escape(str(config_path))}")
        raise typer.Exit(code=EXIT_ERROR)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {escape(str(config_path))}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"diff2html {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """diff2html: turn git diff output into pretty HTML or JSON."""

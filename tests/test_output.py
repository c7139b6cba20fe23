"""Tests for the HTML renderers, page wrapper and terminal summary."""

import io
import re

import pytest
from jinja2 import UndefinedError
from rich.console import Console

import diff2html
from diff2html.config.schema import Diff2HtmlConfig, OutputConfig, ParserConfig, RenderConfig
from diff2html.git.diff_parser import parse
from diff2html.git.models import DiffBlock, DiffFile, DiffLine, LineType
from diff2html.output import page, templates, terminal
from diff2html.output.file_list import render_file_list
from diff2html.output.line_by_line import render_line_by_line
from diff2html.output.page import PageError
from diff2html.output.side_by_side import render_side_by_side
from diff2html.output.utils import (
    color_scheme_to_css,
    deconstruct_line,
    diff_highlight,
    escape_for_html,
    filename_diff,
    get_file_icon,
    get_html_id,
    group_lines,
    match_changed_lines,
)


def _line(line_type, content, old=None, new=None) -> DiffLine:
    return DiffLine(line_type, content, old_number=old, new_number=new)


class TestHtmlHelpers:
    def test_escape(self):
        assert escape_for_html("<a href='x'>&</a>") == (
            "&lt;a href=&#x27;x&#x27;&gt;&amp;&lt;&#x2F;a&gt;"
        )

    def test_escape_plain_text_untouched(self):
        assert escape_for_html("plain text 123") == "plain text 123"

    def test_deconstruct_line(self):
        parts = deconstruct_line("+<b>", False)
        assert parts.prefix == "+"
        assert parts.content == "&lt;b&gt;"

    def test_deconstruct_combined(self):
        parts = deconstruct_line("++x", True)
        assert parts.prefix == "++"
        assert parts.content == "x"

    def test_deconstruct_without_escape(self):
        assert deconstruct_line("-<b>", False, escape=False).content == "<b>"

    def test_color_scheme_css(self):
        assert color_scheme_to_css("light") == "d2h-light-color-scheme"
        assert color_scheme_to_css("dark") == "d2h-dark-color-scheme"
        assert color_scheme_to_css("auto") == "d2h-auto-color-scheme"


class TestFilenameDiff:
    def test_unchanged(self):
        assert filename_diff(DiffFile(old_name="a.txt", new_name="a.txt")) == "a.txt"

    def test_dev_null(self):
        assert filename_diff(DiffFile(old_name="/dev/null", new_name="new.py")) == "new.py"
        assert filename_diff(DiffFile(old_name="gone.py", new_name="/dev/null")) == "gone.py"

    def test_rename_common_prefix(self):
        f = DiffFile(old_name="lib/old_name.py", new_name="lib/new_name.py")
        assert filename_diff(f) == "lib/{old_name.py → new_name.py}"

    def test_rename_common_prefix_and_suffix(self):
        f = DiffFile(old_name="src/a/file.py", new_name="src/b/file.py")
        assert filename_diff(f) == "src/{a → b}/file.py"

    def test_rename_common_suffix(self):
        f = DiffFile(old_name="one/file.py", new_name="two/file.py")
        assert filename_diff(f) == "{one → two}/file.py"

    def test_rename_nothing_shared(self):
        f = DiffFile(old_name="old.txt", new_name="new.txt")
        assert filename_diff(f) == "old.txt → new.txt"


class TestFileIdsAndIcons:
    def test_html_id_format(self):
        html_id = get_html_id(DiffFile(old_name="x.py", new_name="x.py"))
        assert re.fullmatch(r"d2h-\d{6}", html_id)

    def test_html_id_deterministic(self):
        a = DiffFile(old_name="src/app.py", new_name="src/app.py")
        b = DiffFile(old_name="src/app.py", new_name="src/app.py", added_lines=5)
        assert get_html_id(a) == get_html_id(b)

    def test_icons(self):
        assert get_file_icon(DiffFile(old_name="a", new_name="a", is_new=True)) == "file-added"
        assert get_file_icon(DiffFile(old_name="a", new_name="a", is_deleted=True)) == "file-deleted"
        assert get_file_icon(DiffFile(old_name="a", new_name="b", is_rename=True)) == "file-renamed"
        assert get_file_icon(DiffFile(old_name="a", new_name="b")) == "file-renamed"
        assert get_file_icon(DiffFile(old_name="a", new_name="a")) == "file-changed"


class TestGrouping:
    def test_group_lines(self):
        ctx1 = _line(LineType.CONTEXT, " a", 1, 1)
        del1 = _line(LineType.DELETE, "-b", old=2)
        del2 = _line(LineType.DELETE, "-c", old=3)
        ins1 = _line(LineType.INSERT, "+B", new=2)
        ctx2 = _line(LineType.CONTEXT, " d", 4, 3)
        ins2 = _line(LineType.INSERT, "+e", new=4)
        block = DiffBlock(1, 1, "@@ -1,4 +1,4 @@", lines=[ctx1, del1, del2, ins1, ctx2, ins2])
        assert group_lines(block) == [
            ([ctx1], [], []),
            ([], [del1, del2], [ins1]),
            ([ctx2], [], []),
            ([], [], [ins2]),
        ]

    def test_match_changed_lines_disabled(self):
        old = [_line(LineType.DELETE, "-x = 1", old=1), _line(LineType.DELETE, "-print(y)", old=2)]
        new = [_line(LineType.INSERT, "+x = 2", new=1)]
        assert match_changed_lines(old, new, False, RenderConfig()) == [(old, new)]

    def test_match_changed_lines_pairs_similar(self):
        old = [_line(LineType.DELETE, "-x = 1", old=1), _line(LineType.DELETE, "-print(y)", old=2)]
        new = [_line(LineType.INSERT, "+x = 2", new=1)]
        groups = match_changed_lines(old, new, False, RenderConfig(matching="lines"))
        assert groups == [([old[0]], [new[0]]), ([old[1]], [])]

    def test_match_changed_lines_over_limit(self):
        old = [_line(LineType.DELETE, "-x = 1", old=1), _line(LineType.DELETE, "-print(y)", old=2)]
        new = [_line(LineType.INSERT, "+x = 2", new=1)]
        config = RenderConfig(matching="lines", matching_max_comparisons=2)
        assert match_changed_lines(old, new, False, config) == [(old, new)]


class TestDiffHighlight:
    def test_word_highlight(self):
        result = diff_highlight("-hello world", "+hello there", False, RenderConfig())
        assert result.old_line.prefix == "-"
        assert result.new_line.prefix == "+"
        assert result.old_line.content == "hello <del>world</del>"
        assert result.new_line.content == "hello <ins>there</ins>"

    def test_char_highlight(self):
        result = diff_highlight("-abc", "+abd", False, RenderConfig(diff_style="char"))
        assert result.old_line.content == "ab<del>c</del>"
        assert result.new_line.content == "ab<ins>d</ins>"

    def test_content_escaped(self):
        result = diff_highlight("-a<b", "+a>b", False, RenderConfig())
        assert result.old_line.content == "a<del>&lt;</del>b"
        assert result.new_line.content == "a<ins>&gt;</ins>b"

    def test_long_lines_not_highlighted(self):
        config = RenderConfig(max_line_length_highlight=5)
        result = diff_highlight("-hello world", "+hello there", False, config)
        assert result.old_line.content == "hello world"
        assert result.new_line.content == "hello there"

    def test_words_matching_marks_changes(self):
        config = RenderConfig(matching="words")
        result = diff_highlight("-x = value", "+x = values", False, config)
        assert '<del class="d2h-change">value</del>' in result.old_line.content
        assert '<ins class="d2h-change">values</ins>' in result.new_line.content

    def test_combined_prefix(self):
        result = diff_highlight("--old", "++new", True, RenderConfig())
        assert result.old_line.prefix == "--"
        assert result.new_line.prefix == "++"


class TestLineByLine:
    def test_structure(self, sample_diff_simple):
        html = render_line_by_line(parse(sample_diff_simple))
        assert 'class="d2h-wrapper d2h-light-color-scheme"' in html
        assert "d2h-file-wrapper" in html
        assert "d2h-diff-table" in html
        assert "line-num1" in html
        assert "@@ -1 +1 @@" in html

    def test_deletions_before_insertions(self, sample_diff_simple):
        html = render_line_by_line(parse(sample_diff_simple))
        assert "<del>test</del>" in html
        assert "<ins>test1r</ins>" in html
        assert html.index("d2h-del d2h-change") < html.index("d2h-ins d2h-change")

    def test_context_lines(self, sample_diff_multi_file):
        html = render_line_by_line(parse(sample_diff_multi_file))
        assert "d2h-cntx" in html
        assert "import os" in html

    def test_header_escaped(self):
        diff = "--- a/x.txt\n+++ b/x.txt\n@@ -1 +1 @@ <tag>\n-a\n+b\n"
        html = render_line_by_line(parse(diff))
        assert "&lt;tag&gt;" in html
        assert "<tag>" not in html

    def test_file_without_changes(self, sample_diff_rename):
        html = render_line_by_line(parse(sample_diff_rename))
        assert "File without changes" in html
        assert "RENAMED" in html

    def test_render_nothing_when_empty(self, sample_diff_rename):
        html = render_line_by_line(
            parse(sample_diff_rename), RenderConfig(render_nothing_when_empty=True)
        )
        assert "File without changes" not in html
        assert "d2h-file-wrapper" not in html

    def test_too_big_message(self):
        diff = "--- a/x.txt\n+++ b/x.txt\n@@ -1 +1,3 @@\n+a\n+b\n+c\n"
        files = parse(diff, ParserConfig(diff_max_changes=1))
        html = render_line_by_line(files)
        assert "Diff too big to be displayed" in html

    def test_dark_scheme(self, sample_diff_simple):
        html = render_line_by_line(parse(sample_diff_simple), RenderConfig(color_scheme="dark"))
        assert "d2h-dark-color-scheme" in html

    def test_file_name_escaped(self):
        diff = "--- a/<x>.txt\n+++ b/<x>.txt\n@@ -1 +1 @@\n-a\n+b\n"
        html = render_line_by_line(parse(diff))
        assert "&lt;x&gt;.txt" in html


class TestSideBySide:
    def test_two_columns(self, sample_diff_simple):
        html = render_side_by_side(parse(sample_diff_simple))
        assert "d2h-files-diff" in html
        assert html.count('class="d2h-file-side-diff"') == 2
        assert "d2h-code-side-linenumber" in html

    def test_placeholders_for_missing_side(self, sample_diff_new_file):
        html = render_side_by_side(parse(sample_diff_new_file))
        assert "d2h-emptyplaceholder" in html
        assert "d2h-code-side-emptyplaceholder" in html
        assert "ADDED" in html

    def test_paired_lines_highlighted(self, sample_diff_simple):
        html = render_side_by_side(parse(sample_diff_simple))
        assert "<del>test</del>" in html
        assert "<ins>test1r</ins>" in html


class TestFileList:
    def test_summary(self, sample_diff_multi_file):
        html = render_file_list(parse(sample_diff_multi_file))
        assert "Files changed (2)" in html
        assert "+1" in html
        assert "-1" in html
        assert "src/app.py" in html

    def test_links_match_file_ids(self, sample_diff_simple):
        files = parse(sample_diff_simple)
        html = render_file_list(files)
        assert f'href="#{get_html_id(files[0])}"' in html


class TestTopLevelApi:
    def test_html_includes_file_list(self, sample_diff_simple):
        html = diff2html.html(sample_diff_simple)
        assert "d2h-file-list-wrapper" in html
        assert "d2h-file-wrapper" in html

    def test_side_without_file_list(self, sample_diff_simple):
        config = Diff2HtmlConfig(output_format="side", draw_file_list=False)
        html = diff2html.html(sample_diff_simple, config)
        assert "d2h-file-list-wrapper" not in html
        assert "d2h-files-diff" in html

    def test_html_from_diff_files(self, sample_diff_simple):
        files = parse(sample_diff_simple)
        assert diff2html.html_from_diff_files(files) == diff2html.html(sample_diff_simple)


class TestTemplates:
    def test_environment_built_once(self):
        assert templates.get_environment() is templates.get_environment()

    def test_every_template_loads(self):
        for name in templates.TEMPLATE_NAMES:
            assert templates.get_template(name) is not None

    def test_missing_variable_raises(self):
        with pytest.raises(UndefinedError):
            templates.render("generic-wrapper", colorScheme="x")


class TestPage:
    def test_placeholders_replaced(self):
        html = page.prepare_html("<p>diff</p>", OutputConfig())
        assert "<!--diff2html-" not in html
        assert "//diff2html-" not in html
        assert "<p>diff</p>" in html
        assert "<title>Diff to HTML</title>" in html
        assert "diff2htmlUi.fileListToggle(false);" in html
        assert "diff2htmlUi.highlightCode();" in html

    def test_title_escaped(self):
        html = page.prepare_html("", OutputConfig(title="<Mine>"))
        assert "<title>&lt;Mine&gt;</title>" in html

    def test_toggles(self):
        output = OutputConfig(
            summary="open", highlight_code=False, synchronised_scroll=False, file_content_toggle=False
        )
        html = page.prepare_html("", output)
        assert "diff2htmlUi.fileListToggle(true);" in html
        assert "highlightCode();" not in html
        assert "synchronisedScroll();" not in html
        assert "fileContentToggle();" not in html

    def test_color_scheme_theme(self):
        assert "github-dark.min.css" in page.prepare_html("", OutputConfig(), "dark")
        light = page.prepare_html("", OutputConfig(), "light")
        assert "github.min.css" in light
        assert "github-dark.min.css" not in light

    def test_diff_content_not_substituted(self):
        html = page.prepare_html("<!--diff2html-title-->", OutputConfig(title="T"))
        assert "<!--diff2html-title-->" in html

    def test_custom_template(self, tmp_path):
        template = tmp_path / "wrapper.html"
        template.write_text("<h1><!--diff2html-header--></h1><!--diff2html-diff-->")
        html = page.prepare_html("BODY", OutputConfig(title="X", html_wrapper_template=str(template)))
        assert html == "<h1>X</h1>BODY"

    def test_missing_template(self, tmp_path):
        output = OutputConfig(html_wrapper_template=str(tmp_path / "nope.html"))
        with pytest.raises(PageError, match="not found"):
            page.prepare_html("", output)

    def test_write_file(self, tmp_path):
        target = tmp_path / "out.html"
        page.write_file(str(target), "content")
        assert target.read_text() == "content"

    def test_write_file_error(self, tmp_path):
        with pytest.raises(PageError):
            page.write_file(str(tmp_path / "missing" / "out.html"), "content")

    def test_preview_opens_browser(self, monkeypatch, tmp_path):
        opened = []
        monkeypatch.setattr(page.tempfile, "gettempdir", lambda: str(tmp_path))
        monkeypatch.setattr(page.webbrowser, "open", lambda uri: opened.append(uri) or True)
        path = page.preview("<html></html>", "html")
        assert path == tmp_path / "diff.html"
        assert path.read_text() == "<html></html>"
        assert opened == [path.as_uri()]

    def test_preview_browser_failure(self, monkeypatch, tmp_path):
        monkeypatch.setattr(page.tempfile, "gettempdir", lambda: str(tmp_path))
        monkeypatch.setattr(page.webbrowser, "open", lambda uri: False)
        with pytest.raises(PageError, match="browser"):
            page.preview("{}", "json")


class TestTerminal:
    def _console(self):
        buf = io.StringIO()
        return Console(file=buf, width=160, force_terminal=False), buf

    def test_table(self, sample_diff_multi_file):
        console, buf = self._console()
        terminal.render(parse(sample_diff_multi_file), console)
        output = buf.getvalue()
        assert "Files changed (2)" in output
        assert "src/app.py" in output
        assert "CHANGED" in output
        assert "Total:" in output

    def test_notes(self, sample_diff_rename):
        console, buf = self._console()
        terminal.render(parse(sample_diff_rename), console)
        assert "95% similar" in buf.getvalue()

    def test_empty(self):
        console, buf = self._console()
        terminal.render([], console)
        assert "No files found" in buf.getvalue()

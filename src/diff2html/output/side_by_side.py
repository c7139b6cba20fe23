"""Two-column HTML view: old file on the left, new file on the right."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from diff2html.config.schema import RenderConfig
from diff2html.git.models import DiffBlock, DiffFile, DiffLine
from diff2html.output import templates
from diff2html.output.utils import (
    CSSLineClass,
    color_scheme_to_css,
    deconstruct_line,
    diff_highlight,
    escape_for_html,
    get_html_id,
    group_lines,
    match_changed_lines,
    render_file_path,
    to_css_class,
)

_LINE_CLASS = "d2h-code-side-linenumber"
_CONTENT_CLASS = "d2h-code-side-line"


@dataclass
class _PreparedLine:
    css_class: str
    prefix: str
    content: str
    number: Optional[int]


@dataclass
class _FileHtml:
    left: str = ""
    right: str = ""

    def extend(self, left: str, right: str) -> None:
        self.left += left
        self.right += right


class SideBySideRenderer:
    def __init__(self, config: Optional[RenderConfig] = None) -> None:
        self.config = config or RenderConfig()

    def render(self, files: List[DiffFile]) -> str:
        diffs_html = "\n".join(self._render_file(file) for file in files)
        return templates.render(
            "generic-wrapper",
            colorScheme=color_scheme_to_css(self.config.color_scheme),
            content=diffs_html,
        )

    def _render_file(self, file: DiffFile) -> str:
        if self.config.render_nothing_when_empty and not file.blocks:
            return ""
        diffs = self._render_blocks(file) if file.blocks else self._render_empty()
        return templates.render(
            "side-by-side-file-diff",
            fileHtmlId=get_html_id(file),
            language=file.language,
            filePath=render_file_path(file),
            left=diffs.left,
            right=diffs.right,
        )

    def _render_empty(self) -> _FileHtml:
        left = templates.render(
            "generic-empty-diff", infoClass=CSSLineClass.INFO.value, contentClass=_CONTENT_CLASS
        )
        return _FileHtml(left=left)

    def _render_header(self, header: str) -> str:
        return templates.render(
            "generic-block-header",
            infoClass=CSSLineClass.INFO.value,
            blockHeader=header,
            lineClass=_LINE_CLASS,
            contentClass=_CONTENT_CLASS,
        )

    def _render_blocks(self, file: DiffFile) -> _FileHtml:
        html = _FileHtml()
        for block in file.blocks:
            self._render_block(file, block, html)
        return html

    def _render_block(self, file: DiffFile, block: DiffBlock, html: _FileHtml) -> None:
        header = block.header if file.is_too_big else escape_for_html(block.header)
        html.extend(self._render_header(header), self._render_header(""))

        for context_lines, old_lines, new_lines in group_lines(block):
            for line in context_lines:
                parts = deconstruct_line(line.content, file.is_combined)
                html.extend(
                    self._render_side(
                        _PreparedLine(CSSLineClass.CONTEXT.value, parts.prefix, parts.content, line.old_number)
                    ),
                    self._render_side(
                        _PreparedLine(CSSLineClass.CONTEXT.value, parts.prefix, parts.content, line.new_number)
                    ),
                )
            if old_lines or new_lines:
                for old_group, new_group in match_changed_lines(
                    old_lines, new_lines, file.is_combined, self.config
                ):
                    html.extend(*self._render_changed_lines(file.is_combined, old_group, new_group))

    def _render_changed_lines(
        self, is_combined: bool, old_lines: List[DiffLine], new_lines: List[DiffLine]
    ) -> Tuple[str, str]:
        """Pair lines row by row; a missing side gets an empty placeholder."""
        left: List[str] = []
        right: List[str] = []

        for i in range(max(len(old_lines), len(new_lines))):
            old = old_lines[i] if i < len(old_lines) else None
            new = new_lines[i] if i < len(new_lines) else None
            diff = (
                diff_highlight(old.content, new.content, is_combined, self.config)
                if old is not None and new is not None
                else None
            )

            prepared_old = None
            if old is not None and old.old_number is not None:
                if diff is not None:
                    prepared_old = _PreparedLine(
                        CSSLineClass.DELETE_CHANGES.value,
                        diff.old_line.prefix,
                        diff.old_line.content,
                        old.old_number,
                    )
                else:
                    parts = deconstruct_line(old.content, is_combined)
                    prepared_old = _PreparedLine(
                        to_css_class(old.line_type).value, parts.prefix, parts.content, old.old_number
                    )

            prepared_new = None
            if new is not None and new.new_number is not None:
                if diff is not None:
                    prepared_new = _PreparedLine(
                        CSSLineClass.INSERT_CHANGES.value,
                        diff.new_line.prefix,
                        diff.new_line.content,
                        new.new_number,
                    )
                else:
                    parts = deconstruct_line(new.content, is_combined)
                    prepared_new = _PreparedLine(
                        to_css_class(new.line_type).value, parts.prefix, parts.content, new.new_number
                    )

            left.append(self._render_side(prepared_old))
            right.append(self._render_side(prepared_new))

        return "".join(left), "".join(right)

    def _render_side(self, line: Optional[_PreparedLine]) -> str:
        if line is None:
            return templates.render(
                "generic-line",
                type=f"{CSSLineClass.CONTEXT.value} d2h-emptyplaceholder",
                lineClass=f"{_LINE_CLASS} d2h-code-side-emptyplaceholder",
                contentClass=f"{_CONTENT_CLASS} d2h-code-side-emptyplaceholder",
                prefix="",
                content="",
                lineNumber="",
            )
        return templates.render(
            "generic-line",
            type=line.css_class,
            lineClass=_LINE_CLASS,
            contentClass=_CONTENT_CLASS,
            prefix="&nbsp;" if line.prefix == " " else line.prefix,
            content=line.content,
            lineNumber="" if line.number is None else line.number,
        )


def render_side_by_side(files: List[DiffFile], config: Optional[RenderConfig] = None) -> str:
    return SideBySideRenderer(config).render(files)

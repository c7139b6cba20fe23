"""Single-column HTML view: every line in order with old and new numbers."""

from __future__ import annotations

from typing import List, Optional

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

_LINE_CLASS = "d2h-code-linenumber"
_CONTENT_CLASS = "d2h-code-line"


class LineByLineRenderer:
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
            "line-by-line-file-diff",
            fileHtmlId=get_html_id(file),
            language=file.language,
            filePath=render_file_path(file),
            diffs=diffs,
        )

    def _render_empty(self) -> str:
        return templates.render(
            "generic-empty-diff", infoClass=CSSLineClass.INFO.value, contentClass=_CONTENT_CLASS
        )

    def _render_blocks(self, file: DiffFile) -> str:
        return "\n".join(self._render_block(file, block) for block in file.blocks)

    def _render_block(self, file: DiffFile, block: DiffBlock) -> str:
        # The too-big placeholder is our own message, not diff content
        header = block.header if file.is_too_big else escape_for_html(block.header)
        html = [
            templates.render(
                "generic-block-header",
                infoClass=CSSLineClass.INFO.value,
                blockHeader=header,
                lineClass=_LINE_CLASS,
                contentClass=_CONTENT_CLASS,
            )
        ]

        for context_lines, old_lines, new_lines in group_lines(block):
            for line in context_lines:
                parts = deconstruct_line(line.content, file.is_combined)
                html.append(
                    self._render_line(
                        CSSLineClass.CONTEXT.value,
                        parts.prefix,
                        parts.content,
                        line.old_number,
                        line.new_number,
                    )
                )
            if old_lines or new_lines:
                for old_group, new_group in match_changed_lines(
                    old_lines, new_lines, file.is_combined, self.config
                ):
                    html.append(self._render_changed_lines(file.is_combined, old_group, new_group))

        return "".join(html)

    def _render_changed_lines(
        self, is_combined: bool, old_lines: List[DiffLine], new_lines: List[DiffLine]
    ) -> str:
        """All deletions of the group first, then all insertions."""
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

            if old is not None and old.old_number is not None:
                if diff is not None:
                    css, prefix, content = (
                        CSSLineClass.DELETE_CHANGES.value,
                        diff.old_line.prefix,
                        diff.old_line.content,
                    )
                else:
                    parts = deconstruct_line(old.content, is_combined)
                    css, prefix, content = to_css_class(old.line_type).value, parts.prefix, parts.content
                left.append(self._render_line(css, prefix, content, old.old_number, old.new_number))

            if new is not None and new.new_number is not None:
                if diff is not None:
                    css, prefix, content = (
                        CSSLineClass.INSERT_CHANGES.value,
                        diff.new_line.prefix,
                        diff.new_line.content,
                    )
                else:
                    parts = deconstruct_line(new.content, is_combined)
                    css, prefix, content = to_css_class(new.line_type).value, parts.prefix, parts.content
                right.append(self._render_line(css, prefix, content, new.old_number, new.new_number))

        return "".join(left) + "".join(right)

    def _render_line(
        self,
        css_class: str,
        prefix: str,
        content: str,
        old_number: Optional[int],
        new_number: Optional[int],
    ) -> str:
        line_number = templates.render(
            "line-by-line-numbers",
            oldNumber="" if old_number is None else old_number,
            newNumber="" if new_number is None else new_number,
        )
        return templates.render(
            "generic-line",
            type=css_class,
            lineClass=_LINE_CLASS,
            contentClass=_CONTENT_CLASS,
            prefix="&nbsp;" if prefix == " " else prefix,
            content=content,
            lineNumber=line_number,
        )


def render_line_by_line(files: List[DiffFile], config: Optional[RenderConfig] = None) -> str:
    return LineByLineRenderer(config).render(files)

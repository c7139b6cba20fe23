"""Summary list of changed files with added/deleted counts."""

from __future__ import annotations

from typing import List, Optional

from diff2html.config.schema import FileListConfig
from diff2html.git.models import DiffFile
from diff2html.output import templates
from diff2html.output.utils import color_scheme_to_css, filename_diff, get_file_icon, get_html_id


class FileListRenderer:
    def __init__(self, config: Optional[FileListConfig] = None) -> None:
        self.config = config or FileListConfig()

    def render(self, files: List[DiffFile]) -> str:
        files_html = "\n".join(
            templates.render(
                "file-summary-line",
                fileHtmlId=get_html_id(file),
                fileName=filename_diff(file),
                addedLines=f"+{file.added_lines}",
                deletedLines=f"-{file.deleted_lines}",
                fileIcon=templates.render(f"icon-{get_file_icon(file)}"),
            )
            for file in files
        )
        return templates.render(
            "file-summary-wrapper",
            colorScheme=color_scheme_to_css(self.config.color_scheme),
            filesNumber=len(files),
            files=files_html,
        )


def render_file_list(files: List[DiffFile], config: Optional[FileListConfig] = None) -> str:
    return FileListRenderer(config).render(files)

"""Git interface layer: adapter, diff parsing, models."""

from diff2html.git.adapter import GitError, generate_git_diff_args, get_diff
from diff2html.git.diff_parser import DiffParser, get_extension, get_filename, parse
from diff2html.git.models import (
    Checksum,
    DiffBlock,
    DiffFile,
    DiffLine,
    DiffLineParts,
    FileMode,
    LineType,
)

__all__ = [
    "Checksum",
    "DiffBlock",
    "DiffFile",
    "DiffLine",
    "DiffLineParts",
    "DiffParser",
    "FileMode",
    "GitError",
    "LineType",
    "generate_git_diff_args",
    "get_diff",
    "get_extension",
    "get_filename",
    "parse",
]

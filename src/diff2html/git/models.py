"""Data models for parsed diffs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class LineType(str, Enum):
    INSERT = "insert"
    DELETE = "delete"
    CONTEXT = "context"


@dataclass(frozen=True)
class _Variant:
    """A single value, or one value per parent for combined diffs."""

    values: Tuple[str, ...]
    multiple: bool = False

    @classmethod
    def single(cls, value: str):
        return cls(values=(value,))

    @classmethod
    def of(cls, *values: str):
        return cls(values=tuple(values), multiple=True)

    @property
    def value(self) -> str:
        return self.values[0] if self.values else ""


class FileMode(_Variant):
    """File mode from ``old mode`` or combined ``mode a,b..c`` lines."""


class Checksum(_Variant):
    """Blob id(s) from an ``index`` line."""


@dataclass(frozen=True, slots=True)
class DiffLine:
    """A single content line inside a hunk."""

    line_type: LineType
    content: str  # raw, including the +/-/space prefix
    old_number: Optional[int] = None
    new_number: Optional[int] = None


@dataclass
class DiffBlock:
    """One hunk."""

    old_start_line: int
    new_start_line: int
    header: str
    old_start_line2: Optional[int] = None  # combined diffs only
    lines: List[DiffLine] = field(default_factory=list)


@dataclass
class DiffFile:
    """One file section of a diff with its metadata and hunks."""

    old_name: str = ""
    new_name: str = ""
    added_lines: int = 0
    deleted_lines: int = 0
    is_combined: bool = False
    is_git_diff: bool = False
    language: str = ""
    blocks: List[DiffBlock] = field(default_factory=list)

    old_mode: Optional[FileMode] = None
    new_mode: Optional[str] = None
    deleted_file_mode: Optional[str] = None
    new_file_mode: Optional[str] = None
    is_deleted: Optional[bool] = None
    is_new: Optional[bool] = None
    is_copy: Optional[bool] = None
    is_rename: Optional[bool] = None
    is_binary: Optional[bool] = None
    is_too_big: Optional[bool] = None
    unchanged_percentage: Optional[int] = None
    changed_percentage: Optional[int] = None
    checksum_before: Optional[Checksum] = None
    checksum_after: Optional[str] = None
    mode: Optional[str] = None


@dataclass(frozen=True)
class DiffLineParts:
    """A diff line split into its prefix and content."""

    prefix: str
    content: str

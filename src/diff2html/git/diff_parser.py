"""Unified diff parser.

Turns ``git diff`` / ``diff -u`` output (including git extended headers,
renames, copies, binary markers and combined merge diffs) into a list of
:class:`DiffFile` records. The parser never fails on malformed input: it
recovers what it can and logs anything it had to guess.

Formats:
  - Unified: https://www.gnu.org/software/diffutils/manual/html_node/Unified-Format.html
  - Git extended headers: https://git-scm.com/docs/git-diff#_generating_patch_text_with_p
  - Combined diff: https://git-scm.com/docs/git-diff#_combined_diff_format
"""

from __future__ import annotations

import bisect
import logging
import re
from typing import List, Optional, Sequence

from diff2html.config.schema import ParserConfig
from diff2html.git.models import Checksum, DiffBlock, DiffFile, DiffLine, FileMode, LineType

logger = logging.getLogger(__name__)

# --- Regex patterns for git extended headers ---

_OLD_MODE_RE = re.compile(r"^old mode (\d{6})")
_NEW_MODE_RE = re.compile(r"^new mode (\d{6})")
# Also match the combined form "deleted file mode a,b", keeping the first mode
_DELETED_FILE_MODE_RE = re.compile(r"^deleted file mode (\d{6})")
_NEW_FILE_MODE_RE = re.compile(r"^new file mode (\d{6})")
_COPY_FROM_RE = re.compile(r'^copy from "?(.+?)"?$')
_COPY_TO_RE = re.compile(r'^copy to "?(.+?)"?$')
_RENAME_FROM_RE = re.compile(r'^rename from "?(.+?)"?$')
_RENAME_TO_RE = re.compile(r'^rename to "?(.+?)"?$')
_SIMILARITY_RE = re.compile(r"^similarity index (\d+)%")
_DISSIMILARITY_RE = re.compile(r"^dissimilarity index (\d+)%")
_INDEX_RE = re.compile(r"^index ([\da-z]+)\.\.([\da-z]+)\s*(\d{6})?")
_BINARY_FILES_RE = re.compile(r"^Binary files (.*) and (.*) differ")
_BINARY_PATCH_RE = re.compile(r"^GIT binary patch")

# Combined diff (merge commits) headers
_COMBINED_INDEX_RE = re.compile(r"^index ([\da-z]+),([\da-z]+)\.\.([\da-z]+)")
_COMBINED_MODE_RE = re.compile(r"^mode (\d{6}),(\d{6})\.\.(\d{6})")

# Hunk headers
_HUNK_HEADER_RE = re.compile(r"^@@ -(\d+)(?:,\d+)? \+(\d+)(?:,\d+)? @@.*")
_COMBINED_HUNK_HEADER_RE = re.compile(
    r"^@@@ -(\d+)(?:,\d+)? -(\d+)(?:,\d+)? \+(\d+)(?:,\d+)? @@@.*"
)

# File starts
_GIT_DIFF_START_RE = re.compile(r'^diff --git "?([a-ciow]/.+)"? "?([a-ciow]/.+)"?')
_UNIX_BINARY_START_RE = re.compile(
    r'^Binary files "?([a-ciow]/.+)"? and "?([a-ciow]/.+)"? differ'
)

_QUOTED_NAME_RE = re.compile(r'^"?(.+?)"?$')
# e.g. "2016-10-25 11:37:14.000000000 +0200" after the path in plain diff -u output
_TIMESTAMP_RE = re.compile(r"\s+\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}(?:\.\d+)? [+-]\d{4}.*$")

BASE_DIFF_FILENAME_PREFIXES = ("a/", "b/", "i/", "w/", "c/", "o/")

_OLD_FILE_NAME_HEADER = "--- "
_NEW_FILE_NAME_HEADER = "+++ "
_HUNK_HEADER_PREFIX = "@@"
_NO_NEWLINE_MARKER = "\\ No newline at end of file"

_ADDED_PREFIXES = ("+",)
_DELETED_PREFIXES = ("-",)
_COMBINED_ADDED_PREFIXES = ("+ ", " +", "++")
_COMBINED_DELETED_PREFIXES = ("- ", " -", "--")


def get_extension(filename: str, language: str) -> str:
    """Return the extension of *filename*, or *language* when it has none."""
    if "." not in filename:
        return language
    return filename.rsplit(".", 1)[1]


def get_filename(
    line: str,
    line_prefix: Optional[str] = None,
    extra_prefix: Optional[str] = None,
) -> str:
    """Extract a path from a header line.

    Strips the header marker (``---`` / ``+++``), surrounding quotes, one of
    the ``a/ b/ i/ w/ c/ o/`` prefixes (or *extra_prefix*) and a trailing
    ``diff -u`` timestamp.
    """
    if line_prefix:
        m = re.match(rf'^{re.escape(line_prefix)} "?(.+?)"?$', line)
    else:
        m = _QUOTED_NAME_RE.match(line)
    filename = m.group(1) if m else ""

    prefixes = BASE_DIFF_FILENAME_PREFIXES + ((extra_prefix,) if extra_prefix else ())
    for prefix in prefixes:
        if filename.startswith(prefix):
            filename = filename[len(prefix):]
            break

    return _TIMESTAMP_RE.sub("", filename, count=1)


class HunkHeaderIndex:
    """Answers "is there a ---/+++/@@ triplet before the next ``diff`` line?".

    Positions are collected once per document so each lookup is a pair of
    binary searches instead of a forward scan.
    """

    def __init__(self, lines: Sequence[str]) -> None:
        self._diff_positions: List[int] = []
        self._triplet_positions: List[int] = []
        for idx, line in enumerate(lines):
            if line.startswith("diff"):
                self._diff_positions.append(idx)
        for idx in range(len(lines) - 2):
            if (
                lines[idx].startswith(_OLD_FILE_NAME_HEADER)
                and lines[idx + 1].startswith(_NEW_FILE_NAME_HEADER)
                and lines[idx + 2].startswith(_HUNK_HEADER_PREFIX)
            ):
                self._triplet_positions.append(idx)

    def exists_after(self, idx: int) -> bool:
        t = bisect.bisect_left(self._triplet_positions, idx)
        if t == len(self._triplet_positions):
            return False
        d = bisect.bisect_left(self._diff_positions, idx)
        if d == len(self._diff_positions):
            return True
        return self._triplet_positions[t] < self._diff_positions[d]


class _ParserState:
    """Scan state for one parse() call: the file and hunk being built."""

    def __init__(self) -> None:
        self.files: List[DiffFile] = []
        self.current_file: Optional[DiffFile] = None
        self.current_block: Optional[DiffBlock] = None
        self.old_line: Optional[int] = None
        self.old_line2: Optional[int] = None
        self.new_line: Optional[int] = None
        self.possible_old_name: Optional[str] = None
        self.possible_new_name: Optional[str] = None

    def save_block(self) -> None:
        if self.current_block is not None and self.current_file is not None:
            self.current_file.blocks.append(self.current_block)
        self.current_block = None

    def save_file(self) -> None:
        file = self.current_file
        if file is not None:
            if not file.old_name and self.possible_old_name:
                file.old_name = self.possible_old_name
            if not file.new_name and self.possible_new_name:
                file.new_name = self.possible_new_name
            if file.new_name:
                self.files.append(file)
            else:
                logger.debug("Dropping diff section without a file name")
        self.current_file = None
        self.possible_old_name = None
        self.possible_new_name = None

    def start_file(self) -> None:
        self.save_block()
        self.save_file()
        self.current_file = DiffFile()

    def start_block(self, line: str) -> None:
        self.save_block()
        file = self.current_file
        if file is None:
            return

        m = _HUNK_HEADER_RE.match(line)
        cm = None if m else _COMBINED_HUNK_HEADER_RE.match(line)
        if m:
            file.is_combined = False
            self.old_line = int(m.group(1))
            self.old_line2 = None
            self.new_line = int(m.group(2))
        elif cm:
            file.is_combined = True
            self.old_line = int(cm.group(1))
            self.old_line2 = int(cm.group(2))
            self.new_line = int(cm.group(3))
        else:
            if line.startswith(_HUNK_HEADER_PREFIX):
                logger.warning("Failed to parse hunk header, starting at 0: %r", line)
            file.is_combined = False
            self.old_line = 0
            self.old_line2 = None
            self.new_line = 0

        self.current_block = DiffBlock(
            old_start_line=self.old_line,
            old_start_line2=self.old_line2,
            new_start_line=self.new_line,
            header=line,
        )

    def create_line(self, line: str) -> None:
        file, block = self.current_file, self.current_block
        if file is None or block is None or self.old_line is None or self.new_line is None:
            return

        if file.is_combined:
            added, deleted = _COMBINED_ADDED_PREFIXES, _COMBINED_DELETED_PREFIXES
        else:
            added, deleted = _ADDED_PREFIXES, _DELETED_PREFIXES

        if line.startswith(added):
            file.added_lines += 1
            diff_line = DiffLine(LineType.INSERT, line, new_number=self.new_line)
            self.new_line += 1
        elif line.startswith(deleted):
            file.deleted_lines += 1
            diff_line = DiffLine(LineType.DELETE, line, old_number=self.old_line)
            self.old_line += 1
        else:
            diff_line = DiffLine(
                LineType.CONTEXT, line, old_number=self.old_line, new_number=self.new_line
            )
            self.old_line += 1
            self.new_line += 1

        block.lines.append(diff_line)


def _split_lines(diff_text: str) -> List[str]:
    normalized = (
        diff_text.replace(_NO_NEWLINE_MARKER, "").replace("\r\n", "\n").replace("\r", "\n")
    )
    return normalized.split("\n")


class DiffParser:
    """Parse unified diff text into DiffFile records.

    Usage::

        files = DiffParser(diff_text, ParserConfig(diff_max_changes=500)).parse()
    """

    def __init__(self, diff_text: str, config: Optional[ParserConfig] = None) -> None:
        self._lines = _split_lines(diff_text)
        self._config = config or ParserConfig()

    def parse(self) -> List[DiffFile]:
        """Return the files found in the diff, in input order."""
        lines = self._lines
        config = self._config
        state = _ParserState()
        hunk_index = HunkHeaderIndex(lines)
        total = len(lines)

        for idx, line in enumerate(lines):
            # --- Blank lines and unmerged path markers ---
            if not line or line.startswith("*"):
                continue

            prev_line = lines[idx - 1] if idx > 0 else None
            next_line = lines[idx + 1] if idx + 1 < total else None
            after_next_line = lines[idx + 2] if idx + 2 < total else None

            # --- diff --git / diff --combined → new file ---
            if line.startswith("diff --git") or line.startswith("diff --combined"):
                state.start_file()
                m = _GIT_DIFF_START_RE.match(line)
                if m:
                    state.possible_old_name = get_filename(m.group(1), None, config.src_prefix)
                    state.possible_new_name = get_filename(m.group(2), None, config.dst_prefix)
                state.current_file.is_git_diff = True
                continue

            # --- Binary marker in a plain (non-git) diff → new file ---
            if line.startswith("Binary files") and (
                state.current_file is None or not state.current_file.is_git_diff
            ):
                state.start_file()
                m = _UNIX_BINARY_START_RE.match(line) or _BINARY_FILES_RE.match(line)
                if m:
                    state.possible_old_name = get_filename(m.group(1), None, config.src_prefix)
                    state.possible_new_name = get_filename(m.group(2), None, config.dst_prefix)
                state.current_file.is_binary = True
                continue

            # --- Plain unified diff: ---/+++/@@ triplet starts a file ---
            if state.current_file is None or (
                not state.current_file.is_git_diff
                and line.startswith(_OLD_FILE_NAME_HEADER)
                and next_line is not None
                and next_line.startswith(_NEW_FILE_NAME_HEADER)
                and after_next_line is not None
                and after_next_line.startswith(_HUNK_HEADER_PREFIX)
            ):
                state.start_file()

            file = state.current_file

            # --- Too big: drop everything until the next file ---
            if file.is_too_big:
                continue

            too_many_changes = (
                config.diff_max_changes is not None
                and file.added_lines + file.deleted_lines > config.diff_max_changes
            )
            line_too_long = (
                config.diff_max_line_length is not None
                and len(line) > config.diff_max_line_length
            )
            if too_many_changes or line_too_long:
                logger.debug("Diff for %s is too big, collapsing", file.new_name or file.old_name)
                file.is_too_big = True
                file.added_lines = 0
                file.deleted_lines = 0
                file.blocks = []
                state.current_block = None
                state.start_block(config.too_big_message(len(state.files)))
                continue

            # --- File name headers (--- a/x followed by +++ b/x) ---
            if (
                line.startswith(_OLD_FILE_NAME_HEADER)
                and next_line is not None
                and next_line.startswith(_NEW_FILE_NAME_HEADER)
            ) or (
                line.startswith(_NEW_FILE_NAME_HEADER)
                and prev_line is not None
                and prev_line.startswith(_OLD_FILE_NAME_HEADER)
            ):
                if not file.old_name and line.startswith(_OLD_FILE_NAME_HEADER):
                    file.old_name = get_filename(line, "---", config.src_prefix)
                    file.language = get_extension(file.old_name, file.language)
                    continue
                if not file.new_name and line.startswith(_NEW_FILE_NAME_HEADER):
                    file.new_name = get_filename(line, "+++", config.dst_prefix)
                    file.language = get_extension(file.new_name, file.language)
                    continue

            # --- Hunk header, or implicit hunk on a fully named git file ---
            if line.startswith(_HUNK_HEADER_PREFIX) or (
                file.is_git_diff
                and file.old_name
                and file.new_name
                and state.current_block is None
            ):
                state.start_block(line)
                continue

            # --- Content lines ---
            if state.current_block is not None and line.startswith(("+", "-", " ")):
                state.create_line(line)
                continue

            self._parse_extended_header(line, idx, file, state, hunk_index)

        state.save_block()
        state.save_file()

        logger.debug("Parsed %d file(s) from %d line(s)", len(state.files), total)
        return state.files

    def _parse_extended_header(
        self,
        line: str,
        idx: int,
        file: DiffFile,
        state: _ParserState,
        hunk_index: HunkHeaderIndex,
    ) -> None:
        """Apply a git extended header line to *file*; unknown lines are ignored."""
        config = self._config

        if m := _OLD_MODE_RE.match(line):
            file.old_mode = FileMode.single(m.group(1))
        elif m := _NEW_MODE_RE.match(line):
            file.new_mode = m.group(1)
        elif m := _DELETED_FILE_MODE_RE.match(line):
            file.deleted_file_mode = m.group(1)
            file.is_deleted = True
        elif m := _NEW_FILE_MODE_RE.match(line):
            file.new_file_mode = m.group(1)
            file.is_new = True
        elif m := _COPY_FROM_RE.match(line):
            # An upcoming ---/+++ pair names the file more precisely
            if not hunk_index.exists_after(idx):
                file.old_name = m.group(1)
            file.is_copy = True
        elif m := _COPY_TO_RE.match(line):
            if not hunk_index.exists_after(idx):
                file.new_name = m.group(1)
            file.is_copy = True
        elif m := _RENAME_FROM_RE.match(line):
            if not hunk_index.exists_after(idx):
                file.old_name = m.group(1)
            file.is_rename = True
        elif m := _RENAME_TO_RE.match(line):
            if not hunk_index.exists_after(idx):
                file.new_name = m.group(1)
            file.is_rename = True
        elif m := _BINARY_FILES_RE.match(line):
            file.is_binary = True
            file.old_name = get_filename(m.group(1), None, config.src_prefix)
            file.new_name = get_filename(m.group(2), None, config.dst_prefix)
            state.start_block("Binary file")
        elif _BINARY_PATCH_RE.match(line):
            file.is_binary = True
            state.start_block(line)
        elif m := _SIMILARITY_RE.match(line):
            file.unchanged_percentage = int(m.group(1))
        elif m := _DISSIMILARITY_RE.match(line):
            file.changed_percentage = int(m.group(1))
        elif m := _INDEX_RE.match(line):
            file.checksum_before = Checksum.single(m.group(1))
            file.checksum_after = m.group(2)
            file.mode = m.group(3)
        elif m := _COMBINED_INDEX_RE.match(line):
            file.checksum_before = Checksum.of(m.group(2), m.group(3))
            file.checksum_after = m.group(1)
        elif m := _COMBINED_MODE_RE.match(line):
            file.old_mode = FileMode.of(m.group(2), m.group(3))
            file.new_mode = m.group(1)


def parse(diff_text: str, config: Optional[ParserConfig] = None) -> List[DiffFile]:
    """Parse *diff_text* into a list of DiffFile records."""
    return DiffParser(diff_text, config).parse()

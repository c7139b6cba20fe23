"""Helpers shared by the HTML renderers.

Escaping, prefix splitting, file naming and icons, line grouping, line
matching and word/char highlighting.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from difflib import SequenceMatcher
from enum import Enum
from typing import List, Set, Tuple

from diff2html.config.schema import ColorScheme, RenderConfig
from diff2html.git.models import DiffBlock, DiffFile, DiffLine, DiffLineParts, LineType
from diff2html.matching import match_lines, new_distance_fn, string_distance
from diff2html.output import templates

_SEPARATOR = "/"

_HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
    "/": "&#x2F;",
}

# Whitespace runs, words, or single punctuation characters
_WORD_TOKEN_RE = re.compile(r"\s+|\w+|[^\w\s]")

LineGroup = Tuple[List[DiffLine], List[DiffLine], List[DiffLine]]


class CSSLineClass(str, Enum):
    INSERTS = "d2h-ins"
    DELETES = "d2h-del"
    CONTEXT = "d2h-cntx"
    INFO = "d2h-info"
    INSERT_CHANGES = "d2h-ins d2h-change"
    DELETE_CHANGES = "d2h-del d2h-change"


@dataclass(frozen=True)
class HighlightedLines:
    old_line: DiffLineParts
    new_line: DiffLineParts


def escape_for_html(s: str) -> str:
    return "".join(_HTML_ESCAPES.get(c, c) for c in s)


def _prefix_length(is_combined: bool) -> int:
    return 2 if is_combined else 1


def deconstruct_line(line: str, is_combined: bool, escape: bool = True) -> DiffLineParts:
    """Split a raw diff line into its ``+``/``-``/space prefix and content."""
    split_at = _prefix_length(is_combined)
    prefix, content = line[:split_at], line[split_at:]
    return DiffLineParts(prefix=prefix, content=escape_for_html(content) if escape else content)


def _is_dev_null(name: str) -> bool:
    return "dev/null" in name


def filename_diff(file: DiffFile) -> str:
    """Display name for a file, collapsing a rename into ``dir/{old → new}/rest``."""
    old_name = file.old_name.replace("\\", "/")
    new_name = file.new_name.replace("\\", "/")

    if old_name == new_name or _is_dev_null(old_name) or _is_dev_null(new_name):
        return old_name if _is_dev_null(new_name) else new_name

    old_parts = old_name.split(_SEPARATOR)
    new_parts = new_name.split(_SEPARATOR)
    i, j, k = 0, len(old_parts) - 1, len(new_parts) - 1

    prefix_paths: List[str] = []
    while i < j and i < k and old_parts[i] == new_parts[i]:
        prefix_paths.append(new_parts[i])
        i += 1

    suffix_paths: List[str] = []
    while j > i and k > i and old_parts[j] == new_parts[k]:
        suffix_paths.insert(0, new_parts[k])
        j -= 1
        k -= 1

    prefix = _SEPARATOR.join(prefix_paths)
    suffix = _SEPARATOR.join(suffix_paths)
    old_rest = _SEPARATOR.join(old_parts[i: j + 1])
    new_rest = _SEPARATOR.join(new_parts[i: k + 1])

    if prefix and suffix:
        return f"{prefix}/{{{old_rest} → {new_rest}}}/{suffix}"
    if prefix:
        return f"{prefix}/{{{old_rest} → {new_rest}}}"
    if suffix:
        return f"{{{old_rest} → {new_rest}}}/{suffix}"
    return f"{old_name} → {new_name}"


def _hash_code(text: str) -> int:
    """32-bit rolling string hash, stable across runs and platforms."""
    h = 0
    for ch in text:
        h = ((h << 5) - h + ord(ch)) & 0xFFFFFFFF
    return h - (1 << 32) if h & 0x80000000 else h


def get_html_id(file: DiffFile) -> str:
    """Anchor id shared by the file list entry and the file's diff."""
    return f"d2h-{abs(_hash_code(filename_diff(file))) % 1_000_000:06d}"


def get_file_icon(file: DiffFile) -> str:
    if file.is_rename or file.is_copy:
        return "file-renamed"
    if file.is_new:
        return "file-added"
    if file.is_deleted:
        return "file-deleted"
    if file.new_name != file.old_name:
        return "file-renamed"
    return "file-changed"


def render_file_path(file: DiffFile) -> str:
    """File header: status icon, display name and status tag."""
    icon = get_file_icon(file)
    return templates.render(
        "generic-file-path",
        fileDiffName=filename_diff(file),
        fileIcon=templates.render(f"icon-{icon}"),
        fileTag=templates.render(f"tag-{icon}"),
    )


def color_scheme_to_css(color_scheme: ColorScheme) -> str:
    return {
        "dark": "d2h-dark-color-scheme",
        "auto": "d2h-auto-color-scheme",
    }.get(color_scheme, "d2h-light-color-scheme")


def to_css_class(line_type: LineType) -> CSSLineClass:
    return {
        LineType.CONTEXT: CSSLineClass.CONTEXT,
        LineType.INSERT: CSSLineClass.INSERTS,
        LineType.DELETE: CSSLineClass.DELETES,
    }[line_type]


def group_lines(block: DiffBlock) -> List[LineGroup]:
    """Split a hunk into ``(context, deleted, inserted)`` runs.

    A context line is a group of its own; a run of deletions followed by
    insertions forms one changed group.
    """
    groups: List[LineGroup] = []
    old_lines: List[DiffLine] = []
    new_lines: List[DiffLine] = []

    for line in block.lines:
        if (line.line_type != LineType.INSERT and new_lines) or (
            line.line_type == LineType.CONTEXT and old_lines
        ):
            groups.append(([], old_lines, new_lines))
            old_lines, new_lines = [], []

        if line.line_type == LineType.CONTEXT:
            groups.append(([line], [], []))
        elif line.line_type == LineType.INSERT and not old_lines:
            groups.append(([], [], [line]))
        elif line.line_type == LineType.INSERT:
            new_lines.append(line)
        else:
            old_lines.append(line)

    if old_lines or new_lines:
        groups.append(([], old_lines, new_lines))
    return groups


def match_changed_lines(
    old_lines: List[DiffLine],
    new_lines: List[DiffLine],
    is_combined: bool,
    config: RenderConfig,
) -> List[Tuple[List[DiffLine], List[DiffLine]]]:
    """Pair similar deleted/inserted lines when line matching is enabled.

    Blocks past ``matching_max_comparisons`` or with a line longer than
    ``max_line_size_in_block_for_comparison`` are returned as one group.
    """
    if config.matching == "none" or not old_lines or not new_lines:
        return [(old_lines, new_lines)]

    comparisons = len(old_lines) * len(new_lines)
    max_line_size = max(len(line.content) for line in (*old_lines, *new_lines))
    if (
        comparisons >= config.matching_max_comparisons
        or max_line_size >= config.max_line_size_in_block_for_comparison
    ):
        return [(old_lines, new_lines)]

    distance = new_distance_fn(lambda line: deconstruct_line(line.content, is_combined, False).content)
    return match_lines(old_lines, new_lines, distance)


def _tokenize(content: str, diff_style: str) -> List[str]:
    if diff_style == "char":
        return list(content)
    return _WORD_TOKEN_RE.findall(content)


def _changed_word_pairs(
    removed: List[Tuple[int, str]],
    added: List[Tuple[int, str]],
    threshold: float,
) -> Set[Tuple[str, int]]:
    """Indices of removed/added parts that are close enough to be one edit."""
    distance = new_distance_fn(lambda part: part[1])
    changed: Set[Tuple[str, int]] = set()
    for old_group, new_group in match_lines(removed, added, distance):
        if len(old_group) == 1 and len(new_group) == 1:
            if string_distance(old_group[0][1], new_group[0][1]) < threshold:
                changed.add(("del", old_group[0][0]))
                changed.add(("ins", new_group[0][0]))
    return changed


def diff_highlight(
    diff_line1: str,
    diff_line2: str,
    is_combined: bool,
    config: RenderConfig,
) -> HighlightedLines:
    """Wrap the differing parts of two lines in ``<del>``/``<ins>`` tags.

    In ``words`` matching mode, removed/added parts that closely resemble
    each other are tagged ``class="d2h-change"``.
    """
    line1 = deconstruct_line(diff_line1, is_combined, escape=False)
    line2 = deconstruct_line(diff_line2, is_combined, escape=False)

    if (
        len(line1.content) > config.max_line_length_highlight
        or len(line2.content) > config.max_line_length_highlight
    ):
        return HighlightedLines(
            old_line=DiffLineParts(line1.prefix, escape_for_html(line1.content)),
            new_line=DiffLineParts(line2.prefix, escape_for_html(line2.content)),
        )

    old_tokens = _tokenize(line1.content, config.diff_style)
    new_tokens = _tokenize(line2.content, config.diff_style)
    opcodes = SequenceMatcher(None, old_tokens, new_tokens, autojunk=False).get_opcodes()

    # (kind, text) where kind is "equal", "del" or "ins"
    parts: List[Tuple[str, str]] = []
    for tag, i1, i2, j1, j2 in opcodes:
        if tag == "equal":
            parts.append(("equal", "".join(old_tokens[i1:i2])))
            continue
        if i2 > i1:
            parts.append(("del", "".join(old_tokens[i1:i2])))
        if j2 > j1:
            parts.append(("ins", "".join(new_tokens[j1:j2])))

    changed: Set[Tuple[str, int]] = set()
    if config.matching == "words":
        removed = [(idx, text) for idx, (kind, text) in enumerate(parts) if kind == "del"]
        added = [(idx, text) for idx, (kind, text) in enumerate(parts) if kind == "ins"]
        changed = _changed_word_pairs(removed, added, config.match_words_threshold)

    old_html: List[str] = []
    new_html: List[str] = []
    for idx, (kind, text) in enumerate(parts):
        escaped = escape_for_html(text)
        if kind == "equal":
            old_html.append(escaped)
            new_html.append(escaped)
            continue
        attr = ' class="d2h-change"' if (kind, idx) in changed else ""
        if kind == "del":
            old_html.append(f"<del{attr}>{escaped}</del>")
        else:
            new_html.append(f"<ins{attr}>{escaped}</ins>")

    return HighlightedLines(
        old_line=DiffLineParts(line1.prefix, "".join(old_html)),
        new_line=DiffLineParts(line2.prefix, "".join(new_html)),
    )

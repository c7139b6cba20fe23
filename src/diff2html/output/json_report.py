"""JSON serialization of parsed diffs.

Keys are lowerCamelCase and unset optional fields are left out. ``oldMode``
and ``checksumBefore`` are a bare string for ordinary diffs and an array of
strings for combined diffs.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Type

from diff2html.git.models import Checksum, DiffBlock, DiffFile, DiffLine, FileMode, LineType


class SerializationError(Exception):
    """Raised when JSON cannot be produced or does not describe a diff."""


# (attribute, JSON key) for optional scalar metadata, in output order
_OPTIONAL_FIELDS = (
    ("new_mode", "newMode"),
    ("deleted_file_mode", "deletedFileMode"),
    ("new_file_mode", "newFileMode"),
    ("is_deleted", "isDeleted"),
    ("is_new", "isNew"),
    ("is_copy", "isCopy"),
    ("is_rename", "isRename"),
    ("is_binary", "isBinary"),
    ("is_too_big", "isTooBig"),
    ("unchanged_percentage", "unchangedPercentage"),
    ("changed_percentage", "changedPercentage"),
    ("checksum_after", "checksumAfter"),
    ("mode", "mode"),
)


def _variant_to_json(variant) -> Any:
    return list(variant.values) if variant.multiple else variant.value


def _variant_from_json(cls: Type, value: Any):
    if isinstance(value, str):
        return cls.single(value)
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return cls.of(*value)
    raise SerializationError(f"Expected a string or list of strings, got {value!r}")


def _line_to_dict(line: DiffLine) -> Dict[str, Any]:
    d: Dict[str, Any] = {"type": line.line_type.value, "content": line.content}
    if line.old_number is not None:
        d["oldNumber"] = line.old_number
    if line.new_number is not None:
        d["newNumber"] = line.new_number
    return d


def _block_to_dict(block: DiffBlock) -> Dict[str, Any]:
    d: Dict[str, Any] = {"oldStartLine": block.old_start_line}
    if block.old_start_line2 is not None:
        d["oldStartLine2"] = block.old_start_line2
    d["newStartLine"] = block.new_start_line
    d["header"] = block.header
    d["lines"] = [_line_to_dict(line) for line in block.lines]
    return d


def to_dict(file: DiffFile) -> Dict[str, Any]:
    """Convert a DiffFile to a JSON-serialisable dict."""
    d: Dict[str, Any] = {
        "oldName": file.old_name,
        "newName": file.new_name,
        "addedLines": file.added_lines,
        "deletedLines": file.deleted_lines,
        "isCombined": file.is_combined,
        "isGitDiff": file.is_git_diff,
        "language": file.language,
        "blocks": [_block_to_dict(b) for b in file.blocks],
    }
    if file.old_mode is not None:
        d["oldMode"] = _variant_to_json(file.old_mode)
    if file.checksum_before is not None:
        d["checksumBefore"] = _variant_to_json(file.checksum_before)
    for attr, key in _OPTIONAL_FIELDS:
        value = getattr(file, attr)
        if value is not None:
            d[key] = value
    return d


def to_list(files: List[DiffFile]) -> List[Dict[str, Any]]:
    return [to_dict(f) for f in files]


def render(files: List[DiffFile], *, pretty: bool = False) -> str:
    """Return the JSON document for *files*."""
    try:
        return json.dumps(to_list(files), indent=2 if pretty else None, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Failed to serialize diff: {exc}") from exc


def _require(d: Dict[str, Any], key: str, kind: type) -> Any:
    if key not in d:
        raise SerializationError(f"Missing required field {key!r}")
    value = d[key]
    # bool is an int subclass; reject it where a number is expected
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise SerializationError(f"Field {key!r} has wrong type: {value!r}")
    return value


def _optional_int(d: Dict[str, Any], key: str) -> Optional[int]:
    if d.get(key) is None:
        return None
    return _require(d, key, int)


def _line_from_dict(d: Dict[str, Any]) -> DiffLine:
    try:
        line_type = LineType(_require(d, "type", str))
    except ValueError as exc:
        raise SerializationError(f"Unknown line type: {d.get('type')!r}") from exc
    return DiffLine(
        line_type=line_type,
        content=_require(d, "content", str),
        old_number=_optional_int(d, "oldNumber"),
        new_number=_optional_int(d, "newNumber"),
    )


def _block_from_dict(d: Dict[str, Any]) -> DiffBlock:
    return DiffBlock(
        old_start_line=_require(d, "oldStartLine", int),
        old_start_line2=_optional_int(d, "oldStartLine2"),
        new_start_line=_require(d, "newStartLine", int),
        header=_require(d, "header", str),
        lines=[_line_from_dict(line) for line in _require(d, "lines", list)],
    )


def from_dict(d: Dict[str, Any]) -> DiffFile:
    """Rebuild a DiffFile from the dict produced by :func:`to_dict`."""
    if not isinstance(d, dict):
        raise SerializationError(f"Expected an object, got {type(d).__name__}")
    file = DiffFile(
        old_name=_require(d, "oldName", str),
        new_name=_require(d, "newName", str),
        added_lines=_require(d, "addedLines", int),
        deleted_lines=_require(d, "deletedLines", int),
        is_combined=_require(d, "isCombined", bool),
        is_git_diff=_require(d, "isGitDiff", bool),
        language=_require(d, "language", str),
        blocks=[_block_from_dict(b) for b in _require(d, "blocks", list)],
    )
    if d.get("oldMode") is not None:
        file.old_mode = _variant_from_json(FileMode, d["oldMode"])
    if d.get("checksumBefore") is not None:
        file.checksum_before = _variant_from_json(Checksum, d["checksumBefore"])
    for attr, key in _OPTIONAL_FIELDS:
        if d.get(key) is not None:
            setattr(file, attr, d[key])
    return file


def loads(text: str) -> List[DiffFile]:
    """Parse a JSON document produced by :func:`render`."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SerializationError(f"Invalid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise SerializationError("Expected a JSON array of files")
    return [from_dict(item) for item in data]

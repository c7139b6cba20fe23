"""Tests for JSON serialization of parsed diffs."""

import json

import pytest

import diff2html
from diff2html.git.diff_parser import parse
from diff2html.output import json_report
from diff2html.output.json_report import SerializationError


class TestJsonShape:
    def test_valid_json(self, sample_diff_simple):
        data = json.loads(json_report.render(parse(sample_diff_simple)))
        assert isinstance(data, list)
        assert len(data) == 1

    def test_camel_case_keys(self, sample_diff_simple):
        entry = json_report.to_dict(parse(sample_diff_simple)[0])
        for key in ("oldName", "newName", "addedLines", "deletedLines", "isCombined",
                    "isGitDiff", "language", "blocks", "checksumBefore", "checksumAfter"):
            assert key in entry
        assert "old_name" not in entry

    def test_unset_fields_omitted(self, sample_diff_simple):
        entry = json_report.to_dict(parse(sample_diff_simple)[0])
        for key in ("isNew", "isDeleted", "isRename", "isCopy", "isBinary", "isTooBig",
                    "oldMode", "newMode", "mode", "unchangedPercentage"):
            assert key not in entry

    def test_block_and_line_shape(self, sample_diff_multi_file):
        entry = json_report.to_dict(parse(sample_diff_multi_file)[0])
        block = entry["blocks"][0]
        assert block["oldStartLine"] == 1
        assert block["newStartLine"] == 1
        assert "oldStartLine2" not in block
        assert block["header"] == "@@ -1,3 +1,3 @@"
        deleted, inserted = block["lines"][1], block["lines"][2]
        assert deleted == {"type": "delete", "content": '-print("hello")', "oldNumber": 2}
        assert inserted == {"type": "insert", "content": '+print("hello world")', "newNumber": 2}
        assert block["lines"][0]["type"] == "context"

    def test_single_checksum_is_string(self, sample_diff_simple):
        entry = json_report.to_dict(parse(sample_diff_simple)[0])
        assert entry["checksumBefore"] == "0000001"
        assert entry["checksumAfter"] == "0ddf2ba"

    def test_combined_checksum_is_list(self, sample_diff_combined):
        entry = json_report.to_dict(parse(sample_diff_combined)[0])
        assert entry["checksumBefore"] == ["cc95eb0", "4866510"]
        assert entry["blocks"][0]["oldStartLine2"] == 98

    def test_old_mode_is_string(self, sample_diff_mode_change):
        entry = json_report.to_dict(parse(sample_diff_mode_change)[0])
        assert entry["oldMode"] == "100644"
        assert entry["newMode"] == "100755"

    def test_pretty(self, sample_diff_simple):
        files = parse(sample_diff_simple)
        assert "\n  " in json_report.render(files, pretty=True)
        assert "\n" not in json_report.render(files)

    def test_non_ascii_kept(self):
        diff = "--- a/x.txt\n+++ b/x.txt\n@@ -1 +1 @@\n-café\n+naïve\n"
        assert "naïve" in json_report.render(parse(diff))

    def test_empty_list(self):
        assert json_report.render([]) == "[]"


class TestRoundTrip:
    @pytest.mark.parametrize(
        "fixture",
        [
            "sample_diff_multi_file",
            "sample_diff_combined",
            "sample_diff_rename_with_changes",
            "sample_diff_binary",
            "sample_diff_mode_change",
        ],
    )
    def test_loads_restores_files(self, fixture, request):
        files = parse(request.getfixturevalue(fixture))
        assert json_report.loads(json_report.render(files)) == files

    def test_top_level_json_api(self, sample_diff_simple):
        assert diff2html.json(sample_diff_simple) == json_report.render(parse(sample_diff_simple))


class TestDeserializationErrors:
    def test_invalid_json(self):
        with pytest.raises(SerializationError, match="Invalid JSON"):
            json_report.loads("{not json")

    def test_not_a_list(self):
        with pytest.raises(SerializationError, match="array"):
            json_report.loads('{"oldName": "x"}')

    def test_missing_field(self):
        with pytest.raises(SerializationError, match="newName"):
            json_report.loads('[{"oldName": "x"}]')

    def test_wrong_type(self, sample_diff_simple):
        data = json_report.to_list(parse(sample_diff_simple))
        data[0]["addedLines"] = True
        with pytest.raises(SerializationError, match="addedLines"):
            json_report.loads(json.dumps(data))

    def test_unknown_line_type(self, sample_diff_simple):
        data = json_report.to_list(parse(sample_diff_simple))
        data[0]["blocks"][0]["lines"][0]["type"] = "moved"
        with pytest.raises(SerializationError, match="Unknown line type"):
            json_report.loads(json.dumps(data))

    def test_bad_checksum(self, sample_diff_simple):
        data = json_report.to_list(parse(sample_diff_simple))
        data[0]["checksumBefore"] = 42
        with pytest.raises(SerializationError):
            json_report.loads(json.dumps(data))

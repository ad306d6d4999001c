"""Tests for filler-file generation."""

import os
import re

import pytest

from fileserver.config import FILLER_PATTERN
from fileserver.errors import BadRequestError, InternalError
from fileserver.services import generator

MB = 1024 * 1024


def expected_size(size_mb):
    return (size_mb * MB) // 36 * 36


class TestSizing:
    """Tests for size parsing and file planning."""

    @pytest.mark.parametrize("raw,expected", [("0", 0), ("7", 7), ("25", 25), ("+3", 3), ("-15", -15)])
    def test_parse_valid_sizes(self, raw, expected):
        assert generator.parse_size_mb(raw) == expected

    @pytest.mark.parametrize("raw", ["", "abc", "2.5", " 5", "5 ", "1_0", "--1", "٣"])
    def test_parse_rejects_invalid_sizes(self, raw):
        with pytest.raises(BadRequestError, match="Invalid size value"):
            generator.parse_size_mb(raw)

    def test_plan_full_files_and_remainder(self):
        plan = generator.plan_files("/data", 25, "abc123")

        assert plan == [
            (os.path.join("/data", "abc123_file_1.txt"), 10),
            (os.path.join("/data", "abc123_file_2.txt"), 10),
            (os.path.join("/data", "abc123_file_last.txt"), 5),
        ]

    def test_plan_exact_multiple_has_no_last_file(self):
        plan = generator.plan_files("d", 20, "p")

        assert [os.path.basename(path) for path, _ in plan] == ["p_file_1.txt", "p_file_2.txt"]

    def test_plan_zero_is_empty(self):
        assert generator.plan_files("d", 0, "p") == []

    @pytest.mark.parametrize("size_mb", [-1, -5, -25])
    def test_plan_negative_is_empty(self, size_mb):
        assert generator.plan_files("d", size_mb, "p") == []

    def test_filler_is_whole_pattern_repeats(self):
        content = generator.filler_content(1)

        assert len(FILLER_PATTERN) == 36
        assert len(content) == expected_size(1)
        assert len(content) < MB
        assert content[:36] == FILLER_PATTERN
        assert content == FILLER_PATTERN * (len(content) // 36)


class TestGenerateFiles:
    """Tests for generate_files and /generateFiles."""

    def test_api_generates_full_and_remainder_files(self, client, tmp_path):
        resp = client.post("/generateFiles", data={"dirPath": str(tmp_path), "sizeInMB": "25"})

        assert resp.status_code == 200
        assert resp.json()["message"] == "Files generated successfully"
        assert resp.json()["data"] is None

        names = sorted(os.listdir(tmp_path))
        assert len(names) == 3
        prefixes = {name.split("_file_")[0] for name in names}
        assert len(prefixes) == 1
        prefix = prefixes.pop()
        assert re.fullmatch(r"[0-9a-f]{32}", prefix)

        assert (tmp_path / f"{prefix}_file_1.txt").stat().st_size == expected_size(10)
        assert (tmp_path / f"{prefix}_file_2.txt").stat().st_size == expected_size(10)
        assert (tmp_path / f"{prefix}_file_last.txt").stat().st_size == expected_size(5)

    def test_api_remainder_only(self, client, tmp_path):
        resp = client.post("/generateFiles", data={"dirPath": str(tmp_path), "sizeInMB": "7"})

        assert resp.status_code == 200
        names = os.listdir(tmp_path)
        assert len(names) == 1
        assert names[0].endswith("_file_last.txt")
        assert (tmp_path / names[0]).stat().st_size == expected_size(7)

    def test_api_non_integer_size_writes_nothing(self, client, tmp_path):
        resp = client.post("/generateFiles", data={"dirPath": str(tmp_path), "sizeInMB": "ten"})

        assert resp.status_code == 400
        assert resp.text == "Invalid size value"
        assert os.listdir(tmp_path) == []

    def test_api_negative_size_succeeds_without_files(self, client, tmp_path):
        resp = client.post("/generateFiles", data={"dirPath": str(tmp_path), "sizeInMB": "-25"})

        assert resp.status_code == 200
        assert resp.json()["message"] == "Files generated successfully"
        assert os.listdir(tmp_path) == []

    def test_api_reads_fields_from_query_string(self, client, tmp_path):
        resp = client.post("/generateFiles", params={"dirPath": str(tmp_path), "sizeInMB": "3"})

        assert resp.status_code == 200
        assert len(os.listdir(tmp_path)) == 1

    def test_api_missing_directory_is_internal_error(self, client, tmp_path):
        resp = client.post("/generateFiles", data={"dirPath": str(tmp_path / "absent"), "sizeInMB": "1"})

        assert resp.status_code == 500
        assert not (tmp_path / "absent").exists()

    def test_api_missing_dir_path_is_bad_request(self, client):
        resp = client.post("/generateFiles", data={"sizeInMB": "1"})

        assert resp.status_code == 400

    def test_first_failure_stops_generation(self, tmp_path, monkeypatch):
        calls = []

        def failing_write(path, data):
            calls.append(path)
            if len(calls) == 2:
                raise OSError(28, "No space left on device")
            with open(path, "wb") as f:
                f.write(b"x")

        monkeypatch.setattr(generator, "write_bytes", failing_write)
        monkeypatch.setattr(generator, "filler_content", lambda size_mb: b"")

        with pytest.raises(InternalError, match="No space left on device"):
            generator.generate_files(str(tmp_path), 35)

        assert len(calls) == 2
        assert os.listdir(tmp_path) == [os.path.basename(calls[0])]

    def test_returns_written_paths(self, tmp_path, monkeypatch):
        monkeypatch.setattr(generator, "generate_prefix", lambda: "fixed")

        written = generator.generate_files(str(tmp_path), 12)

        assert written == [
            os.path.join(str(tmp_path), "fixed_file_1.txt"),
            os.path.join(str(tmp_path), "fixed_file_last.txt"),
        ]

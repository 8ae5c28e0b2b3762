"""
Unit tests for filesystem helpers.
"""
import os
import pytest

from recordstore.utils.fs_utils import is_file_in_path, read_file_or_none, render_path


@pytest.mark.unit
class TestFsUtils:
    def test_read_file_or_none_missing(self, tmp_path):
        assert read_file_or_none(tmp_path / "missing.jsonl") is None

    def test_read_file_or_none_existing(self, tmp_path):
        path = tmp_path / "a.jsonl"
        path.write_text("héllo", encoding="utf-8")

        assert read_file_or_none(path) == "héllo"

    def test_read_file_or_none_propagates_other_errors(self, tmp_path):
        with pytest.raises(OSError):
            read_file_or_none(tmp_path)

    def test_is_file_in_path(self, tmp_path):
        assert is_file_in_path(tmp_path, tmp_path / "a.jsonl")
        assert is_file_in_path(tmp_path, tmp_path / "sub" / "a.jsonl")
        assert not is_file_in_path(tmp_path, tmp_path / ".." / "a.jsonl")
        assert not is_file_in_path(tmp_path, tmp_path)

    def test_render_path_shortens_home(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))

        assert render_path(tmp_path / "stores") == "~" + os.sep + "stores"
        assert render_path("/elsewhere/stores") == "/elsewhere/stores"

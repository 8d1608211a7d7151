"""Tests for gd_backup.manifest."""

import json

import pytest

from gd_backup.manifest import load_manifest, manifest_path, save_manifest


class TestManifest:
    def test_missing_file_returns_none(self, tmp_path):
        assert load_manifest(tmp_path) is None

    def test_round_trip(self, tmp_path):
        data = {
            "SaveFiles/CCGameManager.dat": "AB" * 32,
            "SaveFiles/sub/CCLocalLevels.dat": "CD" * 32,
        }
        save_manifest(data, tmp_path)
        assert load_manifest(tmp_path) == data

    def test_written_as_checksums_json(self, tmp_path):
        path = save_manifest({"SaveFiles/a.dat": "00"}, tmp_path)
        assert path == tmp_path / "checksums.json"
        assert path == manifest_path(tmp_path)

    def test_pretty_printed_and_ordered(self, tmp_path):
        data = {"SaveFiles/z.dat": "01", "SaveFiles/a.dat": "02"}
        path = save_manifest(data, tmp_path)
        text = path.read_text("utf-8")
        assert "\n  " in text
        assert list(json.loads(text)) == ["SaveFiles/z.dat", "SaveFiles/a.dat"]

    def test_creates_snapshot_dir_if_absent(self, tmp_path):
        nested = tmp_path / "sub" / "dir"
        save_manifest({}, nested)
        assert (nested / "checksums.json").exists()

    def test_malformed_json_raises(self, tmp_path):
        (tmp_path / "checksums.json").write_text("{not json", "utf-8")
        with pytest.raises(json.JSONDecodeError):
            load_manifest(tmp_path)

    def test_wrong_shape_raises(self, tmp_path):
        (tmp_path / "checksums.json").write_text('["a", "b"]', "utf-8")
        with pytest.raises(ValueError, match="mapping"):
            load_manifest(tmp_path)

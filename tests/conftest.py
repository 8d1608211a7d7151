"""Shared test fixtures."""

import pytest

from gd_backup.config import Config


@pytest.fixture
def save_dir(tmp_path):
    """Save tree with one progress file and one media asset."""
    d = tmp_path / "save"
    d.mkdir()
    (d / "progress.dat").write_bytes(b"AAAA")
    (d / "bg.png").write_bytes(b"XYZ")
    return d


@pytest.fixture
def assets_dir(tmp_path):
    """Program-files tree with a nested folder."""
    d = tmp_path / "program"
    (d / "Resources").mkdir(parents=True)
    (d / "GeometryDash.exe").write_bytes(b"MZ-binary")
    (d / "Resources" / "music.ogg").write_bytes(b"ogg-data")
    return d


@pytest.fixture
def config(tmp_path, save_dir, assets_dir):
    return Config(
        save_dir=save_dir,
        assets_dir=assets_dir,
        backup_root=tmp_path / "backups",
    )

"""Checksum manifest persistence (load/save)."""

import json
from pathlib import Path

from .constants import MANIFEST_NAME


def manifest_path(snapshot_dir: Path) -> Path:
    return snapshot_dir / MANIFEST_NAME


def load_manifest(snapshot_dir: Path) -> dict[str, str] | None:
    """Load the manifest of *snapshot_dir*, or ``None`` if it has none.

    A manifest that is not a JSON object of strings raises ``ValueError``.
    """
    manifest_file = manifest_path(snapshot_dir)
    if not manifest_file.exists():
        return None
    data = json.loads(manifest_file.read_text("utf-8"))
    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in data.items()
    ):
        raise ValueError(
            f"{manifest_file} is not a mapping of paths to digests"
        )
    return data


def save_manifest(manifest: dict[str, str], snapshot_dir: Path) -> Path:
    """Write *manifest* into *snapshot_dir* and return the file path."""
    snapshot_dir.mkdir(parents=True, exist_ok=True)
    manifest_file = manifest_path(snapshot_dir)
    manifest_file.write_text(
        json.dumps(manifest, indent=2, ensure_ascii=False) + "\n", "utf-8"
    )
    return manifest_file

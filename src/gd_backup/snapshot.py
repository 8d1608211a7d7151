"""Snapshot orchestration: program-files copy, save-tree walk, manifest."""

import logging
import os
import shutil
from datetime import datetime
from pathlib import Path
from typing import Iterator

from .assets import sync_asset
from .config import Config
from .constants import (
    ASSET_POOL_PARTS,
    PROGRAM_SUBDIR,
    PROGRESS_EXTENSION,
    SAVE_SUBDIR,
    SNAPSHOT_PREFIX,
    STAMP_FORMAT,
)
from .hashing import compute_hash
from .manifest import save_manifest

log = logging.getLogger("gd_backup")


def new_stamp(now: datetime | None = None) -> str:
    return (now or datetime.now()).strftime(STAMP_FORMAT)


def snapshot_dir_name(stamp: str) -> str:
    return f"{SNAPSHOT_PREFIX}{stamp}"


def asset_pool_dir(backup_root: Path) -> Path:
    return backup_root.joinpath(*ASSET_POOL_PARTS)


def is_progress_file(path: Path) -> bool:
    """Return True if *path* is a small save-state file (case-insensitive)."""
    return path.suffix.lower() == PROGRESS_EXTENSION


def _walk(root: Path) -> Iterator[tuple[str, list[str], list[str]]]:
    """``os.walk`` that follows directory symlinks and errors on cycles."""

    def _raise(exc: OSError) -> None:
        raise exc

    for dirpath, dirnames, filenames in os.walk(
        root, onerror=_raise, followlinks=True,
    ):
        here = os.path.realpath(dirpath)
        for name in dirnames:
            target = os.path.realpath(os.path.join(dirpath, name))
            if here == target or here.startswith(target + os.sep):
                raise OSError(
                    f"Symlink loop at {os.path.join(dirpath, name)} -> {target}"
                )
        dirnames.sort()
        yield dirpath, dirnames, sorted(filenames)


def iter_files(root: Path) -> Iterator[Path]:
    """Yield every file below *root*, depth first.

    Directory symlinks are followed.  Raises ``FileNotFoundError`` if
    *root* is not a directory.
    """
    if not root.is_dir():
        raise FileNotFoundError(f"Source directory not found: {root}")

    for dirpath, _, filenames in _walk(root):
        for name in filenames:
            yield Path(dirpath) / name


def copy_tree(src: Path, dest: Path) -> int:
    """Mirror *src* into *dest*, overwriting existing files.

    Every subdirectory is created before any file is copied.
    Returns the number of files copied.
    """
    if not src.is_dir():
        raise FileNotFoundError(f"Source directory not found: {src}")

    dest.mkdir(parents=True, exist_ok=True)
    for dirpath, _, _ in _walk(src):
        (dest / Path(dirpath).relative_to(src)).mkdir(
            parents=True, exist_ok=True
        )

    files = list(iter_files(src))
    for i, file in enumerate(files, 1):
        rel = file.relative_to(src)
        target = dest / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(file, target)
        log.info("  [%d/%d] %s", i, len(files), rel.as_posix())
    return len(files)


def build_snapshot(
    save_dir: Path,
    assets_dir: Path,
    snapshot_dir: Path,
    pool_dir: Path,
) -> tuple[dict[str, str], dict[str, int]]:
    """Populate *snapshot_dir* and update the asset pool.

    Progress files are copied into the snapshot and hashed from the copy;
    every other save file is deduplicated into *pool_dir*.
    Returns ``(manifest, stats)``.  Any I/O error aborts the run.
    """
    program_snap_dir = snapshot_dir / PROGRAM_SUBDIR
    save_snap_dir = snapshot_dir / SAVE_SUBDIR
    for d in (program_snap_dir, save_snap_dir, pool_dir):
        d.mkdir(parents=True, exist_ok=True)

    stats = {
        "program_files": 0,
        "progress_files": 0,
        "assets_copied": 0,
        "assets_skipped": 0,
    }
    manifest: dict[str, str] = {}

    log.info("Copying program files from %s", assets_dir)
    stats["program_files"] = copy_tree(assets_dir, program_snap_dir)

    log.info("Scanning save directory %s", save_dir)
    for file in iter_files(save_dir):
        rel = file.relative_to(save_dir)

        if is_progress_file(file):
            dest = save_snap_dir / rel
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(file, dest)

            # Hash the copy so verification also catches copy corruption
            key = (Path(SAVE_SUBDIR) / rel).as_posix()
            manifest[key] = compute_hash(dest)
            stats["progress_files"] += 1
            log.info("  ok %s", rel.as_posix())
            continue

        if sync_asset(file, pool_dir / rel):
            stats["assets_copied"] += 1
            log.info("  asset copied: %s", rel.as_posix())
        else:
            stats["assets_skipped"] += 1

    return manifest, stats


def run_snapshot(
    config: Config,
    *,
    stamp: str | None = None,
) -> tuple[Path, dict[str, str], dict[str, int]]:
    """Take one snapshot under ``config.backup_root``.

    Returns ``(snapshot_dir, manifest, stats)``.  A run that fails part way
    leaves the partial snapshot on disk without a manifest.  Raises
    ``FileExistsError`` if the snapshot folder already exists.
    """
    snapshot_dir = config.backup_root / snapshot_dir_name(stamp or new_stamp())
    pool_dir = asset_pool_dir(config.backup_root)

    # Existing snapshots are never written into
    snapshot_dir.mkdir(parents=True, exist_ok=False)

    manifest, stats = build_snapshot(
        config.save_dir, config.assets_dir, snapshot_dir, pool_dir,
    )
    save_manifest(manifest, snapshot_dir)

    log.info(
        "Snapshot finished - program files: %d, progress files: %d, "
        "assets copied: %d, assets unchanged: %d",
        stats["program_files"], stats["progress_files"],
        stats["assets_copied"], stats["assets_skipped"],
    )
    log.info("  program files : %s", snapshot_dir / PROGRAM_SUBDIR)
    log.info("  asset pool    : %s", pool_dir)
    log.info("  snapshot root : %s", snapshot_dir)

    return snapshot_dir, manifest, stats

"""Re-verification of a snapshot against its checksum manifest."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .constants import MANIFEST_NAME
from .hashing import compute_hash
from .manifest import load_manifest

log = logging.getLogger("gd_backup")


@dataclass
class VerifyResult:
    manifest_found: bool
    checked: int = 0
    corrupted: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.manifest_found and not self.corrupted


def resolve_entry(snapshot_dir: Path, key: str) -> Path:
    """Map a manifest key to its file; accepts ``\\`` separators."""
    return snapshot_dir / key.replace("\\", "/")


def entry_is_intact(snapshot_dir: Path, key: str, digest: str) -> bool:
    path = resolve_entry(snapshot_dir, key)
    if not path.is_file():
        log.debug("  missing %s", key)
        return False
    return compute_hash(path) == digest.upper()


def verify_snapshot(snapshot_dir: Path) -> VerifyResult:
    """Check every manifest entry of *snapshot_dir*.

    A missing manifest is reported, not raised.  Every entry is checked
    even after a failure; nothing on disk is modified.
    """
    manifest = load_manifest(snapshot_dir)
    if manifest is None:
        log.warning("No %s found in %s", MANIFEST_NAME, snapshot_dir)
        return VerifyResult(manifest_found=False)

    corrupted = [
        key for key, digest in manifest.items()
        if not entry_is_intact(snapshot_dir, key, digest)
    ]
    result = VerifyResult(
        manifest_found=True, checked=len(manifest), corrupted=corrupted,
    )

    if not corrupted:
        log.info("All %d progress files verified OK.", result.checked)
    else:
        log.error(
            "%d corrupted:\n  - %s",
            len(corrupted), "\n  - ".join(corrupted),
        )
    return result

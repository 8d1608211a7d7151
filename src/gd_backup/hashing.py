"""Streaming file digests."""

import hashlib
from pathlib import Path

from .constants import HASH_CHUNK_SIZE


def compute_hash(path: Path) -> str:
    """Return the uppercase SHA-256 hex digest of the file at *path*.

    The file is read in fixed-size chunks so memory use does not grow
    with file size.  I/O errors propagate to the caller.
    """
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(HASH_CHUNK_SIZE), b""):
            h.update(chunk)
    return h.hexdigest().upper()

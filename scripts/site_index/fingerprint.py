"""Content fingerprints and modification stamps for catalog entries."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from scripts.site_index.logs import log_warning

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"

# Tried in order; the first algorithm the interpreter allows wins.
DIGEST_ALGORITHMS = ("md5", "sha256")


@dataclass(frozen=True)
class Fingerprint:
    """Identity and freshness of one page."""

    content_hash: str
    last_modified: str


def _new_hasher(algorithms: tuple[str, ...]):
    """Return a hasher for the first usable algorithm, or None."""
    for name in algorithms:
        try:
            return hashlib.new(name, usedforsecurity=False)
        except (ValueError, TypeError):
            continue
    return None


def compute_content_hash(
    file_path: Path | str,
    algorithms: tuple[str, ...] = DIGEST_ALGORITHMS,
) -> Optional[str]:
    """Compute a hex digest of a file's raw bytes.

    Args:
        file_path: Path to the file.
        algorithms: Digest names to try in order.

    Returns:
        Hex digest, or None if no algorithm is available.

    Raises:
        OSError: If the file cannot be read.
    """
    hasher = _new_hasher(algorithms)
    if hasher is None:
        return None

    with open(file_path, "rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            hasher.update(chunk)
    return hasher.hexdigest()


def format_timestamp(mtime: float) -> str:
    """Render a modification time as "YYYY-MM-DD HH:MM" in local time."""
    return datetime.fromtimestamp(mtime).strftime(TIMESTAMP_FORMAT)


def fingerprint(
    file_path: Path | str,
    algorithms: tuple[str, ...] = DIGEST_ALGORITHMS,
) -> Fingerprint:
    """Fingerprint one page.

    When no digest algorithm is usable, the integer modification time stands
    in for the hash so the run can continue.

    Args:
        file_path: Path to the page.
        algorithms: Digest names to try in order.

    Returns:
        Fingerprint with content hash and formatted modification time.

    Raises:
        OSError: If the file cannot be stat'ed or read.
    """
    file_path = Path(file_path)
    mtime = file_path.stat().st_mtime

    content_hash = compute_content_hash(file_path, algorithms)
    if content_hash is None:
        log_warning(
            f"No digest algorithm available, using modification time for {file_path.name}",
            path=str(file_path),
        )
        content_hash = str(int(mtime))

    return Fingerprint(content_hash=content_hash, last_modified=format_timestamp(mtime))

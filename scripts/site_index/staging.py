"""Destination preparation, content copy and repository backup."""

from __future__ import annotations

import shutil
import tempfile
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

from scripts.site_index.errors import StagingError
from scripts.site_index.logs import log_error, log_info, log_success, log_warning

BACKUP_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


def _is_empty_dir(path: Path) -> bool:
    return not any(path.iterdir())


def prepare_destination(dest_root: Path | str, content_subdir: str) -> Path:
    """Remove the destination and recreate it with an empty content subdirectory.

    Returns:
        Path to the (empty) content subdirectory.

    Raises:
        StagingError: If the destination cannot be removed or created.
    """
    dest_root = Path(dest_root)
    target = dest_root / content_subdir
    log_info(f"Preparing destination {dest_root}")

    try:
        if dest_root.is_dir():
            shutil.rmtree(dest_root)
        elif dest_root.exists():
            dest_root.unlink()
        target.mkdir(parents=True)
    except OSError as e:
        raise StagingError(f"Cannot prepare destination: {e}", path=dest_root) from e

    return target


def copy_content(src_dir: Path | str, target_dir: Path | str) -> Path:
    """Copy the content tree into the destination, preserving subdirectories.

    Raises:
        StagingError: If the source is missing, the copy fails, or the copy
            came out empty while the source is not.
    """
    src_dir = Path(src_dir)
    target_dir = Path(target_dir)

    if not src_dir.is_dir():
        raise StagingError("Content directory not found", path=src_dir)

    log_info(f"Copying {src_dir} to {target_dir}")
    try:
        shutil.copytree(src_dir, target_dir, symlinks=True, dirs_exist_ok=True)
    except (OSError, shutil.Error) as e:
        raise StagingError(f"Copy failed: {e}", path=src_dir) from e

    if _is_empty_dir(target_dir):
        if _is_empty_dir(src_dir):
            log_warning(f"Content directory {src_dir} is empty", path=str(src_dir))
        else:
            raise StagingError(
                "Copy produced an empty destination from a non-empty source",
                path=target_dir,
            )

    log_success(f"Content copied to {target_dir}")
    return target_dir


@contextmanager
def content_snapshot(src_dir: Path | str) -> Iterator[Path]:
    """Copy the content directory to a temporary location for the duration.

    Taken before switching to the hosting branch, which does not track
    the content directory.

    Yields:
        Path of the snapshot, named like the source directory.

    Raises:
        StagingError: If the source is missing or cannot be copied.
    """
    src_dir = Path(src_dir)
    if not src_dir.is_dir():
        raise StagingError("Content directory not found", path=src_dir)

    with tempfile.TemporaryDirectory(prefix="site-index-") as tmp:
        snapshot = Path(tmp) / src_dir.name
        try:
            shutil.copytree(src_dir, snapshot, symlinks=True)
        except (OSError, shutil.Error) as e:
            raise StagingError(f"Cannot snapshot content: {e}", path=src_dir) from e
        log_info(f"Snapshot of {src_dir} taken")
        yield snapshot


def backup_path(repo_path: Path, backup_root: Path, now: Optional[datetime] = None) -> Path:
    """Timestamped backup location: <backup_root>/<repo>_backup_YYYYmmdd_HHMMSS."""
    stamp = (now or datetime.now()).strftime(BACKUP_TIMESTAMP_FORMAT)
    return backup_root / f"{repo_path.resolve().name}_backup_{stamp}"


def create_backup(
    repo_path: Path | str,
    backup_root: Path | str,
    now: Optional[datetime] = None,
) -> Optional[Path]:
    """Copy the whole repository to a timestamped directory.

    Best effort: failures are logged and the run continues.

    Returns:
        The backup directory, or None if no backup was made.
    """
    repo_path = Path(repo_path)
    if not repo_path.is_dir():
        log_error(f"Repository {repo_path} not found, continuing without backup")
        return None

    destination = backup_path(repo_path, Path(backup_root), now)
    log_info(f"Backing up {repo_path} to {destination}")
    try:
        shutil.copytree(repo_path, destination, symlinks=True)
    except (OSError, shutil.Error) as e:
        log_error(f"Backup failed, continuing without backup: {e}", path=str(destination))
        return None

    log_success(f"Backup created at {destination}")
    return destination

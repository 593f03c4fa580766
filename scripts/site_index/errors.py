"""Error types for catalog generation and publishing."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional


class SiteIndexError(Exception):
    """Base error for a failed run.

    Every subclass aborts the whole run: a partial catalog would
    misrepresent the published content.
    """

    error_type = "site_index_error"

    def __init__(self, message: str, path: Optional[Path | str] = None):
        super().__init__(message)
        self.message = message
        self.path = str(path) if path is not None else None

    def to_json(self) -> dict[str, Any]:
        """Serialize error to JSON format for machine parsing."""
        result: dict[str, Any] = {
            "error": self.error_type,
            "message": self.message,
        }
        if self.path:
            result["path"] = self.path
        return result

    def __str__(self) -> str:
        if self.path:
            return f"{self.message} | path: {self.path}"
        return self.message


class ContentRootError(SiteIndexError):
    """The content root is missing or is not a readable directory."""

    error_type = "content_root_invalid"


class ArtifactReadError(SiteIndexError):
    """A single HTML page could not be read."""

    error_type = "artifact_unreadable"


class StagingError(SiteIndexError):
    """Copying pages into the publish destination failed."""

    error_type = "staging_failed"


class PublishError(SiteIndexError):
    """A git command failed while publishing."""

    error_type = "publish_failed"

    def __init__(
        self,
        message: str,
        command: Optional[list[str]] = None,
        stderr: str = "",
        path: Optional[Path | str] = None,
    ):
        super().__init__(message, path=path)
        self.command = command or []
        self.stderr = stderr.strip()

    def to_json(self) -> dict[str, Any]:
        result = super().to_json()
        if self.command:
            result["command"] = " ".join(self.command)
        if self.stderr:
            result["stderr"] = self.stderr
        return result

"""Catalog building: discovery, per-page records and category grouping."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, Optional

from scripts.site_index.classifier import ICON_RULES, IconRule, classify
from scripts.site_index.errors import ArtifactReadError, ContentRootError
from scripts.site_index.extractor import extract
from scripts.site_index.fingerprint import DIGEST_ALGORITHMS, fingerprint
from scripts.site_index.logs import log_info

HTML_SUFFIX = ".html"


@dataclass(frozen=True)
class Artifact:
    """One source HTML page, read once at discovery."""

    relative_path: str  # POSIX path used for links and icon matching
    path: Path
    raw_content: str
    parent_dir: Optional[str] = None  # None when the page sits in the content root

    @property
    def stem(self) -> str:
        return self.path.stem


@dataclass(frozen=True)
class Record:
    """Fully resolved catalog entry for one page."""

    id: str
    title: str
    description: str
    category: str
    icon: str
    content_hash: str
    last_modified: str
    absolute_url: str
    relative_path: str


@dataclass
class Catalog:
    """Records grouped by category, groups in ascending category order."""

    groups: dict[str, list[Record]] = field(default_factory=dict)

    @property
    def categories(self) -> list[str]:
        return list(self.groups)

    def records(self) -> list[Record]:
        """All records in group order, discovery order within a group."""
        return [record for group in self.groups.values() for record in group]

    def __len__(self) -> int:
        return sum(len(group) for group in self.groups.values())

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records())


@dataclass
class BuildContext:
    """Run-scoped state owned by one catalog build."""

    records: list[Record] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    _seen: set[str] = field(default_factory=set, repr=False)

    def add(self, record: Record) -> None:
        self.records.append(record)
        if record.category not in self._seen:
            self._seen.add(record.category)
            self.categories.append(record.category)

    def finish(self) -> Catalog:
        """Group the accumulated records into a Catalog."""
        groups: dict[str, list[Record]] = {category: [] for category in sorted(self.categories)}
        for record in self.records:
            groups[record.category].append(record)
        return Catalog(groups=groups)


def join_url(base_url: str, relative_path: str) -> str:
    """Join a base URL and a relative path with exactly one slash."""
    return f"{base_url.rstrip('/')}/{relative_path.lstrip('/')}"


def _should_skip_dir(dir_name: str) -> bool:
    return dir_name.startswith(".")


def _should_skip_file(file_name: str, exclude: set[str]) -> bool:
    if file_name.startswith(".") or file_name in exclude:
        return True
    return not file_name.lower().endswith(HTML_SUFFIX)


def read_artifact(
    file_path: Path,
    content_root: Path,
    relative_to: Path,
) -> Artifact:
    """Read one page into an Artifact.

    Raises:
        ArtifactReadError: If the file cannot be read.
    """
    try:
        raw = file_path.read_bytes()
    except OSError as e:
        raise ArtifactReadError(f"Cannot read page: {e}", path=file_path) from e

    parent = file_path.parent
    return Artifact(
        relative_path=file_path.relative_to(relative_to).as_posix(),
        path=file_path,
        raw_content=raw.decode("utf-8", errors="replace"),
        parent_dir=None if parent == content_root else parent.name,
    )


def discover_artifacts(
    content_root: Path | str,
    relative_to: Optional[Path | str] = None,
    exclude: Iterable[str] = (),
) -> list[Artifact]:
    """Find and read every HTML page under the content root.

    Args:
        content_root: Directory holding the pages (nested directories allowed).
        relative_to: Directory that relative paths are computed from.
            Defaults to the content root itself.
        exclude: File names never cataloged (e.g. the generated page).

    Returns:
        Artifacts sorted by relative path.

    Raises:
        ContentRootError: If the content root is missing or not a directory.
        ArtifactReadError: If any page cannot be read.
    """
    content_root = Path(content_root).resolve()
    relative_to = Path(relative_to).resolve() if relative_to is not None else content_root
    excluded = set(exclude)

    if not content_root.exists():
        raise ContentRootError("Content root not found", path=content_root)
    if not content_root.is_dir():
        raise ContentRootError("Content root is not a directory", path=content_root)
    if not os.access(content_root, os.R_OK | os.X_OK):
        raise ContentRootError("Content root is not readable", path=content_root)
    if not content_root.is_relative_to(relative_to):
        raise ContentRootError(
            f"Content root is not inside {relative_to}", path=content_root
        )

    def _walk_error(error: OSError) -> None:
        raise ContentRootError(f"Cannot list directory: {error}", path=error.filename)

    file_paths: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(content_root, onerror=_walk_error):
        dirnames[:] = [d for d in dirnames if not _should_skip_dir(d)]
        current_dir = Path(dirpath)
        for filename in filenames:
            if not _should_skip_file(filename, excluded):
                file_paths.append(current_dir / filename)

    artifacts = [read_artifact(p, content_root, relative_to) for p in file_paths]
    artifacts.sort(key=lambda a: a.relative_path)
    return artifacts


def build_record(
    artifact: Artifact,
    base_url: str,
    icon_rules: Iterable[IconRule] = ICON_RULES,
    algorithms: tuple[str, ...] = DIGEST_ALGORITHMS,
) -> Record:
    """Run extraction, classification and fingerprinting for one page.

    Raises:
        ArtifactReadError: If the page cannot be fingerprinted.
    """
    metadata = extract(artifact.raw_content, artifact.stem, artifact.parent_dir)
    icon = classify(artifact.relative_path, metadata.category, icon_rules)
    try:
        stamp = fingerprint(artifact.path, algorithms)
    except OSError as e:
        raise ArtifactReadError(f"Cannot fingerprint page: {e}", path=artifact.path) from e

    return Record(
        id=artifact.stem,
        title=metadata.title,
        description=metadata.description,
        category=metadata.category,
        icon=icon,
        content_hash=stamp.content_hash,
        last_modified=stamp.last_modified,
        absolute_url=join_url(base_url, artifact.relative_path),
        relative_path=artifact.relative_path,
    )


def build_catalog(
    artifacts: Iterable[Artifact],
    base_url: str,
    icon_rules: Iterable[IconRule] = ICON_RULES,
    algorithms: tuple[str, ...] = DIGEST_ALGORITHMS,
) -> Catalog:
    """Build the grouped catalog for one run.

    Args:
        artifacts: Pages in discovery order.
        base_url: Published location the relative paths are joined to.
        icon_rules: Ordered icon rules.
        algorithms: Digest names to try for content hashes.

    Returns:
        Catalog with categories sorted and records in discovery order.
    """
    rules = tuple(icon_rules)
    context = BuildContext()
    for artifact in artifacts:
        context.add(build_record(artifact, base_url, rules, algorithms))
    return context.finish()


def build_site_catalog(
    content_root: Path | str,
    base_url: str,
    relative_to: Optional[Path | str] = None,
    exclude: Iterable[str] = (),
    icon_rules: Iterable[IconRule] = ICON_RULES,
) -> Catalog:
    """Discover every page under content_root and build its catalog."""
    artifacts = discover_artifacts(content_root, relative_to=relative_to, exclude=exclude)
    log_info(f"Found {len(artifacts)} pages under {content_root}")
    catalog = build_catalog(artifacts, base_url, icon_rules)
    log_info(f"Cataloged {len(catalog)} pages in {len(catalog.categories)} categories")
    return catalog

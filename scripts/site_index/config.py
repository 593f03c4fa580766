"""Configuration loading and validation for the site index."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional
from urllib.parse import urlparse

import yaml

from scripts.site_index.classifier import IconRule, build_rules
from scripts.site_index.renderer import PageOptions


class ConfigError(Exception):
    """Error in site index configuration."""

    def __init__(
        self,
        message: str,
        file: Optional[str] = None,
        line: Optional[int] = None,
        error_type: str = "config_invalid",
    ):
        super().__init__(message)
        self.message = message
        self.file = file
        self.line = line
        self.error_type = error_type

    def to_json(self) -> dict[str, Any]:
        """Serialize error to JSON format for machine parsing."""
        result: dict[str, Any] = {
            "error": self.error_type,
            "message": self.message,
        }
        if self.file:
            result["file"] = self.file
        if self.line:
            result["line"] = self.line
        return result

    def __str__(self) -> str:
        parts = [self.message]
        if self.file:
            parts.append(f"file: {self.file}")
        if self.line:
            parts.append(f"line: {self.line}")
        return " | ".join(parts)


DEFAULT_CONFIG_PATH = "site-index.yaml"
DEFAULT_OUTPUT_FILE = "main.html"
# Used when neither base_url nor site_url is set.
RELATIVE_BASE_URL = "."


@dataclass
class PageConfig:
    """Chrome of the generated page."""

    title: str = "Utilities"
    subtitle: str = "A collection of small web tools"
    author: str = ""
    lang: str = "en"
    description: str = "Catalog of standalone HTML utilities."
    keywords: str = "utilities, tools, html"


@dataclass
class IconsConfig:
    """Icon rules checked before the built-in table."""

    extra_rules: list[IconRule] = field(default_factory=list)


@dataclass
class SiteConfig:
    """Complete site index configuration."""

    version: str = "1.0"
    repo_path: str = "."
    content_dir: str = "utilities"
    dest_dir: str = "site"
    output_file: str = DEFAULT_OUTPUT_FILE
    branch: str = "gh-pages"
    site_url: Optional[str] = None
    base_url: Optional[str] = None
    backup_dir: Optional[str] = None  # defaults to the repository's parent
    skip_backup: bool = True
    exclude: list[str] = field(default_factory=list)
    page: PageConfig = field(default_factory=PageConfig)
    icons: IconsConfig = field(default_factory=IconsConfig)

    @property
    def repo_root(self) -> Path:
        return Path(self.repo_path).expanduser()

    @property
    def content_root(self) -> Path:
        return self.repo_root / self.content_dir

    @property
    def dest_root(self) -> Path:
        return self.repo_root / self.dest_dir

    @property
    def staged_content_root(self) -> Path:
        """Where the content directory is copied inside the destination."""
        return self.dest_root / Path(self.content_dir).name

    @property
    def output_path(self) -> Path:
        return self.dest_root / self.output_file

    @property
    def backup_root(self) -> Path:
        if self.backup_dir:
            return Path(self.backup_dir).expanduser()
        return self.repo_root.resolve().parent

    @property
    def resolved_base_url(self) -> str:
        """Explicit base_url, else site_url without the page name."""
        if self.base_url:
            return self.base_url.rstrip("/")
        if self.site_url:
            return derive_base_url(self.site_url, self.output_file)
        return RELATIVE_BASE_URL

    @property
    def excluded_files(self) -> list[str]:
        """File names never cataloged; always includes the generated page."""
        names = list(self.exclude)
        if self.output_file not in names:
            names.append(self.output_file)
        return names

    def page_options(self) -> PageOptions:
        return PageOptions(
            title=self.page.title,
            subtitle=self.page.subtitle,
            author=self.page.author,
            lang=self.page.lang,
            description=self.page.description,
            keywords=self.page.keywords,
        )

    def icon_rules(self) -> tuple[IconRule, ...]:
        return build_rules(self.icons.extra_rules)


def get_default_config() -> SiteConfig:
    """Return the default site index configuration."""
    return SiteConfig()


def derive_base_url(site_url: str, output_file: str = DEFAULT_OUTPUT_FILE) -> str:
    """Strip a trailing "/<output_file>" from the published page URL.

    "https://host/repo/site/main.html" -> "https://host/repo/site"
    """
    suffix = f"/{output_file}"
    if site_url.endswith(suffix):
        return site_url[: -len(suffix)]
    return site_url.rstrip("/")


def _parse_page(page_dict: dict[str, Any], config_file: Optional[str] = None) -> PageConfig:
    """Parse page configuration."""
    if not isinstance(page_dict, dict):
        raise ConfigError("'page' must be a mapping", file=config_file)
    defaults = PageConfig()
    return PageConfig(
        title=str(page_dict.get("title", defaults.title)),
        subtitle=str(page_dict.get("subtitle", defaults.subtitle)),
        author=str(page_dict.get("author", defaults.author)),
        lang=str(page_dict.get("lang", defaults.lang)),
        description=str(page_dict.get("description", defaults.description)),
        keywords=str(page_dict.get("keywords", defaults.keywords)),
    )


def _parse_icons(icons_dict: dict[str, Any], config_file: Optional[str] = None) -> IconsConfig:
    """Parse icon configuration."""
    if not isinstance(icons_dict, dict):
        raise ConfigError("'icons' must be a mapping", file=config_file)
    rules = []
    for rule_dict in icons_dict.get("extra_rules") or []:
        if not isinstance(rule_dict, dict):
            raise ConfigError(
                "Each icon rule must be a mapping with 'pattern' and 'icon'",
                file=config_file,
            )
        rules.append(
            IconRule(
                pattern=str(rule_dict.get("pattern", "")),
                icon=str(rule_dict.get("icon", "")),
            )
        )
    return IconsConfig(extra_rules=rules)


def _validate_regex(pattern: str, config_file: Optional[str] = None) -> None:
    """Validate a regex pattern."""
    if not pattern:
        raise ConfigError("Icon rule pattern must not be empty", file=config_file)
    try:
        re.compile(pattern)
    except re.error as e:
        raise ConfigError(
            f"Invalid regex pattern '{pattern}': {e}",
            file=config_file,
            error_type="config_invalid",
        )


def _validate_url(name: str, url: Optional[str], config_file: Optional[str] = None) -> None:
    """Validate an optional http(s) URL."""
    if url is None:
        return
    parsed = urlparse(url) if isinstance(url, str) else None
    if parsed is None or parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(
            f"'{name}' must be an http(s) URL, got '{url}'",
            file=config_file,
            error_type="config_invalid",
        )


def validate_config(config: SiteConfig, config_file: Optional[str] = None) -> None:
    """Validate configuration values.

    Raises:
        ConfigError: If configuration is invalid.
    """
    _validate_url("site_url", config.site_url, config_file)
    _validate_url("base_url", config.base_url, config_file)

    for name in ("content_dir", "dest_dir", "output_file", "branch"):
        if not getattr(config, name):
            raise ConfigError(f"'{name}' must not be empty", file=config_file)

    for rule in config.icons.extra_rules:
        _validate_regex(rule.pattern, config_file)
        if not rule.icon.strip():
            raise ConfigError(
                f"Icon rule '{rule.pattern}' has an empty icon",
                file=config_file,
                error_type="config_invalid",
            )


def load_config(config_path: Path | str) -> SiteConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the site-index.yaml file.

    Returns:
        SiteConfig with loaded values merged with defaults.

    Raises:
        ConfigError: If the file exists but contains invalid configuration.
    """
    config_path = Path(config_path)
    config_file = str(config_path)

    defaults = get_default_config()

    if not config_path.exists():
        return defaults

    try:
        content = config_path.read_text(encoding="utf-8")
        if not content.strip():
            return defaults

        data = yaml.safe_load(content)
        if not data:
            return defaults
        if not isinstance(data, dict):
            raise ConfigError(
                "Top-level site index config must be a mapping",
                file=config_file,
                error_type="config_invalid",
            )

    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        raise ConfigError(
            f"Invalid YAML: {e}",
            file=config_file,
            line=mark.line + 1 if mark is not None else None,
            error_type="config_invalid",
        )

    exclude = data.get("exclude") or []
    if not isinstance(exclude, list):
        raise ConfigError("'exclude' must be a list of file names", file=config_file)

    config = SiteConfig(
        version=str(data.get("version", defaults.version)),
        repo_path=str(data.get("repo_path", defaults.repo_path)),
        content_dir=str(data.get("content_dir", defaults.content_dir)),
        dest_dir=str(data.get("dest_dir", defaults.dest_dir)),
        output_file=str(data.get("output_file", defaults.output_file)),
        branch=str(data.get("branch", defaults.branch)),
        site_url=data.get("site_url", defaults.site_url),
        base_url=data.get("base_url", defaults.base_url),
        backup_dir=data.get("backup_dir", defaults.backup_dir),
        skip_backup=bool(data.get("skip_backup", defaults.skip_backup)),
        exclude=[str(name) for name in exclude],
        page=_parse_page(data.get("page") or {}, config_file),
        icons=_parse_icons(data.get("icons") or {}, config_file),
    )

    validate_config(config, config_file)

    return config

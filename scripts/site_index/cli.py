"""Command-line interface for the site index."""

from __future__ import annotations

import argparse
import json
import os
import sys
from enum import IntEnum
from pathlib import Path
from typing import Optional

from scripts.site_index.catalog import Catalog, build_site_catalog
from scripts.site_index.config import (
    DEFAULT_CONFIG_PATH,
    ConfigError,
    SiteConfig,
    load_config,
)
from scripts.site_index.errors import PublishError, SiteIndexError
from scripts.site_index.logs import init_context, log_error, log_info, log_success
from scripts.site_index.publish import (
    check_dependencies,
    checkout_branch,
    commit_and_push,
    stash_if_dirty,
)
from scripts.site_index.renderer import catalog_data, render_page
from scripts.site_index.staging import (
    content_snapshot,
    copy_content,
    create_backup,
    prepare_destination,
)


class ExitCode(IntEnum):
    """Process exit codes."""

    SUCCESS = 0
    CONFIG_ERROR = 1
    FILE_SYSTEM_ERROR = 2
    PUBLISH_ERROR = 3


STARTER_CONFIG = '''# Site index configuration

version: "1.0"

repo_path: .
content_dir: utilities      # standalone HTML pages to catalog
dest_dir: site              # published directory
output_file: main.html      # generated index page, inside dest_dir
branch: gh-pages

# Published URL of the index page; links are built relative to its directory.
# Without it, links are relative paths from the generated page to the content.
# site_url: https://example.github.io/project/site/main.html

skip_backup: true
# backup_dir: ..

exclude: []

page:
  title: Utilities
  subtitle: A collection of small web tools
  author: ""
  lang: en

icons:
  extra_rules: []
  # - {pattern: "invoice|receipt", icon: "🧾"}
'''


def _get_config(config_path: Optional[str]) -> SiteConfig:
    """Load config from an explicit path, else ./site-index.yaml, else defaults."""
    if config_path:
        return load_config(config_path)
    return load_config(Path.cwd() / DEFAULT_CONFIG_PATH)


def _print_error(error: ConfigError | SiteIndexError) -> None:
    print(json.dumps(error.to_json()), file=sys.stderr)


def _init_logging(args: argparse.Namespace) -> None:
    init_context(
        quiet=getattr(args, "quiet", False),
        log_file=getattr(args, "log_file", None),
        command=args.command,
    )


def _link_base(
    config: SiteConfig,
    content_root: Path,
    output_path: Path,
    override: Optional[str] = None,
) -> str:
    """Base that page links are joined to.

    Without a configured URL, links are relative to the directory of the
    generated page, e.g. "../utilities/x.html" for site/main.html.
    """
    if override:
        return override
    if config.base_url or config.site_url:
        return config.resolved_base_url
    anchor = content_root.resolve().parent
    return Path(os.path.relpath(anchor, output_path.resolve().parent)).as_posix()


def _build_catalog(
    config: SiteConfig,
    content_root: Path,
    base_url: str,
    output_path: Optional[Path] = None,
) -> Catalog:
    """Catalog content_root with links relative to its parent directory."""
    content_root = content_root.resolve()
    exclude = config.excluded_files
    if output_path is not None and output_path.name not in exclude:
        exclude.append(output_path.name)
    return build_site_catalog(
        content_root,
        base_url,
        relative_to=content_root.parent,
        exclude=exclude,
        icon_rules=config.icon_rules(),
    )


def _write_page(catalog: Catalog, config: SiteConfig, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_page(catalog, config.page_options()), encoding="utf-8")
    log_success(f"Wrote {output_path} ({len(catalog)} pages)")


def cmd_init(args: argparse.Namespace) -> int:
    """Write a starter config file."""
    _init_logging(args)
    config_path = Path(args.config) if args.config else Path.cwd() / DEFAULT_CONFIG_PATH

    if config_path.exists():
        log_info(f"Config already exists: {config_path}")
        return ExitCode.SUCCESS

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(STARTER_CONFIG, encoding="utf-8")
    except OSError as e:
        log_error(f"Cannot write config: {e}", path=str(config_path))
        return ExitCode.FILE_SYSTEM_ERROR

    log_success(f"Created {config_path}")
    return ExitCode.SUCCESS


def cmd_build(args: argparse.Namespace) -> int:
    """Build the index page from the content directory."""
    _init_logging(args)
    try:
        config = _get_config(args.config)
    except ConfigError as e:
        _print_error(e)
        return ExitCode.CONFIG_ERROR

    content_root = Path(args.content_root) if args.content_root else config.content_root
    output_path = Path(args.output) if args.output else config.output_path
    base_url = _link_base(config, content_root, output_path, args.base_url)

    try:
        catalog = _build_catalog(config, content_root, base_url, output_path)
        _write_page(catalog, config, output_path)
    except SiteIndexError as e:
        _print_error(e)
        return ExitCode.FILE_SYSTEM_ERROR
    except OSError as e:
        log_error(f"Cannot write page: {e}", path=str(output_path))
        return ExitCode.FILE_SYSTEM_ERROR

    return ExitCode.SUCCESS


def _print_catalog(catalog: Catalog) -> None:
    for category, records in catalog.groups.items():
        print(f"{category} ({len(records)})")
        for record in records:
            print(f"  {record.icon} {record.title}  [{record.relative_path}]")


def cmd_list(args: argparse.Namespace) -> int:
    """Print the catalog without writing anything."""
    _init_logging(args)
    try:
        config = _get_config(args.config)
    except ConfigError as e:
        _print_error(e)
        return ExitCode.CONFIG_ERROR

    try:
        catalog = _build_catalog(
            config,
            config.content_root,
            _link_base(config, config.content_root, config.output_path),
        )
    except SiteIndexError as e:
        _print_error(e)
        return ExitCode.FILE_SYSTEM_ERROR

    if args.json:
        print(json.dumps(catalog_data(catalog), indent=2, ensure_ascii=False))
    elif len(catalog) == 0:
        print("No pages found.")
    else:
        _print_catalog(catalog)
    return ExitCode.SUCCESS


def cmd_publish(args: argparse.Namespace) -> int:
    """Stage the content, rebuild the index and push it to the hosting branch."""
    _init_logging(args)
    try:
        config = _get_config(args.config)
    except ConfigError as e:
        _print_error(e)
        return ExitCode.CONFIG_ERROR

    repo = config.repo_root
    log_info(f"Publishing {repo} to branch {config.branch}")

    try:
        check_dependencies()

        if not (args.skip_backup or config.skip_backup):
            create_backup(repo, config.backup_root)

        stash_if_dirty(repo, config.branch)
        with content_snapshot(config.content_root) as snapshot:
            checkout_branch(repo, config.branch)
            target = prepare_destination(config.dest_root, config.staged_content_root.name)
            copy_content(snapshot, target)

        output_path = config.output_path
        base_url = _link_base(config, config.staged_content_root, output_path)
        catalog = _build_catalog(config, config.staged_content_root, base_url, output_path)
        _write_page(catalog, config, output_path)

        committed = commit_and_push(
            repo, [config.dest_dir], config.branch, push=not args.no_push
        )
    except PublishError as e:
        _print_error(e)
        return ExitCode.PUBLISH_ERROR
    except SiteIndexError as e:
        _print_error(e)
        return ExitCode.FILE_SYSTEM_ERROR
    except OSError as e:
        log_error(f"Publishing failed: {e}")
        return ExitCode.FILE_SYSTEM_ERROR

    if committed and config.site_url:
        log_success(f"Site available at {config.site_url}")
    log_success("Publish complete")
    return ExitCode.SUCCESS


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add --config, --quiet and --log-file to a parser."""
    parser.add_argument(
        "--config",
        "-c",
        help=f"Path to config file (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only print warnings and errors",
    )
    parser.add_argument(
        "--log-file",
        help="Append JSON-lines log entries to this file",
    )


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="site-index",
        description="Catalog standalone HTML pages into a searchable index page",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser(
        "init",
        help="Write a starter site-index.yaml",
    )
    _add_common_args(init_parser)

    build_parser = subparsers.add_parser(
        "build",
        help="Build the index page",
    )
    _add_common_args(build_parser)
    build_parser.add_argument("--content-root", help="Directory of HTML pages to catalog")
    build_parser.add_argument("--output", help="Path of the generated page")
    build_parser.add_argument(
        "--base-url",
        help="URL that page links are joined to (default: site_url, else relative to the output page)",
    )

    list_parser = subparsers.add_parser(
        "list",
        help="Print the catalog without writing it",
    )
    _add_common_args(list_parser)
    list_parser.add_argument("--json", action="store_true", help="Print the embedded record data")

    publish_parser = subparsers.add_parser(
        "publish",
        help="Stage, build, commit and push to the hosting branch",
    )
    _add_common_args(publish_parser)
    publish_parser.add_argument("--skip-backup", action="store_true", help="Do not back up the repository")
    publish_parser.add_argument("--no-push", action="store_true", help="Commit but do not push")

    args = parser.parse_args(argv)

    commands = {
        "init": cmd_init,
        "build": cmd_build,
        "list": cmd_list,
        "publish": cmd_publish,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())

"""Tests for CLI commands."""

import json
import re
import shutil
import subprocess
from unittest.mock import patch

import pytest
import yaml

from scripts.site_index.cli import ExitCode, main
from scripts.site_index.errors import PublishError

SITE_URL = "https://user.github.io/repo/site/main.html"
DATA_RE = re.compile(
    r'<script id="catalog-data" type="application/json">(.*?)</script>', re.DOTALL
)


def _write_config(tmp_path, repo, **extra):
    config_file = tmp_path / "site-index.yaml"
    data = {"repo_path": str(repo), "site_url": SITE_URL}
    data.update(extra)
    config_file.write_text(yaml.dump(data))
    return config_file


def _embedded(path):
    return json.loads(DATA_RE.search(path.read_text(encoding="utf-8")).group(1))


class TestInitCommand:
    """Tests for the init command."""

    def test_creates_starter_config(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert main(["init"]) == ExitCode.SUCCESS
        data = yaml.safe_load((tmp_path / "site-index.yaml").read_text(encoding="utf-8"))
        assert data["content_dir"] == "utilities"
        assert data["branch"] == "gh-pages"

    def test_existing_config_untouched(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "site-index.yaml").write_text("branch: main\n")
        assert main(["init"]) == ExitCode.SUCCESS
        assert (tmp_path / "site-index.yaml").read_text() == "branch: main\n"

    def test_starter_config_loads(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        main(["init", "--config", str(tmp_path / "custom.yaml")])
        assert main(["list", "--config", str(tmp_path / "custom.yaml")]) == ExitCode.FILE_SYSTEM_ERROR


class TestBuildCommand:
    """Tests for the build command."""

    def test_build_writes_page(self, sample_site, tmp_path):
        config_file = _write_config(tmp_path, sample_site)

        exit_code = main(["build", "--config", str(config_file)])

        assert exit_code == ExitCode.SUCCESS
        data = _embedded(sample_site / "site" / "main.html")
        assert [item["id"] for item in data] == [
            "pdf-merge",
            "budget",
            "my-cool_tool",
            "barbershop-queue",
        ]
        assert data[0]["path"] == "https://user.github.io/repo/site/utilities/tools/pdf-merge.html"

    def test_build_overrides(self, content_root, tmp_path):
        output = tmp_path / "out" / "index.html"

        exit_code = main([
            "build",
            "--config", str(tmp_path / "none.yaml"),
            "--content-root", str(content_root),
            "--output", str(output),
            "--base-url", "https://cdn.example.com/pages",
        ])

        assert exit_code == ExitCode.SUCCESS
        data = _embedded(output)
        assert data[-1]["path"] == "https://cdn.example.com/pages/utilities/barbershop-queue.html"

    def test_links_relative_to_page_without_url(self, sample_site, tmp_path):
        config_file = tmp_path / "site-index.yaml"
        config_file.write_text(yaml.dump({"repo_path": str(sample_site)}))

        assert main(["build", "--config", str(config_file)]) == ExitCode.SUCCESS

        data = _embedded(sample_site / "site" / "main.html")
        assert data[-1]["path"] == "../utilities/barbershop-queue.html"
        assert data[0]["path"] == "../utilities/tools/pdf-merge.html"

    def test_build_empty_content_root(self, tmp_path):
        empty = tmp_path / "utilities"
        empty.mkdir()
        output = tmp_path / "main.html"

        exit_code = main([
            "build", "--config", str(tmp_path / "none.yaml"),
            "--content-root", str(empty), "--output", str(output),
        ])

        assert exit_code == ExitCode.SUCCESS
        assert _embedded(output) == []

    def test_missing_content_root(self, tmp_path, capsys):
        output = tmp_path / "main.html"

        exit_code = main([
            "build", "--config", str(tmp_path / "none.yaml"),
            "--content-root", str(tmp_path / "missing"), "--output", str(output),
        ])

        assert exit_code == ExitCode.FILE_SYSTEM_ERROR
        assert not output.exists()
        error = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert error["error"] == "content_root_invalid"

    def test_invalid_config_exits_1(self, tmp_path, capsys):
        config_file = tmp_path / "site-index.yaml"
        config_file.write_text("{ invalid yaml: [")

        exit_code = main(["build", "--config", str(config_file)])

        assert exit_code == ExitCode.CONFIG_ERROR
        assert json.loads(capsys.readouterr().err)["error"] == "config_invalid"

    def test_output_excluded_from_catalog(self, content_root, tmp_path):
        output = content_root / "main.html"
        args = [
            "build", "--config", str(tmp_path / "none.yaml"),
            "--content-root", str(content_root), "--output", str(output),
        ]
        main(args)
        main(args)
        assert "main" not in [item["id"] for item in _embedded(output)]

    def test_quiet_suppresses_progress(self, sample_site, tmp_path, capsys):
        config_file = _write_config(tmp_path, sample_site)
        assert main(["build", "-q", "--config", str(config_file)]) == ExitCode.SUCCESS
        assert capsys.readouterr().err == ""

    def test_log_file(self, sample_site, tmp_path):
        config_file = _write_config(tmp_path, sample_site)
        log_file = tmp_path / "run.jsonl"

        main(["build", "-q", "--config", str(config_file), "--log-file", str(log_file)])

        entries = [json.loads(line) for line in log_file.read_text().splitlines()]
        assert entries
        assert all(entry["command"] == "build" for entry in entries)
        assert entries[-1]["level"] == "SUCCESS"


class TestListCommand:
    """Tests for the list command."""

    def test_list_text(self, sample_site, tmp_path, capsys):
        config_file = _write_config(tmp_path, sample_site)

        assert main(["list", "--config", str(config_file)]) == ExitCode.SUCCESS

        out = capsys.readouterr().out
        assert "Services (1)" in out
        assert "utilities/barbershop-queue.html" in out
        assert not (sample_site / "site").exists()

    def test_list_json(self, sample_site, tmp_path, capsys):
        config_file = _write_config(tmp_path, sample_site)

        assert main(["list", "--json", "--config", str(config_file)]) == ExitCode.SUCCESS

        data = json.loads(capsys.readouterr().out)
        assert {item["category"] for item in data} == {"Documents", "Finance", "Other", "Services"}

    def test_list_empty(self, tmp_path, capsys):
        (tmp_path / "utilities").mkdir()
        config_file = _write_config(tmp_path, tmp_path)

        assert main(["list", "--config", str(config_file)]) == ExitCode.SUCCESS
        assert "No pages found." in capsys.readouterr().out


class TestPublishCommand:
    """Tests for the publish command."""

    def test_full_pipeline(self, sample_site, tmp_path):
        config_file = _write_config(tmp_path, sample_site)

        with patch("scripts.site_index.cli.check_dependencies") as deps, \
                patch("scripts.site_index.cli.stash_if_dirty") as stash, \
                patch("scripts.site_index.cli.checkout_branch") as checkout, \
                patch("scripts.site_index.cli.commit_and_push", return_value=True) as commit, \
                patch("scripts.site_index.cli.create_backup") as backup:
            exit_code = main(["publish", "--config", str(config_file)])

        assert exit_code == ExitCode.SUCCESS
        deps.assert_called_once()
        backup.assert_not_called()
        stash.assert_called_once_with(sample_site, "gh-pages")
        checkout.assert_called_once_with(sample_site, "gh-pages")
        commit.assert_called_once_with(sample_site, ["site"], "gh-pages", push=True)

        staged = sample_site / "site" / "utilities" / "finance" / "budget.html"
        assert staged.exists()
        assert len(_embedded(sample_site / "site" / "main.html")) == 4

    def test_backup_when_enabled(self, sample_site, tmp_path):
        config_file = _write_config(
            tmp_path, sample_site, skip_backup=False, backup_dir=str(tmp_path / "bk")
        )

        with patch("scripts.site_index.cli.check_dependencies"), \
                patch("scripts.site_index.cli.stash_if_dirty"), \
                patch("scripts.site_index.cli.checkout_branch"), \
                patch("scripts.site_index.cli.commit_and_push", return_value=False), \
                patch("scripts.site_index.cli.create_backup") as backup:
            assert main(["publish", "--config", str(config_file)]) == ExitCode.SUCCESS
            backup.assert_called_once_with(sample_site, tmp_path / "bk")

    def test_no_push_flag(self, sample_site, tmp_path):
        config_file = _write_config(tmp_path, sample_site)

        with patch("scripts.site_index.cli.check_dependencies"), \
                patch("scripts.site_index.cli.stash_if_dirty"), \
                patch("scripts.site_index.cli.checkout_branch"), \
                patch("scripts.site_index.cli.commit_and_push", return_value=True) as commit:
            main(["publish", "--no-push", "--config", str(config_file)])

        assert commit.call_args.kwargs["push"] is False

    def test_git_failure_exits_3(self, sample_site, tmp_path, capsys):
        config_file = _write_config(tmp_path, sample_site)

        with patch("scripts.site_index.cli.check_dependencies"), \
                patch("scripts.site_index.cli.stash_if_dirty"), \
                patch(
                    "scripts.site_index.cli.checkout_branch",
                    side_effect=PublishError("fetch failed", command=["git", "fetch", "origin"]),
                ):
            exit_code = main(["publish", "--config", str(config_file)])

        assert exit_code == ExitCode.PUBLISH_ERROR
        error = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert error["command"] == "git fetch origin"

    def test_missing_content_exits_2(self, tmp_path):
        repo = tmp_path / "empty-repo"
        repo.mkdir()
        config_file = _write_config(tmp_path, repo)

        with patch("scripts.site_index.cli.check_dependencies"), \
                patch("scripts.site_index.cli.stash_if_dirty"), \
                patch("scripts.site_index.cli.checkout_branch"):
            assert main(["publish", "--config", str(config_file)]) == ExitCode.FILE_SYSTEM_ERROR


def _git(cwd, *args):
    return subprocess.run(
        ["git", *args], cwd=cwd, check=True, capture_output=True, text=True
    )


@pytest.fixture
def git_site(tmp_path, monkeypatch):
    """A repository on main with utilities/ committed and pushed to a bare origin."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(home / ".gitconfig"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    for role in ("AUTHOR", "COMMITTER"):
        monkeypatch.setenv(f"GIT_{role}_NAME", "Site Index")
        monkeypatch.setenv(f"GIT_{role}_EMAIL", "site-index@example.com")

    remote = tmp_path / "remote.git"
    _git(tmp_path, "init", "--bare", str(remote))

    repo = tmp_path / "repo"
    (repo / "utilities").mkdir(parents=True)
    _git(repo, "init")
    _git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    _git(repo, "remote", "add", "origin", str(remote))
    (repo / "utilities" / "first.html").write_text("<title>First</title>")
    _git(repo, "add", "utilities")
    _git(repo, "commit", "-m", "Add first page")
    _git(repo, "push", "origin", "main")
    return repo, remote


@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
class TestPublishWithGit:
    """Publishing against a real repository and remote."""

    def test_second_publish_includes_new_content(self, git_site, tmp_path):
        repo, remote = git_site
        config_file = _write_config(tmp_path, repo)

        assert main(["publish", "--config", str(config_file)]) == ExitCode.SUCCESS

        _git(repo, "checkout", "main")
        assert (repo / "utilities" / "first.html").exists()
        (repo / "utilities" / "second.html").write_text("<title>Second</title>")
        _git(repo, "add", "utilities")
        _git(repo, "commit", "-m", "Add second page")

        assert main(["publish", "--config", str(config_file)]) == ExitCode.SUCCESS

        published = _git(remote, "ls-tree", "-r", "--name-only", "gh-pages").stdout.split()
        assert "site/utilities/first.html" in published
        assert "site/utilities/second.html" in published
        assert "site/main.html" in published
        assert "utilities/first.html" not in published
        titles = [item["title"] for item in _embedded(repo / "site" / "main.html")]
        assert sorted(titles) == ["First", "Second"]

    def test_main_branch_untouched(self, git_site, tmp_path):
        repo, _ = git_site
        config_file = _write_config(tmp_path, repo)

        assert main(["publish", "--config", str(config_file)]) == ExitCode.SUCCESS

        _git(repo, "checkout", "main")
        assert _git(repo, "status", "--porcelain").stdout == ""
        assert (repo / "utilities" / "first.html").read_text() == "<title>First</title>"
        assert not (repo / "site").exists()

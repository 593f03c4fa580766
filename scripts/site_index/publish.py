"""Git operations for publishing the generated site to a hosting branch."""

from __future__ import annotations

import shutil
import subprocess
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from scripts.site_index.errors import PublishError
from scripts.site_index.logs import log_info, log_success, log_warning

GIT_TIMEOUT = 60
# Network operations get more room.
NETWORK_TIMEOUT = 300
REMOTE = "origin"
COMMIT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"
REQUIRED_TOOLS = ("git",)


def _run_git(
    repo: Path | str,
    args: list[str],
    check: bool = True,
    timeout: int = GIT_TIMEOUT,
) -> subprocess.CompletedProcess:
    """Run a git command inside repo.

    Raises:
        PublishError: If the command fails (when check is set) or times out.
    """
    command = ["git"] + args
    try:
        result = subprocess.run(
            command,
            cwd=str(repo),
            capture_output=True,
            text=True,
            check=False,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise PublishError(
            f"git {args[0]} timed out after {timeout}s", command=command, path=repo
        ) from e
    except FileNotFoundError as e:
        raise PublishError("git executable not found", command=command, path=repo) from e

    if check and result.returncode != 0:
        raise PublishError(
            f"git {args[0]} failed with exit code {result.returncode}",
            command=command,
            stderr=result.stderr,
            path=repo,
        )
    return result


def check_dependencies(tools: Sequence[str] = REQUIRED_TOOLS) -> None:
    """Ensure every required executable is on PATH.

    Raises:
        PublishError: Naming the first missing tool.
    """
    for tool in tools:
        if shutil.which(tool) is None:
            raise PublishError(f"Required tool not found on PATH: {tool}")


def _ref_exists(repo: Path | str, ref: str) -> bool:
    result = _run_git(repo, ["show-ref", "--verify", "--quiet", ref], check=False)
    return result.returncode == 0


def stash_if_dirty(repo: Path | str, branch: str) -> bool:
    """Stash uncommitted changes before switching branches.

    Returns:
        True if a stash was created.
    """
    status = _run_git(repo, ["status", "--porcelain"])
    if not status.stdout.strip():
        return False

    log_warning("Uncommitted changes found, stashing them")
    _run_git(
        repo,
        ["stash", "push", "-m", f"site-index: before switching to {branch}"],
    )
    return True


def checkout_branch(repo: Path | str, branch: str) -> str:
    """Switch to the hosting branch, creating it when needed.

    Returns:
        How the branch was obtained: "local", "tracking" or "orphan".

    Raises:
        PublishError: If any step fails or a pull leaves merge conflicts.
    """
    log_info(f"Updating branch {branch}")
    _run_git(repo, ["fetch", REMOTE], timeout=NETWORK_TIMEOUT)

    if _ref_exists(repo, f"refs/heads/{branch}"):
        _run_git(repo, ["checkout", branch])
        pull = _run_git(
            repo,
            ["pull", "--rebase", "--autostash", REMOTE, branch],
            check=False,
            timeout=NETWORK_TIMEOUT,
        )
        if pull.returncode != 0:
            conflicts = _run_git(repo, ["diff", "--name-only", "--diff-filter=U"])
            if conflicts.stdout.strip():
                raise PublishError(
                    "Merge conflicts while updating branch; resolve them and run again",
                    command=["git", "pull", "--rebase", "--autostash", REMOTE, branch],
                    stderr=pull.stderr,
                    path=repo,
                )
            log_warning(f"Could not update {branch} from {REMOTE}, continuing with local state")
        mode = "local"
    elif _ref_exists(repo, f"refs/remotes/{REMOTE}/{branch}"):
        log_info(f"Creating local branch {branch} from {REMOTE}")
        _run_git(repo, ["checkout", "-b", branch, "--track", f"{REMOTE}/{branch}"])
        mode = "tracking"
    else:
        log_info(f"Branch {branch} not found on {REMOTE}, creating orphan branch")
        _run_git(repo, ["checkout", "--orphan", branch])
        # Content was snapshotted before the switch; the new branch starts empty.
        _run_git(repo, ["rm", "-r", "-f", "--quiet", "--ignore-unmatch", "."])
        _run_git(repo, ["commit", "--allow-empty", "-m", f"Initialize {branch}"])
        mode = "orphan"

    log_success(f"On branch {branch} ({mode})")
    return mode


def commit_message(now: Optional[datetime] = None) -> str:
    stamp = (now or datetime.now()).strftime(COMMIT_TIMESTAMP_FORMAT)
    return f"Update site index - {stamp}"


def commit_and_push(
    repo: Path | str,
    paths: Sequence[str],
    branch: str,
    message: Optional[str] = None,
    push: bool = True,
) -> bool:
    """Commit the published paths and push them to the remote branch.

    Returns:
        False when the paths have no changes (nothing is committed),
        True otherwise.

    Raises:
        PublishError: If add, commit or push fails.
    """
    status = _run_git(repo, ["status", "--porcelain", "--"] + list(paths))
    if not status.stdout.strip():
        log_info("No changes to publish")
        return False

    _run_git(repo, ["add", "--"] + list(paths))
    _run_git(repo, ["commit", "-m", message or commit_message()])

    if push:
        log_info(f"Pushing to {REMOTE}/{branch}")
        _run_git(repo, ["push", REMOTE, branch], timeout=NETWORK_TIMEOUT)
        log_success(f"Pushed to {REMOTE}/{branch}")
    else:
        log_info("Skipping push")
    return True

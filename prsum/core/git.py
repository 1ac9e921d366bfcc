"""Thin wrapper around the `git` command line.

prsum only needs three things from git: reading and writing config keys and
listing pull request refs on a remote. All of them go through `run_git`, which
turns a failed invocation into a `GitCommandError`.
"""
from __future__ import annotations
from typing import List, Optional
import subprocess

from .errors import GitCommandError


def run_git(args: List[str]) -> str:
    """Run `git <args>` and return its stripped standard output.

    Raises:
        GitCommandError: If git is missing or exits with a non-zero status.
    """
    try:
        result = subprocess.run(
            ["git", *args],
            capture_output=True,
            text=True,
            check=True,
        )
    except FileNotFoundError as e:
        raise GitCommandError("git executable not found") from e
    except subprocess.CalledProcessError as e:
        detail = (e.stderr or "").strip() or f"exit status {e.returncode}"
        raise GitCommandError(f"git {' '.join(args)} failed: {detail}", e.returncode) from e
    return result.stdout.strip()


def config_get(key: str) -> Optional[str]:
    """Return the value of a git config key, or None when it is unset."""
    try:
        value = run_git(["config", "--get", key])
    except GitCommandError:
        return None
    return value or None


def config_set_global(key: str, value: str) -> None:
    run_git(["config", "--global", key, value])


def remote_url(remote: str = "origin") -> Optional[str]:
    return config_get(f"remote.{remote}.url")


def list_pull_refs(remote: str = "origin") -> str:
    """Return the raw `git ls-remote` listing of pull request head refs."""
    return run_git(["ls-remote", "--refs", remote, "pull/*/head"])

"""Repository detection from the configured git remote."""
from __future__ import annotations
import re

from . import git
from .errors import UnrecognizedRemoteError
from .models import RepositoryIdentity

# git@github.com:owner/repo(.git) and https://github.com/owner/repo(.git)
_REMOTE_RE = re.compile(r"github\.com[:/]([^/\s]+)/([^/\s]+?)(?:\.git)?/?$")


def parse_remote_url(url: str) -> RepositoryIdentity:
    """Extract the owner and repository name from a GitHub remote URL.

    Args:
        url: Remote URL in SSH (`git@github.com:owner/repo.git`) or HTTPS
            (`https://github.com/owner/repo`) form.

    Returns:
        The repository identity.

    Raises:
        UnrecognizedRemoteError: If the URL is not a GitHub repository URL.
    """
    match = _REMOTE_RE.search((url or "").strip())
    if not match:
        raise UnrecognizedRemoteError("Could not determine GitHub repository from remote URL.")
    owner, name = match.groups()
    return RepositoryIdentity(owner=owner, name=name)


def detect_repository(remote: str = "origin") -> RepositoryIdentity:
    """Read `remote.<remote>.url` from git config and parse it."""
    url = git.remote_url(remote)
    if not url:
        raise UnrecognizedRemoteError(
            f"Could not determine GitHub repository: remote '{remote}' is not configured."
        )
    return parse_remote_url(url)

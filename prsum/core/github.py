"""GitHub REST API calls used by prsum.

Two endpoints are used, each with a single request (first page only):

    GET /repos/{owner}/{repo}/pulls?state=open
    GET /repos/{owner}/{repo}/pulls/{number}/files

Requests are authenticated with `Authorization: Bearer <token>` when a token
was resolved, and are anonymous otherwise. No timeout is applied unless one is
configured in `Settings.http_timeout`.

Example:
    ```python
    from prsum.core.github import list_open_pulls, get_pull_files
    from prsum.core.models import RepositoryIdentity

    repo = RepositoryIdentity(owner="acme", name="widgets")
    pulls = list_open_pulls(repo, token=None)
    files = get_pull_files(repo, "12", token=None)
    ```
"""
from typing import Any, Dict, List, Optional

import httpx

from .config import Settings
from .models import FileChange, RepositoryIdentity
from . import console as out


def _headers(token: Optional[str], settings: Settings) -> Dict[str, str]:
    """Construct HTTP headers for GitHub API requests.

    Returns:
        Headers including User-Agent, Accept, API version, and Authorization
        if `token` is set.
    """
    h = {
        "User-Agent": settings.user_agent,
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
    }
    if token:
        h["Authorization"] = f"Bearer {token}"
    return h


def list_open_pulls(
    repo: RepositoryIdentity,
    token: Optional[str],
    settings: Settings | None = None,
) -> List[Dict[str, Any]]:
    """Return the raw open pull request objects for `repo`.

    A non-success status is reported on the console and yields an empty
    list. Transport errors (`httpx.HTTPError`) propagate to the caller.

    Args:
        repo: Repository to query.
        token: GitHub token, or None for anonymous access.
        settings: Runtime settings (API URL, user agent, timeout).

    Returns:
        List of pull request dictionaries as returned by the API.
    """
    s = settings or Settings()
    with httpx.Client(timeout=s.http_timeout, headers=_headers(token, s)) as client:
        r = client.get(
            f"{s.github_api_url}/repos/{repo.owner}/{repo.name}/pulls",
            params={"state": "open"},
        )
        if not r.is_success:
            out.error(f"GitHub API error: {r.status_code} {r.reason_phrase}")
            if r.status_code in (401, 403):
                out.error("Authentication failed.")
            return []
        data = r.json()
    if not isinstance(data, list):
        out.warn(f"Unexpected response listing PRs for {repo.full_name}; treating it as no PRs.")
        return []
    return data


def get_pull_files(
    repo: RepositoryIdentity,
    number: str,
    token: Optional[str],
    settings: Settings | None = None,
) -> List[FileChange]:
    """Return the files changed by pull request `number`.

    Never raises: a non-success status, a network error or a malformed
    payload is reported as a warning and yields an empty list.
    """
    s = settings or Settings()
    try:
        with httpx.Client(timeout=s.http_timeout, headers=_headers(token, s)) as client:
            r = client.get(f"{s.github_api_url}/repos/{repo.owner}/{repo.name}/pulls/{number}/files")
            if not r.is_success:
                out.warn(f"Could not fetch files for PR #{number}: {r.status_code} {r.reason_phrase}")
                return []
            return [
                FileChange(
                    filename=f["filename"],
                    status=f.get("status", "modified"),
                    additions=f.get("additions", 0),
                    deletions=f.get("deletions", 0),
                    changes=f.get("changes", 0),
                )
                for f in r.json()
            ]
    except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
        out.warn(f"Error fetching files for PR #{number}: {e}")
        return []

"""Open pull request discovery.

Pull requests come from two sources of different fidelity:

1. The GitHub REST API, which has titles, authors and creation dates.
2. `git ls-remote <remote> pull/*/head`, which only has PR numbers but works
   without the API and without authentication.

The ref listing is consulted only when the API produced zero entries,
whether because the repository has no open PRs or because the request
failed. Its numbers are joined with whatever API metadata is available, with
placeholders for numbers the API did not describe.
"""
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional
import re

import httpx

from . import console as out
from . import git
from .config import Settings
from .errors import DiscoveryError, GitCommandError, NoPullRequestsFound
from .github import list_open_pulls
from .models import (
    TITLE_NOT_AVAILABLE,
    UNKNOWN,
    UNKNOWN_TITLE,
    PullRequest,
    RepositoryIdentity,
)

PULL_REF_RE = re.compile(r"refs/pull/(\d+)/head")


def pull_from_api(entry: Dict[str, Any]) -> PullRequest:
    """Map a GitHub pull request object to a `PullRequest`."""
    user = entry.get("user") or {}
    return PullRequest(
        number=str(entry["number"]),
        title=entry.get("title") or UNKNOWN_TITLE,
        author=user.get("login") or UNKNOWN,
        created_at=entry.get("created_at") or UNKNOWN,
    )


def parse_pull_refs(listing: str) -> List[str]:
    """Extract PR numbers from `git ls-remote` output, in listing order."""
    numbers = []
    for line in listing.splitlines():
        match = PULL_REF_RE.search(line)
        if match:
            numbers.append(match.group(1))
    return numbers


def sort_newest_first(prs: Iterable[PullRequest]) -> List[PullRequest]:
    """Sort pull requests by creation time, newest first.

    Only PRs with a known timestamp move: they are sorted among the positions
    they already occupy, while PRs with an unknown timestamp keep their index.
    The sort is stable, so equal timestamps keep their input order.
    """
    result = list(prs)
    known = [i for i, pr in enumerate(result) if pr.created_datetime is not None]
    ordered = sorted((result[i] for i in known), key=lambda pr: pr.created_datetime, reverse=True)
    # sorted(reverse=True) keeps equal keys in input order
    for i, pr in zip(known, ordered):
        result[i] = pr
    return result


def reconcile(numbers: List[str], api_entries: List[PullRequest]) -> List[PullRequest]:
    """Join ref-listing numbers against API metadata by PR number.

    Every number appears exactly once in the result, in listing order. Numbers
    without API metadata get the "Unknown title" placeholder.
    """
    by_number = {pr.number: pr for pr in api_entries}
    result = []
    for number in numbers:
        pr = by_number.get(number)
        if pr is None:
            pr = PullRequest(number=number, title=UNKNOWN_TITLE, author=UNKNOWN, created_at=UNKNOWN)
        result.append(pr)
    return sort_newest_first(result)


def numbers_only(numbers: List[str]) -> List[PullRequest]:
    return [
        PullRequest(number=n, title=TITLE_NOT_AVAILABLE, author=UNKNOWN, created_at=UNKNOWN)
        for n in numbers
    ]


def _discover(repo: RepositoryIdentity, token: Optional[str], s: Settings) -> List[PullRequest]:
    api_entries = sort_newest_first(pull_from_api(e) for e in list_open_pulls(repo, token, s))
    if api_entries:
        return api_entries

    numbers = parse_pull_refs(git.list_pull_refs(s.remote))
    if not numbers:
        raise NoPullRequestsFound()
    return reconcile(numbers, api_entries)


def discover_pull_requests(
    repo: RepositoryIdentity,
    token: Optional[str],
    settings: Settings | None = None,
) -> List[PullRequest]:
    """Return the open pull requests of `repo`, newest first.

    Args:
        repo: Repository to inspect.
        token: GitHub token, or None for anonymous access.
        settings: Runtime settings.

    Returns:
        A non-empty list of pull requests.

    Raises:
        NoPullRequestsFound: If neither source knows of any open PR.
        DiscoveryError: If the API request and both ref listings failed.
    """
    s = settings or Settings()
    try:
        return _discover(repo, token, s)
    except (httpx.HTTPError, ValueError, KeyError, TypeError, GitCommandError) as e:
        out.error(f"Error fetching PRs: {e}")
        out.warn("Falling back to PR numbers only.")

    try:
        numbers = parse_pull_refs(git.list_pull_refs(s.remote))
    except GitCommandError as e:
        raise DiscoveryError(f"Failed to get PRs: {e.message}") from e
    if not numbers:
        raise NoPullRequestsFound()
    return numbers_only(numbers)

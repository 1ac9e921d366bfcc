"""Tests for open pull request discovery, fallback and reconciliation."""

import httpx
import pytest
from unittest.mock import MagicMock, patch

from prsum.core.config import Settings
from prsum.core.discovery import (
    discover_pull_requests,
    parse_pull_refs,
    pull_from_api,
    reconcile,
    sort_newest_first,
)
from prsum.core.errors import DiscoveryError, GitCommandError, NoPullRequestsFound
from prsum.core.models import (
    TITLE_NOT_AVAILABLE,
    UNKNOWN,
    UNKNOWN_TITLE,
    PullRequest,
    RepositoryIdentity,
)

REPO = RepositoryIdentity(owner="acme", name="widgets")

LS_REMOTE = (
    "3f2a9c0e1b\trefs/pull/12/head\n"
    "9b1d77aa02\trefs/pull/7/head\n"
)

API_PULLS = [
    {"number": 7, "title": "Fix typo", "user": {"login": "bob"}, "created_at": "2024-04-01T09:30:00Z"},
    {"number": 12, "title": "Add caching", "user": {"login": "alice"}, "created_at": "2024-05-02T10:00:00Z"},
]


def pr(number, created_at=UNKNOWN, title="t"):
    return PullRequest(number=number, title=title, author="someone", created_at=created_at)


class TestHelpers:
    """Test the pure parsing and ordering helpers."""

    def test_parse_pull_refs(self):
        assert parse_pull_refs(LS_REMOTE) == ["12", "7"]

    def test_parse_pull_refs_ignores_other_lines(self):
        listing = "abc\trefs/heads/main\n\nabc\trefs/pull/3/head\nabc\trefs/pull/x/head\n"
        assert parse_pull_refs(listing) == ["3"]

    def test_parse_pull_refs_empty(self):
        assert parse_pull_refs("") == []

    def test_pull_from_api(self):
        result = pull_from_api(API_PULLS[0])
        assert result.number == "7"
        assert result.title == "Fix typo"
        assert result.author == "bob"
        assert result.created_at == "2024-04-01T09:30:00Z"

    def test_pull_from_api_without_user(self):
        """A missing actor (deleted account) becomes "unknown"."""
        result = pull_from_api({"number": 3, "title": "Ghost", "user": None, "created_at": "2024-01-01T00:00:00Z"})
        assert result.author == UNKNOWN

    def test_sort_newest_first(self):
        prs = [pr("1", "2024-01-01T00:00:00Z"), pr("2", "2024-03-01T00:00:00Z"), pr("3", "2024-02-01T00:00:00Z")]
        assert [p.number for p in sort_newest_first(prs)] == ["2", "3", "1"]

    def test_sort_is_stable_for_equal_timestamps(self):
        prs = [pr("1", "2024-01-01T00:00:00Z"), pr("2", "2024-01-01T00:00:00Z"), pr("3", "2024-01-01T00:00:00Z")]
        assert [p.number for p in sort_newest_first(prs)] == ["1", "2", "3"]

    def test_sort_keeps_unknown_positions(self):
        prs = [
            pr("1", "2024-01-01T00:00:00Z"),
            pr("2"),
            pr("3", "2024-03-01T00:00:00Z"),
            pr("4"),
        ]
        assert [p.number for p in sort_newest_first(prs)] == ["3", "2", "1", "4"]

    def test_sort_all_unknown_is_identity(self):
        prs = [pr("9"), pr("4"), pr("6")]
        assert [p.number for p in sort_newest_first(prs)] == ["9", "4", "6"]


class TestReconcile:
    """Test joining ref-listing numbers with API metadata."""

    def test_join_is_total(self):
        api = [pr("7", "2024-04-01T09:30:00Z", title="Fix typo")]
        result = reconcile(["12", "7", "5"], api)
        assert sorted(p.number for p in result) == ["12", "5", "7"]
        assert len(result) == 3

    def test_metadata_substituted_and_placeholders(self):
        api = [pr("7", "2024-04-01T09:30:00Z", title="Fix typo")]
        result = {p.number: p for p in reconcile(["12", "7"], api)}
        assert result["7"].title == "Fix typo"
        assert result["12"].title == UNKNOWN_TITLE
        assert result["12"].author == UNKNOWN
        assert result["12"].created_at == UNKNOWN

    def test_api_entries_without_ref_are_dropped(self):
        api = [pr("7", "2024-04-01T09:30:00Z"), pr("99", "2024-04-02T09:30:00Z")]
        assert [p.number for p in reconcile(["7"], api)] == ["7"]

    def test_no_metadata_keeps_listing_order(self):
        assert [p.number for p in reconcile(["12", "7"], [])] == ["12", "7"]


def _response(status_code, payload=None, reason="OK"):
    r = MagicMock()
    r.status_code = status_code
    r.is_success = 200 <= status_code < 300
    r.reason_phrase = reason
    r.json.return_value = payload
    return r


class TestDiscoverPullRequests:
    """Test the primary path, the ref fallback and total failure handling."""

    @patch("prsum.core.git.list_pull_refs")
    @patch("httpx.Client")
    def test_primary_path_sorted(self, mock_client, mock_refs):
        mock_client.return_value.__enter__.return_value.get.return_value = _response(200, API_PULLS)

        prs = discover_pull_requests(REPO, token="tok", settings=Settings())

        assert [p.number for p in prs] == ["12", "7"]
        assert prs[0].author == "alice"
        mock_refs.assert_not_called()

    @patch("prsum.core.git.list_pull_refs", return_value=LS_REMOTE)
    @patch("httpx.Client")
    def test_http_404_falls_back_to_refs(self, mock_client, mock_refs, capsys):
        mock_client.return_value.__enter__.return_value.get.return_value = _response(404, reason="Not Found")

        prs = discover_pull_requests(REPO, token=None, settings=Settings())

        assert [p.number for p in prs] == ["12", "7"]
        assert all(p.title == UNKNOWN_TITLE for p in prs)
        assert all(p.author == UNKNOWN and p.created_at == UNKNOWN for p in prs)
        mock_refs.assert_called_once_with("origin")
        assert "404" in capsys.readouterr().out

    @patch("prsum.core.git.list_pull_refs", return_value=LS_REMOTE)
    @patch("httpx.Client")
    def test_empty_api_result_falls_back_to_refs(self, mock_client, mock_refs):
        mock_client.return_value.__enter__.return_value.get.return_value = _response(200, [])

        prs = discover_pull_requests(REPO, token="tok", settings=Settings())

        assert [p.number for p in prs] == ["12", "7"]

    @patch("prsum.core.git.list_pull_refs", return_value="")
    @patch("prsum.core.discovery.list_open_pulls", return_value=[])
    def test_nothing_found(self, mock_pulls, mock_refs):
        with pytest.raises(NoPullRequestsFound) as exc:
            discover_pull_requests(REPO, token=None, settings=Settings())
        assert exc.value.exit_code == 0

    @patch("prsum.core.git.list_pull_refs", return_value=LS_REMOTE)
    @patch("prsum.core.discovery.list_open_pulls", side_effect=httpx.ConnectError("network unreachable"))
    def test_transport_error_uses_numbers_only(self, mock_pulls, mock_refs, capsys):
        prs = discover_pull_requests(REPO, token=None, settings=Settings())

        assert [p.number for p in prs] == ["12", "7"]
        assert all(p.title == TITLE_NOT_AVAILABLE for p in prs)
        out = capsys.readouterr().out
        assert "Error fetching PRs" in out
        assert "Falling back to PR numbers only." in out

    @patch("prsum.core.git.list_pull_refs", side_effect=GitCommandError("could not read from remote"))
    @patch("prsum.core.discovery.list_open_pulls", side_effect=httpx.ConnectError("network unreachable"))
    def test_total_failure(self, mock_pulls, mock_refs):
        with pytest.raises(DiscoveryError) as exc:
            discover_pull_requests(REPO, token=None, settings=Settings())
        assert exc.value.exit_code == 1
        mock_refs.assert_called_once_with("origin")

    @patch("prsum.core.git.list_pull_refs", side_effect=[GitCommandError("flaky"), LS_REMOTE])
    @patch("prsum.core.discovery.list_open_pulls", return_value=[])
    def test_ref_listing_retried_once(self, mock_pulls, mock_refs):
        prs = discover_pull_requests(REPO, token=None, settings=Settings())
        assert [p.title for p in prs] == [TITLE_NOT_AVAILABLE, TITLE_NOT_AVAILABLE]

    @patch("prsum.core.git.list_pull_refs", return_value=LS_REMOTE)
    @patch("prsum.core.discovery.list_open_pulls", return_value=[])
    def test_uses_configured_remote(self, mock_pulls, mock_refs):
        discover_pull_requests(REPO, token=None, settings=Settings(remote="upstream"))
        mock_refs.assert_called_once_with("upstream")

"""Error types for prsum.

Every failure the CLI can report is a `PrsumError`. Each variant carries the
process exit code and the console style used to display it, so the top-level
handler only has to print the message and exit with the attached code.

Exit codes:
    0: graceful termination (no PRs, unsupported content type, user cancel)
    1: unrecoverable error
"""
from __future__ import annotations


class PrsumError(Exception):
    """Base error for everything prsum reports to the user."""

    exit_code: int = 1
    style: str = "red"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnrecognizedRemoteError(PrsumError):
    """The git remote does not point at a GitHub repository."""


class GitCommandError(PrsumError):
    """A `git` invocation failed or could not be started."""

    def __init__(self, message: str, returncode: int | None = None):
        super().__init__(message)
        self.returncode = returncode


class DiscoveryError(PrsumError):
    """Neither the API nor the ref listing produced pull requests."""


class MissingCredentialError(PrsumError):
    """A required credential is absent and the user declined to supply one."""


class CompletionAPIError(PrsumError):
    """The chat-completion endpoint reported an error."""


class NoPullRequestsFound(PrsumError):
    exit_code = 0
    style = "yellow"

    def __init__(self, message: str = "No open PRs found."):
        super().__init__(message)


class FeatureUnavailable(PrsumError):
    exit_code = 0
    style = "green"


class UserCancelled(PrsumError):
    exit_code = 0
    style = "yellow"

    def __init__(self, message: str = "\nExiting..."):
        super().__init__(message)

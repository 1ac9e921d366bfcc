"""AI summaries for open GitHub pull requests.

prsum runs inside a git checkout whose remote points at GitHub. It lists the
repository's open pull requests, lets you pick one, fetches its changed files
and asks a chat-completion model for a markdown summary, which is rendered in
the terminal.

Features:
    - GitHub token discovery from git config, with interactive fallback
    - Open PR discovery via the REST API, falling back to `git ls-remote`
    - Summaries under fixed headings (what changed, impact, tests, security)
    - Styled markdown rendering in the terminal

Quick Start:
    ```python
    import prsum

    repo = prsum.parse_remote_url("git@github.com:acme/widgets.git")
    prs = prsum.discover_pull_requests(repo, token=None)
    ```

CLI Usage:
    ```bash
    prsum
    prsum --remote upstream --model gpt-4o-mini
    ```
"""

__version__ = "0.1.0"

# Re-export main functionality for easy importing
from .core import (
    ChatCompletionSummarizer,
    ContentType,
    FileChange,
    PrsumError,
    Prompter,
    PullRequest,
    RepositoryIdentity,
    Settings,
    detect_repository,
    discover_pull_requests,
    get_pull_files,
    get_summarizer,
    load_settings,
    parse_remote_url,
    render_summary,
    resolve_github_token,
    resolve_openai_key,
)

__all__ = [
    "ChatCompletionSummarizer",
    "ContentType",
    "FileChange",
    "PrsumError",
    "Prompter",
    "PullRequest",
    "RepositoryIdentity",
    "Settings",
    "detect_repository",
    "discover_pull_requests",
    "get_pull_files",
    "get_summarizer",
    "load_settings",
    "parse_remote_url",
    "render_summary",
    "resolve_github_token",
    "resolve_openai_key",
]

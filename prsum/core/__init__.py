"""Core functionality for pull request summarization.

This module contains the core business logic for:
- Credential resolution
- Repository detection
- Pull request discovery and file retrieval
- Interactive selection
- Summary generation and rendering
- Configuration management
"""

from .config import Settings, load_settings
from .credentials import resolve_credential, resolve_github_token, resolve_openai_key
from .discovery import discover_pull_requests, reconcile, sort_newest_first
from .errors import PrsumError
from .github import get_pull_files, list_open_pulls
from .models import FileChange, PullRequest, RepositoryIdentity
from .presenter import render_summary
from .repository import detect_repository, parse_remote_url
from .selector import ContentType, Prompter
from .summarizer import ChatCompletionSummarizer, get_summarizer

__all__ = [
    "Settings",
    "load_settings",
    "resolve_credential",
    "resolve_github_token",
    "resolve_openai_key",
    "discover_pull_requests",
    "reconcile",
    "sort_newest_first",
    "PrsumError",
    "get_pull_files",
    "list_open_pulls",
    "FileChange",
    "PullRequest",
    "RepositoryIdentity",
    "render_summary",
    "detect_repository",
    "parse_remote_url",
    "ContentType",
    "Prompter",
    "ChatCompletionSummarizer",
    "get_summarizer",
]

"""Command-line interface for prsum.

This module wires the pipeline together: it detects the GitHub repository
from the git remote, discovers open pull requests, lets the user pick one and
a content type, fetches the PR's changed files and prints an AI-generated
summary.

Usage:
    ```bash
    # Summarize a PR of the repository in the current directory
    prsum

    # Use another remote and model
    prsum --remote upstream --model gpt-4o-mini
    ```

Configuration:
    The CLI supports configuration via:
    - Command-line arguments (highest priority)
    - Environment variables (and a .env file)
    - config.toml file (lowest priority)

Exit codes:
    0 on success, when no open PRs exist, for unsupported content types and
    when the user cancels; 1 on any other error.
"""
from __future__ import annotations
from typing import List, Optional
import argparse
import signal
import sys

from .. import __version__
from ..core import console as out
from ..core.config import Settings, load_settings
from ..core.credentials import resolve_github_token, resolve_openai_key
from ..core.discovery import discover_pull_requests
from ..core.errors import PrsumError, UserCancelled
from ..core.github import get_pull_files
from ..core.presenter import render_summary
from ..core.repository import detect_repository
from ..core.selector import Prompter, ensure_supported, select_content_type, select_pull_request
from ..core.summarizer import get_summarizer


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="prsum",
        description="Pick an open pull request of the current repository and get an AI summary.",
    )
    p.add_argument("--config", help="Path to config.toml (defaults to ./config.toml if present)")
    p.add_argument("--remote", help="git remote pointing at GitHub (default: origin)")
    p.add_argument("--model", help="Completion model (default: gpt-4o-mini-2024-07-18)")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def summarize_pull_request(s: Settings, prompter: Prompter) -> None:
    """Run the interactive pipeline end to end.

    Raises:
        PrsumError: For every outcome that ends the run early, fatal or not.
    """
    repo = detect_repository(s.remote)
    token = resolve_github_token(prompter, s)

    prs = discover_pull_requests(repo, token, s)
    pr = select_pull_request(prs, prompter)

    out.success(f"\nSelected PR: #{pr.number}")
    out.info("\nFetching PR details and changed files...")
    pr = pr.with_files(get_pull_files(repo, pr.number, token, s))

    content_type = select_content_type(prompter)
    ensure_supported(content_type)

    summarizer = get_summarizer(
        content_type.value,
        api_key=resolve_openai_key(prompter, s),
        model=s.model,
        base_url=s.llm_base_url,
        temperature=s.temperature,
        top_p=s.top_p,
        max_tokens=s.max_tokens,
        timeout=s.http_timeout,
    )
    render_summary(summarizer.summarize(pr))


def _report(e: PrsumError) -> int:
    out.console.print(e.message, style=e.style, markup=False)
    return e.exit_code


def run(argv: Optional[List[str]] = None, prompter: Optional[Prompter] = None) -> int:
    """Parse arguments, run the pipeline and return the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        s = load_settings(args.config or "config.toml")
        if args.remote:
            s.remote = args.remote
        if args.model:
            s.model = args.model
        summarize_pull_request(s, prompter or Prompter())
    except KeyboardInterrupt:
        return _report(UserCancelled())
    except PrsumError as e:
        return _report(e)
    except Exception as e:
        out.error(f"Error: {e}")
        return 1
    return 0


def _interrupt(signum, frame):
    raise KeyboardInterrupt


def main() -> None:
    """Entry point for the `prsum` console script."""
    signal.signal(signal.SIGTERM, _interrupt)
    sys.exit(run())


if __name__ == "__main__":
    main()

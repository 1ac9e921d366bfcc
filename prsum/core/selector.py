"""Interactive prompts and the pull request / content type selections.

All terminal interaction goes through a `Prompter`, so the pipeline can be
driven by a scripted prompter in tests.
"""
from __future__ import annotations
from enum import Enum
from typing import Any, List, Sequence, Tuple

import questionary
from questionary import Choice

from .errors import FeatureUnavailable, UserCancelled
from .models import TITLE_NOT_AVAILABLE, PullRequest

HOSTED_ONLY_MESSAGE = (
    "\nOnly Available in Hosted or Enterprise version. Get started here: https://matterai.dev"
)


class Prompter:
    """questionary-based implementation of the three prompt kinds prsum needs.

    questionary's `.ask()` returns None when the user presses Ctrl-C; that,
    like an interrupt or EOF escaping the prompt, becomes `UserCancelled`.
    """

    def _ask(self, question: questionary.Question) -> Any:
        try:
            answer = question.ask()
        except (KeyboardInterrupt, EOFError):
            raise UserCancelled() from None
        if answer is None:
            raise UserCancelled()
        return answer

    def confirm(self, message: str, default: bool = True) -> bool:
        return self._ask(questionary.confirm(message, default=default))

    def password(self, message: str) -> str:
        return self._ask(questionary.password(f"{message}:"))

    def select(self, message: str, choices: Sequence[Tuple[str, Any]]) -> Any:
        """Show a single-choice list and return the value of the chosen entry."""
        return self._ask(
            questionary.select(
                message,
                choices=[Choice(title=label, value=value) for label, value in choices],
                instruction="(Use arrow keys)",
            )
        )


class ContentType(str, Enum):
    SUMMARY = "summary"
    CODE_REVIEW = "codeReview"
    EXPLANATION = "explanation"

    @property
    def label(self) -> str:
        return {
            ContentType.SUMMARY: "AI Summary",
            ContentType.CODE_REVIEW: "AI Code Review",
            ContentType.EXPLANATION: "AI Explanation",
        }[self]


SUPPORTED_CONTENT_TYPES = frozenset({ContentType.SUMMARY})


def pull_request_label(pr: PullRequest) -> str:
    """Menu label for a pull request.

    PRs known only by number (title "Title not available") are shown as
    `PR #<number>`.
    """
    if pr.title == TITLE_NOT_AVAILABLE:
        return f"PR #{pr.number}"
    return f"PR #{pr.number}: {pr.title} (by @{pr.author})"


def select_pull_request(prs: List[PullRequest], prompter: Prompter) -> PullRequest:
    number = prompter.select(
        "Select a PR:",
        [(pull_request_label(pr), pr.number) for pr in prs],
    )
    return next(pr for pr in prs if pr.number == number)


def select_content_type(prompter: Prompter) -> ContentType:
    return prompter.select(
        "What would you like to generate?",
        [(ct.label, ct) for ct in ContentType],
    )


def ensure_supported(content_type: ContentType) -> None:
    """Raise `FeatureUnavailable` for content types this tool does not generate."""
    if content_type not in SUPPORTED_CONTENT_TYPES:
        raise FeatureUnavailable(HOSTED_ONLY_MESSAGE)

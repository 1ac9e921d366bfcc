"""Shared fixtures for the prsum test suite."""

import pytest

from prsum.core.models import PullRequest


class ScriptedPrompter:
    """Prompter double that replays canned answers and records questions."""

    def __init__(self, confirms=(), passwords=(), selections=()):
        self.confirms = list(confirms)
        self.passwords = list(passwords)
        self.selections = list(selections)
        self.asked = []

    def confirm(self, message, default=True):
        self.asked.append(("confirm", message))
        return self.confirms.pop(0)

    def password(self, message):
        self.asked.append(("password", message))
        return self.passwords.pop(0)

    def select(self, message, choices):
        self.asked.append(("select", message, [label for label, _ in choices]))
        answer = self.selections.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        assert answer in [value for _, value in choices]
        return answer


@pytest.fixture
def scripted_prompter():
    return ScriptedPrompter


@pytest.fixture
def sample_prs():
    return [
        PullRequest(number="12", title="Add caching", author="alice", created_at="2024-05-02T10:00:00Z"),
        PullRequest(number="7", title="Fix typo", author="bob", created_at="2024-04-01T09:30:00Z"),
    ]

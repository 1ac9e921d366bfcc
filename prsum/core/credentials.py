"""Credential resolution for the GitHub and completion APIs.

Credentials are resolved through an ordered chain of sources. Each source
exposes `attempt()`, returning the secret or None on a miss, and the first
hit wins:

    GitHub token:  git config github.token -> git config hub.oauthtoken
                   -> interactive prompt (saved to global git config)
    LLM API key:   $OPENAI_API_KEY -> interactive prompt (session only)

Example:
    ```python
    from prsum.core.credentials import resolve_github_token
    from prsum.core.selector import Prompter

    token = resolve_github_token(Prompter())
    ```
"""
from __future__ import annotations
from typing import Callable, Iterable, List, Optional, Protocol
import os

from . import git
from .config import Settings
from .errors import GitCommandError, MissingCredentialError
from . import console as out
from .selector import Prompter


class CredentialSource(Protocol):
    name: str

    def attempt(self) -> Optional[str]:
        ...


class GitConfigSource:
    """Read-only lookup of a git config key."""

    def __init__(self, key: str):
        self.key = key
        self.name = f"git config {key}"

    def attempt(self) -> Optional[str]:
        value = git.config_get(self.key)
        return value.strip() if value else None


class EnvironmentSource:
    """Read-only lookup of an environment variable."""

    def __init__(self, var: str):
        self.var = var
        self.name = f"${var}"

    def attempt(self) -> Optional[str]:
        value = os.environ.get(self.var, "").strip()
        return value or None


class InteractiveSource:
    """Ask the user for a secret, optionally persisting what they enter.

    Args:
        prompter: Prompter used for the confirm and password prompts.
        question: Yes/no question asked before prompting for the secret.
        prompt: Label of the password prompt.
        instructions: Lines printed before the password prompt.
        empty_message: Shown when the user submits an empty value.
        persist: Called with the entered value; a `GitCommandError` or
            `OSError` from it is reported as a warning and ignored.
        after_entry: Lines printed after the secret was entered.
        preamble: Lines printed before the yes/no question.
        on_decline: Lines printed when the user declines.
    """

    def __init__(
        self,
        prompter: Prompter,
        question: str,
        prompt: str,
        instructions: Iterable[str] = (),
        empty_message: str = "Value cannot be empty",
        persist: Optional[Callable[[str], None]] = None,
        persisted_message: str = "Saved.",
        persist_failed_message: str = "Could not save the value. It will only be used for this session.",
        after_entry: Iterable[str] = (),
        preamble: Iterable[str] = (),
        on_decline: Iterable[str] = (),
    ):
        self.name = "interactive"
        self.prompter = prompter
        self.question = question
        self.prompt = prompt
        self.instructions = list(instructions)
        self.empty_message = empty_message
        self.persist = persist
        self.persisted_message = persisted_message
        self.persist_failed_message = persist_failed_message
        self.after_entry = list(after_entry)
        self.preamble = list(preamble)
        self.on_decline = list(on_decline)

    def attempt(self) -> Optional[str]:
        for line in self.preamble:
            out.warn(line)
        if not self.prompter.confirm(self.question, default=True):
            for line in self.on_decline:
                out.warn(line)
            return None

        if self.instructions:
            out.console.print()
            for line in self.instructions:
                out.info(line)
            out.console.print()

        value = self.prompter.password(self.prompt).strip()
        while not value:
            out.error(self.empty_message)
            value = self.prompter.password(self.prompt).strip()

        if self.persist is not None:
            try:
                self.persist(value)
                out.success(self.persisted_message)
            except (GitCommandError, OSError):
                out.warn(self.persist_failed_message)

        for line in self.after_entry:
            out.warn(line)
        return value


def resolve_credential(sources: Iterable[CredentialSource]) -> Optional[str]:
    """Return the first secret produced by `sources`, or None if all miss."""
    for source in sources:
        value = source.attempt()
        if value:
            return value
    return None


def github_token_sources(prompter: Prompter, settings: Settings | None = None) -> List[CredentialSource]:
    s = settings or Settings()
    sources: List[CredentialSource] = [GitConfigSource(s.token_key)]
    sources += [GitConfigSource(key) for key in s.legacy_token_keys]
    sources.append(
        InteractiveSource(
            prompter,
            question="No GitHub token found. Would you like to enter a personal access token?",
            prompt="Enter your GitHub personal access token",
            instructions=[
                "To create a personal access token:",
                "1. Go to https://github.com/settings/tokens",
                "2. Click 'Generate new token'",
                "3. Give it a name (e.g., 'prsum')",
                "4. Select the 'repo' scope",
                "5. Click 'Generate token'",
                "6. Copy the token and paste it below",
            ],
            empty_message="Token cannot be empty",
            persist=lambda token: git.config_set_global(s.token_key, token),
            persisted_message="Token saved to git config.",
            persist_failed_message="Could not save token to git config. It will only be used for this session.",
            on_decline=[
                "Proceeding without authentication.",
                "For private repositories, set your token with:",
                f"  git config --global {s.token_key} YOUR_TOKEN",
            ],
        )
    )
    return sources


def openai_key_sources(prompter: Prompter, settings: Settings | None = None) -> List[CredentialSource]:
    s = settings or Settings()
    return [
        EnvironmentSource(s.api_key_env),
        InteractiveSource(
            prompter,
            question="Would you like to enter an OpenAI API key?",
            preamble=["\nNo OpenAI API key found in environment variables."],
            prompt="Enter your OpenAI API key",
            instructions=[
                "To get an OpenAI API key:",
                "1. Go to https://platform.openai.com/api-keys",
                "2. Sign in or create an account",
                "3. Click 'Create new secret key'",
                "4. Copy the key and paste it below",
            ],
            empty_message="API key cannot be empty",
            after_entry=[
                "\nTip: To avoid entering the key each time, set it as an environment variable:",
                f"  export {s.api_key_env}=your_api_key",
            ],
        ),
    ]


def resolve_github_token(prompter: Prompter, settings: Settings | None = None) -> Optional[str]:
    """Resolve the GitHub token, returning None for anonymous access."""
    return resolve_credential(github_token_sources(prompter, settings))


def resolve_openai_key(prompter: Prompter, settings: Settings | None = None) -> str:
    """Resolve the completion API key.

    Raises:
        MissingCredentialError: If no key is configured and the user declines
            to enter one.
    """
    key = resolve_credential(openai_key_sources(prompter, settings))
    if not key:
        raise MissingCredentialError("Cannot generate AI summary without an OpenAI API key.")
    return key

"""Pull request summarization through a chat-completion API.

The prompt is a fixed system instruction plus a user message embedding the
selected pull request (including its changed files) as JSON. The completion is
requested from an OpenAI-compatible `/v1/chat/completions` endpoint and the
returned markdown is handed back unchanged.

Example:
    ```python
    from prsum.core.summarizer import get_summarizer

    summarizer = get_summarizer("summary", api_key="sk-...")
    markdown = summarizer.summarize(pr)
    ```
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional

import httpx
from langchain_core.prompts import ChatPromptTemplate

from .config import api_root
from .errors import CompletionAPIError
from .models import PullRequest

SYSTEM_PROMPT = (
    "You are a senior software engineer whose job is to generate a summary "
    "for a GitHub pull request."
)

SUMMARY_HEADINGS = [
    "PR Title",
    "🔄 What Changed",
    "🔍 Impact of the Change",
    "📁 Total Files Changed",
    "🧪 Test Added (explain each test in detail)",
    "🔒 Security Vulnerabilities",
]

USER_TEMPLATE = (
    "This is the PR Data in JSON format: {pr_json}. "
    "Return the generated Summary under the following headings "
    + ", ".join(SUMMARY_HEADINGS)
    + "."
)

SUMMARY_PROMPT = ChatPromptTemplate.from_messages(
    [("system", SYSTEM_PROMPT), ("human", USER_TEMPLATE)]
)

# langchain message types -> chat-completion roles
_ROLES = {"system": "system", "human": "user", "ai": "assistant"}


def build_messages(pr: PullRequest) -> List[Dict[str, str]]:
    """Render the summary prompt for `pr` as chat-completion messages."""
    messages = SUMMARY_PROMPT.format_messages(pr_json=pr.to_prompt_json())
    return [{"role": _ROLES[m.type], "content": m.content} for m in messages]


class ChatCompletionSummarizer:
    """Client for an OpenAI-compatible chat-completion endpoint.

    Attributes:
        api_key: Bearer token for the completion API.
        model: Model name sent with each request.
        base_url: API base URL, without the `/v1/...` path.
        temperature: Sampling temperature.
        top_p: Nucleus sampling parameter.
        max_tokens: Completion length limit.
        timeout: Request timeout in seconds, None to wait indefinitely.
    """

    def __init__(self, api_key: str,
                 model: str = "gpt-4o-mini-2024-07-18",
                 base_url: str = "https://api.openai.com",
                 temperature: float = 0.6,
                 top_p: float = 1.0,
                 max_tokens: int = 4096,
                 timeout: Optional[float] = None):
        self.api_key = api_key
        self.model = model
        self.base_url = api_root(base_url)
        self.temperature = temperature
        self.top_p = top_p
        self.max_tokens = max_tokens
        self.timeout = timeout

    def build_payload(self, pr: PullRequest) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": build_messages(pr),
            "temperature": self.temperature,
            "top_p": self.top_p,
            "max_tokens": self.max_tokens,
        }

    def summarize(self, pr: PullRequest) -> str:
        """Request a markdown summary of `pr`.

        Args:
            pr: The selected pull request, with its changed files.

        Returns:
            The markdown content of the first completion choice.

        Raises:
            CompletionAPIError: If the request fails or the response carries
                an `error` field or no completion content.
        """
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        try:
            with httpx.Client(timeout=self.timeout) as client:
                r = client.post(
                    f"{self.base_url}/v1/chat/completions",
                    headers=headers,
                    json=self.build_payload(pr),
                )
                data = r.json()
        except httpx.HTTPError as e:
            raise CompletionAPIError(f"OpenAI API request failed: {e}") from e
        except ValueError as e:
            raise CompletionAPIError(f"OpenAI API returned an invalid response: {e}") from e

        error = data.get("error") if isinstance(data, dict) else None
        if error:
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise CompletionAPIError(f"OpenAI API error: {message}")

        try:
            return data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise CompletionAPIError("OpenAI API returned no summary content.") from e


def get_summarizer(kind: str, **kwargs) -> ChatCompletionSummarizer:
    """Factory returning the summarizer for a content type.

    Raises:
        ValueError: If `kind` has no summarizer.
    """
    kind = (kind or "summary").lower()
    if kind == "summary":
        return ChatCompletionSummarizer(**kwargs)
    raise ValueError(f"Unknown summarizer kind: {kind}")

"""Configuration management for prsum.

This module handles loading and merging configuration from multiple sources:
1. Environment variables (highest priority)
2. TOML configuration file (medium priority)
3. Default values (lowest priority)

A `.env` file in the working directory is loaded into the environment first,
so variables such as `OPENAI_API_KEY` can live there.

Example config.toml:
    ```toml
    [github]
    remote = "origin"
    token_key = "github.token"

    [llm]
    model = "gpt-4o-mini-2024-07-18"
    temperature = 0.6
    ```

Environment Variables:
    GITHUB_API_URL: Override the GitHub REST API base URL
    PRSUM_REMOTE: Override the git remote used for repository detection
    OPENAI_BASE_URL: Override the chat-completion base URL (with or without `/v1`)
    PRSUM_MODEL: Override the completion model
"""
from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
import os
import tomllib  # Python 3.11+

from dotenv import load_dotenv


@dataclass
class Settings:
    """Runtime configuration derived from `config.toml` and environment.

    Attributes:
        github_api_url: Base URL of the GitHub REST API.
        user_agent: Value of the User-Agent header sent to GitHub.
        remote: Name of the git remote pointing at GitHub.
        token_key: git config key the GitHub token is read from and saved to.
        legacy_token_keys: Read-only git config keys tried after `token_key`.
        llm_base_url: Base URL of the chat-completion API, without `/v1`.
        model: Completion model name.
        temperature: Sampling temperature.
        top_p: Nucleus sampling parameter.
        max_tokens: Completion length limit.
        api_key_env: Environment variable holding the LLM API key.
        http_timeout: Timeout for HTTP calls in seconds, None to wait forever.
    """

    # GitHub
    github_api_url: str = "https://api.github.com"
    user_agent: str = "prsum-cli"
    remote: str = "origin"
    token_key: str = "github.token"
    legacy_token_keys: list[str] = field(default_factory=lambda: ["hub.oauthtoken"])

    # Completion API
    llm_base_url: str = "https://api.openai.com"
    model: str = "gpt-4o-mini-2024-07-18"
    temperature: float = 0.6
    top_p: float = 1.0
    max_tokens: int = 4096
    api_key_env: str = "OPENAI_API_KEY"

    http_timeout: float | None = None


def api_root(url: str) -> str:
    """Strip a trailing slash and `/v1` from a chat-completion base URL.

    Both `https://api.openai.com` and `https://api.openai.com/v1` (the form
    the OpenAI SDKs use for `OPENAI_BASE_URL`) yield `https://api.openai.com`.
    """
    url = url.rstrip("/")
    if url.endswith("/v1"):
        url = url[: -len("/v1")]
    return url


def load_config(path: str = "config.toml") -> dict:
    """Load a TOML config file into a dictionary.

    Args:
        path: Path to the TOML configuration file.

    Returns:
        Dictionary containing configuration data, or empty dict if file missing.
    """
    p = Path(path)
    if not p.exists():
        return {}
    with p.open("rb") as f:
        return tomllib.load(f)


def load_settings(config_path: str | None = None) -> Settings:
    """Create a `Settings` object from config file and environment variables.

    Args:
        config_path: Path to TOML config file. Defaults to "config.toml".

    Returns:
        Settings object with merged configuration from all sources.
    """
    load_dotenv()
    cfg = load_config(config_path or "config.toml")

    s = Settings()

    # github section
    gh = cfg.get("github", {})
    s.github_api_url = os.getenv("GITHUB_API_URL", gh.get("api_url", s.github_api_url)).rstrip("/")
    s.user_agent = gh.get("user_agent", s.user_agent)
    s.remote = os.getenv("PRSUM_REMOTE", gh.get("remote", s.remote))
    s.token_key = gh.get("token_key", s.token_key)
    s.legacy_token_keys = list(gh.get("legacy_token_keys", s.legacy_token_keys))

    # llm section
    llm = cfg.get("llm", {})
    s.llm_base_url = api_root(os.getenv("OPENAI_BASE_URL", llm.get("base_url", s.llm_base_url)))
    s.model = os.getenv("PRSUM_MODEL", llm.get("model", s.model))
    s.temperature = float(llm.get("temperature", s.temperature))
    s.top_p = float(llm.get("top_p", s.top_p))
    s.max_tokens = int(llm.get("max_tokens", s.max_tokens))
    s.api_key_env = llm.get("api_key_env", s.api_key_env)

    # http section
    http = cfg.get("http", {})
    timeout = http.get("timeout")
    s.http_timeout = float(timeout) if timeout is not None else None

    return s

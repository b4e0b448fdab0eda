"""Collaborator configuration.

Credentials, endpoints and timeouts are passed to collaborators explicitly
through these frozen dataclasses; nothing in the library reads the process
environment. The CLI is the only place environment variables are consulted.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from lprojfill.constants import (
    DEFAULT_TIMEOUT,
    GITHUB_API_URL,
    GITHUB_API_VERSION,
    LIBRETRANSLATE_URL,
)

__all__ = ["GitHubConfig", "TranslatorConfig"]


@dataclass(frozen=True, slots=True)
class GitHubConfig:
    """Immutable configuration for GitHub code search.

    Code search requires an authenticated request; the token is a personal
    access token with public repository read access.

    Attributes:
        token: GitHub access token
        api_url: REST API root (GitHub Enterprise deployments override it)
        api_version: Value of the X-GitHub-Api-Version header
        timeout: Per-request timeout in seconds
        max_results: Maximum number of search hits considered per phrase

    Example:
        >>> config = GitHubConfig(token="ghp_example")
        >>> config.api_url
        'https://api.github.com'
    """

    token: str
    api_url: str = GITHUB_API_URL
    api_version: str = GITHUB_API_VERSION
    timeout: float = DEFAULT_TIMEOUT
    max_results: int = 10

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If token is empty, timeout is not positive or
                max_results is outside 1..100 (the API page size limit)
        """
        if not self.token:
            msg = "GitHub token is required for code search"
            raise ValueError(msg)
        if self.timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)
        if not 1 <= self.max_results <= 100:
            msg = "max_results must be between 1 and 100"
            raise ValueError(msg)

    def __repr__(self) -> str:
        """Return representation with the token redacted."""
        return f"GitHubConfig(api_url={self.api_url!r}, token='***')"


@dataclass(frozen=True, slots=True)
class TranslatorConfig:
    """Immutable configuration for a LibreTranslate-compatible service.

    Attributes:
        url: Service root; ``/translate`` is appended
        api_key: API key, required by hosted instances, optional self-hosted
        timeout: Per-request timeout in seconds
    """

    url: str = LIBRETRANSLATE_URL
    api_key: str | None = None
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If url is empty or timeout is not positive
        """
        if not self.url:
            msg = "Translation service url is required"
            raise ValueError(msg)
        if self.timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)

    def __repr__(self) -> str:
        """Return representation with the API key redacted."""
        key = "***" if self.api_key else None
        return f"TranslatorConfig(url={self.url!r}, api_key={key!r})"

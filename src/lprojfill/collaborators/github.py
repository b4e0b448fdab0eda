"""GitHub code search collaborator.

Finds ``.strings`` files under ``<locale>.lproj`` directories in public
repositories that contain a phrase, and fetches their raw content through
the REST contents API.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from lprojfill.collaborators.protocols import ResourceReference
from lprojfill.config import GitHubConfig
from lprojfill.constants import STRINGS_EXTENSION
from lprojfill.diagnostics import CollaboratorError
from lprojfill.locale_utils import lproj_dir_name
from lprojfill.strings.parser import resolve_path_locale
from lprojfill.types import LocaleCode, Phrase

__all__ = ["GitHubCodeSearch", "build_query"]

logger = logging.getLogger(__name__)

_NAME = "github"
_JSON_MEDIA_TYPE = "application/vnd.github+json"
_RAW_MEDIA_TYPE = "application/vnd.github.raw+json"


def build_query(phrase: Phrase, target_locale: LocaleCode) -> str:
    """Build a code search query for ``phrase`` in ``target_locale`` tables.

    Double quotes cannot be escaped inside a quoted search term, so they are
    replaced with spaces.

    Example:
        >>> build_query("Activity", "de")
        '"Activity" extension:strings path:de.lproj'
    """
    term = phrase.replace('"', " ").strip()
    extension = STRINGS_EXTENSION.lstrip(".")
    return f'"{term}" extension:{extension} path:{lproj_dir_name(target_locale)}'


class GitHubCodeSearch:
    """CodeSearch implementation backed by the GitHub REST API.

    Args:
        config: Credentials and endpoint settings
        client: Optional shared ``httpx.AsyncClient``. When omitted a client
            is opened per request. Callers passing a client own its lifecycle.
    """

    __slots__ = ("_client", "_config")

    def __init__(self, config: GitHubConfig, client: httpx.AsyncClient | None = None) -> None:
        self._config = config
        self._client = client

    def _headers(self, accept: str) -> dict[str, str]:
        return {
            "Accept": accept,
            "Authorization": f"Bearer {self._config.token}",
            "X-GitHub-Api-Version": self._config.api_version,
        }

    async def _get(
        self,
        url: str,
        *,
        accept: str,
        params: Mapping[str, str | int] | None = None,
    ) -> httpx.Response:
        """GET ``url`` and map every failure to CollaboratorError."""
        try:
            if self._client is not None:
                resp = await self._client.get(
                    url,
                    params=params,
                    headers=self._headers(accept),
                    timeout=self._config.timeout,
                )
            else:
                async with httpx.AsyncClient(timeout=self._config.timeout) as client:
                    resp = await client.get(url, params=params, headers=self._headers(accept))
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status in (403, 429):
                msg = f"GitHub rejected the request (rate limit or permissions): HTTP {status}"
            elif status == 401:
                msg = "GitHub rejected the access token: HTTP 401"
            else:
                msg = f"GitHub request failed: HTTP {status}"
            raise CollaboratorError(msg, collaborator=_NAME, status_code=status) from e
        except httpx.HTTPError as e:
            msg = f"GitHub request failed: {e}"
            raise CollaboratorError(msg, collaborator=_NAME) from e
        return resp

    async def search(
        self, phrase: Phrase, target_locale: LocaleCode
    ) -> list[ResourceReference]:
        """Return string tables for ``target_locale`` that mention ``phrase``.

        Hits are returned in API order (oldest indexed first). Hits whose path
        resolves to a different locale are dropped: ``path:`` qualifiers match
        substrings, so ``path:de.lproj`` also matches ``ade.lproj``.

        Raises:
            CollaboratorError: On HTTP or transport failure, or a malformed response
        """
        query = build_query(phrase, target_locale)
        logger.debug("GitHub code search: %s", query)
        resp = await self._get(
            f"{self._config.api_url}/search/code",
            accept=_JSON_MEDIA_TYPE,
            params={
                "q": query,
                "sort": "indexed",
                "order": "asc",
                "per_page": self._config.max_results,
            },
        )

        try:
            payload: dict[str, Any] = resp.json()
            items: list[dict[str, Any]] = payload["items"]
        except (ValueError, KeyError, TypeError) as e:
            msg = f"Malformed GitHub search response: {e}"
            raise CollaboratorError(msg, collaborator=_NAME) from e

        references: list[ResourceReference] = []
        for item in items[: self._config.max_results]:
            path = item.get("path", "")
            url = item.get("url")
            if not url or resolve_path_locale(path) != target_locale:
                continue
            repository = (item.get("repository") or {}).get("full_name", "")
            references.append(ResourceReference(repository=repository, path=path, url=url))

        logger.info(
            "GitHub search for '%s' (%s): %d candidate(s)", phrase, target_locale, len(references)
        )
        return references

    async def fetch(self, reference: ResourceReference) -> bytes:
        """Download the raw bytes of ``reference``.

        Raises:
            CollaboratorError: On HTTP or transport failure
        """
        logger.debug("Fetching %s:%s", reference.repository, reference.path)
        resp = await self._get(reference.url, accept=_RAW_MEDIA_TYPE)
        return resp.content

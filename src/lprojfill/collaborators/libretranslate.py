"""Machine-translation collaborator for LibreTranslate-compatible services.

Python 3.13+.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from lprojfill.config import TranslatorConfig
from lprojfill.diagnostics import CollaboratorError
from lprojfill.locale_utils import to_language_code
from lprojfill.types import LocaleCode, Phrase

__all__ = ["LibreTranslateTranslator"]

logger = logging.getLogger(__name__)

_NAME = "libretranslate"


class LibreTranslateTranslator:
    """MachineTranslator backed by the LibreTranslate ``/translate`` endpoint.

    Locale codes are reduced to bare language codes ("pt-BR" -> "pt")
    because the service only knows languages.

    Args:
        config: Endpoint, API key and timeout
        client: Optional shared ``httpx.AsyncClient``; callers passing one
            own its lifecycle
    """

    __slots__ = ("_client", "_config")

    def __init__(
        self, config: TranslatorConfig, client: httpx.AsyncClient | None = None
    ) -> None:
        self._config = config
        self._client = client

    def _payload(
        self, phrase: Phrase, source_lang: LocaleCode, target_lang: LocaleCode
    ) -> dict[str, str]:
        try:
            source = to_language_code(source_lang)
            target = to_language_code(target_lang)
        except ValueError as e:
            raise CollaboratorError(str(e), collaborator=_NAME) from e

        payload = {"q": phrase, "source": source, "target": target, "format": "text"}
        if self._config.api_key:
            payload["api_key"] = self._config.api_key
        return payload

    async def translate(
        self, phrase: Phrase, source_lang: LocaleCode, target_lang: LocaleCode
    ) -> str:
        """Translate ``phrase`` from ``source_lang`` to ``target_lang``.

        Raises:
            CollaboratorError: On unknown locale, HTTP or transport failure,
                or a response without ``translatedText``
        """
        url = f"{self._config.url.rstrip('/')}/translate"
        payload = self._payload(phrase, source_lang, target_lang)

        try:
            if self._client is not None:
                resp = await self._client.post(url, json=payload, timeout=self._config.timeout)
            else:
                async with httpx.AsyncClient(timeout=self._config.timeout) as client:
                    resp = await client.post(url, json=payload)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            msg = f"Translation request failed: HTTP {status}"
            raise CollaboratorError(msg, collaborator=_NAME, status_code=status) from e
        except httpx.HTTPError as e:
            msg = f"Translation request failed: {e}"
            raise CollaboratorError(msg, collaborator=_NAME) from e

        try:
            data: dict[str, Any] = resp.json()
            translated = data["translatedText"]
        except (ValueError, KeyError, TypeError) as e:
            msg = f"Malformed translation response: {e}"
            raise CollaboratorError(msg, collaborator=_NAME) from e

        if not isinstance(translated, str) or not translated:
            msg = "Translation service returned an empty result"
            raise CollaboratorError(msg, collaborator=_NAME)

        logger.debug(
            "Translated '%s' (%s -> %s): '%s'", phrase, source_lang, target_lang, translated
        )
        return translated

"""Tests for the LibreTranslate machine-translation collaborator."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable
from typing import TypeAlias

import httpx
import pytest

from lprojfill.collaborators import LibreTranslateTranslator
from lprojfill.config import TranslatorConfig
from lprojfill.diagnostics import CollaboratorError

Handler: TypeAlias = Callable[[httpx.Request], httpx.Response]


def _translate(
    handler: Handler,
    phrase: str = "Activity",
    source: str = "en",
    target: str = "de",
    *,
    config: TranslatorConfig | None = None,
) -> str:
    config = config or TranslatorConfig(url="https://mt.test/")

    async def go() -> str:
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await LibreTranslateTranslator(config, client).translate(phrase, source, target)

    return asyncio.run(go())


class TestRequest:
    """Test request payload construction."""

    def test_payload_and_endpoint(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"translatedText": "Aktivität"})

        assert _translate(handler) == "Aktivität"

        (request,) = seen
        assert request.method == "POST"
        assert str(request.url) == "https://mt.test/translate"
        assert json.loads(request.content) == {
            "q": "Activity",
            "source": "en",
            "target": "de",
            "format": "text",
        }

    def test_api_key_included(self) -> None:
        seen: list[dict[str, str]] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content))
            return httpx.Response(200, json={"translatedText": "x"})

        _translate(handler, config=TranslatorConfig(url="https://mt.test", api_key="secret"))

        assert seen[0]["api_key"] == "secret"

    def test_region_locales_reduced_to_language(self) -> None:
        seen: list[dict[str, str]] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content))
            return httpx.Response(200, json={"translatedText": "Atividade"})

        _translate(handler, source="en-GB", target="pt-BR")

        assert (seen[0]["source"], seen[0]["target"]) == ("en", "pt")

    def test_unknown_locale_never_sent(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"translatedText": "x"})

        with pytest.raises(CollaboratorError, match="Unknown locale"):
            _translate(handler, target="Base")
        assert seen == []


class TestResponse:
    """Test response validation and error mapping."""

    def test_http_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403, json={"error": "Invalid API key"})

        with pytest.raises(CollaboratorError, match="HTTP 403") as exc_info:
            _translate(handler)

        assert exc_info.value.status_code == 403
        assert exc_info.value.collaborator == "libretranslate"

    def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            msg = "timed out"
            raise httpx.ReadTimeout(msg, request=request)

        with pytest.raises(CollaboratorError, match="timed out"):
            _translate(handler)

    @pytest.mark.parametrize(
        "body",
        [{"error": "nope"}, {"translatedText": ""}, {"translatedText": 42}],
    )
    def test_unusable_body(self, body: dict[str, object]) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=body)

        with pytest.raises(CollaboratorError):
            _translate(handler)

    def test_non_json_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>maintenance</html>")

        with pytest.raises(CollaboratorError, match="Malformed"):
            _translate(handler)

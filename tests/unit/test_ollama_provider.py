"""Unit tests for OllamaProvider — HTTP client mocked via patch("httpx.AsyncClient")."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from polyglot.core.exceptions import UpstreamUnavailableError
from polyglot.services.llm.ollama import OllamaProvider


def _mock_client(**methods: AsyncMock) -> AsyncMock:
    client = AsyncMock()
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=None)
    for name, method in methods.items():
        setattr(client, name, method)
    return client


def _mock_response(payload: object, status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json = MagicMock(return_value=payload)
    response.raise_for_status = MagicMock()
    return response


class TestGenerate:

    @pytest.mark.asyncio
    async def test_posts_non_streaming_payload(self) -> None:
        post = AsyncMock(
            return_value=_mock_response(
                {"response": "es", "prompt_eval_count": 31, "eval_count": 2}
            )
        )
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = _mock_client(post=post)
            provider = OllamaProvider(base_url="http://ollama:11434/", model="llama3:latest")
            result = await provider.generate("Detect this")

        assert result.text == "es"
        assert result.input_tokens == 31
        assert result.output_tokens == 2
        url = post.call_args[0][0]
        assert url == "http://ollama:11434/api/generate"
        assert post.call_args.kwargs["json"] == {
            "model": "llama3:latest",
            "prompt": "Detect this",
            "stream": False,
        }

    @pytest.mark.asyncio
    async def test_connection_error_raises_upstream_unavailable(self) -> None:
        post = AsyncMock(side_effect=httpx.ConnectError("Connection refused"))
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = _mock_client(post=post)
            with pytest.raises(UpstreamUnavailableError):
                await OllamaProvider().generate("hi")

    @pytest.mark.asyncio
    async def test_timeout_raises_upstream_unavailable(self) -> None:
        post = AsyncMock(side_effect=httpx.ReadTimeout("timed out"))
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = _mock_client(post=post)
            with pytest.raises(UpstreamUnavailableError, match="timed out"):
                await OllamaProvider().generate("hi")

    @pytest.mark.asyncio
    async def test_error_status_raises_upstream_unavailable(self) -> None:
        response = _mock_response({}, status_code=500)
        response.raise_for_status = MagicMock(
            side_effect=httpx.HTTPStatusError(
                "500 Internal Server Error", request=MagicMock(), response=MagicMock()
            )
        )
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = _mock_client(post=AsyncMock(return_value=response))
            with pytest.raises(UpstreamUnavailableError):
                await OllamaProvider().generate("hi")

    @pytest.mark.asyncio
    async def test_missing_response_field_raises(self) -> None:
        post = AsyncMock(return_value=_mock_response({"error": "model not found"}))
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = _mock_client(post=post)
            with pytest.raises(UpstreamUnavailableError):
                await OllamaProvider().generate("hi")

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self) -> None:
        response = _mock_response(None)
        response.json = MagicMock(side_effect=ValueError("Expecting value"))
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = _mock_client(post=AsyncMock(return_value=response))
            with pytest.raises(UpstreamUnavailableError):
                await OllamaProvider().generate("hi")


class TestHealthCheck:

    @pytest.mark.asyncio
    async def test_reachable(self) -> None:
        get = AsyncMock(return_value=_mock_response({"models": []}))
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = _mock_client(get=get)
            await OllamaProvider(base_url="http://localhost:11434").health_check()
        assert get.call_args[0][0] == "http://localhost:11434/api/tags"

    @pytest.mark.asyncio
    async def test_unreachable_raises(self) -> None:
        get = AsyncMock(side_effect=httpx.ConnectError("Connection refused"))
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = _mock_client(get=get)
            with pytest.raises(UpstreamUnavailableError):
                await OllamaProvider().health_check()

"""Unit tests for the outbound HTTP client and the ZeptoMail provider."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from config import EmailSettings
from infrastructure.email.zeptomail import ZeptoMailProvider
from infrastructure.http_client import HttpClient

# ── HttpClient ────────────────────────────────────────────────────────────────


class TestHttpClient:
    async def test_post_delegates_to_httpx(self, mocker):
        client = HttpClient()
        fake_resp = MagicMock(status_code=200)
        mocker.patch.object(client._client, "post", return_value=fake_resp)
        resp = await client.post("http://example.com", json={"a": 1})
        assert resp.status_code == 200
        client._client.post.assert_awaited_once_with("http://example.com", json={"a": 1})
        await client.aclose()

    async def test_post_propagates_exception(self, mocker):
        client = HttpClient()
        mocker.patch.object(client._client, "post", side_effect=Exception("timeout"))
        with pytest.raises(Exception, match="timeout"):
            await client.post("http://example.com")
        await client.aclose()

    async def test_context_manager_closes(self, mocker):
        async with HttpClient() as client:
            close = mocker.patch.object(client._client, "aclose")
        close.assert_awaited_once()


# ── ZeptoMailProvider ─────────────────────────────────────────────────────────


def _make(token="test-token"):
    settings = EmailSettings(
        zepto_api_token=token,
        zepto_from_email="noreply@totes.example",
        zepto_from_name="Cause Totes",
    )
    http = MagicMock()
    http.post = AsyncMock(return_value=MagicMock(status_code=200))
    provider = ZeptoMailProvider(
        settings=settings,
        http_client=http,
        app_url="https://totes.example",
        otp_ttl_minutes=10,
    )
    return provider, http


class TestZeptoMailProvider:
    async def test_otp_email_carries_code(self):
        provider, http = _make()
        assert await provider.send_otp_email("user@example.com", "123456") is True
        http.post.assert_awaited_once()
        payload = http.post.call_args.kwargs["json"]
        assert payload["to"][0]["email_address"]["address"] == "user@example.com"
        assert "123456" in payload["htmlbody"]
        assert "123456" in payload["textbody"]
        assert "10 minutes" in payload["textbody"]

    async def test_welcome_email_uses_name(self):
        provider, http = _make()
        assert await provider.send_welcome_email("jo@example.com", "Jo") is True
        payload = http.post.call_args.kwargs["json"]
        assert payload["to"][0]["email_address"]["name"] == "Jo"
        assert "Jo" in payload["textbody"]

    async def test_returns_false_when_token_empty(self):
        provider, http = _make(token="")
        assert await provider.send_otp_email("u@e.com", "000000") is False
        http.post.assert_not_awaited()

    async def test_returns_false_on_non_2xx(self):
        provider, http = _make()
        http.post.return_value = MagicMock(status_code=422, text="Unprocessable")
        assert await provider.send_otp_email("u@e.com", "000000") is False

    async def test_returns_false_on_exception(self):
        provider, http = _make()
        http.post.side_effect = Exception("timeout")
        assert await provider.send_otp_email("u@e.com", "000000") is False

    async def test_auth_header_prepends_prefix(self):
        provider, http = _make(token="rawtoken")
        await provider.send_welcome_email("u@e.com", None)
        auth = http.post.call_args.kwargs["headers"]["Authorization"]
        assert auth == "Zoho-enczapikey rawtoken"

    async def test_auth_header_not_double_prefixed(self):
        provider, http = _make(token="Zoho-enczapikey alreadyprefixed")
        await provider.send_otp_email("u@e.com", "654321")
        auth = http.post.call_args.kwargs["headers"]["Authorization"]
        assert auth.count("Zoho-enczapikey") == 1

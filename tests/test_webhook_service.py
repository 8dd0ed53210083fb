from __future__ import annotations

import json

import httpx
import pytest

from app.core.config import Settings
from app.services.webhook_service import WebhookRelay

WEBHOOK_URL = "https://hooks.example.test/webhook/contact-form"


def _settings(url=WEBHOOK_URL) -> Settings:
    return Settings(_env_file=None, n8n_webhook_url=url)


@pytest.mark.asyncio
async def test_forward_posts_json_and_returns_body():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["user_agent"] = request.headers["user-agent"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"success": True, "message": "Queued"})

    relay = WebhookRelay(_settings(), transport=httpx.MockTransport(handler))
    outcome = await relay.forward({"email": "dana@northwind.io", "leadScore": 75})

    assert outcome.delivered is True
    assert outcome.status_code == 200
    assert outcome.data == {"success": True, "message": "Queued"}
    assert seen == {
        "url": WEBHOOK_URL,
        "user_agent": "Opus-Automations-Merged-Server",
        "body": {"email": "dana@northwind.io", "leadScore": 75},
    }


@pytest.mark.asyncio
async def test_non_json_response_is_still_delivered():
    relay = WebhookRelay(
        _settings(), transport=httpx.MockTransport(lambda r: httpx.Response(200, text="ok"))
    )

    outcome = await relay.forward({})

    assert outcome.delivered is True
    assert outcome.data is None


@pytest.mark.asyncio
async def test_error_status_is_reported_not_raised():
    relay = WebhookRelay(
        _settings(), transport=httpx.MockTransport(lambda r: httpx.Response(502, text="bad gateway"))
    )

    outcome = await relay.forward({"name": "Dana"})

    assert outcome.delivered is False
    assert outcome.status_code == 502
    assert outcome.error == "HTTP 502"


@pytest.mark.asyncio
async def test_unreachable_webhook_is_reported_not_raised():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    relay = WebhookRelay(_settings(), transport=httpx.MockTransport(handler))

    outcome = await relay.forward({"name": "Dana"})

    assert outcome.delivered is False
    assert outcome.status_code is None
    assert "connection refused" in outcome.error


@pytest.mark.asyncio
async def test_unconfigured_relay_skips_request():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200)

    relay = WebhookRelay(_settings(url=None), transport=httpx.MockTransport(handler))
    outcome = await relay.forward({"name": "Dana"})

    assert relay.enabled is False
    assert outcome.delivered is False
    assert calls == []

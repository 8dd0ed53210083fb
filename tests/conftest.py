"""Shared fixtures: isolated settings, a fake webhook relay and a test client."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app
from app.routers.submissions import get_relay
from app.services.webhook_service import RelayOutcome

WEBHOOK_URL = "https://hooks.example.test/webhook/contact-form"


class FakeRelay:
    """Stands in for WebhookRelay and records every forwarded payload."""

    def __init__(self, outcome: Optional[RelayOutcome] = None, enabled: bool = True):
        self.enabled = enabled
        self.outcome = outcome or RelayOutcome(delivered=True, status_code=200)
        self.payloads: List[Dict[str, Any]] = []

    async def forward(self, payload: Dict[str, Any]) -> RelayOutcome:
        self.payloads.append(payload)
        return self.outcome


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, n8n_webhook_url=WEBHOOK_URL, environment="test")


@pytest.fixture
def relay() -> FakeRelay:
    return FakeRelay()


@pytest.fixture
def app(settings, relay):
    application = create_app(settings)
    application.dependency_overrides[get_relay] = lambda: relay
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client

"""
n8n workflow webhook relay.
Forwards contact and assessment submissions to the automation workflow.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass
class RelayOutcome:
    """Result of a webhook delivery attempt."""
    delivered: bool
    status_code: Optional[int] = None
    data: Optional[Any] = None
    error: Optional[str] = None


class WebhookRelay:
    """Posts submission payloads to the configured n8n webhook."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = settings or get_settings()
        self.url = settings.n8n_webhook_url
        self.timeout = settings.webhook_timeout
        self.user_agent = settings.webhook_user_agent
        self.transport = transport
        self.enabled = bool(self.url)

        if not self.enabled:
            logger.warning("n8n webhook not configured - submissions will be logged only")

    async def forward(self, payload: Dict[str, Any]) -> RelayOutcome:
        """
        Send a payload to the webhook.

        Args:
            payload: JSON-serializable submission data

        Returns:
            RelayOutcome; failures are reported, never raised
        """
        if not self.enabled:
            logger.info("Relay skipped - n8n webhook not configured")
            return RelayOutcome(delivered=False, error="webhook not configured")

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.post(
                    self.url,
                    json=payload,
                    headers={
                        "Content-Type": "application/json",
                        "User-Agent": self.user_agent,
                    },
                )

            if not response.is_success:
                logger.error(
                    f"n8n webhook rejected submission: {response.status_code} - {response.text[:200]}"
                )
                return RelayOutcome(
                    delivered=False,
                    status_code=response.status_code,
                    error=f"HTTP {response.status_code}",
                )

            logger.info(f"n8n webhook accepted submission: {response.status_code}")
            try:
                data = response.json()
            except ValueError:
                data = None
            return RelayOutcome(delivered=True, status_code=response.status_code, data=data)

        except httpx.HTTPError as e:
            logger.error(f"n8n webhook request failed: {e}")
            return RelayOutcome(delivered=False, error=str(e) or e.__class__.__name__)

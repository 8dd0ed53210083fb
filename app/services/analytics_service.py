"""
Client-side analytics event logging.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict

from app.models.inquiry import AnalyticsEvent

logger = logging.getLogger(__name__)


def record_event(event: AnalyticsEvent, site_type: str) -> Dict[str, Any]:
    """
    Log an analytics event emitted by the page.

    product_interest and cta_click events get an extra structured line.

    Returns:
        The enriched event data that was logged
    """
    timestamp = datetime.now(timezone.utc).isoformat()
    enriched = {**event.data, "site_type": site_type, "timestamp": timestamp}
    logger.info(f"Analytics event: {event.event} {enriched}")

    if event.event == "product_interest":
        product = {
            "product": event.data.get("product_name"),
            "type": event.data.get("product_type"),
            "timestamp": timestamp,
            "user_agent": event.data.get("user_agent"),
        }
        logger.info(f"Product interest: {product}")
    elif event.event == "cta_click":
        click = {
            "button": event.data.get("button_text"),
            "section": event.data.get("section"),
            "is_calendly": event.data.get("is_calendly"),
            "timestamp": timestamp,
        }
        logger.info(f"CTA click: {click}")

    return enriched

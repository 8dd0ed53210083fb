"""Services module for the Opus Automations site backend."""
from .assessment_engine import compute_assessment, compute_lead_score
from .webhook_service import WebhookRelay

__all__ = ["compute_assessment", "compute_lead_score", "WebhookRelay"]

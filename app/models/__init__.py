"""Data models for the Opus Automations site backend."""
from .assessment import AssessmentResult, LeadTier
from .inquiry import (
    AnalyticsEvent,
    AssessmentPreviewRequest,
    AssessmentResponse,
    AssessmentSubmission,
    ContactSubmission,
)

__all__ = [
    "AssessmentResult",
    "LeadTier",
    "AnalyticsEvent",
    "AssessmentPreviewRequest",
    "AssessmentResponse",
    "AssessmentSubmission",
    "ContactSubmission",
]

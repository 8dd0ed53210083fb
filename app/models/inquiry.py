"""
Inbound form and analytics models.
"""
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field

from .assessment import AssessmentResult


class ContactSubmission(BaseModel):
    """Contact form payload. Unknown fields are kept and forwarded to the webhook."""
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    email: Optional[str] = None
    company: Optional[str] = None
    revenue: Optional[str] = Field(
        None, description="Company stage: startup, small, medium, large, enterprise"
    )
    operations: Optional[str] = Field(
        None, description="Weekly manual hours band: 5-15, 15-25, 25-40, 40+"
    )
    challenge: Optional[str] = None
    type: Optional[str] = Field(None, description="'contact' or 'assessment'")


class AssessmentSubmission(BaseModel):
    """Assessment modal payload."""
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    email: Optional[str] = None
    company: Optional[str] = None
    process: Optional[str] = None
    hours: Optional[str] = Field(None, description="Weekly manual hours: 5-10, 10-20, 20-40, 40+")
    revenue: Optional[str] = Field(
        None, description="Annual revenue: 100k-500k, 500k-2m, 2m-10m, 10m-50m, 50m+"
    )
    challenge: Optional[str] = None


class AssessmentPreviewRequest(BaseModel):
    hours: Optional[str] = None
    revenue: Optional[str] = None


class AssessmentResponse(BaseModel):
    success: bool = True
    message: str
    results: AssessmentResult
    lead_score: int = Field(..., ge=0, le=100, alias="leadScore")
    relayed: bool = False

    model_config = ConfigDict(populate_by_name=True)


class AnalyticsEvent(BaseModel):
    """Client-side analytics event."""
    event: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)

"""
Submissions Router - contact form, ROI assessment and assessment preview.
Scores each inquiry and relays it to the n8n workflow webhook.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from app.core.config import Settings, get_settings
from app.models.assessment import AssessmentResult
from app.models.inquiry import (
    AssessmentPreviewRequest,
    AssessmentResponse,
    AssessmentSubmission,
    ContactSubmission,
)
from app.services.assessment_engine import (
    classify_lead,
    compute_assessment,
    compute_lead_score,
)
from app.services.rate_limiter import client_ip, contact_rate_limit
from app.services.validation import SubmissionError, ensure_assessment, ensure_contact
from app.services.webhook_service import WebhookRelay

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["submissions"])

THANK_YOU_MESSAGE = "Thank you! We'll respond within 48 hours."
FOLLOW_UP_NOTE = "Request logged for manual follow-up"
SUBMISSION_ERROR_MESSAGE = "Sorry, there was an error sending your message. Please try again."


def get_relay(settings: Settings = Depends(get_settings)) -> WebhookRelay:
    """Dependency to get the webhook relay."""
    return WebhookRelay(settings)


def build_webhook_payload(data: Dict[str, Any], request: Request) -> Dict[str, Any]:
    """
    Attach request metadata and the lead score to a submission.

    Args:
        data: Submitted form fields
        request: Incoming request (for client IP and user agent)

    Returns:
        Payload for the n8n webhook
    """
    lead_score = compute_lead_score(data)
    return {
        **data,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "ip": client_ip(request),
        "userAgent": request.headers.get("user-agent"),
        "leadScore": lead_score,
        "leadTier": classify_lead(lead_score).model_dump(),
        "source": "merged_site",
    }


@router.post("/contact", dependencies=[Depends(contact_rate_limit)])
async def submit_contact(
    submission: ContactSubmission,
    request: Request,
    relay: WebhookRelay = Depends(get_relay),
):
    """
    Accept a contact form submission and forward it to n8n.

    Relay failures still return success; the submission is logged for
    manual follow-up.
    """
    data = submission.model_dump(exclude_none=True)

    try:
        ensure_contact(data)
    except SubmissionError as e:
        logger.info(f"Contact submission rejected: {e.errors}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "message": e.message},
        )

    try:
        payload = build_webhook_payload(data, request)
        if data.get("type") == "assessment":
            payload["results"] = compute_assessment(data).model_dump(by_alias=True)

        logger.info(
            f"Contact form submission: name={data.get('name')}, email={data.get('email')}, "
            f"company={data.get('company')}, revenue={data.get('revenue')}, "
            f"operations={data.get('operations')}, ip={payload['ip']}, "
            f"leadScore={payload['leadScore']}"
        )

        outcome = await relay.forward(payload)

    except Exception as e:
        logger.error(f"Contact form error: {str(e)}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "message": SUBMISSION_ERROR_MESSAGE},
        )

    if outcome.delivered and outcome.data:
        return outcome.data

    response = {"success": True, "message": THANK_YOU_MESSAGE}
    if relay.enabled and not outcome.delivered:
        response["note"] = FOLLOW_UP_NOTE
    return response


@router.post(
    "/assessment",
    response_model=AssessmentResponse,
    dependencies=[Depends(contact_rate_limit)],
)
async def submit_assessment(
    submission: AssessmentSubmission,
    request: Request,
    relay: WebhookRelay = Depends(get_relay),
):
    """
    Score an ROI assessment, relay it, and return the results.

    Results are always computed here; anything the browser sent under
    ``results`` is replaced.
    """
    data = submission.model_dump(exclude_none=True)
    data.pop("results", None)
    data["type"] = "assessment"

    try:
        ensure_assessment(data)
    except SubmissionError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "message": e.message},
        )

    results = compute_assessment(data)
    payload = build_webhook_payload(data, request)
    payload["results"] = results.model_dump(by_alias=True)

    logger.info(
        f"Assessment submission: email={data.get('email')}, hours={data.get('hours')}, "
        f"revenue={data.get('revenue')}, savings={results.savings}, "
        f"roiMonths={results.roi_months}, complexity={results.complexity}"
    )

    outcome = await relay.forward(payload)
    if outcome.delivered:
        message = "Assessment complete! Check your email for detailed results."
    else:
        message = "Assessment saved. We'll follow up via email."

    return AssessmentResponse(
        message=message,
        results=results,
        lead_score=payload["leadScore"],
        relayed=outcome.delivered,
    )


@router.post("/assessment/preview", response_model=AssessmentResult)
async def preview_assessment(request: AssessmentPreviewRequest):
    """Instant savings / ROI preview for the assessment modal. Nothing is relayed."""
    return compute_assessment(request.model_dump())

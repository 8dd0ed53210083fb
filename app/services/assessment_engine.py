"""
Assessment engine.

Turns an automation inquiry into a savings / ROI estimate and a 0-100 lead
score. Everything here is table driven and pure: unknown or missing band
values contribute zero and nothing raises.
"""
import math
from types import MappingProxyType
from typing import Any, Mapping

from app.models.assessment import AssessmentResult, LeadTier


# Midpoint manual hours per week, keyed by the assessment form's hours band
HOURS_BANDS = MappingProxyType({
    "5-10": 7.5,
    "10-20": 15,
    "20-40": 30,
    "40+": 50,
})

# Midpoint annual revenue, keyed by the assessment form's revenue band
REVENUE_BANDS = MappingProxyType({
    "100k-500k": 300_000,
    "500k-2m": 1_250_000,
    "2m-10m": 6_000_000,
    "10m-50m": 30_000_000,
    "50m+": 75_000_000,
})

# Contact form vocabulary; not interchangeable with the tables above
REVENUE_SCORES = MappingProxyType({
    "startup": 20,      # $100K - $500K
    "small": 40,        # $500K - $2M
    "medium": 60,       # $2M - $10M
    "large": 80,        # $10M - $50M
    "enterprise": 100,  # $50M+
})

OPERATIONS_SCORES = MappingProxyType({
    "5-15": 25,
    "15-25": 50,
    "25-40": 75,
    "40+": 100,
})

BASE_HOURLY_RATE = 50
MAX_HOURLY_RATE = 150
WEEKS_PER_YEAR = 52
EFFICIENCY_GAIN = 0.8
INVESTMENT_RATIO = 0.3
MIN_INVESTMENT = 15_000
MAX_INVESTMENT = 150_000
MAX_ROI_MONTHS = 24

COMPANY_NAME_BONUS = 10
CHALLENGE_BONUS = 15
ASSESSMENT_BONUS = 20
MAX_LEAD_SCORE = 100


def _lookup(table: Mapping[str, float], key: Any) -> float:
    if not isinstance(key, str):
        return 0
    return table.get(key, 0)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _text_length(value: Any) -> int:
    # Length in UTF-16 code units, as the browser counts it
    if not isinstance(value, str):
        return 0
    return len(value.encode("utf-16-le", "surrogatepass")) // 2


def compute_assessment(data: Mapping[str, Any]) -> AssessmentResult:
    """
    Estimate savings, payback period and complexity for an assessment.

    Args:
        data: Submission with ``hours`` and ``revenue`` band values

    Returns:
        AssessmentResult (savings, roiMonths, complexity, investment)
    """
    hours = _lookup(HOURS_BANDS, data.get("hours"))
    revenue = _lookup(REVENUE_BANDS, data.get("revenue"))

    # Blended labour rate grows with company size
    hourly_rate = min(BASE_HOURLY_RATE + (revenue / 1_000_000) * 10, MAX_HOURLY_RATE)
    annual_savings = _round_half_up(hours * hourly_rate * WEEKS_PER_YEAR * EFFICIENCY_GAIN)

    investment = _round_half_up(
        max(MIN_INVESTMENT, min(annual_savings * INVESTMENT_RATIO, MAX_INVESTMENT))
    )

    if annual_savings > 0:
        roi_months = min(math.ceil((investment / annual_savings) * 12), MAX_ROI_MONTHS)
    else:
        roi_months = MAX_ROI_MONTHS

    # Order matters: High overrides Low
    complexity = "Medium"
    if hours < 15 and revenue < 2_000_000:
        complexity = "Low"
    if hours > 30 or revenue > 10_000_000:
        complexity = "High"

    return AssessmentResult(
        savings=annual_savings,
        roi_months=roi_months,
        complexity=complexity,
        investment=investment,
    )


def compute_lead_score(data: Mapping[str, Any]) -> int:
    """
    Score an inbound lead from 0 to 100.

    Scoring Factors:
    - Company stage (revenue): up to 100 points
    - Weekly manual hours (operations): up to 100 points
    - Company name longer than 10 characters: +10
    - Challenge description longer than 50 characters: +15
    - Assessment submission: +20

    The sum is capped at 100.
    """
    score = 0
    score += _lookup(REVENUE_SCORES, data.get("revenue"))
    score += _lookup(OPERATIONS_SCORES, data.get("operations"))

    if _text_length(data.get("company")) > 10:
        score += COMPANY_NAME_BONUS

    if _text_length(data.get("challenge")) > 50:
        score += CHALLENGE_BONUS

    # Assessment submissions are higher intent
    if data.get("type") == "assessment":
        score += ASSESSMENT_BONUS

    return int(min(score, MAX_LEAD_SCORE))


def classify_lead(score: int) -> LeadTier:
    """Map a lead score to a temperature category and follow-up priority."""
    if score >= 80:
        return LeadTier(category="Hot", priority="High")
    if score >= 50:
        return LeadTier(category="Warm", priority="Medium")
    return LeadTier(category="Cold", priority="Low")

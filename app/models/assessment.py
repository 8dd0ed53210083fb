"""
Assessment result and lead tier models.
"""
from typing import Literal
from pydantic import BaseModel, ConfigDict, Field


class AssessmentResult(BaseModel):
    """Savings / ROI estimate for an automation inquiry."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    savings: int = Field(..., ge=0, description="Estimated annual savings")
    roi_months: int = Field(
        ..., ge=0, le=24, alias="roiMonths",
        description="Months for savings to repay the investment (capped at 24)"
    )
    complexity: Literal["Low", "Medium", "High"]
    investment: int = Field(
        ..., ge=15000, le=150000, description="Estimated implementation investment"
    )


class LeadTier(BaseModel):
    """Lead temperature derived from a lead score."""
    model_config = ConfigDict(frozen=True)

    category: Literal["Hot", "Warm", "Cold"]
    priority: Literal["High", "Medium", "Low"]

"""Financial impact calculation models."""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from lingua_educate.models.progress import ProficiencyLevel


class FinancialCalculationRequest(BaseModel):
    """Inputs to a salary-impact calculation."""

    language_code: str
    current_salary: float
    years_of_experience: int
    industry: str
    location: str  # city
    proficiency_level: ProficiencyLevel = ProficiencyLevel.B1

    @field_validator("proficiency_level", mode="before")
    @classmethod
    def _accept_cefr_code(cls, value: Any) -> Any:
        # Accept "B1" as well as "B1 - Intermediate"
        if isinstance(value, str) and len(value.strip()) == 2:
            return ProficiencyLevel.from_cefr(value)
        return value


class MarketAdvantage(BaseModel):
    model_config = ConfigDict(frozen=True)

    competitive_edge: float  # percentage points
    accessible_positions: int
    global_opportunities: int
    industry_demand: str


class ReturnOnInvestment(BaseModel):
    """Study cost versus salary gain.

    ``break_even_months`` and the ROI percentages are ``None`` when the
    projected increase is zero, since they are undefined in that case.
    """

    model_config = ConfigDict(frozen=True)

    study_hours: int
    estimated_cost: float
    break_even_months: int | None
    five_year_roi: float | None
    ten_year_roi: float | None


class CalculatedImpact(BaseModel):
    model_config = ConfigDict(frozen=True)

    projected_salary_increase: float
    projected_annual_salary: float
    lifetime_earnings_increase: float
    job_opportunity_increase: float
    market_advantage: MarketAdvantage
    roi: ReturnOnInvestment


class FinancialCalculationResult(BaseModel):
    """A finished calculation: the request echoed back plus its impact."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    language_code: str
    current_salary: float
    years_of_experience: int
    industry: str
    location: str
    proficiency_level: ProficiencyLevel
    calculated_impact: CalculatedImpact
    timestamp: datetime = Field(default_factory=datetime.now)

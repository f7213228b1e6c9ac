"""Salary-impact calculator combining reference tables and multipliers."""

import math
from datetime import datetime
from typing import Callable

import structlog

from lingua_educate.errors import InvalidInput
from lingua_educate.financial.multipliers import (
    STUDY_COST_PER_HOUR,
    experience_multiplier,
    proficiency_multiplier,
    required_study_hours,
)
from lingua_educate.models.financial import (
    CalculatedImpact,
    FinancialCalculationRequest,
    FinancialCalculationResult,
    MarketAdvantage,
    ReturnOnInvestment,
)
from lingua_educate.models.language import IndustryProfile, LocationProfile
from lingua_educate.models.progress import ProficiencyLevel
from lingua_educate.reference import tables

logger = structlog.get_logger()

# Used when the language is not in the reference table
FALLBACK_SALARY_INCREASE = 10000.0
FALLBACK_JOB_OPPORTUNITIES = 1000
FALLBACK_INDUSTRY_DEMAND = "Medium"

CAREER_YEARS = 30


class FinancialCalculator:
    """Estimates the financial benefit of learning a language.

    The calculation is a pure function of the request and the static
    reference tables; only the result id and timestamp vary between calls.

    Args:
        clock: Callable returning the timestamp stamped on results.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self._clock = clock

    def calculate(self, request: FinancialCalculationRequest) -> FinancialCalculationResult:
        """Project the salary impact described by ``request``.

        Raises:
            InvalidInput: If the salary is not positive or experience is negative.
        """
        if not (math.isfinite(request.current_salary) and request.current_salary > 0):
            raise InvalidInput(
                f"current_salary must be a positive number, got {request.current_salary}"
            )
        if request.years_of_experience < 0:
            raise InvalidInput(
                f"years_of_experience must not be negative, got {request.years_of_experience}"
            )

        code = request.language_code
        language = tables.get_language(code)
        if language is not None:
            base_increase = language.economic_impact.average_salary_increase
            base_jobs = language.economic_impact.job_opportunities
        else:
            logger.debug("unknown_language_fallback", language_code=code)
            base_increase = FALLBACK_SALARY_INCREASE
            base_jobs = FALLBACK_JOB_OPPORTUNITIES

        industry_mult = tables.industry_multiplier(request.industry, code)
        location_mult = tables.location_multiplier(request.location, code)

        projected_increase = (
            base_increase
            * industry_mult
            * location_mult
            * proficiency_multiplier(request.proficiency_level)
            * experience_multiplier(request.years_of_experience)
        )

        impact = CalculatedImpact(
            projected_salary_increase=projected_increase,
            projected_annual_salary=request.current_salary + projected_increase,
            lifetime_earnings_increase=projected_increase * CAREER_YEARS,
            job_opportunity_increase=base_jobs * industry_mult,
            market_advantage=self._market_advantage(
                request.industry, industry_mult, location_mult
            ),
            roi=self._roi(projected_increase, request.proficiency_level),
        )

        logger.info(
            "financial_impact_calculated",
            language_code=code,
            industry=request.industry,
            location=request.location,
            projected_increase=round(projected_increase, 2),
        )

        return FinancialCalculationResult(
            language_code=code,
            current_salary=request.current_salary,
            years_of_experience=request.years_of_experience,
            industry=request.industry,
            location=request.location,
            proficiency_level=request.proficiency_level,
            calculated_impact=impact,
            timestamp=self._clock(),
        )

    @staticmethod
    def _market_advantage(
        industry: str, industry_mult: float, location_mult: float
    ) -> MarketAdvantage:
        profile = tables.get_industry(industry)
        return MarketAdvantage(
            competitive_edge=industry_mult * 25,
            accessible_positions=round(industry_mult * 1000),
            global_opportunities=round(location_mult * 500),
            industry_demand=(
                profile.demand_level.value if profile else FALLBACK_INDUSTRY_DEMAND
            ),
        )

    @staticmethod
    def _roi(salary_increase: float, level: ProficiencyLevel) -> ReturnOnInvestment:
        study_hours = required_study_hours(level)
        estimated_cost = study_hours * STUDY_COST_PER_HOUR

        # Break-even and ROI are undefined without a salary gain
        if salary_increase <= 0:
            return ReturnOnInvestment(
                study_hours=study_hours,
                estimated_cost=estimated_cost,
                break_even_months=None,
                five_year_roi=None,
                ten_year_roi=None,
            )

        monthly_increase = salary_increase / 12
        return ReturnOnInvestment(
            study_hours=study_hours,
            estimated_cost=estimated_cost,
            break_even_months=int(estimated_cost / monthly_increase),
            five_year_roi=(salary_increase * 5 - estimated_cost) / estimated_cost * 100,
            ten_year_roi=(salary_increase * 10 - estimated_cost) / estimated_cost * 100,
        )


def rank_industries_by_language(language_code: str) -> list[IndustryProfile]:
    """Industries that reward ``language_code``, best multiplier first.

    Ties keep reference-table order.
    """
    matching = [i for i in tables.INDUSTRIES if language_code in i.language_multipliers]
    return sorted(matching, key=lambda i: i.language_multipliers[language_code], reverse=True)


def rank_locations_by_language(language_code: str) -> list[LocationProfile]:
    """Locations with demand for ``language_code``, highest demand first."""
    matching = [loc for loc in tables.LOCATIONS if language_code in loc.language_demand]
    return sorted(matching, key=lambda loc: loc.language_demand[language_code], reverse=True)

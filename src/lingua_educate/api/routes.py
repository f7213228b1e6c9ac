"""REST API routes for the calculator, progress tracking and challenges."""

import structlog
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from lingua_educate.api.services import Services, get_services
from lingua_educate.challenges.engine import build_result
from lingua_educate.errors import InvalidInput
from lingua_educate.financial.calculator import (
    rank_industries_by_language,
    rank_locations_by_language,
)
from lingua_educate.financial.insights import (
    describe_break_even,
    describe_impact,
    describe_market_demand,
    roi_tier,
)
from lingua_educate.models.financial import FinancialCalculationRequest
from lingua_educate.models.progress import LocationData, UserProfile
from lingua_educate.reference import tables

logger = structlog.get_logger()
router = APIRouter(prefix="/api")


class StudySessionBody(BaseModel):
    xp_gained: int = Field(ge=0)
    study_seconds: float = Field(default=0.0, ge=0)
    words_learned: int = Field(default=0, ge=0)


class AddLanguageBody(BaseModel):
    language_code: str


class OnboardingBody(BaseModel):
    profile: UserProfile
    language_codes: list[str]


class ChallengeSubmission(BaseModel):
    language_code: str
    challenge_id: str
    answers: list[int | None] = Field(default_factory=list)


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


@router.get("/languages")
async def list_languages(services: Services = Depends(get_services)) -> list[dict]:
    return [lang.model_dump(mode="json") for lang in services.tracker.get_state().languages]


@router.get("/industries")
async def list_industries() -> list[dict]:
    return [i.model_dump(mode="json") for i in tables.INDUSTRIES]


@router.get("/locations")
async def list_locations() -> list[dict]:
    return [loc.model_dump(mode="json") for loc in tables.LOCATIONS]


@router.post("/financial/calculate")
async def calculate_financial_impact(
    request: FinancialCalculationRequest,
    services: Services = Depends(get_services),
) -> dict:
    """Project the salary impact of learning a language."""
    try:
        result = services.calculator.calculate(request)
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    impact = result.calculated_impact
    return {
        "result": result.model_dump(mode="json"),
        "insights": {
            "impact": describe_impact(impact),
            "break_even": describe_break_even(impact.roi.break_even_months),
            "market_demand": describe_market_demand(impact.market_advantage),
            "five_year_roi_tier": roi_tier(impact.roi.five_year_roi),
        },
    }


@router.get("/financial/recommendations/{language_code}")
async def financial_recommendations(language_code: str) -> dict:
    """Industries and locations ranked by how much they reward a language."""
    return {
        "industries": [
            {"name": i.name, "multiplier": i.language_multipliers[language_code]}
            for i in rank_industries_by_language(language_code)
        ],
        "locations": [
            {
                "city": loc.city,
                "country": loc.country,
                "multiplier": loc.language_demand[language_code],
            }
            for loc in rank_locations_by_language(language_code)
        ],
    }


@router.get("/progress")
async def list_progress(services: Services = Depends(get_services)) -> list[dict]:
    return [p.model_dump(mode="json") for p in services.tracker.get_state().user_progress]


@router.get("/progress/{language_code}")
async def get_progress(language_code: str, services: Services = Depends(get_services)) -> dict:
    progress = services.tracker.get_progress(language_code)
    if progress is None:
        raise HTTPException(status_code=404, detail="Language not being studied")
    return {
        "progress": progress.model_dump(mode="json"),
        "summary": services.tracker.progress_summary(language_code),
    }


@router.post("/progress/languages")
async def add_language(body: AddLanguageBody, services: Services = Depends(get_services)) -> dict:
    try:
        progress = services.tracker.add_language_to_learning(body.language_code)
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    return progress.model_dump(mode="json")


@router.post("/progress/{language_code}/study")
async def record_study_session(
    language_code: str,
    body: StudySessionBody,
    services: Services = Depends(get_services),
) -> dict:
    progress = services.tracker.record_study_session(
        language_code,
        body.xp_gained,
        study_seconds=body.study_seconds,
        words_learned=body.words_learned,
    )
    if progress is None:
        raise HTTPException(status_code=404, detail="Language not being studied")
    return progress.model_dump(mode="json")


@router.post("/progress/reset")
async def reset_progress(services: Services = Depends(get_services)) -> dict:
    services.tracker.reset()
    return {"status": "reset"}


@router.post("/onboarding")
async def complete_onboarding(
    body: OnboardingBody, services: Services = Depends(get_services)
) -> dict:
    try:
        state = services.tracker.complete_onboarding(body.profile, body.language_codes)
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {
        "has_completed_onboarding": state.has_completed_onboarding,
        "selected_languages": state.selected_languages,
    }


@router.delete("/onboarding")
async def reset_onboarding(services: Services = Depends(get_services)) -> dict:
    services.tracker.reset_onboarding()
    return {"has_completed_onboarding": False}


@router.get("/achievements")
async def list_achievements(
    limit: int | None = None, services: Services = Depends(get_services)
) -> list[dict]:
    if limit is not None:
        achievements = services.tracker.recent_achievements(limit)
    else:
        achievements = services.tracker.get_state().achievements
    return [a.model_dump(mode="json") for a in achievements]


@router.get("/challenges/daily/{language_code}")
async def daily_challenges(
    language_code: str,
    city: str | None = None,
    country: str | None = None,
    services: Services = Depends(get_services),
) -> list[dict]:
    """Today's challenges, minus any locked to a location the learner is not in."""
    challenges = services.engine.generate_daily_challenges(
        language_code, day=services.clock.now().date()
    )
    location = None
    if city and country:
        location = LocationData(latitude=0.0, longitude=0.0, city=city, country=country)
    available = services.engine.available_challenges(challenges, location)
    return [c.model_dump(mode="json") for c in available]


@router.post("/challenges/submit")
async def submit_challenge(
    submission: ChallengeSubmission, services: Services = Depends(get_services)
) -> dict:
    """Score a daily challenge and credit the XP to its language."""
    challenges = services.engine.generate_daily_challenges(
        submission.language_code, day=services.clock.now().date()
    )
    challenge = next((c for c in challenges if c.id == submission.challenge_id), None)
    if challenge is None:
        raise HTTPException(status_code=404, detail="Challenge not found")

    try:
        result = build_result(challenge, submission.answers)
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    xp_gained = services.tracker.complete_challenge(challenge, result.score)
    if xp_gained is None:
        raise HTTPException(status_code=404, detail="Language not being studied")

    logger.info("challenge_submitted", challenge_id=challenge.id, score=result.score)
    return {"result": result.model_dump(mode="json"), "xp_gained": xp_gained}

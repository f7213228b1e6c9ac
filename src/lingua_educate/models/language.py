"""Reference data models: languages, industries and locations."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class MarketDemand(StrEnum):
    """Market demand tiers for a language or industry."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    VERY_HIGH = "Very High"

    @property
    def multiplier(self) -> float:
        return {
            MarketDemand.LOW: 1.0,
            MarketDemand.MEDIUM: 1.2,
            MarketDemand.HIGH: 1.5,
            MarketDemand.VERY_HIGH: 2.0,
        }[self]


class LanguageDifficulty(StrEnum):
    """How hard a language is for an English speaker to pick up."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"


class EconomicImpact(BaseModel):
    """Baseline economic figures attached to a language."""

    model_config = ConfigDict(frozen=True)

    average_salary_increase: float
    job_opportunities: int
    market_demand: MarketDemand
    industries: list[str] = Field(default_factory=list)


class Language(BaseModel):
    """A language offered for study."""

    model_config = ConfigDict(frozen=True)

    code: str
    name: str
    flag: str = ""
    difficulty: LanguageDifficulty
    economic_impact: EconomicImpact
    regions: list[str] = Field(default_factory=list)
    speakers: int = 0


class IndustryProfile(BaseModel):
    """Per-industry salary multipliers keyed by language code.

    A language missing from ``language_multipliers`` is not specifically
    rewarded in that industry.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    language_multipliers: dict[str, float]
    average_salary: float
    growth_rate: float
    demand_level: MarketDemand


class LocationProfile(BaseModel):
    """Per-city demand multipliers keyed by language code."""

    model_config = ConfigDict(frozen=True)

    country: str
    city: str
    cost_of_living: float
    language_demand: dict[str, float]
    average_income: float

"""Static reference datasets: languages, industries and locations.

The tables are immutable and loaded once at import time. Lookups that miss
return ``None`` (or a neutral 1.0 multiplier) instead of raising.
"""

from lingua_educate.models.language import (
    EconomicImpact,
    IndustryProfile,
    Language,
    LanguageDifficulty,
    LocationProfile,
    MarketDemand,
)

NEUTRAL_MULTIPLIER = 1.0

LANGUAGES: tuple[Language, ...] = (
    Language(
        code="es",
        name="Spanish",
        flag="🇪🇸",
        difficulty=LanguageDifficulty.BEGINNER,
        economic_impact=EconomicImpact(
            average_salary_increase=15000,
            job_opportunities=25000,
            market_demand=MarketDemand.HIGH,
            industries=["Healthcare", "Education", "Business", "Tourism"],
        ),
        regions=["Spain", "Mexico", "Argentina", "Colombia"],
        speakers=500_000_000,
    ),
    Language(
        code="zh",
        name="Mandarin Chinese",
        flag="🇨🇳",
        difficulty=LanguageDifficulty.EXPERT,
        economic_impact=EconomicImpact(
            average_salary_increase=35000,
            job_opportunities=45000,
            market_demand=MarketDemand.VERY_HIGH,
            industries=["Technology", "Manufacturing", "Finance", "Trade"],
        ),
        regions=["China", "Taiwan", "Singapore"],
        speakers=918_000_000,
    ),
    Language(
        code="fr",
        name="French",
        flag="🇫🇷",
        difficulty=LanguageDifficulty.INTERMEDIATE,
        economic_impact=EconomicImpact(
            average_salary_increase=18000,
            job_opportunities=20000,
            market_demand=MarketDemand.MEDIUM,
            industries=["Diplomacy", "Fashion", "Culinary", "Tourism"],
        ),
        regions=["France", "Canada", "Belgium", "Switzerland"],
        speakers=280_000_000,
    ),
    Language(
        code="de",
        name="German",
        flag="🇩🇪",
        difficulty=LanguageDifficulty.ADVANCED,
        economic_impact=EconomicImpact(
            average_salary_increase=22000,
            job_opportunities=18000,
            market_demand=MarketDemand.HIGH,
            industries=["Engineering", "Automotive", "Science", "Finance"],
        ),
        regions=["Germany", "Austria", "Switzerland"],
        speakers=132_000_000,
    ),
    Language(
        code="ja",
        name="Japanese",
        flag="🇯🇵",
        difficulty=LanguageDifficulty.EXPERT,
        economic_impact=EconomicImpact(
            average_salary_increase=28000,
            job_opportunities=15000,
            market_demand=MarketDemand.HIGH,
            industries=["Technology", "Gaming", "Animation", "Manufacturing"],
        ),
        regions=["Japan"],
        speakers=125_000_000,
    ),
    Language(
        code="pt",
        name="Portuguese",
        flag="🇧🇷",
        difficulty=LanguageDifficulty.INTERMEDIATE,
        economic_impact=EconomicImpact(
            average_salary_increase=16000,
            job_opportunities=12000,
            market_demand=MarketDemand.MEDIUM,
            industries=["Business", "Mining", "Agriculture", "Tourism"],
        ),
        regions=["Brazil", "Portugal"],
        speakers=260_000_000,
    ),
)

INDUSTRIES: tuple[IndustryProfile, ...] = (
    IndustryProfile(
        name="Technology",
        language_multipliers={"zh": 1.8, "ja": 1.6, "de": 1.4, "es": 1.2, "fr": 1.1, "pt": 1.1},
        average_salary=95000,
        growth_rate=0.15,
        demand_level=MarketDemand.VERY_HIGH,
    ),
    IndustryProfile(
        name="Finance",
        language_multipliers={"zh": 2.0, "de": 1.7, "ja": 1.5, "fr": 1.3, "es": 1.2, "pt": 1.1},
        average_salary=85000,
        growth_rate=0.08,
        demand_level=MarketDemand.HIGH,
    ),
    IndustryProfile(
        name="Healthcare",
        language_multipliers={"es": 1.8, "zh": 1.4, "fr": 1.3, "de": 1.2, "ja": 1.1, "pt": 1.2},
        average_salary=75000,
        growth_rate=0.12,
        demand_level=MarketDemand.HIGH,
    ),
    IndustryProfile(
        name="Education",
        language_multipliers={"es": 1.5, "zh": 1.4, "fr": 1.3, "de": 1.2, "ja": 1.2, "pt": 1.1},
        average_salary=55000,
        growth_rate=0.06,
        demand_level=MarketDemand.MEDIUM,
    ),
    IndustryProfile(
        name="Tourism",
        language_multipliers={"es": 1.6, "fr": 1.5, "de": 1.3, "zh": 1.4, "ja": 1.2, "pt": 1.3},
        average_salary=45000,
        growth_rate=0.10,
        demand_level=MarketDemand.MEDIUM,
    ),
    IndustryProfile(
        name="International Business",
        language_multipliers={"zh": 2.2, "de": 1.8, "ja": 1.6, "es": 1.4, "fr": 1.3, "pt": 1.2},
        average_salary=80000,
        growth_rate=0.11,
        demand_level=MarketDemand.VERY_HIGH,
    ),
)

LOCATIONS: tuple[LocationProfile, ...] = (
    LocationProfile(
        country="United States",
        city="New York",
        cost_of_living=1.8,
        language_demand={"es": 1.5, "zh": 1.8, "fr": 1.2, "de": 1.3, "ja": 1.4, "pt": 1.1},
        average_income=85000,
    ),
    LocationProfile(
        country="United States",
        city="San Francisco",
        cost_of_living=2.1,
        language_demand={"zh": 2.0, "ja": 1.6, "es": 1.3, "de": 1.2, "fr": 1.1, "pt": 1.0},
        average_income=120000,
    ),
    LocationProfile(
        country="United States",
        city="Miami",
        cost_of_living=1.3,
        language_demand={"es": 2.2, "pt": 1.8, "fr": 1.2, "zh": 1.1, "de": 1.0, "ja": 1.0},
        average_income=65000,
    ),
    LocationProfile(
        country="Canada",
        city="Toronto",
        cost_of_living=1.4,
        language_demand={"fr": 1.8, "zh": 1.5, "es": 1.2, "de": 1.1, "ja": 1.2, "pt": 1.0},
        average_income=70000,
    ),
)


def get_language(code: str) -> Language | None:
    return next((lang for lang in LANGUAGES if lang.code == code), None)


def get_industry(name: str) -> IndustryProfile | None:
    return next((ind for ind in INDUSTRIES if ind.name == name), None)


def get_location(city: str) -> LocationProfile | None:
    return next((loc for loc in LOCATIONS if loc.city == city), None)


def industry_multiplier(industry: str, language_code: str) -> float:
    """Salary multiplier for a language in an industry (1.0 when unknown)."""
    profile = get_industry(industry)
    if profile is None:
        return NEUTRAL_MULTIPLIER
    return profile.language_multipliers.get(language_code, NEUTRAL_MULTIPLIER)


def location_multiplier(city: str, language_code: str) -> float:
    """Demand multiplier for a language in a city (1.0 when unknown)."""
    profile = get_location(city)
    if profile is None:
        return NEUTRAL_MULTIPLIER
    return profile.language_demand.get(language_code, NEUTRAL_MULTIPLIER)

"""Learner progress, proficiency levels and achievements."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from lingua_educate.models.language import Language


class ProficiencyLevel(StrEnum):
    """CEFR-inspired proficiency tiers, ordered A1 to C2."""

    A1 = "A1 - Beginner"
    A2 = "A2 - Elementary"
    B1 = "B1 - Intermediate"
    B2 = "B2 - Upper Intermediate"
    C1 = "C1 - Advanced"
    C2 = "C2 - Proficient"

    @property
    def cefr(self) -> str:
        """Short CEFR code, e.g. ``"B1"``."""
        return self.name

    @property
    def progress(self) -> float:
        """Fraction of the full A1-C2 journey this level represents."""
        return _LEVEL_PROGRESS[self]

    @property
    def required_xp(self) -> int:
        """Cumulative XP needed to leave this level."""
        return _REQUIRED_XP[self]

    @property
    def study_hours(self) -> int:
        """Estimated cumulative study hours to reach this level."""
        return _STUDY_HOURS[self]

    @property
    def financial_multiplier(self) -> float:
        return _FINANCIAL_MULTIPLIER[self]

    @property
    def next_level(self) -> "ProficiencyLevel | None":
        levels = list(ProficiencyLevel)
        index = levels.index(self)
        if index + 1 < len(levels):
            return levels[index + 1]
        return None

    @classmethod
    def from_cefr(cls, code: str) -> "ProficiencyLevel":
        """Look up a level by its short code (case-insensitive)."""
        try:
            return cls[code.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown CEFR level: {code!r}") from None


_LEVEL_PROGRESS: dict[ProficiencyLevel, float] = {
    ProficiencyLevel.A1: 0.16,
    ProficiencyLevel.A2: 0.33,
    ProficiencyLevel.B1: 0.50,
    ProficiencyLevel.B2: 0.66,
    ProficiencyLevel.C1: 0.83,
    ProficiencyLevel.C2: 1.0,
}

# Cumulative totals, not deltas
_REQUIRED_XP: dict[ProficiencyLevel, int] = {
    ProficiencyLevel.A1: 1000,
    ProficiencyLevel.A2: 2500,
    ProficiencyLevel.B1: 5000,
    ProficiencyLevel.B2: 8000,
    ProficiencyLevel.C1: 12000,
    ProficiencyLevel.C2: 20000,
}

_STUDY_HOURS: dict[ProficiencyLevel, int] = {
    ProficiencyLevel.A1: 100,
    ProficiencyLevel.A2: 200,
    ProficiencyLevel.B1: 350,
    ProficiencyLevel.B2: 500,
    ProficiencyLevel.C1: 700,
    ProficiencyLevel.C2: 1000,
}

_FINANCIAL_MULTIPLIER: dict[ProficiencyLevel, float] = {
    ProficiencyLevel.A1: 0.3,
    ProficiencyLevel.A2: 0.5,
    ProficiencyLevel.B1: 0.7,
    ProficiencyLevel.B2: 0.85,
    ProficiencyLevel.C1: 0.95,
    ProficiencyLevel.C2: 1.0,
}


class AchievementCategory(StrEnum):
    VOCABULARY = "Vocabulary"
    STREAK = "Streak"
    CHALLENGE = "Challenge"
    FINANCIAL = "Financial"
    LOCATION = "Location"
    SOCIAL = "Social"


class Achievement(BaseModel):
    """An unlocked achievement. The title is unique per learner."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    icon: str = "star.fill"
    category: AchievementCategory
    experience_reward: int
    unlocked_date: datetime = Field(default_factory=datetime.now)


class LocationData(BaseModel):
    """A resolved device location (supplied by an external provider)."""

    latitude: float
    longitude: float
    country: str
    city: str
    timestamp: datetime = Field(default_factory=datetime.now)


class UserProgress(BaseModel):
    """Progress of one learner in one language."""

    language_code: str
    level: ProficiencyLevel = ProficiencyLevel.A1
    experience_points: int = 0
    streak: int = 0
    completed_challenges: list[str] = Field(default_factory=list)
    achievements: list[Achievement] = Field(default_factory=list)
    last_study_date: datetime = Field(default_factory=datetime.now)
    total_study_time: float = 0.0  # seconds
    vocabulary_mastered: int = 0
    current_location: LocationData | None = None


class LearningGoal(StrEnum):
    CAREER = "Career Advancement"
    TRAVEL = "Travel & Tourism"
    CULTURE = "Cultural Understanding"
    BUSINESS = "Business Communication"
    ACADEMIC = "Academic Purposes"
    PERSONAL = "Personal Interest"


class UserProfile(BaseModel):
    """Profile captured during onboarding."""

    name: str
    age: int
    current_salary: float
    years_of_experience: int
    industry: str
    location: str
    learning_goals: list[LearningGoal] = Field(default_factory=list)
    preferred_study_time: int = 15  # minutes per day


class LearnerState(BaseModel):
    """Everything persisted for the (single, local) learner."""

    languages: list[Language] = Field(default_factory=list)
    user_progress: list[UserProgress] = Field(default_factory=list)
    achievements: list[Achievement] = Field(default_factory=list)
    has_completed_onboarding: bool = False
    selected_languages: list[str] = Field(default_factory=list)
    current_user: UserProfile | None = None

    def progress_for(self, language_code: str) -> UserProgress | None:
        for progress in self.user_progress:
            if progress.language_code == language_code:
                return progress
        return None

"""Events accepted by ``ProgressTracker.apply_event``."""

from pydantic import BaseModel, ConfigDict, Field

from lingua_educate.models.challenge import Challenge
from lingua_educate.models.progress import UserProfile


class TrackerEvent(BaseModel):
    """Base class for tracker events."""

    model_config = ConfigDict(frozen=True)


class StudySessionRecorded(TrackerEvent):
    language_code: str
    xp_gained: int = Field(ge=0)
    study_seconds: float = 0.0
    words_learned: int = 0


class ChallengeCompleted(TrackerEvent):
    challenge: Challenge
    score: float


class LanguageAdded(TrackerEvent):
    language_code: str


class OnboardingCompleted(TrackerEvent):
    profile: UserProfile
    language_codes: list[str]


class ProgressReset(TrackerEvent):
    pass

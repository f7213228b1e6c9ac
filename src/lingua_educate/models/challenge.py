"""Challenge and quiz question models."""

import uuid
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from lingua_educate.models.progress import LocationData


class ChallengeDifficulty(StrEnum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"
    EXPERT = "Expert"

    @property
    def multiplier(self) -> float:
        return {
            ChallengeDifficulty.EASY: 1.0,
            ChallengeDifficulty.MEDIUM: 1.5,
            ChallengeDifficulty.HARD: 2.0,
            ChallengeDifficulty.EXPERT: 3.0,
        }[self]


class ChallengeCategory(StrEnum):
    VOCABULARY = "vocabulary"
    GRAMMAR = "grammar"
    LISTENING = "listening"


class ChallengeQuestion(BaseModel):
    """A single multiple-choice question."""

    model_config = ConfigDict(frozen=True)

    question: str
    options: list[str]
    correct_answer: int
    explanation: str = ""
    audio_url: str | None = None

    @model_validator(mode="after")
    def _answer_is_an_option(self) -> "ChallengeQuestion":
        if not 0 <= self.correct_answer < len(self.options):
            raise ValueError(
                f"correct_answer {self.correct_answer} is not one of {len(self.options)} options"
            )
        return self


class Challenge(BaseModel):
    """A quiz-style challenge targeting one language."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    title: str
    description: str
    difficulty: ChallengeDifficulty
    category: ChallengeCategory
    language_code: str
    experience_reward: int
    time_limit: float | None = None  # seconds
    questions: list[ChallengeQuestion] = Field(default_factory=list)
    required_location: LocationData | None = None


class MissedQuestion(BaseModel):
    """A wrongly answered or skipped question, for the results review."""

    question: str
    selected_answer: str | None
    correct_answer: str
    explanation: str


class ChallengeResult(BaseModel):
    """Outcome of a submitted challenge attempt."""

    challenge_id: str
    score: float
    correct_count: int
    total_questions: int
    experience_earned: int
    performance_level: str
    timed_out: bool = False
    missed_questions: list[MissedQuestion] = Field(default_factory=list)

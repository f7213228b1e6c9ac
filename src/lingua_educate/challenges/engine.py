"""Daily challenge generation, scoring and timed attempts."""

import math
import uuid
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

import structlog
from pydantic import BaseModel, Field

from lingua_educate.challenges.question_bank import QuestionBank
from lingua_educate.errors import InvalidInput
from lingua_educate.models.challenge import (
    Challenge,
    ChallengeCategory,
    ChallengeDifficulty,
    ChallengeResult,
    MissedQuestion,
)
from lingua_educate.models.progress import LocationData

logger = structlog.get_logger()

UNANSWERED = -1
REVIEW_THRESHOLD = 0.7
CHALLENGE_NAMESPACE = uuid.UUID("6f1c2b1e-3d4a-4f0e-9b7a-2c5d8e9f0a11")


@dataclass(frozen=True)
class ChallengeTemplate:
    """Archetype of a daily challenge; questions come from the bank."""

    title: str
    description: str
    difficulty: ChallengeDifficulty
    category: ChallengeCategory
    experience_reward: int
    time_limit: float | None


DAILY_TEMPLATES: tuple[ChallengeTemplate, ...] = (
    ChallengeTemplate(
        title="Daily Vocabulary",
        description="Learn 10 new words in your target language",
        difficulty=ChallengeDifficulty.EASY,
        category=ChallengeCategory.VOCABULARY,
        experience_reward=100,
        time_limit=600,
    ),
    ChallengeTemplate(
        title="Grammar Focus",
        description="Master verb conjugations",
        difficulty=ChallengeDifficulty.MEDIUM,
        category=ChallengeCategory.GRAMMAR,
        experience_reward=200,
        time_limit=900,
    ),
    ChallengeTemplate(
        title="Listening Practice",
        description="Improve your listening comprehension",
        difficulty=ChallengeDifficulty.HARD,
        category=ChallengeCategory.LISTENING,
        experience_reward=300,
        time_limit=1200,
    ),
)


def score_answers(challenge: Challenge, selected: Sequence[int | None]) -> float:
    """Fraction of questions answered with the correct option.

    ``selected[i]`` is the chosen option index for question ``i``; ``-1``,
    ``None`` or a missing entry counts as unanswered (wrong).

    Raises:
        InvalidInput: If the challenge has no questions, or an answer names an
            option or question that does not exist.
    """
    total = len(challenge.questions)
    if total == 0:
        raise InvalidInput(f"Challenge '{challenge.title}' has no questions to score")
    if len(selected) > total:
        raise InvalidInput(f"Got {len(selected)} answers for {total} questions")
    for i, choice in enumerate(selected):
        if choice is None or choice == UNANSWERED:
            continue
        if not 0 <= choice < len(challenge.questions[i].options):
            raise InvalidInput(f"No option {choice} for question {i}")

    correct = sum(
        1
        for i, question in enumerate(challenge.questions)
        if i < len(selected) and selected[i] == question.correct_answer
    )
    return correct / total


def experience_for_score(challenge: Challenge, score: float) -> int:
    """XP earned for a score, rounding half up."""
    return math.floor(challenge.experience_reward * score + 0.5)


def performance_level(score: float) -> str:
    if score >= 0.9:
        return "Excellent!"
    elif score >= 0.7:
        return "Great Job!"
    elif score >= 0.5:
        return "Good Work!"
    elif score >= 0.3:
        return "Keep Practicing!"
    else:
        return "Try Again!"


def build_result(
    challenge: Challenge, selected: Sequence[int | None], timed_out: bool = False
) -> ChallengeResult:
    """Score an attempt and assemble the results breakdown.

    Missed questions are listed for review only when the score is below 70%.
    """
    score = score_answers(challenge, selected)
    correct_count = round(score * len(challenge.questions))

    missed: list[MissedQuestion] = []
    if score < REVIEW_THRESHOLD:
        for i, question in enumerate(challenge.questions):
            choice = selected[i] if i < len(selected) else None
            if choice == question.correct_answer:
                continue
            chosen_text = (
                question.options[choice]
                if choice is not None and 0 <= choice < len(question.options)
                else None
            )
            missed.append(
                MissedQuestion(
                    question=question.question,
                    selected_answer=chosen_text,
                    correct_answer=question.options[question.correct_answer],
                    explanation=question.explanation,
                )
            )

    return ChallengeResult(
        challenge_id=challenge.id,
        score=score,
        correct_count=correct_count,
        total_questions=len(challenge.questions),
        experience_earned=experience_for_score(challenge, score),
        performance_level=performance_level(score),
        timed_out=timed_out,
        missed_questions=missed,
    )


class ChallengeAttempt(BaseModel):
    """An in-progress run through a challenge."""

    challenge: Challenge
    started_at: datetime
    answers: list[int] = Field(default_factory=list)
    submitted: bool = False

    def model_post_init(self, __context: Any) -> None:
        if not self.answers:
            self.answers = [UNANSWERED] * len(self.challenge.questions)

    def select(self, question_index: int, option_index: int) -> None:
        """Record the chosen option for a question.

        Raises:
            InvalidInput: If either index is out of range or the attempt
                was already submitted.
        """
        if self.submitted:
            raise InvalidInput("Attempt has already been submitted")
        if not 0 <= question_index < len(self.challenge.questions):
            raise InvalidInput(f"No question at index {question_index}")
        options = self.challenge.questions[question_index].options
        if not 0 <= option_index < len(options):
            raise InvalidInput(f"No option at index {option_index}")
        self.answers[question_index] = option_index

    def remaining_seconds(self, now: datetime) -> float | None:
        """Seconds left on the timer, or None for untimed challenges."""
        if self.challenge.time_limit is None:
            return None
        elapsed = (now - self.started_at).total_seconds()
        return max(0.0, self.challenge.time_limit - elapsed)

    def is_expired(self, now: datetime) -> bool:
        remaining = self.remaining_seconds(now)
        return remaining is not None and remaining <= 0

    def submit(self, now: datetime | None = None) -> ChallengeResult:
        """Score the attempt with the answers given so far."""
        if self.submitted:
            raise InvalidInput("Attempt has already been submitted")
        timed_out = now is not None and self.is_expired(now)
        self.submitted = True
        return build_result(self.challenge, self.answers, timed_out=timed_out)


class ChallengeEngine:
    """Generates daily challenges from a pluggable question bank.

    Args:
        question_bank: Source of questions per language and category.
        templates: Challenge archetypes to instantiate each session.
    """

    def __init__(
        self,
        question_bank: QuestionBank,
        templates: Sequence[ChallengeTemplate] = DAILY_TEMPLATES,
    ):
        self.question_bank = question_bank
        self.templates = tuple(templates)

    def generate_daily_challenges(
        self, language_code: str, day: date | None = None
    ) -> list[Challenge]:
        """Build this session's challenges; templates with no questions are skipped.

        Args:
            language_code: Language the challenges target.
            day: When given, challenge ids are derived from the day, language
                and title so the same set can be regenerated later that day.
        """
        challenges = []
        for template in self.templates:
            questions = self.question_bank.questions_for(language_code, template.category)
            if not questions:
                logger.debug(
                    "challenge_skipped_no_questions",
                    language_code=language_code,
                    category=template.category.value,
                )
                continue
            extra = {}
            if day is not None:
                seed = f"{day.isoformat()}:{language_code}:{template.title}"
                extra["id"] = str(uuid.uuid5(CHALLENGE_NAMESPACE, seed))
            challenges.append(
                Challenge(
                    **extra,
                    title=template.title,
                    description=template.description,
                    difficulty=template.difficulty,
                    category=template.category,
                    language_code=language_code,
                    experience_reward=template.experience_reward,
                    time_limit=template.time_limit,
                    questions=questions,
                )
            )
        logger.info(
            "daily_challenges_generated",
            language_code=language_code,
            count=len(challenges),
        )
        return challenges

    @staticmethod
    def available_challenges(
        challenges: Sequence[Challenge], location: LocationData | None = None
    ) -> list[Challenge]:
        """Filter out location-gated challenges the learner cannot unlock.

        A gated challenge is available only when the current city and
        country both match its required location.
        """
        available = []
        for challenge in challenges:
            required = challenge.required_location
            if required is None:
                available.append(challenge)
            elif (
                location is not None
                and location.city == required.city
                and location.country == required.country
            ):
                available.append(challenge)
        return available

    @staticmethod
    def start(challenge: Challenge, now: datetime) -> ChallengeAttempt:
        """Begin an attempt.

        Raises:
            InvalidInput: If the challenge has no questions.
        """
        if not challenge.questions:
            raise InvalidInput(f"Challenge '{challenge.title}' has no questions")
        return ChallengeAttempt(challenge=challenge, started_at=now)

    @staticmethod
    def submit_if_expired(attempt: ChallengeAttempt, now: datetime) -> ChallengeResult | None:
        """Auto-submit a timed attempt whose timer has run out."""
        if attempt.submitted or not attempt.is_expired(now):
            return None
        logger.info("challenge_timed_out", challenge_id=attempt.challenge.id)
        return attempt.submit(now)

"""Progress and achievement tracking with observable learner state."""

from datetime import datetime
from typing import Any, Callable

import structlog

from lingua_educate.challenges.engine import experience_for_score
from lingua_educate.errors import InvalidInput
from lingua_educate.models.challenge import Challenge
from lingua_educate.models.language import Language
from lingua_educate.models.progress import (
    Achievement,
    AchievementCategory,
    LearnerState,
    ProficiencyLevel,
    UserProfile,
    UserProgress,
)
from lingua_educate.progress.clock import Clock, SystemClock, calendar_days_between
from lingua_educate.progress.events import (
    ChallengeCompleted,
    LanguageAdded,
    OnboardingCompleted,
    ProgressReset,
    StudySessionRecorded,
    TrackerEvent,
)
from lingua_educate.reference import tables

logger = structlog.get_logger()

Subscriber = Callable[[LearnerState], None]

STREAK_MILESTONES = (7, 14, 30, 60, 100)
LEVEL_UP_TITLE = "Level Up!"
LEVEL_UP_REWARD = 500
CHALLENGE_MASTER_REWARD = 200
CHALLENGE_MASTER_SCORE = 0.8
LANGUAGE_EXPLORER_REWARD = 100


class ProgressTracker:
    """Owns the learner state and mutates it in response to study events.

    Subscribers registered with :meth:`subscribe` receive a copy of the new
    state after every change; persistence is wired up this way.

    Args:
        state: Initial learner state.
        clock: Time source for study dates and streak comparisons.
    """

    def __init__(self, state: LearnerState | None = None, clock: Clock | None = None):
        self._state = state if state is not None else LearnerState()
        self._clock = clock or SystemClock()
        self._subscribers: list[Subscriber] = []

    def get_state(self) -> LearnerState:
        return self._state.model_copy(deep=True)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a change callback; returns a function that removes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.get_state()
        for callback in list(self._subscribers):
            callback(snapshot)

    def apply_event(self, event: TrackerEvent) -> Any:
        """Dispatch an event to the matching operation and return its result."""
        if isinstance(event, StudySessionRecorded):
            return self.record_study_session(
                event.language_code,
                event.xp_gained,
                study_seconds=event.study_seconds,
                words_learned=event.words_learned,
            )
        elif isinstance(event, ChallengeCompleted):
            return self.complete_challenge(event.challenge, event.score)
        elif isinstance(event, LanguageAdded):
            return self.add_language_to_learning(event.language_code)
        elif isinstance(event, OnboardingCompleted):
            return self.complete_onboarding(event.profile, event.language_codes)
        elif isinstance(event, ProgressReset):
            return self.reset()
        raise TypeError(f"Unsupported tracker event: {type(event).__name__}")

    # Queries

    def get_progress(self, language_code: str) -> UserProgress | None:
        progress = self._state.progress_for(language_code)
        return progress.model_copy(deep=True) if progress else None

    def recent_achievements(self, limit: int = 3) -> list[Achievement]:
        if limit <= 0:
            return []
        return list(self._state.achievements[-limit:])

    def progress_summary(self, language_code: str) -> dict[str, Any] | None:
        """Dashboard figures for one language, or None if it is not studied."""
        progress = self._state.progress_for(language_code)
        if progress is None:
            return None
        total_seconds = int(progress.total_study_time)
        hours, minutes = total_seconds // 3600, (total_seconds % 3600) // 60
        streak_unit = "day" if progress.streak == 1 else "days"
        return {
            "language_code": progress.language_code,
            "level": progress.level.value,
            "level_progress": progress.level.progress,
            "streak_text": f"{progress.streak} {streak_unit}",
            "experience_text": f"{progress.experience_points} XP",
            "vocabulary_text": f"{progress.vocabulary_mastered} words mastered",
            "study_time_text": f"{hours}h {minutes}m",
            "next_level": {
                "current": progress.experience_points,
                "required": progress.level.required_xp,
            },
        }

    # Commands

    def record_study_session(
        self,
        language_code: str,
        xp_gained: int,
        study_seconds: float = 0.0,
        words_learned: int = 0,
    ) -> UserProgress | None:
        """Add XP to a language, then run the level-up and streak checks.

        Returns:
            Updated copy of the progress record, or None when the language is
            not being studied.

        Raises:
            InvalidInput: If any of the gained amounts is negative.
        """
        progress = self._record_study_session(
            language_code, xp_gained, study_seconds, words_learned
        )
        if progress is None:
            return None
        self._notify()
        return progress.model_copy(deep=True)

    def add_achievement(self, achievement: Achievement) -> bool:
        """Award an achievement unless one with the same title exists.

        Returns:
            True if the achievement was added.
        """
        added = self._award(achievement)
        if added:
            self._notify()
        return added

    def complete_challenge(self, challenge: Challenge, score: float) -> int | None:
        """Credit a finished challenge to the challenge's language.

        Args:
            challenge: The completed challenge.
            score: Fraction of correct answers in [0, 1].

        Returns:
            XP earned, or None when the challenge language is not studied.
        """
        if not 0.0 <= score <= 1.0:
            raise InvalidInput(f"score must be within [0, 1], got {score}")

        xp_gained = experience_for_score(challenge, score)
        progress = self._record_study_session(challenge.language_code, xp_gained, 0.0, 0)
        if progress is None:
            return None

        progress.completed_challenges.append(challenge.id)
        logger.info(
            "challenge_completed",
            challenge_id=challenge.id,
            language_code=challenge.language_code,
            score=score,
            xp_gained=xp_gained,
        )

        if score >= CHALLENGE_MASTER_SCORE:
            self._award(
                Achievement(
                    title=f"Challenge Master: {challenge.title}",
                    description=f"Completed '{challenge.title}' with excellent score",
                    icon="star.fill",
                    category=AchievementCategory.CHALLENGE,
                    experience_reward=CHALLENGE_MASTER_REWARD,
                    unlocked_date=self._clock.now(),
                ),
                progress,
            )

        self._notify()
        return xp_gained

    def add_language_to_learning(self, language_code: str) -> UserProgress:
        """Start tracking a language at A1.

        Raises:
            InvalidInput: If the language code is unknown.
        """
        language = self._find_language(language_code)
        if language is None:
            raise InvalidInput(f"Unknown language code: {language_code!r}")

        existing = self._state.progress_for(language_code)
        if existing is not None:
            logger.info("language_already_tracked", language_code=language_code)
            return existing.model_copy(deep=True)

        progress = UserProgress(
            language_code=language_code,
            level=ProficiencyLevel.A1,
            last_study_date=self._clock.now(),
        )
        self._state.user_progress.append(progress)
        logger.info("language_added", language_code=language_code)

        self._award(
            Achievement(
                title="Language Explorer",
                description=f"Started learning {language.name}",
                icon="globe",
                category=AchievementCategory.VOCABULARY,
                experience_reward=LANGUAGE_EXPLORER_REWARD,
                unlocked_date=self._clock.now(),
            )
        )
        self._notify()
        return progress.model_copy(deep=True)

    def complete_onboarding(
        self, profile: UserProfile, language_codes: list[str]
    ) -> LearnerState:
        """Store the onboarding profile and start every selected language."""
        for code in language_codes:
            if self._find_language(code) is None:
                raise InvalidInput(f"Unknown language code: {code!r}")

        self._state.current_user = profile
        self._state.selected_languages = list(language_codes)
        self._state.has_completed_onboarding = True
        for code in language_codes:
            self.add_language_to_learning(code)
        self._notify()
        return self.get_state()

    def reset_onboarding(self) -> None:
        self._state.has_completed_onboarding = False
        self._state.selected_languages = []
        self._state.current_user = None
        self._notify()

    def reset(self) -> None:
        """Wipe all progress records and achievements."""
        self._state.user_progress = []
        self._state.achievements = []
        logger.info("progress_reset")
        self._notify()

    # Internals

    def _find_language(self, code: str) -> Language | None:
        for language in self._state.languages:
            if language.code == code:
                return language
        return tables.get_language(code)

    def _record_study_session(
        self,
        language_code: str,
        xp_gained: int,
        study_seconds: float,
        words_learned: int,
    ) -> UserProgress | None:
        if xp_gained < 0 or study_seconds < 0 or words_learned < 0:
            raise InvalidInput("study session amounts must not be negative")

        progress = self._state.progress_for(language_code)
        if progress is None:
            logger.warning("progress_not_found", language_code=language_code)
            return None

        previous_study_date = progress.last_study_date
        now = self._clock.now()

        progress.experience_points += xp_gained
        progress.total_study_time += study_seconds
        progress.vocabulary_mastered += words_learned
        progress.last_study_date = now

        self._check_level_up(progress)
        self._update_streak(progress, previous_study_date)
        return progress

    def _check_level_up(self, progress: UserProgress) -> None:
        # At most one level per session, even if XP covers several thresholds
        next_level = progress.level.next_level
        if next_level is None or progress.experience_points < progress.level.required_xp:
            return

        old_level = progress.level
        progress.level = next_level
        logger.info(
            "level_up",
            language_code=progress.language_code,
            old_level=old_level.cefr,
            new_level=next_level.cefr,
            experience_points=progress.experience_points,
        )
        self._award(
            Achievement(
                title=LEVEL_UP_TITLE,
                description=f"Reached {next_level.value}",
                icon="arrow.up.circle.fill",
                category=AchievementCategory.VOCABULARY,
                experience_reward=LEVEL_UP_REWARD,
                unlocked_date=self._clock.now(),
            ),
            progress,
        )

    def _update_streak(self, progress: UserProgress, previous_study_date: datetime) -> None:
        days = calendar_days_between(self._clock, previous_study_date, progress.last_study_date)
        if days == 0:
            # A record that has never been studied starts its streak today
            if progress.streak == 0:
                progress.streak = 1
            return

        if days == 1:
            progress.streak += 1
            self._check_streak_milestone(progress)
        else:
            if progress.streak > 1:
                logger.info(
                    "streak_broken",
                    language_code=progress.language_code,
                    previous_streak=progress.streak,
                )
            progress.streak = 1

    def _check_streak_milestone(self, progress: UserProgress) -> None:
        streak = progress.streak
        if streak not in STREAK_MILESTONES:
            return
        self._award(
            Achievement(
                title=f"{streak} Day Streak!",
                description=f"Maintained a {streak}-day study streak",
                icon="flame.fill",
                category=AchievementCategory.STREAK,
                experience_reward=streak * 10,
                unlocked_date=self._clock.now(),
            ),
            progress,
        )

    def _award(self, achievement: Achievement, progress: UserProgress | None = None) -> bool:
        if any(a.title == achievement.title for a in self._state.achievements):
            logger.debug("achievement_already_unlocked", title=achievement.title)
            return False
        self._state.achievements.append(achievement)
        if progress is not None:
            progress.achievements.append(achievement)
        logger.info(
            "achievement_unlocked",
            title=achievement.title,
            category=achievement.category.value,
            experience_reward=achievement.experience_reward,
        )
        return True

"""Load and save the learner state through the key-value store."""

from datetime import datetime, timedelta
from typing import Any, Callable

import structlog
from pydantic import TypeAdapter, ValidationError

from lingua_educate.errors import PersistenceReadFailure
from lingua_educate.models.language import Language
from lingua_educate.models.progress import (
    Achievement,
    AchievementCategory,
    LearnerState,
    LocationData,
    ProficiencyLevel,
    UserProfile,
    UserProgress,
)
from lingua_educate.reference.tables import LANGUAGES
from lingua_educate.storage.key_value import JsonKeyValueStore

logger = structlog.get_logger()

LANGUAGES_KEY = "languages"
USER_PROGRESS_KEY = "user_progress"
ACHIEVEMENTS_KEY = "achievements"
ONBOARDING_KEY = "has_completed_onboarding"
SELECTED_LANGUAGES_KEY = "selected_languages"
CURRENT_USER_KEY = "current_user"

_languages_adapter = TypeAdapter(list[Language])
_progress_adapter = TypeAdapter(list[UserProgress])
_achievements_adapter = TypeAdapter(list[Achievement])


def sample_progress(now: datetime) -> list[UserProgress]:
    """Progress record seeded on first run."""
    return [
        UserProgress(
            language_code="es",
            level=ProficiencyLevel.B1,
            experience_points=2500,
            streak=15,
            completed_challenges=["basic_greetings", "restaurant_vocab", "travel_phrases"],
            achievements=[
                Achievement(
                    title="First Steps",
                    description="Complete your first language lesson",
                    icon="star.fill",
                    category=AchievementCategory.VOCABULARY,
                    experience_reward=100,
                    unlocked_date=now - timedelta(days=10),
                ),
                Achievement(
                    title="Week Warrior",
                    description="Maintain a 7-day study streak",
                    icon="flame.fill",
                    category=AchievementCategory.STREAK,
                    experience_reward=250,
                    unlocked_date=now - timedelta(days=3),
                ),
            ],
            last_study_date=now,
            total_study_time=3600 * 25,
            vocabulary_mastered=450,
            current_location=LocationData(
                latitude=40.7128,
                longitude=-74.0060,
                country="United States",
                city="New York",
                timestamp=now,
            ),
        )
    ]


def _read(
    store: JsonKeyValueStore,
    key: str,
    parse: Callable[[Any], Any],
    default: Callable[[], Any],
) -> tuple[Any, bool]:
    """Read and validate one key, falling back to ``default()`` on any failure.

    Returns:
        (value, used_default)
    """
    try:
        raw = store.get(key)
    except PersistenceReadFailure as e:
        logger.warning("persisted_key_unreadable", key=key, error=e.reason)
        return default(), True
    if raw is None:
        return default(), True
    try:
        return parse(raw), False
    except ValidationError as e:
        logger.warning("persisted_key_invalid", key=key, errors=e.error_count())
        return default(), True


def load_state(
    store: JsonKeyValueStore,
    seed: bool = True,
    now: datetime | None = None,
) -> LearnerState:
    """Load the learner state, seeding defaults for missing or broken keys.

    Languages always fall back to the reference table. With ``seed`` the
    progress list falls back to one sample record; otherwise it starts empty.
    Seeded values are written back so the next load is clean.

    Args:
        store: Backing key-value store.
        seed: Whether to seed sample progress on first run.
        now: Timestamp used for seeded dates.
    """
    now = now or datetime.now()

    languages, seeded_languages = _read(
        store, LANGUAGES_KEY, _languages_adapter.validate_python, lambda: list(LANGUAGES)
    )
    progress, seeded_progress = _read(
        store,
        USER_PROGRESS_KEY,
        _progress_adapter.validate_python,
        lambda: sample_progress(now) if seed else [],
    )
    achievements, _ = _read(
        store, ACHIEVEMENTS_KEY, _achievements_adapter.validate_python, list
    )
    onboarded, _ = _read(store, ONBOARDING_KEY, bool, lambda: False)
    selected, _ = _read(
        store, SELECTED_LANGUAGES_KEY, TypeAdapter(list[str]).validate_python, list
    )
    current_user, _ = _read(
        store,
        CURRENT_USER_KEY,
        lambda raw: UserProfile.model_validate(raw) if raw else None,
        lambda: None,
    )

    state = LearnerState(
        languages=languages,
        user_progress=progress,
        achievements=achievements,
        has_completed_onboarding=onboarded,
        selected_languages=selected,
        current_user=current_user,
    )

    if seeded_languages:
        store.set(LANGUAGES_KEY, _dump_list(state.languages))
    if seeded_progress:
        store.set(USER_PROGRESS_KEY, _dump_list(state.user_progress))

    logger.info(
        "learner_state_loaded",
        languages=len(state.languages),
        progress_records=len(state.user_progress),
        achievements=len(state.achievements),
    )
    return state


def save_state(store: JsonKeyValueStore, state: LearnerState) -> None:
    """Write every key of ``state`` back to the store."""
    store.set(LANGUAGES_KEY, _dump_list(state.languages))
    store.set(USER_PROGRESS_KEY, _dump_list(state.user_progress))
    store.set(ACHIEVEMENTS_KEY, _dump_list(state.achievements))
    store.set(ONBOARDING_KEY, state.has_completed_onboarding)
    store.set(SELECTED_LANGUAGES_KEY, list(state.selected_languages))
    if state.current_user is None:
        store.delete(CURRENT_USER_KEY)
    else:
        store.set(CURRENT_USER_KEY, state.current_user.model_dump(mode="json"))


def _dump_list(items: list) -> list[dict]:
    return [item.model_dump(mode="json") for item in items]

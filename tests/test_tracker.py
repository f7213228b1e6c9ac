"""Tests for ProgressTracker: XP, levels, streaks, achievements."""

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest
from conftest import FrozenClock

from lingua_educate.errors import InvalidInput
from lingua_educate.models.challenge import (
    Challenge,
    ChallengeCategory,
    ChallengeDifficulty,
    ChallengeQuestion,
)
from lingua_educate.models.progress import (
    Achievement,
    AchievementCategory,
    LearnerState,
    LearningGoal,
    ProficiencyLevel,
    UserProfile,
    UserProgress,
)
from lingua_educate.progress.events import (
    ChallengeCompleted,
    LanguageAdded,
    ProgressReset,
    StudySessionRecorded,
)
from lingua_educate.progress.tracker import ProgressTracker
from lingua_educate.reference.tables import LANGUAGES


def tracker_with(clock, **progress_fields) -> ProgressTracker:
    fields = {"language_code": "es", "last_study_date": clock.now()}
    fields.update(progress_fields)
    state = LearnerState(languages=list(LANGUAGES), user_progress=[UserProgress(**fields)])
    return ProgressTracker(state, clock=clock)


def make_challenge(language_code="es", reward=100, title="Daily Vocabulary") -> Challenge:
    return Challenge(
        title=title,
        description="Learn new words",
        difficulty=ChallengeDifficulty.EASY,
        category=ChallengeCategory.VOCABULARY,
        language_code=language_code,
        experience_reward=reward,
        questions=[
            ChallengeQuestion(question="q1", options=["a", "b"], correct_answer=1),
            ChallengeQuestion(question="q2", options=["a", "b"], correct_answer=0),
        ],
    )


def titles(tracker: ProgressTracker) -> list[str]:
    return [a.title for a in tracker.get_state().achievements]


class TestRecordStudySession:
    def test_adds_xp_and_updates_date(self, clock):
        tracker = tracker_with(clock, last_study_date=clock.now() - timedelta(days=1))
        clock.advance(hours=1)
        progress = tracker.record_study_session("es", 120, study_seconds=900, words_learned=12)
        assert progress.experience_points == 120
        assert progress.last_study_date == clock.now()
        assert progress.total_study_time == 900
        assert progress.vocabulary_mastered == 12

    def test_unknown_language_is_ignored(self, tracker):
        assert tracker.record_study_session("ja", 50) is None
        assert tracker.get_state().user_progress == []

    def test_negative_xp_rejected(self, clock):
        tracker = tracker_with(clock)
        with pytest.raises(InvalidInput):
            tracker.record_study_session("es", -5)
        assert tracker.get_progress("es").experience_points == 0


class TestLevelUp:
    def test_threshold_reached_advances_one_level(self, clock):
        tracker = tracker_with(clock, experience_points=999)
        progress = tracker.record_study_session("es", 1)
        assert progress.experience_points == 1000
        assert progress.level == ProficiencyLevel.A2
        assert titles(tracker).count("Level Up!") == 1
        level_up = tracker.get_state().achievements[0]
        assert level_up.experience_reward == 500
        assert level_up.description == "Reached A2 - Elementary"

    def test_below_threshold_stays(self, clock):
        tracker = tracker_with(clock, experience_points=998)
        assert tracker.record_study_session("es", 1).level == ProficiencyLevel.A1
        assert titles(tracker) == []

    def test_only_one_level_per_session(self, clock):
        tracker = tracker_with(clock)
        progress = tracker.record_study_session("es", 9000)
        assert progress.level == ProficiencyLevel.A2

    def test_second_level_up_does_not_duplicate_achievement(self, clock):
        tracker = tracker_with(clock, experience_points=999)
        tracker.record_study_session("es", 1)
        progress = tracker.record_study_session("es", 1500)
        assert progress.level == ProficiencyLevel.B1
        assert titles(tracker).count("Level Up!") == 1

    def test_top_level_never_advances(self, clock):
        tracker = tracker_with(clock, level=ProficiencyLevel.C2, experience_points=19999)
        progress = tracker.record_study_session("es", 5000)
        assert progress.level == ProficiencyLevel.C2
        assert titles(tracker) == []

    def test_level_never_regresses(self, clock):
        tracker = tracker_with(clock, level=ProficiencyLevel.B2, experience_points=100)
        assert tracker.record_study_session("es", 0).level == ProficiencyLevel.B2


class TestStreak:
    def test_studied_yesterday_increments(self, clock):
        tracker = tracker_with(clock, streak=3, last_study_date=clock.now() - timedelta(days=1))
        assert tracker.record_study_session("es", 10).streak == 4

    def test_same_day_unchanged(self, clock):
        tracker = tracker_with(clock, streak=3, last_study_date=clock.now() - timedelta(hours=2))
        assert tracker.record_study_session("es", 10).streak == 3

    def test_gap_resets_to_one(self, clock):
        tracker = tracker_with(clock, streak=12, last_study_date=clock.now() - timedelta(days=3))
        assert tracker.record_study_session("es", 10).streak == 1

    def test_calendar_day_boundary(self, clock):
        # 23:50 yesterday to 00:10 today is a new calendar day
        clock.current = clock.current.replace(hour=0, minute=10)
        tracker = tracker_with(
            clock, streak=2, last_study_date=clock.now() - timedelta(minutes=20)
        )
        assert tracker.record_study_session("es", 10).streak == 3

    def test_yesterday_across_spring_forward(self, new_york_local_time):
        # 2026-03-08 is 23 hours long in New York
        clock = FrozenClock(datetime(2026, 3, 9, 0, 30).astimezone())
        tracker = tracker_with(
            clock, streak=3, last_study_date=datetime(2026, 3, 8, 20, 0).astimezone()
        )
        assert tracker.record_study_session("es", 10).streak == 4

    @pytest.mark.parametrize(
        "previous,now",
        [
            (datetime(2026, 3, 8, 20, 0), datetime(2026, 3, 9, 0, 30)),
            (datetime(2026, 10, 31, 0, 15), datetime(2026, 11, 1, 23, 45)),
        ],
    )
    def test_yesterday_across_dst_in_configured_zone(self, previous, now):
        new_york = ZoneInfo("America/New_York")
        clock = FrozenClock(now.replace(tzinfo=new_york), tz=new_york)
        tracker = tracker_with(clock, streak=3, last_study_date=previous.replace(tzinfo=new_york))
        assert tracker.record_study_session("es", 10).streak == 4

    def test_two_calendar_days_across_dst_resets(self):
        new_york = ZoneInfo("America/New_York")
        clock = FrozenClock(datetime(2026, 3, 9, 23, 0, tzinfo=new_york), tz=new_york)
        tracker = tracker_with(
            clock, streak=3, last_study_date=datetime(2026, 3, 7, 23, 30, tzinfo=new_york)
        )
        assert tracker.record_study_session("es", 10).streak == 1

    def test_fresh_record_starts_streak(self, clock):
        tracker = tracker_with(clock, streak=0)
        assert tracker.record_study_session("es", 10).streak == 1

    def test_seven_day_milestone_awarded_once(self, clock):
        tracker = tracker_with(clock, streak=6, last_study_date=clock.now() - timedelta(days=1))
        assert tracker.record_study_session("es", 10).streak == 7
        tracker.record_study_session("es", 10)
        streak_awards = [a for a in tracker.get_state().achievements if a.title == "7 Day Streak!"]
        assert len(streak_awards) == 1
        assert streak_awards[0].experience_reward == 70
        assert streak_awards[0].category == AchievementCategory.STREAK

    def test_consecutive_days_reach_milestone(self, clock):
        tracker = tracker_with(clock, streak=12, last_study_date=clock.now() - timedelta(days=1))
        tracker.record_study_session("es", 10)
        clock.advance(days=1)
        progress = tracker.record_study_session("es", 10)
        assert progress.streak == 14
        assert "14 Day Streak!" in titles(tracker)
        assert "13 Day Streak!" not in titles(tracker)

    def test_milestone_recorded_on_progress(self, clock):
        tracker = tracker_with(clock, streak=29, last_study_date=clock.now() - timedelta(days=1))
        progress = tracker.record_study_session("es", 10)
        assert [a.title for a in progress.achievements] == ["30 Day Streak!"]


class TestAddAchievement:
    def test_idempotent_on_title(self, tracker):
        achievement = Achievement(
            title="Polyglot",
            description="Study three languages",
            category=AchievementCategory.SOCIAL,
            experience_reward=300,
        )
        assert tracker.add_achievement(achievement) is True
        assert tracker.add_achievement(achievement.model_copy(update={"description": "x"})) is False
        assert titles(tracker) == ["Polyglot"]


class TestCompleteChallenge:
    def test_xp_routed_to_challenge_language(self, clock):
        state = LearnerState(
            languages=list(LANGUAGES),
            user_progress=[
                UserProgress(language_code="es", last_study_date=clock.now()),
                UserProgress(language_code="fr", last_study_date=clock.now()),
            ],
        )
        tracker = ProgressTracker(state, clock=clock)
        challenge = make_challenge(language_code="fr")
        assert tracker.complete_challenge(challenge, 0.5) == 50
        assert tracker.get_progress("fr").experience_points == 50
        assert tracker.get_progress("fr").completed_challenges == [challenge.id]
        assert tracker.get_progress("es").experience_points == 0

    def test_high_score_awards_challenge_master(self, clock):
        tracker = tracker_with(clock)
        tracker.complete_challenge(make_challenge(), 1.0)
        master = [a for a in tracker.get_state().achievements if a.category == AchievementCategory.CHALLENGE]
        assert len(master) == 1
        assert master[0].title == "Challenge Master: Daily Vocabulary"
        assert master[0].experience_reward == 200

    def test_master_keyed_per_challenge_title(self, clock):
        tracker = tracker_with(clock)
        tracker.complete_challenge(make_challenge(), 0.8)
        tracker.complete_challenge(make_challenge(), 0.9)
        tracker.complete_challenge(make_challenge(title="Grammar Focus"), 1.0)
        assert titles(tracker) == [
            "Challenge Master: Daily Vocabulary",
            "Challenge Master: Grammar Focus",
        ]

    def test_low_score_no_master(self, clock):
        tracker = tracker_with(clock)
        tracker.complete_challenge(make_challenge(), 0.75)
        assert titles(tracker) == []

    def test_xp_rounds_half_up(self, clock):
        tracker = tracker_with(clock)
        assert tracker.complete_challenge(make_challenge(reward=3), 0.5) == 2

    def test_score_out_of_range(self, clock):
        tracker = tracker_with(clock)
        with pytest.raises(InvalidInput):
            tracker.complete_challenge(make_challenge(), 1.2)

    def test_language_not_studied(self, clock):
        tracker = tracker_with(clock)
        assert tracker.complete_challenge(make_challenge(language_code="de"), 1.0) is None
        assert titles(tracker) == []


class TestLanguagesAndOnboarding:
    def test_add_language(self, tracker):
        progress = tracker.add_language_to_learning("ja")
        assert progress.level == ProficiencyLevel.A1
        assert progress.experience_points == 0
        explorer = tracker.get_state().achievements[0]
        assert explorer.title == "Language Explorer"
        assert explorer.description == "Started learning Japanese"

    def test_add_language_twice_keeps_one_record(self, tracker):
        tracker.add_language_to_learning("ja")
        tracker.add_language_to_learning("ja")
        assert len(tracker.get_state().user_progress) == 1

    def test_add_unknown_language(self, tracker):
        with pytest.raises(InvalidInput):
            tracker.add_language_to_learning("xx")

    def test_complete_and_reset_onboarding(self, tracker):
        profile = UserProfile(
            name="Alex",
            age=31,
            current_salary=65000,
            years_of_experience=6,
            industry="Healthcare",
            location="Miami",
            learning_goals=[LearningGoal.CAREER],
        )
        state = tracker.complete_onboarding(profile, ["es", "pt"])
        assert state.has_completed_onboarding is True
        assert state.selected_languages == ["es", "pt"]
        assert [p.language_code for p in state.user_progress] == ["es", "pt"]

        tracker.reset_onboarding()
        state = tracker.get_state()
        assert state.has_completed_onboarding is False
        assert state.current_user is None
        assert len(state.user_progress) == 2


class TestStateHolder:
    def test_subscribers_notified_with_snapshot(self, clock):
        tracker = tracker_with(clock)
        seen = []
        tracker.subscribe(seen.append)
        tracker.record_study_session("es", 10)
        assert len(seen) == 1
        assert seen[0].user_progress[0].experience_points == 10

    def test_unsubscribe(self, clock):
        tracker = tracker_with(clock)
        seen = []
        unsubscribe = tracker.subscribe(seen.append)
        unsubscribe()
        tracker.record_study_session("es", 10)
        assert seen == []

    def test_get_state_is_a_copy(self, clock):
        tracker = tracker_with(clock)
        state = tracker.get_state()
        state.user_progress[0].experience_points = 10_000
        assert tracker.get_progress("es").experience_points == 0

    def test_apply_event_dispatch(self, tracker):
        tracker.apply_event(LanguageAdded(language_code="de"))
        tracker.apply_event(StudySessionRecorded(language_code="de", xp_gained=40))
        xp = tracker.apply_event(ChallengeCompleted(challenge=make_challenge("de"), score=1.0))
        assert xp == 100
        assert tracker.get_progress("de").experience_points == 140

        tracker.apply_event(ProgressReset())
        state = tracker.get_state()
        assert state.user_progress == []
        assert state.achievements == []
        assert len(state.languages) == 6

    def test_apply_unknown_event(self, tracker):
        with pytest.raises(TypeError):
            tracker.apply_event(object())


class TestProgressSummary:
    def test_summary_fields(self, clock):
        tracker = tracker_with(
            clock,
            level=ProficiencyLevel.B1,
            experience_points=2500,
            streak=1,
            total_study_time=3600 * 25 + 60 * 7,
            vocabulary_mastered=450,
        )
        summary = tracker.progress_summary("es")
        assert summary["level_progress"] == 0.5
        assert summary["streak_text"] == "1 day"
        assert summary["experience_text"] == "2500 XP"
        assert summary["vocabulary_text"] == "450 words mastered"
        assert summary["study_time_text"] == "25h 7m"
        assert summary["next_level"] == {"current": 2500, "required": 5000}

    def test_summary_unknown(self, tracker):
        assert tracker.progress_summary("es") is None

    def test_recent_achievements(self, tracker):
        for code in ["es", "fr"]:
            tracker.add_language_to_learning(code)
        tracker.add_achievement(
            Achievement(
                title="Globetrotter",
                description="d",
                category=AchievementCategory.LOCATION,
                experience_reward=50,
            )
        )
        recent = tracker.recent_achievements(limit=1)
        assert [a.title for a in recent] == ["Globetrotter"]

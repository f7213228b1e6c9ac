"""Smoke tests for Pydantic models and enumerations."""

import pytest
from pydantic import ValidationError

from lingua_educate.models.challenge import (
    Challenge,
    ChallengeCategory,
    ChallengeDifficulty,
    ChallengeQuestion,
)
from lingua_educate.models.financial import FinancialCalculationRequest
from lingua_educate.models.language import MarketDemand
from lingua_educate.models.progress import (
    Achievement,
    AchievementCategory,
    LearnerState,
    ProficiencyLevel,
    UserProgress,
)


class TestProficiencyLevel:
    def test_ordering_and_successors(self):
        levels = list(ProficiencyLevel)
        assert [lvl.cefr for lvl in levels] == ["A1", "A2", "B1", "B2", "C1", "C2"]
        for current, following in zip(levels, levels[1:]):
            assert current.next_level == following
        assert ProficiencyLevel.C2.next_level is None

    def test_progress_fractions_not_evenly_spaced(self):
        assert ProficiencyLevel.A1.progress == 0.16
        assert ProficiencyLevel.B1.progress == 0.50
        assert ProficiencyLevel.C2.progress == 1.0

    def test_required_xp_is_cumulative(self):
        thresholds = [lvl.required_xp for lvl in ProficiencyLevel]
        assert thresholds == [1000, 2500, 5000, 8000, 12000, 20000]

    def test_from_cefr(self):
        assert ProficiencyLevel.from_cefr("b2") == ProficiencyLevel.B2
        with pytest.raises(ValueError):
            ProficiencyLevel.from_cefr("D1")

    def test_value_is_display_label(self):
        assert ProficiencyLevel.B2.value == "B2 - Upper Intermediate"


class TestEnumMultipliers:
    def test_challenge_difficulty(self):
        assert ChallengeDifficulty.EASY.multiplier == 1.0
        assert ChallengeDifficulty.MEDIUM.multiplier == 1.5
        assert ChallengeDifficulty.HARD.multiplier == 2.0
        assert ChallengeDifficulty.EXPERT.multiplier == 3.0

    def test_market_demand(self):
        assert MarketDemand.VERY_HIGH.multiplier == 2.0
        assert MarketDemand.VERY_HIGH.value == "Very High"


class TestUserProgress:
    def test_defaults(self):
        progress = UserProgress(language_code="fr")
        assert progress.level == ProficiencyLevel.A1
        assert progress.experience_points == 0
        assert progress.streak == 0
        assert progress.completed_challenges == []
        assert progress.current_location is None

    def test_learner_state_lookup(self):
        state = LearnerState(user_progress=[UserProgress(language_code="de")])
        assert state.progress_for("de") is not None
        assert state.progress_for("ja") is None


class TestAchievement:
    def test_frozen(self):
        achievement = Achievement(
            title="Level Up!",
            description="Reached A2 - Elementary",
            category=AchievementCategory.VOCABULARY,
            experience_reward=500,
        )
        with pytest.raises(ValidationError):
            achievement.title = "Other"


class TestChallenge:
    def test_ids_are_unique(self):
        kwargs = dict(
            title="Daily Vocabulary",
            description="d",
            difficulty=ChallengeDifficulty.EASY,
            category=ChallengeCategory.VOCABULARY,
            language_code="es",
            experience_reward=100,
        )
        assert Challenge(**kwargs).id != Challenge(**kwargs).id


class TestChallengeQuestion:
    @pytest.mark.parametrize("correct_answer", [-1, 3])
    def test_correct_answer_must_be_an_option(self, correct_answer):
        with pytest.raises(ValidationError):
            ChallengeQuestion(question="q", options=["a", "b", "c"], correct_answer=correct_answer)


class TestFinancialRequest:
    def test_accepts_short_cefr_code(self):
        request = FinancialCalculationRequest(
            language_code="es",
            current_salary=60000,
            years_of_experience=3,
            industry="Technology",
            location="New York",
            proficiency_level="C1",
        )
        assert request.proficiency_level == ProficiencyLevel.C1

    def test_accepts_full_label(self):
        request = FinancialCalculationRequest(
            language_code="es",
            current_salary=60000,
            years_of_experience=3,
            industry="Technology",
            location="New York",
            proficiency_level="A2 - Elementary",
        )
        assert request.proficiency_level == ProficiencyLevel.A2

    def test_rejects_unknown_level(self):
        with pytest.raises(ValidationError):
            FinancialCalculationRequest(
                language_code="es",
                current_salary=60000,
                years_of_experience=3,
                industry="Technology",
                location="New York",
                proficiency_level="Z9",
            )

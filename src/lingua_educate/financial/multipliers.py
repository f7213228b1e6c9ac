"""Proficiency and experience multipliers for the salary projection."""

from lingua_educate.models.progress import ProficiencyLevel

# Assumed cost of study materials and courses, in dollars per hour
STUDY_COST_PER_HOUR = 25.0


def proficiency_multiplier(level: ProficiencyLevel) -> float:
    """Share of a language's base salary increase unlocked at ``level``.

    A1 -> 0.3, A2 -> 0.5, B1 -> 0.7, B2 -> 0.85, C1 -> 0.95, C2 -> 1.0.
    """
    return level.financial_multiplier


def experience_multiplier(years: int) -> float:
    """Scale the salary increase by career seniority.

    Args:
        years: Years of professional experience.

    Returns:
        0.8 for 0-2 years, 1.0 for 3-5, 1.2 for 6-10, 1.4 for 11-15,
        1.5 beyond that.
    """
    if years <= 2:
        return 0.8
    elif years <= 5:
        return 1.0
    elif years <= 10:
        return 1.2
    elif years <= 15:
        return 1.4
    else:
        return 1.5


def required_study_hours(level: ProficiencyLevel) -> int:
    return level.study_hours

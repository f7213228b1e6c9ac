"""Human-readable labels for calculated financial impact."""

from lingua_educate.models.financial import CalculatedImpact, MarketAdvantage


def describe_impact(impact: CalculatedImpact) -> str:
    """Summarise the projected salary increase in one sentence.

    Args:
        impact: Calculated impact bundle.

    Returns:
        Description string, from exceptional down to moderate.
    """
    increase = impact.projected_salary_increase
    if increase >= 30000:
        return (
            "Exceptional financial impact! This language skill could "
            "significantly boost your career."
        )
    elif increase >= 20000:
        return "Strong financial benefits. This language is highly valued in your field."
    elif increase >= 10000:
        return "Good financial potential. Learning this language will provide solid returns."
    else:
        return (
            "Moderate financial impact. Consider other factors like personal "
            "interest and career goals."
        )


def describe_break_even(months: int | None) -> str:
    """Describe how quickly the study investment pays back."""
    if months is None:
        return "No payback expected"
    if months <= 6:
        return "Very quick payback period"
    elif months <= 12:
        return "Fast return on investment"
    elif months <= 24:
        return "Reasonable payback time"
    else:
        return "Long-term investment"


def describe_market_demand(advantage: MarketAdvantage) -> str:
    edge = advantage.competitive_edge
    if edge >= 50:
        return "Extremely high demand - you'll have a significant competitive advantage"
    elif edge >= 30:
        return "High demand - strong market position"
    elif edge >= 15:
        return "Moderate demand - noticeable advantage"
    else:
        return "Basic demand - some advantage in specific roles"


def roi_tier(roi: float | None) -> str:
    """Bucket an ROI percentage: exceptional / strong / positive / low."""
    if roi is None:
        return "undefined"
    if roi >= 500:
        return "exceptional"
    elif roi >= 200:
        return "strong"
    elif roi >= 100:
        return "positive"
    else:
        return "low"

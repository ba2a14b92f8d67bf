# dealscore/domain/recommendation.py
from __future__ import annotations

from .types import (
    DealCategory,
    DealScoreBreakdown,
    InvestmentRecommendation,
    NeighborhoodAggregate,
    PropertyMetrics,
)


# (lower bound inclusive, category); scanned top-down
CATEGORY_BANDS: tuple[tuple[float, DealCategory], ...] = (
    (
        90.0,
        DealCategory(
            category="Excellent Deal",
            color="green",
            description="Outstanding value with strong investment potential",
            recommendation="Act quickly - these deals are rare and competitive",
        ),
    ),
    (
        80.0,
        DealCategory(
            category="Great Deal",
            color="blue",
            description="Significantly undervalued with good fundamentals",
            recommendation="Strong consideration - schedule viewing ASAP",
        ),
    ),
    (
        70.0,
        DealCategory(
            category="Good Deal",
            color="yellow",
            description="Fairly priced with some advantages",
            recommendation="Worth investigating further",
        ),
    ),
    (
        60.0,
        DealCategory(
            category="Average Deal",
            color="orange",
            description="Market price with typical features",
            recommendation="Consider if it meets specific needs",
        ),
    ),
)

POOR_DEAL = DealCategory(
    category="Poor Deal",
    color="red",
    description="Overpriced or lacking key features",
    recommendation="Pass unless there are compelling reasons",
)

NEW_CONSTRUCTION_YEARS = 5


def get_category(score: float) -> DealCategory:
    for lower, category in CATEGORY_BANDS:
        if score >= lower:
            return category
    return POOR_DEAL


def score_badge_color(score: float | None) -> str:
    """Three-colour badge used on listing cards. Missing/zero score => gray."""
    if not score:
        return "gray"
    if score >= 80:
        return "green"
    if score >= 60:
        return "yellow"
    return "red"


def generate_recommendation(
    deal: DealScoreBreakdown,
    prop: PropertyMetrics,
    hood: NeighborhoodAggregate,
    *,
    evaluation_year: int,
) -> InvestmentRecommendation:
    category = get_category(deal.total_score)
    appreciation = hood.price_appreciation_rate

    risks: list[str] = []
    if deal.price_advantage < 20:
        risks.append("Property may be overpriced compared to neighborhood")
    if prop.year_built > evaluation_year - NEW_CONSTRUCTION_YEARS:
        risks.append("New construction may have premium pricing")
    if hood.crime_rate is not None and hood.crime_rate > 50:
        risks.append("Higher crime rate in area")
    if appreciation is not None and appreciation < 2:
        risks.append("Low appreciation potential")

    opportunities: list[str] = []
    if deal.rent_stabilization_bonus > 5:
        opportunities.append("Rent stabilization provides predictable cash flow")
    if deal.location_bonus > 7:
        opportunities.append("Excellent location with strong amenities")
    if appreciation is not None and appreciation > 6:
        opportunities.append("High neighborhood appreciation potential")
    if hood.rental_yield is not None and hood.rental_yield > 5:
        opportunities.append("Strong rental yield for investment")

    # positional: [0] price advantage, [1] size & layout
    first, second = deal.breakdown[0], deal.breakdown[1]
    reasoning = (
        f"Based on a {deal.total_score:.1f}/100 deal score, this property "
        f"{category.description.lower()}. Key factors include "
        f"{first.component.lower()} ({first.score:.1f}/{first.max_score:g} points) and "
        f"{second.component.lower()} ({second.score:.1f}/{second.max_score:g} points)."
    )

    return InvestmentRecommendation(
        recommendation=category.recommendation,
        reasoning=reasoning,
        risks=tuple(risks),
        opportunities=tuple(opportunities),
    )

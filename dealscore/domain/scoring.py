# dealscore/domain/scoring.py
from __future__ import annotations

from .errors import InvalidInput
from .rent_cap import (
    CURRENT_INFLATION_RATE,
    MIN_BUILDING_AGE_YEARS,
    calculate_rent_stabilization_boost,
)
from .types import (
    BreakdownComponent,
    DealScoreBreakdown,
    NeighborhoodAggregate,
    PropertyMetrics,
    PropertyType,
)


PRICE_MAX = 40.0
SIZE_MAX = 15.0
AGE_MAX = 15.0
RENT_STABILIZATION_MAX = 10.0
AGE_AND_RENT_MAX = 25.0
LOCATION_MAX = 10.0
MARKET_TIMING_MAX = 10.0

# (upper bound of price-per-sqft ratio, points); first match wins
PRICE_RATIO_STEPS: tuple[tuple[float, float], ...] = (
    (0.80, 40.0),  # 20%+ below market
    (0.90, 35.0),
    (0.95, 30.0),
    (1.00, 25.0),  # at market
    (1.05, 20.0),
    (1.10, 15.0),
    (1.20, 10.0),
)
PRICE_RATIO_FLOOR = 5.0  # 20%+ above market

MONTHLY_RENT_TO_PRICE = 0.008 / 12  # rough 0.8% rule, per month
ASSUMED_RENT_INCREASE_RATE = 0.05 + 0.034  # 5% + inflation


def _clamp(x: float, hi: float, lo: float = 0.0) -> float:
    return max(lo, min(hi, x))


def _fmt(x: float | None) -> str:
    if x is None:
        return "N/A"
    return f"{x:g}"


def _validate(prop: PropertyMetrics) -> None:
    if prop.price <= 0:
        raise InvalidInput(f"price must be > 0, got {prop.price}")
    if prop.sqft <= 0:
        raise InvalidInput(f"sqft must be > 0, got {prop.sqft}")


def price_ratio(prop: PropertyMetrics, hood: NeighborhoodAggregate) -> float:
    """
    Listing $/sqft over neighborhood median $/sqft.
    No usable median => 1.0 (treated as at-market).
    """
    if hood.median_price_per_sqft <= 0:
        return 1.0
    return (prop.price / prop.sqft) / hood.median_price_per_sqft


def price_advantage(prop: PropertyMetrics, hood: NeighborhoodAggregate) -> float:
    ratio = price_ratio(prop, hood)
    for upper, points in PRICE_RATIO_STEPS:
        if ratio <= upper:
            return points
    return PRICE_RATIO_FLOOR


def size_advantage(prop: PropertyMetrics, hood: NeighborhoodAggregate) -> float:
    score = 7.5

    if hood.avg_sqft > 0:
        size_ratio = prop.sqft / hood.avg_sqft
        if size_ratio >= 1.2:
            score += 4
        elif size_ratio >= 1.1:
            score += 3
        elif size_ratio >= 1.0:
            score += 2
        elif size_ratio >= 0.9:
            score += 1
        else:
            score -= 2

    # layout efficiency; no baths => no data
    if prop.baths > 0:
        bed_bath = prop.beds / prop.baths
        if 1 <= bed_bath <= 2:
            score += 2
        elif bed_bath > 2:
            score -= 1

    if prop.property_type == PropertyType.single_family:
        score += 2
    elif prop.property_type == PropertyType.townhouse:
        score += 1

    return _clamp(score, SIZE_MAX)


def age_advantage(
    prop: PropertyMetrics, hood: NeighborhoodAggregate, *, evaluation_year: int
) -> float:
    property_age = evaluation_year - prop.year_built
    neighborhood_age = evaluation_year - hood.avg_year_built

    score = 10.0
    if property_age > neighborhood_age + 20:
        score += 5
    elif property_age > neighborhood_age + 10:
        score += 3
    elif property_age > neighborhood_age - 5:
        score += 1
    else:
        score -= 2

    if property_age >= 50:
        score += 3
    elif property_age >= 30:
        score += 2

    return _clamp(score, AGE_MAX)


def rent_stabilization_bonus(
    prop: PropertyMetrics,
    *,
    evaluation_year: int,
    inflation_rate: float = CURRENT_INFLATION_RATE,
) -> float:
    if evaluation_year - prop.year_built < MIN_BUILDING_AGE_YEARS:
        return 0.0

    market_rent = prop.price * MONTHLY_RENT_TO_PRICE
    boost = calculate_rent_stabilization_boost(
        prop.year_built,
        market_rent,
        ASSUMED_RENT_INCREASE_RATE,
        evaluation_year=evaluation_year,
        inflation_rate=inflation_rate,
    )
    return _clamp(boost.boost_score / 2, RENT_STABILIZATION_MAX)


def location_bonus(hood: NeighborhoodAggregate) -> float:
    score = 5.0

    if hood.walk_score is not None:
        if hood.walk_score >= 90:
            score += 3
        elif hood.walk_score >= 70:
            score += 2
        elif hood.walk_score >= 50:
            score += 1

    if hood.school_rating is not None:
        if hood.school_rating >= 8:
            score += 2
        elif hood.school_rating >= 6:
            score += 1

    # lower is safer
    if hood.crime_rate is not None:
        if hood.crime_rate <= 20:
            score += 2
        elif hood.crime_rate <= 40:
            score += 1

    if hood.transit_score is not None and hood.transit_score >= 70:
        score += 1

    return _clamp(score, LOCATION_MAX)


def market_timing_bonus(hood: NeighborhoodAggregate) -> float:
    score = 5.0

    appreciation = hood.price_appreciation_rate
    if appreciation is not None:
        if appreciation >= 8:
            score += 3
        elif appreciation >= 5:
            score += 2
        elif appreciation >= 3:
            score += 1
        elif appreciation < 0:
            score -= 2

    if hood.rental_yield is not None:
        if hood.rental_yield >= 6:
            score += 2
        elif hood.rental_yield >= 4:
            score += 1

    return _clamp(score, MARKET_TIMING_MAX)


def calculate_deal_score(
    prop: PropertyMetrics,
    hood: NeighborhoodAggregate,
    *,
    evaluation_year: int,
    inflation_rate: float = CURRENT_INFLATION_RATE,
) -> DealScoreBreakdown:
    """
    Composite 0..100 deal score for a listing against its neighborhood.

    Components (max): price 40, size/layout 15, age 15 + rent stabilization 10,
    location 10, market timing 10.
    """
    _validate(prop)

    price = price_advantage(prop, hood)
    size = size_advantage(prop, hood)
    age = age_advantage(prop, hood, evaluation_year=evaluation_year)
    rent_bonus = rent_stabilization_bonus(
        prop, evaluation_year=evaluation_year, inflation_rate=inflation_rate
    )
    location = location_bonus(hood)
    timing = market_timing_bonus(hood)

    if hood.median_price_per_sqft > 0:
        price_note = (
            f"Property at ${prop.price / prop.sqft:.0f}/sqft vs neighborhood avg "
            f"${hood.median_price_per_sqft:.0f}/sqft"
        )
    else:
        price_note = (
            f"Property at ${prop.price / prop.sqft:.0f}/sqft; "
            "neighborhood $/sqft unavailable, scored at market"
        )

    breakdown = (
        BreakdownComponent("Price Advantage", price, PRICE_MAX, price_note),
        BreakdownComponent(
            "Size & Layout",
            size,
            SIZE_MAX,
            f"{_fmt(prop.beds)}bed/{_fmt(prop.baths)}bath, {_fmt(prop.sqft)}sqft vs neighborhood averages",
        ),
        BreakdownComponent(
            "Age & Rent Stabilization",
            age + rent_bonus,
            AGE_AND_RENT_MAX,
            f"Built {prop.year_built}, rent stabilization bonus: {rent_bonus:.1f}pts",
        ),
        BreakdownComponent(
            "Location & Amenities",
            location,
            LOCATION_MAX,
            f"Walk score: {_fmt(hood.walk_score)}, schools: {_fmt(hood.school_rating)}",
        ),
        BreakdownComponent(
            "Market Timing",
            timing,
            MARKET_TIMING_MAX,
            f"Market appreciation: {_fmt(hood.price_appreciation_rate)}%, "
            f"rental yield: {_fmt(hood.rental_yield)}%",
        ),
    )

    total = price + size + (age + rent_bonus) + location + timing

    return DealScoreBreakdown(
        total_score=_clamp(total, 100.0),
        price_advantage=price,
        size_advantage=size,
        age_advantage=age,
        rent_stabilization_bonus=rent_bonus,
        location_bonus=location,
        market_timing_bonus=timing,
        breakdown=breakdown,
    )

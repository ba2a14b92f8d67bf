# dealscore/domain/rent_cap.py
"""
AB 1482 (Tenant Protection Act of 2019) rent cap helpers.

- Units 15+ years old are covered.
- Annual increases are limited to 5% + inflation.
- Some uses and owner situations are exempt regardless of age.

Nothing here reads the clock: callers pass evaluation_year.
"""
from __future__ import annotations

from typing import Collection

from .errors import InvalidInput
from .types import (
    ExemptionCheck,
    InflationData,
    MaxRentIncrease,
    RentCapNotice,
    RentCapResult,
    StabilizationBoost,
    UseCategory,
)


BASE_CAP_PERCENTAGE = 5.0
CURRENT_INFLATION_RATE = 3.4  # latest known annual CPI figure
MIN_BUILDING_AGE_YEARS = 15
MARKET_VOLATILITY_PREMIUM = 0.08  # assumed annual market rent swing
NEXT_YEAR_INFLATION_FACTOR = 0.9

USE_EXEMPTION_REASONS: dict[UseCategory, str] = {
    UseCategory.educational_housing: "Educational institution housing",
    UseCategory.transient_lodging: "Transient lodging",
    UseCategory.restricted_affordable: "Restricted affordable housing",
}

DISCLAIMER = (
    "This is for informational purposes only. "
    "Consult with legal counsel for specific compliance requirements."
)


def current_inflation(rate: float, year: int, source: str) -> InflationData:
    return InflationData(rate=float(rate), year=int(year), source=source)


def check_eligibility(
    year_built: int,
    *,
    evaluation_year: int,
    inflation_rate: float = CURRENT_INFLATION_RATE,
) -> RentCapResult:
    property_age = evaluation_year - year_built
    is_eligible = property_age >= MIN_BUILDING_AGE_YEARS

    reasons: list[str] = []
    if not is_eligible:
        reasons.append(
            f"Property is only {property_age} years old (must be {MIN_BUILDING_AGE_YEARS}+ years)"
        )

    max_pct = BASE_CAP_PERCENTAGE + inflation_rate if is_eligible else 0.0
    # conservative: assume inflation cools a little next year
    next_year = (
        BASE_CAP_PERCENTAGE + inflation_rate * NEXT_YEAR_INFLATION_FACTOR if is_eligible else 0.0
    )

    return RentCapResult(
        is_eligible=is_eligible,
        max_increase_percentage=max_pct,
        evaluation_year=evaluation_year,
        year_built=year_built,
        property_age=property_age,
        exemption_reasons=tuple(reasons),
        next_year_cap=next_year,
    )


def calculate_max_increase(
    current_rent: float,
    year_built: int,
    *,
    evaluation_year: int,
    inflation_rate: float | None = None,
) -> MaxRentIncrease:
    if current_rent < 0:
        raise InvalidInput(f"current_rent must be >= 0, got {current_rent}")

    info = check_eligibility(year_built, evaluation_year=evaluation_year)
    if not info.is_eligible:
        return MaxRentIncrease(
            max_increase=0.0,
            max_new_rent=current_rent,
            increase_percentage=0.0,
            is_eligible=False,
        )

    inflation = CURRENT_INFLATION_RATE if inflation_rate is None else inflation_rate
    pct = BASE_CAP_PERCENTAGE + inflation
    max_increase = current_rent * (pct / 100.0)
    return MaxRentIncrease(
        max_increase=max_increase,
        max_new_rent=current_rent + max_increase,
        increase_percentage=pct,
        is_eligible=True,
    )


def check_additional_exemptions(
    uses: Collection[UseCategory],
    *,
    is_single_family: bool,
    owner_occupied: bool,
    recently_built: bool,
) -> ExemptionCheck:
    """
    Exemptions beyond the age rule.

    recently_built overlaps check_eligibility() on purpose; the two are
    called from different places and the caller keeps them consistent.
    """
    reasons: list[str] = []

    # Statute: landlord owns <= 2 properties. Approximated as a
    # non-owner-occupied single-family home.
    if is_single_family and not owner_occupied:
        reasons.append("Single-family home owned by small landlord (≤2 properties)")

    if recently_built:
        reasons.append("Recently constructed property")

    for category, reason in USE_EXEMPTION_REASONS.items():
        if category in uses:
            reasons.append(reason)

    has_exemptions = bool(reasons)
    return ExemptionCheck(
        has_exemptions=has_exemptions,
        exemption_reasons=tuple(reasons),
        is_subject_to_cap=not has_exemptions,
    )


def generate_notice(
    current_rent: float,
    year_built: int,
    uses: Collection[UseCategory],
    *,
    evaluation_year: int,
    is_single_family: bool = False,
    owner_occupied: bool = False,
    inflation_rate: float | None = None,
) -> RentCapNotice:
    info = check_eligibility(year_built, evaluation_year=evaluation_year)
    exemptions = check_additional_exemptions(
        uses,
        is_single_family=is_single_family,
        owner_occupied=owner_occupied,
        recently_built=year_built > evaluation_year - MIN_BUILDING_AGE_YEARS,
    )
    calc = calculate_max_increase(
        current_rent,
        year_built,
        evaluation_year=evaluation_year,
        inflation_rate=inflation_rate,
    )

    lines: list[str] = []
    notes: list[str] = []

    if not info.is_eligible or exemptions.has_exemptions:
        lines.append("This property may be exempt from AB 1482 rent cap regulations.")
        lines.append("")

        if not info.is_eligible:
            lines.append(f"Property Age Exemption: Built in {year_built} ({info.property_age} years old)")
            lines.append(f"AB 1482 applies to properties {MIN_BUILDING_AGE_YEARS}+ years old.")
            lines.append("")

        if exemptions.has_exemptions:
            lines.append("Additional Exemptions:")
            lines.extend(f"• {reason}" for reason in exemptions.exemption_reasons)
            notes.append("Consult with legal counsel to confirm exemption status")
    else:
        lines.append("This property is subject to AB 1482 rent cap regulations.")
        lines.append("")
        lines.append(f"Current Rent: ${current_rent:,.2f}")
        lines.append(f"Maximum Annual Increase: {calc.increase_percentage:.1f}%")
        lines.append(f"Maximum Increase Amount: ${calc.max_increase:,.2f}")
        lines.append(f"Maximum New Rent: ${calc.max_new_rent:,.2f}")
        lines.append("")

        notes.append("Provide proper 90-day notice for rent increases")
        notes.append("Include AB 1482 compliance information in notice")
        notes.append("Keep documentation of inflation rate calculation")

    lines.append("")
    lines.append("---")
    lines.append(DISCLAIMER)

    return RentCapNotice(
        notice="\n".join(lines),
        is_eligible=info.is_eligible and not exemptions.has_exemptions,
        max_increase=calc.max_increase,
        compliance_notes=tuple(notes),
    )


def calculate_rent_stabilization_boost(
    year_built: int,
    market_rent: float,
    increase_rate_assumption: float,
    *,
    evaluation_year: int,
    inflation_rate: float = CURRENT_INFLATION_RATE,
) -> StabilizationBoost:
    """
    Value of predictable capped increases vs. market volatility, 0..20.

    increase_rate_assumption is accepted for compatibility but does not
    affect any figure yet.
    """
    info = check_eligibility(
        year_built, evaluation_year=evaluation_year, inflation_rate=inflation_rate
    )
    if not info.is_eligible:
        return StabilizationBoost(
            boost_score=0.0,
            annual_value=0.0,
            five_year_value=0.0,
            reasoning="Property not eligible for rent stabilization benefits",
        )

    volatility_benefit = MARKET_VOLATILITY_PREMIUM - info.max_increase_percentage / 100.0
    annual_value = market_rent * volatility_benefit
    five_year_value = annual_value * 5

    # annual_value / market_rent * 100, without dividing by market_rent
    boost = max(0.0, min(20.0, volatility_benefit * 100.0))

    reasoning = (
        f"Rent stabilization provides predictable {info.max_increase_percentage:.1f}% annual increases "
        f"vs estimated {MARKET_VOLATILITY_PREMIUM * 100:g}% market volatility, "
        f"creating ${annual_value:.0f} annual value advantage."
    )

    return StabilizationBoost(
        boost_score=boost,
        annual_value=annual_value,
        five_year_value=five_year_value,
        reasoning=reasoning,
    )

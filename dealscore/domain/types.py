# dealscore/domain/types.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PropertyType(str, Enum):
    single_family = "single_family"
    condo = "condo"
    townhouse = "townhouse"
    multi_family = "multi_family"


class UseCategory(str, Enum):
    """
    Uses that take a unit out of rent-cap coverage regardless of age.
    A plain residential rental carries none of these.
    """

    educational_housing = "educational_housing"
    transient_lodging = "transient_lodging"
    restricted_affordable = "restricted_affordable"


@dataclass(frozen=True)
class PropertyMetrics:
    price: float
    sqft: float
    beds: float
    baths: float
    year_built: int
    property_type: PropertyType
    latitude: float
    longitude: float


@dataclass(frozen=True)
class NeighborhoodAggregate:
    median_price: float
    median_price_per_sqft: float
    avg_sqft: float
    avg_beds: float
    avg_baths: float
    avg_year_built: int
    # None means "unknown"; 0 is a real reading and is scored as one.
    price_appreciation_rate: float | None = None
    rental_yield: float | None = None
    walk_score: float | None = None
    transit_score: float | None = None
    crime_rate: float | None = None
    school_rating: float | None = None


@dataclass(frozen=True)
class BreakdownComponent:
    component: str
    score: float
    max_score: float
    explanation: str


@dataclass(frozen=True)
class DealScoreBreakdown:
    total_score: float
    price_advantage: float
    size_advantage: float
    age_advantage: float
    rent_stabilization_bonus: float
    location_bonus: float
    market_timing_bonus: float
    # Order is part of the contract: [0] price advantage, [1] size & layout.
    breakdown: tuple[BreakdownComponent, ...]


@dataclass(frozen=True)
class RentCapResult:
    is_eligible: bool
    max_increase_percentage: float
    evaluation_year: int
    year_built: int
    property_age: int
    exemption_reasons: tuple[str, ...]
    next_year_cap: float


@dataclass(frozen=True)
class MaxRentIncrease:
    max_increase: float
    max_new_rent: float
    increase_percentage: float
    is_eligible: bool


@dataclass(frozen=True)
class ExemptionCheck:
    has_exemptions: bool
    exemption_reasons: tuple[str, ...]
    is_subject_to_cap: bool


@dataclass(frozen=True)
class RentCapNotice:
    notice: str
    is_eligible: bool
    max_increase: float
    compliance_notes: tuple[str, ...]


@dataclass(frozen=True)
class StabilizationBoost:
    boost_score: float
    annual_value: float
    five_year_value: float
    reasoning: str


@dataclass(frozen=True)
class InflationData:
    rate: float
    year: int
    source: str


@dataclass(frozen=True)
class DealCategory:
    category: str
    color: str
    description: str
    recommendation: str


@dataclass(frozen=True)
class InvestmentRecommendation:
    recommendation: str
    reasoning: str
    risks: tuple[str, ...]
    opportunities: tuple[str, ...]

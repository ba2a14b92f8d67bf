from pydantic import BaseModel, ConfigDict, Field, field_validator

from .domain.types import (
    DealCategory,
    DealScoreBreakdown,
    InvestmentRecommendation,
    NeighborhoodAggregate,
    PropertyMetrics,
    PropertyType,
    RentCapResult,
)
from .services.normalize import normalize_property_type


class PropertyIn(BaseModel):
    """A `properties` row as the data store hands it over; extra columns are ignored."""

    model_config = ConfigDict(extra="ignore")

    price: float = Field(..., gt=0)
    sqft: float = Field(..., gt=0)
    beds: float = Field(0, ge=0)
    baths: float = Field(0, ge=0)
    year_built: int
    property_type: PropertyType
    latitude: float = Field(0.0, ge=-90, le=90)
    longitude: float = Field(0.0, ge=-180, le=180)

    @field_validator("property_type", mode="before")
    @classmethod
    def _normalize_type(cls, v: object) -> PropertyType:
        t = normalize_property_type(v)
        if t is None:
            raise ValueError(f"unrecognized property_type: {v!r}")
        return t

    def to_domain(self) -> PropertyMetrics:
        return PropertyMetrics(
            price=self.price,
            sqft=self.sqft,
            beds=self.beds,
            baths=self.baths,
            year_built=self.year_built,
            property_type=self.property_type,
            latitude=self.latitude,
            longitude=self.longitude,
        )


class NeighborhoodIn(BaseModel):
    """A `neighborhood_stats` row. Market signals are nullable columns."""

    model_config = ConfigDict(extra="ignore")

    median_price: float = Field(..., ge=0)
    median_price_per_sqft: float = Field(..., ge=0)
    avg_sqft: float = Field(..., ge=0)
    avg_beds: float = Field(0, ge=0)
    avg_baths: float = Field(0, ge=0)
    avg_year_built: int

    price_appreciation_rate: float | None = None
    rental_yield: float | None = None
    walk_score: float | None = Field(None, ge=0, le=100)
    transit_score: float | None = Field(None, ge=0, le=100)
    crime_rate: float | None = Field(None, ge=0)
    school_rating: float | None = Field(None, ge=0, le=10)

    def to_domain(self) -> NeighborhoodAggregate:
        return NeighborhoodAggregate(
            median_price=self.median_price,
            median_price_per_sqft=self.median_price_per_sqft,
            avg_sqft=self.avg_sqft,
            avg_beds=self.avg_beds,
            avg_baths=self.avg_baths,
            avg_year_built=self.avg_year_built,
            price_appreciation_rate=self.price_appreciation_rate,
            rental_yield=self.rental_yield,
            walk_score=self.walk_score,
            transit_score=self.transit_score,
            crime_rate=self.crime_rate,
            school_rating=self.school_rating,
        )


class ScoreRequest(BaseModel):
    listing: PropertyIn = Field(..., alias="property")
    neighborhood: NeighborhoodIn


class ComponentOut(BaseModel):
    component: str
    score: float
    max_score: float
    explanation: str


class RentCapOut(BaseModel):
    is_eligible: bool
    max_increase_percentage: float
    next_year_cap: float
    property_age: int
    evaluation_year: int
    exemption_reasons: list[str]


class ScoreReportOut(BaseModel):
    evaluation_year: int

    total_score: float
    price_advantage: float
    size_advantage: float
    age_advantage: float
    rent_stabilization_bonus: float
    location_bonus: float
    market_timing_bonus: float
    breakdown: list[ComponentOut]

    category: str
    color: str
    description: str

    recommendation: str
    reasoning: str
    risks: list[str]
    opportunities: list[str]

    rent_cap: RentCapOut

    @classmethod
    def build(
        cls,
        *,
        evaluation_year: int,
        deal: DealScoreBreakdown,
        category: DealCategory,
        advice: InvestmentRecommendation,
        rent_cap: RentCapResult,
    ) -> "ScoreReportOut":
        return cls(
            evaluation_year=evaluation_year,
            total_score=deal.total_score,
            price_advantage=deal.price_advantage,
            size_advantage=deal.size_advantage,
            age_advantage=deal.age_advantage,
            rent_stabilization_bonus=deal.rent_stabilization_bonus,
            location_bonus=deal.location_bonus,
            market_timing_bonus=deal.market_timing_bonus,
            breakdown=[
                ComponentOut(
                    component=c.component,
                    score=c.score,
                    max_score=c.max_score,
                    explanation=c.explanation,
                )
                for c in deal.breakdown
            ],
            category=category.category,
            color=category.color,
            description=category.description,
            recommendation=advice.recommendation,
            reasoning=advice.reasoning,
            risks=list(advice.risks),
            opportunities=list(advice.opportunities),
            rent_cap=RentCapOut(
                is_eligible=rent_cap.is_eligible,
                max_increase_percentage=rent_cap.max_increase_percentage,
                next_year_cap=rent_cap.next_year_cap,
                property_age=rent_cap.property_age,
                evaluation_year=rent_cap.evaluation_year,
                exemption_reasons=list(rent_cap.exemption_reasons),
            ),
        )


class PropertyMetricsRow(BaseModel):
    """Columns the store keeps on `properties` next to the listing itself."""

    deal_score: float
    price_per_sqft: float
    is_rent_stabilized: bool
    rent_cap_percentage: float | None = None

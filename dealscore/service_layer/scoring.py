# dealscore/service_layer/scoring.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Collection

from ..config import Settings, settings as default_settings
from ..domain.policies import use_categories_from_label
from ..domain.rent_cap import check_eligibility, current_inflation, generate_notice
from ..domain.recommendation import generate_recommendation, get_category
from ..domain.scoring import calculate_deal_score
from ..domain.types import (
    DealCategory,
    DealScoreBreakdown,
    InflationData,
    InvestmentRecommendation,
    NeighborhoodAggregate,
    PropertyMetrics,
    PropertyType,
    RentCapNotice,
    RentCapResult,
    UseCategory,
)
from ..schemas import PropertyMetricsRow, ScoreReportOut

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoredProperty:
    evaluation_year: int
    inflation: InflationData
    deal: DealScoreBreakdown
    category: DealCategory
    advice: InvestmentRecommendation
    rent_cap: RentCapResult

    def to_report(self) -> ScoreReportOut:
        return ScoreReportOut.build(
            evaluation_year=self.evaluation_year,
            deal=self.deal,
            category=self.category,
            advice=self.advice,
            rent_cap=self.rent_cap,
        )


def resolve_evaluation_year(explicit: int | None = None, *, cfg: Settings | None = None) -> int:
    """
    The only place the wall clock is read.
    explicit arg > EVALUATION_YEAR setting > calendar year.
    """
    if explicit is not None:
        return int(explicit)
    cfg = cfg or default_settings
    if cfg.EVALUATION_YEAR is not None:
        return int(cfg.EVALUATION_YEAR)
    return date.today().year


def resolve_inflation(
    rate: float | None = None, *, year: int, cfg: Settings | None = None
) -> InflationData:
    """An explicit rate is stamped with the evaluation year it is used for."""
    cfg = cfg or default_settings
    if rate is not None:
        return current_inflation(rate, year, "override")
    return current_inflation(
        cfg.RENT_CAP_INFLATION_RATE, cfg.RENT_CAP_INFLATION_YEAR, cfg.RENT_CAP_INFLATION_SOURCE
    )


def score_property(
    prop: PropertyMetrics,
    hood: NeighborhoodAggregate,
    *,
    evaluation_year: int | None = None,
    inflation_rate: float | None = None,
    cfg: Settings | None = None,
) -> ScoredProperty:
    year = resolve_evaluation_year(evaluation_year, cfg=cfg)
    inflation = resolve_inflation(inflation_rate, year=year, cfg=cfg)

    deal = calculate_deal_score(prop, hood, evaluation_year=year, inflation_rate=inflation.rate)
    category = get_category(deal.total_score)
    advice = generate_recommendation(deal, prop, hood, evaluation_year=year)
    rent_cap = check_eligibility(prop.year_built, evaluation_year=year, inflation_rate=inflation.rate)

    log.debug(
        "scored listing price=%s sqft=%s year=%s => %.2f (%s)",
        prop.price,
        prop.sqft,
        year,
        deal.total_score,
        category.category,
    )

    return ScoredProperty(
        evaluation_year=year,
        inflation=inflation,
        deal=deal,
        category=category,
        advice=advice,
        rent_cap=rent_cap,
    )


def property_metrics_row(
    prop: PropertyMetrics,
    hood: NeighborhoodAggregate | None,
    *,
    evaluation_year: int | None = None,
    inflation_rate: float | None = None,
    cfg: Settings | None = None,
) -> PropertyMetricsRow:
    """
    Derived columns for a `properties` row (deal score, $/sqft, rent cap).
    A listing without neighborhood stats is compared against itself.
    """
    if hood is None:
        own_ppsf = prop.price / prop.sqft if prop.sqft > 0 else 0.0
        log.info("no neighborhood stats for listing; comparing against its own $/sqft")
        hood = NeighborhoodAggregate(
            median_price=prop.price,
            median_price_per_sqft=own_ppsf,
            avg_sqft=prop.sqft,
            avg_beds=prop.beds,
            avg_baths=prop.baths,
            avg_year_built=prop.year_built,
        )

    scored = score_property(
        prop, hood, evaluation_year=evaluation_year, inflation_rate=inflation_rate, cfg=cfg
    )
    cap = scored.rent_cap
    return PropertyMetricsRow(
        deal_score=round(scored.deal.total_score, 2),
        price_per_sqft=round(prop.price / prop.sqft, 2),
        is_rent_stabilized=cap.is_eligible,
        rent_cap_percentage=round(cap.max_increase_percentage, 2) if cap.is_eligible else None,
    )


def rent_cap_notice(
    current_rent: float,
    year_built: int,
    *,
    uses: Collection[UseCategory] | None = None,
    use_label: str | None = None,
    property_type: PropertyType | None = None,
    is_single_family: bool | None = None,
    owner_occupied: bool = False,
    evaluation_year: int | None = None,
    inflation_rate: float | None = None,
    cfg: Settings | None = None,
) -> RentCapNotice:
    """
    Landlord notice. Accepts either closed use categories or a legacy
    free-text label (or both; they are merged). is_single_family
    defaults to what property_type says.
    """
    year = resolve_evaluation_year(evaluation_year, cfg=cfg)
    merged = set(uses or ())
    merged |= use_categories_from_label(use_label)

    rate = inflation_rate
    if rate is None:
        rate = resolve_inflation(year=year, cfg=cfg).rate

    if is_single_family is None:
        is_single_family = property_type == PropertyType.single_family

    notice = generate_notice(
        current_rent,
        year_built,
        merged,
        evaluation_year=year,
        is_single_family=is_single_family,
        owner_occupied=owner_occupied,
        inflation_rate=rate,
    )
    log.debug("rent cap notice year_built=%s eligible=%s", year_built, notice.is_eligible)
    return notice

import pytest

from dealscore.domain.types import NeighborhoodAggregate, PropertyMetrics, PropertyType

YEAR = 2025


@pytest.fixture
def year() -> int:
    return YEAR


@pytest.fixture
def listing() -> PropertyMetrics:
    """$800/sqft condo built 1960; no bed/bath data."""
    return PropertyMetrics(
        price=800000.0,
        sqft=1000.0,
        beds=0,
        baths=0,
        year_built=1960,
        property_type=PropertyType.condo,
        latitude=34.0522,
        longitude=-118.2437,
    )


@pytest.fixture
def hood() -> NeighborhoodAggregate:
    """Averages equal to the listing, $1000/sqft median, no market signals."""
    return NeighborhoodAggregate(
        median_price=800000.0,
        median_price_per_sqft=1000.0,
        avg_sqft=1000.0,
        avg_beds=0,
        avg_baths=0,
        avg_year_built=1960,
    )


@pytest.fixture
def payload() -> dict:
    # same listing/neighborhood, shaped like data-store rows
    return {
        "property": {
            "id": "7d1f0c1e-0000-0000-0000-000000000001",
            "address": "123 Main St",
            "city": "Los Angeles",
            "price": 800000,
            "sqft": 1000,
            "beds": 0,
            "baths": 0,
            "year_built": 1960,
            "property_type": "Condo",
            "latitude": 34.0522,
            "longitude": -118.2437,
        },
        "neighborhood": {
            "name": "Silver Lake",
            "median_price": 800000,
            "median_price_per_sqft": 1000,
            "avg_sqft": 1000,
            "avg_beds": 0,
            "avg_baths": 0,
            "avg_year_built": 1960,
            "walk_score": None,
        },
    }

import pytest

from dealscore.domain.errors import InvalidInput
from dealscore.domain.policies import use_categories_from_label
from dealscore.domain.rent_cap import (
    DISCLAIMER,
    calculate_max_increase,
    calculate_rent_stabilization_boost,
    check_additional_exemptions,
    check_eligibility,
    generate_notice,
)
from dealscore.domain.types import UseCategory


def test_fourteen_year_old_building_is_not_covered(year):
    info = check_eligibility(year - 14, evaluation_year=year)
    assert info.is_eligible is False
    assert info.property_age == 14
    assert info.max_increase_percentage == 0
    assert info.next_year_cap == 0
    assert info.exemption_reasons == ("Property is only 14 years old (must be 15+ years)",)


def test_fifteen_year_old_building_is_covered(year):
    info = check_eligibility(year - 15, evaluation_year=year)
    assert info.is_eligible is True
    assert info.evaluation_year == year
    assert info.year_built == year - 15
    assert info.exemption_reasons == ()
    assert info.max_increase_percentage == pytest.approx(8.4)
    # conservative projection: 5 + 3.4 * 0.9
    assert info.next_year_cap == pytest.approx(8.06)


def test_eligibility_uses_given_inflation(year):
    info = check_eligibility(1980, evaluation_year=year, inflation_rate=2.0)
    assert info.max_increase_percentage == pytest.approx(7.0)
    assert info.next_year_cap == pytest.approx(6.8)


def test_max_increase_zero_when_too_new(year):
    r = calculate_max_increase(2000.0, year - 14, evaluation_year=year)
    assert r.is_eligible is False
    assert r.max_increase == 0
    assert r.increase_percentage == 0
    assert r.max_new_rent == 2000.0


def test_max_increase_default_inflation(year):
    r = calculate_max_increase(2000.0, 1990, evaluation_year=year)
    assert r.is_eligible is True
    assert r.increase_percentage == pytest.approx(8.4)
    assert r.max_increase == pytest.approx(168.0)
    assert r.max_new_rent == pytest.approx(2168.0)


def test_max_increase_caller_rate_overrides_default(year):
    r = calculate_max_increase(2000.0, 1990, evaluation_year=year, inflation_rate=2.0)
    assert r.increase_percentage == pytest.approx(7.0)
    assert r.max_increase == pytest.approx(140.0)

    # 0% inflation is a real figure, not "use the default"
    r0 = calculate_max_increase(2000.0, 1990, evaluation_year=year, inflation_rate=0.0)
    assert r0.increase_percentage == pytest.approx(5.0)


def test_max_increase_rejects_negative_rent(year):
    with pytest.raises(InvalidInput):
        calculate_max_increase(-1.0, 1990, evaluation_year=year)


def test_no_additional_exemptions_means_subject_to_cap():
    r = check_additional_exemptions(set(), is_single_family=False, owner_occupied=False, recently_built=False)
    assert r.has_exemptions is False
    assert r.exemption_reasons == ()
    assert r.is_subject_to_cap is True


def test_small_landlord_exemption_only_when_not_owner_occupied():
    r = check_additional_exemptions(set(), is_single_family=True, owner_occupied=False, recently_built=False)
    assert r.exemption_reasons == ("Single-family home owned by small landlord (≤2 properties)",)
    assert r.is_subject_to_cap is False

    r2 = check_additional_exemptions(set(), is_single_family=True, owner_occupied=True, recently_built=False)
    assert r2.has_exemptions is False


def test_exemption_reasons_keep_declaration_order():
    r = check_additional_exemptions(
        {UseCategory.restricted_affordable, UseCategory.educational_housing},
        is_single_family=True,
        owner_occupied=False,
        recently_built=True,
    )
    assert r.exemption_reasons == (
        "Single-family home owned by small landlord (≤2 properties)",
        "Recently constructed property",
        "Educational institution housing",
        "Restricted affordable housing",
    )


@pytest.mark.parametrize(
    "label,expected",
    [
        ("Student Dorm", {UseCategory.educational_housing}),
        ("SCHOOL housing", {UseCategory.educational_housing}),
        ("Motel 6", {UseCategory.transient_lodging}),
        ("Nonprofit affordable units", {UseCategory.restricted_affordable}),
        ("hotel dormitory", {UseCategory.transient_lodging, UseCategory.educational_housing}),
        ("Apartment", set()),
        ("", set()),
        (None, set()),
    ],
)
def test_use_categories_from_label(label, expected):
    assert use_categories_from_label(label) == frozenset(expected)


def test_notice_for_covered_property(year):
    n = generate_notice(2500.0, 1980, set(), evaluation_year=year)
    assert n.is_eligible is True
    assert n.max_increase == pytest.approx(210.0)
    assert "This property is subject to AB 1482 rent cap regulations." in n.notice
    assert "Current Rent: $2,500.00" in n.notice
    assert "Maximum Annual Increase: 8.4%" in n.notice
    assert "Maximum Increase Amount: $210.00" in n.notice
    assert "Maximum New Rent: $2,710.00" in n.notice
    assert "exempt" not in n.notice
    assert len(n.compliance_notes) == 3
    assert n.notice.endswith(DISCLAIMER)


def test_notice_for_too_new_property(year):
    n = generate_notice(2500.0, 2015, set(), evaluation_year=year)
    assert n.is_eligible is False
    assert n.max_increase == 0
    assert "may be exempt" in n.notice
    assert "Property Age Exemption: Built in 2015 (10 years old)" in n.notice
    # recently_built is derived from the same threshold
    assert "• Recently constructed property" in n.notice
    assert "Maximum New Rent" not in n.notice
    assert n.compliance_notes == ("Consult with legal counsel to confirm exemption status",)
    assert n.notice.endswith(DISCLAIMER)


def test_notice_for_old_but_use_exempt_property(year):
    n = generate_notice(2000.0, 1970, {UseCategory.transient_lodging}, evaluation_year=year)
    assert n.is_eligible is False
    assert "Property Age Exemption" not in n.notice
    assert "Additional Exemptions:\n• Transient lodging" in n.notice
    # figures still computed from the age rule
    assert n.max_increase == pytest.approx(168.0)


def test_notice_small_landlord_bullet(year):
    n = generate_notice(2000.0, 1970, set(), evaluation_year=year, is_single_family=True)
    assert "• Single-family home owned by small landlord (≤2 properties)" in n.notice
    assert n.is_eligible is False


def test_boost_zero_when_not_eligible(year):
    b = calculate_rent_stabilization_boost(year - 5, 3000.0, 0.084, evaluation_year=year)
    assert b.boost_score == 0
    assert b.annual_value == 0
    assert b.five_year_value == 0
    assert b.reasoning == "Property not eligible for rent stabilization benefits"


def test_boost_is_zero_when_cap_exceeds_volatility_premium(year):
    # 5% + 3.4% = 8.4% > 8% premium => negative benefit, clamped score
    b = calculate_rent_stabilization_boost(1960, 1000.0, 0.084, evaluation_year=year)
    assert b.boost_score == 0
    assert b.annual_value == pytest.approx(-4.0)
    assert b.five_year_value == pytest.approx(-20.0)


def test_boost_with_low_inflation(year):
    b = calculate_rent_stabilization_boost(1960, 1000.0, 0.084, evaluation_year=year, inflation_rate=1.0)
    assert b.boost_score == pytest.approx(2.0)
    assert b.annual_value == pytest.approx(20.0)
    assert b.five_year_value == pytest.approx(100.0)
    assert "predictable 6.0% annual increases" in b.reasoning
    assert "8% market volatility" in b.reasoning
    assert "$20 annual value" in b.reasoning


def test_boost_capped_at_twenty(year):
    b = calculate_rent_stabilization_boost(1960, 1000.0, 0.084, evaluation_year=year, inflation_rate=-20.0)
    assert b.boost_score == 20.0


def test_boost_ignores_increase_rate_assumption(year):
    a = calculate_rent_stabilization_boost(1960, 1000.0, 0.0, evaluation_year=year, inflation_rate=1.0)
    b = calculate_rent_stabilization_boost(1960, 1000.0, 0.5, evaluation_year=year, inflation_rate=1.0)
    assert a == b

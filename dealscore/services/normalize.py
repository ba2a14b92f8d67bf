# dealscore/services/normalize.py
from __future__ import annotations

import re

from ..domain.types import PropertyType


# Order matters: "townhouse/condo" is a townhouse, "multi family house" is multi-family.
_TYPE_KEYWORDS: tuple[tuple[PropertyType, tuple[str, ...]], ...] = (
    (PropertyType.townhouse, ("townhouse", "town home", "townhome", "town house", "rowhouse", "row house")),
    (PropertyType.condo, ("condo", "condominium", "apartment", "apt", "flat", "co op", "coop")),
    (
        PropertyType.multi_family,
        ("multi family", "multifamily", "2 family", "3 family", "4 family", "duplex", "triplex", "fourplex", "quadplex", "plex"),
    ),
    (PropertyType.single_family, ("single family", "singlefamily", "sfh", "sfr", "detached", "house")),
)

# whole words only: "warehouse" is not a house, "flatbed" is not a flat
_TYPE_PATTERNS: tuple[tuple[PropertyType, re.Pattern[str]], ...] = tuple(
    (t, re.compile(r"\b(?:" + "|".join(re.escape(k) for k in keywords) + r")\b"))
    for t, keywords in _TYPE_KEYWORDS
)


def normalize_property_type(raw: object) -> PropertyType | None:
    """
    Map messy upstream property type strings onto PropertyType.
    Unknown => None; the caller decides whether that is an error.
    """
    if raw is None:
        return None
    if isinstance(raw, PropertyType):
        return raw

    s = str(raw).strip().lower()
    s = re.sub(r"[\s_/|-]+", " ", s)
    if not s:
        return None

    # exact enum values first ("single_family" became "single family" above)
    compact = s.replace(" ", "_")
    for t in PropertyType:
        if compact == t.value:
            return t

    for t, pattern in _TYPE_PATTERNS:
        if pattern.search(s):
            return t

    return None

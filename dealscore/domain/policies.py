# dealscore/domain/policies.py
from __future__ import annotations

from .types import UseCategory


# Legacy free-text labels (listing feeds, old rows) => closed use categories.
LABEL_KEYWORDS: dict[UseCategory, tuple[str, ...]] = {
    UseCategory.educational_housing: ("dorm", "school"),
    UseCategory.transient_lodging: ("hotel", "motel"),
    UseCategory.restricted_affordable: ("nonprofit", "affordable"),
}


def use_categories_from_label(raw_label: str | None) -> frozenset[UseCategory]:
    """
    Boundary adapter for free-text property/use labels.
    Case-insensitive substring match; a label can hit several categories.
    """
    if not raw_label:
        return frozenset()
    s = raw_label.strip().lower()
    return frozenset(
        category
        for category, keywords in LABEL_KEYWORDS.items()
        if any(k in s for k in keywords)
    )

# dealscore/domain/errors.py
from __future__ import annotations


class InvalidInput(ValueError):
    """Input outside the domain a scoring formula can divide by."""

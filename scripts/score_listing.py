# scripts/score_listing.py
from __future__ import annotations

from dealscore.entrypoints.cli import main


if __name__ == "__main__":
    raise SystemExit(main())

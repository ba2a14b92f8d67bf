# dealscore/entrypoints/cli.py
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from ..config import settings
from ..domain.errors import InvalidInput
from ..schemas import ScoreRequest
from ..service_layer.scoring import rent_cap_notice, score_property

log = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(levelname)s:%(name)s:%(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="dealscore-score",
        description="Score a listing against its neighborhood stats (JSON in, JSON out).",
    )
    p.add_argument("input", help='JSON file with {"property": {...}, "neighborhood": {...}}; "-" for stdin')
    p.add_argument("--year", type=int, default=None, help="evaluation year (default: settings/clock)")
    p.add_argument("--inflation", type=float, default=None, help="CPI rate in percent, e.g. 3.4")
    p.add_argument("--rent", type=float, default=None, help="current monthly rent; adds the AB 1482 notice")
    p.add_argument("--use-label", default=None, help='free-text use label, e.g. "student dorm"')
    p.add_argument(
        "--single-family",
        action="store_true",
        help="treat as single-family for the small-landlord exemption (default: from property_type)",
    )
    p.add_argument("--owner-occupied", action="store_true")
    p.add_argument("--log-level", default=settings.LOG_LEVEL)
    return p


def _read_payload(path: str) -> dict:
    if path == "-":
        return json.load(sys.stdin)
    return json.loads(Path(path).read_text(encoding="utf-8"))


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.log_level)

    try:
        payload = _read_payload(args.input)
    except (OSError, json.JSONDecodeError) as e:
        raise SystemExit(f"Could not read input {args.input!r}: {e}")

    try:
        req = ScoreRequest.model_validate(payload)
    except ValidationError as e:
        raise SystemExit(f"Invalid input:\n{e}")

    prop = req.listing.to_domain()
    hood = req.neighborhood.to_domain()

    try:
        scored = score_property(prop, hood, evaluation_year=args.year, inflation_rate=args.inflation)
    except InvalidInput as e:
        raise SystemExit(f"Invalid input: {e}")

    out = scored.to_report().model_dump(mode="json")

    if args.rent is not None:
        try:
            notice = rent_cap_notice(
                args.rent,
                prop.year_built,
                use_label=args.use_label,
                property_type=prop.property_type,
                is_single_family=True if args.single_family else None,
                owner_occupied=args.owner_occupied,
                evaluation_year=scored.evaluation_year,
                inflation_rate=args.inflation,
            )
        except InvalidInput as e:
            raise SystemExit(f"Invalid rent: {e}")
        out["rent_cap_notice"] = {
            "notice": notice.notice,
            "is_eligible": notice.is_eligible,
            "max_increase": notice.max_increase,
            "compliance_notes": list(notice.compliance_notes),
        }

    log.info("score=%.1f category=%s", scored.deal.total_score, scored.category.category)
    print(json.dumps(out, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

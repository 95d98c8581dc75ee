# scripts/rank_dates.py
"""
Print the best dates for a trip from the command line.

Uses the same AvailabilityService as the API, so access rules apply:
--caller-id must be the trip owner or a member.

Example:
    python -m scripts.rank_dates --trip-id 1 --caller-id 1 --top-n 5
"""

from __future__ import annotations

import argparse
from typing import List

from app.core.errors import AvailabilityError
from app.db.session import session_scope
from app.services.availability_service import AvailabilityService, BestDate


def run_once(trip_id: int, caller_id: int, top_n: int | None = None) -> List[BestDate]:
    with session_scope() as db:
        service = AvailabilityService(db)
        try:
            ranked = service.get_best_dates(trip_id, caller_id, top_n=top_n)
        except AvailabilityError as e:
            print(f"[rank_dates] {e.kind}: {e.message}")
            return []

        if not ranked:
            print(f"[rank_dates] Trip {trip_id} has no candidate dates")
            return ranked

        for i, best in enumerate(ranked, start=1):
            print(
                f"[rank_dates] #{i} {best.date.isoformat()} "
                f"score={best.score} ({best.percentage:.0%}, {best.tier})"
            )
        return ranked


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--trip-id", type=int, required=True, help="Trip to rank")
    parser.add_argument(
        "--caller-id",
        type=int,
        required=True,
        help="User running the report (must be owner or member)",
    )
    parser.add_argument(
        "--top-n",
        type=int,
        default=None,
        help="How many dates to show (defaults to RANKING_TOP_N)",
    )
    args = parser.parse_args()
    run_once(trip_id=args.trip_id, caller_id=args.caller_id, top_n=args.top_n)


if __name__ == "__main__":
    main()

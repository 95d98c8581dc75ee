# app/services/ranking_service.py
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional

from app.config import get_settings
from app.core.errors import InvalidInput
from app.models.availability import Availability, AvailabilityStatus

TIER_WORST = "worst"
TIER_NONE = "none"
TIER_LOW = "low"
TIER_MEDIUM = "medium"
TIER_HIGH = "high"


def status_weights() -> Dict[AvailabilityStatus, int]:
    settings = get_settings()
    return {
        AvailabilityStatus.CAN: settings.SCORE_WEIGHT_CAN,
        AvailabilityStatus.MAYBE: settings.SCORE_WEIGHT_MAYBE,
        AvailabilityStatus.CANNOT: settings.SCORE_WEIGHT_CANNOT,
    }


def compute_date_score(
    records: Iterable[Availability],
    weights: Optional[Dict[AvailabilityStatus, int]] = None,
) -> int:
    """
    Score = sum of per-status weights over one day's votes.

    With the default weights: can=+3, maybe=+1, cannot=-2.
    Members who didn't vote contribute nothing.
    """
    weights = weights or status_weights()
    return sum(weights[AvailabilityStatus(r.status)] for r in records)


def score_dates(
    days: Iterable[date],
    records: Iterable[Availability],
    weights: Optional[Dict[AvailabilityStatus, int]] = None,
) -> Dict[date, int]:
    weights = weights or status_weights()

    # Group votes per day once instead of filtering per candidate
    by_day: Dict[date, List[Availability]] = defaultdict(list)
    for r in records:
        by_day[r.date].append(r)

    return {d: compute_date_score(by_day.get(d, ()), weights) for d in days}


@dataclass
class RankedDate:
    date: date
    score: int


def rank_dates(
    days: Iterable[date],
    records: Iterable[Availability],
    top_n: int,
    weights: Optional[Dict[AvailabilityStatus, int]] = None,
) -> List[RankedDate]:
    """
    Given:
      - the candidate days of a trip (any order)
      - every vote recorded for the trip

    Returns:
      - up to `top_n` RankedDate entries, best score first

    Candidates are put in chronological order before a stable sort on
    score, so among equal scores the earlier day wins. The order of
    `records` never affects the result.
    """
    if top_n is None or top_n < 1:
        raise InvalidInput("top_n must be a positive integer", field="top_n")

    chronological = sorted(set(days))
    scores = score_dates(chronological, records, weights)

    ranked = sorted(chronological, key=lambda d: scores[d], reverse=True)
    return [RankedDate(date=d, score=scores[d]) for d in ranked[:top_n]]


def group_percentage(score: int, member_count: int) -> float:
    """
    Share of the best possible score (everyone voting "can").

    Used for display only. Negative scores clamp to 0.0; an empty member
    list counts as one member.
    """
    best_possible = max(member_count, 1) * get_settings().SCORE_WEIGHT_CAN
    if score <= 0 or best_possible <= 0:
        return 0.0
    return score / best_possible


def display_tier(score: int, member_count: int) -> str:
    if score < 0:
        return TIER_WORST
    if score == 0:
        return TIER_NONE

    pct = group_percentage(score, member_count)
    if pct < 0.34:
        return TIER_LOW
    if pct < 0.67:
        return TIER_MEDIUM
    return TIER_HIGH

# tests/test_ranking_service.py
import random
from datetime import date

import pytest

from app.core.errors import InvalidInput
from app.models.availability import Availability, AvailabilityStatus
from app.services.calendar_days import candidate_days
from app.services.ranking_service import (
    TIER_HIGH,
    TIER_LOW,
    TIER_MEDIUM,
    TIER_NONE,
    TIER_WORST,
    compute_date_score,
    display_tier,
    group_percentage,
    rank_dates,
    score_dates,
)

CAN = AvailabilityStatus.CAN
MAYBE = AvailabilityStatus.MAYBE
CANNOT = AvailabilityStatus.CANNOT


def _vote(user_id: int, day: date, status: AvailabilityStatus) -> Availability:
    # Transient rows are enough, scoring never touches the DB
    return Availability(trip_id=1, user_id=user_id, date=day, status=status)


def test_score_two_can_one_cannot():
    day = date(2025, 1, 2)
    records = [_vote(1, day, CAN), _vote(2, day, CAN), _vote(3, day, CANNOT)]
    assert compute_date_score(records) == 4


def test_score_with_no_votes_is_zero():
    assert compute_date_score([]) == 0


def test_score_dates_ignores_votes_outside_candidates():
    records = [
        _vote(1, date(2025, 1, 1), MAYBE),
        _vote(1, date(2025, 2, 1), CAN),
    ]
    scores = score_dates([date(2025, 1, 1), date(2025, 1, 2)], records)
    assert scores == {date(2025, 1, 1): 1, date(2025, 1, 2): 0}


def test_rank_dates_earlier_day_wins_ties():
    days = candidate_days(date(2025, 3, 1), date(2025, 3, 4))
    records = [
        _vote(1, date(2025, 3, 3), CAN),
        _vote(1, date(2025, 3, 2), CAN),
    ]
    ranked = rank_dates(days, records, top_n=4)
    assert [(r.date, r.score) for r in ranked] == [
        (date(2025, 3, 2), 3),
        (date(2025, 3, 3), 3),
        (date(2025, 3, 1), 0),
        (date(2025, 3, 4), 0),
    ]


def test_rank_dates_does_not_depend_on_record_or_day_order():
    days = candidate_days(date(2025, 1, 1), date(2025, 1, 10))
    records = [
        _vote(1, date(2025, 1, 4), CAN),
        _vote(2, date(2025, 1, 4), CANNOT),
        _vote(1, date(2025, 1, 7), MAYBE),
        _vote(2, date(2025, 1, 2), MAYBE),
        _vote(3, date(2025, 1, 9), CANNOT),
        _vote(3, date(2025, 1, 5), CAN),
    ]
    expected = rank_dates(days, records, top_n=5)

    rng = random.Random(7)
    for _ in range(5):
        shuffled_records = records[:]
        shuffled_days = days[:]
        rng.shuffle(shuffled_records)
        rng.shuffle(shuffled_days)
        assert rank_dates(shuffled_days, shuffled_records, top_n=5) == expected


def test_rank_dates_returns_all_when_fewer_than_top_n():
    days = [date(2025, 1, 1), date(2025, 1, 2)]
    records = [_vote(1, date(2025, 1, 2), MAYBE)]
    ranked = rank_dates(days, records, top_n=3)
    assert [r.date for r in ranked] == [date(2025, 1, 2), date(2025, 1, 1)]


def test_rank_dates_negative_scores_sink():
    days = [date(2025, 1, 1), date(2025, 1, 2)]
    records = [_vote(1, date(2025, 1, 1), CANNOT)]
    ranked = rank_dates(days, records, top_n=1)
    assert ranked[0].date == date(2025, 1, 2)
    assert ranked[0].score == 0


@pytest.mark.parametrize("top_n", [0, -1, None])
def test_rank_dates_rejects_bad_top_n(top_n):
    with pytest.raises(InvalidInput) as exc:
        rank_dates([date(2025, 1, 1)], [], top_n=top_n)
    assert exc.value.field == "top_n"


def test_candidate_days_truncates_long_windows():
    days = candidate_days(date(2025, 1, 1), date(2025, 12, 31), cap=90)
    assert len(days) == 90
    assert days[0] == date(2025, 1, 1)
    assert days[-1] == date(2025, 3, 31)


def test_group_percentage_and_tiers():
    assert group_percentage(9, 3) == pytest.approx(1.0)
    assert group_percentage(4, 3) == pytest.approx(4 / 9)
    assert group_percentage(-4, 3) == 0.0
    # Zero members counts as one so we never divide by zero
    assert group_percentage(3, 0) == pytest.approx(1.0)

    assert display_tier(-1, 3) == TIER_WORST
    assert display_tier(0, 3) == TIER_NONE
    assert display_tier(1, 3) == TIER_LOW
    assert display_tier(4, 3) == TIER_MEDIUM
    assert display_tier(9, 3) == TIER_HIGH

# tests/test_dashboard_rollups.py
from __future__ import annotations

import pytest

from payloads import review_json
from stayease.domain.dashboard_rollups import average_rating
from stayease.schemas import Review


def _reviews(*ratings: int) -> list[Review]:
    return [Review.model_validate(review_json(i, listing_id=1, rating=r)) for i, r in enumerate(ratings, 1)]


@pytest.mark.parametrize(
    "ratings,expected",
    [
        ((5, 4, 4, 4), 4.3),
        ((3, 3, 3, 4), 3.3),
        ((4, 5), 4.5),
        ((5, 4, 4), 4.3),
        ((), 0.0),
    ],
)
def test_average_rating_rounds_half_up(ratings, expected):
    assert average_rating(_reviews(*ratings)) == expected

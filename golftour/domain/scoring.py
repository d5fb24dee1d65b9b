from __future__ import annotations

import math
from typing import Sequence

from golftour.db.models import Participant

STANDARD_SLOPE_RATING = 113
STANDARD_COURSE_RATING = 72.0


def relative_to_par(
    score: Sequence[int] | None,
    pars: Sequence[int],
    manual_score_total: int | None = None,
) -> int:
    """Return a round's score relative to par (negative is under par).

    Only holes with a positive stroke count contribute; for a complete round
    this is ``sum(score) - sum(pars)``.
    """
    if manual_score_total is not None:
        return int(manual_score_total) - sum(pars)
    total = 0
    for strokes, par in zip(score or (), pars):
        if strokes > 0:
            total += strokes - par
    return total


def resolve_relative_score(participant: Participant, pars: Sequence[int]) -> int:
    return relative_to_par(participant.score, pars, participant.manual_score_total)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def course_handicap(
    handicap_index: float,
    slope_rating: float | None,
    course_rating: float | None,
    par: int,
) -> int:
    """Return the WHS course handicap, rounded half up to an integer."""
    slope = slope_rating or STANDARD_SLOPE_RATING
    rating = course_rating if course_rating is not None else STANDARD_COURSE_RATING
    return round_half_up(handicap_index * slope / STANDARD_SLOPE_RATING + (rating - par))

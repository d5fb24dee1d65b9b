from __future__ import annotations

from typing import Sequence

from golftour.db.models import Participant

CONCEDED_HOLE = -1


def is_round_eligible(
    is_locked: bool,
    score: Sequence[int] | None,
    manual_score_total: int | None,
) -> bool:
    """Return whether a round counts toward standings.

    A manually entered total only needs the round to be locked. A hole-by-hole
    round must be locked, decodable and free of conceded holes.
    """
    if not is_locked:
        return False
    if manual_score_total is not None:
        return True
    if score is None:
        return False
    return CONCEDED_HOLE not in score


def counts_toward_standings(participant: Participant) -> bool:
    return is_round_eligible(
        participant.is_locked,
        participant.score,
        participant.manual_score_total,
    )

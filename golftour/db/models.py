"""Read-only snapshot records handed to the standings computation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

HoleScores = tuple[int, ...]


@dataclass(frozen=True)
class Tour:
    id: int
    name: str
    point_template_id: int | None = None
    scoring_mode: str = "gross"
    description: str | None = None


@dataclass(frozen=True)
class Competition:
    id: int
    name: str
    date: str
    tour_id: int | None
    course_id: int
    pars: tuple[int, ...] = ()
    course_rating: float | None = None
    slope_rating: int | None = None

    @property
    def total_par(self) -> int:
        return sum(self.pars)


@dataclass(frozen=True)
class Participant:
    """One player's round in one competition.

    ``score`` holds one entry per hole: 0 for unreported, a positive stroke
    count, or -1 when the hole was conceded. ``None`` marks score data that
    could not be decoded.
    """

    id: int
    player_id: int
    player_name: str
    score: HoleScores | None = ()
    is_locked: bool = False
    manual_score_total: int | None = None


@dataclass(frozen=True)
class PointTemplate:
    id: int
    name: str
    points_structure: Mapping[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class TourCategory:
    id: int
    tour_id: int
    name: str
    sort_order: int = 0


@dataclass(frozen=True)
class TourEnrollment:
    player_id: int
    category_id: int | None = None
    category_name: str | None = None
    handicap_index: float | None = None

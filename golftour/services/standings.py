"""Tour standings: per-competition ranking and points aggregated over a tour."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Protocol

from loguru import logger

from golftour.db.models import (
    Competition,
    Participant,
    PointTemplate,
    Tour,
    TourCategory,
    TourEnrollment,
)
from golftour.domain.eligibility import counts_toward_standings
from golftour.domain.errors import CATEGORY_NOT_FOUND, TOUR_NOT_FOUND, NotFoundError
from golftour.domain.points import PointsCalculator
from golftour.domain.ranking import assign_positions_with_ties
from golftour.domain.scoring import course_handicap, resolve_relative_score

GROSS = "gross"
NET = "net"
SCORING_TYPES = (GROSS, NET)


class StandingsRepository(Protocol):
    def get_tour(self, tour_id: int) -> Tour | None: ...

    def list_competitions(self, tour_id: int) -> list[Competition]: ...

    def list_participants(self, competition_id: int) -> list[Participant]: ...

    def get_point_template(self, template_id: int) -> PointTemplate | None: ...

    def list_categories(self, tour_id: int) -> list[TourCategory]: ...

    def list_enrollments(self, tour_id: int) -> list[TourEnrollment]: ...


@dataclass
class CompetitionResult:
    competition_id: int
    competition_name: str
    competition_date: str
    score_relative_to_par: int
    points: int
    position: int
    net_score_relative_to_par: int | None = None
    course_handicap: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        if self.net_score_relative_to_par is None:
            data.pop("net_score_relative_to_par")
            data.pop("course_handicap")
        return data


@dataclass
class PlayerStanding:
    player_id: int
    player_name: str
    position: int = 0
    total_points: int = 0
    competitions_played: int = 0
    competitions: list[CompetitionResult] = field(default_factory=list)
    category_id: int | None = None
    category_name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "player_id": self.player_id,
            "player_name": self.player_name,
            "position": self.position,
            "total_points": self.total_points,
            "competitions_played": self.competitions_played,
            "competitions": [result.to_dict() for result in self.competitions],
        }
        if self.category_id is not None:
            data["category_id"] = self.category_id
            data["category_name"] = self.category_name
        return data


@dataclass(frozen=True)
class TourStanding:
    """Simplified standings row without position or breakdown."""

    player_id: int
    player_name: str
    total_points: int
    competitions_played: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class TourStandings:
    tour: Tour
    player_standings: list[PlayerStanding]
    total_competitions: int
    scoring_mode: str = GROSS
    selected_scoring_type: str = GROSS
    point_template: dict[str, Any] | None = None
    categories: list[TourCategory] = field(default_factory=list)
    selected_category_id: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "tour": asdict(self.tour),
            "total_competitions": self.total_competitions,
            "scoring_mode": self.scoring_mode,
            "selected_scoring_type": self.selected_scoring_type,
            "categories": [asdict(category) for category in self.categories],
            "player_standings": [standing.to_dict() for standing in self.player_standings],
        }
        if self.point_template is not None:
            data["point_template"] = dict(self.point_template)
        if self.selected_category_id is not None:
            data["selected_category_id"] = self.selected_category_id
        return data


@dataclass(frozen=True)
class _Round:
    participant: Participant
    gross: int
    net: int | None = None
    course_handicap: int | None = None

    @property
    def ranking_score(self) -> int:
        return self.gross if self.net is None else self.net


class StandingsService:
    def __init__(self, repository: StandingsRepository) -> None:
        self._repository = repository

    def get_full_standings(
        self,
        tour_id: int,
        category_id: int | None = None,
        scoring_type: str | None = None,
    ) -> TourStandings:
        tour = self._repository.get_tour(tour_id)
        if tour is None:
            raise NotFoundError(TOUR_NOT_FOUND)

        effective_scoring_type = self._resolve_scoring_type(tour, scoring_type)
        categories = self._repository.list_categories(tour_id)
        if category_id is not None and not any(c.id == category_id for c in categories):
            raise NotFoundError(CATEGORY_NOT_FOUND)

        competitions = self._repository.list_competitions(tour_id)
        enrollments = {e.player_id: e for e in self._repository.list_enrollments(tour_id)}
        calculator = PointsCalculator(self._repository.get_point_template)

        standings: dict[int, PlayerStanding] = {}
        for competition in competitions:
            rounds = self._rank_competition(competition, effective_scoring_type, enrollments)
            field_size = len(rounds)
            logger.debug(
                "Competition {} ({}): field size {}", competition.id, competition.name, field_size
            )
            for position, round_ in assign_positions_with_ties(rounds, lambda r: r.ranking_score):
                player_id = round_.participant.player_id
                enrollment = enrollments.get(player_id)
                if category_id is not None and (
                    enrollment is None or enrollment.category_id != category_id
                ):
                    continue

                points = calculator.calculate_points(tour.point_template_id, position, field_size)
                standing = standings.get(player_id)
                if standing is None:
                    standing = PlayerStanding(
                        player_id=player_id,
                        player_name=round_.participant.player_name,
                        category_id=enrollment.category_id if enrollment else None,
                        category_name=enrollment.category_name if enrollment else None,
                    )
                    standings[player_id] = standing
                standing.total_points += points
                standing.competitions_played += 1
                standing.competitions.append(
                    CompetitionResult(
                        competition_id=competition.id,
                        competition_name=competition.name,
                        competition_date=competition.date,
                        score_relative_to_par=round_.gross,
                        points=points,
                        position=position,
                        net_score_relative_to_par=round_.net,
                        course_handicap=round_.course_handicap,
                    )
                )

        player_standings = sorted(
            standings.values(),
            key=lambda s: (-s.total_points, -s.competitions_played, s.player_name),
        )
        for position, standing in assign_positions_with_ties(
            player_standings, lambda s: s.total_points
        ):
            standing.position = position

        logger.info(
            "Computed {} standings for tour {}: {} players over {} competitions",
            effective_scoring_type,
            tour_id,
            len(player_standings),
            len(competitions),
        )
        return TourStandings(
            tour=tour,
            player_standings=player_standings,
            total_competitions=len(competitions),
            scoring_mode=tour.scoring_mode or GROSS,
            selected_scoring_type=effective_scoring_type,
            point_template=self._describe_template(tour, calculator),
            categories=categories,
            selected_category_id=category_id,
        )

    def get_standings(self, tour_id: int) -> list[TourStanding]:
        full = self.get_full_standings(tour_id)
        return [
            TourStanding(
                player_id=standing.player_id,
                player_name=standing.player_name,
                total_points=standing.total_points,
                competitions_played=standing.competitions_played,
            )
            for standing in full.player_standings
        ]

    @staticmethod
    def _resolve_scoring_type(tour: Tour, scoring_type: str | None) -> str:
        if scoring_type is None:
            return NET if tour.scoring_mode == NET else GROSS
        if scoring_type not in SCORING_TYPES:
            raise ValueError(f"Unsupported scoring type: {scoring_type}")
        return scoring_type

    def _rank_competition(
        self,
        competition: Competition,
        scoring_type: str,
        enrollments: dict[int, TourEnrollment],
    ) -> list[_Round]:
        """Return the competition's counted rounds sorted best first."""
        best: dict[int, _Round] = {}
        for participant in self._repository.list_participants(competition.id):
            if not counts_toward_standings(participant):
                continue
            gross = resolve_relative_score(participant, competition.pars)
            round_ = _Round(participant=participant, gross=gross)
            if scoring_type == NET:
                enrollment = enrollments.get(participant.player_id)
                handicap_index = 0.0
                if enrollment is not None and enrollment.handicap_index is not None:
                    handicap_index = float(enrollment.handicap_index)
                strokes = course_handicap(
                    handicap_index,
                    competition.slope_rating,
                    competition.course_rating,
                    competition.total_par,
                )
                round_ = _Round(
                    participant=participant,
                    gross=gross,
                    net=gross - strokes,
                    course_handicap=strokes,
                )
            current = best.get(participant.player_id)
            # one round per player per competition
            if current is None or round_.ranking_score < current.ranking_score:
                best[participant.player_id] = round_
        return sorted(
            best.values(),
            key=lambda r: (r.ranking_score, r.participant.player_name),
        )

    def _describe_template(
        self, tour: Tour, calculator: PointsCalculator
    ) -> dict[str, Any] | None:
        if tour.point_template_id is None:
            return None
        try:
            template = calculator.get_template(tour.point_template_id)
        except NotFoundError:
            # only an error when points are actually calculated from it
            return None
        return {"id": template.id, "name": template.name}

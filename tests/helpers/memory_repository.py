from __future__ import annotations

from collections import defaultdict

from golftour.db.models import (
    Competition,
    Participant,
    PointTemplate,
    Tour,
    TourCategory,
    TourEnrollment,
)

PAR_72 = (4,) * 18


class InMemoryStandingsRepository:
    """Dictionary-backed standings snapshot for tests."""

    def __init__(self) -> None:
        self.tours: dict[int, Tour] = {}
        self.competitions: dict[int, list[Competition]] = defaultdict(list)
        self.participants: dict[int, list[Participant]] = defaultdict(list)
        self.templates: dict[int, PointTemplate] = {}
        self.categories: dict[int, list[TourCategory]] = defaultdict(list)
        self.enrollments: dict[int, list[TourEnrollment]] = defaultdict(list)
        self._next_id = 1

    def _new_id(self) -> int:
        value = self._next_id
        self._next_id += 1
        return value

    def add_tour(
        self,
        name: str = "Tour",
        point_template_id: int | None = None,
        scoring_mode: str = "gross",
    ) -> Tour:
        tour = Tour(
            id=self._new_id(),
            name=name,
            point_template_id=point_template_id,
            scoring_mode=scoring_mode,
        )
        self.tours[tour.id] = tour
        return tour

    def add_template(self, structure: dict[str, int], name: str = "Custom Points") -> PointTemplate:
        template = PointTemplate(id=self._new_id(), name=name, points_structure=structure)
        self.templates[template.id] = template
        return template

    def add_competition(
        self,
        tour: Tour,
        name: str,
        date: str,
        pars: tuple[int, ...] = PAR_72,
        course_rating: float | None = None,
        slope_rating: int | None = None,
    ) -> Competition:
        competition = Competition(
            id=self._new_id(),
            name=name,
            date=date,
            tour_id=tour.id,
            course_id=1,
            pars=pars,
            course_rating=course_rating,
            slope_rating=slope_rating,
        )
        self.competitions[tour.id].append(competition)
        return competition

    def add_participant(
        self,
        competition: Competition,
        player_id: int,
        player_name: str,
        score: tuple[int, ...] | list[int] | None = PAR_72,
        is_locked: bool = True,
        manual_score_total: int | None = None,
    ) -> Participant:
        participant = Participant(
            id=self._new_id(),
            player_id=player_id,
            player_name=player_name,
            score=tuple(score) if score is not None else None,
            is_locked=is_locked,
            manual_score_total=manual_score_total,
        )
        self.participants[competition.id].append(participant)
        return participant

    def add_category(self, tour: Tour, name: str, sort_order: int = 0) -> TourCategory:
        category = TourCategory(id=self._new_id(), tour_id=tour.id, name=name, sort_order=sort_order)
        self.categories[tour.id].append(category)
        return category

    def enroll(
        self,
        tour: Tour,
        player_id: int,
        category: TourCategory | None = None,
        handicap_index: float | None = None,
    ) -> TourEnrollment:
        enrollment = TourEnrollment(
            player_id=player_id,
            category_id=category.id if category else None,
            category_name=category.name if category else None,
            handicap_index=handicap_index,
        )
        self.enrollments[tour.id].append(enrollment)
        return enrollment

    def get_tour(self, tour_id: int) -> Tour | None:
        return self.tours.get(tour_id)

    def list_competitions(self, tour_id: int) -> list[Competition]:
        return sorted(self.competitions[tour_id], key=lambda c: (c.date, c.id))

    def list_participants(self, competition_id: int) -> list[Participant]:
        return list(self.participants[competition_id])

    def get_point_template(self, template_id: int) -> PointTemplate | None:
        return self.templates.get(template_id)

    def list_categories(self, tour_id: int) -> list[TourCategory]:
        return sorted(self.categories[tour_id], key=lambda c: (c.sort_order, c.name))

    def list_enrollments(self, tour_id: int) -> list[TourEnrollment]:
        return list(self.enrollments[tour_id])


def with_strokes(*changes: tuple[int, int], pars: tuple[int, ...] = PAR_72) -> list[int]:
    """Return a par round with the given (hole index, strokes) changes applied."""
    score = list(pars)
    for index, strokes in changes:
        score[index] = strokes
    return score

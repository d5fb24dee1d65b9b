"""SQLite repositories for tours, competitions and their results."""

from __future__ import annotations

import json
import sqlite3
from typing import Any

from loguru import logger

from golftour.db.models import (
    Competition,
    HoleScores,
    Participant,
    PointTemplate,
    Tour,
    TourCategory,
    TourEnrollment,
)


def _row_to_dict(row: sqlite3.Row | None) -> dict[str, Any] | None:
    if row is None:
        return None
    return dict(row)


def _encode_json(value: object) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def decode_hole_scores(raw: object) -> HoleScores | None:
    """Decode a stored score array, returning ``None`` when it is malformed."""
    if raw is None:
        return None
    if isinstance(raw, (list, tuple)):
        values: object = raw
    else:
        try:
            values = json.loads(str(raw))
        except json.JSONDecodeError:
            return None
    if not isinstance(values, list) and not isinstance(values, tuple):
        return None
    if not all(_is_int(value) for value in values):
        return None
    return tuple(values)


def decode_pars(raw: object) -> tuple[int, ...]:
    scores = decode_hole_scores(raw)
    if scores is None:
        logger.warning("Unreadable course pars {!r}, treating course as par 0", raw)
        return ()
    return scores


def decode_points_structure(raw: object) -> dict[str, int]:
    if isinstance(raw, dict):
        data: object = raw
    else:
        try:
            data = json.loads(str(raw or "{}"))
        except json.JSONDecodeError:
            data = None
    if not isinstance(data, dict):
        logger.warning("Unreadable point template structure {!r}", raw)
        return {}
    return {str(key): int(value) for key, value in data.items() if _is_int(value)}


class PlayerRepository:
    """Repository for player data access."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection

    def create(self, data: dict[str, Any]) -> int:
        cursor = self._connection.execute(
            "INSERT INTO players (name, handicap) VALUES (?, ?)",
            (data.get("name"), data.get("handicap")),
        )
        self._connection.commit()
        return int(cursor.lastrowid)

    def get(self, player_id: int) -> dict[str, Any] | None:
        row = self._connection.execute(
            "SELECT * FROM players WHERE id = ?", (player_id,)
        ).fetchone()
        return _row_to_dict(row)

    def update(self, player_id: int, data: dict[str, Any]) -> None:
        self._connection.execute(
            """
            UPDATE players
            SET name = ?,
                handicap = ?,
                updated_at = CURRENT_TIMESTAMP
            WHERE id = ?
            """,
            (data.get("name"), data.get("handicap"), player_id),
        )
        self._connection.commit()

    def delete(self, player_id: int) -> None:
        self._connection.execute("DELETE FROM players WHERE id = ?", (player_id,))
        self._connection.commit()

    def list(self) -> list[dict[str, Any]]:
        rows = self._connection.execute("SELECT * FROM players ORDER BY name").fetchall()
        return [dict(row) for row in rows]


class CourseRepository:
    """Repository for courses and their par sequences."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection

    def create(self, data: dict[str, Any]) -> int:
        cursor = self._connection.execute(
            """
            INSERT INTO courses (name, pars, course_rating, slope_rating)
            VALUES (?, ?, ?, ?)
            """,
            (
                data.get("name"),
                _encode_json(data.get("pars") or []),
                data.get("course_rating"),
                data.get("slope_rating"),
            ),
        )
        self._connection.commit()
        return int(cursor.lastrowid)

    def get(self, course_id: int) -> dict[str, Any] | None:
        row = self._connection.execute(
            "SELECT * FROM courses WHERE id = ?", (course_id,)
        ).fetchone()
        return _row_to_dict(row)


class PointTemplateRepository:
    """Repository for point templates (rank -> points mappings)."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection

    def create(self, data: dict[str, Any]) -> int:
        cursor = self._connection.execute(
            "INSERT INTO point_templates (name, points_structure) VALUES (?, ?)",
            (data.get("name"), _encode_json(data.get("points_structure") or {})),
        )
        self._connection.commit()
        return int(cursor.lastrowid)

    def get(self, template_id: int) -> dict[str, Any] | None:
        row = self._connection.execute(
            "SELECT * FROM point_templates WHERE id = ?", (template_id,)
        ).fetchone()
        return _row_to_dict(row)

    def delete(self, template_id: int) -> None:
        self._connection.execute("DELETE FROM point_templates WHERE id = ?", (template_id,))
        self._connection.commit()


class TourRepository:
    """Repository for tour data access."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection

    def create(self, data: dict[str, Any]) -> int:
        cursor = self._connection.execute(
            """
            INSERT INTO tours (name, description, point_template_id, scoring_mode)
            VALUES (?, ?, ?, ?)
            """,
            (
                data.get("name"),
                data.get("description"),
                data.get("point_template_id"),
                data.get("scoring_mode") or "gross",
            ),
        )
        self._connection.commit()
        return int(cursor.lastrowid)

    def get(self, tour_id: int) -> dict[str, Any] | None:
        row = self._connection.execute(
            "SELECT * FROM tours WHERE id = ?", (tour_id,)
        ).fetchone()
        return _row_to_dict(row)

    def list(self) -> list[dict[str, Any]]:
        rows = self._connection.execute("SELECT * FROM tours ORDER BY name").fetchall()
        return [dict(row) for row in rows]

    def add_category(self, tour_id: int, name: str, sort_order: int = 0) -> int:
        cursor = self._connection.execute(
            "INSERT INTO tour_categories (tour_id, name, sort_order) VALUES (?, ?, ?)",
            (tour_id, name, sort_order),
        )
        self._connection.commit()
        return int(cursor.lastrowid)

    def enroll(
        self,
        tour_id: int,
        player_id: int,
        *,
        category_id: int | None = None,
        playing_handicap: float | None = None,
        status: str = "active",
    ) -> int:
        cursor = self._connection.execute(
            """
            INSERT INTO tour_enrollments (tour_id, player_id, category_id, playing_handicap, status)
            VALUES (?, ?, ?, ?, ?)
            """,
            (tour_id, player_id, category_id, playing_handicap, status),
        )
        self._connection.commit()
        return int(cursor.lastrowid)


class CompetitionRepository:
    """Repository for competitions, their tee times and participants."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection

    def create(self, data: dict[str, Any]) -> int:
        cursor = self._connection.execute(
            "INSERT INTO competitions (name, date, course_id, tour_id) VALUES (?, ?, ?, ?)",
            (data.get("name"), data.get("date"), data.get("course_id"), data.get("tour_id")),
        )
        self._connection.commit()
        return int(cursor.lastrowid)

    def get(self, competition_id: int) -> dict[str, Any] | None:
        row = self._connection.execute(
            "SELECT * FROM competitions WHERE id = ?", (competition_id,)
        ).fetchone()
        return _row_to_dict(row)

    def add_tee_time(self, competition_id: int, teetime: str) -> int:
        cursor = self._connection.execute(
            "INSERT INTO tee_times (competition_id, teetime) VALUES (?, ?)",
            (competition_id, teetime),
        )
        self._connection.commit()
        return int(cursor.lastrowid)

    def add_participant(self, tee_time_id: int, data: dict[str, Any]) -> int:
        cursor = self._connection.execute(
            """
            INSERT INTO participants (tee_time_id, player_id, score, is_locked, manual_score_total)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                tee_time_id,
                data.get("player_id"),
                _encode_json(data.get("score") if data.get("score") is not None else []),
                1 if data.get("is_locked") else 0,
                data.get("manual_score_total"),
            ),
        )
        self._connection.commit()
        return int(cursor.lastrowid)


class SqliteStandingsRepository:
    """Read-only view of one tour's data, decoded into snapshot records."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection

    def get_tour(self, tour_id: int) -> Tour | None:
        row = self._connection.execute(
            "SELECT * FROM tours WHERE id = ?", (tour_id,)
        ).fetchone()
        if row is None:
            return None
        return Tour(
            id=int(row["id"]),
            name=str(row["name"]),
            point_template_id=row["point_template_id"],
            scoring_mode=str(row["scoring_mode"] or "gross"),
            description=row["description"],
        )

    def list_tour_ids(self) -> list[int]:
        rows = self._connection.execute("SELECT id FROM tours ORDER BY name, id").fetchall()
        return [int(row["id"]) for row in rows]

    def list_competitions(self, tour_id: int) -> list[Competition]:
        rows = self._connection.execute(
            """
            SELECT competitions.*,
                   courses.pars,
                   courses.course_rating,
                   courses.slope_rating
            FROM competitions
            JOIN courses ON courses.id = competitions.course_id
            WHERE competitions.tour_id = ?
            ORDER BY competitions.date ASC, competitions.id ASC
            """,
            (tour_id,),
        ).fetchall()
        return [
            Competition(
                id=int(row["id"]),
                name=str(row["name"]),
                date=str(row["date"]),
                tour_id=row["tour_id"],
                course_id=int(row["course_id"]),
                pars=decode_pars(row["pars"]),
                course_rating=row["course_rating"],
                slope_rating=row["slope_rating"],
            )
            for row in rows
        ]

    def list_participants(self, competition_id: int) -> list[Participant]:
        rows = self._connection.execute(
            """
            SELECT participants.id,
                   participants.player_id,
                   participants.score,
                   participants.is_locked,
                   participants.manual_score_total,
                   players.name AS player_name
            FROM participants
            JOIN tee_times ON tee_times.id = participants.tee_time_id
            JOIN players ON players.id = participants.player_id
            WHERE tee_times.competition_id = ?
            ORDER BY participants.id
            """,
            (competition_id,),
        ).fetchall()
        participants: list[Participant] = []
        for row in rows:
            score = decode_hole_scores(row["score"])
            if score is None and row["manual_score_total"] is None:
                logger.warning(
                    "Participant {} has unreadable score data", row["id"]
                )
            participants.append(
                Participant(
                    id=int(row["id"]),
                    player_id=int(row["player_id"]),
                    player_name=str(row["player_name"]),
                    score=score,
                    is_locked=bool(row["is_locked"]),
                    manual_score_total=row["manual_score_total"],
                )
            )
        return participants

    def get_point_template(self, template_id: int) -> PointTemplate | None:
        row = self._connection.execute(
            "SELECT id, name, points_structure FROM point_templates WHERE id = ?",
            (template_id,),
        ).fetchone()
        if row is None:
            return None
        return PointTemplate(
            id=int(row["id"]),
            name=str(row["name"]),
            points_structure=decode_points_structure(row["points_structure"]),
        )

    def list_categories(self, tour_id: int) -> list[TourCategory]:
        rows = self._connection.execute(
            """
            SELECT * FROM tour_categories
            WHERE tour_id = ?
            ORDER BY sort_order ASC, name ASC
            """,
            (tour_id,),
        ).fetchall()
        return [
            TourCategory(
                id=int(row["id"]),
                tour_id=int(row["tour_id"]),
                name=str(row["name"]),
                sort_order=int(row["sort_order"]),
            )
            for row in rows
        ]

    def list_enrollments(self, tour_id: int) -> list[TourEnrollment]:
        rows = self._connection.execute(
            """
            SELECT tour_enrollments.player_id,
                   tour_enrollments.category_id,
                   tour_categories.name AS category_name,
                   COALESCE(tour_enrollments.playing_handicap, players.handicap) AS handicap_index
            FROM tour_enrollments
            LEFT JOIN tour_categories ON tour_categories.id = tour_enrollments.category_id
            LEFT JOIN players ON players.id = tour_enrollments.player_id
            WHERE tour_enrollments.tour_id = ? AND tour_enrollments.status = 'active'
            """,
            (tour_id,),
        ).fetchall()
        return [
            TourEnrollment(
                player_id=int(row["player_id"]),
                category_id=row["category_id"],
                category_name=row["category_name"],
                handicap_index=row["handicap_index"],
            )
            for row in rows
        ]

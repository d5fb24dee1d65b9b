import tempfile
import unittest
from pathlib import Path

from golftour.db.database import get_connection
from golftour.db.repositories import (
    SqliteStandingsRepository,
    decode_hole_scores,
    decode_points_structure,
)
from tests.helpers.tour_factory import TourFactory


class DatabaseCrudTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.db_path = Path(self.temp_dir.name) / "test.db"
        self.connection = get_connection(self.db_path)
        self.factory = TourFactory(self.connection)
        self.repository = SqliteStandingsRepository(self.connection)

    def tearDown(self) -> None:
        self.connection.close()
        self.temp_dir.cleanup()

    def test_player_crud(self) -> None:
        players = self.factory.players
        player_id = players.create({"name": "Alice", "handicap": 12.4})
        player = players.get(player_id)
        self.assertIsNotNone(player)
        self.assertEqual(player["name"], "Alice")

        players.update(player_id, {"name": "Alicia", "handicap": 11.0})
        self.assertEqual(players.get(player_id)["name"], "Alicia")
        self.assertEqual(len(players.list()), 1)

        players.delete(player_id)
        self.assertIsNone(players.get(player_id))

    def test_tour_competition_and_template_crud(self) -> None:
        template_id = self.factory.templates.create({"name": "Flat", "points_structure": {"default": 1}})
        self.assertEqual(self.factory.templates.get(template_id)["name"], "Flat")

        tour_id = self.factory.tours.create({"name": "Winter Tour", "point_template_id": template_id})
        tour = self.factory.tours.get(tour_id)
        self.assertEqual(tour["scoring_mode"], "gross")
        self.assertEqual([row["name"] for row in self.factory.tours.list()], ["Winter Tour"])

        course_id = self.factory.course([3] * 9)
        self.assertEqual(self.factory.courses.get(course_id)["pars"], "[3, 3, 3, 3, 3, 3, 3, 3, 3]")

        competition_id, _ = self.factory.competition(tour_id, course_id, "Frost Cup", "2024-12-01")
        self.assertEqual(self.factory.competitions.get(competition_id)["tour_id"], tour_id)

        self.factory.templates.delete(template_id)
        self.assertIsNone(self.factory.templates.get(template_id))
        self.assertIsNone(self.factory.tours.get(tour_id)["point_template_id"])

    def test_tour_snapshot_is_decoded(self) -> None:
        template_id = self.factory.templates.create(
            {"name": "Major", "points_structure": {"1": 100, "default": 10}}
        )
        tour_id = self.factory.tours.create(
            {"name": "Summer Tour", "point_template_id": template_id, "scoring_mode": "net"}
        )
        course_id = self.factory.course([4, 3, 5] * 6, course_rating=71.2, slope_rating=125)
        later_id, _ = self.factory.competition(tour_id, course_id, "Final", "2024-08-01")
        earlier_id, tee_time_id = self.factory.competition(tour_id, course_id, "Opener", "2024-05-01")
        self.factory.competition(None, course_id, "Friendly", "2024-06-01")
        player_id = self.factory.player("Alice")
        self.factory.round(tee_time_id, player_id, [5] * 18)

        tour = self.repository.get_tour(tour_id)
        self.assertEqual(tour.point_template_id, template_id)
        self.assertEqual(tour.scoring_mode, "net")

        competitions = self.repository.list_competitions(tour_id)
        self.assertEqual([c.id for c in competitions], [earlier_id, later_id])
        self.assertEqual(competitions[0].pars, tuple([4, 3, 5] * 6))
        self.assertEqual(competitions[0].total_par, 72)
        self.assertEqual(competitions[0].slope_rating, 125)

        participants = self.repository.list_participants(earlier_id)
        self.assertEqual(len(participants), 1)
        self.assertEqual(participants[0].player_name, "Alice")
        self.assertEqual(participants[0].score, (5,) * 18)
        self.assertTrue(participants[0].is_locked)
        self.assertIsNone(participants[0].manual_score_total)

        template = self.repository.get_point_template(template_id)
        self.assertEqual(template.name, "Major")
        self.assertEqual(dict(template.points_structure), {"1": 100, "default": 10})

    def test_missing_rows_return_none(self) -> None:
        self.assertIsNone(self.repository.get_tour(42))
        self.assertIsNone(self.repository.get_point_template(42))
        self.assertEqual(self.repository.list_competitions(42), [])

    def test_participants_without_player_are_skipped(self) -> None:
        course_id = self.factory.course()
        competition_id, tee_time_id = self.factory.competition(None, course_id, "Open", "2024-01-01")
        self.factory.competitions.add_participant(tee_time_id, {"player_id": None, "score": [4] * 18})

        self.assertEqual(self.repository.list_participants(competition_id), [])

    def test_enrollments_and_categories(self) -> None:
        tour_id = self.factory.tours.create({"name": "Club Tour"})
        category_id = self.factory.tours.add_category(tour_id, "Seniors")
        alice = self.factory.player("Alice", handicap=8.2)
        bob = self.factory.player("Bob", handicap=20.0)
        carol = self.factory.player("Carol")
        self.factory.tours.enroll(tour_id, alice, category_id=category_id)
        self.factory.tours.enroll(tour_id, bob, playing_handicap=18.0)
        self.factory.tours.enroll(tour_id, carol, status="withdrawn")

        enrollments = {e.player_id: e for e in self.repository.list_enrollments(tour_id)}

        self.assertEqual(set(enrollments), {alice, bob})
        self.assertEqual(enrollments[alice].category_name, "Seniors")
        self.assertEqual(enrollments[alice].handicap_index, 8.2)
        self.assertEqual(enrollments[bob].handicap_index, 18.0)
        self.assertEqual([c.name for c in self.repository.list_categories(tour_id)], ["Seniors"])


class DecodeTests(unittest.TestCase):
    def test_decode_hole_scores_table(self) -> None:
        cases = [
            ("[4, 5, 0, -1]", (4, 5, 0, -1)),
            ("[]", ()),
            ([3, 4], (3, 4)),
            ("not-json", None),
            ('{"1": 4}', None),
            ('[4, "5"]', None),
            ("[4, 4.5]", None),
            ("[true, 4]", None),
            (None, None),
        ]
        for raw, expected in cases:
            with self.subTest(raw=raw):
                self.assertEqual(decode_hole_scores(raw), expected)

    def test_decode_points_structure(self) -> None:
        self.assertEqual(decode_points_structure('{"1": 50, "default": 5}'), {"1": 50, "default": 5})
        self.assertEqual(decode_points_structure("[1, 2]"), {})
        self.assertEqual(decode_points_structure("broken"), {})
        self.assertEqual(decode_points_structure('{"1": 50, "2": "x"}'), {"1": 50})


if __name__ == "__main__":
    unittest.main()

"""Tests for daily objective completion."""

import os
import tempfile
import unittest
from datetime import date

from healthcore.db import get_connection, init_db
from healthcore.objectives import (
    ObjectiveNotFoundError,
    check_objectives_completion,
    complete_objective,
    format_objectives,
    get_all_objectives,
    get_daily_objectives,
    seed_objectives,
)
from healthcore.tracker import log_food, log_workout

DAY = date(2026, 2, 5)


class TestObjectives(unittest.TestCase):
    def setUp(self):
        self.db_fd, self.db_path = tempfile.mkstemp(suffix=".db")
        init_db(self.db_path)
        seed_objectives(self.db_path)

        with get_connection(self.db_path) as conn:
            for name in ("Alice", "Bob"):
                conn.execute(
                    """INSERT INTO users (name, birth_date, weight_kg, height_cm, sex)
                       VALUES (?, ?, ?, ?, ?)""",
                    (name, "1990-01-01", 70, 170, "unspecified"),
                )

    def tearDown(self):
        os.close(self.db_fd)
        os.unlink(self.db_path)

    def _by_kind(self, objectives):
        return {o.kind: o for o in objectives}

    def test_seed_is_idempotent(self):
        self.assertEqual(seed_objectives(self.db_path), 0)
        self.assertEqual(len(get_all_objectives(self.db_path)), 2)

    def test_creates_not_done_objectives(self):
        objectives = get_daily_objectives(1, DAY, self.db_path)
        self.assertEqual(len(objectives), 2)
        self.assertTrue(all(not o.completed for o in objectives))
        self.assertTrue(all(o.day == DAY for o in objectives))

    def test_repeated_calls_reuse_rows(self):
        first = get_daily_objectives(1, DAY, self.db_path)
        second = get_daily_objectives(1, DAY, self.db_path)
        self.assertEqual([o.id for o in first], [o.id for o in second])

    def test_food_log_completes_food_objective(self):
        log_food(1, "Apple", 95, logged_on=DAY, db_path=self.db_path)
        objectives = self._by_kind(get_daily_objectives(1, DAY, self.db_path))
        self.assertTrue(objectives["log_food"].completed)
        self.assertFalse(objectives["complete_workout"].completed)

    def test_workout_completes_workout_objective(self):
        log_workout(1, "Legs", 50, DAY, self.db_path)
        objectives = self._by_kind(get_daily_objectives(1, DAY, self.db_path))
        self.assertTrue(objectives["complete_workout"].completed)
        self.assertFalse(objectives["log_food"].completed)

    def test_completion_is_persisted(self):
        log_food(1, "Apple", 95, logged_on=DAY, db_path=self.db_path)
        get_daily_objectives(1, DAY, self.db_path)
        with get_connection(self.db_path) as conn:
            statuses = [r["status"] for r in conn.execute(
                "SELECT status FROM user_objectives WHERE user_id = 1 ORDER BY objective_id"
            )]
        self.assertEqual(statuses, ["done", "not_done"])

    def test_other_day_record_does_not_count(self):
        log_food(1, "Apple", 95, logged_on=date(2026, 2, 4), db_path=self.db_path)
        objectives = self._by_kind(get_daily_objectives(1, DAY, self.db_path))
        self.assertFalse(objectives["log_food"].completed)

    def test_other_user_record_does_not_count(self):
        log_food(2, "Apple", 95, logged_on=DAY, db_path=self.db_path)
        objectives = self._by_kind(get_daily_objectives(1, DAY, self.db_path))
        self.assertFalse(objectives["log_food"].completed)

    def test_done_never_reverts(self):
        log_food(1, "Apple", 95, logged_on=DAY, db_path=self.db_path)
        get_daily_objectives(1, DAY, self.db_path)
        with get_connection(self.db_path) as conn:
            conn.execute("DELETE FROM food_log")
        objectives = self._by_kind(get_daily_objectives(1, DAY, self.db_path))
        self.assertTrue(objectives["log_food"].completed)

    def test_check_completion_leaves_done_objectives(self):
        objectives = get_daily_objectives(1, DAY, self.db_path)
        food = self._by_kind(objectives)["log_food"]
        food.status = "done"
        # No tracking records: nothing changes, nothing reverts
        result = check_objectives_completion(1, objectives, DAY, self.db_path)
        self.assertTrue(self._by_kind(result)["log_food"].completed)
        self.assertFalse(self._by_kind(result)["complete_workout"].completed)

    def test_manual_completion(self):
        workout = self._by_kind(get_daily_objectives(1, DAY, self.db_path))["complete_workout"]
        completed = complete_objective(1, workout.id, self.db_path)
        self.assertTrue(completed.completed)
        self.assertEqual(completed.kind, "complete_workout")
        refreshed = self._by_kind(get_daily_objectives(1, DAY, self.db_path))
        self.assertTrue(refreshed["complete_workout"].completed)

    def test_manual_completion_of_other_users_objective(self):
        workout = self._by_kind(get_daily_objectives(1, DAY, self.db_path))["complete_workout"]
        with self.assertRaises(ObjectiveNotFoundError):
            complete_objective(2, workout.id, self.db_path)

    def test_manual_completion_unknown(self):
        with self.assertRaises(ObjectiveNotFoundError):
            complete_objective(1, 999, self.db_path)

    def test_format_objectives(self):
        log_food(1, "Apple", 95, logged_on=DAY, db_path=self.db_path)
        text = format_objectives(get_daily_objectives(1, DAY, self.db_path))
        self.assertIn("[x]", text)
        self.assertIn("[ ]", text)
        self.assertEqual(format_objectives([]), "No objectives for this day.")


if __name__ == "__main__":
    unittest.main()

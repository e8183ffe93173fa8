"""Daily objectives.

Every day each user gets one instance of every catalog objective, created
as ``not_done``. Two of them complete themselves when the matching tracking
record exists for the same day:

- ``log_food``: a food was logged
- ``complete_workout``: a workout session was logged

Status only moves from ``not_done`` to ``done``.
"""

import logging
from datetime import date
from typing import Optional

from healthcore.config import (
    OBJECTIVE_COMPLETE_WORKOUT,
    OBJECTIVE_LOG_FOOD,
    OBJECTIVES,
    STATUS_DONE,
    STATUS_NOT_DONE,
)
from healthcore.db import DB_PATH, get_connection
from healthcore.models import Objective, UserObjective
from healthcore.tracker import has_food_entry, has_workout

logger = logging.getLogger(__name__)

# objective kind -> tracking record check
COMPLETION_CHECKS = {
    OBJECTIVE_LOG_FOOD: has_food_entry,
    OBJECTIVE_COMPLETE_WORKOUT: has_workout,
}


class ObjectiveNotFoundError(LookupError):
    """The objective does not exist or belongs to another user."""


def seed_objectives(db_path: str = DB_PATH) -> int:
    """Insert the objective catalog. Returns the number added."""
    added = 0
    with get_connection(db_path) as conn:
        for kind, title in OBJECTIVES.items():
            cursor = conn.execute(
                "INSERT OR IGNORE INTO objectives (kind, title) VALUES (?, ?)",
                (kind, title),
            )
            added += cursor.rowcount
    if added:
        logger.info("Seeded %d objectives", added)
    return added


def get_all_objectives(db_path: str = DB_PATH) -> list:
    with get_connection(db_path) as conn:
        rows = conn.execute("SELECT * FROM objectives ORDER BY id").fetchall()
        return [Objective(id=row["id"], kind=row["kind"], title=row["title"]) for row in rows]


def _row_to_user_objective(row) -> UserObjective:
    return UserObjective(
        id=row["id"],
        user_id=row["user_id"],
        objective_id=row["objective_id"],
        day=date.fromisoformat(row["day"]),
        status=row["status"],
        objective=Objective(id=row["objective_id"], kind=row["kind"], title=row["title"]),
    )


def _load_user_objectives(conn, user_id: int, day: date) -> list:
    rows = conn.execute(
        """SELECT uo.*, o.kind, o.title FROM user_objectives uo
           JOIN objectives o ON o.id = uo.objective_id
           WHERE uo.user_id = ? AND uo.day = ?
           ORDER BY o.id""",
        (user_id, day.isoformat()),
    ).fetchall()
    return [_row_to_user_objective(row) for row in rows]


def get_daily_objectives(user_id: int, day: Optional[date] = None, db_path: str = DB_PATH) -> list:
    """Return the user's objectives for a day, creating missing ones.

    Objectives already satisfied by a tracking record are marked done before
    returning.
    """
    if day is None:
        day = date.today()

    with get_connection(db_path) as conn:
        conn.execute(
            """INSERT OR IGNORE INTO user_objectives (user_id, objective_id, day, status)
               SELECT ?, id, ?, ? FROM objectives""",
            (user_id, day.isoformat(), STATUS_NOT_DONE),
        )
        objectives = _load_user_objectives(conn, user_id, day)

    return check_objectives_completion(user_id, objectives, day, db_path)


def _mark_done(user_objective_id: int, db_path: str) -> None:
    with get_connection(db_path) as conn:
        conn.execute(
            "UPDATE user_objectives SET status = ? WHERE id = ?",
            (STATUS_DONE, user_objective_id),
        )


def check_objectives_completion(
    user_id: int, objectives: list, day: Optional[date] = None, db_path: str = DB_PATH
) -> list:
    """Complete the objectives backed by a tracking record for the day.

    Updates both the database and the given ``UserObjective`` instances.
    Objectives that are already done are left alone.
    """
    if day is None:
        day = date.today()

    for user_objective in objectives:
        check = COMPLETION_CHECKS.get(user_objective.kind)
        if check is None or user_objective.completed:
            continue
        if check(user_id, day, db_path):
            _mark_done(user_objective.id, db_path)
            user_objective.status = STATUS_DONE
            logger.info("Objective %r completed for user %s on %s",
                        user_objective.kind, user_id, day)

    return objectives


def complete_objective(user_id: int, user_objective_id: int, db_path: str = DB_PATH) -> UserObjective:
    """Manually mark one of the user's objectives as done."""
    with get_connection(db_path) as conn:
        row = conn.execute(
            """SELECT uo.*, o.kind, o.title FROM user_objectives uo
               JOIN objectives o ON o.id = uo.objective_id
               WHERE uo.id = ? AND uo.user_id = ?""",
            (user_objective_id, user_id),
        ).fetchone()
        if row is not None:
            conn.execute(
                "UPDATE user_objectives SET status = ? WHERE id = ?",
                (STATUS_DONE, user_objective_id),
            )

    if row is None:
        raise ObjectiveNotFoundError(f"Objective {user_objective_id} not found")
    user_objective = _row_to_user_objective(row)
    user_objective.status = STATUS_DONE
    return user_objective


def format_objectives(objectives: list) -> str:
    if not objectives:
        return "No objectives for this day."
    lines = []
    for uo in objectives:
        mark = "x" if uo.completed else " "
        lines.append(f"  [{mark}] #{uo.id} {uo.title}")
    return "\n".join(lines)

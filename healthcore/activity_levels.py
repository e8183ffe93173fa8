"""Activity level reference data and factor lookup."""

import logging
from typing import Optional

from healthcore.config import ACTIVITY_LEVELS, DEFAULT_ACTIVITY_FACTOR
from healthcore.db import DB_PATH, get_connection
from healthcore.models import ActivityLevel

logger = logging.getLogger(__name__)


def seed_activity_levels(db_path: str = DB_PATH) -> int:
    """Insert the reference activity levels. Returns the number added."""
    added = 0
    with get_connection(db_path) as conn:
        for level_id, (name, description, factor) in ACTIVITY_LEVELS.items():
            cursor = conn.execute(
                """INSERT OR IGNORE INTO activity_levels (id, name, description, factor)
                   VALUES (?, ?, ?, ?)""",
                (level_id, name, description, factor),
            )
            added += cursor.rowcount
    if added:
        logger.info("Seeded %d activity levels", added)
    return added


def _row_to_level(row) -> ActivityLevel:
    return ActivityLevel(
        id=row["id"],
        name=row["name"],
        description=row["description"],
        factor=row["factor"],
    )


def list_activity_levels(db_path: str = DB_PATH) -> list:
    """All activity levels ordered by factor."""
    with get_connection(db_path) as conn:
        rows = conn.execute("SELECT * FROM activity_levels ORDER BY factor").fetchall()
        return [_row_to_level(row) for row in rows]


def get_activity_level(level_id: int, db_path: str = DB_PATH) -> Optional[ActivityLevel]:
    with get_connection(db_path) as conn:
        row = conn.execute("SELECT * FROM activity_levels WHERE id = ?", (level_id,)).fetchone()
        return _row_to_level(row) if row else None


def get_activity_factor(level_id: Optional[int], db_path: str = DB_PATH) -> float:
    """Resolve the activity factor for a level id.

    Falls back to ``DEFAULT_ACTIVITY_FACTOR`` when no id is given or the id is
    not in the reference table.
    """
    if level_id is None:
        return DEFAULT_ACTIVITY_FACTOR

    level = get_activity_level(level_id, db_path)
    if level is None:
        logger.debug("Unknown activity level %s, using default factor %s",
                     level_id, DEFAULT_ACTIVITY_FACTOR)
        return DEFAULT_ACTIVITY_FACTOR
    return float(level.factor)

"""Food and workout tracking.

Stores what a user ate and which sessions they completed, one calendar day
at a time. The daily objectives check these records, and the nutrition
summary and history compare them with the user's calorie and macro goals.
"""

import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import Optional

from healthcore.calculator import calculate_macro_distribution_for_split
from healthcore.config import DEFAULT_MACRO_SPLIT, HISTORY_DEFAULT_DAYS
from healthcore.db import DB_PATH, get_connection
from healthcore.models import (
    DailyIntake,
    FoodEntry,
    MacroSplit,
    NutrientProgress,
    NutritionHistory,
    NutritionSummary,
    WorkoutEntry,
)

logger = logging.getLogger(__name__)


def log_food(
    user_id: int,
    name: str,
    calories: float,
    protein_g: float = 0.0,
    carbs_g: float = 0.0,
    fat_g: float = 0.0,
    logged_on: Optional[date] = None,
    db_path: str = DB_PATH,
) -> int:
    """Log a consumed food. Returns the entry ID."""
    if logged_on is None:
        logged_on = date.today()

    with get_connection(db_path) as conn:
        cursor = conn.execute(
            """INSERT INTO food_log (user_id, name, calories, protein_g, carbs_g, fat_g, logged_on)
               VALUES (?, ?, ?, ?, ?, ?, ?)""",
            (user_id, name, calories, protein_g, carbs_g, fat_g, logged_on.isoformat()),
        )
        logger.debug("User %s logged food %r on %s", user_id, name, logged_on)
        return cursor.lastrowid


def log_workout(
    user_id: int,
    session_name: str,
    duration_minutes: int = 0,
    logged_on: Optional[date] = None,
    db_path: str = DB_PATH,
) -> int:
    """Log a completed workout session. Returns the entry ID."""
    if logged_on is None:
        logged_on = date.today()

    with get_connection(db_path) as conn:
        cursor = conn.execute(
            """INSERT INTO workout_log (user_id, session_name, duration_minutes, logged_on)
               VALUES (?, ?, ?, ?)""",
            (user_id, session_name, duration_minutes, logged_on.isoformat()),
        )
        logger.debug("User %s logged workout %r on %s", user_id, session_name, logged_on)
        return cursor.lastrowid


def has_food_entry(user_id: int, day: date, db_path: str = DB_PATH) -> bool:
    with get_connection(db_path) as conn:
        row = conn.execute(
            "SELECT 1 FROM food_log WHERE user_id = ? AND logged_on = ? LIMIT 1",
            (user_id, day.isoformat()),
        ).fetchone()
        return row is not None


def has_workout(user_id: int, day: date, db_path: str = DB_PATH) -> bool:
    with get_connection(db_path) as conn:
        row = conn.execute(
            "SELECT 1 FROM workout_log WHERE user_id = ? AND logged_on = ? LIMIT 1",
            (user_id, day.isoformat()),
        ).fetchone()
        return row is not None


def _row_to_food_entry(row) -> FoodEntry:
    return FoodEntry(
        id=row["id"],
        user_id=row["user_id"],
        name=row["name"],
        calories=row["calories"],
        protein_g=row["protein_g"],
        carbs_g=row["carbs_g"],
        fat_g=row["fat_g"],
        logged_on=date.fromisoformat(row["logged_on"]),
    )


def get_food_entries(user_id: int, day: date, db_path: str = DB_PATH) -> list:
    """All foods logged by a user on a day, in insertion order."""
    with get_connection(db_path) as conn:
        rows = conn.execute(
            """SELECT * FROM food_log
               WHERE user_id = ? AND logged_on = ?
               ORDER BY id""",
            (user_id, day.isoformat()),
        ).fetchall()
        return [_row_to_food_entry(row) for row in rows]


def get_workouts(user_id: int, day: date, db_path: str = DB_PATH) -> list:
    with get_connection(db_path) as conn:
        rows = conn.execute(
            """SELECT * FROM workout_log
               WHERE user_id = ? AND logged_on = ?
               ORDER BY id""",
            (user_id, day.isoformat()),
        ).fetchall()

        return [
            WorkoutEntry(
                id=row["id"],
                user_id=row["user_id"],
                session_name=row["session_name"],
                duration_minutes=row["duration_minutes"],
                logged_on=date.fromisoformat(row["logged_on"]),
            )
            for row in rows
        ]


def get_food_entries_between(user_id: int, start: date, end: date, db_path: str = DB_PATH) -> list:
    """Foods logged by a user between two days, inclusive."""
    with get_connection(db_path) as conn:
        rows = conn.execute(
            """SELECT * FROM food_log
               WHERE user_id = ? AND logged_on BETWEEN ? AND ?
               ORDER BY logged_on, id""",
            (user_id, start.isoformat(), end.isoformat()),
        ).fetchall()
        return [_row_to_food_entry(row) for row in rows]


def _aggregate_intake(day: date, entries: list) -> DailyIntake:
    return DailyIntake(
        day=day,
        num_entries=len(entries),
        calories=sum(e.calories for e in entries),
        protein_g=sum(e.protein_g for e in entries),
        carbs_g=sum(e.carbs_g for e in entries),
        fat_g=sum(e.fat_g for e in entries),
        entries=entries,
    )


def daily_intake(user_id: int, day: date, db_path: str = DB_PATH) -> DailyIntake:
    """Sum the nutrition logged on a single day."""
    return _aggregate_intake(day, get_food_entries(user_id, day, db_path))


def nutrition_summary(
    user_id: int,
    day: date,
    daily_calories: float,
    split: Optional[MacroSplit] = None,
    db_path: str = DB_PATH,
) -> NutritionSummary:
    """Compare a day's intake with the calorie goal and its macro goals.

    Macro goals come from the calorie goal and the split (50/30/20 by
    default), using the same grams-per-percentage conversion as the
    calculator.
    """
    if split is None:
        split = MacroSplit(
            carbs_pct=DEFAULT_MACRO_SPLIT["carbs"],
            protein_pct=DEFAULT_MACRO_SPLIT["protein"],
            fat_pct=DEFAULT_MACRO_SPLIT["fat"],
        )
    goals = calculate_macro_distribution_for_split(daily_calories, split)
    intake = daily_intake(user_id, day, db_path)

    return NutritionSummary(
        day=day,
        calories=NutrientProgress(goal=daily_calories, consumed=intake.calories, unit="kcal"),
        carbs=NutrientProgress(goal=goals.carbs_g, consumed=intake.carbs_g),
        protein=NutrientProgress(goal=goals.protein_g, consumed=intake.protein_g),
        fat=NutrientProgress(goal=goals.fat_g, consumed=intake.fat_g),
    )


def nutrition_history(
    user_id: int,
    start: Optional[date] = None,
    end: Optional[date] = None,
    calorie_goal: Optional[float] = None,
    db_path: str = DB_PATH,
) -> NutritionHistory:
    """Per-day intake over a date range, the last 7 days by default.

    Only days with at least one logged food are included.
    """
    if end is None:
        end = date.today()
    if start is None:
        start = end - timedelta(days=HISTORY_DEFAULT_DAYS - 1)

    by_day = defaultdict(list)
    for entry in get_food_entries_between(user_id, start, end, db_path):
        by_day[entry.logged_on].append(entry)

    days = [_aggregate_intake(day, by_day[day]) for day in sorted(by_day, reverse=True)]
    logger.debug("History for user %s from %s to %s: %d day(s)", user_id, start, end, len(days))
    return NutritionHistory(start=start, end=end, days=days, calorie_goal=calorie_goal)


def format_intake(intake: DailyIntake) -> str:
    """Format a day's intake for display."""
    lines = [
        f"Intake for {intake.day.isoformat()}",
        "=" * 30,
        f"Foods logged: {intake.num_entries}",
    ]
    if intake.num_entries == 0:
        lines.append("\nNothing logged for this day.")
        return "\n".join(lines)

    for entry in intake.entries:
        lines.append(f"  - {entry.name}: {entry.calories:.0f} kcal")
    lines.append(f"\nCalories: {intake.calories:.0f} kcal")
    lines.append(f"Protein:  {intake.protein_g:.0f}g")
    lines.append(f"Carbs:    {intake.carbs_g:.0f}g")
    lines.append(f"Fat:      {intake.fat_g:.0f}g")
    return "\n".join(lines)


def format_nutrition_summary(summary: NutritionSummary) -> str:
    lines = [f"Goals for {summary.day.isoformat()}", "=" * 30]
    for label, progress in (
        ("Calories", summary.calories),
        ("Carbs", summary.carbs),
        ("Protein", summary.protein),
        ("Fat", summary.fat),
    ):
        lines.append(
            f"{label + ':':<10}{progress.consumed:.0f}/{progress.goal:.0f} {progress.unit}"
            f"  ({progress.percent_completed:.0f}%, {progress.remaining:.0f} {progress.unit} left)"
        )
    return "\n".join(lines)


def format_history(history: NutritionHistory) -> str:
    lines = [
        f"History {history.start.isoformat()} to {history.end.isoformat()}",
        "=" * 30,
    ]
    if not history.days:
        lines.append("Nothing logged in this period.")
        return "\n".join(lines)

    for intake in history.days:
        mark = " *" if history.goal_met(intake) else ""
        lines.append(
            f"{intake.day.isoformat()}  {intake.calories:>6.0f} kcal  "
            f"P {intake.protein_g:.1f}g  C {intake.carbs_g:.1f}g  F {intake.fat_g:.1f}g{mark}"
        )
    lines.append(f"\nDays logged: {history.total_days}")
    if history.calorie_goal:
        lines.append(f"Calorie goal reached (*): {history.days_completed}/{history.total_days}")
    return "\n".join(lines)

"""Command-line interface for the fitness and nutrition tracker."""

import argparse
import logging
import sys
from datetime import date

from healthcore.activity_levels import (
    get_activity_factor,
    get_activity_level,
    list_activity_levels,
    seed_activity_levels,
)
from healthcore.assessment import assess_target_weight, daily_calorie_goal
from healthcore.calculator import (
    calculate_bmi,
    calculate_bmr,
    calculate_macro_distribution,
    calculate_tdee,
    format_bmi,
    format_estimation,
    format_macros,
)
from healthcore.config import DEFAULT_MACRO_SPLIT, SEXES
from healthcore.db import DB_PATH, get_connection, init_db
from healthcore.models import MacroSplit, UserProfile
from healthcore.objectives import (
    ObjectiveNotFoundError,
    complete_objective,
    format_objectives,
    get_daily_objectives,
    seed_objectives,
)
from healthcore.tracker import (
    daily_intake,
    format_history,
    format_intake,
    format_nutrition_summary,
    log_food,
    log_workout,
    nutrition_history,
    nutrition_summary,
)
from healthcore.validation import ValidationError, validate_physical_data, validate_target_weight_input

logger = logging.getLogger(__name__)


# --- User profile helpers ---

def _save_user(profile: UserProfile, db_path: str = DB_PATH) -> int:
    with get_connection(db_path) as conn:
        cursor = conn.execute(
            """INSERT INTO users (name, birth_date, weight_kg, height_cm, sex,
               activity_level_id, target_weight_kg)
               VALUES (?, ?, ?, ?, ?, ?, ?)""",
            (profile.name, profile.birth_date.isoformat(), profile.weight_kg,
             profile.height_cm, profile.sex, profile.activity_level_id,
             profile.target_weight_kg),
        )
        return cursor.lastrowid


def _update_user(profile: UserProfile, db_path: str = DB_PATH) -> None:
    with get_connection(db_path) as conn:
        conn.execute(
            """UPDATE users SET name=?, birth_date=?, weight_kg=?, height_cm=?, sex=?,
               activity_level_id=?, target_weight_kg=?, updated_at=CURRENT_TIMESTAMP
               WHERE id=?""",
            (profile.name, profile.birth_date.isoformat(), profile.weight_kg,
             profile.height_cm, profile.sex, profile.activity_level_id,
             profile.target_weight_kg, profile.id),
        )


def _load_user(user_id: int = 1, db_path: str = DB_PATH) -> UserProfile:
    with get_connection(db_path) as conn:
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        if not row:
            return None
        return UserProfile(
            id=row["id"], name=row["name"],
            birth_date=date.fromisoformat(row["birth_date"]),
            weight_kg=row["weight_kg"], height_cm=row["height_cm"],
            sex=row["sex"], activity_level_id=row["activity_level_id"],
            target_weight_kg=row["target_weight_kg"],
            created_at=row["created_at"], updated_at=row["updated_at"],
        )


def _get_active_user(db_path: str = DB_PATH) -> UserProfile:
    user = _load_user(db_path=db_path)
    if not user:
        print("No user profile found. Create one first:")
        print("  python -m healthcore profile create")
        sys.exit(1)
    return user


def _print_validation_error(err: ValidationError) -> None:
    print(f"{err.message}:")
    for field_name, message in err.errors.items():
        print(f"  {field_name}: {message}")


def _parse_day(value) -> date:
    return date.fromisoformat(value) if value else date.today()


def _goal_errors(activity_level_id, weight_kg, target_weight_kg, db_path: str = DB_PATH) -> dict:
    """Field errors for the activity level and target weight of a profile."""
    errors = {}
    if activity_level_id is not None and get_activity_level(activity_level_id, db_path) is None:
        errors["activity_level_id"] = f"Unknown activity level {activity_level_id} (see: activity list)"
    if target_weight_kg is not None:
        try:
            validate_target_weight_input(weight_kg, target_weight_kg)
        except ValidationError as err:
            if "target_weight_kg" in err.errors:
                errors["target_weight_kg"] = err.errors["target_weight_kg"]
    return errors


def _validate_profile(sex, birth_date, weight_kg, height_cm, activity_level_id,
                      target_weight_kg, db_path: str = DB_PATH):
    """Validate every profile field at once; print the failures and exit 1."""
    errors = {}
    physical = None
    try:
        physical = validate_physical_data(sex, birth_date, weight_kg, height_cm)
    except ValidationError as err:
        errors.update(err.errors)
    errors.update(_goal_errors(activity_level_id, weight_kg, target_weight_kg, db_path))

    if errors:
        _print_validation_error(ValidationError("Invalid profile data", errors))
        sys.exit(1)
    return physical


def _daily_calories(user: UserProfile, db_path: str = DB_PATH) -> int:
    try:
        return daily_calorie_goal(user, db_path=db_path)
    except ValidationError as err:
        _print_validation_error(err)
        print("Fix the profile with: profile update --target")
        sys.exit(1)


# --- Command handlers ---

def cmd_profile_create(args):
    physical = _validate_profile(args.sex, args.birth_date, args.weight, args.height,
                                 args.activity, args.target, args.db)

    profile = UserProfile(
        id=None,
        name=args.name,
        birth_date=date.fromisoformat(args.birth_date),
        weight_kg=physical.weight_kg,
        height_cm=physical.height_cm,
        sex=physical.sex,
        activity_level_id=args.activity,
        target_weight_kg=args.target,
    )
    user_id = _save_user(profile, args.db)
    print(f"Profile created (ID: {user_id})")


def cmd_profile_show(args):
    user = _get_active_user(args.db)
    age = user.age_on(date.today())
    bmr = calculate_bmr(user.weight_kg, user.height_cm, user.sex, age)
    factor = get_activity_factor(user.activity_level_id, args.db)

    print(f"Name:     {user.name}")
    print(f"Age:      {age}")
    print(f"Weight:   {user.weight_kg:.1f} kg")
    print(f"Height:   {user.height_cm:.0f} cm")
    print(f"Sex:      {user.sex}")
    print(f"Activity: x{factor}")
    if user.target_weight_kg is not None:
        print(f"Target:   {user.target_weight_kg:.1f} kg")
    print(f"\nBMI:      {format_bmi(calculate_bmi(user.weight_kg, user.height_cm))}")
    print(f"BMR:      {bmr:.0f} kcal")
    print(f"TDEE:     {calculate_tdee(bmr, factor):.0f} kcal")


def cmd_profile_update(args):
    user = _get_active_user(args.db)
    if args.weight is not None:
        user.weight_kg = args.weight
    if args.height is not None:
        user.height_cm = args.height
    if args.activity is not None:
        user.activity_level_id = args.activity
    if args.target is not None:
        user.target_weight_kg = args.target

    _validate_profile(user.sex, user.birth_date, user.weight_kg, user.height_cm,
                      user.activity_level_id, user.target_weight_kg, args.db)

    _update_user(user, args.db)
    print("Profile updated.")


def cmd_activity_list(args):
    print(f"{'ID':>3}  {'Level':<20}  {'Factor':>6}  Description")
    print("-" * 70)
    for level in list_activity_levels(args.db):
        print(f"{level.id:>3}  {level.name:<20}  {level.factor:>6}  {level.description}")


def cmd_bmr(args):
    user = _get_active_user(args.db)
    bmr = calculate_bmr(user.weight_kg, user.height_cm, user.sex, user.age_on(date.today()))
    factor = get_activity_factor(user.activity_level_id, args.db)
    print(f"BMR:  {bmr:.0f} kcal/day")
    print(f"TDEE: {calculate_tdee(bmr, factor):.0f} kcal/day (activity x{factor})")


def cmd_bmi(args):
    user = _get_active_user(args.db)
    print(f"BMI: {format_bmi(calculate_bmi(user.weight_kg, user.height_cm))}")


def cmd_macros(args):
    calories = args.calories
    if calories is None:
        calories = _daily_calories(_get_active_user(args.db), args.db)

    try:
        distribution = calculate_macro_distribution(
            calories, args.carbs, args.protein, args.fat, strict=args.strict
        )
    except ValueError as err:
        print(f"Invalid macro split: {err}")
        sys.exit(1)

    print(f"Daily calories: {calories:.0f} kcal")
    print(format_macros(distribution))


def cmd_target(args):
    user = _get_active_user(args.db)
    target = args.weight if args.weight is not None else user.target_weight_kg
    if target is None:
        print("No target weight. Pass --weight or set one with: profile update --target")
        sys.exit(1)

    try:
        assessment = assess_target_weight(
            user.weight_kg, target, user.height_cm, user.sex,
            user.age_on(date.today()), user.activity_level_id, db_path=args.db,
        )
    except ValidationError as err:
        _print_validation_error(err)
        sys.exit(1)

    validation = assessment.validation
    print(f"Target BMI: {format_bmi(validation.target_bmi)}")
    print(validation.message)
    print()
    print(format_estimation(assessment.estimation))


def cmd_log_food(args):
    user = _get_active_user(args.db)
    entry_id = log_food(user.id, args.name, args.calories, args.protein, args.carbs,
                        args.fat, _parse_day(args.date), args.db)
    print(f"Logged: {args.name} ({args.calories:.0f} kcal) [#{entry_id}]")


def cmd_log_workout(args):
    user = _get_active_user(args.db)
    entry_id = log_workout(user.id, args.session, args.minutes, _parse_day(args.date), args.db)
    print(f"Logged workout: {args.session} ({args.minutes} min) [#{entry_id}]")


def cmd_intake(args):
    user = _get_active_user(args.db)
    day = _parse_day(args.date)
    split = MacroSplit(carbs_pct=args.carbs, protein_pct=args.protein, fat_pct=args.fat)
    summary = nutrition_summary(user.id, day, _daily_calories(user, args.db), split, args.db)

    print(format_intake(daily_intake(user.id, day, args.db)))
    print()
    print(format_nutrition_summary(summary))


def cmd_history(args):
    user = _get_active_user(args.db)
    start = date.fromisoformat(args.start) if args.start else None
    end = date.fromisoformat(args.end) if args.end else None
    history = nutrition_history(user.id, start, end, _daily_calories(user, args.db), args.db)
    print(format_history(history))


def cmd_objectives_list(args):
    user = _get_active_user(args.db)
    day = _parse_day(args.date)
    print(f"Objectives for {day.isoformat()}:")
    print(format_objectives(get_daily_objectives(user.id, day, args.db)))


def cmd_objectives_complete(args):
    user = _get_active_user(args.db)
    try:
        objective = complete_objective(user.id, args.objective_id, args.db)
    except ObjectiveNotFoundError as err:
        print(err)
        sys.exit(1)
    print(f"Completed: {objective.title}")


# --- Argument parser ---

def _add_split_arguments(parser):
    parser.add_argument("--carbs", type=float, default=DEFAULT_MACRO_SPLIT["carbs"])
    parser.add_argument("--protein", type=float, default=DEFAULT_MACRO_SPLIT["protein"])
    parser.add_argument("--fat", type=float, default=DEFAULT_MACRO_SPLIT["fat"])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="healthcore",
        description="HealthCore - Fitness and nutrition tracking",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--db", default=DB_PATH, help=f"SQLite database (default: {DB_PATH})")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- profile ---
    profile_parser = subparsers.add_parser("profile", help="Manage user profile")
    profile_sub = profile_parser.add_subparsers(dest="subcommand")

    create_p = profile_sub.add_parser("create", help="Create a new profile")
    create_p.add_argument("--name", required=True)
    create_p.add_argument("--birth-date", required=True, help="YYYY-MM-DD")
    create_p.add_argument("--weight", type=float, required=True, help="Weight in kg")
    create_p.add_argument("--height", type=float, required=True, help="Height in cm")
    create_p.add_argument("--sex", choices=list(SEXES), required=True)
    create_p.add_argument("--activity", type=int, help="Activity level ID (see: activity list)")
    create_p.add_argument("--target", type=float, help="Target weight in kg")
    create_p.set_defaults(func=cmd_profile_create)

    show_p = profile_sub.add_parser("show", help="Show current profile")
    show_p.set_defaults(func=cmd_profile_show)

    update_p = profile_sub.add_parser("update", help="Update profile")
    update_p.add_argument("--weight", type=float, help="Weight in kg")
    update_p.add_argument("--height", type=float, help="Height in cm")
    update_p.add_argument("--activity", type=int, help="Activity level ID")
    update_p.add_argument("--target", type=float, help="Target weight in kg")
    update_p.set_defaults(func=cmd_profile_update)

    # --- activity ---
    activity_parser = subparsers.add_parser("activity", help="Activity levels")
    activity_sub = activity_parser.add_subparsers(dest="subcommand")
    list_p = activity_sub.add_parser("list", help="List activity levels")
    list_p.set_defaults(func=cmd_activity_list)

    # --- bmr / bmi / macros / target ---
    bmr_p = subparsers.add_parser("bmr", help="Show basal metabolic rate and TDEE")
    bmr_p.set_defaults(func=cmd_bmr)

    bmi_p = subparsers.add_parser("bmi", help="Show body mass index")
    bmi_p.set_defaults(func=cmd_bmi)

    macros_p = subparsers.add_parser("macros", help="Show daily macro distribution")
    macros_p.add_argument("--calories", type=float,
                          help="Daily calories (default: from profile and target)")
    _add_split_arguments(macros_p)
    macros_p.add_argument("--strict", action="store_true",
                          help="Reject splits that do not add up to 100%%")
    macros_p.set_defaults(func=cmd_macros)

    target_p = subparsers.add_parser("target", help="Validate a target weight and estimate duration")
    target_p.add_argument("--weight", type=float, help="Target weight in kg (default: profile target)")
    target_p.set_defaults(func=cmd_target)

    # --- log ---
    log_parser = subparsers.add_parser("log", help="Log food and workouts")
    log_sub = log_parser.add_subparsers(dest="subcommand")

    food_p = log_sub.add_parser("food", help="Log a food")
    food_p.add_argument("--name", required=True)
    food_p.add_argument("--calories", type=float, required=True)
    food_p.add_argument("--protein", type=float, default=0.0)
    food_p.add_argument("--carbs", type=float, default=0.0)
    food_p.add_argument("--fat", type=float, default=0.0)
    food_p.add_argument("--date", help="Date (YYYY-MM-DD), default: today")
    food_p.set_defaults(func=cmd_log_food)

    workout_p = log_sub.add_parser("workout", help="Log a workout session")
    workout_p.add_argument("--session", required=True, help="Session name")
    workout_p.add_argument("--minutes", type=int, default=0)
    workout_p.add_argument("--date", help="Date (YYYY-MM-DD), default: today")
    workout_p.set_defaults(func=cmd_log_workout)

    # --- intake / history ---
    intake_p = subparsers.add_parser("intake", help="Show a day's intake against the goals")
    intake_p.add_argument("--date", help="Date (YYYY-MM-DD), default: today")
    _add_split_arguments(intake_p)
    intake_p.set_defaults(func=cmd_intake)

    history_p = subparsers.add_parser("history", help="Show daily intake over a period")
    history_p.add_argument("--start", help="First day (YYYY-MM-DD), default: 6 days before --end")
    history_p.add_argument("--end", help="Last day (YYYY-MM-DD), default: today")
    history_p.set_defaults(func=cmd_history)

    # --- objectives ---
    obj_parser = subparsers.add_parser("objectives", help="Daily objectives")
    obj_sub = obj_parser.add_subparsers(dest="subcommand")

    obj_list = obj_sub.add_parser("list", help="Show the day's objectives")
    obj_list.add_argument("--date", help="Date (YYYY-MM-DD), default: today")
    obj_list.set_defaults(func=cmd_objectives_list)

    obj_done = obj_sub.add_parser("complete", help="Mark an objective as done")
    obj_done.add_argument("objective_id", type=int)
    obj_done.set_defaults(func=cmd_objectives_complete)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    init_db(args.db)
    seed_activity_levels(args.db)
    seed_objectives(args.db)

    if not args.command:
        parser.print_help()
        return

    if hasattr(args, "func"):
        args.func(args)
    elif args.command in ("profile", "activity", "log", "objectives"):
        # Subcommand not specified
        sub = parser._subparsers._group_actions[0].choices[args.command]
        sub.print_help()
    else:
        parser.print_help()

"""Target weight assessment: BMI validation plus weight change estimation.

Also resolves a user's daily calorie goal from their profile.
"""

from datetime import date
from typing import Optional

from healthcore.activity_levels import get_activity_factor
from healthcore.calculator import (
    calculate_bmr,
    calculate_tdee,
    calculate_weight_change_estimation,
    validate_target_weight,
)
from healthcore.db import DB_PATH
from healthcore.models import TargetWeightAssessment, UserProfile
from healthcore.validation import validate_target_weight_input


def assess_target_weight(
    current_weight_kg,
    target_weight_kg,
    height_cm: float,
    sex: str,
    age: int,
    activity_level_id: Optional[int] = None,
    db_path: str = DB_PATH,
) -> TargetWeightAssessment:
    """Validate a target weight and estimate how long reaching it takes.

    The estimation is computed even when the target BMI falls outside the
    healthy range, so the caller can show both.
    """
    current, target = validate_target_weight_input(current_weight_kg, target_weight_kg)
    activity_factor = get_activity_factor(activity_level_id, db_path)

    return TargetWeightAssessment(
        validation=validate_target_weight(target, height_cm),
        estimation=calculate_weight_change_estimation(
            current, target, height_cm, sex, age, activity_factor
        ),
        activity_factor=activity_factor,
    )


def daily_calorie_goal(user: UserProfile, day: Optional[date] = None, db_path: str = DB_PATH) -> int:
    """Daily calories for the user's current goal.

    Rounded TDEE when no target weight is set, otherwise the adjusted daily
    calories of the estimation. Raises ``ValidationError`` when the stored
    target weight is out of range.
    """
    age = user.age_on(day or date.today())
    if user.target_weight_kg is None:
        factor = get_activity_factor(user.activity_level_id, db_path)
        return round(calculate_tdee(calculate_bmr(user.weight_kg, user.height_cm, user.sex, age), factor))

    assessment = assess_target_weight(
        user.weight_kg, user.target_weight_kg, user.height_cm, user.sex, age,
        user.activity_level_id, db_path,
    )
    return assessment.estimation.daily_calories

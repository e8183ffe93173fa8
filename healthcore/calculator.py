"""Nutrition and weight-estimation engine using evidence-based formulas.

Uses:
- Mifflin-St Jeor equation for Basal Metabolic Rate (BMR)
- Activity factors for Total Daily Energy Expenditure (TDEE)
- A fixed daily caloric deficit/surplus and the energy content of body mass
  to project how long a weight change takes

All functions are pure: they take plain numbers and return plain numbers or
records from ``healthcore.models``. Preconditions (positive weight and height,
non-negative age, positive activity factor) are checked upstream by
``healthcore.validation``.

References:
- Mifflin MD, St Jeor ST, et al. (1990). "A new predictive equation for
  resting energy expenditure in healthy individuals." Am J Clin Nutr.
"""

from healthcore.config import (
    CALORIES_PER_GRAM,
    DAILY_CALORIC_ADJUSTMENT,
    HEALTHY_BMI_MAX,
    HEALTHY_BMI_MIN,
    KCAL_PER_KG,
    MACRO_SPLIT_TOLERANCE_PCT,
    MAINTAIN_TOLERANCE_KG,
    SEX_FEMALE,
    SEX_MALE,
    SEX_UNSPECIFIED,
    TARGET_WEIGHT_INVALID_MESSAGE,
    TARGET_WEIGHT_VALID_MESSAGE,
)
from healthcore.models import (
    EstimationResult,
    MacroDistribution,
    MacroSplit,
    TargetWeightValidation,
)

ORIENTATION_LOSE = "lose"
ORIENTATION_GAIN = "gain"
ORIENTATION_MAINTAIN = "maintain"


def calculate_bmr(weight_kg: float, height_cm: float, sex: str, age: int) -> float:
    """Calculate Basal Metabolic Rate using the Mifflin-St Jeor equation.

    Male:   BMR = 10 × weight(kg) + 6.25 × height(cm) − 5 × age(y) + 5
    Female: BMR = 10 × weight(kg) + 6.25 × height(cm) − 5 × age(y) − 161

    For ``unspecified`` the mean of both results is used, i.e. the base value
    shifted by (5 − 161) / 2 = −78.
    """
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    male = base + 5
    female = base - 161
    if sex == SEX_MALE:
        return male
    if sex == SEX_FEMALE:
        return female
    if sex == SEX_UNSPECIFIED:
        return (male + female) / 2
    raise ValueError(f"Unknown sex: {sex!r}")


def calculate_tdee(bmr: float, activity_factor: float) -> float:
    """Calculate Total Daily Energy Expenditure.

    TDEE = BMR × activity factor
    """
    return bmr * activity_factor


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    """Body Mass Index: weight(kg) / height(m)²."""
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def validate_target_weight(
    target_weight_kg: float,
    height_cm: float,
    bmi_min: float = HEALTHY_BMI_MIN,
    bmi_max: float = HEALTHY_BMI_MAX,
) -> TargetWeightValidation:
    """Classify the BMI implied by a target weight.

    Valid when ``bmi_min <= BMI < bmi_max``.
    """
    target_bmi = calculate_bmi(target_weight_kg, height_cm)
    is_valid = bmi_min <= target_bmi < bmi_max
    return TargetWeightValidation(
        is_valid=is_valid,
        target_bmi=target_bmi,
        message=TARGET_WEIGHT_VALID_MESSAGE if is_valid else TARGET_WEIGHT_INVALID_MESSAGE,
    )


def calculate_macro_distribution(
    daily_calories: float,
    carbs_pct: float,
    protein_pct: float,
    fat_pct: float,
    strict: bool = False,
) -> MacroDistribution:
    """Split daily calories into grams of carbs, protein and fat.

    grams = calories × pct / 100 / kcal per gram (4 / 4 / 9)

    Percentages are used as given. With ``strict=True`` a split that does not
    add up to 100 raises ``ValueError``.
    """
    split = MacroSplit(carbs_pct=carbs_pct, protein_pct=protein_pct, fat_pct=fat_pct)
    if strict and not split.is_balanced(MACRO_SPLIT_TOLERANCE_PCT):
        raise ValueError(f"Macro percentages add up to {split.total_pct}, expected 100")

    return MacroDistribution(
        carbs_g=daily_calories * carbs_pct / 100 / CALORIES_PER_GRAM["carbs"],
        protein_g=daily_calories * protein_pct / 100 / CALORIES_PER_GRAM["protein"],
        fat_g=daily_calories * fat_pct / 100 / CALORIES_PER_GRAM["fat"],
    )


def calculate_macro_distribution_for_split(
    daily_calories: float, split: MacroSplit, strict: bool = False
) -> MacroDistribution:
    return calculate_macro_distribution(
        daily_calories, split.carbs_pct, split.protein_pct, split.fat_pct, strict=strict
    )


def calculate_weight_change_estimation(
    current_weight_kg: float,
    target_weight_kg: float,
    height_cm: float,
    sex: str,
    age: int,
    activity_factor: float,
    daily_adjustment: float = DAILY_CALORIC_ADJUSTMENT,
    kcal_per_kg: float = KCAL_PER_KG,
    maintain_tolerance_kg: float = MAINTAIN_TOLERANCE_KG,
) -> EstimationResult:
    """Estimate daily calories and time needed to reach a target weight.

    Steps:
    1. BMR on the current weight, then TDEE
    2. Same weight -> maintain at TDEE, nothing to project
    3. Otherwise apply a fixed deficit (lose) or surplus (gain) to TDEE
    4. weekly change = adjustment × 7 / kcal per kg
    5. weeks = |target − current| / |weekly change|, days = weeks × 7

    Weeks and days are returned unrounded. With the default tolerance of 0 the
    maintain branch is only taken on exact equality.
    """
    bmr = calculate_bmr(current_weight_kg, height_cm, sex, age)
    tdee = calculate_tdee(bmr, activity_factor)
    weight_diff = target_weight_kg - current_weight_kg

    if abs(weight_diff) <= maintain_tolerance_kg:
        return EstimationResult(
            bmr=bmr,
            tdee=tdee,
            daily_calories=round(tdee),
            caloric_adjustment=0,
            estimated_days=0,
            estimated_weeks=0,
            weekly_change_kg=0,
            orientation=ORIENTATION_MAINTAIN,
        )

    if weight_diff < 0:
        orientation = ORIENTATION_LOSE
        adjustment = -abs(daily_adjustment)
    else:
        orientation = ORIENTATION_GAIN
        adjustment = abs(daily_adjustment)

    weekly_change_kg = adjustment * 7 / kcal_per_kg
    estimated_weeks = abs(weight_diff) / abs(weekly_change_kg)

    return EstimationResult(
        bmr=bmr,
        tdee=tdee,
        daily_calories=round(tdee + adjustment),
        caloric_adjustment=adjustment,
        estimated_days=estimated_weeks * 7,
        estimated_weeks=estimated_weeks,
        weekly_change_kg=weekly_change_kg,
        orientation=orientation,
    )


def format_bmi(bmi: float) -> str:
    """BMI rounded to one decimal with its WHO category."""
    if bmi < 18.5:
        category = "underweight"
    elif bmi < 25:
        category = "normal"
    elif bmi < 30:
        category = "overweight"
    else:
        category = "obese"
    return f"{bmi:.1f} ({category})"


def format_macros(distribution: MacroDistribution) -> str:
    """Format a macro distribution for display."""
    lines = [
        f"Carbs:    {distribution.carbs_g:.0f}g ({distribution.carbs_calories:.0f} kcal)",
        f"Protein:  {distribution.protein_g:.0f}g ({distribution.protein_calories:.0f} kcal)",
        f"Fat:      {distribution.fat_g:.0f}g ({distribution.fat_calories:.0f} kcal)",
    ]
    return "\n".join(lines)


def format_estimation(result: EstimationResult) -> str:
    """Format a weight change estimation for display."""
    lines = [
        f"BMR:      {result.bmr:.0f} kcal",
        f"TDEE:     {result.tdee:.0f} kcal",
        f"Target:   {result.daily_calories} kcal/day ({result.caloric_adjustment:+.0f})",
        f"Goal:     {result.orientation}",
    ]
    if result.orientation != ORIENTATION_MAINTAIN:
        lines.append(f"Pace:     {result.weekly_change_kg:+.2f} kg/week")
        lines.append(
            f"Duration: {result.estimated_weeks:.1f} weeks ({result.estimated_days:.0f} days)"
        )
    return "\n".join(lines)

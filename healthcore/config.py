"""Application configuration and nutritional policy constants."""

import os

# Database
DB_DIR = os.path.join(os.path.expanduser("~"), ".healthcore")
DB_PATH = os.environ.get("HEALTHCORE_DB_PATH", os.path.join(DB_DIR, "healthcore.db"))

# Accepted values for the sex field
SEX_MALE = "male"
SEX_FEMALE = "female"
SEX_UNSPECIFIED = "unspecified"
SEXES = (SEX_MALE, SEX_FEMALE, SEX_UNSPECIFIED)

# Physical input bounds (exclusive), checked by the validation layer
MAX_WEIGHT_KG = 500
MAX_HEIGHT_CM = 300
MIN_AGE_YEARS = 13

# Activity level reference table: id -> (name, description, factor)
ACTIVITY_LEVELS = {
    1: ("sedentary", "Little or no exercise", 1.2),
    2: ("lightly_active", "Light exercise 1-3 days/week", 1.375),
    3: ("moderately_active", "Moderate exercise 3-5 days/week", 1.55),
    4: ("very_active", "Hard exercise 6-7 days/week", 1.725),
    5: ("extra_active", "Very hard exercise & physical job", 1.9),
}

# Used when no activity level can be resolved
DEFAULT_ACTIVITY_FACTOR = 1.2

# Weight change policy
DAILY_CALORIC_ADJUSTMENT = 500  # kcal/day deficit (lose) or surplus (gain)
KCAL_PER_KG = 7700  # energy content of 1 kg of body mass
MAINTAIN_TOLERANCE_KG = 0.0  # target within this distance of current = maintain

# Healthy BMI range for target weights: [min, max)
HEALTHY_BMI_MIN = 18.5
HEALTHY_BMI_MAX = 25.0

TARGET_WEIGHT_VALID_MESSAGE = "Target weight is valid"
TARGET_WEIGHT_INVALID_MESSAGE = "Target weight would result in a non-recommended BMI"

# Macro calorie multipliers (calories per gram)
CALORIES_PER_GRAM = {
    "protein": 4,
    "carbs": 4,
    "fat": 9,
}

# Default split (carbs%, protein%, fat%) when the user has not chosen one
DEFAULT_MACRO_SPLIT = {"carbs": 50, "protein": 30, "fat": 20}

# Allowed drift from 100% when a split is checked strictly
MACRO_SPLIT_TOLERANCE_PCT = 0.5

# Nutrition history window when no start date is given
HISTORY_DEFAULT_DAYS = 7

# Daily objectives catalog: kind -> title
OBJECTIVE_LOG_FOOD = "log_food"
OBJECTIVE_COMPLETE_WORKOUT = "complete_workout"
OBJECTIVES = {
    OBJECTIVE_LOG_FOOD: "Add a food to today's log",
    OBJECTIVE_COMPLETE_WORKOUT: "Complete today's workout session",
}

STATUS_NOT_DONE = "not_done"
STATUS_DONE = "done"

"""Data models for the fitness and nutrition tracker."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from healthcore.config import CALORIES_PER_GRAM, MACRO_SPLIT_TOLERANCE_PCT, STATUS_DONE


def completed_years(birth_date: date, day: date) -> int:
    """Completed years of age on the given day."""
    years = day.year - birth_date.year
    if (day.month, day.day) < (birth_date.month, birth_date.day):
        years -= 1
    return years


@dataclass
class PhysicalProfile:
    """Body measurements used by the calculation engine."""
    weight_kg: float
    height_cm: float
    sex: str  # "male", "female" or "unspecified"
    age: int


@dataclass
class MacroSplit:
    """Percentage allocation of daily calories across macronutrients."""
    carbs_pct: float
    protein_pct: float
    fat_pct: float

    @property
    def total_pct(self) -> float:
        return self.carbs_pct + self.protein_pct + self.fat_pct

    def is_balanced(self, tolerance: float = MACRO_SPLIT_TOLERANCE_PCT) -> bool:
        """True when the three percentages add up to 100."""
        return abs(self.total_pct - 100) <= tolerance


@dataclass
class MacroDistribution:
    """Daily grams of each macronutrient."""
    carbs_g: float
    protein_g: float
    fat_g: float

    @property
    def carbs_calories(self) -> float:
        return self.carbs_g * CALORIES_PER_GRAM["carbs"]

    @property
    def protein_calories(self) -> float:
        return self.protein_g * CALORIES_PER_GRAM["protein"]

    @property
    def fat_calories(self) -> float:
        return self.fat_g * CALORIES_PER_GRAM["fat"]

    @property
    def total_calories(self) -> float:
        return self.carbs_calories + self.protein_calories + self.fat_calories


@dataclass
class TargetWeightValidation:
    """BMI classification of a target weight."""
    is_valid: bool
    target_bmi: float
    message: str


@dataclass
class EstimationResult:
    """Projected calories and duration to reach a target weight."""
    bmr: float
    tdee: float
    daily_calories: int
    caloric_adjustment: float
    estimated_days: float
    estimated_weeks: float
    weekly_change_kg: float
    orientation: str  # "lose", "gain" or "maintain"


@dataclass
class TargetWeightAssessment:
    """Validation and estimation for a target weight request."""
    validation: TargetWeightValidation
    estimation: EstimationResult
    activity_factor: float


@dataclass
class ActivityLevel:
    """A row of the activity level reference table."""
    id: int
    name: str
    description: str
    factor: float


@dataclass
class UserProfile:
    """Stored user profile with physical attributes and goal."""
    id: Optional[int]
    name: str
    birth_date: date
    weight_kg: float
    height_cm: float
    sex: str
    activity_level_id: Optional[int] = None
    target_weight_kg: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def age_on(self, day: date) -> int:
        return completed_years(self.birth_date, day)

    def physical_profile(self, day: Optional[date] = None) -> PhysicalProfile:
        return PhysicalProfile(
            weight_kg=self.weight_kg,
            height_cm=self.height_cm,
            sex=self.sex,
            age=self.age_on(day or date.today()),
        )


@dataclass
class Objective:
    """A daily objective from the catalog."""
    id: int
    kind: str  # "log_food" or "complete_workout"
    title: str


@dataclass
class UserObjective:
    """A user's instance of an objective for one calendar day."""
    id: int
    user_id: int
    objective_id: int
    day: date
    status: str
    objective: Optional[Objective] = None  # Populated on load

    @property
    def completed(self) -> bool:
        return self.status == STATUS_DONE

    @property
    def kind(self) -> Optional[str]:
        return self.objective.kind if self.objective else None

    @property
    def title(self) -> str:
        return self.objective.title if self.objective else ""


@dataclass
class FoodEntry:
    """A food logged in the daily nutrition tracking."""
    id: Optional[int]
    user_id: int
    name: str
    calories: float
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    logged_on: Optional[date] = None


@dataclass
class WorkoutEntry:
    """A completed workout session in the activity tracking."""
    id: Optional[int]
    user_id: int
    session_name: str
    duration_minutes: int = 0
    logged_on: Optional[date] = None


@dataclass
class DailyIntake:
    """Summed nutrition logged on one day."""
    day: date
    num_entries: int
    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    entries: list = field(default_factory=list)  # List[FoodEntry]

    @property
    def macros(self) -> MacroDistribution:
        return MacroDistribution(carbs_g=self.carbs_g, protein_g=self.protein_g, fat_g=self.fat_g)


@dataclass
class NutrientProgress:
    """Consumed amount of one nutrient against its daily goal."""
    goal: float
    consumed: float
    unit: str = "g"

    @property
    def remaining(self) -> float:
        return max(0.0, self.goal - self.consumed)

    @property
    def percent_completed(self) -> float:
        """Share of the goal reached, capped at 100. Zero when there is no goal."""
        if self.goal <= 0:
            return 0.0
        return min(100.0, self.consumed / self.goal * 100)


@dataclass
class NutritionSummary:
    """A day's intake compared with the calorie and macro goals."""
    day: date
    calories: NutrientProgress
    carbs: NutrientProgress
    protein: NutrientProgress
    fat: NutrientProgress


@dataclass
class NutritionHistory:
    """Daily intake over a date range, most recent day first."""
    start: date
    end: date
    days: list = field(default_factory=list)  # List[DailyIntake], days with entries only
    calorie_goal: Optional[float] = None

    @property
    def total_days(self) -> int:
        return len(self.days)

    def goal_met(self, intake: DailyIntake) -> bool:
        if not self.calorie_goal:
            return False
        return intake.calories >= self.calorie_goal

    @property
    def days_completed(self) -> int:
        return sum(1 for intake in self.days if self.goal_met(intake))

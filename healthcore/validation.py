"""Input validation for physical data and target weights.

Runs before the calculation engine. Every failing field is reported at once
through a single ``ValidationError`` carrying a field -> message map.
"""

from datetime import date
from typing import Optional

from healthcore.config import MAX_HEIGHT_CM, MAX_WEIGHT_KG, MIN_AGE_YEARS, SEXES
from healthcore.models import PhysicalProfile, completed_years


class ValidationError(Exception):
    """Aggregated validation failure."""

    def __init__(self, message: str, errors: dict):
        super().__init__(message)
        self.message = message
        self.errors = errors

    def __str__(self):
        details = "; ".join(f"{k}: {v}" for k, v in self.errors.items())
        return f"{self.message} ({details})" if details else self.message


def _is_missing(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _to_float(value) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def parse_birth_date(value) -> Optional[date]:
    """Accept a date or an ISO ``YYYY-MM-DD`` string."""
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        return None


def calculate_age(birth_date: date, today: Optional[date] = None) -> int:
    """Completed years between birth date and today."""
    return completed_years(birth_date, today or date.today())


def _check_measure(errors: dict, field_name: str, value, upper: float, unit: str):
    if _is_missing(value):
        errors[field_name] = f"{field_name.replace('_', ' ').capitalize()} is required"
        return None
    number = _to_float(value)
    if number is None:
        errors[field_name] = f"{field_name.replace('_', ' ').capitalize()} must be a number"
        return None
    if not 0 < number < upper:
        errors[field_name] = f"Must be between 0 and {upper} {unit} (exclusive)"
        return None
    return number


def validate_physical_data(sex, birth_date, weight_kg, height_cm, today: Optional[date] = None) -> PhysicalProfile:
    """Validate raw physical input and build a ``PhysicalProfile``.

    Raises ``ValidationError`` listing missing, malformed and out-of-range
    fields.
    """
    errors = {}

    if _is_missing(sex):
        errors["sex"] = "Sex is required"
    elif sex not in SEXES:
        errors["sex"] = f"Sex must be one of: {', '.join(SEXES)}"

    age = None
    if _is_missing(birth_date):
        errors["birth_date"] = "Birth date is required"
    else:
        parsed = parse_birth_date(birth_date)
        if parsed is None:
            errors["birth_date"] = "Birth date must be formatted YYYY-MM-DD"
        else:
            age = calculate_age(parsed, today)
            if age < MIN_AGE_YEARS:
                errors["birth_date"] = f"You must be at least {MIN_AGE_YEARS} years old"

    weight = _check_measure(errors, "weight_kg", weight_kg, MAX_WEIGHT_KG, "kg")
    height = _check_measure(errors, "height_cm", height_cm, MAX_HEIGHT_CM, "cm")

    if errors:
        raise ValidationError("Invalid physical data", errors)

    return PhysicalProfile(weight_kg=weight, height_cm=height, sex=sex, age=age)


def validate_target_weight_input(current_weight_kg, target_weight_kg) -> tuple:
    """Check both weights are present, numeric and in range.

    Returns ``(current, target)`` as floats.
    """
    errors = {}
    current = _check_measure(errors, "current_weight_kg", current_weight_kg, MAX_WEIGHT_KG, "kg")
    target = _check_measure(errors, "target_weight_kg", target_weight_kg, MAX_WEIGHT_KG, "kg")
    if errors:
        raise ValidationError("Incomplete data for target weight validation", errors)
    return current, target

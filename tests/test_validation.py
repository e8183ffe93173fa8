"""Tests for the input validation layer."""

import unittest
from datetime import date

from healthcore.models import UserProfile
from healthcore.validation import (
    ValidationError,
    calculate_age,
    parse_birth_date,
    validate_physical_data,
    validate_target_weight_input,
)

TODAY = date(2026, 2, 5)


class TestCalculateAge(unittest.TestCase):
    def test_birthday_passed(self):
        self.assertEqual(calculate_age(date(1990, 1, 10), TODAY), 36)

    def test_birthday_not_yet(self):
        self.assertEqual(calculate_age(date(1990, 2, 6), TODAY), 35)

    def test_birthday_today(self):
        self.assertEqual(calculate_age(date(2000, 2, 5), TODAY), 26)

    def test_leap_day_birthday(self):
        self.assertEqual(calculate_age(date(2008, 2, 29), date(2026, 2, 28)), 17)
        self.assertEqual(calculate_age(date(2008, 2, 29), date(2026, 3, 1)), 18)

    def test_matches_profile_age(self):
        profile = UserProfile(
            id=None, name="Sam", birth_date=date(1990, 6, 15), weight_kg=80,
            height_cm=180, sex="male",
        )
        for day in (date(2026, 6, 14), date(2026, 6, 15), date(2026, 12, 31)):
            self.assertEqual(calculate_age(profile.birth_date, day), profile.age_on(day))


class TestParseBirthDate(unittest.TestCase):
    def test_iso_string(self):
        self.assertEqual(parse_birth_date("1990-04-02"), date(1990, 4, 2))

    def test_date_passthrough(self):
        self.assertEqual(parse_birth_date(date(1990, 4, 2)), date(1990, 4, 2))

    def test_invalid(self):
        self.assertIsNone(parse_birth_date("02/04/1990"))


class TestValidatePhysicalData(unittest.TestCase):
    def test_valid(self):
        profile = validate_physical_data("female", "1996-03-01", "62.5", 168, today=TODAY)
        self.assertEqual(profile.sex, "female")
        self.assertEqual(profile.age, 29)
        self.assertEqual(profile.weight_kg, 62.5)
        self.assertEqual(profile.height_cm, 168)

    def test_missing_fields_reported_together(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_physical_data(None, "", None, "  ", today=TODAY)
        errors = ctx.exception.errors
        self.assertEqual(set(errors), {"sex", "birth_date", "weight_kg", "height_cm"})
        self.assertIn("required", errors["weight_kg"])

    def test_format_errors(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_physical_data("H", "not a date", "heavy", "tall", today=TODAY)
        errors = ctx.exception.errors
        self.assertIn("one of", errors["sex"])
        self.assertIn("YYYY-MM-DD", errors["birth_date"])
        self.assertIn("number", errors["weight_kg"])
        self.assertIn("number", errors["height_cm"])

    def test_out_of_range_each_field(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_physical_data("male", "2015-01-01", 500, 300, today=TODAY)
        errors = ctx.exception.errors
        self.assertIn("13", errors["birth_date"])
        self.assertIn("weight_kg", errors)
        self.assertIn("height_cm", errors)
        self.assertNotIn("sex", errors)

    def test_zero_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_physical_data("male", "1990-01-01", 0, 0, today=TODAY)
        self.assertEqual(set(ctx.exception.errors), {"weight_kg", "height_cm"})

    def test_bounds_just_inside(self):
        profile = validate_physical_data("unspecified", "2013-02-05", 499.9, 299.9, today=TODAY)
        self.assertEqual(profile.age, 13)

    def test_error_message(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_physical_data("male", "1990-01-01", -3, 180, today=TODAY)
        self.assertIn("Invalid physical data", str(ctx.exception))
        self.assertIn("weight_kg", str(ctx.exception))


class TestValidateTargetWeightInput(unittest.TestCase):
    def test_valid(self):
        self.assertEqual(validate_target_weight_input("80", 75), (80.0, 75.0))

    def test_missing(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_target_weight_input(80, None)
        self.assertEqual(set(ctx.exception.errors), {"target_weight_kg"})

    def test_negative(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_target_weight_input(-1, 0)
        self.assertEqual(set(ctx.exception.errors), {"current_weight_kg", "target_weight_kg"})


if __name__ == "__main__":
    unittest.main()

"""Tests for the calculation engine."""

import unittest

from healthcore.calculator import (
    calculate_bmi,
    calculate_bmr,
    calculate_macro_distribution,
    calculate_macro_distribution_for_split,
    calculate_tdee,
    calculate_weight_change_estimation,
    format_bmi,
    format_estimation,
    format_macros,
    validate_target_weight,
)
from healthcore.config import TARGET_WEIGHT_INVALID_MESSAGE, TARGET_WEIGHT_VALID_MESSAGE
from healthcore.models import MacroSplit


class TestBMR(unittest.TestCase):
    def test_bmr_male(self):
        # 10*80 + 6.25*180 - 5*30 + 5 = 800 + 1125 - 150 + 5 = 1780
        self.assertEqual(calculate_bmr(80, 180, "male", 30), 1780)

    def test_bmr_female(self):
        # 10*60 + 6.25*165 - 5*25 - 161 = 600 + 1031.25 - 125 - 161 = 1345.25
        self.assertAlmostEqual(calculate_bmr(60, 165, "female", 25), 1345.25)

    def test_bmr_unspecified_is_mean_of_male_and_female(self):
        for weight, height, age in [(80, 180, 30), (55.5, 160, 19), (120, 195, 64), (45, 150, 0)]:
            male = calculate_bmr(weight, height, "male", age)
            female = calculate_bmr(weight, height, "female", age)
            self.assertAlmostEqual(
                calculate_bmr(weight, height, "unspecified", age), (male + female) / 2
            )

    def test_bmr_increases_with_weight(self):
        self.assertGreater(calculate_bmr(90, 175, "male", 30), calculate_bmr(70, 175, "male", 30))

    def test_bmr_can_be_negative_for_pathological_input(self):
        self.assertLess(calculate_bmr(1, 1, "female", 100), 0)

    def test_unknown_sex_rejected(self):
        with self.assertRaises(ValueError):
            calculate_bmr(80, 180, "H", 30)


class TestTDEE(unittest.TestCase):
    def test_factor_one_is_identity(self):
        for bmr in (0, 1345.25, 1780, -50):
            self.assertEqual(calculate_tdee(bmr, 1.0), bmr)

    def test_moderately_active(self):
        self.assertAlmostEqual(calculate_tdee(1780, 1.55), 2759)

    def test_sedentary(self):
        self.assertAlmostEqual(calculate_tdee(1780, 1.2), 1780 * 1.2)


class TestBMI(unittest.TestCase):
    def test_bmi(self):
        # 70 / 1.75² = 22.857
        self.assertAlmostEqual(calculate_bmi(70, 175), 22.86, places=2)

    def test_bmi_not_rounded(self):
        self.assertNotEqual(calculate_bmi(70, 175), round(calculate_bmi(70, 175), 1))

    def test_format_bmi(self):
        self.assertEqual(format_bmi(calculate_bmi(70, 175)), "22.9 (normal)")
        self.assertEqual(format_bmi(17.2), "17.2 (underweight)")
        self.assertEqual(format_bmi(27), "27.0 (overweight)")
        self.assertEqual(format_bmi(31.4), "31.4 (obese)")


class TestValidateTargetWeight(unittest.TestCase):
    def test_healthy_target_is_valid(self):
        # BMI 22 at 1.75m -> 22 * 3.0625 = 67.375 kg
        result = validate_target_weight(67.375, 175)
        self.assertTrue(result.is_valid)
        self.assertAlmostEqual(result.target_bmi, 22)
        self.assertEqual(result.message, TARGET_WEIGHT_VALID_MESSAGE)

    def test_obese_target_is_invalid(self):
        # BMI 30 at 1.75m -> 91.875 kg
        result = validate_target_weight(91.875, 175)
        self.assertFalse(result.is_valid)
        self.assertAlmostEqual(result.target_bmi, 30)
        self.assertEqual(result.message, TARGET_WEIGHT_INVALID_MESSAGE)

    def test_lower_bound_inclusive(self):
        # BMI 18.5 -> 56.65625 kg
        self.assertTrue(validate_target_weight(56.65625, 175).is_valid)
        self.assertFalse(validate_target_weight(56, 175).is_valid)

    def test_upper_bound_exclusive(self):
        # BMI 25 -> 76.5625 kg
        self.assertFalse(validate_target_weight(76.5625, 175).is_valid)
        self.assertTrue(validate_target_weight(76, 175).is_valid)

    def test_custom_range(self):
        # BMI 28 -> 85.75 kg
        self.assertFalse(validate_target_weight(85.75, 175).is_valid)
        self.assertTrue(validate_target_weight(85.75, 175, bmi_max=30).is_valid)


class TestMacroDistribution(unittest.TestCase):
    def test_standard_split(self):
        result = calculate_macro_distribution(2000, 50, 30, 20)
        self.assertAlmostEqual(result.carbs_g, 250)  # 2000 * 0.5 / 4
        self.assertAlmostEqual(result.protein_g, 150)  # 2000 * 0.3 / 4
        self.assertAlmostEqual(result.fat_g, 44.4, places=1)  # 2000 * 0.2 / 9

    def test_grams_convert_back_to_calories(self):
        for calories, split in [(2000, (50, 30, 20)), (1850, (40, 35, 25)), (3120, (45, 30, 25))]:
            result = calculate_macro_distribution(calories, *split)
            total = result.carbs_g * 4 + result.protein_g * 4 + result.fat_g * 9
            self.assertAlmostEqual(total, calories)
            self.assertAlmostEqual(result.total_calories, calories)

    def test_zero_calories(self):
        result = calculate_macro_distribution(0, 50, 30, 20)
        self.assertEqual((result.carbs_g, result.protein_g, result.fat_g), (0, 0, 0))

    def test_unbalanced_split_is_permissive_by_default(self):
        # 60 + 30 + 20 = 110%
        result = calculate_macro_distribution(2000, 60, 30, 20)
        self.assertAlmostEqual(result.carbs_g, 300)
        self.assertAlmostEqual(result.total_calories, 2200)

    def test_strict_rejects_unbalanced_split(self):
        with self.assertRaises(ValueError):
            calculate_macro_distribution(2000, 60, 30, 20, strict=True)

    def test_strict_accepts_balanced_split(self):
        result = calculate_macro_distribution(2000, 50, 30, 20, strict=True)
        self.assertAlmostEqual(result.carbs_g, 250)

    def test_for_split(self):
        result = calculate_macro_distribution_for_split(2000, MacroSplit(50, 30, 20))
        self.assertAlmostEqual(result.protein_g, 150)

    def test_format_macros(self):
        text = format_macros(calculate_macro_distribution(2000, 50, 30, 20))
        self.assertIn("Carbs:    250g (1000 kcal)", text)
        self.assertIn("Fat:      44g (400 kcal)", text)


class TestWeightChangeEstimation(unittest.TestCase):
    # Male, 180cm, 30y at 80kg: BMR 1780, TDEE at 1.55 = 2759

    def test_maintain(self):
        result = calculate_weight_change_estimation(80, 80, 180, "male", 30, 1.55)
        self.assertEqual(result.orientation, "maintain")
        self.assertEqual(result.caloric_adjustment, 0)
        self.assertEqual(result.estimated_days, 0)
        self.assertEqual(result.estimated_weeks, 0)
        self.assertEqual(result.weekly_change_kg, 0)
        self.assertEqual(result.daily_calories, round(result.tdee))
        self.assertEqual(result.daily_calories, 2759)

    def test_lose(self):
        result = calculate_weight_change_estimation(80, 75, 180, "male", 30, 1.55)
        self.assertEqual(result.orientation, "lose")
        self.assertLess(result.daily_calories, result.tdee)
        self.assertEqual(result.daily_calories, 2259)  # 2759 - 500
        self.assertEqual(result.caloric_adjustment, -500)
        # 500 * 7 / 7700 = 0.4545 kg/week -> 5 / 0.4545 = 11 weeks
        self.assertAlmostEqual(result.weekly_change_kg, -500 * 7 / 7700)
        self.assertAlmostEqual(result.estimated_weeks, 11)
        self.assertAlmostEqual(result.estimated_days, 77)

    def test_gain(self):
        result = calculate_weight_change_estimation(60, 65, 165, "female", 25, 1.2)
        self.assertEqual(result.orientation, "gain")
        self.assertGreater(result.daily_calories, result.tdee)
        # BMR 1345.25, TDEE 1614.3 -> 2114.3
        self.assertEqual(result.daily_calories, 2114)
        self.assertEqual(result.caloric_adjustment, 500)
        self.assertGreater(result.weekly_change_kg, 0)
        self.assertAlmostEqual(result.estimated_weeks, 11)

    def test_result_not_rounded(self):
        # 1.5 kg at 0.4545 kg/week -> 3.3 weeks, 23.1 days
        result = calculate_weight_change_estimation(80, 78.5, 180, "male", 30, 1.55)
        self.assertAlmostEqual(result.estimated_weeks, 3.3)
        self.assertAlmostEqual(result.estimated_days, 23.1)
        self.assertAlmostEqual(result.bmr, 1780)
        self.assertAlmostEqual(result.tdee, 2759)

    def test_days_are_seven_times_weeks(self):
        result = calculate_weight_change_estimation(95.3, 82.1, 172, "unspecified", 41, 1.375)
        self.assertAlmostEqual(result.estimated_days, result.estimated_weeks * 7)

    def test_equality_is_exact_by_default(self):
        result = calculate_weight_change_estimation(80, 80.05, 180, "male", 30, 1.55)
        self.assertEqual(result.orientation, "gain")
        self.assertGreater(result.estimated_weeks, 0)

    def test_tolerance_treats_close_weights_as_maintain(self):
        result = calculate_weight_change_estimation(
            80, 80.05, 180, "male", 30, 1.55, maintain_tolerance_kg=0.1
        )
        self.assertEqual(result.orientation, "maintain")

    def test_custom_policy(self):
        # 1000 kcal/day -> 0.909 kg/week -> 5 kg in 5.5 weeks
        result = calculate_weight_change_estimation(
            80, 75, 180, "male", 30, 1.55, daily_adjustment=1000
        )
        self.assertEqual(result.daily_calories, 1759)
        self.assertAlmostEqual(result.estimated_weeks, 5.5)

    def test_bmr_uses_current_weight(self):
        lose = calculate_weight_change_estimation(80, 70, 180, "male", 30, 1.2)
        gain = calculate_weight_change_estimation(80, 90, 180, "male", 30, 1.2)
        self.assertEqual(lose.bmr, gain.bmr)

    def test_format_estimation(self):
        text = format_estimation(calculate_weight_change_estimation(80, 75, 180, "male", 30, 1.55))
        self.assertIn("Target:   2259 kcal/day (-500)", text)
        self.assertIn("Goal:     lose", text)
        self.assertIn("11.0 weeks (77 days)", text)

    def test_format_estimation_maintain(self):
        text = format_estimation(calculate_weight_change_estimation(80, 80, 180, "male", 30, 1.55))
        self.assertIn("Goal:     maintain", text)
        self.assertNotIn("Duration", text)


if __name__ == "__main__":
    unittest.main()

"""Estimation and macro display components for Streamlit pages."""

import streamlit as st

from healthcore.models import EstimationResult, MacroDistribution, TargetWeightValidation


def render_validation(validation: TargetWeightValidation):
    """Show the target BMI with a success or warning banner."""
    if validation.is_valid:
        st.success(f"✅ {validation.message} (BMI {validation.target_bmi:.1f})")
    else:
        st.warning(f"⚠️ {validation.message} (BMI {validation.target_bmi:.1f})")


def render_estimation(result: EstimationResult):
    """Render the estimation as metrics.

    Rounds weeks and days up for display.
    """
    cols = st.columns(4)
    cols[0].metric("BMR", f"{result.bmr:.0f} kcal")
    cols[1].metric("TDEE", f"{result.tdee:.0f} kcal")
    cols[2].metric("Daily Target", f"{result.daily_calories} kcal",
                   delta=f"{result.caloric_adjustment:+.0f} kcal")
    cols[3].metric("Goal", result.orientation.capitalize())

    if result.orientation == "maintain":
        st.caption("Target equals current weight: eat at maintenance.")
        return

    cols = st.columns(3)
    cols[0].metric("Pace", f"{result.weekly_change_kg:+.2f} kg/week")
    cols[1].metric("Weeks", f"{result.estimated_weeks:.1f}")
    cols[2].metric("Days", f"{result.estimated_days:.0f}")


def render_macros(distribution: MacroDistribution):
    cols = st.columns(3)
    cols[0].metric("Carbs", f"{distribution.carbs_g:.0f}g")
    cols[1].metric("Protein", f"{distribution.protein_g:.0f}g")
    cols[2].metric("Fat", f"{distribution.fat_g:.0f}g")
    st.caption(f"Total from macros: {distribution.total_calories:.0f} kcal")

"""Profile Management Page.

Create and update the user profile and show energy needs.
"""

import streamlit as st
from datetime import date

from healthcore.activity_levels import get_activity_factor, list_activity_levels
from healthcore.calculator import (
    calculate_bmi,
    calculate_bmr,
    calculate_macro_distribution,
    calculate_tdee,
)
from healthcore.cli import _load_user, _save_user, _update_user
from healthcore.config import DEFAULT_MACRO_SPLIT, SEXES
from healthcore.models import UserProfile
from healthcore.validation import ValidationError, validate_physical_data
from pages.components.charts import create_bmi_gauge, create_macro_pie_chart
from pages.components.database import ensure_database
from pages.components.estimation_display import render_macros

st.set_page_config(page_title="Profile | HealthCore", page_icon="📋", layout="wide")
ensure_database()
st.title("📋 Profile")

user = _load_user()
levels = list_activity_levels()

if user:
    age = user.age_on(date.today())
    bmr = calculate_bmr(user.weight_kg, user.height_cm, user.sex, age)
    tdee = calculate_tdee(bmr, get_activity_factor(user.activity_level_id))

    col1, col2, col3 = st.columns(3)
    col1.metric("BMR", f"{bmr:.0f} kcal")
    col2.metric("TDEE", f"{tdee:.0f} kcal")
    col3.metric("Age", f"{age} years")

    st.plotly_chart(create_bmi_gauge(calculate_bmi(user.weight_kg, user.height_cm)),
                    use_container_width=True)

    st.markdown("### Macro Split at Maintenance")
    col1, col2, col3 = st.columns(3)
    carbs = col1.slider("Carbs %", 0, 100, DEFAULT_MACRO_SPLIT["carbs"])
    protein = col2.slider("Protein %", 0, 100, DEFAULT_MACRO_SPLIT["protein"])
    fat = col3.slider("Fat %", 0, 100, DEFAULT_MACRO_SPLIT["fat"])
    if carbs + protein + fat != 100:
        st.warning(f"⚠️ Percentages add up to {carbs + protein + fat}%, not 100%")

    distribution = calculate_macro_distribution(round(tdee), carbs, protein, fat)
    render_macros(distribution)
    st.plotly_chart(create_macro_pie_chart(distribution), use_container_width=True)

    st.divider()
else:
    st.info("No profile found. Create your profile below to get started!")

with st.form("profile_form"):
    name = st.text_input("Name*", value=user.name if user else "")

    col1, col2 = st.columns(2)
    with col1:
        birth_date = st.date_input(
            "Birth date*",
            value=user.birth_date if user else date(1995, 1, 1),
            min_value=date(1900, 1, 1),
            max_value=date.today(),
        )
    with col2:
        sex = st.selectbox(
            "Sex*",
            list(SEXES),
            index=list(SEXES).index(user.sex) if user else 0,
        )

    col1, col2, col3 = st.columns(3)
    with col1:
        weight = st.number_input("Weight (kg)*", min_value=0.0, max_value=499.9,
                                 value=float(user.weight_kg) if user else 70.0, step=0.1)
    with col2:
        height = st.number_input("Height (cm)*", min_value=0.0, max_value=299.9,
                                 value=float(user.height_cm) if user else 175.0, step=0.5)
    with col3:
        target = st.number_input("Target weight (kg)", min_value=0.0, max_value=499.9,
                                 value=float(user.target_weight_kg or user.weight_kg) if user else 70.0,
                                 step=0.1)

    level_ids = [level.id for level in levels]
    activity_id = st.selectbox(
        "Activity Level",
        level_ids,
        index=level_ids.index(user.activity_level_id)
        if user and user.activity_level_id in level_ids else 0,
        format_func=lambda i: next(f"{l.name.replace('_', ' ').title()} - {l.description}"
                                   for l in levels if l.id == i),
    )

    submitted = st.form_submit_button(
        "💾 Save Profile" if not user else "💾 Update Profile",
        use_container_width=True
    )

    if submitted:
        try:
            physical = validate_physical_data(sex, birth_date, weight, height)
        except ValidationError as err:
            for field_name, message in err.errors.items():
                st.error(f"⚠️ {field_name}: {message}")
        else:
            if not name or not name.strip():
                st.error("⚠️ Name is required")
            else:
                profile = UserProfile(
                    id=user.id if user else None,
                    name=name.strip(),
                    birth_date=birth_date,
                    weight_kg=physical.weight_kg,
                    height_cm=physical.height_cm,
                    sex=physical.sex,
                    activity_level_id=activity_id,
                    target_weight_kg=target or None,
                )
                if user:
                    _update_user(profile)
                    st.success("✅ Profile updated successfully!")
                else:
                    user_id = _save_user(profile)
                    profile.id = user_id
                    st.success(f"✅ Profile created successfully! (ID: {user_id})")

                st.session_state.user_profile = profile
                st.rerun()

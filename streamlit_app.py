"""Streamlit frontend for HealthCore.

Main entry point for the multi-page Streamlit application.
"""

import streamlit as st
from datetime import date

from healthcore.activity_levels import get_activity_factor
from healthcore.calculator import calculate_bmi, calculate_bmr, calculate_tdee, format_bmi
from healthcore.cli import _load_user
from healthcore.objectives import get_daily_objectives
from pages.components.database import ensure_database

st.set_page_config(
    page_title="HealthCore",
    page_icon="💪",
    layout="wide",
    initial_sidebar_state="expanded"
)

ensure_database()

if 'user_profile' not in st.session_state:
    st.session_state.user_profile = None

# Load user profile if it exists
if st.session_state.user_profile is None:
    st.session_state.user_profile = _load_user()

user = st.session_state.user_profile

with st.sidebar:
    st.markdown("## 💪 HealthCore")
    st.markdown("---")

    if user:
        st.success(f"👤 **{user.name}**")
        st.metric("BMI", format_bmi(calculate_bmi(user.weight_kg, user.height_cm)))
    else:
        st.warning("⚠️ No profile found")
        st.caption("Create one in the Profile page")

    st.markdown("---")
    st.markdown("### Navigation")
    st.markdown("- 📋 **Profile** - Body data & energy needs")
    st.markdown("- 🎯 **Target Weight** - Validate a goal & estimate duration")
    st.markdown("- ✅ **Objectives** - Log food & workouts, daily objectives")

st.title("💪 HealthCore")

if not user:
    st.info("No profile found. Go to the Profile page to create one!")
    st.stop()

age = user.age_on(date.today())
bmr = calculate_bmr(user.weight_kg, user.height_cm, user.sex, age)
tdee = calculate_tdee(bmr, get_activity_factor(user.activity_level_id))

col1, col2 = st.columns(2)

with col1:
    st.markdown("#### 👤 Your Profile")
    st.write(f"**Name:** {user.name}")
    st.write(f"**Age:** {age}")
    st.write(f"**Weight:** {user.weight_kg:.1f} kg")
    if user.target_weight_kg is not None:
        st.write(f"**Target:** {user.target_weight_kg:.1f} kg")
    st.write(f"**Maintenance:** {tdee:.0f} kcal/day")

with col2:
    st.markdown("#### ✅ Today")
    for objective in get_daily_objectives(user.id):
        mark = "✅" if objective.completed else "⬜"
        st.write(f"{mark} {objective.title}")

st.markdown("---")
st.caption("Energy needs use the Mifflin-St Jeor equation. "
           "Data is stored locally in `~/.healthcore/healthcore.db`.")

"""Target Weight Page.

Validate a target weight against the healthy BMI range and estimate how
long reaching it takes.
"""

import streamlit as st
from datetime import date

from healthcore.assessment import assess_target_weight
from healthcore.calculator import calculate_macro_distribution
from healthcore.cli import _load_user
from healthcore.config import DEFAULT_MACRO_SPLIT
from healthcore.validation import ValidationError
from pages.components.charts import create_macro_pie_chart, create_weight_projection_chart
from pages.components.database import ensure_database
from pages.components.estimation_display import render_estimation, render_macros, render_validation

st.set_page_config(page_title="Target Weight | HealthCore", page_icon="🎯", layout="wide")
ensure_database()
st.title("🎯 Target Weight")

user = _load_user()
if not user:
    st.warning("⚠️ Create a profile first in the Profile page.")
    st.stop()

target = st.number_input(
    "Target weight (kg)",
    min_value=0.0,
    max_value=499.9,
    value=float(user.target_weight_kg or user.weight_kg),
    step=0.5,
)

try:
    assessment = assess_target_weight(
        user.weight_kg, target, user.height_cm, user.sex,
        user.age_on(date.today()), user.activity_level_id,
    )
except ValidationError as err:
    for field_name, message in err.errors.items():
        st.error(f"⚠️ {field_name}: {message}")
    st.stop()

render_validation(assessment.validation)
st.caption(f"Activity factor: x{assessment.activity_factor}")

st.markdown("### Estimation")
render_estimation(assessment.estimation)

if assessment.estimation.orientation != "maintain":
    st.plotly_chart(
        create_weight_projection_chart(user.weight_kg, assessment.estimation),
        use_container_width=True,
    )

st.markdown("### Macros at Target Calories")
distribution = calculate_macro_distribution(
    assessment.estimation.daily_calories,
    DEFAULT_MACRO_SPLIT["carbs"],
    DEFAULT_MACRO_SPLIT["protein"],
    DEFAULT_MACRO_SPLIT["fat"],
)
render_macros(distribution)
st.plotly_chart(create_macro_pie_chart(distribution), use_container_width=True)

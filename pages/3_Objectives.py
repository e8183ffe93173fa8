"""Objectives Page.

Log foods and workouts, follow the daily objectives they complete and
compare intake with the calorie and macro goals.
"""

import streamlit as st
from datetime import date, timedelta

from healthcore.assessment import daily_calorie_goal
from healthcore.cli import _load_user
from healthcore.objectives import complete_objective, get_daily_objectives
from healthcore.tracker import get_workouts, log_food, log_workout, nutrition_history, nutrition_summary
from healthcore.validation import ValidationError
from pages.components.charts import create_daily_calories_trend, create_macro_pie_chart
from pages.components.database import ensure_database

st.set_page_config(page_title="Objectives | HealthCore", page_icon="✅", layout="wide")
ensure_database()
st.title("✅ Daily Objectives")

user = _load_user()
if not user:
    st.warning("⚠️ Create a profile first in the Profile page.")
    st.stop()

day = st.date_input("Day", value=date.today(), max_value=date.today())

try:
    calorie_goal = daily_calorie_goal(user, day)
except ValidationError as err:
    for field_name, message in err.errors.items():
        st.error(f"⚠️ {field_name}: {message}")
    st.info("Fix the target weight in the Profile page.")
    st.stop()

tab1, tab2, tab3, tab4 = st.tabs(["✅ Objectives", "🍎 Log Food", "🏋️ Log Workout", "📈 History"])

with tab1:
    for objective in get_daily_objectives(user.id, day):
        col1, col2 = st.columns([4, 1])
        col1.write(f"{'✅' if objective.completed else '⬜'} {objective.title}")
        if not objective.completed:
            if col2.button("Done", key=f"complete_{objective.id}"):
                complete_objective(user.id, objective.id)
                st.rerun()

    summary = nutrition_summary(user.id, day, calorie_goal)
    st.markdown("#### Intake vs. Goals")
    cols = st.columns(4)
    for col, (label, progress) in zip(cols, [
        ("Calories", summary.calories),
        ("Carbs", summary.carbs),
        ("Protein", summary.protein),
        ("Fat", summary.fat),
    ]):
        col.metric(
            label,
            f"{progress.consumed:.0f} / {progress.goal:.0f} {progress.unit}",
            f"{progress.remaining:.0f} {progress.unit} left",
            delta_color="off",
        )
        col.progress(int(progress.percent_completed))

    workouts = get_workouts(user.id, day)
    if workouts:
        st.markdown("#### Workouts")
        for workout in workouts:
            st.write(f"- {workout.session_name} ({workout.duration_minutes} min)")

with tab2:
    with st.form("food_form", clear_on_submit=True):
        name = st.text_input("Food*")
        col1, col2, col3, col4 = st.columns(4)
        calories = col1.number_input("Calories*", min_value=0.0, step=10.0)
        protein = col2.number_input("Protein (g)", min_value=0.0, step=1.0)
        carbs = col3.number_input("Carbs (g)", min_value=0.0, step=1.0)
        fat = col4.number_input("Fat (g)", min_value=0.0, step=1.0)
        if st.form_submit_button("➕ Log Food", use_container_width=True):
            if not name.strip():
                st.error("⚠️ Food name is required")
            else:
                log_food(user.id, name.strip(), calories, protein, carbs, fat, day)
                st.rerun()

with tab3:
    with st.form("workout_form", clear_on_submit=True):
        session = st.text_input("Session*")
        minutes = st.number_input("Duration (min)", min_value=0, step=5)
        if st.form_submit_button("➕ Log Workout", use_container_width=True):
            if not session.strip():
                st.error("⚠️ Session name is required")
            else:
                log_workout(user.id, session.strip(), int(minutes), day)
                st.rerun()

with tab4:
    col1, col2 = st.columns(2)
    start = col1.date_input("From", value=day - timedelta(days=6), max_value=day)
    end = col2.date_input("To", value=day, min_value=start, max_value=date.today())

    history = nutrition_history(user.id, start, end, calorie_goal)
    cols = st.columns(3)
    cols[0].metric("Days Logged", history.total_days)
    cols[1].metric("Goal Reached", f"{history.days_completed}/{history.total_days}")
    cols[2].metric("Calorie Goal", f"{calorie_goal} kcal")

    st.plotly_chart(create_daily_calories_trend(history), use_container_width=True)

    if history.days:
        totals = history.days[0]
        st.markdown(f"#### Macros on {totals.day.isoformat()}")
        st.plotly_chart(create_macro_pie_chart(totals.macros), use_container_width=True)

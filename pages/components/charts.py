"""Chart components using Plotly for data visualization."""

import math

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from healthcore.config import HEALTHY_BMI_MAX, HEALTHY_BMI_MIN
from healthcore.models import EstimationResult, MacroDistribution, NutritionHistory


def create_macro_pie_chart(distribution: MacroDistribution):
    """Create pie chart of macro calorie distribution.

    Args:
        distribution: MacroDistribution with carbs, protein, fat in grams

    Returns:
        Plotly figure
    """
    labels = ['Carbs', 'Protein', 'Fat']
    values = [
        distribution.carbs_calories,
        distribution.protein_calories,
        distribution.fat_calories,
    ]

    fig = px.pie(
        names=labels,
        values=values,
        title="Macro Calorie Distribution",
        color_discrete_sequence=['#4ECDC4', '#FF6B6B', '#FFE66D']
    )

    fig.update_traces(textposition='inside', textinfo='percent+label')

    return fig


def create_bmi_gauge(bmi: float, label: str = "BMI"):
    """Create gauge chart placing a BMI against the healthy range.

    Args:
        bmi: Body mass index
        label: Gauge title

    Returns:
        Plotly figure
    """
    if HEALTHY_BMI_MIN <= bmi < HEALTHY_BMI_MAX:
        color = "darkgreen"
    elif bmi < 30:
        color = "orange"
    else:
        color = "red"

    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=round(bmi, 1),
        title={'text': label},
        gauge={
            'axis': {'range': [10, 45]},
            'bar': {'color': color},
            'steps': [
                {'range': [10, HEALTHY_BMI_MIN], 'color': "lightyellow"},
                {'range': [HEALTHY_BMI_MIN, HEALTHY_BMI_MAX], 'color': "lightgreen"},
                {'range': [HEALTHY_BMI_MAX, 30], 'color': "lightyellow"},
                {'range': [30, 45], 'color': "lightgray"},
            ],
        }
    ))

    return fig


def weight_projection(current_weight_kg: float, estimation: EstimationResult) -> pd.DataFrame:
    """Week-by-week projected weight until the target is reached.

    The last row lands exactly on the target, even mid-week.
    """
    if estimation.orientation == "maintain" or estimation.estimated_weeks == 0:
        return pd.DataFrame({'Week': [0], 'Weight': [current_weight_kg]})

    total_weeks = estimation.estimated_weeks
    weeks = list(range(math.floor(total_weeks) + 1))
    weights = [current_weight_kg + estimation.weekly_change_kg * w for w in weeks]
    if total_weeks - weeks[-1] > 1e-9:
        weeks.append(total_weeks)
        weights.append(current_weight_kg + estimation.weekly_change_kg * total_weeks)

    return pd.DataFrame({'Week': weeks, 'Weight': weights})


def create_weight_projection_chart(current_weight_kg: float, estimation: EstimationResult):
    """Create line chart of the projected weight curve.

    Args:
        current_weight_kg: Starting weight
        estimation: EstimationResult for the target

    Returns:
        Plotly figure
    """
    df = weight_projection(current_weight_kg, estimation)

    fig = px.line(
        df,
        x='Week',
        y='Weight',
        title='Projected Weight',
        markers=True
    )

    fig.update_layout(
        xaxis_title="Weeks",
        yaxis_title="Weight (kg)",
        hovermode='x unified'
    )

    return fig


def create_daily_calories_trend(history: NutritionHistory):
    """Create line chart of daily calories over a history period.

    Args:
        history: NutritionHistory with one DailyIntake per logged day

    Returns:
        Plotly figure
    """
    if not history.days:
        fig = go.Figure()
        fig.add_annotation(
            text="No food logged in this period",
            xref="paper", yref="paper",
            x=0.5, y=0.5, showarrow=False
        )
        return fig

    df = pd.DataFrame(
        [(intake.day, intake.calories) for intake in history.days],
        columns=['Date', 'Calories'],
    )
    df = df.sort_values('Date')

    fig = px.line(
        df,
        x='Date',
        y='Calories',
        title='Daily Calorie Intake',
        markers=True
    )

    if history.calorie_goal:
        fig.add_hline(y=history.calorie_goal, line_dash="dash", annotation_text="Goal")

    fig.update_layout(
        xaxis_title="Date",
        yaxis_title="Calories (kcal)",
        hovermode='x unified'
    )

    return fig

# components/charts.py
# Plotly chart helpers used by the app.
# All functions return a Plotly Figure that Streamlit can display with st.plotly_chart(...).

from typing import Sequence
import plotly.graph_objects as go

import plotly.io as pio
pio.templates.default = "plotly_white"

from ..calculators.percentiles import PercentileBand


# ---------- Portfolio value "fan" ----------
def fan_chart(bands: Sequence[PercentileBand],
              title: str = "Portfolio Value Over Time",
              yaxis_title: str = "Dollars (today's)") -> go.Figure:
    """Shaded 10–90 band with a median line."""
    ages = [b.age for b in bands]
    p10 = [b.p10 for b in bands]
    p50 = [b.p50 for b in bands]
    p90 = [b.p90 for b in bands]

    fig = go.Figure()

    # Shaded band 10–90
    fig.add_trace(go.Scatter(
        x=ages, y=p90, mode="lines", name="90th percentile",
        line=dict(width=1),
        hovertemplate="Age %{x}<br>$%{y:,.0f}<extra></extra>"
    ))
    fig.add_trace(go.Scatter(
        x=ages, y=p10, mode="lines", name="10th percentile",
        line=dict(width=1),
        fill="tonexty",
        hovertemplate="Age %{x}<br>$%{y:,.0f}<extra></extra>"
    ))

    # Median
    fig.add_trace(go.Scatter(
        x=ages, y=p50, mode="lines", name="Median",
        line=dict(width=3),
        hovertemplate="Age %{x}<br>$%{y:,.0f}<extra></extra>"
    ))

    fig.update_layout(
        title=title,
        template="plotly_white",
        height=380,
        margin=dict(l=10, r=10, t=40, b=10),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        xaxis_title="Age",
        yaxis_title=yaxis_title
    )
    return fig


# ---------- Success gauge ----------
def success_gauge(success_rate: float, threshold: float = 0.9) -> go.Figure:
    pct = max(0.0, min(100.0, float(success_rate) * 100.0))  # clamp 0–100
    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=round(pct, 1),
        number={"suffix": "%"},
        gauge={
            "axis": {"range": [0, 100]},
            "bar": {"thickness": 0.35},
            "steps": [
                {"range": [0, 60],  "color": "#ef4444"},  # red-500
                {"range": [60, 80], "color": "#f59e0b"},  # amber-500
                {"range": [80, 100],"color": "#22c55e"},  # green-500
            ],
            "threshold": {"line": {"color": "#1A2521", "width": 3}, "value": threshold * 100.0},
        }
    ))
    fig.update_layout(template="plotly_white", height=220, margin=dict(l=10, r=10, t=10, b=10))
    return fig

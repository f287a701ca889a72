import pandas as pd
import streamlit as st

from ..calculators.monte_carlo import Asset
from ..constants import RiskTier
from ..portfolio import Portfolio

# Stable widget keys so we can programmatically set values on load
WIDGET_KEYS = {
    "start_age": "in_start_age",
    "life_expectancy": "in_life_expectancy",
    "inflation": "in_inflation",
    "assets": "in_assets",
}

ASSET_COLUMNS = ["name", "principal", "rate", "risk"]


def assets_frame(portfolio: Portfolio) -> pd.DataFrame:
    return pd.DataFrame([a.to_dict() for a in portfolio.assets], columns=ASSET_COLUMNS)


def frame_to_assets(df: pd.DataFrame) -> list:
    """Rows with no principal entered are skipped (half-typed editor rows)."""
    assets = []
    for row in df.to_dict("records"):
        if pd.isna(row.get("principal")):
            continue
        rate = row.get("rate")
        risk = row.get("risk")
        assets.append(Asset(
            name=str(row.get("name") or "Asset"),
            principal=float(row["principal"]),
            expected_return_pct=0.0 if pd.isna(rate) else float(rate),
            risk=RiskTier(risk) if isinstance(risk, str) and risk else RiskTier.MEDIUM,
        ))
    return assets


def settings_form(portfolio: Portfolio) -> Portfolio:
    st.sidebar.header("Global Settings")
    start_age = st.sidebar.number_input(
        "Retirement age", min_value=0, max_value=120,
        value=int(portfolio.start_age), key=WIDGET_KEYS["start_age"],
        help="Age at which withdrawals begin. First year of the projection."
    )
    life_expectancy = st.sidebar.number_input(
        "Life expectancy", min_value=1, max_value=130,
        value=int(portfolio.life_expectancy), key=WIDGET_KEYS["life_expectancy"],
        help="Plan horizon. The portfolio must last until this age."
    )
    inflation = st.sidebar.number_input(
        "Inflation (%)", step=0.1, format="%.1f",
        value=float(portfolio.inflation), key=WIDGET_KEYS["inflation"],
        help="Withdrawals grow by this rate every year."
    )
    return Portfolio(
        assets=portfolio.assets,
        start_age=int(start_age),
        life_expectancy=int(life_expectancy),
        inflation=float(inflation),
    )


def asset_editor(portfolio: Portfolio) -> Portfolio:
    st.subheader("Assets")
    edited = st.data_editor(
        assets_frame(portfolio),
        key=WIDGET_KEYS["assets"],
        num_rows="dynamic",
        hide_index=True,
        use_container_width=True,
        column_config={
            "name": st.column_config.TextColumn("Name", required=True),
            "principal": st.column_config.NumberColumn("Principal ($)", min_value=0.0, step=1000.0, format="$%.0f"),
            "rate": st.column_config.NumberColumn("Expected return (%)", step=0.5, format="%.1f"),
            "risk": st.column_config.SelectboxColumn(
                "Risk", options=[t.value for t in RiskTier], default=RiskTier.MEDIUM.value, required=True
            ),
        },
    )
    return Portfolio(
        assets=frame_to_assets(edited),
        start_age=portfolio.start_age,
        life_expectancy=portfolio.life_expectancy,
        inflation=portfolio.inflation,
    )

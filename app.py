# app.py
import json
import logging

import streamlit as st

from withdrawal_planner.calculators.withdrawal import find_safe_withdrawal
from withdrawal_planner.components.forms import settings_form, asset_editor
from withdrawal_planner.components.results import format_currency, results_panel
from withdrawal_planner.constants import SIMULATION_RUNS, SUCCESS_THRESHOLD
from withdrawal_planner.portfolio import (
    Portfolio,
    PortfolioError,
    load_portfolio,
    reset_portfolio,
    parse_seed,
    save_portfolio,
    validate_portfolio,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


# ---------- Page config ----------
st.set_page_config(
    page_title="FIRE It Up! Safe Withdrawal Planner",
    page_icon="🔥",
    layout="wide",
    initial_sidebar_state="auto",
)

# Hide Streamlit's default menu and footer
HIDE_STREAMLIT_STYLE = """
    <style>
        #MainMenu {visibility: hidden;}
        footer {visibility: hidden;}
    </style>
"""
st.markdown(HIDE_STREAMLIT_STYLE, unsafe_allow_html=True)

st.markdown(
    """
<style>
.block-container {
    padding: 1.5rem 2rem;
    max-width: 1400px;
    margin: auto;
}
div[data-testid="stMetric"] {
    background: #FFFFFF;
    border-radius: 12px;
    padding: 1rem;
    box-shadow: 0 2px 8px rgba(0,0,0,0.05);
    border: 1px solid #E6ECE9;
}
div.stPlotlyChart {
    background: #FFFFFF;
    border-radius: 12px;
    padding: 0.75rem;
    border: 1px solid #E6ECE9;
}
button[kind="primary"] {
    background-color: #C2410C;
    color: #FFFFFF;
    border-radius: 8px;
    border: none;
}
</style>
""",
    unsafe_allow_html=True,
)


# ---------- Session boot ----------
def _initial_portfolio() -> Portfolio:
    try:
        return load_portfolio()
    except PortfolioError as exc:
        logger.error("stored portfolio unreadable, using defaults: %s", exc)
        return Portfolio.default()


st.session_state.setdefault("portfolio", None)
st.session_state.setdefault("result", None)
st.session_state.setdefault("result_portfolio", None)
st.session_state.setdefault("export_json", None)
if st.session_state["portfolio"] is None:
    st.session_state["portfolio"] = _initial_portfolio()

# ---------- Header ----------
st.title("🔥 FIRE It Up!")
st.markdown(
    "Find a sustainable, inflation-adjusted annual withdrawal for your portfolio. "
    "Thousands of **Monte Carlo** projections apply your expected returns and risk levels, "
    "so the answer comes with a success probability instead of a single-path forecast."
)

# ====== SIDEBAR: SETTINGS + STORAGE ======
portfolio = settings_form(st.session_state["portfolio"])

with st.sidebar.expander("Simulation", expanded=False):
    runs = st.number_input("Runs per iteration", min_value=100, max_value=10000,
                           value=SIMULATION_RUNS, step=100)
    threshold = st.slider("Success threshold", min_value=0.5, max_value=0.99,
                          value=SUCCESS_THRESHOLD, step=0.01)
    seed_text = st.text_input("Random seed (optional)", help="Same seed, same answer.")

st.sidebar.divider()
st.sidebar.header("Save / Load")
c1, c2 = st.sidebar.columns(2)
with c1:
    if st.button("Save"):
        save_portfolio(portfolio)
        st.sidebar.success("Portfolio saved.")
with c2:
    if st.button("Reset all"):
        st.session_state["portfolio"] = reset_portfolio()
        st.session_state["result"] = None
        st.session_state["result_portfolio"] = None
        st.session_state.pop("in_assets", None)
        st.rerun()

uploaded = st.sidebar.file_uploader("Upload portfolio JSON", type="json")
if uploaded:
    try:
        st.session_state["portfolio"] = Portfolio.from_dict(json.load(uploaded))
        st.session_state.pop("in_assets", None)
        st.sidebar.success("Portfolio loaded from file.")
        st.rerun()
    except ValueError as exc:  # JSONDecodeError, UnicodeDecodeError, PortfolioError
        st.sidebar.error(f"Invalid portfolio file: {exc}")

if st.sidebar.button("Export JSON"):
    st.session_state["export_json"] = json.dumps(portfolio.to_dict(), indent=2)
if st.session_state.get("export_json"):
    st.sidebar.download_button(
        "⬇️ Download JSON",
        st.session_state["export_json"],
        file_name="portfolio.json",
        mime="application/json",
    )

# ====== MAIN: ASSETS + RUN ======
left, right = st.columns([1, 1])
with left:
    portfolio = asset_editor(portfolio)
    st.caption(f"Total principal: **{format_currency(portfolio.total_principal())}**")
st.session_state["portfolio"] = portfolio

with right:
    st.subheader("Results")
    if st.button("Find safe withdrawal", type="primary"):
        problems = validate_portfolio(portfolio)
        if problems:
            for msg in problems:
                st.error(msg)
        else:
            seed = parse_seed(seed_text)
            bar = st.progress(0, text="Running simulations…")

            def _on_progress(pct: float):
                bar.progress(int(round(pct)), text=f"{pct:.0f}% complete")

            params = portfolio.simulation_parameters(runs=int(runs), success_threshold=float(threshold))
            st.session_state["result"] = find_safe_withdrawal(
                portfolio.assets, params, _on_progress, seed=seed
            )
            st.session_state["threshold"] = float(threshold)
            st.session_state["result_portfolio"] = portfolio
            bar.empty()

    result = st.session_state.get("result")
    if result is not None:
        results_panel(
            result,
            st.session_state.get("result_portfolio") or portfolio,
            st.session_state.get("threshold", SUCCESS_THRESHOLD),
        )
    else:
        st.info("Edit your assets, then run the search.")

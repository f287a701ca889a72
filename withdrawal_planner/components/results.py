import streamlit as st

from ..calculators.percentiles import bands_frame, inflate_bands
from ..calculators.withdrawal import SolverResult
from ..portfolio import Portfolio
from .charts import fan_chart, success_gauge


def format_currency(value: float) -> str:
    """USD with no decimals, e.g. ``$41,250`` or ``-$1,200``."""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.0f}"


def withdrawal_rate_pct(result: SolverResult, portfolio: Portfolio) -> float:
    """Safe withdrawal as a percent of starting principal; 0 for an empty portfolio."""
    principal = portfolio.total_principal()
    if principal <= 0:
        return 0.0
    return result.safe_withdrawal / principal * 100


def results_panel(result: SolverResult, portfolio: Portfolio, threshold: float):
    """Draw ``result``.  ``portfolio`` must be the one the result was computed from."""
    if not result.percentile_bands:
        st.warning("Nothing to simulate: add assets with a positive principal.")
        return

    c1, c2 = st.columns(2)
    with c1:
        st.metric("Safe annual withdrawal", format_currency(result.safe_withdrawal))
        st.caption(
            f"Indexed to {portfolio.inflation:.1f}% inflation, "
            f"{withdrawal_rate_pct(result, portfolio):.2f}% of starting principal."
        )
        st.metric("Simulation success rate", f"{result.success_rate * 100:.1f}%")
    with c2:
        st.plotly_chart(success_gauge(result.success_rate, threshold), use_container_width=True)

    view = st.radio("Show values in", ["Today's dollars", "Nominal dollars"], horizontal=True)
    bands = list(result.percentile_bands)
    if view == "Nominal dollars":
        bands = inflate_bands(bands, portfolio.inflation / 100.0)
    st.plotly_chart(
        fan_chart(bands, title=f"Portfolio Value Over Time ({view})", yaxis_title=view),
        use_container_width=True,
    )

    df = bands_frame(bands)
    with st.expander("Percentile table"):
        st.dataframe(df, hide_index=True, use_container_width=True)
    st.download_button(
        "⬇️ Download CSV",
        df.to_csv(index=False),
        file_name="withdrawal_percentiles.csv",
        mime="text/csv",
    )

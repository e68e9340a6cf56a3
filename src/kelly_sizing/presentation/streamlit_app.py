from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from kelly_sizing.application.use_cases import (
    KellyCalculator,
    add_trade,
    aggregate_trades,
    growth_curve,
    kelly_peak,
    remove_trade,
    replace_trade_outcome,
    set_trade_enabled,
)
from kelly_sizing.config import EXPORT_DIR, TRADES_CSV_PATH
from kelly_sizing.domain.entities.trade_record import TradeRecord
from kelly_sizing.domain.value_objects.kelly import KellyFormData, KellyResult
from kelly_sizing.domain.value_objects.modes import CalculationMode, RiskTolerance
from kelly_sizing.domain.value_objects.risk_adjustment import RiskAdjustment
from kelly_sizing.infrastructure.exporters.csv_exporter import CsvKellyResultExporter, CsvTradeRecordExporter
from kelly_sizing.infrastructure.logging import get_logger
from kelly_sizing.infrastructure.repositories.csv_trade_repository import CsvTradeRecordRepository
from kelly_sizing.presentation.formatting import format_number, format_percentage
from kelly_sizing.presentation.state import KellyState

logger = get_logger(__name__)

STATE_KEY = "kelly_state"
MODE_LABELS = {
    CalculationMode.MANUAL: "Manual statistics",
    CalculationMode.FROM_TRADES: "Trade log",
}


def main() -> None:
    st.set_page_config(page_title="Kelly Sizing Lab", layout="wide")
    _apply_theme()

    st.title("Kelly Sizing Lab")
    st.caption("Kelly-criterion position sizing from trading statistics or a trade log.")

    state = _get_state()
    _render_sidebar_controls(state)

    if state.mode is CalculationMode.MANUAL:
        _render_manual_inputs(state)
    else:
        _render_trade_log(state)

    outcome = state.recalculate(KellyCalculator())
    if not outcome.ok:
        st.markdown("<div class='section-title'>Input Problems</div>", unsafe_allow_html=True)
        for message in state.errors:
            st.error(message)
        return

    result = outcome.result
    if result is None:
        return
    _render_result(result)
    _render_growth_curve(result)
    _render_exports(result, state.trades)


def _apply_theme() -> None:
    st.markdown(
        """
        <style>
        @import url('https://fonts.googleapis.com/css2?family=Space+Grotesk:wght@400;600;700&display=swap');
        html, body, [class*="css"]  { font-family: 'Space Grotesk', sans-serif; }
        .stApp {
            background: radial-gradient(circle at top left, #0f172a 0%, #0b1120 45%, #020617 100%);
            color: #e2e8f0;
        }
        .block-container { padding-top: 2rem; }
        .section-title {
            font-weight: 700;
            letter-spacing: 0.04em;
            text-transform: uppercase;
            color: #e2e8f0;
            margin: 1rem 0 0.4rem 0;
        }
        .stButton>button {
            background: linear-gradient(120deg, #22d3ee, #6366f1);
            color: #0f172a;
            border: none;
            font-weight: 600;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )


def _get_state() -> KellyState:
    if STATE_KEY not in st.session_state:
        st.session_state[STATE_KEY] = KellyState()
    return st.session_state[STATE_KEY]


def _render_sidebar_controls(state: KellyState) -> None:
    with st.sidebar:
        st.subheader("Calculation")
        modes = list(MODE_LABELS)
        state.mode = st.radio(
            "Input mode",
            options=modes,
            index=modes.index(state.mode),
            format_func=lambda mode: MODE_LABELS[mode],
        )

        st.subheader("Risk adjustment")
        multiplier = st.slider(
            "Kelly fraction multiplier",
            min_value=0.05,
            max_value=1.0,
            value=float(state.risk_adjustment.fraction_multiplier),
            step=0.05,
            help="0.5 is half-Kelly.",
        )
        cap = st.slider(
            "Max position (fraction of capital)",
            min_value=0.01,
            max_value=1.0,
            value=float(state.risk_adjustment.max_position_fraction),
            step=0.01,
        )
        tolerances = list(RiskTolerance)
        tolerance = st.selectbox(
            "Risk tolerance",
            options=tolerances,
            index=tolerances.index(state.risk_adjustment.risk_tolerance),
            format_func=lambda item: item.value.title(),
        )
        state.risk_adjustment = RiskAdjustment(
            fraction_multiplier=multiplier,
            max_position_fraction=cap,
            risk_tolerance=tolerance,
        )

        if st.button("Reset to defaults"):
            state.reset()
            st.rerun()


def _render_manual_inputs(state: KellyState) -> None:
    st.markdown("<div class='section-title'>Trading Statistics</div>", unsafe_allow_html=True)
    columns = st.columns(3)
    with columns[0]:
        state.win_rate = st.number_input("Win rate (%)", value=float(state.win_rate), step=1.0)
    with columns[1]:
        state.avg_win = st.number_input("Average win", value=float(state.avg_win), step=10.0)
    with columns[2]:
        state.avg_loss = st.number_input("Average loss", value=float(state.avg_loss), step=10.0)


def _render_trade_log(state: KellyState) -> None:
    st.markdown("<div class='section-title'>Trade Log</div>", unsafe_allow_html=True)
    repository = CsvTradeRecordRepository(TRADES_CSV_PATH)

    edited = st.data_editor(
        _trades_df(state.trades),
        disabled=["record_id", "timestamp"],
        hide_index=True,
        width="stretch",
        key="trade_editor",
    )
    state.trades = _apply_trade_edits(state.trades, edited)

    add_col, remove_col, store_col = st.columns(3)
    with add_col:
        outcome = st.number_input("New trade P/L", value=0.0, step=10.0)
        if st.button("Add trade"):
            state.trades = add_trade(state.trades, outcome)
            st.rerun()
    with remove_col:
        if state.trades:
            record_id = st.selectbox("Trade to delete", options=[trade.record_id for trade in state.trades])
            if st.button("Delete trade"):
                state.trades = remove_trade(state.trades, record_id)
                st.rerun()
    with store_col:
        if st.button("Save trade log"):
            repository.save(state.trades)
            st.success(f"Saved {len(state.trades)} trades to {TRADES_CSV_PATH}")
        if st.button("Load trade log"):
            try:
                state.trades = tuple(repository.load())
            except ValueError as exc:
                logger.error("Trade log load failed", extra={"error": str(exc)})
                st.error(f"Could not load trade log: {exc}")
            else:
                st.rerun()

    stats = aggregate_trades(state.trades)
    st.caption(
        f"{stats.total_trades} trades: {stats.win_count} wins, {stats.loss_count} losses, "
        f"{stats.breakeven_count} breakeven"
    )


def _apply_trade_edits(trades: Sequence[TradeRecord], edited: pd.DataFrame) -> tuple[TradeRecord, ...]:
    updated = tuple(trades)
    by_id = {trade.record_id: trade for trade in trades}
    for _, row in edited.iterrows():
        trade = by_id.get(str(row["record_id"]))
        if trade is None:
            continue
        outcome = float(row["outcome"]) if pd.notna(row["outcome"]) else 0.0
        if outcome != trade.outcome:
            updated = replace_trade_outcome(updated, trade.record_id, outcome)
        if bool(row["enabled"]) != trade.enabled:
            updated = set_trade_enabled(updated, trade.record_id, bool(row["enabled"]))
    return updated


def _trades_df(trades: Sequence[TradeRecord]) -> pd.DataFrame:
    columns = ["record_id", "timestamp", "outcome", "enabled"]
    rows = [
        {
            "record_id": trade.record_id,
            "timestamp": trade.timestamp,
            "outcome": trade.outcome,
            "enabled": trade.enabled,
        }
        for trade in trades
    ]
    return pd.DataFrame(rows, columns=columns)


def _render_result(result: KellyResult) -> None:
    st.markdown("<div class='section-title'>Recommendation</div>", unsafe_allow_html=True)
    metrics_map = [
        ("Raw Kelly", format_percentage(result.raw_kelly_fraction)),
        ("Recommended position", f"{result.recommended_position_percentage:.2f}%"),
        ("Win rate", f"{result.win_rate:.2f}%"),
        ("Payoff ratio", format_number(result.payoff_ratio)),
        ("Profit factor", format_number(result.profit_factor)),
        ("Expectancy / trade", format_number(result.expected_value)),
        ("Risk of ruin (est.)", format_percentage(result.risk_of_ruin)),
        ("Trades", str(result.total_trades) if result.total_trades is not None else "manual"),
    ]
    columns = st.columns(4)
    for index, (label, value) in enumerate(metrics_map):
        with columns[index % 4]:
            st.metric(label, value)

    st.info(result.recommendation)
    for warning in result.warnings:
        st.warning(warning)


def _render_growth_curve(result: KellyResult) -> None:
    form = KellyFormData(win_rate=result.win_rate, avg_win=result.avg_win, avg_loss=result.avg_loss)
    df = growth_curve(form)
    if df.empty:
        return

    st.markdown("<div class='section-title'>Expected Log Growth</div>", unsafe_allow_html=True)
    fig = go.Figure()
    fig.add_trace(go.Scatter(x=df["fraction"], y=df["expected_log_growth"], mode="lines", name="E[log growth]"))
    peak = kelly_peak(form)
    if peak is not None:
        fig.add_vline(x=peak, line_dash="dot", annotation_text="Kelly")
    if result.adjusted_fraction > 0:
        fig.add_vline(x=result.adjusted_fraction, line_dash="dash", annotation_text="Adjusted")
    fig.update_layout(
        margin=dict(l=10, r=10, t=30, b=10),
        height=360,
        template="plotly_dark",
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        xaxis_title="Fraction of capital",
        yaxis_title="Expected log growth per trade",
    )
    st.plotly_chart(fig, width="stretch")


def _render_exports(result: KellyResult, trades: Sequence[TradeRecord]) -> None:
    st.markdown("<div class='section-title'>Exports</div>", unsafe_allow_html=True)
    export_dir = st.text_input("Export directory", value=str(EXPORT_DIR))
    export_path = Path(export_dir)

    if st.button("Export CSVs"):
        CsvKellyResultExporter().export_result(result, str(export_path / "kelly_result.csv"))
        if result.mode is CalculationMode.FROM_TRADES:
            CsvTradeRecordExporter().export_trades(trades, str(export_path / "trades.csv"))
        logger.info("Exported Kelly result", extra={"directory": export_dir})
        st.success(f"Exported to {export_dir}")


if __name__ == "__main__":
    main()

"""Preflop Range Trainer — Streamlit Dashboard.

Three-tab dashboard around the range engine:
  Tab 1 — Trainer            (deal, answer Fold/Call/Raise, grid on mistakes)
  Tab 2 — Range Explorer     (any scenario's 13×13 grid, Plotly hover)
  Tab 3 — Strategy Overview  (raise/call/fold shares for every scenario)

Run:
    streamlit run app.py
"""

from __future__ import annotations

import logging

import streamlit as st

from preflop import config
from preflop.analysis.plotly_lookup import build_range_lookup_figure
from preflop.analysis.range_report import range_summary_frame
from preflop.engine.cards import RANK_NAMES, card_rank, card_suit
from preflop.engine.positions import Scenario
from preflop.engine.ranges import Action, StrategyTable, default_strategy, validate_strategy
from preflop.engine.trainer import (
    Phase,
    SessionStats,
    TrainingRound,
    available_defenders,
    available_openers,
    new_round,
    submit_action,
)

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ─── Page config ──────────────────────────────────────────────────────────────

st.set_page_config(
    page_title="Preflop Range Trainer",
    page_icon="🃏",
    layout="wide",
)

_SUIT_SYMBOLS: list[str] = ["♣", "♦", "♥", "♠"]


@st.cache_resource
def _load_strategy() -> StrategyTable:
    """Load the strategy asset once (cached for the process lifetime)."""
    strategy = default_strategy()
    problems = validate_strategy(strategy)
    for problem in problems:
        logger.error("Strategy data problem: %s", problem)
    return strategy


def _pretty_card(card: int) -> str:
    return RANK_NAMES[card_rank(card)] + _SUIT_SYMBOLS[card_suit(card)]


def _start_round(scenario: Scenario) -> None:
    st.session_state["scenario"] = scenario
    st.session_state["round"] = new_round(scenario, _load_strategy())


def _answer(action: Action) -> None:
    rnd: TrainingRound = st.session_state["round"]
    if rnd.phase is not Phase.AWAITING_ACTION:
        return
    submit_action(rnd, action)
    st.session_state["stats"].record(rnd)


strategy = _load_strategy()

if "stats" not in st.session_state:
    st.session_state["stats"] = SessionStats()

# ─── Sidebar controls ─────────────────────────────────────────────────────────

with st.sidebar:
    st.title("🃏 Preflop Trainer")
    st.markdown("---")

    stack = st.selectbox(
        "Stack Size (BB)",
        options=list(config.SUPPORTED_STACK_SIZES),
        format_func=lambda s: f"{s}bb",
        index=list(config.SUPPORTED_STACK_SIZES).index(config.DEFAULT_STACK),
    )

    openers = available_openers()
    opener = st.selectbox(
        "Opener Position",
        options=openers,
        index=openers.index(config.DEFAULT_OPENER),
    )

    defenders = available_defenders(opener)
    hero = st.selectbox(
        "Your Position (Hero)",
        options=defenders,
        index=defenders.index(config.DEFAULT_DEFENDER) if config.DEFAULT_DEFENDER in defenders else 0,
    )

    st.markdown("---")
    stats: SessionStats = st.session_state["stats"]
    st.metric("Correct", stats.correct)
    st.metric("Incorrect", stats.incorrect)
    if stats.accuracy is not None:
        st.caption(f"Accuracy: {stats.accuracy:.0%} over {stats.graded} graded hands")
    st.caption(f"Opener raises to {config.OPEN_SIZE_BB}bb")

scenario = Scenario(opener, hero, stack)
if st.session_state.get("scenario") != scenario or "round" not in st.session_state:
    _start_round(scenario)

rnd: TrainingRound = st.session_state["round"]

# ─── Tabs ─────────────────────────────────────────────────────────────────────

tab1, tab2, tab3 = st.tabs(["Trainer", "Range Explorer", "Strategy Overview"])

# ── Tab 1: Trainer ────────────────────────────────────────────────────────────

with tab1:
    st.header(f"{hero} vs {opener} open ({stack}bb)")
    st.markdown(f"## {'  '.join(_pretty_card(c) for c in rnd.cards)}")
    st.caption(f"Hand: {rnd.range_key}")

    cols = st.columns(3)
    for col, action in zip(cols, (Action.FOLD, Action.CALL, Action.RAISE)):
        col.button(
            action.name.title(),
            key=f"answer_{action.name}",
            on_click=_answer,
            args=(action,),
            disabled=rnd.is_finished,
            use_container_width=True,
        )

    feedback = rnd.feedback
    if feedback is not None:
        if feedback.phase is Phase.CORRECT:
            st.success(feedback.message)
        elif feedback.phase is Phase.INCORRECT:
            st.error(feedback.message)
        else:
            st.warning(feedback.message)
        if feedback.fallback_fold:
            st.caption(f"{rnd.range_key} is outside the known range; the default play is FOLD.")

    st.button("Next Hand", on_click=_start_round, args=(scenario,), type="primary")

    if feedback is not None and feedback.show_range:
        st.markdown("---")
        st.subheader(f"Correct Range for {hero} vs {opener} Open ({stack}bb)")
        fig = build_range_lookup_figure(
            feedback.range_table,
            scenario.label,
            highlight=rnd.range_key,
        )
        st.plotly_chart(fig, use_container_width=True)

# ── Tab 2: Range Explorer ─────────────────────────────────────────────────────

with tab2:
    st.header("Range Explorer")
    st.caption("Hover over any cell to see action, mixing frequency and combos.")

    table = strategy.get_range_table(stack, opener, hero)
    if table is None:
        st.info(f"No range data for {scenario.label}.")
    else:
        st.plotly_chart(build_range_lookup_figure(table, scenario.label), use_container_width=True)

# ── Tab 3: Strategy Overview ──────────────────────────────────────────────────

with tab3:
    st.header("Strategy Overview")
    st.caption("Share of all 1326 combos per action, by scenario.")
    st.dataframe(range_summary_frame(strategy), use_container_width=True, hide_index=True)

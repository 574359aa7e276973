"""
Main Streamlit application.
"""

import logging

import streamlit as st

from config import DEFAULT_PLAYER_PATTERN, FRAME_INTERVAL_S, PATTERN_LENGTH
from game_logic import parse_pattern
from models import Coin, Pattern, Snapshot, SpeedTier
from simulation import FrameScheduler, GameLoop, now_ms

from ui import (
    print_rules,
    render_history_window,
    render_matchup_table,
    render_scoreboard,
    render_win_share_chart,
)

POSITIONS = ["First", "Second", "Third"]


def publish_snapshot(snapshot: Snapshot) -> None:
    st.session_state["snapshot"] = snapshot


def init_session() -> None:
    if "loop" in st.session_state:
        return
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    scheduler = FrameScheduler()
    loop = GameLoop(scheduler.schedule_next_tick, publish_snapshot)
    st.session_state["scheduler"] = scheduler
    st.session_state["loop"] = loop
    st.session_state["snapshot"] = loop.snapshot()


def read_player_pattern(disabled: bool) -> Pattern:
    """Three Heads/Tails radios, one per position."""
    default = parse_pattern(DEFAULT_PLAYER_PATTERN)
    columns = st.columns(PATTERN_LENGTH)
    coins = []
    for i, col in enumerate(columns):
        with col:
            choice = st.radio(
                f"{POSITIONS[i]} toss",
                ["Heads", "Tails"],
                index=0 if default[i] is Coin.HEADS else 1,
                key=f"coin_{i}",
                disabled=disabled,
            )
            coins.append(Coin.HEADS if choice == "Heads" else Coin.TAILS)
    return tuple(coins)


@st.fragment(run_every=FRAME_INTERVAL_S)
def live_panel() -> None:
    """Fires pending ticks on every frame, then renders the latest snapshot."""
    scheduler: FrameScheduler = st.session_state["scheduler"]
    scheduler.run_pending(now_ms())

    snapshot: Snapshot = st.session_state["snapshot"]
    if not snapshot.player_pattern:
        st.info("Pick your sequence and press Go.")
        return
    render_scoreboard(snapshot)
    render_history_window(snapshot)
    render_win_share_chart(snapshot)


def run_app() -> None:
    """Run the main Streamlit application."""
    st.set_page_config(page_title="Penney's Game", layout="wide")
    st.title("Penney's Game")

    init_session()
    loop: GameLoop = st.session_state["loop"]

    with st.expander("Game rules", expanded=False):
        print_rules()
        render_matchup_table()

    # Controls
    pattern = read_player_pattern(disabled=loop.running)
    speed = SpeedTier(
        st.radio(
            "Simulation speed",
            [s.value for s in SpeedTier],
            horizontal=True,
            key="speed",
        )
    )
    loop.set_speed(speed)

    col_go, col_stop = st.columns([1, 1])
    with col_go:
        if st.button("▶ Go", disabled=loop.running):
            loop.start(pattern, speed)
            st.rerun()
    with col_stop:
        if st.button("⏹ Stop", disabled=not loop.running):
            loop.stop()
            st.rerun()

    live_panel()


if __name__ == "__main__":
    run_app()

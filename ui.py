"""
UI components and visualization helpers.
"""

from typing import Optional

import pandas as pd
import plotly.express as px
import streamlit as st

from analytics import matchup_table, win_probability
from config import (
    COLOR_MAP,
    FAST_TOSS_COUNT,
    FAST_UPDATE_INTERVAL_MS,
    HISTORY_UNAVAILABLE,
    MONTE_CARLO_RACES,
    SLOW_UPDATE_INTERVAL_MS,
)
from game_logic import parse_pattern
from models import Snapshot
from simulation import simulate_matchup


def print_rules() -> None:
    """Display the rules of the game."""
    st.markdown("### Penney's game")
    st.write("You pick a sequence of three coin tosses. The computer then picks its own.")
    st.write("A fair coin is tossed until one of the two sequences shows up; that side scores a point.")
    st.write("The tosses are then discarded and a new race starts from scratch.")
    st.write(
        "The computer always answers with the opposite of your second toss, "
        "followed by your first two tosses."
    )
    st.info(
        "Simulation speed:\n\n"
        f"- Slow: one toss every {SLOW_UPDATE_INTERVAL_MS} ms, with the live toss history.\n"
        f"- Fast: {FAST_TOSS_COUNT} tosses every {FAST_UPDATE_INTERVAL_MS} ms, history hidden."
    )


@st.cache_data(show_spinner=False)
def simulated_computer_share(player: str, computer: str, n_races: int) -> float:
    _, computer_share, _ = simulate_matchup(
        parse_pattern(player), parse_pattern(computer), n_races=n_races
    )
    return computer_share


def render_matchup_table() -> None:
    """Render the exact odds for every possible player choice, next to a simulated estimate."""
    st.markdown("#### Every choice and its best answer")
    data = []
    for row in matchup_table():
        data.append(
            {
                "Player": row["Player"],
                "Computer": row["Computer"],
                "P(computer wins)": float(row["P(computer wins)"]),
                "Simulated": simulated_computer_share(row["Player"], row["Computer"], MONTE_CARLO_RACES),
                "Odds": row["Odds"],
                "Expected tosses": float(row["Expected tosses"]),
            }
        )
    df = pd.DataFrame(data)
    st.dataframe(df, use_container_width=True, hide_index=True)
    st.caption(f"Simulated column estimated via Monte Carlo with {MONTE_CARLO_RACES} races per matchup.")


def render_scoreboard(snapshot: Snapshot) -> None:
    """Render both sequences and scores."""
    col_player, col_computer, col_tosses = st.columns(3)
    with col_player:
        st.metric(f"Player · {snapshot.player_pattern}", snapshot.player_score)
    with col_computer:
        st.metric(f"Computer · {snapshot.computer_pattern}", snapshot.computer_score)
    with col_tosses:
        st.metric("Tosses", snapshot.tosses)


def render_history_window(snapshot: Snapshot) -> None:
    st.markdown("#### Current race")
    if snapshot.history is None:
        st.caption(HISTORY_UNAVAILABLE)
    else:
        # Only the tail fits on screen
        st.code(snapshot.history[-60:] or " ", language=None)


def expected_computer_share(snapshot: Snapshot) -> Optional[float]:
    if not snapshot.player_pattern:
        return None
    player = parse_pattern(snapshot.player_pattern)
    computer = parse_pattern(snapshot.computer_pattern)
    return float(win_probability(computer, player))


def render_win_share_chart(snapshot: Snapshot) -> None:
    """Plot observed win shares next to the theoretical ones."""
    races = snapshot.player_score + snapshot.computer_score
    expected = expected_computer_share(snapshot)
    if races == 0 or expected is None:
        st.info("No races finished yet.")
        return

    observed = snapshot.computer_score / races
    rows = [
        {"source": "Observed", "side": "Player", "share": 1.0 - observed},
        {"source": "Observed", "side": "Computer", "share": observed},
        {"source": "Theory", "side": "Player", "share": 1.0 - expected},
        {"source": "Theory", "side": "Computer", "share": expected},
    ]
    df = pd.DataFrame(rows)

    fig = px.bar(
        df,
        x="source",
        y="share",
        color="side",
        color_discrete_map=COLOR_MAP,
        barmode="stack",
    )
    fig.update_layout(
        yaxis=dict(range=[0, 1], title="Share of races won"),
        xaxis=dict(title=None),
        height=300,
        margin=dict(l=10, r=10, t=30, b=10),
        legend_title_text="Side",
    )
    st.plotly_chart(fig, use_container_width=True)
    st.caption(f"{races} races finished.")

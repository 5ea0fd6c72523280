"""Speed Rush race dashboard.

Interactive front end built with Streamlit and Plotly.  Lets the player
pick a car, submit one action per turn, and watch fuel, time and lap
progress; also compares autopilot completion rates across the presets.

Launch with::

    streamlit run dashboard/app.py

Streamlit reruns this script on every interaction, so the engine lives in
``st.session_state`` and continuous decay stays off here (there is no
way to push ticker updates into a rendered page).
"""

from __future__ import annotations

from dataclasses import replace

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from speed_rush.config import build_engine, load_race_settings
from speed_rush.core.errors import RaceError
from speed_rush.core.monte_carlo import simulate_presets_monte_carlo
from speed_rush.core.race import PlayerAction, RaceEngine, RaceState

_STATUS: dict[RaceState, tuple[str, str]] = {
    RaceState.NOT_STARTED: ("info", "Select a car to start racing!"),
    RaceState.IN_PROGRESS: ("info", "Race in progress! Make your moves!"),
    RaceState.COMPLETED: ("success", "Congratulations! You completed the race!"),
    RaceState.GAME_OVER: ("error", "Game Over! You ran out of fuel or time."),
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_engine() -> RaceEngine:
    """Return the session's engine, creating it on first use."""
    if "engine" not in st.session_state:
        settings = load_race_settings()
        # Decay needs a push channel the page does not have.
        if settings.enable_decay:
            settings = replace(settings, enable_decay=False)
        st.session_state["engine"] = build_engine(settings)
    return st.session_state["engine"]


def _bar_colour(fraction: float, healthy: str) -> str:
    if fraction < 0.2:
        return "crimson"
    if fraction < 0.5:
        return "goldenrod"
    return healthy


def _gauge(title: str, fraction: float, healthy: str) -> go.Figure:
    fig = go.Figure(
        go.Indicator(
            mode="gauge+number",
            value=fraction * 100.0,
            number={"suffix": "%", "valueformat": ".1f"},
            title={"text": title},
            gauge={
                "axis": {"range": [0, 100]},
                "bar": {"color": _bar_colour(fraction, healthy)},
            },
        )
    )
    fig.update_layout(height=250, margin=dict(l=20, r=20, t=50, b=10))
    return fig


def _submit(engine: RaceEngine, action: PlayerAction) -> None:
    try:
        engine.submit_action(action)
    except RaceError as exc:
        st.session_state["last_error"] = str(exc)


def _start(engine: RaceEngine) -> None:
    vehicle = engine.available_vehicles[st.session_state["car_choice"]]
    try:
        engine.start(vehicle)
    except RaceError as exc:
        st.session_state["last_error"] = f"Failed to start race: {exc}"


# ---------------------------------------------------------------------------
# Streamlit app
# ---------------------------------------------------------------------------


def main() -> None:
    """Entry point for the Streamlit dashboard."""
    st.set_page_config(page_title="Speed Rush", layout="wide")
    st.title("Speed Rush")

    engine = _get_engine()
    cars = engine.available_vehicles

    # ── Sidebar ──────────────────────────────────────────────────────────
    st.sidebar.header("Car Selection")
    labels = [f"{c.name} ({c.category.value})" for c in cars]
    choice: int = st.sidebar.selectbox(
        "Car",
        options=list(range(len(cars))),
        format_func=lambda i: labels[i],
        key="car_choice",
        disabled=engine.state is RaceState.IN_PROGRESS,
    )
    selected = cars[choice]
    st.sidebar.caption(
        f"Max speed {selected.max_speed} mph -- "
        f"{selected.fuel_consumption:.1f} per turn -- "
        f"tank {selected.max_fuel:.1f} L"
    )

    st.sidebar.button(
        "Start Race",
        on_click=_start,
        args=(engine,),
        disabled=engine.state is RaceState.IN_PROGRESS,
    )
    st.sidebar.button("Reset", on_click=engine.reset)

    # ── Section 1: Race controls ─────────────────────────────────────────
    st.header("1 -- Race")

    kind, message = _STATUS[engine.state]
    getattr(st, kind)(message)

    in_progress = engine.state is RaceState.IN_PROGRESS
    col_a, col_b, col_c = st.columns(3)
    for col, label, action in (
        (col_a, "Speed Up", PlayerAction.SPEED_UP),
        (col_b, "Maintain Speed", PlayerAction.MAINTAIN_SPEED),
        (col_c, "Pit Stop", PlayerAction.PIT_STOP),
    ):
        col.button(
            label, on_click=_submit, args=(engine, action), disabled=not in_progress
        )

    error = st.session_state.pop("last_error", None)
    if error:
        st.warning(error)

    vehicle = engine.vehicle
    track = engine.track
    if vehicle is not None:
        lap = min(track.current_lap, track.total_laps)
        remaining = int(engine.remaining_time)
        col_l, col_s, col_t = st.columns(3)
        col_l.metric("Lap", f"{lap}/{track.total_laps}")
        col_s.metric("Speed", f"{vehicle.current_speed} mph")
        col_t.metric("Time Remaining", f"{remaining // 60}:{remaining % 60:02d}")
        st.code(track.progress_glyph())
        st.progress(track.overall_progress(), text="Overall progress")

        col_f, col_g = st.columns(2)
        col_f.plotly_chart(
            _gauge("Fuel", vehicle.fuel_fraction(), "seagreen"),
            use_container_width=True,
        )
        col_g.plotly_chart(
            _gauge("Time", engine.time_remaining_fraction(), "midnightblue"),
            use_container_width=True,
        )

    # ── Section 2: Results ───────────────────────────────────────────────
    if engine.state in (RaceState.COMPLETED, RaceState.GAME_OVER):
        st.header("2 -- Race Results")
        summary = engine.summary()
        col_1, col_2, col_3 = st.columns(3)
        col_1.metric("Laps", f"{summary.laps_completed}/{summary.total_laps}")
        col_2.metric("Turns", str(summary.turns))
        col_3.metric("Fuel Remaining", f"{summary.fuel_remaining:.1f} L")
        if summary.lap_times:
            laps_df = pd.DataFrame(
                {
                    "Lap": range(1, len(summary.lap_times) + 1),
                    "Race-clock seconds": summary.lap_times,
                }
            )
            st.dataframe(laps_df, hide_index=True)

    # ── Section 3: Autopilot comparison ──────────────────────────────────
    st.header("3 -- Autopilot Comparison")
    n_runs: int = st.slider(
        "Autopilot races per car", min_value=10, max_value=500, value=100, step=10
    )
    if st.button("Run Comparison"):
        with st.spinner("Running autopilot races..."):
            st.session_state["mc_results"] = simulate_presets_monte_carlo(
                n_runs,
                base_seed=42,
                max_race_time=engine.max_race_time,
                total_laps=track.total_laps,
                lap_distance=track.lap_distance,
            )

    if "mc_results" in st.session_state:
        results = st.session_state["mc_results"]
        probs: dict[str, float] = results["completion_probabilities"]
        fig = go.Figure(
            go.Bar(x=list(probs.keys()), y=list(probs.values()), marker_color="#e10600")
        )
        fig.update_layout(
            title="Completion Probability",
            yaxis=dict(range=[0, 1], title="Probability"),
            height=350,
        )
        st.plotly_chart(fig, use_container_width=True)
        st.dataframe(
            pd.DataFrame(
                {
                    "Completion": results["completion_probabilities"],
                    "Turns": results["expected_turns"],
                    "Laps": results["expected_laps"],
                    "Fuel left": results["expected_fuel_remaining"],
                }
            ).round(3)
        )


if __name__ == "__main__":
    main()

# common/ui.py
from __future__ import annotations
from html import escape
from pathlib import Path
from typing import Sequence, Tuple

import matplotlib.pyplot as plt
import streamlit as st
import streamlit.components.v1 as components

from common.colors import H2H_COLORS, WIN_COLOR, LOSE_COLOR, pick_player_colors
from common.config import DashboardConfig
from common.plots import plot_head_to_head, plot_win_pct_over_time
from common.utils import safe_rerun, selectbox_with_placeholder
from controllers.stats_controller import MatchStatsEngine
from models.match_model import Match

# Project root (where main.py lives)
APP_ROOT = Path(__file__).resolve().parents[1]

FORCE_REFRESH_KEY = "force_refresh"
SHOW_FORM_KEY     = "show_form"
H2H_PAIR_KEY      = "h2h_pair"

SMALL_FIGSIZE = (5.2, 2.4)


def _link_if_exists(rel_path: str, label: str, icon: str = "📄"):
    """Safely add a page link if the target file exists."""
    target = (APP_ROOT / rel_path)
    if target.exists():
        # Streamlit expects an app-relative path with forward slashes
        st.sidebar.page_link(rel_path.replace("\\", "/"), label=label, icon=icon)


def request_refresh() -> None:
    """Ask the next run to reload the sheet, then rerun."""
    st.session_state[FORCE_REFRESH_KEY] = True
    safe_rerun()


def pop_refresh_request() -> bool:
    return bool(st.session_state.pop(FORCE_REFRESH_KEY, False))


def sidebar_header(config: DashboardConfig, show_custom_nav: bool = False):
    # Hide the built-in pages nav so only our custom links appear
    st.markdown(
        "<style>[data-testid='stSidebarNav']{display:none !important;}</style>",
        unsafe_allow_html=True,
    )
    with st.sidebar:
        if st.button("🔄 Refresh Data", key="refresh_btn", use_container_width=True):
            request_refresh()

        if config.has_form:
            st.toggle("➕ Add Score", key=SHOW_FORM_KEY)

        if show_custom_nav:
            st.divider()
            st.markdown("#### Pages")
            _link_if_exists("main.py", label="Dashboard", icon="🏠")
            _link_if_exists("pages/1_Head_to_Head.py", label="Head to Head", icon="👥")


def versus_panel(left: str, left_val: int, right: str, right_val: int):
    """One bordered 'A  n  VS  m  B' card."""
    html = (
        '<div style="border:2px solid #e5e7eb;border-radius:8px;padding:12px;'
        'display:flex;justify-content:space-between;align-items:center;margin-bottom:12px">'
        f'<div style="flex:1;text-align:center"><div style="font-weight:700">{escape(left)}</div>'
        f'<div style="font-size:1.8rem;font-weight:700;color:{H2H_COLORS[0]}">{left_val}</div></div>'
        '<div style="color:#9ca3af;font-weight:700">VS</div>'
        f'<div style="flex:1;text-align:center"><div style="font-weight:700">{escape(right)}</div>'
        f'<div style="font-size:1.8rem;font-weight:700;color:{H2H_COLORS[1]}">{right_val}</div></div>'
        '</div>'
    )
    st.markdown(html, unsafe_allow_html=True)


def feed_colors(m: Match) -> Tuple[str, str]:
    """(player1 color, player2 color); only the set's winner is highlighted, nobody on a tie."""
    if not m.winner:
        return LOSE_COLOR, LOSE_COLOR
    return (WIN_COLOR, LOSE_COLOR) if m.score1 > m.score2 else (LOSE_COLOR, WIN_COLOR)


def render_match_feed(matches: Sequence[Match]):
    """Recent sets, newest first; the winner's name is highlighted."""
    if not matches:
        st.info("No sets recorded yet.")
        return
    for m in matches:
        c1, c2 = feed_colors(m)
        st.markdown(
            '<div style="border-left:4px solid #3b82f6;background:#f9fafb;padding:10px 14px;'
            'border-radius:4px;margin-bottom:8px;display:flex;justify-content:space-between;flex-wrap:wrap">'
            f'<span style="color:#4b5563;font-size:0.85rem">{escape(m.date)}</span>'
            f'<span><b style="color:{c1}">{escape(m.player1)}</b>&nbsp;&nbsp;'
            f'<b style="font-size:1.2rem">{m.score1} - {m.score2}</b>&nbsp;&nbsp;'
            f'<b style="color:{c2}">{escape(m.player2)}</b></span>'
            '</div>',
            unsafe_allow_html=True,
        )


def render_win_pct_chart(engine: MatchStatsEngine, players: Sequence[str]):
    history = engine.history_frame(players)
    if history.empty:
        st.info("No sets to chart yet.")
        return
    fig, ax = plt.subplots(figsize=(9.0, 4.0), constrained_layout=True)
    plot_win_pct_over_time(history, players, colors_map=pick_player_colors(players), ax=ax)
    st.pyplot(fig, use_container_width=True)
    plt.close(fig)


class StreamlitRenderer:
    """Draws the setup / error / dashboard views with Streamlit widgets."""

    def render_setup(self, config: DashboardConfig) -> None:
        st.title("⚙️ Configuration Required")
        st.warning("The dashboard needs a Google Sheets API key and a spreadsheet id.")
        st.markdown(
            "1. Get a Google Sheets API key from the "
            "[Google Cloud Console](https://console.cloud.google.com/apis/credentials).\n"
            "2. Copy the spreadsheet id from your Google Sheet URL "
            "(`https://docs.google.com/spreadsheets/d/<id>/edit`).\n"
            "3. Put both in `.streamlit/secrets.toml` under `[sheets]`, or in a `.env` file.\n"
            "4. Update the sheet name if your responses tab is not "
            f"`{config.sheet_name or 'Form Responses 1'}`.\n"
            "5. Optionally add the Google Form URL to enable **Add Score**.\n"
            "6. Reload this page."
        )
        st.markdown("**Example `.streamlit/secrets.toml`:**")
        st.code(
            '[sheets]\n'
            'api_key = "AIza..."\n'
            'spreadsheet_id = "1Wrw7-..."\n'
            'sheet_name = "Form Responses 1"\n'
            'form_url = "https://docs.google.com/forms/d/e/.../viewform"',
            language="toml",
        )
        st.markdown("**Or `.env`:**")
        st.code(
            "TENNIS_API_KEY=AIza...\n"
            "TENNIS_SPREADSHEET_ID=1Wrw7-...\n"
            "TENNIS_SHEET_NAME=Form Responses 1\n"
            "TENNIS_FORM_URL=https://docs.google.com/forms/d/e/.../viewform",
            language="bash",
        )

    def render_error(self, message: str) -> None:
        st.error(f"**Error:** {message}")
        if st.button("Retry", key="retry_btn", type="primary", use_container_width=True):
            request_refresh()

    def render_form(self, config: DashboardConfig) -> None:
        if not (config.has_form and st.session_state.get(SHOW_FORM_KEY)):
            return
        st.subheader("📝 Add New Score")
        st.caption("New scores appear after the next refresh.")
        components.iframe(config.form_url, height=600, scrolling=True)

    def render_dashboard(self, engine: MatchStatsEngine, config: DashboardConfig) -> None:
        players = engine.players()

        st.title("🎾 Tennis Dashboard")
        st.caption(", ".join(players))
        self.render_form(config)

        st.subheader("🏆 Leaderboard")
        st.dataframe(
            engine.leaderboard(),
            use_container_width=True,
            hide_index=True,
            column_config={
                "Win %": st.column_config.NumberColumn(format="%.1f%%"),
                "Game Win %": st.column_config.NumberColumn(format="%.1f%%"),
            },
        )

        grid = engine.head_to_head_grid()
        st.subheader("👥 Head-to-Head Sets")
        self._render_grid(grid, "P1 Sets", "P2 Sets")
        st.subheader("🎾 Head-to-Head Games")
        self._render_grid(grid, "P1 Games", "P2 Games")

        st.subheader("📈 Game Win % Over Time")
        render_win_pct_chart(engine, players)

        st.subheader("📅 Recent Sets")
        render_match_feed(engine.recent_matches())

    def _render_grid(self, grid, left_col: str, right_col: str, per_row: int = 3) -> None:
        if grid.empty:
            st.info("Head-to-head needs at least two players.")
            return
        rows = grid.to_dict("records")
        for start in range(0, len(rows), per_row):
            cols = st.columns(per_row)
            for col, rec in zip(cols, rows[start:start + per_row]):
                with col:
                    versus_panel(rec["Player 1"], int(rec[left_col]),
                                  rec["Player 2"], int(rec[right_col]))


class HeadToHeadRenderer(StreamlitRenderer):
    """Same setup/error views as the dashboard; the main view compares two players."""

    def render_dashboard(self, engine: MatchStatsEngine, config: DashboardConfig) -> None:
        st.header("Head to Head")
        players = engine.players()
        if len(players) < 2:
            st.info("Head-to-head needs at least two players.")
            return

        prev = st.session_state.get(H2H_PAIR_KEY) or (None, None)
        c1, c2 = st.columns(2)
        with c1:
            p1 = selectbox_with_placeholder(
                "First player", players, key="h2h_p1",
                default_index=players.index(prev[0]) if prev[0] in players else 0,
            )
        with c2:
            others = [p for p in players if p != p1]
            p2 = selectbox_with_placeholder(
                "Second player", others, key="h2h_p2",
                default_index=others.index(prev[1]) if prev[1] in others else None,
            )
        if not p1 or not p2:
            st.stop()
        st.session_state[H2H_PAIR_KEY] = (p1, p2)

        sets = engine.head_to_head(p1, p2)
        games = engine.head_to_head_games(p1, p2)

        left, right = st.columns(2)
        with left:
            st.subheader("Sets")
            versus_panel(p1, sets.p1_wins, p2, sets.p2_wins)
        with right:
            st.subheader("Games")
            versus_panel(p1, games.p1_games, p2, games.p2_games)

        fig, ax = plt.subplots(figsize=SMALL_FIGSIZE, constrained_layout=True)
        plot_head_to_head(sets, games, colors_map={p1: H2H_COLORS[0], p2: H2H_COLORS[1]}, ax=ax)
        st.pyplot(fig, use_container_width=False)
        plt.close(fig)

        st.subheader("Game Win % Over Time")
        st.caption("Across all of each player's sets, not only the ones against each other.")
        render_win_pct_chart(engine, [p1, p2])

        st.subheader("Meetings")
        render_match_feed(engine.head_to_head_matches(p1, p2))

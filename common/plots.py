# common/plots.py
from __future__ import annotations
from typing import Dict, Optional, Sequence

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import matplotlib.patheffects as pe

from common.colors import PLAYER_PALETTE, pick_player_colors
from models.match_model import HeadToHead, HeadToHeadGames

DEFAULT_FIGSIZE = (8.0, 3.6)

def _new_ax(ax=None, figsize=DEFAULT_FIGSIZE):
    """Return a compact figure/axes when ax is None; otherwise reuse the axes."""
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize, constrained_layout=True)
    else:
        fig = ax.figure
    return fig, ax

# --- color helpers for outlines on light colors ---
def _hex_to_rgb01(hexs: str):
    h = hexs.strip().lstrip("#")
    r = int(h[0:2], 16) / 255.0
    g = int(h[2:4], 16) / 255.0
    b = int(h[4:6], 16) / 255.0
    return r, g, b

def _is_light_color(hexs: str, thr: float = 0.90) -> bool:
    """Perceived luminance threshold (Y) to decide if we need an outline."""
    try:
        r, g, b = _hex_to_rgb01(hexs)
        Y = 0.2126*r + 0.7152*g + 0.0722*b
        return Y >= thr
    except (ValueError, IndexError):
        return False

def _edge_kw_for(hexs: str) -> dict:
    """Return edgecolor/linewidth kwargs for bars when color is very light."""
    return {"edgecolor": "black", "linewidth": 1.0} if _is_light_color(hexs) else {}

def _outline_line_if_light(line_obj, hexs: str):
    """Give a black stroke outline to very light lines so they're visible."""
    if _is_light_color(hexs):
        lw = line_obj.get_linewidth()
        line_obj.set_path_effects([pe.Stroke(linewidth=lw + 1.5, foreground="black"), pe.Normal()])


# --- Game win % over time (one line per player) ----------------
def plot_win_pct_over_time(history_df: pd.DataFrame,
                           players: Sequence[str],
                           colors_map: Optional[Dict[str, str]] = None,
                           ax: Optional[plt.Axes] = None,
                           show_legend: bool = True) -> plt.Axes:
    """
    `history_df` is the long frame from `build_history_frame`. The x axis is the
    player's n-th set (not a calendar date), the y axis the cumulative game-win %.
    """
    colors = colors_map or pick_player_colors(players, PLAYER_PALETTE)
    fig, ax = _new_ax(ax)

    for player in players:
        tmp = history_df[history_df["Player"] == player].sort_values("Index")
        if tmp.empty:
            continue
        col = colors.get(player, "#888888")
        line = ax.plot(tmp["Index"].values, tmp["WinPct"].values,
                       color=col, linewidth=2, marker="s", markersize=3, label=player)[0]
        _outline_line_if_light(line, col)

    ax.set_ylim(0, 100)
    ax.set_yticks(np.arange(0, 101, 10))
    ax.yaxis.set_major_formatter(lambda v, _pos: f"{v:.0f}%")
    ax.grid(axis="y", color="#e5e7eb", linewidth=1)
    ax.set_facecolor("#f9fafb")
    ax.set_xlabel("Sets played", fontsize=8)
    ax.set_ylabel("Game win %", fontsize=8)
    ax.tick_params(axis="both", labelsize=7)
    ax.xaxis.get_major_locator().set_params(integer=True)

    if show_legend and not history_df.empty:
        ax.legend(loc="upper center", bbox_to_anchor=(0.5, -0.18),
                  ncol=max(1, min(len(players), 5)), frameon=False, fontsize=8)
    return ax


# --- Head to head (grouped bars: sets and games) ----------------
def plot_head_to_head(sets: HeadToHead,
                      games: HeadToHeadGames,
                      colors_map: Optional[Dict[str, str]] = None,
                      ax: Optional[plt.Axes] = None,
                      title: str = "") -> plt.Axes:
    fig, ax = _new_ax(ax, figsize=(5.2, 2.4))
    colors = colors_map or {}

    p1, p2 = sets.player1, sets.player2
    col_p1 = colors.get(p1, "#777777")
    col_p2 = colors.get(p2, "#999999")

    labels = ["Sets", "Games"]
    p1_vals = [sets.p1_wins, games.p1_games]
    p2_vals = [sets.p2_wins, games.p2_games]

    x = np.arange(len(labels), dtype=float)
    w = 0.42
    bars1 = ax.bar(x - w/2, p1_vals, width=w, color=col_p1, label=p1, **_edge_kw_for(col_p1))
    bars2 = ax.bar(x + w/2, p2_vals, width=w, color=col_p2, label=p2, **_edge_kw_for(col_p2))
    ax.bar_label(bars1, fontsize=7)
    ax.bar_label(bars2, fontsize=7)

    ax.set_xticks(x, labels)
    ax.set_title(title)
    ax.tick_params(axis="both", labelsize=7)
    ax.legend(frameon=False, fontsize=7)
    return ax

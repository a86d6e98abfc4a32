# common/colors.py
from __future__ import annotations
from typing import Dict, Iterable, Tuple

# Line colors for the chart, assigned in player order and cycled
PLAYER_PALETTE = ("#10b981", "#3b82f6", "#f59e0b", "#ef4444", "#8b5cf6")

# Head-to-head panel accents (left / right player)
H2H_COLORS = ("#16a34a", "#2563eb")

WIN_COLOR  = "#16a34a"
LOSE_COLOR = "#4b5563"


def player_color(index: int, palette: Tuple[str, ...] = PLAYER_PALETTE) -> str:
    return palette[index % len(palette)]


def pick_player_colors(players: Iterable[str], palette: Tuple[str, ...] = PLAYER_PALETTE) -> Dict[str, str]:
    """Return {player: hex} in the given order, cycling the palette."""
    return {p: player_color(i, palette) for i, p in enumerate(players)}

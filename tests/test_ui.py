"""Tests for the small presentation helpers that do not need a running app."""

from __future__ import annotations

import pytest

from common.colors import LOSE_COLOR, WIN_COLOR
from common.ui import feed_colors
from models.match_model import Match


@pytest.mark.parametrize(
    ("match", "winner"),
    [
        (Match("1/1/2024", "A", 6, "B", 2), "A"),
        (Match("1/1/2024", "A", 3, "B", 6), "B"),
        (Match("1/1/2024", "A", 6, "B", 6), ""),
        (Match("1/1/2024", "A", 0, "B", 0), ""),
    ],
)
def test_match_winner(match, winner) -> None:
    assert match.winner == winner


def test_feed_highlights_player1_win() -> None:
    assert feed_colors(Match("1/1/2024", "A", 6, "B", 2)) == (WIN_COLOR, LOSE_COLOR)


def test_feed_highlights_player2_win() -> None:
    assert feed_colors(Match("1/1/2024", "A", 3, "B", 6)) == (LOSE_COLOR, WIN_COLOR)


def test_feed_tie_highlights_nobody() -> None:
    assert feed_colors(Match("1/1/2024", "A", 5, "B", 5)) == (LOSE_COLOR, LOSE_COLOR)


def test_feed_same_name_on_both_sides() -> None:
    assert feed_colors(Match("1/1/2024", "A", 2, "A", 6)) == (LOSE_COLOR, WIN_COLOR)

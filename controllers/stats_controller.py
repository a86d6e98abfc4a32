"""
Statistics engine used by the pages.

`MatchStatsEngine` owns one snapshot of the match list (newest first) and
answers read-only queries about it. The snapshot is never edited: a refresh
builds a new engine and the controller swaps it in whole.
"""

from __future__ import annotations
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from common.constants import RECENT_MATCHES_LIMIT
from common.metrics import (
    get_players, get_player_stats, get_head_to_head, get_head_to_head_games,
    get_win_percentage_over_time, head_to_head_matches,
    build_leaderboard, build_head_to_head_grid, build_history_frame, recent_matches,
)
from common.parsing import parse_sheet_values
from models.match_model import Match, PlayerStats, HeadToHead, HeadToHeadGames, PlayerHistory


class MatchStatsEngine:
    def __init__(self, matches: Iterable[Match] = ()):
        self._matches: Tuple[Match, ...] = tuple(matches)

    @classmethod
    def from_rows(cls, values: Sequence[Sequence[Any]]) -> "MatchStatsEngine":
        """Build from the raw sheet `values` (header row included)."""
        return cls(parse_sheet_values(values))

    @property
    def matches(self) -> Tuple[Match, ...]:
        return self._matches

    def __len__(self) -> int:
        return len(self._matches)

    def players(self) -> List[str]:
        return get_players(self._matches)

    def player_stats(self, player: str) -> PlayerStats:
        return get_player_stats(self._matches, player)

    def all_player_stats(self) -> List[PlayerStats]:
        return [get_player_stats(self._matches, p) for p in self.players()]

    def head_to_head(self, p1: str, p2: str) -> HeadToHead:
        return get_head_to_head(self._matches, p1, p2)

    def head_to_head_games(self, p1: str, p2: str) -> HeadToHeadGames:
        return get_head_to_head_games(self._matches, p1, p2)

    def head_to_head_matches(self, p1: str, p2: str) -> List[Match]:
        return head_to_head_matches(self._matches, p1, p2)

    def win_pct_over_time(self, players: Optional[Iterable[str]] = None) -> Mapping[str, PlayerHistory]:
        return get_win_percentage_over_time(self._matches, self.players() if players is None else players)

    def leaderboard(self) -> pd.DataFrame:
        return build_leaderboard(self._matches)

    def head_to_head_grid(self) -> pd.DataFrame:
        return build_head_to_head_grid(self._matches)

    def history_frame(self, players: Optional[Iterable[str]] = None) -> pd.DataFrame:
        return build_history_frame(self.win_pct_over_time(players))

    def recent_matches(self, limit: int = RECENT_MATCHES_LIMIT) -> List[Match]:
        return recent_matches(self._matches, limit)

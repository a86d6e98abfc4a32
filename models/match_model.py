"""
Small data models for match records and the statistics derived from them.

A `Match` is one row of the score sheet: a date, two players and two scores.
Despite the name, every entry models a single set, so "wins" in the stats
below are set wins and "games" are the per-set scores.

All classes are frozen (immutable) so the engine can hand them to the UI
without worrying about accidental modification.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple, Union

Number = Union[int, float]


@dataclass(frozen=True)
class Match:
        date: str
        player1: str
        score1: int
        player2: str
        score2: int

        @property
        def winner(self) -> str:
                """Name of the strict winner, or '' for a tie."""
                if self.score1 > self.score2:
                        return self.player1
                if self.score2 > self.score1:
                        return self.player2
                return ""


@dataclass(frozen=True)
class PlayerStats:
        name: str
        wins: int = 0
        losses: int = 0
        win_pct: Number = 0
        games_won: int = 0
        games_lost: int = 0
        avg_games_won: Number = 0
        game_win_pct: Number = 0


@dataclass(frozen=True)
class HeadToHead:
        player1: str
        player2: str
        p1_wins: int = 0
        p2_wins: int = 0


@dataclass(frozen=True)
class HeadToHeadGames:
        player1: str
        player2: str
        p1_games: int = 0
        p2_games: int = 0


@dataclass(frozen=True)
class WinPctPoint:
        date: str
        win_pct: float


@dataclass(frozen=True)
class PlayerHistory:
        games_won: int = 0
        games_lost: int = 0
        history: Tuple[WinPctPoint, ...] = field(default_factory=tuple)

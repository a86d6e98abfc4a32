"""
Statistics derived from the match list and data preparation for the UI.

This module provides:
    - per-player aggregation (`get_player_stats`): set wins/losses, set-win
        percentage, games won/lost and average games won per set,
    - head-to-head aggregation for one pair of players, both counted in sets
        (`get_head_to_head`) and in games (`get_head_to_head_games`),
    - the game-win-percentage-over-time series used by the line chart
        (`get_win_percentage_over_time`), and
    - DataFrame builders for the leaderboard, the head-to-head panels and the
        chart.

Function notes:
    - Every function takes the match list as stored by the engine, i.e. newest
        first. Only the time series needs chronological order and it reverses
        a copy itself.
    - A set with equal scores is a loss for *both* players in the per-player
        stats and credits nobody in the head-to-head tallies.
    - The leaderboard "Win %" is a percentage of sets, the chart is a
        percentage of games. They are different numbers on purpose.
"""

#Import libraries
from __future__ import annotations
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Sequence

import pandas as pd

from common.constants import LEADERBOARD_COLUMNS, RECENT_MATCHES_LIMIT
from common.utils import pct, ratio
from models.match_model import (
    Match, PlayerStats, HeadToHead, HeadToHeadGames, WinPctPoint, PlayerHistory,
)

H2H_COLUMNS = ["Player 1", "Player 2", "P1 Sets", "P2 Sets", "P1 Games", "P2 Games"]
HISTORY_COLUMNS = ["Player", "Index", "Date", "WinPct"]


# ---------- Players ----------
def get_players(matches: Iterable[Match]) -> List[str]:
    """Distinct non-empty player names, in order of first appearance."""
    seen: Dict[str, None] = {}
    for m in matches:
        if m.player1:
            seen.setdefault(m.player1, None)
        if m.player2:
            seen.setdefault(m.player2, None)
    return list(seen)


def get_player_stats(matches: Iterable[Match], player: str) -> PlayerStats:
    wins = losses = games_won = games_lost = 0

    for m in matches:
        if m.player1 == player:
            own, opp = m.score1, m.score2
        elif m.player2 == player:
            own, opp = m.score2, m.score1
        else:
            continue
        games_won += own
        games_lost += opp
        # strictly greater wins; a tie is a loss
        if own > opp:
            wins += 1
        else:
            losses += 1

    played = wins + losses
    return PlayerStats(
        name=player,
        wins=wins,
        losses=losses,
        win_pct=pct(wins, played),
        games_won=games_won,
        games_lost=games_lost,
        avg_games_won=ratio(games_won, played),
        game_win_pct=pct(games_won, games_won + games_lost),
    )


# ---------- Head to head ----------
def _is_pair(m: Match, p1: str, p2: str) -> bool:
    return (m.player1 == p1 and m.player2 == p2) or (m.player1 == p2 and m.player2 == p1)


def get_head_to_head(matches: Iterable[Match], p1: str, p2: str) -> HeadToHead:
    """Sets won by each of `p1` and `p2` in the sets they played each other."""
    p1_wins = p2_wins = 0
    for m in matches:
        if not _is_pair(m, p1, p2):
            continue
        if m.player1 == p1 and m.score1 > m.score2:
            p1_wins += 1
        elif m.player2 == p1 and m.score2 > m.score1:
            p1_wins += 1
        elif m.player1 == p2 and m.score1 > m.score2:
            p2_wins += 1
        elif m.player2 == p2 and m.score2 > m.score1:
            p2_wins += 1
    return HeadToHead(player1=p1, player2=p2, p1_wins=p1_wins, p2_wins=p2_wins)


def get_head_to_head_games(matches: Iterable[Match], p1: str, p2: str) -> HeadToHeadGames:
    """Games won by each of `p1` and `p2` in the sets they played each other."""
    p1_games = p2_games = 0
    for m in matches:
        if m.player1 == p1 and m.player2 == p2:
            p1_games += m.score1
            p2_games += m.score2
        elif m.player1 == p2 and m.player2 == p1:
            p1_games += m.score2
            p2_games += m.score1
    return HeadToHeadGames(player1=p1, player2=p2, p1_games=p1_games, p2_games=p2_games)


def head_to_head_matches(matches: Iterable[Match], p1: str, p2: str) -> List[Match]:
    return [m for m in matches if _is_pair(m, p1, p2)]


# ---------- Win % over time ----------
def get_win_percentage_over_time(matches: Sequence[Match], players: Iterable[str]) -> Mapping[str, PlayerHistory]:
    """
    Replay the sets oldest-first and record, for each requested player, their
    cumulative game-win percentage after every set they played.

    Returns a read-only {player -> PlayerHistory}; players without sets get an
    empty history.
    """
    totals: Dict[str, List[int]] = {p: [0, 0] for p in players}
    points: Dict[str, List[WinPctPoint]] = {p: [] for p in totals}

    def _add(player: str, won: int, lost: int, date: str) -> None:
        acc = totals[player]
        acc[0] += won
        acc[1] += lost
        # a 0-0 first set has no games yet; plot it at 0 %
        points[player].append(WinPctPoint(date=date, win_pct=float(pct(acc[0], acc[0] + acc[1]))))

    for m in reversed(matches):
        if m.player1 in totals:
            _add(m.player1, m.score1, m.score2, m.date)
        if m.player2 in totals:
            _add(m.player2, m.score2, m.score1, m.date)

    return MappingProxyType({
        p: PlayerHistory(games_won=totals[p][0], games_lost=totals[p][1], history=tuple(points[p]))
        for p in totals
    })


# ---------- Data prep for the UI ----------
def build_leaderboard(matches: Sequence[Match]) -> pd.DataFrame:
    """One row per player, ranked by set-win percentage (ties keep discovery order)."""
    stats = [get_player_stats(matches, p) for p in get_players(matches)]
    df = pd.DataFrame(
        [
            {
                "Player": s.name,
                "Sets Won": s.wins,
                "Sets Lost": s.losses,
                "Win %": float(s.win_pct),
                "Games Won": s.games_won,
                "Games Lost": s.games_lost,
                "Game Win %": float(s.game_win_pct),
            }
            for s in stats
        ],
        columns=LEADERBOARD_COLUMNS[1:],
    )
    df = df.sort_values("Win %", ascending=False, kind="mergesort").reset_index(drop=True)
    df.insert(0, "Rank", range(1, len(df) + 1))
    return df


def build_head_to_head_grid(matches: Sequence[Match]) -> pd.DataFrame:
    """Set and game tallies for every unordered pair of players."""
    players = get_players(matches)
    rows = []
    for i in range(len(players)):
        for j in range(i + 1, len(players)):
            sets = get_head_to_head(matches, players[i], players[j])
            games = get_head_to_head_games(matches, players[i], players[j])
            rows.append({
                "Player 1": players[i],
                "Player 2": players[j],
                "P1 Sets": sets.p1_wins,
                "P2 Sets": sets.p2_wins,
                "P1 Games": games.p1_games,
                "P2 Games": games.p2_games,
            })
    return pd.DataFrame(rows, columns=H2H_COLUMNS)


def build_history_frame(histories: Mapping[str, PlayerHistory]) -> pd.DataFrame:
    """Long-format (Player, Index, Date, WinPct) frame for plotting."""
    rows = [
        {"Player": player, "Index": idx, "Date": point.date, "WinPct": point.win_pct}
        for player, hist in histories.items()
        for idx, point in enumerate(hist.history)
    ]
    return pd.DataFrame(rows, columns=HISTORY_COLUMNS)


def recent_matches(matches: Sequence[Match], limit: int = RECENT_MATCHES_LIMIT) -> List[Match]:
    return list(matches[:limit])

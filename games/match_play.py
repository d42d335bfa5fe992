"""Hole-by-hole match play between two sides.

`play_match` is the shared engine behind the `match` format, every Nassau
segment and press, and two-team Best Ball.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Literal, Optional, Tuple

from pydantic import Field

from models.base import BaseGolfModel
from models.hole import HoleInfo
from models.player import Player
from models.score import Score

from .scoring import StrokesPerHoleMap, comparison_score, holes_in_play, index_scores

logger = logging.getLogger(__name__)

MatchStatus = Literal["not_started", "ongoing", "dormie", "won", "halved"]


class MatchHoleResult(BaseGolfModel):
    hole_number: int
    winner_id: Optional[str] = None  # None = halved
    scores: Dict[str, int] = Field(default_factory=dict)


class MatchPlayResult(BaseGolfModel):
    hole_results: List[MatchHoleResult] = Field(default_factory=list)
    leader_id: Optional[str] = None
    holes_up: int = 0
    holes_played: int = 0
    holes_remaining: int = 0
    match_status: MatchStatus = "not_started"
    winner_id: Optional[str] = None
    decided_on_hole: Optional[int] = None  # hole on which the result became final
    status_text: str = "Match not started"
    win_margin: Optional[str] = None
    hole_deltas: Dict[int, Dict[str, float]] = Field(default_factory=dict)

    @property
    def is_final(self) -> bool:
        return self.match_status in ("won", "halved")


HoleOutcome = Callable[[int], Optional[Tuple[int, int]]]


def play_match(
    side_a: str,
    side_b: str,
    holes: List[int],
    outcome: HoleOutcome,
    names: Optional[Dict[str, str]] = None,
) -> MatchPlayResult:
    """Score a match over `holes`.

    `outcome(hole)` returns the two sides' comparison scores, or None when the
    hole has not been completed. Scoring stops once the match is closed out.
    """
    names = names or {}
    total = len(holes)
    results: List[MatchHoleResult] = []
    a_won = b_won = played = 0
    decided_on: Optional[int] = None

    for hole in holes:
        pair = outcome(hole)
        if pair is None:
            continue
        a_score, b_score = pair
        played += 1
        winner = None
        if a_score < b_score:
            winner = side_a
            a_won += 1
        elif b_score < a_score:
            winner = side_b
            b_won += 1
        results.append(MatchHoleResult(
            hole_number=hole,
            winner_id=winner,
            scores={side_a: a_score, side_b: b_score},
        ))
        if abs(a_won - b_won) > total - played or played == total:
            decided_on = hole
            break

    remaining = total - played
    diff = a_won - b_won
    holes_up = abs(diff)
    leader = side_a if diff > 0 else side_b if diff < 0 else None
    leader_name = names.get(leader, leader) if leader else None

    status: MatchStatus = "ongoing"
    winner_id = None
    win_margin = None
    text = "All Square"
    if played == 0:
        status = "not_started"
        text = "Match not started"
    elif holes_up > remaining:
        status = "won"
        winner_id = leader
        win_margin = f"{holes_up} UP" if remaining == 0 else f"{holes_up}&{remaining}"
        text = f"{leader_name} wins {win_margin}"
    elif holes_up == remaining and holes_up > 0:
        status = "dormie"
        text = f"{leader_name} {holes_up} UP (Dormie)"
    elif remaining == 0 and holes_up == 0:
        status = "halved"
        text = "Match Halved"
    elif holes_up > 0:
        text = f"{leader_name} {holes_up} UP"

    return MatchPlayResult(
        hole_results=results,
        leader_id=leader,
        holes_up=holes_up,
        holes_played=played,
        holes_remaining=remaining,
        match_status=status,
        winner_id=winner_id,
        decided_on_hole=decided_on if status in ("won", "halved") else None,
        status_text=text,
        win_margin=win_margin,
    )


def player_outcome(
    scores: List[Score],
    player_a: str,
    player_b: str,
    strokes_map: Optional[StrokesPerHoleMap] = None,
    upto_hole: Optional[int] = None,
) -> HoleOutcome:
    """Hole outcome function comparing two individual players."""
    index = index_scores(scores, upto_hole)

    def outcome(hole: int) -> Optional[Tuple[int, int]]:
        a = comparison_score(index, player_a, hole, strokes_map)
        b = comparison_score(index, player_b, hole, strokes_map)
        if a is None or b is None:
            return None
        return a, b

    return outcome


def calculate_match_play(
    scores: List[Score],
    players: List[Player],
    hole_info: List[HoleInfo],
    strokes_map: Optional[StrokesPerHoleMap] = None,
    stakes: float = 0.0,
    upto_hole: Optional[int] = None,
) -> Optional[MatchPlayResult]:
    """Two-player match over the round. The winner collects `stakes` once when the match is decided."""
    if len(players) != 2:
        logger.debug("Match play requires 2 players, got %d", len(players))
        return None

    p1, p2 = players
    holes = holes_in_play(hole_info)
    result = play_match(
        p1.id,
        p2.id,
        holes,
        player_outcome(scores, p1.id, p2.id, strokes_map, upto_hole),
        names={p.id: p.name for p in players},
    )
    if result.winner_id and stakes and result.decided_on_hole is not None:
        loser_id = p2.id if result.winner_id == p1.id else p1.id
        result.hole_deltas = {
            result.decided_on_hole: {result.winner_id: stakes, loser_id: -stakes},
        }
    return result


def match_status_brief(result: MatchPlayResult) -> str:
    """Short status: "2 UP", "AS", "3&2", "Halved"."""
    if result.match_status == "won":
        return result.win_margin or "Won"
    if result.match_status == "halved":
        return "Halved"
    if result.holes_up == 0:
        return "AS"
    return f"{result.holes_up} UP"

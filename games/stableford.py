"""Stableford points by score relative to par."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from pydantic import Field

from models.base import BaseGolfModel
from models.hole import HoleInfo
from models.player import Player
from models.score import Score

from .scoring import StrokesPerHoleMap, comparison_score, holes_in_play, index_scores, round_money

logger = logging.getLogger(__name__)

# relative to par -> points; albatross or better and eagle differ in modified scoring
STANDARD_POINTS = {-3: 5, -2: 4, -1: 3, 0: 2, 1: 1, 2: 0}
MODIFIED_POINTS = {-3: 8, -2: 5, -1: 3, 0: 2, 1: 1, 2: 0}


def stableford_points(strokes: int, par: int, modified: bool = False) -> int:
    """Points for a hole. Worse than double bogey scores 0, or in modified
    scoring loses one point per stroke beyond the double."""
    table = MODIFIED_POINTS if modified else STANDARD_POINTS
    relative = strokes - par
    if relative <= -3:
        return table[-3]
    if relative <= 2:
        return table[relative]
    return -(relative - 2) if modified else 0


def points_label(points: int) -> str:
    if points >= 5:
        return "Albatross!"
    labels = {4: "Eagle", 3: "Birdie", 2: "Par", 1: "Bogey", 0: "No Points"}
    return labels.get(points, f"{points} pts")


class HolePoints(BaseGolfModel):
    hole: int
    points: int


class StablefordStanding(BaseGolfModel):
    player_id: str
    player_name: str = ""
    total_points: int = 0
    hole_points: List[HolePoints] = Field(default_factory=list)
    earnings: float = 0.0


class StablefordResult(BaseGolfModel):
    standings: List[StablefordStanding] = Field(default_factory=list)
    modified: bool = False
    holes_scored: int = 0
    complete: bool = False
    hole_deltas: Dict[int, Dict[str, float]] = Field(default_factory=dict)


def calculate_stableford(
    scores: List[Score],
    players: List[Player],
    hole_info: List[HoleInfo],
    modified: bool = False,
    strokes_map: Optional[StrokesPerHoleMap] = None,
    stakes: float = 0.0,
    upto_hole: Optional[int] = None,
) -> Optional[StablefordResult]:
    """Cumulative points per player.

    Money only moves once every player has scored every hole: each pair of
    players settles `stakes` per point of difference between them.
    """
    if not players:
        return None

    index = index_scores(scores, upto_hole)
    holes = holes_in_play(hole_info)
    pars = {h.number: h.par for h in hole_info}
    standings = {p.id: StablefordStanding(player_id=p.id, player_name=p.name) for p in players}
    scored_holes = set()

    for hole in holes:
        for player in players:
            value = comparison_score(index, player.id, hole, strokes_map)
            if value is None:
                continue
            points = stableford_points(value, pars[hole], modified)
            standing = standings[player.id]
            standing.total_points += points
            standing.hole_points.append(HolePoints(hole=hole, points=points))
            scored_holes.add(hole)

    complete = bool(holes) and all((p.id, h) in index for p in players for h in holes)
    hole_deltas: Dict[int, Dict[str, float]] = {}
    if complete and stakes and len(players) >= 2:
        total = sum(s.total_points for s in standings.values())
        count = len(players)
        deltas = {}
        for pid, standing in standings.items():
            # sum over opponents of (mine - theirs)
            amount = stakes * (count * standing.total_points - total)
            standing.earnings = round_money(amount)
            if amount:
                deltas[pid] = amount
        if deltas:
            hole_deltas[holes[-1]] = deltas

    return StablefordResult(
        standings=sorted(standings.values(), key=lambda s: s.total_points, reverse=True),
        modified=modified,
        holes_scored=len(scored_holes),
        complete=complete,
        hole_deltas=hole_deltas,
    )

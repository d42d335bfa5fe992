"""Skins: lowest score on a hole wins the pot, ties carry over."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from pydantic import Field

from models.base import BaseGolfModel
from models.player import Player
from models.score import Score

from .scoring import StrokesPerHoleMap, hole_complete, hole_scores, index_scores, round_money

logger = logging.getLogger(__name__)


class SkinHoleResult(BaseGolfModel):
    hole_number: int
    winner_id: Optional[str] = None   # None = push
    value: int = 0                    # skins won on this hole, carryovers included
    pot: float = 0.0                  # everyone's stake for the hole times skins in play
    carryover_after: int = 0


class SkinsStanding(BaseGolfModel):
    player_id: str
    player_name: str = ""
    skins: int = 0
    earnings: float = 0.0


class SkinsHoleContext(BaseGolfModel):
    pot_value: float
    carryovers: int
    message: str


class SkinsResult(BaseGolfModel):
    results: List[SkinHoleResult] = Field(default_factory=list)
    standings: List[SkinsStanding] = Field(default_factory=list)
    carryover: int = 0
    pot_per_skin: float = 0.0
    hole_deltas: Dict[int, Dict[str, float]] = Field(default_factory=dict)


def calculate_skins(
    scores: List[Score],
    players: List[Player],
    holes_played: int,
    stakes: float,
    carryover: bool = True,
    strokes_map: Optional[StrokesPerHoleMap] = None,
) -> Optional[SkinsResult]:
    """Play out skins for holes 1..holes_played.

    A hole is contested once every player has a score on it. An outright
    winner collects stakes x (1 + carryovers) from each other player.
    """
    if len(players) < 2:
        logger.debug("Skins needs at least 2 players, got %d", len(players))
        return None

    index = index_scores(scores, upto_hole=holes_played)
    player_ids = [p.id for p in players]
    others = len(players) - 1

    skins_won = {pid: 0 for pid in player_ids}
    earnings = {pid: 0.0 for pid in player_ids}
    results: List[SkinHoleResult] = []
    hole_deltas: Dict[int, Dict[str, float]] = {}
    carry = 0

    for hole in range(1, holes_played + 1):
        if not hole_complete(index, player_ids, hole):
            continue

        by_player = hole_scores(index, players, hole, strokes_map)
        low = min(by_player.values())
        winners = [pid for pid, value in by_player.items() if value == low]
        skins_in_play = 1 + carry

        if len(winners) == 1:
            winner_id = winners[0]
            per_loser = stakes * skins_in_play
            deltas = {pid: -per_loser for pid in player_ids if pid != winner_id}
            deltas[winner_id] = per_loser * others
            for pid, amount in deltas.items():
                earnings[pid] += amount
            skins_won[winner_id] += skins_in_play
            hole_deltas[hole] = deltas
            results.append(SkinHoleResult(
                hole_number=hole,
                winner_id=winner_id,
                value=skins_in_play,
                pot=stakes * len(players) * skins_in_play,
                carryover_after=0,
            ))
            carry = 0
        else:
            if carryover:
                carry += 1
            results.append(SkinHoleResult(
                hole_number=hole,
                winner_id=None,
                value=0,
                pot=stakes * len(players) * skins_in_play,
                carryover_after=carry,
            ))

    standings = [
        SkinsStanding(
            player_id=p.id,
            player_name=p.name,
            skins=skins_won[p.id],
            earnings=round_money(earnings[p.id]),
        )
        for p in players
    ]
    standings.sort(key=lambda s: s.skins, reverse=True)

    return SkinsResult(
        results=results,
        standings=standings,
        carryover=carry,
        pot_per_skin=stakes * len(players),
        hole_deltas=hole_deltas,
    )


def skins_hole_result(results: List[SkinHoleResult], hole_number: int) -> Optional[SkinHoleResult]:
    for result in results:
        if result.hole_number == hole_number:
            return result
    return None


def skins_hole_context(
    scores: List[Score],
    players: List[Player],
    current_hole: int,
    stakes: float,
    carryover: bool = True,
    strokes_map: Optional[StrokesPerHoleMap] = None,
) -> SkinsHoleContext:
    """What the current hole is worth given the carryovers from holes before it."""
    carries = 0
    result = calculate_skins(scores, players, current_hole - 1, stakes, carryover, strokes_map)
    if result is not None:
        carries = result.carryover

    base_value = stakes * len(players)
    pot_value = base_value * (1 + carries)
    if carries:
        message = f"${pot_value:g} ({carries} carryover{'s' if carries > 1 else ''})"
    else:
        message = f"${base_value:g}"
    return SkinsHoleContext(pot_value=pot_value, carryovers=carries, message=message)

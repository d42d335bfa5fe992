"""Wolf: a rotating captain picks a partner, goes Lone Wolf, or Blind Wolf.

The wolf for a hole is never stored; it is always `players[(hole - 1) % 4]`
in order_index order. Only the wolf's decision and the hole's outcome are
recorded, as append-only WolfHoleResult entries.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from pydantic import Field

from models.base import BaseGolfModel
from models.exceptions import WolfDecisionError
from models.player import Player
from models.score import Score
from models.wolf import WinningTeam, WolfHoleResult

from .config import get_settings
from .scoring import StrokesPerHoleMap, comparison_score, index_scores, round_money

logger = logging.getLogger(__name__)

BASE_POINTS = 4        # the base pot is stakes x 4
LONE_WOLF_FACTOR = 3


class WolfStanding(BaseGolfModel):
    player_id: str
    player_name: str = ""
    total_points: float = 0.0
    times_as_wolf: int = 0
    lone_wolf_wins: int = 0
    blind_wolf_wins: int = 0
    earnings: float = 0.0


class WolfHoleContext(BaseGolfModel):
    wolf_id: str
    wolf_name: str
    partner_id: Optional[str] = None
    partner_name: Optional[str] = None
    is_blind_wolf: bool = False
    is_lone_wolf: bool = False
    decision_made: bool = False
    pot_value: float = 0.0
    carryovers: int = 0
    message: str = ""


class WolfResult(BaseGolfModel):
    results: List[WolfHoleResult] = Field(default_factory=list)
    standings: List[WolfStanding] = Field(default_factory=list)
    carryover: int = 0
    holes_played: int = 0
    hole_deltas: Dict[int, Dict[str, float]] = Field(default_factory=dict)


def _rotation(players: List[Player]) -> List[Player]:
    return sorted(players, key=lambda p: p.order_index)


def wolf_for_hole(players: List[Player], hole_number: int) -> Optional[Player]:
    if len(players) != 4:
        return None
    return _rotation(players)[(hole_number - 1) % 4]


def hunting_order(players: List[Player], hole_number: int) -> List[Player]:
    """Tee order for a hole: hunters in rotation order, the wolf last."""
    if len(players) != 4:
        return list(players)
    ordered = _rotation(players)
    wolf_index = (hole_number - 1) % 4
    return [p for i, p in enumerate(ordered) if i != wolf_index] + [ordered[wolf_index]]


def decision_multiplier(is_lone_wolf: bool, is_blind_wolf: bool, blind_multiplier: Optional[float] = None) -> float:
    """2v2 = 1, Lone Wolf = 3, Blind Wolf = 3 x blind multiplier (6 by default)."""
    if not is_lone_wolf:
        return 1
    if is_blind_wolf:
        return LONE_WOLF_FACTOR * (blind_multiplier or get_settings().blind_wolf_multiplier)
    return LONE_WOLF_FACTOR


def carryover_before(results: List[WolfHoleResult], hole_number: int, carryover: bool = True) -> int:
    """Consecutive pushes immediately before `hole_number` that roll into its pot."""
    if not carryover:
        return 0
    count = 0
    for result in sorted(results, key=lambda r: r.hole_number):
        if result.hole_number >= hole_number:
            break
        count = count + 1 if result.winning_team == "push" else 0
    return count


def calculate_wolf_hole_result(
    hole_number: int,
    players: List[Player],
    scores: List[Score],
    partner_id: Optional[str] = None,
    is_blind_wolf: bool = False,
    strokes_map: Optional[StrokesPerHoleMap] = None,
    carryovers: int = 0,
    blind_multiplier: Optional[float] = None,
) -> Optional[WolfHoleResult]:
    """Decide a hole once all four players have scored it.

    Each side's score is its best ball. Points are pot units:
    4 x (1 + carryovers) x decision multiplier; a push scores 0.
    """
    wolf = wolf_for_hole(players, hole_number)
    if wolf is None:
        return None

    index = index_scores(scores)
    by_player = {}
    for player in players:
        value = comparison_score(index, player.id, hole_number, strokes_map)
        if value is None:
            return None
        by_player[player.id] = value

    if partner_id is not None and (partner_id == wolf.id or partner_id not in by_player):
        raise WolfDecisionError(f"{partner_id!r} is not a valid partner for wolf {wolf.id!r}")

    wolf_side = [wolf.id] + ([partner_id] if partner_id else [])
    hunters = [pid for pid in by_player if pid not in wolf_side]
    wolf_best = min(by_player[pid] for pid in wolf_side)
    hunter_best = min(by_player[pid] for pid in hunters)

    winning_team: WinningTeam = "push"
    if wolf_best < hunter_best:
        winning_team = "wolf"
    elif hunter_best < wolf_best:
        winning_team = "hunters"

    points = 0.0
    if winning_team != "push":
        is_lone = partner_id is None
        points = BASE_POINTS * (1 + carryovers) * decision_multiplier(is_lone, is_blind_wolf, blind_multiplier)

    return WolfHoleResult(
        hole_number=hole_number,
        wolf_id=wolf.id,
        partner_id=partner_id,
        is_blind_wolf=is_blind_wolf and partner_id is None,
        winning_team=winning_team,
        points=points,
    )


def validate_blind_wolf(hole_number: int, scores: List[Score]) -> None:
    """Blind Wolf has to be declared before anyone has teed off on the hole."""
    if any(s.hole_number == hole_number for s in scores):
        raise WolfDecisionError(f"Blind Wolf must be declared before tee shots on hole {hole_number}")


def record_wolf_result(results: List[WolfHoleResult], result: WolfHoleResult) -> List[WolfHoleResult]:
    """Append a hole's result. Re-delivering the same result is a no-op; a
    different result for an already-recorded hole is rejected."""
    for existing in results:
        if existing.hole_number == result.hole_number:
            if existing == result:
                return list(results)
            raise WolfDecisionError(f"Hole {result.hole_number} already has a recorded wolf decision")
    return sorted([*results, result], key=lambda r: r.hole_number)


def wolf_hole_deltas(result: WolfHoleResult, player_ids: List[str], stakes: float) -> Dict[str, float]:
    """Money for one recorded hole. 2v2 splits the points across each side;
    a lone wolf takes (or pays) all points, hunters split them three ways."""
    if result.winning_team == "push" or not result.points:
        return {}
    amount = result.points * stakes
    sign = 1 if result.winning_team == "wolf" else -1

    deltas: Dict[str, float] = {}
    if result.partner_id is None:
        deltas[result.wolf_id] = sign * amount
        hunters = [pid for pid in player_ids if pid != result.wolf_id]
        for pid in hunters:
            deltas[pid] = -sign * amount / len(hunters)
    else:
        wolf_side = (result.wolf_id, result.partner_id)
        for pid in player_ids:
            deltas[pid] = (sign if pid in wolf_side else -sign) * amount / 2
    return deltas


def calculate_wolf_standings(
    results: List[WolfHoleResult],
    players: List[Player],
    stakes: float,
) -> List[WolfStanding]:
    standings = {p.id: WolfStanding(player_id=p.id, player_name=p.name) for p in players}
    player_ids = [p.id for p in players]

    for result in sorted(results, key=lambda r: r.hole_number):
        wolf = standings.get(result.wolf_id)
        if wolf is not None:
            wolf.times_as_wolf += 1
            if result.winning_team == "wolf" and result.partner_id is None:
                wolf.lone_wolf_wins += 1
                if result.is_blind_wolf:
                    wolf.blind_wolf_wins += 1
        for pid, amount in wolf_hole_deltas(result, player_ids, 1).items():
            if pid in standings:
                standings[pid].total_points += amount

    ordered = list(standings.values())
    for standing in ordered:
        standing.earnings = round_money(standing.total_points * stakes)
    ordered.sort(key=lambda s: s.total_points, reverse=True)
    return ordered


def calculate_wolf(
    players: List[Player],
    results: List[WolfHoleResult],
    stakes: float,
    carryover: bool = True,
    upto_hole: Optional[int] = None,
) -> Optional[WolfResult]:
    """Standings and money from the recorded hole results, read back as stored."""
    if len(players) != 4:
        logger.debug("Wolf requires exactly 4 players, got %d", len(players))
        return None

    relevant = sorted(
        (r for r in results if upto_hole is None or r.hole_number <= upto_hole),
        key=lambda r: r.hole_number,
    )
    player_ids = [p.id for p in players]
    hole_deltas = {}
    for result in relevant:
        deltas = wolf_hole_deltas(result, player_ids, stakes)
        if deltas:
            hole_deltas[result.hole_number] = deltas

    next_hole = (relevant[-1].hole_number + 1) if relevant else 1
    return WolfResult(
        results=relevant,
        standings=calculate_wolf_standings(relevant, players, stakes),
        carryover=carryover_before(relevant, next_hole, carryover),
        holes_played=len(relevant),
        hole_deltas=hole_deltas,
    )


def wolf_hole_context(
    players: List[Player],
    current_hole: int,
    results: List[WolfHoleResult],
    stakes: float,
    carryover: bool = True,
) -> Optional[WolfHoleContext]:
    wolf = wolf_for_hole(players, current_hole)
    if wolf is None:
        return None

    carries = carryover_before(results, current_hole, carryover)
    pot_value = stakes * BASE_POINTS * (1 + carries)
    current = next((r for r in results if r.hole_number == current_hole), None)

    if current is None:
        return WolfHoleContext(
            wolf_id=wolf.id,
            wolf_name=wolf.first_name,
            pot_value=pot_value,
            carryovers=carries,
            message=f"{wolf.first_name} is Wolf",
        )

    partner = next((p for p in players if p.id == current.partner_id), None)
    if current.is_blind_wolf:
        message = "Blind Wolf!"
    elif partner is not None:
        message = f"Partnered with {partner.first_name}"
    else:
        message = "Lone Wolf!"
    return WolfHoleContext(
        wolf_id=wolf.id,
        wolf_name=wolf.first_name,
        partner_id=current.partner_id,
        partner_name=partner.first_name if partner else None,
        is_blind_wolf=current.is_blind_wolf,
        is_lone_wolf=current.partner_id is None,
        decision_made=True,
        pot_value=pot_value,
        carryovers=carries,
        message=message,
    )


def is_wolf_decision_pending(hole_number: int, results: List[WolfHoleResult], has_scores: bool) -> bool:
    """Players have teed off but the wolf's decision is not recorded yet."""
    return has_scores and not any(r.hole_number == hole_number for r in results)

"""Shared score lookups used by every game calculator."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from models.hole import HoleInfo
from models.player import Player
from models.score import Score

# player_id -> {hole_number: strokes received}
StrokesPerHoleMap = Dict[str, Dict[int, int]]
ScoreIndex = Dict[Tuple[str, int], int]


def upsert_score(scores: List[Score], score: Score) -> List[Score]:
    """Return a new list with `score` written at its (player, hole) key. Last write wins."""
    kept = [s for s in scores if s.key != score.key]
    kept.append(score)
    return kept


def index_scores(scores: Iterable[Score], upto_hole: Optional[int] = None) -> ScoreIndex:
    """Map (player_id, hole_number) -> strokes. Later entries for the same key win."""
    index: ScoreIndex = {}
    for score in scores:
        if upto_hole is not None and score.hole_number > upto_hole:
            continue
        index[score.key] = score.strokes
    return index


def comparison_score(
    index: ScoreIndex,
    player_id: str,
    hole_number: int,
    strokes_map: Optional[StrokesPerHoleMap] = None,
) -> Optional[int]:
    """Net score when a strokes map is given, gross otherwise. None if unplayed."""
    gross = index.get((player_id, hole_number))
    if gross is None:
        return None
    if not strokes_map:
        return gross
    return gross - strokes_map.get(player_id, {}).get(hole_number, 0)


def hole_scores(
    index: ScoreIndex,
    players: Iterable[Player],
    hole_number: int,
    strokes_map: Optional[StrokesPerHoleMap] = None,
) -> Dict[str, int]:
    """Comparison scores of the players who have scored this hole."""
    result: Dict[str, int] = {}
    for player in players:
        value = comparison_score(index, player.id, hole_number, strokes_map)
        if value is not None:
            result[player.id] = value
    return result


def hole_complete(index: ScoreIndex, player_ids: Iterable[str], hole_number: int) -> bool:
    return all((pid, hole_number) in index for pid in player_ids)


def holes_in_play(hole_info: List[HoleInfo], upto_hole: Optional[int] = None) -> List[int]:
    numbers = sorted(h.number for h in hole_info)
    if upto_hole is not None:
        numbers = [n for n in numbers if n <= upto_hole]
    return numbers


def get_hole(hole_info: List[HoleInfo], number: int) -> Optional[HoleInfo]:
    for hole in hole_info:
        if hole.number == number:
            return hole
    return None


def score_type(strokes: int, par: int) -> str:
    """Name for a score relative to par (ace, albatross, eagle, ... worse)."""
    diff = strokes - par
    if strokes == 1:
        return "ace"
    if diff <= -3:
        return "albatross"
    names = {-2: "eagle", -1: "birdie", 0: "par", 1: "bogey", 2: "double", 3: "triple"}
    return names.get(diff, "worse")


def format_relative_to_par(relative_to_par: int) -> str:
    if relative_to_par == 0:
        return "E"
    if relative_to_par > 0:
        return f"+{relative_to_par}"
    return f"{relative_to_par}"


def round_money(amount: float) -> float:
    """Round to cents, normalising -0.0."""
    return round(amount, 2) + 0.0

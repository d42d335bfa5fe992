"""Handicap math: playing handicaps and per-hole stroke allocation."""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Literal, Optional

from pydantic import Field

from models.base import BaseGolfModel
from models.hole import HoleInfo
from models.player import Player

from .config import get_settings
from .scoring import StrokesPerHoleMap

logger = logging.getLogger(__name__)

HandicapMode = Literal["auto", "manual"]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def course_handicap(handicap_index: float, slope: Optional[float] = None) -> int:
    """Course Handicap = Handicap Index x Slope / 113, rounded."""
    slope = slope or get_settings().default_slope
    return _round_half_up(handicap_index * slope / 113)


def playing_handicap(
    handicap_index: Optional[float],
    slope: Optional[float] = None,
    holes: int = 18,
) -> int:
    """Strokes a player receives for the round. No index means scratch.

    A 9-hole round uses half of the 18-hole course handicap.
    """
    if handicap_index is None:
        return 0
    handicap = course_handicap(handicap_index, slope)
    return _round_half_up(handicap / 2) if holes == 9 else handicap


def strokes_per_hole(handicap: int, holes: List[HoleInfo]) -> Dict[int, int]:
    """Distribute `handicap` strokes over holes, hardest first.

    One stroke per hole in difficulty order; once every hole has one, wrap
    around from the hardest again. Holes without a difficulty rank are
    ordered by hole number. Only holes receiving strokes appear in the map.
    """
    if handicap <= 0 or not holes:
        return {}

    ordered = sorted(holes, key=lambda h: (h.stroke_rank, h.number))
    full_passes, extra = divmod(handicap, len(ordered))

    allocation: Dict[int, int] = {}
    for position, hole in enumerate(ordered):
        strokes = full_passes + (1 if position < extra else 0)
        if strokes:
            allocation[hole.number] = strokes
    return allocation


def manual_strokes_per_hole(strokes: Optional[int], holes: List[HoleInfo]) -> Dict[int, int]:
    """Manual mode: the entered stroke count is allocated directly."""
    return strokes_per_hole(strokes or 0, holes)


def net_score(gross: int, handicap_strokes: int) -> int:
    return gross - handicap_strokes


def total_net_strokes(
    total_gross: int,
    handicap: int,
    holes_played: int,
    total_holes: int,
) -> int:
    """Net total for a possibly partial round; the handicap is prorated by holes played."""
    if total_holes <= 0:
        return total_gross
    prorated = _round_half_up(handicap * holes_played / total_holes)
    return total_gross - prorated


def format_handicap(handicap: Optional[float]) -> str:
    if handicap is None:
        return "–"
    if handicap == 0:
        return "0"
    return f"+{handicap:g}" if handicap > 0 else f"{handicap:g}"


def strokes_description(handicap: int) -> str:
    if handicap == 0:
        return "Scratch"
    if handicap == 1:
        return "1 stroke"
    return f"{handicap} strokes"


class MatchPlayStrokes(BaseGolfModel):
    """Differential allocation for a two-player match."""
    player_a_id: str
    player_b_id: str
    handicap_a: int
    handicap_b: int
    differential: int = Field(..., ge=0)
    receiver_id: Optional[str] = None
    strokes: Dict[str, Dict[int, int]] = Field(default_factory=dict)


def _player_handicap(player: Player, slope: Optional[float], holes: int, mode: HandicapMode) -> int:
    if mode == "manual":
        return player.manual_strokes or 0
    return playing_handicap(player.handicap, slope, holes)


def match_play_strokes(
    player_a: Player,
    player_b: Player,
    hole_info: List[HoleInfo],
    slope: Optional[float] = None,
    mode: HandicapMode = "auto",
) -> MatchPlayStrokes:
    """Only the difference between the two handicaps is given, to the higher one."""
    holes = len(hole_info) or 18
    handicap_a = _player_handicap(player_a, slope, holes, mode)
    handicap_b = _player_handicap(player_b, slope, holes, mode)
    differential = abs(handicap_a - handicap_b)

    receiver_id = None
    if handicap_a > handicap_b:
        receiver_id = player_a.id
    elif handicap_b > handicap_a:
        receiver_id = player_b.id

    strokes = {player_a.id: {}, player_b.id: {}}
    if receiver_id is not None:
        strokes[receiver_id] = strokes_per_hole(differential, hole_info)

    return MatchPlayStrokes(
        player_a_id=player_a.id,
        player_b_id=player_b.id,
        handicap_a=handicap_a,
        handicap_b=handicap_b,
        differential=differential,
        receiver_id=receiver_id,
        strokes=strokes,
    )


def build_strokes_map(
    players: List[Player],
    hole_info: List[HoleInfo],
    slope: Optional[float] = None,
    mode: HandicapMode = "auto",
    match_play: bool = False,
) -> StrokesPerHoleMap:
    """Per-player stroke allocation for a round.

    Two players in a match format get the differential allocation; otherwise
    each player's own playing handicap (or manual strokes) is allocated.
    """
    if match_play and len(players) == 2:
        logger.debug("Using match play differential strokes for %s", [p.id for p in players])
        return match_play_strokes(players[0], players[1], hole_info, slope, mode).strokes

    holes = len(hole_info) or 18
    strokes_map: StrokesPerHoleMap = {}
    for player in players:
        if mode == "manual":
            strokes_map[player.id] = manual_strokes_per_hole(player.manual_strokes, hole_info)
        else:
            handicap = playing_handicap(player.handicap, slope, holes)
            strokes_map[player.id] = strokes_per_hole(handicap, hole_info)
    return strokes_map

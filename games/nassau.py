"""Nassau: three match-play bets (front 9, back 9, overall) plus presses."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple
from uuid import uuid4

from pydantic import Field

from models.base import BaseGolfModel
from models.player import Player
from models.press import NassauSegmentName, Press
from models.score import Score

from .config import get_settings
from .match_play import HoleOutcome, MatchPlayResult, MatchStatus, play_match, player_outcome
from .scoring import StrokesPerHoleMap

logger = logging.getLogger(__name__)

SEGMENT_LABELS = {"front9": "Front 9", "back9": "Back 9", "overall": "Overall"}


class NassauSegment(BaseGolfModel):
    name: NassauSegmentName
    holes: List[int] = Field(default_factory=list)
    winner_id: Optional[str] = None
    leader_id: Optional[str] = None
    margin: int = 0
    holes_played: int = 0
    holes_remaining: int = 0
    status: MatchStatus = "not_started"
    status_text: str = "Match not started"
    decided_on_hole: Optional[int] = None


class NassauSettlement(BaseGolfModel):
    from_player_id: str
    from_player_name: str = ""
    to_player_id: str
    to_player_name: str = ""
    amount: float
    description: str
    hole_number: int


class NassauResult(BaseGolfModel):
    front9: NassauSegment
    back9: NassauSegment
    overall: NassauSegment
    presses: List[Press] = Field(default_factory=list)
    new_presses: List[Press] = Field(default_factory=list)
    settlements: List[NassauSettlement] = Field(default_factory=list)
    hole_deltas: Dict[int, Dict[str, float]] = Field(default_factory=dict)

    def segment(self, name: NassauSegmentName) -> NassauSegment:
        return getattr(self, name)


def segment_holes(name: NassauSegmentName, holes_in_round: int = 18) -> List[int]:
    if name == "front9":
        return list(range(1, min(9, holes_in_round) + 1))
    if name == "back9":
        return list(range(10, 19)) if holes_in_round == 18 else []
    return list(range(1, holes_in_round + 1))


def _segment_from_match(name: NassauSegmentName, holes: List[int], match: MatchPlayResult) -> NassauSegment:
    return NassauSegment(
        name=name,
        holes=holes,
        winner_id=match.winner_id,
        leader_id=match.leader_id,
        margin=match.holes_up,
        holes_played=match.holes_played,
        holes_remaining=match.holes_remaining,
        status=match.match_status,
        status_text=match.status_text,
        decided_on_hole=match.decided_on_hole,
    )


def _detect_auto_presses(
    name: NassauSegmentName,
    holes: List[int],
    outcome: HoleOutcome,
    p1: Player,
    p2: Player,
    stakes: float,
    room: int,
) -> List[Press]:
    """Walk a nine and open a press each time a player falls `press_threshold` down
    in the most recent bet. The press starts on the following hole."""
    threshold = get_settings().press_threshold
    created: List[Press] = []
    diff = 0  # positive = p1 ahead in the latest bet

    for position, hole in enumerate(holes):
        if len(created) >= room:
            break
        pair = outcome(hole)
        if pair is None:
            continue
        a, b = pair
        if a < b:
            diff += 1
        elif b < a:
            diff -= 1

        is_last = position == len(holes) - 1
        if abs(diff) >= threshold and not is_last:
            trailing = p2 if diff > 0 else p1
            start = holes[position + 1]
            created.append(Press(
                id=f"auto-{name}-{start}",
                start_hole=start,
                initiated_by=trailing.id,
                stakes=stakes,
                segment=name,
                auto=True,
            ))
            diff = 0
    return created


def _resolve_press(
    press: Press,
    p1: Player,
    p2: Player,
    outcome: HoleOutcome,
    holes_in_round: int,
    upto_hole: Optional[int],
) -> Tuple[Press, Optional[int]]:
    """Current state of a press and the hole it was decided on (None while active).

    A resolved press keeps its stored status and winner. Presses stored
    without `resolved_on_hole` are paid on the hole the scores decide them,
    or on the last hole of the press when the scores do not.
    """
    holes = [h for h in segment_holes(press.segment_name(holes_in_round), holes_in_round)
             if h >= press.start_hole]
    match = play_match(p1.id, p2.id, holes, outcome)

    if press.is_resolved:
        decided_on = press.resolved_on_hole
        if decided_on is None:
            decided_on = match.decided_on_hole if match.is_final else (holes[-1] if holes else press.start_hole)
        if upto_hole is None or decided_on <= upto_hole:
            return press, decided_on

    if not match.is_final:
        return press.revised(status="active", winner_id=None, resolved_on_hole=None), None

    if match.winner_id is None:
        status = "pushed"
    elif match.winner_id == press.initiated_by:
        status = "won"
    else:
        status = "lost"
    resolved = press.revised(
        status=status,
        winner_id=match.winner_id,
        resolved_on_hole=match.decided_on_hole,
    )
    return resolved, match.decided_on_hole


def calculate_nassau(
    scores: List[Score],
    players: List[Player],
    stakes: float,
    presses: Optional[List[Press]] = None,
    holes_in_round: int = 18,
    strokes_map: Optional[StrokesPerHoleMap] = None,
    auto_press: bool = False,
    upto_hole: Optional[int] = None,
) -> Optional[NassauResult]:
    """Nassau for exactly two players.

    Each segment (and each press) pays its stakes once to the winner as soon
    as it is decided; the margin does not scale the payout. With
    `auto_press`, presses implied by the scores are returned in `new_presses`
    with stable ids so re-running never duplicates them.
    """
    if len(players) != 2:
        logger.debug("Nassau requires 2 players, got %d", len(players))
        return None

    p1, p2 = players
    names = {p.id: p.name for p in players}
    outcome = player_outcome(scores, p1.id, p2.id, strokes_map, upto_hole)
    existing = [p for p in (presses or []) if upto_hole is None or p.start_hole <= upto_hole]

    segments: Dict[str, NassauSegment] = {}
    for name in ("front9", "back9", "overall"):
        holes = segment_holes(name, holes_in_round)
        segments[name] = _segment_from_match(name, holes, play_match(p1.id, p2.id, holes, outcome, names))

    new_presses: List[Press] = []
    if auto_press:
        known_ids = {p.id for p in existing}
        room = get_settings().max_presses - len(existing)
        for name in ("front9", "back9"):
            holes = segment_holes(name, holes_in_round)
            for press in _detect_auto_presses(name, holes, outcome, p1, p2, stakes, get_settings().max_presses):
                if press.id in known_ids:
                    continue
                if room <= 0:
                    break
                new_presses.append(press)
                room -= 1

    settlements: List[NassauSettlement] = []
    hole_deltas: Dict[int, Dict[str, float]] = {}

    def pay(winner_id: str, amount: float, description: str, hole: int) -> None:
        loser_id = p2.id if winner_id == p1.id else p1.id
        settlements.append(NassauSettlement(
            from_player_id=loser_id,
            from_player_name=names[loser_id],
            to_player_id=winner_id,
            to_player_name=names[winner_id],
            amount=amount,
            description=description,
            hole_number=hole,
        ))
        deltas = hole_deltas.setdefault(hole, {})
        deltas[winner_id] = deltas.get(winner_id, 0.0) + amount
        deltas[loser_id] = deltas.get(loser_id, 0.0) - amount

    for name in ("front9", "back9", "overall"):
        segment = segments[name]
        if segment.winner_id and segment.decided_on_hole is not None:
            pay(segment.winner_id, stakes, SEGMENT_LABELS[name], segment.decided_on_hole)

    resolved_presses: List[Press] = []
    for press in sorted(existing + new_presses, key=lambda p: (p.start_hole, p.id)):
        current, decided_on = _resolve_press(press, p1, p2, outcome, holes_in_round, upto_hole)
        resolved_presses.append(current)
        if current.winner_id and decided_on is not None:
            pay(current.winner_id, current.stakes, f"Press (hole {current.start_hole})", decided_on)

    return NassauResult(
        front9=segments["front9"],
        back9=segments["back9"],
        overall=segments["overall"],
        presses=resolved_presses,
        new_presses=new_presses,
        settlements=settlements,
        hole_deltas=hole_deltas,
    )


def can_press(
    current_hole: int,
    player_standing: int,
    existing_presses: List[Press],
    holes_in_round: int = 18,
) -> bool:
    """A player may press when at least `press_threshold` down, under the press cap, before the last hole."""
    settings = get_settings()
    return (
        player_standing <= -settings.press_threshold
        and len(existing_presses) < settings.max_presses
        and current_hole < holes_in_round
    )


def create_press(
    player_id: str,
    current_hole: int,
    stakes: float,
    segment: Optional[NassauSegmentName] = None,
) -> Press:
    return Press(
        id=str(uuid4()),
        start_hole=current_hole,
        initiated_by=player_id,
        stakes=stakes,
        segment=segment,
    )


def format_nassau_status(leader_id: Optional[str], margin: int, players: List[Player]) -> str:
    if not leader_id or margin == 0:
        return "All square"
    leader = next((p for p in players if p.id == leader_id), None)
    if leader is None:
        return "All square"
    return f"{leader.name} {margin} UP"

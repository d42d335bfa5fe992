"""Best Ball: each team counts its lowest score on every hole.

Two teams play a match; three or more play team skins per hole (outright
low best ball wins the hole) with a stroke-play total for standings.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from pydantic import Field

from models.base import BaseGolfModel
from models.hole import HoleInfo
from models.player import Player, Team
from models.score import Score

from .match_play import MatchPlayResult, play_match
from .scoring import StrokesPerHoleMap, comparison_score, hole_complete, holes_in_play, index_scores

logger = logging.getLogger(__name__)

TEAM_COLORS = ["#22c55e", "#3b82f6", "#f97316", "#a855f7"]


class TeamHoleScore(BaseGolfModel):
    team_id: str
    best_score: int
    contributor_id: str


class BestBallHoleResult(BaseGolfModel):
    hole_number: int
    team_scores: List[TeamHoleScore] = Field(default_factory=list)
    winning_team_id: Optional[str] = None


class PlayerContribution(BaseGolfModel):
    player_id: str
    player_name: str = ""
    holes_contributed: int = 0


class BestBallStanding(BaseGolfModel):
    team_id: str
    team_name: str = ""
    team_color: Optional[str] = None
    total_score: int = 0
    holes_played: int = 0
    relative_to_par: int = 0
    holes_won: int = 0
    player_contributions: List[PlayerContribution] = Field(default_factory=list)


class TeamNeed(BaseGolfModel):
    """Score a team still needs on the hole, given the other teams' best so far."""
    team_id: str
    best_so_far: Optional[int] = None
    to_win: Optional[int] = None
    to_tie: Optional[int] = None


class BestBallHoleContext(BaseGolfModel):
    hole_number: int
    leading_team_id: Optional[str] = None
    needs: List[TeamNeed] = Field(default_factory=list)


class BestBallResult(BaseGolfModel):
    framing: str = "match"  # "match" for two teams, "stroke" for three or more
    standings: List[BestBallStanding] = Field(default_factory=list)
    hole_winners: List[BestBallHoleResult] = Field(default_factory=list)
    holes_played: int = 0
    match: Optional[MatchPlayResult] = None
    hole_deltas: Dict[int, Dict[str, float]] = Field(default_factory=dict)


def create_default_teams(players: List[Player]) -> List[Team]:
    """Singles for 2 or 3 players, 1+2 vs 3+4 for four."""
    if len(players) in (2, 3):
        return [
            Team(id=f"team-{i + 1}", name=p.name, player_ids=[p.id], color=TEAM_COLORS[i])
            for i, p in enumerate(players)
        ]
    if len(players) == 4:
        return [
            Team(
                id="team-1",
                name=f"{players[0].first_name} & {players[1].first_name}",
                player_ids=[players[0].id, players[1].id],
                color=TEAM_COLORS[0],
            ),
            Team(
                id="team-2",
                name=f"{players[2].first_name} & {players[3].first_name}",
                player_ids=[players[2].id, players[3].id],
                color=TEAM_COLORS[1],
            ),
        ]
    return []


def resolve_teams(players: List[Player], teams: Optional[List[Team]] = None) -> List[Team]:
    """Configured teams win; then Player.team_id groupings; then the defaults."""
    if teams:
        return list(teams)
    grouped: Dict[str, List[str]] = {}
    for player in players:
        if player.team_id:
            grouped.setdefault(player.team_id, []).append(player.id)
    if len(grouped) >= 2:
        return [
            Team(id=team_id, name=team_id, player_ids=ids, color=TEAM_COLORS[i % len(TEAM_COLORS)])
            for i, (team_id, ids) in enumerate(grouped.items())
        ]
    return create_default_teams(players)


def _team_best(
    index, team: Team, hole: int, strokes_map: Optional[StrokesPerHoleMap]
) -> Optional[Tuple[int, str]]:
    best: Optional[Tuple[int, str]] = None
    for pid in team.player_ids:
        value = comparison_score(index, pid, hole, strokes_map)
        if value is not None and (best is None or value < best[0]):
            best = (value, pid)
    return best


def _split_cents(total_cents: int, player_ids: List[str]) -> Dict[str, int]:
    """Even split in whole cents; leftover cents go to the first members."""
    share, remainder = divmod(total_cents, len(player_ids))
    return {pid: share + (1 if i < remainder else 0) for i, pid in enumerate(player_ids)}


def _team_payouts(winner: Team, losers: List[Team], stakes: float) -> Dict[str, float]:
    """Each losing team pays `stakes`, split across its members, to the winning team."""
    stake_cents = int(round(stakes * 100))
    cents: Dict[str, int] = {}
    for team in losers:
        for pid, amount in _split_cents(stake_cents, team.player_ids).items():
            cents[pid] = cents.get(pid, 0) - amount
    for pid, amount in _split_cents(stake_cents * len(losers), winner.player_ids).items():
        cents[pid] = cents.get(pid, 0) + amount
    return {pid: amount / 100 for pid, amount in cents.items()}


def calculate_best_ball(
    scores: List[Score],
    players: List[Player],
    hole_info: List[HoleInfo],
    teams: Optional[List[Team]] = None,
    strokes_map: Optional[StrokesPerHoleMap] = None,
    stakes: float = 0.0,
    upto_hole: Optional[int] = None,
) -> Optional[BestBallResult]:
    teams = [t for t in resolve_teams(players, teams) if t.player_ids]
    if len(players) < 2 or len(teams) < 2:
        logger.debug("Best Ball needs at least 2 teams, got %d", len(teams))
        return None

    index = index_scores(scores, upto_hole)
    names = {p.id: p.name for p in players}
    pars = {h.number: h.par for h in hole_info}
    holes = holes_in_play(hole_info)
    rostered = [pid for team in teams for pid in team.player_ids]
    by_team = {t.id: t for t in teams}

    standings = {
        t.id: BestBallStanding(
            team_id=t.id,
            team_name=t.name,
            team_color=t.color,
            player_contributions=[
                PlayerContribution(player_id=pid, player_name=names.get(pid, pid)) for pid in t.player_ids
            ],
        )
        for t in teams
    }
    hole_winners: List[BestBallHoleResult] = []
    hole_deltas: Dict[int, Dict[str, float]] = {}
    holes_played = 0
    stroke_framing = len(teams) > 2

    for hole in holes:
        if upto_hole is not None and hole > upto_hole:
            break
        if not hole_complete(index, rostered, hole):
            continue
        holes_played += 1

        hole_result = BestBallHoleResult(hole_number=hole)
        for team in teams:
            best, contributor = _team_best(index, team, hole, strokes_map)
            hole_result.team_scores.append(
                TeamHoleScore(team_id=team.id, best_score=best, contributor_id=contributor)
            )
            standing = standings[team.id]
            standing.total_score += best
            standing.holes_played += 1
            standing.relative_to_par += best - pars.get(hole, 4)
            for contribution in standing.player_contributions:
                if contribution.player_id == contributor:
                    contribution.holes_contributed += 1

        ranked = sorted(hole_result.team_scores, key=lambda ts: ts.best_score)
        if ranked[0].best_score < ranked[1].best_score:
            hole_result.winning_team_id = ranked[0].team_id
            standings[ranked[0].team_id].holes_won += 1
            if stroke_framing and stakes:
                winner = by_team[ranked[0].team_id]
                losers = [t for t in teams if t.id != winner.id]
                hole_deltas[hole] = _team_payouts(winner, losers, stakes)
        hole_winners.append(hole_result)

    match = None
    if not stroke_framing:
        team_a, team_b = teams
        winners_by_hole = {hw.hole_number: hw for hw in hole_winners}

        def outcome(hole: int):
            hw = winners_by_hole.get(hole)
            if hw is None:
                return None
            lookup = {ts.team_id: ts.best_score for ts in hw.team_scores}
            return lookup[team_a.id], lookup[team_b.id]

        match = play_match(team_a.id, team_b.id, holes, outcome, names={t.id: t.name for t in teams})
        if match.winner_id and stakes and match.decided_on_hole is not None:
            winner = by_team[match.winner_id]
            loser = team_b if winner.id == team_a.id else team_a
            hole_deltas[match.decided_on_hole] = _team_payouts(winner, [loser], stakes)

    return BestBallResult(
        framing="stroke" if stroke_framing else "match",
        standings=sorted(standings.values(), key=lambda s: s.total_score),
        hole_winners=hole_winners,
        holes_played=holes_played,
        match=match,
        hole_deltas=hole_deltas,
    )


def best_ball_hole_context(
    scores: List[Score],
    players: List[Player],
    hole_number: int,
    teams: Optional[List[Team]] = None,
    strokes_map: Optional[StrokesPerHoleMap] = None,
) -> Optional[BestBallHoleContext]:
    """What each team needs on the hole in progress: one better than the best
    score posted by any other team to win, equal to it to tie."""
    teams = [t for t in resolve_teams(players, teams) if t.player_ids]
    if len(teams) < 2:
        return None

    index = index_scores(scores)
    bests = {}
    for team in teams:
        best = _team_best(index, team, hole_number, strokes_map)
        bests[team.id] = best[0] if best else None

    posted = [(score, tid) for tid, score in bests.items() if score is not None]
    leading = None
    if posted:
        posted.sort()
        if len(posted) == 1 or posted[0][0] < posted[1][0]:
            leading = posted[0][1]

    needs = []
    for team in teams:
        others = [s for tid, s in bests.items() if tid != team.id and s is not None]
        target = min(others) if others else None
        needs.append(TeamNeed(
            team_id=team.id,
            best_so_far=bests[team.id],
            to_win=target - 1 if target is not None and target > 1 else None,
            to_tie=target,
        ))
    return BestBallHoleContext(hole_number=hole_number, leading_team_id=leading, needs=needs)


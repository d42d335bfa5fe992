import pytest

from games.bestball import (
    best_ball_hole_context,
    calculate_best_ball,
    create_default_teams,
    resolve_teams,
)
from ledger.money_tracker import calculate_live_money
from models import BestBallConfig, HoleInfo, Player, Score, Team


def _build_holes(count: int = 18):
    return [HoleInfo(number=i, par=4) for i in range(1, count + 1)]


def _build_players(count: int = 4):
    names = ["Ann Lee", "Ben Cho", "Cal Roy", "Dee Fox"]
    return [Player(id=f"p{i + 1}", name=names[i], order_index=i) for i in range(count)]


def _build_scores(rows, upto=18, count=4):
    """Par for everyone, except the per-hole overrides in `rows`: {hole: (p1, p2, ...)}."""
    scores = []
    for hole in range(1, upto + 1):
        values = rows.get(hole, (4,) * count)
        for i, value in enumerate(values):
            if value is not None:
                scores.append(Score(player_id=f"p{i + 1}", hole_number=hole, strokes=value))
    return scores


# ================================================================
# Teams
# ================================================================

def test_default_teams():
    four = create_default_teams(_build_players(4))
    assert [t.player_ids for t in four] == [["p1", "p2"], ["p3", "p4"]]
    assert four[0].name == "Ann & Ben"

    three = create_default_teams(_build_players(3))
    assert [t.player_ids for t in three] == [["p1"], ["p2"], ["p3"]]
    assert create_default_teams(_build_players(1)) == []


def test_resolve_teams_prefers_config_then_player_team_ids():
    players = _build_players(4)
    configured = [Team(id="x", player_ids=["p1", "p4"]), Team(id="y", player_ids=["p2", "p3"])]
    assert resolve_teams(players, configured) == configured

    players[0].team_id = "red"
    players[1].team_id = "blue"
    players[2].team_id = "red"
    players[3].team_id = "blue"
    grouped = resolve_teams(players)
    assert [(t.id, t.player_ids) for t in grouped] == [("red", ["p1", "p3"]), ("blue", ["p2", "p4"])]


# ================================================================
# Two teams: match
# ================================================================

def test_two_team_match_pays_on_decided_hole():
    rows = {1: (3, 5, 4, 4), 2: (4, 3, 5, 5), 3: (5, 3, 4, 4)}
    result = calculate_best_ball(_build_scores(rows), _build_players(), _build_holes(), stakes=10)

    assert result.framing == "match"
    assert result.match.winner_id == "team-1"
    assert result.match.decided_on_hole == 16
    assert result.hole_deltas == {16: {"p1": 5, "p2": 5, "p3": -5, "p4": -5}}

    team1 = next(s for s in result.standings if s.team_id == "team-1")
    assert team1.holes_won == 3
    assert team1.relative_to_par == -3
    contributions = {c.player_id: c.holes_contributed for c in team1.player_contributions}
    assert contributions["p1"] >= 1
    assert contributions["p2"] >= 2


def test_incomplete_hole_does_not_count():
    rows = {1: (3, 5, 4, None)}
    result = calculate_best_ball(_build_scores(rows, upto=1), _build_players(), _build_holes())
    assert result.holes_played == 0
    assert result.hole_winners == []


# ================================================================
# Three or more teams: per-hole team skins
# ================================================================

def test_three_singles_pay_per_hole():
    rows = {1: (4, 5, 5), 2: (4, 4, 5)}
    result = calculate_best_ball(
        _build_scores(rows, upto=2, count=3), _build_players(3), _build_holes(), stakes=2,
    )
    assert result.framing == "stroke"
    assert result.match is None
    assert result.hole_deltas == {1: {"p1": 4, "p2": -2, "p3": -2}}
    assert result.hole_winners[1].winning_team_id is None
    assert result.standings[0].team_id == "team-1"


def test_hole_deltas_are_zero_sum():
    rows = {1: (3, 5, 4, 4), 2: (5, 5, 3, 6)}
    configured = [
        Team(id="solo", player_ids=["p1"]),
        Team(id="duo", player_ids=["p2", "p3"]),
        Team(id="last", player_ids=["p4"]),
    ]
    result = calculate_best_ball(
        _build_scores(rows, upto=2), _build_players(), _build_holes(), teams=configured, stakes=3,
    )
    assert set(result.hole_deltas) == {1, 2}
    for deltas in result.hole_deltas.values():
        assert sum(deltas.values()) == pytest.approx(0)
    assert result.hole_deltas[2]["p2"] == pytest.approx(3)


def test_uneven_teams_split_in_whole_cents():
    players = _build_players(4) + [Player(id="p5", name="Eve Orr", order_index=4)]
    teams = [Team(id="pair", player_ids=["p1", "p2"]), Team(id="trio", player_ids=["p3", "p4", "p5"])]
    rows = {hole: (3, 4, 4, 4, 4) for hole in (1, 2, 3)}
    result = calculate_best_ball(
        _build_scores(rows, count=5), players, _build_holes(), teams=teams, stakes=5,
    )

    assert result.match.winner_id == "pair"
    assert result.hole_deltas == {16: {"p1": 2.5, "p2": 2.5, "p3": -1.67, "p4": -1.67, "p5": -1.66}}
    assert sum(int(round(v * 100)) for v in result.hole_deltas[16].values()) == 0

    state = calculate_live_money(players, _build_scores(rows, count=5), [BestBallConfig(stakes=5, teams=teams)],
                                 _build_holes())
    assert sum(int(round(v * 100)) for v in state.balances().values()) == 0


def test_single_team_is_not_a_game():
    players = _build_players(2)
    teams = [Team(id="all", player_ids=["p1", "p2"])]
    assert calculate_best_ball([], players, _build_holes(), teams=teams) is None


# ================================================================
# Hole context
# ================================================================

def test_hole_context_needs():
    scores = [
        Score(player_id="p1", hole_number=5, strokes=3),
        Score(player_id="p3", hole_number=5, strokes=4),
    ]
    context = best_ball_hole_context(scores, _build_players(), 5)
    assert context.leading_team_id == "team-1"

    team2 = next(n for n in context.needs if n.team_id == "team-2")
    assert team2.best_so_far == 4
    assert team2.to_win == 2
    assert team2.to_tie == 3

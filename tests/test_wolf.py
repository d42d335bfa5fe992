import pytest

from games.config import reset_settings
from games.wolf import (
    calculate_wolf,
    calculate_wolf_hole_result,
    carryover_before,
    decision_multiplier,
    hunting_order,
    is_wolf_decision_pending,
    record_wolf_result,
    validate_blind_wolf,
    wolf_for_hole,
    wolf_hole_context,
    wolf_hole_deltas,
)
from models import Player, Score, WolfDecisionError, WolfHoleResult

PLAYER_IDS = ["a", "b", "c", "d"]


def _build_players():
    names = ["Ann Lee", "Ben Cho", "Cal Roy", "Dee Fox"]
    # listed out of order; rotation follows order_index
    players = [Player(id=pid, name=name, order_index=i) for i, (pid, name) in enumerate(zip(PLAYER_IDS, names))]
    return [players[2], players[0], players[3], players[1]]


def _hole_scores(hole, a, b, c, d):
    return [
        Score(player_id=pid, hole_number=hole, strokes=value)
        for pid, value in zip(PLAYER_IDS, (a, b, c, d))
    ]


@pytest.fixture(autouse=True)
def fresh_settings():
    reset_settings()
    yield
    reset_settings()


# ================================================================
# Rotation
# ================================================================

def test_wolf_rotates_by_order_index():
    players = _build_players()
    assert [wolf_for_hole(players, h).id for h in range(1, 9)] == ["a", "b", "c", "d"] * 2
    assert wolf_for_hole(players[:3], 1) is None


def test_hunting_order_puts_wolf_last():
    assert [p.id for p in hunting_order(_build_players(), 2)] == ["a", "c", "d", "b"]


# ================================================================
# Hole results
# ================================================================

def test_partner_wolf_team_wins():
    scores = _hole_scores(1, 4, 5, 5, 5)
    result = calculate_wolf_hole_result(1, _build_players(), scores, partner_id="b")
    assert result.wolf_id == "a"
    assert result.winning_team == "wolf"
    assert result.points == 4
    assert wolf_hole_deltas(result, PLAYER_IDS, stakes=1) == {"a": 2, "b": 2, "c": -2, "d": -2}


def test_lone_wolf_triples_points():
    scores = _hole_scores(1, 4, 5, 5, 5)
    result = calculate_wolf_hole_result(1, _build_players(), scores)
    assert result.is_lone_wolf
    assert result.points == 12
    assert wolf_hole_deltas(result, PLAYER_IDS, stakes=1) == {"a": 12, "b": -4, "c": -4, "d": -4}


def test_blind_wolf_sextuples_points():
    scores = _hole_scores(1, 4, 5, 5, 5)
    result = calculate_wolf_hole_result(1, _build_players(), scores, is_blind_wolf=True)
    assert result.is_blind_wolf
    assert result.points == 24
    deltas = wolf_hole_deltas(result, PLAYER_IDS, stakes=1)
    assert deltas["a"] == 24
    assert sum(deltas.values()) == pytest.approx(0)


def test_hunters_beat_lone_wolf():
    scores = _hole_scores(1, 5, 4, 5, 5)
    result = calculate_wolf_hole_result(1, _build_players(), scores)
    assert result.winning_team == "hunters"
    assert wolf_hole_deltas(result, PLAYER_IDS, stakes=2) == {"a": -24, "b": 8, "c": 8, "d": 8}


def test_push_scores_nothing():
    scores = _hole_scores(1, 4, 5, 4, 5)
    result = calculate_wolf_hole_result(1, _build_players(), scores, partner_id="b")
    assert result.winning_team == "push"
    assert result.points == 0
    assert wolf_hole_deltas(result, PLAYER_IDS, stakes=5) == {}


def test_carryovers_raise_the_pot():
    scores = _hole_scores(3, 4, 5, 5, 5)
    result = calculate_wolf_hole_result(3, _build_players(), scores, partner_id="a", carryovers=2)
    assert result.wolf_id == "c"
    assert result.points == 12


def test_incomplete_hole_and_invalid_partner():
    players = _build_players()
    partial = _hole_scores(1, 4, 5, 5, 5)[:3]
    assert calculate_wolf_hole_result(1, players, partial, partner_id="b") is None

    scores = _hole_scores(1, 4, 5, 5, 5)
    with pytest.raises(WolfDecisionError):
        calculate_wolf_hole_result(1, players, scores, partner_id="a")
    with pytest.raises(WolfDecisionError):
        calculate_wolf_hole_result(1, players, scores, partner_id="zed")


def test_blind_wolf_multiplier_from_environment(monkeypatch):
    assert decision_multiplier(False, False) == 1
    assert decision_multiplier(True, False) == 3
    assert decision_multiplier(True, True) == 6
    monkeypatch.setenv("GOLF_BLIND_WOLF_MULTIPLIER", "3")
    reset_settings()
    assert decision_multiplier(True, True) == 9
    assert decision_multiplier(True, True, blind_multiplier=2) == 6


# ================================================================
# Recording decisions
# ================================================================

def test_blind_wolf_must_precede_tee_shots():
    validate_blind_wolf(2, _hole_scores(1, 4, 4, 4, 4))
    with pytest.raises(WolfDecisionError):
        validate_blind_wolf(1, _hole_scores(1, 4, 4, 4, 4))


def test_record_wolf_result_is_append_only():
    first = WolfHoleResult(hole_number=1, wolf_id="a", partner_id="b", winning_team="wolf", points=4)
    results = record_wolf_result([], first)
    assert record_wolf_result(results, first) == results

    conflicting = WolfHoleResult(hole_number=1, wolf_id="a", winning_team="wolf", points=12)
    with pytest.raises(WolfDecisionError):
        record_wolf_result(results, conflicting)

    later = WolfHoleResult(hole_number=2, wolf_id="b", winning_team="push")
    assert [r.hole_number for r in record_wolf_result(results, later)] == [1, 2]


def test_carryover_counts_consecutive_pushes():
    results = [
        WolfHoleResult(hole_number=1, wolf_id="a", winning_team="push"),
        WolfHoleResult(hole_number=2, wolf_id="b", winning_team="push"),
        WolfHoleResult(hole_number=3, wolf_id="c", partner_id="a", winning_team="wolf", points=12),
        WolfHoleResult(hole_number=4, wolf_id="d", winning_team="push"),
    ]
    assert [carryover_before(results, h) for h in range(1, 6)] == [0, 1, 2, 0, 1]
    assert carryover_before(results, 3, carryover=False) == 0


# ================================================================
# Round totals
# ================================================================

def _recorded_results():
    return [
        WolfHoleResult(hole_number=1, wolf_id="a", partner_id="b", winning_team="wolf", points=4),
        WolfHoleResult(hole_number=2, wolf_id="b", winning_team="hunters", points=12),
        WolfHoleResult(hole_number=3, wolf_id="c", winning_team="push"),
    ]


def test_calculate_wolf_uses_recorded_results():
    result = calculate_wolf(_build_players(), _recorded_results(), stakes=1)

    assert result.holes_played == 3
    assert result.carryover == 1
    assert result.hole_deltas[1] == {"a": 2, "b": 2, "c": -2, "d": -2}
    assert result.hole_deltas[2] == {"b": -12, "a": 4, "c": 4, "d": 4}
    assert 3 not in result.hole_deltas

    by_id = {s.player_id: s for s in result.standings}
    assert by_id["a"].earnings == pytest.approx(6)
    assert by_id["b"].earnings == pytest.approx(-10)
    assert by_id["b"].times_as_wolf == 1
    assert sum(s.earnings for s in result.standings) == pytest.approx(0)


def test_calculate_wolf_upto_hole_and_player_count():
    result = calculate_wolf(_build_players(), _recorded_results(), stakes=1, upto_hole=1)
    assert result.holes_played == 1
    assert list(result.hole_deltas) == [1]
    assert calculate_wolf(_build_players()[:3], _recorded_results(), stakes=1) is None


def test_lone_wolf_win_counted_in_standings():
    results = [WolfHoleResult(hole_number=1, wolf_id="a", is_blind_wolf=True, winning_team="wolf", points=24)]
    result = calculate_wolf(_build_players(), results, stakes=1)
    ann = next(s for s in result.standings if s.player_id == "a")
    assert ann.lone_wolf_wins == 1
    assert ann.blind_wolf_wins == 1
    assert result.standings[0].player_id == "a"


# ================================================================
# Hole context
# ================================================================

def test_wolf_hole_context_messages():
    players = _build_players()
    results = _recorded_results()

    pending = wolf_hole_context(players, 4, results, stakes=1)
    assert pending.wolf_id == "d"
    assert pending.message == "Dee is Wolf"
    assert pending.carryovers == 1
    assert pending.pot_value == pytest.approx(8)
    assert not pending.decision_made

    partnered = wolf_hole_context(players, 1, results, stakes=1)
    assert partnered.message == "Partnered with Ben"
    assert wolf_hole_context(players, 2, results, stakes=1).message == "Lone Wolf!"

    assert is_wolf_decision_pending(4, results, has_scores=True)
    assert not is_wolf_decision_pending(1, results, has_scores=True)

import pytest
from datetime import datetime, timezone
from pydantic import ValidationError

from models import (
    BestBallConfig,
    HoleInfo,
    InvalidStatusTransition,
    MoneyBreakdown,
    NassauConfig,
    NetSettlement,
    Player,
    Press,
    PropBet,
    Score,
    SettlementStatus,
    SkinsConfig,
    WolfConfig,
    WolfHoleResult,
    active_games,
    parse_game_config,
)


# ================================================================
# HoleInfo
# ================================================================

def test_hole_info_validation():
    h = HoleInfo(number=1, par=4, handicap=18)
    assert h.number == 1
    assert h.stroke_rank == 18

    with pytest.raises(ValidationError):
        HoleInfo(number=1, par=7)          # par > 6

    with pytest.raises(ValidationError):
        HoleInfo(number=19)                # hole > 18

    with pytest.raises(ValidationError):
        HoleInfo(number=1, handicap=19)    # handicap > 18


def test_hole_info_stroke_rank_falls_back_to_number():
    assert HoleInfo(number=7).stroke_rank == 7
    assert HoleInfo(number=7).par == 4


# ================================================================
# Player / Score
# ================================================================

def test_player_validation():
    p = Player(id="p1", name="Tiger Woods", handicap=12.4)
    assert p.first_name == "Tiger"
    assert Player(id="p2").first_name == "p2"

    with pytest.raises(ValidationError):
        Player(id="p1", handicap=60)       # index > 54

    with pytest.raises(ValidationError):
        Player(id="p1", manual_strokes=-1)


def test_score_validation_and_key():
    s = Score(player_id="p1", hole_number=3, strokes=5)
    assert s.key == ("p1", 3)

    with pytest.raises(ValidationError):
        Score(player_id="p1", hole_number=0, strokes=4)

    with pytest.raises(ValidationError):
        Score(player_id="p1", hole_number=1, strokes=0)


def test_update_field_returns_error_message():
    s = Score(player_id="p1", hole_number=3, strokes=5)
    assert s.update_field("strokes", 6) is None
    assert s.strokes == 6

    error = s.update_field("strokes", 25)
    assert error is not None
    assert s.strokes == 6                  # unchanged on failure


# ================================================================
# Wolf / Press / PropBet
# ================================================================

def test_wolf_hole_result_validation():
    r = WolfHoleResult(hole_number=1, wolf_id="a", partner_id="b", winning_team="wolf", points=4)
    assert not r.is_lone_wolf

    with pytest.raises(ValidationError):
        WolfHoleResult(hole_number=1, wolf_id="a", partner_id="a")

    with pytest.raises(ValidationError):
        WolfHoleResult(hole_number=1, wolf_id="a", partner_id="b", is_blind_wolf=True)

    with pytest.raises(ValidationError):
        WolfHoleResult(hole_number=1, wolf_id="a", points=-4)


def test_press_validation_and_segment():
    press = Press(id="x", start_hole=12, initiated_by="p2", stakes=5)
    assert not press.is_resolved
    assert press.segment_name() == "back9"
    assert press.segment_name(holes_in_round=9) == "front9"
    assert Press(id="y", start_hole=4, initiated_by="p2", stakes=5).segment_name() == "front9"
    assert Press(id="z", start_hole=4, initiated_by="p2", stakes=5, segment="overall").segment_name() == "overall"

    with pytest.raises(ValidationError):
        Press(id="x", start_hole=3, initiated_by="p2", stakes=5, status="pushed", winner_id="p1")


def test_prop_bet_label():
    assert PropBet(id="b1", type="ctp", hole_number=3, stakes=5).label == "Closest to Pin"
    assert PropBet(id="b2", hole_number=3, stakes=5, description="Sandy par").label == "Sandy par"


# ================================================================
# GameConfig
# ================================================================

def test_parse_game_config_discriminates_on_type():
    game = parse_game_config({"type": "nassau", "stakes": 5, "auto_press": True})
    assert isinstance(game, NassauConfig)
    assert game.auto_press is True
    assert game.use_net is False

    wolf = parse_game_config({"type": "wolf", "stakes": 1})
    assert isinstance(wolf, WolfConfig)
    assert wolf.carryover is True
    assert wolf.wolf_results == []

    with pytest.raises(ValidationError):
        parse_game_config({"type": "bingo_bango_bongo", "stakes": 1})

    with pytest.raises(ValidationError):
        parse_game_config({"type": "skins", "stakes": -2})


def test_active_games_keeps_last_config_per_type():
    games = [
        SkinsConfig(stakes=1),
        BestBallConfig(stakes=3),
        SkinsConfig(stakes=2),
    ]
    active = active_games(games)
    assert [g.type for g in active] == ["skins", "bestball"]
    assert active[0].stakes == 2


# ================================================================
# Settlement status
# ================================================================

def _settlement() -> NetSettlement:
    return NetSettlement(from_player_id="p2", to_player_id="p1", amount=10)


def test_settlement_defaults_and_key():
    s = _settlement()
    assert s.status == SettlementStatus.PENDING
    assert s.key == "p2-p1"

    with pytest.raises(ValidationError):
        NetSettlement(from_player_id="p2", to_player_id="p1", amount=0)


def test_settlement_mark_paid_and_undo():
    s = _settlement()
    paid_at = datetime(2026, 5, 1, tzinfo=timezone.utc)
    s.mark_paid(paid_at=paid_at, notes="venmo")
    assert s.status == SettlementStatus.PAID
    assert s.paid_at == paid_at

    # re-delivered mark keeps the first paid_at
    s.mark_paid()
    assert s.paid_at == paid_at

    s.mark_pending()
    assert s.status == SettlementStatus.PENDING
    assert s.paid_at is None
    assert s.notes is None


def test_settlement_illegal_transition():
    s = _settlement()
    s.mark_paid()
    with pytest.raises(InvalidStatusTransition):
        s.mark_forgiven()

    f = _settlement().mark_forgiven(notes="birthday")
    assert f.status == SettlementStatus.FORGIVEN
    with pytest.raises(InvalidStatusTransition):
        f.mark_paid()


# ================================================================
# MoneyBreakdown
# ================================================================

def test_money_breakdown_add():
    b = MoneyBreakdown()
    b.add("skins", 4)
    b.add("nassau", -5)
    b.add("prop_bets", 2)
    assert b.skins == 4
    assert b.nassau == -5
    assert b.total == pytest.approx(1)


def test_revised_copy_is_validated():
    press = Press(id="x", start_hole=3, initiated_by="p2", stakes=5)
    lost = press.revised(status="lost", winner_id="p1", resolved_on_hole=9)
    assert lost.status == "lost"
    assert press.status == "active"

    with pytest.raises(ValidationError):
        press.revised(status="pushed", winner_id="p1")

"""Conversion between JSON-column rows and the Pydantic domain models.

The persistence collaborator stores game configs, presses and wolf results
as JSON columns, so everything here maps to and from plain
dicts/lists/primitives only.
"""

import json
from typing import Any, Dict, List, Union

from .game_config import GameConfig, parse_game_config
from .press import Press
from .prop_bet import PropBet
from .score import Score
from .settlement import NetSettlement
from .wolf import WolfHoleResult


def _load_json(value: Union[str, bytes, list, dict, None], default):
    # JSONB columns may come back already decoded or as text
    if value is None:
        return default
    if isinstance(value, (str, bytes)):
        return json.loads(value)
    return value


# ================================================================
# Row -> Model (reads)
# ================================================================

def game_configs_from_json(value) -> List[GameConfig]:
    """rounds.games JSON column -> list of GameConfig."""
    return [parse_game_config(item) for item in _load_json(value, [])]


def presses_from_json(value) -> List[Press]:
    """rounds.presses JSON column -> list of Press."""
    return [Press.model_validate(item) for item in _load_json(value, [])]


def wolf_results_from_json(value) -> List[WolfHoleResult]:
    return [WolfHoleResult.model_validate(item) for item in _load_json(value, [])]


def score_from_row(row) -> Score:
    """scores row -> Score model."""
    return Score(
        id=str(row["id"]) if row.get("id") else None,
        round_id=str(row["round_id"]) if row.get("round_id") else None,
        player_id=str(row["player_id"]),
        hole_number=row["hole_number"],
        strokes=row["strokes"],
    )


def prop_bet_from_row(row) -> PropBet:
    """prop_bets row -> PropBet model."""
    return PropBet(
        id=str(row["id"]),
        round_id=str(row["round_id"]) if row.get("round_id") else None,
        type=row.get("type") or "custom",
        hole_number=row["hole_number"],
        stakes=float(row["stakes"]),
        description=row.get("description"),
        winner_id=str(row["winner_id"]) if row.get("winner_id") else None,
        created_by=str(row["created_by"]) if row.get("created_by") else None,
        created_at=row.get("created_at"),
    )


def settlement_from_row(row) -> NetSettlement:
    """bet_settlements row -> NetSettlement model."""
    return NetSettlement(
        id=str(row["id"]) if row.get("id") else None,
        round_id=str(row["round_id"]) if row.get("round_id") else None,
        from_player_id=str(row["from_player_id"]),
        from_player_name=row.get("from_player_name") or "",
        to_player_id=str(row["to_player_id"]),
        to_player_name=row.get("to_player_name") or "",
        amount=float(row["amount"]),
        status=row.get("status") or "pending",
        paid_at=row.get("paid_at"),
        notes=row.get("notes"),
        created_at=row.get("created_at"),
    )


# ================================================================
# Model -> Row dict (writes)
# ================================================================

def game_configs_to_json(games: List[GameConfig]) -> List[Dict[str, Any]]:
    """GameConfig list -> JSON-compatible list for rounds.games."""
    return [game.model_dump(mode="json") for game in games]


def presses_to_json(presses: List[Press]) -> List[Dict[str, Any]]:
    return [press.model_dump(mode="json") for press in presses]


def wolf_results_to_json(results: List[WolfHoleResult]) -> List[Dict[str, Any]]:
    return [result.model_dump(mode="json") for result in sorted(results, key=lambda r: r.hole_number)]


def score_to_row(score: Score) -> dict:
    """Score -> dict for a scores upsert keyed on (player_id, hole_number)."""
    return {
        "round_id": score.round_id,
        "player_id": score.player_id,
        "hole_number": score.hole_number,
        "strokes": score.strokes,
    }


def settlement_to_row(settlement: NetSettlement) -> dict:
    """NetSettlement -> dict for bet_settlements INSERT/UPDATE."""
    return {
        "id": settlement.id,
        "round_id": settlement.round_id,
        "from_player_id": settlement.from_player_id,
        "to_player_id": settlement.to_player_id,
        "amount": settlement.amount,
        "status": settlement.status.value,
        "paid_at": settlement.paid_at.isoformat() if settlement.paid_at else None,
        "notes": settlement.notes,
    }

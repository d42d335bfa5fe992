from .base import BaseGolfModel
from .exceptions import GolfEngineError, InvalidStatusTransition, WolfDecisionError
from .game_config import (
    BestBallConfig,
    GameConfig,
    MatchConfig,
    NassauConfig,
    SkinsConfig,
    StablefordConfig,
    WolfConfig,
    active_games,
    parse_game_config,
)
from .hole import HoleInfo
from .money import BiggestSwing, LiveMoneyState, MoneyBreakdown, PlayerMoney
from .player import Player, Team
from .press import Press
from .prop_bet import PropBet
from .score import Score
from .settlement import NetSettlement, SettlementStats, SettlementStatus
from .wolf import WolfHoleResult

__all__ = [
    "BaseGolfModel",
    "GolfEngineError",
    "InvalidStatusTransition",
    "WolfDecisionError",
    "BestBallConfig",
    "GameConfig",
    "MatchConfig",
    "NassauConfig",
    "SkinsConfig",
    "StablefordConfig",
    "WolfConfig",
    "active_games",
    "parse_game_config",
    "HoleInfo",
    "BiggestSwing",
    "LiveMoneyState",
    "MoneyBreakdown",
    "PlayerMoney",
    "Player",
    "Team",
    "Press",
    "PropBet",
    "Score",
    "NetSettlement",
    "SettlementStats",
    "SettlementStatus",
    "WolfHoleResult",
]

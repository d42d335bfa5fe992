from pydantic import Field, TypeAdapter
from typing import Annotated, List, Literal, Optional, Union

from .base import BaseGolfModel
from .player import Team
from .wolf import WolfHoleResult


class BaseGameConfig(BaseGolfModel):
    """Fields every betting format carries."""
    id: Optional[str] = None
    stakes: float = Field(0.0, ge=0)
    use_net: bool = False


class SkinsConfig(BaseGameConfig):
    type: Literal["skins"] = "skins"
    carryover: bool = True


class NassauConfig(BaseGameConfig):
    type: Literal["nassau"] = "nassau"
    auto_press: bool = False


class MatchConfig(BaseGameConfig):
    type: Literal["match"] = "match"


class StablefordConfig(BaseGameConfig):
    type: Literal["stableford"] = "stableford"
    modified_stableford: bool = False


class BestBallConfig(BaseGameConfig):
    type: Literal["bestball"] = "bestball"
    teams: List[Team] = Field(default_factory=list)


class WolfConfig(BaseGameConfig):
    type: Literal["wolf"] = "wolf"
    carryover: bool = True
    blind_wolf_multiplier: Optional[float] = Field(None, gt=0)
    wolf_results: List[WolfHoleResult] = Field(default_factory=list)


GameConfig = Annotated[
    Union[SkinsConfig, NassauConfig, MatchConfig, StablefordConfig, BestBallConfig, WolfConfig],
    Field(discriminator="type"),
]

GAME_TYPES = ("skins", "nassau", "match", "stableford", "bestball", "wolf")

_game_config_adapter: TypeAdapter = TypeAdapter(GameConfig)


def parse_game_config(data: dict) -> GameConfig:
    """Build the right config class from a plain dict keyed by `type`."""
    return _game_config_adapter.validate_python(data)


def active_games(games: List[GameConfig]) -> List[GameConfig]:
    """At most one config per type is active; a later config of the same type replaces an earlier one."""
    by_type = {}
    for game in games:
        by_type[game.type] = game
    return [by_type[t] for t in GAME_TYPES if t in by_type]

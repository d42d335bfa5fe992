from pydantic import Field
from typing import List, Optional

from .base import BaseGolfModel


class Player(BaseGolfModel):
    """A golfer in a round."""
    id: str
    name: str = ""
    handicap: Optional[float] = Field(None, ge=-10, le=54)  # handicap index
    manual_strokes: Optional[int] = Field(None, ge=0, le=54)
    team_id: Optional[str] = None
    order_index: int = 0
    round_id: Optional[str] = None

    @property
    def first_name(self) -> str:
        return self.name.split(" ")[0] if self.name else self.id


class Team(BaseGolfModel):
    """Best Ball team."""
    id: str
    name: str = ""
    player_ids: List[str] = Field(default_factory=list)
    color: Optional[str] = None

from pydantic import Field
from typing import Optional, Tuple

from .base import BaseGolfModel


class Score(BaseGolfModel):
    """A player's gross strokes on one hole. Unique per (player_id, hole_number)."""
    id: Optional[str] = None
    round_id: Optional[str] = None
    player_id: str
    hole_number: int = Field(..., ge=1, le=18)
    strokes: int = Field(..., ge=1, le=20)

    @property
    def key(self) -> Tuple[str, int]:
        return (self.player_id, self.hole_number)

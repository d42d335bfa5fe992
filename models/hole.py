from pydantic import Field
from typing import Optional

from .base import BaseGolfModel


class HoleInfo(BaseGolfModel):
    """A hole as configured for the round: par, difficulty rank and yardage."""
    number: int = Field(..., ge=1, le=18)
    par: int = Field(4, ge=3, le=6)
    handicap: Optional[int] = Field(None, ge=1, le=18)  # difficulty rank, 1 = hardest
    yardage: Optional[int] = Field(None, ge=0)

    @property
    def stroke_rank(self) -> int:
        """Rank used for stroke allocation; falls back to hole number."""
        return self.handicap if self.handicap is not None else self.number

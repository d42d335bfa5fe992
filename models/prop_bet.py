from datetime import datetime
from pydantic import Field
from typing import Literal, Optional

from .base import BaseGolfModel

PropBetType = Literal["ctp", "longest_drive", "custom"]

PROP_BET_LABELS = {
    "ctp": "Closest to Pin",
    "longest_drive": "Longest Drive",
    "custom": "Custom Bet",
}


class PropBet(BaseGolfModel):
    """Ad-hoc side bet on a single hole. The winner collects stakes from every other player."""
    id: str
    round_id: Optional[str] = None
    type: PropBetType = "custom"
    hole_number: int = Field(..., ge=1, le=18)
    stakes: float = Field(..., ge=0)
    description: Optional[str] = None
    winner_id: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def label(self) -> str:
        return self.description or PROP_BET_LABELS.get(self.type, "Custom Bet")

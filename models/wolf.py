from pydantic import Field, model_validator
from typing import Literal, Optional

from .base import BaseGolfModel

WinningTeam = Literal["wolf", "hunters", "push"]


class WolfHoleResult(BaseGolfModel):
    """The wolf's recorded decision for a hole and how the hole came out.

    Append-only: one per hole, keyed by hole_number. The wolf for a hole is
    always derived from the rotation; wolf_id is stored for display only.
    """
    hole_number: int = Field(..., ge=1, le=18)
    wolf_id: str
    partner_id: Optional[str] = None   # None = Lone Wolf
    is_blind_wolf: bool = False        # declared before anyone teed off
    winning_team: WinningTeam = "push"
    points: float = Field(0, ge=0)     # pot units, including carryover and multipliers

    @model_validator(mode='after')
    def validate_decision(self):
        if self.partner_id is not None and self.partner_id == self.wolf_id:
            raise ValueError("Wolf cannot pick themselves as partner")
        if self.is_blind_wolf and self.partner_id is not None:
            raise ValueError("Blind Wolf plays alone and cannot have a partner")
        return self

    @property
    def is_lone_wolf(self) -> bool:
        return self.partner_id is None

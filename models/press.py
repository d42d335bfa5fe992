from pydantic import Field, model_validator
from typing import Literal, Optional

from .base import BaseGolfModel

PressStatus = Literal["active", "won", "lost", "pushed"]
NassauSegmentName = Literal["front9", "back9", "overall"]


class Press(BaseGolfModel):
    """An independent side match started mid-segment by the trailing player.

    `won`/`lost` are from the point of view of `initiated_by`.
    Once status leaves `active` the press is never re-evaluated.
    """
    id: str
    start_hole: int = Field(..., ge=1, le=18)
    initiated_by: str
    stakes: float = Field(..., ge=0)
    status: PressStatus = "active"
    winner_id: Optional[str] = None
    segment: Optional[NassauSegmentName] = None
    auto: bool = False
    resolved_on_hole: Optional[int] = Field(None, ge=1, le=18)

    @model_validator(mode='after')
    def validate_resolution(self):
        if self.status == "pushed" and self.winner_id is not None:
            raise ValueError("A pushed press has no winner")
        return self

    @property
    def is_resolved(self) -> bool:
        return self.status != "active"

    def segment_name(self, holes_in_round: int = 18) -> NassauSegmentName:
        """Segment the press belongs to; inferred from start hole when not stored."""
        if self.segment is not None:
            return self.segment
        if holes_in_round == 18 and self.start_hole > 9:
            return "back9"
        return "front9"

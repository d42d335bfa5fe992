from datetime import datetime, timezone
from enum import Enum
from pydantic import Field
from typing import Optional

from .base import BaseGolfModel
from .exceptions import InvalidStatusTransition


class SettlementStatus(str, Enum):
    """Payment state of a settlement transfer."""
    PENDING = "pending"
    PAID = "paid"
    FORGIVEN = "forgiven"


# pending -> paid, pending -> forgiven, either -> pending (undo)
ALLOWED_TRANSITIONS = {
    SettlementStatus.PENDING: {SettlementStatus.PAID, SettlementStatus.FORGIVEN},
    SettlementStatus.PAID: {SettlementStatus.PENDING},
    SettlementStatus.FORGIVEN: {SettlementStatus.PENDING},
}


class NetSettlement(BaseGolfModel):
    """A single money transfer produced at round completion."""
    id: Optional[str] = None
    round_id: Optional[str] = None
    from_player_id: str
    from_player_name: str = ""
    to_player_id: str
    to_player_name: str = ""
    amount: float = Field(..., gt=0)
    status: SettlementStatus = SettlementStatus.PENDING
    paid_at: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def key(self) -> str:
        """Stable identity used for upserts: `<from>-<to>`."""
        return self.id or f"{self.from_player_id}-{self.to_player_id}"

    def _transition(self, new_status: SettlementStatus) -> None:
        if new_status == self.status:
            return  # re-delivered action
        if new_status not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidStatusTransition(
                f"Cannot change settlement {self.key} from {self.status.value} to {new_status.value}"
            )
        self.status = new_status

    def mark_paid(self, paid_at: Optional[datetime] = None, notes: Optional[str] = None) -> "NetSettlement":
        was_paid = self.status == SettlementStatus.PAID
        self._transition(SettlementStatus.PAID)
        if not was_paid:
            self.paid_at = paid_at or datetime.now(timezone.utc)
        if notes is not None:
            self.notes = notes
        return self

    def mark_forgiven(self, notes: Optional[str] = None) -> "NetSettlement":
        self._transition(SettlementStatus.FORGIVEN)
        if notes is not None:
            self.notes = notes
        return self

    def mark_pending(self) -> "NetSettlement":
        """Undo a paid/forgiven mark."""
        self._transition(SettlementStatus.PENDING)
        self.paid_at = None
        self.notes = None
        return self


class SettlementStats(BaseGolfModel):
    """Counts and amounts by status for a round's settlements."""
    total: int = 0
    pending: int = 0
    paid: int = 0
    forgiven: int = 0
    total_amount: float = 0.0
    paid_amount: float = 0.0
    pending_amount: float = 0.0

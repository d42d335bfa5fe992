from pydantic import Field
from typing import Dict, List, Optional

from .base import BaseGolfModel


class MoneyBreakdown(BaseGolfModel):
    """Signed dollars per format for one player."""
    skins: float = 0.0
    nassau: float = 0.0
    match: float = 0.0
    wolf: float = 0.0
    bestball: float = 0.0
    stableford: float = 0.0
    prop_bets: float = 0.0
    total: float = 0.0

    def add(self, fmt: str, amount: float) -> None:
        setattr(self, fmt, getattr(self, fmt) + amount)
        self.total += amount


class PlayerMoney(BaseGolfModel):
    player_id: str
    player_name: str = ""
    current_balance: float = 0.0  # positive = winning
    previous_balance: float = 0.0
    change: float = 0.0


class BiggestSwing(BaseGolfModel):
    """Largest absolute single-hole money delta seen so far."""
    player_id: str
    player_name: str = ""
    amount: float
    hole_number: int


class LiveMoneyState(BaseGolfModel):
    players: List[PlayerMoney] = Field(default_factory=list)
    breakdown: Dict[str, MoneyBreakdown] = Field(default_factory=dict)
    biggest_swing: Optional[BiggestSwing] = None
    upto_hole: int = 0

    def balances(self) -> Dict[str, float]:
        return {p.player_id: p.current_balance for p in self.players}

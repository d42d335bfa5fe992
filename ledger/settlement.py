"""Settle final balances with as few transfers as the greedy match allows.

Largest creditor is repeatedly paired with largest debtor. Each transfer
clears at least one of the two, so N players need at most N - 1 transfers.
Amounts are handled in whole cents so the loop always terminates.
"""

from __future__ import annotations

import heapq
import logging
from datetime import datetime
from typing import Dict, List, Optional

from games.config import get_settings
from models.money import LiveMoneyState
from models.player import Player
from models.settlement import NetSettlement, SettlementStats, SettlementStatus

logger = logging.getLogger(__name__)


def calculate_settlements(
    balances: Dict[str, float],
    players: Optional[List[Player]] = None,
    round_id: Optional[str] = None,
    epsilon: Optional[float] = None,
    created_at: Optional[datetime] = None,
) -> List[NetSettlement]:
    """Transfers that bring every balance to zero. Positive balance = owed money.

    Output depends only on the inputs; `created_at` is stamped on each
    settlement when the caller supplies it.
    """
    epsilon = get_settings().settlement_epsilon if epsilon is None else epsilon
    names = {p.id: p.name for p in players or []}
    order = {pid: i for i, pid in enumerate(p.id for p in players)} if players else {}
    threshold = int(round(epsilon * 100))
    # smallest balance still worth a transfer
    floor = max(threshold, 1)

    cents = {pid: int(round(amount * 100)) for pid, amount in balances.items()}
    residue = sum(cents.values())
    if abs(residue) > threshold:
        logger.warning("Balances do not net to zero (off by %.2f); settling what matches", residue / 100)

    def rank(pid: str):
        return order.get(pid, len(order)), pid

    # max-heaps keyed on amount, ties broken by seating order
    creditors = [(-c, rank(pid), pid) for pid, c in cents.items() if c >= floor]
    debtors = [(c, rank(pid), pid) for pid, c in cents.items() if c <= -floor]
    heapq.heapify(creditors)
    heapq.heapify(debtors)

    settlements: List[NetSettlement] = []
    while creditors and debtors:
        credit, c_rank, creditor = heapq.heappop(creditors)
        debt, d_rank, debtor = heapq.heappop(debtors)
        credit, debt = -credit, -debt
        amount = min(credit, debt)

        settlements.append(NetSettlement(
            id=f"{debtor}-{creditor}",
            round_id=round_id,
            from_player_id=debtor,
            from_player_name=names.get(debtor, debtor),
            to_player_id=creditor,
            to_player_name=names.get(creditor, creditor),
            amount=amount / 100,
            created_at=created_at,
        ))

        if credit - amount >= floor:
            heapq.heappush(creditors, (-(credit - amount), c_rank, creditor))
        if debt - amount >= floor:
            heapq.heappush(debtors, (-(debt - amount), d_rank, debtor))

    return settlements


def settle_live_money(
    state: LiveMoneyState,
    players: Optional[List[Player]] = None,
    round_id: Optional[str] = None,
) -> List[NetSettlement]:
    """Settlements from the final ledger state."""
    if players is None:
        players = [Player(id=pm.player_id, name=pm.player_name) for pm in state.players]
    return calculate_settlements(state.balances(), players, round_id)


def finalize_settlements(
    existing: List[NetSettlement],
    computed: List[NetSettlement],
) -> List[NetSettlement]:
    """Settlements are created once per round. If any exist they are kept as-is
    (with their payment status); otherwise the computed set is adopted."""
    if existing:
        return list(existing)
    return list(computed)


def apply_settlements(balances: Dict[str, float], settlements: List[NetSettlement]) -> Dict[str, float]:
    """Balances after every transfer is paid."""
    result = dict(balances)
    for s in settlements:
        result[s.from_player_id] = round(result.get(s.from_player_id, 0.0) + s.amount, 2)
        result[s.to_player_id] = round(result.get(s.to_player_id, 0.0) - s.amount, 2)
    return result


def settlement_stats(settlements: List[NetSettlement]) -> SettlementStats:
    def amount_for(status: SettlementStatus) -> float:
        return round(sum(s.amount for s in settlements if s.status == status), 2)

    return SettlementStats(
        total=len(settlements),
        pending=sum(1 for s in settlements if s.status == SettlementStatus.PENDING),
        paid=sum(1 for s in settlements if s.status == SettlementStatus.PAID),
        forgiven=sum(1 for s in settlements if s.status == SettlementStatus.FORGIVEN),
        total_amount=round(sum(s.amount for s in settlements), 2),
        paid_amount=amount_for(SettlementStatus.PAID),
        pending_amount=amount_for(SettlementStatus.PENDING),
    )


def total_winnings(player_id: str, settlements: List[NetSettlement]) -> float:
    total = 0.0
    for s in settlements:
        if s.to_player_id == player_id:
            total += s.amount
        elif s.from_player_id == player_id:
            total -= s.amount
    return round(total, 2)


def format_settlement_text(settlement: NetSettlement) -> str:
    return f"{settlement.from_player_name} owes {settlement.to_player_name} ${settlement.amount:.0f}"

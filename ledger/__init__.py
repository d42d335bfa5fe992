from .money_tracker import calculate_live_money, format_money, money_timeline
from .settlement import (
    apply_settlements,
    calculate_settlements,
    finalize_settlements,
    settle_live_money,
    settlement_stats,
    total_winnings,
)

__all__ = [
    "calculate_live_money",
    "format_money",
    "money_timeline",
    "apply_settlements",
    "calculate_settlements",
    "finalize_settlements",
    "settle_live_money",
    "settlement_stats",
    "total_winnings",
]

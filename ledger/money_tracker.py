"""Live money: every active format's signed contribution per player."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from games.bestball import calculate_best_ball
from games.handicap import HandicapMode, build_strokes_map
from games.match_play import calculate_match_play
from games.nassau import calculate_nassau
from games.skins import calculate_skins
from games.scoring import round_money
from games.stableford import calculate_stableford
from games.wolf import calculate_wolf
from models.game_config import GameConfig, active_games
from models.hole import HoleInfo
from models.money import BiggestSwing, LiveMoneyState, MoneyBreakdown, PlayerMoney
from models.player import Player
from models.press import Press
from models.prop_bet import PropBet
from models.score import Score

logger = logging.getLogger(__name__)

HoleDeltas = Dict[int, Dict[str, float]]


def _prop_bet_deltas(prop_bets: List[PropBet], player_ids: List[str], upto_hole: int) -> HoleDeltas:
    """The winner of a side bet collects its stakes from every other player."""
    deltas: HoleDeltas = {}
    for bet in prop_bets:
        if bet.winner_id is None or bet.winner_id not in player_ids or bet.hole_number > upto_hole:
            continue
        hole = deltas.setdefault(bet.hole_number, {})
        for pid in player_ids:
            amount = bet.stakes * (len(player_ids) - 1) if pid == bet.winner_id else -bet.stakes
            hole[pid] = hole.get(pid, 0.0) + amount
    return deltas


def _game_deltas(
    game: GameConfig,
    players: List[Player],
    scores: List[Score],
    hole_info: List[HoleInfo],
    presses: List[Press],
    upto_hole: int,
    strokes_map,
) -> Optional[HoleDeltas]:
    """Per-hole money for one format, or None when the format does not apply."""
    net = strokes_map if game.use_net else None
    holes_in_round = len(hole_info) or 18

    if game.type == "skins":
        result = calculate_skins(scores, players, min(upto_hole, holes_in_round), game.stakes,
                                 game.carryover, net)
    elif game.type == "nassau":
        result = calculate_nassau(scores, players, game.stakes, presses, holes_in_round, net,
                                  auto_press=game.auto_press, upto_hole=upto_hole)
    elif game.type == "match":
        result = calculate_match_play(scores, players, hole_info, net, game.stakes, upto_hole)
    elif game.type == "wolf":
        result = calculate_wolf(players, game.wolf_results, game.stakes, game.carryover, upto_hole)
    elif game.type == "bestball":
        result = calculate_best_ball(scores, players, hole_info, game.teams, net, game.stakes, upto_hole)
    elif game.type == "stableford":
        result = calculate_stableford(scores, players, hole_info, game.modified_stableford, net,
                                      game.stakes, upto_hole)
    else:
        result = None

    if result is None:
        logger.debug("No %s contribution for %d players", game.type, len(players))
        return None
    return result.hole_deltas


def calculate_live_money(
    players: List[Player],
    scores: List[Score],
    games: List[GameConfig],
    hole_info: List[HoleInfo],
    presses: Optional[List[Press]] = None,
    upto_hole: Optional[int] = None,
    previous_balances: Optional[Dict[str, float]] = None,
    prop_bets: Optional[List[PropBet]] = None,
    slope: Optional[float] = None,
    handicap_mode: HandicapMode = "auto",
) -> LiveMoneyState:
    """Aggregate every active game's money through `upto_hole`.

    `change` is measured against `previous_balances` (0 when none given).
    `biggest_swing` is the largest single-hole delta for any player so far,
    across all formats combined.
    """
    if upto_hole is None:
        upto_hole = max((h.number for h in hole_info), default=18)
    presses = presses or []
    games = active_games(games)
    player_ids = [p.id for p in players]
    names = {p.id: p.name for p in players}

    match_play = len(players) == 2 and any(g.type in ("match", "nassau") for g in games)
    strokes_map = build_strokes_map(players, hole_info, slope, handicap_mode, match_play)

    breakdown = {pid: MoneyBreakdown() for pid in player_ids}
    combined: HoleDeltas = {}

    def apply(fmt: str, deltas: HoleDeltas) -> None:
        for hole, by_player in deltas.items():
            hole_total = combined.setdefault(hole, {})
            for pid, amount in by_player.items():
                if pid not in breakdown:
                    continue
                breakdown[pid].add(fmt, amount)
                hole_total[pid] = hole_total.get(pid, 0.0) + amount

    for game in games:
        deltas = _game_deltas(game, players, scores, hole_info, presses, upto_hole, strokes_map)
        if deltas is not None:
            logger.debug("%s contributed on holes %s", game.type, sorted(deltas))
            apply(game.type, deltas)

    if prop_bets:
        apply("prop_bets", _prop_bet_deltas(prop_bets, player_ids, upto_hole))

    for money in breakdown.values():
        for field in MoneyBreakdown.model_fields:
            setattr(money, field, round_money(getattr(money, field)))

    player_money = []
    for pid in player_ids:
        balance = breakdown[pid].total
        if previous_balances is None:
            previous, change = balance, 0.0
        else:
            previous = previous_balances.get(pid, 0.0)
            change = round_money(balance - previous)
        player_money.append(PlayerMoney(
            player_id=pid,
            player_name=names[pid],
            current_balance=balance,
            previous_balance=previous,
            change=change,
        ))
    player_money.sort(key=lambda pm: pm.current_balance, reverse=True)

    biggest = None
    for hole in sorted(combined):
        for pid in player_ids:
            amount = round_money(combined[hole].get(pid, 0.0))
            if amount and (biggest is None or abs(amount) > abs(biggest.amount)):
                biggest = BiggestSwing(player_id=pid, player_name=names[pid], amount=amount, hole_number=hole)

    return LiveMoneyState(
        players=player_money,
        breakdown=breakdown,
        biggest_swing=biggest,
        upto_hole=upto_hole,
    )


def money_timeline(
    players: List[Player],
    scores: List[Score],
    games: List[GameConfig],
    hole_info: List[HoleInfo],
    presses: Optional[List[Press]] = None,
    prop_bets: Optional[List[PropBet]] = None,
    slope: Optional[float] = None,
    handicap_mode: HandicapMode = "auto",
) -> List[LiveMoneyState]:
    """Ledger state after each hole, each one chained to the previous balances."""
    states: List[LiveMoneyState] = []
    previous: Optional[Dict[str, float]] = None
    for hole in sorted(h.number for h in hole_info):
        state = calculate_live_money(
            players, scores, games, hole_info, presses, hole, previous, prop_bets, slope, handicap_mode,
        )
        states.append(state)
        previous = state.balances()
    return states


def format_money(amount: float) -> str:
    if amount >= 0:
        return f"+${abs(amount):.0f}"
    return f"-${abs(amount):.0f}"

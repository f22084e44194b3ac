"""The game reducer: ``(state, action) -> next state``.

:func:`dispatch` never mutates its input.  It deep-copies the state, runs the
registered handler on the copy, repairs anything out of range and returns the
copy.  A handler that raises :class:`ActionRejected` turns the action into a
no-op: the *input* state is returned together with the reason.
"""

from __future__ import annotations

import copy
import dataclasses
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, get_args

from landak.domain import auction, bots, loans, trade, turn
from landak.domain.actions import (
    AcceptTrade,
    Action,
    BidAuction,
    BotBidAuction,
    BotResolveTurn,
    BotRespondTrade,
    BuildImprovement,
    BuyPoolUnits,
    BuyProperty,
    CreateLoanPool,
    DeclareBankruptcy,
    EndAuction,
    EndTurn,
    Mortgage,
    PayJail,
    PayRent,
    ProposeTrade,
    RejectTrade,
    RepayLoan,
    RollDice,
    SellImprovement,
    StartAuction,
    StartGame,
    TakeLoan,
    TickAuction,
    TravelTransport,
    Unmortgage,
    WithdrawAuction,
)
from landak.domain.enums import RejectReason
from landak.domain.errors import ActionRejected
from landak.domain.models import GameState
from landak.domain.rules_config import DEFAULT_RULES, RulesConfig
from landak.domain.setup import new_game
from landak.domain.validation import repair_state

logger = logging.getLogger(__name__)

MIN_PLAYERS = 2
MAX_PLAYERS = 8


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Outcome of dispatching one action."""

    state: GameState
    accepted: bool
    reason: RejectReason | None = None
    detail: str | None = None


ActionHandler = Callable[[GameState, Any, RulesConfig], None]


def dispatch(
    state: GameState, action: Action, *, rules: RulesConfig = DEFAULT_RULES
) -> ActionResult:
    """Apply ``action`` to a copy of ``state``."""

    handler = _ACTION_HANDLERS.get(type(action))
    if handler is None:
        raise TypeError(f"unsupported action: {type(action).__name__}")

    working = copy.deepcopy(state)
    try:
        handler(working, action, rules)
    except ActionRejected as exc:
        logger.info("rejected %s: %s (%s)", action.kind, exc.reason, exc.detail)
        return ActionResult(state=state, accepted=False, reason=exc.reason, detail=exc.detail)

    repair_state(working, rules)
    return ActionResult(state=working, accepted=True)


def reduce(state: GameState, action: Action, *, rules: RulesConfig = DEFAULT_RULES) -> GameState:
    return dispatch(state, action, rules=rules).state


# --- Handlers -------------------------------------------------------------------


def _handle_start_game(state: GameState, action: StartGame, rules: RulesConfig) -> None:
    total = len(action.humans) + action.bots
    if action.bots < 0 or not MIN_PLAYERS <= total <= MAX_PLAYERS:
        raise ActionRejected(
            RejectReason.INVALID_PLAYERS,
            f"a game needs {MIN_PLAYERS}-{MAX_PLAYERS} players, got {total}",
        )
    if any(not setup.name.strip() for setup in action.humans):
        raise ActionRejected(RejectReason.INVALID_PLAYERS, "every player needs a name")

    seed = state.seed if action.seed is None else action.seed
    fresh = new_game(action.humans, action.bots, seed=seed, tiles=state.tiles, rules=rules)
    for item in dataclasses.fields(GameState):
        setattr(state, item.name, getattr(fresh, item.name))


def _handle_roll_dice(state: GameState, action: RollDice, rules: RulesConfig) -> None:
    turn.roll(state, action.dice, rules)


def _handle_end_turn(state: GameState, action: EndTurn, rules: RulesConfig) -> None:
    turn.end_turn(state, rules)


def _handle_declare_bankruptcy(
    state: GameState, action: DeclareBankruptcy, rules: RulesConfig
) -> None:
    turn.declare_bankruptcy(state, rules)


def _handle_pay_jail(state: GameState, action: PayJail, rules: RulesConfig) -> None:
    turn.pay_jail(state, rules)


def _handle_travel(state: GameState, action: TravelTransport, rules: RulesConfig) -> None:
    turn.travel_transport(state, action.destination_id, rules)


def _handle_buy(state: GameState, action: BuyProperty, rules: RulesConfig) -> None:
    turn.buy_property(state, rules)


def _handle_pay_rent(state: GameState, action: PayRent, rules: RulesConfig) -> None:
    turn.pay_rent(state, rules)


def _handle_build(state: GameState, action: BuildImprovement, rules: RulesConfig) -> None:
    turn.build_improvement(state, action.tile_id, rules)


def _handle_sell_improvement(
    state: GameState, action: SellImprovement, rules: RulesConfig
) -> None:
    turn.sell_improvement(state, action.tile_id, rules)


def _handle_mortgage(state: GameState, action: Mortgage, rules: RulesConfig) -> None:
    turn.mortgage(state, action.tile_id, rules)


def _handle_unmortgage(state: GameState, action: Unmortgage, rules: RulesConfig) -> None:
    turn.unmortgage(state, action.tile_id, rules)


def _handle_start_auction(state: GameState, action: StartAuction, rules: RulesConfig) -> None:
    turn.require_in_play(state)
    auction.start_auction(state, action.tile_id, action.extra_tile_ids, action.starting_bid, rules)


def _handle_bid(state: GameState, action: BidAuction, rules: RulesConfig) -> None:
    turn.require_in_play(state)
    auction.place_bid(state, action.player_id, action.amount, rules)


def _handle_withdraw(state: GameState, action: WithdrawAuction, rules: RulesConfig) -> None:
    turn.require_in_play(state)
    auction.withdraw(state, action.player_id, rules)


def _handle_tick(state: GameState, action: TickAuction, rules: RulesConfig) -> None:
    auction.tick(state, action.seconds, action.auction_id, rules)


def _handle_end_auction(state: GameState, action: EndAuction, rules: RulesConfig) -> None:
    auction.resolve(state, rules)


def _handle_propose_trade(state: GameState, action: ProposeTrade, rules: RulesConfig) -> None:
    player = turn.require_in_play(state)
    if action.offer is not None:
        offer = dataclasses.replace(
            action.offer,
            offered_tile_ids=list(action.offer.offered_tile_ids),
            requested_tile_ids=list(action.offer.requested_tile_ids),
        )
    else:
        if not player.is_bot:
            raise ActionRejected(RejectReason.NOT_A_BOT, "only bots draft their own proposals")
        offer = trade.get_bot_trade_proposal(state, player.id, rules)
        if offer is None:
            raise ActionRejected(RejectReason.NO_PROPOSAL, f"{player.name} has nothing to offer")
    trade.propose(state, offer, rules)


def _handle_accept_trade(state: GameState, action: AcceptTrade, rules: RulesConfig) -> None:
    turn.require_in_play(state)
    trade.accept(state, rules)


def _handle_reject_trade(state: GameState, action: RejectTrade, rules: RulesConfig) -> None:
    trade.reject(state, rules)


def _handle_take_loan(state: GameState, action: TakeLoan, rules: RulesConfig) -> None:
    player = turn.require_in_play(state)
    loans.take_loan(state, player, action.amount, action.turns, rules)


def _handle_repay_loan(state: GameState, action: RepayLoan, rules: RulesConfig) -> None:
    player = turn.require_in_play(state)
    loans.repay_loan(state, player, action.loan_id, rules)


def _handle_create_pool(state: GameState, action: CreateLoanPool, rules: RulesConfig) -> None:
    turn.require_in_play(state)
    loans.create_pool(state, action.name, list(action.loan_ids), rules)


def _handle_buy_pool_units(state: GameState, action: BuyPoolUnits, rules: RulesConfig) -> None:
    player = turn.require_in_play(state)
    loans.buy_pool_units(state, player, action.pool_id, action.units, rules)


def _handle_bot_resolve(state: GameState, action: BotResolveTurn, rules: RulesConfig) -> None:
    bots.resolve_turn(state, rules)


def _handle_bot_bid(state: GameState, action: BotBidAuction, rules: RulesConfig) -> None:
    turn.require_in_play(state)
    bots.bid(state, action.player_id, rules)


def _handle_bot_respond(state: GameState, action: BotRespondTrade, rules: RulesConfig) -> None:
    turn.require_in_play(state)
    bots.respond_trade(state, rules)


_ACTION_HANDLERS: dict[type, ActionHandler] = {
    StartGame: _handle_start_game,
    RollDice: _handle_roll_dice,
    EndTurn: _handle_end_turn,
    DeclareBankruptcy: _handle_declare_bankruptcy,
    PayJail: _handle_pay_jail,
    TravelTransport: _handle_travel,
    BuyProperty: _handle_buy,
    PayRent: _handle_pay_rent,
    BuildImprovement: _handle_build,
    SellImprovement: _handle_sell_improvement,
    Mortgage: _handle_mortgage,
    Unmortgage: _handle_unmortgage,
    StartAuction: _handle_start_auction,
    BidAuction: _handle_bid,
    WithdrawAuction: _handle_withdraw,
    TickAuction: _handle_tick,
    EndAuction: _handle_end_auction,
    ProposeTrade: _handle_propose_trade,
    AcceptTrade: _handle_accept_trade,
    RejectTrade: _handle_reject_trade,
    TakeLoan: _handle_take_loan,
    RepayLoan: _handle_repay_loan,
    CreateLoanPool: _handle_create_pool,
    BuyPoolUnits: _handle_buy_pool_units,
    BotResolveTurn: _handle_bot_resolve,
    BotBidAuction: _handle_bot_bid,
    BotRespondTrade: _handle_bot_respond,
}

_unhandled = set(get_args(get_args(Action)[0])) - set(_ACTION_HANDLERS)
if _unhandled:
    raise RuntimeError(f"actions without handlers: {sorted(cls.__name__ for cls in _unhandled)}")

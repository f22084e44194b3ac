"""Decision rules for bot players."""

from __future__ import annotations

import logging

from landak.domain import auction, ledger, trade, turn
from landak.domain.board import group_tiles, house_cost, is_buildable, owns_full_group
from landak.domain.enums import GovernmentType, RejectReason
from landak.domain.errors import ActionRejected
from landak.domain.models import GameState, Player, PlayerID, Tile
from landak.domain.rent import rent_charge
from landak.domain.rules_config import DEFAULT_RULES, RulesConfig
from landak.utils.rng import check_success

logger = logging.getLogger(__name__)


def _require_bot(state: GameState, player_id: PlayerID) -> Player:
    player = state.player(player_id)
    if player is None or not player.is_bot:
        raise ActionRejected(RejectReason.NOT_A_BOT, f"player {player_id} is not a bot")
    return player


def resolve_turn(state: GameState, rules: RulesConfig = DEFAULT_RULES) -> list[str]:
    """Run the current bot's post-roll decisions; return the steps taken."""

    bot = turn.require_rolled(state)
    _require_bot(state, bot.id)
    steps: list[str] = []

    tile = state.tiles[bot.position]
    if (
        tile.is_property
        and tile.owner not in (None, bot.id)
        and not state.rent_settled
        and not tile.mortgaged
        and bot.jail_turns == 0
    ):
        owed = rent_charge(tile, sum(state.dice), state, rules).total
        if owed > 0:
            turn.pay_rent(state, rules, allow_debt=True)
            steps.append("rent")

    if _wants_to_buy(state, bot, tile, rules):
        turn.buy_property(state, rules)
        steps.append("buy")

    target = _build_target(state, bot, rules)
    if target is not None:
        turn.build_improvement(state, target.id, rules)
        steps.append("build")

    logger.debug("bot %s resolved turn: %s", bot.id, steps)
    return steps


def _wants_to_buy(state: GameState, bot: Player, tile: Tile, rules: RulesConfig) -> bool:
    if not tile.is_property or tile.owner is not None or state.auction is not None:
        return False
    if bot.cash <= tile.price + rules.bots.purchase_reserve:
        return False
    if state.government.type == GovernmentType.LEFT:
        seed = ledger.next_seed(state, f"bot_hesitation_{int(bot.id)}")
        if check_success(seed, rules.bots.left_hesitation_chance)["success"]:
            ledger.log(state, f"{bot.name} hesitates to buy under the left government.", rules)
            return False
    return True


def _build_target(state: GameState, bot: Player, rules: RulesConfig) -> Tile | None:
    """Least-improved tile of a completed group the bot can afford to build on."""

    for tile in state.tiles:
        if tile.owner != bot.id or not is_buildable(tile):
            continue
        if not owns_full_group(state.tiles, tile, bot.id):
            continue
        group = group_tiles(state.tiles, tile.color_group)
        if any(member.mortgaged for member in group):
            continue
        candidates = [member for member in group if not member.hotel]
        if not candidates:
            continue
        choice = min(candidates, key=lambda member: (member.houses, member.id))
        if bot.cash < house_cost(choice, rules) + rules.bots.build_reserve:
            continue
        if choice.houses == 4 and state.hotels_available <= 0:
            continue
        if choice.houses < 4 and state.houses_available <= 0:
            continue
        return choice
    return None


def bid(state: GameState, player_id: PlayerID, rules: RulesConfig = DEFAULT_RULES) -> int | None:
    """Raise the bid for a bot or withdraw it; return the amount bid."""

    bot = _require_bot(state, player_id)
    current = state.auction
    if current is None:
        raise ActionRejected(RejectReason.NO_AUCTION, "no auction is open")
    if current.highest_bidder_id == bot.id:
        raise ActionRejected(RejectReason.NOT_ELIGIBLE, f"{bot.name} already leads the auction")
    amount = auction.bot_bid_amount(state, bot.id, rules)
    if amount is None:
        auction.withdraw(state, bot.id, rules)
        return None
    auction.place_bid(state, bot.id, amount, rules)
    return amount


def respond_trade(state: GameState, rules: RulesConfig = DEFAULT_RULES) -> bool:
    """Let the bot targeted by the open trade accept or reject it."""

    offer = state.trade
    if offer is None:
        raise ActionRejected(RejectReason.NO_TRADE, "no trade is open")
    bot = _require_bot(state, offer.target_id)
    if trade.evaluate_trade_by_bot(state, offer, bot.id, rules):
        try:
            trade.accept(state, rules)
        except ActionRejected as exc:
            logger.info("%s cannot close the trade: %s (%s)", bot.name, exc.reason, exc.detail)
        else:
            return True
    trade.reject(state, rules)
    return False

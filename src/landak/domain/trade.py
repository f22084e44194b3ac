"""Bilateral trade negotiation and the bot trade heuristics."""

from __future__ import annotations

import math
from collections.abc import Iterable

from landak.domain import ledger
from landak.domain.board import group_tiles
from landak.domain.enums import RejectReason
from landak.domain.errors import ActionRejected
from landak.domain.models import BANK, GameState, Player, PlayerID, Tile, TileID, TradeOffer
from landak.domain.rules_config import DEFAULT_RULES, RulesConfig


def _party(state: GameState, player_id: PlayerID) -> Player:
    player = state.player(player_id)
    if player is None or not player.alive:
        raise ActionRejected(RejectReason.INVALID_TRADE, f"player {player_id} cannot trade")
    return player


def _check_holdings(state: GameState, owner: Player, tile_ids: Iterable[TileID]) -> None:
    for tile_id in tile_ids:
        if not 0 <= tile_id < len(state.tiles):
            raise ActionRejected(RejectReason.INVALID_TILE, f"tile {tile_id} does not exist")
        tile = state.tiles[tile_id]
        if tile.owner != owner.id:
            raise ActionRejected(
                RejectReason.INVALID_TRADE, f"{tile.name} is not owned by {owner.name}"
            )


def validate_offer(state: GameState, offer: TradeOffer) -> tuple[Player, Player]:
    """Check parties, amounts and tile ownership; return (initiator, target)."""

    if offer.initiator_id == offer.target_id:
        raise ActionRejected(RejectReason.INVALID_TRADE, "cannot trade with yourself")
    if offer.offered_money < 0 or offer.requested_money < 0:
        raise ActionRejected(RejectReason.INVALID_AMOUNT, "trade amounts cannot be negative")
    if len(set(offer.offered_tile_ids)) != len(offer.offered_tile_ids) or len(
        set(offer.requested_tile_ids)
    ) != len(offer.requested_tile_ids):
        raise ActionRejected(RejectReason.INVALID_TRADE, "duplicate tiles in offer")
    initiator = _party(state, offer.initiator_id)
    target = _party(state, offer.target_id)
    _check_holdings(state, initiator, offer.offered_tile_ids)
    _check_holdings(state, target, offer.requested_tile_ids)
    return initiator, target


def propose(state: GameState, offer: TradeOffer, rules: RulesConfig = DEFAULT_RULES) -> None:
    """Record ``offer`` as the single open trade, replacing any previous one."""

    initiator, target = validate_offer(state, offer)
    offer.is_open = True
    state.trade = offer
    ledger.log(state, f"{initiator.name} proposes a trade to {target.name}.", rules)


def accept(state: GameState, rules: RulesConfig = DEFAULT_RULES) -> None:
    offer = state.trade
    if offer is None or not offer.is_open:
        raise ActionRejected(RejectReason.NO_TRADE, "no trade is open")
    initiator, target = validate_offer(state, offer)
    if initiator.cash < offer.offered_money:
        raise ActionRejected(RejectReason.INSUFFICIENT_FUNDS, f"{initiator.name} cannot pay")
    if target.cash < offer.requested_money:
        raise ActionRejected(RejectReason.INSUFFICIENT_FUNDS, f"{target.name} cannot pay")

    ledger.transfer(initiator, target, offer.offered_money)
    ledger.transfer(target, initiator, offer.requested_money)
    for tile_id in offer.offered_tile_ids:
        ledger.set_owner(state, state.tiles[tile_id], target.id)
    for tile_id in offer.requested_tile_ids:
        ledger.set_owner(state, state.tiles[tile_id], initiator.id)
    offer.is_open = False
    state.trade = None
    ledger.log(state, f"Trade accepted between {initiator.name} and {target.name}.", rules)


def reject(state: GameState, rules: RulesConfig = DEFAULT_RULES) -> None:
    if state.trade is None:
        raise ActionRejected(RejectReason.NO_TRADE, "no trade is open")
    state.trade = None
    ledger.log(state, "Trade rejected.", rules)


# --- Bot heuristics -------------------------------------------------------------


def _give_weight(state: GameState, tile: Tile, bot_id: PlayerID, rules: RulesConfig) -> float:
    group = group_tiles(state.tiles, tile.color_group)
    held = sum(1 for member in group if member.owner == bot_id)
    if len(group) >= 2 and held == len(group):
        return rules.bots.monopoly_break_weight
    if held > 1:
        return rules.bots.partial_group_weight
    return 1.0


def _get_weight(
    state: GameState, tile: Tile, bot_id: PlayerID, incoming: set[TileID], rules: RulesConfig
) -> float:
    group = group_tiles(state.tiles, tile.color_group)
    if len(group) >= 2 and all(
        member.owner == bot_id or member.id in incoming for member in group
    ):
        return rules.bots.completion_weight
    if any(member.owner == bot_id for member in group if member.id != tile.id):
        return rules.bots.partial_group_weight
    return 1.0


def evaluate_trade_by_bot(
    state: GameState, offer: TradeOffer, bot_id: PlayerID, rules: RulesConfig = DEFAULT_RULES
) -> bool:
    """Decide whether ``bot_id`` (the target of ``offer``) accepts it."""

    incoming = set(offer.offered_tile_ids)
    give_value = offer.requested_money + sum(
        state.tiles[tile_id].price * _give_weight(state, state.tiles[tile_id], bot_id, rules)
        for tile_id in offer.requested_tile_ids
    )
    get_value = offer.offered_money + sum(
        state.tiles[tile_id].price
        * _get_weight(state, state.tiles[tile_id], bot_id, incoming, rules)
        for tile_id in offer.offered_tile_ids
    )
    return get_value >= give_value * rules.bots.trade_acceptance_margin


def _color_groups(state: GameState) -> list[str]:
    seen: list[str] = []
    for tile in state.tiles:
        if tile.is_property and tile.color_group is not None and tile.color_group not in seen:
            seen.append(tile.color_group)
    return seen


def get_bot_trade_proposal(
    state: GameState, bot_id: PlayerID, rules: RulesConfig = DEFAULT_RULES
) -> TradeOffer | None:
    """Build an offer for the one missing tile of a group the bot is collecting."""

    bot = state.player(bot_id)
    if bot is None or not bot.alive:
        return None
    bot_rules = rules.bots

    for color_group in _color_groups(state):
        group = group_tiles(state.tiles, color_group)
        mine = [tile for tile in group if tile.owner == bot_id]
        others = [tile for tile in group if tile.owner != bot_id]
        if not mine or len(others) != 1:
            continue
        wanted = others[0]
        if wanted.owner is None or wanted.owner == BANK:
            continue
        holder = state.player(wanted.owner)
        if holder is None or not holder.alive:
            continue

        redundant = _redundant_tiles(state, bot_id, exclude_group=color_group)
        offered = redundant[: bot_rules.proposal_max_offered_tiles]
        offered_value = sum(tile.price for tile in offered)
        top_up = math.floor(wanted.price * bot_rules.proposal_price_ratio) - offered_value
        cap = math.floor(max(0, bot.cash) * bot_rules.proposal_cash_cap)
        money = max(0, min(top_up, cap))
        if not offered and money == 0:
            continue
        return TradeOffer(
            initiator_id=bot_id,
            target_id=holder.id,
            offered_money=money,
            offered_tile_ids=[tile.id for tile in offered],
            requested_tile_ids=[wanted.id],
        )
    return None


def _redundant_tiles(state: GameState, bot_id: PlayerID, exclude_group: str) -> list[Tile]:
    """Unimproved tiles that are the bot's only holding in their group."""

    result = []
    for tile in state.tiles:
        if tile.owner != bot_id or tile.color_group in (None, exclude_group):
            continue
        if tile.mortgaged or tile.improvement_level > 0:
            continue
        group = group_tiles(state.tiles, tile.color_group)
        if sum(1 for member in group if member.owner == bot_id) == 1:
            result.append(tile)
    return result

"""Countdown auctions for unclaimed tiles and player sales.

An auction is opened either for an unowned property (proceeds go to the bank)
or by the current player selling unimproved tiles, alone or as a bundle
(proceeds go to the seller).  Each accepted bid resets the countdown; the
auction resolves when the countdown reaches zero, when the last eligible bidder
withdraws, or when it is closed explicitly.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from landak.domain import ledger
from landak.domain.board import group_tiles
from landak.domain.enums import RejectReason
from landak.domain.errors import ActionRejected
from landak.domain.models import Auction, AuctionID, GameState, PlayerID, Tile, TileID
from landak.domain.rules_config import DEFAULT_RULES, RulesConfig
from landak.utils.rng import random_int

logger = logging.getLogger(__name__)


def opening_bid(tiles: Sequence[Tile], rules: RulesConfig = DEFAULT_RULES) -> int:
    auction_rules = rules.auction
    total = sum(tile.price for tile in tiles)
    return max(
        auction_rules.minimum_opening_bid, math.floor(total * auction_rules.opening_bid_ratio)
    )


def open_auction(
    state: GameState,
    tile_ids: Sequence[TileID],
    *,
    seller_id: PlayerID | None,
    starting_bid: int | None,
    timer: int,
    rules: RulesConfig = DEFAULT_RULES,
) -> Auction:
    """Create the auction record; callers have validated the tiles."""

    tiles = [state.tiles[tile_id] for tile_id in tile_ids]
    bid = opening_bid(tiles, rules) if starting_bid is None else starting_bid
    eligible = [player.id for player in state.players if player.alive and player.id != seller_id]
    state.auction_sequence += 1
    auction = Auction(
        id=AuctionID(state.auction_sequence),
        tile_ids=list(tile_ids),
        current_bid=bid,
        eligible_bidder_ids=eligible,
        seconds_remaining=timer,
        timer_reset=timer,
        seller_id=seller_id,
    )
    state.auction = auction
    names = ", ".join(tile.name for tile in tiles)
    ledger.log(state, f"Auction #{auction.id} opens for {names} at ${bid}.", rules)
    return auction


def start_auction(
    state: GameState,
    tile_id: TileID,
    extra_tile_ids: Sequence[TileID] = (),
    starting_bid: int | None = None,
    rules: RulesConfig = DEFAULT_RULES,
) -> Auction:
    """Open a landing auction or a sale by the current player."""

    if state.auction is not None:
        raise ActionRejected(RejectReason.AUCTION_IN_PROGRESS, "an auction is already open")
    if starting_bid is not None and starting_bid < 0:
        raise ActionRejected(RejectReason.INVALID_AMOUNT, "starting bid cannot be negative")

    tile_ids = [tile_id, *(extra for extra in extra_tile_ids if extra != tile_id)]
    if len(set(tile_ids)) != len(tile_ids):
        raise ActionRejected(RejectReason.INVALID_TILE, "duplicate tiles in bundle")
    tiles = [_property_tile(state, candidate) for candidate in tile_ids]

    seller = state.current_player
    first = tiles[0]
    if first.owner is None:
        if len(tiles) > 1:
            raise ActionRejected(RejectReason.INVALID_TILE, "bundles are only sold by their owner")
        return open_auction(
            state,
            tile_ids,
            seller_id=None,
            starting_bid=starting_bid,
            timer=rules.auction.landing_timer_seconds,
            rules=rules,
        )

    for tile in tiles:
        if tile.owner != seller.id:
            raise ActionRejected(RejectReason.NOT_OWNER, f"{tile.name} is not yours to sell")
        if tile.improvement_level > 0 or tile.workers > 0:
            raise ActionRejected(RejectReason.HAS_IMPROVEMENTS, f"{tile.name} has improvements")
    return open_auction(
        state,
        tile_ids,
        seller_id=seller.id,
        starting_bid=starting_bid,
        timer=rules.auction.sale_timer_seconds,
        rules=rules,
    )


def _property_tile(state: GameState, tile_id: TileID) -> Tile:
    if not 0 <= tile_id < len(state.tiles):
        raise ActionRejected(RejectReason.INVALID_TILE, f"tile {tile_id} does not exist")
    tile = state.tiles[tile_id]
    if not tile.is_property:
        raise ActionRejected(RejectReason.INVALID_TILE, f"{tile.name} cannot be auctioned")
    return tile


def _require_auction(state: GameState) -> Auction:
    if state.auction is None or not state.auction.is_open:
        raise ActionRejected(RejectReason.NO_AUCTION, "no auction is open")
    return state.auction


def place_bid(
    state: GameState, player_id: PlayerID, amount: int, rules: RulesConfig = DEFAULT_RULES
) -> None:
    auction = _require_auction(state)
    bidder = state.player(player_id)
    if bidder is None or not bidder.alive or player_id not in auction.eligible_bidder_ids:
        raise ActionRejected(RejectReason.NOT_ELIGIBLE, f"player {player_id} cannot bid")
    if amount <= auction.current_bid:
        raise ActionRejected(
            RejectReason.BID_TOO_LOW, f"bid must exceed ${auction.current_bid}"
        )
    if bidder.cash < amount:
        raise ActionRejected(
            RejectReason.INSUFFICIENT_FUNDS, f"{bidder.name} cannot cover ${amount}"
        )

    auction.current_bid = amount
    auction.highest_bidder_id = player_id
    auction.seconds_remaining = auction.timer_reset
    ledger.log(state, f"{bidder.name} bids ${amount}.", rules)


def withdraw(state: GameState, player_id: PlayerID, rules: RulesConfig = DEFAULT_RULES) -> None:
    """Remove a bidder; a standing high bid remains binding."""

    auction = _require_auction(state)
    if player_id not in auction.eligible_bidder_ids:
        raise ActionRejected(RejectReason.NOT_ELIGIBLE, f"player {player_id} is not bidding")
    auction.eligible_bidder_ids.remove(player_id)
    player = state.player(player_id)
    if player is not None:
        ledger.log(state, f"{player.name} withdraws from the auction.", rules)
    if not auction.eligible_bidder_ids:
        resolve(state, rules)


def tick(
    state: GameState,
    seconds: int = 1,
    auction_id: AuctionID | None = None,
    rules: RulesConfig = DEFAULT_RULES,
) -> None:
    auction = _require_auction(state)
    if auction_id is not None and auction_id != auction.id:
        logger.debug("ignoring tick for auction %s; auction %s is open", auction_id, auction.id)
        raise ActionRejected(RejectReason.STALE, f"auction {auction_id} is no longer open")
    if seconds < 1:
        raise ActionRejected(RejectReason.INVALID_AMOUNT, "tick must advance at least one second")
    auction.seconds_remaining = max(0, auction.seconds_remaining - seconds)
    if auction.seconds_remaining == 0:
        resolve(state, rules)


def resolve(state: GameState, rules: RulesConfig = DEFAULT_RULES) -> bool:
    """Close the open auction; return ``True`` when the tiles changed hands."""

    auction = _require_auction(state)
    auction.is_open = False
    state.auction = None
    tiles = [state.tiles[tile_id] for tile_id in auction.tile_ids]
    names = ", ".join(tile.name for tile in tiles)

    winner = None
    if auction.highest_bidder_id is not None:
        winner = state.player(auction.highest_bidder_id)
    expected_owner = auction.seller_id
    if (
        winner is None
        or not winner.alive
        or winner.cash < auction.current_bid
        or any(tile.owner != expected_owner for tile in tiles)
    ):
        ledger.log(state, f"Auction #{auction.id} for {names} is void.", rules)
        return False

    if auction.seller_id is None:
        ledger.pay_bank(state, winner, auction.current_bid)
    else:
        seller = state.player(auction.seller_id)
        if seller is None:
            ledger.pay_bank(state, winner, auction.current_bid)
        else:
            ledger.transfer(winner, seller, auction.current_bid)
    for tile in tiles:
        ledger.set_owner(state, tile, winner.id)
    ledger.log(state, f"{winner.name} wins {names} for ${auction.current_bid}.", rules)
    return True


# --- Bot bidding ----------------------------------------------------------------


def bot_valuation(state: GameState, auction: Auction, bot_id: PlayerID, rules: RulesConfig) -> int:
    tiles = [state.tiles[tile_id] for tile_id in auction.tile_ids]
    price = sum(tile.price for tile in tiles)
    ratio = rules.auction.bot_valuation_ratio
    if _completes_group(state, tiles, bot_id):
        ratio = rules.auction.bot_completion_ratio
    return math.floor(price * ratio)


def _completes_group(state: GameState, tiles: Sequence[Tile], bot_id: PlayerID) -> bool:
    incoming = {tile.id for tile in tiles}
    for tile in tiles:
        group = group_tiles(state.tiles, tile.color_group)
        if len(group) > 1 and all(
            member.id in incoming or member.owner == bot_id for member in group
        ):
            return True
    return False


def bot_bid_amount(
    state: GameState, bot_id: PlayerID, rules: RulesConfig = DEFAULT_RULES
) -> int | None:
    """Next bid a bot is willing to place, or ``None`` when it should drop out."""

    auction = state.auction
    bot = state.player(bot_id)
    if auction is None or bot is None or bot_id not in auction.eligible_bidder_ids:
        return None
    auction_rules = rules.auction
    seed = ledger.next_seed(state, f"bot_bid_{int(bot_id)}")
    increment = random_int(seed, auction_rules.bot_min_increment, auction_rules.bot_max_increment)
    amount = auction.current_bid + increment["value"]
    if amount > bot_valuation(state, auction, bot_id, rules):
        return None
    if amount > bot.cash - auction_rules.bot_cash_reserve:
        return None
    return amount

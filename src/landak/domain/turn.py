"""Turn and movement rules: dice, landing, property management, turn order.

Every function acts on the current player of the working state and raises
:class:`~landak.domain.errors.ActionRejected` when its preconditions fail.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from landak.domain import ledger
from landak.domain.board import (
    group_tiles,
    house_cost,
    is_buildable,
    is_transport,
    jail_index,
    owns_full_group,
    transport_destinations,
)
from landak.domain.enums import RejectReason, TileSubtype, TileType
from landak.domain.errors import ActionRejected
from landak.domain.events import apply_event, draw_event
from landak.domain.government import tax_tile_amount
from landak.domain.loans import default_loans
from landak.domain.models import BANK, GameState, Player, Tile, TileID
from landak.domain.rent import rent_charge
from landak.domain.rules_config import DEFAULT_RULES, RulesConfig
from landak.domain.tick import run_round_tick
from landak.utils.rng import roll_dice as roll_seeded_dice

logger = logging.getLogger(__name__)


# --- Guards ---------------------------------------------------------------------


def alive_players(state: GameState) -> list[Player]:
    return [player for player in state.players if player.alive]


def is_game_over(state: GameState) -> bool:
    return state.game_started and len(alive_players(state)) <= 1


def require_in_play(state: GameState) -> Player:
    """Return the current player of a running game."""

    if not state.game_started or not state.players:
        raise ActionRejected(RejectReason.GAME_NOT_STARTED, "the game has not started")
    if is_game_over(state):
        raise ActionRejected(RejectReason.GAME_OVER, "the game is over")
    return state.current_player


def require_rolled(state: GameState) -> Player:
    player = require_in_play(state)
    if not state.has_rolled:
        raise ActionRejected(RejectReason.NOT_ROLLED, "roll the dice first")
    return player


def _tile(state: GameState, tile_id: TileID) -> Tile:
    if not 0 <= tile_id < len(state.tiles):
        raise ActionRejected(RejectReason.INVALID_TILE, f"tile {tile_id} does not exist")
    return state.tiles[tile_id]


def _owned_tile(state: GameState, player: Player, tile_id: TileID) -> Tile:
    tile = _tile(state, tile_id)
    if not tile.is_property:
        raise ActionRejected(RejectReason.INVALID_TILE, f"{tile.name} is not a property")
    if tile.owner != player.id:
        raise ActionRejected(RejectReason.NOT_OWNER, f"{tile.name} is not yours")
    return tile


# --- Dice and movement ----------------------------------------------------------


def roll(
    state: GameState, dice: Sequence[int] | None = None, rules: RulesConfig = DEFAULT_RULES
) -> tuple[int, int]:
    """Roll (or accept pre-supplied) dice and move the current player."""

    player = require_in_play(state)
    if state.auction is not None:
        raise ActionRejected(RejectReason.AUCTION_IN_PROGRESS, "finish the auction first")
    if state.has_rolled:
        raise ActionRejected(RejectReason.ALREADY_ROLLED, "already rolled this turn")

    if dice is None:
        rolled = roll_seeded_dice(ledger.next_seed(state, "dice"), "2d6")["rolls"]
        first, second = rolled
    else:
        if len(dice) != 2 or any(not 1 <= value <= 6 for value in dice):
            raise ActionRejected(RejectReason.INVALID_DICE, f"invalid dice {list(dice)}")
        first, second = dice

    state.dice = (first, second)
    state.has_rolled = True
    total = first + second
    doubles = first == second
    ledger.log(state, f"{player.name} rolls {first} and {second} ({total}).", rules)

    if player.jail_turns > 0:
        if not doubles:
            player.jail_turns -= 1
            if player.jail_turns == 0:
                ledger.log(state, f"{player.name} has served the sentence.", rules)
            else:
                ledger.log(
                    state, f"{player.name} stays in jail ({player.jail_turns} turns left).", rules
                )
            return state.dice
        player.jail_turns = 0
        ledger.log(state, f"{player.name} rolls doubles and leaves jail.", rules)

    move_by(state, player, total, rules)
    return state.dice


def move_by(
    state: GameState, player: Player, steps: int, rules: RulesConfig = DEFAULT_RULES
) -> None:
    board_size = len(state.tiles)
    new_position = (player.position + steps) % board_size
    if new_position < player.position:
        salary = rules.economy.pass_start_salary
        ledger.pay_from_bank(state, player, salary)
        ledger.log(state, f"{player.name} passes the start and collects ${salary}.", rules)
    player.position = new_position
    _record_landing(state, new_position)
    land(state, player, rules)


def _record_landing(state: GameState, position: int) -> None:
    tile_id = TileID(position)
    state.landing_heatmap[tile_id] = state.landing_heatmap.get(tile_id, 0) + 1


def land(state: GameState, player: Player, rules: RulesConfig = DEFAULT_RULES) -> None:
    """Apply the effect of the tile ``player`` stands on.

    Properties only expose affordances (buy, auction, pay rent); nothing is
    resolved automatically here.
    """

    tile = state.tiles[player.position]
    ledger.log(state, f"{player.name} lands on {tile.name}.", rules)

    match tile.type:
        case TileType.TAX:
            amount = tax_tile_amount(state, rules)
            if amount > 0:
                ledger.pay_bank(state, player, amount)
                ledger.log(
                    state,
                    f"{player.name} pays ${amount} in taxes ({state.government.type}).",
                    rules,
                )
            else:
                ledger.log(state, f"{player.name} is spared taxes by the government.", rules)
        case TileType.EVENT:
            apply_event(state, player, draw_event(state), rules)
        case TileType.GO_TO_JAIL:
            send_to_jail(state, player, rules)


def send_to_jail(state: GameState, player: Player, rules: RulesConfig = DEFAULT_RULES) -> None:
    player.position = jail_index(state.tiles)
    player.jail_turns = rules.economy.jail_turns
    state.has_rolled = True
    ledger.log(state, f"{player.name} goes to jail.", rules)


def pay_jail(state: GameState, rules: RulesConfig = DEFAULT_RULES) -> None:
    player = require_in_play(state)
    if player.jail_turns <= 0:
        raise ActionRejected(RejectReason.NOT_IN_JAIL, f"{player.name} is not in jail")
    bail = rules.economy.jail_bail
    if player.cash < bail:
        raise ActionRejected(RejectReason.INSUFFICIENT_FUNDS, f"bail costs ${bail}")
    ledger.pay_bank(state, player, bail)
    player.jail_turns = 0
    ledger.log(state, f"{player.name} pays ${bail} bail.", rules)


def travel_transport(
    state: GameState, destination_id: TileID, rules: RulesConfig = DEFAULT_RULES
) -> None:
    player = require_in_play(state)
    if state.transport_used or player.jail_turns > 0:
        raise ActionRejected(RejectReason.TRANSPORT_UNAVAILABLE, "no transport hop available")
    origin = state.tiles[player.position]
    if not is_transport(origin):
        raise ActionRejected(RejectReason.TRANSPORT_UNAVAILABLE, f"{origin.name} has no service")
    destination = _tile(state, destination_id)
    if destination not in transport_destinations(state.tiles, origin):
        raise ActionRejected(RejectReason.INVALID_TILE, f"{destination.name} is not a stop")
    fare = rules.economy.transport_fare
    if player.cash < fare:
        raise ActionRejected(RejectReason.INSUFFICIENT_FUNDS, f"the fare is ${fare}")

    ledger.pay_bank(state, player, fare)
    player.position = destination.id
    state.transport_used = True
    state.rent_settled = False
    _record_landing(state, destination.id)
    ledger.log(state, f"{player.name} travels to {destination.name}.", rules)


# --- Property -------------------------------------------------------------------


def buy_property(state: GameState, rules: RulesConfig = DEFAULT_RULES) -> Tile:
    player = require_rolled(state)
    if state.auction is not None:
        raise ActionRejected(RejectReason.AUCTION_IN_PROGRESS, "an auction is open")
    tile = state.tiles[player.position]
    if not tile.is_property:
        raise ActionRejected(RejectReason.INVALID_TILE, f"{tile.name} is not for sale")
    if tile.owner is not None:
        raise ActionRejected(RejectReason.ALREADY_OWNED, f"{tile.name} already has an owner")
    if player.cash < tile.price:
        raise ActionRejected(RejectReason.INSUFFICIENT_FUNDS, f"{tile.name} costs ${tile.price}")

    ledger.pay_bank(state, player, tile.price)
    ledger.set_owner(state, tile, player.id)
    ledger.log(state, f"{player.name} buys {tile.name} for ${tile.price}.", rules)
    return tile


def pay_rent(
    state: GameState, rules: RulesConfig = DEFAULT_RULES, *, allow_debt: bool = False
) -> int:
    """Settle the rent owed on the current tile; return the total paid.

    With ``allow_debt`` the payer may go negative and is eliminated when the
    turn ends.
    """

    player = require_rolled(state)
    tile = state.tiles[player.position]
    if state.rent_settled or not tile.is_property or tile.owner in (None, player.id):
        raise ActionRejected(RejectReason.NOTHING_OWED, "no rent is owed")

    charge = rent_charge(tile, sum(state.dice), state, rules)
    if charge.total <= 0:
        raise ActionRejected(RejectReason.NOTHING_OWED, f"{tile.name} yields no rent")
    if player.cash < charge.total and not allow_debt:
        raise ActionRejected(
            RejectReason.INSUFFICIENT_FUNDS, f"{player.name} cannot pay ${charge.total}"
        )

    player.cash -= charge.total
    ledger.credit_owner(state, tile.owner, charge.base)
    state.bank_balance += charge.vat
    state.rent_settled = True
    ledger.log(
        state, f"{player.name} pays ${charge.total} rent (VAT ${charge.vat} to the State).", rules
    )
    return charge.total


def build_improvement(
    state: GameState, tile_id: TileID, rules: RulesConfig = DEFAULT_RULES
) -> None:
    player = require_in_play(state)
    tile = _owned_tile(state, player, tile_id)
    if tile.mortgaged:
        raise ActionRejected(RejectReason.MORTGAGED, f"{tile.name} is mortgaged")
    cost = house_cost(tile, rules)

    if tile.subtype == TileSubtype.FIORE:
        if tile.workers >= rules.economy.fiore_max_workers:
            raise ActionRejected(RejectReason.MAX_IMPROVEMENT, f"{tile.name} is fully staffed")
        _charge_building(state, player, cost)
        tile.workers += 1
        ledger.log(state, f"{player.name} hires a worker at {tile.name}.", rules)
        return

    if not is_buildable(tile):
        raise ActionRejected(RejectReason.INVALID_TILE, f"{tile.name} cannot be built on")
    if not owns_full_group(state.tiles, tile, player.id):
        raise ActionRejected(
            RejectReason.NO_MONOPOLY, f"complete the {tile.color_group} group first"
        )
    if any(member.mortgaged for member in group_tiles(state.tiles, tile.color_group)):
        raise ActionRejected(RejectReason.MORTGAGED, f"the {tile.color_group} group has a mortgage")
    if tile.hotel:
        raise ActionRejected(RejectReason.MAX_IMPROVEMENT, f"{tile.name} already has a hotel")

    upgrading = tile.houses == 4
    if upgrading and state.hotels_available <= 0:
        raise ActionRejected(RejectReason.SUPPLY_EXHAUSTED, "no hotels left in the bank")
    if not upgrading and state.houses_available <= 0:
        raise ActionRejected(RejectReason.SUPPLY_EXHAUSTED, "no houses left in the bank")
    _charge_building(state, player, cost)

    if upgrading:
        state.hotels_available -= 1
        state.houses_available += 4
        tile.houses = 0
        tile.hotel = True
        ledger.log(state, f"{player.name} builds a hotel on {tile.name}.", rules)
    else:
        state.houses_available -= 1
        tile.houses += 1
        ledger.log(state, f"{player.name} builds a house on {tile.name}.", rules)


def _charge_building(state: GameState, player: Player, cost: int) -> None:
    if player.cash < cost:
        raise ActionRejected(RejectReason.INSUFFICIENT_FUNDS, f"building costs ${cost}")
    ledger.pay_bank(state, player, cost)


def sell_improvement(state: GameState, tile_id: TileID, rules: RulesConfig = DEFAULT_RULES) -> int:
    """Remove one improvement level and refund half its cost."""

    player = require_in_play(state)
    tile = _owned_tile(state, player, tile_id)
    refund = math.floor(house_cost(tile, rules) * rules.economy.improvement_refund_ratio)

    if tile.workers > 0:
        tile.workers -= 1
    elif tile.hotel:
        if state.houses_available < 4:
            raise ActionRejected(
                RejectReason.SUPPLY_EXHAUSTED, "not enough houses to break a hotel"
            )
        state.houses_available -= 4
        state.hotels_available += 1
        tile.hotel = False
        tile.houses = 4
    elif tile.houses > 0:
        tile.houses -= 1
        state.houses_available += 1
    else:
        raise ActionRejected(RejectReason.NO_IMPROVEMENTS, f"{tile.name} has nothing to sell")

    ledger.pay_from_bank(state, player, refund)
    ledger.log(state, f"{player.name} sells an improvement on {tile.name} for ${refund}.", rules)
    return refund


def mortgage(state: GameState, tile_id: TileID, rules: RulesConfig = DEFAULT_RULES) -> int:
    player = require_in_play(state)
    tile = _owned_tile(state, player, tile_id)
    if tile.mortgaged:
        raise ActionRejected(RejectReason.MORTGAGED, f"{tile.name} is already mortgaged")
    if tile.improvement_level > 0 or tile.workers > 0:
        raise ActionRejected(RejectReason.HAS_IMPROVEMENTS, f"sell the buildings on {tile.name}")
    amount = math.floor(tile.price * rules.economy.mortgage_ratio)
    tile.mortgaged = True
    ledger.pay_from_bank(state, player, amount)
    ledger.log(state, f"{player.name} mortgages {tile.name} for ${amount}.", rules)
    return amount


def unmortgage(state: GameState, tile_id: TileID, rules: RulesConfig = DEFAULT_RULES) -> int:
    player = require_in_play(state)
    tile = _owned_tile(state, player, tile_id)
    if not tile.mortgaged:
        raise ActionRejected(RejectReason.NOT_MORTGAGED, f"{tile.name} is not mortgaged")
    amount = math.floor(tile.price * rules.economy.unmortgage_ratio)
    if player.cash < amount:
        raise ActionRejected(
            RejectReason.INSUFFICIENT_FUNDS, f"lifting the mortgage costs ${amount}"
        )
    ledger.pay_bank(state, player, amount)
    tile.mortgaged = False
    ledger.log(state, f"{player.name} lifts the mortgage on {tile.name} for ${amount}.", rules)
    return amount


# --- Turn order -----------------------------------------------------------------


def eliminate(state: GameState, player: Player, rules: RulesConfig = DEFAULT_RULES) -> None:
    """Remove ``player`` from play; holdings revert to the bank."""

    player.alive = False
    player.jail_turns = 0
    for tile_id in sorted(player.owned_tile_ids):
        tile = state.tiles[tile_id]
        ledger.clear_improvements(state, tile)
        tile.mortgaged = False
        ledger.set_owner(state, tile, BANK)
    defaulted = default_loans(state, player.id)
    if state.trade is not None and player.id in (state.trade.initiator_id, state.trade.target_id):
        state.trade = None
    logger.info("player %s eliminated (%s loans defaulted)", player.id, defaulted)
    ledger.log(state, f"{player.name} is bankrupt and leaves the game.", rules)


def end_turn(state: GameState, rules: RulesConfig = DEFAULT_RULES) -> None:
    player = require_rolled(state)
    if state.auction is not None:
        raise ActionRejected(RejectReason.AUCTION_IN_PROGRESS, "an auction is still open")
    if player.cash < 0:
        eliminate(state, player, rules)
    advance_turn(state, rules)


def declare_bankruptcy(state: GameState, rules: RulesConfig = DEFAULT_RULES) -> None:
    player = require_in_play(state)
    if state.auction is not None:
        raise ActionRejected(RejectReason.AUCTION_IN_PROGRESS, "an auction is still open")
    eliminate(state, player, rules)
    advance_turn(state, rules)


def advance_turn(state: GameState, rules: RulesConfig = DEFAULT_RULES) -> None:
    """Hand the turn to the next living player, ticking the round on wrap."""

    state.has_rolled = False
    state.rent_settled = False
    state.transport_used = False

    survivors = alive_players(state)
    if len(survivors) <= 1:
        state.winner_id = survivors[0].id if survivors else None
        winner = survivors[0].name if survivors else "nobody"
        ledger.log(state, f"Game over: {winner} wins.", rules)
        return

    old_index = state.current_player_index
    count = len(state.players)
    new_index = old_index
    for _ in range(count):
        new_index = (new_index + 1) % count
        if state.players[new_index].alive:
            break
    state.current_player_index = new_index
    if new_index <= old_index:
        run_round_tick(state, rules)
    ledger.log(state, f"Turn of {state.current_player.name}.", rules)

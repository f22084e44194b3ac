"""Low-level state mutations shared by every rule module.

Money always moves through :func:`transfer`, :func:`pay_bank` or
:func:`pay_from_bank` and ownership always changes through :func:`set_owner`,
so the double-entry and tile/player bookkeeping stay in one place.
"""

from __future__ import annotations

from landak.domain.models import BANK, GameState, Owner, Player, Tile
from landak.domain.rules_config import DEFAULT_RULES, RulesConfig
from landak.utils.rng import generate_seed


def next_seed(state: GameState, context: str) -> str:
    """Derive the seed for the next random draw and consume it."""

    seed = generate_seed(state.seed, state.draws, state.turn_count, context)
    state.draws += 1
    return seed


def log(state: GameState, message: str, rules: RulesConfig = DEFAULT_RULES) -> None:
    """Prepend ``message`` to the event log (newest first)."""

    state.event_log.insert(0, message)
    limit = rules.event_log_limit
    if limit is not None and len(state.event_log) > limit:
        del state.event_log[limit:]


# --- Money ----------------------------------------------------------------------


def transfer(payer: Player, payee: Player, amount: int) -> None:
    payer.cash -= amount
    payee.cash += amount


def pay_bank(state: GameState, player: Player, amount: int) -> None:
    player.cash -= amount
    state.bank_balance += amount


def pay_from_bank(state: GameState, player: Player, amount: int) -> None:
    state.bank_balance -= amount
    player.cash += amount


def credit_owner(state: GameState, owner: Owner, amount: int) -> None:
    """Credit ``amount`` to a player id or to the bank."""

    if owner is None or owner == BANK:
        state.bank_balance += amount
        return
    recipient = state.player(owner)
    if recipient is None:
        state.bank_balance += amount
    else:
        recipient.cash += amount


# --- Ownership ------------------------------------------------------------------


def set_owner(state: GameState, tile: Tile, new_owner: Owner) -> None:
    """Move ``tile`` to ``new_owner`` keeping both ownership views in step."""

    previous = tile.owner
    if previous is not None and previous != BANK:
        holder = state.player(previous)
        if holder is not None:
            holder.owned_tile_ids.discard(tile.id)
    tile.owner = new_owner
    if new_owner is not None and new_owner != BANK:
        holder = state.player(new_owner)
        if holder is None:
            raise ValueError(f"player {new_owner} not found")
        holder.owned_tile_ids.add(tile.id)


def clear_improvements(state: GameState, tile: Tile) -> None:
    """Strip houses, hotel and workers, returning building stock to the bank."""

    state.houses_available += tile.houses
    if tile.hotel:
        state.hotels_available += 1
    tile.houses = 0
    tile.hotel = False
    tile.workers = 0

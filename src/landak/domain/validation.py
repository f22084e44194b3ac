"""Post-transition repair of corrupted state.

The reducer runs :func:`repair_state` after every accepted action.  Each
repair is deterministic and leaves a trace in both the Python log and the
player-facing event log.
"""

from __future__ import annotations

import logging
import math

from landak.domain import ledger
from landak.domain.models import BANK, GameState, TileID
from landak.domain.rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)


def _sane_amount(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return 0
    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        return math.floor(value)
    return value


def repair_state(state: GameState, rules: RulesConfig = DEFAULT_RULES) -> list[str]:
    """Clamp out-of-range values and rebuild ownership; return the repairs."""

    repairs: list[str] = []
    board_size = len(state.tiles)
    player_ids = {player.id for player in state.players}

    for player in state.players:
        if board_size and not 0 <= player.position < board_size:
            fixed = player.position % board_size
            repairs.append(f"position of {player.name} {player.position} -> {fixed}")
            player.position = fixed
        cash = _sane_amount(player.cash)
        if cash != player.cash or type(player.cash) is not int:
            repairs.append(f"cash of {player.name} {player.cash!r} -> {cash}")
            player.cash = cash
        if player.jail_turns < 0:
            repairs.append(f"jail counter of {player.name} reset")
            player.jail_turns = 0

    bank = _sane_amount(state.bank_balance)
    if bank != state.bank_balance or type(state.bank_balance) is not int:
        repairs.append(f"bank balance {state.bank_balance!r} -> {bank}")
        state.bank_balance = bank

    for tile in state.tiles:
        if not tile.is_property:
            if tile.owner is not None or tile.houses or tile.hotel or tile.workers:
                repairs.append(f"cleared ownership of non-property {tile.name}")
                tile.owner = None
                tile.houses = 0
                tile.hotel = False
                tile.workers = 0
            continue
        if tile.owner is not None and tile.owner != BANK and tile.owner not in player_ids:
            repairs.append(f"{tile.name} had unknown owner {tile.owner}")
            tile.owner = None
        if tile.hotel and tile.houses:
            repairs.append(f"{tile.name} had houses alongside a hotel")
            tile.houses = 0
        if not 0 <= tile.houses <= 4:
            clamped = min(4, max(0, tile.houses))
            repairs.append(f"{tile.name} houses {tile.houses} -> {clamped}")
            tile.houses = clamped
        if not 0 <= tile.workers <= rules.economy.fiore_max_workers:
            clamped = min(rules.economy.fiore_max_workers, max(0, tile.workers))
            repairs.append(f"{tile.name} workers {tile.workers} -> {clamped}")
            tile.workers = clamped

    for player in state.players:
        expected = {TileID(tile.id) for tile in state.tiles if tile.owner == player.id}
        if player.owned_tile_ids != expected:
            repairs.append(f"rebuilt holdings of {player.name}")
            player.owned_tile_ids = expected

    if state.players and not 0 <= state.current_player_index < len(state.players):
        repairs.append(f"current player index {state.current_player_index} -> 0")
        state.current_player_index = 0

    for repair in repairs:
        logger.warning("state repaired: %s", repair)
        ledger.log(state, f"Repaired: {repair}.", rules)
    return repairs

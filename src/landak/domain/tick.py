"""Round-boundary processing, run when turn order wraps around."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from landak.domain import government, ledger, loans
from landak.domain.board import group_tiles, house_cost, is_buildable
from landak.domain.enums import GovernmentType
from landak.domain.events import decay_modifiers
from landak.domain.models import BANK, GameState, Tile, TileID
from landak.domain.rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RoundTickResult:
    """Summary of what happened at a round boundary."""

    round_number: int
    regime_changed: bool = False
    improved_tile_ids: list[TileID] = field(default_factory=list)
    divested_tile_id: TileID | None = None


def run_round_tick(state: GameState, rules: RulesConfig = DEFAULT_RULES) -> RoundTickResult:
    """Advance the game by one full round."""

    state.turn_count += 1
    result = RoundTickResult(round_number=state.turn_count)

    government.apply_policy_tick(state, rules)
    result.regime_changed = government.advance_regime(state, rules)
    loans.amortize(state, rules)
    decay_modifiers(state)

    if state.government.type == GovernmentType.LIBERTARIAN:
        result.divested_tile_id = divest_bank_tile(state, rules)
    else:
        result.improved_tile_ids = improve_bank_monopolies(state, rules)

    logger.debug(
        "round %s: regime=%s improved=%s divested=%s",
        result.round_number,
        state.government.type,
        result.improved_tile_ids,
        result.divested_tile_id,
    )
    return result


def improve_bank_monopolies(state: GameState, rules: RulesConfig = DEFAULT_RULES) -> list[TileID]:
    """Give each tile of a bank-held full group one improvement level.

    Building cost is spent by the bank and leaves the economy.
    """

    improved: list[TileID] = []
    seen_groups: set[str] = set()
    for tile in state.tiles:
        if not is_buildable(tile) or tile.owner != BANK or tile.color_group in seen_groups:
            continue
        seen_groups.add(tile.color_group)
        group = group_tiles(state.tiles, tile.color_group)
        if any(member.owner != BANK or member.mortgaged for member in group):
            continue
        if not _improve_group(state, group, improved, rules):
            break
    if improved:
        ledger.log(state, f"The State improves {len(improved)} of its properties.", rules)
    return improved


def _improve_group(
    state: GameState, group: list[Tile], improved: list[TileID], rules: RulesConfig
) -> bool:
    """Raise each tile in ``group`` one level; ``False`` once the bank runs dry."""

    for member in group:
        if member.hotel:
            continue
        cost = house_cost(member, rules)
        if state.bank_balance < cost:
            return False
        if member.houses == 4:
            if state.hotels_available <= 0:
                continue
            state.hotels_available -= 1
            state.houses_available += 4
            member.houses = 0
            member.hotel = True
        else:
            if state.houses_available <= 0:
                continue
            state.houses_available -= 1
            member.houses += 1
        state.bank_balance -= cost
        improved.append(member.id)
    return True


def divest_bank_tile(state: GameState, rules: RulesConfig = DEFAULT_RULES) -> TileID | None:
    """Sell the lowest-numbered bank tile to the richest player who can pay."""

    for_sale = [tile for tile in state.tiles if tile.is_property and tile.owner == BANK]
    if not for_sale:
        return None
    tile = min(for_sale, key=lambda candidate: candidate.id)
    buyers = [
        player for player in state.players if player.alive and player.cash >= tile.price
    ]
    if not buyers:
        return None
    buyer = max(buyers, key=lambda player: (player.cash, -player.id))
    ledger.pay_bank(state, buyer, tile.price)
    ledger.set_owner(state, tile, buyer.id)
    ledger.log(state, f"The State sells {tile.name} to {buyer.name} for ${tile.price}.", rules)
    return tile.id

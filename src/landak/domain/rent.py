"""Rent computation including monopoly, improvement and economic modifiers."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from landak.domain.board import count_owned_subtype, is_leisure, is_transport, owns_full_group
from landak.domain.enums import RentFilterType, TileSubtype
from landak.domain.models import GameState, RentFilter, Tile
from landak.domain.rules_config import DEFAULT_RULES, RulesConfig


@dataclass(frozen=True, slots=True)
class RentCharge:
    """Split of a rent payment between the owner and the bank."""

    base: int
    vat: int

    @property
    def total(self) -> int:
        return self.base + self.vat


def base_rent(tile: Tile, rules: RulesConfig = DEFAULT_RULES) -> int:
    if tile.base_rent:
        return tile.base_rent
    return math.floor(tile.price * rules.economy.base_rent_ratio)


def compute_rent(
    tile: Tile,
    dice_total: int,
    tiles: Sequence[Tile],
    state: GameState,
    rules: RulesConfig = DEFAULT_RULES,
) -> int:
    """Return the rent owed for landing on ``tile`` (never negative)."""

    if not tile.is_property or tile.owner is None or tile.mortgaged:
        return 0

    economy = rules.economy
    if tile.subtype == TileSubtype.UTILITY:
        held = count_owned_subtype(tiles, tile.owner, (TileSubtype.UTILITY,))
        factor = (
            economy.utility_double_multiplier if held >= 2 else economy.utility_single_multiplier
        )
        rent = dice_total * factor
    elif tile.subtype in (TileSubtype.RAIL, TileSubtype.BUS):
        held = count_owned_subtype(tiles, tile.owner, (tile.subtype,))
        rent = economy.transport_base_rent * 2 ** max(0, held - 1)
    elif tile.subtype == TileSubtype.FIORE:
        rent = tile.workers * economy.fiore_rent_per_worker
    elif tile.subtype == TileSubtype.CASINO:
        rent = 0
    else:
        rent = base_rent(tile, rules)
        if tile.improvement_level == 0 and owns_full_group(tiles, tile, tile.owner):
            rent *= economy.monopoly_multiplier
        if tile.hotel:
            rent *= economy.hotel_multiplier
        elif tile.houses > 0:
            rent *= tile.houses + 1

    return max(0, _apply_modifiers(rent, tile, state))


def _apply_modifiers(rent: int, tile: Tile, state: GameState) -> int:
    amount: float = rent
    if state.rent_multiplier_turns_remaining > 0:
        amount *= state.rent_multiplier
    for rent_filter in state.rent_filters:
        if rent_filter.turns_remaining > 0 and filter_matches(rent_filter, tile):
            amount *= rent_filter.multiplier
    result = math.floor(amount)
    if state.rent_cap is not None and state.rent_cap.turns_remaining > 0:
        result = min(result, state.rent_cap.amount)
    return result


def filter_matches(rent_filter: RentFilter, tile: Tile) -> bool:
    match rent_filter.filter_type:
        case RentFilterType.LEISURE:
            return is_leisure(tile)
        case RentFilterType.TRANSPORT:
            return is_transport(tile)
        case RentFilterType.FAMILY:
            return tile.color_group == rent_filter.filter_value
        case RentFilterType.OWNER:
            return tile.owner == rent_filter.filter_value
    return False


def rent_vat_rate(state: GameState) -> float:
    return max(0.0, state.government.config.rent_vat_rate)


def rent_charge(
    tile: Tile,
    dice_total: int,
    state: GameState,
    rules: RulesConfig = DEFAULT_RULES,
) -> RentCharge:
    """Rent for ``tile`` with the regime's VAT charged on top."""

    base = compute_rent(tile, dice_total, state.tiles, state, rules)
    vat = math.floor(base * rent_vat_rate(state))
    return RentCharge(base=base, vat=vat)

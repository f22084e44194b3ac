"""Tile registry helpers: board construction and group lookups."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from landak.domain.board_data import BOARD_DEFINITION, TileDefinition
from landak.domain.enums import TileSubtype, TileType
from landak.domain.models import Owner, Tile, TileID
from landak.domain.rules_config import DEFAULT_RULES, RulesConfig

TRANSPORT_SUBTYPES = frozenset(
    {TileSubtype.RAIL, TileSubtype.BUS, TileSubtype.FERRY, TileSubtype.AIR}
)
LEISURE_SUBTYPES = frozenset({TileSubtype.CASINO, TileSubtype.FIORE})


def build_tiles(definitions: Iterable[TileDefinition] = BOARD_DEFINITION) -> list[Tile]:
    """Return fresh, unowned tiles numbered by board position."""

    return [
        Tile(
            id=TileID(index),
            type=definition.type,
            name=definition.name,
            price=definition.price,
            color_group=definition.color_group,
            subtype=definition.subtype,
            base_rent=definition.base_rent,
        )
        for index, definition in enumerate(definitions)
    ]


def group_tiles(tiles: Sequence[Tile], color_group: str | None) -> list[Tile]:
    """Return every property tile sharing ``color_group``."""

    if color_group is None:
        return []
    return [tile for tile in tiles if tile.is_property and tile.color_group == color_group]


def owns_full_group(tiles: Sequence[Tile], tile: Tile, owner: Owner) -> bool:
    if owner is None:
        return False
    group = group_tiles(tiles, tile.color_group)
    return bool(group) and all(member.owner == owner for member in group)


def count_owned_subtype(
    tiles: Sequence[Tile], owner: Owner, subtypes: Iterable[TileSubtype]
) -> int:
    wanted = set(subtypes)
    return sum(1 for tile in tiles if tile.owner == owner and tile.subtype in wanted)


def is_transport(tile: Tile) -> bool:
    return tile.is_property and tile.subtype in TRANSPORT_SUBTYPES


def is_leisure(tile: Tile) -> bool:
    return tile.is_property and tile.subtype in LEISURE_SUBTYPES


def is_buildable(tile: Tile) -> bool:
    """Plain colour-group properties accept houses and hotels."""

    return tile.is_property and tile.subtype == TileSubtype.PLAIN and tile.color_group is not None


def jail_index(tiles: Sequence[Tile]) -> int:
    for tile in tiles:
        if tile.type == TileType.JAIL:
            return tile.id
    return 0


def transport_destinations(tiles: Sequence[Tile], origin: Tile) -> list[Tile]:
    """Transport tiles reachable from ``origin`` (every other transport tile)."""

    if not is_transport(origin):
        return []
    return [tile for tile in tiles if is_transport(tile) and tile.id != origin.id]


def house_cost(tile: Tile, rules: RulesConfig = DEFAULT_RULES) -> int:
    if tile.price <= 0:
        return rules.economy.default_house_cost
    return math.floor(tile.price * rules.economy.house_cost_ratio)

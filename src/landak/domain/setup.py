"""Construction of fresh game states."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from landak.domain.actions import PlayerSetup
from landak.domain.board import build_tiles
from landak.domain.board_data import BOARD_DEFINITION, TileDefinition
from landak.domain.enums import GovernmentType
from landak.domain.government import make_government
from landak.domain.models import GameState, GovernmentState, Player, PlayerID, Tile
from landak.domain.rules_config import DEFAULT_RULES, RulesConfig
from landak.utils.rng import generate_seed, random_choice


def _initial_government(seed: int, rules: RulesConfig) -> GovernmentState:
    choice = random_choice(generate_seed(seed, 0, 0, "initial_government"), list(GovernmentType))
    return make_government(choice["choice"], rules)


def reset_tiles(tiles: Iterable[Tile]) -> list[Tile]:
    """Copy the board layout of ``tiles`` with all per-game fields cleared."""

    return [
        Tile(
            id=tile.id,
            type=tile.type,
            name=tile.name,
            price=tile.price,
            color_group=tile.color_group,
            subtype=tile.subtype,
            base_rent=tile.base_rent,
        )
        for tile in tiles
    ]


def initial_state(
    seed: int = 0,
    definitions: Iterable[TileDefinition] = BOARD_DEFINITION,
    rules: RulesConfig = DEFAULT_RULES,
) -> GameState:
    """Board and government before anybody has sat down."""

    return GameState(
        players=[],
        tiles=build_tiles(definitions),
        government=_initial_government(seed, rules),
        seed=seed,
        draws=1,
        houses_available=rules.economy.houses_supply,
        hotels_available=rules.economy.hotels_supply,
        event_log=["Welcome to Artiako Landak!"],
    )


def new_game(
    humans: Sequence[PlayerSetup],
    bots: int,
    *,
    seed: int = 0,
    tiles: Iterable[Tile] | None = None,
    rules: RulesConfig = DEFAULT_RULES,
) -> GameState:
    """Seat the players and return a started game."""

    players: list[Player] = []
    for setup in humans:
        players.append(
            Player(
                id=PlayerID(len(players)),
                name=setup.name,
                cash=rules.economy.initial_cash,
                gender=setup.gender,
                role=setup.role,
            )
        )
    for number in range(1, bots + 1):
        players.append(
            Player(
                id=PlayerID(len(players)),
                name=f"Bot {number}",
                cash=rules.economy.initial_cash,
                is_bot=True,
            )
        )

    board = reset_tiles(tiles) if tiles is not None else build_tiles(BOARD_DEFINITION)
    return GameState(
        players=players,
        tiles=board,
        government=_initial_government(seed, rules),
        seed=seed,
        draws=1,
        game_started=True,
        houses_available=rules.economy.houses_supply,
        hotels_available=rules.economy.hotels_supply,
        event_log=["The game has started!"],
    )

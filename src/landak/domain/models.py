"""Dataclasses describing every Landak game entity.

The whole game lives in one :class:`GameState` aggregate.  Rule functions
mutate a working copy of it; the reducer owns the copy so that callers only
ever observe complete, validated snapshots.  The same dataclasses are
serialised verbatim by the JSON repository.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, NewType

from landak.domain.enums import (
    Gender,
    GovernmentType,
    LoanStatus,
    RentFilterType,
    Role,
    TileSubtype,
    TileType,
)

# --- Strongly typed identifiers -------------------------------------------------

PlayerID = NewType("PlayerID", int)
TileID = NewType("TileID", int)
AuctionID = NewType("AuctionID", int)
LoanID = NewType("LoanID", int)
PoolID = NewType("PoolID", int)

BANK: Literal["bank"] = "bank"

Owner = PlayerID | Literal["bank"] | None


# --- Board ----------------------------------------------------------------------


@dataclass(slots=True)
class Tile:
    """Board cell with its static parameters and per-game ownership."""

    id: TileID
    type: TileType
    name: str
    price: int = 0
    color_group: str | None = None
    subtype: TileSubtype = TileSubtype.PLAIN
    base_rent: int | None = None
    owner: Owner = None
    houses: int = 0
    hotel: bool = False
    mortgaged: bool = False
    workers: int = 0

    @property
    def is_property(self) -> bool:
        return self.type == TileType.PROPERTY

    @property
    def improvement_level(self) -> int:
        """0-4 for houses, 5 for a hotel."""

        return 5 if self.hotel else self.houses


# --- Players --------------------------------------------------------------------


@dataclass(slots=True)
class Player:
    """Seat at the table; retained in the roster after elimination."""

    id: PlayerID
    name: str
    cash: int
    position: int = 0
    jail_turns: int = 0
    owned_tile_ids: set[TileID] = field(default_factory=set)
    is_bot: bool = False
    alive: bool = True
    role: Role = Role.CIVIL
    gender: Gender = Gender.MALE


# --- Government -----------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class GovConfig:
    """Numeric parameters of an economic regime."""

    tax_rate: float
    welfare_rate: float
    interest_rate: float
    rent_vat_rate: float


@dataclass(slots=True)
class GovernmentState:
    """Active regime with its countdown."""

    type: GovernmentType
    config: GovConfig
    turns_remaining: int


# --- Auctions and trades --------------------------------------------------------


@dataclass(slots=True)
class Auction:
    """Open-bid auction over one tile or a bundle of tiles."""

    id: AuctionID
    tile_ids: list[TileID]
    current_bid: int
    eligible_bidder_ids: list[PlayerID]
    seconds_remaining: int
    timer_reset: int
    highest_bidder_id: PlayerID | None = None
    seller_id: PlayerID | None = None
    is_open: bool = True

    @property
    def target_tile_id(self) -> TileID:
        return self.tile_ids[0]


@dataclass(slots=True)
class TradeOffer:
    """Bilateral offer of money and tiles."""

    initiator_id: PlayerID
    target_id: PlayerID
    offered_money: int = 0
    offered_tile_ids: list[TileID] = field(default_factory=list)
    requested_money: int = 0
    requested_tile_ids: list[TileID] = field(default_factory=list)
    is_open: bool = True


# --- Loans ----------------------------------------------------------------------


@dataclass(slots=True)
class Loan:
    """Debt owed by a player to the bank."""

    id: LoanID
    borrower_id: PlayerID
    principal: int
    total_interest: int
    term_turns: int
    turns_remaining: int
    per_turn_payment: int
    status: LoanStatus = LoanStatus.ACTIVE
    amount_repaid: int = 0
    pool_id: PoolID | None = None

    @property
    def total_due(self) -> int:
        return self.principal + self.total_interest

    @property
    def outstanding(self) -> int:
        return max(0, self.total_due - self.amount_repaid)


@dataclass(slots=True)
class LoanPool:
    """Bundle of bank loans split into tradable units."""

    id: PoolID
    name: str
    loan_ids: list[LoanID]
    units_total: int
    holdings: dict[PlayerID, int] = field(default_factory=dict)

    @property
    def bank_units(self) -> int:
        return self.units_total - sum(self.holdings.values())


# --- Economic modifiers ---------------------------------------------------------


@dataclass(slots=True)
class RentFilter:
    """Temporary multiplier applied to a subset of tiles."""

    id: str
    multiplier: float
    turns_remaining: int
    filter_type: RentFilterType
    filter_value: str | int | None = None


@dataclass(slots=True)
class RentCap:
    """Temporary ceiling on any single rent charge."""

    amount: int
    turns_remaining: int


@dataclass(slots=True)
class ActiveEvent:
    """Title and description of the last drawn event, for display."""

    id: str
    title: str
    description: str


# --- Root aggregate -------------------------------------------------------------


@dataclass(slots=True)
class GameState:
    """Root aggregate representing an entire game."""

    players: list[Player]
    tiles: list[Tile]
    government: GovernmentState
    seed: int = 0
    draws: int = 0
    game_started: bool = False
    current_player_index: int = 0
    dice: tuple[int, int] = (1, 1)
    has_rolled: bool = False
    rent_settled: bool = False
    transport_used: bool = False
    turn_count: int = 1
    bank_balance: int = 0
    houses_available: int = 32
    hotels_available: int = 12
    auction: Auction | None = None
    auction_sequence: int = 0
    trade: TradeOffer | None = None
    loans: list[Loan] = field(default_factory=list)
    loan_sequence: int = 0
    loan_pools: list[LoanPool] = field(default_factory=list)
    pool_sequence: int = 0
    event_log: list[str] = field(default_factory=list)
    landing_heatmap: dict[TileID, int] = field(default_factory=dict)
    rent_multiplier: float = 1.0
    rent_multiplier_turns_remaining: int = 0
    rent_filters: list[RentFilter] = field(default_factory=list)
    rent_cap: RentCap | None = None
    active_event: ActiveEvent | None = None
    winner_id: PlayerID | None = None

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    def player(self, player_id: PlayerID) -> Player | None:
        for candidate in self.players:
            if candidate.id == player_id:
                return candidate
        return None

"""Closed set of actions accepted by the game reducer.

Each action is a frozen dataclass with a literal ``kind`` tag, so the union can
be parsed from JSON by pydantic and matched exhaustively by the reducer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated, Literal, Union

from pydantic import Field

from landak.domain.enums import Gender, Role
from landak.domain.models import AuctionID, LoanID, PlayerID, PoolID, TileID, TradeOffer


@dataclass(frozen=True, slots=True)
class PlayerSetup:
    """A human seat requested at game start."""

    name: str
    gender: Gender = Gender.MALE
    role: Role = Role.CIVIL


# --- Game flow ------------------------------------------------------------------


@dataclass(frozen=True, slots=True, kw_only=True)
class StartGame:
    kind: Literal["START_GAME"] = "START_GAME"
    humans: tuple[PlayerSetup, ...] = ()
    bots: int = 0
    seed: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class RollDice:
    """Roll for the current player; ``dice`` pins the outcome."""

    kind: Literal["ROLL_DICE"] = "ROLL_DICE"
    dice: tuple[int, int] | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class EndTurn:
    kind: Literal["END_TURN"] = "END_TURN"


@dataclass(frozen=True, slots=True, kw_only=True)
class DeclareBankruptcy:
    kind: Literal["DECLARE_BANKRUPTCY"] = "DECLARE_BANKRUPTCY"


@dataclass(frozen=True, slots=True, kw_only=True)
class PayJail:
    kind: Literal["PAY_JAIL"] = "PAY_JAIL"


@dataclass(frozen=True, slots=True, kw_only=True)
class TravelTransport:
    kind: Literal["TRAVEL_TRANSPORT"] = "TRAVEL_TRANSPORT"
    destination_id: TileID


# --- Property -------------------------------------------------------------------


@dataclass(frozen=True, slots=True, kw_only=True)
class BuyProperty:
    kind: Literal["BUY_PROPERTY"] = "BUY_PROPERTY"


@dataclass(frozen=True, slots=True, kw_only=True)
class PayRent:
    kind: Literal["PAY_RENT"] = "PAY_RENT"


@dataclass(frozen=True, slots=True, kw_only=True)
class BuildImprovement:
    kind: Literal["BUILD_IMPROVEMENT"] = "BUILD_IMPROVEMENT"
    tile_id: TileID


@dataclass(frozen=True, slots=True, kw_only=True)
class SellImprovement:
    kind: Literal["SELL_IMPROVEMENT"] = "SELL_IMPROVEMENT"
    tile_id: TileID


@dataclass(frozen=True, slots=True, kw_only=True)
class Mortgage:
    kind: Literal["MORTGAGE"] = "MORTGAGE"
    tile_id: TileID


@dataclass(frozen=True, slots=True, kw_only=True)
class Unmortgage:
    kind: Literal["UNMORTGAGE"] = "UNMORTGAGE"
    tile_id: TileID


# --- Auctions -------------------------------------------------------------------


@dataclass(frozen=True, slots=True, kw_only=True)
class StartAuction:
    """Auction an unowned tile, or the current player's tiles as a bundle."""

    kind: Literal["START_AUCTION"] = "START_AUCTION"
    tile_id: TileID
    extra_tile_ids: tuple[TileID, ...] = ()
    starting_bid: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class BidAuction:
    kind: Literal["BID_AUCTION"] = "BID_AUCTION"
    player_id: PlayerID
    amount: int


@dataclass(frozen=True, slots=True, kw_only=True)
class WithdrawAuction:
    kind: Literal["WITHDRAW_AUCTION"] = "WITHDRAW_AUCTION"
    player_id: PlayerID


@dataclass(frozen=True, slots=True, kw_only=True)
class TickAuction:
    """Countdown tick; a stale ``auction_id`` makes it a no-op."""

    kind: Literal["TICK_AUCTION"] = "TICK_AUCTION"
    seconds: int = 1
    auction_id: AuctionID | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class EndAuction:
    kind: Literal["END_AUCTION"] = "END_AUCTION"


# --- Trades ---------------------------------------------------------------------


@dataclass(frozen=True, slots=True, kw_only=True)
class ProposeTrade:
    """Propose ``offer``; without one the current bot builds its own proposal."""

    kind: Literal["PROPOSE_TRADE"] = "PROPOSE_TRADE"
    offer: TradeOffer | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AcceptTrade:
    kind: Literal["ACCEPT_TRADE"] = "ACCEPT_TRADE"


@dataclass(frozen=True, slots=True, kw_only=True)
class RejectTrade:
    kind: Literal["REJECT_TRADE"] = "REJECT_TRADE"


# --- Loans ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True, kw_only=True)
class TakeLoan:
    kind: Literal["TAKE_LOAN"] = "TAKE_LOAN"
    amount: int
    turns: int


@dataclass(frozen=True, slots=True, kw_only=True)
class RepayLoan:
    kind: Literal["REPAY_LOAN"] = "REPAY_LOAN"
    loan_id: LoanID


@dataclass(frozen=True, slots=True, kw_only=True)
class CreateLoanPool:
    kind: Literal["CREATE_LOAN_POOL"] = "CREATE_LOAN_POOL"
    name: str
    loan_ids: tuple[LoanID, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True, kw_only=True)
class BuyPoolUnits:
    kind: Literal["BUY_POOL_UNITS"] = "BUY_POOL_UNITS"
    pool_id: PoolID
    units: int


# --- Bots -----------------------------------------------------------------------


@dataclass(frozen=True, slots=True, kw_only=True)
class BotResolveTurn:
    kind: Literal["BOT_RESOLVE_TURN"] = "BOT_RESOLVE_TURN"


@dataclass(frozen=True, slots=True, kw_only=True)
class BotBidAuction:
    kind: Literal["BOT_BID_AUCTION"] = "BOT_BID_AUCTION"
    player_id: PlayerID


@dataclass(frozen=True, slots=True, kw_only=True)
class BotRespondTrade:
    kind: Literal["BOT_RESPOND_TRADE"] = "BOT_RESPOND_TRADE"


Action = Annotated[
    Union[
        StartGame,
        RollDice,
        EndTurn,
        DeclareBankruptcy,
        PayJail,
        TravelTransport,
        BuyProperty,
        PayRent,
        BuildImprovement,
        SellImprovement,
        Mortgage,
        Unmortgage,
        StartAuction,
        BidAuction,
        WithdrawAuction,
        TickAuction,
        EndAuction,
        ProposeTrade,
        AcceptTrade,
        RejectTrade,
        TakeLoan,
        RepayLoan,
        CreateLoanPool,
        BuyPoolUnits,
        BotResolveTurn,
        BotBidAuction,
        BotRespondTrade,
    ],
    Field(discriminator="kind"),
]

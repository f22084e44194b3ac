"""Enumerations and type aliases for the Landak domain."""

from __future__ import annotations

from enum import StrEnum


class TileType(StrEnum):
    """Kinds of board cells."""

    START = "start"
    PROPERTY = "property"
    TAX = "tax"
    JAIL = "jail"
    GO_TO_JAIL = "go_to_jail"
    PARK = "park"
    EVENT = "event"
    SLOTS = "slots"
    BANK = "bank"


class TileSubtype(StrEnum):
    """Rent families for property tiles."""

    PLAIN = "plain"
    RAIL = "rail"
    BUS = "bus"
    FERRY = "ferry"
    AIR = "air"
    UTILITY = "utility"
    CASINO = "casino"
    FIORE = "fiore"


class GovernmentType(StrEnum):
    """Economic regimes rotating over the course of a game."""

    LEFT = "left"
    RIGHT = "right"
    AUTHORITARIAN = "authoritarian"
    LIBERTARIAN = "libertarian"
    ANARCHY = "anarchy"


class Gender(StrEnum):
    """Player attribute targeted by demographic policies."""

    MALE = "male"
    FEMALE = "female"
    HELICOPTER = "helicopter"
    MARTIAN = "martian"


class Role(StrEnum):
    """Cosmetic player roles."""

    CIVIL = "civil"
    PIMP = "pimp"
    TYCOON = "tycoon"
    FBI = "fbi"
    SQUATTER = "squatter"


class LoanStatus(StrEnum):
    """Loan lifecycle states."""

    ACTIVE = "active"
    PAID = "paid"
    DEFAULTED = "defaulted"


class RentFilterType(StrEnum):
    """Selectors for targeted rent modifiers."""

    LEISURE = "leisure"
    TRANSPORT = "transport"
    FAMILY = "family"
    OWNER = "owner"


class RejectReason(StrEnum):
    """Why an action was turned into a no-op."""

    GAME_NOT_STARTED = "game_not_started"
    GAME_OVER = "game_over"
    ALREADY_ROLLED = "already_rolled"
    NOT_ROLLED = "not_rolled"
    INVALID_DICE = "invalid_dice"
    INVALID_TILE = "invalid_tile"
    INVALID_AMOUNT = "invalid_amount"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    SUPPLY_EXHAUSTED = "supply_exhausted"
    ALREADY_OWNED = "already_owned"
    NOT_OWNER = "not_owner"
    MORTGAGED = "mortgaged"
    NOT_MORTGAGED = "not_mortgaged"
    HAS_IMPROVEMENTS = "has_improvements"
    NO_IMPROVEMENTS = "no_improvements"
    NO_MONOPOLY = "no_monopoly"
    MAX_IMPROVEMENT = "max_improvement"
    NOTHING_OWED = "nothing_owed"
    NOT_IN_JAIL = "not_in_jail"
    TRANSPORT_UNAVAILABLE = "transport_unavailable"
    NO_AUCTION = "no_auction"
    AUCTION_IN_PROGRESS = "auction_in_progress"
    BID_TOO_LOW = "bid_too_low"
    NOT_ELIGIBLE = "not_eligible"
    STALE = "stale"
    NO_TRADE = "no_trade"
    INVALID_TRADE = "invalid_trade"
    NO_PROPOSAL = "no_proposal"
    NOT_A_BOT = "not_a_bot"
    UNKNOWN_LOAN = "unknown_loan"
    UNKNOWN_POOL = "unknown_pool"
    INVALID_PLAYERS = "invalid_players"

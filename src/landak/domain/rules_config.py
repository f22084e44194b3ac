"""Declarative rule configuration for the Landak domain."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EconomyRules:
    """Board economy constants."""

    initial_cash: int = 1500
    pass_start_salary: int = 200
    base_tax: int = 200
    jail_turns: int = 3
    jail_bail: int = 50
    transport_fare: int = 50
    houses_supply: int = 32
    hotels_supply: int = 12
    house_cost_ratio: float = 0.5
    default_house_cost: int = 50
    improvement_refund_ratio: float = 0.5
    mortgage_ratio: float = 0.5
    unmortgage_ratio: float = 0.55
    base_rent_ratio: float = 0.1
    monopoly_multiplier: int = 2
    hotel_multiplier: int = 5
    transport_base_rent: int = 25
    utility_single_multiplier: int = 4
    utility_double_multiplier: int = 10
    fiore_rent_per_worker: int = 70
    fiore_max_workers: int = 5


@dataclass(frozen=True, slots=True)
class GovernmentRules:
    """Round-boundary policy constants."""

    regime_duration: int = 7
    wealth_threshold: int = 1000
    wealth_tax_factor: float = 0.1  # share of the regime tax rate charged per round
    poverty_threshold: int = 500
    welfare_subsidy: int = 100
    demographic_amount: int = 20
    anarchy_loss_chance: float = 0.3
    anarchy_loss: int = 50


@dataclass(frozen=True, slots=True)
class AuctionRules:
    """Auction timers and bot bidding bounds."""

    landing_timer_seconds: int = 20
    sale_timer_seconds: int = 10
    opening_bid_ratio: float = 0.5
    minimum_opening_bid: int = 10
    bot_min_increment: int = 10
    bot_max_increment: int = 50
    bot_valuation_ratio: float = 1.2
    bot_completion_ratio: float = 1.5
    bot_cash_reserve: int = 100


@dataclass(frozen=True, slots=True)
class LoanRules:
    """Bank lending and securitization constants."""

    base_interest_rate: float = 0.2
    max_term_turns: int = 50
    pool_units: int = 100


@dataclass(frozen=True, slots=True)
class BotRules:
    """Heuristics used by bot players."""

    purchase_reserve: int = 200
    bail_threshold: int = 200
    left_hesitation_chance: float = 0.5
    build_reserve: int = 300
    trade_acceptance_margin: float = 1.1
    monopoly_break_weight: float = 3.0
    completion_weight: float = 2.5
    partial_group_weight: float = 1.2
    proposal_price_ratio: float = 1.5
    proposal_cash_cap: float = 0.4
    proposal_max_offered_tiles: int = 2


@dataclass(frozen=True, slots=True)
class EventRules:
    """Magnitudes used by the event deck."""

    inspection_threshold: int = 2000
    inspection_rate: float = 0.2
    house_repair_cost: int = 40
    hotel_repair_cost: int = 115
    bribe_per_player: int = 50
    step_back_tiles: int = 3
    modifier_rounds: int = 3
    short_modifier_rounds: int = 2
    rent_cap_amount: int = 150


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container for all subsystems."""

    economy: EconomyRules = EconomyRules()
    government: GovernmentRules = GovernmentRules()
    auction: AuctionRules = AuctionRules()
    loans: LoanRules = LoanRules()
    bots: BotRules = BotRules()
    events: EventRules = EventRules()
    event_log_limit: int | None = None


DEFAULT_RULES = RulesConfig()

"""Event deck drawn when a player lands on an event tile."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, field

from landak.domain import ledger
from landak.domain.enums import RentFilterType
from landak.domain.models import ActiveEvent, GameState, Player, RentCap, RentFilter
from landak.domain.rules_config import DEFAULT_RULES, RulesConfig
from landak.utils.rng import random_choice

EventEffect = Callable[[GameState, Player, RulesConfig], None]


@dataclass(frozen=True, slots=True)
class GameEvent:
    """One card of the deck."""

    id: str
    title: str
    description: str
    effect: EventEffect
    tags: frozenset[str] = field(default_factory=frozenset)


# --- Effects --------------------------------------------------------------------


def _bank_error(state: GameState, player: Player, rules: RulesConfig) -> None:
    ledger.pay_from_bank(state, player, 200)
    ledger.log(state, f"{player.name} receives $200 from a bank error.", rules)


def _speeding(state: GameState, player: Player, rules: RulesConfig) -> None:
    ledger.pay_bank(state, player, 100)
    ledger.log(state, f"{player.name} pays a $100 speeding fine.", rules)


def _tax_inspection(state: GameState, player: Player, rules: RulesConfig) -> None:
    events = rules.events
    if player.cash > events.inspection_threshold:
        amount = math.floor(player.cash * events.inspection_rate)
        ledger.pay_bank(state, player, amount)
        ledger.log(state, f"Tax inspection: {player.name} pays ${amount}.", rules)
    else:
        ledger.log(state, f"Tax inspection: {player.name} is clean.", rules)


def _cultural_subsidy(state: GameState, player: Player, rules: RulesConfig) -> None:
    ledger.pay_from_bank(state, player, 150)
    ledger.log(state, f"{player.name} receives a $150 cultural subsidy.", rules)


def _repairs(state: GameState, player: Player, rules: RulesConfig) -> None:
    events = rules.events
    cost = 0
    for tile in state.tiles:
        if tile.owner != player.id:
            continue
        if tile.hotel:
            cost += events.hotel_repair_cost
        else:
            cost += tile.houses * events.house_repair_cost
    if cost > 0:
        ledger.pay_bank(state, player, cost)
        ledger.log(state, f"{player.name} pays ${cost} in repairs.", rules)
    else:
        ledger.log(state, f"{player.name} has no buildings to repair.", rules)


def _corruption(state: GameState, player: Player, rules: RulesConfig) -> None:
    bribe = rules.events.bribe_per_player
    for other in state.players:
        if other.id != player.id and other.alive:
            ledger.transfer(player, other, bribe)
    ledger.log(state, f"{player.name} bribes everyone to keep quiet.", rules)


def _trip_to_start(state: GameState, player: Player, rules: RulesConfig) -> None:
    player.position = 0
    ledger.pay_from_bank(state, player, rules.economy.pass_start_salary)
    ledger.log(state, f"{player.name} travels to the start.", rules)


def _hangover(state: GameState, player: Player, rules: RulesConfig) -> None:
    steps = rules.events.step_back_tiles
    player.position = (player.position - steps) % len(state.tiles)
    ledger.log(state, f"{player.name} moves back {steps} tiles.", rules)


def _set_multiplier(multiplier: float, label: str) -> EventEffect:
    def effect(state: GameState, player: Player, rules: RulesConfig) -> None:
        state.rent_multiplier = multiplier
        state.rent_multiplier_turns_remaining = rules.events.modifier_rounds
        rounds = rules.events.modifier_rounds
        ledger.log(state, f"{label}: rents x{multiplier} for {rounds} rounds.", rules)

    return effect


def _add_filter(
    filter_id: str, filter_type: RentFilterType, multiplier: float, short: bool
) -> EventEffect:
    def effect(state: GameState, player: Player, rules: RulesConfig) -> None:
        rounds = rules.events.short_modifier_rounds if short else rules.events.modifier_rounds
        state.rent_filters = [item for item in state.rent_filters if item.id != filter_id]
        state.rent_filters.append(
            RentFilter(
                id=filter_id,
                multiplier=multiplier,
                turns_remaining=rounds,
                filter_type=filter_type,
            )
        )
        ledger.log(state, f"{filter_type} rents x{multiplier} for {rounds} rounds.", rules)

    return effect


def _rent_freeze(state: GameState, player: Player, rules: RulesConfig) -> None:
    events = rules.events
    state.rent_cap = RentCap(
        amount=events.rent_cap_amount, turns_remaining=events.short_modifier_rounds
    )
    ledger.log(state, f"Rent freeze: no rent above ${events.rent_cap_amount}.", rules)


EVENTS_DECK: tuple[GameEvent, ...] = (
    GameEvent(
        "ev_bank_error",
        "Bank Error",
        "The system fails in your favour.",
        _bank_error,
        frozenset({"cash"}),
    ),
    GameEvent("ev_speeding", "Speed Camera", "Fine for speeding.", _speeding, frozenset({"cash"})),
    GameEvent(
        "ev_tax_inspection",
        "Tax Inspection",
        "Holding more than $2000, you pay 20% of your cash to the State.",
        _tax_inspection,
        frozenset({"cash", "tax"}),
    ),
    GameEvent(
        "ev_subsidy",
        "Cultural Subsidy",
        "The government funds your cultural outreach.",
        _cultural_subsidy,
        frozenset({"cash"}),
    ),
    GameEvent(
        "ev_repairs",
        "Property Repairs",
        "Pay $40 per house and $115 per hotel.",
        _repairs,
        frozenset({"cash", "property"}),
    ),
    GameEvent(
        "ev_corruption",
        "Corruption Scandal",
        "Pay $50 to every other player to keep them quiet.",
        _corruption,
        frozenset({"cash"}),
    ),
    GameEvent(
        "ev_trip",
        "Trip to the Bahamas",
        "Advance to the start and collect $200.",
        _trip_to_start,
        frozenset({"move"}),
    ),
    GameEvent(
        "ev_back3", "Monumental Hangover", "Move back 3 tiles.", _hangover, frozenset({"move"})
    ),
    GameEvent(
        "ev_inflation",
        "Inflation",
        "Every rent rises by half for three rounds.",
        _set_multiplier(1.5, "Inflation"),
        frozenset({"rent"}),
    ),
    GameEvent(
        "ev_crash",
        "Market Crash",
        "Every rent halves for three rounds.",
        _set_multiplier(0.5, "Market crash"),
        frozenset({"rent"}),
    ),
    GameEvent(
        "ev_leisure_boom",
        "Leisure Boom",
        "Casinos and leisure venues earn more.",
        _add_filter("leisure_boom", RentFilterType.LEISURE, 1.15, short=False),
        frozenset({"rent"}),
    ),
    GameEvent(
        "ev_transport_strike",
        "Transport Strike",
        "Transport rents halve for two rounds.",
        _add_filter("transport_strike", RentFilterType.TRANSPORT, 0.5, short=True),
        frozenset({"rent"}),
    ),
    GameEvent(
        "ev_rent_freeze",
        "Rent Freeze",
        "No single rent may exceed $150 for two rounds.",
        _rent_freeze,
        frozenset({"rent"}),
    ),
)

EVENTS_BY_ID: dict[str, GameEvent] = {event.id: event for event in EVENTS_DECK}


def draw_event(state: GameState) -> GameEvent:
    seed = ledger.next_seed(state, "event")
    return random_choice(seed, list(EVENTS_DECK))["choice"]


def apply_event(
    state: GameState,
    player: Player,
    event: GameEvent,
    rules: RulesConfig = DEFAULT_RULES,
) -> None:
    state.active_event = ActiveEvent(id=event.id, title=event.title, description=event.description)
    ledger.log(state, f"{player.name} draws: {event.title}.", rules)
    event.effect(state, player, rules)


def decay_modifiers(state: GameState) -> None:
    """Count temporary rent modifiers down by one round."""

    if state.rent_multiplier_turns_remaining > 0:
        state.rent_multiplier_turns_remaining -= 1
        if state.rent_multiplier_turns_remaining == 0:
            state.rent_multiplier = 1.0

    for rent_filter in state.rent_filters:
        rent_filter.turns_remaining -= 1
    state.rent_filters = [item for item in state.rent_filters if item.turns_remaining > 0]

    if state.rent_cap is not None:
        state.rent_cap.turns_remaining -= 1
        if state.rent_cap.turns_remaining <= 0:
            state.rent_cap = None

"""Government regimes and their round-boundary effects."""

from __future__ import annotations

import logging
import math

from landak.domain import ledger
from landak.domain.enums import Gender, GovernmentType
from landak.domain.models import GameState, GovConfig, GovernmentState
from landak.domain.rules_config import DEFAULT_RULES, RulesConfig
from landak.utils.rng import check_success, random_choice

logger = logging.getLogger(__name__)

GOV_CONFIGS: dict[GovernmentType, GovConfig] = {
    GovernmentType.LEFT: GovConfig(
        tax_rate=0.25, welfare_rate=0.50, interest_rate=0.15, rent_vat_rate=0.30
    ),
    GovernmentType.RIGHT: GovConfig(
        tax_rate=-0.20, welfare_rate=-0.50, interest_rate=0.05, rent_vat_rate=0.10
    ),
    GovernmentType.AUTHORITARIAN: GovConfig(
        tax_rate=0.80, welfare_rate=-0.20, interest_rate=0.20, rent_vat_rate=0.50
    ),
    GovernmentType.LIBERTARIAN: GovConfig(
        tax_rate=-1.0, welfare_rate=-1.0, interest_rate=-0.05, rent_vat_rate=0.0
    ),
    GovernmentType.ANARCHY: GovConfig(
        tax_rate=0.0, welfare_rate=0.0, interest_rate=0.0, rent_vat_rate=0.0
    ),
}

# Signed per-round transfer (positive: bank pays the player) by regime and gender.
_DEMOGRAPHIC_TARGETS: dict[GovernmentType, tuple[int, frozenset[Gender]]] = {
    GovernmentType.LEFT: (1, frozenset({Gender.FEMALE, Gender.MARTIAN})),
    GovernmentType.RIGHT: (1, frozenset({Gender.MALE, Gender.HELICOPTER})),
    GovernmentType.AUTHORITARIAN: (-1, frozenset({Gender.MARTIAN, Gender.HELICOPTER})),
}


def make_government(
    gov_type: GovernmentType, rules: RulesConfig = DEFAULT_RULES
) -> GovernmentState:
    return GovernmentState(
        type=gov_type,
        config=GOV_CONFIGS[gov_type],
        turns_remaining=rules.government.regime_duration,
    )


def apply_policy_tick(state: GameState, rules: RulesConfig = DEFAULT_RULES) -> None:
    """Apply the active regime's lump-sum effects to every living player."""

    policy = rules.government
    gov_type = state.government.type
    config = state.government.config
    label = gov_type.upper()

    for player in state.players:
        if not player.alive:
            continue

        if config.tax_rate > 0 and player.cash > policy.wealth_threshold:
            amount = math.floor(player.cash * config.tax_rate * policy.wealth_tax_factor)
            if amount > 0:
                ledger.pay_bank(state, player, amount)
                ledger.log(state, f"{label}: {player.name} pays ${amount} wealth tax.", rules)

        if config.welfare_rate > 0 and player.cash < policy.poverty_threshold:
            ledger.pay_from_bank(state, player, policy.welfare_subsidy)
            ledger.log(
                state, f"{label}: {player.name} receives ${policy.welfare_subsidy} welfare.", rules
            )

        target = _DEMOGRAPHIC_TARGETS.get(gov_type)
        if target is not None and player.gender in target[1]:
            direction = target[0]
            if direction > 0:
                ledger.pay_from_bank(state, player, policy.demographic_amount)
            else:
                ledger.pay_bank(state, player, policy.demographic_amount)

        if gov_type == GovernmentType.ANARCHY:
            seed = ledger.next_seed(state, f"anarchy_{int(player.id)}")
            if check_success(seed, policy.anarchy_loss_chance)["success"]:
                # The loss leaves the economy entirely.
                player.cash -= policy.anarchy_loss
                ledger.log(
                    state, f"ANARCHY: {player.name} was robbed of ${policy.anarchy_loss}.", rules
                )


def advance_regime(state: GameState, rules: RulesConfig = DEFAULT_RULES) -> bool:
    """Count the regime down one round; rotate when it expires.

    Returns ``True`` when a new regime took office.
    """

    government = state.government
    if government.turns_remaining > 0:
        government.turns_remaining -= 1
    if government.turns_remaining > 0:
        return False

    seed = ledger.next_seed(state, "regime")
    new_type = random_choice(seed, list(GovernmentType))["choice"]
    state.government = make_government(new_type, rules)
    logger.info("regime rotated to %s", new_type)
    ledger.log(
        state,
        f"New government: {new_type.upper()} for {rules.government.regime_duration} rounds.",
        rules,
    )
    return True


def tax_tile_amount(state: GameState, rules: RulesConfig = DEFAULT_RULES) -> int:
    if state.government.type in (GovernmentType.LIBERTARIAN, GovernmentType.ANARCHY):
        return 0
    rate = max(0.0, state.government.config.tax_rate)
    return math.floor(rules.economy.base_tax * (1 + rate))


def loan_interest_rate(state: GameState, rules: RulesConfig = DEFAULT_RULES) -> float:
    return max(0.0, rules.loans.base_interest_rate + state.government.config.interest_rate)

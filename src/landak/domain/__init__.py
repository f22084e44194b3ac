"""Pure rules layer for Landak.

The package exposes:

* Dataclasses describing the whole game (see :mod:`models`).
* Enumerations and strongly-typed identifiers used across the rules layer.
* Rule configuration objects (see :mod:`rules_config`).
* Pure rule functions per subsystem (rent, government, events, auctions,
  trades, loans, turns) composed by :mod:`reducer`.

Nothing in here performs I/O; persistence and scheduling live in
:mod:`landak.repository`, :mod:`landak.session` and :mod:`landak.api`.
"""

from . import (
    actions,
    auction,
    board,
    bots,
    enums,
    events,
    government,
    ledger,
    loans,
    models,
    reducer,
    rent,
    rules_config,
    setup,
    tick,
    trade,
    turn,
    validation,
)

__all__ = [
    "actions",
    "auction",
    "board",
    "bots",
    "enums",
    "events",
    "government",
    "ledger",
    "loans",
    "models",
    "reducer",
    "rent",
    "rules_config",
    "setup",
    "tick",
    "trade",
    "turn",
    "validation",
]

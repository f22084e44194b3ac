"""Deterministic Random Number Generator (RNG) system for Landak.

Every random outcome in the rules layer (dice, event draws, regime rotation,
anarchy losses, bot bid amounts) is derived from a seed string built from the
game state, so that:
- Reproducibility: the same (state, action) pair always produces the same state
- Testability: a test can pin a seed or pre-supply the dice
- Bug reproduction: a saved game replays exactly

Examples:
    >>> seed = generate_seed(game_seed=7, draw=3, turn=2, context="dice")
    >>> result = roll_dice(seed, "2d6")
    >>> len(result["rolls"])
    2

    >>> result = random_choice(seed, ["left", "right", "anarchy"])
    >>> result["choice"] in ["left", "right", "anarchy"]
    True
"""

import hashlib
import random
import re
from typing import Any


def generate_seed(game_seed: int, draw: int, turn: int, context: str) -> str:
    """Generate a deterministic seed from game state.

    Format: "game_seed:draw:turn:context"

    Args:
        game_seed: Seed chosen when the game started
        draw: Running count of random draws already consumed by the game
        turn: Current round number
        context: What the roll is for (e.g., 'dice', 'event', 'anarchy_player_2')

    Returns:
        Seed string for RNG in format "game_seed:draw:turn:context"

    Examples:
        >>> generate_seed(1, 42, 3, "dice")
        '1:42:3:dice'

    Raises:
        ValueError: If draw or turn is negative
    """
    if draw < 0:
        raise ValueError(f"draw must be non-negative, got {draw}")
    if turn < 0:
        raise ValueError(f"turn must be non-negative, got {turn}")

    return f"{game_seed}:{draw}:{turn}:{context}"


_DICE_PATTERN = re.compile(r"^(\d+)d(\d+)$")


def _rng(seed: str) -> random.Random:
    """``random.Random`` keyed on the first 64 bits of SHA-256(seed)."""

    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    return random.Random(int.from_bytes(digest[:8], "big", signed=False))


def _parse_dice_notation(notation: str) -> tuple[int, int]:
    match = _DICE_PATTERN.match(notation.lower())
    if not match:
        raise ValueError(f"Invalid dice notation: '{notation}'. Expected NdM, e.g. '2d6'")
    num_dice, num_sides = int(match.group(1)), int(match.group(2))
    if num_dice <= 0:
        raise ValueError(f"Number of dice must be positive, got {num_dice}")
    if num_sides <= 0:
        raise ValueError(f"Number of sides must be positive, got {num_sides}")
    return num_dice, num_sides


def roll_dice(seed: str, notation: str = "2d6") -> dict[str, Any]:
    """Roll ``notation`` dice for ``seed``.

    Returns a dict with ``notation``, the individual ``rolls``, their
    ``total`` and the ``seed`` used.
    """
    num_dice, num_sides = _parse_dice_notation(notation)
    rng = _rng(seed)
    rolls = [rng.randint(1, num_sides) for _ in range(num_dice)]
    return {"notation": notation, "rolls": rolls, "total": sum(rolls), "seed": seed}


def random_choice(seed: str, options: list[Any]) -> dict[str, Any]:
    """Pick one of ``options``; returns ``choice``, ``index`` and ``seed``."""

    if not options:
        raise ValueError("options list cannot be empty")
    index = _rng(seed).randint(0, len(options) - 1)
    return {"choice": options[index], "index": index, "seed": seed}


def random_int(seed: str, min_val: int, max_val: int) -> dict[str, Any]:
    """Integer in ``[min_val, max_val]``; returns ``value``, ``min``, ``max`` and ``seed``."""

    if min_val > max_val:
        raise ValueError(f"min_val ({min_val}) cannot be greater than max_val ({max_val})")
    value = _rng(seed).randint(min_val, max_val)
    return {"value": value, "min": min_val, "max": max_val, "seed": seed}


def check_success(seed: str, probability: float) -> dict[str, Any]:
    """Percentile check: a d100 roll at or below ``probability * 100`` succeeds.

    ``probability=0.3`` succeeds on 1-30.  The result carries ``success``,
    ``roll``, ``target``, ``probability`` and ``seed``.
    """
    if not 0.0 <= probability <= 1.0:
        raise ValueError(f"probability must be between 0.0 and 1.0, got {probability}")

    target = round(probability * 100)
    roll = roll_dice(seed, "1d100")["total"]
    return {
        "success": roll <= target,
        "roll": roll,
        "target": target,
        "probability": probability,
        "seed": seed,
    }

"""Utility functions for the Landak game engine."""

from landak.utils.rng import (
    check_success,
    generate_seed,
    random_choice,
    random_int,
    roll_dice,
)

__all__ = [
    "check_success",
    "generate_seed",
    "random_choice",
    "random_int",
    "roll_dice",
]

"""Pytest configuration to ensure the `src` package layout is importable.

This adds the `src/` directory to `sys.path` so tests can import the
`landak` package without requiring an editable install in CI.  It also
provides a small two-player table used across the unit tests.
"""

import sys
from pathlib import Path

import pytest

SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from landak.domain.actions import PlayerSetup  # noqa: E402
from landak.domain.enums import GovernmentType  # noqa: E402
from landak.domain.government import make_government  # noqa: E402
from landak.domain.setup import new_game  # noqa: E402


@pytest.fixture
def game():
    """Two humans under a libertarian regime (no taxes, no VAT, no welfare)."""

    state = new_game([PlayerSetup("Ane"), PlayerSetup("Bittor")], 0, seed=7)
    state.government = make_government(GovernmentType.LIBERTARIAN)
    return state

"""Tests for the JSON game repository."""

from __future__ import annotations

import pytest

from landak.domain import ledger, loans
from landak.domain.enums import RentFilterType
from landak.domain.models import BANK, RentCap, RentFilter, TradeOffer
from landak.repository import JsonGameRepository


def _busy_game(game):
    ledger.set_owner(game, game.tiles[1], 0)
    ledger.set_owner(game, game.tiles[2], BANK)
    game.tiles[1].houses = 2
    game.landing_heatmap = {1: 3, 37: 1}
    game.trade = TradeOffer(initiator_id=0, target_id=1, offered_money=50, requested_tile_ids=[])
    loan = loans.take_loan(game, game.players[1], 400, 4)
    pool = loans.create_pool(game, "Pool", [loan.id])
    loans.buy_pool_units(game, game.players[0], pool.id, 10)
    game.rent_filters = [
        RentFilter(
            id="ev_transport_strike",
            multiplier=0.5,
            turns_remaining=2,
            filter_type=RentFilterType.TRANSPORT,
        )
    ]
    game.rent_cap = RentCap(amount=150, turns_remaining=3)
    return game


def test_save_and_load_game(tmp_path, game):
    repo = JsonGameRepository(tmp_path)
    state = _busy_game(game)

    path = repo.save(state, "table-1")
    assert path.exists()
    assert path.name == "game_table-1.json"

    loaded = repo.load("table-1")
    assert loaded == state
    assert loaded.tiles[2].owner == BANK
    assert loaded.loan_pools[0].holdings == {0: 10}


def test_list_and_delete(tmp_path, game):
    repo = JsonGameRepository(tmp_path)
    repo.save(game, "b")
    repo.save(game, "a")

    assert repo.list_slots() == ["a", "b"]

    repo.delete("a")
    assert repo.list_slots() == ["b"]
    repo.delete("missing")


def test_missing_slot_raises(tmp_path):
    repo = JsonGameRepository(tmp_path)
    with pytest.raises(FileNotFoundError):
        repo.load("nowhere")


@pytest.mark.parametrize("slot", ["", "../escape", "with space", "x" * 65])
def test_invalid_slot_names(tmp_path, game, slot):
    repo = JsonGameRepository(tmp_path)
    with pytest.raises(ValueError, match="invalid save slot"):
        repo.save(game, slot)

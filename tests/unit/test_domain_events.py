"""Tests for the event deck."""

from __future__ import annotations

import copy

from landak.domain.enums import RentFilterType
from landak.domain.events import (
    EVENTS_BY_ID,
    EVENTS_DECK,
    apply_event,
    decay_modifiers,
    draw_event,
)
from landak.domain.models import RentCap


def _apply(state, event_id, player=None):
    player = player or state.players[0]
    apply_event(state, player, EVENTS_BY_ID[event_id])
    return player


def test_deck_has_unique_ids():
    assert len(EVENTS_DECK) == 13
    assert len(EVENTS_BY_ID) == len(EVENTS_DECK)


def test_draw_is_deterministic_and_consumes_a_draw(game):
    replay = copy.deepcopy(game)
    draws = game.draws

    assert draw_event(game).id == draw_event(replay).id
    assert game.draws == draws + 1


def test_apply_records_active_event(game):
    _apply(game, "ev_bank_error")

    assert game.active_event is not None
    assert game.active_event.title == "Bank Error"
    assert game.players[0].cash == 1700
    assert game.bank_balance == -200


def test_speeding_fine_goes_to_bank(game):
    _apply(game, "ev_speeding")
    assert game.players[0].cash == 1400
    assert game.bank_balance == 100


def test_tax_inspection_only_hits_large_fortunes(game):
    player = _apply(game, "ev_tax_inspection")
    assert player.cash == 1500

    player.cash = 3000
    _apply(game, "ev_tax_inspection")
    assert player.cash == 2400


def test_repairs_charge_per_building(game):
    player = game.players[0]
    game.tiles[1].owner = player.id
    game.tiles[1].houses = 2
    game.tiles[2].owner = player.id
    game.tiles[2].hotel = True

    _apply(game, "ev_repairs")

    assert player.cash == 1500 - 80 - 115


def test_corruption_pays_every_other_living_player(game):
    _apply(game, "ev_corruption")
    assert [p.cash for p in game.players] == [1450, 1550]


def test_trip_and_hangover_move_the_player(game):
    player = game.players[0]
    player.position = 50
    _apply(game, "ev_trip")
    assert player.position == 0
    assert player.cash == 1700

    _apply(game, "ev_back3")
    assert player.position == 101


def test_rent_modifiers_and_decay(game):
    _apply(game, "ev_inflation")
    _apply(game, "ev_transport_strike")
    _apply(game, "ev_rent_freeze")

    assert game.rent_multiplier == 1.5
    assert game.rent_multiplier_turns_remaining == 3
    assert game.rent_filters[0].filter_type == RentFilterType.TRANSPORT
    assert game.rent_cap == RentCap(amount=150, turns_remaining=2)

    decay_modifiers(game)
    decay_modifiers(game)

    assert game.rent_filters == []
    assert game.rent_cap is None
    assert game.rent_multiplier_turns_remaining == 1

    decay_modifiers(game)
    assert game.rent_multiplier == 1.0


def test_filter_event_replaces_itself(game):
    _apply(game, "ev_leisure_boom")
    _apply(game, "ev_leisure_boom")
    assert len(game.rent_filters) == 1

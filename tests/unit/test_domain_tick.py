"""Tests for round-boundary processing."""

from __future__ import annotations

from landak.domain import ledger, loans, tick
from landak.domain.enums import GovernmentType, LoanStatus
from landak.domain.government import make_government
from landak.domain.models import BANK


def _bank_owns(state, *tile_ids):
    for tile_id in tile_ids:
        ledger.set_owner(state, state.tiles[tile_id], BANK)


class TestImproveBankMonopolies:
    def test_each_tile_of_a_full_group_gains_a_level(self, game):
        _bank_owns(game, 1, 2)
        game.bank_balance = 1000

        improved = tick.improve_bank_monopolies(game)

        assert improved == [1, 2]
        assert game.tiles[1].houses == 1
        assert game.tiles[2].houses == 1
        assert game.bank_balance == 1000 - 30 - 35
        assert game.houses_available == 30

    def test_stops_when_the_bank_runs_dry(self, game):
        _bank_owns(game, 1, 2)
        game.bank_balance = 40

        assert tick.improve_bank_monopolies(game) == [1]
        assert game.bank_balance == 10

    def test_partial_or_mortgaged_groups_are_skipped(self, game):
        _bank_owns(game, 1, 2, 5)
        game.tiles[2].mortgaged = True
        game.bank_balance = 1000

        assert tick.improve_bank_monopolies(game) == []

    def test_four_houses_become_a_hotel(self, game):
        _bank_owns(game, 1, 2)
        game.tiles[1].houses = 4
        game.tiles[2].hotel = True
        game.bank_balance = 1000

        assert tick.improve_bank_monopolies(game) == [1]
        assert game.tiles[1].hotel
        assert game.hotels_available == 11


class TestDivestBankTile:
    def test_lowest_tile_goes_to_the_richest_player(self, game):
        _bank_owns(game, 13, 5)
        game.players[1].cash = 2000

        assert tick.divest_bank_tile(game) == 5
        assert game.tiles[5].owner == 1
        assert game.players[1].cash == 1920
        assert game.bank_balance == 80

    def test_ties_favour_the_lower_seat(self, game):
        _bank_owns(game, 5)
        assert tick.divest_bank_tile(game) == 5
        assert game.tiles[5].owner == 0

    def test_nobody_can_pay(self, game):
        _bank_owns(game, 84)
        for player in game.players:
            player.cash = 100
        assert tick.divest_bank_tile(game) is None
        assert game.tiles[84].owner == BANK


class TestRunRoundTick:
    def test_counts_the_round_and_the_regime(self, game):
        result = tick.run_round_tick(game)

        assert result.round_number == 2
        assert game.turn_count == 2
        assert not result.regime_changed
        assert game.government.turns_remaining == 6

    def test_regime_rotates_on_expiry(self, game):
        game.government.turns_remaining = 1
        result = tick.run_round_tick(game)

        assert result.regime_changed
        assert game.government.turns_remaining == 7

    def test_amortizes_loans_and_decays_modifiers(self, game):
        loan = loans.take_loan(game, game.players[0], 100, 1)
        game.rent_multiplier = 1.5
        game.rent_multiplier_turns_remaining = 1

        tick.run_round_tick(game)

        assert loan.status == LoanStatus.PAID
        assert game.rent_multiplier == 1.0
        assert game.rent_multiplier_turns_remaining == 0

    def test_libertarian_rounds_divest(self, game):
        _bank_owns(game, 5)
        result = tick.run_round_tick(game)
        assert result.divested_tile_id == 5
        assert result.improved_tile_ids == []

    def test_other_regimes_improve(self, game):
        game.government = make_government(GovernmentType.RIGHT)
        _bank_owns(game, 1, 2)
        game.bank_balance = 1000

        result = tick.run_round_tick(game)

        assert result.improved_tile_ids == [1, 2]
        assert result.divested_tile_id is None

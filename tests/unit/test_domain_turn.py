"""Tests for dice, movement, property management and turn order."""

from __future__ import annotations

import pytest

from landak.domain import ledger, turn
from landak.domain.actions import PlayerSetup
from landak.domain.enums import GovernmentType, RejectReason
from landak.domain.errors import ActionRejected
from landak.domain.government import make_government
from landak.domain.models import BANK
from landak.domain.setup import new_game


def _reason(excinfo) -> RejectReason:
    return excinfo.value.reason


class TestRoll:
    def test_buying_the_landed_tile(self, game):
        game.tiles[7].price = 150
        turn.roll(game, (4, 3))
        turn.buy_property(game)

        player = game.players[0]
        assert player.position == 7
        assert player.cash == 1350
        assert 7 in player.owned_tile_ids
        assert game.tiles[7].owner == 0
        assert game.bank_balance == 150
        assert game.landing_heatmap == {7: 1}

    def test_seeded_roll_is_reproducible(self, game):
        other = new_game([PlayerSetup("Ane"), PlayerSetup("Bittor")], 0, seed=7)
        other.government = game.government
        assert turn.roll(game) == turn.roll(other)

    def test_roll_once_per_turn(self, game):
        turn.roll(game, (1, 2))
        with pytest.raises(ActionRejected) as excinfo:
            turn.roll(game, (1, 2))
        assert _reason(excinfo) == RejectReason.ALREADY_ROLLED

    @pytest.mark.parametrize("dice", [(0, 3), (7, 1), (1,), (1, 2, 3)])
    def test_invalid_dice(self, game, dice):
        with pytest.raises(ActionRejected) as excinfo:
            turn.roll(game, dice)
        assert _reason(excinfo) == RejectReason.INVALID_DICE

    def test_passing_start_pays_salary(self, game):
        game.players[0].position = 100
        turn.roll(game, (3, 2))

        assert game.players[0].position == 1
        assert game.players[0].cash == 1700
        assert game.bank_balance == -200

    def test_go_to_jail_tile(self, game):
        game.players[0].position = 10
        turn.roll(game, (3, 3))

        assert game.players[0].position == 26
        assert game.players[0].jail_turns == 3

    def test_tax_follows_the_regime(self, game):
        game.government = make_government(GovernmentType.LEFT)
        turn.roll(game, (1, 3))

        assert game.players[0].cash == 1250
        assert game.bank_balance == 250

    def test_libertarian_tax_is_waived(self, game):
        turn.roll(game, (1, 3))
        assert game.players[0].cash == 1500


class TestJail:
    @pytest.fixture
    def jailed(self, game):
        player = game.players[0]
        player.position = 26
        player.jail_turns = 3
        return game

    def test_non_doubles_keep_the_player_inside(self, jailed):
        turn.roll(jailed, (2, 3))

        player = jailed.players[0]
        assert player.position == 26
        assert player.jail_turns == 2
        assert jailed.has_rolled

    def test_doubles_release_and_move(self, jailed):
        turn.roll(jailed, (3, 3))

        player = jailed.players[0]
        assert player.jail_turns == 0
        assert player.position == 32

    def test_bail(self, jailed):
        turn.pay_jail(jailed)
        assert jailed.players[0].jail_turns == 0
        assert jailed.players[0].cash == 1450
        assert jailed.bank_balance == 50

    def test_bail_needs_a_prisoner(self, game):
        with pytest.raises(ActionRejected) as excinfo:
            turn.pay_jail(game)
        assert _reason(excinfo) == RejectReason.NOT_IN_JAIL


class TestTransport:
    def test_one_hop_per_turn(self, game):
        game.players[0].position = 3
        turn.travel_transport(game, 19)

        assert game.players[0].position == 19
        assert game.players[0].cash == 1450
        assert game.transport_used
        assert game.landing_heatmap == {19: 1}

        with pytest.raises(ActionRejected) as excinfo:
            turn.travel_transport(game, 34)
        assert _reason(excinfo) == RejectReason.TRANSPORT_UNAVAILABLE

    def test_destination_must_be_a_stop(self, game):
        game.players[0].position = 3
        with pytest.raises(ActionRejected) as excinfo:
            turn.travel_transport(game, 1)
        assert _reason(excinfo) == RejectReason.INVALID_TILE

    def test_needs_a_station(self, game):
        game.players[0].position = 1
        with pytest.raises(ActionRejected) as excinfo:
            turn.travel_transport(game, 19)
        assert _reason(excinfo) == RejectReason.TRANSPORT_UNAVAILABLE


class TestProperty:
    def test_buy_requires_a_roll(self, game):
        with pytest.raises(ActionRejected) as excinfo:
            turn.buy_property(game)
        assert _reason(excinfo) == RejectReason.NOT_ROLLED

    def test_cannot_buy_owned_tile(self, game):
        ledger.set_owner(game, game.tiles[7], 1)
        turn.roll(game, (4, 3))
        with pytest.raises(ActionRejected) as excinfo:
            turn.buy_property(game)
        assert _reason(excinfo) == RejectReason.ALREADY_OWNED

    def test_rent_goes_to_the_owner(self, game):
        ledger.set_owner(game, game.tiles[5], 1)
        turn.roll(game, (2, 3))
        paid = turn.pay_rent(game)

        assert paid == 8
        assert [p.cash for p in game.players] == [1492, 1508]
        assert game.rent_settled

        with pytest.raises(ActionRejected) as excinfo:
            turn.pay_rent(game)
        assert _reason(excinfo) == RejectReason.NOTHING_OWED

    def test_build_and_sell(self, game):
        ledger.set_owner(game, game.tiles[1], 0)
        with pytest.raises(ActionRejected) as excinfo:
            turn.build_improvement(game, 1)
        assert _reason(excinfo) == RejectReason.NO_MONOPOLY

        ledger.set_owner(game, game.tiles[2], 0)
        turn.build_improvement(game, 1)
        assert game.tiles[1].houses == 1
        assert game.players[0].cash == 1470
        assert game.houses_available == 31

        refund = turn.sell_improvement(game, 1)
        assert refund == 15
        assert game.tiles[1].houses == 0
        assert game.players[0].cash == 1485
        assert game.houses_available == 32

    def test_fifth_level_is_a_hotel(self, game):
        ledger.set_owner(game, game.tiles[1], 0)
        ledger.set_owner(game, game.tiles[2], 0)
        game.tiles[1].houses = 4
        game.houses_available -= 4

        turn.build_improvement(game, 1)

        assert game.tiles[1].hotel
        assert game.tiles[1].houses == 0
        assert game.hotels_available == 11
        assert game.houses_available == 32

        with pytest.raises(ActionRejected) as excinfo:
            turn.build_improvement(game, 1)
        assert _reason(excinfo) == RejectReason.MAX_IMPROVEMENT

    def test_house_supply_runs_out(self, game):
        ledger.set_owner(game, game.tiles[1], 0)
        ledger.set_owner(game, game.tiles[2], 0)
        game.houses_available = 0
        with pytest.raises(ActionRejected) as excinfo:
            turn.build_improvement(game, 1)
        assert _reason(excinfo) == RejectReason.SUPPLY_EXHAUSTED

    def test_fiore_hires_workers(self, game):
        ledger.set_owner(game, game.tiles[55], 0)
        turn.build_improvement(game, 55)
        assert game.tiles[55].workers == 1
        assert game.players[0].cash == 1380

    def test_mortgage_cycle(self, game):
        ledger.set_owner(game, game.tiles[1], 0)

        assert turn.mortgage(game, 1) == 30
        assert game.players[0].cash == 1530
        with pytest.raises(ActionRejected) as excinfo:
            turn.mortgage(game, 1)
        assert _reason(excinfo) == RejectReason.MORTGAGED

        assert turn.unmortgage(game, 1) == 33
        assert game.players[0].cash == 1497
        assert not game.tiles[1].mortgaged

    def test_not_owner(self, game):
        ledger.set_owner(game, game.tiles[1], 1)
        with pytest.raises(ActionRejected) as excinfo:
            turn.mortgage(game, 1)
        assert _reason(excinfo) == RejectReason.NOT_OWNER


class TestTurnOrder:
    def test_end_turn_requires_roll(self, game):
        with pytest.raises(ActionRejected) as excinfo:
            turn.end_turn(game)
        assert _reason(excinfo) == RejectReason.NOT_ROLLED

    def test_end_turn_passes_to_next_player(self, game):
        turn.roll(game, (1, 2))
        turn.end_turn(game)

        assert game.current_player_index == 1
        assert not game.has_rolled
        assert game.turn_count == 1

    def test_wrap_runs_the_round_tick(self, game):
        game.current_player_index = 1
        game.has_rolled = True
        turn.end_turn(game)

        assert game.current_player_index == 0
        assert game.turn_count == 2
        assert game.government.turns_remaining == 6

    def test_dead_players_are_skipped(self):
        state = new_game([PlayerSetup("A"), PlayerSetup("B"), PlayerSetup("C")], 0, seed=1)
        state.government = make_government(GovernmentType.LIBERTARIAN)
        state.players[1].alive = False
        state.has_rolled = True

        turn.end_turn(state)
        assert state.current_player_index == 2

    def test_negative_cash_is_eliminated_at_end_of_turn(self, game):
        ledger.set_owner(game, game.tiles[1], 0)
        game.players[0].cash = -10
        game.has_rolled = True

        turn.end_turn(game)

        assert not game.players[0].alive
        assert game.tiles[1].owner == BANK
        assert game.players[0].owned_tile_ids == set()
        assert game.winner_id == 1
        assert turn.is_game_over(game)

    def test_bankruptcy_ends_a_two_player_game(self, game):
        turn.declare_bankruptcy(game)

        assert game.winner_id == 1
        with pytest.raises(ActionRejected) as excinfo:
            turn.roll(game, (1, 1))
        assert _reason(excinfo) == RejectReason.GAME_OVER

    def test_actions_need_a_started_game(self, game):
        game.game_started = False
        with pytest.raises(ActionRejected) as excinfo:
            turn.roll(game, (1, 2))
        assert _reason(excinfo) == RejectReason.GAME_NOT_STARTED

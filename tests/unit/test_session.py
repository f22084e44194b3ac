"""Tests for the game session: undo history, generations and bot play."""

from __future__ import annotations

from landak.domain.actions import (
    BidAuction,
    EndTurn,
    PlayerSetup,
    ProposeTrade,
    RollDice,
    StartAuction,
    StartGame,
)
from landak.domain.models import TradeOffer
from landak.session import GameSession


def _started(history_limit: int = 50, **start) -> GameSession:
    session = GameSession(history_limit=history_limit)
    start.setdefault("humans", (PlayerSetup("Ane"), PlayerSetup("Bittor")))
    result = session.dispatch(StartGame(seed=7, **start))
    assert result.accepted
    return session


def _play_turn(session: GameSession, dice=(1, 2)) -> None:
    assert session.dispatch(RollDice(dice=dice)).accepted
    assert session.dispatch(EndTurn()).accepted


class TestHistory:
    def test_fresh_session_is_not_started(self):
        session = GameSession()
        assert not session.state.game_started
        assert session.generation == 0
        assert session.history_depth == 0

    def test_start_bumps_generation(self):
        session = _started()
        assert session.generation == 1
        assert session.history_depth == 0

    def test_rejected_actions_leave_no_trace(self):
        session = _started()
        before = session.state
        result = session.dispatch(EndTurn())

        assert not result.accepted
        assert session.state is before
        assert session.history_depth == 0

    def test_undo_returns_to_before_end_turn(self):
        session = _started()
        _play_turn(session)
        assert session.state.current_player_index == 1
        assert session.history_depth == 1

        assert session.undo()

        assert session.state.current_player_index == 0
        assert session.state.has_rolled
        assert session.state.players[0].position == 3
        assert session.generation == 2
        assert not session.undo()

    def test_history_is_bounded(self):
        session = _started(history_limit=2)
        for _ in range(3):
            _play_turn(session)
        assert session.history_depth == 2

    def test_load_replaces_everything(self):
        session = _started()
        _play_turn(session)
        replacement = _started().state

        session.load(replacement)

        assert session.state is replacement
        assert session.history_depth == 0
        assert session.generation == 2


class TestAuctionTimers:
    def test_tick_counts_down_the_open_auction(self):
        session = _started()
        session.dispatch(StartAuction(tile_id=1))
        auction_id = session.state.auction.id

        assert session.is_current(session.generation, auction_id)
        result = session.tick_auction(session.generation, auction_id)

        assert result.accepted
        assert session.state.auction.seconds_remaining == 19

    def test_ticks_from_an_older_generation_are_stale(self):
        session = _started()
        session.dispatch(StartAuction(tile_id=1))
        generation = session.generation
        auction_id = session.state.auction.id

        session.load(session.state)

        assert not session.is_current(generation, auction_id)
        assert session.tick_auction(generation, auction_id) is None
        assert session.state.auction.seconds_remaining == 20

    def test_ticks_for_a_closed_auction_are_stale(self):
        session = _started()
        session.dispatch(StartAuction(tile_id=1))
        session.dispatch(BidAuction(player_id=0, amount=40))
        auction_id = session.state.auction.id
        for _ in range(20):
            session.tick_auction(session.generation, auction_id)

        assert session.state.auction is None
        assert session.state.tiles[1].owner == 0
        assert session.tick_auction(session.generation, auction_id) is None


class TestPlayBots:
    def test_human_turn_stops_the_loop(self):
        session = _started(humans=(PlayerSetup("Ane"),), bots=1)
        assert session.play_bots() == []

    def test_bots_play_until_the_human_is_up(self):
        session = _started(humans=(PlayerSetup("Ane"),), bots=1)
        _play_turn(session)

        results = session.play_bots()

        assert [result.accepted for result in results] == [True, True, True]
        assert session.state.current_player_index == 0
        assert not session.state.has_rolled

    def test_all_bot_table_runs_for_many_steps(self):
        session = _started(humans=(), bots=3)

        results = session.play_bots(max_steps=60)

        assert results
        assert all(result.accepted for result in results)
        assert session.state.turn_count > 1

    def test_stale_trade_does_not_stall_the_bots(self):
        session = _started(humans=(PlayerSetup("Ane"),), bots=1)
        _play_turn(session)
        offer = TradeOffer(initiator_id=0, target_id=1, offered_money=1400)
        assert session.dispatch(ProposeTrade(offer=offer)).accepted
        session.state.players[0].cash = 100

        results = session.play_bots()

        assert all(result.accepted for result in results)
        assert len(results) > 1
        assert session.state.trade is None
        assert session.state.current_player_index == 0

    def test_jailed_bot_with_cash_pays_bail_first(self):
        session = _started(humans=(PlayerSetup("Ane"),), bots=1)
        _play_turn(session)
        session.state.players[1].jail_turns = 3

        results = session.play_bots(max_steps=1)

        assert len(results) == 1 and results[0].accepted
        assert session.state.players[1].jail_turns == 0
        assert session.state.players[1].cash == 1450

    def test_jailed_bot_short_of_cash_rolls(self):
        session = _started(humans=(PlayerSetup("Ane"),), bots=1)
        _play_turn(session)
        session.state.players[1].jail_turns = 3
        session.state.players[1].cash = 150

        results = session.play_bots(max_steps=1)

        assert results[0].accepted
        assert session.state.has_rolled
        assert session.state.players[1].jail_turns < 3

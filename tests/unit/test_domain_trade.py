"""Tests for trade negotiation and the bot trade heuristics."""

from __future__ import annotations

import pytest

from landak.domain import ledger, trade
from landak.domain.enums import RejectReason
from landak.domain.errors import ActionRejected
from landak.domain.models import TradeOffer


def _own(state, player_id, *tile_ids):
    for tile_id in tile_ids:
        ledger.set_owner(state, state.tiles[tile_id], player_id)


def test_accept_swaps_money_and_tiles(game):
    _own(game, 0, 1)
    _own(game, 1, 5)
    trade.propose(
        game,
        TradeOffer(
            initiator_id=0,
            target_id=1,
            offered_money=100,
            offered_tile_ids=[1],
            requested_tile_ids=[5],
        ),
    )

    trade.accept(game)

    first, second = game.players
    assert first.cash == 1400
    assert second.cash == 1600
    assert first.owned_tile_ids == {5}
    assert second.owned_tile_ids == {1}
    assert game.tiles[1].owner == 1
    assert game.tiles[5].owner == 0
    assert game.trade is None


def test_requested_money_flows_back(game):
    trade.propose(game, TradeOffer(initiator_id=0, target_id=1, requested_money=300))
    trade.accept(game)
    assert [p.cash for p in game.players] == [1800, 1200]


@pytest.mark.parametrize(
    ("offer", "reason"),
    [
        (TradeOffer(initiator_id=0, target_id=0), RejectReason.INVALID_TRADE),
        (TradeOffer(initiator_id=0, target_id=1, offered_money=-5), RejectReason.INVALID_AMOUNT),
        (TradeOffer(initiator_id=0, target_id=1, offered_tile_ids=[1]), RejectReason.INVALID_TRADE),
        (
            TradeOffer(initiator_id=0, target_id=1, offered_tile_ids=[500]),
            RejectReason.INVALID_TILE,
        ),
        (TradeOffer(initiator_id=0, target_id=9), RejectReason.INVALID_TRADE),
    ],
)
def test_invalid_offers_are_rejected(game, offer, reason):
    with pytest.raises(ActionRejected) as excinfo:
        trade.propose(game, offer)
    assert excinfo.value.reason == reason
    assert game.trade is None


def test_new_proposal_overwrites_open_trade(game):
    trade.propose(game, TradeOffer(initiator_id=0, target_id=1, offered_money=10))
    trade.propose(game, TradeOffer(initiator_id=1, target_id=0, offered_money=20))

    assert game.trade.initiator_id == 1
    assert game.trade.offered_money == 20


def test_accept_revalidates_ownership(game):
    _own(game, 0, 1)
    trade.propose(game, TradeOffer(initiator_id=0, target_id=1, offered_tile_ids=[1]))
    ledger.set_owner(game, game.tiles[1], None)

    with pytest.raises(ActionRejected) as excinfo:
        trade.accept(game)
    assert excinfo.value.reason == RejectReason.INVALID_TRADE


def test_accept_requires_funds(game):
    trade.propose(game, TradeOffer(initiator_id=0, target_id=1, offered_money=1000))
    game.players[0].cash = 10

    with pytest.raises(ActionRejected) as excinfo:
        trade.accept(game)
    assert excinfo.value.reason == RejectReason.INSUFFICIENT_FUNDS


def test_reject_clears_and_needs_a_trade(game):
    with pytest.raises(ActionRejected) as excinfo:
        trade.reject(game)
    assert excinfo.value.reason == RejectReason.NO_TRADE

    trade.propose(game, TradeOffer(initiator_id=0, target_id=1))
    trade.reject(game)
    assert game.trade is None


def test_bot_accepts_a_group_completing_tile(game):
    _own(game, 1, 37, 5)
    _own(game, 0, 38)
    offer = TradeOffer(initiator_id=0, target_id=1, offered_tile_ids=[38], requested_tile_ids=[5])

    assert trade.evaluate_trade_by_bot(game, offer, 1)


def test_bot_refuses_to_break_its_monopoly_cheaply(game):
    _own(game, 1, 37, 38)
    offer = TradeOffer(initiator_id=0, target_id=1, offered_money=700, requested_tile_ids=[37])

    assert not trade.evaluate_trade_by_bot(game, offer, 1)

    generous = TradeOffer(initiator_id=0, target_id=1, offered_money=800, requested_tile_ids=[37])
    assert trade.evaluate_trade_by_bot(game, generous, 1)


def test_bot_proposal_targets_the_missing_tile(game):
    game.players[1].is_bot = True
    _own(game, 1, 37, 13)
    _own(game, 0, 38)

    offer = trade.get_bot_trade_proposal(game, 1)

    assert offer == TradeOffer(
        initiator_id=1,
        target_id=0,
        offered_money=255,
        offered_tile_ids=[13],
        requested_tile_ids=[38],
    )


def test_bot_proposal_ignores_bank_holdings(game):
    _own(game, 1, 37)
    game.tiles[38].owner = "bank"

    assert trade.get_bot_trade_proposal(game, 1) is None

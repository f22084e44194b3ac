"""Explicitly owned game session.

A :class:`GameSession` holds the current :class:`GameState` of one table,
a bounded stack of earlier snapshots for undo, and a ``generation`` token.
The token changes whenever the game is replaced (start, load or undo), which lets
timer callbacks scheduled against an older game detect that they are stale.
"""

from __future__ import annotations

import logging
from collections import deque

from landak.domain.actions import (
    Action,
    BotBidAuction,
    BotResolveTurn,
    BotRespondTrade,
    DeclareBankruptcy,
    EndTurn,
    PayJail,
    RollDice,
    StartGame,
    TickAuction,
)
from landak.domain.models import AuctionID, GameState, PlayerID
from landak.domain.reducer import ActionResult, dispatch
from landak.domain.rules_config import DEFAULT_RULES, RulesConfig
from landak.domain.setup import initial_state
from landak.domain.turn import is_game_over

logger = logging.getLogger(__name__)

_TURN_ENDING = (EndTurn, DeclareBankruptcy)


class GameSession:
    """One table: state, undo history and the generation token."""

    def __init__(
        self,
        state: GameState | None = None,
        *,
        rules: RulesConfig = DEFAULT_RULES,
        history_limit: int = 50,
    ) -> None:
        self.rules = rules
        self.state = state if state is not None else initial_state(rules=rules)
        self.generation = 0
        self._history: deque[GameState] = deque(maxlen=max(1, history_limit))

    @property
    def history_depth(self) -> int:
        return len(self._history)

    def dispatch(self, action: Action) -> ActionResult:
        """Run ``action`` through the reducer and keep the result if accepted."""

        previous = self.state
        result = dispatch(previous, action, rules=self.rules)
        if not result.accepted:
            return result

        if isinstance(action, StartGame):
            self._history.clear()
            self.generation += 1
        elif isinstance(action, _TURN_ENDING):
            self._history.append(previous)
        self.state = result.state
        return result

    def load(self, state: GameState) -> None:
        """Replace the game wholesale; pending timers become stale."""

        self.state = state
        self._history.clear()
        self.generation += 1

    def undo(self) -> bool:
        """Return to the state before the last turn ended."""

        if not self._history:
            return False
        self.state = self._history.pop()
        self.generation += 1
        logger.info(
            "undo to turn %s (%s snapshots left)", self.state.turn_count, len(self._history)
        )
        return True

    # --- Timers -----------------------------------------------------------------

    def is_current(self, generation: int, auction_id: AuctionID | None) -> bool:
        """Whether a timer scheduled for ``(generation, auction_id)`` still applies."""

        if generation != self.generation:
            return False
        current = self.state.auction
        return current is not None and current.id == auction_id

    def tick_auction(self, generation: int, auction_id: AuctionID) -> ActionResult | None:
        if not self.is_current(generation, auction_id):
            logger.debug(
                "ignoring stale auction tick for #%s (generation %s)", auction_id, generation
            )
            return None
        return self.dispatch(TickAuction(seconds=1, auction_id=auction_id))

    # --- Bots -------------------------------------------------------------------

    def play_bots(self, max_steps: int = 200) -> list[ActionResult]:
        """Let bots act until a human has to move, an auction waits or the game ends."""

        results: list[ActionResult] = []
        resolved: tuple[int, int, int] | None = None
        while len(results) < max_steps:
            action = self._next_bot_action(resolved == self._turn_key())
            if action is None:
                break
            result = self.dispatch(action)
            results.append(result)
            if isinstance(action, BotResolveTurn):
                resolved = self._turn_key()
                continue
            if not result.accepted:
                logger.warning("bot action %s rejected: %s", action.kind, result.reason)
                break
        return results

    def _turn_key(self) -> tuple[int, int, int]:
        return (self.generation, self.state.turn_count, self.state.current_player_index)

    def _next_bot_action(self, resolved: bool) -> Action | None:
        state = self.state
        if not state.game_started or not state.players or is_game_over(state):
            return None

        if state.auction is not None:
            bidder = self._waiting_bot_bidder()
            return BotBidAuction(player_id=bidder) if bidder is not None else None

        if state.trade is not None:
            target = state.player(state.trade.target_id)
            if target is not None and target.is_bot:
                return BotRespondTrade()
            return None

        player = state.current_player
        if not player.is_bot:
            return None
        if not state.has_rolled:
            if player.jail_turns > 0 and player.cash > self.rules.bots.bail_threshold:
                return PayJail()
            return RollDice()
        if not resolved:
            return BotResolveTurn()
        return EndTurn()

    def _waiting_bot_bidder(self) -> PlayerID | None:
        current = self.state.auction
        if current is None:
            return None
        for player_id in current.eligible_bidder_ids:
            player = self.state.player(player_id)
            if player is None or not player.is_bot or not player.alive:
                continue
            if current.highest_bidder_id == player_id:
                continue
            return player_id
        return None

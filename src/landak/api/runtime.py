"""Runtime primitives backing the Landak HTTP API."""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from pathlib import Path

from landak.config import Settings, get_settings
from landak.domain.actions import StartGame
from landak.domain.models import AuctionID, GameState, Player, Tile
from landak.domain.reducer import ActionResult
from landak.domain.rules_config import RulesConfig
from landak.repository import JsonGameRepository
from landak.session import GameSession

logger = logging.getLogger(__name__)


class SessionManager:
    """Live sessions keyed by save slot, backed by the JSON repository."""

    def __init__(
        self,
        repository: JsonGameRepository,
        *,
        rules: RulesConfig,
        history_limit: int,
    ) -> None:
        self._repository = repository
        self._rules = rules
        self._history_limit = history_limit
        self._sessions: dict[str, GameSession] = {}

    def slots(self) -> list[str]:
        """Slots that are live in memory or persisted on disk."""

        return sorted(set(self._sessions) | set(self._repository.list_slots()))

    def peek(self, slot: str) -> GameSession | None:
        return self._sessions.get(slot)

    def get(self, slot: str) -> GameSession:
        """Return the live session, loading it from disk on first access."""

        session = self._sessions.get(slot)
        if session is None:
            session = self._new_session(self._repository.load(slot))
            self._sessions[slot] = session
        return session

    def create(self, slot: str, action: StartGame) -> tuple[GameSession, ActionResult]:
        """Start a game in ``slot``; an existing game there is replaced."""

        session = self._sessions.get(slot) or self._new_session(None)
        result = session.dispatch(action)
        if result.accepted:
            self._repository.save(session.state, slot)
            self._sessions[slot] = session
            logger.info("started game in slot %s (generation %s)", slot, session.generation)
        return session, result

    def save(self, slot: str) -> Path:
        session = self._sessions.get(slot)
        if session is None:
            raise FileNotFoundError(f"no live game in slot {slot!r}")
        return self._repository.save(session.state, slot)

    def load(self, slot: str) -> GameSession:
        """Reload ``slot`` from disk, discarding unsaved progress."""

        state = self._repository.load(slot)
        session = self._sessions.get(slot)
        if session is None:
            session = self._new_session(state)
            self._sessions[slot] = session
        else:
            session.load(state)
        return session

    def _new_session(self, state: GameState | None) -> GameSession:
        return GameSession(state, rules=self._rules, history_limit=self._history_limit)

    @staticmethod
    def to_summary_dict(slot: str, session: GameSession) -> dict[str, object]:
        """Return a JSON-friendly overview of a game."""

        state = session.state
        current = state.current_player if state.players else None
        return {
            "slot": slot,
            "generation": session.generation,
            "game_started": state.game_started,
            "turn_count": state.turn_count,
            "player_count": len(state.players),
            "alive_count": sum(1 for player in state.players if player.alive),
            "current_player_id": int(current.id) if current is not None else None,
            "government": str(state.government.type),
            "winner_id": int(state.winner_id) if state.winner_id is not None else None,
        }

    @staticmethod
    def to_detail_dict(slot: str, session: GameSession) -> dict[str, object]:
        """Return the full table projection for clients."""

        state = session.state
        summary = SessionManager.to_summary_dict(slot, session)
        government = state.government
        summary.update(
            {
                "history_depth": session.history_depth,
                "dice": list(state.dice),
                "has_rolled": state.has_rolled,
                "rent_settled": state.rent_settled,
                "transport_used": state.transport_used,
                "bank_balance": state.bank_balance,
                "houses_available": state.houses_available,
                "hotels_available": state.hotels_available,
                "government_detail": {
                    "type": str(government.type),
                    "turns_remaining": government.turns_remaining,
                    **dataclasses.asdict(government.config),
                },
                "players": [SessionManager.to_player_dict(player) for player in state.players],
                "tiles": [SessionManager.to_tile_dict(tile) for tile in state.tiles],
                "auction": dataclasses.asdict(state.auction) if state.auction else None,
                "trade": dataclasses.asdict(state.trade) if state.trade else None,
                "loans": [
                    {**dataclasses.asdict(loan), "outstanding": loan.outstanding}
                    for loan in state.loans
                ],
                "loan_pools": [dataclasses.asdict(pool) for pool in state.loan_pools],
                "rent_multiplier": state.rent_multiplier,
                "rent_multiplier_turns_remaining": state.rent_multiplier_turns_remaining,
                "rent_filters": [dataclasses.asdict(item) for item in state.rent_filters],
                "rent_cap": dataclasses.asdict(state.rent_cap) if state.rent_cap else None,
                "active_event": (
                    dataclasses.asdict(state.active_event) if state.active_event else None
                ),
                "event_log": list(state.event_log),
                "landing_heatmap": {
                    str(tile_id): count for tile_id, count in sorted(state.landing_heatmap.items())
                },
            }
        )
        return summary

    @staticmethod
    def to_player_dict(player: Player) -> dict[str, object]:
        return {
            "id": int(player.id),
            "name": player.name,
            "cash": player.cash,
            "position": player.position,
            "jail_turns": player.jail_turns,
            "owned_tile_ids": sorted(int(tile_id) for tile_id in player.owned_tile_ids),
            "is_bot": player.is_bot,
            "alive": player.alive,
            "role": str(player.role),
            "gender": str(player.gender),
        }

    @staticmethod
    def to_tile_dict(tile: Tile) -> dict[str, object]:
        return {
            "id": int(tile.id),
            "name": tile.name,
            "type": str(tile.type),
            "subtype": str(tile.subtype),
            "color_group": tile.color_group,
            "price": tile.price,
            "owner": tile.owner,
            "houses": tile.houses,
            "hotel": tile.hotel,
            "mortgaged": tile.mortgaged,
            "workers": tile.workers,
        }


class AuctionClock:
    """Background countdown that ticks open auctions once per interval.

    Each cycle first delivers the tick scheduled during the previous cycle and
    then schedules the next one against the current ``(generation, auction)``
    pair.  A game that was restarted, reloaded or undone in between makes the
    pending tick stale and it is dropped.
    """

    MIN_INTERVAL_SECONDS = 0.05

    def __init__(self, sessions: SessionManager, *, interval_seconds: float) -> None:
        self._sessions = sessions
        self._interval = max(interval_seconds, self.MIN_INTERVAL_SECONDS)
        self._enabled: set[str] = set()
        self._pending: dict[str, tuple[int, AuctionID]] = {}
        self._task: asyncio.Task[None] | None = None
        self._stop_event = asyncio.Event()

    @property
    def interval_seconds(self) -> float:
        return self._interval

    def set_interval(self, seconds: float) -> None:
        self._interval = max(seconds, self.MIN_INTERVAL_SECONDS)

    def enabled_slots(self) -> set[str]:
        return set(self._enabled)

    def is_enabled(self, slot: str) -> bool:
        return slot in self._enabled

    async def set_enabled(self, slot: str, enabled: bool) -> None:
        if enabled:
            self._enabled.add(slot)
            self._ensure_running()
        else:
            self._enabled.discard(slot)
            self._pending.pop(slot, None)
            if not self._enabled:
                await self.stop()

    def _ensure_running(self) -> None:
        if self._task is None or self._task.done():
            self._stop_event = asyncio.Event()
            loop = asyncio.get_running_loop()
            self._task = loop.create_task(self._run_loop(), name="landak-auction-clock")

    async def stop(self) -> None:
        task = self._task
        if task is None:
            return
        self._stop_event.set()
        await task
        self._task = None

    async def _run_loop(self) -> None:
        try:
            while not self._stop_event.is_set():
                try:
                    await asyncio.wait_for(self._stop_event.wait(), timeout=self._interval)
                    break
                except TimeoutError:
                    pass
                self.run_cycle()
        finally:
            self._task = None

    def run_cycle(self) -> list[ActionResult]:
        """Deliver pending ticks and schedule the next ones."""

        delivered: list[ActionResult] = []
        for slot in sorted(self._enabled):
            session = self._sessions.peek(slot)
            if session is None:
                logger.warning("slot %s is not live; disabling auction clock", slot)
                self._enabled.discard(slot)
                self._pending.pop(slot, None)
                continue

            pending = self._pending.pop(slot, None)
            if pending is not None:
                generation, auction_id = pending
                result = session.tick_auction(generation, auction_id)
                if result is None:
                    logger.info("dropped stale auction tick in slot %s", slot)
                else:
                    delivered.append(result)

            current = session.state.auction
            if current is not None:
                self._pending[slot] = (session.generation, current.id)
        return delivered


class ApiState:
    """Aggregated services shared by the FastAPI layer."""

    def __init__(self, *, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self.rules = self.settings.rules()
        self.repository = JsonGameRepository(self.settings.data_dir)
        self.sessions = SessionManager(
            self.repository,
            rules=self.rules,
            history_limit=self.settings.history_limit,
        )
        self.clock = AuctionClock(
            self.sessions, interval_seconds=self.settings.auction_tick_seconds
        )

    async def shutdown(self) -> None:
        await self.clock.stop()


def build_state() -> ApiState:
    """Factory used by the API to initialize state."""

    return ApiState()

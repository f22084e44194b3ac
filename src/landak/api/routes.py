"""HTTP routes for the Landak API."""

from __future__ import annotations

import asyncio
import dataclasses
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field, TypeAdapter

from landak.api.runtime import ApiState, SessionManager
from landak.domain.actions import Action, PlayerSetup, StartGame
from landak.domain.enums import Gender, Role
from landak.domain.reducer import ActionResult
from landak.session import GameSession

router = APIRouter()

_ACTION_ADAPTER: TypeAdapter[Action] = TypeAdapter(Action)


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - FastAPI should always initialise state
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]


class GameSummary(BaseModel):
    slot: str
    generation: int
    game_started: bool
    turn_count: int
    player_count: int
    alive_count: int
    current_player_id: int | None
    government: str
    winner_id: int | None


class GameDetail(GameSummary):
    history_depth: int
    dice: list[int]
    has_rolled: bool
    rent_settled: bool
    transport_used: bool
    bank_balance: int
    houses_available: int
    hotels_available: int
    government_detail: dict[str, object]
    players: list[dict[str, object]]
    tiles: list[dict[str, object]]
    auction: dict[str, object] | None
    trade: dict[str, object] | None
    loans: list[dict[str, object]]
    loan_pools: list[dict[str, object]]
    rent_multiplier: float
    rent_multiplier_turns_remaining: int
    rent_filters: list[dict[str, object]]
    rent_cap: dict[str, object] | None
    active_event: dict[str, object] | None
    event_log: list[str]
    landing_heatmap: dict[str, int]


class PlayerSeatRequest(BaseModel):
    name: str = Field(min_length=1)
    gender: Gender = Gender.MALE
    role: Role = Role.CIVIL


class CreateGameRequest(BaseModel):
    slot: str | None = None
    humans: list[PlayerSeatRequest] = Field(default_factory=list)
    bots: int = Field(default=0, ge=0)
    seed: int | None = None


class ActionResponse(BaseModel):
    accepted: bool
    reason: str | None
    detail: str | None
    game: GameDetail


class UndoResponse(BaseModel):
    undone: bool
    game: GameDetail


class BotPlayRequest(BaseModel):
    max_steps: int = Field(default=200, ge=1, le=1000)


class BotPlayResponse(BaseModel):
    steps: int
    rejected: int
    game: GameDetail


class SaveResponse(BaseModel):
    slot: str
    path: str


class ClockRequest(BaseModel):
    enabled: bool
    interval_seconds: float | None = Field(default=None, gt=0.0)


class ClockStatusResponse(BaseModel):
    enabled: bool
    interval_seconds: float
    auction_id: int | None


def _detail(slot: str, session: GameSession) -> GameDetail:
    return GameDetail.model_validate(SessionManager.to_detail_dict(slot, session))


def _session_or_404(state: ApiState, slot: str) -> GameSession:
    try:
        return state.sessions.get(slot)
    except FileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="game not found") from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


def _action_response(slot: str, session: GameSession, result: ActionResult) -> ActionResponse:
    return ActionResponse(
        accepted=result.accepted,
        reason=str(result.reason) if result.reason is not None else None,
        detail=result.detail,
        game=_detail(slot, session),
    )


@router.get("/health")
async def health(state: ApiStateDep) -> dict[str, object]:
    return {
        "status": "ok",
        "rules_version": state.settings.rules_version,
        "auction_tick_seconds": state.clock.interval_seconds,
        "clocked_slots": sorted(state.clock.enabled_slots()),
    }


@router.get("/rules")
async def get_rules(state: ApiStateDep) -> dict[str, Any]:
    return dataclasses.asdict(state.rules)


@router.get("/games", response_model=list[GameSummary])
async def list_games(state: ApiStateDep) -> list[GameSummary]:
    summaries: list[GameSummary] = []
    for slot in state.sessions.slots():
        try:
            session = state.sessions.get(slot)
        except FileNotFoundError:  # pragma: no cover - deleted between listing and loading
            continue
        summaries.append(GameSummary.model_validate(SessionManager.to_summary_dict(slot, session)))
    return summaries


@router.post("/games", response_model=GameDetail, status_code=status.HTTP_201_CREATED)
async def create_game(request: CreateGameRequest, state: ApiStateDep) -> GameDetail:
    slot = request.slot or state.settings.save_slot
    action = StartGame(
        humans=tuple(
            PlayerSetup(name=seat.name, gender=seat.gender, role=seat.role)
            for seat in request.humans
        ),
        bots=request.bots,
        seed=request.seed,
    )
    try:
        session, result = state.sessions.create(slot, action)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if not result.accepted:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"reason": str(result.reason), "detail": result.detail},
        )
    return _detail(slot, session)


@router.get("/games/{slot}", response_model=GameDetail)
async def get_game(slot: str, state: ApiStateDep) -> GameDetail:
    session = _session_or_404(state, slot)
    return _detail(slot, session)


@router.post("/games/{slot}/actions", response_model=ActionResponse)
async def post_action(
    slot: str,
    state: ApiStateDep,
    payload: Annotated[dict[str, Any], Body()],
) -> ActionResponse:
    session = _session_or_404(state, slot)
    try:
        action = _ACTION_ADAPTER.validate_python(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    result = session.dispatch(action)
    return _action_response(slot, session, result)


@router.post("/games/{slot}/undo", response_model=UndoResponse)
async def undo(slot: str, state: ApiStateDep) -> UndoResponse:
    session = _session_or_404(state, slot)
    undone = session.undo()
    return UndoResponse(undone=undone, game=_detail(slot, session))


@router.post("/games/{slot}/bots/play", response_model=BotPlayResponse)
async def play_bots(
    slot: str,
    state: ApiStateDep,
    request: Annotated[BotPlayRequest | None, Body()] = None,
) -> BotPlayResponse:
    session = _session_or_404(state, slot)
    max_steps = (request or BotPlayRequest()).max_steps
    delay = state.settings.bot_delay_seconds

    results: list[ActionResult] = []
    if delay <= 0:
        results = session.play_bots(max_steps)
    else:
        while len(results) < max_steps:
            step = session.play_bots(1)
            if not step:
                break
            results.extend(step)
            if not step[0].accepted:
                break
            await asyncio.sleep(delay)

    rejected = sum(1 for result in results if not result.accepted)
    return BotPlayResponse(steps=len(results), rejected=rejected, game=_detail(slot, session))


@router.post("/games/{slot}/save", response_model=SaveResponse)
async def save_game(slot: str, state: ApiStateDep) -> SaveResponse:
    try:
        path = state.sessions.save(slot)
    except FileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return SaveResponse(slot=slot, path=str(path))


@router.post("/games/{slot}/load", response_model=GameDetail)
async def load_game(slot: str, state: ApiStateDep) -> GameDetail:
    try:
        session = state.sessions.load(slot)
    except FileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="game not found") from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _detail(slot, session)


@router.get("/games/{slot}/auction/clock", response_model=ClockStatusResponse)
async def get_auction_clock(slot: str, state: ApiStateDep) -> ClockStatusResponse:
    session = _session_or_404(state, slot)
    return _clock_status(state, slot, session)


@router.post("/games/{slot}/auction/clock", response_model=ClockStatusResponse)
async def update_auction_clock(
    slot: str, request: ClockRequest, state: ApiStateDep
) -> ClockStatusResponse:
    session = _session_or_404(state, slot)
    if request.interval_seconds is not None:
        state.clock.set_interval(request.interval_seconds)
    await state.clock.set_enabled(slot, request.enabled)
    return _clock_status(state, slot, session)


def _clock_status(state: ApiState, slot: str, session: GameSession) -> ClockStatusResponse:
    current = session.state.auction
    return ClockStatusResponse(
        enabled=state.clock.is_enabled(slot),
        interval_seconds=state.clock.interval_seconds,
        auction_id=int(current.id) if current is not None else None,
    )

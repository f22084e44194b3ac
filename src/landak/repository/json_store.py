"""JSON-based repository for Landak save slots."""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import TypeAdapter

from landak.domain import models as dm

_SLOT_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


class JsonGameRepository:
    """Persist whole game states as JSON documents, one per save slot."""

    def __init__(self, base_path: Path) -> None:
        self.base_path = base_path
        self.base_path.mkdir(parents=True, exist_ok=True)
        self._adapter: TypeAdapter[dm.GameState] = TypeAdapter(dm.GameState)

    def _path_for(self, slot: str) -> Path:
        if not _SLOT_PATTERN.match(slot):
            raise ValueError(f"invalid save slot name: {slot!r}")
        return self.base_path / f"game_{slot}.json"

    def save(self, state: dm.GameState, slot: str) -> Path:
        """Serialize a game state to disk and return the snapshot path."""

        path = self._path_for(slot)
        payload = self._adapter.dump_json(state, indent=2)
        path.write_bytes(payload)
        return path

    def load(self, slot: str) -> dm.GameState:
        """Load a previously saved game state."""

        path = self._path_for(slot)
        data = path.read_bytes()
        return self._adapter.validate_json(data)

    def list_slots(self) -> list[str]:
        """Return every save slot currently persisted in the repository."""

        prefix = "game_"
        suffix = ".json"
        slots: list[str] = []
        for path in self.base_path.glob("game_*.json"):
            name = path.name
            raw = name[len(prefix) : -len(suffix)]
            if _SLOT_PATTERN.match(raw):
                slots.append(raw)
        return sorted(slots)

    def delete(self, slot: str) -> None:
        """Remove a save slot if it exists."""

        path = self._path_for(slot)
        if path.exists():
            path.unlink()

"""Persistence adapters for Landak game states."""

from landak.repository.json_store import JsonGameRepository

__all__ = ["JsonGameRepository"]

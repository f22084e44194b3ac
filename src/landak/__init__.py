"""Landak: an economic board game engine with rotating governments."""

__version__ = "0.1.0"

"""Multiplayer grid bomb game: TCP server, game rules and pygame client."""

__version__ = "0.1.0"
"""The server's game record and board construction."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from bombgrid.protocol import HEIGHT, MAX_PLAYERS, WIDTH, ObjectType

if TYPE_CHECKING:
    from bombgrid.player import Player


def board_index(x: int, y: int) -> int:
    """Index of tile (x, y) in the flat board list."""
    return y * HEIGHT + x


def create_board() -> list[int]:
    """Build an empty board with walls on every tile whose coordinates are both odd."""
    board = [int(ObjectType.EMPTY)] * (WIDTH * HEIGHT)
    for y in range(1, HEIGHT, 2):
        for x in range(1, WIDTH, 2):
            board[board_index(x, y)] = int(ObjectType.WALL)
    return board


def _no_players() -> list:
    return [None] * MAX_PLAYERS


@dataclass
class Game:
    """Running game: player slots, board, pending bombs and end flag."""

    players: list[Player | None] = field(default_factory=_no_players)
    board: list[int] = field(default_factory=create_board)
    bombs: deque = field(default_factory=deque)
    alive_players_count: int = 0
    is_end: bool = False
"""Server-side player records and their starting positions."""

from __future__ import annotations

import queue
import socket
import threading
from dataclasses import dataclass

from bombgrid.protocol import HEIGHT, WIDTH

PLAYER_SPEED = 150  # minimum milliseconds between moves
START_HEALTH = 3
MAX_BOMBS = 5
START_BOMB_RANGE = 3


@dataclass(eq=False)
class Player:
    """A connected player with its position, stats and connection."""

    id: int
    x: int
    y: int
    health: int = START_HEALTH
    bombs_count: int = MAX_BOMBS
    bombs_range: int = START_BOMB_RANGE
    last_move: int = 0
    sock: socket.socket | None = None
    thread: threading.Thread | None = None
    queue: queue.Queue | None = None


def start_x(player_number: int) -> int:
    """Players 1 and 3 start on the left, 2 and 4 on the right."""
    return 0 if player_number in (1, 3) else WIDTH - 1


def start_y(player_number: int) -> int:
    """Players 1 and 4 start at the top, 2 and 3 at the bottom."""
    return 0 if player_number in (1, 4) else HEIGHT - 1


def create_player(player_id: int) -> Player:
    """Create a player not yet connected, placed at its starting corner."""
    return Player(id=player_id, x=start_x(player_id), y=start_y(player_id))
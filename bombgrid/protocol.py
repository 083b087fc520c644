"""Shared game constants, enumerations and the wire format used by server and client."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum

MAX_PLAYERS = 4
FRAME_DURATION = 16666  # microseconds per frame
WIDTH = 17
HEIGHT = 17
DEFAULT_PORT = 12345

_INT = "<i"
MESSAGE_SIZE = struct.calcsize(_INT)
_STATE_FORMAT = "<" + "i" * (MAX_PLAYERS * 3 + WIDTH * HEIGHT + 1)
GAME_STATE_SIZE = struct.calcsize(_STATE_FORMAT)


class Color(IntEnum):
    """Colours of players and board objects."""

    RED = 0
    BLUE = 1
    GREEN = 2
    YELLOW = 3
    BROWN = 4
    PURPLE = 5
    DARKBLUE = 6
    BLACK = 7
    WHITE = 8


class Action(IntEnum):
    """Actions a player can request from the keyboard."""

    NONE = 0
    UP = 1
    DOWN = 2
    RIGHT = 3
    LEFT = 4
    PLACE_BOMB = 5


class ObjectType(IntEnum):
    """Objects stored on the game board."""

    EMPTY = 0
    WALL = 1
    CHEST = 2
    BOMB = 3
    BONUS = 4


class MessageType(IntEnum):
    """Messages exchanged between clients and the server."""

    NONE = 0
    MOVE_UP = 1
    MOVE_DOWN = 2
    MOVE_RIGHT = 3
    MOVE_LEFT = 4
    PLACE_BOMB = 5
    DISCONNECT = 6
    START_GAME = 7


@dataclass(frozen=True)
class PlayerState:
    """Position and colour of one player as seen by clients; -1 everywhere means absent."""

    x: int = -1
    y: int = -1
    color: int = -1

    @property
    def present(self) -> bool:
        return not (self.x == -1 and self.y == -1 and self.color == -1)


def _absent_players() -> list[PlayerState]:
    return [PlayerState() for _ in range(MAX_PLAYERS)]


def _empty_board() -> list[int]:
    return [int(ObjectType.EMPTY)] * (WIDTH * HEIGHT)


@dataclass
class GameState:
    """Snapshot of the game sent from the server to every client each frame."""

    players: list[PlayerState] = field(default_factory=_absent_players)
    board: list[int] = field(default_factory=_empty_board)
    is_end: bool = False

    def to_bytes(self) -> bytes:
        """Encode the snapshot in its fixed-size binary form."""
        if len(self.players) != MAX_PLAYERS:
            raise ValueError(f"expected {MAX_PLAYERS} players, got {len(self.players)}")
        if len(self.board) != WIDTH * HEIGHT:
            raise ValueError(f"expected {WIDTH * HEIGHT} board tiles, got {len(self.board)}")
        values = [v for p in self.players for v in (p.x, p.y, int(p.color))]
        values.extend(int(tile) for tile in self.board)
        values.append(int(bool(self.is_end)))
        return struct.pack(_STATE_FORMAT, *values)

    @classmethod
    def from_bytes(cls, data: bytes) -> GameState:
        """Decode a snapshot produced by :meth:`to_bytes`."""
        if len(data) != GAME_STATE_SIZE:
            raise ValueError(f"expected {GAME_STATE_SIZE} bytes, got {len(data)}")
        values = struct.unpack(_STATE_FORMAT, data)
        split = MAX_PLAYERS * 3
        players = [PlayerState(*values[i:i + 3]) for i in range(0, split, 3)]
        board = list(values[split:split + WIDTH * HEIGHT])
        return cls(players=players, board=board, is_end=bool(values[-1]))


def encode_message(message: MessageType) -> bytes:
    """Encode a single protocol message."""
    return struct.pack(_INT, int(MessageType(message)))


def decode_message(data: bytes) -> MessageType:
    """Decode a single protocol message; raises ValueError on bad input."""
    if len(data) != MESSAGE_SIZE:
        raise ValueError(f"expected {MESSAGE_SIZE} bytes, got {len(data)}")
    (value,) = struct.unpack(_INT, data)
    return MessageType(value)
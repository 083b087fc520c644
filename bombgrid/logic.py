"""Game rules: movement checks, task resolution, bombs and explosions."""

from __future__ import annotations

import queue
import random
import socket
from dataclasses import dataclass
from typing import TYPE_CHECKING

from bombgrid.game import board_index
from bombgrid.network import Task, disconnect_player
from bombgrid.player import PLAYER_SPEED
from bombgrid.protocol import HEIGHT, WIDTH, MessageType, ObjectType

if TYPE_CHECKING:
    from bombgrid.game import Game
    from bombgrid.player import Player

BOMB_IGNITION_DELAY = 3000  # milliseconds from placing to exploding
BOMB_COOLDOWN = 2500  # milliseconds between bomb refills

_STEPS = {
    MessageType.MOVE_UP: (0, -1),
    MessageType.MOVE_DOWN: (0, 1),
    MessageType.MOVE_RIGHT: (1, 0),
    MessageType.MOVE_LEFT: (-1, 0),
}

_DIRECTIONS = ((0, -1), (0, 1), (-1, 0), (1, 0))


@dataclass
class Bomb:
    """A placed bomb waiting to explode."""

    x: int
    y: int
    range: int
    placed_time: int


def _rng(rng):
    return random if rng is None else rng


def is_tile_empty(game: Game, x: int, y: int) -> bool:
    """True if the board holds nothing at (x, y)."""
    return game.board[board_index(x, y)] == ObjectType.EMPTY


def is_tile_bonus(game: Game, x: int, y: int) -> bool:
    """True if the board holds a bonus at (x, y)."""
    return game.board[board_index(x, y)] == ObjectType.BONUS


def is_tile_player(game: Game, x: int, y: int) -> bool:
    """True if any player in the game stands at (x, y)."""
    return any(p is not None and p.x == x and p.y == y for p in game.players)


def check_move(game: Game, x: int, y: int) -> bool:
    """True if a player may step onto (x, y)."""
    if not (0 <= x < WIDTH and 0 <= y < HEIGHT):
        return False
    return (is_tile_empty(game, x, y) and not is_tile_player(game, x, y)) or is_tile_bonus(
        game, x, y
    )


def board_as_buckets() -> list[list[Task]]:
    """One empty list of pending tasks for every tile of the board."""
    return [[] for _ in range(WIDTH * HEIGHT)]


def process_task_queue(tasks: queue.Queue, game: Game, now: int) -> list[list[Task]]:
    """Drain the task queue and sort the valid tasks by the tile they affect."""
    buckets = board_as_buckets()
    while True:
        try:
            task = tasks.get_nowait()
        except queue.Empty:
            break
        player = game.players[task.player_id - 1]
        if player is None:
            continue

        x, y = player.x, player.y
        if task.type == MessageType.NONE:
            continue
        if task.type == MessageType.DISCONNECT:
            disconnect_player(game, task.player_id)
            continue
        if task.type == MessageType.PLACE_BOMB:
            if player.bombs_count > 0 and is_tile_empty(game, x, y):
                buckets[board_index(x, y)].append(task)
            continue

        dx, dy = _STEPS.get(task.type, (0, 0))
        x, y = x + dx, y + dy
        if now - player.last_move >= PLAYER_SPEED and check_move(game, x, y):
            buckets[board_index(x, y)].append(task)
    return buckets


def execute_task(game: Game, task: Task, now: int) -> None:
    """Apply one accepted task to its player."""
    player = game.players[task.player_id - 1]
    if player is None:
        return
    if task.type in _STEPS:
        dx, dy = _STEPS[task.type]
        player.x += dx
        player.y += dy
        player.last_move = now
    elif task.type == MessageType.PLACE_BOMB:
        place_bomb(game, player, now)


def do_tasks(tasks: queue.Queue, game: Game, now: int, rng=None) -> None:
    """Resolve all queued tasks, executing one randomly chosen task per tile."""
    rng = _rng(rng)
    for bucket in process_task_queue(tasks, game, now):
        if bucket:
            execute_task(game, bucket[rng.randrange(len(bucket))], now)


def place_bomb(game: Game, player: Player, now: int) -> Bomb:
    """Put a bomb under the player and queue it for explosion."""
    bomb = Bomb(x=player.x, y=player.y, range=player.bombs_range, placed_time=now)
    player.bombs_count -= 1
    game.board[board_index(bomb.x, bomb.y)] = int(ObjectType.BOMB)
    game.bombs.append(bomb)
    return bomb


def explode(game: Game, bomb: Bomb, rng=None) -> list[Player]:
    """Detonate a bomb, hurting players in range; returns the players killed."""
    killed = players_in_explosion_range(game, bomb, rng)
    game.board[board_index(bomb.x, bomb.y)] = int(ObjectType.EMPTY)
    return killed


def process_bomb_queue(game: Game, now: int, rng=None) -> None:
    """Explode every bomb whose ignition delay has passed, oldest first."""
    while game.bombs and now - game.bombs[0].placed_time >= BOMB_IGNITION_DELAY:
        explode(game, game.bombs.popleft(), rng)


def is_player_in_range(game: Game, player: Player, bomb: Bomb) -> bool:
    """True if the player stands on the bomb or in its unobstructed blast lines."""
    if player.x == bomb.x and player.y == bomb.y:
        return True
    for dx, dy in _DIRECTIONS:
        for step in range(1, bomb.range + 1):
            x, y = bomb.x + dx * step, bomb.y + dy * step
            if not (0 <= x < WIDTH and 0 <= y < HEIGHT):
                break
            if game.board[board_index(x, y)] != ObjectType.EMPTY:
                break
            if player.x == x and player.y == y:
                return True
    return False


def _drop_connection(player: Player) -> None:
    if player.sock is None:
        return
    try:
        player.sock.shutdown(socket.SHUT_RDWR)
    except OSError:
        pass


def players_in_explosion_range(game: Game, bomb: Bomb, rng=None) -> list[Player]:
    """Hurt every player hit by the bomb and cut off those left without health.

    If every alive player would die at once, one of them, chosen at random, survives.
    Returns the players whose connections were cut.
    """
    hit = [p for p in game.players if p is not None and is_player_in_range(game, p, bomb)]
    to_kill = []
    for player in hit:
        player.health -= 1
        if player.health == 0:
            to_kill.append(player)

    if to_kill and game.alive_players_count == len(to_kill):
        del to_kill[_rng(rng).randrange(len(to_kill))]

    for player in to_kill:
        _drop_connection(player)
    return to_kill
"""The game server: accepts players and runs the main game loop."""

from __future__ import annotations

import argparse
import queue
import socket
import time

from bombgrid.game import Game
from bombgrid.logic import BOMB_COOLDOWN, do_tasks, process_bomb_queue
from bombgrid.network import connect_player, init_socket
from bombgrid.player import MAX_BOMBS, Player, create_player
from bombgrid.protocol import (
    DEFAULT_PORT,
    FRAME_DURATION,
    MAX_PLAYERS,
    GameState,
    MessageType,
    PlayerState,
    encode_message,
)


def init_players(
    task_queue: queue.Queue, players_count: int, server_socket: socket.socket
) -> list[Player | None]:
    """Create and connect the first players_count players; other slots stay empty."""
    players: list[Player | None] = [None] * MAX_PLAYERS
    for index in range(min(players_count, MAX_PLAYERS)):
        player = create_player(index + 1)
        connect_player(player, task_queue, server_socket)
        players[index] = player
    return players


def build_game_state(game: Game) -> GameState:
    """Snapshot of the game as clients see it."""
    players = [
        PlayerState(x=p.x, y=p.y, color=p.id - 1) if p is not None else PlayerState()
        for p in game.players
    ]
    return GameState(players=players, board=list(game.board), is_end=game.is_end)


def _broadcast(game: Game, data: bytes) -> None:
    for player in game.players:
        if player is None or player.sock is None:
            continue
        try:
            player.sock.sendall(data)
        except OSError:
            pass


def send_game_state(game: Game) -> None:
    """Send the current game snapshot to every connected player."""
    _broadcast(game, build_game_state(game).to_bytes())


def send_start_game(game: Game) -> None:
    """Tell every connected player that the game has started."""
    _broadcast(game, encode_message(MessageType.START_GAME))


def add_bombs_to_players(game: Game, last_add_time: int, now: int) -> int:
    """Give each player one bomb back once the cooldown has passed.

    Returns the time of the latest refill.
    """
    if now - last_add_time < BOMB_COOLDOWN:
        return last_add_time
    for player in game.players:
        if player is not None and player.bombs_count < MAX_BOMBS:
            player.bombs_count += 1
    return now


def _now_ms() -> int:
    return time.monotonic_ns() // 1_000_000


def run_server(players_count: int = 2, port: int = DEFAULT_PORT) -> None:
    """Wait for the players, then run the game loop until the game ends."""
    server_socket = init_socket(players_count, port)
    task_queue: queue.Queue = queue.Queue()
    game = Game(alive_players_count=players_count)
    try:
        game.players = init_players(task_queue, players_count, server_socket)
        send_start_game(game)
        last_add_time = 0
        while not game.is_end:
            now = _now_ms()
            send_game_state(game)
            do_tasks(task_queue, game, now)
            process_bomb_queue(game, now)
            last_add_time = add_bombs_to_players(game, last_add_time, now)
            time.sleep(FRAME_DURATION / 1_000_000)
    finally:
        server_socket.close()
        for player in game.players:
            if player is not None and player.sock is not None:
                player.sock.close()


def main(argv=None) -> int:
    """Command-line entry point for the server."""
    parser = argparse.ArgumentParser(description="Run the game server.")
    parser.add_argument(
        "--players",
        type=int,
        default=2,
        choices=range(1, MAX_PLAYERS + 1),
        help="number of players to wait for",
    )
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="TCP port to listen on")
    args = parser.parse_args(argv)
    try:
        run_server(args.players, args.port)
    except KeyboardInterrupt:
        pass
    return 0
"""Server networking: listening socket, player connections and task reception."""

from __future__ import annotations

import queue
import socket
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

from bombgrid.protocol import DEFAULT_PORT, MESSAGE_SIZE, MessageType, decode_message

if TYPE_CHECKING:
    from bombgrid.game import Game
    from bombgrid.player import Player


@dataclass(frozen=True)
class Task:
    """A message received from one player, waiting to be applied."""

    player_id: int
    type: MessageType


def _recv_exact(sock: socket.socket, size: int) -> bytes | None:
    chunks = bytearray()
    while len(chunks) < size:
        try:
            chunk = sock.recv(size - len(chunks))
        except OSError:
            return None
        if not chunk:
            return None
        chunks.extend(chunk)
    return bytes(chunks)


def receive_tasks(player: Player) -> None:
    """Read messages from the player's socket into its task queue until it disconnects."""
    while True:
        data = _recv_exact(player.sock, MESSAGE_SIZE)
        if data is None:
            player.queue.put(Task(player.id, MessageType.DISCONNECT))
            print(f"Lost connection with player {player.id}")
            return
        try:
            message = decode_message(data)
        except ValueError:
            message = MessageType.NONE
        player.queue.put(Task(player.id, message))


def connect_player(player: Player, task_queue: queue.Queue, server_socket: socket.socket) -> None:
    """Accept one connection for the player and start a thread receiving its tasks."""
    sock, _ = server_socket.accept()
    player.sock = sock
    player.queue = task_queue
    player.thread = threading.Thread(
        target=receive_tasks, args=(player,), name=f"player-{player.id}", daemon=True
    )
    try:
        player.thread.start()
    except RuntimeError:
        sock.close()
        player.sock = None
        player.thread = None
        raise
    print(f"Player {player.id} has connected")


def disconnect_player(game: Game, player_id: int) -> None:
    """Remove a player from the game, close its connection and wait for its thread."""
    index = player_id - 1
    player = game.players[index]
    if player is None:
        raise LookupError(f"player {player_id} is not in the game")
    game.players[index] = None
    if player.sock is not None:
        try:
            player.sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        player.sock.close()
    if player.thread is not None and player.thread is not threading.current_thread():
        player.thread.join()


def init_socket(players_count: int, port: int = DEFAULT_PORT) -> socket.socket:
    """Open a TCP socket listening on all interfaces for the given number of players."""
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        server.bind(("", port))
        server.listen(players_count)
    except OSError:
        server.close()
        raise
    return server
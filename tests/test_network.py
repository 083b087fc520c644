import queue
import socket

import pytest

from bombgrid.game import Game
from bombgrid.network import (
    Task,
    connect_player,
    disconnect_player,
    init_socket,
    receive_tasks,
)
from bombgrid.player import create_player
from bombgrid.protocol import MessageType, encode_message


def _drain(task_queue):
    items = []
    while not task_queue.empty():
        items.append(task_queue.get_nowait())
    return items


def test_receive_tasks_reads_until_disconnect():
    server_end, client_end = socket.socketpair()
    player = create_player(2)
    player.sock = server_end
    player.queue = queue.Queue()
    client_end.sendall(encode_message(MessageType.MOVE_UP) + encode_message(MessageType.PLACE_BOMB))
    client_end.close()
    receive_tasks(player)
    server_end.close()
    assert _drain(player.queue) == [
        Task(2, MessageType.MOVE_UP),
        Task(2, MessageType.PLACE_BOMB),
        Task(2, MessageType.DISCONNECT),
    ]


def test_receive_tasks_maps_unknown_values_to_none():
    server_end, client_end = socket.socketpair()
    player = create_player(1)
    player.sock = server_end
    player.queue = queue.Queue()
    client_end.sendall(b"\x63\x00\x00\x00")
    client_end.close()
    receive_tasks(player)
    server_end.close()
    assert _drain(player.queue) == [Task(1, MessageType.NONE), Task(1, MessageType.DISCONNECT)]


def test_receive_tasks_partial_message_is_disconnect():
    server_end, client_end = socket.socketpair()
    player = create_player(1)
    player.sock = server_end
    player.queue = queue.Queue()
    client_end.sendall(b"\x01\x00")
    client_end.close()
    receive_tasks(player)
    server_end.close()
    assert _drain(player.queue) == [Task(1, MessageType.DISCONNECT)]


def test_connect_and_disconnect_player():
    server = init_socket(2, 0)
    try:
        port = server.getsockname()[1]
        client = socket.create_connection(("127.0.0.1", port), timeout=5)
        task_queue = queue.Queue()
        player = create_player(1)
        connect_player(player, task_queue, server)
        client.sendall(encode_message(MessageType.MOVE_RIGHT))
        assert task_queue.get(timeout=5) == Task(1, MessageType.MOVE_RIGHT)

        game = Game(players=[player, None, None, None], alive_players_count=1)
        disconnect_player(game, 1)
        assert game.players[0] is None
        assert not player.thread.is_alive()
        assert task_queue.get(timeout=5) == Task(1, MessageType.DISCONNECT)
        client.close()
    finally:
        server.close()


def test_disconnect_missing_player_raises():
    with pytest.raises(LookupError):
        disconnect_player(Game(), 3)


def test_init_socket_listens():
    server = init_socket(1, 0)
    try:
        assert server.getsockname()[1] > 0
        assert server.getsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR) != 0
    finally:
        server.close()
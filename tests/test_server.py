import queue
import socket

import pytest

from bombgrid.game import Game
from bombgrid.logic import BOMB_COOLDOWN
from bombgrid.network import init_socket
from bombgrid.player import MAX_BOMBS, Player, create_player
from bombgrid.protocol import (
    GAME_STATE_SIZE,
    MAX_PLAYERS,
    MESSAGE_SIZE,
    Color,
    GameState,
    MessageType,
    PlayerState,
    decode_message,
)
from bombgrid.server import (
    add_bombs_to_players,
    build_game_state,
    init_players,
    main,
    send_game_state,
    send_start_game,
)


def recv_exact(sock, size):
    sock.settimeout(5)
    data = bytearray()
    while len(data) < size:
        chunk = sock.recv(size - len(data))
        assert chunk
        data.extend(chunk)
    return bytes(data)


def test_build_game_state():
    game = Game()
    game.players[0] = create_player(1)
    game.players[3] = create_player(4)
    state = build_game_state(game)
    p1, p4 = game.players[0], game.players[3]
    assert state.players[0] == PlayerState(p1.x, p1.y, Color.RED)
    assert state.players[3] == PlayerState(p4.x, p4.y, Color.YELLOW)
    assert state.players[1] == PlayerState(-1, -1, -1)
    assert state.board == game.board
    assert state.is_end is False
    state.board[0] = 99
    assert game.board[0] != 99


def test_add_bombs_after_cooldown():
    game = Game()
    low = Player(id=1, x=0, y=0, bombs_count=2)
    full = Player(id=2, x=1, y=0, bombs_count=MAX_BOMBS)
    game.players[0], game.players[1] = low, full
    assert add_bombs_to_players(game, 0, BOMB_COOLDOWN) == BOMB_COOLDOWN
    assert low.bombs_count == 3
    assert full.bombs_count == MAX_BOMBS


def test_add_bombs_before_cooldown():
    game = Game()
    low = Player(id=1, x=0, y=0, bombs_count=2)
    game.players[0] = low
    assert add_bombs_to_players(game, 100, 100 + BOMB_COOLDOWN - 1) == 100
    assert low.bombs_count == 2


def test_send_start_game():
    a, b = socket.socketpair()
    try:
        game = Game()
        game.players[0] = Player(id=1, x=0, y=0, sock=a)
        send_start_game(game)
        assert decode_message(recv_exact(b, MESSAGE_SIZE)) == MessageType.START_GAME
    finally:
        a.close()
        b.close()


def test_send_game_state_round_trip_and_survives_dead_peer():
    a1, b1 = socket.socketpair()
    a2, b2 = socket.socketpair()
    try:
        b2.close()
        game = Game()
        game.players[0] = Player(id=1, x=3, y=4, sock=a1)
        game.players[1] = Player(id=2, x=5, y=6, sock=a2)
        send_game_state(game)
        send_game_state(game)
        received = GameState.from_bytes(recv_exact(b1, GAME_STATE_SIZE))
        assert received == build_game_state(game)
    finally:
        for s in (a1, b1, a2):
            s.close()


def test_init_players_connects_and_reports_disconnects():
    server = init_socket(2, 0)
    port = server.getsockname()[1]
    clients = [socket.create_connection(("127.0.0.1", port)) for _ in range(2)]
    tasks = queue.Queue()
    try:
        players = init_players(tasks, 2, server)
        assert len(players) == MAX_PLAYERS
        assert [p.id for p in players[:2]] == [1, 2]
        assert players[2:] == [None, None]
        for c in clients:
            c.close()
        got = {tasks.get(timeout=5) for _ in range(2)}
        assert {t.player_id for t in got} == {1, 2}
        assert {t.type for t in got} == {MessageType.DISCONNECT}
    finally:
        for c in clients:
            c.close()
        server.close()


@pytest.mark.parametrize("argv", [["--players", "0"], ["--players", "abc"]])
def test_main_rejects_bad_arguments(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    assert exc.value.code == 2
"""The game client: connects to the server, shows the game and sends the player's actions."""

from __future__ import annotations

import argparse
import socket
import sys
import threading
import time

from bombgrid.protocol import (
    DEFAULT_PORT,
    FRAME_DURATION,
    GAME_STATE_SIZE,
    MESSAGE_SIZE,
    Action,
    GameState,
    MessageType,
    decode_message,
    encode_message,
)

DEFAULT_HOST = "127.0.0.1"

_ACTION_MESSAGES = {
    Action.NONE: MessageType.NONE,
    Action.UP: MessageType.MOVE_UP,
    Action.DOWN: MessageType.MOVE_DOWN,
    Action.RIGHT: MessageType.MOVE_RIGHT,
    Action.LEFT: MessageType.MOVE_LEFT,
    Action.PLACE_BOMB: MessageType.PLACE_BOMB,
}


def _recv_exact(sock: socket.socket, size: int) -> bytes | None:
    data = bytearray()
    while len(data) < size:
        try:
            chunk = sock.recv(size - len(data))
        except OSError:
            return None
        if not chunk:
            return None
        data.extend(chunk)
    return bytes(data)


def connect_to_server(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> socket.socket:
    """Open a TCP connection to the game server."""
    return socket.create_connection((host, port))


def action_to_message(action: Action) -> MessageType:
    """Protocol message that asks the server for the given action."""
    return _ACTION_MESSAGES[Action(action)]


def send_action(sock: socket.socket, action: Action) -> None:
    """Send the message for one action to the server."""
    sock.sendall(encode_message(action_to_message(action)))


def wait_for_start(sock: socket.socket) -> None:
    """Block until the server starts the game; raises ConnectionError otherwise."""
    data = _recv_exact(sock, MESSAGE_SIZE)
    if data is None:
        raise ConnectionError("connection closed before the game started")
    try:
        message = decode_message(data)
    except ValueError as exc:
        raise ConnectionError("invalid start message from server") from exc
    if message != MessageType.START_GAME:
        raise ConnectionError(f"expected start of game, got {message.name}")


class StateReceiver:
    """Keeps the most recent game snapshot received from the server."""

    def __init__(self, sock: socket.socket) -> None:
        self._sock = sock
        self._lock = threading.Lock()
        self._state = GameState()
        self.connected = True

    def run(self) -> None:
        """Receive snapshots until the connection ends."""
        while True:
            data = _recv_exact(self._sock, GAME_STATE_SIZE)
            if data is None:
                break
            try:
                state = GameState.from_bytes(data)
            except ValueError:
                continue
            with self._lock:
                self._state = state
        self.connected = False
        print("Connection with the server was lost.")

    def latest(self) -> GameState:
        """The most recently received snapshot."""
        with self._lock:
            return self._state


def run_client(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    """Connect, wait for the game to start, then play until it ends or the window closes."""
    from bombgrid.renderer import Renderer

    sock = connect_to_server(host, port)
    try:
        wait_for_start(sock)
        receiver = StateReceiver(sock)
        thread = threading.Thread(target=receiver.run, name="state-receiver", daemon=True)
        thread.start()
        try:
            with Renderer() as renderer:
                while not receiver.latest().is_end:
                    if renderer.quit_requested():
                        break
                    renderer.render(receiver.latest())
                    send_action(sock, renderer.get_action())
                    time.sleep(FRAME_DURATION / 1_000_000)
        finally:
            try:
                sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            thread.join()
    finally:
        sock.close()


def main(argv=None) -> int:
    """Command-line entry point for the client."""
    parser = argparse.ArgumentParser(description="Join a game server.")
    parser.add_argument("--host", default=DEFAULT_HOST, help="server address")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="server TCP port")
    args = parser.parse_args(argv)
    try:
        run_client(args.host, args.port)
    except (OSError, ConnectionError) as exc:
        print(f"Client error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        pass
    return 0
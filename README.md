# bombgrid

A small multiplayer bomb game played on a 17×17 grid. One process runs the
game server. Each player runs a client that draws the board in a pygame
window and sends key presses to the server over TCP.

## Installing

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Playing

Start the server first. It waits until every player has connected, then sends
each of them the start signal:

```
bombgrid-server
```

Then start one client per player, each in its own terminal:

```
bombgrid-client
```

### Command-line options

`bombgrid-server`:

| Option      | Default | Meaning                                |
|-------------|---------|----------------------------------------|
| `--players` | 2       | number of players to wait for (1 to 4) |
| `--port`    | 12345   | TCP port to listen on                  |

`bombgrid-client`:

| Option   | Default     | Meaning             |
|----------|-------------|---------------------|
| `--host` | `127.0.0.1` | server address      |
| `--port` | 12345       | server TCP port     |

The client exits with status 1 and prints an error if it cannot connect or
the server does not start the game. Closing the window ends the client.

### Controls

| Key   | Action       |
|-------|--------------|
| W     | move up      |
| S     | move down    |
| A     | move left    |
| D     | move right   |
| Space | place a bomb |

Placing a bomb takes priority over moving. Pressing more than one movement
key at the same time does nothing.

## Rules

- The board has a wall on every tile whose column and row are both odd.
- Players start in the corners: player 1 top left, player 2 bottom right,
  player 3 bottom left, player 4 top right. Each has 3 health, 5 bombs and a
  bomb range of 3 tiles.
- A player can move at most once every 150 ms. Walls, chests, bombs and other
  players block movement. If several moves aim at the same tile in one frame,
  one of them, chosen at random, is carried out.
- A bomb is placed on the tile the player stands on, only if that tile is
  empty and the player has a bomb left.
- A bomb explodes 3 seconds after it is placed. The blast goes out up to its
  range in four directions and stops at the edge of the board or at the
  first tile that is not empty. Each player on the bomb or in the blast loses
  one health.
- A player whose health reaches zero has its connection cut; the server then
  removes it from the game.
- Every 2.5 seconds each player gets one bomb back, up to 5.
- If one blast would kill as many players as the game started with, one of
  them, chosen at random, survives.

## Using it as a library

The game rules work without a network connection:

```python
import random
from queue import SimpleQueue

from bombgrid.game import Game, create_board
from bombgrid.player import create_player
from bombgrid.network import Task
from bombgrid.protocol import MessageType
from bombgrid.logic import do_tasks, process_bomb_queue

game = Game(players=[create_player(1), create_player(2), None, None],
            board=create_board(), alive_players_count=2)
tasks = SimpleQueue()
tasks.put(Task(player_id=1, type=MessageType.MOVE_DOWN))

rng = random.Random(0)
do_tasks(tasks, game, now=1000, rng=rng)
process_bomb_queue(game, now=1000, rng=rng)
```

The modules:

- `bombgrid.protocol` — constants, the `Color`, `Action`, `ObjectType` and
  `MessageType` enumerations, `PlayerState`, and `GameState`, whose
  `to_bytes` / `from_bytes` convert the snapshot sent to clients to and from
  its wire format; `encode_message` / `decode_message` do the same for
  single messages.
- `bombgrid.player` — `Player`, `create_player`, `start_x`, `start_y`.
- `bombgrid.game` — `Game`, `create_board`, `board_index`.
- `bombgrid.logic` — `Bomb`, movement checks, `do_tasks`, `place_bomb`,
  `explode`, `process_bomb_queue` and blast range checks.
- `bombgrid.network` — `Task`, `init_socket`, `connect_player`,
  `disconnect_player`, `receive_tasks`.
- `bombgrid.server` — `run_server`, `build_game_state`,
  `add_bombs_to_players` and the `bombgrid-server` entry point.
- `bombgrid.renderer` — `Renderer` (the pygame window), `tile_color`,
  `action_from_keys`.
- `bombgrid.client` — `run_client`, `StateReceiver`, `wait_for_start`,
  `send_action` and the `bombgrid-client` entry point.

## What it does not do

- The game never ends on its own: no winner is declared, and the server runs
  until it is interrupted (Ctrl+C).
- Chests and bonuses exist as board objects, but nothing places them on the
  board, and blasts destroy nothing.
- The client draws only the board and the players; there is no score, health
  display, menu or sound.
"""Window drawing of the game board and keyboard input for the client."""

from __future__ import annotations

import pygame

from bombgrid.game import board_index
from bombgrid.protocol import HEIGHT, WIDTH, Action, Color, GameState, ObjectType

SIZE = 20  # pixels per board tile
WIN_WIDTH = 900
WIN_HEIGHT = 600
WINDOW_TITLE = "Bomberman 2D"

COLORS: dict[Color, tuple[int, int, int, int]] = {
    Color.RED: (220, 20, 60, 255),
    Color.BLUE: (30, 144, 255, 255),
    Color.GREEN: (34, 139, 34, 255),
    Color.YELLOW: (255, 215, 0, 255),
    Color.BROWN: (139, 69, 19, 255),
    Color.PURPLE: (128, 0, 128, 255),
    Color.DARKBLUE: (0, 0, 139, 255),
    Color.BLACK: (20, 20, 20, 255),
    Color.WHITE: (255, 255, 255, 255),
}

_OBJECT_COLORS = {
    ObjectType.EMPTY: Color.WHITE,
    ObjectType.WALL: Color.BLACK,
    ObjectType.CHEST: Color.BROWN,
    ObjectType.BONUS: Color.PURPLE,
    ObjectType.BOMB: Color.DARKBLUE,
}


def tile_color(game_state: GameState, x: int, y: int) -> Color:
    """Colour of tile (x, y): the first player standing there, else the board object."""
    for player in game_state.players:
        if player.x == x and player.y == y:
            return Color(player.color)
    return _OBJECT_COLORS[ObjectType(game_state.board[board_index(x, y)])]


def action_from_keys(space: bool, up: bool, down: bool, right: bool, left: bool) -> Action:
    """Action for the pressed keys; a bomb wins over movement, and only one direction counts."""
    if space:
        return Action.PLACE_BOMB
    pressed = [key for key in (up, down, right, left) if key]
    if len(pressed) != 1:
        return Action.NONE
    if up:
        return Action.UP
    if down:
        return Action.DOWN
    if right:
        return Action.RIGHT
    return Action.LEFT


class Renderer:
    """A game window that draws snapshots and reads the keyboard."""

    def __init__(self) -> None:
        pygame.display.init()
        try:
            self.surface = pygame.display.set_mode((WIN_WIDTH, WIN_HEIGHT))
        except pygame.error:
            pygame.quit()
            raise
        pygame.display.set_caption(WINDOW_TITLE)

    def render(self, game_state: GameState) -> None:
        """Draw one snapshot of the game and show it."""
        self.surface.fill(COLORS[Color.BLACK])
        for y in range(HEIGHT):
            for x in range(WIDTH):
                color = COLORS[tile_color(game_state, x, y)]
                self.surface.fill(color, pygame.Rect(x * SIZE, y * SIZE, SIZE, SIZE))
        pygame.display.flip()

    def get_action(self) -> Action:
        """Action requested by the keys held down right now."""
        keys = pygame.key.get_pressed()
        return action_from_keys(
            bool(keys[pygame.K_SPACE]),
            bool(keys[pygame.K_w]),
            bool(keys[pygame.K_s]),
            bool(keys[pygame.K_d]),
            bool(keys[pygame.K_a]),
        )

    def quit_requested(self) -> bool:
        """Handle pending window events; True if the window was asked to close."""
        return any(event.type == pygame.QUIT for event in pygame.event.get())

    def close(self) -> None:
        """Close the window and release the display."""
        pygame.quit()

    def __enter__(self) -> Renderer:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
from bombgrid.game import Game, board_index, create_board
from bombgrid.protocol import HEIGHT, MAX_PLAYERS, WIDTH, ObjectType


def test_board_index_corners():
    assert board_index(0, 0) == 0
    assert board_index(1, 0) == 1
    assert board_index(0, 1) == WIDTH
    assert board_index(WIDTH - 1, HEIGHT - 1) == WIDTH * HEIGHT - 1


def test_board_indices_are_unique():
    indices = {board_index(x, y) for x in range(WIDTH) for y in range(HEIGHT)}
    assert indices == set(range(WIDTH * HEIGHT))


def test_create_board_layout():
    board = create_board()
    assert len(board) == WIDTH * HEIGHT
    assert board[board_index(1, 1)] == ObjectType.WALL
    assert board[board_index(0, 0)] == ObjectType.EMPTY
    assert board[board_index(1, 0)] == ObjectType.EMPTY
    assert board[board_index(0, 1)] == ObjectType.EMPTY
    assert board[board_index(2, 2)] == ObjectType.EMPTY


def test_create_board_only_walls_and_empty():
    board = create_board()
    for y in range(HEIGHT):
        for x in range(WIDTH):
            wall = x % 2 == 1 and y % 2 == 1
            assert (board[board_index(x, y)] == ObjectType.WALL) is wall


def test_game_defaults():
    game = Game()
    assert game.players == [None] * MAX_PLAYERS
    assert game.board == create_board()
    assert len(game.bombs) == 0
    assert game.is_end is False


def test_games_do_not_share_state():
    first, second = Game(), Game()
    first.board[0] = ObjectType.BOMB
    first.bombs.append("bomb")
    assert second.board[0] == ObjectType.EMPTY
    assert len(second.bombs) == 0
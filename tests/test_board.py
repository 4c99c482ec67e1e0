import numpy as np
import pytest

from connectfour.game.board import Board
from connectfour.utils import (ROWS, COLS, Token, GameResult, CellOutOfRangeError,
                               ColumnOutOfRangeError)

from conftest import DRAW_ROWS


def column_is_stacked(board, col):
    """Occupied cells of a grid column are contiguous from the bottom."""
    seen_empty = False
    for row in range(ROWS - 1, -1, -1):
        if board.get_cell(row, col) == Token.EMPTY:
            seen_empty = True
        elif seen_empty:
            return False
    return True


def test_new_board_is_empty(empty_board):
    assert empty_board.move_count() == 0
    assert all(empty_board.get_cell(r, c) == Token.EMPTY for r in range(ROWS) for c in range(COLS))
    assert empty_board.outcome() == GameResult.IN_PROGRESS
    assert empty_board.valid_columns() == list(range(1, COLS + 1))


def test_tokens_fall_to_lowest_empty_cell(empty_board):
    assert empty_board.place_token(Token.X, 4)
    assert empty_board.place_token(Token.O, 4)
    assert empty_board.get_cell(ROWS - 1, 3) == Token.X
    assert empty_board.get_cell(ROWS - 2, 3) == Token.O
    assert empty_board.get_cell(ROWS - 3, 3) == Token.EMPTY


def test_gravity_holds_over_random_games():
    rng = np.random.default_rng(1234)
    for _ in range(30):
        board = Board()
        token = Token.X
        while board.valid_columns():
            column = int(rng.choice(board.valid_columns()))
            assert board.place_token(token, column)
            assert board.is_gravity_consistent()
            assert all(column_is_stacked(board, col) for col in range(COLS))
            token = token.other()
        assert board.move_count() == ROWS * COLS


def test_full_column_is_a_noop(empty_board):
    for i in range(ROWS):
        assert not empty_board.is_column_full(1)
        empty_board.place_token(Token.X if i % 2 else Token.O, 1)
    assert empty_board.is_column_full(1)

    before = empty_board.get_state()
    assert empty_board.place_token(Token.X, 1) is False
    assert np.array_equal(before, empty_board.get_state())
    assert 1 not in empty_board.valid_columns()


@pytest.mark.parametrize("column", [0, -1, 8, 100])
def test_out_of_range_columns_are_rejected(empty_board, column):
    with pytest.raises(ColumnOutOfRangeError) as excinfo:
        empty_board.is_column_full(column)
    assert excinfo.value.column == column

    with pytest.raises(IndexError):
        empty_board.place_token(Token.X, column)
    assert empty_board.move_count() == 0


@pytest.mark.parametrize("column", ["3", 2.0, True, None])
def test_non_integer_columns_are_rejected(empty_board, column):
    with pytest.raises(TypeError):
        empty_board.place_token(Token.O, column)


@pytest.mark.parametrize("row, col", [(-1, 0), (0, -1), (ROWS, 0), (0, COLS), (-1, -7)])
def test_out_of_range_cells_are_rejected(empty_board, row, col):
    empty_board.place_token(Token.X, 1)
    with pytest.raises(CellOutOfRangeError) as excinfo:
        empty_board.get_cell(row, col)
    assert isinstance(excinfo.value, IndexError)
    assert (excinfo.value.row, excinfo.value.col) == (row, col)
    assert f"({row}, {col})" in str(excinfo.value)


def test_side_to_move_follows_token_counts(empty_board):
    assert empty_board.side_to_move() == Token.X
    empty_board.place_token(Token.X, 4)
    assert empty_board.count(Token.X) == 1
    assert empty_board.side_to_move() == Token.O
    empty_board.place_token(Token.O, 4)
    assert empty_board.side_to_move() == Token.X
    empty_board.place_token(Token.O, 5)
    with pytest.raises(ValueError):
        empty_board.side_to_move()


def test_numpy_integer_columns_are_accepted(empty_board):
    assert empty_board.place_token(Token.X, np.int64(7))
    assert empty_board.get_cell(ROWS - 1, 6) == Token.X


def test_cannot_place_empty_token(empty_board):
    with pytest.raises(ValueError):
        empty_board.place_token(Token.EMPTY, 3)


def test_horizontal_win():
    board = Board.from_rows([
        ".......",
        ".......",
        ".......",
        ".......",
        "OOO....",
        "XXXX...",
    ])
    assert board.check_for_win(Token.X)
    assert not board.check_for_win(Token.O)
    assert board.winning_line(Token.X) == [(5, 0), (5, 1), (5, 2), (5, 3)]
    assert board.outcome() == GameResult.X_WIN


def test_vertical_win():
    board = Board.from_rows([
        ".......",
        ".......",
        "O......",
        "O......",
        "OXX....",
        "OXX....",
    ])
    assert board.check_for_win(Token.O)
    assert not board.check_for_win(Token.X)
    assert board.outcome() == GameResult.O_WIN


def test_vertical_win_on_loaded_floating_position():
    rows = [
        "O......",
        "O......",
        "O......",
        "O......",
        ".......",
        ".......",
    ]
    with pytest.raises(ValueError):
        Board.from_rows(rows)

    board = Board.from_rows(rows, strict=False)
    assert board.check_for_win(Token.O)


def test_diagonal_up_win():
    board = Board.from_rows([
        ".......",
        ".......",
        "...X...",
        "..XO...",
        ".XOO...",
        "XOOX...",
    ])
    assert board.check_for_win(Token.X)
    assert not board.check_for_win(Token.O)
    assert board.winning_line(Token.X) == [(5, 0), (4, 1), (3, 2), (2, 3)]


def test_diagonal_down_win():
    board = Board.from_rows([
        ".......",
        ".......",
        "O......",
        "XO.....",
        "XXO....",
        "XXXO...",
    ])
    assert board.check_for_win(Token.O)
    assert not board.check_for_win(Token.X)
    assert board.winning_line(Token.O) == [(2, 0), (3, 1), (4, 2), (5, 3)]


@pytest.mark.parametrize("rows", [
    [".......", ".......", ".......", ".......", ".......", "XXX...."],
    [".......", ".......", ".......", ".......", ".......", "XX.XX.."],
    [".......", ".......", "X......", "O......", "X......", "X......"],
])
def test_near_misses_are_not_wins(rows):
    board = Board.from_rows(rows)
    assert not board.check_for_win(Token.X)
    assert board.winning_line(Token.X) == []
    assert board.outcome() == GameResult.IN_PROGRESS


def test_full_board_without_lines_is_a_draw(draw_board):
    assert draw_board.is_full()
    assert draw_board.is_draw()
    assert not draw_board.check_for_win(Token.X)
    assert not draw_board.check_for_win(Token.O)
    assert draw_board.outcome() == GameResult.DRAW
    assert draw_board.valid_columns() == []


def test_almost_full_board_is_not_a_draw():
    rows = list(DRAW_ROWS)
    rows[0] = "." + rows[0][1:]
    board = Board.from_rows(rows)
    assert not board.is_draw()
    assert board.valid_columns() == [1]
    assert board.outcome() == GameResult.IN_PROGRESS


def test_full_board_with_a_line_is_a_win_not_a_draw():
    board = Board.from_rows(["XXXXXXX"] * ROWS)
    assert not board.is_draw()
    assert board.outcome() == GameResult.X_WIN


def test_copy_is_independent(empty_board):
    empty_board.place_token(Token.X, 4)
    empty_board.place_token(Token.O, 3)
    snapshot = empty_board.get_state()

    clone = empty_board.copy()
    assert clone == empty_board
    assert not np.shares_memory(clone.grid, empty_board.grid)

    for column in range(1, COLS + 1):
        clone.place_token(Token.X, column)
    clone.reset()

    assert np.array_equal(snapshot, empty_board.get_state())
    assert clone != empty_board


def test_from_position_matches_rows():
    values = ["0"] * (ROWS * COLS)
    values[-7] = "1"
    values[-6] = "2"
    board = Board.from_position(",".join(values))
    assert board == Board.from_rows(["......."] * 5 + ["XO....."])


@pytest.mark.parametrize("position", ["1,2,0", ",".join(["3"] * 42), ",".join(["a"] * 42)])
def test_bad_positions_are_rejected(position):
    with pytest.raises(ValueError):
        Board.from_position(position)


def test_render_uses_one_based_header():
    board = Board()
    board.place_token(Token.X, 1)
    lines = board.render().splitlines()
    assert lines[0] == " 1 2 3 4 5 6 7"
    assert lines[-1] == "|X| | | | | | |"
    assert len(lines) == ROWS + 1
    assert str(board) == board.render()

import numpy as np
import pytest

from jump61.ai.evaluator import position_weights, static_eval, winning_value
from jump61.core.board import Board
from jump61.core.types import Side
from tests.helpers import board_from_rows, random_game


def test_position_weights_3x3():
    assert position_weights(3).tolist() == [[3, 2, 3], [2, 1, 2], [3, 2, 3]]


def test_position_weights_small_boards():
    assert position_weights(1).tolist() == [[3]]
    assert position_weights(2).tolist() == [[3, 3], [3, 3]]


def test_winning_value_formula():
    # 3x3: weights 21, neighbour counts 24
    assert winning_value(3) == 21 * 24 + 1


def test_static_eval_red_perspective():
    board = board_from_rows(["2r 1r 0-", "0- 3r 0-", "0- 0- 2b"])
    # weights 3 + 2 + 1 = 6, red spots 6
    assert static_eval(board, Side.RED) == 36


def test_static_eval_blue_perspective_is_negative():
    board = board_from_rows(["2r 1r 0-", "0- 3r 0-", "0- 2b 2b"])
    # weights 2 + 3 = 5, blue spots 4
    assert static_eval(board, Side.BLUE) == -20


def test_static_eval_ignores_opponent_material():
    a = board_from_rows(["2r 0-", "0- 1b"])
    b = board_from_rows(["2r 0-", "1b 1b"])
    assert static_eval(a, Side.RED) == static_eval(b, Side.RED) == 6


def test_winner_sentinel_is_signed_by_winner():
    red_won = board_from_rows(["1r 1r", "1r 1r"])
    blue_won = board_from_rows(["1b 1b", "1b 2b"])
    for side in (Side.RED, Side.BLUE):
        assert static_eval(red_won, side) == winning_value(2)
        assert static_eval(blue_won, side) == -winning_value(2)


def test_empty_board_evaluates_to_zero():
    assert static_eval(Board(4), Side.RED) == 0
    assert static_eval(Board(4), Side.BLUE) == 0


@pytest.mark.parametrize("size,seed", [(2, 5), (3, 6), (4, 7)])
def test_sentinel_dominates_reachable_heuristics(size, seed):
    bound = winning_value(size)
    for board, _, _ in random_game(size, seed):
        for side in (Side.RED, Side.BLUE):
            assert abs(static_eval(board, side)) < bound


def test_position_weights_are_read_only():
    w = position_weights(4)
    with pytest.raises(ValueError):
        w[0, 0] = 0
    assert isinstance(w, np.ndarray)

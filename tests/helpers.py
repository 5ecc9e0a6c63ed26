from __future__ import annotations

import random
from typing import Iterator, Sequence, Tuple

from jump61.core.board import Board
from jump61.core.types import Side


def board_from_rows(rows: Sequence[str], to_play: Side = Side.RED) -> Board:
    """Build a board from dump rows such as ``["2r 0-", "0- 1b"]``."""
    text = "\n".join(["==="] + [f"    {row}" for row in rows] + ["==="])
    return Board.from_dump(text, to_play)


def random_game(size: int, seed: int, max_moves: int = 2000) -> Iterator[Tuple[Board, Side, int]]:
    """Yield ``(board, side, cell)`` before each move of a seeded random game.

    The move is applied after the consumer resumes the generator, so callers
    can snapshot whatever they need beforehand.
    """
    rng = random.Random(seed)
    board = Board(size)
    for _ in range(max_moves):
        if board.get_winner() is not None:
            return
        side = board.whose_move()
        n = rng.choice(board.legal_moves(side))
        yield board, side, n
        board.add_spot(side, n)

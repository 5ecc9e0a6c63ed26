from __future__ import annotations
import random
from typing import Callable, Optional

from .core.types import Side, Move
from .core.board import Board
from .ai.minimax import MinimaxAI, DEFAULT_DEPTH


class AIPlayer:
    """自动玩家：在只读视图上 clone 一份做 minimax 搜索。"""
    interactive = False

    def __init__(self, side: Side, depth: int = DEFAULT_DEPTH):
        self.side = side
        self.ai = MinimaxAI(side, depth)

    def get_move(self, board: Board) -> Move:
        n = self.ai.find_move(board)
        return Move.from_index(n, board.size)


class RandomPlayer:
    """随机走合法格；seed 固定时可复现。"""
    interactive = False

    def __init__(self, side: Side, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self.side = side
        self.rng = rng if rng is not None else random.Random(seed)

    def get_move(self, board: Board) -> Move:
        moves = board.legal_moves(self.side)
        assert moves, "no legal move"
        return Move.from_index(self.rng.choice(moves), board.size)


class HumanPlayer:
    interactive = True

    def __init__(self, side: Side, input_fn: Callable[[str], str] = input):
        self.side = side
        self.input_fn = input_fn

    def get_move(self, board: Board) -> Move:
        while True:
            text = self.input_fn(f"{self.side.name.lower()}> ")
            try:
                return Move.parse(text)
            except ValueError as exc:
                print(f"[play] {exc}")


def make_player(kind: str, side: Side, depth: int = DEFAULT_DEPTH,
                seed: Optional[int] = None):
    if kind == "ai":
        return AIPlayer(side, depth)
    if kind == "random":
        return RandomPlayer(side, seed=seed)
    if kind == "human":
        return HumanPlayer(side)
    raise ValueError(f"unknown player kind: {kind!r}")

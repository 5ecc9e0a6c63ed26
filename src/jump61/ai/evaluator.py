from __future__ import annotations
from functools import lru_cache
import numpy as np

from ..core.types import Side
from ..core.board import Board, neighbor_count_map

# 位置权重：角 3 / 非角边 2 / 内部 1
CORNER_WEIGHT = 3
EDGE_WEIGHT = 2
INSIDE_WEIGHT = 1


@lru_cache(maxsize=None)
def position_weights(size: int) -> np.ndarray:
    w = np.full((size, size), INSIDE_WEIGHT, dtype=np.int64)
    w[0, :] = EDGE_WEIGHT
    w[-1, :] = EDGE_WEIGHT
    w[:, 0] = EDGE_WEIGHT
    w[:, -1] = EDGE_WEIGHT
    for r, c in ((0, 0), (0, -1), (-1, 0), (-1, -1)):
        w[r, c] = CORNER_WEIGHT
    w.flags.writeable = False
    return w


@lru_cache(maxsize=None)
def winning_value(size: int) -> int:
    """
    终局分值：严格大于任何未终局局面的启发值。
    未终局时每格点数不超过邻居数，故 |heuristic| ≤ Σ权重 × Σ邻居数。
    """
    return int(position_weights(size).sum()) * int(neighbor_count_map(size).sum()) + 1


def static_eval(board: Board, side: Side) -> int:
    """
    以 side（AI 自己的颜色）计算的静态分，约定“正分对 Red 有利”：
      - 已分胜负：Red 胜 +winning_value，Blue 胜 -winning_value
      - 否则：side 所占格的位置权重之和 × side 的总点数；side 为 Blue 时取负
    """
    winner = board.get_winner()
    if winner is Side.RED:
        return winning_value(board.size)
    if winner is Side.BLUE:
        return -winning_value(board.size)

    mine = board.grid == side.value
    heuristic = int(position_weights(board.size)[mine].sum()) * int(board.spots[mine].sum())
    return heuristic if side is Side.RED else -heuristic

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING
import numpy as np

from .types import Side

if TYPE_CHECKING:
    from .board import Board


@dataclass
class Snapshot:
    """一手落子之后的完整棋面快照（undo 栈中的一项）。"""
    grid: np.ndarray      # 归属 (N,N)，值∈{0,1,2}
    spots: np.ndarray     # 点数 (N,N)，uint16
    to_play: Side         # 下一手执方
    curr_player: Side     # 最近一手执方

    @classmethod
    def save(cls, board: "Board") -> "Snapshot":
        return cls(
            grid=board.grid.copy(),
            spots=board.spots.copy(),
            to_play=board.to_play,
            curr_player=board.curr_player,
        )

    def restore(self, board: "Board") -> None:
        # 原地拷贝：快照本身不能被之后的落子改写
        np.copyto(board.grid, self.grid)
        np.copyto(board.spots, self.spots)
        board.to_play = self.to_play
        board.curr_player = self.curr_player

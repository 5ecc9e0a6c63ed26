from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

@dataclass
class RulesConfig:
    board_size: int = 6
    search_depth: int = 4              # minimax 搜索层数（ply）
    max_turns: int = 1000              # 自对弈步数上限，达到后判和

    # 自对弈开局随机步数（每方），用于打散确定性的对局
    opening_random_moves: int = 2
    seed: Optional[int] = None

    def __post_init__(self):
        if self.board_size < 1:
            raise ValueError(f"board_size must be >= 1, got {self.board_size}")
        if self.search_depth < 1:
            raise ValueError(f"search_depth must be >= 1, got {self.search_depth}")

    def bounds(self) -> Tuple[int, int]:
        return (self.board_size, self.board_size)

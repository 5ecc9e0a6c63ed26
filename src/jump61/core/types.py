from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Tuple




class Side(Enum):
    NEUTRAL = 0 # 无主（空格）
    RED = 1     # 先手
    BLUE = 2    # 后手


    def other(self) -> "Side":
        assert self is not Side.NEUTRAL, "neutral has no opponent"
        return Side.RED if self is Side.BLUE else Side.BLUE

    @property
    def glyph(self) -> str:
        return _GLYPHS[self]

    @staticmethod
    def from_glyph(ch: str) -> "Side":
        for side, g in _GLYPHS.items():
            if g == ch:
                return side
        raise ValueError(f"unknown side glyph: {ch!r}")


# dump 格式里的颜色记号
_GLYPHS = {Side.NEUTRAL: "-", Side.RED: "r", Side.BLUE: "b"}




@dataclass(frozen=True)
class Cell:
    side: Side
    spots: int

    def __post_init__(self):
        # 无主 ⇔ 0 个点
        assert self.spots >= 0
        assert (self.side is Side.NEUTRAL) == (self.spots == 0), f"inconsistent cell {self}"




@dataclass(frozen=True)
class Move:
    r: int  # 1-based 行
    c: int  # 1-based 列


    def to_tuple(self) -> Tuple[int, int]:
        return (self.r, self.c)

    def to_index(self, size: int) -> int:
        return (self.r - 1) * size + (self.c - 1)

    @staticmethod
    def from_index(n: int, size: int) -> "Move":
        r, c = divmod(n, size)
        return Move(r + 1, c + 1)

    @staticmethod
    def parse(text: str) -> "Move":
        """解析 "r c" 形式的落点（也接受 "r,c"）。"""
        parts = text.replace(",", " ").split()
        if len(parts) != 2:
            raise ValueError(f"expected 'row col', got {text!r}")
        try:
            r, c = int(parts[0]), int(parts[1])
        except ValueError:
            raise ValueError(f"row/col must be integers: {text!r}") from None
        return Move(r, c)

    def __str__(self) -> str:
        return f"{self.r} {self.c}"

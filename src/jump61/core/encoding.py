from __future__ import annotations
from typing import List, Tuple
import numpy as np

from .types import Side

# 边界行
_DELIM = "==="
_INDENT = "    "


def dump_grid(grid: np.ndarray, spots: np.ndarray) -> str:
    """
    把棋面编码为 dump 文本：
        ===
            1r 2b 0-
            ...
        ===
    每格 = <点数><颜色记号>，记号 '-' 无主 / 'r' 红 / 'b' 蓝；行自上而下。
    """
    H, W = grid.shape
    lines = [_DELIM]
    for r in range(H):
        tokens = [f"{int(spots[r, c])}{Side(int(grid[r, c])).glyph}" for c in range(W)]
        lines.append(_INDENT + " ".join(tokens))
    lines.append(_DELIM)
    return "\n".join(lines)


def parse_dump(text: str) -> Tuple[np.ndarray, np.ndarray]:
    """dump_grid 的逆：返回 (grid, spots)。格式不对时抛 ValueError。"""
    lines = [ln.strip() for ln in text.strip().splitlines()]
    if len(lines) < 2 or lines[0] != _DELIM or lines[-1] != _DELIM:
        raise ValueError("dump must be bracketed by '===' lines")
    rows: List[List[str]] = [ln.split() for ln in lines[1:-1]]
    size = len(rows)
    if size == 0 or any(len(row) != size for row in rows):
        raise ValueError("dump must describe a square board")

    grid = np.zeros((size, size), dtype=np.uint8)
    spots = np.zeros((size, size), dtype=np.uint16)
    for r, row in enumerate(rows):
        for c, tok in enumerate(row):
            if len(tok) < 2 or not tok[:-1].isdigit():
                raise ValueError(f"bad cell token {tok!r} at ({r + 1}, {c + 1})")
            side = Side.from_glyph(tok[-1])
            n = int(tok[:-1])
            if (side is Side.NEUTRAL) != (n == 0):
                raise ValueError(f"inconsistent cell token {tok!r}")
            grid[r, c] = side.value
            spots[r, c] = n
    return grid, spots


def display_string(grid: np.ndarray, spots: np.ndarray) -> str:
    """带行列号的人类可读棋面（与 dump 不同，仅用于终端展示）。"""
    lines = dump_grid(grid, spots).splitlines()[1:-1]
    size = grid.shape[0]
    out = [f"{i:2d} {ln.strip()}" for i, ln in enumerate(lines, start=1)]
    out.append("  " + "".join(f"{c:3d}" for c in range(1, size + 1)))
    return "\n".join(out)

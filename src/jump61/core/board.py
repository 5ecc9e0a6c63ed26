# ──────────────────────────────────────────────────────────────────────────────
# File: src/jump61/core/board.py
# 说明：
#   - 格子编号：行优先，0-based 编号 n；对外的行/列为 1-based。
#   - grid：0=无主, 1=Red, 2=Blue；spots：每格点数。
#   - 每次 add_spot 之后压一个快照，undo 直接回滚到上一快照。
#   - 溢出（jump）用显式 DFS 栈实现，访问顺序与递归版一致：上、左、下、右。
# ──────────────────────────────────────────────────────────────────────────────
from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional
import numpy as np

from .types import Side, Cell, Move
from .state import Snapshot
from .encoding import dump_grid, parse_dump, display_string


def _nop(board: "Board") -> None:
    pass


def neighbor_count_map(size: int) -> np.ndarray:
    """每格的邻居数：4 减去所贴边数（角 2 / 边 3 / 内部 4）。"""
    counts = np.full((size, size), 4, dtype=np.int32)
    counts[0, :] -= 1
    counts[-1, :] -= 1
    counts[:, 0] -= 1
    counts[:, -1] -= 1
    return counts


@dataclass(eq=False)
class Board:
    size: int
    # 0=无主, 1=Red, 2=Blue
    grid: np.ndarray = field(init=False, repr=False)
    # 点数：≥0 的整数
    spots: np.ndarray = field(init=False, repr=False)
    to_play: Side = field(init=False, default=Side.RED)
    curr_player: Side = field(init=False, default=Side.RED)

    def __post_init__(self):
        self._notifier: Callable[["Board"], None] = _nop
        self._readonly: Optional["ReadonlyBoard"] = None
        self._reset(self.size)

    # ──────────────────────────────────────────────────────────────────────────
    # 初始化 / 复制
    # ──────────────────────────────────────────────────────────────────────────
    def _reset(self, size: int) -> None:
        self.size = size
        self.grid = np.zeros((size, size), dtype=np.uint8)
        self.spots = np.zeros((size, size), dtype=np.uint16)
        self._neighbors = neighbor_count_map(size)
        self.to_play = Side.RED
        self.curr_player = Side.RED
        self._recount()
        self._reset_history()

    def _reset_history(self) -> None:
        self._current = 0
        self._history: List[Snapshot] = [Snapshot.save(self)]

    def _recount(self) -> None:
        # 各方格子数（索引即 Side.value），用于 O(1) 判胜
        self._side_cells = np.bincount(self.grid.reshape(-1), minlength=3).astype(np.int64)

    def clear(self, size: int) -> None:
        """重置为 size×size 的空棋盘，清空 undo 历史。"""
        self._reset(size)
        self._announce()

    def copy(self, board: "Board") -> None:
        """拷贝 board 的棋面（含下一手执方），但不继承其 undo 历史。"""
        if board.size != self.size:
            self.size = board.size
            self._neighbors = neighbor_count_map(board.size)
        self.grid = np.array(board.grid, dtype=np.uint8)
        self.spots = np.array(board.spots, dtype=np.uint16)
        self.to_play = board.to_play
        self.curr_player = board.curr_player
        self._recount()
        self._reset_history()

    def clone(self) -> "Board":
        b = Board(self.size)
        b.copy(self)
        return b

    @classmethod
    def from_dump(cls, text: str, to_play: Side = Side.RED) -> "Board":
        grid, spots = parse_dump(text)
        b = cls(grid.shape[0])
        b.grid = grid
        b.spots = spots
        b.to_play = to_play
        b._recount()
        b._reset_history()
        return b

    @property
    def readonly(self) -> "ReadonlyBoard":
        if self._readonly is None:
            self._readonly = ReadonlyBoard(self)
        return self._readonly

    # ──────────────────────────────────────────────────────────────────────────
    # 坐标
    # ──────────────────────────────────────────────────────────────────────────
    @property
    def num_squares(self) -> int:
        return self.size * self.size

    @property
    def num_moves(self) -> int:
        return self._current

    def exists(self, n: int) -> bool:
        return 0 <= n < self.size * self.size

    def exists_at(self, r: int, c: int) -> bool:
        return 1 <= r <= self.size and 1 <= c <= self.size

    def row(self, n: int) -> int:
        return n // self.size + 1

    def col(self, n: int) -> int:
        return n % self.size + 1

    def sq_num(self, r: int, c: int) -> int:
        return (c - 1) + (r - 1) * self.size

    def move_string(self, n: int) -> str:
        return str(Move.from_index(n, self.size))

    # ──────────────────────────────────────────────────────────────────────────
    # 查询
    # ──────────────────────────────────────────────────────────────────────────
    def get(self, n: int) -> Cell:
        assert self.exists(n), f"no square #{n}"
        r, c = divmod(n, self.size)
        return Cell(Side(int(self.grid[r, c])), int(self.spots[r, c]))

    def get_at(self, r: int, c: int) -> Cell:
        assert self.exists_at(r, c), f"no square ({r}, {c})"
        return self.get(self.sq_num(r, c))

    def neighbors(self, n: int) -> int:
        r, c = divmod(n, self.size)
        return int(self._neighbors[r, c])

    def neighbors_of(self, n: int) -> List[int]:
        """n 的邻格编号，顺序固定：上、左、下、右。"""
        N = self.size
        r, c = divmod(n, N)
        out = []
        if r > 0:
            out.append(n - N)
        if c > 0:
            out.append(n - 1)
        if r < N - 1:
            out.append(n + N)
        if c < N - 1:
            out.append(n + 1)
        return out

    def num_pieces(self) -> int:
        return int(self.spots.sum())

    def num_pieces_of_side(self, side: Side) -> int:
        return int(self.spots[self.grid == side.value].sum())

    def num_of_side(self, side: Side) -> int:
        return int(self._side_cells[side.value])

    def get_winner(self) -> Optional[Side]:
        """所有格同属一方时返回该方，否则 None。"""
        total = self.size * self.size
        for side in (Side.RED, Side.BLUE):
            if self._side_cells[side.value] == total:
                return side
        return None

    def is_legal(self, player: Side, n: int) -> bool:
        side = Side(int(self.grid.flat[n]))
        return side is Side.NEUTRAL or side is player

    def is_legal_at(self, player: Side, r: int, c: int) -> bool:
        assert self.exists_at(r, c), f"no square ({r}, {c})"
        return self.is_legal(player, self.sq_num(r, c))

    def is_turn(self, player: Side) -> bool:
        return self.to_play is player

    def whose_move(self) -> Side:
        # 空棋盘由 Red 先手，此后严格轮流（to_play 随快照保存/回滚）
        return self.to_play

    def legal_moves(self, player: Side) -> List[int]:
        flat = self.grid.reshape(-1)
        mask = (flat == Side.NEUTRAL.value) | (flat == player.value)
        return [int(n) for n in np.flatnonzero(mask)]

    def overfull(self, n: int) -> bool:
        r, c = divmod(n, self.size)
        return int(self.spots[r, c]) > int(self._neighbors[r, c])

    # ──────────────────────────────────────────────────────────────────────────
    # 落子 / 溢出
    # ──────────────────────────────────────────────────────────────────────────
    def add_spot(self, player: Side, n: int) -> None:
        """player 在 #n 加一点。调用方需保证 is_legal(player, n)。"""
        assert player is not Side.NEUTRAL
        assert self.exists(n), f"no square #{n}"
        assert self.is_legal(player, n), f"illegal move {self.move_string(n)} for {player.name}"

        self.curr_player = player
        cell = self.get(n)
        if cell.side is Side.NEUTRAL:
            # 首次落子直接给 2 点
            self._internal_set(n, 2, player)
        elif self.get_winner() is None:
            self._internal_set(n, cell.spots + 1, player)
        if self.overfull(n):
            self._jump(n)

        self.to_play = player.other()
        self._mark_undo()
        self._announce()

    def add_spot_at(self, player: Side, r: int, c: int) -> None:
        assert self.exists_at(r, c), f"no square ({r}, {c})"
        self.add_spot(player, self.sq_num(r, c))

    def _spill(self, s: int) -> Iterator[int]:
        # 源格先扣掉邻居数，归属保持 curr_player
        self._internal_set(s, int(self.spots.flat[s]) - self.neighbors(s), self.curr_player)
        return iter(self.neighbors_of(s))

    def _jump(self, s: int) -> None:
        """从溢出格 s 开始做完全部扩散（DFS，每次只处理一个源格）。"""
        player = self.curr_player
        stack = [self._spill(s)]
        while stack:
            n = next(stack[-1], None)
            if n is None:
                stack.pop()
                continue
            # 已分出胜负：不再投递
            if self.get_winner() is not None:
                break
            self._internal_set(n, int(self.spots.flat[n]) + 1, player)
            if self.overfull(n):
                stack.append(self._spill(n))

    def set(self, n: int, num: int, player: Side) -> None:
        """把 #n 设为 num 点；num>0 时归 player，否则无主。不记入 undo。"""
        assert self.exists(n), f"no square #{n}"
        self._internal_set(n, num, player)
        self._announce()

    def set_at(self, r: int, c: int, num: int, player: Side) -> None:
        assert self.exists_at(r, c), f"no square ({r}, {c})"
        self.set(self.sq_num(r, c), num, player)

    def _internal_set(self, n: int, num: int, player: Side) -> None:
        assert num >= 0
        # 有点数的格必须有主
        assert num == 0 or player is not Side.NEUTRAL, f"{num} spots need an owner"
        side = player if num > 0 else Side.NEUTRAL
        r, c = divmod(n, self.size)
        self._side_cells[int(self.grid[r, c])] -= 1
        self._side_cells[side.value] += 1
        self.grid[r, c] = side.value
        self.spots[r, c] = num

    # ──────────────────────────────────────────────────────────────────────────
    # undo
    # ──────────────────────────────────────────────────────────────────────────
    def _mark_undo(self) -> None:
        self._current += 1
        # 丢掉被 undo 过的旧分支
        del self._history[self._current:]
        self._history.append(Snapshot.save(self))

    def undo(self) -> None:
        """撤销一手；已到清空/构造时的边界则什么都不做。"""
        if self._current > 0:
            self._current -= 1
            self._history[self._current].restore(self)
            del self._history[self._current + 1:]
            self._recount()

    @contextmanager
    def tentative(self, player: Side, n: int) -> Iterator["Board"]:
        """试走一步，离开 with 块时无论如何都撤销。"""
        self.add_spot(player, n)
        try:
            yield self
        finally:
            self.undo()

    # ──────────────────────────────────────────────────────────────────────────
    # 通知 / 文本
    # ──────────────────────────────────────────────────────────────────────────
    def set_notifier(self, notify: Optional[Callable[["Board"], None]]) -> None:
        self._notifier = notify if notify is not None else _nop

    def _announce(self) -> None:
        self._notifier(self)

    def to_display_string(self) -> str:
        return display_string(self.grid, self.spots)

    def __str__(self) -> str:
        return dump_grid(self.grid, self.spots)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, (Board, ReadonlyBoard)):
            return NotImplemented
        return (self.size == other.size
                and np.array_equal(self.grid, other.grid)
                and np.array_equal(self.spots, other.spots))

    __hash__ = None  # 可变对象


class ReadonlyBoard:
    """Board 的只读外观：查询照常转发，任何修改都抛 RuntimeError。"""

    _MUTATORS = frozenset({
        "add_spot", "add_spot_at", "set", "set_at", "clear", "copy",
        "undo", "tentative", "set_notifier",
    })

    def __init__(self, board: Board):
        object.__setattr__(self, "_board", board)

    def __getattr__(self, name: str):
        # 双下划线名交给默认协议（hasattr / copy 等）
        if name.startswith("__"):
            raise AttributeError(name)
        # 私有成员一律不转发：_internal_set / _jump 等同样会改棋盘
        if name.startswith("_") or name in ReadonlyBoard._MUTATORS:
            raise RuntimeError(f"board is read-only: {name} not allowed")
        value = getattr(self._board, name)
        if isinstance(value, np.ndarray):
            view = value.view()
            view.flags.writeable = False
            return view
        return value

    def __setattr__(self, name: str, value) -> None:
        raise RuntimeError(f"board is read-only: cannot set {name}")

    @property
    def readonly(self) -> "ReadonlyBoard":
        return self

    def __str__(self) -> str:
        return str(self._board)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ReadonlyBoard):
            other = other._board
        return self._board.__eq__(other)

    __hash__ = None

# ──────────────────────────────────────────────────────────────────────────────
# File: src/jump61/ai/minimax.py
# 说明：
#   - 深度受限 minimax + alpha-beta 剪枝。
#   - 每次搜索只 clone 一次权威棋盘；之后所有分支都在这份工作棋盘上
#     add_spot → 递归 → undo（Board.tentative 保证剪枝提前返回时也会撤销）。
#   - 约定：sense=+1 为 Red 行棋（取极大），sense=-1 为 Blue 行棋（取极小）；
#     估值函数永远站在 AI 自己的颜色上算，正分对 Red 有利。
# ──────────────────────────────────────────────────────────────────────────────
from __future__ import annotations
from typing import Optional

from ..core.types import Side
from ..core.board import Board
from .evaluator import static_eval

DEFAULT_DEPTH = 4


class MinimaxAI:
    def __init__(self, side: Side, depth: int = DEFAULT_DEPTH):
        assert side is not Side.NEUTRAL
        assert depth >= 1
        self.side = side
        self.depth = depth
        self.last_value: Optional[float] = None
        self._found_move = -1

    def find_move(self, board: Board) -> int:
        """在 board 的私有副本上搜索，返回选中的格子编号。要求对局未结束。"""
        work = board.clone()
        assert work.get_winner() is None, "game is already over"
        self._found_move = -1
        sense = 1 if self.side is Side.RED else -1
        self.last_value = self._min_max(work, self.depth, True, sense,
                                        float("-inf"), float("inf"))
        assert self._found_move >= 0, "no legal move found"
        return self._found_move

    def _min_max(self, board: Board, depth: int, save_move: bool,
                 sense: int, alpha: float, beta: float) -> float:
        """
        返回局面值；save_move 时把根上的最佳着法记到 _found_move。
        sense=+1：取极大，值 ≥ beta 即剪枝；sense=-1：取极小，值 ≤ alpha 即剪枝。
        depth==0 或已分胜负时返回静态估值，不记录着法。
        """
        if depth == 0 or board.get_winner() is not None:
            return static_eval(board, self.side)

        player = Side.RED if sense == 1 else Side.BLUE
        if sense == 1:
            best = alpha
            for m in board.legal_moves(player):
                with board.tentative(player, m):
                    score = self._min_max(board, depth - 1, False, -1, alpha, beta)
                if score > best:
                    best = score
                    alpha = max(alpha, best)
                    if save_move:
                        self._found_move = m
                    if alpha >= beta:
                        return best
        else:
            best = beta
            for m in board.legal_moves(player):
                with board.tentative(player, m):
                    score = self._min_max(board, depth - 1, False, 1, alpha, beta)
                if score < best:
                    best = score
                    beta = min(beta, best)
                    if save_move:
                        self._found_move = m
                    if alpha >= beta:
                        return best
        return best


def search_for_move(board: Board, side: Side, depth: int = DEFAULT_DEPTH) -> int:
    """驱动层入口：给定棋盘与执方，返回一个合法格子编号。"""
    return MinimaxAI(side, depth).find_move(board)

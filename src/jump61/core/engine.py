# ──────────────────────────────────────────────────────────────────────────────
# File: src/jump61/core/engine.py
# 说明：
#   - Game 持有“权威”棋盘；玩家只拿到只读视图，返回 Move，由 Game 落子。
#   - 这里是唯一需要校验外部输入（轮次 / 合法性）的地方，错误用 ValueError 报出；
#     Board 本身只做断言式的前置条件检查。
# ──────────────────────────────────────────────────────────────────────────────
from __future__ import annotations
from typing import List, Optional, Protocol

from .types import Side, Move
from .board import Board
from .rules import RulesConfig


class Player(Protocol):
    side: Side

    def get_move(self, board: Board) -> Move: ...


class Game:
    def __init__(self, cfg: RulesConfig, red: Player, blue: Player, verbose: bool = False):
        assert red.side is Side.RED and blue.side is Side.BLUE
        self.cfg = cfg
        self.board = Board(cfg.board_size)
        self.players = {Side.RED: red, Side.BLUE: blue}
        self.history: List[Move] = []
        self.verbose = verbose

    @property
    def winner(self) -> Optional[Side]:
        return self.board.get_winner()

    def is_over(self) -> bool:
        return self.winner is not None

    def step(self, move: Move, side: Optional[Side] = None) -> None:
        """
        校验并落子：
          - side 缺省为当前执方；不是它的回合 → ValueError
          - 越界 / 对方已占的格子 → ValueError
        """
        board = self.board
        if self.is_over():
            raise ValueError("game is already over")
        if side is None:
            side = board.whose_move()
        if not board.is_turn(side):
            raise ValueError(f"not {side.name}'s turn")
        if not board.exists_at(move.r, move.c):
            raise ValueError(f"move {move} is off the board")
        if not board.is_legal_at(side, move.r, move.c):
            raise ValueError(f"square {move} is owned by {side.other().name}")

        board.add_spot_at(side, move.r, move.c)
        self.history.append(move)
        self.report_move(side, move)

    def report_move(self, side: Side, move: Move) -> None:
        if self.verbose:
            print(f"[play] {side.name} moves {move}")

    def play(self, max_turns: Optional[int] = None) -> Optional[Side]:
        """轮流向玩家要步直到分出胜负（或达到 max_turns 判和，返回 None）。"""
        limit = self.cfg.max_turns if max_turns is None else max_turns
        while not self.is_over() and len(self.history) < limit:
            side = self.board.whose_move()
            player = self.players[side]
            while True:
                move = player.get_move(self.board.readonly)
                try:
                    self.step(move, side)
                    break
                except ValueError as exc:
                    # 只有人类会给出非法步；AI 给出非法步属于 bug，直接抛出
                    if not getattr(player, "interactive", False):
                        raise
                    print(f"[play] {exc}")
            if self.verbose:
                print(self.board.to_display_string())
        if self.verbose:
            w = self.winner
            print(f"[play] {w.name} wins after {len(self.history)} moves." if w
                  else f"[play] draw after {len(self.history)} moves.")
        return self.winner

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional
import random
from tqdm import tqdm

from ..core.types import Side, Move
from ..core.board import Board
from ..core.rules import RulesConfig
from .minimax import MinimaxAI


@dataclass
class GameRecord:
    moves: List[Move]
    winner: Optional[Side]   # None = 达到步数上限判和
    turns: int


@dataclass
class ArenaResult:
    red: int = 0
    blue: int = 0
    draws: int = 0
    records: List[GameRecord] = field(default_factory=list)

    @property
    def games(self) -> int:
        return self.red + self.blue + self.draws

    def add(self, rec: GameRecord) -> None:
        if rec.winner is Side.RED:
            self.red += 1
        elif rec.winner is Side.BLUE:
            self.blue += 1
        else:
            self.draws += 1
        self.records.append(rec)


class SelfPlay:
    def __init__(self, cfg: RulesConfig):
        self.cfg = cfg
        self.ais = {side: MinimaxAI(side, cfg.search_depth) for side in (Side.RED, Side.BLUE)}

    def play_one(self, rng: Optional[random.Random] = None) -> GameRecord:
        """
        AI 对 AI 下一整局：
          - 前 opening_random_moves 手（每方）随机落子，之后全部交给 minimax
          - 达到 max_turns 仍未分胜负 → 判和
        """
        rng = rng if rng is not None else random.Random(self.cfg.seed)
        board = Board(self.cfg.board_size)
        moves: List[Move] = []
        random_plies = 2 * self.cfg.opening_random_moves

        while board.get_winner() is None and len(moves) < self.cfg.max_turns:
            side = board.whose_move()
            if len(moves) < random_plies:
                n = rng.choice(board.legal_moves(side))
            else:
                n = self.ais[side].find_move(board)
            board.add_spot(side, n)
            moves.append(Move.from_index(n, board.size))

        return GameRecord(moves=moves, winner=board.get_winner(), turns=len(moves))

    def run(self, games: int) -> ArenaResult:
        rng = random.Random(self.cfg.seed)
        result = ArenaResult()
        for i in tqdm(range(games), desc="Self-play games", unit="game"):
            rec = self.play_one(rng)
            result.add(rec)
            w = rec.winner.name if rec.winner else "draw"
            tqdm.write(f"[arena] game={i + 1} winner={w} turns={rec.turns}")
        return result

from __future__ import annotations
import argparse
from typing import List, Optional

from .core.types import Side
from .core.rules import RulesConfig
from .core.engine import Game
from .ai.selfplay import SelfPlay
from .players import make_player


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Jump61 chain-reaction game")
    parser.add_argument('--size', type=int, default=6, help='Board size N (N x N)')
    parser.add_argument('--depth', type=int, default=4, help='Minimax search depth (plies)')
    parser.add_argument('--red', choices=['human', 'ai', 'random'], default='human', help='Red player')
    parser.add_argument('--blue', choices=['human', 'ai', 'random'], default='ai', help='Blue player')
    parser.add_argument('--games', type=int, default=0, help='Run N AI-vs-AI games instead of one interactive game')
    parser.add_argument('--opening', type=int, default=2, help='Random opening moves per side in AI-vs-AI games')
    parser.add_argument('--maxTurns', type=int, default=1000, help='Move cap before a game is called a draw')
    parser.add_argument('--seed', type=int, default=None, help='Random seed')
    parser.add_argument('--quiet', action='store_true', help='Do not print the board after each move')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        cfg = RulesConfig(board_size=args.size, search_depth=args.depth,
                          max_turns=args.maxTurns, opening_random_moves=args.opening,
                          seed=args.seed)
    except ValueError as exc:
        print(f"[play] {exc}")
        return 2

    if args.games > 0:
        print(f"[arena] {args.games} games on {cfg.board_size}x{cfg.board_size}, depth={cfg.search_depth}")
        result = SelfPlay(cfg).run(args.games)
        print(f"[arena] red={result.red} blue={result.blue} draws={result.draws}")
        return 0

    red = make_player(args.red, Side.RED, cfg.search_depth, seed=args.seed)
    blue = make_player(args.blue, Side.BLUE, cfg.search_depth,
                       seed=None if args.seed is None else args.seed + 1)
    game = Game(cfg, red, blue, verbose=not args.quiet)
    if not args.quiet:
        print(game.board.to_display_string())
    try:
        winner = game.play()
    except (EOFError, KeyboardInterrupt):
        print("\n[play] aborted.")
        return 1
    print(f"[play] result: {winner.name if winner else 'draw'}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

import pytest

from jump61.core.engine import Game
from jump61.core.rules import RulesConfig
from jump61.core.types import Move, Side
from jump61.players import AIPlayer, HumanPlayer, RandomPlayer, make_player


class ScriptedPlayer:
    interactive = False

    def __init__(self, side, moves):
        self.side = side
        self.moves = list(moves)

    def get_move(self, board):
        return self.moves.pop(0)


def _game(size=3, red=None, blue=None):
    cfg = RulesConfig(board_size=size, search_depth=2)
    red = red or ScriptedPlayer(Side.RED, [])
    blue = blue or ScriptedPlayer(Side.BLUE, [])
    return Game(cfg, red, blue)


def test_step_applies_move_and_records_history():
    game = _game()
    game.step(Move(1, 1))
    game.step(Move(3, 3))
    assert game.history == [Move(1, 1), Move(3, 3)]
    assert game.board.get_at(3, 3).side is Side.BLUE
    assert game.board.whose_move() is Side.RED


def test_step_rejects_wrong_turn():
    game = _game()
    with pytest.raises(ValueError, match="turn"):
        game.step(Move(1, 1), Side.BLUE)


def test_step_rejects_off_board_and_owned_cells():
    game = _game()
    with pytest.raises(ValueError):
        game.step(Move(4, 1))
    game.step(Move(1, 1))
    with pytest.raises(ValueError, match="owned"):
        game.step(Move(1, 1))
    assert game.board.num_moves == 1


def test_step_rejects_moves_after_game_over():
    game = _game(size=1)
    game.step(Move(1, 1))
    assert game.winner is Side.RED
    with pytest.raises(ValueError, match="over"):
        game.step(Move(1, 1))


def test_players_only_see_readonly_board():
    seen = []

    class Peeker(ScriptedPlayer):
        def get_move(self, board):
            seen.append(board)
            with pytest.raises(RuntimeError):
                board.add_spot(self.side, 0)
            return super().get_move(board)

    game = _game(red=Peeker(Side.RED, [Move(2, 2)]))
    game.play(max_turns=1)
    assert seen and seen[0] == game.board


def test_random_players_finish_a_game():
    game = _game(size=2, red=RandomPlayer(Side.RED, seed=1), blue=RandomPlayer(Side.BLUE, seed=2))
    winner = game.play()
    assert winner is not None
    assert winner is game.board.get_winner()
    assert len(game.history) == game.board.num_moves


def test_ai_finishes_a_game_against_random():
    game = _game(size=2, red=AIPlayer(Side.RED, depth=2), blue=RandomPlayer(Side.BLUE, seed=3))
    assert game.play() in (Side.RED, Side.BLUE)
    assert game.board.get_winner() is not None


def test_human_player_retries_bad_input(capsys):
    answers = iter(["nonsense", "9 9", "1 1"])
    human = HumanPlayer(Side.RED, input_fn=lambda prompt: next(answers))
    game = _game(size=2, red=human)
    game.play(max_turns=1)
    assert game.history == [Move(1, 1)]
    out = capsys.readouterr().out
    assert "row col" in out
    assert "off the board" in out


def test_ai_illegal_move_is_not_swallowed():
    game = _game(size=2, red=ScriptedPlayer(Side.RED, [Move(5, 5)]))
    with pytest.raises(ValueError):
        game.play(max_turns=1)


def test_make_player():
    assert isinstance(make_player("ai", Side.RED, depth=1), AIPlayer)
    assert isinstance(make_player("random", Side.BLUE, seed=0), RandomPlayer)
    assert isinstance(make_player("human", Side.BLUE), HumanPlayer)
    with pytest.raises(ValueError):
        make_player("robot", Side.RED)


def test_rules_config_validation():
    assert RulesConfig().bounds() == (6, 6)
    with pytest.raises(ValueError):
        RulesConfig(board_size=0)
    with pytest.raises(ValueError):
        RulesConfig(search_depth=0)

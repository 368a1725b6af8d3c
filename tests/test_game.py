import copy

import pytest

from parchis.analysis import INIT_BOXES
from parchis.board import Board, BoardConfig
from parchis.dice import DEFAULT_FACES, YINYANG
from parchis.game import SKIP_TURN, Parchis
from parchis.nodecounter import NodeCounter
from parchis.piece import Box, BoxType, Color, Piece
from parchis.player import Player

Y, B, R, G = Color.YELLOW, Color.BLUE, Color.RED, Color.GREEN


def _n(num):
    return Box(num, BoxType.NORMAL, Color.NONE)


def _board(layout):
    return Board({c: [Piece(c, box) for box in boxes] for c, boxes in layout.items()})


def _game(yellow, blue=(26,), red=(45,), green=(60,)):
    layout = {
        Y: [b if isinstance(b, Box) else _n(b) for b in yellow],
        B: [_n(n) for n in blue],
        R: [_n(n) for n in red],
        G: [_n(n) for n in green],
    }
    return Parchis(_board(layout), counter=NodeCounter())


class _Scripted(Player):
    def __init__(self, name):
        super().__init__(name)
        self.perceived = 0

    def perceive(self, game):
        super().perceive(game)
        self.perceived += 1

    def move(self):
        game = self.game
        color = game.current_main_color
        dice = game.available_normal_dices(color)[0]
        pieces = game.available_pieces(color, dice)
        if pieces:
            game.move_piece(*pieces[0], dice)
        else:
            game.move_piece(color, SKIP_TURN, dice)
        return True


def test_initial_state():
    game = Parchis(BoardConfig.GROUPED2, counter=NodeCounter())
    assert game.current_color is Y
    assert game.current_player == 0
    assert game.turn == 1
    assert game.last_dice == -1
    assert not game.game_over()
    assert game.winner() == -1
    assert game.color_winner() is Color.NONE


def test_player_colors():
    game = Parchis(counter=NodeCounter())
    assert game.player_colors(0) == [Y, G]
    assert game.player_colors(1) == [B, R]


def test_is_normal_dice():
    game = Parchis(counter=NodeCounter())
    assert all(game.is_normal_dice(d) for d in range(1, 7))
    assert not any(game.is_normal_dice(d) for d in (0, 7, YINYANG))


def test_available_normal_dices_shared_by_partners():
    game = Parchis(counter=NodeCounter())
    assert game.available_normal_dices(G) == list(DEFAULT_FACES)
    assert game.available_normal_dices(R) == game.available_normal_dices(B)


def test_power_bar_of_color():
    game = Parchis(counter=NodeCounter())
    assert game.power_bar_of_color(R) is game.power_bar(0)
    assert game.power_bar_of_color(G) is game.power_bar(1)


def test_compute_move_out_of_home():
    game = Parchis(BoardConfig.ALL_AT_HOME, counter=NodeCounter())
    piece = game.board.get_piece(Y, 0)
    assert game.compute_move(piece, 5) == Box(INIT_BOXES[Y], BoxType.NORMAL, Color.NONE)


def test_compute_move_yinyang_moves_one_box():
    game = _game([10, 40])
    assert game.compute_move(game.board.get_piece(Y, 0), YINYANG) == _n(11)


def test_compute_move_special_dice_stays():
    game = _game([10, 40])
    assert game.compute_move(game.board.get_piece(Y, 0), 100) == _n(10)


def test_all_at_goal_is_won_by_first_player():
    game = Parchis(BoardConfig.ALL_AT_GOAL, counter=NodeCounter())
    assert game.game_over()
    assert game.winner() == 0
    assert game.color_winner() is Y
    assert not game.is_legal_move(game.board.get_piece(Y, 0), 1)


def test_normal_move_updates_state():
    game = _game([10, 40])
    game.move_piece(Y, 0, 1)
    moved = game.board.get_piece(Y, 0).box
    assert moved == game.compute_move(Piece(Y, _n(10)), 1)
    assert game.last_moves == [(Y, 0, _n(10), moved)]
    assert not game.dice.is_available(Y, 1)
    assert game.turn == 2
    assert game.current_color is B
    assert game.current_player == 1
    assert game.last_action == (Y, 0, 1)
    assert game.power(0) == 1


def test_moving_rival_piece_is_illegal():
    game = _game([10, 40])
    game.move_piece(B, 0, 1)
    assert game.illegal_move()
    assert game.winner() == 1
    assert game.game_over()


def test_skip_turn_when_nothing_can_move():
    game = Parchis(BoardConfig.ALL_AT_HOME, counter=NodeCounter())
    assert game.can_skip_turn(Y, 1)
    game.move_piece(Y, SKIP_TURN, 1)
    assert game.current_color is B
    assert game.turn == 2
    assert game.last_moves == []
    assert not game.dice.is_available(Y, 1)
    assert not game.illegal_move()


def test_skip_with_six_keeps_turn():
    game = Parchis(BoardConfig.ALL_AT_HOME, counter=NodeCounter())
    game.move_piece(Y, SKIP_TURN, 6)
    assert game.current_color is Y
    assert game.remember_6


def test_illegal_skip_loses():
    game = Parchis(BoardConfig.ALL_AT_HOME, counter=NodeCounter())
    assert not game.can_skip_turn(Y, 5)
    game.move_piece(Y, SKIP_TURN, 5)
    assert game.illegal_move()
    assert game.winner() == 1


def test_leave_home_with_five():
    game = Parchis(BoardConfig.ALL_AT_HOME, counter=NodeCounter())
    assert (Y, 0) in game.available_pieces(Y, 5)
    game.move_piece(Y, 0, 5)
    assert game.board.get_piece(Y, 0).box == Box(INIT_BOXES[Y], BoxType.NORMAL, Color.NONE)
    assert game.current_color is B


def test_eating_sends_rival_home_and_forces_twenty():
    game = _game([10, 40], blue=(12, 26))
    game.move_piece(Y, 0, 1)
    assert game.eating_move
    assert game.eaten_piece() == (B, 0)
    assert game.board.get_piece(B, 0).box == Box(0, BoxType.HOME, B)
    assert game.board.get_piece(Y, 0).box == _n(12)
    assert game.dice.get_dice(Y) == [20]
    assert game.current_color is Y
    assert not game.is_legal_move(game.board.get_piece(Y, 1), 1)
    assert game.available_pieces(Y, 20)


def test_no_eating_on_safe_box():
    game = _game([11, 40], blue=(13, 26))
    game.move_piece(Y, 0, 1)
    assert not game.eating_move
    assert game.eaten_piece() == (Color.NONE, 0)
    assert game.board.get_piece(B, 0).box == _n(13)
    assert len(game.analysis.box_state(_n(13))) == 2
    assert game.current_color is B


def test_wall_blocks_passage():
    game = _game([10, 40], blue=(11, 11))
    assert not game.is_legal_move(game.board.get_piece(Y, 0), 1)
    available = game.available_pieces(Y, 1)
    assert (Y, 0) not in available
    assert (Y, 1) in available


def test_reaching_goal_forces_ten():
    game = _game([Box(6, BoxType.FINAL_QUEUE, Y), 40])
    game.move_piece(Y, 0, 1)
    assert game.board.get_piece(Y, 0).box == Box(0, BoxType.GOAL, Y)
    assert game.goal_move
    assert game.dice.get_dice(Y) == [10]
    assert game.current_color is Y
    assert not game.game_over()


def test_bounce_from_goal():
    game = _game([Box(7, BoxType.FINAL_QUEUE, Y), 40])
    game.move_piece(Y, 0, 1)
    assert game.goal_bounce
    assert len(game.last_moves) == 2
    assert game.last_moves[0][3] == Box(0, BoxType.GOAL, Y)
    assert game.last_moves[1][2] == Box(0, BoxType.GOAL, Y)
    assert game.bounces[Y] == 1


def test_copy_is_independent():
    game = _game([10, 40])
    clone = copy.copy(game)
    assert clone == game
    clone.move_piece(Y, 0, 1)
    assert game.board.get_piece(Y, 0).box == _n(10)
    assert game.dice.is_available(Y, 1)
    assert game.turn == 1
    assert clone != game


def test_end_game_disconnects_current_player():
    game = _game([10, 40])
    game.end_game()
    assert game.winner() == 1
    assert game.game_over()


def test_playground_mode():
    game = _game([10, 40])
    game.set_playground_mode()
    assert game.playground_mode
    assert game.board == Board(BoardConfig.PLAYGROUND)
    game.move_piece(Y, 0, 1)
    assert game.dice.is_available(Y, 1)


def test_nothing_destroyed_or_acquired_initially():
    game = _game([10, 40])
    assert game.pieces_destroyed_last_move() == []
    assert not game.item_acquired()


def test_game_step_moves_and_notifies():
    players = [_Scripted("Ana"), _Scripted("Luis")]
    game = Parchis(BoardConfig.GROUPED2, players=players, counter=NodeCounter())
    for p in players:
        p.perceive(game)
    assert game.game_step() is True
    assert game.turn == 2
    assert [p.perceived for p in players] == [2, 2]
    assert players[1].player == game.current_player


def test_game_loop_on_finished_game(capsys):
    players = [_Scripted("Ana"), _Scripted("Luis")]
    game = Parchis(BoardConfig.ALL_AT_GOAL, players=players, counter=NodeCounter())
    game.game_loop()
    out = capsys.readouterr().out
    assert "¡¡¡ENHORABUENA, Ana!!!" in out
    assert "Ha ganado el jugador 1 (yellow)" in out
    assert game.turn == 1
    assert [p.perceived for p in players] == [1, 1]


def test_wait_for_players_returns_when_ready():
    players = [_Scripted("Ana"), _Scripted("Luis")]
    game = Parchis(BoardConfig.GROUPED2, players=players, counter=NodeCounter())
    game.viewers.append(_Scripted("Viewer"))
    game.wait_for_players()
    assert all(p.ready_for_next_turn() for p in players)


@pytest.mark.parametrize("dice", [1, 2, 4, 5, 6])
def test_available_pieces_are_legal(dice):
    game = Parchis(BoardConfig.GROUPED2, counter=NodeCounter())
    for color, idx in game.available_pieces(Y, dice):
        assert color in (Y, G)
        assert game.is_legal_move(game.board.get_piece(color, idx), dice)
import pytest

from parchis.board import Board, BoardConfig
from parchis.game import SKIP_TURN, Parchis
from parchis.nodecounter import NodeCounter
from parchis.search import (
    MoveCursor,
    ParchisSis,
    children,
    children_list,
    generate_next_move_descending,
)


@pytest.fixture
def counter():
    return NodeCounter()


@pytest.fixture
def grouped(counter):
    return Parchis(BoardConfig.GROUPED2, counter=counter)


@pytest.fixture
def at_home(counter):
    return Parchis(BoardConfig.ALL_AT_HOME, counter=counter)


def test_children_advance_turn(grouped, counter):
    kids = children_list(grouped, counter)
    assert kids
    assert all(k.state.turn == grouped.turn + 1 for k in kids)
    assert all(isinstance(k, ParchisSis) for k in kids)


def test_parent_is_unchanged(grouped, counter):
    children_list(grouped, counter)
    assert grouped.board == Board(BoardConfig.GROUPED2)
    assert grouped.turn == 1


def test_dice_values_are_descending_and_available(grouped, counter):
    kids = children_list(grouped, counter)
    dices = grouped.available_normal_dices(grouped.current_main_color)
    values = [k.dice_value for k in kids]
    assert values == sorted(values, reverse=True)
    assert all(v in dices for v in values)
    assert all(dices[k.cursor.dice_index] == k.dice_value for k in kids)


def test_moves_are_legal_pieces(grouped, counter):
    main = grouped.current_main_color
    for kid in children_list(grouped, counter):
        if kid.piece_id != SKIP_TURN:
            assert (kid.color, kid.piece_id) in grouped.available_pieces(main, kid.dice_value)


def test_no_duplicate_moves(grouped, counter):
    kids = children_list(grouped, counter)
    moves = [(k.color, k.piece_id, k.dice_value) for k in kids]
    assert len(moves) == len(set(moves))


def test_counter_counts_every_generation(grouped, counter):
    kids = children_list(grouped, counter)
    assert counter.generated == len(kids) + 1
    assert counter.running is False


def test_first_move_uses_last_dice(grouped, counter):
    dices = grouped.available_normal_dices(grouped.current_main_color)
    state, cursor, value = generate_next_move_descending(grouped, MoveCursor(), counter)
    assert cursor.dice_index == len(dices) - 1
    assert value == dices[-1]
    assert state.turn == grouped.turn + 1


def test_home_only_moves_with_five(at_home, counter):
    kids = children_list(at_home, counter)
    fives = [k for k in kids if k.dice_value == 5]
    others = [k for k in kids if k.dice_value != 5]
    assert fives and others
    assert all(k.piece_id != SKIP_TURN for k in fives)
    assert all(k.piece_id == SKIP_TURN for k in others)


def test_exhausted_cursor_gives_none(grouped, counter):
    last = children_list(grouped, counter)[-1]
    assert last.cursor.dice_index == 0
    assert generate_next_move_descending(grouped, last.cursor, counter) is None


def test_generator_matches_list(grouped, counter):
    listed = [(k.color, k.piece_id, k.dice_value) for k in children_list(grouped, counter)]
    generated = [(k.color, k.piece_id, k.dice_value) for k in children(grouped, counter)]
    assert listed == generated


def test_finished_game_has_no_children(grouped, counter):
    grouped.illegal_move_player = 0
    assert children_list(grouped, counter) == []
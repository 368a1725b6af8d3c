"""Enumeration of the states reachable from a game in one move."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Iterator

from .game import SKIP_TURN, Parchis
from .nodecounter import NodeCounter
from .piece import Color


@dataclass(frozen=True)
class MoveCursor:
    """Position of an enumeration: last piece moved and index of the dice used.

    The starting cursor has no colour, piece id -1 and dice index -1, which
    means "begin with the last available dice number".
    """

    color: Color = Color.NONE
    piece_id: int = -1
    dice_index: int = -1


@dataclass
class ParchisSis:
    """A child state together with the move that produced it."""

    state: Parchis
    color: Color
    piece_id: int
    dice_value: int
    cursor: MoveCursor


def _advance(game: Parchis, cursor: MoveCursor) -> tuple[MoveCursor, int] | None:
    """Next move after ``cursor``, walking dice numbers in descending order."""
    main = game.current_main_color
    dices = game.available_normal_dices(main)
    color, piece_id, index = cursor.color, cursor.piece_id, cursor.dice_index
    if index == -1:
        index = len(dices) - 1

    while True:
        value = dices[index]
        pieces = game.available_pieces(main, value)
        check_skip = False
        if pieces:
            if piece_id == -1:
                color, piece_id = pieces[0]
            elif (color, piece_id) in pieces:
                pos = pieces.index((color, piece_id))
                if pos == len(pieces) - 1:
                    check_skip = True
                else:
                    color, piece_id = pieces[pos + 1]
        else:
            check_skip = True

        if not check_skip:
            break
        if game.can_skip_turn(main, value) and piece_id != SKIP_TURN:
            color, piece_id = main, SKIP_TURN
            break
        if index == 0:
            return None
        index -= 1
        piece_id = -1

    return MoveCursor(color, piece_id, index), value


def generate_next_move_descending(
    game: Parchis,
    cursor: MoveCursor = MoveCursor(),
    counter: NodeCounter | None = None,
) -> tuple[Parchis, MoveCursor, int] | None:
    """Play the move following ``cursor`` on a copy of ``game``.

    Returns the new state, the cursor of the move played and the dice value
    used, or None once every move has been enumerated.
    """
    counter = game.counter if counter is None else counter
    counter.incr_generated(1)
    counter.begin_timer()
    try:
        found = _advance(game, cursor)
        if found is None:
            return None
        next_cursor, value = found
        child = copy.copy(game)
        child.move_piece(next_cursor.color, next_cursor.piece_id, value)
        return child, next_cursor, value
    finally:
        counter.end_timer()


def children(game: Parchis, counter: NodeCounter | None = None) -> Iterator[ParchisSis]:
    """Yield every state reachable from ``game`` with one move."""
    cursor = MoveCursor()
    while True:
        result = generate_next_move_descending(game, cursor, counter)
        if result is None:
            return
        state, cursor, value = result
        if state == game:
            return
        yield ParchisSis(state, cursor.color, cursor.piece_id, value, cursor)


def children_list(game: Parchis, counter: NodeCounter | None = None) -> list[ParchisSis]:
    """All states reachable from ``game`` with one move, as a list."""
    return list(children(game, counter))
"""Board state: pieces per colour, special items and traps."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Hashable, Iterable, Mapping

from .piece import Box, BoxType, Color, Piece, SpecialType

_COLOR_ORDER = (Color.BLUE, Color.RED, Color.GREEN, Color.YELLOW)
_DRAW_ORDER = (Color.YELLOW, Color.BLUE, Color.RED, Color.GREEN)
_DRAW_RANGES = {
    Color.YELLOW: range(1, 18),
    Color.BLUE: range(18, 35),
    Color.RED: range(35, 52),
    Color.GREEN: range(52, 69),
}


class BoardConfig(Enum):
    """Initial placements of the pieces."""

    GROUPED = auto()
    GROUPED2 = auto()
    GROUPED_LEGACY = auto()
    ALTERNED = auto()
    ALL_AT_HOME = auto()
    ALL_AT_GOAL = auto()
    DRAW_ONE_PIECE = auto()
    DRAW_TWO_PIECES = auto()
    CORRIDORS_ONE_PIECE = auto()
    CORRIDORS_TWO_PIECES = auto()
    TEST_BOO = auto()
    TEST_BOOM = auto()
    TEST_MUSHROOM = auto()
    TEST_SIZES = auto()
    CHANGE_SIZE = auto()
    PLAYGROUND = auto()


@dataclass(frozen=True)
class BoardTrap:
    """A trap of some kind placed on a box."""

    type: Hashable
    box: Box


@dataclass(frozen=True)
class SpecialItem:
    """An item lying on a box, waiting to be picked up."""

    type: Hashable
    box: Box


def _normal(color: Color, *nums: int) -> list[Piece]:
    return [Piece(color, Box(n, BoxType.NORMAL, Color.NONE)) for n in nums]


def _home(color: Color) -> Piece:
    return Piece(color, Box(0, BoxType.HOME, color))


def _sized(color: Color, *specs: tuple[int, SpecialType]) -> list[Piece]:
    return [Piece(color, Box(n, BoxType.NORMAL, Color.NONE), kind, 3) for n, kind in specs]


_N = SpecialType.NORMAL_PIECE
_S = SpecialType.SMALL_PIECE
_M = SpecialType.MEGA_PIECE

_BOOM_LAYOUT = {
    Color.BLUE: lambda: _normal(Color.BLUE, 18, 19, 20, 20),
    Color.RED: lambda: _normal(Color.RED, 24, 24, 25, 25),
    Color.GREEN: lambda: _normal(Color.GREEN, 21, 21, 22, 23),
    Color.YELLOW: lambda: [_home(Color.YELLOW)] + _normal(Color.YELLOW, 4, 13, 16),
}

_BOO_LAYOUT = {
    Color.BLUE: lambda: [_home(Color.BLUE)] + _normal(Color.BLUE, 19, 21, 34),
    Color.RED: lambda: [_home(Color.RED)] + _normal(Color.RED, 18, 47, 51),
    Color.GREEN: lambda: [_home(Color.GREEN)] + _normal(Color.GREEN, 16, 15, 68),
    Color.YELLOW: lambda: [_home(Color.YELLOW)] + _normal(Color.YELLOW, 20, 13, 17),
}

_FIXED_LAYOUTS = {
    BoardConfig.GROUPED: {
        Color.BLUE: lambda: _normal(Color.BLUE, 21, 30, 34),
        Color.RED: lambda: _normal(Color.RED, 38, 47, 51),
        Color.GREEN: lambda: _normal(Color.GREEN, 55, 64, 68),
        Color.YELLOW: lambda: _normal(Color.YELLOW, 4, 13, 17),
    },
    BoardConfig.GROUPED2: {
        Color.BLUE: lambda: _normal(Color.BLUE, 21, 30),
        Color.RED: lambda: _normal(Color.RED, 38, 47),
        Color.GREEN: lambda: _normal(Color.GREEN, 55, 64),
        Color.YELLOW: lambda: _normal(Color.YELLOW, 4, 13),
    },
    BoardConfig.GROUPED_LEGACY: {
        Color.BLUE: lambda: [_home(Color.BLUE)] + _normal(Color.BLUE, 21, 30, 34),
        Color.RED: lambda: [_home(Color.RED)] + _normal(Color.RED, 38, 47, 51),
        Color.GREEN: lambda: [_home(Color.GREEN)] + _normal(Color.GREEN, 55, 64, 68),
        Color.YELLOW: lambda: [_home(Color.YELLOW)] + _normal(Color.YELLOW, 4, 13, 17),
    },
    BoardConfig.TEST_BOO: _BOO_LAYOUT,
    BoardConfig.CHANGE_SIZE: _BOO_LAYOUT,
    BoardConfig.TEST_BOOM: _BOOM_LAYOUT,
    BoardConfig.TEST_MUSHROOM: _BOOM_LAYOUT,
    BoardConfig.TEST_SIZES: {
        Color.BLUE: lambda: _sized(Color.BLUE, (17, _M), (19, _S), (21, _S), (23, _M)),
        Color.RED: lambda: _sized(Color.RED, (1, _N), (4, _S), (4, _S), (7, _M)),
        Color.GREEN: lambda: _sized(Color.GREEN, (9, _M), (11, _S), (13, _S), (15, _M)),
        Color.YELLOW: lambda: _sized(Color.YELLOW, (25, _M), (27, _S), (29, _S), (31, _M)),
    },
    BoardConfig.PLAYGROUND: {
        Color.BLUE: lambda: _normal(Color.BLUE, 18, 19, 20, 20),
        Color.RED: lambda: _normal(Color.RED, 24, 24, 25, 25),
        Color.GREEN: lambda: _normal(Color.GREEN, 21, 21, 22, 23),
        Color.YELLOW: lambda: _normal(Color.YELLOW, 13, 14, 15, 16),
    },
}


class Board:
    """Pieces of every colour plus the items and traps lying on the board."""

    def __init__(
        self,
        config: BoardConfig | Mapping[Color, Iterable[Piece]] = BoardConfig.ALL_AT_HOME,
        special_items: Iterable[SpecialItem] = (),
        traps: Iterable[BoardTrap] = (),
    ):
        self.pieces: dict[Color, list[Piece]] = {}
        self.special_items: list[SpecialItem] = list(special_items)
        self.traps: list[BoardTrap] = list(traps)
        if isinstance(config, BoardConfig):
            self.set_from_config(config)
        else:
            self.pieces = {
                c: [Piece(p.color, p.box, p.type, p.turns_left) for p in ps]
                for c, ps in config.items()
            }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.pieces == other.pieces

    def __repr__(self) -> str:
        return f"Board(pieces={self.pieces!r})"

    def get_piece(self, color: Color, idx: int) -> Piece:
        return self.pieces[color][idx]

    def pieces_of(self, color: Color) -> tuple[Piece, ...]:
        """The pieces of ``color`` in index order."""
        return tuple(self.pieces[color])

    def set_piece_type(self, color: Color, idx: int, piece_type: SpecialType) -> None:
        self.pieces[color][idx].type = piece_type

    def set_piece_turns_left(self, color: Color, idx: int, turns_left: int) -> None:
        self.pieces[color][idx].turns_left = turns_left

    def decrease_piece_turns_left(self, color: Color, idx: int) -> None:
        """Count down one turn of the piece's special state, never below zero."""
        piece = self.pieces[color][idx]
        piece.turns_left = max(piece.turns_left - 1, 0)

    def delete_special_item(self, pos: int) -> None:
        del self.special_items[pos]

    def delete_trap(self, box: Box) -> None:
        """Remove the first trap on ``box``; raise ValueError if there is none."""
        for i, trap in enumerate(self.traps):
            if trap.box == box:
                del self.traps[i]
                return
        raise ValueError(f"no trap on {box}")

    def add_trap(self, trap_type: Hashable, box: Box) -> None:
        self.traps.append(BoardTrap(trap_type, box))

    def move_piece(self, color: Color, idx: int, box: Box) -> None:
        self.pieces[color][idx].box = box

    def set_from_config(self, config: BoardConfig) -> None:
        """Place the pieces as ``config`` prescribes; unknown layouts change nothing."""
        if config is BoardConfig.DRAW_TWO_PIECES:
            self._draw_on_normal_boxes(one=False)
        elif config is BoardConfig.DRAW_ONE_PIECE:
            self._draw_on_normal_boxes(one=True)
        elif config is BoardConfig.ALL_AT_HOME:
            self._draw_on_home_or_goal(at_home=True)
        elif config is BoardConfig.ALL_AT_GOAL:
            self._draw_on_home_or_goal(at_home=False)
        elif config is BoardConfig.CORRIDORS_ONE_PIECE:
            self._draw_on_corridors(one=True)
        elif config is BoardConfig.CORRIDORS_TWO_PIECES:
            self._draw_on_corridors(one=False)
        elif config in _FIXED_LAYOUTS:
            layout = _FIXED_LAYOUTS[config]
            self.pieces = {c: layout[c]() for c in _COLOR_ORDER}

    def _draw_on_normal_boxes(self, one: bool) -> None:
        copies = 1 if one else 2
        for color in _DRAW_ORDER:
            self.pieces[color] = [
                Piece(color, Box(n, BoxType.NORMAL, Color.NONE))
                for n in _DRAW_RANGES[color]
                for _ in range(copies)
            ]

    def _draw_on_home_or_goal(self, at_home: bool) -> None:
        kind = BoxType.HOME if at_home else BoxType.GOAL
        for color in _DRAW_ORDER:
            self.pieces[color] = [Piece(color, Box(0, kind, color)) for _ in range(4)]

    def _draw_on_corridors(self, one: bool) -> None:
        copies = 1 if one else 2
        for color in _DRAW_ORDER:
            self.pieces[color] = [
                Piece(color, Box(n, BoxType.FINAL_QUEUE, color))
                for n in range(1, 8)
                for _ in range(copies)
            ]
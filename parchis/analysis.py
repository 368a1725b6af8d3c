"""Queries on a board: occupation, walls, safe boxes and distances."""

from __future__ import annotations

from typing import Iterator

from .board import Board, BoardTrap
from .piece import Box, BoxType, Color, Piece, SpecialType

SAFE_BOXES = frozenset({4, 13, 17, 21, 30, 34, 38, 47, 51, 55, 64, 68})
"""Numbers of the normal boxes where pieces cannot be eaten."""

GAME_COLORS = (Color.YELLOW, Color.BLUE, Color.RED, Color.GREEN)
"""Colours in turn order."""

FINAL_BOXES = {
    Color.YELLOW: 68,
    Color.BLUE: 17,
    Color.RED: 34,
    Color.GREEN: 51,
}
"""Last normal box before each colour's final corridor."""

INIT_BOXES = {
    Color.YELLOW: 5,
    Color.BLUE: 22,
    Color.RED: 39,
    Color.GREEN: 56,
}
"""Box where each colour's pieces enter the board from home."""

BOARD_SIZE = 68
CORRIDOR_LENGTH = 8

_SCAN_ORDER = (Color.BLUE, Color.RED, Color.GREEN, Color.YELLOW)


def _path_target(end: Box) -> int:
    """Normal box number where a path towards ``end`` stops."""
    if end.type in (BoxType.FINAL_QUEUE, BoxType.GOAL):
        return FINAL_BOXES[end.col]
    return end.num


def _path_numbers(first: int, target: int) -> Iterator[int]:
    """Box numbers from ``first`` up to and including ``target``, wrapping at 68."""
    i = first
    for _ in range(BOARD_SIZE + 2):
        yield i
        if i == target:
            return
        i = i % BOARD_SIZE + 1
    raise ValueError(f"box {target} cannot be reached from box {first}")


class BoardAnalysis:
    """Read-only questions about the pieces placed on a board."""

    def __init__(self, board: Board):
        self.board = board

    def box_state(self, box: Box) -> list[tuple[Color, int]]:
        """Pieces standing on ``box`` as (colour, index) pairs."""
        return [
            (color, idx)
            for color in _SCAN_ORDER
            for idx, piece in enumerate(self.board.pieces.get(color, ()))
            if piece.box == box
        ]

    def is_safe_box(self, box: Box) -> bool:
        return box.type is BoxType.NORMAL and box.num in SAFE_BOXES

    def is_safe_piece(self, color: Color, piece: int) -> bool:
        return self.is_safe_box(self.board.get_piece(color, piece).box)

    def is_wall(self, box: Box) -> Color:
        """Colour of the wall on ``box``, or NONE if there is none."""
        if box.type in (BoxType.HOME, BoxType.GOAL):
            return Color.NONE
        occupation = self.box_state(box)
        if len(occupation) != 2 or occupation[0][0] != occupation[1][0]:
            return Color.NONE
        blockers_off = (SpecialType.BOO_PIECE, SpecialType.SMALL_PIECE)
        types = [self.board.get_piece(c, i).type for c, i in occupation]
        if any(t in blockers_off for t in types):
            return Color.NONE
        return occupation[0][0]

    def _walk(self, start: Box, end: Box, first: int) -> Iterator[int]:
        target = _path_target(end)
        if start.type is not BoxType.NORMAL or target == start.num:
            return iter(())
        return _path_numbers(first, target)

    def any_wall(self, start: Box, end: Box) -> list[Color]:
        """Colours of the walls found after ``start`` up to ``end``."""
        walls = []
        for n in self._walk(start, end, start.num % BOARD_SIZE + 1):
            wall = self.is_wall(Box(n, BoxType.NORMAL, Color.NONE))
            if wall is not Color.NONE:
                walls.append(wall)
        return walls

    def all_pieces_between(self, start: Box, end: Box) -> list[tuple[Color, int]]:
        """Every piece found after ``start`` up to ``end``, in path order."""
        pieces: list[tuple[Color, int]] = []
        for n in self._walk(start, end, start.num + 1):
            pieces.extend(self.box_state(Box(n, BoxType.NORMAL, Color.NONE)))
        return pieces

    def is_mega_wall(self, box: Box) -> Color:
        """Colour of a lone mega piece on ``box``, or NONE."""
        if box.type in (BoxType.HOME, BoxType.GOAL):
            return Color.NONE
        occupation = self.box_state(box)
        if len(occupation) == 1:
            color, idx = occupation[0]
            if self.board.get_piece(color, idx).type is SpecialType.MEGA_PIECE:
                return color
        return Color.NONE

    def any_mega_wall(self, start: Box, end: Box) -> list[Color]:
        walls = []
        for n in self._walk(start, end, start.num % BOARD_SIZE + 1):
            wall = self.is_mega_wall(Box(n, BoxType.NORMAL, Color.NONE))
            if wall is not Color.NONE:
                walls.append(wall)
        return walls

    def any_trap(self, start: Box, end: Box) -> list[BoardTrap]:
        """Traps lying after ``start`` up to ``end``, in path order."""
        traps = []
        for n in self._walk(start, end, start.num % BOARD_SIZE + 1):
            here = Box(n, BoxType.NORMAL, Color.NONE)
            traps.extend(t for t in self.board.traps if t.box == here)
        return traps

    def pieces_at_goal(self, color: Color) -> int:
        return len(self.box_state(Box(0, BoxType.GOAL, color)))

    def pieces_at_home(self, color: Color) -> int:
        return len(self.box_state(Box(0, BoxType.HOME, color)))

    def distance_to_goal(self, color: Color, box: Box) -> int:
        """Boxes a piece of ``color`` on ``box`` still has to travel."""
        final = FINAL_BOXES[color]
        if box.type is BoxType.NORMAL:
            if box.num > final:
                return BOARD_SIZE - box.num + final + CORRIDOR_LENGTH
            return final - box.num + CORRIDOR_LENGTH
        if box.type is BoxType.GOAL:
            return 0
        if box.type is BoxType.FINAL_QUEUE:
            return CORRIDOR_LENGTH - box.num
        return 1 + 65 + CORRIDOR_LENGTH

    def piece_distance_to_goal(self, color: Color, piece: int) -> int:
        return self.distance_to_goal(color, self.board.get_piece(color, piece).box)

    @staticmethod
    def _reference(box: Box) -> Box:
        if box.type in (BoxType.GOAL, BoxType.FINAL_QUEUE):
            return Box(FINAL_BOXES[box.col], BoxType.NORMAL, Color.NONE)
        if box.type is BoxType.HOME:
            return Box(INIT_BOXES[box.col], BoxType.NORMAL, Color.NONE)
        return box

    def distance_box_to_box(self, color: Color, box1: Box, box2: Box) -> int:
        """Distance a piece of ``color`` travels from ``box1`` to ``box2``; -1 if unreachable."""
        ref2 = self._reference(box2)
        ref1 = self._reference(box1)

        if box2.type is not BoxType.NORMAL and color != box2.col:
            return -1

        final = FINAL_BOXES[color]
        if ref1.num <= final < ref2.num:
            return -1
        if ref2.num < ref1.num <= final:
            return -1
        if ref1.num > ref2.num and final < ref2.num:
            return -1

        if ref2.num >= ref1.num:
            distance = ref2.num - ref1.num
        else:
            distance = BOARD_SIZE - box1.num + box2.num

        if box1.type is BoxType.HOME:
            distance += 1
        elif box1.type is BoxType.FINAL_QUEUE:
            distance -= box1.num
        elif box1.type is BoxType.GOAL:
            distance -= CORRIDOR_LENGTH

        if box2.type is BoxType.HOME:
            distance -= 1
        elif box2.type is BoxType.FINAL_QUEUE:
            distance += box2.num
        elif box2.type is BoxType.GOAL:
            distance += CORRIDOR_LENGTH

        return -1 if distance < 0 else distance

    def piece_distance(self, color1: Color, piece1: int, color2: Color, piece2: int) -> int:
        return self.distance_box_to_box(
            color1,
            self.board.get_piece(color1, piece1).box,
            self.board.get_piece(color2, piece2).box,
        )

    def compute_reverse_move(self, piece: Piece, dice_number: int) -> Box:
        """Box reached by moving ``piece`` ``dice_number`` boxes backwards."""
        color = piece.color
        box = piece.box
        final = FINAL_BOXES.get(color)

        if box.type is BoxType.GOAL:
            if 0 < dice_number <= 7:
                return Box(CORRIDOR_LENGTH - dice_number, BoxType.FINAL_QUEUE, color)
            if dice_number == 0:
                return Box(0, BoxType.GOAL, color)
            back = dice_number - CORRIDOR_LENGTH
            if final - back > 0:
                return Box(final - back, BoxType.NORMAL, Color.NONE)
            return Box(BOARD_SIZE - (back - final), BoxType.NORMAL, Color.NONE)

        if box.type is BoxType.FINAL_QUEUE:
            if dice_number < box.num:
                return Box(box.num - dice_number, BoxType.FINAL_QUEUE, color)
            back = dice_number - box.num
            if final - back > 0:
                return Box(final - back, BoxType.NORMAL, Color.NONE)
            return Box(BOARD_SIZE - (back - final), BoxType.NORMAL, Color.NONE)

        if box.type is BoxType.HOME:
            return box

        if box.num - dice_number > 0:
            return Box(box.num - dice_number, BoxType.NORMAL, Color.NONE)
        return Box(BOARD_SIZE - (dice_number - box.num), BoxType.NORMAL, Color.NONE)
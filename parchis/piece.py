"""Colours, boxes and pieces of the board."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Color(Enum):
    """Colours of the game, in board scanning order; NONE marks no colour."""

    BLUE = "blue"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    NONE = "none"

    def __str__(self) -> str:
        return self.value


class BoxType(Enum):
    """Kinds of box a piece can stand on."""

    NORMAL = "normal"
    HOME = "home"
    FINAL_QUEUE = "final_queue"
    GOAL = "goal"


class SpecialType(Enum):
    """Special states a piece can be in."""

    NORMAL_PIECE = "normal_piece"
    STAR_PIECE = "star_piece"
    BOO_PIECE = "boo_piece"
    SMALL_PIECE = "small_piece"
    MEGA_PIECE = "mega_piece"
    BANANED_PIECE = "bananed_piece"


_PARTNERS = {
    Color.YELLOW: Color.GREEN,
    Color.GREEN: Color.YELLOW,
    Color.BLUE: Color.RED,
    Color.RED: Color.BLUE,
    Color.NONE: Color.NONE,
}


def partner_color(color: Color) -> Color:
    """Return the colour played by the same player as ``color``."""
    return _PARTNERS[color]


@dataclass(frozen=True)
class Box:
    """A position on the board: number, kind and owning colour."""

    num: int = 0
    type: BoxType = BoxType.NORMAL
    col: Color = Color.NONE


@dataclass
class Piece:
    """A single piece with its colour, position and special state."""

    color: Color
    box: Box = field(default_factory=Box)
    type: SpecialType = SpecialType.NORMAL_PIECE
    turns_left: int = 0
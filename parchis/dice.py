"""Dice of the two players, with optional forced layers."""

from __future__ import annotations

import copy
from typing import Mapping, Sequence

from .piece import Color, partner_color

YINYANG = 50
"""Special face that moves a single box."""

DEFAULT_FACES = (1, 2, 4, 5, 6, YINYANG)


def _owner(color: Color) -> Color:
    if color not in (Color.YELLOW, Color.BLUE):
        return partner_color(color)
    return color


class Dice:
    """Available dice numbers per player colour.

    Each colour keeps a list of layers. The first layer is the normal dice;
    a second layer, when present, holds a forced number that must be used.
    """

    def __init__(self, layers: Mapping[Color, Sequence[Sequence[int]]] | None = None):
        if layers is None:
            layers = {
                Color.BLUE: [list(DEFAULT_FACES)],
                Color.YELLOW: [list(DEFAULT_FACES)],
            }
        self._layers = {c: [list(layer) for layer in ls] for c, ls in layers.items()}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dice):
            return NotImplemented
        return self._layers == other._layers

    def __deepcopy__(self, memo):
        return Dice(copy.deepcopy(self._layers, memo))

    def get_dice(self, color: Color) -> list[int]:
        """Numbers currently usable: the forced layer if there is one."""
        layers = self._layers[color]
        return list(layers[-1] if len(layers) == 2 else layers[0])

    def all_layers(self, color: Color) -> list[list[int]]:
        return [list(layer) for layer in self._layers[color]]

    def layers_size(self, color: Color) -> int:
        return len(self._layers[color])

    def remove_number(self, color: Color, n: int) -> None:
        """Spend ``n``; an emptied forced layer is dropped, an emptied dice regenerated."""
        owner = _owner(color)
        layers = self._layers[owner]
        if len(layers) == 2:
            layers[-1] = [v for v in layers[-1] if v != n]
            if not layers[-1]:
                layers.pop()
        else:
            layers[0] = [v for v in layers[0] if v != n]
            if not layers[0]:
                self.reset_dice(owner)

    def reset_dice(self, color: Color, new_dice: Sequence[int] = DEFAULT_FACES) -> None:
        self._layers[color][0] = list(new_dice)

    def is_available(self, color: Color, n: int) -> bool:
        layers = self._layers[_owner(color)]
        current = layers[-1] if len(layers) == 2 else layers[0]
        return n in current

    def add_number(self, color: Color, n: int) -> None:
        self._layers[_owner(color)][0].append(n)

    def force_number(self, color: Color, n: int) -> None:
        """Push a layer holding only ``n``."""
        self._layers[_owner(color)].append([n])
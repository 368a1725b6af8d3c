import copy

import pytest

from parchis.dice import DEFAULT_FACES, YINYANG, Dice
from parchis.piece import Color


def test_default_faces():
    dice = Dice()
    assert dice.get_dice(Color.BLUE) == [1, 2, 4, 5, 6, YINYANG]
    assert dice.get_dice(Color.YELLOW) == list(DEFAULT_FACES)
    assert dice.layers_size(Color.BLUE) == 1


def test_remove_maps_partner_color():
    dice = Dice()
    dice.remove_number(Color.RED, 4)
    assert not dice.is_available(Color.BLUE, 4)
    assert not dice.is_available(Color.RED, 4)
    assert dice.is_available(Color.YELLOW, 4)


def test_removing_all_regenerates():
    dice = Dice()
    for face in DEFAULT_FACES:
        dice.remove_number(Color.YELLOW, face)
    assert dice.get_dice(Color.YELLOW) == list(DEFAULT_FACES)


def test_forced_layer_is_used_then_dropped():
    dice = Dice()
    dice.force_number(Color.GREEN, 20)
    assert dice.layers_size(Color.YELLOW) == 2
    assert dice.get_dice(Color.YELLOW) == [20]
    assert dice.is_available(Color.GREEN, 20)
    assert not dice.is_available(Color.GREEN, 5)
    dice.remove_number(Color.YELLOW, 20)
    assert dice.layers_size(Color.YELLOW) == 1
    assert dice.get_dice(Color.YELLOW) == list(DEFAULT_FACES)


def test_add_number_goes_to_first_layer():
    dice = Dice()
    dice.add_number(Color.GREEN, 9)
    assert dice.is_available(Color.YELLOW, 9)
    assert dice.all_layers(Color.YELLOW)[0][-1] == 9


def test_custom_dice_is_copied():
    source = {Color.BLUE: [[3, 4]], Color.YELLOW: [[1]]}
    dice = Dice(source)
    dice.remove_number(Color.BLUE, 3)
    assert source[Color.BLUE] == [[3, 4]]
    assert dice.get_dice(Color.BLUE) == [4]


def test_reset_dice():
    dice = Dice()
    dice.reset_dice(Color.BLUE, [2, 2])
    assert dice.get_dice(Color.BLUE) == [2, 2]


def test_deepcopy_equal_and_independent():
    dice = Dice()
    clone = copy.deepcopy(dice)
    assert clone == dice
    clone.remove_number(Color.BLUE, 1)
    assert clone != dice


def test_unknown_color_raises():
    with pytest.raises(KeyError):
        Dice().get_dice(Color.RED)
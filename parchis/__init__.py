"""Board, dice, rules and one-move state enumeration for a two-player Parchís variant."""

__version__ = "0.1.0"
"""Base class for players taking part in a game."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class Player(ABC):
    """A participant that perceives the game and chooses moves."""

    def __init__(self, name: str, player_id: int = 0):
        self.name = name
        self.id = player_id
        self.game: Any = None
        self.player: int | None = None

    def perceive(self, game: Any) -> None:
        """Remember the current game and which player is to move."""
        self.game = game
        self.player = game.current_player

    @abstractmethod
    def move(self) -> bool:
        """Make a move on the perceived game; return whether one was made."""

    def ready_for_next_turn(self) -> bool:
        return True
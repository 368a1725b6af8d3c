"""Game state and rules of a two-player, four-colour parchís match."""

from __future__ import annotations

import copy
import sys
import time
from dataclasses import replace
from typing import Iterable, Sequence

from .analysis import FINAL_BOXES, INIT_BOXES, SAFE_BOXES, BoardAnalysis
from .board import Board, BoardConfig
from .dice import YINYANG, Dice
from .nodecounter import NodeCounter
from .piece import Box, BoxType, Color, Piece, SpecialType, partner_color
from .player import Player
from .powerbar import PowerBar

SKIP_TURN = 9999
"""Piece id used to pass the turn when no piece can move."""

MAX_BOUNCES = 30

_NEXT_COLOR = {
    Color.YELLOW: Color.BLUE,
    Color.BLUE: Color.RED,
    Color.RED: Color.GREEN,
    Color.GREEN: Color.YELLOW,
}
_PLAYER_OF = {Color.YELLOW: 0, Color.BLUE: 1, Color.RED: 1, Color.GREEN: 0}

_RED = "\033[1;31m"
_GREEN = "\033[1;32m"
_YELLOW = "\033[1;33m"
_BLUE = "\033[1;34m"
_MAGENTA = "\033[1;35m"
_CYAN = "\033[1;36m"
_WHITE = "\033[1;37m"
_ORANGE = "\033[1;38;5;208m"
_RESET = "\033[0m"

_COLOR_CODES = {
    Color.YELLOW: _YELLOW,
    Color.BLUE: _BLUE,
    Color.RED: _RED,
    Color.GREEN: _GREEN,
}


class Parchis:
    """A match: board, dice, power bars, players and turn bookkeeping."""

    def __init__(
        self,
        board: Board | BoardConfig = BoardConfig.ALL_AT_HOME,
        dice: Dice | None = None,
        players: Sequence[Player] = (),
        counter: NodeCounter | None = None,
    ):
        if isinstance(board, BoardConfig):
            self.board = Board(board)
        else:
            self.board = Board(board.pieces, board.special_items, board.traps)
        self.dice = Dice() if dice is None else copy.deepcopy(dice)
        self.players: list[Player] = list(players)
        self.viewers: list[Player] = []
        self.counter = counter if counter is not None else NodeCounter.get_instance()

        self.last_dice = -1
        self.current_player = 0
        self.current_color = Color.YELLOW

        self.illegal_move_player = -1
        self.disconnected_player = -1
        self.overbounce_player = -1
        self.overthinked_player = -1
        self.goal_move = False
        self.eating_move = False
        self.goal_bounce = False
        self.remember_6 = False
        self.bananed = False

        self.red_shell_move = False
        self.blue_shell_move = False
        self.star_move = False
        self.bullet_move = False
        self.horn_move = False
        self.shock_move = False
        self.boo_move = False
        self.mega_mushroom_move = False
        self.mushroom_move = False
        self.banana_move = False

        self.turn = 1
        self.bounces = {c: 0 for c in (Color.YELLOW, Color.BLUE, Color.RED, Color.GREEN)}
        self.update_board = True
        self.update_dice = True
        self.last_acquired = None
        self.playground_mode = False
        self.power_bars = [PowerBar(), PowerBar()]

        self.last_moves: list[tuple[Color, int, Box, Box]] = []
        self.last_action: tuple[Color, int, int] | None = None
        self._eaten: tuple[Color, int] = (Color.NONE, 0)
        self.pieces_destroyed_by_star: list[tuple[Color, int]] = []
        self.pieces_crushed_by_megamushroom: list[tuple[Color, int]] = []
        self.pieces_destroyed_by_red_shell: list[tuple[Color, int]] = []
        self.pieces_destroyed_by_blue_shell: list[tuple[Color, int]] = []
        self.pieces_destroyed_by_horn: list[tuple[Color, int]] = []

    def __copy__(self) -> Parchis:
        clone = Parchis.__new__(Parchis)
        clone.__dict__.update(self.__dict__)
        clone.board = Board(self.board.pieces, self.board.special_items, self.board.traps)
        clone.dice = copy.deepcopy(self.dice)
        clone.power_bars = [PowerBar(bar.power) for bar in self.power_bars]
        clone.bounces = dict(self.bounces)
        clone.last_moves = list(self.last_moves)
        clone.players = list(self.players)
        clone.viewers = list(self.viewers)
        for name in (
            "pieces_destroyed_by_star",
            "pieces_crushed_by_megamushroom",
            "pieces_destroyed_by_red_shell",
            "pieces_destroyed_by_blue_shell",
            "pieces_destroyed_by_horn",
        ):
            setattr(clone, name, list(getattr(self, name)))
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Parchis):
            return NotImplemented
        return self.board == other.board and self.turn == other.turn

    __hash__ = None  # type: ignore[assignment]

    @property
    def analysis(self) -> BoardAnalysis:
        return BoardAnalysis(self.board)

    @property
    def current_main_color(self) -> Color:
        """Colour whose dice the current player uses."""
        if self.current_color in (Color.YELLOW, Color.BLUE):
            return self.current_color
        return partner_color(self.current_color)

    # ----------------------------------------------------------- accessors

    def power_bar(self, player: int) -> PowerBar:
        return self.power_bars[player]

    def power_bar_of_color(self, color: Color) -> PowerBar:
        return self.power_bars[0] if color in (Color.YELLOW, Color.RED) else self.power_bars[1]

    def player_colors(self, player: int) -> list[Color]:
        return [Color.YELLOW, Color.GREEN] if player == 0 else [Color.BLUE, Color.RED]

    def available_normal_dices(self, color: Color) -> list[int]:
        """Dice numbers the player owning ``color`` can currently use."""
        owner = color if color in (Color.YELLOW, Color.BLUE) else partner_color(color)
        return self.dice.get_dice(owner)

    def is_normal_dice(self, dice: int) -> bool:
        return 1 <= dice <= 6

    def power(self, player: int) -> int:
        return self.power_bar(player).power

    def eaten_piece(self) -> tuple[Color, int]:
        return self._eaten if self.eating_move else (Color.NONE, 0)

    def pieces_destroyed_last_move(self) -> list[tuple[Color, int]]:
        for pieces in (
            self.pieces_destroyed_by_star,
            self.pieces_crushed_by_megamushroom,
            self.pieces_destroyed_by_red_shell,
            self.pieces_destroyed_by_blue_shell,
            self.pieces_destroyed_by_horn,
        ):
            if pieces:
                return list(pieces)
        return []

    def item_acquired(self) -> bool:
        return self.last_acquired is not None

    # --------------------------------------------------------------- rules

    def available_pieces(self, color: Color, dice_number: int) -> list[tuple[Color, int]]:
        """Pieces of ``color`` and its partner that may legally move ``dice_number``."""
        available = []
        for col in (color, partner_color(color)):
            for idx, piece in enumerate(self.board.pieces_of(col)):
                if self.is_legal_move(piece, dice_number):
                    available.append((col, idx))
        return available

    def can_skip_turn(self, color: Color, dice_number: int) -> bool:
        return (
            self.dice.is_available(color, dice_number)
            and not self.available_pieces(color, dice_number)
            and not self.available_pieces(partner_color(color), dice_number)
        )

    def compute_move(self, piece: Piece, dice_number: int) -> Box:
        """Box where ``piece`` lands after moving ``dice_number``."""
        return self._compute_move(piece, dice_number)[0]

    def _compute_move(self, piece: Piece, dice_number: int) -> tuple[Box, bool]:
        color = piece.color
        box = piece.box
        if dice_number >= 100:
            return box, False

        if dice_number == 6 and all(
            p.box.type is not BoxType.HOME for p in self.board.pieces_of(color)
        ):
            dice_number = 7
        if piece.type is SpecialType.STAR_PIECE:
            dice_number += 2
        elif piece.type is SpecialType.SMALL_PIECE:
            dice_number //= 2
        elif piece.type is SpecialType.BANANED_PIECE:
            dice_number = 0

        steps = 1 if dice_number == YINYANG else dice_number * 2
        bounced = False
        final_entry = FINAL_BOXES.get(color, 0)

        def into_corridor(count: int) -> Box:
            nonlocal bounced
            if count <= 7:
                return Box(count, BoxType.FINAL_QUEUE, color)
            if count == 8:
                return Box(0, BoxType.GOAL, color)
            bounced = True
            diff = 16 - count
            if diff > 0:
                return Box(diff, BoxType.FINAL_QUEUE, color)
            return Box(final_entry + diff, BoxType.NORMAL, Color.NONE)

        if box.type is BoxType.HOME:
            final = Box(INIT_BOXES[color], BoxType.NORMAL, Color.NONE)
        elif (
            box.type is BoxType.NORMAL
            and box.num <= final_entry < box.num + steps
        ):
            final = into_corridor(box.num + steps - final_entry)
        elif (
            box.type is BoxType.NORMAL
            and box.num + steps > 68
            and box.num + steps - 68 > final_entry
        ):
            final = into_corridor(box.num + steps - 68 - final_entry)
        elif box.type is BoxType.FINAL_QUEUE:
            final = into_corridor(box.num + steps)
        else:
            final = Box(1 + (box.num + steps - 1) % 68, BoxType.NORMAL, Color.NONE)

        if final.num <= 0 and final.type is BoxType.NORMAL:
            final = Box(68 + final.num, BoxType.NORMAL, Color.NONE)
        return final, bounced

    def is_legal_move(self, piece: Piece, dice_number: int) -> bool:
        """Whether ``piece`` may move ``dice_number`` in the current state."""
        color = piece.color
        box = piece.box
        if self.game_over():
            return False
        if color != self.current_color and color != partner_color(self.current_color):
            return False
        if not self.dice.is_available(color, dice_number):
            return False
        if self.eating_move and dice_number != 20:
            return False
        if self.goal_move and dice_number != 10:
            return False

        analysis = self.analysis
        final = self.compute_move(piece, dice_number)
        if box.type is BoxType.HOME and dice_number != 5:
            return False
        if box.type is BoxType.GOAL:
            return False
        if final.type not in (BoxType.GOAL, BoxType.HOME) and final != box:
            occupants = analysis.box_state(final)
            if len(occupants) == 2:
                if piece.type is not SpecialType.STAR_PIECE:
                    return False
                if all(
                    self.board.get_piece(c, i).type is SpecialType.STAR_PIECE
                    for c, i in occupants
                ):
                    return False
            elif len(occupants) == 1:
                if self.board.get_piece(*occupants[0]).type is SpecialType.MEGA_PIECE:
                    return False

        if any(wall != color for wall in analysis.any_wall(box, final)):
            return False

        if dice_number == 6:
            partner = partner_color(color)
            has_walls = any(
                analysis.is_wall(p.box) == color for p in self.board.pieces_of(color)
            ) or any(
                analysis.is_wall(p.box) == partner for p in self.board.pieces_of(partner)
            )
            if has_walls and analysis.is_wall(box) != color:
                return False
        return True

    def move_piece(self, color: Color, piece: int, dice_number: int) -> None:
        """Play ``piece`` of ``color`` with ``dice_number``, or pass with SKIP_TURN."""
        if self.game_over():
            return
        if piece == SKIP_TURN:
            if self.can_skip_turn(color, dice_number):
                self.eating_move = False
                self.goal_move = False
                self.remember_6 = dice_number == 6 or (
                    self.remember_6 and dice_number in (10, 20)
                )
                self.last_dice = dice_number
                self.last_moves = []
                if not self.playground_mode:
                    self.dice.remove_number(color, dice_number)
                self._next_turn()
                self.turn += 1
                self.last_action = (color, piece, dice_number)
            else:
                self.turn += 1
                self.illegal_move_player = self.current_player
                print(f"{_RED}ILLEGALLY TRIED TO SKIP TURN{_RESET}")
            return

        current = replace(self.board.get_piece(color, piece))
        self.last_dice = dice_number
        self.last_moves = []

        if not self.is_legal_move(current, dice_number):
            self.illegal_move_player = self.current_player
            return

        if dice_number < 100:
            self._apply_move(color, piece, current, dice_number)

        self._next_turn()
        self.turn += 1
        self.last_action = (color, piece, self.last_dice)

    def _apply_move(self, color: Color, piece: int, current: Piece, dice_number: int) -> None:
        start = current.box
        final, bounced = self._compute_move(current, dice_number)
        self.goal_bounce = bounced
        self.eating_move = False
        self.goal_move = False
        self.remember_6 = dice_number == 6 or (self.remember_6 and dice_number in (10, 20))

        analysis = self.analysis
        occupants = analysis.box_state(final)
        bar = self.power_bars[self.current_player]

        if current.type is SpecialType.STAR_PIECE:
            self.star_move = True
            target = Box(0, BoxType.GOAL, current.color) if bounced else final
            destroyed = analysis.all_pieces_between(start, target)
            origin = start
            for c, i in destroyed:
                victim = self.board.get_piece(c, i)
                if c != color and victim.type not in (
                    SpecialType.BOO_PIECE,
                    SpecialType.STAR_PIECE,
                ):
                    self.last_moves.append((color, piece, origin, victim.box))
                    origin = victim.box
                    home = Box(0, BoxType.HOME, c)
                    self.board.move_piece(c, i, home)
                    self.last_moves.append((c, i, origin, home))
            self.last_moves.append((color, piece, origin, final))
            self.pieces_destroyed_by_star = destroyed
            self.board.move_piece(color, piece, final)
            bar.increase(dice_number)
        else:
            if occupants and occupants[0][0] != color:
                victim = self.board.get_piece(*occupants[0])
                eater = self.board.get_piece(color, piece)
                if (
                    final.type is BoxType.NORMAL
                    and final.num not in SAFE_BOXES
                    and victim.type is not SpecialType.BOO_PIECE
                    and eater.type
                    not in (
                        SpecialType.BOO_PIECE,
                        SpecialType.SMALL_PIECE,
                        SpecialType.BANANED_PIECE,
                    )
                ):
                    self.eating_move = True
                    self._eaten = occupants[0]

            self.board.move_piece(color, piece, final)
            bar.increase(dice_number)

            if not bounced:
                self.last_moves.append((color, piece, start, final))
            else:
                goal_box = Box(0, BoxType.GOAL, color)
                self.last_moves.append((color, piece, start, goal_box))
                self.last_moves.append((color, piece, goal_box, final))
                self.bounces[color] += 1
                if self.bounces[color] > MAX_BOUNCES:
                    self.overbounce_player = self.current_player

            if self.eating_move:
                c, i = occupants[0]
                origin = self.board.get_piece(c, i).box
                home = Box(0, BoxType.HOME, c)
                self.board.move_piece(c, i, home)
                self.last_moves.append((c, i, origin, home))

        if final.type is BoxType.GOAL and not self.game_over():
            self.goal_move = True

        if not self.playground_mode:
            self.dice.remove_number(color, dice_number)

        if self.eating_move:
            bar.increase(15)
            self.dice.force_number(color, 20)
        if self.goal_move:
            self.dice.force_number(color, 10)
        if analysis.is_wall(final) is not Color.NONE:
            bar.increase(10)
        if analysis.is_safe_box(final):
            bar.increase(5)

    def _next_turn(self) -> None:
        for col in (self.current_color, partner_color(self.current_color)):
            for idx in range(len(self.board.pieces_of(col))):
                self.board.decrease_piece_turns_left(col, idx)
                if self.board.get_piece(col, idx).turns_left == 0:
                    self.board.set_piece_type(col, idx, SpecialType.NORMAL_PIECE)

        keeps_turn = self.last_dice == 6 or self.eating_move or self.goal_move or self.remember_6
        if not keeps_turn or self.bananed:
            self.current_color = _NEXT_COLOR[self.current_color]
            self.current_player = _PLAYER_OF[self.current_color]

    # ---------------------------------------------------------- game flow

    def game_loop(self) -> None:
        """Play turns until the game ends, then announce the result."""
        for player in self.players:
            player.perceive(self)

        banner = "+" * 38
        print(f"{_MAGENTA}{banner}{_RESET}")
        print(f"{_MAGENTA}¡COMIENZA LA PARTIDA!{_RESET}")
        print(f"{_MAGENTA}Jugador 1: {self.players[0].name}{_RESET}")
        print(f"{_MAGENTA}Jugador 2: {self.players[1].name}{_RESET}")
        print(f"{_MAGENTA}{banner}{_RESET}")

        while not self.game_over():
            self.game_step()

        winner = self.winner()
        loser = 1 + (0 if winner == 1 else 1)
        print(f"{_MAGENTA}{'+' * 24}{_RESET}")
        print(f"{_MAGENTA}La partida ha terminado{_RESET}")
        print(
            f"{_MAGENTA}Ha ganado el jugador {1 + winner} ({self.color_winner()}){_RESET}"
        )
        print(f"{_MAGENTA}¡¡¡ENHORABUENA, {self.players[winner].name}!!!{_RESET}")
        if self.illegal_move():
            print(f"{_ORANGE}El jugador {loser} ha hecho un movimiento ilegal{_RESET}")
        if self.over_bounce():
            print(f"{_ORANGE}El jugador {loser} ha excedido el límite de rebotes.{_RESET}")
        if self.over_thought():
            print(f"{_ORANGE}El jugador {loser} ha explotado de tanto pensar.{_RESET}")
        print(f"{_MAGENTA}{'+' * 24}{_RESET}")

    def game_step(self) -> bool:
        """Let the current player move and notify every participant."""
        colour = _COLOR_CODES.get(self.current_color, _GREEN)
        print(f"{_CYAN}----------------{_RESET}")
        print(f"{_CYAN}Turno: {self.turn}{_RESET}")
        print(
            f"{colour}Jugador actual: {self.current_player + 1} "
            f"({self.players[self.current_player].name}){_RESET}"
        )
        print(f"{_CYAN}----------------{_RESET}")

        mover = self.current_player
        self.counter.reset()
        start = time.perf_counter()
        self.players[self.current_player].move()
        elapsed = time.perf_counter() - start

        print(f"{_WHITE}===================={_RESET}")
        self.counter.print_results(sys.stdout)
        if self.counter.limit_exceeded():
            print(f"{_RED}Me parece que te pasaste de pensar... :({_RESET}")
            self.overthinked_player = mover
        print(f"{_WHITE}===================={_RESET}")
        print(f"{_WHITE}Tiempo de movimiento: {elapsed} segundos{_RESET}")

        for participant in self._participants():
            participant.perceive(self)
        self.wait_for_players()
        return True

    def _participants(self) -> Iterable[Player]:
        yield from self.players
        yield from self.viewers

    def wait_for_players(self) -> None:
        """Block until every player and viewer is ready for the next turn."""
        pending = list(self._participants())
        while True:
            pending = [p for p in pending if not p.ready_for_next_turn()]
            if not pending:
                return
            time.sleep(0.01)

    def game_over(self) -> bool:
        return self.winner() != -1

    def end_game(self) -> None:
        """Mark the current player as disconnected."""
        self.disconnected_player = self.current_player

    def winner(self) -> int:
        """Index of the winning player, or -1 while the game goes on."""
        for loser in (
            self.illegal_move_player,
            self.disconnected_player,
            self.overbounce_player,
            self.overthinked_player,
        ):
            if loser != -1:
                return 1 if loser == 0 else 0
        col = self.color_winner()
        if col in (Color.YELLOW, Color.RED):
            return 0
        if col in (Color.BLUE, Color.GREEN):
            return 1
        return -1

    def color_winner(self) -> Color:
        """First colour of the player with every piece at goal, or NONE."""
        analysis = self.analysis
        for player in (0, 1):
            col1, col2 = self.player_colors(player)
            if analysis.pieces_at_goal(col1) == len(
                self.board.pieces_of(col1)
            ) and analysis.pieces_at_goal(col2) == len(self.board.pieces_of(col2)):
                return col1
        return Color.NONE

    def illegal_move(self) -> bool:
        return self.illegal_move_player != -1

    def over_bounce(self) -> bool:
        return self.overbounce_player != -1

    def over_thought(self) -> bool:
        return self.overthinked_player != -1

    def set_playground_mode(self) -> None:
        """Switch to playground mode: dice are never spent and the board is reset."""
        self.playground_mode = True
        self.board = Board(BoardConfig.PLAYGROUND)
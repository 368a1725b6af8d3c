# parchis

A game model for a two-player Parchís variant. Each player controls two
colours. Player 0 has yellow and green, and player 1 has blue and red. The
package provides the board and its starting layouts, the layered dice, power
bars, the move rules, and functions that enumerate every state reachable in
one move. It has no runtime dependencies.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `parchis.piece` defines `Color`, `BoxType`, `SpecialType`, the frozen
  `Box` and the mutable `Piece` dataclasses, and `partner_color`, which
  returns the other colour of the same player.
- `parchis.board` defines `Board`, built from a `BoardConfig` such as
  `BoardConfig.GROUPED2` or `BoardConfig.ALL_AT_HOME`, or from a mapping of
  colours to pieces. It also defines `BoardTrap` and `SpecialItem`.
  `Board.delete_trap` raises `ValueError` if there is no trap on the given
  box.
- `parchis.dice` defines `Dice`. Each player starts with the faces 1, 2, 4,
  5, 6 and the special face `YINYANG`, which moves a single box. A number is
  removed once it is used, and the dice refill when they are empty.
  `force_number` adds a layer holding one number, for example the 10 for
  reaching the goal or the 20 for eating a piece. While that layer exists,
  it is the only one that can be played.
- `parchis.powerbar` defines `PowerBar`, which holds a power value capped at
  `PowerBar.MAX_POWER` (100).
- `parchis.analysis` defines `BoardAnalysis`, a read-only view of a board.
  It reports box occupation, walls, mega walls, traps along a path, safe
  boxes, distances to the goal, distances between boxes and reverse moves.
  It also defines the constants `SAFE_BOXES`, `FINAL_BOXES`, `INIT_BOXES`
  and `GAME_COLORS`.
- `parchis.game` defines `Parchis`, the game state. It provides
  `available_pieces`, `is_legal_move`, `compute_move`, `move_piece` (pass
  `SKIP_TURN` as the piece to pass the turn), `can_skip_turn`, `winner`,
  `color_winner`, and `game_loop` and `game_step` for games between `Player`
  objects. An illegal move, too many goal bounces (`MAX_BOUNCES`), a
  disconnection (`end_game`) or exceeding the node counter's limit makes
  the offending player lose.
- `parchis.player` defines the abstract `Player` class. A subclass
  implements `move`, which plays on `self.game`. A subclass may also
  override `ready_for_next_turn`.
- `parchis.search` defines `generate_next_move_descending`, `children` and
  `children_list`. These walk the dice numbers from the last to the first
  and give each reachable state as a `ParchisSis`, which holds `state`,
  `color`, `piece_id`, `dice_value` and `cursor`. The enumeration position
  is a `MoveCursor`.
- `parchis.nodecounter` defines `NodeCounter`. It counts generated and
  evaluated nodes and the time spent on them, and reports whether the node
  and time limits were reached or exceeded. `NodeCounter.get_instance()`
  returns a shared counter.

## Example

```python
from parchis.board import BoardConfig
from parchis.game import Parchis
from parchis.player import Player
from parchis.search import children, children_list


class FirstMove(Player):
    def move(self):
        for child in children(self.game):
            self.game.move_piece(child.color, child.piece_id, child.dice_value)
            return True
        return False


game = Parchis(BoardConfig.GROUPED2, players=[FirstMove("J1"), FirstMove("J2")])

for child in children_list(game):
    print(child.color, child.piece_id, child.dice_value)

game.game_loop()
print("winner:", game.winner())
```

## What it does not do

This package is only the game model. It has no command-line program, no
graphical board and no networked or remote play. It ships no ready-made AI
players or board evaluation functions. To play, subclass `Player`, for
example with a search built on `parchis.search`, and run `Parchis.game_loop`.
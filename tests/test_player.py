from types import SimpleNamespace

from parchis.player import Player


class RecordingPlayer(Player):
    def move(self):
        self.game.moves.append(self.name)
        return True


def test_perceive_stores_game_and_current_player():
    game = SimpleNamespace(current_player=1, moves=[])
    p = RecordingPlayer("J1", 3)
    Player.perceive(p, game)
    assert p.game is game
    assert p.player == 1
    assert p.id == 3


def test_perceive_follows_current_player():
    game = SimpleNamespace(current_player=0, moves=[])
    p = RecordingPlayer("J2")
    Player.perceive(p, game)
    assert p.player == 0
    game.current_player = 1
    Player.perceive(p, game)
    assert p.player == 1
    assert p.move() is True
    assert game.moves == ["J2"]


def test_default_ready_for_next_turn():
    p = RecordingPlayer("J1")
    assert Player.ready_for_next_turn(p) is True
    assert p.id == 0
    assert p.name == "J1"
import pytest

from solong.game import BonusGame, Direction, Game, Outcome
from solong.mapfile import BONUS_TILES, MapError, Tile, parse_map, GameMap


class ScriptedRng:
    def __init__(self, values):
        self.values = list(values)
        self.calls = []

    def randint(self, a, b):
        self.calls.append((a, b))
        return self.values.pop(0)


def mandatory_map(*rows):
    return parse_map("\n".join(rows) + "\n")


def bonus_map(*rows):
    return parse_map("\n".join(rows) + "\n", BONUS_TILES)


def test_direction_step():
    assert Direction.UP.step((2, 2)) == (1, 2)
    assert Direction.DOWN.step((2, 2)) == (3, 2)
    assert Direction.LEFT.step((2, 2)) == (2, 1)
    assert Direction.RIGHT.step((2, 2)) == (2, 3)


def test_game_requires_player():
    with pytest.raises(MapError):
        Game(GameMap.from_rows(["111", "101", "111"]))


def test_collect_coin_and_win(capsys):
    game = Game(mandatory_map("1111111", "1PC0E01", "1111111"))
    assert game.coins == 1
    assert game.door == (1, 4)
    assert game.move(Direction.RIGHT) is True
    assert game.coins == 0
    assert game.door_open
    assert game.player == (1, 2)
    assert game.map[1, 1] == Tile.EMPTY.value
    assert game.map[1, 2] == Tile.PLAYER.value
    assert game.move(Direction.RIGHT) is True
    assert game.move(Direction.RIGHT) is False
    assert game.outcome is Outcome.WIN
    assert game.movements == 2
    out = capsys.readouterr().out.splitlines()
    assert out == ["Movements counter: 1", "Movements counter: 2", "You won!!"]


def test_wall_blocks_player():
    game = Game(mandatory_map("1111111", "1PC0E01", "1111111"), echo=None)
    assert game.move(Direction.UP) is False
    assert game.player == (1, 1)
    assert game.movements == 0
    assert not game.is_over


def test_exit_closed_while_coins_remain():
    game = Game(mandatory_map("111111", "1PEC01", "100001", "111111"), echo=None)
    assert game.move(Direction.RIGHT) is False
    assert game.outcome is None
    assert game.map[1, 2] == Tile.EXIT.value
    assert game.player == (1, 1)


def test_no_moves_after_win():
    game = Game(mandatory_map("1111111", "1PCE001", "1111111"), echo=None)
    game.move(Direction.RIGHT)
    game.move(Direction.RIGHT)
    assert game.outcome is Outcome.WIN
    assert game.move(Direction.LEFT) is False
    assert game.player == (1, 2)


def test_bonus_walk_into_enemy_loses():
    game = BonusGame(bonus_map("11111", "1PZC1", "10E01", "11111"))
    assert game.move(Direction.RIGHT) is False
    assert game.outcome is Outcome.LOSE
    assert game.is_over
    assert game.map.rows[0][0] == "P"
    assert set("".join(game.map.rows)[1:]) == {"0"}
    assert game.movements == 0


def test_bonus_win_and_flag():
    game = BonusGame(bonus_map("1111111", "1PCE0Z1", "1111111"))
    assert game.flag_started is False
    assert game.move(Direction.RIGHT) is True
    assert game.flag_started is True
    assert game.movements == 1
    assert game.move(Direction.RIGHT) is False
    assert game.outcome is Outcome.WIN
    assert game.map[0, 0] == Tile.PLAYER.value
    assert game.move(Direction.LEFT) is False


def test_bonus_end_resets_board():
    game = BonusGame(bonus_map("11111", "1PZC1", "10E01", "11111"))
    game.end(Outcome.WIN)
    assert game.outcome is Outcome.WIN
    assert game.map.count(Tile.WALL) == 0
    assert game.map.count(Tile.PLAYER) == 1
    assert game.map.find(Tile.PLAYER) == (0, 0)


ENEMY_MAP = ("11111", "1P0C1", "10Z01", "1E001", "11111")


@pytest.mark.parametrize(
    "choice, target",
    [(1, (1, 2)), (2, (2, 3)), (3, (3, 2)), (4, (2, 1))],
)
def test_enemy_moves_to_free_cell(choice, target):
    game = BonusGame(bonus_map(*ENEMY_MAP))
    rng = ScriptedRng([choice])
    game.move_enemies(rng)
    assert game.map[target] == Tile.ENEMY.value
    assert game.map[2, 2] == Tile.EMPTY.value
    assert game.map.count(Tile.ENEMY) == 1
    assert rng.calls == [(1, 4)]


def test_enemy_blocked_by_wall():
    game = BonusGame(bonus_map("11111", "1PC01", "1Z001", "1E001", "11111"))
    before = game.map.rows
    game.move_enemies(ScriptedRng([4]))
    assert game.map.rows == before


def test_enemy_blocked_by_coin():
    game = BonusGame(bonus_map("11111", "1PC01", "10Z01", "1E001", "11111"))
    before = game.map.rows
    game.move_enemies(ScriptedRng([1]))
    assert game.map.rows == before


def test_enemy_catches_player():
    game = BonusGame(bonus_map("11111", "1CP01", "10Z01", "1E001", "11111"))
    game.move_enemies(ScriptedRng([1]))
    assert game.outcome is Outcome.LOSE
    assert game.map.count(Tile.ENEMY) == 0


def test_enemy_moving_right_is_not_moved_twice():
    game = BonusGame(bonus_map("111111", "1PC001", "1Z0Z01", "100E01", "111111"))
    rng = ScriptedRng([2, 1])
    game.move_enemies(rng)
    assert len(rng.calls) == 2
    assert game.map[2, 2] == Tile.ENEMY.value
    assert game.map[1, 3] == Tile.ENEMY.value
    assert game.map.count(Tile.ENEMY) == 2


def test_enemy_moving_down_carries_scan_to_next_row():
    game = BonusGame(bonus_map("111111", "1PC001", "1Z0Z01", "100E01", "111111"))
    rng = ScriptedRng([3])
    game.move_enemies(rng)
    assert len(rng.calls) == 1
    assert game.map[3, 1] == Tile.ENEMY.value
    assert game.map[2, 3] == Tile.ENEMY.value
    assert game.map[2, 1] == Tile.EMPTY.value


def test_enemies_frozen_after_game_over():
    game = BonusGame(bonus_map(*ENEMY_MAP))
    game.end(Outcome.LOSE)
    rng = ScriptedRng([1])
    game.move_enemies(rng)
    assert rng.calls == []


def test_enemy_count_preserved_with_default_rng():
    game = BonusGame(bonus_map("1111111", "1P000C1", "10Z0Z01", "1000E01", "1111111"))
    for _ in range(20):
        game.move_enemies()
    if game.outcome is None:
        assert game.map.count(Tile.ENEMY) == 2
        assert game.map.count(Tile.COIN) == 1
    else:
        assert game.outcome is Outcome.LOSE
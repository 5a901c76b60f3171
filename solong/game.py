"""Game state and rules: player movement, coins, the exit and enemies."""

from __future__ import annotations

import random
from enum import Enum
from typing import Callable, Optional, Protocol

from .mapfile import GameMap, MapError, Position, Tile


class Direction(Enum):
    """A step on the grid as a (row, col) offset."""

    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    def step(self, pos: Position) -> Position:
        """The position one step from ``pos`` in this direction."""
        d_row, d_col = self.value
        return pos[0] + d_row, pos[1] + d_col


class Outcome(Enum):
    """How a game ended."""

    LOSE = 0
    WIN = 1


class _RandInt(Protocol):
    def randint(self, a: int, b: int) -> int: ...


# Enemy move choices as drawn from 1..4: top, right, down, left.
_ENEMY_STEPS = {
    1: Direction.UP,
    2: Direction.RIGHT,
    3: Direction.DOWN,
    4: Direction.LEFT,
}

_ENEMY_BLOCKERS = frozenset(
    t.value for t in (Tile.WALL, Tile.COIN, Tile.EXIT, Tile.ENEMY, Tile.PLAYER)
)

Echo = Optional[Callable[[str], None]]


class Game:
    """The basic game: collect every coin, then walk into the exit."""

    def __init__(self, game_map: GameMap, echo: Echo = print) -> None:
        start = game_map.find(Tile.PLAYER)
        if start is None:
            raise MapError("Invalid number of items")
        self.map = game_map
        self.player: Position = start
        self.door: Optional[Position] = game_map.find(Tile.EXIT)
        self.coins = game_map.count(Tile.COIN)
        self.movements = 0
        self.outcome: Optional[Outcome] = None
        self._echo = echo

    @property
    def is_over(self) -> bool:
        return self.outcome is not None

    @property
    def door_open(self) -> bool:
        return self.coins == 0

    def _say(self, message: str) -> None:
        if self._echo is not None:
            self._echo(message)

    def _walk_to(self, target: Position) -> None:
        if self.map[target] == Tile.COIN.value:
            self.coins -= 1
        self.map[self.player] = Tile.EMPTY
        self.map[target] = Tile.PLAYER
        self.player = target
        self.movements += 1

    def move(self, direction: Direction) -> bool:
        """Try to move the player one step; return True if the player moved."""
        if self.is_over:
            return False
        target = direction.step(self.player)
        moved = False
        if self.map[target] not in (Tile.WALL.value, Tile.EXIT.value):
            self._walk_to(target)
            self._say(f"Movements counter: {self.movements}")
            moved = True
        if self.map[target] == Tile.EXIT.value and self.coins == 0:
            self._say("You won!!")
            self.outcome = Outcome.WIN
        return moved


class BonusGame(Game):
    """The extended game with enemies that wander and kill on contact."""

    def __init__(self, game_map: GameMap) -> None:
        super().__init__(game_map, echo=None)
        self.flag_started = False

    def end(self, outcome: Outcome) -> None:
        """Finish the game: clear the board and record the outcome."""
        for row in self.map.grid:
            row[:] = Tile.EMPTY.value * len(row)
        self.map[0, 0] = Tile.PLAYER
        self.outcome = outcome

    def move(self, direction: Direction) -> bool:
        """Try to move the player one step; return True if the player moved."""
        if self.is_over:
            return False
        target = direction.step(self.player)
        cell = self.map[target]
        if cell == Tile.ENEMY.value:
            self.end(Outcome.LOSE)
        if cell == Tile.EXIT.value and self.coins == 0:
            self.end(Outcome.WIN)
        moved = False
        if (
            cell not in (Tile.WALL.value, Tile.EXIT.value)
            and not self.is_over
        ):
            self._walk_to(target)
            moved = True
        if not self.flag_started and self.coins == 0:
            self.flag_started = True
        return moved

    def _enemy_to(self, source: Position, target: Position) -> None:
        cell = self.map[target]
        if cell not in _ENEMY_BLOCKERS:
            self.map[target] = Tile.ENEMY
            self.map[source] = Tile.EMPTY
        elif cell == Tile.PLAYER.value:
            self.end(Outcome.LOSE)

    def move_enemies(self, rng: Optional[_RandInt] = None) -> None:
        """Give every enemy one random step.

        The board is scanned in row-major order. A step right or down
        carries the scan cursor to the target cell, whether or not the
        enemy could actually move there.
        """
        if self.is_over:
            return
        source = rng if rng is not None else random
        grid = self.map.grid
        row = 0
        while row < len(grid):
            col = 0
            while row < len(grid) and col < len(grid[row]):
                if grid[row][col] == Tile.ENEMY.value:
                    direction = _ENEMY_STEPS[source.randint(1, 4)]
                    target = direction.step((row, col))
                    self._enemy_to((row, col), target)
                    if direction in (Direction.RIGHT, Direction.DOWN):
                        row, col = target
                col += 1
            row += 1
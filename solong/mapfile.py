"""Reading and validating ``.ber`` map files."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterator, Sequence, Union

TILE_SIZE = 64
MAX_WIDTH = 2560
MAX_HEIGHT = 1344
MAP_EXTENSION = ".ber"

Position = tuple[int, int]


class MapError(Exception):
    """Raised when a map file is missing, malformed or unplayable."""


class Tile(str, Enum):
    """Characters that make up a map."""

    EMPTY = "0"
    WALL = "1"
    PLAYER = "P"
    COIN = "C"
    EXIT = "E"
    ENEMY = "Z"


MANDATORY_TILES = "01PCE"
BONUS_TILES = "01PCEZ"

TileLike = Union[Tile, str]


def _char(tile: TileLike) -> str:
    return tile.value if isinstance(tile, Tile) else tile


@dataclass
class GameMap:
    """A rectangular, mutable grid of map characters, indexed by (row, col)."""

    grid: list[list[str]] = field(default_factory=list)

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "GameMap":
        return cls([list(row) for row in rows])

    @property
    def rows(self) -> tuple[str, ...]:
        return tuple("".join(row) for row in self.grid)

    @property
    def height(self) -> int:
        return len(self.grid)

    @property
    def width(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    @property
    def pixel_width(self) -> int:
        return self.width * TILE_SIZE

    @property
    def pixel_height(self) -> int:
        return self.height * TILE_SIZE

    def __getitem__(self, pos: Position) -> str:
        row, col = pos
        return self.grid[row][col]

    def __setitem__(self, pos: Position, tile: TileLike) -> None:
        row, col = pos
        self.grid[row][col] = _char(tile)

    def cells(self) -> Iterator[tuple[Position, str]]:
        """Yield every ((row, col), char) pair in row-major order."""
        for r, row in enumerate(self.grid):
            for c, char in enumerate(row):
                yield (r, c), char

    def positions(self, tile: TileLike) -> Iterator[Position]:
        """Yield every position holding ``tile`` in row-major order."""
        char = _char(tile)
        return (pos for pos, value in self.cells() if value == char)

    def find(self, tile: TileLike) -> Position | None:
        """Position of the first cell holding ``tile``, or None."""
        return next(self.positions(tile), None)

    def count(self, tile: TileLike) -> int:
        """Number of cells holding ``tile``."""
        return sum(1 for _ in self.positions(tile))

    def copy(self) -> "GameMap":
        """An independent copy of the grid."""
        return GameMap([list(row) for row in self.grid])

    def __str__(self) -> str:
        return "\n".join(self.rows)


def check_file_ext(file_name: str) -> bool:
    """True when the file name ends in ``.ber``."""
    return str(file_name).endswith(MAP_EXTENSION)


def check_len(rows: Sequence[str]) -> None:
    """Require every row to be as long as the first."""
    if not rows:
        raise MapError("Map empty")
    width = len(rows[0])
    if any(len(row) != width for row in rows):
        raise MapError("Not equal length")


def check_chars(rows: Sequence[str], allowed: str) -> None:
    """Require every character to belong to ``allowed``."""
    if any(char not in allowed for row in rows for char in row):
        raise MapError("Map contain undefined chars")


def check_walls(rows: Sequence[str]) -> None:
    """Require the map to be enclosed by walls."""
    wall = Tile.WALL.value
    first, last = rows[0], rows[-1]
    if any(a != wall or b != wall for a, b in zip(first, last)):
        raise MapError("Map not surrounded by walls")
    for row in rows[1:-1]:
        if row[0] != wall or row[-1] != wall:
            raise MapError("Map not surrounded by walls")


def count_items(rows: Sequence[str]) -> int:
    """Check item counts and return the number of coins.

    A map needs at least one coin, exactly one exit and exactly one player.
    """
    text = "".join(rows)
    coins = text.count(Tile.COIN.value)
    exits = text.count(Tile.EXIT.value)
    players = text.count(Tile.PLAYER.value)
    if coins < 1 or exits != 1 or players != 1:
        raise MapError("Invalid number of items")
    return coins


def reachable(rows: Sequence[str], start: Position) -> set[Position]:
    """Cells reachable from ``start`` by orthogonal steps.

    Walls stop the walk. An exit is reached when touched but is never
    walked through.
    """
    seen: set[Position] = set()
    queue: deque[Position] = deque([start])
    while queue:
        r, c = queue.popleft()
        if (r, c) in seen or not (0 <= r < len(rows) and 0 <= c < len(rows[r])):
            continue
        char = rows[r][c]
        if char == Tile.WALL.value:
            continue
        seen.add((r, c))
        if char == Tile.EXIT.value:
            continue
        queue.extend(((r + 1, c), (r, c - 1), (r, c + 1), (r - 1, c)))
    return seen


def check_accessibility(rows: Sequence[str], start: Position) -> None:
    """Require every coin and the exit to be reachable from ``start``."""
    reached = reachable(rows, start)
    targets = (Tile.COIN.value, Tile.EXIT.value)
    for r, row in enumerate(rows):
        for c, char in enumerate(row):
            if char in targets and (r, c) not in reached:
                raise MapError(
                    "You can't reach some coins or the exit in this map"
                )


def check_display(rows: Sequence[str]) -> None:
    """Require the map to fit on the screen."""
    width = len(rows[0]) * TILE_SIZE
    height = len(rows) * TILE_SIZE
    if width > MAX_WIDTH or height > MAX_HEIGHT:
        raise MapError("Map is too big")


def parse_map(text: str, allowed: str = MANDATORY_TILES) -> GameMap:
    """Parse and validate map text, returning the map."""
    lines = text.splitlines(keepends=True)
    if not lines:
        raise MapError("Map empty")
    if any(line.startswith("\n") for line in lines):
        raise MapError("empty line in map")
    rows = [part for part in text.split("\n") if part]
    check_len(rows)
    check_chars(rows, allowed)
    check_walls(rows)
    count_items(rows)
    game_map = GameMap.from_rows(rows)
    start = game_map.find(Tile.PLAYER)
    assert start is not None
    check_accessibility(rows, start)
    check_display(rows)
    return game_map


def load_map(path: str | Path, allowed: str = MANDATORY_TILES) -> GameMap:
    """Read a map file and validate it."""
    try:
        with open(path, encoding="latin-1", newline="") as handle:
            text = handle.read()
    except OSError as exc:
        raise MapError("Map file doesn't exist") from exc
    return parse_map(text, allowed)
"""Choosing, locating and loading the images that draw a map."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Iterable, Optional, Union

from .mapfile import GameMap, Tile

PathLike = Union[str, Path]
Loader = Callable[[Path], Any]

BACKGROUND_COLOR = (0x21, 0x1F, 0x30, 0xFF)
WELCOME_SIZE = (241, 146)
END_SIZE = (316, 95)

GROUND = "ground/ground"
PLAYER = "player/player"
ENEMY = "enemies/enemy"
COIN = "coins/coin-1"
DOOR_CLOSED = "door/door_closed"
DOOR_OPENED = "door/door_opened"
WELCOME = "additional/welcome"
YOU_WIN = "additional/you_win"
YOU_LOSE = "additional/you_lose"

WALL_PIECES = (
    "top_left",
    "top_right",
    "down_left",
    "down_right",
    "top",
    "left",
    "right",
    "down",
    "inside",
)

BASE_SPRITES = (
    GROUND,
    PLAYER,
    ENEMY,
    COIN,
    DOOR_CLOSED,
    *(f"walls/{piece}" for piece in WALL_PIECES),
    YOU_WIN,
    YOU_LOSE,
)

# Directories of the animation frames and other bare sprite names.
_BARE_DIRS = {
    "coin": "coins",
    "enemy": "enemies",
    "flag": "door",
    "rise": "door",
    "idle": "player",
    "welcome": "additional",
    "you_win": "additional",
    "you_lose": "additional",
}

_TILE_SPRITES = {
    Tile.COIN.value: COIN,
    Tile.PLAYER.value: PLAYER,
    Tile.EXIT.value: DOOR_CLOSED,
    Tile.ENEMY.value: ENEMY,
}


def wall_piece(row: int, col: int, rows: int, cols: int) -> str:
    """Which wall image fits the cell at (row, col) of a rows x cols map."""
    last_row = row == rows - 1
    last_col = col == cols - 1
    if row == 0 and col == 0:
        return "top_left"
    if row == 0 and last_col:
        return "top_right"
    if last_row and col == 0:
        return "down_left"
    if last_row and last_col:
        return "down_right"
    if row == 0:
        return "top"
    if col == 0:
        return "left"
    if last_col:
        return "right"
    if last_row:
        return "down"
    return "inside"


def tile_sprite(game_map: GameMap, row: int, col: int) -> str:
    """Name of the image drawn for the map cell at (row, col)."""
    char = game_map[row, col]
    if char == Tile.WALL.value:
        piece = wall_piece(row, col, game_map.height, game_map.width)
        return f"walls/{piece}"
    return _TILE_SPRITES.get(char, GROUND)


def _half(value: int) -> int:
    # Halve, rounding toward zero.
    return -((-value) // 2) if value < 0 else value // 2


def centered(
    width: int, height: int, item_width: int, item_height: int
) -> tuple[int, int]:
    """Top-left corner that centres an item inside a width x height area."""
    return _half(width - item_width), _half(height - item_height)


def texture_path(root: PathLike, name: str) -> Path:
    """File of the sprite ``name`` under the texture tree of ``root``.

    ``name`` is either a path such as ``walls/top`` or a bare name such as
    an animation frame ``coin-3``, whose directory is known.
    """
    if not name:
        raise ValueError("empty sprite name")
    if "/" in name:
        relative = name
    else:
        key = name if name in _BARE_DIRS else name.rsplit("-", 1)[0]
        directory = _BARE_DIRS.get(key)
        if directory is None:
            raise ValueError(f"unknown sprite {name!r}")
        relative = f"{directory}/{name}"
    return Path(root) / "textures" / f"{relative}.png"


def _pygame_loader(path: Path) -> Any:
    import pygame

    try:
        surface = pygame.image.load(str(path))
    except (pygame.error, FileNotFoundError) as exc:
        raise OSError(f"cannot load {path}") from exc
    if pygame.display.get_init() and pygame.display.get_surface() is not None:
        surface = surface.convert_alpha()
    return surface


class SpriteSheet:
    """Loads sprite images on first use and keeps them for reuse."""

    def __init__(self, root: PathLike, loader: Optional[Loader] = None) -> None:
        self.root = Path(root)
        self._loader: Loader = loader if loader is not None else _pygame_loader
        self._images: dict[str, Any] = {}

    def get(self, name: str) -> Any:
        """The image for ``name``, loading it if needed.

        Raises OSError when the image cannot be loaded.
        """
        image = self._images.get(name)
        if image is None:
            path = texture_path(self.root, name)
            try:
                image = self._loader(path)
            except OSError as exc:
                raise OSError(f"Loading textures PNG's: {path}") from exc
            if image is None:
                raise OSError(f"Loading textures PNG's: {path}")
            self._images[name] = image
        return image

    def preload(self, names: Iterable[str] = BASE_SPRITES) -> None:
        """Load every image in ``names`` up front."""
        for name in names:
            self.get(name)

    @property
    def loaded(self) -> frozenset[str]:
        """Names of the images loaded so far."""
        return frozenset(self._images)

    def __contains__(self, name: object) -> bool:
        return name in self._images

    def clear(self) -> None:
        """Drop every loaded image."""
        self._images.clear()
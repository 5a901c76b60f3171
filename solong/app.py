"""The game window, its input handling and the command-line entry point."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

from .animations import (
    FrameCycle,
    coin_cycle,
    enemy_cycle,
    flag_cycle,
    idle_cycle,
    rise_cycle,
)
from .game import BonusGame, Direction, Game, Outcome
from .mapfile import (
    BONUS_TILES,
    MANDATORY_TILES,
    TILE_SIZE,
    GameMap,
    MapError,
    Tile,
    check_file_ext,
    load_map,
)
from .sprites import (
    BACKGROUND_COLOR,
    DOOR_CLOSED,
    DOOR_OPENED,
    END_SIZE,
    WELCOME,
    WELCOME_SIZE,
    YOU_LOSE,
    YOU_WIN,
    SpriteSheet,
    centered,
    tile_sprite,
)

ENEMY_MOVE_INTERVAL = 50
FPS = 60

_KEY_MOVES = {
    "w": Direction.UP,
    "up": Direction.UP,
    "s": Direction.DOWN,
    "down": Direction.DOWN,
    "a": Direction.LEFT,
    "left": Direction.LEFT,
    "d": Direction.RIGHT,
    "right": Direction.RIGHT,
}

Placement = tuple[str, tuple[int, int]]


class App:
    """A playable window around a map.

    The basic game shows the map straight away and closes when won. The
    extended game (``bonus=True``) opens on a welcome page, starts on the
    space key, animates its sprites, moves enemies and ends on a win or
    lose page.
    """

    def __init__(
        self,
        game_map: GameMap,
        bonus: bool = False,
        root: Optional[str | Path] = None,
        sprites: Optional[SpriteSheet] = None,
        echo: Optional[Callable[[str], None]] = print,
        rng: Any = None,
    ) -> None:
        self.bonus = bonus
        self.game: Game = BonusGame(game_map) if bonus else Game(game_map, echo=echo)
        if root is None:
            root = Path("bonus" if bonus else "mandatory")
        self.sprites = sprites if sprites is not None else SpriteSheet(root)
        self.running = True
        self.started = not bonus
        self.frames: dict[str, int] = {}
        self._echo = echo
        self._rng = rng
        self._coin = coin_cycle()
        self._idle = idle_cycle()
        self._enemy = enemy_cycle()
        self._rise = rise_cycle()
        self._flag = flag_cycle()
        self._enemy_time = 0

    @property
    def title(self) -> str:
        return "SO_LONG_BONUS" if self.bonus else "SO_LONG"

    @property
    def size(self) -> tuple[int, int]:
        return self.game.map.pixel_width, self.game.map.pixel_height

    @property
    def status(self) -> Optional[str]:
        """The movement counter shown in the window, if any."""
        if self.bonus and self.started and not self.game.is_over:
            return f"Movements: {self.game.movements}"
        return None

    def _close(self, goodbye: bool = False) -> None:
        self.running = False
        if goodbye and not self.bonus and self._echo is not None:
            self._echo("Good bye!!")

    def handle_key(self, key: str) -> None:
        """React to a pressed key, given by its name (``"w"``, ``"up"``...)."""
        name = key.lower()
        if not self.started:
            if name == "space":
                self.started = True
            elif name == "escape":
                self._close()
            return
        direction = _KEY_MOVES.get(name)
        if direction is not None:
            self.game.move(direction)
            if not self.bonus and self.game.outcome is Outcome.WIN:
                self._close()
        elif name == "escape":
            self._close()

    def _advance(self, cycle: FrameCycle, paused: bool) -> None:
        shown = cycle.tick(paused)
        if shown is not None:
            self.frames[cycle.prefix] = shown

    def update(self) -> None:
        """Advance one loop iteration: animations and enemy moves."""
        if not self.bonus or not self.started:
            return
        game = self.game
        assert isinstance(game, BonusGame)
        over = game.is_over
        self._advance(self._coin, False)
        self._advance(self._idle, over)
        self._advance(self._enemy, over)
        if self._enemy_time == ENEMY_MOVE_INTERVAL and not game.is_over:
            game.move_enemies(self._rng)
            self._enemy_time = 0
        self._enemy_time += 1
        if game.flag_started:
            rise_done = self._rise.finished
            self._advance(self._rise, game.is_over)
            if rise_done:
                self._advance(self._flag, game.is_over)

    def _exit_sprite(self) -> str:
        if not self.bonus:
            return DOOR_OPENED if self.game.door_open else DOOR_CLOSED
        if "flag" in self.frames:
            return self._flag.sprite_name(self.frames["flag"])
        if "rise" in self.frames:
            return self._rise.sprite_name(self.frames["rise"])
        return DOOR_CLOSED

    def _sprite_for(self, row: int, col: int, char: str) -> str:
        if char == Tile.EXIT.value:
            return self._exit_sprite()
        if self.bonus:
            animated = {
                Tile.COIN.value: self._coin,
                Tile.PLAYER.value: self._idle,
                Tile.ENEMY.value: self._enemy,
            }.get(char)
            if animated is not None and animated.prefix in self.frames:
                return animated.sprite_name(self.frames[animated.prefix])
        return tile_sprite(self.game.map, row, col)

    def scene(self) -> list[Placement]:
        """The images to draw, with the pixel position of each."""
        width, height = self.size
        if self.bonus and not self.started:
            return [(WELCOME, centered(width, height, *WELCOME_SIZE))]
        if self.bonus and self.game.is_over:
            page = YOU_WIN if self.game.outcome is Outcome.WIN else YOU_LOSE
            return [(page, centered(width, height, *END_SIZE))]
        return [
            (self._sprite_for(row, col, char), (col * TILE_SIZE, row * TILE_SIZE))
            for (row, col), char in self.game.map.cells()
        ]

    def _draw(self, screen: Any, font: Any) -> None:
        backdrop = self.bonus and (not self.started or self.game.is_over)
        screen.fill(BACKGROUND_COLOR if backdrop else (0, 0, 0))
        for name, position in self.scene():
            screen.blit(self.sprites.get(name), position)
        text = self.status
        if text is not None:
            screen.blit(font.render(text, True, (255, 255, 255)), (10, 10))

    def run(self) -> None:
        """Open the window and play until it is closed."""
        import pygame

        pygame.init()
        try:
            flags = pygame.RESIZABLE if self.bonus else 0
            screen = pygame.display.set_mode(self.size, flags)
            pygame.display.set_caption(self.title)
            pygame.key.set_repeat(300, 60)
            font = pygame.font.Font(None, 28)
            clock = pygame.time.Clock()
            while self.running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._close(goodbye=True)
                    elif event.type == pygame.KEYDOWN:
                        self.handle_key(pygame.key.name(event.key))
                if not self.running:
                    break
                self.update()
                self._draw(screen, font)
                pygame.display.flip()
                clock.tick(FPS)
        finally:
            pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Play the map named on the command line; ``--bonus`` for enemies."""
    args = list(sys.argv[1:] if argv is None else argv)
    bonus = "--bonus" in args
    args = [arg for arg in args if arg != "--bonus"]
    if len(args) != 1:
        return 0
    path = args[0]
    try:
        if not check_file_ext(path):
            raise MapError("File extension not supported")
        game_map = load_map(path, BONUS_TILES if bonus else MANDATORY_TILES)
        App(game_map, bonus=bonus).run()
    except (MapError, OSError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    return 0
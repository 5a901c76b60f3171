# solong

A small tile-based game. You walk a character around a walled map, pick up
every coin, and then step onto the exit to win. A bonus mode adds enemies
that wander the map and animated sprites.

## Installing

```
pip install .
```

This also installs `pygame`, which draws the window. For the tests:

```
pip install .[test]
pytest
```

## Playing

```
solong path/to/level.ber
solong --bonus path/to/level.ber
```

The map file name must end in `.ber`. If not exactly one map file is given,
the command does nothing and exits with status 0. When the map cannot be
read or is rejected, `ERROR: <reason>` is printed on standard error and the
command exits with status 1.

Controls: `W`/`A`/`S`/`D` or the arrow keys move the player one tile;
`Escape` closes the window.

### Basic mode

The map is shown at once. Each step prints `Movements counter: N` on standard
output. The exit cannot be walked onto; once every coin has been collected
its sprite changes to an open door, and stepping towards it prints
`You won!!` and closes the window. Closing the window yourself prints
`Good bye!!`.

### Bonus mode (`--bonus`)

A welcome page is shown first; press `Space` to start (`Escape` closes).
The window shows `Movements: N` in its top-left corner. Coins, the player
and enemies (`Z`) are animated. About every 50 frames (the loop runs at 60
frames a second) every enemy takes one random step up, down, left or right
onto empty floor. Walking into an enemy, or an enemy stepping onto the
player, loses the game. After the last coin is taken a flag rises over the
exit and then waves; stepping onto the exit then wins. The game ends on a
"you win" or "you lose" page; `Escape` closes the window.

## Images

No images are included with the package. The game reads PNG files from a
`textures` directory under `mandatory/` (basic mode) or `bonus/` (bonus mode),
relative to the directory it is started from, for example
`mandatory/textures/walls/top_left.png`. A missing image ends the game with
an error. The files looked for are:

- both modes: `ground/ground.png`, `player/player.png`, `coins/coin-1.png`,
  `door/door_closed.png`, and under `walls/`: `top_left`, `top_right`,
  `down_left`, `down_right`, `top`, `left`, `right`, `down`, `inside`
  (`.png`);
- basic mode: `door/door_opened.png`;
- bonus mode: `enemies/enemy.png`, `coins/coin-1.png` … `coin-7.png`,
  `enemies/enemy-1.png` … `enemy-6.png`, `player/idle-1.png` …
  `idle-9.png`, `door/rise-1.png` … `rise-6.png`, `door/flag-1.png` …
  `flag-7.png`, and `additional/welcome.png`, `additional/you_win.png`,
  `additional/you_lose.png`.

## Map format

A map is a rectangle of characters, one row per line, with no blank lines:

| Char | Meaning              |
|------|----------------------|
| `1`  | wall                 |
| `0`  | empty floor          |
| `P`  | player start         |
| `C`  | coin                 |
| `E`  | exit                 |
| `Z`  | enemy (bonus only)   |

Example:

```
1111111111
1P0C00C001
1000110001
10C00000E1
1111111111
```

A map is rejected when:

- the file cannot be opened, or is empty;
- a line is blank;
- a row has a different length from the others;
- it holds a character outside the allowed set (`01PCE`, or `01PCEZ` in
  bonus mode);
- it is not fully enclosed by walls;
- it does not have exactly one `P`, exactly one `E` and at least one `C`;
- some coin or the exit cannot be reached from the player (the walk may
  touch the exit but not pass through it);
- it is larger than 2560 × 1344 pixels at 64 pixels a tile (40 × 21 tiles).

## Using the library

`solong.mapfile` reads and checks maps. `load_map(path, allowed)` and
`parse_map(text, allowed)` return a `GameMap` or raise `MapError`;
`MANDATORY_TILES` and `BONUS_TILES` are the two character sets. The single
checks (`check_len`, `check_chars`, `check_walls`, `count_items`,
`check_accessibility`, `check_display`, `reachable`) are available on their
own and take a list of row strings.

```python
from solong.game import Direction, Game, Outcome
from solong.mapfile import MapError, parse_map

try:
    game_map = parse_map("11111\n1PCE1\n11111\n")
except MapError as err:
    print(err)

game = Game(game_map, echo=None)
game.move(Direction.RIGHT)      # picks up the coin
game.move(Direction.RIGHT)      # reaches the open exit
assert game.outcome is Outcome.WIN
```

`GameMap` is indexed by `(row, col)` and offers `find`, `count`,
`positions`, `cells` and `copy`.

`solong.game` holds the rules: `Game` (basic mode, which reports through its
`echo` callable) and `BonusGame`, with `end(outcome)` and
`move_enemies(rng)`, where `rng` is anything with a `randint(a, b)` method
(the `random` module by default).

`solong.animations` has `FrameCycle` and the factories `coin_cycle`,
`enemy_cycle`, `flag_cycle`, `idle_cycle` and `rise_cycle`; `tick(paused)`
returns the frame to draw on that tick, or `None`.

`solong.sprites` chooses images: `tile_sprite`, `wall_piece`, `centered`,
`texture_path`, and `SpriteSheet(root, loader)`, which loads images on first
use (with `pygame` unless another loader is given).

`solong.app.App` wraps a map in a window; `run()` opens it, while
`handle_key(name)`, `update()` and `scene()` can be driven without a display.
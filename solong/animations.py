"""Frame timers for the animated sprites of the extended game.

Each animation is driven by the main loop: it is ticked once per loop
iteration and, every ``interval`` ticks, yields the next frame to draw.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class FrameCycle:
    """A looping (or one-shot) frame counter.

    ``interval`` is the number of ticks between two frames, ``length`` the
    number of steps in one cycle and ``frames`` the number of those steps
    that have an image; steps past ``frames`` draw nothing.  A cycle made
    with ``once=True`` stops after its first full pass and sets
    ``finished``.

    The tick counter only fires when it lands exactly on ``interval``: a
    paused tick at that moment lets the counter run past it, after which
    the cycle never fires again.
    """

    prefix: str
    interval: int
    length: int
    frames: int
    once: bool = False
    finished: bool = field(default=False, init=False)
    _ticks: int = field(default=0, init=False, repr=False)
    _step: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.interval < 1 or self.length < 1 or self.frames < 1:
            raise ValueError("interval, length and frames must be positive")
        if self.frames > self.length:
            raise ValueError("a cycle cannot hold more frames than steps")

    @property
    def step(self) -> int:
        """The step that will be shown next."""
        return self._step

    def sprite_name(self, frame: int) -> str:
        """Name of the image for ``frame``, numbered from 1."""
        if not 0 <= frame < self.frames:
            raise IndexError(f"{self.prefix} has no frame {frame}")
        return f"{self.prefix}-{frame + 1}"

    @property
    def sprite_names(self) -> tuple[str, ...]:
        """Names of every image of this animation in order."""
        return tuple(self.sprite_name(frame) for frame in range(self.frames))

    def tick(self, paused: bool = False) -> Optional[int]:
        """Advance one tick; return the frame to draw now, or None."""
        shown: Optional[int] = None
        if self._ticks == self.interval and not paused and not self.finished:
            step = self._step
            if step < self.frames:
                shown = step
            self._ticks = 0
            self._step += 1
            if self._step == self.length:
                self._step = 0
                if self.once:
                    self.finished = True
        self._ticks += 1
        return shown


def coin_cycle() -> FrameCycle:
    """Spinning coin: seven frames, one every seven ticks."""
    return FrameCycle("coin", interval=7, length=7, frames=7)


def enemy_cycle() -> FrameCycle:
    """Enemy: six frames and a blank step, one every nine ticks."""
    return FrameCycle("enemy", interval=9, length=7, frames=6)


def flag_cycle() -> FrameCycle:
    """Waving flag on the open exit: seven frames, one every eight ticks."""
    return FrameCycle("flag", interval=8, length=7, frames=7)


def idle_cycle() -> FrameCycle:
    """Idle player: nine frames, one every seven ticks."""
    return FrameCycle("idle", interval=7, length=9, frames=9)


def rise_cycle() -> FrameCycle:
    """Flag rising once the last coin is taken; plays a single time."""
    return FrameCycle("rise", interval=8, length=7, frames=6, once=True)
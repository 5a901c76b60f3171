"""A tile-based coin-collecting game: map checks, game rules, animation timers and a pygame window."""

__version__ = "0.1.0"
__all__ = ["__version__"]
"""
Delve package root.

Simulation core of a single-level, turn-based dungeon crawl: level
generation, the entity store, melee combat and the hostile turn sweep.
Rendering, windowing and raw input polling live outside this package.
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]

"""Tile grid, colours, vertex geometry and draw buffers for a GPU-rendered terminal."""

__version__ = "0.1.0"

__all__ = ["model", "color", "vertices", "grid", "ranges", "graphics"]
"""Grouping of drawable tiles into runs that share drawing attributes.

Each run becomes one draw call. A run's ``indices`` is the number of
element indices it covers: six per quad for glyphs and backgrounds,
twelve per tile for line graphics (two quads each).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, List

from .grid import Grid, compare_background_attributes, compare_foreground_attributes
from .model import Glyph, GraphicsState, Mark

_SPACE = ord(" ")
_QUAD_INDICES = 6
_LINE_GRAPHICS_INDICES = 12


@dataclass
class AttributeRange:
    """A run of tiles drawn with the attributes of ``glyph``."""

    glyph: Glyph
    indices: int


def _glyphs(grid: Grid) -> Iterator[Glyph]:
    for row in range(grid.rows):
        for col in range(grid.cols):
            yield grid.tile_at(row, col).glyph


def _runs(
    grid: Grid,
    drawable: Callable[[Glyph], bool],
    differs: Callable[[Glyph, Glyph], bool],
    indices_per_tile: int,
) -> List[AttributeRange]:
    if grid.rows <= 0 or not grid.cells:
        return []

    current = grid.tile_at(0, 0).glyph.copy()
    count = 0
    ranges: List[AttributeRange] = []

    for glyph in _glyphs(grid):
        if not drawable(glyph):
            continue
        if differs(current, glyph):
            ranges.append(AttributeRange(current, count * indices_per_tile))
            current = glyph.copy()
            count = 1
        else:
            count += 1

    # The first run is always emitted, even when it covers nothing.
    if count or not ranges:
        ranges.append(AttributeRange(current, count * indices_per_tile))
    return ranges


def compute_ranges(state: GraphicsState, grid: Grid, foreground: bool) -> List[AttributeRange]:
    """Runs of glyph foregrounds or of coloured backgrounds, in grid order."""
    if foreground:

        def drawable(glyph: Glyph) -> bool:
            return bool(
                glyph.codepoint
                and glyph.codepoint != _SPACE
                and not glyph.mark & Mark.LINE_GRAPHICS
            )

        return _runs(grid, drawable, compare_foreground_attributes, _QUAD_INDICES)

    def drawable_background(glyph: Glyph) -> bool:
        attributes = glyph.attributes
        if not (glyph.background.custom or attributes.reverse or attributes.blink):
            return False
        return not (attributes.blink and not state.blink.on)

    return _runs(grid, drawable_background, compare_background_attributes, _QUAD_INDICES)


def compute_line_graphics_ranges(grid: Grid) -> List[AttributeRange]:
    """Runs of line-graphics tiles sharing foreground attributes, in grid order."""

    def drawable(glyph: Glyph) -> bool:
        return bool(glyph.mark & Mark.LINE_GRAPHICS)

    return _runs(grid, drawable, compare_foreground_attributes, _LINE_GRAPHICS_INDICES)
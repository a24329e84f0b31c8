"""The tile grid: lazily created cells, cursor handling and tile updates."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from .model import (
    Glyph,
    GraphicsError,
    GraphicsState,
    Mark,
    TerminalConfig,
    Tile,
    TileUpdate,
)
from .vertices import background_vertices, foreground_vertices

_SPACE = ord(" ")


def _int_div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def _same_color(first, second) -> bool:
    return first.custom == second.custom and first.color == second.color


def compare_background_attributes(first: Glyph, second: Glyph) -> bool:
    """True if the two glyphs differ in anything that affects the background."""
    if (first.mark & Mark.ACCENT) != (second.mark & Mark.ACCENT):
        return True
    if (
        first.attributes.blink != second.attributes.blink
        or first.attributes.reverse != second.attributes.reverse
    ):
        return True
    if not _same_color(first.background, second.background):
        return True
    return not _same_color(first.foreground, second.foreground)


def compare_foreground_attributes(first: Glyph, second: Glyph) -> bool:
    """True if the two glyphs differ in anything that affects the foreground."""
    if (first.mark & Mark.ACCENT) != (second.mark & Mark.ACCENT):
        return True
    if first.attributes != second.attributes:
        return True
    return not _same_color(first.foreground, second.foreground)


@dataclass(eq=False)
class Grid:
    """A grid of tiles measured in pixels and cells, including one gap column and row."""

    cells: List[List[Optional[Tile]]] = field(default_factory=list)
    tile_width: int = 0
    tile_height: int = 0
    width: int = 0
    height: int = 0
    cols: int = 0
    rows: int = 0
    x_offset: int = 0
    y_offset: int = 0
    border_pixel: int = 0
    cursor: Optional[Tile] = None
    pending: Dict[Tuple[int, int], TileUpdate] = field(default_factory=dict)
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)

    def reset(self) -> None:
        """Drop all tiles and measurements."""
        self.cells = []
        self.tile_width = self.tile_height = 0
        self.width = self.height = 0
        self.cols = self.rows = 0
        self.x_offset = self.y_offset = 0
        self.border_pixel = 0
        self.cursor = None
        self.pending = {}

    def tile(self, row: int, col: int) -> Tile:
        """Return the tile at a position, creating it if needed."""
        if row < 0 or col < 0 or row >= self.rows or col >= self.cols:
            raise IndexError(f"tile ({row}, {col}) outside a {self.rows}x{self.cols} grid")
        while len(self.cells) <= row:
            self.cells.append([])
        cols = self.cells[row]
        while len(cols) <= col:
            cols.append(None)
        if cols[col] is None:
            cols[col] = Tile()
        return cols[col]

    def tile_at(self, row: int, col: int) -> Tile:
        """Return an existing tile without creating it."""
        if row < 0 or col < 0:
            raise IndexError(f"negative tile position ({row}, {col})")
        tile = self.cells[row][col]
        if tile is None:
            raise IndexError(f"tile ({row}, {col}) has not been created")
        return tile

    def position_of(self, tile: Optional[Tile]) -> Optional[Tuple[int, int]]:
        """Return (row, col) of a tile in this grid, or None."""
        if tile is None:
            return None
        for row, cols in enumerate(self.cells):
            for col, candidate in enumerate(cols):
                if candidate is tile:
                    return row, col
        return None

    def _refresh_vertices(
        self, state: GraphicsState, tile: Tile, glyph: Glyph, col: int, row: int
    ) -> None:
        # Empty and blank cells are never drawn in the foreground.
        if glyph.codepoint and glyph.codepoint != _SPACE:
            tile.foreground_vertices = foreground_vertices(state, self, glyph, col, row)
        else:
            tile.foreground_vertices = [0.0] * 24
        tile.background_vertices = background_vertices(state, self, glyph, col, row)

    def _move_cursor(self, state: GraphicsState, update: TileUpdate) -> bool:
        if not (0 <= update.row < self.rows and 0 <= update.col < self.cols):
            if self.cursor is not None:
                self.cursor.glyph.attributes.blink = False
                self.cursor.dirty = True
                self.cursor = None
            return True

        tile = self.tile_at(update.row, update.col)
        old = self.cursor
        if old is not None:
            old.glyph.attributes.blink = False
            old.dirty = True

        self.cursor = tile
        tile.glyph.attributes.blink = True
        tile.glyph.mark |= Mark.ACCENT
        tile.dirty = True

        if self.position_of(old) != (update.row, update.col):
            state.blink.on = True
            state.blink.last_blink = self.clock()
        return True

    def _apply(self, state: GraphicsState, update: TileUpdate) -> bool:
        changed = False
        tile = self.tile_at(update.row, update.col)

        if (
            tile.glyph.codepoint != update.glyph.codepoint
            or tile.glyph.mark != update.glyph.mark
        ):
            self._refresh_vertices(state, tile, update.glyph, update.col, update.row)
            tile.dirty = True

        if compare_foreground_attributes(
            tile.glyph, update.glyph
        ) or compare_background_attributes(tile.glyph, update.glyph):
            tile.dirty = True

        if tile.dirty:
            glyph = update.glyph.copy()
            if tile is self.cursor:
                glyph.attributes.blink = tile.glyph.attributes.blink
            tile.glyph = glyph
            changed = True

        # Keep the right gap tile in step with the last real column.
        if update.col == self.cols - 2:
            mark = update.glyph.mark
            update.col += 1
            if mark & Mark.LINE_HORIZONTAL:
                if not mark & Mark.LINE_GRAPHICS:
                    update.glyph.codepoint = _SPACE
            else:
                update.glyph.codepoint = 0
            changed = self._apply(state, update) or changed

        # Keep the bottom gap tile in step with the last real row.
        if update.row == self.rows - 2:
            glyph = update.glyph
            update.row += 1
            if not glyph.mark & Mark.LINE_VERTICAL and not (
                update.col == 0 and glyph.codepoint in (0, _SPACE)
            ):
                update.glyph = Glyph()
            changed = self._apply(state, update) or changed

        return changed

    def update_tile(self, state: GraphicsState, update: TileUpdate) -> bool:
        """Apply an update to its tile (and gap tiles); return True if anything changed."""
        if update.cursor:
            return self._move_cursor(state, update)
        work = TileUpdate(
            glyph=update.glyph.copy(), row=update.row, col=update.col, cursor=False
        )
        return self._apply(state, work)

    def _require_viewport(self, state: GraphicsState):
        if state.viewport is None:
            raise GraphicsError("graphics state has no viewport")
        return state.viewport

    def update(self, config: TerminalConfig, state: GraphicsState, text_width: int) -> None:
        """Rebuild the grid for the viewport size and the configured font size."""
        if text_width <= 0:
            raise ValueError("text width must be positive")
        viewport = self._require_viewport(state)
        state.current_font = state.font_instance(config.font_size)
        state.glyph_cache.clear()

        self.reset()
        self.tile_width = text_width
        self.tile_height = config.font_size + abs(state.current_font.descender)
        if self.tile_height <= 0:
            raise GraphicsError("tile height must be positive")
        self.border_pixel = self.tile_width // 3
        self.width = viewport.width - self.border_pixel * 2
        self.height = viewport.height - self.border_pixel * 2

        # One extra column and row for the gap tiles.
        self.cols = _int_div(self.width, text_width) + 1
        self.rows = _int_div(self.height, self.tile_height) + 1

        for row in range(self.rows):
            for col in range(self.cols):
                tile = self.tile(row, col)
                self._refresh_vertices(state, tile, tile.glyph, col, row)

    def update_backdrop(
        self, config: TerminalConfig, state: GraphicsState, text_width: int
    ) -> None:
        """Rebuild this grid as the accent backdrop that extends past the borders."""
        if text_width <= 0:
            raise ValueError("text width must be positive")
        viewport = self._require_viewport(state)
        if state.current_font is None:
            raise GraphicsError("no font instance selected")

        self.reset()
        self.tile_width = text_width
        self.tile_height = config.font_size + abs(state.current_font.descender)
        if self.tile_height <= 0:
            raise GraphicsError("tile height must be positive")
        self.border_pixel = self.tile_width // 3

        border_cols = (self.border_pixel + self.tile_width - 1) // self.tile_width
        border_cols_pixel = border_cols * self.tile_width
        border_rows = (self.border_pixel + self.tile_height - 1) // self.tile_height
        border_rows_pixel = border_rows * self.tile_height

        self.x_offset = border_cols_pixel - self.border_pixel
        self.y_offset = border_rows_pixel - self.border_pixel
        self.width = viewport.width + border_cols_pixel * 2
        self.height = viewport.height + border_rows_pixel * 2

        self.cols = _int_div(self.width, text_width) + 2
        self.rows = _int_div(self.height, self.tile_height) + 2

        for row in range(self.rows):
            for col in range(self.cols):
                tile = self.tile(row, col)
                tile.glyph.mark = Mark.ACCENT | Mark.LINE_GRAPHICS
                tile.glyph.attributes.reverse = True
                tile.background_vertices = background_vertices(
                    state, self, tile.glyph, col, row
                )
                if row == 2 and tile.glyph.codepoint == ord("x"):
                    tile.foreground_vertices = foreground_vertices(
                        state, self, tile.glyph, col, row
                    )
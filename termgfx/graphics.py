"""Vertex, index and colour buffers for the main, elevated and backdrop grids."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterator, List, Sequence, Tuple

from .color import glyph_color, gradient_color
from .grid import Grid
from .model import (
    Box,
    Color,
    Font,
    GraphicsApi,
    GraphicsError,
    GraphicsState,
    Mark,
    TerminalConfig,
    Tile,
    Viewport,
)
from .ranges import AttributeRange, compute_line_graphics_ranges, compute_ranges

_SPACE = ord(" ")
_DIM_DEPTH = 0.45
_DIM_ALPHA = 0.7
_GRADIENT_INTERVAL = 0.1


@dataclass
class GraphicsForeground:
    """Glyph quads (first set) and line-graphics rectangles (second set)."""

    needs_init: bool = True
    vertices: List[float] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)
    vertices2: List[float] = field(default_factory=list)
    indices2: List[int] = field(default_factory=list)
    ranges: List[AttributeRange] = field(default_factory=list)
    ranges2: List[AttributeRange] = field(default_factory=list)
    colors: List[float] = field(default_factory=list)
    colors2: List[float] = field(default_factory=list)


@dataclass
class GraphicsBackground:
    """Coloured quads behind tiles that need a non-default background."""

    needs_init: bool = True
    vertices: List[float] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)
    ranges: List[AttributeRange] = field(default_factory=list)
    colors: List[float] = field(default_factory=list)


@dataclass
class GraphicsData:
    """Foreground and background buffers of one grid."""

    foreground: GraphicsForeground = field(default_factory=GraphicsForeground)
    background: GraphicsBackground = field(default_factory=GraphicsBackground)


@dataclass
class Dim:
    """A full-screen translucent quad used to dim what lies behind it."""

    needs_init: bool = True
    vertices: List[float] = field(default_factory=list)
    colors: List[float] = field(default_factory=list)


@dataclass
class Boxes:
    """Highlight boxes and their vertex and colour buffers."""

    needs_init: bool = True
    vertices: List[float] = field(default_factory=list)
    colors: List[float] = field(default_factory=list)
    data: List[Box] = field(default_factory=list)


def create_dim_data() -> Dim:
    """Two triangles covering the screen in translucent black."""
    z = _DIM_DEPTH
    corners = [
        (-1.0, -1.0),
        (1.0, -1.0),
        (1.0, 1.0),
        (-1.0, -1.0),
        (1.0, 1.0),
        (-1.0, 1.0),
    ]
    vertices = [value for x, y in corners for value in (x, y, z)]
    colors = [value for _ in corners for value in (0.0, 0.0, 0.0, _DIM_ALPHA)]
    return Dim(vertices=vertices, colors=colors)


def _tiles(grid: Grid) -> Iterator[Tuple[int, int, Tile]]:
    for row, cols in enumerate(grid.cells):
        for col, tile in enumerate(cols):
            if tile is not None:
                yield row, col, tile


def _rgb_repeated(color: Color, times: int) -> List[float]:
    return [color.r, color.g, color.b] * times


def _quad_indices(offset: int) -> List[int]:
    return [offset, offset + 1, offset + 2, offset, offset + 2, offset + 3]


class Graphics:
    """Drawing data derived from the grids: state, per-grid buffers, dim and boxes."""

    def __init__(
        self, config: TerminalConfig, fonts: Sequence[Font], now: float = 0.0
    ) -> None:
        if not fonts:
            raise GraphicsError("no monospace font available")
        self.state = GraphicsState(fonts=list(fonts))

        accent = self.state.accent_gradient
        accent.color = gradient_color(accent, config.accents)
        accent.interval = _GRADIENT_INTERVAL
        accent.last_change = now

        background = replace(accent)
        background.color = gradient_color(background, config.backgrounds)
        self.state.background_gradient = background

        self.state.blink.last_blink = now

        self.main = GraphicsData()
        self.elevated = GraphicsData()
        self.backdrop = GraphicsData()
        self.dim = create_dim_data()
        self.boxes = Boxes()

    # Buffers -------------------------------------------------------------------------------

    def _update_foreground(
        self, config: TerminalConfig, grid: Grid, foreground: GraphicsForeground, shift: int
    ) -> None:
        vertices: List[float] = []
        indices: List[int] = []
        vertices2: List[float] = []
        indices2: List[int] = []
        colors: List[float] = []
        colors2: List[float] = []
        line_offset = 0
        glyph_offset = 0

        for row, col, tile in _tiles(grid):
            glyph = tile.glyph
            if not glyph.codepoint or glyph.codepoint == _SPACE:
                continue
            color = glyph_color(config, self.state, glyph, True, col + shift, row, grid)
            if glyph.mark & Mark.LINE_GRAPHICS:
                vertices2.extend(tile.foreground_vertices[:24])
                indices2.extend(_quad_indices(line_offset) + _quad_indices(line_offset + 4))
                line_offset += 8
                colors2.extend(_rgb_repeated(color, 8))
            else:
                vertices.extend(tile.foreground_vertices[:20])
                indices.extend(_quad_indices(glyph_offset))
                glyph_offset += 4
                colors.extend(_rgb_repeated(color, 4))

        foreground.vertices = vertices
        foreground.indices = indices
        foreground.vertices2 = vertices2
        foreground.indices2 = indices2
        foreground.colors = colors
        foreground.colors2 = colors2

    def _update_background(
        self, config: TerminalConfig, grid: Grid, background: GraphicsBackground, shift: int
    ) -> None:
        vertices: List[float] = []
        indices: List[int] = []
        colors: List[float] = []
        offset = 0

        for row, col, tile in _tiles(grid):
            glyph = tile.glyph
            attributes = glyph.attributes
            if not (glyph.background.custom or attributes.reverse or attributes.blink):
                continue
            vertices.extend(tile.background_vertices[:12])
            indices.extend(_quad_indices(offset))
            offset += 4
            color = glyph_color(config, self.state, glyph, False, col + shift, row, grid)
            colors.extend(_rgb_repeated(color, 4))

        background.vertices = vertices
        background.indices = indices
        background.colors = colors

    def _update_boxes(self, config: TerminalConfig, grid: Grid) -> None:
        vertices: List[float] = []
        colors: List[float] = []

        for box in self.boxes.data:
            upper_left, lower_right = box.upper_left, box.lower_right
            if min(upper_left.x, upper_left.y, lower_right.x, lower_right.y) < 0:
                continue
            vertices.extend(box.inner_vertices[:18])
            vertices.extend(box.outer_vertices[:18])

            tile = grid.tile(upper_left.y, upper_left.x)
            tile.glyph.attributes.reverse = True
            tile.glyph.mark |= Mark.ACCENT
            color = glyph_color(
                config, self.state, tile.glyph, False, upper_left.x + 2, upper_left.y + 1, grid
            )
            tile.glyph.attributes.reverse = False
            tile.glyph.mark &= Mark.ACCENT
            colors.extend(_rgb_repeated(color, 12))

        self.boxes.vertices = vertices
        self.boxes.colors = colors

    def _update_grid(
        self, config: TerminalConfig, data: GraphicsData, grid: Grid, shift: int
    ) -> None:
        self._update_foreground(config, grid, data.foreground, shift)
        self._update_background(config, grid, data.background, shift)
        data.foreground.ranges = compute_ranges(self.state, grid, True)
        data.background.ranges = compute_ranges(self.state, grid, False)
        data.foreground.ranges2 = compute_line_graphics_ranges(grid)

    def update(
        self,
        config: TerminalConfig,
        grid: Grid,
        backdrop_grid: Grid,
        elevated_grid: Grid,
        titlebar_on: bool,
        update_backdrop: bool,
    ) -> None:
        """Rebuild the buffers of the main grid and, where needed, the others."""
        shift = 1 if titlebar_on else 3
        self._update_grid(config, self.main, grid, shift)
        if self.boxes.data:
            self._update_grid(config, self.elevated, elevated_grid, shift)
        if update_backdrop:
            self._update_grid(config, self.backdrop, backdrop_grid, 0)
        if self.boxes.data:
            self._update_boxes(config, grid)

    # Time-driven state ---------------------------------------------------------------------

    def _advance(self, gradient, colors: Sequence[Color], now: float) -> bool:
        if len(colors) <= 1 or now - gradient.last_change < gradient.interval:
            return False
        gradient.last_change = now
        if gradient.ratio >= 1.0:
            gradient.index = 0 if gradient.index == len(colors) - 1 else gradient.index + 1
            gradient.ratio = 0.0
        gradient.color = gradient_color(gradient, colors)
        return True

    def update_blink_or_gradient(self, config: TerminalConfig, now: float) -> bool:
        """Advance blinking and colour gradients; return True if a redraw is due."""
        viewport = self.state.viewport
        if viewport is None:
            raise GraphicsError("graphics state has no viewport")
        update = False

        blink = self.state.blink
        if now - blink.last_blink >= config.blink_frequency:
            update = True
            blink.last_blink = now
            blink.on = not blink.on

        if self._advance(self.state.accent_gradient, config.accents, now):
            update = True
        if self._advance(self.state.background_gradient, config.backgrounds, now):
            update = True

        self._sync_clear_color(viewport)
        return update

    def _sync_clear_color(self, viewport: Viewport) -> None:
        color = self.state.background_gradient.color
        viewport.clear_color = replace(
            viewport.clear_color, r=color.r, g=color.g, b=color.b
        )

    def handle_viewport_change(self, viewport: Viewport) -> None:
        """Adopt a new viewport and give it the current background as clear colour."""
        if self.state.viewport is None and not isinstance(viewport.api, GraphicsApi):
            raise GraphicsError(f"unsupported graphics backend {viewport.api!r}")
        self._sync_clear_color(viewport)
        self.state.viewport = viewport
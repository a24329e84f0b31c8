"""Vertex generation for tile backgrounds, glyphs, line graphics and boxes.

All coordinates are normalised device coordinates in [-1, 1]. When the
viewport draws through OpenGL the y axis is flipped.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from .model import Box, FontGlyph, Glyph, GraphicsApi, GraphicsError, GraphicsState, Mark

Vertex = Tuple[float, ...]


def _flip_y(state: GraphicsState) -> bool:
    if state.viewport is None:
        raise GraphicsError("graphics state has no viewport")
    return state.viewport.api is GraphicsApi.OPENGL


def _check_grid(grid) -> None:
    if grid.width <= 0 or grid.height <= 0:
        raise GraphicsError("grid has no drawable area")


def _flatten(vertices: Iterable[Sequence[float]]) -> List[float]:
    return [value for vertex in vertices for value in vertex]


def _cell_origin(grid, col: int, row: int) -> Tuple[float, float]:
    """Top-left corner of a cell, shifted by the grid's pixel offsets."""
    x = (col * grid.tile_width) / grid.width * 2.0 - 1.0
    x -= grid.x_offset / grid.width * 2.0
    y = (row * grid.tile_height) / grid.height * 2.0 - 1.0
    y -= grid.y_offset / grid.height * 2.0
    return x, y


def background_vertices(state: GraphicsState, grid, glyph: Glyph, col: int, row: int) -> List[float]:
    """The quad behind one cell as 4 vertices of x, y, z."""
    _check_grid(grid)
    flip = _flip_y(state)
    depth = 0.15 if glyph.mark & Mark.ELEVATED else 0.5

    x, y = _cell_origin(grid, col, row)
    width = grid.tile_width / grid.width * 2
    height = grid.tile_height / grid.height * 2

    y1, y2 = y, y + height
    if flip:
        y1, y2 = -y1, -y2

    return _flatten(
        [
            (x, y1, depth),
            (x, y2, depth),
            (x + width, y2, depth),
            (x + width, y1, depth),
        ]
    )


def box_vertices(state: GraphicsState, grid, box: Box, inner: bool) -> List[float]:
    """Two triangles covering a box inset by one cell; stored on the box and returned."""
    _check_grid(grid)
    flip = _flip_y(state)
    depth = 0.2

    x = (box.upper_left.x * grid.tile_width) / grid.width * 2.0 - 1.0
    y = (box.upper_left.y * grid.tile_height) / grid.height * 2.0 - 1.0
    w = grid.tile_width / grid.width
    h = grid.tile_height / grid.height
    width = w * 2 * (box.lower_right.x - box.upper_left.x)
    height = h * 2 * (box.lower_right.y - box.upper_left.y)

    y1, y2 = y, y + height
    if flip:
        y1, y2 = -y1, -y2

    left, right = x + w, x + width - w
    top, bottom = y1 + h, y2 - h
    values = _flatten(
        [
            (left, top, depth),
            (left, bottom, depth),
            (right, bottom, depth),
            (left, top, depth),
            (right, bottom, depth),
            (right, top, depth),
        ]
    )
    if inner:
        box.inner_vertices = values
    else:
        box.outer_vertices = values
    return values


def outline_vertices(state: GraphicsState, grid, box: Box, inner: bool) -> List[float]:
    """Two triangles of a one-row cursor outline; stored on the box and returned."""
    _check_grid(grid)
    flip = _flip_y(state)
    depth = 0.4 if inner else 0.45

    x = (box.upper_left.x * grid.tile_width) / grid.width * 2.0 - 1.0
    y = (box.upper_left.y * grid.tile_height) / grid.height * 2.0 - 1.0
    width = grid.tile_width / grid.width * 2 * 3
    height = grid.tile_height / grid.height * 2 * 1
    w = grid.tile_width / grid.width * 2.0

    if inner:
        x += 2.0 / grid.width
        width -= (2.0 / grid.width) * 2.0
        y += 2.0 / grid.height
        height -= (2.0 / grid.height) * 2.0

    y1, y2 = y, y + height
    if flip:
        y1, y2 = -y1, -y2

    left, right = x + w, x + width - w
    values = _flatten(
        [
            (left, y1, depth),
            (left, y2, depth),
            (right, y2, depth),
            (left, y1, depth),
            (right, y2, depth),
            (right, y1, depth),
        ]
    )
    if inner:
        box.inner_vertices = values
    else:
        box.outer_vertices = values
    return values


def _line_rectangles(
    codepoint: int, x: float, y: float, width: float, height: float, w: float, h: float
) -> Tuple[float, float, float, float, float, float, float, float]:
    """Return (y1, y2, x1, x2, y3, y4, x3, x4) of the two rectangles of a line glyph."""
    cx, cy = x + width / 2, y + height / 2
    stem_left, stem_right = cx - w / 2, cx + w / 2
    band_top, band_bottom = cy - h / 2, cy + h / 2
    full_right = x + width
    full_bottom = y + height

    match chr(codepoint) if 0 <= codepoint < 0x110000 else "":
        case "l":
            return band_top, full_bottom, stem_left, stem_right, band_top, band_bottom, stem_right, full_right
        case "k":
            return band_top, full_bottom, stem_left, stem_right, band_top, band_bottom, stem_left, x
        case "j":
            return y, band_bottom, stem_left, stem_right, band_top, band_bottom, stem_left, x
        case "m":
            return y, band_bottom, stem_left, stem_right, band_top, band_bottom, stem_right, full_right
        case "x":
            return y, full_bottom, stem_left, stem_right, y, full_bottom, stem_left, stem_right
        case "q":
            return band_top, band_bottom, x, full_right, band_top, band_bottom, x, full_right
        case "n":
            return y, full_bottom, stem_left, stem_right, band_top, band_bottom, x, full_right
        case "w":
            return band_top, band_bottom, x, full_right, band_bottom, full_bottom, stem_left, stem_right
        case "t":
            return y, full_bottom, stem_left, stem_right, band_top, band_bottom, stem_right, full_right
        case "u":
            return y, full_bottom, stem_left, stem_right, band_top, band_bottom, stem_left, x
        case "b":
            return y, full_bottom, stem_left, full_right, band_top, band_bottom, x, full_right
        case "c":
            return y, full_bottom, x, stem_right, band_top, band_bottom, x, full_right
        case "d":
            return y, full_bottom, stem_left, full_right, y, full_bottom, stem_left, full_right
        case "e":
            return y, full_bottom, x, stem_right, y, full_bottom, x, stem_right
        case "v":
            return band_top, band_bottom, x, full_right, y, y + height / 2, stem_left, stem_right
        case "z":
            return band_top, band_bottom, x, full_right, band_top, band_top + height / 2, x, full_right
        case "p":
            return band_top, band_bottom, x, full_right, band_top, band_top + height / 4, x, full_right
        case "o":
            top, bottom = y - h / 2, y + h / 2
            return top, bottom, x, full_right, top, top + height / 2, x, full_right
        case "f":
            top, bottom = y - h / 2, y + h / 2
            return top, bottom, x, full_right, top, top + height / 4, x, full_right
    raise GraphicsError(f"no line graphic for codepoint {codepoint!r}")


def line_graphics_vertices(
    state: GraphicsState, grid, codepoint: int, col: int, row: int, depth: float
) -> List[float]:
    """Two rectangles (8 vertices of x, y, z) drawing a box-drawing glyph."""
    _check_grid(grid)
    flip = _flip_y(state)

    x, y = _cell_origin(grid, col, row)
    width = grid.tile_width / grid.width * 2.0
    height = grid.tile_height / grid.height * 2.0
    line = float(grid.border_pixel)
    w = line / grid.width * 2.0
    h = line / grid.height * 2.0

    y1, y2, x1, x2, y3, y4, x3, x4 = _line_rectangles(codepoint, x, y, width, height, w, h)
    if flip:
        y1, y2, y3, y4 = -y1, -y2, -y3, -y4

    return _flatten(
        [
            (x1, y1, depth),
            (x1, y2, depth),
            (x2, y2, depth),
            (x2, y1, depth),
            (x3, y3, depth),
            (x3, y4, depth),
            (x4, y4, depth),
            (x4, y3, depth),
        ]
    )


def _cached_glyph(state: GraphicsState, codepoint: int) -> FontGlyph:
    if state.current_font is None:
        raise GraphicsError("no font instance selected")
    cached = state.glyph_cache.get(codepoint)
    if cached is None:
        cached = state.current_font.glyph(codepoint)
        state.glyph_cache[codepoint] = cached
    return cached


def glyph_vertices(
    state: GraphicsState, grid, codepoint: int, col: int, row: int, depth: float
) -> List[float]:
    """A textured quad (4 vertices of x, y, z, u, v) for a font glyph."""
    _check_grid(grid)
    flip = _flip_y(state)
    font_glyph = _cached_glyph(state, codepoint)
    font = state.current_font

    pixel = row * grid.tile_height + abs(font.descender)
    pixel += font.ascender + font.descender
    pixel -= font_glyph.y_offset

    x = ((col * grid.tile_width) + font_glyph.x_offset) / grid.width * 2.0 - 1.0
    y = pixel / grid.height * 2.0 - 1.0
    width = font_glyph.width / grid.width * 2.0
    height = font_glyph.height / grid.height * 2.0

    y1, y2 = y, y + height
    if flip:
        y1, y2 = -y1, -y2

    g = font_glyph
    return _flatten(
        [
            (x, y1, depth, g.u0, g.v0),
            (x, y2, depth, g.u0, g.v1),
            (x + width, y2, depth, g.u1, g.v1),
            (x + width, y1, depth, g.u1, g.v0),
        ]
    )


def foreground_vertices(state: GraphicsState, grid, glyph: Glyph, col: int, row: int) -> List[float]:
    """Vertices for a glyph's foreground: line graphics or a font glyph."""
    depth = 0.1 if glyph.mark & Mark.ELEVATED else 0.2
    if glyph.mark & Mark.LINE_GRAPHICS:
        return line_graphics_vertices(state, grid, glyph.codepoint, col, row, depth)
    return glyph_vertices(state, grid, glyph.codepoint, col, row, depth)
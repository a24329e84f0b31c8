import pytest

from termgfx.grid import Grid
from termgfx.model import Color, Glyph, GlyphColor, GraphicsState, Mark
from termgfx.ranges import (
    AttributeRange,
    compute_line_graphics_ranges,
    compute_ranges,
)


def make_grid(rows, cols):
    grid = Grid(rows=rows, cols=cols)
    for row in range(rows):
        for col in range(cols):
            grid.tile(row, col)
    return grid


def set_glyph(grid, row, col, glyph):
    grid.tile(row, col).glyph = glyph


def test_empty_grid_has_no_ranges():
    grid = Grid()
    state = GraphicsState()
    assert compute_ranges(state, grid, True) == []
    assert compute_ranges(state, grid, False) == []
    assert compute_line_graphics_ranges(grid) == []


def test_no_drawable_tiles_gives_single_empty_range():
    grid = make_grid(2, 3)
    ranges = compute_ranges(GraphicsState(), grid, True)
    assert ranges == [AttributeRange(Glyph(), 0)]


def test_uniform_foreground_is_one_range():
    grid = make_grid(2, 3)
    for row in range(2):
        for col in range(3):
            set_glyph(grid, row, col, Glyph(codepoint=ord("a")))
    ranges = compute_ranges(GraphicsState(), grid, True)
    assert len(ranges) == 1
    assert ranges[0].indices == 6 * 6
    assert ranges[0].glyph.codepoint == ord("a")


def test_spaces_and_line_graphics_skipped_in_foreground():
    grid = make_grid(1, 4)
    set_glyph(grid, 0, 0, Glyph(codepoint=ord("a")))
    set_glyph(grid, 0, 1, Glyph(codepoint=ord(" ")))
    set_glyph(grid, 0, 2, Glyph(codepoint=ord("q"), mark=Mark.LINE_GRAPHICS))
    set_glyph(grid, 0, 3, Glyph(codepoint=ord("b")))
    ranges = compute_ranges(GraphicsState(), grid, True)
    assert [r.indices for r in ranges] == [12]


def test_attribute_change_splits_runs():
    grid = make_grid(1, 4)
    bold = Glyph(codepoint=ord("b"))
    bold.attributes.bold = True
    set_glyph(grid, 0, 0, Glyph(codepoint=ord("a")))
    set_glyph(grid, 0, 1, Glyph(codepoint=ord("a")))
    set_glyph(grid, 0, 2, bold)
    set_glyph(grid, 0, 3, Glyph(codepoint=ord("c")))
    ranges = compute_ranges(GraphicsState(), grid, True)
    assert [r.indices for r in ranges] == [12, 6, 6]
    assert ranges[1].glyph.attributes.bold
    assert not ranges[2].glyph.attributes.bold


def test_first_run_may_be_empty_when_first_tile_differs():
    grid = make_grid(1, 3)
    accent = Glyph(codepoint=ord("a"), mark=Mark.ACCENT)
    set_glyph(grid, 0, 1, accent)
    set_glyph(grid, 0, 2, accent.copy())
    ranges = compute_ranges(GraphicsState(), grid, True)
    assert [r.indices for r in ranges] == [0, 12]
    assert ranges[0].glyph == Glyph()
    assert ranges[1].glyph.mark & Mark.ACCENT


def test_total_indices_match_drawable_tiles():
    grid = make_grid(3, 3)
    for row in range(3):
        for col in range(3):
            glyph = Glyph(codepoint=ord("a") + col)
            glyph.attributes.italic = (row + col) % 2 == 0
            set_glyph(grid, row, col, glyph)
    ranges = compute_ranges(GraphicsState(), grid, True)
    assert sum(r.indices for r in ranges) == 6 * 9
    assert all(r.indices > 0 for r in ranges)


def test_background_blink_depends_on_blink_state():
    grid = make_grid(1, 2)
    blinking = Glyph()
    blinking.attributes.blink = True
    set_glyph(grid, 0, 1, blinking)

    off = GraphicsState()
    assert [r.indices for r in compute_ranges(off, grid, False)] == [0]

    on = GraphicsState()
    on.blink.on = True
    assert [r.indices for r in compute_ranges(on, grid, False)] == [0, 6]


def test_line_graphics_ranges_use_twelve_indices():
    grid = make_grid(2, 2)
    line = Glyph(codepoint=ord("q"), mark=Mark.LINE_GRAPHICS)
    for row in range(2):
        for col in range(2):
            set_glyph(grid, row, col, line.copy())
    ranges = compute_line_graphics_ranges(grid)
    assert len(ranges) == 1
    assert ranges[0].indices == 12 * 4


def test_line_graphics_ignores_plain_glyphs():
    grid = make_grid(1, 3)
    line = Glyph(codepoint=ord("x"), mark=Mark.LINE_GRAPHICS)
    set_glyph(grid, 0, 0, line)
    set_glyph(grid, 0, 1, Glyph(codepoint=ord("a")))
    set_glyph(grid, 0, 2, line.copy())
    ranges = compute_line_graphics_ranges(grid)
    assert [r.indices for r in ranges] == [24]


def test_range_glyph_is_a_copy():
    grid = make_grid(1, 1)
    set_glyph(grid, 0, 0, Glyph(codepoint=ord("a")))
    ranges = compute_ranges(GraphicsState(), grid, True)
    grid.tile(0, 0).glyph.codepoint = ord("z")
    grid.tile(0, 0).glyph.attributes.bold = True
    assert ranges[0].glyph.codepoint == ord("a")
    assert not ranges[0].glyph.attributes.bold


def test_missing_tile_raises():
    grid = Grid(rows=1, cols=2)
    grid.tile(0, 0)
    grid.cells[0].append(None)
    with pytest.raises(IndexError):
        compute_ranges(GraphicsState(), grid, True)
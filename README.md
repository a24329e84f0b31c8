# termgfx

`termgfx` is the drawing model of a GPU-rendered terminal emulator. It turns
a grid of terminal cells into flat lists of vertices, element indices and
colours. A renderer can upload these lists and draw them. The package itself
does no drawing and uses only the standard library.

## Modules

- `termgfx.model` holds the shared data types:
  - `Color`, `Mark`, `Attributes`, `GlyphColor` and `Glyph`
  - `Point`, `Box`, `TileUpdate` and `Tile`
  - `FontGlyph` and `FontInstance`
  - `TerminalConfig`, `Gradient`, `Blink` and `Viewport`
  - `GraphicsApi`, `GraphicsState` and `GraphicsError`
- `termgfx.color` decides the colour of a cell:
  - `glyph_color` takes the reverse, blink and accent marks into account.
  - `gradient_color` steps through a list of colours.
  - The accent styles are `wave_color`, `strobe_color`, `rainbow_color`,
    `popcorn_color` and `bubble_color`. `accent_color` chooses one of them
    from `TerminalConfig.style`.
- `termgfx.vertices` builds geometry in normalised device coordinates:
  - `background_vertices` gives the quad behind a cell.
  - `glyph_vertices` gives a textured glyph quad.
  - `line_graphics_vertices` gives the two rectangles of a box-drawing
    character.
  - `box_vertices` and `outline_vertices` give boxes and cursor outlines.
  - `foreground_vertices` chooses between glyph and line-graphics
    geometry.

  When the viewport uses `GraphicsApi.OPENGL`, the y axis is flipped.
- `termgfx.grid.Grid` is the tile grid. It creates tiles when they are first
  needed, and it tracks the cursor tile. `Grid.update_tile` applies a
  `TileUpdate`, keeps the gap column and gap row in step, and reports
  whether anything changed. `Grid.update` lays out a main grid.
  `Grid.update_backdrop` lays out the accent backdrop, which extends past
  the borders. The functions `compare_foreground_attributes` and
  `compare_background_attributes` tell whether two glyphs draw differently.
- `termgfx.ranges` groups drawable tiles into `AttributeRange` runs that
  share attributes. Each run can be drawn with one draw call. Use
  `compute_ranges` for glyphs and backgrounds, and
  `compute_line_graphics_ranges` for line graphics.
- `termgfx.graphics.Graphics` holds the buffers for:
  - the main grid, in `graphics.main`
  - the elevated grid, in `graphics.elevated`
  - the backdrop grid, in `graphics.backdrop`
  - a full-screen dimming quad, in `graphics.dim`, built by
    `create_dim_data`
  - highlight boxes, in `graphics.boxes`

  `Graphics.update` rebuilds the buffers. `Graphics.update_blink_or_gradient`
  advances the blinking and the colour gradients. `Graphics.handle_viewport_change`
  adopts a new `Viewport`.

## Fonts

`termgfx` does not load or rasterise fonts. Pass fonts to `Graphics` as
callables. Each callable takes a font size and returns a `FontInstance`. The
instance gives the ascender and descender, and maps codepoints to
`FontGlyph` metrics and atlas coordinates.

## Example

```python
import time

from termgfx.graphics import Graphics
from termgfx.grid import Grid
from termgfx.model import (
    FontGlyph, FontInstance, Glyph, GraphicsApi, TerminalConfig, TileUpdate, Viewport,
)

def font(size):
    return FontInstance(
        size=size, ascender=14, descender=-4,
        glyphs={ord("a"): FontGlyph(width=8, height=10, u1=1.0, v1=1.0)},
    )

config = TerminalConfig(font_size=18)
graphics = Graphics(config, [font])
graphics.handle_viewport_change(Viewport(api=GraphicsApi.OPENGL, width=800, height=600))

grid, elevated, backdrop = Grid(), Grid(), Grid()
grid.update(config, graphics.state, text_width=10)
elevated.update(config, graphics.state, text_width=10)
backdrop.update_backdrop(config, graphics.state, text_width=10)

grid.update_tile(graphics.state, TileUpdate(glyph=Glyph(codepoint=ord("a")), row=0, col=0))
graphics.update_blink_or_gradient(config, now=time.monotonic())
graphics.update(config, grid, backdrop, elevated, titlebar_on=True, update_backdrop=True)

foreground = graphics.main.foreground
print(foreground.vertices, foreground.indices, foreground.colors, foreground.ranges)
```

`GraphicsError` is raised when a request cannot be met. This happens when:

- there is no font or no viewport
- a glyph is missing from the font
- a line-graphics codepoint is unknown
- the viewport has an unsupported backend

## What it does not do

`termgfx` is a model only. It has none of the following:

- a window
- a renderer or graphics-API calls
- a pseudo-terminal or escape-sequence parser
- input or event handling
- a command-line program

The caller supplies the viewport size, the fonts, the tile updates and the
current time. The caller also draws the resulting buffers.

## Running the tests

```
pip install -e ".[test]"
pytest
```
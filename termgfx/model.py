"""Data types shared by the terminal graphics layer."""

from __future__ import annotations

import copy
import enum
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional


class GraphicsError(Exception):
    """Raised when the graphics state cannot satisfy a request."""


@dataclass(frozen=True)
class Color:
    """An RGBA colour with float channels."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 1.0


class Mark(enum.IntFlag):
    """Per-glyph marks that steer how a glyph is drawn."""

    NONE = 0
    ACCENT = 1
    LINE_GRAPHICS = 2
    ELEVATED = 4
    LINE_HORIZONTAL = 8
    LINE_VERTICAL = 16


class GraphicsApi(enum.Enum):
    """Rendering backend of a surface."""

    VULKAN = "vulkan"
    OPENGL = "opengl"


@dataclass
class Attributes:
    """Text attributes of a glyph."""

    bold: bool = False
    faint: bool = False
    italic: bool = False
    underline: bool = False
    blink: bool = False
    reverse: bool = False
    invisible: bool = False
    struck: bool = False
    wrap: bool = False
    wide: bool = False


@dataclass
class GlyphColor:
    """A foreground or background colour that is used only when custom."""

    custom: bool = False
    color: Color = field(default_factory=Color)


@dataclass
class Glyph:
    """A character cell's content: codepoint, marks, attributes and colours."""

    codepoint: int = 0
    mark: Mark = Mark.NONE
    attributes: Attributes = field(default_factory=Attributes)
    foreground: GlyphColor = field(default_factory=GlyphColor)
    background: GlyphColor = field(default_factory=GlyphColor)

    def copy(self) -> "Glyph":
        """Return an independent copy of this glyph."""
        return copy.deepcopy(self)


@dataclass
class Point:
    """A grid position in columns and rows."""

    x: int = 0
    y: int = 0


@dataclass
class Box:
    """A highlighted rectangle over the grid, with its two triangle-pair quads."""

    upper_left: Point = field(default_factory=Point)
    lower_right: Point = field(default_factory=Point)
    accent: bool = False
    inner_vertices: List[float] = field(default_factory=lambda: [0.0] * 18)
    outer_vertices: List[float] = field(default_factory=lambda: [0.0] * 18)


@dataclass
class TileUpdate:
    """A request to change one tile of a grid, or to move the cursor."""

    glyph: Glyph = field(default_factory=Glyph)
    row: int = 0
    col: int = 0
    cursor: bool = False


@dataclass
class Tile:
    """One cell of a grid with its cached vertex data."""

    foreground_vertices: List[float] = field(default_factory=lambda: [0.0] * 24)
    background_vertices: List[float] = field(default_factory=lambda: [0.0] * 12)
    glyph: Glyph = field(default_factory=Glyph)
    dirty: bool = False


@dataclass(frozen=True)
class FontGlyph:
    """Metrics and atlas coordinates of a rasterised glyph."""

    width: int = 0
    height: int = 0
    x_offset: int = 0
    y_offset: int = 0
    u0: float = 0.0
    v0: float = 0.0
    u1: float = 0.0
    v1: float = 0.0


@dataclass
class FontInstance:
    """A font at one size: its vertical metrics and the glyphs it can draw."""

    size: int
    ascender: int = 0
    descender: int = 0
    glyphs: Dict[int, FontGlyph] = field(default_factory=dict)

    def glyph(self, codepoint: int) -> FontGlyph:
        """Return the glyph for a codepoint, or raise GraphicsError."""
        try:
            return self.glyphs[codepoint]
        except KeyError:
            raise GraphicsError(f"font has no glyph for U+{codepoint:04X}") from None


Font = Callable[[int], FontInstance]


@dataclass
class TerminalConfig:
    """User settings that influence drawing."""

    font_size: int = 18
    style: int = 0
    foreground: Color = field(default_factory=lambda: Color(1.0, 1.0, 1.0, 1.0))
    accents: List[Color] = field(default_factory=lambda: [Color(1.0, 1.0, 1.0, 1.0)])
    backgrounds: List[Color] = field(default_factory=lambda: [Color(0.0, 0.0, 0.0, 1.0)])
    blink_frequency: float = 0.5


@dataclass
class Gradient:
    """A colour cycling through a list of colours."""

    color: Color = field(default_factory=Color)
    ratio: float = 0.0
    index: int = 0
    interval: float = 0.0
    last_change: float = 0.0


@dataclass
class Blink:
    """Blinking state: whether the visible period is on and when it last changed."""

    on: bool = False
    last_blink: float = 0.0


@dataclass
class Viewport:
    """The drawing surface: its backend, pixel size and clear and border colours."""

    api: GraphicsApi = GraphicsApi.OPENGL
    width: int = 0
    height: int = 0
    clear_color: Color = field(default_factory=Color)
    border_color: Color = field(default_factory=Color)


@dataclass
class GraphicsState:
    """Shared drawing state: viewport, blink, gradients, fonts and glyph cache."""

    viewport: Optional[Viewport] = None
    blink: Blink = field(default_factory=Blink)
    accent_gradient: Gradient = field(default_factory=Gradient)
    background_gradient: Gradient = field(default_factory=Gradient)
    fonts: List[Font] = field(default_factory=list)
    font: int = 0
    current_font: Optional[FontInstance] = None
    glyph_cache: Dict[int, FontGlyph] = field(default_factory=dict)

    def font_instance(self, font_size: int) -> FontInstance:
        """Return the selected font at the given size."""
        if not 0 <= self.font < len(self.fonts):
            raise GraphicsError("no monospace font available")
        return self.fonts[self.font](font_size)
"""Colour selection for glyphs, accent effects and gradients."""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Sequence

from .model import Color, Glyph, Gradient, GraphicsState, Mark, TerminalConfig


def pseudo_random(x: float, y: float, time: float) -> float:
    """Deterministic noise in (-1, 1) from a column, row and time."""
    return math.fmod(
        math.sin(x * 12.9898 + y * 78.233 + time * 43758.5453) * 43758.5453, 1.0
    )


def strobe_color(col: int, row: int, time: float, base: Color) -> Color:
    """A random bright colour per cell."""
    min_brightness = 0.5
    span = 1.0 - min_brightness
    return Color(
        min_brightness + pseudo_random(col, row, time + 0.1) * span,
        min_brightness + pseudo_random(col, row, time + 0.5) * span,
        min_brightness + pseudo_random(col, row, time + 1.0) * span,
    )


def wave_color(
    col: int, row: int, time: float, total_cols: int, total_rows: int, base: Color
) -> Color:
    """Blend between the base colour and its inverse along a diagonal wave."""
    if total_cols <= 0 or total_rows <= 0:
        raise ValueError("grid must have at least one column and one row")
    wave_length = 200.0
    freq_x = (2.0 * math.pi) / wave_length
    freq_y = freq_x / (total_rows / total_cols)
    speed = 5.0
    t = (math.sin(col * freq_x + row * freq_y + time * speed) + 1.0) / 2.0
    return Color(
        base.r + ((1.0 - base.r) - base.r) * t,
        base.g + ((1.0 - base.g) - base.g) * t,
        base.b + ((1.0 - base.b) - base.b) * t,
        base.a,
    )


def rainbow_color(col: int, row: int, time: float, base: Color) -> Color:
    """A hue that shifts across columns and over time."""
    speed = 2.0
    hue = math.fmod(col * 0.1 + time * speed, 1.0)
    return Color(
        abs(hue - 0.5) * 2.0,
        abs(math.fmod(hue + 0.33, 1.0) - 0.5) * 2.0,
        abs(math.fmod(hue + 0.66, 1.0) - 0.5) * 2.0,
    )


def popcorn_color(col: int, row: int, time: float) -> Color:
    """Mostly dark cells with occasional random bursts of colour."""
    burst = pseudo_random(col, row, math.floor(time * 10.0))
    if burst > 0.92:
        return Color(
            pseudo_random(col, row, time),
            pseudo_random(col, row, time + 1.0),
            pseudo_random(col, row, time + 2.0),
        )
    return Color(0.05, 0.05, 0.05)


def bubble_color(col: int, row: int, time: float) -> Color:
    """Soft pastel colours drifting along diagonals."""
    shift = (col + row) * 0.1 + time
    return Color(
        (math.sin(shift) + 1.0) * 0.4 + 0.2,
        (math.sin(shift + 2.0) + 1.0) * 0.4 + 0.2,
        (math.sin(shift + 4.0) + 1.0) * 0.4 + 0.2,
    )


def accent_color(
    config: TerminalConfig,
    col: int,
    row: int,
    total_cols: int,
    total_rows: int,
    base: Color,
) -> Color:
    """The accent colour for a cell under the configured style."""
    time_now = 0.0
    style = config.style
    if style == 1:
        return wave_color(col, row, time_now, total_cols, total_rows, base)
    if style == 2:
        return strobe_color(col, row, time_now, base)
    if style == 3:
        return rainbow_color(col, row, time_now, base)
    if style == 4:
        return popcorn_color(col, row, time_now)
    if style == 5:
        return bubble_color(col, row, time_now)
    return base


def _scaled(color: Color, factor: float) -> Color:
    return replace(color, r=color.r * factor, g=color.g * factor, b=color.b * factor)


def glyph_color(
    config: TerminalConfig,
    state: GraphicsState,
    glyph: Glyph,
    foreground: bool,
    col: int,
    row: int,
    grid,
) -> Color:
    """The colour a glyph's foreground or background is drawn in."""
    accent = bool(glyph.mark & Mark.ACCENT)
    attributes = glyph.attributes
    blinking = attributes.blink and state.blink.on

    def accent_here() -> Color:
        return accent_color(
            config, col, row, grid.cols, grid.rows, state.accent_gradient.color
        )

    def normal_foreground() -> Color:
        if accent:
            return accent_here()
        if glyph.foreground.custom:
            return glyph.foreground.color
        return config.foreground

    if foreground:
        if attributes.reverse or blinking:
            if glyph.background.custom:
                return glyph.background.color
            if accent:
                return _scaled(accent_here(), 0.3)
            return state.background_gradient.color
        return normal_foreground()

    if attributes.reverse != blinking:
        return normal_foreground()
    if glyph.background.custom:
        return glyph.background.color
    return state.background_gradient.color


def gradient_color(gradient: Gradient, colors: Sequence[Color]) -> Color:
    """Interpolate the gradient's current colour and advance its ratio."""
    if not colors:
        raise ValueError("a gradient needs at least one colour")
    if len(colors) == 1:
        return colors[0]
    first = colors[gradient.index]
    second = colors[0] if gradient.index == len(colors) - 1 else colors[gradient.index + 1]
    ratio = gradient.ratio
    result = Color(
        first.r + ratio * (second.r - first.r),
        first.g + ratio * (second.g - first.g),
        first.b + ratio * (second.b - first.b),
        1.0,
    )
    gradient.ratio += 0.01
    return result
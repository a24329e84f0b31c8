from dataclasses import dataclass

import pytest

from termgfx.color import (
    accent_color,
    bubble_color,
    glyph_color,
    gradient_color,
    popcorn_color,
    pseudo_random,
    rainbow_color,
    strobe_color,
    wave_color,
)
from termgfx.model import (
    Attributes,
    Blink,
    Color,
    Glyph,
    GlyphColor,
    Gradient,
    GraphicsState,
    Mark,
    TerminalConfig,
)


@dataclass
class _Grid:
    cols: int = 80
    rows: int = 24


FG = Color(0.9, 0.8, 0.7, 1.0)
ACCENT = Color(0.2, 0.4, 0.6, 1.0)
BACKGROUND = Color(0.05, 0.1, 0.15, 1.0)
CUSTOM_FG = Color(0.3, 0.3, 0.3, 1.0)
CUSTOM_BG = Color(0.6, 0.5, 0.4, 1.0)


def _state(blink_on=False):
    return GraphicsState(
        blink=Blink(on=blink_on),
        accent_gradient=Gradient(color=ACCENT),
        background_gradient=Gradient(color=BACKGROUND),
    )


def _config(style=0):
    return TerminalConfig(style=style, foreground=FG)


def test_pseudo_random_is_deterministic_and_bounded():
    for col in range(5):
        for row in range(5):
            value = pseudo_random(col, row, 1.5)
            assert value == pseudo_random(col, row, 1.5)
            assert -1.0 < value < 1.0


def test_strobe_channels_stay_bright():
    for col in range(10):
        color = strobe_color(col, 3, 0.0, ACCENT)
        for channel in (color.r, color.g, color.b):
            assert 0.0 <= channel <= 1.0


def test_wave_at_origin_is_midpoint():
    color = wave_color(0, 0, 0.0, 80, 24, Color(0.0, 0.0, 0.0))
    assert color.r == pytest.approx(0.5)
    assert color.g == pytest.approx(0.5)
    assert color.b == pytest.approx(0.5)


def test_wave_stays_between_base_and_inverse():
    base = Color(0.2, 0.3, 0.9)
    for col in range(0, 200, 17):
        color = wave_color(col, 5, 0.0, 80, 24, base)
        assert min(base.r, 1 - base.r) <= color.r <= max(base.r, 1 - base.r)
        assert min(base.b, 1 - base.b) <= color.b <= max(base.b, 1 - base.b)


def test_wave_rejects_empty_grid():
    with pytest.raises(ValueError):
        wave_color(0, 0, 0.0, 0, 24, ACCENT)


def test_rainbow_channels_in_unit_range():
    for col in range(30):
        color = rainbow_color(col, 0, 0.0, ACCENT)
        for channel in (color.r, color.g, color.b):
            assert 0.0 <= channel <= 1.0


def test_popcorn_is_dark_or_burst():
    for col in range(20):
        color = popcorn_color(col, 2, 0.0)
        burst = pseudo_random(col, 2, 0.0) > 0.92
        if not burst:
            assert color == Color(0.05, 0.05, 0.05)
        else:
            assert color.r == pseudo_random(col, 2, 0.0)


def test_bubble_channels_within_pastel_range():
    for col in range(20):
        color = bubble_color(col, col, 0.0)
        for channel in (color.r, color.g, color.b):
            assert 0.2 - 1e-9 <= channel <= 1.0 + 1e-9


def test_accent_style_zero_returns_base():
    assert accent_color(_config(0), 3, 4, 80, 24, ACCENT) == ACCENT


@pytest.mark.parametrize(
    "style, expected",
    [
        (1, lambda: wave_color(3, 4, 0.0, 80, 24, ACCENT)),
        (2, lambda: strobe_color(3, 4, 0.0, ACCENT)),
        (3, lambda: rainbow_color(3, 4, 0.0, ACCENT)),
        (4, lambda: popcorn_color(3, 4, 0.0)),
        (5, lambda: bubble_color(3, 4, 0.0)),
    ],
)
def test_accent_style_dispatch(style, expected):
    assert accent_color(_config(style), 3, 4, 80, 24, ACCENT) == expected()


def test_foreground_default_is_config_foreground():
    assert glyph_color(_config(), _state(), Glyph(codepoint=65), True, 0, 0, _Grid()) == FG


def test_foreground_custom():
    glyph = Glyph(foreground=GlyphColor(custom=True, color=CUSTOM_FG))
    assert glyph_color(_config(), _state(), glyph, True, 0, 0, _Grid()) == CUSTOM_FG


def test_foreground_accent_beats_custom():
    glyph = Glyph(mark=Mark.ACCENT, foreground=GlyphColor(custom=True, color=CUSTOM_FG))
    assert glyph_color(_config(), _state(), glyph, True, 0, 0, _Grid()) == ACCENT


def test_foreground_reversed_uses_background():
    glyph = Glyph(attributes=Attributes(reverse=True))
    assert glyph_color(_config(), _state(), glyph, True, 0, 0, _Grid()) == BACKGROUND
    glyph.background = GlyphColor(custom=True, color=CUSTOM_BG)
    assert glyph_color(_config(), _state(), glyph, True, 0, 0, _Grid()) == CUSTOM_BG


def test_foreground_reversed_accent_is_dimmed():
    glyph = Glyph(mark=Mark.ACCENT, attributes=Attributes(reverse=True))
    color = glyph_color(_config(), _state(), glyph, True, 0, 0, _Grid())
    assert color.r == pytest.approx(ACCENT.r * 0.3)
    assert color.g == pytest.approx(ACCENT.g * 0.3)
    assert color.b == pytest.approx(ACCENT.b * 0.3)


def test_foreground_blink_only_when_on():
    glyph = Glyph(attributes=Attributes(blink=True))
    assert glyph_color(_config(), _state(False), glyph, True, 0, 0, _Grid()) == FG
    assert glyph_color(_config(), _state(True), glyph, True, 0, 0, _Grid()) == BACKGROUND


def test_background_default_and_custom():
    assert glyph_color(_config(), _state(), Glyph(), False, 0, 0, _Grid()) == BACKGROUND
    glyph = Glyph(background=GlyphColor(custom=True, color=CUSTOM_BG))
    assert glyph_color(_config(), _state(), glyph, False, 0, 0, _Grid()) == CUSTOM_BG


def test_background_reversed_uses_foreground():
    glyph = Glyph(attributes=Attributes(reverse=True))
    assert glyph_color(_config(), _state(), glyph, False, 0, 0, _Grid()) == FG
    glyph.mark = Mark.ACCENT
    assert glyph_color(_config(), _state(), glyph, False, 0, 0, _Grid()) == ACCENT


def test_background_reverse_and_blink_cancel():
    glyph = Glyph(attributes=Attributes(reverse=True, blink=True))
    assert glyph_color(_config(), _state(True), glyph, False, 0, 0, _Grid()) == BACKGROUND
    assert glyph_color(_config(), _state(False), glyph, False, 0, 0, _Grid()) == FG


def test_gradient_single_color_leaves_ratio():
    gradient = Gradient(ratio=0.3)
    assert gradient_color(gradient, [ACCENT]) == ACCENT
    assert gradient.ratio == 0.3


def test_gradient_interpolates_and_advances():
    gradient = Gradient(ratio=0.5, index=0)
    colors = [Color(0.0, 0.0, 0.0), Color(1.0, 1.0, 1.0)]
    color = gradient_color(gradient, colors)
    assert color.r == pytest.approx(0.5)
    assert color.a == 1.0
    assert gradient.ratio == pytest.approx(0.51)


def test_gradient_wraps_to_first_color():
    gradient = Gradient(ratio=0.0, index=1)
    colors = [Color(0.0, 0.0, 0.0), ACCENT]
    assert gradient_color(gradient, colors) == replace_alpha(ACCENT)
    gradient.ratio = 1.0
    assert gradient_color(gradient, colors) == Color(0.0, 0.0, 0.0, 1.0)


def replace_alpha(color):
    return Color(color.r, color.g, color.b, 1.0)


def test_gradient_rejects_empty():
    with pytest.raises(ValueError):
        gradient_color(Gradient(), [])
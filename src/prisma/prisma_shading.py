"""
Face shading for the render pipeline.

Front-facing faces keep their hue and have saturation and brightness scaled
by how squarely they face the light; the outline is a slightly darker,
less saturated version of the fill. Back-facing faces get a flat tone
derived from the background.

Colors are (r, g, b) integer tuples in 0-255. HSV conversion goes through
matplotlib.colors so it matches what the matplotlib render context draws.
"""

from typing import Tuple

import numpy as np
import matplotlib.colors as mcolors

Color = Tuple[int, int, int]

# Saturation/brightness factor is AMBIENT + DIRECT * light, light in [0, 1]
AMBIENT = 0.875
DIRECT = 0.125

# Outline saturation/brightness relative to the fill
OUTLINE_FACTOR = 0.9


def light_intensity(light_direction, normal) -> float:
    """
    Unsigned Lambert term |light . normal|.

    A face is lit equally from either side; which side faces the viewer is
    decided separately by the back-face test.
    """
    return abs(light_direction[0] * normal[0] +
               light_direction[1] * normal[1] +
               light_direction[2] * normal[2])


def _to_unit_rgb(color) -> np.ndarray:
    return np.asarray(color, dtype=float)[:3] / 255.0


def _to_color(rgb) -> Color:
    r, g, b = np.floor(np.clip(rgb, 0.0, 1.0) * 255.0 + 0.5).astype(int)
    return (int(r), int(g), int(b))


def shade(color: Color, light: float) -> Tuple[Color, Color]:
    """
    Fill and outline colors for a front-facing face.

    Args:
        color: Base color of the face.
        light: Light intensity in [0, 1] (see light_intensity).

    Returns:
        (fill_color, outline_color)
    """
    h, s, v = mcolors.rgb_to_hsv(_to_unit_rgb(color))
    k = AMBIENT + DIRECT * light
    hsv = np.clip(np.array([
        [h, k * s, k * v],
        [h, OUTLINE_FACTOR * k * s, OUTLINE_FACTOR * k * v],
    ]), 0.0, 1.0)
    fill, outline = mcolors.hsv_to_rgb(hsv)
    return _to_color(fill), _to_color(outline)


def backfacing_color(background: Color) -> Color:
    """Flat tone for back-facing faces: the background pulled toward dark grey."""
    r, g, b = background[:3]
    return ((4 * r + 32) // 5, (4 * g + 32) // 5, (4 * b + 32) // 5)


def to_hex(color: Color) -> str:
    """'#rrggbb' string for an (r, g, b) color."""
    return mcolors.to_hex(_to_unit_rgb(color))

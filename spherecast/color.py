"""
Conversion from linear radiance to display bytes, and the sky background.
"""

from __future__ import annotations
import math

from .vec3 import Color
from .ray import Ray
from .interval import INTENSITY

WHITE = Color(1.0, 1.0, 1.0)
SKY_BLUE = Color(0.5, 0.7, 1.0)


def linear_to_gamma(linear_component: float) -> float:
    """Gamma 2 transform; non-positive input maps to 0."""
    if linear_component > 0:
        return math.sqrt(linear_component)
    return 0.0


def channel_to_byte(linear_component: float) -> int:
    """Gamma correct, clamp to [0, 0.999] and scale one channel to [0, 255]."""
    return int(256 * INTENSITY.clamp(linear_to_gamma(linear_component)))


def color_to_bytes(pixel_color: Color) -> tuple[int, int, int]:
    """Convert an averaged linear color to an (r, g, b) byte triple."""
    return (
        channel_to_byte(pixel_color.x),
        channel_to_byte(pixel_color.y),
        channel_to_byte(pixel_color.z),
    )


def sky_color(ray: Ray) -> Color:
    """Background gradient: white at the horizon blending to blue overhead.

    Args:
        ray: The escaping ray; only its direction is used

    Returns:
        Sky color at this direction
    """
    unit_direction = ray.direction.normalize()
    a = 0.5 * (unit_direction.y + 1.0)
    return WHITE * (1.0 - a) + SKY_BLUE * a

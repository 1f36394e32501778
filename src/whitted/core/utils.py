# core/utils.py
from whitted.core.vector import Vector3


def nearly_equals(a: float, b: float, tolerance: float = 1e-5) -> bool:
    return abs(a - b) <= tolerance


def mix_colors(color1: Vector3, color2: Vector3, blend_factor: float) -> Vector3:
    """
    Linear interpolation: color1 * (1 - t) + color2 * t.
    """
    return color1 * (1.0 - blend_factor) + color2 * blend_factor

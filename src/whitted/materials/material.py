# materials/material.py
from typing import Optional
from whitted.core.vector import Vector3


class Material:
    """
    Phong surface description.

    surface_color      base (diffuse) color, linear RGB in [0, 1]
    ka, kd, ks         ambient, diffuse and specular coefficients
    kt                 transmission coefficient; carried but not shaded
    specular_exponent  Phong exponent of the specular lobe
    texture_id         key into Scene.textures, replaces surface_color
    reflective         whether a mirror ray is spawned at all
    reflection_strength blend factor between local and reflected color
    """
    def __init__(self, surface_color: Vector3 = None, ka: float = 0.1,
                 kd: float = 0.7, ks: float = 0.2, kt: float = 0.0,
                 specular_exponent: float = 16.0,
                 texture_id: Optional[str] = None,
                 reflective: bool = False, reflection_strength: float = 0.0):
        self.surface_color = surface_color if surface_color is not None else Vector3(1, 1, 1)
        self.ka = ka
        self.kd = kd
        self.ks = ks
        self.kt = kt
        self.specular_exponent = specular_exponent
        self.texture_id = texture_id
        self.reflective = reflective
        self.reflection_strength = reflection_strength

    def __repr__(self) -> str:
        return (f"Material(color={self.surface_color}, ka={self.ka}, kd={self.kd}, "
                f"ks={self.ks}, n={self.specular_exponent}, reflective={self.reflective})")

# materials/textures.py
import os
import numpy as np
from PIL import Image
from whitted.core.vector import Vector2, Vector3
from whitted.errors import SceneError


class Texture:
    """Base class for all textures."""
    def sample(self, uv: Vector2) -> Vector3:
        """Sample the texture at given UV coordinates."""
        raise NotImplementedError("sample() must be implemented by texture subclasses.")


class CheckerTexture(Texture):
    """A checker pattern texture."""
    def __init__(self, color1: Vector3, color2: Vector3, scale: float = 1.0):
        self.color1 = color1
        self.color2 = color2
        self.scale = scale

    def sample(self, uv: Vector2) -> Vector3:
        x = int(np.floor(uv.x * self.scale))
        y = int(np.floor(uv.y * self.scale))
        is_even = (x + y) % 2 == 0
        return self.color1 if is_even else self.color2


class ImageTexture(Texture):
    """A nearest-neighbour sampled texture from an image file."""
    def __init__(self, image_path: str):
        if not os.path.exists(image_path):
            raise SceneError(f"Texture file not found: {image_path}")
        try:
            with Image.open(image_path) as img:
                if img.mode != 'RGB':
                    img = img.convert('RGB')
                self.data = np.asarray(img, dtype=np.float64) / 255.0  # Normalize to [0,1]
                self.width = img.width
                self.height = img.height
        except OSError as e:
            raise SceneError(f"Error loading texture {image_path}: {e}")
        self.path = image_path

    def sample(self, uv: Vector2) -> Vector3:
        # Wrap, and flip V for OpenGL-style UVs
        u = uv.x % 1.0
        v = 1.0 - (uv.y % 1.0)

        x = min(int(u * self.width), self.width - 1)
        y = min(int(v * self.height), self.height - 1)

        color = self.data[y, x]
        return Vector3(color[0], color[1], color[2])

# renderer/framebuffer.py
import numpy as np
from whitted.core.vector import Vector3


def quantize(colors: np.ndarray) -> np.ndarray:
    """
    Linear [0, 1] float colors to 8-bit channels. Out-of-range values are
    clamped (never wrapped) and NaNs become 0.
    """
    colors = np.nan_to_num(np.asarray(colors, dtype=np.float64), nan=0.0, posinf=1.0, neginf=0.0)
    return np.rint(np.clip(colors, 0.0, 1.0) * 255.0).astype(np.uint8)


class FrameBuffer:
    """
    An RGB8 pixel buffer, indexed [row, column, channel] with row 0 at the
    top of the image.
    """
    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Frame buffer size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._pixels = np.zeros((height, width, 3), dtype=np.uint8)

    def set_pixel(self, x: int, y: int, color: Vector3):
        self._pixels[y, x] = quantize((color.x, color.y, color.z))

    def get_pixel(self, x: int, y: int):
        r, g, b = self._pixels[y, x]
        return int(r), int(g), int(b)

    def set_rows(self, y_start: int, colors: np.ndarray):
        """Writes a block of float colors shaped (rows, width, 3) starting at y_start."""
        rows = colors.shape[0]
        self._pixels[y_start:y_start + rows] = quantize(colors)

    def clear(self):
        self._pixels.fill(0)

    @property
    def pixels(self) -> np.ndarray:
        """Read-only view of the buffer for image writers."""
        view = self._pixels.view()
        view.flags.writeable = False
        return view

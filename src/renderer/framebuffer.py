# renderer/framebuffer.py
from typing import Sequence, Tuple
import numpy as np
from renderer.tone_mapping import clamp_channel

class FrameBuffer:
    """
    RGB pixel sink. Pixels are addressed with y growing upwards; the backing
    array is laid out (width, height, 3) with row 0 at the top so it can be
    handed straight to pygame.surfarray.
    """
    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Frame buffer needs a positive size, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = np.zeros((width, height, 3), dtype=np.uint8)

    def set_pixel(self, x: int, y: int, rgb: Sequence[float]):
        if x < 0 or x >= self.width or y < 0 or y >= self.height:
            return
        r, g, b = rgb
        self.pixels[x, self.height - 1 - y] = (clamp_channel(r), clamp_channel(g), clamp_channel(b))

    def get_pixel(self, x: int, y: int) -> Tuple[int, int, int]:
        if x < 0 or x >= self.width or y < 0 or y >= self.height:
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} frame buffer")
        r, g, b = self.pixels[x, self.height - 1 - y]
        return int(r), int(g), int(b)

    def clear(self):
        self.pixels.fill(0)

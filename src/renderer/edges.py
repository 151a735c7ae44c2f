# renderer/edges.py
from typing import Set, Tuple
import numpy as np
from renderer.framebuffer import FrameBuffer

def edge_mask(pixels: np.ndarray, threshold: float = 9) -> np.ndarray:
    """
    Flag pixels whose color jumps against the pixel below or to the right.

    pixels is a (width, height, 3) array with row 0 at the top, so the
    pixel below sits one row further down the array. A pixel is an edge
    when any channel's squared difference with either neighbour exceeds
    threshold; the edge pixel and its four neighbours are flagged.
    Returns a boolean (width, height) mask.
    """
    data = pixels.astype(np.int32)
    width, height = data.shape[0], data.shape[1]
    seeds = np.zeros((width, height), dtype=bool)

    # Right neighbour: column x against column x + 1.
    if width > 1:
        right = ((data[1:, :, :] - data[:-1, :, :]) ** 2 > threshold).any(axis=2)
        seeds[:-1, :] |= right

    # Row r against row r + 1, the pixel below it.
    if height > 1:
        below = ((data[:, :-1, :] - data[:, 1:, :]) ** 2 > threshold).any(axis=2)
        seeds[:, :-1] |= below

    flagged = seeds.copy()
    flagged[1:, :] |= seeds[:-1, :]
    flagged[:-1, :] |= seeds[1:, :]
    flagged[:, 1:] |= seeds[:, :-1]
    flagged[:, :-1] |= seeds[:, 1:]
    return flagged

def detect_edges(framebuffer: FrameBuffer, threshold: float = 9,
                 highlight: bool = True) -> Set[Tuple[int, int]]:
    """
    Return the (x, y) pixels that need anti-aliasing. With highlight the
    flagged pixels are painted black so the pending work is visible.
    """
    mask = edge_mask(framebuffer.pixels, threshold)
    if highlight:
        framebuffer.pixels[mask] = 0
    xs, rows = np.nonzero(mask)
    top = framebuffer.height - 1
    return {(int(x), top - int(row)) for x, row in zip(xs, rows)}

# renderer/tone_mapping.py
import math
from typing import Tuple
from core.vector import Vector3

def gamma_correct(color: Vector3) -> Vector3:
    """
    Approximate display gamma with a square root per channel.
    """
    return Vector3(math.sqrt(color.x), math.sqrt(color.y), math.sqrt(color.z))

def to_rgb(color: Vector3) -> Tuple[float, float, float]:
    """
    Scale a [0, 1] color to the 0-255 range. Over-bright values are left
    above 255; the frame buffer clamps when it stores them.
    """
    return (color.x * 255, color.y * 255, color.z * 255)

def clamp_channel(value: float) -> int:
    return min(255, max(0, int(round(value))))

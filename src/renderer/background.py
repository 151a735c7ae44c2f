# renderer/background.py
from core.ray import Ray
from core.vector import Vector3
from renderer.tone_mapping import gamma_correct

TOP_COLOR = Vector3(0.3, 0.5, 0.9)     # Sky blue
BOTTOM_COLOR = Vector3(1.0, 1.0, 1.0)  # White near the horizon

def gradient(t: float) -> Vector3:
    """
    Interpolate between the bottom color (t = 0) and the top color (t = 1).
    """
    return BOTTOM_COLOR * (1.0 - t) + TOP_COLOR * t

def background_color(ray: Ray) -> Vector3:
    # Map the vertical direction from [-1, 1] to [0, 1]. Directions are not
    # normalized, so clamp.
    t = min(1.0, max(0.0, 0.5 * (ray.direction.y + 1.0)))
    return gamma_correct(gradient(t))

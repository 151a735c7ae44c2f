# core/ray.py
from core.vector import Vector3

class Ray:
    """
    A half-line with an origin and a direction. The direction is not
    normalized; callers normalize where its magnitude matters.
    """
    def __init__(self, origin: Vector3, direction: Vector3):
        self.origin = origin
        self.direction = direction

    def point_at(self, t: float) -> Vector3:
        return self.origin + self.direction * t

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin}, direction={self.direction})"

# src/core/aabb.py
import math
from typing import Iterable
from core.vector import Vector3

class BoundingBox:
    """Axis-aligned box used to skip a mesh's triangle loop."""
    def __init__(self, minimum: Vector3, maximum: Vector3):
        self.minimum = minimum
        self.maximum = maximum

    def intersect(self, ray, t_min: float = 0.0, t_max: float = math.inf) -> bool:
        # Slab method: narrow [t_min, t_max] one axis at a time.
        for a in ('x', 'y', 'z'):
            direction = getattr(ray.direction, a)
            origin = getattr(ray.origin, a)
            low = getattr(self.minimum, a)
            high = getattr(self.maximum, a)
            if direction == 0:
                # Parallel to this slab: only rays starting inside it can hit.
                if origin < low or origin > high:
                    return False
                continue
            invD = 1.0 / direction
            t0 = (low - origin) * invD
            t1 = (high - origin) * invD
            if invD < 0:
                t0, t1 = t1, t0
            t_min = t0 if t0 > t_min else t_min
            t_max = t1 if t1 < t_max else t_max
            if t_max < t_min:
                return False
        return True

    def contains(self, point: Vector3) -> bool:
        return (self.minimum.x <= point.x <= self.maximum.x and
                self.minimum.y <= point.y <= self.maximum.y and
                self.minimum.z <= point.z <= self.maximum.z)

    def transformed(self, scale: float, offset: Vector3) -> "BoundingBox":
        """Apply a uniform scale followed by a translation to both corners."""
        return BoundingBox(self.minimum * scale + offset, self.maximum * scale + offset)

    @staticmethod
    def from_points(points: Iterable[Vector3]) -> "BoundingBox":
        points = list(points)
        if not points:
            raise ValueError("Cannot bound an empty set of points")
        small = Vector3(
            min(p.x for p in points),
            min(p.y for p in points),
            min(p.z for p in points)
        )
        big = Vector3(
            max(p.x for p in points),
            max(p.y for p in points),
            max(p.z for p in points)
        )
        return BoundingBox(small, big)

    def __repr__(self) -> str:
        return f"BoundingBox({self.minimum}, {self.maximum})"

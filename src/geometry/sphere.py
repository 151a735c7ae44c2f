# geometry/sphere.py
import math
from core.vector import Vector3
from core.ray import Ray
from geometry.hittable import Hittable

MISS = -1.0

class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius and albedo color.
    """
    def __init__(self, center: Vector3, radius: float, color: Vector3):
        self.center = center
        self.radius = radius
        self.color = color

    def intersect(self, ray: Ray, double_sided: bool = False) -> float:
        """
        Solve a*t^2 + b*t + c = 0 and return the smaller root, or -1 when the
        ray misses. Roots behind the origin are returned as-is; callers decide
        which t values count.
        """
        oc = ray.origin - self.center
        a = ray.direction.dot(ray.direction)
        b = 2.0 * ray.direction.dot(oc)
        c = oc.dot(oc) - self.radius * self.radius
        discriminant = b * b - 4 * a * c

        if discriminant < 0:
            return MISS
        return (-b - math.sqrt(discriminant)) / (2 * a)

    def normal_at(self, point: Vector3) -> Vector3:
        return (point - self.center).normalize()

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius})"

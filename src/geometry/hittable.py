# geometry/hittable.py
from core.vector import Vector3
from core.ray import Ray

class CastResult:
    """
    Records the nearest intersection of a camera ray with the scene.
    """
    def __init__(self, position: Vector3, normal: Vector3, t: float,
                 obj: "Hittable", in_shadow: bool = False):
        self.position = position    # Intersection point
        self.normal = normal        # Unit surface normal facing the viewer
        self.t = t                  # Ray parameter at intersection
        self.obj = obj              # The Sphere or Mesh that was hit
        self.in_shadow = in_shadow  # Whether the light is occluded

    @property
    def albedo(self) -> Vector3:
        return self.obj.color

    def __repr__(self) -> str:
        return (f"CastResult(t={self.t}, position={self.position}, normal={self.normal}, "
                f"obj={self.obj!r}, in_shadow={self.in_shadow})")

class Hittable:
    """
    Abstract class for scene objects that can be hit by a ray.
    """
    color: Vector3

    def intersect(self, ray: Ray, double_sided: bool = False):
        raise NotImplementedError("intersect() must be implemented by subclasses.")

# geometry/__init__.py
from geometry.hittable import CastResult, Hittable
from geometry.sphere import Sphere
from geometry.mesh import Mesh, MeshHit, Triangle, load_obj, parse_obj
from geometry.scene import DEFAULT_LIGHT_DIRECTION, Scene

__all__ = [
    "CastResult", "Hittable", "Sphere", "Mesh", "MeshHit", "Triangle",
    "load_obj", "parse_obj", "DEFAULT_LIGHT_DIRECTION", "Scene",
]

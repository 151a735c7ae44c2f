# src/geometry/scene.py
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union
from core.vector import Vector3
from core.errors import MalformedSceneError
from camera.camera import Camera
from geometry.hittable import Hittable
from geometry.sphere import Sphere
from geometry.mesh import Mesh, parse_obj

DEFAULT_LIGHT_DIRECTION = Vector3(-1.1, -1.3, -1.5).normalize()

SceneEntry = Dict[str, Any]

class Scene:
    """
    Everything one render needs: spheres, meshes, the camera and a single
    directional light. light_direction points from the light into the scene.
    """
    def __init__(self, spheres: Optional[List[Sphere]] = None, meshes: Optional[List[Mesh]] = None,
                 camera: Optional[Camera] = None, light_direction: Vector3 = DEFAULT_LIGHT_DIRECTION):
        self.spheres: List[Sphere] = list(spheres) if spheres else []
        self.meshes: List[Mesh] = list(meshes) if meshes else []
        self.camera = camera if camera is not None else Camera()
        if light_direction.length_squared() == 0:
            raise MalformedSceneError("light direction must be a non-zero vector")
        self.light_direction = light_direction.normalize()
        self.to_light = -self.light_direction

    def add(self, obj: Union[Sphere, Mesh]):
        if isinstance(obj, Sphere):
            self.spheres.append(obj)
        elif isinstance(obj, Mesh):
            self.meshes.append(obj)
        else:
            raise TypeError(f"Cannot add {type(obj).__name__} to a scene")

    @property
    def objects(self) -> List[Hittable]:
        """Spheres first, then meshes."""
        return [*self.spheres, *self.meshes]

    @property
    def triangle_count(self) -> int:
        return sum(len(mesh.triangles) for mesh in self.meshes)

    @classmethod
    def from_description(cls, entries: Iterable[SceneEntry], camera: Optional[Camera] = None,
                         light_direction: Vector3 = DEFAULT_LIGHT_DIRECTION) -> "Scene":
        """
        Build a fresh scene from description entries.

        An entry with a "source" key is a mesh:
            {"source": obj_text, "scale": 1.0, "offset": (x, y, z), "color": (r, g, b)}
        anything else is a sphere:
            {"center": (x, y, z), "radius": r, "color": (r, g, b)}
        Colors are 0-255 per channel.
        """
        scene = cls(camera=camera, light_direction=light_direction)
        for index, entry in enumerate(entries):
            try:
                if "source" in entry:
                    scene.add(_mesh_from_entry(entry))
                else:
                    scene.add(_sphere_from_entry(entry))
            except KeyError as e:
                raise MalformedSceneError(f"scene entry {index} is missing {e.args[0]!r}") from e
            except (TypeError, ValueError) as e:
                raise MalformedSceneError(f"scene entry {index}: {e}") from e
        print(f"Scene: {len(scene.spheres)} spheres, {len(scene.meshes)} meshes, "
              f"{scene.triangle_count} triangles")
        return scene

def _vector(value: Sequence[float], name: str) -> Vector3:
    if isinstance(value, Vector3):
        return value
    try:
        x, y, z = (float(c) for c in value)
    except (TypeError, ValueError) as e:
        raise MalformedSceneError(f"{name} must be three numbers, got {value!r}") from e
    return Vector3(x, y, z)

def _color(value: Sequence[float]) -> Vector3:
    color = _vector(value, "color")
    if not all(0 <= c <= 255 for c in color):
        raise MalformedSceneError(f"color channels must be within 0-255, got {value!r}")
    return color * (1 / 255)

def _sphere_from_entry(entry: SceneEntry) -> Sphere:
    radius = float(entry["radius"])
    if radius <= 0:
        raise MalformedSceneError(f"sphere radius must be positive, got {radius}")
    return Sphere(_vector(entry["center"], "center"), radius, _color(entry["color"]))

def _mesh_from_entry(entry: SceneEntry) -> Mesh:
    scale = float(entry.get("scale", 1.0))
    offset = _vector(entry.get("offset", (0, 0, 0)), "offset")
    return parse_obj(entry["source"], scale, offset, _color(entry["color"]))

# renderer/raytracer.py
import math
from typing import Optional
from core.ray import Ray
from core.vector import Vector3
from geometry.hittable import CastResult, Hittable
from geometry.scene import Scene

# Shadow rays start exactly on a surface; hits this far behind still occlude.
SHADOW_EPSILON = -1e-10

def trace_ray(ray: Ray, scene: Scene) -> Optional[CastResult]:
    """
    Find the nearest object in front of the ray origin and describe the hit.
    Returns None when the ray escapes the scene.
    """
    closest_t = math.inf
    closest_obj = None
    closest_mesh_hit = None

    for sphere in scene.spheres:
        t = sphere.intersect(ray)
        if 0 < t < closest_t:
            closest_t = t
            closest_obj = sphere

    for mesh in scene.meshes:
        hit = mesh.intersect(ray)
        if hit is not None and 0 < hit.t < closest_t:
            closest_t = hit.t
            closest_obj = mesh
            closest_mesh_hit = hit

    if closest_obj is None:
        return None

    position = ray.point_at(closest_t)
    if closest_mesh_hit is not None:
        normal = closest_obj.normal_at(closest_mesh_hit)
    else:
        normal = closest_obj.normal_at(position)

    shadowed = in_shadow(position, closest_obj, scene)
    return CastResult(position, normal, closest_t, closest_obj, shadowed)

def in_shadow(point: Vector3, obj: Hittable, scene: Scene) -> bool:
    """
    Cast a ray from point toward the light and report whether anything other
    than obj blocks it. The origin is not offset along the normal.
    """
    shadow_ray = Ray(point, scene.to_light)

    for sphere in scene.spheres:
        if sphere is obj:
            continue
        if sphere.intersect(shadow_ray) > SHADOW_EPSILON:
            return True

    for mesh in scene.meshes:
        if mesh is obj:
            continue
        hit = mesh.intersect(shadow_ray)
        if hit is not None and hit.t > SHADOW_EPSILON:
            return True

    return False

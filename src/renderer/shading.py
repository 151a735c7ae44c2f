# renderer/shading.py
from typing import NamedTuple, Optional
from core.ray import Ray
from core.vector import Vector3
from geometry.hittable import CastResult
from geometry.scene import Scene
from renderer.background import background_color
from renderer.raytracer import trace_ray
from renderer.tone_mapping import gamma_correct

AMBIENT = 0.05
DIFFUSE_STRENGTH = 1.0
SPECULAR_STRENGTH = 0.8
SPECULAR_POWER = 25
# Shadowed surfaces keep this fraction of their lit intensity.
SHADOW_FACTOR = 0.4

class PhongTerms(NamedTuple):
    """The lighting terms for one hit, already weighted by their strengths."""
    ambient: float
    diffuse: float
    specular: float
    shadow: float

    @property
    def intensity(self) -> float:
        return (self.ambient + self.diffuse + self.specular) * self.shadow

def phong_terms(ray: Ray, result: CastResult, scene: Scene) -> PhongTerms:
    shadow = SHADOW_FACTOR if result.in_shadow else 1.0

    diffuse = DIFFUSE_STRENGTH * max(result.normal.dot(scene.to_light), 0.0)

    specular_strength = 0.0 if result.in_shadow else SPECULAR_STRENGTH
    reflected = scene.light_direction.reflect(result.normal)
    specular = max(reflected.dot(ray.direction.normalize()), 0.0) ** SPECULAR_POWER

    return PhongTerms(AMBIENT, diffuse, specular_strength * specular, shadow)

def shade(ray: Ray, result: Optional[CastResult], scene: Scene) -> Vector3:
    """
    Color for a cast result in [0, 1] per channel (possibly above 1 for
    over-bright highlights), gamma corrected. Misses get the background.
    """
    if result is None:
        return background_color(ray)
    terms = phong_terms(ray, result, scene)
    return gamma_correct(result.albedo * terms.intensity)

def ray_color(ray: Ray, scene: Scene) -> Vector3:
    return shade(ray, trace_ray(ray, scene), scene)

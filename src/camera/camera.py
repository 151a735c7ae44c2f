# camera/camera.py
import math
from core.vector import Vector3
from core.ray import Ray

class Camera:
    """
    Pinhole camera. Rays leave the camera position through a viewport of
    width 2*tan(fov/2)*focal_length (fov is horizontal) placed focal_length
    in front of it. u and v run from 0 at the lower-left corner to 1 at the
    opposite edges.
    """
    def __init__(self, position: Vector3 = None, yaw: float = 0.0, pitch: float = 0.0,
                 fov: float = math.radians(90), aspect_ratio: float = 1.0, focal_length: float = 1.0):
        self.position = position if position is not None else Vector3(0, 0, 0)
        self.yaw = yaw
        self.pitch = pitch
        self.fov = fov
        self.aspect_ratio = aspect_ratio
        self.focal_length = focal_length
        self.update_camera()

    def update_camera(self):
        """Updates the camera's basis vectors and viewport."""
        global_up = Vector3(0, 1, 0)

        # yaw = pitch = 0 looks down -z
        self.forward = Vector3(
            math.sin(self.yaw) * math.cos(self.pitch),
            math.sin(self.pitch),
            -math.cos(self.yaw) * math.cos(self.pitch)
        ).normalize()

        self.right = self.forward.cross(global_up).normalize()
        self.up = self.right.cross(self.forward).normalize()

        viewport_width = 2.0 * math.tan(self.fov / 2) * self.focal_length
        viewport_height = viewport_width / self.aspect_ratio

        self.horizontal = self.right * viewport_width
        self.vertical = self.up * viewport_height

        self.lower_left_corner = (self.position +
                                  self.forward * self.focal_length -
                                  self.horizontal * 0.5 -
                                  self.vertical * 0.5)

    def get_ray(self, u: float, v: float) -> Ray:
        direction = (self.lower_left_corner +
                     self.horizontal * u +
                     self.vertical * v -
                     self.position)
        return Ray(self.position, direction)

    @classmethod
    def for_image(cls, width: int, height: int, **kwargs) -> "Camera":
        return cls(aspect_ratio=width / height, **kwargs)

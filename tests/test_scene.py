"""Tests for scene construction and the camera."""

import math

import pytest

from camera.camera import Camera
from core.errors import MalformedSceneError
from core.vector import Vector3
from geometry.mesh import Mesh
from geometry.scene import DEFAULT_LIGHT_DIRECTION, Scene
from geometry.sphere import Sphere


class TestSceneDescription:

    def test_default_spheres(self, default_description):
        scene = Scene.from_description(default_description)
        assert len(scene.spheres) == 3
        assert scene.meshes == []
        red = scene.spheres[0]
        assert tuple(red.center) == (0, 0, -1)
        assert red.radius == 0.3
        assert tuple(red.color) == pytest.approx((1, 0, 0))

    def test_colors_are_scaled_to_unit_range(self):
        scene = Scene.from_description([{"center": (0, 0, 0), "radius": 1, "color": (51, 102, 255)}])
        assert tuple(scene.spheres[0].color) == pytest.approx((0.2, 0.4, 1.0))

    def test_mesh_entry(self, cube_obj):
        entry = {"source": cube_obj, "scale": 0.5, "offset": (0, 0, -2), "color": (255, 255, 255)}
        scene = Scene.from_description([entry])
        assert len(scene.meshes) == 1
        assert scene.triangle_count == 12
        assert tuple(scene.meshes[0].bounding_box.minimum) == pytest.approx((-0.25, -0.25, -2.25))

    def test_mesh_scale_and_offset_default(self, cube_obj):
        scene = Scene.from_description([{"source": cube_obj, "color": (0, 0, 0)}])
        assert tuple(scene.meshes[0].bounding_box.maximum) == pytest.approx((0.5, 0.5, 0.5))

    def test_every_call_builds_new_objects(self, default_description):
        first = Scene.from_description(default_description)
        second = Scene.from_description(default_description)
        assert first.spheres[0] is not second.spheres[0]

    def test_objects_lists_spheres_before_meshes(self, default_description, cube_obj):
        entries = [{"source": cube_obj, "color": (1, 1, 1)}] + default_description
        scene = Scene.from_description(entries)
        assert [type(o) for o in scene.objects] == [Sphere, Sphere, Sphere, Mesh]

    def test_camera_and_light_are_kept(self, small_camera):
        scene = Scene.from_description([], camera=small_camera, light_direction=Vector3(0, -2, 0))
        assert scene.camera is small_camera
        assert tuple(scene.light_direction) == (0, -1, 0)
        assert tuple(scene.to_light) == (0, 1, 0)

    @pytest.mark.parametrize("entry, message", [
        ({"center": (0, 0, 0), "color": (1, 1, 1)}, "missing 'radius'"),
        ({"radius": 1, "color": (1, 1, 1)}, "missing 'center'"),
        ({"center": (0, 0, 0), "radius": 1}, "missing 'color'"),
        ({"center": (0, 0, 0), "radius": 0, "color": (1, 1, 1)}, "radius must be positive"),
        ({"center": (0, 0, 0), "radius": 1, "color": (256, 0, 0)}, "0-255"),
        ({"center": (0, 0), "radius": 1, "color": (1, 1, 1)}, "three numbers"),
        ({"center": (0, 0, 0), "radius": "big", "color": (1, 1, 1)}, "scene entry 0"),
        ({"source": "f 1 2 3\n", "color": (1, 1, 1)}, "line 1"),
    ])
    def test_malformed_entries(self, entry, message):
        with pytest.raises(MalformedSceneError, match=message):
            Scene.from_description([entry])

    @pytest.mark.parametrize("scale", [0, -1.0])
    def test_mesh_scale_must_be_positive(self, cube_obj, scale):
        entry = {"source": cube_obj, "scale": scale, "offset": (0, 0, -3), "color": (1, 1, 1)}
        with pytest.raises(MalformedSceneError, match="scale must be positive"):
            Scene.from_description([entry])

    def test_zero_light_direction_is_rejected(self, default_description):
        with pytest.raises(MalformedSceneError, match="light direction"):
            Scene.from_description(default_description, light_direction=Vector3(0, 0, 0))

    def test_error_names_the_entry(self, default_description):
        with pytest.raises(MalformedSceneError, match="scene entry 3"):
            Scene.from_description(default_description + [{"center": (0, 0, 0)}])


class TestScene:

    def test_default_light(self):
        scene = Scene()
        assert scene.light_direction.length() == pytest.approx(1.0)
        assert tuple(scene.light_direction) == pytest.approx(tuple(DEFAULT_LIGHT_DIRECTION))
        assert scene.light_direction.y < 0

    def test_zero_light_direction(self):
        with pytest.raises(MalformedSceneError):
            Scene(light_direction=Vector3(0, 0, 0))

    def test_add_sorts_by_kind(self, grey):
        scene = Scene()
        scene.add(Sphere(Vector3(0, 0, 0), 1.0, grey))
        assert len(scene.spheres) == 1

    def test_add_rejects_other_objects(self):
        with pytest.raises(TypeError):
            Scene().add("teapot")


class TestCamera:

    def test_center_ray_looks_down_negative_z(self):
        ray = Camera().get_ray(0.5, 0.5)
        assert tuple(ray.origin) == (0, 0, 0)
        assert tuple(ray.direction) == pytest.approx((0, 0, -1))

    def test_corners_follow_field_of_view(self):
        camera = Camera.for_image(400, 200)
        assert camera.aspect_ratio == 2.0
        assert tuple(camera.get_ray(0, 0).direction) == pytest.approx((-1, -0.5, -1))
        assert tuple(camera.get_ray(1, 1).direction) == pytest.approx((1, 0.5, -1))

    def test_narrow_field_of_view(self):
        camera = Camera(fov=math.radians(60))
        half_width = math.tan(math.radians(30))
        assert camera.get_ray(1, 0.5).direction.x == pytest.approx(half_width)

    def test_position_moves_origin(self):
        camera = Camera(position=Vector3(1, 2, 3))
        ray = camera.get_ray(0.5, 0.5)
        assert tuple(ray.origin) == (1, 2, 3)
        assert tuple(ray.direction) == pytest.approx((0, 0, -1))

    def test_yaw_turns_the_view(self):
        camera = Camera(yaw=math.pi / 2)
        assert tuple(camera.get_ray(0.5, 0.5).direction) == pytest.approx((1, 0, 0), abs=1e-12)

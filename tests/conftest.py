"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Make the src/ packages importable without installing
src_root = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_root))

from core.vector import Vector3  # noqa: E402
from camera.camera import Camera  # noqa: E402
from geometry.scene import Scene  # noqa: E402
from geometry.sphere import Sphere  # noqa: E402


# Unit cube centred on the origin, faces wound counter-clockwise seen from outside.
CUBE_OBJ = """\
# unit cube
o Cube
v -0.5 -0.5 -0.5
v 0.5 -0.5 -0.5
v 0.5 0.5 -0.5
v -0.5 0.5 -0.5
v -0.5 -0.5 0.5
v 0.5 -0.5 0.5
v 0.5 0.5 0.5
v -0.5 0.5 0.5
vn 0 0 -1
vn 0 0 1
vn 0 -1 0
vn 0 1 0
vn -1 0 0
vn 1 0 0
f 1//1 4//1 3//1 2//1
f 5//2 6//2 7//2 8//2
f 1//3 2//3 6//3 5//3
f 4//4 8//4 7//4 3//4
f 1//5 5//5 8//5 4//5
f 2//6 3//6 7//6 6//6
"""


@pytest.fixture
def cube_obj():
    """OBJ text for a unit cube with 8 vertices and 6 quad faces."""
    return CUBE_OBJ


@pytest.fixture
def grey():
    return Vector3(0.5, 0.5, 0.5)


@pytest.fixture
def facing_light_scene(grey):
    """One sphere in front of the camera with the light shining straight at it."""
    return Scene(
        spheres=[Sphere(Vector3(0, 0, -5), 1.0, grey)],
        light_direction=Vector3(0, 0, -1),
    )


@pytest.fixture
def small_camera():
    return Camera.for_image(24, 16)


@pytest.fixture
def default_description():
    return [
        {"center": (0, 0, -1), "radius": 0.3, "color": (255, 0, 0)},
        {"center": (0, 0.2, -0.8), "radius": 0.15, "color": (0, 0, 255)},
        {"center": (0, -100.5, -1), "radius": 100, "color": (0, 255, 0)},
    ]

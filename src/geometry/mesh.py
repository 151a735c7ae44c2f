# geometry/mesh.py
from typing import List, NamedTuple, Optional, Tuple
from core.vector import Vector3
from core.ray import Ray
from core.aabb import BoundingBox
from core.errors import MalformedSceneError
from geometry.hittable import Hittable

MISS = -1.0
PARALLEL_EPSILON = 1e-6   # n.d below this counts as parallel or back-facing
BOX_TOLERANCE = 1e-5      # slack on the per-triangle extent check
EDGE_TOLERANCE = 1e-7     # slack on the inside-outside test
MESH_HIT_EPSILON = -1e-9  # hits this close behind the origin still count

class Triangle:
    """
    A single triangle. The geometric normal (v1 - v0) x (v2 - v0) drives the
    intersection test; the shading normal is what the shader lights with.
    """
    def __init__(self, v0: Vector3, v1: Vector3, v2: Vector3,
                 shading_normal: Optional[Vector3] = None):
        self.v0 = v0
        self.v1 = v1
        self.v2 = v2
        self.normal = self.calc_normal()

        # If no shading normal is passed use the face normal.
        if shading_normal is None:
            self.shading_normal = self.normal
        else:
            self.shading_normal = shading_normal.normalize()

        # Extents for the cheap rejection before the exact test
        self.minimum = Vector3(min(v0.x, v1.x, v2.x), min(v0.y, v1.y, v2.y), min(v0.z, v1.z, v2.z))
        self.maximum = Vector3(max(v0.x, v1.x, v2.x), max(v0.y, v1.y, v2.y), max(v0.z, v1.z, v2.z))

    def calc_normal(self) -> Vector3:
        edge1 = self.v1 - self.v0
        edge2 = self.v2 - self.v0
        return edge1.cross(edge2).normalize()

    def intersect(self, ray: Ray, double_sided: bool = False) -> float:
        """
        Return the ray parameter where the ray crosses this triangle, or -1.

        Single-sided tests only accept rays travelling along the normal
        (n.d > 0). With double_sided the plane test uses the normal facing
        away from the ray instead; the triangle itself is never modified.
        """
        plane_normal = self.normal
        if double_sided and ray.direction.dot(plane_normal) < 0:
            plane_normal = -plane_normal

        t = self._intersect_plane(ray, plane_normal)
        if t < 0:
            return MISS

        point = ray.point_at(t)
        lo, hi = self.minimum, self.maximum
        if (point.x + BOX_TOLERANCE < lo.x or point.x - BOX_TOLERANCE > hi.x or
                point.y + BOX_TOLERANCE < lo.y or point.y - BOX_TOLERANCE > hi.y or
                point.z + BOX_TOLERANCE < lo.z or point.z - BOX_TOLERANCE > hi.z):
            return MISS

        # Inside-outside test against each edge.
        edges = (
            (self.v2 - self.v0, point - self.v0),
            (self.v1 - self.v2, point - self.v2),
            (self.v0 - self.v1, point - self.v1),
        )
        for edge, to_point in edges:
            if self.normal.dot(edge.cross(to_point)) >= EDGE_TOLERANCE:
                return MISS
        return t

    def _intersect_plane(self, ray: Ray, normal: Vector3) -> float:
        normal_dot_dir = normal.dot(ray.direction)
        if normal_dot_dir < PARALLEL_EPSILON:
            return MISS
        d = -normal.dot(self.v1)
        return -(normal.dot(ray.origin) + d) / normal_dot_dir

    def __repr__(self) -> str:
        return f"Triangle({self.v0}, {self.v1}, {self.v2})"

class MeshHit(NamedTuple):
    """Nearest triangle hit inside a mesh."""
    t: float
    triangle: Triangle

class Mesh(Hittable):
    """A triangle mesh with one bounding box and one albedo color."""
    def __init__(self, triangles: List[Triangle], bounding_box: BoundingBox, color: Vector3):
        self.triangles = triangles
        self.bounding_box = bounding_box
        self.color = color

    def intersect(self, ray: Ray, double_sided: bool = False) -> Optional[MeshHit]:
        if not self.bounding_box.intersect(ray):
            return None

        closest = None
        for triangle in self.triangles:
            t = triangle.intersect(ray, double_sided)
            if t > MESH_HIT_EPSILON and (closest is None or t < closest.t):
                closest = MeshHit(t, triangle)
        return closest

    def normal_at(self, hit: MeshHit) -> Vector3:
        # Importer normals are stored negated; flip back to face the viewer.
        return -hit.triangle.shading_normal

    def __repr__(self) -> str:
        return f"Mesh({len(self.triangles)} triangles, {self.bounding_box})"

def _parse_vector(values: List[str]) -> Vector3:
    if len(values) < 4:
        raise ValueError(f"expected 3 coordinates, got {len(values) - 1}")
    return Vector3(float(values[1]), float(values[2]), float(values[3]))

def _resolve_index(token: str, count: int, kind: str) -> int:
    """Turn a 1-based (or negative, relative) OBJ index into a list index."""
    index = int(token)
    if index > 0:
        index -= 1
    elif index < 0:
        index += count
    else:
        raise ValueError(f"{kind} index 0 is not valid, OBJ indices start at 1")
    if not 0 <= index < count:
        raise IndexError(f"{kind} index {token} out of range ({count} defined)")
    return index

def _parse_face(values: List[str], vertex_count: int, normal_count: int) -> Tuple[List[int], List[int]]:
    if len(values) < 4:
        raise ValueError(f"face needs at least 3 vertices, got {len(values) - 1}")
    points = []
    normal_indices = []
    for token in values[1:]:
        fields = token.split('/')
        points.append(_resolve_index(fields[0], vertex_count, "vertex"))
        if len(fields) > 2 and fields[2]:
            normal_indices.append(_resolve_index(fields[2], normal_count, "normal"))
    if normal_indices and len(normal_indices) != len(points):
        raise ValueError("face mixes vertices with and without normals")
    return points, normal_indices

def parse_obj(text: str, scale: float = 1.0, offset: Optional[Vector3] = None,
              color: Optional[Vector3] = None) -> Mesh:
    """
    Build a Mesh from OBJ text.

    Faces are fan-triangulated (convex, planar faces assumed) and every
    triangle of a face shares one flat shading normal: the negated average of
    the face's vertex normals. Vertices are placed at v * scale + offset.

    Raises MalformedSceneError for a non-positive scale, for sources without
    vertices and for faces that cannot be resolved.
    """
    if scale <= 0:
        # Mirroring flips the winding and the box corners.
        raise MalformedSceneError(f"mesh scale must be positive, got {scale}")
    if offset is None:
        offset = Vector3(0, 0, 0)
    if color is None:
        color = Vector3(0.5, 0.5, 0.5)

    vertices: List[Vector3] = []
    normals: List[Vector3] = []
    triangles: List[Triangle] = []

    for line_num, line in enumerate(text.splitlines(), 1):
        values = line.split()
        if not values or values[0].startswith('#'):
            continue
        try:
            if values[0] == 'v':
                vertices.append(_parse_vector(values))
            elif values[0] == 'vn':
                normals.append(_parse_vector(values))
            elif values[0] == 'f':
                points, normal_indices = _parse_face(values, len(vertices), len(normals))

                face_normal = None
                if normal_indices:
                    total = Vector3(0, 0, 0)
                    for n_idx in normal_indices:
                        total = total + normals[n_idx]
                    face_normal = total * (-1.0 / len(normal_indices))

                placed = [vertices[p] * scale + offset for p in points]
                # Fan from the first vertex; the winding is reversed so the
                # geometric normal points into the mesh.
                for i in range(1, len(placed) - 1):
                    triangles.append(Triangle(placed[i], placed[0], placed[i + 1], face_normal))
        except (ValueError, IndexError) as e:
            raise MalformedSceneError(f"line {line_num}: {line.strip()!r}: {e}") from e

    if not vertices:
        raise MalformedSceneError("mesh source defines no vertices")

    box = BoundingBox.from_points(vertices).transformed(scale, offset)
    return Mesh(triangles, box, color)

def load_obj(filename: str, scale: float = 1.0, offset: Optional[Vector3] = None,
             color: Optional[Vector3] = None) -> Mesh:
    """Load a mesh from an OBJ file on disk."""
    print(f"Opening file: {filename}")
    with open(filename, 'r') as f:
        mesh = parse_obj(f.read(), scale, offset, color)
    print(f"Loaded {len(mesh.triangles)} triangles, bounds {mesh.bounding_box}")
    return mesh

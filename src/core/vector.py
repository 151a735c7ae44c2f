# core/vector.py
import math

class Vector3:
    """
    A 3D vector value type. Every operation returns a new vector; nothing
    in the renderer mutates one after construction.

    Multiplication accepts a scalar (scale) or another vector (component-wise).
    Division accepts a scalar or another vector; component-wise division by a
    vector with a zero component yields the sentinel Vector3(-1, -1, -1).
    """
    __slots__ = ("x", "y", "z")

    def __init__(self, x: float, y: float, z: float):
        self.x = x
        self.y = y
        self.z = z

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, other):
        if isinstance(other, (int, float)):
            return Vector3(self.x * other, self.y * other, self.z * other)
        return Vector3(self.x * other.x, self.y * other.y, self.z * other.z)

    def __rmul__(self, other: float) -> "Vector3":
        return self.__mul__(other)

    def __truediv__(self, other):
        if isinstance(other, (int, float)):
            return Vector3(self.x / other, self.y / other, self.z / other)
        if other.x == 0 or other.y == 0 or other.z == 0:
            return Vector3(-1, -1, -1)
        return Vector3(self.x / other.x, self.y / other.y, self.z / other.z)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def add_scalar(self, value: float) -> "Vector3":
        return Vector3(self.x + value, self.y + value, self.z + value)

    def dot(self, other: "Vector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3") -> "Vector3":
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def normalize(self) -> "Vector3":
        l = self.length()
        if l == 0:
            return Vector3(0, 0, 0)
        return self / l

    def sum(self) -> float:
        return self.x + self.y + self.z

    def reflect(self, normal: "Vector3") -> "Vector3":
        """
        Mirror this vector about a unit normal: 2(self.n)n - self.
        """
        return normal * (2 * self.dot(normal)) - self

    def __repr__(self) -> str:
        return f"Vector3({self.x}, {self.y}, {self.z})"

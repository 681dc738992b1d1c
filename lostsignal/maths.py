"""Small vector, matrix and quaternion helpers used by the game."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Float2:
    """A two-component vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Float2) -> Float2:
        return Float2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Float2) -> Float2:
        return Float2(self.x - other.x, self.y - other.y)

    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> Float2:
        length = self.magnitude()
        if length == 0.0:
            raise ValueError("cannot normalise a zero-length vector")
        return Float2(self.x / length, self.y / length)

    def scale(self, factor: float) -> Float2:
        return Float2(self.x * factor, self.y * factor)


@dataclass(frozen=True, slots=True)
class Float3:
    """A three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Float3) -> Float3:
        return Float3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Float3) -> Float3:
        return Float3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __getitem__(self, index: int) -> float:
        # Any index other than 1 or 2 yields the first component.
        if index == 1:
            return self.y
        if index == 2:
            return self.z
        return self.x

    def magnitude(self) -> float:
        return math.sqrt(self.x**2 + self.y**2 + self.z**2)

    def normalized(self) -> Float3:
        length = self.magnitude()
        if length == 0.0:
            raise ValueError("cannot normalise a zero-length vector")
        return Float3(self.x / length, self.y / length, self.z / length)

    def scale(self, factor: float) -> Float3:
        return Float3(self.x * factor, self.y * factor, self.z * factor)

    def fmin(self, other: Float3) -> Float3:
        return Float3(min(self.x, other.x), min(self.y, other.y), min(self.z, other.z))

    def fmax(self, other: Float3) -> Float3:
        return Float3(max(self.x, other.x), max(self.y, other.y), max(self.z, other.z))


@dataclass(frozen=True, slots=True)
class Float4:
    """A four-component vector, also used for RGBA colours and quaternions."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0

    @classmethod
    def from_float2s(cls, first: Float2, second: Float2) -> Float4:
        return cls(first.x, first.y, second.x, second.y)

    @classmethod
    def from_float3(cls, vector: Float3, scalar: float) -> Float4:
        return cls(vector.x, vector.y, vector.z, scalar)


@dataclass(frozen=True, slots=True)
class Float2x2:
    """A 2x2 matrix stored by rows."""

    row1: Float2
    row2: Float2


def dot(v1: Float2, v2: Float2) -> float:
    return v1.x * v2.x + v1.y * v2.y


def dot3(v1: Float3, v2: Float3) -> float:
    return v1.x * v2.x + v1.y * v2.y + v1.z * v2.z


def matrix_mul(vector: Float2, matrix: Float2x2) -> Float2:
    return Float2(dot(vector, matrix.row1), dot(vector, matrix.row2))


def rotation_matrix(theta: float) -> Float2x2:
    cos_theta = math.cos(theta)
    sin_theta = math.sin(theta)
    return Float2x2(Float2(cos_theta, -sin_theta), Float2(sin_theta, cos_theta))


def apply_rotation(target: Float2, theta: float) -> Float2:
    """Rotate a vector anticlockwise by ``theta`` radians."""
    return matrix_mul(target, rotation_matrix(theta))


def cross_product(vec1: Float3, vec2: Float3) -> Float3:
    return Float3(
        vec1.y * vec2.z - vec1.z * vec2.y,
        vec1.z * vec2.x - vec1.x * vec2.z,
        vec1.x * vec2.y - vec1.y * vec2.x,
    )


def calculate_quaternion(direction: Float3) -> Float4:
    """Quaternion turning the +z axis towards ``direction``."""
    default_rotation = Float3(0.0, 0.0, 1.0)
    camera_rotation = direction.normalized()
    rotation_axis = cross_product(default_rotation, camera_rotation)
    axis = rotation_axis.normalized()
    half_theta = math.asin(min(1.0, rotation_axis.magnitude())) / 2.0
    sin_half = math.sin(half_theta)
    return Float4(axis.x * sin_half, axis.y * sin_half, axis.z * sin_half, math.cos(half_theta))


def update_quat_angle(quat: Float4, theta: float) -> Float4:
    """Keep the quaternion's axis but set its half-angle to ``theta``."""
    ratio = math.sin(theta) / math.sin(math.acos(quat.w))
    return Float4(quat.x * ratio, quat.y * ratio, quat.z * ratio, math.cos(theta))


def _vector_part(quat: Float4) -> Float3:
    return Float3(quat.x, quat.y, quat.z)


def _quat_inverse(quat: Float4) -> Float4:
    return Float4(-quat.x, -quat.y, -quat.z, quat.w)


def _quat_product(q1: Float4, q2: Float4) -> Float4:
    v1 = _vector_part(q1)
    v2 = _vector_part(q2)
    scalar = q1.w * q2.w - dot3(v1, v2)
    vector = cross_product(v1, v2) + v2.scale(q1.w) + v1.scale(q2.w)
    return Float4.from_float3(vector, scalar)


def quat_mult(vector: Float3, quat: Float4) -> Float3:
    """Rotate ``vector`` by the unit quaternion ``quat``."""
    result = _quat_product(
        _quat_product(_quat_inverse(quat), Float4.from_float3(vector, 0.0)), quat
    )
    return _vector_part(result)
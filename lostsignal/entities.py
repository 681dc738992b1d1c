"""Colours, rectangles, particles and clusterbombs."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from .maths import Float2, Float4, apply_rotation

COLOR_STEPS = 7
CLUSTER_END_T = 3.0
CLUSTER_START_SQUARE_SPEED = 1_000_000.0


class _RandomSource(Protocol):
    def random(self) -> float: ...


def hsv_to_rgb(hue: float, saturation: float, value: float) -> tuple[int, int, int]:
    """Convert HSV (hue in degrees 0-360, others 0-1) to 8-bit RGB."""
    if not 0.0 <= hue <= 360.0:
        raise ValueError(f"hue must be from 0 to 360, got {hue}")
    if not 0.0 <= saturation <= 1.0:
        raise ValueError(f"saturation must be from 0 to 1, got {saturation}")
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"value must be from 0 to 1, got {value}")

    chroma = value * saturation
    sector = hue / 60.0
    second = chroma * (1.0 - abs(sector % 2.0 - 1.0))
    offset = value - chroma

    if sector < 1.0:
        rgb = (chroma, second, 0.0)
    elif sector < 2.0:
        rgb = (second, chroma, 0.0)
    elif sector < 3.0:
        rgb = (0.0, chroma, second)
    elif sector < 4.0:
        rgb = (0.0, second, chroma)
    elif sector < 5.0:
        rgb = (second, 0.0, chroma)
    else:
        rgb = (chroma, 0.0, second)

    r, g, b = (min(255, max(0, int((channel + offset) * 255.0))) for channel in rgb)
    return r, g, b


def color_convert(rgb: tuple[int, int, int]) -> Float4:
    """Turn an 8-bit RGB triple into an opaque floating-point colour."""
    r, g, b = rgb
    return Float4(r / 255.0, g / 255.0, b / 255.0, 1.0)


def stepped_hue(t: float) -> float:
    """Snap a 0-1 position to one of the game's discrete hues, in degrees."""
    hue_step = 360 // COLOR_STEPS
    hue = t * 360.0 - 20.0
    int_hue = int(hue) if hue > 0.0 else 0
    return float(int_hue // hue_step * hue_step)


def hue_color(t: float) -> Float4:
    """The fully saturated colour of the stepped hue for ``t``."""
    return color_convert(hsv_to_rgb(stepped_hue(t), 1.0, 1.0))


@dataclass(slots=True)
class Vertex:
    position: Float4
    color: Float4


def build_rect(
    x: float, y: float, width: float, height: float, rot: float, color: Float4
) -> list[Vertex]:
    """Four strip-ordered vertices of a rectangle centred on (x, y).

    Rotation by ``rot`` radians is about the bottom-left corner.
    """
    half_w = width / 2.0
    half_h = height / 2.0
    origin = Float2(x - half_w, y - half_h)
    corners = (
        origin,
        Float2(x + half_w, y - half_h),
        Float2(x - half_w, y + half_h),
        Float2(x + half_w, y + half_h),
    )
    vertices = []
    for corner in corners:
        rotated = apply_rotation(corner - origin, rot) + origin
        vertices.append(Vertex(Float4(rotated.x, rotated.y, 0.0, 1.0), color))
    return vertices


def rect_intersect(rect1: Sequence[Vertex], rect2: Sequence[Vertex]) -> bool:
    """Strict overlap test of two axis-aligned rectangles from build_rect."""
    return (
        rect1[0].position.x < rect2[1].position.x
        and rect2[0].position.x < rect1[1].position.x
        and rect1[0].position.y < rect2[2].position.y
        and rect2[0].position.y < rect1[2].position.y
    )


@dataclass(slots=True)
class Particle:
    position: Float2
    velocity: Float2
    acceleration: Float2
    color: Float4
    lifetime: float = 1.0

    @classmethod
    def spawn(
        cls,
        location: Float2,
        max_velocity: float,
        max_accel: float,
        velocity_bias: Float2,
        color: Float4,
        rng: Optional[_RandomSource] = None,
    ) -> Particle:
        """A particle near ``location`` with random heading and acceleration."""
        source = rng if rng is not None else random
        v_theta = source.random() * 2.0 * math.pi
        a_theta = source.random() * 2.0 * math.pi
        position = Float2(
            location.x * (1.0 + source.random() * 0.01 - 0.005),
            location.y * (1.0 + source.random() * 0.01 - 0.005),
        )
        velocity = (
            Float2(math.cos(v_theta) * max_velocity, math.sin(v_theta) * max_velocity)
            + velocity_bias
        )
        acceleration = Float2(math.cos(a_theta) * max_accel, math.sin(a_theta) * max_accel)
        return cls(position, velocity, acceleration, color)

    def update(self, rng: Optional[_RandomSource] = None) -> None:
        """Age randomly, then accelerate, damp by remaining life and move."""
        source = rng if rng is not None else random
        self.lifetime -= source.random() * 0.1
        self.velocity = (self.acceleration + self.velocity).scale(self.lifetime)
        self.position = self.velocity + self.position

    def update_custom(
        self,
        delta_t: float,
        forced_vel: Optional[Float2] = None,
        friction: Optional[float] = None,
        accel: Optional[Float2] = None,
    ) -> None:
        """Age by ``delta_t`` and move with optional acceleration and friction."""
        self.lifetime -= delta_t
        if accel is not None:
            self.velocity = self.velocity + accel
        if friction is not None:
            self.velocity = self.velocity.scale(friction)
        if forced_vel is not None:
            self.position = self.position + forced_vel
        else:
            self.position = self.position + self.velocity


@dataclass(slots=True)
class Clusterbomb:
    start_pos: Float2
    end_pos: Float2
    x_vel: float
    y_vel: float
    y_accel: float
    color: Float4
    t: float = 0.0

    @classmethod
    def from_velocity(
        cls, start_pos: Float2, x_vel: float, y_vel: float, y_accel: float, color: Float4
    ) -> Clusterbomb:
        """A bomb thrown with the given velocity; it lands at CLUSTER_END_T."""
        end_pos = start_pos + Float2(
            x_vel * CLUSTER_END_T,
            y_vel * CLUSTER_END_T - 0.5 * (y_accel * CLUSTER_END_T**2),
        )
        return cls(start_pos, end_pos, x_vel, y_vel, y_accel, color)

    @classmethod
    def from_positions(cls, start_pos: Float2, end_pos: Float2, color: Float4) -> Clusterbomb:
        """A bomb lobbed from ``start_pos`` that lands on ``end_pos``."""
        diff = end_pos - start_pos
        x_vel = diff.x / CLUSTER_END_T
        remaining = CLUSTER_START_SQUARE_SPEED - x_vel**2
        y_vel = math.sqrt(remaining) if remaining >= 0.0 else math.nan
        y_accel = ((diff.y - y_vel * CLUSTER_END_T) * -2.0) / CLUSTER_END_T**2
        return cls(start_pos, end_pos, x_vel, y_vel, y_accel, color)

    @property
    def exploded(self) -> bool:
        return self.t >= CLUSTER_END_T

    def update(self, delta_t: float) -> Float2:
        """Advance the flight clock and return the current position."""
        self.t += delta_t
        return self.start_pos + Float2(
            self.x_vel * self.t,
            self.y_vel * self.t - 0.5 * (self.y_accel * self.t**2),
        )
"""The game simulation: player, lasers, jumpropes, clusterbombs and scoring."""

from __future__ import annotations

import enum
import math
import random
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .entities import (
    CLUSTER_END_T,
    Clusterbomb,
    Particle,
    Vertex,
    build_rect,
    color_convert,
    hsv_to_rgb,
    hue_color,
    rect_intersect,
    stepped_hue,
)
from .maths import Float2, Float4

_HIT_COLOR = Float4(1.0, 0.0, 0.0, 1.0)


class Action(enum.Enum):
    """Inputs the player can hold down during a frame."""

    LEFT = "left"
    DOWN = "down"
    RIGHT = "right"
    UP = "up"
    DRAIN = "drain"


@dataclass(frozen=True)
class GameConfig:
    """Tunable parameters of a game."""

    view_width: float = 1024.0
    view_height: float = 768.0
    fps: float = 60.0
    player_speed: float = 600.0
    player_width: float = 50.0
    player_height: float = 50.0
    goal_x: float = 0.0
    goal_y: float = 600.0
    goal_width: float = 100.0
    goal_height: float = 100.0
    num_path_spawns: int = 10
    initial_spawns: int = 2
    path_x: float = 1024.0
    path_width: float = 150.0
    laser_speed: float = 450.0
    laser_trail_spawn_frames: int = 4
    projectile_width: float = 100.0
    jumprope_spawn_threshold: float = 200.0
    jumprope_limit: int = 4
    jumprope_speed: float = 150.0
    jumprope_x: float = 0.0
    cluster_spawn_start_score: int = 4
    cluster_spawn_increase_score: int = 8
    cluster_frag_count: int = 8
    cluster_width: float = 35.0
    cluster_frag_speed: float = 150.0
    particle_width: float = 10.0
    start_radius: float = 300.0
    lose_threshold: float = 1.15

    @property
    def projectile_height(self) -> float:
        return self.projectile_width / 10.0

    @property
    def jumprope_y(self) -> float:
        return self.view_height

    @property
    def jumprope_width(self) -> float:
        return self.view_width * 2.5

    @property
    def jumprope_height(self) -> float:
        return self.projectile_height * 2.0


@dataclass(frozen=True)
class Frame:
    """Everything needed to draw one frame."""

    lasers: list[Vertex]
    jumpropes: list[Vertex]
    clusters: list[Vertex]
    cluster_frags: list[Vertex]
    particles: list[Vertex]
    boxes: list[Vertex]
    goal: list[Vertex]
    player_position: Float2
    radius: float
    signal_lost: float
    goal_proximity: float
    score: int


@dataclass
class _Laser:
    position: Float2
    color: Float4


@dataclass
class _Jumprope:
    y: float
    t: float


def _faded(color: Float4, alpha: float) -> Float4:
    return Float4(color.x, color.y, color.z, alpha)


@dataclass(eq=False)
class _Buffers:
    lasers: list[Vertex] = field(default_factory=list)
    jumpropes: list[Vertex] = field(default_factory=list)
    clusters: list[Vertex] = field(default_factory=list)
    cluster_frags: list[Vertex] = field(default_factory=list)
    particles: list[Vertex] = field(default_factory=list)
    boxes: list[Vertex] = field(default_factory=list)


class Game:
    """State of one run, advanced a frame at a time by :meth:`step`."""

    def __init__(
        self, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.rng = rng if rng is not None else random.Random()
        cfg = self.config

        self.frames = 0
        self.x = 0.0
        self.y = 0.0
        self.score = 0
        self.hue_t = 0.0
        self.radius = cfg.start_radius
        self.signal_lost = 0.0
        self.carrying = False

        self.goal_t = self.rng.random()
        self.goal_color = hue_color(self.goal_t)

        self.current_spawns = cfg.initial_spawns
        self.path_height = 2.0 * cfg.view_height / self.current_spawns
        self.laser_speed = cfg.laser_speed
        self.lanes: list[list[_Laser]] = []
        for lane in range(cfg.num_path_spawns):
            x = cfg.path_x + math.floor(self.rng.random() * cfg.path_width / 10.0) * 10.0
            y = (
                (2.0 * cfg.view_height / cfg.num_path_spawns) * lane
                + self.path_height / 2.0
                - cfg.view_height
            )
            self.lanes.append([_Laser(Float2(x, y), hue_color(self.rng.random()))])
        self.laser_ghosts: list[Particle] = []

        self.accum = 0.0
        self.jumprope_speed = cfg.jumprope_speed
        self.jumpropes: list[_Jumprope] = [_Jumprope(cfg.jumprope_y, self.rng.random())]

        self.clusters: list[Clusterbomb] = []
        self.cluster_frags: list[Particle] = []
        self.particles: list[Particle] = []

    def is_over(self) -> bool:
        """True once the signal has been lost."""
        return self.signal_lost >= self.config.lose_threshold

    def step(self, actions: Iterable[Action] = (), hue_t: Optional[float] = None) -> Frame:
        """Advance one frame with the given held actions and player hue position."""
        if hue_t is not None:
            if not 0.0 <= hue_t <= 1.0:
                raise ValueError(f"hue position must be from 0 to 1, got {hue_t}")
            self.hue_t = hue_t

        cfg = self.config
        self.frames += 1
        self._apply_actions(actions)

        buffers = _Buffers()
        player_rect = build_rect(
            self.x, self.y, cfg.player_width, cfg.player_height, 0.0, hue_color(self.hue_t)
        )
        buffers.boxes.extend(Vertex(v.position, v.color) for v in player_rect)

        self._update_jumpropes(player_rect, buffers)
        self._update_lasers(player_rect, buffers)
        self._update_clusters(buffers)
        self._update_particles(buffers)
        self._update_frags(player_rect, buffers)
        goal = self._update_goal(player_rect)

        return Frame(
            lasers=buffers.lasers,
            jumpropes=buffers.jumpropes,
            clusters=buffers.clusters,
            cluster_frags=buffers.cluster_frags,
            particles=buffers.particles,
            boxes=buffers.boxes,
            goal=goal,
            player_position=Float2(self.x, self.y),
            radius=self.radius,
            signal_lost=self.signal_lost,
            goal_proximity=abs(self.hue_t - self.goal_t) * 10.0,
            score=self.score,
        )

    def _apply_actions(self, actions: Iterable[Action]) -> None:
        cfg = self.config
        move = cfg.player_speed / cfg.fps
        for action in actions:
            if action is Action.LEFT:
                self.x -= move
            elif action is Action.DOWN:
                self.y -= move
            elif action is Action.RIGHT:
                self.x += move
            elif action is Action.UP:
                self.y += move
            elif action is Action.DRAIN:
                self.signal_lost += 0.1 / cfg.fps
                self.radius += 10.0 / cfg.fps

    def _mark_hit(self, buffers: _Buffers) -> None:
        for vertex in buffers.boxes[:4]:
            vertex.color = _HIT_COLOR

    def _update_jumpropes(self, player_rect: list[Vertex], buffers: _Buffers) -> None:
        cfg = self.config
        self.accum += self.rng.random()
        if self.accum >= cfg.jumprope_spawn_threshold and len(self.jumpropes) < cfg.jumprope_limit:
            self.jumpropes.append(_Jumprope(cfg.jumprope_y, self.rng.random()))
            self.accum = 0.0

        survivors = []
        for rope in self.jumpropes:
            rope.y -= self.jumprope_speed / cfg.fps
            color = hue_color(rope.t)
            rect = build_rect(
                cfg.jumprope_x, rope.y, cfg.jumprope_width, cfg.jumprope_height, 0.0, color
            )
            for offset, bias in ((cfg.view_width, -5.0), (-cfg.view_width, 5.0)):
                for _ in range(2):
                    self.particles.append(
                        Particle.spawn(
                            Float2(cfg.jumprope_x + offset, rope.y),
                            10.0,
                            3.0,
                            Float2(bias, 0.0),
                            color,
                            self.rng,
                        )
                    )
            if rect_intersect(player_rect, rect):
                if player_rect[0].color != rect[0].color:
                    self.signal_lost += 0.15
                    continue
                self.signal_lost += 0.005
                self.radius += 1.0
            survivors.append(rope)
            buffers.jumpropes.extend(rect)
        self.jumpropes = survivors

        if self.jumpropes and self.jumpropes[0].y < -cfg.view_height:
            self.jumpropes.pop(0)

    def _update_lasers(self, player_rect: list[Vertex], buffers: _Buffers) -> None:
        cfg = self.config
        for index, lane in enumerate(self.lanes[: self.current_spawns]):
            hit: list[_Laser] = []
            for laser in lane:
                laser.position = Float2(
                    laser.position.x - self.laser_speed / cfg.fps, laser.position.y
                )
                rect = build_rect(
                    laser.position.x,
                    laser.position.y,
                    cfg.projectile_width,
                    cfg.projectile_height,
                    0.0,
                    laser.color,
                )
                if rect_intersect(player_rect, rect) and player_rect[0].color != rect[0].color:
                    self._mark_hit(buffers)
                    self.signal_lost += 0.10
                    hit.append(laser)
                else:
                    if rect_intersect(player_rect, rect):
                        self.signal_lost += 0.005
                    buffers.lasers.extend(rect)
                if self.frames % cfg.laser_trail_spawn_frames == 0:
                    self.laser_ghosts.insert(
                        0,
                        Particle.spawn(
                            laser.position, 0.0, 0.0, Float2(0.0, 0.0), laser.color, self.rng
                        ),
                    )
            if not lane or lane[-1].position.x < cfg.path_width * -0.45 + cfg.path_x:
                x = cfg.path_x + math.floor(
                    self.rng.random() * 1.5 * cfg.path_width / 10.0
                ) * 10.0
                y = (
                    (2.0 * cfg.view_height / self.current_spawns) * index
                    + self.path_height / 2.0
                    - cfg.view_height
                    + (self.rng.random() - 0.5) * self.path_height
                )
                lane.append(_Laser(Float2(x, y), hue_color(self.rng.random())))
            if lane and lane[0].position.x < cfg.path_width * -0.55 - cfg.path_x:
                lane.pop(0)
            lane[:] = [laser for laser in lane if not any(laser is h for h in hit)]

    def _spawn_cluster(self) -> Clusterbomb:
        cfg = self.config
        rng = self.rng
        start = Float2(
            (rng.random() * 2.0 - 1.0) * cfg.view_width,
            (rng.random() * 2.0 - 1.0) * cfg.view_height,
        )
        end = Float2(
            self.x + rng.random() * cfg.view_width / 4.0,
            self.y + rng.random() * cfg.view_height / 4.0,
        )
        return Clusterbomb.from_positions(start, end, hue_color(rng.random()))

    def _update_clusters(self, buffers: _Buffers) -> None:
        cfg = self.config
        if not self.clusters:
            if self.score >= cfg.cluster_spawn_start_score:
                self.clusters.append(self._spawn_cluster())
            if self.score >= cfg.cluster_spawn_increase_score:
                self.clusters.append(self._spawn_cluster())

        theta_step = 2.0 * math.pi / cfg.cluster_frag_count
        for bomb in self.clusters:
            position = bomb.update(1.0 / cfg.fps)
            buffers.clusters.extend(
                build_rect(
                    position.x, position.y, cfg.cluster_width, cfg.cluster_width, 0.0, bomb.color
                )
            )
            buffers.boxes.extend(
                build_rect(
                    bomb.end_pos.x,
                    bomb.end_pos.y,
                    cfg.player_width * 2.0,
                    cfg.player_height * 2.0,
                    0.0,
                    bomb.color,
                )
            )
            if bomb.t >= CLUSTER_END_T:
                for frag in range(cfg.cluster_frag_count):
                    theta = frag * theta_step
                    self.cluster_frags.append(
                        Particle.spawn(
                            bomb.end_pos,
                            0.0,
                            0.0,
                            Float2(
                                math.cos(theta) * cfg.cluster_frag_speed,
                                math.sin(theta) * cfg.cluster_frag_speed,
                            ),
                            bomb.color,
                            self.rng,
                        )
                    )
        self.clusters = [bomb for bomb in self.clusters if bomb.t < CLUSTER_END_T]

    def _update_particles(self, buffers: _Buffers) -> None:
        cfg = self.config
        self.particles = [p for p in self.particles if p.lifetime > 0.0]
        for particle in self.particles:
            particle.update(self.rng)
            buffers.particles.extend(
                build_rect(
                    particle.position.x,
                    particle.position.y,
                    cfg.particle_width,
                    cfg.particle_width,
                    0.0,
                    _faded(particle.color, particle.lifetime),
                )
            )

        for ghost in self.laser_ghosts:
            buffers.particles.extend(
                build_rect(
                    ghost.position.x,
                    ghost.position.y,
                    cfg.projectile_width,
                    cfg.projectile_height,
                    0.0,
                    _faded(ghost.color, ghost.lifetime),
                )
            )
            ghost.lifetime -= 3.0 / cfg.fps
        self.laser_ghosts = [g for g in self.laser_ghosts if g.lifetime > 0.0]

    def _update_frags(self, player_rect: list[Vertex], buffers: _Buffers) -> None:
        cfg = self.config
        survivors = []
        for frag in self.cluster_frags:
            rect = build_rect(
                frag.position.x,
                frag.position.y,
                cfg.cluster_width,
                cfg.cluster_width,
                0.0,
                frag.color,
            )
            removed = False
            if rect_intersect(player_rect, rect):
                if player_rect[0].color != rect[0].color:
                    self._mark_hit(buffers)
                    self.signal_lost += 0.20
                    removed = True
                else:
                    self.signal_lost += 0.005
                    buffers.cluster_frags.extend(rect)
            else:
                buffers.cluster_frags.extend(rect)
            frag.update_custom(3.0 / cfg.fps, None, 0.75, None)
            if not removed and frag.lifetime > 0.0:
                survivors.append(frag)
        self.cluster_frags = survivors

    def _update_goal(self, player_rect: list[Vertex]) -> list[Vertex]:
        cfg = self.config
        if self.carrying and self.y < -cfg.view_height:
            self.carrying = False
            self.goal_t = self.rng.random()
            self.goal_color = hue_color(self.goal_t)
            self.signal_lost -= 0.25
            self.laser_speed *= 1.05
            self.jumprope_speed *= 1.05
            if self.score % 2 == 0:
                self.current_spawns = min(self.current_spawns + 1, cfg.num_path_spawns)
            self.path_height = 2.0 * cfg.view_height / self.current_spawns
            self.score += 1
        if self.carrying:
            self.goal_color = color_convert(hsv_to_rgb(stepped_hue(self.goal_t), 0.0, 1.0))

        goal = build_rect(
            cfg.goal_x, cfg.goal_y, cfg.goal_width, cfg.goal_height, 0.0, self.goal_color
        )
        if rect_intersect(player_rect, goal) and stepped_hue(self.hue_t) == stepped_hue(
            self.goal_t
        ):
            self.carrying = True
        return goal
"""Window, input handling and drawing for the game."""

from __future__ import annotations

import argparse
import math
import random
from typing import Iterable, Optional, Sequence

import pygame

from .entities import Vertex
from .game import Action, Frame, Game, GameConfig
from .maths import Float4

WINDOW_TITLE = "Colorstep"
_BACKGROUND = (0, 0, 0)
_TARGET_OUTLINE = 3

_KEY_ACTIONS = {
    pygame.K_a: Action.LEFT,
    pygame.K_s: Action.DOWN,
    pygame.K_d: Action.RIGHT,
    pygame.K_w: Action.UP,
    pygame.K_e: Action.DRAIN,
}


def to_screen(
    x: float, y: float, view_width: float, view_height: float
) -> tuple[float, float]:
    """Map world coordinates, spanning +-view size on each axis, to window pixels."""
    return (
        (x / view_width + 1.0) / 2.0 * view_width,
        (1.0 - y / view_height) / 2.0 * view_height,
    )


def actions_for_keys(pressed: Iterable[int]) -> list[Action]:
    """Actions for the held keys, in the order they were pressed; others are ignored."""
    return [_KEY_ACTIONS[key] for key in pressed if key in _KEY_ACTIONS]


def hue_from_mouse(mouse_x: float, view_width: float) -> float:
    """Horizontal mouse position as a hue position clamped to 0-1."""
    return min(1.0, max(0.0, mouse_x / view_width))


def _rgb(color: Float4) -> tuple[int, int, int]:
    return tuple(min(255, max(0, round(channel * 255.0))) for channel in (color.x, color.y, color.z))


def _quads(vertices: Sequence[Vertex]) -> Iterable[tuple[Vertex, Vertex, Vertex, Vertex]]:
    it = iter(vertices)
    return zip(it, it, it, it)


class Renderer:
    """Draws game frames onto a pygame surface."""

    def __init__(self, view_width: float, view_height: float) -> None:
        if view_width <= 0 or view_height <= 0:
            raise ValueError("view dimensions must be positive")
        self.view_width = view_width
        self.view_height = view_height

    def _points(self, quad: tuple[Vertex, ...]) -> list[tuple[float, float]]:
        # Strip order is bottom-left, bottom-right, top-left, top-right.
        return [
            to_screen(quad[i].position.x, quad[i].position.y, self.view_width, self.view_height)
            for i in (0, 1, 3, 2)
        ]

    def _draw_quad(
        self, surface: pygame.Surface, quad: tuple[Vertex, ...], outline: int = 0
    ) -> None:
        color = quad[0].color
        alpha = min(1.0, max(0.0, color.w))
        if alpha <= 0.0:
            return
        points = self._points(quad)
        rgb = _rgb(color)
        if alpha >= 1.0:
            pygame.draw.polygon(surface, rgb, points, outline)
            return
        left = math.floor(min(px for px, _ in points))
        top = math.floor(min(py for _, py in points))
        right = math.ceil(max(px for px, _ in points))
        bottom = math.ceil(max(py for _, py in points))
        layer = pygame.Surface((right - left + 1, bottom - top + 1), pygame.SRCALPHA)
        shifted = [(px - left, py - top) for px, py in points]
        pygame.draw.polygon(layer, (*rgb, round(alpha * 255.0)), shifted, outline)
        surface.blit(layer, (left, top))

    def _draw_all(
        self, surface: pygame.Surface, vertices: Sequence[Vertex], outline: int = 0
    ) -> None:
        for quad in _quads(vertices):
            self._draw_quad(surface, quad, outline)

    def draw(self, surface: pygame.Surface, frame: Frame) -> None:
        """Clear ``surface`` and draw every layer of ``frame`` onto it."""
        surface.fill(_BACKGROUND)
        self._draw_all(surface, frame.lasers)
        self._draw_all(surface, frame.jumpropes)
        self._draw_all(surface, frame.clusters)
        self._draw_all(surface, frame.cluster_frags)
        self._draw_all(surface, frame.particles)
        self._draw_all(surface, frame.boxes[:4])
        self._draw_all(surface, frame.boxes[4:], _TARGET_OUTLINE)
        self._draw_all(surface, frame.goal)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="lostsignal", description="Dodge and carry colours.")
    parser.add_argument("--seed", type=int, default=None, help="seed for the random source")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Open the game window and play until the signal is lost or the window closes."""
    args = _parse_args(argv)
    config = GameConfig()
    game = Game(config, random.Random(args.seed))
    renderer = Renderer(config.view_width, config.view_height)

    pygame.init()
    try:
        screen = pygame.display.set_mode((int(config.view_width), int(config.view_height)))
        pygame.display.set_caption(WINDOW_TITLE)
        clock = pygame.time.Clock()
        held: list[int] = []
        hue_t = 0.0
        running = True
        while running and not game.is_over():
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.MOUSEMOTION:
                    hue_t = hue_from_mouse(event.pos[0], config.view_width)
                elif event.type == pygame.KEYDOWN:
                    if event.key not in held:
                        held.append(event.key)
                elif event.type == pygame.KEYUP:
                    if event.key in held:
                        held.remove(event.key)
            if not running:
                break
            previous_score = game.score
            frame = game.step(actions_for_keys(held), hue_t)
            if frame.score > previous_score:
                print("+1")
            renderer.draw(screen, frame)
            pygame.display.flip()
            clock.tick(config.fps)
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
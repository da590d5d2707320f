"""Falling balls: creation, per-frame physics, drawing and hit-testing."""

import logging
import random
from typing import Iterator, List, Optional, Sequence, Tuple

import pygame

from sim_config import (BALL_MAX_RADIUS, BALL_MAX_SPEED, BALL_MIN_RADIUS,
                        BALL_MIN_SPEED)
from vector2 import Vector2

logger = logging.getLogger("falling_balls.field")

HIGHLIGHT_COLOR = (40, 40, 40)
HIGHLIGHT_WIDTH = 3


def random_hue_color(rng) -> Tuple[int, int, int]:
    """Random hue at full saturation and half lightness, as an RGB tuple."""
    color = pygame.Color(0, 0, 0)
    color.hsla = (rng.random() * 360.0, 100, 50, 100)
    return (color.r, color.g, color.b)


class Particle:
    """A ball that falls at a constant speed until it rests on the floor."""

    def __init__(self, pos: Vector2, radius: float, color, fall_speed: float,
                 is_falling: bool = True):
        self.pos = pos.copy()
        self.radius = radius
        self._color = tuple(color)
        self._fall_speed = fall_speed
        self.is_falling = is_falling

    @property
    def color(self):
        return self._color

    @property
    def fall_speed(self):
        return self._fall_speed

    def step(self, floor: float):
        """Advance one frame; settles permanently once the floor is reached."""
        if not self.is_falling:
            return
        y = self.pos.y + self._fall_speed
        if y + self.radius > floor:
            y = floor - self.radius
            self.is_falling = False
            logger.debug("Ball settled at (%.1f, %.1f)", self.pos.x, y)
        self.pos.y = y

    def contains(self, point: Vector2) -> bool:
        return self.pos.distance_to(point) < self.radius

    def __repr__(self):
        return (f"Particle(pos=({self.pos.x:.1f}, {self.pos.y:.1f}), "
                f"radius={self.radius:.1f}, falling={self.is_falling})")


def _sample_range(rng, low: float, high: float) -> float:
    # Empty or inverted intervals collapse onto ``low``
    if high <= low:
        return low
    return rng.uniform(low, high)


class ParticleField:
    """Fixed, ordered set of balls. Index order is draw order (back to front)."""

    def __init__(self, particles: Sequence[Particle] = ()):
        self._particles: List[Particle] = list(particles)

    @classmethod
    def create(cls, count: int, surface_width: float, surface_height: float,
               radius_range=(BALL_MIN_RADIUS, BALL_MAX_RADIUS),
               speed_range=(BALL_MIN_SPEED, BALL_MAX_SPEED),
               rng=None) -> "ParticleField":
        rng = rng or random.Random()
        min_radius, max_radius = radius_range
        min_speed, max_speed = speed_range

        particles = []
        for _ in range(max(0, count)):
            radius = _sample_range(rng, min_radius, max_radius)

            # Keep the ball fully inside horizontally; a surface narrower
            # than the ball puts it at the center.
            x_start = min(radius, surface_width / 2)
            x_end = max(x_start, surface_width - radius)
            x = _sample_range(rng, x_start, x_end)
            y = _sample_range(rng, 0.0, max(0.0, surface_height))

            speed = _sample_range(rng, min_speed, max_speed)
            particles.append(Particle(Vector2(x, y), radius, random_hue_color(rng), speed))

        logger.info("Created %d balls on a %sx%s surface", len(particles),
                    surface_width, surface_height)
        return cls(particles)

    def __len__(self):
        return len(self._particles)

    def __iter__(self) -> Iterator[Particle]:
        return iter(self._particles)

    def __getitem__(self, index) -> Particle:
        return self._particles[index]

    def step(self, surface_height: float):
        """Physics for one frame, held ball included; the pointer only moves it on motion."""
        for particle in self._particles:
            particle.step(surface_height)

    def draw(self, surface, highlight: Optional[Particle] = None):
        for particle in self._particles:
            center = particle.pos.as_tuple()
            surface.fill_disc(center, particle.radius, particle.color)
            if particle is highlight:
                surface.outline_disc(center, particle.radius + HIGHLIGHT_WIDTH,
                                     HIGHLIGHT_COLOR, HIGHLIGHT_WIDTH)

    def update_all(self, surface, surface_height: float, held: Optional[Particle] = None):
        self.step(surface_height)
        self.draw(surface, highlight=held)

    def hit_test(self, point: Vector2) -> Optional[Particle]:
        """Return the ball under ``point``, preferring the one drawn on top."""
        for particle in reversed(self._particles):
            if particle.contains(point):
                return particle
        return None

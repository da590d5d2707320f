import os
import random

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from ball_field import Particle, ParticleField
from vector2 import Vector2


class RecordingSurface:
    """Stands in for the pygame renderer and remembers what was drawn."""

    def __init__(self, width=800, height=600):
        self.width = width
        self.height = height
        self.calls = []

    @property
    def size(self):
        return (self.width, self.height)

    def clear(self, color=None):
        self.calls.append(("clear",))

    def fill_disc(self, center, radius, color):
        self.calls.append(("fill_disc", center, radius, color))

    def outline_disc(self, center, radius, color, width=1):
        self.calls.append(("outline_disc", center, radius, color, width))

    def discs(self):
        return [c for c in self.calls if c[0] == "fill_disc"]


class ManualScheduler:
    """Frame scheduler driven by the test, one ``frame()`` at a time."""

    def __init__(self):
        self.pending = None
        self.requests = 0

    def request(self, callback):
        self.pending = callback
        self.requests += 1

    def frame(self, count=1):
        for _ in range(count):
            callback, self.pending = self.pending, None
            if callback is not None:
                callback()


def make_particle(x, y, radius=10.0, speed=5.0, falling=True, color=(255, 0, 0)):
    return Particle(Vector2(x, y), radius, color, speed, is_falling=falling)


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def pygame_init():
    pygame.init()
    yield
    pygame.quit()


@pytest.fixture
def two_balls():
    return ParticleField([make_particle(100, 100, radius=20), make_particle(300, 100, radius=20)])

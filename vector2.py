import math
from dataclasses import dataclass


@dataclass
class Vector2:
    """Point or offset on the drawing surface; y grows downwards like pygame's."""
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def from_pos(cls, pos):
        """Build from a pygame event ``pos`` pair."""
        return cls(float(pos[0]), float(pos[1]))

    def __add__(self, other):
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        return Vector2(self.x - other.x, self.y - other.y)

    def distance_to(self, other):
        return math.hypot(self.x - other.x, self.y - other.y)

    def copy(self):
        return Vector2(self.x, self.y)

    def as_tuple(self):
        return (self.x, self.y)

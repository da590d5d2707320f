"""Pointer grab/drag/release of a single ball."""

import logging
import weakref
from typing import Optional

from ball_field import Particle, ParticleField
from vector2 import Vector2

logger = logging.getLogger("falling_balls.pointer")


class DragState:
    """Which ball (if any) the pointer holds, and where it was grabbed."""

    def __init__(self):
        self.active = False
        self._target_ref = None
        self.grab_offset = Vector2(0.0, 0.0)

    @property
    def target(self) -> Optional[Particle]:
        if self._target_ref is None:
            return None
        return self._target_ref()

    def grab(self, particle: Particle, offset: Vector2):
        self.active = True
        self._target_ref = weakref.ref(particle)
        self.grab_offset = offset.copy()

    def release(self):
        self.active = False
        self._target_ref = None
        self.grab_offset = Vector2(0.0, 0.0)


class PointerController:
    """Turns pointer down/move/up into position changes on one ball.

    The field owns the balls; the controller only keeps a weak reference to
    the one being dragged. Grabbing does not touch ``is_falling``, so a ball
    released in mid-air carries on falling from where it was dropped.
    """

    def __init__(self, field: ParticleField):
        self.field = field
        self.drag = DragState()

    @property
    def dragging(self) -> bool:
        return self.drag.active

    @property
    def held(self) -> Optional[Particle]:
        return self.drag.target if self.drag.active else None

    def on_pointer_down(self, point: Vector2):
        particle = self.field.hit_test(point)
        if particle is None:
            return
        self.drag.grab(particle, point - particle.pos)
        logger.debug("Grabbed ball at (%.1f, %.1f), offset (%.1f, %.1f)",
                     particle.pos.x, particle.pos.y,
                     self.drag.grab_offset.x, self.drag.grab_offset.y)

    def on_pointer_move(self, point: Vector2):
        if not self.drag.active:
            return
        particle = self.drag.target
        if particle is None:
            self.drag.release()
            return
        particle.pos = point - self.drag.grab_offset

    def on_pointer_up(self):
        if self.drag.active:
            logger.debug("Released ball")
        self.drag.release()

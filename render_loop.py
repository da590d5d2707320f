"""Frame cadence: clear, update and redraw the balls once per display refresh."""

import logging
from typing import Callable, List, Optional

import pygame

logger = logging.getLogger("falling_balls.loop")


class PygameFrameScheduler:
    """Runs one requested callback per frame, paced by a pygame clock.

    A callback runs once; it has to request itself again to keep going.
    Pending pygame events are handed to ``event_handler`` before each frame.
    """

    def __init__(self, fps: int = 60, event_handler: Optional[Callable] = None,
                 clock: Optional[pygame.time.Clock] = None):
        self.fps = fps
        self.event_handler = event_handler
        self.clock = clock or pygame.time.Clock()
        self._pending: Optional[Callable] = None
        self.running = False

    def request(self, callback: Callable):
        self._pending = callback

    def stop(self):
        self.running = False

    def run_frame(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.stop()
            elif self.event_handler is not None:
                self.event_handler(event)

        callback, self._pending = self._pending, None
        if callback is not None:
            callback()
        pygame.display.flip()

    def run(self):
        self.running = True
        while self.running:
            self.run_frame()
            self.clock.tick(self.fps)


class RenderLoop:
    """Clears the surface, steps and draws the field, then reschedules itself."""

    def __init__(self, context, scheduler):
        self.context = context
        self.scheduler = scheduler
        self.overlays: List[Callable] = []
        self.frames = 0
        self.running = False

    def add_overlay(self, draw: Callable):
        """Register ``draw(surface)`` to run after the balls each frame."""
        self.overlays.append(draw)

    def start(self):
        if self.running:
            return
        self.running = True
        logger.info("Render loop started with %d balls", len(self.context.field))
        self.scheduler.request(self.tick)

    def tick(self):
        ctx = self.context
        ctx.surface.clear()
        ctx.field.update_all(ctx.surface, ctx.height, held=ctx.controller.held)
        for draw in self.overlays:
            draw(ctx.surface)
        self.frames += 1
        self.scheduler.request(self.tick)

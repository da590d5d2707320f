"""
Falling balls.

Balls of random size and color fall at a constant speed until they rest on
the bottom of the window. Any ball can be picked up with the left mouse
button, dragged and dropped; a ball dropped in mid-air keeps falling.

    falling-balls [--config PATH] [--balls N] [--seed N] [--no-history] [--verbose]
"""

import argparse
import logging
import random
import sys
from dataclasses import dataclass
from typing import Optional

import pygame

from ball_field import ParticleField
from history_panel import HistoryPanel
from pointer_drag import PointerController
from render_loop import PygameFrameScheduler, RenderLoop
from renderer import Renderer
from search_history import SearchHistory
from sim_config import SimulationConfig, load_config
from vector2 import Vector2

logger = logging.getLogger("falling_balls")


@dataclass
class SimulationContext:
    """Everything one session of the simulation owns."""
    config: SimulationConfig
    surface: Renderer
    field: ParticleField
    controller: PointerController
    rng: random.Random

    @property
    def width(self):
        return self.surface.width

    @property
    def height(self):
        return self.surface.height


def build_context(config: SimulationConfig, surface, rng=None,
                  field_width=None) -> SimulationContext:
    """Create the balls, spawning them within ``field_width`` (default: full width)."""
    rng = rng or random.Random(config.seed)
    if field_width is None:
        field_width = surface.width
    field = ParticleField.create(config.ball_count, field_width, surface.height,
                                 radius_range=config.radius_range,
                                 speed_range=config.speed_range,
                                 rng=rng)
    return SimulationContext(config=config, surface=surface, field=field,
                             controller=PointerController(field), rng=rng)


class PointerEventRouter:
    """Feeds pygame mouse and key events to the pointer controller or the panel."""

    def __init__(self, controller: PointerController, panel: Optional[HistoryPanel] = None,
                 surface_offset=(0, 0)):
        self.controller = controller
        self.panel = panel
        self.offset = Vector2.from_pos(surface_offset)

    def to_surface(self, pos) -> Vector2:
        return Vector2.from_pos(pos) - self.offset

    def __call__(self, event):
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            point = self.to_surface(event.pos)
            # A ball under the pointer wins over the panel
            if (self.panel is not None and self.panel.contains(event.pos)
                    and self.controller.field.hit_test(point) is None):
                self.panel.handle_click(event.pos)
            else:
                self.controller.on_pointer_down(point)
        elif event.type == pygame.MOUSEMOTION:
            self.controller.on_pointer_move(self.to_surface(event.pos))
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.controller.on_pointer_up()
        elif self.panel is not None:
            self.panel.handle_key(event)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="falling-balls", description="Falling balls you can drag around.")
    parser.add_argument("--config", help="path to a JSON config file")
    parser.add_argument("--balls", type=int, help="number of balls")
    parser.add_argument("--seed", type=int, help="random seed")
    parser.add_argument("--no-history", action="store_true", help="hide the search history panel")
    parser.add_argument("--verbose", "-v", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def apply_args(config: SimulationConfig, args) -> SimulationConfig:
    changes = {}
    if args.balls is not None:
        changes['ball_count'] = args.balls
    if args.seed is not None:
        changes['seed'] = args.seed
    if args.no_history:
        changes['show_history'] = False
    return config.replace(**changes) if changes else config


def open_window(config: SimulationConfig) -> pygame.Surface:
    info = pygame.display.Info()
    width = config.width or info.current_w
    height = config.height or info.current_h
    screen = pygame.display.set_mode((width, height))
    pygame.display.set_caption(config.title)
    logger.info("Window opened at %dx%d", width, height)
    return screen


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    config = apply_args(load_config(args.config), args)

    pygame.init()
    try:
        surface = Renderer(open_window(config), config.background)

        panel = None
        field_width = surface.width
        if config.show_history:
            history = SearchHistory(config.history_path, limit=config.history_limit)
            panel = HistoryPanel(history, surface.size)
            field_width = panel.rect.x
        context = build_context(config, surface, field_width=field_width)

        scheduler = PygameFrameScheduler(config.fps, PointerEventRouter(context.controller, panel))
        loop = RenderLoop(context, scheduler)
        if panel is not None:
            loop.add_overlay(panel.draw)
        loop.start()
        scheduler.run()
        logger.info("Stopped after %d frames", loop.frames)
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())

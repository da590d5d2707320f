import math

import pygame
import pygame.gfxdraw


class Renderer:
    """Drawing surface on top of a pygame Surface."""

    def __init__(self, screen: pygame.Surface, background=(255, 255, 255)):
        self.screen = screen
        self.background = background

    @property
    def size(self):
        return self.screen.get_size()

    @property
    def width(self):
        return self.screen.get_width()

    @property
    def height(self):
        return self.screen.get_height()

    def clear(self, color=None):
        """Clear the whole surface."""
        self.screen.fill(color if color is not None else self.background)

    def fill_disc(self, center, radius, color):
        px, py = round(center[0]), round(center[1])
        pr = math.ceil(radius)
        if pr <= 0:
            return
        pygame.gfxdraw.filled_circle(self.screen, px, py, pr, color)
        pygame.gfxdraw.aacircle(self.screen, px, py, pr, color)

    def outline_disc(self, center, radius, color, width=1):
        px, py = round(center[0]), round(center[1])
        pr = math.ceil(radius)
        for r_offset in range(width):
            if pr - r_offset > 0:
                pygame.gfxdraw.aacircle(self.screen, px, py, pr - r_offset, color)

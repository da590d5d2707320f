"""On-screen panel for the search history: input box, recent queries, clear."""

import logging
from typing import Callable, Optional

import pygame

from search_history import SearchHistory

logger = logging.getLogger("falling_balls.history")

PANEL_WIDTH = 320
INPUT_HEIGHT = 36
ROW_HEIGHT = 40
BUTTON_HEIGHT = 32
PADDING = 10
DELETE_SIZE = 20

PANEL_COLOR = (245, 245, 245)
BORDER_COLOR = (200, 200, 200)
TEXT_COLOR = (30, 30, 30)
MUTED_COLOR = (136, 136, 136)


class HistoryPanel:
    """Search box with its history, drawn over the right edge of the window."""

    def __init__(self, history: SearchHistory, surface_size,
                 on_search: Optional[Callable[[str], None]] = None):
        self.history = history
        self.on_search = on_search
        width, height = surface_size
        # Never more than half the window, the rest belongs to the balls
        panel_w = min(PANEL_WIDTH, width // 2)
        self.rect = pygame.Rect(width - panel_w, 0, panel_w, height)
        self.input_rect = pygame.Rect(self.rect.x + PADDING, PADDING,
                                      panel_w - 2 * PADDING, INPUT_HEIGHT)
        self.clear_rect = pygame.Rect(self.rect.x + PADDING, height - PADDING - BUTTON_HEIGHT,
                                      panel_w - 2 * PADDING, BUTTON_HEIGHT)
        self.text = ""
        self.confirming_clear = False
        self.last_search: Optional[str] = None
        self.font = pygame.font.SysFont(None, 24)
        self.small_font = pygame.font.SysFont(None, 18)

    @property
    def max_rows(self):
        top = self.input_rect.bottom + PADDING
        return max(0, (self.clear_rect.top - PADDING - top) // ROW_HEIGHT)

    def row_rect(self, index):
        top = self.input_rect.bottom + PADDING + index * ROW_HEIGHT
        return pygame.Rect(self.input_rect.x, top, self.input_rect.width, ROW_HEIGHT - 4)

    def delete_rect(self, index):
        row = self.row_rect(index)
        return pygame.Rect(row.right - DELETE_SIZE - 6, row.centery - DELETE_SIZE // 2,
                           DELETE_SIZE, DELETE_SIZE)

    def contains(self, pos) -> bool:
        return self.rect.collidepoint(pos)

    # Actions -------------------------------------------------------
    def perform_search(self, query: str):
        logger.info("Searching for: %s", query)
        self.last_search = query
        if self.on_search is not None:
            self.on_search(query)

    def submit(self):
        entry = self.history.add(self.text)
        self.text = ""
        if entry is not None:
            self.perform_search(entry.query)

    # Events --------------------------------------------------------
    def handle_click(self, pos):
        if self.clear_rect.collidepoint(pos):
            if self.confirming_clear:
                self.history.clear()
                self.confirming_clear = False
            else:
                self.confirming_clear = True
            return
        self.confirming_clear = False

        for i, entry in enumerate(self.history.entries[:self.max_rows]):
            if self.delete_rect(i).collidepoint(pos):
                self.history.delete(i)
                return
            if self.row_rect(i).collidepoint(pos):
                self.perform_search(entry.query)
                return

    def handle_key(self, event) -> bool:
        if event.type == pygame.TEXTINPUT:
            self.text += event.text
            return True
        if event.type != pygame.KEYDOWN:
            return False
        if event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            self.submit()
        elif event.key == pygame.K_BACKSPACE:
            self.text = self.text[:-1]
        elif event.key == pygame.K_ESCAPE:
            self.text = ""
            self.confirming_clear = False
        else:
            return False
        return True

    # Drawing -------------------------------------------------------
    def _blit_text(self, surface, font, text, color, x, y):
        txt = font.render(text, True, color)
        surface.blit(txt, (x, y))
        return txt

    def draw(self, surface):
        screen = surface.screen
        pygame.draw.rect(screen, PANEL_COLOR, self.rect)
        pygame.draw.line(screen, BORDER_COLOR, self.rect.topleft, self.rect.bottomleft, 2)

        pygame.draw.rect(screen, (255, 255, 255), self.input_rect, border_radius=6)
        pygame.draw.rect(screen, BORDER_COLOR, self.input_rect, 2, border_radius=6)
        shown = self.text if self.text else "Search..."
        color = TEXT_COLOR if self.text else MUTED_COLOR
        self._blit_text(screen, self.font, shown, color,
                        self.input_rect.x + 8, self.input_rect.y + 10)

        entries = self.history.entries[:self.max_rows]
        if not entries:
            txt = self.font.render("No search history.", True, MUTED_COLOR)
            screen.blit(txt, (self.rect.centerx - txt.get_width() // 2,
                              self.input_rect.bottom + 2 * PADDING))

        for i, entry in enumerate(entries):
            row = self.row_rect(i)
            pygame.draw.rect(screen, (255, 255, 255), row, border_radius=4)
            self._blit_text(screen, self.font, entry.query, TEXT_COLOR, row.x + 6, row.y + 3)
            self._blit_text(screen, self.small_font, entry.timestamp, MUTED_COLOR,
                            row.x + 6, row.y + 21)
            delete = self.delete_rect(i)
            pygame.draw.rect(screen, (200, 60, 60), delete, border_radius=4)
            x_txt = self.small_font.render("x", True, (255, 255, 255))
            screen.blit(x_txt, (delete.x + (delete.w - x_txt.get_width()) // 2,
                                delete.y + (delete.h - x_txt.get_height()) // 2))

        label = "Click again to clear all" if self.confirming_clear else "Clear history"
        button_color = (200, 120, 0) if self.confirming_clear else (180, 0, 0)
        pygame.draw.rect(screen, button_color, self.clear_rect, border_radius=8)
        txt = self.font.render(label, True, (255, 255, 255))
        screen.blit(txt, (self.clear_rect.x + (self.clear_rect.w - txt.get_width()) // 2,
                          self.clear_rect.y + (self.clear_rect.h - txt.get_height()) // 2))

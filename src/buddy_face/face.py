"""BuddyWindow - pygame host that draws Buddy on a monospace glyph grid."""

import logging
import time

import pygame

from .buddy import Buddy
from .config import Config
from .expressions import EXPRESSIONS

log = logging.getLogger(__name__)

FONT_NAMES = "dejavusansmono,menlo,consolas,monospace"

# Number keys 1-9, 0 map onto the catalog in order (sleeping has its own key).
KEY_EXPRESSIONS = {
    pygame.K_1 + i if i < 9 else pygame.K_0: name
    for i, name in enumerate([n for n in EXPRESSIONS if n != "sleeping"][:10])
}


class GridSink:
    """Draws glyphs into character cells centred on the window."""

    def __init__(self, screen: pygame.Surface, font: pygame.font.Font, background):
        self.screen = screen
        self.font = font
        self.background = background
        self.cell_w, self.cell_h = font.size("M")
        self._cache: dict = {}
        self.recenter()

    def recenter(self) -> None:
        w, h = self.screen.get_size()
        self.cols = max(1, w // self.cell_w)
        self.rows = max(1, h // self.cell_h)
        self.origin = (self.cols // 2, self.rows // 2)

    def _glyph(self, char: str, rgb) -> pygame.Surface:
        key = (char, rgb)
        surf = self._cache.get(key)
        if surf is None:
            surf = self.font.render(char, True, rgb)
            self._cache[key] = surf
        return surf

    def place(self, char: str, x: int, y: int, color) -> None:
        col = self.origin[0] + x
        row = self.origin[1] + y
        if not (0 <= col < self.cols and 0 <= row < self.rows):
            return

        rect = pygame.Rect(col * self.cell_w, row * self.cell_h, self.cell_w, self.cell_h)
        self.screen.fill(self.background, rect)

        rgb = tuple(color[:3])
        surf = self._glyph(char, rgb)
        if len(color) > 3:
            surf = surf.copy()
            surf.set_alpha(max(0, min(255, int(color[3]))))
        self.screen.blit(surf, surf.get_rect(center=rect.center))


class BuddyWindow:
    """Main window: feeds input to Buddy and draws a frame per tick."""

    def __init__(self, config: Config | None = None, buddy: Buddy | None = None):
        self.config = config or Config()
        self.buddy = buddy or Buddy(self.config)

        pygame.init()
        display = self.config.display

        if display.fullscreen:
            self.screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        else:
            self.screen = pygame.display.set_mode(
                (display.window_width, display.window_height), pygame.RESIZABLE
            )
        pygame.display.set_caption("Buddy")

        font = pygame.font.SysFont(FONT_NAMES, display.font_size)
        self.sink = GridSink(self.screen, font, self.buddy.palette.background)

        self.clock = pygame.time.Clock()
        self.running = True

    def handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.VIDEORESIZE:
                self.screen = self.sink.screen = pygame.display.get_surface()
                self.sink.recenter()
            elif event.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                self.buddy.notify_activity()
            elif event.type == pygame.KEYDOWN:
                if event.key in (pygame.K_ESCAPE, pygame.K_q):
                    self.running = False
                elif event.key == pygame.K_s:
                    # No activity report here, or the next frame would wake him.
                    self.buddy.sleep()
                    continue
                elif event.key == pygame.K_f:
                    pygame.display.toggle_fullscreen()
                    self.sink.recenter()
                elif event.key in KEY_EXPRESSIONS:
                    self.buddy.trigger_expression(KEY_EXPRESSIONS[event.key])
                self.buddy.notify_activity()

    def update(self) -> None:
        self.handle_events()
        self.buddy.update(time.monotonic())

    def draw(self) -> None:
        self.screen.fill(self.buddy.palette.background)
        self.buddy.draw(self.sink)
        pygame.display.flip()

    def run(self) -> None:
        """Main loop - run until ESC or Q is pressed."""
        log.info("Buddy is alive! Keys 1-9/0 switch expression, S sleeps, Q quits")
        while self.running:
            self.update()
            self.draw()
            self.clock.tick(self.config.display.fps)

        pygame.quit()

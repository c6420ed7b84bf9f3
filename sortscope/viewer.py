"""
pygame window that shows frames as bars.

A :class:`BarViewer` is both the frame emitter (call it with a frame) and the
stop check (``should_stop``) for :func:`sortscope.run_sort`.
"""

import logging

import numpy as np
import pygame

from .sequence import Frame

logger = logging.getLogger(__name__)

# ============================================================
# ===================== USER SETTINGS ========================
# ============================================================

SCREEN_WIDTH   = 1500
SCREEN_HEIGHT  = 1000
SCREEN_MARGINS = 0.075
BAR_SEPARATION = 0.2
FRAME_DELAY_MS = 50

BACKGROUND_COLOR = (0, 0, 0)
ACTIVE_COLOR     = (255, 0, 0)
TEXT_COLOR       = (255, 255, 255)
FONT_NAMES       = ["Roboto", "Consolas", "Courier New", "Lucida Console"]

# ============================================================
# ======================= COLOR / DRAW =======================
# ============================================================

def value_to_color(value, max_value):
    r = value / max_value
    if r < 0.25: return (0, int(255 * r * 4), 255)
    if r < 0.5:  return (0, 255, int(255 * (1 - (r - 0.25) * 4)))
    if r < 0.75: return (int(255 * (r - 0.5) * 4), 255, 0)
    return (255, int(255 * (1 - (r - 0.75) * 4)), 0)


def bar_rects(values, width, height):
    """One rect per value, tallest bar for the largest value, inside the screen margins."""
    n       = len(values)
    top     = max(1, int(np.max(values)))
    section = width * (1 - 2 * SCREEN_MARGINS) / n
    bar_w   = max(1, int(section * (1 - BAR_SEPARATION)))
    base    = height * (1 - SCREEN_MARGINS)
    span    = height * (1 - 2 * SCREEN_MARGINS)
    rects = []
    for i, v in enumerate(values):
        x = int(width * SCREEN_MARGINS + section * i + section * BAR_SEPARATION / 2)
        y = int(base - float(v) / top * span)
        rects.append(pygame.Rect(x, y, bar_w, int(base) - y))
    return rects


def counters_label(frame: Frame) -> str:
    return f"Comparisons: {frame.comparisons}    Swaps: {frame.swaps}"


class BarViewer:
    def __init__(self, width=SCREEN_WIDTH, height=SCREEN_HEIGHT,
                 frame_delay_ms=FRAME_DELAY_MS, title="Sorting Visualizer"):
        self.width          = width
        self.height         = height
        self.frame_delay_ms = frame_delay_ms
        self.title          = title
        self.screen         = None
        self.font           = None
        self._quit          = False

    def open(self):
        pygame.init()
        self.screen = pygame.display.set_mode((self.width, self.height))
        pygame.display.set_caption(self.title)
        self.font = self._load_font(max(8, int(self.height * SCREEN_MARGINS / 3)))
        logger.debug("opened %dx%d window", self.width, self.height)
        return self

    def close(self):
        if self.screen is not None:
            pygame.quit()
            self.screen = None

    def __enter__(self):
        return self.open()

    def __exit__(self, *exc):
        self.close()

    @staticmethod
    def _load_font(size):
        for name in FONT_NAMES:
            if pygame.font.match_font(name):
                return pygame.font.SysFont(name, size)
        return pygame.font.SysFont(None, size)

    def draw(self, frame: Frame):
        s = self.screen
        s.fill(BACKGROUND_COLOR)
        rects = bar_rects(frame.values, self.width, self.height)
        top = max(1, int(np.max(frame.values)))
        for r, v in zip(rects, frame.values):
            pygame.draw.rect(s, value_to_color(int(v), top), r)
        # accessed bars go on top in the highlight colour
        for i in frame.accessed:
            pygame.draw.rect(s, ACTIVE_COLOR, rects[i])
        text = self.font.render(counters_label(frame), True, TEXT_COLOR, BACKGROUND_COLOR)
        s.blit(text, (int(self.width * SCREEN_MARGINS), int(self.height * SCREEN_MARGINS * 0.15)))
        pygame.display.flip()

    def __call__(self, frame: Frame):
        self.draw(frame)
        if self.frame_delay_ms:
            pygame.time.wait(self.frame_delay_ms)

    def should_stop(self) -> bool:
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                self._quit = True
            elif ev.type == pygame.KEYDOWN and ev.key == pygame.K_ESCAPE:
                self._quit = True
        return self._quit

    def hold(self, ms):
        """Keep the last frame up for ``ms`` milliseconds, or until the window is closed."""
        deadline = pygame.time.get_ticks() + ms
        while pygame.time.get_ticks() < deadline and not self.should_stop():
            pygame.time.wait(10)

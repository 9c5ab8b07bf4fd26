"""Pygame window: input source and rendering sink for the driver."""
from __future__ import annotations

from typing import List, Optional

import pygame

from . import constants
from .driver import Event, Key, KeyDown, PointerDown, Quit, Snapshot


class SimulatorInitError(RuntimeError):
    """Window, renderer or font could not be created."""


KEYMAP = {
    pygame.K_UP: Key.KP_UP,
    pygame.K_DOWN: Key.KP_DOWN,
    pygame.K_RIGHT: Key.KI_UP,
    pygame.K_LEFT: Key.KI_DOWN,
    pygame.K_PAGEUP: Key.KD_UP,
    pygame.K_PAGEDOWN: Key.KD_DOWN,
    pygame.K_r: Key.RESET,
}


def canvas_to_height(y: float, height: int = constants.HEIGHT) -> float:
    # Canvas rows grow downward, simulation heights grow upward
    return float(height - y)


def height_to_canvas(h: float, height: int = constants.HEIGHT) -> int:
    return int(height - h)


def translate_event(event: pygame.event.Event) -> Optional[Event]:
    """Map a pygame event onto a driver event, or None if irrelevant."""
    if event.type == pygame.QUIT:
        return Quit()
    if event.type == pygame.MOUSEBUTTONDOWN:
        return PointerDown(canvas_to_height(event.pos[1]))
    if event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            return Quit()
        key = KEYMAP.get(event.key)
        if key is not None:
            return KeyDown(key)
    return None


def load_font(size: int = constants.FONT_SIZE) -> pygame.font.Font:
    # match_font gives None when no listed family is installed; Font(None)
    # then falls back to pygame's bundled default
    path = pygame.font.match_font(constants.FONT_NAMES)
    return pygame.font.Font(path, size)


class Display:
    """Owns the pygame window and draws one snapshot per frame."""

    def __init__(self, width: int = constants.WIDTH, height: int = constants.HEIGHT) -> None:
        self.width = width
        self.height = height
        try:
            pygame.init()
            self.screen = pygame.display.set_mode((width, height))
            pygame.display.set_caption(constants.CAPTION)
            self.font = load_font()
        except (pygame.error, OSError) as exc:
            pygame.quit()
            raise SimulatorInitError(str(exc)) from exc
        self.clock = pygame.time.Clock()

    def poll(self) -> List[Event]:
        events = []
        for raw in pygame.event.get():
            event = translate_event(raw)
            if event is not None:
                events.append(event)
        return events

    def draw(self, snap: Snapshot) -> None:
        screen = self.screen
        screen.fill(constants.BACKGROUND)

        # Target line
        ty = height_to_canvas(snap.target, self.height)
        pygame.draw.line(screen, constants.TARGET_COLOR, (0, ty), (self.width, ty))

        # Ball, flipped from bottom-edge height to canvas top-left
        x, bottom, w, h = snap.ball_rect
        pygame.draw.rect(screen, constants.BALL_COLOR, pygame.Rect(x, self.height - bottom - h, w, h))

        line_h = self.font.get_linesize()
        for i, line in enumerate(snap.lines):
            screen.blit(self.font.render(line, True, constants.TEXT_COLOR), (10, 10 + line_h * i))

        pygame.display.flip()

    def tick(self, fps: int = constants.FPS) -> float:
        """Pace the frame and return the real time since the last call (s)."""
        return self.clock.tick(fps) / 1000.0

    def close(self) -> None:
        pygame.quit()

"""Interactive and headless runners.

The interactive loop polls input, catches physics up with the fixed-step
driver, renders, then paces the frame, in that order every frame.
"""
from __future__ import annotations

import sys
from typing import List, Optional, Sequence, Tuple

import pygame

from . import constants
from .display import Display, SimulatorInitError
from .driver import Event, FixedStepDriver, Simulation, TickRecord
from .log import get_logger

logger = get_logger(__name__)


def build_driver(**sim_kwargs) -> FixedStepDriver:
    return FixedStepDriver(Simulation(**sim_kwargs))


def run_headless(
    n_ticks: int,
    driver: Optional[FixedStepDriver] = None,
    events: Sequence[Tuple[int, Event]] = (),
) -> List[TickRecord]:
    """Run `n_ticks` fixed ticks without a window.

    `events` is a list of ``(tick_index, event)`` pairs, applied just before
    that tick runs. Returns one record per tick.
    """
    if driver is None:
        driver = build_driver()
    pending = sorted(events, key=lambda te: te[0])
    log: List[TickRecord] = []
    i = 0
    for tick in range(n_ticks):
        while i < len(pending) and pending[i][0] <= tick:
            driver.handle(pending[i][1])
            i += 1
        if not driver.running:
            break
        driver.advance(driver.dt_fixed)
        log.append(driver.history[-1])
    return log


def run(driver: Optional[FixedStepDriver] = None, fps: int = constants.FPS) -> FixedStepDriver:
    """Open the window and run until the operator quits."""
    if driver is None:
        driver = build_driver()
    display = Display()
    logger.info("simulation started (dt=%.4fs, fps cap %d)", driver.dt_fixed, fps)
    try:
        display.tick(fps)  # discard time spent opening the window
        frame_time = 0.0
        running = True
        while running:
            running = driver.frame(display.poll(), frame_time)
            if running:
                display.draw(driver.snapshot(display.width))
            frame_time = display.tick(fps)
    finally:
        display.close()
    logger.info("simulation stopped after %d ticks (%.2fs sim time)", driver.tick_count, driver.sim_time)
    return driver


def show_error(message: str) -> None:
    """Block on a native error dialog until the operator dismisses it."""
    try:
        pygame.display.message_box("Error", message, message_type="error")
    except pygame.error:
        logger.exception("could not show error dialog")


def main() -> int:
    try:
        run()
    except SimulatorInitError as exc:
        logger.error("initialization failed: %s", exc)
        show_error(str(exc))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Fixed-step driver and the simulation context it advances.

Real frame time is collected in an accumulator and drained in `dt_fixed`
ticks, so controller and body only ever see the fixed step. Operator input
is applied between frames, never inside a tick.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Iterable, List, Optional, Tuple, Union

from . import constants
from .body import Ball
from .controller import PIDController
from .log import get_logger

logger = get_logger(__name__)

NS_PER_S = 1_000_000_000


class Key(Enum):
    """Logical keys understood by the driver."""

    KP_UP = "kp_up"
    KP_DOWN = "kp_down"
    KI_UP = "ki_up"
    KI_DOWN = "ki_down"
    KD_UP = "kd_up"
    KD_DOWN = "kd_down"
    RESET = "reset"


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class PointerDown:
    y: float  # target height in domain coordinates


@dataclass(frozen=True)
class KeyDown:
    key: Key


Event = Union[Quit, PointerDown, KeyDown]


@dataclass(frozen=True)
class TickRecord:
    """Body and controller state right after one fixed tick."""

    t: float
    position: float
    velocity: float
    force: float
    target: float


@dataclass(frozen=True)
class Snapshot:
    """Everything the rendering sink needs for one frame."""

    ball_rect: Tuple[int, int, int, int]  # x, bottom height, width, height
    target: float
    kp: float
    ki: float
    kd: float
    lines: List[str]


class Simulation:
    """Owns the controller, the ball and the target."""

    def __init__(
        self,
        controller: Optional[PIDController] = None,
        ball: Optional[Ball] = None,
        target: Optional[float] = None,
        reset_integral_on_retarget: bool = constants.RESET_INTEGRAL_ON_RETARGET,
    ) -> None:
        self.controller = controller if controller is not None else PIDController()
        self.ball = ball if ball is not None else Ball()
        # Start at rest on the target: zero error on the first tick
        self.target = target if target is not None else self.ball.measured_value
        self.reset_integral_on_retarget = reset_integral_on_retarget

    def set_target(self, new_target: float) -> None:
        self.target = new_target
        if self.reset_integral_on_retarget:
            self.controller.clear_integral()

    def step(self, dt: float) -> float:
        """One controller + body pair; returns the applied force."""
        force = self.controller.calculate(self.target, self.ball.measured_value, dt)
        self.ball.update(force, dt)
        return force


class FixedStepDriver:
    """Drains real elapsed time into fixed simulation ticks.

    At most `max_steps` ticks run per frame; real time beyond that is
    dropped rather than carried, so a stall never snowballs into ever
    longer catch-up bursts.
    """

    def __init__(
        self,
        sim: Simulation,
        dt_fixed: float = constants.DT,
        max_steps: int = constants.MAX_STEPS_PER_FRAME,
        history_len: int = constants.HISTORY_LEN,
    ) -> None:
        if dt_fixed <= 0:
            raise ValueError("dt_fixed must be > 0")
        if max_steps < 1:
            raise ValueError("max_steps must be >= 1")
        if history_len < 1:
            raise ValueError("history_len must be >= 1")
        self.sim = sim
        self.dt_fixed = dt_fixed
        self.max_steps = max_steps
        self._dt_ns = max(1, round(dt_fixed * NS_PER_S))
        self._acc_ns = 0
        self._dropped_ns = 0
        self.tick_count = 0
        self.running = True
        self.history: Deque[TickRecord] = deque(maxlen=history_len)

    @property
    def sim_time(self) -> float:
        return self.tick_count * self.dt_fixed

    @property
    def accumulator(self) -> float:
        """Unconsumed real time in seconds, always below `dt_fixed`."""
        return self._acc_ns / NS_PER_S

    @property
    def dropped_time(self) -> float:
        return self._dropped_ns / NS_PER_S

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def handle(self, event: Event) -> None:
        sim = self.sim
        pid = sim.controller
        if isinstance(event, Quit):
            self.running = False
        elif isinstance(event, PointerDown):
            sim.set_target(event.y)
            logger.info("target -> %.1f", event.y)
        elif isinstance(event, KeyDown):
            key = event.key
            if key is Key.RESET:
                pid.reset()
                logger.info("controller reset")
                return
            if key is Key.KP_UP:
                pid.kp += constants.KP_STEP
            elif key is Key.KP_DOWN:
                pid.kp = max(0.0, pid.kp - constants.KP_STEP)
            elif key is Key.KI_UP:
                pid.ki += constants.KI_STEP
            elif key is Key.KI_DOWN:
                pid.ki = max(0.0, pid.ki - constants.KI_STEP)
            elif key is Key.KD_UP:
                pid.kd += constants.KD_STEP
            elif key is Key.KD_DOWN:
                pid.kd = max(0.0, pid.kd - constants.KD_STEP)
            logger.info("gains kp=%.2f ki=%.2f kd=%.2f", *pid.gains())
        else:
            raise TypeError(f"unknown event {event!r}")

    # ------------------------------------------------------------------
    # Time
    # ------------------------------------------------------------------
    def advance(self, frame_time: float) -> int:
        """Consume `frame_time` seconds of real time; return ticks run.

        Time is counted in whole nanoseconds so the tick count depends only
        on the total time fed in, not on how it was split into frames.
        """
        if frame_time < 0:
            raise ValueError("frame_time must be >= 0")
        self._acc_ns += round(frame_time * NS_PER_S)

        budget_ns = self.max_steps * self._dt_ns
        if self._acc_ns > budget_ns:
            excess_ns = self._acc_ns - budget_ns
            self._dropped_ns += excess_ns
            self._acc_ns = budget_ns
            logger.debug("dropped %.4fs of catch-up time", excess_ns / NS_PER_S)

        steps, self._acc_ns = divmod(self._acc_ns, self._dt_ns)
        for _ in range(steps):
            force = self.sim.step(self.dt_fixed)
            self.tick_count += 1
            ball = self.sim.ball
            self.history.append(TickRecord(self.sim_time, ball.position, ball.velocity, force, self.sim.target))
        return steps

    def frame(self, events: Iterable[Event], frame_time: float) -> bool:
        """Apply input, then catch up physics. Returns False once quit."""
        for event in events:
            self.handle(event)
            if not self.running:
                return False
        self.advance(frame_time)
        return self.running

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    def snapshot(self, width: int = constants.WIDTH) -> Snapshot:
        ball = self.sim.ball
        kp, ki, kd = self.sim.controller.gains()
        x = int((width - ball.size) // 2)
        lines = [
            "Controls:",
            "Mouse Click - Set Target",
            f"Up/Down - Kp: {kp:.6f}",
            f"Left/Right - Ki: {ki:.6f}",
            f"PgUp/PgDn - Kd: {kd:.6f}",
            "R - Reset PID",
        ]
        return Snapshot(
            ball_rect=(x, ball.rendered_position, int(ball.size), int(ball.size)),
            target=self.sim.target,
            kp=kp,
            ki=ki,
            kd=kd,
            lines=lines,
        )

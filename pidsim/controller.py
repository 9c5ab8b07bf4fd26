"""PID compensator used by the fixed-step driver."""
from __future__ import annotations

from typing import Tuple

from . import constants


class PIDController:
    """Stateful PID on error with a clamped integral.

    `calculate` is not idempotent: each call folds the error into the
    integral and remembers it for the next derivative estimate.
    """

    def __init__(
        self,
        kp: float = constants.KP,
        ki: float = constants.KI,
        kd: float = constants.KD,
        integral_limit: float = constants.INTEGRAL_LIMIT,
    ) -> None:
        if integral_limit < 0:
            raise ValueError("integral_limit must be >= 0")
        self.kp = kp
        self.ki = ki
        self.kd = kd
        self.integral_limit = integral_limit
        self._integral = 0.0
        self._previous_error = 0.0

    @property
    def integral(self) -> float:
        return self._integral

    @property
    def previous_error(self) -> float:
        return self._previous_error

    def calculate(self, setpoint: float, measured_value: float, dt: float) -> float:
        """Return the control force for one step of length `dt` (> 0).

        `dt == 0` is not guarded: the derivative division raises
        `ZeroDivisionError`. Callers keep `dt` positive.
        """
        error = setpoint - measured_value
        # Clamp after accumulating, not the increment
        self._integral += error * dt
        self._integral = max(-self.integral_limit, min(self._integral, self.integral_limit))
        derivative = (error - self._previous_error) / dt
        self._previous_error = error
        return self.kp * error + self.ki * self._integral + self.kd * derivative

    def reset(self) -> None:
        """Forget integral and derivative memory; gains are kept."""
        self._integral = 0.0
        self._previous_error = 0.0

    def clear_integral(self) -> None:
        self._integral = 0.0

    def gains(self) -> Tuple[float, float, float]:
        return self.kp, self.ki, self.kd

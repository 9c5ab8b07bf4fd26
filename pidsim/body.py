"""Single-axis point mass integrated with semi-implicit Euler."""
from __future__ import annotations

from typing import Optional

from . import constants


class Ball:
    """Ball confined to the vertical axis of the canvas.

    `position` is the height of the ball's lower edge above the floor and
    stays within ``[0, domain_extent - size]`` after every update.
    """

    def __init__(
        self,
        position: Optional[float] = None,
        velocity: float = 0.0,
        size: float = constants.BALL_SIZE,
        domain_extent: float = constants.HEIGHT,
        mass: float = constants.MASS,
        gravity: float = constants.GRAVITY,
        restitution: float = constants.RESTITUTION,
        damping: float = constants.DAMPING,
    ) -> None:
        if mass <= 0:
            raise ValueError("mass must be > 0")
        if not 0 < size <= domain_extent:
            raise ValueError("ball size must fit inside the domain")
        if not 0.0 <= restitution < 1.0:
            raise ValueError("restitution must be in [0, 1)")
        if not 0.0 < damping <= 1.0:
            raise ValueError("damping must be in (0, 1]")

        self.size = size
        self.domain_extent = domain_extent
        self.mass = mass
        self.gravity = gravity
        self.restitution = restitution
        self.damping = damping

        # Spawn with the centre on the middle of the domain
        self.spawn = position if position is not None else (domain_extent - size) / 2
        self.position = 0.0
        self.velocity = 0.0
        self.rendered_position = 0
        self.reset(self.spawn, velocity)

    @property
    def ceiling(self) -> float:
        return self.domain_extent - self.size

    @property
    def measured_value(self) -> float:
        """Quantity the controller sees: the ball's centre height."""
        return self.position + self.size / 2

    def reset(self, position: Optional[float] = None, velocity: float = 0.0) -> None:
        self.position = self.spawn if position is None else position
        self.velocity = velocity
        self._apply_boundary_constraints()
        self.rendered_position = int(self.position)

    def update(self, applied_force: float, dt: float) -> None:
        acceleration = applied_force / self.mass - self.gravity
        self.velocity += acceleration * dt
        self.velocity *= self.damping
        self.position += self.velocity * dt
        self._apply_boundary_constraints()
        self.rendered_position = int(self.position)

    def _apply_boundary_constraints(self) -> None:
        # Restitution 0 stops the ball dead on contact
        if self.position < 0:
            self.position = 0.0
            if self.velocity < 0:
                self.velocity *= -self.restitution
        elif self.position > self.ceiling:
            self.position = self.ceiling
            if self.velocity > 0:
                self.velocity *= -self.restitution

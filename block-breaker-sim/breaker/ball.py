"""Ball — free flight integration and wall reflection."""

import math
from typing import Optional

from breaker import field
from breaker.geometry import velocity_from_angle
from breaker.types import Bounds


class Ball:
    """The ball. Position is the centre; velocity is in px/s."""

    def __init__(self, x: float, y: float, r: float, bounds: Bounds,
                 base_speed: float = field.BASE_SPEED):
        self.x = x
        self.y = y
        self.r = r
        self.bounds = bounds
        self.vx = 0.0
        self.vy = 0.0
        self.launched = False
        self.base_speed = base_speed

    @property
    def speed(self) -> float:
        return math.hypot(self.vx, self.vy)

    def stick_to_paddle(self, paddle) -> None:
        """Rest the ball on top of the paddle centre (ready state)."""
        self.x = paddle.x
        self.y = paddle.y - self.r - field.BALL_GAP
        self.vx = 0.0
        self.vy = 0.0
        self.launched = False

    def launch(self, angle_deg: float = field.KEY_LAUNCH_ANGLE,
               speed: Optional[float] = None) -> None:
        """Start free flight. Negative angles go up the screen.

        Calling this again simply re-aims the ball from the given angle.
        """
        if speed is None:
            speed = self.base_speed
        v = velocity_from_angle(angle_deg, speed)
        self.vx = v.x
        self.vy = v.y
        self.launched = True

    def set_speed(self, speed: float) -> None:
        """Rescale the velocity to `speed`, keeping its direction."""
        current = self.speed
        if current < 1e-9:
            return
        factor = speed / current
        self.vx *= factor
        self.vy *= factor

    def update(self, dt: float) -> bool:
        """Advance one step and reflect off the walls.

        Returns True if the ball touched the bottom edge during this step.
        """
        if not self.launched:
            return False

        self.x += self.vx * dt
        self.y += self.vy * dt

        b = self.bounds
        if self.x - self.r < b.left:
            self.x = b.left + self.r
            self.vx = -self.vx
        elif self.x + self.r > b.right:
            self.x = b.right - self.r
            self.vx = -self.vx

        hit_bottom = False
        if self.y - self.r < b.top:
            self.y = b.top + self.r
            self.vy = -self.vy
        elif self.y + self.r > b.bottom:
            self.y = b.bottom - self.r
            self.vy = -self.vy
            hit_bottom = True

        return hit_bottom

    def draw(self, target) -> None:
        color = field.BALL_LIVE_COLOR if self.launched else field.BALL_IDLE_COLOR
        target.fill_circle(self.x, self.y, self.r, color)

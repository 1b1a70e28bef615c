"""Collision detection and response — ball vs paddle, ball vs bricks.

Functions mutate the ball in place. The brick resolver handles at most one
brick per call: the first overlapping alive cell in row-major order wins and
any other overlaps are left for later frames.
"""

import logging
import math
from typing import Callable, Optional

from breaker import field
from breaker.bricks import BrickField
from breaker.geometry import circle_overlaps_rect
from breaker.types import HitEvent

logger = logging.getLogger(__name__)

HitListener = Callable[[HitEvent], None]


def resolve_ball_paddle(ball, paddle,
                        max_angle_deg: float = field.MAX_BOUNCE_ANGLE_DEG) -> bool:
    """Bounce the ball off the paddle. Returns True if it bounced.

    Only a ball moving down is reflected, so a ball already leaving the
    paddle is never caught twice. The outgoing angle is linear in where the
    ball hit: centre goes straight up, the edges go out at +-max_angle_deg.
    """
    half_w = paddle.w / 2
    within_x = paddle.x - half_w < ball.x < paddle.x + half_w
    within_y = ball.y + ball.r >= paddle.y and ball.y < paddle.y + paddle.h

    if not (within_x and within_y and ball.vy > 0):
        return False

    hit_pos = (ball.x - paddle.x) / half_w  # -1..1 given within_x
    angle = hit_pos * math.radians(max_angle_deg)

    speed = math.hypot(ball.vx, ball.vy)
    ball.vx = speed * math.sin(angle)
    ball.vy = -abs(speed * math.cos(angle))
    ball.y = paddle.y - ball.r - field.BALL_GAP
    return True


def _penetrations(ball, rect) -> dict:
    """Overlap of the ball past each edge of rect."""
    return {
        "left": (ball.x + ball.r) - rect.x,
        "right": rect.right - (ball.x - ball.r),
        "top": (ball.y + ball.r) - rect.y,
        "bottom": rect.bottom - (ball.y - ball.r),
    }


def resolve_ball_bricks(
    ball,
    bricks: BrickField,
    on_hit: Optional[HitListener] = None,
) -> Optional[HitEvent]:
    """Resolve the first brick the ball overlaps this frame.

    The reflection axis is the one with the shallower penetration (X only
    when strictly shallower than Y). The ball is pushed just outside the
    nearer edge on that axis and the matching velocity component flips.

    Returns the HitEvent, or None if no brick was touched.
    """
    eps = field.SEPARATION_EPSILON

    for c, r, brick in bricks.iter_alive():
        rect = bricks.cell_rect(c, r)
        if not circle_overlaps_rect(ball.x, ball.y, ball.r, rect):
            continue

        pen = _penetrations(ball, rect)
        min_x = min(pen["left"], pen["right"])
        min_y = min(pen["top"], pen["bottom"])

        if min_x < min_y:
            axis = "x"
            if pen["left"] < pen["right"]:
                edge = "left"
                ball.x = rect.x - ball.r - eps
            else:
                edge = "right"
                ball.x = rect.right + ball.r + eps
            ball.vx = -ball.vx
        else:
            axis = "y"
            if pen["top"] < pen["bottom"]:
                edge = "top"
                ball.y = rect.y - ball.r - eps
            else:
                edge = "bottom"
                ball.y = rect.bottom + ball.r + eps
            ball.vy = -ball.vy

        bricks.hit(c, r)
        event = HitEvent(col=c, row=r, brick=brick, axis=axis, edge=edge)
        logger.debug("Brick (%d, %d) hit on %s edge", c, r, edge)
        if on_hit is not None:
            on_hit(event)
        return event

    return None

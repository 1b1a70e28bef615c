"""Tests for ball vs paddle and ball vs brick collision response."""

import math
import pytest

from breaker.ball import Ball
from breaker.bricks import BrickField
from breaker.collision import resolve_ball_bricks, resolve_ball_paddle
from breaker.paddle import Paddle
from breaker.types import Bounds, HitEvent
from breaker import field

BOUNDS = Bounds(left=0, top=0, right=480, bottom=640)
EPS = field.SEPARATION_EPSILON


def _ball(x, y, vx, vy, r=8):
    ball = Ball(x, y, r, BOUNDS)
    ball.vx = vx
    ball.vy = vy
    ball.launched = True
    return ball


def _paddle():
    return Paddle(240, 540, 120, 12, BOUNDS)


# --- paddle ---


def test_paddle_centre_hit_goes_straight_up():
    """Centre hit reflects vertically and lifts the ball above the paddle."""
    paddle = _paddle()
    ball = _ball(240, 535, 0, 300)
    assert resolve_ball_paddle(ball, paddle) is True
    assert ball.vx == pytest.approx(0.0, abs=1e-9)
    assert ball.vy == pytest.approx(-300.0)
    assert ball.y == 540 - 8 - field.BALL_GAP


@pytest.mark.parametrize("offset", [-0.99, -0.9, -0.5, -0.1, 0.1, 0.25, 0.5, 0.9, 0.99])
def test_paddle_reflection_invariants(offset):
    """Any hit offset: vy < 0, speed preserved, vx sign follows offset."""
    paddle = _paddle()
    ball = _ball(240 + offset * 60, 536, 100, 200)
    speed_before = ball.speed

    assert resolve_ball_paddle(ball, paddle)
    assert ball.vy < 0
    assert ball.speed == pytest.approx(speed_before)
    assert math.copysign(1, ball.vx) == math.copysign(1, offset)


def test_paddle_angle_linear_in_offset():
    """Half-way to the edge gives half the maximum angle."""
    paddle = _paddle()
    ball = _ball(270, 536, 0, 300)  # offset 0.5
    resolve_ball_paddle(ball, paddle)
    expected = math.radians(field.MAX_BOUNCE_ANGLE_DEG * 0.5)
    assert ball.vx == pytest.approx(300 * math.sin(expected))
    assert ball.vy == pytest.approx(-300 * math.cos(expected))


def test_paddle_ignores_upward_ball():
    """A ball already moving up is not reflected again."""
    paddle = _paddle()
    ball = _ball(240, 536, 50, -300)
    assert resolve_ball_paddle(ball, paddle) is False
    assert (ball.vx, ball.vy) == (50, -300)
    assert ball.y == 536


def test_paddle_miss_outside_width():
    """Ball centre past the paddle edge is not caught."""
    paddle = _paddle()
    ball = _ball(301, 536, 0, 300)
    assert resolve_ball_paddle(ball, paddle) is False
    assert ball.vy == 300


def test_paddle_miss_above_band():
    """Ball still above the paddle surface is not reflected."""
    paddle = _paddle()
    ball = _ball(240, 500, 0, 300)
    assert resolve_ball_paddle(ball, paddle) is False


def test_paddle_miss_below_band():
    """Ball centre below the paddle bottom is not reflected."""
    paddle = _paddle()
    ball = _ball(240, 553, 0, 300)
    assert resolve_ball_paddle(ball, paddle) is False


# --- bricks ---


def test_brick_hit_from_below():
    """Ball rising into a brick bottom flips vy and is pushed below it."""
    bricks = BrickField(3, 1, 40, 20, 0, 100)
    ball = _ball(60, 125, 30, -200)

    event = resolve_ball_bricks(ball, bricks)
    assert isinstance(event, HitEvent)
    assert (event.col, event.row) == (1, 0)
    assert event.axis == "y"
    assert event.edge == "bottom"
    assert ball.vy == 200
    assert ball.vx == 30
    assert ball.y == pytest.approx(120 + 8 + EPS)
    assert bricks.remaining() == 2
    assert not bricks.grid[0][1].alive


def test_brick_hit_from_above():
    """Ball falling onto a brick top flips vy and is pushed above it."""
    bricks = BrickField(1, 1, 40, 20, 100, 100)
    ball = _ball(120, 95, 0, 200)
    event = resolve_ball_bricks(ball, bricks)
    assert event.edge == "top"
    assert ball.vy == -200
    assert ball.y == pytest.approx(100 - 8 - EPS)


def test_brick_hit_left_side():
    """Shallow penetration on the left edge reflects horizontally."""
    bricks = BrickField(1, 1, 40, 20, 100, 100)
    ball = _ball(95, 110, 200, 10)
    event = resolve_ball_bricks(ball, bricks)
    assert event.axis == "x"
    assert event.edge == "left"
    assert ball.vx == -200
    assert ball.vy == 10
    assert ball.x == pytest.approx(100 - 8 - EPS)


def test_brick_hit_right_side():
    """Shallow penetration on the right edge reflects horizontally."""
    bricks = BrickField(1, 1, 40, 20, 100, 100)
    ball = _ball(145, 110, -200, 10)
    event = resolve_ball_bricks(ball, bricks)
    assert event.edge == "right"
    assert ball.vx == 200
    assert ball.x == pytest.approx(140 + 8 + EPS)


def test_brick_corner_tie_reflects_vertically():
    """Equal X and Y penetration picks the Y axis."""
    bricks = BrickField(1, 1, 40, 20, 100, 100)
    ball = _ball(95, 95, 100, 100)  # 3px into both left and top
    event = resolve_ball_bricks(ball, bricks)
    assert event.axis == "y"
    assert event.edge == "top"
    assert ball.vy == -100
    assert ball.vx == 100


def test_single_hit_per_frame():
    """Ball touching two bricks destroys only the first in row-major order."""
    bricks = BrickField(2, 1, 40, 20, 0, 100)
    ball = _ball(40, 125, 0, -200)  # on the seam, under both cells

    event = resolve_ball_bricks(ball, bricks)
    assert (event.col, event.row) == (0, 0)
    assert bricks.remaining() == 1
    assert not bricks.grid[0][0].alive
    assert bricks.grid[0][1].alive
    assert ball.vy == 200


def test_no_overlap_no_change():
    """A ball nowhere near the bricks is left untouched."""
    bricks = BrickField(3, 1, 40, 20, 0, 100)
    ball = _ball(60, 300, 30, -200)
    assert resolve_ball_bricks(ball, bricks) is None
    assert (ball.x, ball.y, ball.vx, ball.vy) == (60, 300, 30, -200)
    assert bricks.remaining() == 3


def test_dead_bricks_are_ignored():
    """The resolver never collides with a destroyed cell."""
    bricks = BrickField(1, 1, 40, 20, 100, 100)
    bricks.hit(0, 0)
    ball = _ball(120, 110, 0, -200)
    assert resolve_ball_bricks(ball, bricks) is None
    assert ball.vy == -200


def test_on_hit_listener_called():
    """The optional listener receives the same event that is returned."""
    bricks = BrickField(1, 1, 40, 20, 100, 100)
    ball = _ball(120, 125, 0, -200)
    received = []
    event = resolve_ball_bricks(ball, bricks, received.append)
    assert received == [event]
    assert received[0].brick.score == 50
    assert not received[0].brick.alive


def test_brick_collision_preserves_speed():
    """Reflection off a brick only flips a component."""
    bricks = BrickField(1, 1, 40, 20, 100, 100)
    ball = _ball(112, 125, 120, -160)
    before = ball.speed
    resolve_ball_bricks(ball, bricks)
    assert ball.speed == pytest.approx(before)

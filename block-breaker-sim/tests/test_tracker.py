"""Tests for the OpenCV marker tracker, on synthetic frames."""

import cv2
import numpy as np
import pytest

from breaker.controls import InputSource
from breaker.paddle import Paddle
from breaker.types import Bounds
from sim.tracker import MarkerTracker

ORANGE_BGR = (0, 140, 255)
BLUE_BGR = (255, 0, 0)


def _frame(cx=None, color=ORANGE_BGR, radius=30):
    frame = np.zeros((480, 640, 3), np.uint8)
    if cx is not None:
        cv2.circle(frame, (cx, 240), radius, color, -1)
    return frame


def test_locate_marker_centre():
    """Centroid of the orange blob is found in image pixels."""
    tracker = MarkerTracker(480)
    assert tracker.locate(_frame(160)) == pytest.approx(160, abs=2)


def test_no_marker():
    """Empty or wrong-coloured frames give no reading."""
    tracker = MarkerTracker(480)
    assert tracker.process(_frame()) is None
    assert tracker.process(_frame(160, color=BLUE_BGR)) is None


def test_tiny_blob_rejected():
    """Specks below the area threshold are treated as noise."""
    tracker = MarkerTracker(480)
    assert tracker.locate(_frame(160, radius=3)) is None


def test_mirrored_mapping():
    """Mirrored view: left of the image is right of the playfield."""
    tracker = MarkerTracker(480, mirror=True)
    assert tracker.process(_frame(160)) == pytest.approx(360, abs=2)

    plain = MarkerTracker(480, mirror=False)
    assert plain.process(_frame(160)) == pytest.approx(120, abs=2)


def test_smoothing_blends_readings():
    """Second reading is blended with the first."""
    tracker = MarkerTracker(480, mirror=True, smoothing=0.5)
    first = tracker.process(_frame(160))
    second = tracker.process(_frame(320))
    assert first == pytest.approx(360, abs=2)
    assert second == pytest.approx(300, abs=3)


def test_feed_moves_paddle_target():
    """Tracker output reaches an attached paddle through the input source."""
    source = InputSource(480)
    paddle = Paddle(240, 540, 120, 12, Bounds(0, 0, 480, 640))
    paddle.attach_input(source)

    tracker = MarkerTracker(480, mirror=False)
    x = tracker.feed(_frame(480), source)
    assert x == pytest.approx(360, abs=2)
    assert paddle.target_x == pytest.approx(360, abs=2)

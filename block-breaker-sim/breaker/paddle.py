"""Paddle — horizontal-only actor that follows the pointer."""

from typing import Optional

from breaker import field
from breaker.controls import InputSource
from breaker.geometry import clamp
from breaker.types import Bounds


class Paddle:
    """Player paddle. `x` is the centre, `y` is the top edge."""

    def __init__(self, x: float, y: float, w: float, h: float, bounds: Bounds):
        self.x = x
        self.y = y
        self.w = w
        self.h = h
        self.bounds = bounds
        self.target_x = x
        self._source: Optional[InputSource] = None

    @property
    def half_width(self) -> float:
        return self.w / 2

    def attach_input(self, source: InputSource) -> None:
        """Follow pointer samples from the source. Attaching twice is a no-op."""
        if self._source is not None:
            return
        self._source = source
        source.subscribe_pointer(self._on_pointer)

    def detach_input(self) -> None:
        if self._source is None:
            return
        self._source.unsubscribe_pointer(self._on_pointer)
        self._source = None

    @property
    def attached(self) -> bool:
        return self._source is not None

    def _on_pointer(self, x: float) -> None:
        self.target_x = x

    def update(self, dt: float) -> None:
        # Direct tracking, no smoothing
        half = self.half_width
        self.x = clamp(self.target_x, self.bounds.left + half, self.bounds.right - half)

    def draw(self, target) -> None:
        target.fill_rect(self.x - self.half_width, self.y, self.w, self.h, field.PADDLE_COLOR)

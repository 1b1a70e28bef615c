"""Input source — pointer/touch position and discrete player actions.

Frontends (pygame window, camera tracker, tests) push raw samples in here;
the paddle and the session subscribe. Listeners only write primitive fields
or enqueue commands, the simulation reads them on the next frame.
"""

from typing import Callable, Optional, Sequence

from breaker.types import Command

PointerListener = Callable[[float], None]
ActionListener = Callable[[Command], None]


def to_local_x(client_x: float, rect_left: float, rect_width: float,
               canvas_width: float) -> float:
    """Convert a display x coordinate into playfield x.

    The canvas can be scaled by the display (CSS size vs logical size), so
    the offset from the canvas' left edge is multiplied by
    canvas_width / rect_width.
    """
    if rect_width <= 0:
        return client_x - rect_left
    ratio = canvas_width / rect_width
    return (client_x - rect_left) * ratio


class InputSource:
    """Fan-out of pointer samples and action events to subscribers."""

    def __init__(self, canvas_width: float, rect_left: float = 0.0,
                 rect_width: Optional[float] = None):
        self.canvas_width = canvas_width
        self.rect_left = rect_left
        self.rect_width = rect_width if rect_width is not None else canvas_width
        self._pointer_listeners: list[PointerListener] = []
        self._action_listeners: list[ActionListener] = []
        self.last_x: Optional[float] = None

    def set_display_rect(self, rect_left: float, rect_width: float) -> None:
        """Update where the canvas sits on the display (window resize)."""
        self.rect_left = rect_left
        self.rect_width = rect_width

    # --- subscriptions ---

    def subscribe_pointer(self, listener: PointerListener) -> None:
        if listener not in self._pointer_listeners:
            self._pointer_listeners.append(listener)

    def unsubscribe_pointer(self, listener: PointerListener) -> None:
        if listener in self._pointer_listeners:
            self._pointer_listeners.remove(listener)

    def subscribe_actions(self, listener: ActionListener) -> None:
        if listener not in self._action_listeners:
            self._action_listeners.append(listener)

    def unsubscribe_actions(self, listener: ActionListener) -> None:
        if listener in self._action_listeners:
            self._action_listeners.remove(listener)

    @property
    def listener_count(self) -> int:
        return len(self._pointer_listeners) + len(self._action_listeners)

    # --- producers ---

    def pointer_moved(self, client_x: float) -> float:
        """Mouse move in display coordinates. Returns the playfield x."""
        x = to_local_x(client_x, self.rect_left, self.rect_width, self.canvas_width)
        self.publish_local_x(x)
        return x

    def touch_moved(self, touches: Sequence[float]) -> Optional[float]:
        """Touch move; only the first touch point steers the paddle."""
        if not touches:
            return None
        return self.pointer_moved(touches[0])

    def publish_local_x(self, x: float) -> None:
        """Push an x that is already in playfield coordinates (e.g. a tracker)."""
        self.last_x = x
        for listener in list(self._pointer_listeners):
            listener(x)

    def request(self, command: Command) -> None:
        for listener in list(self._action_listeners):
            listener(command)

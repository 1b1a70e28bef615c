"""Game session — state machine, frame timing and per-frame update order.

States:
- TITLE -> READY on init()
- READY -> PLAYING on a launch command
- PLAYING <-> PAUSED on the pause toggle
- PLAYING -> CLEAR when the last brick goes
- PLAYING -> GAME_OVER when the ball reaches the floor (BottomEdge.GAME_OVER only)
- any started state -> READY on restart

Update order while playing (each step depends on the one before):
paddle -> ball -> ball vs paddle -> ball vs bricks -> clear check.
"""

import logging
import random
from collections import deque
from typing import Callable, Optional

from breaker import field
from breaker.ball import Ball
from breaker.bricks import BrickField
from breaker.collision import resolve_ball_bricks, resolve_ball_paddle
from breaker.controls import InputSource
from breaker.paddle import Paddle
from breaker.render import RenderTarget, draw_background, draw_hud
from breaker.types import BottomEdge, Bounds, Command, GameConfig, GameState, HitEvent

logger = logging.getLogger(__name__)

TRANSITIONS = {
    GameState.TITLE: {GameState.READY},
    GameState.READY: {GameState.PLAYING, GameState.READY},
    GameState.PLAYING: {GameState.PAUSED, GameState.CLEAR, GameState.GAME_OVER, GameState.READY},
    GameState.PAUSED: {GameState.PLAYING, GameState.READY},
    GameState.CLEAR: {GameState.READY},
    GameState.GAME_OVER: {GameState.READY},
}

# States in which the simulation advances
_SIMULATED = {GameState.READY, GameState.PLAYING}


class InvalidTransition(ValueError):
    """Raised for a state change not listed in TRANSITIONS."""

    def __init__(self, current: GameState, requested: GameState):
        super().__init__(f"Cannot go from {current.value} to {requested.value}")
        self.current = current
        self.requested = requested


class Session:
    """One game instance: owns paddle, ball, bricks, score and state."""

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()
        self._rng = random.Random(self.config.seed)
        self._state = GameState.TITLE
        self._commands: deque = deque()
        self._hit_listeners: list[Callable[[HitEvent], None]] = []
        self._source: Optional[InputSource] = None

        self.bounds: Optional[Bounds] = None
        self.paddle: Optional[Paddle] = None
        self.ball: Optional[Ball] = None
        self.bricks: Optional[BrickField] = None

        self.score = 0
        self.hits = 0
        self.paddle_bounces = 0
        self.frame_count = 0
        self.sim_time = 0.0
        self.last_time: Optional[float] = None

    # --- state machine ---

    @property
    def state(self) -> GameState:
        return self._state

    def can_transition(self, new_state: GameState) -> bool:
        return new_state in TRANSITIONS[self._state]

    def transition(self, new_state: GameState) -> None:
        if not self.can_transition(new_state):
            logger.warning("Rejected transition %s -> %s", self._state.value, new_state.value)
            raise InvalidTransition(self._state, new_state)
        logger.debug("State %s -> %s", self._state.value, new_state.value)
        self._state = new_state

    # --- lifecycle ---

    def init(self) -> None:
        """Build the playfield and enter READY with the ball on the paddle."""
        cfg = self.config
        if self.paddle is not None:
            self.paddle.detach_input()
        self.bounds = Bounds(left=0, top=0, right=cfg.width, bottom=cfg.height)

        pw = cfg.resolved_paddle_width
        px = float(int(cfg.width / 2))
        py = cfg.height - cfg.paddle_bottom_gap
        self.paddle = Paddle(px, py, pw, cfg.paddle_height, self.bounds)

        self.ball = Ball(cfg.width / 2, cfg.height / 2, cfg.ball_radius,
                         self.bounds, base_speed=cfg.base_speed)
        self.ball.stick_to_paddle(self.paddle)

        self.bricks = self._build_bricks()
        self.score = 0
        self.hits = 0
        self.paddle_bounces = 0

        if self._source is not None:
            self.paddle.attach_input(self._source)

        self.transition(GameState.READY)

    def _build_bricks(self) -> BrickField:
        cfg = self.config
        return BrickField(
            cfg.cols, cfg.rows, cfg.tile_width, cfg.tile_height,
            cfg.offset_x, cfg.offset_y,
        )

    def restart(self) -> None:
        """Fresh bricks, zero score, ball back on the paddle."""
        if self._state is GameState.TITLE:
            self.init()
            return
        self.bricks = self._build_bricks()
        self.score = 0
        self.hits = 0
        self.paddle_bounces = 0
        if self.ball is not None and self.paddle is not None:
            self.ball.stick_to_paddle(self.paddle)
        self.transition(GameState.READY)
        logger.debug("Session restarted")

    def attach_input(self, source: InputSource) -> None:
        """Route pointer samples to the paddle and actions to the command queue."""
        if self._source is not None:
            return
        self._source = source
        source.subscribe_actions(self.enqueue)
        if self.paddle is not None:
            self.paddle.attach_input(source)

    def dispose(self) -> None:
        """Remove every input listener. Call before dropping the session."""
        if self.paddle is not None:
            self.paddle.detach_input()
        if self._source is not None:
            self._source.unsubscribe_actions(self.enqueue)
            self._source = None
        self._commands.clear()

    def add_hit_listener(self, listener: Callable[[HitEvent], None]) -> None:
        self._hit_listeners.append(listener)

    # --- input ---

    def enqueue(self, command: Command) -> None:
        self._commands.append(command)

    @property
    def pending_commands(self) -> int:
        return len(self._commands)

    def _drain_commands(self) -> None:
        while self._commands:
            self._apply(self._commands.popleft())

    def _apply(self, command: Command) -> None:
        state = self._state
        if command is Command.LAUNCH and state is GameState.READY:
            self.launch(field.KEY_LAUNCH_ANGLE)
        elif command is Command.LAUNCH_RANDOM and state is GameState.READY:
            self.launch(self._rng.uniform(field.POINTER_LAUNCH_MIN, field.POINTER_LAUNCH_MAX))
        elif command is Command.PAUSE_TOGGLE and state is GameState.PLAYING:
            self.transition(GameState.PAUSED)
        elif command is Command.PAUSE_TOGGLE and state is GameState.PAUSED:
            self.transition(GameState.PLAYING)
        elif command is Command.RESTART and state is not GameState.TITLE:
            self.restart()

    def launch(self, angle_deg: float) -> None:
        """Send the ball off the paddle and start playing."""
        if self.ball is None:
            return
        self.transition(GameState.PLAYING)
        self.ball.launch(angle_deg, self.config.base_speed)

    # --- frame loop ---

    def frame(self, now: float) -> float:
        """Advance from a display timestamp in seconds. Returns the dt used.

        The clock keeps ticking while paused so resuming does not produce a
        huge delta.
        """
        if self.last_time is None:
            dt = 0.0
        else:
            dt = min(now - self.last_time, self.config.max_dt)
        self.last_time = now
        self.step(dt)
        return dt

    def step(self, dt: float) -> None:
        """Apply queued commands, then one simulation step of dt seconds."""
        self._drain_commands()
        self.frame_count += 1
        if self._state not in _SIMULATED:
            return
        self.sim_time += dt

        if self.paddle is not None:
            self.paddle.update(dt)

        hit_bottom = False
        if self.ball is not None:
            if self._state is GameState.READY and self.paddle is not None:
                self.ball.stick_to_paddle(self.paddle)
            else:
                hit_bottom = self.ball.update(dt)

        if self._state is not GameState.PLAYING or self.ball is None:
            return

        if self.paddle is not None and resolve_ball_paddle(self.ball, self.paddle):
            self.paddle_bounces += 1

        if self.bricks is None:
            return

        event = resolve_ball_bricks(self.ball, self.bricks)
        if event is not None:
            self._on_brick_hit(event)

        if self.bricks.remaining() == 0:
            self.transition(GameState.CLEAR)
        elif hit_bottom and self.config.bottom_edge is BottomEdge.GAME_OVER:
            self.transition(GameState.GAME_OVER)

    def _on_brick_hit(self, event: HitEvent) -> None:
        self.score += event.brick.score
        self.hits += 1
        speedup = self.config.speedup_per_hit
        if speedup != 1.0 and self.ball is not None:
            self.ball.set_speed(self.ball.speed * speedup)
        for listener in self._hit_listeners:
            listener(event)

    # --- drawing ---

    def render(self, target: RenderTarget) -> None:
        """Bricks, then paddle, then ball, then the HUD on top."""
        cfg = self.config
        draw_background(target, cfg.width, cfg.height)
        if self.bricks is not None:
            self.bricks.draw(target)
        if self.paddle is not None:
            self.paddle.draw(target)
        if self.ball is not None:
            self.ball.draw(target)
        draw_hud(target, self.score, self._state, cfg.width, cfg.height)

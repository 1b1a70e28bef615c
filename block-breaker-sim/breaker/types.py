"""Core data types for the block breaker simulation."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from breaker import field as playfield


@dataclass
class Vec2:
    """2D vector for position and velocity."""
    x: float = 0.0
    y: float = 0.0

    def magnitude(self) -> float:
        return (self.x**2 + self.y**2) ** 0.5


@dataclass(frozen=True)
class Bounds:
    """Playfield rectangle. Shared read-only by the ball and the paddle."""
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle, top-left origin."""
    x: float
    y: float
    w: float
    h: float

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h


@dataclass
class Brick:
    """One grid cell. Colour is cosmetic only."""
    alive: bool = True
    color: tuple = (255, 255, 255)
    score: int = playfield.BRICK_SCORE
    hp: int = playfield.BRICK_HP


@dataclass(frozen=True)
class HitEvent:
    """A brick destroyed by the ball during one frame."""
    col: int
    row: int
    brick: Brick
    axis: str  # "x" or "y"
    edge: str  # "left", "right", "top" or "bottom"


class GameState(Enum):
    TITLE = "title"
    READY = "ready"
    PLAYING = "playing"
    PAUSED = "paused"
    CLEAR = "clear"
    GAME_OVER = "gameover"


class Command(Enum):
    """Discrete player actions, queued and consumed at the start of a frame."""
    LAUNCH = "launch"                # fixed angle (keyboard)
    LAUNCH_RANDOM = "launch_random"  # random upward fan (pointer click)
    PAUSE_TOGGLE = "pause_toggle"
    RESTART = "restart"


class BottomEdge(Enum):
    """What happens when the ball reaches the bottom of the playfield."""
    REFLECT = "reflect"      # bounce like any other wall
    GAME_OVER = "gameover"   # single life: the session ends


@dataclass
class GameConfig:
    """Tunables for one session. Defaults come from breaker.field."""
    width: float = playfield.SCREEN_WIDTH
    height: float = playfield.SCREEN_HEIGHT
    paddle_width: Optional[float] = None  # None = PADDLE_WIDTH_RATIO of width
    paddle_height: float = playfield.PADDLE_HEIGHT
    paddle_bottom_gap: float = playfield.PADDLE_BOTTOM_GAP
    ball_radius: float = playfield.BALL_RADIUS
    base_speed: float = playfield.BASE_SPEED
    cols: int = playfield.BRICK_COLS
    rows: int = playfield.BRICK_ROWS
    tile_height: float = playfield.BRICK_TILE_HEIGHT
    offset_x: float = playfield.BRICK_OFFSET_X
    offset_y: float = playfield.BRICK_OFFSET_Y
    max_dt: float = playfield.MAX_DT
    bottom_edge: BottomEdge = BottomEdge.REFLECT
    speedup_per_hit: float = 1.0
    seed: Optional[int] = None

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Playfield must be positive, got {self.width}x{self.height}")
        if self.cols < 1 or self.rows < 1:
            raise ValueError(f"Brick grid needs at least 1x1, got {self.cols}x{self.rows}")
        if self.ball_radius <= 0:
            raise ValueError(f"Ball radius must be positive, got {self.ball_radius}")
        if self.base_speed <= 0:
            raise ValueError(f"Base speed must be positive, got {self.base_speed}")
        if self.max_dt <= 0:
            raise ValueError(f"max_dt must be positive, got {self.max_dt}")
        if self.speedup_per_hit <= 0:
            raise ValueError(f"speedup_per_hit must be positive, got {self.speedup_per_hit}")
        if self.paddle_width is not None and not 0 < self.paddle_width <= self.width:
            raise ValueError(f"Paddle width {self.paddle_width} does not fit in {self.width}")

    @property
    def resolved_paddle_width(self) -> float:
        if self.paddle_width is not None:
            return self.paddle_width
        return float(int(self.width * playfield.PADDLE_WIDTH_RATIO))

    @property
    def tile_width(self) -> float:
        return float(int(self.width // self.cols))

    def with_overrides(self, **changes) -> "GameConfig":
        """Return a copy with the given fields replaced (re-validated)."""
        return replace(self, **changes)

"""Brick field — fixed grid of destructible cells."""

from typing import Callable, Iterator

from breaker import field
from breaker.geometry import gradient_color
from breaker.types import Brick, Rect


class BrickField:
    """Grid of bricks stored as grid[row][col].

    Geometry (cols, rows, tile size, offset) is fixed at construction.
    Cells start alive and can only go from alive to dead.
    """

    def __init__(self, cols: int, rows: int, tile_w: float, tile_h: float,
                 offset_x: float = 0.0, offset_y: float = 0.0,
                 score: int = field.BRICK_SCORE):
        self._cols = cols
        self._rows = rows
        self._tile_w = tile_w
        self._tile_h = tile_h
        self._offset_x = offset_x
        self._offset_y = offset_y

        self.grid: list[list[Brick]] = []
        for r in range(rows):
            row = []
            for c in range(cols):
                row.append(Brick(
                    alive=True,
                    color=gradient_color(
                        c, r, cols,
                        field.BRICK_SATURATION,
                        field.BRICK_LIGHTNESS_TOP,
                        field.BRICK_LIGHTNESS_STEP,
                    ),
                    score=score,
                    hp=field.BRICK_HP,
                ))
            self.grid.append(row)

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def tile_w(self) -> float:
        return self._tile_w

    @property
    def tile_h(self) -> float:
        return self._tile_h

    @property
    def total(self) -> int:
        return self._cols * self._rows

    def in_range(self, col: int, row: int) -> bool:
        return 0 <= col < self._cols and 0 <= row < self._rows

    def iter_alive(self) -> Iterator[tuple[int, int, Brick]]:
        """Alive cells in row-major order. Each call starts a fresh walk."""
        for r in range(self._rows):
            for c in range(self._cols):
                b = self.grid[r][c]
                if b.alive:
                    yield c, r, b

    def for_each_alive(self, visit: Callable[[int, int, Brick], None]) -> None:
        for c, r, b in self.iter_alive():
            visit(c, r, b)

    def cell_rect(self, col: int, row: int) -> Rect:
        """World rectangle of a cell; same mapping for drawing and collision."""
        return Rect(
            x=self._offset_x + col * self._tile_w,
            y=self._offset_y + row * self._tile_h,
            w=self._tile_w,
            h=self._tile_h,
        )

    def hit(self, col: int, row: int) -> bool:
        """Destroy a cell. True only if it was alive before the call."""
        if not self.in_range(col, row):
            return False
        b = self.grid[row][col]
        if not b.alive:
            return False
        # Single hit destroys, whatever hp says
        b.hp = 0
        b.alive = False
        return True

    def remaining(self) -> int:
        return sum(1 for _ in self.iter_alive())

    def draw(self, target) -> None:
        inset = field.BRICK_INSET
        for c, r, b in self.iter_alive():
            rect = self.cell_rect(c, r)
            target.fill_rect(rect.x + inset, rect.y + inset,
                             rect.w - 2 * inset, rect.h - 2 * inset, b.color)

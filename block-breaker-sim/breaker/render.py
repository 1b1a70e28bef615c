"""Render targets and HUD drawing.

The engine only needs three primitives from a display. `RecordingTarget`
keeps the calls in memory for headless runs and tests; the pygame
implementation lives in sim/visualizer.py.
"""

from dataclasses import dataclass, field as dc_field

from breaker import field
from breaker.types import GameState


class RenderTarget:
    """Drawing surface used by the engine."""

    def fill_circle(self, x: float, y: float, r: float, color: tuple) -> None:
        raise NotImplementedError

    def fill_rect(self, x: float, y: float, w: float, h: float, color: tuple) -> None:
        raise NotImplementedError

    def draw_text(self, text: str, x: float, y: float, style: dict) -> None:
        raise NotImplementedError


@dataclass
class DrawCall:
    """One recorded drawing primitive."""
    kind: str  # "circle", "rect" or "text"
    args: tuple
    color: tuple = ()
    style: dict = dc_field(default_factory=dict)


class RecordingTarget(RenderTarget):
    """Render target that stores every call. Cleared with `clear()`."""

    def __init__(self):
        self.calls: list[DrawCall] = []

    def fill_circle(self, x, y, r, color):
        self.calls.append(DrawCall("circle", (x, y, r), color))

    def fill_rect(self, x, y, w, h, color):
        self.calls.append(DrawCall("rect", (x, y, w, h), color))

    def draw_text(self, text, x, y, style):
        self.calls.append(DrawCall("text", (text, x, y), style.get("color", ()), dict(style)))

    def clear(self) -> None:
        self.calls = []

    def of_kind(self, kind: str) -> list[DrawCall]:
        return [c for c in self.calls if c.kind == kind]

    def texts(self) -> list[str]:
        return [c.args[0] for c in self.of_kind("text")]


HUD_STYLE = {"color": field.HUD_COLOR, "size": 14, "font": "monospace"}
BANNER_STYLE = {"color": (224, 224, 224), "size": 28, "font": "monospace", "bold": True}

STATE_BANNERS = {
    GameState.TITLE: "BLOCK BREAKER",
    GameState.READY: "Click or Space to launch",
    GameState.PAUSED: "PAUSED",
    GameState.CLEAR: "CLEAR!",
    GameState.GAME_OVER: "GAME OVER",
}


def format_score(score: int) -> str:
    return f"SCORE: {score:06d}"


def draw_background(target: RenderTarget, width: float, height: float) -> None:
    target.fill_rect(0, 0, width, height, field.BG_COLOR)


def draw_hud(target: RenderTarget, score: int, state: GameState,
             width: float, height: float) -> None:
    """Score line, plus a centred banner for every state except PLAYING."""
    target.draw_text(format_score(score), 12, 20, HUD_STYLE)

    banner = STATE_BANNERS.get(state)
    if banner is None:
        return
    if state is GameState.READY:
        target.draw_text(banner, width / 2, height * 0.6, dict(HUD_STYLE, align="center"))
        return
    target.fill_rect(0, height / 2 - 30, width, 60, field.OVERLAY_COLOR)
    target.draw_text(banner, width / 2, height / 2, dict(BANNER_STYLE, align="center"))

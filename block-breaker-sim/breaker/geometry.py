"""Small math helpers — clamping, angles, circle vs rectangle tests."""

import colorsys
import math

from breaker.types import Rect, Vec2


def clamp(v: float, lo: float, hi: float) -> float:
    return min(hi, max(lo, v))


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def velocity_from_angle(angle_deg: float, speed: float) -> Vec2:
    """Velocity for a heading in degrees. Y points down, so sin < 0 moves up."""
    rad = math.radians(angle_deg)
    return Vec2(math.cos(rad) * speed, math.sin(rad) * speed)


def heading_deg(vx: float, vy: float) -> float:
    return math.degrees(math.atan2(vy, vx))


def closest_point(cx: float, cy: float, rect: Rect) -> Vec2:
    """Closest point on (or inside) rect to the point (cx, cy)."""
    return Vec2(clamp(cx, rect.x, rect.right), clamp(cy, rect.y, rect.bottom))


def circle_overlaps_rect(cx: float, cy: float, r: float, rect: Rect) -> bool:
    """Circle touches rect if its centre is within r of the closest point."""
    p = closest_point(cx, cy, rect)
    dx = cx - p.x
    dy = cy - p.y
    return dx * dx + dy * dy <= r * r


def gradient_color(col: int, row: int, cols: int,
                   saturation: float, lightness_top: float,
                   lightness_step: float) -> tuple[int, int, int]:
    """RGB colour with hue swept across columns and lightness dropping per row."""
    hue = col / cols
    lightness = clamp(lightness_top - row * lightness_step, 0.0, 1.0)
    # colorsys takes HLS order
    r, g, b = colorsys.hls_to_rgb(hue, lightness, saturation)
    return int(round(r * 255)), int(round(g * 255)), int(round(b * 255))

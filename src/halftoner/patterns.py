"""Brightness response curves and the mark drawn for each pattern kind.

Each drawer has the signature ``draw(canvas, cx, cy, cell_size, factor, rotate)``
where ``canvas`` is an ``ImageDraw.Draw`` opened in ``"RGBA"`` mode, so the
alpha of the fill is blended onto the white background. ``factor`` is in
[0, 1]: 0 means no mark, 1 means the largest mark the cell allows. Drawers
return True when something was drawn.
"""

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from PIL import ImageDraw

from halftoner.engine import PatternKind

# Marks at or below this many pixels across are not drawn
MIN_MARK_SIZE = 0.5

BLACK = (0, 0, 0, 255)


class ResponseCurve(Protocol):
    def __call__(self, normalized: float) -> float: ...


@dataclass(frozen=True)
class PowerCurve:
    exponent: float
    scale: float

    def __call__(self, normalized: float) -> float:
        return normalized**self.exponent * self.scale


class LinearCurve:
    def __call__(self, normalized: float) -> float:
        return normalized

    def __repr__(self) -> str:
        return "LinearCurve()"


RESPONSE_CURVES: dict[PatternKind, PowerCurve] = {
    PatternKind.DOT: PowerCurve(1.2, 0.85),
    PatternKind.SQUARE: PowerCurve(1.1, 0.90),
    PatternKind.TRIANGLE: PowerCurve(0.9, 0.85),
    PatternKind.LINE: PowerCurve(1.3, 0.80),
    PatternKind.CROSS: PowerCurve(1.1, 0.75),
}

LINEAR = LinearCurve()


def response_curve(pattern: PatternKind, response: str = "curve") -> ResponseCurve:
    if response == "linear":
        return LINEAR
    return RESPONSE_CURVES[pattern]


def mark_factor(brightness: float, curve: ResponseCurve) -> float:
    """Map a 0-255 brightness to a mark factor: darker cells get larger marks."""
    return 1.0 - curve(brightness / 255.0)


def _place(
    points: Sequence[tuple[float, float]], cx: float, cy: float, angle: float, size: float
) -> list[tuple[float, float]]:
    """Map a mark ``size`` px across onto ImageDraw's pixel grid.

    ImageDraw includes the end coordinate, so a shape spanning [0, size] in
    continuous space is drawn through pixel centres 0 .. size - 1: the
    outline shrinks by half a pixel on every side and the centre moves to
    (cx - 0.5, cy - 0.5).
    """
    shrink = max(0.0, size - 1) / size
    px0 = cx - 0.5
    py0 = cy - 0.5
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    placed = []
    for px, py in points:
        px *= shrink
        py *= shrink
        if angle:
            px, py = px * cos_a - py * sin_a, px * sin_a + py * cos_a
        placed.append((px0 + px, py0 + py))
    return placed


def _stroke_width(width: float) -> int:
    # ImageDraw only takes integer widths
    return max(1, round(width))


def draw_dot(canvas: ImageDraw.ImageDraw, cx: float, cy: float, cell_size: int, factor: float, rotate: bool) -> bool:
    radius = cell_size / 2 * factor
    if radius <= MIN_MARK_SIZE:
        return False
    alpha = round(255 * min(1.0, factor + 0.1))
    (x0, y0), (x1, y1) = _place([(-radius, -radius), (radius, radius)], cx, cy, 0.0, radius * 2)
    canvas.ellipse([x0, y0, x1, y1], fill=(0, 0, 0, alpha))
    return True


def draw_square(canvas: ImageDraw.ImageDraw, cx: float, cy: float, cell_size: int, factor: float, rotate: bool) -> bool:
    side = cell_size * factor
    if side <= MIN_MARK_SIZE:
        return False
    half = side / 2
    angle = factor * math.pi / 8 if rotate else 0.0
    corners = [(-half, -half), (half, -half), (half, half), (-half, half)]
    canvas.polygon(_place(corners, cx, cy, angle, side), fill=BLACK)
    return True


def draw_triangle(
    canvas: ImageDraw.ImageDraw, cx: float, cy: float, cell_size: int, factor: float, rotate: bool
) -> bool:
    side = cell_size * factor
    if side <= MIN_MARK_SIZE:
        return False
    height = side * math.sqrt(3) / 2
    angle = (cx + cy) * 0.01 if rotate else 0.0
    # Centred on the centroid, apex up
    vertices = [(0.0, -height * 2 / 3), (side / 2, height / 3), (-side / 2, height / 3)]
    canvas.polygon(_place(vertices, cx, cy, angle, side), fill=BLACK)
    return True


def draw_line(canvas: ImageDraw.ImageDraw, cx: float, cy: float, cell_size: int, factor: float, rotate: bool) -> bool:
    length = cell_size * factor
    if length <= MIN_MARK_SIZE:
        return False
    half = length / 2
    angle = (cx + cy) * 0.05 if rotate else 0.0
    stroke = _place([(-half, 0.0), (half, 0.0)], cx, cy, angle, length)
    canvas.line(stroke, fill=BLACK, width=_stroke_width(factor * 2))
    return True


def draw_cross(canvas: ImageDraw.ImageDraw, cx: float, cy: float, cell_size: int, factor: float, rotate: bool) -> bool:
    length = cell_size * factor
    if length <= MIN_MARK_SIZE:
        return False
    half = length / 2
    angle = factor * math.pi / 12 if rotate else 0.0
    width = _stroke_width(factor * 1.5)
    canvas.line(_place([(-half, 0.0), (half, 0.0)], cx, cy, angle, length), fill=BLACK, width=width)
    canvas.line(_place([(0.0, -half), (0.0, half)], cx, cy, angle, length), fill=BLACK, width=width)
    return True


Drawer = Callable[[ImageDraw.ImageDraw, float, float, int, float, bool], bool]

DRAWERS: dict[PatternKind, Drawer] = {
    PatternKind.DOT: draw_dot,
    PatternKind.SQUARE: draw_square,
    PatternKind.TRIANGLE: draw_triangle,
    PatternKind.LINE: draw_line,
    PatternKind.CROSS: draw_cross,
}

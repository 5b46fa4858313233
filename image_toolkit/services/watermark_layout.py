"""
Placement of repeated watermark text over a canvas.

The generator is a pure computation: it maps the canvas size, the text and a
style to a list of :class:`OverlayElement` describing where each repetition is
drawn. Rendering and blending live in :mod:`watermark_service`.

Coordinates use image pixel space (origin top-left, y down). ``(x, y)`` is the
text baseline origin and the pivot of its rotation; positive rotation turns
clockwise on screen.
"""
from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Protocol

from image_toolkit.core.errors import InvalidStyleError
from image_toolkit.models import WatermarkStyle

WATERMARK_OPACITY = 0.3
MIN_FONT_SIZE = 24
DIAGONAL_ANGLE = -30.0
GRID_DIVISIONS = 5
SCATTERED_COUNT = 50


class RandomSource(Protocol):
    def random(self) -> float:
        """Return a float in [0, 1)."""


@dataclass(frozen=True)
class OverlayElement:
    x: float
    y: float
    rotation: float
    font_size: float
    text: str
    opacity: float = WATERMARK_OPACITY


def font_size_for(width: int) -> float:
    return max(width / 20, MIN_FONT_SIZE)


def parse_style(style: WatermarkStyle | str) -> WatermarkStyle:
    try:
        return WatermarkStyle(style)
    except ValueError as exc:
        raise InvalidStyleError(
            f"Invalid watermark style '{style}'. Supported styles are diagonal, grid and scattered."
        ) from exc


def generate_layout(
    width: int,
    height: int,
    text: str,
    style: WatermarkStyle | str = WatermarkStyle.diagonal,
    rng: Optional[RandomSource] = None,
) -> List[OverlayElement]:
    """
    Lay out the repetitions of ``text`` for a ``width`` x ``height`` canvas.

    Diagonal and grid layouts depend on the canvas size only, so identical
    inputs always give identical sequences. The scattered layout is random on
    purpose, a different pattern for every request; pass ``rng`` (any object
    with a ``random()`` method) to make it reproducible.

    Raises:
        InvalidStyleError: ``style`` is not diagonal, grid or scattered.
        ValueError: non-positive dimensions or empty text.
    """
    resolved = parse_style(style)
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be positive")
    if not text:
        raise ValueError("watermark text must not be empty")

    font_size = font_size_for(width)
    builder = _BUILDERS[resolved]
    if resolved is WatermarkStyle.scattered:
        return builder(width, height, text, font_size, rng or random)
    return builder(width, height, text, font_size, None)


def _diagonal(width: int, height: int, text: str, font_size: float, _rng) -> List[OverlayElement]:
    # anchors span three canvas widths/heights so the rotated rows still cover every corner
    spacing = font_size * 3
    columns = math.ceil(3 * width / spacing)
    rows = math.ceil(3 * height / spacing)

    elements: List[OverlayElement] = []
    for row in range(rows):
        y = -height + row * spacing
        for column in range(columns):
            x = -width + column * spacing
            elements.append(OverlayElement(x=x, y=y, rotation=DIAGONAL_ANGLE, font_size=font_size, text=text))
    return elements


def _grid(width: int, height: int, text: str, font_size: float, _rng) -> List[OverlayElement]:
    spacing_x = width / GRID_DIVISIONS
    spacing_y = height / GRID_DIVISIONS
    return [
        OverlayElement(x=column * spacing_x, y=row * spacing_y, rotation=0.0, font_size=font_size, text=text)
        for row in range(GRID_DIVISIONS)
        for column in range(GRID_DIVISIONS)
    ]


def _scattered(width: int, height: int, text: str, font_size: float, rng: RandomSource) -> List[OverlayElement]:
    elements: List[OverlayElement] = []
    for _ in range(SCATTERED_COUNT):
        x = rng.random() * width
        y = rng.random() * height
        rotation = rng.random() * 360
        elements.append(OverlayElement(x=x, y=y, rotation=rotation, font_size=font_size, text=text))
    return elements


_BUILDERS: Dict[WatermarkStyle, Callable[..., List[OverlayElement]]] = {
    WatermarkStyle.diagonal: _diagonal,
    WatermarkStyle.grid: _grid,
    WatermarkStyle.scattered: _scattered,
}

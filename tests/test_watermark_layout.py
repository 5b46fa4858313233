import itertools
import math

import pytest

from image_toolkit.core.errors import InvalidParameterError, InvalidStyleError
from image_toolkit.models import WatermarkStyle
from image_toolkit.services.watermark_layout import (
    OverlayElement,
    font_size_for,
    generate_layout,
)


class SequenceRandom:
    """Deterministic stand-in for the random module."""

    def __init__(self, values):
        self._values = itertools.cycle(values)
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return next(self._values)


@pytest.mark.parametrize("width, expected", [(100, 24), (480, 24), (1000, 50), (4000, 200)])
def test_font_size_has_a_floor(width: int, expected: float) -> None:
    assert font_size_for(width) == expected


@pytest.mark.parametrize("size", [(1, 1), (3, 7), (100, 100), (640, 480), (1921, 1079)])
def test_grid_has_twenty_five_upright_elements(size) -> None:
    width, height = size
    elements = generate_layout(width, height, "Sample", "grid")

    assert len(elements) == 25
    assert all(element.rotation == 0 for element in elements)
    assert all(element.opacity == pytest.approx(0.3) for element in elements)
    assert all(0 <= element.x < width and 0 <= element.y < height for element in elements)


def test_grid_anchors_step_by_fifths() -> None:
    elements = generate_layout(500, 250, "Sample", WatermarkStyle.grid)

    assert sorted({element.x for element in elements}) == [0, 100, 200, 300, 400]
    assert sorted({element.y for element in elements}) == [0, 50, 100, 150, 200]


def test_diagonal_is_idempotent() -> None:
    first = generate_layout(640, 480, "Sample", "diagonal")
    second = generate_layout(640, 480, "Sample", "diagonal")

    assert first == second


def test_diagonal_count_and_range() -> None:
    width, height = 400, 300
    elements = generate_layout(width, height, "Sample", "diagonal")

    spacing = font_size_for(width) * 3
    assert len(elements) == math.ceil(3 * width / spacing) * math.ceil(3 * height / spacing)
    assert elements[0].x == -width and elements[0].y == -height
    assert all(-width <= element.x < 2 * width for element in elements)
    assert all(-height <= element.y < 2 * height for element in elements)
    assert {element.rotation for element in elements} == {-30}
    assert {element.opacity for element in elements} == {0.3}


def test_diagonal_enumerates_rows_then_columns() -> None:
    elements = generate_layout(400, 300, "Sample", "diagonal")

    assert elements[0].y == elements[1].y
    assert elements[1].x > elements[0].x


def test_scattered_uses_injected_random_source() -> None:
    rng = SequenceRandom([0.5, 0.25, 0.75])
    elements = generate_layout(200, 100, "Sample", "scattered", rng=rng)

    assert len(elements) == 50
    assert rng.calls == 150
    assert elements[0] == OverlayElement(x=100.0, y=25.0, rotation=270.0, font_size=24, text="Sample")


def test_scattered_stays_inside_canvas() -> None:
    width, height = 321, 123
    elements = generate_layout(width, height, "Sample", "scattered")

    assert len(elements) == 50
    for element in elements:
        assert 0 <= element.x < width
        assert 0 <= element.y < height
        assert 0 <= element.rotation < 360
        assert element.opacity == 0.3


def test_every_element_carries_text_and_font_size() -> None:
    for style in WatermarkStyle:
        for element in generate_layout(1000, 800, "© Studio", style):
            assert element.text == "© Studio"
            assert element.font_size == 50


@pytest.mark.parametrize("style", ["unknown", "", "Diagonal", "tile", "grid "])
def test_unknown_style_is_rejected(style: str) -> None:
    with pytest.raises(InvalidStyleError):
        generate_layout(100, 100, "Sample", style)


def test_invalid_style_maps_to_bad_request() -> None:
    with pytest.raises(InvalidParameterError) as excinfo:
        generate_layout(100, 100, "Sample", "unknown")
    assert excinfo.value.status_code == 400


@pytest.mark.parametrize("width, height, text", [(0, 10, "a"), (10, -1, "a"), (10, 10, "")])
def test_invalid_canvas_or_text(width: int, height: int, text: str) -> None:
    with pytest.raises(ValueError):
        generate_layout(width, height, text, "grid")

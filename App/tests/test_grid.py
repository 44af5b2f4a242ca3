import math

import pytest

from halftone.errors import InvalidInputError
from halftone.grid import apply_rotated_grid, iter_rotated_grid, lookup_intensity
from halftone.rendering import draw_circle
from models import Circle, PatternConfig


def test_uniform_full_intensity_circle_grid(uniform_map, circle_config):
    primitives = apply_rotated_grid(uniform_map(24, 24, 1.0), 24, 24, circle_config, draw_circle)

    assert len(primitives) == 4
    for primitive in primitives:
        assert isinstance(primitive, Circle)
        assert primitive.r == 4.0

    # One circle per 12x12 cell
    cells = {(math.floor(p.cx / 12), math.floor(p.cy / 12)) for p in primitives}
    assert cells == {(0, 0), (1, 0), (0, 1), (1, 1)}


@pytest.mark.parametrize("angle", [0, 15, 30, 45, 60, 75, 90, 120, 135, 180])
def test_rotated_grid_covers_canvas(angle):
    width, height, spacing = 120, 80, 12
    points = list(iter_rotated_grid(width, height, angle, spacing))

    assert all(0 <= x < width and 0 <= y < height for x, y in points)

    # Every 2*spacing tile, corners included, holds at least one sample
    tile = 2 * spacing
    for top in range(0, height - tile + 1, tile):
        for left in range(0, width - tile + 1, tile):
            inside = [
                (x, y) for x, y in points if left <= x < left + tile and top <= y < top + tile
            ]
            assert inside, f"empty tile at ({left}, {top}) for angle {angle}"

    # Roughly one sample per spacing^2 of canvas area
    assert len(points) >= 0.6 * (width * height) / (spacing * spacing)


@pytest.mark.parametrize("spacing", [0, -5])
def test_non_positive_spacing_is_rejected(spacing):
    with pytest.raises(InvalidInputError):
        list(iter_rotated_grid(10, 10, 0, spacing))


def test_lookup_floors_coordinates():
    values = [0.0, 0.1, 0.2, 0.3, 0.4, 0.5]  # 3x2

    assert lookup_intensity(values, 3, 2, 1.9, 0.2) == 0.1
    assert lookup_intensity(values, 3, 2, 2.0, 1.99) == 0.5


def test_lookup_outside_canvas_reads_zero():
    values = [1.0] * 4

    assert lookup_intensity(values, 2, 2, -0.5, 0) == 0.0
    assert lookup_intensity(values, 2, 2, 2.0, 0) == 0.0
    assert lookup_intensity(values, 2, 2, 0, 5) == 0.0


def test_draw_function_receives_sample_and_config(uniform_map):
    config = PatternConfig(spacing=10)
    seen = []

    def record(x, y, intensity, cfg):
        seen.append((intensity, cfg))
        return []

    apply_rotated_grid(uniform_map(20, 20, 0.25), 20, 20, config, record)

    assert seen
    assert all(intensity == 0.25 and cfg is config for intensity, cfg in seen)

import numpy as np
import pytest
from PIL import Image

from models import PatternConfig, PatternType


@pytest.fixture
def uniform_map():
    """Factory for a constant intensity map."""

    def make(width, height, value):
        values = np.full(width * height, value, dtype=np.float64)
        values.flags.writeable = False
        return values

    return make


@pytest.fixture
def rgba_pixels():
    """Factory for a flat RGBA buffer filled with one color."""

    def make(width, height, rgba):
        return np.tile(np.array(rgba, dtype=np.uint8), width * height)

    return make


@pytest.fixture
def horizontal_ramp():
    """Intensity map rising from 0 at the left edge to 1 at the right edge."""

    def make(width, height):
        row = np.linspace(0.0, 1.0, width)
        return np.tile(row, height)

    return make


@pytest.fixture
def gradient_image():
    """40x30 RGB image, white on the left fading to dark blue on the right."""
    image = Image.new("RGB", (40, 30))
    for x in range(40):
        level = 255 - x * 6
        for y in range(30):
            image.putpixel((x, y), (level, level, min(255, level + 60)))
    return image


@pytest.fixture
def circle_config():
    return PatternConfig(pattern_type=PatternType.CIRCLE, dot_size=8, spacing=12, angle=0)

import logging

import pytest

from halftone.patterns import all_pattern_names, generate_pattern, resolve_pattern_type
from halftone.svg_writer import channel_to_svg
from models import Circle, Line, PatternConfig, PatternType


def test_all_thirteen_patterns_listed():
    names = all_pattern_names()

    assert len(names) == 13
    assert names[0] == "circle"
    assert "voronoi" in names and "flowfield" in names


def test_resolve_pattern_type():
    assert resolve_pattern_type("Spiral") is PatternType.SPIRAL
    assert resolve_pattern_type(PatternType.WAVE) is PatternType.WAVE


def test_unknown_pattern_falls_back_to_circle(uniform_map, caplog):
    config = PatternConfig(dot_size=8, spacing=12)
    values = uniform_map(24, 24, 1.0)

    with caplog.at_level(logging.WARNING):
        result = generate_pattern("plaid", values, 24, 24, config)

    assert result.pattern_type is PatternType.CIRCLE
    assert "plaid" in caplog.text
    assert result.primitives == generate_pattern("circle", values, 24, 24, config).primitives


@pytest.mark.parametrize("pattern", list(PatternType))
def test_every_pattern_draws_on_a_ramp(pattern, horizontal_ramp):
    config = PatternConfig(pattern_type=pattern, angle=15, color="#123456")

    result = generate_pattern(pattern, horizontal_ramp(60, 40), 60, 40, config)

    assert result.pattern_type is pattern
    assert result.color == "#123456"
    assert result.primitives


@pytest.mark.parametrize("pattern", list(PatternType))
def test_output_is_deterministic(pattern, horizontal_ramp):
    config = PatternConfig(pattern_type=pattern, angle=45)
    values = horizontal_ramp(50, 30)

    first = generate_pattern(pattern, values, 50, 30, config)
    second = generate_pattern(pattern, values, 50, 30, config)

    assert channel_to_svg(first.primitives, 50, 30, "#000000") == channel_to_svg(
        second.primitives, 50, 30, "#000000"
    )


@pytest.mark.parametrize("pattern", ["stochastic", "stipple", "voronoi"])
def test_seed_changes_seeded_patterns(pattern, horizontal_ramp):
    values = horizontal_ramp(50, 30)

    default = generate_pattern(pattern, values, 50, 30, PatternConfig())
    reseeded = generate_pattern(pattern, values, 50, 30, PatternConfig(seed=777))

    assert default.primitives != reseeded.primitives


def test_blank_map_draws_nothing(uniform_map):
    values = uniform_map(30, 30, 0.0)

    for pattern in PatternType:
        assert generate_pattern(pattern, values, 30, 30, PatternConfig()).primitives == []


def test_flowfield_segments_point_toward_darker_side(horizontal_ramp):
    config = PatternConfig(spacing=8, angle=30)

    result = generate_pattern(PatternType.FLOWFIELD, horizontal_ramp(60, 40), 60, 40, config)

    lines = [p for p in result.primitives if isinstance(p, Line)]
    dots = [p for p in result.primitives if isinstance(p, Circle)]
    assert lines and len(lines) == len(dots)
    for line in lines:
        assert line.x2 > line.x1
        assert line.y2 == pytest.approx(line.y1)

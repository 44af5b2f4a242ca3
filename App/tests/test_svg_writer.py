import pytest

from halftone.svg_writer import channel_to_svg, combined_to_svg, primitive_to_element
from models import Circle, Line, Polygon, Polyline, Rect


def test_channel_document_structure():
    content = channel_to_svg([Circle(1.234, 5.0, 3.456)], 10, 20, "#ff0000")

    assert content.startswith("<svg")
    assert 'width="10"' in content and 'height="20"' in content
    assert 'fill="white"' in content
    assert 'fill="#ff0000"' in content
    assert 'stroke="#ff0000"' in content
    assert "<circle" in content


def test_values_are_rounded_to_two_decimals():
    content = channel_to_svg([Circle(1.234, 5.0, 3.456)], 10, 10, "#000000")

    assert 'cx="1.23"' in content
    assert 'r="3.46"' in content
    assert "1.234" not in content


def test_outlined_shapes_have_no_fill():
    element = primitive_to_element(Circle(5, 5, 2, filled=False, stroke_width=1.5))

    assert element.fill == "none"
    assert element.stroke_width == 1.5


def test_filled_shapes_inherit_group_style():
    element = primitive_to_element(Rect(1, 2, 3, 4))

    assert element.fill is None
    assert element.stroke_width is None


def test_line_and_path_carry_stroke_width():
    line = primitive_to_element(Line(0, 0, 3, 4, stroke_width=2.345))
    path = primitive_to_element(Polyline([(0, 0), (1, 1), (2, 0)], stroke_width=1))

    assert line.stroke_width == pytest.approx(2.35, abs=0.006)
    assert path.fill == "none"
    assert len(path.d) == 3


def test_polygon_points_are_flattened():
    element = primitive_to_element(Polygon([(0, 0), (1.005, 2), (3, 4)]))

    assert len(element.points) == 6
    assert element.points[0] == 0


def test_unsupported_primitive():
    with pytest.raises(TypeError):
        primitive_to_element("circle")


def test_combined_document_blends_channels():
    content = combined_to_svg(
        [([Circle(1, 1, 1)], "#00ffff"), ([Circle(2, 2, 1)], "#ff00ff")], 10, 10
    )

    assert content.count("mix-blend-mode: multiply") == 2
    assert "opacity: 0.8" in content
    assert content.index("#00ffff") < content.index("#ff00ff")


def test_empty_channel_still_has_background():
    content = channel_to_svg([], 5, 5, "#000000")

    assert 'fill="white"' in content


def test_ties_round_away_from_zero():
    content = channel_to_svg([Circle(0.125, 0.375, 2.5)], 10, 10, "#000000")

    assert 'cx="0.13"' in content
    assert 'cy="0.38"' in content

    line = primitive_to_element(Line(-0.125, 0, 1, 1))
    assert line.x1 == -0.13


def test_tiny_negative_values_become_zero():
    element = primitive_to_element(Circle(-0.001, 1, 1))

    assert element.cx == 0.0
    assert 'cx="-' not in channel_to_svg([Circle(-0.001, 1, 1)], 5, 5, "#000000")

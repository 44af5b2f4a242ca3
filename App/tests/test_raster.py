from PIL import Image

from halftone.raster import composite_multiply, render_raster
from models import Circle, Line, Polygon, Polyline, Rect


def test_circle_is_drawn_in_channel_color():
    image = render_raster([Circle(10, 10, 4)], 20, 20, "#ff0000")

    assert image.size == (20, 20)
    assert image.mode == "RGB"
    assert image.getpixel((10, 10)) == (255, 0, 0)
    assert image.getpixel((0, 0)) == (255, 255, 255)


def test_outlined_circle_leaves_center_blank():
    image = render_raster([Circle(10, 10, 6, filled=False, stroke_width=1)], 20, 20, "#000000")

    assert image.getpixel((10, 10)) == (255, 255, 255)
    assert min(image.getdata()) == (0, 0, 0)


def test_every_primitive_kind_marks_pixels():
    primitives = [
        Rect(1, 1, 4, 4),
        Line(10, 0, 10, 19, stroke_width=3),
        Polygon([(14, 14), (19, 14), (19, 19)]),
        Polyline([(0, 18), (5, 18), (8, 18)], stroke_width=1),
    ]

    image = render_raster(primitives, 20, 20, "#0000ff")

    assert image.getpixel((2, 2)) == (0, 0, 255)
    assert image.getpixel((10, 5)) == (0, 0, 255)
    assert image.getpixel((18, 15)) == (0, 0, 255)
    assert image.getpixel((3, 18)) == (0, 0, 255)


def test_malformed_color_draws_black():
    image = render_raster([Rect(0, 0, 5, 5)], 6, 6, "not-a-color")

    assert image.getpixel((2, 2)) == (0, 0, 0)


def test_composite_multiplies_layers():
    cyan = render_raster([Rect(0, 0, 10, 10)], 10, 10, "#00ffff")
    magenta = render_raster([Rect(0, 0, 5, 10)], 10, 10, "#ff00ff")

    preview = composite_multiply([cyan, magenta], (10, 10))

    assert preview.getpixel((2, 5)) == (0, 0, 255)
    assert preview.getpixel((8, 5)) == (0, 255, 255)


def test_composite_of_nothing_is_white():
    preview = composite_multiply([], (4, 3))

    assert preview.size == (4, 3)
    assert preview.getpixel((1, 1)) == (255, 255, 255)


def test_composite_converts_layer_modes():
    layer = Image.new("RGBA", (3, 3), (128, 128, 128, 255))

    preview = composite_multiply([layer], (3, 3))

    assert preview.getpixel((0, 0)) == (128, 128, 128)

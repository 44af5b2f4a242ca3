"""Raster rendering of drawing primitives with Pillow."""

from PIL import Image, ImageChops, ImageDraw

from models import Circle, Line, Polygon, Polyline, Primitive, Rect

from .colors import hex_to_rgb


def _pixel_width(stroke_width: "float | None") -> int:
    # AIDEV-NOTE: Pillow only draws whole-pixel stroke widths
    return max(1, round(stroke_width or 1))


def draw_primitive(draw: ImageDraw.ImageDraw, primitive: Primitive, rgb: "tuple[int, int, int]"):
    """Draw one primitive with the given color.

    Args:
        draw: Pillow drawing context
        primitive: Shape to draw
        rgb: Ink color
    """
    if isinstance(primitive, Line):
        draw.line(
            [(primitive.x1, primitive.y1), (primitive.x2, primitive.y2)],
            fill=rgb,
            width=_pixel_width(primitive.stroke_width),
        )
        return

    if isinstance(primitive, Polyline):
        draw.line(
            primitive.points,
            fill=rgb,
            width=_pixel_width(primitive.stroke_width),
            joint="curve",
        )
        return

    if primitive.filled:
        fill, outline, width = rgb, None, 1
    else:
        fill, outline, width = None, rgb, _pixel_width(primitive.stroke_width)

    if isinstance(primitive, Circle):
        box = [
            primitive.cx - primitive.r,
            primitive.cy - primitive.r,
            primitive.cx + primitive.r,
            primitive.cy + primitive.r,
        ]
        draw.ellipse(box, fill=fill, outline=outline, width=width)
    elif isinstance(primitive, Rect):
        box = [
            primitive.x,
            primitive.y,
            primitive.x + primitive.width,
            primitive.y + primitive.height,
        ]
        draw.rectangle(box, fill=fill, outline=outline, width=width)
    elif isinstance(primitive, Polygon):
        draw.polygon(primitive.points, fill=fill, outline=outline, width=width)
    else:
        raise TypeError(f"Unsupported primitive: {type(primitive).__name__}")


def render_raster(
    primitives: "list[Primitive]",
    width: int,
    height: int,
    color: str,
) -> Image.Image:
    """Rasterize a channel's primitives on a white canvas.

    Args:
        primitives: Shapes in drawing order
        width: Canvas width
        height: Canvas height
        color: Ink color (hex); malformed colors draw in black

    Returns:
        RGB PIL Image of size (width, height)
    """
    rgb = hex_to_rgb(color) or (0, 0, 0)
    image = Image.new("RGB", (width, height), (255, 255, 255))
    draw = ImageDraw.Draw(image)
    for primitive in primitives:
        draw_primitive(draw, primitive, rgb)
    return image


def composite_multiply(layers: "list[Image.Image]", size: "tuple[int, int]") -> Image.Image:
    """Multiply-blend channel rasters over white, in the given order.

    Args:
        layers: Channel rasters in compositing order
        size: (width, height) of the preview

    Returns:
        RGB preview image
    """
    result = Image.new("RGB", size, (255, 255, 255))
    for layer in layers:
        if layer.mode != "RGB":
            layer = layer.convert("RGB")
        result = ImageChops.multiply(result, layer)
    return result

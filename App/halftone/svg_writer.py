"""SVG serialization of drawing primitives."""

import math

import svg

from models import Circle, Line, Polygon, Polyline, Primitive, Rect

# AIDEV-NOTE: All numeric attributes are rounded to this many decimals
PRECISION = 2


def _num(value: float) -> float:
    # Ties round away from zero (0.125 -> 0.13)
    factor = 10**PRECISION
    magnitude = math.floor(abs(float(value)) * factor + 0.5) / factor
    return math.copysign(magnitude, value) if magnitude else 0.0


def _stroke_attrs(primitive: Primitive) -> dict:
    """Fill/stroke attributes for a primitive under its group defaults.

    The channel group sets fill and stroke color with a zero stroke width,
    so filled shapes need no attributes and outlined shapes only override
    fill and stroke width.
    """
    if primitive.filled and primitive.stroke_width is None:
        return {}
    attrs = {"stroke_width": _num(primitive.stroke_width or 0)}
    if not primitive.filled:
        attrs["fill"] = "none"
    return attrs


def primitive_to_element(primitive: Primitive) -> svg.Element:
    """Convert one primitive to its svg.py element."""
    if not isinstance(primitive, (Circle, Rect, Line, Polygon, Polyline)):
        raise TypeError(f"Unsupported primitive: {type(primitive).__name__}")
    attrs = _stroke_attrs(primitive)

    if isinstance(primitive, Circle):
        return svg.Circle(
            cx=_num(primitive.cx), cy=_num(primitive.cy), r=_num(primitive.r), **attrs
        )
    if isinstance(primitive, Rect):
        return svg.Rect(
            x=_num(primitive.x),
            y=_num(primitive.y),
            width=_num(primitive.width),
            height=_num(primitive.height),
            **attrs,
        )
    if isinstance(primitive, Line):
        return svg.Line(
            x1=_num(primitive.x1),
            y1=_num(primitive.y1),
            x2=_num(primitive.x2),
            y2=_num(primitive.y2),
            stroke_width=_num(primitive.stroke_width),
        )
    if isinstance(primitive, Polygon):
        points: list[float] = [_num(c) for point in primitive.points for c in point]
        return svg.Polygon(points=points, **attrs)  # type: ignore[arg-type]
    path_data: list[svg.PathData] = []
    for i, (x, y) in enumerate(primitive.points):
        if i == 0:
            path_data.append(svg.MoveTo(_num(x), _num(y)))
        else:
            path_data.append(svg.LineTo(_num(x), _num(y)))
    return svg.Path(d=path_data, fill="none", stroke_width=_num(primitive.stroke_width))


def _channel_group(primitives: "list[Primitive]", color: str, **attrs) -> svg.G:
    return svg.G(
        fill=color,
        stroke=color,
        stroke_width=0,
        elements=[primitive_to_element(p) for p in primitives],
        **attrs,
    )


def channel_to_svg(
    primitives: "list[Primitive]",
    width: int,
    height: int,
    color: str,
) -> str:
    """Build the vector document for one channel.

    Args:
        primitives: Primitives in drawing order
        width: Canvas width in pixels
        height: Canvas height in pixels
        color: Channel ink color (hex)

    Returns:
        SVG content as string: white background plus one group of shapes
    """
    document = svg.SVG(
        width=width,
        height=height,
        elements=[
            svg.Rect(width=width, height=height, fill="white"),
            _channel_group(primitives, color),
        ],
    )
    return document.as_str()


def combined_to_svg(
    channels: "list[tuple[list[Primitive], str]]",
    width: int,
    height: int,
    opacity: float = 0.8,
) -> str:
    """Build one document overlaying every channel with multiply blending.

    Args:
        channels: (primitives, color) per channel, in compositing order
        width: Canvas width in pixels
        height: Canvas height in pixels
        opacity: Group opacity applied to each channel

    Returns:
        SVG content as string
    """
    elements: list[svg.Element] = [svg.Rect(width=width, height=height, fill="white")]
    for primitives, color in channels:
        elements.append(
            _channel_group(
                primitives,
                color,
                style=f"mix-blend-mode: multiply; opacity: {opacity};",
            )
        )
    return svg.SVG(width=width, height=height, elements=elements).as_str()

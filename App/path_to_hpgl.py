"""Convert halftone primitives to HPGL plotter programs.

AIDEV-NOTE: This module generates the plotter-control language for pen
plotters. Coordinates are canvas pixels scaled by a fixed number of plotter
units per pixel. Circles use the plotter's native CI command; everything
else is drawn as pen-down polylines.
"""

import math

from models import (
    HPGL_UNITS_PER_PIXEL,
    Circle,
    Line,
    Polygon,
    Polyline,
    Primitive,
    Rect,
)


def _js_round(value: float) -> int:
    # Round half up (not Python's round-half-to-even)
    return math.floor(value + 0.5)


class PathToHPGLConverter:
    """Converts primitives to HPGL commands."""

    def __init__(self, units_per_pixel: float = HPGL_UNITS_PER_PIXEL):
        self.units_per_pixel = units_per_pixel

    def _point(self, x: float, y: float) -> str:
        return f"{_js_round(x * self.units_per_pixel)},{_js_round(y * self.units_per_pixel)}"

    def primitive_to_commands(self, primitive: Primitive) -> "list[str]":
        """Convert a single primitive to HPGL commands.

        Args:
            primitive: Shape in canvas pixel coordinates

        Returns:
            List of command strings (e.g., ["PU400,320;", "CI160;"])
        """
        if isinstance(primitive, Circle):
            radius = _js_round(primitive.r * self.units_per_pixel)
            return [f"PU{self._point(primitive.cx, primitive.cy)};", f"CI{radius};"]

        if isinstance(primitive, Line):
            return [
                f"PU{self._point(primitive.x1, primitive.y1)};",
                f"PD{self._point(primitive.x2, primitive.y2)};",
            ]

        if isinstance(primitive, Rect):
            x, y = primitive.x, primitive.y
            x2, y2 = x + primitive.width, y + primitive.height
            points = [(x, y), (x2, y), (x2, y2), (x, y2), (x, y)]
        elif isinstance(primitive, Polygon):
            points = list(primitive.points)
            if points:
                points.append(points[0])  # Close the outline
        elif isinstance(primitive, Polyline):
            points = list(primitive.points)
        else:
            raise TypeError(f"Unsupported primitive: {type(primitive).__name__}")

        if len(points) < 2:
            return []
        start = f"PU{self._point(*points[0])};"
        drawn = ",".join(self._point(x, y) for x, y in points[1:])
        return [start, f"PD{drawn};"]

    def primitives_to_commands(
        self,
        primitives: "list[Primitive]",
        pen: int = 1,
        add_header: bool = True,
        add_footer: bool = True,
    ) -> "list[str]":
        """Convert one channel's primitives to a command sequence.

        Args:
            primitives: Shapes in drawing order
            pen: Pen number selected before drawing
            add_header: Add initialize command at start
            add_footer: Lift the pen at the end

        Returns:
            Complete list of HPGL commands
        """
        commands = []
        if add_header:
            commands.append("IN;")
        commands.append(f"SP{pen};")

        for primitive in primitives:
            commands.extend(self.primitive_to_commands(primitive))

        if add_footer:
            commands.append("PU;")
        return commands

    def to_hpgl(self, primitives: "list[Primitive]", pen: int = 1) -> str:
        """Encode one channel as an HPGL program string."""
        return "".join(self.primitives_to_commands(primitives, pen=pen))

    def channels_to_hpgl(self, channels: "list[list[Primitive]]") -> str:
        """Encode several channels in one program, one pen per channel.

        AIDEV-NOTE: Pens are numbered from 1 in compositing order.
        """
        commands = ["IN;"]
        for pen, primitives in enumerate(channels, start=1):
            commands.extend(
                self.primitives_to_commands(
                    primitives, pen=pen, add_header=False, add_footer=False
                )
            )
        commands.append("PU;")
        return "".join(commands)

    def estimate_travel(self, commands: "list[str]") -> "tuple[float, float]":
        """Estimate pen travel of a command sequence.

        Args:
            commands: HPGL commands as produced by primitives_to_commands()

        Returns:
            Tuple of (pen-up travel, pen-down drawing) in plotter units
        """
        pen_up = 0.0
        pen_down = 0.0
        prev_x, prev_y = 0.0, 0.0

        for cmd in commands:
            op, args = cmd[:2], cmd[2:].rstrip(";")
            if op == "CI" and args:
                pen_down += 2 * math.pi * float(args)
                continue
            if op not in ("PU", "PD") or not args:
                continue

            values = [float(v) for v in args.split(",")]
            for i in range(0, len(values) - 1, 2):
                x, y = values[i], values[i + 1]
                distance = math.sqrt((x - prev_x) ** 2 + (y - prev_y) ** 2)
                if op == "PU":
                    pen_up += distance
                else:
                    pen_down += distance
                prev_x, prev_y = x, y

        return pen_up, pen_down

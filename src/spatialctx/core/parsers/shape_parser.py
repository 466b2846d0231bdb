"""
Reader and writer for the compact shape notation.

Supported forms (input is trimmed first):

    x y                         point
    minX minY maxX maxY         rectangle
    lat,lon                     point with x = lon, y = lat
    Circle(x y d=dist)          circle; the center may also be 'lat,lon'
                                and the distance 'dist', 'd=dist' or
                                'distance=dist'

Any other text starting with a letter is not recognized, and
read_standard_shape() returns None so callers can try another format.
The keyword and the distance keys are case-sensitive.
Shapes are built through the context so its normalization applies.
"""

import math
import re
from typing import TYPE_CHECKING, List, Optional

from spatialctx.core.errors import InvalidNumberError, InvalidShapeError
from spatialctx.models.shapes import Circle, Point, Rectangle, Shape

if TYPE_CHECKING:
    from spatialctx.core.context.spatial_context import SpatialContext

CIRCLE_PREFIX = "Circle("
DISTANCE_KEYS = ("d", "distance")

_WHITESPACE = re.compile(r"\s+")


def read_shape(ctx: "SpatialContext", text: str) -> Shape:
    """
    Parse shape notation, failing when the form is not recognized.

    Args:
        ctx: Context used to build the shape
        text: Shape text

    Returns:
        Parsed Point, Rectangle or Circle

    Raises:
        InvalidShapeError: If the text is malformed or not recognized
    """
    return ctx.read_shape(text)


def read_standard_shape(ctx: "SpatialContext", text: str) -> Optional[Shape]:
    """
    Parse shape notation.

    Args:
        ctx: Context used to build the shape
        text: Shape text

    Returns:
        Parsed shape, or None if the text starts with an unknown keyword

    Raises:
        InvalidShapeError: For malformed circle arguments or a wrong
            number of coordinates
        InvalidNumberError: For a token that is not a number
    """
    s = text.strip()
    if not s:
        raise InvalidNumberError("Empty shape text", shape_text=text)

    if s[0].isalpha():
        if s.startswith(CIRCLE_PREFIX) and s.endswith(")"):
            return _read_circle(ctx, s[len(CIRCLE_PREFIX):-1], text)
        return None

    if "," in s:
        return parse_lat_lon(ctx, s)

    tokens = _tokenize(s)
    if len(tokens) > 4:
        raise InvalidShapeError(f"Only 4 numbers supported (rect) but found more: {text}", shape_text=text)
    if len(tokens) == 4:
        p0, p1, p2, p3 = (_parse_number(t, text) for t in tokens)
        return ctx.make_rect(p0, p2, p1, p3)
    if len(tokens) == 2:
        return ctx.make_point(_parse_number(tokens[0], text), _parse_number(tokens[1], text))
    raise InvalidNumberError(f"Expected 2 or 4 numbers, found {len(tokens)}: {text}", shape_text=text)


def _read_circle(ctx: "SpatialContext", body: str, text: str) -> Circle:
    tokens = _tokenize(body)
    if not tokens:
        raise InvalidShapeError(f"Missing center point: {text}", shape_text=text)

    if "," in tokens[0]:
        center = parse_lat_lon(ctx, tokens[0])
        rest = tokens[1:]
    else:
        if len(tokens) < 2:
            raise InvalidNumberError(f"Expected x y center: {text}", shape_text=text)
        center = ctx.make_point(_parse_number(tokens[0], text), _parse_number(tokens[1], text))
        rest = tokens[2:]

    if not rest:
        raise InvalidShapeError(f"Missing distance: {text}", shape_text=text)

    arg = rest[0]
    key, sep, value = arg.partition("=")
    if sep:
        if key not in DISTANCE_KEYS:
            raise InvalidShapeError(f"Unknown arg: {arg} in {text}", shape_text=text)
        distance = _parse_number(value, text)
    else:
        distance = _parse_number(arg, text)

    if len(rest) > 1:
        raise InvalidShapeError(f"Extra arguments: {' '.join(rest[1:])} in {text}", shape_text=text)

    return ctx.make_circle(center, distance)


def parse_lat_lon(ctx: "SpatialContext", text: str) -> Point:
    """
    Parse 'lat,lon' into a point with x = lon, y = lat.

    Raises:
        InvalidShapeError: If there are not exactly two components or a
            coordinate is out of range
        InvalidNumberError: If a component is not a number
    """
    parts = text.strip().split(",")
    if len(parts) != 2:
        raise InvalidShapeError(f"Expected 'lat,lon': {text}", shape_text=text)

    lat = _parse_number(parts[0].strip(), text)
    lon = _parse_number(parts[1].strip(), text)
    if not -90 <= lat <= 90:
        raise InvalidShapeError(f"Latitude {lat} out of range [-90, 90]: {text}", shape_text=text)
    if not -180 <= lon <= 180:
        raise InvalidShapeError(f"Longitude {lon} out of range [-180, 180]: {text}", shape_text=text)

    return ctx.make_point(lon, lat)


def write_rect(rect: Rectangle) -> str:
    """Format as 'minX minY maxX maxY' with six fractional digits each."""
    return " ".join(_format_number(v) for v in (rect.min_x, rect.min_y, rect.max_x, rect.max_y))


def to_string(shape: Shape) -> str:
    """
    Format a shape in the notation read_standard_shape() accepts.

    Raises:
        TypeError: For an unsupported shape type
    """
    if isinstance(shape, Rectangle):
        return write_rect(shape)
    if isinstance(shape, Point):
        return f"{_format_number(shape.x)} {_format_number(shape.y)}"
    if isinstance(shape, Circle):
        center = shape.center
        return (
            f"Circle({_format_number(center.x)} {_format_number(center.y)} "
            f"d={_format_number(shape.radius)})"
        )
    raise TypeError(f"Unsupported shape: {type(shape).__name__}")


def _tokenize(text: str) -> List[str]:
    stripped = text.strip()
    return _WHITESPACE.split(stripped) if stripped else []


def _parse_number(token: str, text: str) -> float:
    # float() also accepts 'nan' and 'inf'; only finite values are coordinates
    try:
        value = float(token)
    except ValueError as e:
        raise InvalidNumberError(f"Not a number: {token!r} in {text}", token=token, shape_text=text) from e
    if not math.isfinite(value):
        raise InvalidNumberError(f"Not a finite number: {token!r} in {text}", token=token, shape_text=text)
    return value


def _format_number(value: float) -> str:
    # fixed '.' separator, no grouping
    return f"{value:.6f}"

"""
Shape value types produced by a SpatialContext.

Shapes are immutable and carry no reference to the context that built
them. Coordinates are in context units: degrees (x = longitude,
y = latitude) for geo contexts, plain planar units otherwise.
"""

from dataclasses import dataclass
from typing import Tuple, Union

from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import Polygon, box

from spatialctx.core.errors import InvalidShapeError


@dataclass(frozen=True)
class Point:
    """
    A 2-D point.

    Attributes:
        x: X coordinate (or longitude)
        y: Y coordinate (or latitude)
    """

    x: float
    y: float

    def to_tuple(self) -> Tuple[float, float]:
        """Convert to tuple (x, y)."""
        return (self.x, self.y)

    def to_shapely(self) -> ShapelyPoint:
        """Convert to a shapely Point."""
        return ShapelyPoint(self.x, self.y)


@dataclass(frozen=True)
class Rectangle:
    """
    Axis-aligned rectangle.

    Attributes:
        min_x: Minimum X coordinate (or longitude)
        max_x: Maximum X coordinate (or longitude)
        min_y: Minimum Y coordinate (or latitude)
        max_y: Maximum Y coordinate (or latitude)
    """

    min_x: float
    max_x: float
    min_y: float
    max_y: float

    def __post_init__(self) -> None:
        """Validate rectangle bounds."""
        if self.min_x > self.max_x:
            raise InvalidShapeError(f"min_x ({self.min_x}) must be <= max_x ({self.max_x})")
        if self.min_y > self.max_y:
            raise InvalidShapeError(f"min_y ({self.min_y}) must be <= max_y ({self.max_y})")

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Point:
        """Center point of the rectangle."""
        return Point((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def to_tuple(self) -> Tuple[float, float, float, float]:
        """Convert to tuple (min_x, min_y, max_x, max_y)."""
        return (self.min_x, self.min_y, self.max_x, self.max_y)

    def to_shapely(self) -> Polygon:
        """Convert to a shapely box polygon."""
        return box(self.min_x, self.min_y, self.max_x, self.max_y)


@dataclass(frozen=True)
class Circle:
    """
    A circle given by center and radius.

    The radius is in the distance units of the context that built it.

    Attributes:
        center: Center point
        radius: Radius, never negative
    """

    center: Point
    radius: float

    def __post_init__(self) -> None:
        if self.radius < 0:
            raise InvalidShapeError(f"Circle radius must be >= 0, got {self.radius}")

    def to_shapely(self) -> Polygon:
        """
        Approximate the circle as a planar shapely polygon.

        The radius is applied in coordinate units, so for geo contexts it
        must first be converted to degrees (calculator.distance_to_degrees).
        """
        return self.center.to_shapely().buffer(self.radius)


Shape = Union[Point, Rectangle, Circle]

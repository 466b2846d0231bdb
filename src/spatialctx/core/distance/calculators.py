"""
Distance calculators.

A DistanceCalculator measures the distance between two points and
converts between angular (degrees) and linear distance. The family is
closed: three spherical great-circle formulas sharing a radius, and a
planar Cartesian calculator with an optional squared mode. Calculators
are selected by name through make_calculator().

Spherical calculators expect points in degrees (x = longitude,
y = latitude) and return distances in the units of their radius.
"""

import logging
import math
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Optional

import numpy as np
from numpy.typing import ArrayLike, NDArray

from spatialctx.core.distance.utils import (
    degrees_to_dist,
    dist_haversine_rad,
    dist_law_of_cosines_rad,
    dist_to_degrees,
    dist_vincenty_rad,
    norm_lat_deg,
    norm_lon_deg,
    point_on_bearing_rad,
)
from spatialctx.core.errors import ConfigurationError
from spatialctx.models.shapes import Circle, Point, Rectangle, Shape

if TYPE_CHECKING:
    from spatialctx.core.context.spatial_context import SpatialContext

logger = logging.getLogger(__name__)


class DistanceCalculator(ABC):
    """
    Strategy interface for distance computation.

    Implementations are immutable and safe to share between threads.
    """

    name = "calculator"

    def distance(self, a: Point, b: Point) -> float:
        """
        Distance between two points; never negative.

        Args:
            a: First point
            b: Second point

        Returns:
            Distance in calculator units
        """
        return self.distance_xy(a, b.x, b.y)

    @abstractmethod
    def distance_xy(self, start: Point, x: float, y: float) -> float:
        """Distance from start to the coordinate (x, y)."""

    @abstractmethod
    def distance_batch(
        self, xs1: ArrayLike, ys1: ArrayLike, xs2: ArrayLike, ys2: ArrayLike
    ) -> NDArray[np.float64]:
        """
        Vectorized distance for arrays of coordinate pairs.

        Inputs follow numpy broadcasting, so one point against many works.
        """

    @abstractmethod
    def degrees_to_distance(self, degrees: float) -> float:
        """Convert an angular distance in degrees to a linear distance."""

    @abstractmethod
    def distance_to_degrees(self, distance: float) -> float:
        """Convert a linear distance to an angular distance in degrees."""

    @abstractmethod
    def area(self, shape: Shape) -> float:
        """Area of a circle or rectangle, in squared calculator units."""

    @abstractmethod
    def point_on_bearing(
        self,
        start: Point,
        distance: float,
        bearing_deg: float,
        ctx: Optional["SpatialContext"] = None,
    ) -> Point:
        """
        Point reached by travelling distance from start along a bearing.

        Args:
            start: Start point
            distance: Distance in calculator units
            bearing_deg: Bearing in degrees, clockwise from north (+y)
            ctx: Context used to build (and normalize) the result point

        Returns:
            Destination point
        """


class GeodesicSphereDistCalc(DistanceCalculator):
    """
    Base for great-circle calculators on a sphere of a given radius.

    Subclasses only supply the central-angle formula.
    """

    def __init__(self, radius: float):
        """
        Args:
            radius: Sphere radius; distances are returned in its units

        Raises:
            ValueError: If radius is not positive
        """
        if not radius > 0:
            raise ValueError(f"radius must be > 0, got {radius}")
        self.radius = float(radius)

    @staticmethod
    @abstractmethod
    def _central_angle(lat1, lon1, lat2, lon2):  # type: ignore[no-untyped-def]
        """Central angle in radians between two points given in radians."""

    def distance_xy(self, start: Point, x: float, y: float) -> float:
        if start.x == x and start.y == y:
            return 0.0
        angle = self._central_angle(
            math.radians(start.y), math.radians(start.x), math.radians(y), math.radians(x)
        )
        return float(angle) * self.radius

    def distance_batch(
        self, xs1: ArrayLike, ys1: ArrayLike, xs2: ArrayLike, ys2: ArrayLike
    ) -> NDArray[np.float64]:
        lat1 = np.radians(np.asarray(ys1, dtype=np.float64))
        lon1 = np.radians(np.asarray(xs1, dtype=np.float64))
        lat2 = np.radians(np.asarray(ys2, dtype=np.float64))
        lon2 = np.radians(np.asarray(xs2, dtype=np.float64))
        return np.asarray(self._central_angle(lat1, lon1, lat2, lon2) * self.radius)

    def degrees_to_distance(self, degrees: float) -> float:
        return degrees_to_dist(degrees, self.radius)

    def distance_to_degrees(self, distance: float) -> float:
        return dist_to_degrees(distance, self.radius)

    def area(self, shape: Shape) -> float:
        if isinstance(shape, Circle):
            # spherical cap
            angle = min(shape.radius / self.radius, math.pi)
            return 2 * math.pi * self.radius ** 2 * (1 - math.cos(angle))
        if isinstance(shape, Rectangle):
            lat_band = math.sin(math.radians(shape.max_y)) - math.sin(math.radians(shape.min_y))
            return self.radius ** 2 * lat_band * math.radians(shape.width)
        if isinstance(shape, Point):
            return 0.0
        raise TypeError(f"Unsupported shape: {type(shape).__name__}")

    def point_on_bearing(
        self,
        start: Point,
        distance: float,
        bearing_deg: float,
        ctx: Optional["SpatialContext"] = None,
    ) -> Point:
        if distance == 0:
            return start
        lat, lon = point_on_bearing_rad(
            math.radians(start.y),
            math.radians(start.x),
            distance / self.radius,
            math.radians(bearing_deg),
        )
        if ctx is not None:
            return ctx.make_point(math.degrees(lon), math.degrees(lat))
        return Point(norm_lon_deg(math.degrees(lon)), norm_lat_deg(math.degrees(lat)))

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.radius == other.radius  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.radius))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(radius={self.radius})"


class Haversine(GeodesicSphereDistCalc):
    """Great-circle distance by the haversine formula."""

    name = "haversine"
    _central_angle = staticmethod(dist_haversine_rad)


class LawOfCosines(GeodesicSphereDistCalc):
    """
    Great-circle distance by the spherical law of cosines.

    Precision degrades for separations of a few metres or less.
    """

    name = "lawOfCosines"
    _central_angle = staticmethod(dist_law_of_cosines_rad)


class Vincenty(GeodesicSphereDistCalc):
    """Great-circle distance by Vincenty's formula on a sphere."""

    name = "vincentySphere"
    _central_angle = staticmethod(dist_vincenty_rad)


class Cartesian(DistanceCalculator):
    """
    Planar Euclidean distance.

    With squared=True the calculator returns squared distances, which
    order points the same way but are not a metric; use it only to compare
    distances. Degree conversions square and root accordingly.
    """

    def __init__(self, squared: bool = False):
        self.squared = squared

    @property
    def name(self) -> str:  # type: ignore[override]
        return "cartesian^2" if self.squared else "cartesian"

    def distance_xy(self, start: Point, x: float, y: float) -> float:
        dx = start.x - x
        dy = start.y - y
        dist_sq = dx * dx + dy * dy
        return dist_sq if self.squared else math.sqrt(dist_sq)

    def distance_batch(
        self, xs1: ArrayLike, ys1: ArrayLike, xs2: ArrayLike, ys2: ArrayLike
    ) -> NDArray[np.float64]:
        dx = np.asarray(xs1, dtype=np.float64) - np.asarray(xs2, dtype=np.float64)
        dy = np.asarray(ys1, dtype=np.float64) - np.asarray(ys2, dtype=np.float64)
        dist_sq = dx * dx + dy * dy
        return dist_sq if self.squared else np.sqrt(dist_sq)

    def degrees_to_distance(self, degrees: float) -> float:
        return degrees * degrees if self.squared else degrees

    def distance_to_degrees(self, distance: float) -> float:
        return math.sqrt(distance) if self.squared else distance

    def area(self, shape: Shape) -> float:
        if isinstance(shape, Circle):
            return math.pi * shape.radius * shape.radius
        if isinstance(shape, Rectangle):
            return shape.width * shape.height
        if isinstance(shape, Point):
            return 0.0
        raise TypeError(f"Unsupported shape: {type(shape).__name__}")

    def point_on_bearing(
        self,
        start: Point,
        distance: float,
        bearing_deg: float,
        ctx: Optional["SpatialContext"] = None,
    ) -> Point:
        if distance == 0:
            return start
        bearing = math.radians(bearing_deg)
        x = start.x + math.sin(bearing) * distance
        y = start.y + math.cos(bearing) * distance
        if ctx is not None:
            return ctx.make_point(x, y)
        return Point(x, y)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Cartesian) and self.squared == other.squared

    def __hash__(self) -> int:
        return hash(("Cartesian", self.squared))

    def __repr__(self) -> str:
        return f"Cartesian(squared={self.squared})"


class CalculatorKind(str, Enum):
    """Configuration names of the distance calculators."""

    HAVERSINE = "haversine"
    LAW_OF_COSINES = "lawOfCosines"
    VINCENTY_SPHERE = "vincentySphere"
    CARTESIAN = "cartesian"
    CARTESIAN_SQUARED = "cartesian^2"

    @property
    def is_spherical(self) -> bool:
        return self in (
            CalculatorKind.HAVERSINE,
            CalculatorKind.LAW_OF_COSINES,
            CalculatorKind.VINCENTY_SPHERE,
        )

    @classmethod
    def find(cls, name: str) -> "CalculatorKind":
        """
        Resolve a calculator name, case-insensitively.

        Raises:
            ConfigurationError: If the name is not registered
        """
        for kind in cls:
            if kind.value.lower() == name.strip().lower():
                return kind
        raise ConfigurationError(
            f"Unknown calculator: {name}",
            config_key="distCalculator",
            suggestions=[f"Use one of: {', '.join(k.value for k in cls)}"],
        )


_SPHERICAL: Dict[CalculatorKind, Callable[[float], DistanceCalculator]] = {
    CalculatorKind.HAVERSINE: Haversine,
    CalculatorKind.LAW_OF_COSINES: LawOfCosines,
    CalculatorKind.VINCENTY_SPHERE: Vincenty,
}


def make_calculator(name: str, radius: Optional[float] = None) -> DistanceCalculator:
    """
    Build a calculator from its configuration name.

    Args:
        name: One of haversine, lawOfCosines, vincentySphere, cartesian,
            cartesian^2 (case-insensitive)
        radius: Sphere radius, required for the spherical calculators

    Returns:
        New DistanceCalculator

    Raises:
        ConfigurationError: For an unknown name, or a spherical name
            without a positive radius
    """
    kind = CalculatorKind.find(name)

    if kind == CalculatorKind.CARTESIAN:
        return Cartesian()
    if kind == CalculatorKind.CARTESIAN_SQUARED:
        return Cartesian(squared=True)

    if radius is None or not radius > 0:
        raise ConfigurationError(
            f"Calculator {kind.value} needs a positive sphere radius, got {radius}",
            config_key="distCalculator",
            suggestions=["Spherical calculators require a geo (CRS) context"],
        )

    logger.debug(f"Creating {kind.value} calculator with radius {radius}")
    return _SPHERICAL[kind](radius)

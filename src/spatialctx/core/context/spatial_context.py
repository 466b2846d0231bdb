"""
SpatialContext facade.

A SpatialContext binds either a CRS (geo mode) or explicit world bounds
(planar mode) to a distance calculator. It normalizes coordinates, builds
shapes and reads/writes the shape notation. Contexts are immutable and
safe to share between threads.
"""

import logging
from typing import Optional

from spatialctx.core.crs.factory import CRSFactory
from spatialctx.core.crs.projections import Projection
from spatialctx.core.distance.calculators import Cartesian, DistanceCalculator, Haversine
from spatialctx.core.distance.utils import norm_lat_deg, norm_lon_deg
from spatialctx.core.errors import InvalidShapeError
from spatialctx.core.parsers import shape_parser
from spatialctx.models.crs import CoordinateReferenceSystem
from spatialctx.models.shapes import Circle, Point, Rectangle, Shape
from spatialctx.models.units import DistanceUnit

logger = logging.getLogger(__name__)


class SpatialContext:
    """
    Immutable configuration for spatial operations.

    Exactly one of crs and world_bounds must be given. In geo mode the
    world bounds come from the projection and the default calculator is
    Haversine on the CRS equator radius, expressed in the context units.
    In planar mode the bounds are copied and the default calculator is
    Cartesian.

    Example:
        >>> ctx = SpatialContext.geo()
        >>> ctx.read_shape("Circle(45.0,-93.0 d=10)")
        Circle(center=Point(x=-93.0, y=45.0), radius=10.0)
    """

    __slots__ = ("_crs", "_calculator", "_world_bounds", "_units", "_max_circle_distance")

    def __init__(
        self,
        *,
        crs: Optional[CoordinateReferenceSystem] = None,
        world_bounds: Optional[Rectangle] = None,
        calculator: Optional[DistanceCalculator] = None,
        units: DistanceUnit = DistanceUnit.KILOMETRES,
    ):
        """
        Initialize context.

        Args:
            crs: CRS for geo mode
            world_bounds: Bounds for planar mode
            calculator: Distance calculator; defaults by mode
            units: Distance units of the context

        Raises:
            ValueError: If neither or both of crs and world_bounds are given
        """
        if (crs is None) == (world_bounds is None):
            raise ValueError("Exactly one of crs or world_bounds must be provided")

        self._units = units

        if crs is not None:
            projection = crs.projection
            self._world_bounds = Rectangle(
                min_x=projection.min_longitude_degrees,
                max_x=projection.max_longitude_degrees,
                min_y=projection.min_latitude_degrees,
                max_y=projection.max_latitude_degrees,
            )
            if calculator is None:
                calculator = Haversine(self._radius_in_units(projection))
            self._max_circle_distance: Optional[float] = calculator.degrees_to_distance(180)
        else:
            assert world_bounds is not None
            self._world_bounds = Rectangle(
                world_bounds.min_x, world_bounds.max_x, world_bounds.min_y, world_bounds.max_y
            )
            if calculator is None:
                calculator = Cartesian()
            self._max_circle_distance = None

        self._crs = crs
        self._calculator = calculator

        logger.debug(f"Created {self!r}")

    @classmethod
    def geo(
        cls,
        crs: Optional[CoordinateReferenceSystem] = None,
        calculator: Optional[DistanceCalculator] = None,
        units: DistanceUnit = DistanceUnit.KILOMETRES,
    ) -> "SpatialContext":
        """
        Create a geo-mode context; defaults to WGS84.

        Args:
            crs: CRS to bind, WGS84 when omitted
            calculator: Distance calculator
            units: Distance units

        Returns:
            New SpatialContext
        """
        if crs is None:
            crs = CRSFactory().create_from_name("WGS84")
        return cls(crs=crs, calculator=calculator, units=units)

    @classmethod
    def planar(
        cls,
        world_bounds: Rectangle,
        calculator: Optional[DistanceCalculator] = None,
        units: DistanceUnit = DistanceUnit.KILOMETRES,
    ) -> "SpatialContext":
        """Create a planar-mode context over world_bounds."""
        return cls(world_bounds=world_bounds, calculator=calculator, units=units)

    def _radius_in_units(self, projection: Projection) -> float:
        return self._units.from_meters(projection.equator_radius)

    @property
    def crs(self) -> Optional[CoordinateReferenceSystem]:
        return self._crs

    @property
    def calculator(self) -> DistanceCalculator:
        return self._calculator

    @property
    def world_bounds(self) -> Rectangle:
        return self._world_bounds

    @property
    def units(self) -> DistanceUnit:
        return self._units

    @property
    def max_circle_distance(self) -> Optional[float]:
        """Half a great circle in context units; None in planar mode."""
        return self._max_circle_distance

    @property
    def equator_radius(self) -> Optional[float]:
        """CRS equator radius in context units; None in planar mode."""
        if self._crs is None:
            return None
        return self._radius_in_units(self._crs.projection)

    def is_geo(self) -> bool:
        return self._crs is not None

    def norm_x(self, x: float) -> float:
        """Wrap x into [-180, 180] in geo mode; identity otherwise."""
        return norm_lon_deg(x) if self.is_geo() else x

    def norm_y(self, y: float) -> float:
        """Fold y into [-90, 90] in geo mode; identity otherwise."""
        return norm_lat_deg(y) if self.is_geo() else y

    def make_point(self, x: float, y: float) -> Point:
        return Point(self.norm_x(x), self.norm_y(y))

    def make_rect(self, min_x: float, max_x: float, min_y: float, max_y: float) -> Rectangle:
        """
        Create a rectangle with normalized coordinates.

        Raises:
            InvalidShapeError: If a min exceeds its max after normalization
        """
        return Rectangle(
            self.norm_x(min_x), self.norm_x(max_x), self.norm_y(min_y), self.norm_y(max_y)
        )

    def make_circle(self, center: Point, distance: float) -> Circle:
        return self.make_circle_xy(center.x, center.y, distance)

    def make_circle_xy(self, x: float, y: float, distance: float) -> Circle:
        """
        Create a circle around (x, y).

        Args:
            x: Center x (or longitude)
            y: Center y (or latitude)
            distance: Radius in context units

        Raises:
            InvalidShapeError: If distance is negative
        """
        return Circle(self.make_point(x, y), distance)

    def read_shape(self, text: str) -> Shape:
        """
        Parse shape notation into a shape built by this context.

        Raises:
            InvalidShapeError: If the text is malformed or not recognized
        """
        shape = shape_parser.read_standard_shape(self, text)
        if shape is None:
            raise InvalidShapeError(f"Unable to read: {text}", shape_text=text)
        return shape

    def read_lat_comma_lon_point(self, text: str) -> Point:
        """Parse 'lat,lon' into a point with x = lon, y = lat."""
        return shape_parser.parse_lat_lon(self, text)

    def write_rect(self, rect: Rectangle) -> str:
        return shape_parser.write_rect(rect)

    def to_string(self, shape: Shape) -> str:
        return shape_parser.to_string(shape)

    def __repr__(self) -> str:
        if self._crs is not None:
            return (
                f"SpatialContext(crs={self._crs.name!r}, calculator={self._calculator!r}, "
                f"world_bounds={self._world_bounds.to_tuple()}, units={self._units.value!r})"
            )
        return (
            f"SpatialContext(calculator={self._calculator!r}, "
            f"world_bounds={self._world_bounds.to_tuple()}, units={self._units.value!r})"
        )

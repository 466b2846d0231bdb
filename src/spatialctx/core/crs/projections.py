"""
Map projections.

Every projection implements the same minimal contract: forward and
inverse transforms between geographic coordinates (radians) and planar
coordinates on the unit ellipsoid, plus has_inverse() and
is_rectilinear(). New projection families plug in by subclassing
Projection and registering their +proj id; CRS and context code never
depend on a concrete family.

References
----------
- Snyder, J.P. (1987). Map Projections - A Working Manual. USGS Prof. Paper 1395.
- PROJ coordinate transformation software, https://proj.org
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple, Type

from spatialctx.core.crs.datum import WGS84, Ellipsoid
from spatialctx.core.errors import (
    SingularityError,
    UnsupportedOperationError,
    UnsupportedParameterError,
)
from spatialctx.models.units import DistanceUnit

logger = logging.getLogger(__name__)

HALF_PI = math.pi / 2
EPS10 = 1e-10


class Projection(ABC):
    """
    Abstract base class for map projections.

    A projection is configured through its constructor, then initialize()d
    exactly once; after that it is immutable and safe to share.

    Attributes:
        ellipsoid: Reference ellipsoid
        units: Units of projected coordinates
        min_longitude, max_longitude: Longitude bounds in radians
        min_latitude, max_latitude: Latitude bounds in radians
        projection_longitude: Central meridian (+lon_0) in radians
        scale_factor: Scale factor at the origin (+k_0)
        false_easting, false_northing: Offsets in metres (+x_0, +y_0)
        equator_radius: Semi-major axis in metres, set by initialize()
    """

    name = "Projection"

    def __init__(
        self,
        ellipsoid: Ellipsoid = WGS84,
        units: DistanceUnit = DistanceUnit.METRES,
        projection_longitude: float = 0.0,
        scale_factor: float = 1.0,
        false_easting: float = 0.0,
        false_northing: float = 0.0,
    ):
        self.ellipsoid = ellipsoid
        self.units = units
        self.projection_longitude = projection_longitude
        self.scale_factor = scale_factor
        self.false_easting = false_easting
        self.false_northing = false_northing

        self.min_longitude = -math.pi
        self.max_longitude = math.pi
        self.min_latitude = -HALF_PI
        self.max_latitude = HALF_PI

        self.equator_radius = ellipsoid.semi_major_axis
        self.total_scale = self.equator_radius * scale_factor

    def initialize(self) -> None:
        """
        Compute derived parameters and freeze the projection.

        Raises:
            RuntimeError: If the projection was already initialized
        """
        if self.is_initialized:
            raise RuntimeError(f"{self} projection is already initialized")

        self.equator_radius = self.ellipsoid.semi_major_axis
        self.total_scale = self.equator_radius * self.scale_factor
        object.__setattr__(self, "_initialized", True)

        logger.debug(
            f"Initialized {self} projection: ellipsoid={self.ellipsoid.name}, "
            f"units={self.units.value}, lat=[{self.min_latitude_degrees}, "
            f"{self.max_latitude_degrees}]"
        )

    @property
    def is_initialized(self) -> bool:
        return getattr(self, "_initialized", False)

    def __setattr__(self, name: str, value: Any) -> None:
        if self.is_initialized:
            raise AttributeError(f"{self} projection is immutable after initialize()")
        super().__setattr__(name, value)

    @abstractmethod
    def forward(self, longitude: float, latitude: float) -> Tuple[float, float]:
        """
        Transform geographic coordinates to planar coordinates.

        Args:
            longitude: Longitude in radians, relative to the central meridian
            latitude: Latitude in radians

        Returns:
            (x, y) on the unit ellipsoid
        """

    def inverse(self, x: float, y: float) -> Tuple[float, float]:
        """
        Transform planar coordinates back to (longitude, latitude) radians.

        Raises:
            UnsupportedOperationError: If the projection has no inverse
        """
        raise UnsupportedOperationError(
            f"{self} projection has no inverse", operation="inverse"
        )

    def has_inverse(self) -> bool:
        return False

    def is_rectilinear(self) -> bool:
        return False

    def project(self, longitude_deg: float, latitude_deg: float) -> Tuple[float, float]:
        """
        Project a point given in degrees into projection units.

        Applies the central meridian, then scales by a * k_0 and adds the
        false easting/northing. Angular units return degrees.

        Args:
            longitude_deg: Longitude in degrees
            latitude_deg: Latitude in degrees

        Returns:
            (x, y) in self.units
        """
        x, y = self.forward(
            math.radians(longitude_deg) - self.projection_longitude,
            math.radians(latitude_deg),
        )
        if self.units == DistanceUnit.DEGREES:
            return math.degrees(x), math.degrees(y)
        if self.units == DistanceUnit.RADIANS:
            return x, y
        return (
            self.units.from_meters(self.total_scale * x + self.false_easting),
            self.units.from_meters(self.total_scale * y + self.false_northing),
        )

    def inverse_project(self, x: float, y: float) -> Tuple[float, float]:
        """
        Inverse of project(): projection units back to (lon, lat) degrees.

        Raises:
            UnsupportedOperationError: If the projection has no inverse
        """
        if self.units == DistanceUnit.DEGREES:
            x, y = math.radians(x), math.radians(y)
        elif self.units != DistanceUnit.RADIANS:
            x = (self.units.to_meters(x) - self.false_easting) / self.total_scale
            y = (self.units.to_meters(y) - self.false_northing) / self.total_scale

        longitude, latitude = self.inverse(x, y)
        return math.degrees(longitude + self.projection_longitude), math.degrees(latitude)

    @property
    def min_longitude_degrees(self) -> float:
        return math.degrees(self.min_longitude)

    @property
    def max_longitude_degrees(self) -> float:
        return math.degrees(self.max_longitude)

    @property
    def min_latitude_degrees(self) -> float:
        return math.degrees(self.min_latitude)

    @property
    def max_latitude_degrees(self) -> float:
        return math.degrees(self.max_latitude)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(ellipsoid={self.ellipsoid.name!r}, "
            f"units={self.units.value!r})"
        )


class LongLatProjection(Projection):
    """Geographic coordinates used directly as planar coordinates."""

    name = "LongLat"

    def __init__(self, ellipsoid: Ellipsoid = WGS84, units: DistanceUnit = DistanceUnit.DEGREES, **kwargs: Any):
        super().__init__(ellipsoid, units, **kwargs)

    def forward(self, longitude: float, latitude: float) -> Tuple[float, float]:
        return longitude, latitude

    def inverse(self, x: float, y: float) -> Tuple[float, float]:
        return x, y

    def has_inverse(self) -> bool:
        return True

    def is_rectilinear(self) -> bool:
        return True


class LinearProjection(Projection):
    """Identity transform in both directions, with no unit scaling."""

    name = "Linear"

    def forward(self, longitude: float, latitude: float) -> Tuple[float, float]:
        return longitude, latitude

    def inverse(self, x: float, y: float) -> Tuple[float, float]:
        return x, y

    def project(self, longitude_deg: float, latitude_deg: float) -> Tuple[float, float]:
        return longitude_deg, latitude_deg

    def inverse_project(self, x: float, y: float) -> Tuple[float, float]:
        return x, y

    def has_inverse(self) -> bool:
        return True

    def is_rectilinear(self) -> bool:
        return True


class CentralCylindricalProjection(Projection):
    """
    Central cylindrical projection (+proj=cc).

    Projects from the Earth's center onto a tangent cylinder: x = λ,
    y = tan(φ). Distortion grows without bound towards the poles, so the
    usable latitude domain is clamped to ±80°.
    """

    name = "Central Cylindrical"

    def __init__(self, ellipsoid: Ellipsoid = WGS84, units: DistanceUnit = DistanceUnit.METRES, **kwargs: Any):
        super().__init__(ellipsoid, units, **kwargs)
        self.min_latitude = math.radians(-80)
        self.max_latitude = math.radians(80)

    def forward(self, longitude: float, latitude: float) -> Tuple[float, float]:
        """
        Raises:
            SingularityError: At the poles, where tan(φ) diverges, or
                outside the clamped latitude domain
        """
        if abs(abs(latitude) - HALF_PI) <= EPS10:
            raise SingularityError(
                "Central cylindrical projection is undefined at the poles",
                projection=self.name,
                longitude=longitude,
                latitude=latitude,
            )
        if not self.min_latitude <= latitude <= self.max_latitude:
            raise SingularityError(
                f"Latitude {math.degrees(latitude):.6f} is outside the projection "
                f"domain [{self.min_latitude_degrees:.0f}, {self.max_latitude_degrees:.0f}]",
                projection=self.name,
                longitude=longitude,
                latitude=latitude,
            )
        return longitude, math.tan(latitude)

    def inverse(self, x: float, y: float) -> Tuple[float, float]:
        return x, math.atan(y)

    def has_inverse(self) -> bool:
        return True

    def is_rectilinear(self) -> bool:
        return True


PROJECTIONS: Dict[str, Type[Projection]] = {
    "longlat": LongLatProjection,
    "latlong": LongLatProjection,
    "lonlat": LongLatProjection,
    "latlon": LongLatProjection,
    "linear": LinearProjection,
    "cc": CentralCylindricalProjection,
}


def projection_class(proj_id: str) -> Type[Projection]:
    """
    Resolve a +proj id to its projection class.

    Raises:
        UnsupportedParameterError: If the id is not registered
    """
    cls = PROJECTIONS.get(proj_id.lower())
    if cls is None:
        raise UnsupportedParameterError(
            f"Unsupported projection: {proj_id}", parameter="proj", value=proj_id
        )
    return cls

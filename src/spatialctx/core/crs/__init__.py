"""
Coordinate reference systems.

This module provides ellipsoids and datums, the projection family, and
CRS construction from names and proj-style parameter strings.
"""

from spatialctx.core.crs.datum import (
    Datum,
    Ellipsoid,
    WGS84,
    WGS84_DATUM,
)
from spatialctx.core.crs.projections import (
    CentralCylindricalProjection,
    LinearProjection,
    LongLatProjection,
    Projection,
    projection_class,
)
from spatialctx.core.crs.factory import CRSFactory, PROJ4_WGS84, parse_parameters
from spatialctx.core.crs.cache import CRSCache

__all__ = [
    # Datum
    "Datum",
    "Ellipsoid",
    "WGS84",
    "WGS84_DATUM",
    # Projections
    "Projection",
    "LongLatProjection",
    "LinearProjection",
    "CentralCylindricalProjection",
    "projection_class",
    # Factory
    "CRSFactory",
    "CRSCache",
    "PROJ4_WGS84",
    "parse_parameters",
]

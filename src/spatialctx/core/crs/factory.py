"""
CRS construction from registered names and proj-style parameter strings.

A parameter string is a whitespace-separated list of +key=value tokens,
for example "+title=WGS84 +proj=longlat +datum=WGS84 +units=degrees".
Only the subset needed by the registered projection families is
interpreted; other keys are accepted and ignored.
"""

import logging
import math
import warnings
from typing import Dict, Optional

from pyproj import CRS
from pyproj.exceptions import CRSError

from spatialctx.core.crs.datum import WGS84_DATUM, Datum, Ellipsoid
from spatialctx.core.crs.projections import LongLatProjection, projection_class
from spatialctx.core.errors import (
    ConfigurationError,
    InvalidValueError,
    UnknownAuthorityCodeError,
    UnsupportedParameterError,
)
from spatialctx.models.crs import CoordinateReferenceSystem
from spatialctx.models.units import DistanceUnit

logger = logging.getLogger(__name__)

PROJ4_WGS84 = "+title=WGS84 +proj=longlat +datum=WGS84 +units=degrees"

REGISTERED_CRS: Dict[str, str] = {
    "WGS84": PROJ4_WGS84,
    "EPSG:4326": "+title=WGS 84 +proj=longlat +datum=WGS84 +units=degrees",
    "CRS:84": "+title=WGS 84 (CRS84) +proj=longlat +datum=WGS84 +units=degrees",
    "LINEAR": "+title=Linear +proj=linear +datum=WGS84 +units=m",
}

_INTERPRETED_KEYS = {"title", "proj", "datum", "ellps", "units", "lon_0", "k", "k_0", "x_0", "y_0"}


def parse_parameters(param_string: str) -> Dict[str, Optional[str]]:
    """
    Split a proj-style parameter string into a key/value mapping.

    Bare flags such as +no_defs map to None.

    Args:
        param_string: String of +key=value tokens

    Returns:
        Mapping of parameter names to raw values

    Raises:
        InvalidValueError: If a token does not start with '+'
    """
    params: Dict[str, Optional[str]] = {}
    for token in param_string.split():
        if not token.startswith("+") or len(token) == 1:
            raise InvalidValueError(f"Malformed parameter token: {token}", value=token)
        key, sep, value = token[1:].partition("=")
        params[key] = value if sep else None
    return params


class CRSFactory:
    """
    Builds CoordinateReferenceSystem instances.

    Stateless; every call constructs a new CRS. Put a CRSCache in front of
    it when the same names are requested repeatedly.
    """

    def create_from_name(self, name: str) -> CoordinateReferenceSystem:
        """
        Create a CRS from a registered name or an authority code.

        Registered names (WGS84, EPSG:4326, CRS:84, LINEAR) are resolved
        locally; anything else is looked up in the PROJ database through
        pyproj and its proj definition parsed.

        Args:
            name: CRS name such as 'WGS84' or 'EPSG:4269'

        Returns:
            New CoordinateReferenceSystem

        Raises:
            UnknownAuthorityCodeError: If the name cannot be resolved
            UnsupportedParameterError: If the resolved definition uses a
                projection, datum or unit this package does not implement
        """
        params = REGISTERED_CRS.get(name.strip().upper())
        if params is not None:
            return self.create_from_parameters(name, params)

        try:
            with warnings.catch_warnings():
                # to_proj4() warns that PROJ strings are lossy
                warnings.simplefilter("ignore", UserWarning)
                params = CRS.from_user_input(name).to_proj4()
        except CRSError as e:
            raise UnknownAuthorityCodeError(f"Unknown CRS name: {name}", code=name) from e

        if not params:
            raise UnknownAuthorityCodeError(
                f"CRS {name} has no proj representation", code=name
            )

        logger.debug(f"Resolved CRS {name} through PROJ database: {params}")
        return self.create_from_parameters(name, params)

    def create_from_parameters(
        self, name: Optional[str], param_string: str
    ) -> CoordinateReferenceSystem:
        """
        Create a CRS from a proj-style parameter string.

        Args:
            name: CRS name; falls back to +title when None
            param_string: String of +key=value tokens

        Returns:
            New CoordinateReferenceSystem with an initialized projection

        Raises:
            UnsupportedParameterError: For a missing +proj or unknown
                +proj, +datum, +ellps or +units values
            InvalidValueError: For malformed or non-numeric values
        """
        params = parse_parameters(param_string)

        proj_id = params.get("proj")
        if not proj_id:
            raise UnsupportedParameterError(
                f"Missing +proj in parameters: {param_string}", parameter="proj"
            )
        projection_cls = projection_class(proj_id)

        if params.get("datum"):
            datum = Datum.from_code(params["datum"])
        elif params.get("ellps"):
            datum = Datum.for_ellipsoid(Ellipsoid.from_code(params["ellps"]))
        else:
            datum = WGS84_DATUM

        if params.get("units"):
            units = self._parse_units(params["units"])
        elif issubclass(projection_cls, LongLatProjection):
            units = DistanceUnit.DEGREES
        else:
            units = DistanceUnit.METRES

        scale_factor = self._parse_float(params, "k_0", self._parse_float(params, "k", 1.0))
        projection = projection_cls(
            ellipsoid=datum.ellipsoid,
            units=units,
            projection_longitude=math.radians(self._parse_float(params, "lon_0", 0.0)),
            scale_factor=scale_factor,
            false_easting=self._parse_float(params, "x_0", 0.0),
            false_northing=self._parse_float(params, "y_0", 0.0),
        )
        projection.initialize()

        ignored = sorted(set(params) - _INTERPRETED_KEYS)
        if ignored:
            logger.debug(f"Ignoring proj parameters {ignored}")

        crs_name = name or params.get("title") or proj_id
        logger.debug(f"Created CRS {crs_name}: {projection}, datum={datum.code}")

        return CoordinateReferenceSystem(
            name=crs_name,
            datum=datum,
            projection=projection,
            parameters=param_string.strip(),
        )

    @staticmethod
    def _parse_units(value: str) -> DistanceUnit:
        try:
            return DistanceUnit.find(value)
        except ConfigurationError as e:
            raise UnsupportedParameterError(
                f"Unsupported units: {value}", parameter="units", value=value
            ) from e

    @staticmethod
    def _parse_float(params: Dict[str, Optional[str]], key: str, default: float) -> float:
        raw = params.get(key)
        if raw is None:
            return default
        try:
            return float(raw)
        except ValueError as e:
            raise InvalidValueError(
                f"Parameter +{key} must be numeric, got {raw!r}", parameter=key, value=raw
            ) from e

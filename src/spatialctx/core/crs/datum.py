"""
Reference ellipsoids and geodetic datums.

Ellipsoids are immutable and shared by reference. Named constants cover
the common cases; any other ellipsoid code known to PROJ can be resolved
through pyproj.
"""

import math
from dataclasses import dataclass
from typing import Dict

from pyproj import get_ellps_map

from spatialctx.core.errors import UnsupportedParameterError


@dataclass(frozen=True)
class Ellipsoid:
    """
    Parameters defining a reference ellipsoid.

    Attributes:
        semi_major_axis: Equatorial radius in metres
        eccentricity_squared: First eccentricity squared, e² = (a² - b²) / a²
        name: Identifier for the ellipsoid
    """

    semi_major_axis: float
    eccentricity_squared: float
    name: str

    def __post_init__(self) -> None:
        if not self.semi_major_axis > 0:
            raise ValueError(f"semi_major_axis must be > 0, got {self.semi_major_axis}")
        if not 0 <= self.eccentricity_squared < 1:
            raise ValueError(
                f"eccentricity_squared must be in [0, 1), got {self.eccentricity_squared}"
            )

    @property
    def semi_minor_axis(self) -> float:
        """Polar radius in metres."""
        return self.semi_major_axis * math.sqrt(1 - self.eccentricity_squared)

    @property
    def flattening(self) -> float:
        """f = (a - b) / a"""
        return 1 - math.sqrt(1 - self.eccentricity_squared)

    @property
    def eccentricity(self) -> float:
        return math.sqrt(self.eccentricity_squared)

    @property
    def is_sphere(self) -> bool:
        return self.eccentricity_squared == 0

    @classmethod
    def from_flattening(cls, a: float, inverse_flattening: float, name: str) -> "Ellipsoid":
        """Build an ellipsoid from a and 1/f."""
        f = 1.0 / inverse_flattening
        return cls(a, f * (2 - f), name)

    @classmethod
    def from_axes(cls, a: float, b: float, name: str) -> "Ellipsoid":
        """Build an ellipsoid from its semi-major and semi-minor axes."""
        return cls(a, (a * a - b * b) / (a * a), name)

    @classmethod
    def from_code(cls, code: str) -> "Ellipsoid":
        """
        Resolve a PROJ ellipsoid code (the +ellps value).

        Args:
            code: Ellipsoid code such as 'WGS84', 'GRS80' or 'clrk66'

        Returns:
            Ellipsoid instance, shared for the named constants

        Raises:
            UnsupportedParameterError: If PROJ does not know the code
        """
        known = _NAMED_ELLIPSOIDS.get(code)
        if known is not None:
            return known

        params = get_ellps_map().get(code)
        if params is None:
            raise UnsupportedParameterError(
                f"Unknown ellipsoid: {code}", parameter="ellps", value=code
            )

        a = float(params["a"])
        if "rf" in params:
            return cls.from_flattening(a, float(params["rf"]), code)
        return cls.from_axes(a, float(params.get("b", a)), code)


WGS84 = Ellipsoid.from_flattening(6_378_137.0, 298.257223563, "WGS84")
GRS80 = Ellipsoid.from_flattening(6_378_137.0, 298.257222101, "GRS80")
CLARKE_1866 = Ellipsoid.from_axes(6_378_206.4, 6_356_583.8, "clrk66")
BESSEL = Ellipsoid.from_flattening(6_377_397.155, 299.1528128, "bessel")
SPHERE = Ellipsoid(6_370_997.0, 0.0, "sphere")

_NAMED_ELLIPSOIDS: Dict[str, Ellipsoid] = {
    "WGS84": WGS84,
    "GRS80": GRS80,
    "clrk66": CLARKE_1866,
    "bessel": BESSEL,
    "sphere": SPHERE,
}


@dataclass(frozen=True)
class Datum:
    """
    A geodetic datum, identified by its +datum code.

    Attributes:
        code: PROJ datum identifier
        name: Human-readable name
        ellipsoid: Reference ellipsoid of the datum
    """

    code: str
    name: str
    ellipsoid: Ellipsoid

    @classmethod
    def from_code(cls, code: str) -> "Datum":
        """
        Look up a datum by its +datum id, case-insensitively.

        Raises:
            UnsupportedParameterError: If the datum is not registered
        """
        datum = _DATUMS.get(code.lower())
        if datum is None:
            raise UnsupportedParameterError(
                f"Unknown datum: {code}", parameter="datum", value=code
            )
        return datum

    @classmethod
    def for_ellipsoid(cls, ellipsoid: Ellipsoid) -> "Datum":
        """Anonymous datum carrying only an ellipsoid (+ellps without +datum)."""
        return cls(code=ellipsoid.name, name=ellipsoid.name, ellipsoid=ellipsoid)


WGS84_DATUM = Datum("WGS84", "WGS84", WGS84)
GGRS87_DATUM = Datum("GGRS87", "Greek Geodetic Reference System 1987", GRS80)
NAD83_DATUM = Datum("NAD83", "North American Datum 1983", GRS80)
NAD27_DATUM = Datum("NAD27", "North American Datum 1927", CLARKE_1866)
POTSDAM_DATUM = Datum("potsdam", "Potsdam Rauenberg 1950 DHDN", BESSEL)

_DATUMS: Dict[str, Datum] = {
    datum.code.lower(): datum
    for datum in (WGS84_DATUM, GGRS87_DATUM, NAD83_DATUM, NAD27_DATUM, POTSDAM_DATUM)
}

"""
Distance units used by projections and spatial contexts.
"""

import math
from enum import Enum
from typing import Dict

from spatialctx.core.errors import ConfigurationError

# Mean metres per degree of arc on the WGS84 equator.
METERS_PER_DEGREE = 2 * math.pi * 6_378_137.0 / 360.0


class DistanceUnit(str, Enum):
    """Units for distance measurements."""

    DEGREES = "degrees"
    RADIANS = "radians"
    METRES = "metres"
    KILOMETRES = "kilometres"
    MILES = "miles"
    FEET = "feet"
    NAUTICAL_MILES = "nautical_miles"

    @property
    def is_angular(self) -> bool:
        """True for units measuring arc rather than length."""
        return self in (DistanceUnit.DEGREES, DistanceUnit.RADIANS)

    @property
    def meters_per_unit(self) -> float:
        """Length of one unit in metres."""
        return _METERS_PER_UNIT[self]

    def from_meters(self, value: float) -> float:
        """Convert a length in metres into this unit."""
        return value / self.meters_per_unit

    def to_meters(self, value: float) -> float:
        """Convert a value in this unit into metres."""
        return value * self.meters_per_unit

    @classmethod
    def find(cls, name: str) -> "DistanceUnit":
        """
        Look up a unit by name or abbreviation, case-insensitively.

        Args:
            name: Unit name such as 'km', 'kilometers' or 'degrees'

        Returns:
            Matching DistanceUnit

        Raises:
            ConfigurationError: If the name is not a known unit
        """
        unit = _ALIASES.get(name.strip().lower())
        if unit is None:
            raise ConfigurationError(f"Unknown units: {name}", config_key="units")
        return unit


_METERS_PER_UNIT: Dict[DistanceUnit, float] = {
    DistanceUnit.DEGREES: METERS_PER_DEGREE,
    DistanceUnit.RADIANS: METERS_PER_DEGREE * 180.0 / math.pi,
    DistanceUnit.METRES: 1.0,
    DistanceUnit.KILOMETRES: 1000.0,
    DistanceUnit.MILES: 1609.344,
    DistanceUnit.FEET: 0.3048,
    DistanceUnit.NAUTICAL_MILES: 1852.0,
}

_ALIASES: Dict[str, DistanceUnit] = {
    "degrees": DistanceUnit.DEGREES,
    "degree": DistanceUnit.DEGREES,
    "deg": DistanceUnit.DEGREES,
    "radians": DistanceUnit.RADIANS,
    "radian": DistanceUnit.RADIANS,
    "rad": DistanceUnit.RADIANS,
    "metres": DistanceUnit.METRES,
    "meters": DistanceUnit.METRES,
    "metre": DistanceUnit.METRES,
    "meter": DistanceUnit.METRES,
    "m": DistanceUnit.METRES,
    "kilometres": DistanceUnit.KILOMETRES,
    "kilometers": DistanceUnit.KILOMETRES,
    "kilometre": DistanceUnit.KILOMETRES,
    "kilometer": DistanceUnit.KILOMETRES,
    "km": DistanceUnit.KILOMETRES,
    "miles": DistanceUnit.MILES,
    "mile": DistanceUnit.MILES,
    "mi": DistanceUnit.MILES,
    "feet": DistanceUnit.FEET,
    "foot": DistanceUnit.FEET,
    "ft": DistanceUnit.FEET,
    "nautical_miles": DistanceUnit.NAUTICAL_MILES,
    "nautical miles": DistanceUnit.NAUTICAL_MILES,
    "nmi": DistanceUnit.NAUTICAL_MILES,
    "kmi": DistanceUnit.NAUTICAL_MILES,
}

"""
Distance calculators and spherical distance helpers.
"""

from spatialctx.core.distance.calculators import (
    CalculatorKind,
    Cartesian,
    DistanceCalculator,
    Haversine,
    LawOfCosines,
    Vincenty,
    make_calculator,
)

__all__ = [
    "CalculatorKind",
    "Cartesian",
    "DistanceCalculator",
    "Haversine",
    "LawOfCosines",
    "Vincenty",
    "make_calculator",
]

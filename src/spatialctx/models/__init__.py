"""
Data models for shapes, units and coordinate reference systems.
"""

from .units import DistanceUnit
from .shapes import Circle, Point, Rectangle, Shape
from .crs import CoordinateReferenceSystem

__all__ = [
    "DistanceUnit",
    "Circle",
    "Point",
    "Rectangle",
    "Shape",
    "CoordinateReferenceSystem",
]

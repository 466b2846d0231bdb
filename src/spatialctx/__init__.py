"""
spatialctx - spatial context, CRS and distance toolkit.

This package provides coordinate reference systems with a minimal
projection family, interchangeable spherical and planar distance
calculators, and a reader/writer for a compact shape notation.
"""

__version__ = "0.1.0"

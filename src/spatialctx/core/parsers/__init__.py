"""
Shape notation parsing and formatting.
"""

from .shape_parser import parse_lat_lon, read_shape, read_standard_shape, to_string, write_rect

__all__ = ["parse_lat_lon", "read_shape", "read_standard_shape", "to_string", "write_rect"]

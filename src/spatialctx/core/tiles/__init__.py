"""
TMS tile profile helpers.
"""

from .global_geodetic import GlobalGeodetic

__all__ = ["GlobalGeodetic"]

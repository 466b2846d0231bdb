"""
TMS Global Geodetic tile profile (EPSG:4326, "unprojected").

Longitude and latitude are used directly as planar coordinates and only
scaled into a pixel pyramid. The top level holds two tiles side by side,
so the area [-180, -90, 180, 90] maps to 512x256 pixels at zoom 0.
Pixel and tile origins are bottom-left, as in TMS.

Example:
    >>> tiles = GlobalGeodetic()
    >>> tiles.lonlat_to_tile(-122.4192, 37.7793, zoom=3)
    (2, 5)
"""

import math
from typing import Tuple

from spatialctx.models.shapes import Rectangle


class GlobalGeodetic:
    """Coordinate conversions for TMS global geodetic tiles."""

    def __init__(self, tile_size: int = 256):
        """
        Args:
            tile_size: Tile edge length in pixels

        Raises:
            ValueError: If tile_size is not positive
        """
        if tile_size <= 0:
            raise ValueError(f"tile_size must be > 0, got {tile_size}")
        self.tile_size = tile_size

    def resolution(self, zoom: int) -> float:
        """Degrees per pixel at the given zoom level."""
        return 180.0 / self.tile_size / 2 ** zoom

    def lonlat_to_pixels(self, lon: float, lat: float, zoom: int) -> Tuple[int, int]:
        """Pixel coordinates of a lon/lat position in the pyramid."""
        res = self.resolution(zoom)
        px = int((180 + lon) / res)
        py = int((90 + lat) / res)
        return px, py

    def pixels_to_tile(self, px: int, py: int) -> Tuple[int, int]:
        """Tile covering the given pixel; pixel 0 falls in tile 0."""
        tx = max(0, int(math.ceil(px / float(self.tile_size)) - 1))
        ty = max(0, int(math.ceil(py / float(self.tile_size)) - 1))
        return tx, ty

    def lonlat_to_tile(self, lon: float, lat: float, zoom: int) -> Tuple[int, int]:
        """Tile covering a lon/lat position."""
        px, py = self.lonlat_to_pixels(lon, lat, zoom)
        return self.pixels_to_tile(px, py)

    def tile_bounds(self, tx: int, ty: int, zoom: int) -> Rectangle:
        """
        Bounds of a tile in degrees.

        Args:
            tx: Tile column
            ty: Tile row, counted from the bottom
            zoom: Zoom level

        Returns:
            Rectangle in lon/lat degrees
        """
        span = self.tile_size * self.resolution(zoom)
        return Rectangle(
            min_x=tx * span - 180,
            max_x=(tx + 1) * span - 180,
            min_y=ty * span - 90,
            max_y=(ty + 1) * span - 90,
        )

    def __repr__(self) -> str:
        return f"GlobalGeodetic(tile_size={self.tile_size})"

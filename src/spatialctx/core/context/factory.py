"""
Build SpatialContext instances from configuration.

Configuration comes from Settings (environment variables with the
SPATIALCTX_ prefix, or a .env file) or from a plain mapping using the
keys units, worldBounds, crs and distCalculator.
"""

import logging
import sys
from typing import Mapping, Optional

from spatialctx.core.config import Settings, settings as default_settings
from spatialctx.core.context.spatial_context import SpatialContext
from spatialctx.core.crs.cache import CRSCache
from spatialctx.core.distance.calculators import DistanceCalculator, make_calculator
from spatialctx.core.errors import ConfigurationError, InvalidShapeError
from spatialctx.models.shapes import Rectangle
from spatialctx.models.units import DistanceUnit

logger = logging.getLogger(__name__)

# mapping key -> Settings field
CONFIG_KEYS = {
    "units": "units",
    "worldBounds": "world_bounds",
    "crs": "crs",
    "distCalculator": "dist_calculator",
}

MAX_CARTESIAN_BOUNDS = Rectangle(
    min_x=-sys.float_info.max,
    max_x=sys.float_info.max,
    min_y=-sys.float_info.max,
    max_y=sys.float_info.max,
)


class SpatialContextFactory:
    """
    Creates spatial contexts from Settings.

    A worldBounds value selects planar mode; otherwise the context is geo
    with the named CRS. CRS lookups go through a CRSCache, so factories
    sharing a cache share CRS instances.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        crs_cache: Optional[CRSCache] = None,
    ) -> None:
        """
        Initialize factory.

        Args:
            settings: Settings to read, the module-level settings by default
            crs_cache: Cache for CRS lookups; a private one by default
        """
        self.settings = settings or default_settings
        self.crs_cache = crs_cache or CRSCache()

    def new_spatial_context(self) -> SpatialContext:
        """
        Create a context from the factory settings.

        Returns:
            New SpatialContext

        Raises:
            ConfigurationError: For unknown units, CRS or calculator names,
                or a worldBounds value that is not a rectangle
        """
        units = DistanceUnit.find(self.settings.units)

        if self.settings.is_planar:
            world_bounds = self._read_world_bounds(self.settings.world_bounds or "")
            calculator = self._make_calculator(None)
            logger.info(f"Creating planar spatial context, bounds={world_bounds.to_tuple()}")
            return SpatialContext(world_bounds=world_bounds, calculator=calculator, units=units)

        crs = self.crs_cache.create_from_name(self.settings.crs)
        radius = units.from_meters(crs.projection.equator_radius)
        calculator = self._make_calculator(radius)
        logger.info(f"Creating geo spatial context, crs={crs.name}")
        return SpatialContext(crs=crs, calculator=calculator, units=units)

    def make_spatial_context(self, args: Mapping[str, str]) -> SpatialContext:
        """
        Create a context from configuration keys, over the factory settings.

        Args:
            args: Mapping with any of units, worldBounds, crs, distCalculator;
                other keys are ignored

        Returns:
            New SpatialContext

        Raises:
            ConfigurationError: As for new_spatial_context()
        """
        overrides = {field: args[key] for key, field in CONFIG_KEYS.items() if key in args}
        ignored = sorted(set(args) - set(CONFIG_KEYS))
        if ignored:
            logger.debug(f"Ignoring unknown spatial context keys {ignored}")

        merged = Settings(**{**self.settings.model_dump(), **overrides})
        return SpatialContextFactory(merged, self.crs_cache).new_spatial_context()

    def max_cartesian_context(self) -> SpatialContext:
        """Planar context whose bounds span the full float range."""
        units = DistanceUnit.find(self.settings.units)
        return SpatialContext(
            world_bounds=MAX_CARTESIAN_BOUNDS,
            calculator=self._make_calculator(None),
            units=units,
        )

    def _make_calculator(self, radius: Optional[float]) -> Optional[DistanceCalculator]:
        name = self.settings.dist_calculator
        if not name:
            return None
        return make_calculator(name, radius)

    @staticmethod
    def _read_world_bounds(text: str) -> Rectangle:
        reader = SpatialContext(world_bounds=MAX_CARTESIAN_BOUNDS)
        try:
            shape = reader.read_shape(text)
        except InvalidShapeError as e:
            raise ConfigurationError(
                f"Invalid worldBounds: {text}",
                config_key="worldBounds",
                details={"reason": e.message},
            ) from e

        if not isinstance(shape, Rectangle):
            raise ConfigurationError(
                f"worldBounds must be a rectangle, got {type(shape).__name__}: {text}",
                config_key="worldBounds",
                suggestions=["Use 'minX minY maxX maxY'"],
            )
        return shape

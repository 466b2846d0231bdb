"""
Spatial context facade and its configuration-driven factory.
"""

from spatialctx.core.context.spatial_context import SpatialContext
from spatialctx.core.context.factory import SpatialContextFactory

__all__ = ["SpatialContext", "SpatialContextFactory"]

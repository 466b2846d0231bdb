"""
Data model for a Coordinate Reference System (CRS).
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from spatialctx.core.crs.datum import Datum
    from spatialctx.core.crs.projections import Projection


@dataclass(frozen=True)
class CoordinateReferenceSystem:
    """
    A named bundle of datum and projection.

    Instances are immutable and may be shared between contexts and cached
    by name. Equality compares name, datum and parameter string; the
    projection is fully determined by those.

    Attributes:
        name: Unique name, also the cache key
        datum: Geodetic datum
        projection: Initialized projection
        parameters: proj-style parameter string the CRS was built from
    """

    name: str
    datum: "Datum"
    projection: "Projection" = field(compare=False)
    parameters: str = ""

    @property
    def is_geographic(self) -> bool:
        """True when coordinates are longitude/latitude degrees."""
        return self.projection.units.is_angular

    def __str__(self) -> str:
        return self.name

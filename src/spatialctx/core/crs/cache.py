"""
Name-keyed CRS cache.

CRSCache memoizes CRSFactory.create_from_name(). It has no size bound
and no invalidation: CRS objects are immutable and a process only ever
sees a handful of distinct names.

The map is not locked. Two threads asking for the same unseen name may
both construct the CRS; the later insert wins. The instances are
equivalent, so the duplicate work is the only cost.
"""

import logging
from typing import Dict, Optional

from spatialctx.core.crs.factory import CRSFactory
from spatialctx.models.crs import CoordinateReferenceSystem

logger = logging.getLogger(__name__)


class CRSCache:
    """
    Memoizing front for CRSFactory.

    Create one per process (or per test) and pass it to whatever needs
    CRS lookups.
    """

    def __init__(self, factory: Optional[CRSFactory] = None) -> None:
        """
        Initialize cache.

        Args:
            factory: Factory used on cache misses
        """
        self._factory = factory or CRSFactory()
        self._cache: Dict[str, CoordinateReferenceSystem] = {}

    def create_from_name(self, name: str) -> CoordinateReferenceSystem:
        """
        Return the CRS for name, constructing it on first use.

        Raises:
            ConfigurationError: Propagated from the factory; failures are
                not cached
        """
        crs = self._cache.get(name)
        if crs is not None:
            logger.debug(f"CRS cache hit: {name}")
            return crs

        logger.debug(f"CRS cache miss: {name}")
        crs = self._factory.create_from_name(name)
        self._cache[name] = crs
        return crs

    def clear(self) -> None:
        self._cache.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._cache

    def __len__(self) -> int:
        return len(self._cache)

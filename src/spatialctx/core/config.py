"""
Configuration settings for spatialctx.
"""

from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Spatial context settings with environment variable support.

    Attributes:
        units: Distance unit name used by the context (default kilometres)
        world_bounds: Rectangle literal; when set the context is planar
        crs: CRS name used in geo mode
        dist_calculator: Distance calculator name, default depends on mode
        log_level: Log level name for setup_logging
        environment: Deployment environment
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="SPATIALCTX_",
    )

    units: str = "kilometres"
    world_bounds: Optional[str] = None
    crs: str = "WGS84"
    dist_calculator: Optional[str] = None

    log_level: str = "INFO"

    environment: Literal["development", "staging", "production"] = "development"

    @property
    def is_planar(self) -> bool:
        """Whether these settings select a planar (non-geo) context."""
        return bool(self.world_bounds and self.world_bounds.strip())


# Global settings instance
settings = Settings()

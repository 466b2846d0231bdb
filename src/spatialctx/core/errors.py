"""
Custom exception hierarchy for spatialctx.

This module defines the exception taxonomy shared by the CRS, distance,
context and parser packages. Every error is raised synchronously at the
point of detection and propagates to the immediate caller.
"""

from typing import Any, Dict, List, Optional


class SpatialError(Exception):
    """
    Base exception for all spatialctx errors.

    Attributes:
        error_code: String identifier for the error type
        message: User-friendly error message
        details: Technical details for logging/debugging
        suggestions: Optional list of resolution suggestions
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize SpatialError.

        Args:
            message: User-friendly error message
            error_code: String identifier for the error type
            details: Technical details for logging
            suggestions: List of suggestions for resolution
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.suggestions = suggestions or []

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary.

        Returns:
            Dictionary representation of the error
        """
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "suggestions": self.suggestions,
        }

    def __str__(self) -> str:
        return f"{self.error_code}: {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"error_code='{self.error_code}', "
            f"message='{self.message}')"
        )


class ConfigurationError(SpatialError):
    """
    Raised when a spatial context or CRS cannot be configured.

    Used for unknown calculator names, unknown units and invalid world
    bounds. Fatal to the construction attempt that raised it.
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        error_code: str = "CONFIGURATION_ERROR",
    ):
        """
        Initialize ConfigurationError.

        Args:
            message: User-friendly error message
            config_key: Configuration key that is invalid
            details: Technical details about the configuration error
            suggestions: List of suggestions for resolution
            error_code: Overridden by subclasses
        """
        error_details = details or {}
        if config_key:
            error_details["config_key"] = config_key

        super().__init__(
            message=message,
            error_code=error_code,
            details=error_details,
            suggestions=suggestions or ["Check the configuration value and try again"],
        )


class UnsupportedParameterError(ConfigurationError):
    """Raised for a proj parameter value this package does not implement."""

    def __init__(
        self,
        message: str,
        parameter: Optional[str] = None,
        value: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        error_details = details or {}
        if parameter:
            error_details["parameter"] = parameter
        if value is not None:
            error_details["value"] = value

        super().__init__(
            message=message,
            details=error_details,
            suggestions=[
                "Supported projections: longlat, linear, cc",
                "Check the +datum, +ellps and +units values",
            ],
            error_code="UNSUPPORTED_PARAMETER",
        )


class UnknownAuthorityCodeError(ConfigurationError):
    """Raised when a CRS name cannot be resolved to a definition."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(
            message=message,
            details={"code": code} if code else None,
            suggestions=["Use a registered name such as WGS84 or an EPSG code"],
            error_code="UNKNOWN_AUTHORITY_CODE",
        )


class InvalidValueError(ConfigurationError):
    """Raised when a proj parameter has a malformed value."""

    def __init__(self, message: str, parameter: Optional[str] = None, value: Optional[str] = None):
        details: Dict[str, Any] = {}
        if parameter:
            details["parameter"] = parameter
        if value is not None:
            details["value"] = value

        super().__init__(
            message=message,
            details=details,
            error_code="INVALID_VALUE",
        )


class InvalidShapeError(SpatialError):
    """
    Raised when shape text is malformed or a shape invariant is violated.

    Always recoverable by the caller; parsing never mutates context state.
    """

    def __init__(
        self,
        message: str,
        shape_text: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        error_code: str = "INVALID_SHAPE",
    ):
        """
        Initialize InvalidShapeError.

        Args:
            message: User-friendly error message
            shape_text: The input text being parsed, if any
            details: Technical details about the failure
            error_code: Overridden by subclasses
        """
        error_details = details or {}
        if shape_text is not None:
            error_details["shape_text"] = shape_text

        super().__init__(
            message=message,
            error_code=error_code,
            details=error_details,
            suggestions=[
                "Points: 'X Y' or 'LAT,LON'",
                "Rectangles: 'MINX MINY MAXX MAXY'",
                "Circles: 'Circle(X Y d=DIST)'",
            ],
        )


class InvalidNumberError(InvalidShapeError):
    """Raised when a numeric token in shape text cannot be parsed."""

    def __init__(self, message: str, token: Optional[str] = None, shape_text: Optional[str] = None):
        super().__init__(
            message=message,
            shape_text=shape_text,
            details={"token": token} if token is not None else None,
            error_code="INVALID_NUMBER",
        )


class SingularityError(SpatialError):
    """
    Raised when a forward transform is requested at an undefined point.

    The projection stays usable for subsequent valid calls.
    """

    def __init__(
        self,
        message: str,
        projection: Optional[str] = None,
        longitude: Optional[float] = None,
        latitude: Optional[float] = None,
    ):
        details: Dict[str, Any] = {}
        if projection:
            details["projection"] = projection
        if longitude is not None:
            details["longitude"] = longitude
        if latitude is not None:
            details["latitude"] = latitude

        super().__init__(
            message=message,
            error_code="PROJECTION_SINGULARITY",
            details=details,
            suggestions=["Keep latitudes inside the projection bounds"],
        )


class UnsupportedOperationError(SpatialError):
    """Raised when an operation is not available for a variant."""

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(
            message=message,
            error_code="UNSUPPORTED_OPERATION",
            details={"operation": operation} if operation else None,
        )

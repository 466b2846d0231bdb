"""
Tests for CRS construction from names and parameter strings.
"""

import pytest

from spatialctx.core.crs.datum import GRS80, NAD83_DATUM, WGS84_DATUM
from spatialctx.core.crs.factory import PROJ4_WGS84, CRSFactory, parse_parameters
from spatialctx.core.crs.projections import (
    CentralCylindricalProjection,
    LinearProjection,
    LongLatProjection,
)
from spatialctx.core.errors import (
    ConfigurationError,
    InvalidValueError,
    UnknownAuthorityCodeError,
    UnsupportedParameterError,
)
from spatialctx.models.units import DistanceUnit


@pytest.fixture
def factory() -> CRSFactory:
    """CRS factory instance."""
    return CRSFactory()


class TestParseParameters:
    """Tests for proj parameter string parsing."""

    def test_key_values(self) -> None:
        """Test +key=value tokens are split."""
        params = parse_parameters(PROJ4_WGS84)

        assert params == {
            "title": "WGS84",
            "proj": "longlat",
            "datum": "WGS84",
            "units": "degrees",
        }

    def test_bare_flags(self) -> None:
        """Test flags without a value map to None."""
        params = parse_parameters("+proj=longlat +no_defs")
        assert params["no_defs"] is None

    def test_malformed_token(self) -> None:
        """Test tokens without a leading '+' are rejected."""
        with pytest.raises(InvalidValueError):
            parse_parameters("+proj=longlat datum=WGS84")


class TestCreateFromName:
    """Tests for CRSFactory.create_from_name."""

    def test_wgs84(self, factory: CRSFactory) -> None:
        """Test the built-in WGS84 definition."""
        crs = factory.create_from_name("WGS84")

        assert crs.name == "WGS84"
        assert crs.datum == WGS84_DATUM
        assert isinstance(crs.projection, LongLatProjection)
        assert crs.projection.units == DistanceUnit.DEGREES
        assert crs.projection.equator_radius == 6378137.0
        assert crs.projection.is_initialized

    @pytest.mark.parametrize("name", ["EPSG:4326", "epsg:4326", "CRS:84"])
    def test_registered_aliases(self, factory: CRSFactory, name: str) -> None:
        """Test registered names resolve without PROJ lookups."""
        crs = factory.create_from_name(name)

        assert crs.name == name
        assert isinstance(crs.projection, LongLatProjection)

    def test_linear(self, factory: CRSFactory) -> None:
        """Test the built-in LINEAR definition."""
        crs = factory.create_from_name("LINEAR")

        assert isinstance(crs.projection, LinearProjection)
        assert crs.projection.units == DistanceUnit.METRES

    def test_authority_code(self, factory: CRSFactory) -> None:
        """Test an EPSG code resolved through the PROJ database."""
        crs = factory.create_from_name("EPSG:4269")

        assert crs.name == "EPSG:4269"
        assert crs.datum == NAD83_DATUM
        assert isinstance(crs.projection, LongLatProjection)
        assert crs.projection.equator_radius == 6378137.0

    def test_unsupported_projection_code(self, factory: CRSFactory) -> None:
        """Test a known code with an unimplemented projection."""
        with pytest.raises(UnsupportedParameterError) as exc_info:
            factory.create_from_name("EPSG:32631")

        assert exc_info.value.details["parameter"] == "proj"

    def test_unknown_name(self, factory: CRSFactory) -> None:
        """Test unresolvable names raise UnknownAuthorityCodeError."""
        with pytest.raises(UnknownAuthorityCodeError) as exc_info:
            factory.create_from_name("NOT-A-CRS:123")

        assert isinstance(exc_info.value, ConfigurationError)
        assert exc_info.value.details["code"] == "NOT-A-CRS:123"


class TestCreateFromParameters:
    """Tests for CRSFactory.create_from_parameters."""

    def test_title_fallback(self, factory: CRSFactory) -> None:
        """Test the name falls back to +title."""
        crs = factory.create_from_parameters(None, "+title=MyCRS +proj=longlat")
        assert crs.name == "MyCRS"

    def test_defaults(self, factory: CRSFactory) -> None:
        """Test default datum and units."""
        geo = factory.create_from_parameters("geo", "+proj=longlat")
        planar = factory.create_from_parameters("planar", "+proj=cc")

        assert geo.datum == WGS84_DATUM
        assert geo.projection.units == DistanceUnit.DEGREES
        assert planar.projection.units == DistanceUnit.METRES
        assert isinstance(planar.projection, CentralCylindricalProjection)

    def test_ellps(self, factory: CRSFactory) -> None:
        """Test +ellps without +datum."""
        crs = factory.create_from_parameters("grs", "+proj=longlat +ellps=GRS80")

        assert crs.datum.ellipsoid is GRS80
        assert crs.datum.code == "GRS80"

    def test_ellps_from_proj_database(self, factory: CRSFactory) -> None:
        """Test ellipsoid codes not named locally come from pyproj."""
        crs = factory.create_from_parameters("intl", "+proj=longlat +ellps=intl")
        assert crs.projection.equator_radius == 6378388.0

    def test_numeric_parameters(self, factory: CRSFactory) -> None:
        """Test lon_0, k_0 and false easting/northing."""
        crs = factory.create_from_parameters(
            "cc", "+proj=cc +lon_0=90 +k_0=0.5 +x_0=1000 +y_0=-1000 +units=km"
        )
        projection = crs.projection

        assert projection.projection_longitude == pytest.approx(1.5707963267948966)
        assert projection.scale_factor == 0.5
        assert projection.false_easting == 1000.0
        assert projection.false_northing == -1000.0
        assert projection.units == DistanceUnit.KILOMETRES
        assert projection.total_scale == pytest.approx(6378137.0 * 0.5)

    def test_ignored_keys(self, factory: CRSFactory) -> None:
        """Test unknown keys are accepted."""
        crs = factory.create_from_parameters("x", "+proj=longlat +no_defs +type=crs")
        assert crs.parameters == "+proj=longlat +no_defs +type=crs"

    def test_missing_proj(self, factory: CRSFactory) -> None:
        """Test +proj is required."""
        with pytest.raises(UnsupportedParameterError):
            factory.create_from_parameters("x", "+datum=WGS84")

    @pytest.mark.parametrize(
        "params,parameter",
        [
            ("+proj=merc", "proj"),
            ("+proj=longlat +datum=XYZ", "datum"),
            ("+proj=longlat +ellps=nope", "ellps"),
            ("+proj=longlat +units=furlongs", "units"),
        ],
    )
    def test_unsupported_values(self, factory: CRSFactory, params: str, parameter: str) -> None:
        """Test unknown +proj, +datum, +ellps and +units values."""
        with pytest.raises(UnsupportedParameterError) as exc_info:
            factory.create_from_parameters("x", params)

        assert exc_info.value.details["parameter"] == parameter

    def test_non_numeric_value(self, factory: CRSFactory) -> None:
        """Test non-numeric numeric parameters."""
        with pytest.raises(InvalidValueError) as exc_info:
            factory.create_from_parameters("x", "+proj=cc +k_0=big")

        assert exc_info.value.details == {"parameter": "k_0", "value": "big"}

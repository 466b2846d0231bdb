"""
Tests for the projection family.
"""

import math
from typing import Tuple

import pytest

from spatialctx.core.crs.datum import SPHERE, WGS84
from spatialctx.core.crs.projections import (
    CentralCylindricalProjection,
    LinearProjection,
    LongLatProjection,
    Projection,
    projection_class,
)
from spatialctx.core.errors import (
    SingularityError,
    UnsupportedOperationError,
    UnsupportedParameterError,
)
from spatialctx.models.units import DistanceUnit


class ForwardOnlyProjection(Projection):
    """Projection without an inverse, for exercising the base class."""

    name = "Forward Only"

    def forward(self, longitude: float, latitude: float) -> Tuple[float, float]:
        return longitude * 2, latitude * 2


@pytest.fixture
def cc() -> CentralCylindricalProjection:
    """Initialized central cylindrical projection."""
    projection = CentralCylindricalProjection()
    projection.initialize()
    return projection


class TestProjectionBase:
    """Tests for the Projection base class."""

    def test_default_bounds(self) -> None:
        """Test default bounds cover the globe."""
        projection = LongLatProjection()

        assert projection.min_longitude == -math.pi
        assert projection.max_longitude == math.pi
        assert projection.min_latitude_degrees == pytest.approx(-90.0)
        assert projection.max_latitude_degrees == pytest.approx(90.0)

    def test_equator_radius(self) -> None:
        """Test equator radius comes from the ellipsoid."""
        projection = LinearProjection(ellipsoid=SPHERE)
        projection.initialize()

        assert projection.equator_radius == 6370997.0
        assert projection.total_scale == 6370997.0

    def test_immutable_after_initialize(self) -> None:
        """Test attributes cannot change once initialized."""
        projection = LongLatProjection()
        projection.units = DistanceUnit.RADIANS
        projection.initialize()

        with pytest.raises(AttributeError):
            projection.units = DistanceUnit.DEGREES
        assert projection.units == DistanceUnit.RADIANS

    def test_initialize_twice(self) -> None:
        """Test initialize() may only run once."""
        projection = LongLatProjection()
        projection.initialize()

        with pytest.raises(RuntimeError):
            projection.initialize()

    def test_inverse_not_supported(self) -> None:
        """Test non-invertible projections reject inverse()."""
        projection = ForwardOnlyProjection()
        projection.initialize()

        assert projection.has_inverse() is False
        assert projection.is_rectilinear() is False
        assert projection.forward(0.1, 0.2) == (0.2, 0.4)
        with pytest.raises(UnsupportedOperationError):
            projection.inverse(0.2, 0.4)
        with pytest.raises(UnsupportedOperationError):
            projection.inverse_project(1000.0, 1000.0)


class TestLongLatProjection:
    """Tests for LongLatProjection."""

    def test_identity(self) -> None:
        """Test forward and inverse are identity."""
        projection = LongLatProjection()
        projection.initialize()

        assert projection.forward(0.3, -0.2) == (0.3, -0.2)
        assert projection.inverse(0.3, -0.2) == (0.3, -0.2)
        assert projection.has_inverse() is True
        assert projection.is_rectilinear() is True

    def test_project_degrees(self) -> None:
        """Test project() round trips degrees."""
        projection = LongLatProjection()
        projection.initialize()

        x, y = projection.project(-93.0, 45.0)
        assert x == pytest.approx(-93.0)
        assert y == pytest.approx(45.0)
        assert projection.inverse_project(x, y) == pytest.approx((-93.0, 45.0))


class TestLinearProjection:
    """Tests for LinearProjection."""

    def test_identity_both_ways(self) -> None:
        """Test values pass through unchanged."""
        projection = LinearProjection()
        projection.initialize()

        assert projection.forward(123.0, 456.0) == (123.0, 456.0)
        assert projection.inverse(123.0, 456.0) == (123.0, 456.0)
        assert projection.project(123.0, 456.0) == (123.0, 456.0)
        assert projection.inverse_project(123.0, 456.0) == (123.0, 456.0)
        assert projection.has_inverse() is True
        assert projection.is_rectilinear() is True


class TestCentralCylindricalProjection:
    """Tests for CentralCylindricalProjection."""

    def test_latitude_clamped(self, cc: CentralCylindricalProjection) -> None:
        """Test latitude domain is clamped to +/-80 degrees."""
        assert cc.min_latitude_degrees == pytest.approx(-80.0)
        assert cc.max_latitude_degrees == pytest.approx(80.0)
        assert cc.max_longitude_degrees == pytest.approx(180.0)

    def test_forward(self, cc: CentralCylindricalProjection) -> None:
        """Test x = lon, y = tan(lat)."""
        x, y = cc.forward(math.radians(10), math.radians(45))

        assert x == pytest.approx(math.radians(10))
        assert y == pytest.approx(1.0)

    def test_round_trip(self, cc: CentralCylindricalProjection) -> None:
        """Test forward then inverse recovers the latitude."""
        lon, lat = math.radians(10), math.radians(45)
        x, y = cc.forward(lon, lat)
        lon2, lat2 = cc.inverse(x, y)

        assert lon2 == pytest.approx(lon)
        assert abs(lat2 - lat) < 1e-6

    def test_singularity_near_pole(self, cc: CentralCylindricalProjection) -> None:
        """Test forward fails just below the pole."""
        with pytest.raises(SingularityError):
            cc.forward(0.0, math.radians(89.9999999))

    @pytest.mark.parametrize("latitude", [math.pi / 2, -math.pi / 2])
    def test_singularity_at_poles(self, cc: CentralCylindricalProjection, latitude: float) -> None:
        """Test forward fails at both poles."""
        with pytest.raises(SingularityError) as exc_info:
            cc.forward(0.0, latitude)

        assert exc_info.value.details["latitude"] == latitude

    def test_usable_after_singularity(self, cc: CentralCylindricalProjection) -> None:
        """Test a failed call does not break later calls."""
        with pytest.raises(SingularityError):
            cc.forward(0.0, math.pi / 2)

        assert cc.forward(0.0, 0.0) == (0.0, 0.0)

    def test_project_metres(self) -> None:
        """Test project() scales by a * k_0 and applies false easting."""
        projection = CentralCylindricalProjection(
            ellipsoid=WGS84, units=DistanceUnit.KILOMETRES, false_easting=500000.0
        )
        projection.initialize()

        x, y = projection.project(0.0, 45.0)
        assert x == pytest.approx(500.0)
        assert y == pytest.approx(6378.137)

        lon, lat = projection.inverse_project(x, y)
        assert lon == pytest.approx(0.0, abs=1e-9)
        assert lat == pytest.approx(45.0)


class TestProjectionRegistry:
    """Tests for +proj id lookup."""

    @pytest.mark.parametrize(
        "proj_id,expected",
        [
            ("longlat", LongLatProjection),
            ("latlong", LongLatProjection),
            ("LINEAR", LinearProjection),
            ("cc", CentralCylindricalProjection),
        ],
    )
    def test_lookup(self, proj_id: str, expected: type) -> None:
        """Test registered ids resolve to their classes."""
        assert projection_class(proj_id) is expected

    def test_unknown(self) -> None:
        """Test unknown ids raise UnsupportedParameterError."""
        with pytest.raises(UnsupportedParameterError):
            projection_class("utm")

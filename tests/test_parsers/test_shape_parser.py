"""
Tests for the shape notation reader and writer.
"""

import pytest

from spatialctx.core.context.spatial_context import SpatialContext
from spatialctx.core.errors import InvalidNumberError, InvalidShapeError
from spatialctx.core.parsers.shape_parser import (
    parse_lat_lon,
    read_shape,
    read_standard_shape,
    to_string,
    write_rect,
)
from spatialctx.models.shapes import Circle, Point, Rectangle


@pytest.fixture(scope="module")
def ctx() -> SpatialContext:
    """WGS84 geo context."""
    return SpatialContext.geo()


@pytest.fixture(scope="module")
def planar() -> SpatialContext:
    """Planar context."""
    return SpatialContext.planar(Rectangle(-1000, 1000, -1000, 1000))


class TestPointsAndRectangles:
    """Tests for the numeric forms."""

    def test_point(self, ctx: SpatialContext) -> None:
        """Test two numbers give a point."""
        assert read_standard_shape(ctx, "1.23 4.56") == Point(1.23, 4.56)

    def test_point_extra_whitespace(self, ctx: SpatialContext) -> None:
        """Test surrounding and repeated whitespace is ignored."""
        assert read_standard_shape(ctx, "  1.23 \t 4.56\n") == Point(1.23, 4.56)

    def test_rectangle(self, ctx: SpatialContext) -> None:
        """Test four numbers are minX minY maxX maxY."""
        rect = read_standard_shape(ctx, "1.23 4.56 7.87 9.01")
        assert rect == Rectangle(min_x=1.23, max_x=7.87, min_y=4.56, max_y=9.01)

    def test_point_normalized(self, ctx: SpatialContext) -> None:
        """Test shapes are built through the context."""
        assert read_standard_shape(ctx, "190 10") == Point(-170.0, 10.0)

    def test_too_many_numbers(self, ctx: SpatialContext) -> None:
        """Test more than four numbers fails."""
        with pytest.raises(InvalidShapeError) as exc_info:
            read_standard_shape(ctx, "1 2 3 4 5")

        assert "Only 4 numbers" in exc_info.value.message
        assert not isinstance(exc_info.value, InvalidNumberError)

    @pytest.mark.parametrize("text", ["1", "1 2 3", ""])
    def test_wrong_count(self, ctx: SpatialContext, text: str) -> None:
        """Test fewer than two, or three, numbers fails to parse."""
        with pytest.raises(InvalidNumberError):
            read_standard_shape(ctx, text)

    @pytest.mark.parametrize("text", ["1 x", "1.2.3 4", "-inf 4"])
    def test_not_a_number(self, ctx: SpatialContext, text: str) -> None:
        """Test non-numeric tokens fail with InvalidNumberError."""
        with pytest.raises(InvalidNumberError):
            read_standard_shape(ctx, text)


class TestLatLon:
    """Tests for the lat,lon form."""

    def test_lat_lon(self, ctx: SpatialContext) -> None:
        """Test latitude becomes y and longitude x."""
        assert read_standard_shape(ctx, "45.0,-93.0") == Point(x=-93.0, y=45.0)

    def test_spaces(self, ctx: SpatialContext) -> None:
        """Test spaces around the comma."""
        assert parse_lat_lon(ctx, " 45.0 , -93.0 ") == Point(-93.0, 45.0)

    @pytest.mark.parametrize("text", ["1,2,3", "45.0"])
    def test_component_count(self, ctx: SpatialContext, text: str) -> None:
        """Test exactly two components are required."""
        with pytest.raises(InvalidShapeError):
            parse_lat_lon(ctx, text)

    @pytest.mark.parametrize("text", ["91,0", "-90.5,0", "0,180.1", "0,-181"])
    def test_out_of_range(self, ctx: SpatialContext, text: str) -> None:
        """Test latitude and longitude ranges are enforced."""
        with pytest.raises(InvalidShapeError):
            read_standard_shape(ctx, text)

    def test_non_numeric(self, ctx: SpatialContext) -> None:
        """Test non-numeric components."""
        with pytest.raises(InvalidNumberError):
            read_standard_shape(ctx, "45.0,east")


class TestCircle:
    """Tests for the Circle keyword form."""

    @pytest.mark.parametrize(
        "text",
        [
            "Circle(1.23 4.56 d=5)",
            "Circle(1.23 4.56 distance=5)",
            "Circle(1.23 4.56 5)",
            "Circle( 1.23  4.56  d=5 )",
        ],
    )
    def test_distance_forms(self, ctx: SpatialContext, text: str) -> None:
        """Test every accepted distance form."""
        assert read_standard_shape(ctx, text) == Circle(Point(1.23, 4.56), 5.0)

    @pytest.mark.parametrize("arg", ["D=5", "Distance=5", "DISTANCE=5"])
    def test_distance_key_case(self, ctx: SpatialContext, arg: str) -> None:
        """Test distance keys only match in lower case."""
        with pytest.raises(InvalidShapeError) as exc_info:
            read_standard_shape(ctx, f"Circle(1.23 4.56 {arg})")

        assert "Unknown arg" in exc_info.value.message

    @pytest.mark.parametrize("text", ["circle(1.23 4.56 d=5)", "CIRCLE(1 2 d=3)"])
    def test_keyword_case(self, ctx: SpatialContext, text: str) -> None:
        """Test other spellings of the keyword are not recognized."""
        assert read_standard_shape(ctx, text) is None

    def test_lat_lon_center(self, ctx: SpatialContext) -> None:
        """Test a lat,lon center."""
        circle = read_standard_shape(ctx, "Circle(45.0,-93.0 d=10)")
        assert circle == Circle(Point(-93.0, 45.0), 10.0)

    def test_unknown_arg(self, ctx: SpatialContext) -> None:
        """Test unknown distance keys."""
        with pytest.raises(InvalidShapeError) as exc_info:
            read_standard_shape(ctx, "Circle(1.23 4.56 bogus=5)")

        assert "Unknown arg" in exc_info.value.message

    def test_extra_arguments(self, ctx: SpatialContext) -> None:
        """Test tokens after the distance."""
        with pytest.raises(InvalidShapeError) as exc_info:
            read_standard_shape(ctx, "Circle(1.23 4.56 d=5 extra)")

        assert "Extra arguments" in exc_info.value.message

    def test_missing_distance(self, ctx: SpatialContext) -> None:
        """Test a center without a distance."""
        with pytest.raises(InvalidShapeError) as exc_info:
            read_standard_shape(ctx, "Circle(1.23 4.56)")

        assert "Missing distance" in exc_info.value.message

    def test_bad_distance(self, ctx: SpatialContext) -> None:
        """Test non-numeric distances."""
        with pytest.raises(InvalidNumberError):
            read_standard_shape(ctx, "Circle(1.23 4.56 d=far)")

    def test_negative_distance(self, ctx: SpatialContext) -> None:
        """Test negative distances violate the circle invariant."""
        with pytest.raises(InvalidShapeError):
            read_standard_shape(ctx, "Circle(1.23 4.56 d=-5)")


class TestUnrecognized:
    """Tests for forms the reader does not handle."""

    @pytest.mark.parametrize("text", ["POINT(1 2)", "ENVELOPE(1, 2, 3, 4)", "Circle(1 2 d=3"])
    def test_returns_none(self, ctx: SpatialContext, text: str) -> None:
        """Test other keyword forms signal no match."""
        assert read_standard_shape(ctx, text) is None

    def test_read_shape_raises(self, ctx: SpatialContext) -> None:
        """Test read_shape turns no match into an error."""
        with pytest.raises(InvalidShapeError):
            read_shape(ctx, "POINT(1 2)")


class TestWriting:
    """Tests for formatting shapes."""

    def test_write_rect(self) -> None:
        """Test order and precision of rectangle output."""
        rect = Rectangle(min_x=1.23, max_x=7.87, min_y=4.56, max_y=9.01)
        assert write_rect(rect) == "1.230000 4.560000 7.870000 9.010000"

    def test_write_rect_rounds(self) -> None:
        """Test values are rounded to six digits."""
        rect = Rectangle(0.1234567, 1e6, -0.0000004, 2.5)
        assert write_rect(rect) == "0.123457 -0.000000 1000000.000000 2.500000"

    def test_round_trip(self, ctx: SpatialContext) -> None:
        """Test rectangle text survives read then write."""
        text = "1.230000 4.560000 7.870000 4.560000"
        assert write_rect(read_standard_shape(ctx, text)) == text

    @pytest.mark.parametrize(
        "shape",
        [
            Point(1.5, -2.25),
            Rectangle(-10, 10, -5, 5),
            Circle(Point(3.0, 4.0), 12.5),
        ],
    )
    def test_to_string_round_trip(self, planar: SpatialContext, shape) -> None:
        """Test formatted shapes read back to equal shapes."""
        assert read_standard_shape(planar, to_string(shape)) == shape

    def test_to_string_unsupported(self) -> None:
        """Test unsupported objects."""
        with pytest.raises(TypeError):
            to_string("1 2")  # type: ignore[arg-type]

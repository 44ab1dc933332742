from __future__ import annotations

from saintlocator.core.models import Coordinate
from saintlocator.processing.normalize import normalize_coordinate


class _GeoPoint:
    def __init__(self, latitude: float, longitude: float) -> None:
        self.latitude = latitude
        self.longitude = longitude


class TestStructuredCoordinates:
    def test_full_names(self) -> None:
        assert normalize_coordinate({"latitude": 26.9, "longitude": 75.8}) == Coordinate(26.9, 75.8)

    def test_short_aliases(self) -> None:
        assert normalize_coordinate({"lat": 26.9, "lng": 75.8}) == Coordinate(26.9, 75.8)
        assert normalize_coordinate({"lat": 26.9, "lon": 75.8}) == Coordinate(26.9, 75.8)

    def test_internal_aliases(self) -> None:
        assert normalize_coordinate({"_latitude": 25.3, "_longitude": 83.0}) == Coordinate(25.3, 83.0)

    def test_geo_point_object(self) -> None:
        assert normalize_coordinate(_GeoPoint(26.9, 75.8)) == Coordinate(26.9, 75.8)

    def test_integer_values_become_floats(self) -> None:
        out = normalize_coordinate({"latitude": 24, "longitude": 80})
        assert out == Coordinate(24.0, 80.0)
        assert isinstance(out.latitude, float)

    def test_number_pair(self) -> None:
        assert normalize_coordinate([26.9, 75.8]) == Coordinate(26.9, 75.8)
        assert normalize_coordinate((26.9, 75.8)) == Coordinate(26.9, 75.8)

    def test_out_of_range_dropped(self) -> None:
        assert normalize_coordinate({"latitude": 91, "longitude": 0}) is None
        assert normalize_coordinate({"latitude": 0, "longitude": -180.5}) is None

    def test_range_edges_kept(self) -> None:
        assert normalize_coordinate({"latitude": -90, "longitude": 180}) == Coordinate(-90.0, 180.0)

    def test_non_numeric_values(self) -> None:
        assert normalize_coordinate({"latitude": "26.9", "longitude": "75.8"}) is None
        assert normalize_coordinate({"latitude": True, "longitude": 1}) is None
        assert normalize_coordinate({"latitude": float("nan"), "longitude": 1.0}) is None

    def test_incomplete_pair(self) -> None:
        assert normalize_coordinate({"latitude": 26.9}) is None
        assert normalize_coordinate([26.9]) is None


class TestTextCoordinates:
    def test_degrees_with_hemispheres(self) -> None:
        assert normalize_coordinate("26.9° N, 75.8° E") == Coordinate(26.9, 75.8)

    def test_bracketed(self) -> None:
        assert normalize_coordinate("[26.55° N, 76.49° E]") == Coordinate(26.55, 76.49)

    def test_southern_western_hemispheres(self) -> None:
        assert normalize_coordinate("33.86° S, 151.21° E") == Coordinate(-33.86, 151.21)
        assert normalize_coordinate("40.71° N, 74.0° W") == Coordinate(40.71, -74.0)

    def test_comma_separated(self) -> None:
        assert normalize_coordinate("24.8,80.0") == Coordinate(24.8, 80.0)

    def test_parenthesised(self) -> None:
        assert normalize_coordinate("(24.8, 80.0)") == Coordinate(24.8, 80.0)

    def test_whitespace_separated(self) -> None:
        assert normalize_coordinate("24.8 80.0") == Coordinate(24.8, 80.0)
        assert normalize_coordinate("26.9N 75.8E") == Coordinate(26.9, 75.8)

    def test_numbers_embedded_in_text(self) -> None:
        assert normalize_coordinate("lat 24.8 / lng 80.0") == Coordinate(24.8, 80.0)

    def test_negative_numbers(self) -> None:
        assert normalize_coordinate("-33.86, 151.21") == Coordinate(-33.86, 151.21)

    def test_out_of_range_text(self) -> None:
        assert normalize_coordinate("100, 200") is None
        assert normalize_coordinate("-91, 0") is None

    def test_not_enough_numbers(self) -> None:
        assert normalize_coordinate("Jaipur, Rajasthan") is None
        assert normalize_coordinate("12.5") is None
        assert normalize_coordinate("") is None

    def test_absent(self) -> None:
        assert normalize_coordinate(None) is None
        assert normalize_coordinate(42) is None

"""Tests for device/server location resolution."""

import pytest

from ingestion.location import parse_coordinate, resolve_location
from ingestion.schemas import LocationSource

FALLBACK = (13.218, 75.006)


class TestParseCoordinate:
    @pytest.mark.parametrize("value,expected", [(12.9, 12.9), ("77.5", 77.5), (-33, -33.0), ("0", 0.0)])
    def test_parses_numbers_and_numeric_strings(self, value, expected):
        assert parse_coordinate(value) == expected

    @pytest.mark.parametrize("value", [None, 0, 0.0, "", False, True, "north", "nan", "inf", [1, 2], 10**400])
    def test_unusable_values_yield_none(self, value):
        assert parse_coordinate(value) is None


class TestResolveLocation:
    def test_device_coordinates_used_when_both_present(self):
        loc = resolve_location({"latitude": "12.9", "longitude": 77.5}, *FALLBACK)
        assert loc.latitude == 12.9
        assert loc.longitude == 77.5
        assert loc.source == LocationSource.DEVICE

    def test_missing_coordinates_fall_back(self):
        loc = resolve_location({}, *FALLBACK)
        assert (loc.latitude, loc.longitude) == FALLBACK
        assert loc.source == LocationSource.SERVER_DEFAULT

    def test_one_missing_coordinate_discards_the_other(self):
        loc = resolve_location({"latitude": 12.9}, *FALLBACK)
        assert (loc.latitude, loc.longitude) == FALLBACK
        assert loc.source == LocationSource.SERVER_DEFAULT

    def test_zero_coordinate_reads_as_missing(self):
        # Equator/prime-meridian reports are indistinguishable from "not sent"
        loc = resolve_location({"latitude": 0, "longitude": 77.5}, *FALLBACK)
        assert loc.source == LocationSource.SERVER_DEFAULT
        assert (loc.latitude, loc.longitude) == FALLBACK

from __future__ import annotations

import math

import pytest

from geodesy.projection.ellipsoid import WGS84, Ellipsoid
from geodesy.projection.utm_engine import (
    BAND_LETTERS,
    FALSE_EASTING,
    FALSE_NORTHING_SOUTH,
    OUTSIDE_GRID_LETTER,
    UTMFix,
    central_meridian,
    is_southern,
    lat_lon_to_utm,
    lat_lon_to_utm_wgs84,
    utm_to_lat_lon,
    utm_to_lat_lon_wgs84,
    zone_letter_for,
    zone_number_for,
)


@pytest.mark.parametrize(
    "lon, expected",
    [
        (-180.0, 1),
        (-174.0001, 1),
        (-174.0, 2),
        (0.0, 31),
        (-0.0001, 30),
        (179.9999, 60),
        (180.0, 60),
        (200.0, 60),
        (-200.0, 1),
    ],
)
def test_zone_number_boundaries(lon: float, expected: int) -> None:
    assert zone_number_for(lon) == expected


def test_band_letters_skip_i_and_o() -> None:
    assert len(BAND_LETTERS) == 20
    assert "I" not in BAND_LETTERS
    assert "O" not in BAND_LETTERS
    assert BAND_LETTERS[0] == "C"
    assert BAND_LETTERS[-1] == "X"


@pytest.mark.parametrize(
    "lat, expected",
    [
        (-80.0, "C"),
        (-72.0001, "C"),
        (-72.0, "D"),
        (-0.0001, "M"),
        (0.0, "N"),
        (7.9999, "N"),
        (8.0, "P"),
        (40.0, "T"),
        (71.9999, "W"),
        (72.0, "X"),
        (83.9, "X"),
        (84.0, "X"),
    ],
)
def test_zone_letter_table(lat: float, expected: str) -> None:
    assert zone_letter_for(lat) == expected


@pytest.mark.parametrize("lat", [84.5, 84.0001, 90.0, -80.0001, -85.0, -90.0])
def test_zone_letter_outside_grid(lat: float) -> None:
    assert zone_letter_for(lat) == OUTSIDE_GRID_LETTER


def test_central_meridian() -> None:
    assert central_meridian(1) == -177
    assert central_meridian(31) == 3
    assert central_meridian(60) == 177


def test_forward_on_central_meridian_at_equator() -> None:
    fix = lat_lon_to_utm_wgs84(0.0, 3.0)
    assert fix == UTMFix(31, "N", FALSE_EASTING, 0.0)


def test_forward_is_symmetric_about_central_meridian() -> None:
    east = lat_lon_to_utm_wgs84(45.0, -105.0 + 1.5)
    west = lat_lon_to_utm_wgs84(45.0, -105.0 - 1.5)
    assert east.zone_number == west.zone_number == 13
    assert east.easting - FALSE_EASTING == pytest.approx(FALSE_EASTING - west.easting, abs=1e-6)
    assert east.northing == pytest.approx(west.northing, abs=1e-6)


def test_forward_southern_hemisphere_uses_false_northing() -> None:
    fix = lat_lon_to_utm_wgs84(-0.0001, 3.0)
    assert fix.zone_letter == "M"
    # 0.0001 degrees south of the equator is ~11 m
    assert fix.northing == pytest.approx(FALSE_NORTHING_SOUTH - 11.06, abs=0.05)


def test_forward_outside_grid_still_projects() -> None:
    fix = lat_lon_to_utm_wgs84(84.5, 0.0)
    assert fix.zone_letter == OUTSIDE_GRID_LETTER
    assert fix.zone_number == 31
    assert math.isfinite(fix.easting)
    assert math.isfinite(fix.northing)
    assert fix.northing > 9_000_000


def test_forward_just_inside_grid() -> None:
    fix = lat_lon_to_utm_wgs84(83.9, 0.0)
    assert fix.zone_letter == "X"


@pytest.mark.parametrize(
    "lat, lon",
    [
        (0.0, 0.0),
        (45.0, 7.5),
        (-33.9249, 18.4241),
        (64.1466, -21.9426),
        (-79.9, -179.9),
        (83.9, 179.9),
        (-79.9, 179.9),
        (83.9, -179.9),
        (0.0001, -177.0),
        (12.3, 2.9999),
        (-45.6, 2.9999),
    ],
)
def test_round_trip(lat: float, lon: float) -> None:
    fix = lat_lon_to_utm_wgs84(lat, lon)
    back_lat, back_lon = utm_to_lat_lon_wgs84(*fix)
    assert back_lat == pytest.approx(lat, abs=1e-5)
    assert back_lon == pytest.approx(lon, abs=1e-5)


def test_round_trip_sweep() -> None:
    for lat in (-79.9, -60.0, -30.5, -5.0, 0.0, 5.0, 30.5, 60.0, 83.9):
        for lon in range(-179, 180, 7):
            lon = lon + 0.9
            fix = lat_lon_to_utm_wgs84(lat, lon)
            back_lat, back_lon = utm_to_lat_lon_wgs84(*fix)
            assert abs(back_lat - lat) < 1e-5, (lat, lon, back_lat)
            assert abs(back_lon - lon) < 1e-5, (lat, lon, back_lon)


def test_inverse_southern_band_gives_negative_latitude() -> None:
    fix = lat_lon_to_utm_wgs84(-33.9249, 18.4241)
    assert fix.zone_letter == "H"
    assert fix.northing < FALSE_NORTHING_SOUTH

    lat, _ = utm_to_lat_lon_wgs84(fix.zone_number, fix.zone_letter, fix.easting, fix.northing)
    assert lat < 0

    # The same numbers read as a northern band land far north
    lat_north, _ = utm_to_lat_lon_wgs84(fix.zone_number, "T", fix.easting, fix.northing)
    assert lat_north > 0


@pytest.mark.parametrize("lat", [-85.0, -89.0, 84.5, 88.0])
def test_inverse_outside_grid_follows_forward_hemisphere(lat: float) -> None:
    fix = lat_lon_to_utm_wgs84(lat, 10.0)
    assert fix.zone_letter == OUTSIDE_GRID_LETTER

    back_lat, back_lon = utm_to_lat_lon_wgs84(*fix)
    assert back_lat == pytest.approx(lat, abs=1e-4)
    assert back_lon == pytest.approx(10.0, abs=1e-3)


def test_is_southern() -> None:
    assert is_southern("C", 5_000_000)
    assert is_southern("M", 9_999_999)
    assert not is_southern("N", 1)
    assert not is_southern("x", 1)
    assert is_southern(OUTSIDE_GRID_LETTER, 1_100_000)
    assert not is_southern(OUTSIDE_GRID_LETTER, 9_400_000)
    assert is_southern(OUTSIDE_GRID_LETTER, FALSE_NORTHING_SOUTH)
    assert is_southern(OUTSIDE_GRID_LETTER, 10_000_500)


def test_inverse_outside_grid_false_northing_offset_is_southern() -> None:
    lat, lon = utm_to_lat_lon_wgs84(31, OUTSIDE_GRID_LETTER, 500000.0, 10_000_500.0)
    # Read as 500 m past the southern false northing, not 10,000 km north
    assert abs(lat) < 0.01
    assert lon == pytest.approx(3.0)
    assert (lat, lon) == utm_to_lat_lon_wgs84(31, "M", 500000.0, 10_000_500.0)


@pytest.mark.parametrize("lon", [math.nan, math.inf, -math.inf])
def test_forward_non_finite_longitude(lon: float) -> None:
    fix = lat_lon_to_utm_wgs84(10.0, lon)
    assert 1 <= fix.zone_number <= 60
    assert fix.zone_letter == "P"
    assert math.isnan(fix.easting)
    assert math.isnan(fix.northing)


@pytest.mark.parametrize("lon, expected", [(math.nan, 1), (math.inf, 60), (-math.inf, 1)])
def test_zone_number_non_finite(lon: float, expected: int) -> None:
    assert zone_number_for(lon) == expected


@pytest.mark.parametrize("lat", [math.nan, math.inf, -math.inf])
def test_forward_non_finite_latitude(lat: float) -> None:
    fix = lat_lon_to_utm_wgs84(lat, 10.0)
    assert fix.zone_number == 32
    assert fix.zone_letter == OUTSIDE_GRID_LETTER
    assert math.isnan(fix.northing)


def test_forward_huge_longitude_does_not_raise() -> None:
    fix = lat_lon_to_utm_wgs84(10.0, 1e300)
    assert fix.zone_number == 60
    assert isinstance(fix.easting, float)


def test_inverse_accepts_nonsense_eastings() -> None:
    lat, lon = utm_to_lat_lon_wgs84(31, "N", -2_000_000.0, 25_000_000.0)
    assert isinstance(lat, float)
    assert isinstance(lon, float)


def test_wgs84_specialisation_matches_generic() -> None:
    assert lat_lon_to_utm(51.5, -0.12, WGS84.a, WGS84.f) == lat_lon_to_utm_wgs84(51.5, -0.12)
    fix = lat_lon_to_utm_wgs84(51.5, -0.12)
    assert utm_to_lat_lon(*fix, WGS84.a, WGS84.f) == utm_to_lat_lon_wgs84(*fix)


def test_other_ellipsoid_changes_result() -> None:
    clarke = Ellipsoid(name="clrk66", a=6378206.4, f=1 / 294.9786982)
    wgs = lat_lon_to_utm_wgs84(40.0, -104.0)
    other = lat_lon_to_utm(40.0, -104.0, clarke.a, clarke.f)
    assert other.zone_number == wgs.zone_number
    assert abs(other.northing - wgs.northing) > 1.0

    back_lat, back_lon = utm_to_lat_lon(*other, clarke.a, clarke.f)
    assert back_lat == pytest.approx(40.0, abs=1e-5)
    assert back_lon == pytest.approx(-104.0, abs=1e-5)

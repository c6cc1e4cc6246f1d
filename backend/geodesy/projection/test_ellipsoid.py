from __future__ import annotations

import pytest

from geodesy.projection.ellipsoid import WGS84, Ellipsoid


def test_wgs84_constants() -> None:
    assert WGS84.a == 6378137.0
    assert WGS84.f == pytest.approx(1 / 298.257223563)
    assert WGS84.e2 == pytest.approx(0.00669437999014, rel=1e-10)
    assert WGS84.ep2 == pytest.approx(0.00673949674228, rel=1e-10)
    assert WGS84.b == pytest.approx(6356752.314245, abs=1e-6)


def test_from_name_reads_proj_table() -> None:
    grs80 = Ellipsoid.from_name("GRS80")
    assert grs80.name == "GRS80"
    assert grs80.a == 6378137.0
    assert grs80.f == pytest.approx(1 / 298.257222101, rel=1e-12)

    wgs84 = Ellipsoid.from_name("WGS84")
    assert wgs84.a == WGS84.a
    assert wgs84.f == pytest.approx(WGS84.f, rel=1e-12)


def test_from_name_unknown() -> None:
    with pytest.raises(ValueError):
        Ellipsoid.from_name("not-an-ellipsoid")


def test_ellipsoid_is_frozen() -> None:
    with pytest.raises(AttributeError):
        WGS84.a = 1.0  # type: ignore[misc]

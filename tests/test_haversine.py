from types import SimpleNamespace

import pytest

from algorithms.haversine import find_nearby_centers, haversine_distance


def center(name, lat, lon):
    return SimpleNamespace(name=name, latitude=lat, longitude=lon)


def test_zero_distance():
    assert haversine_distance(32.7767, -96.7970, 32.7767, -96.7970) == 0


def test_dallas_to_fort_worth():
    # Roughly 50 km apart
    distance = haversine_distance(32.7767, -96.7970, 32.7555, -97.3308)
    assert distance == pytest.approx(50, abs=2)


def test_nearby_sorted_and_filtered():
    centers = [
        center('far', 32.7555, -97.3308),
        center('near', 32.78, -96.80),
        center('mid', 32.85, -96.85),
        center('unknown', None, None),
    ]
    result = find_nearby_centers(32.7767, -96.7970, centers, radius_km=15)
    assert [c.name for c, _ in result] == ['near', 'mid']
    assert result[0][1] < result[1][1]


def test_radius_is_inclusive():
    c = center('edge', 32.7767, -96.7970)
    assert find_nearby_centers(32.7767, -96.7970, [c], radius_km=0) == [(c, 0)]

"""
Haversine Algorithm - great-circle distance between two coordinates
Used to find blood centers nearest to a given location
"""

import math

EARTH_RADIUS_KM = 6371
DEFAULT_RADIUS_KM = 15


def haversine_distance(lat1, lon1, lat2, lon2):
    """
    Straight-line ("as the crow flies") distance in kilometers.
    Road distance is usually longer.
    """
    lat1, lon1, lat2, lon2 = map(math.radians, [lat1, lon1, lat2, lon2])

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    c = 2 * math.asin(math.sqrt(a))

    return c * EARTH_RADIUS_KM


def find_nearby_centers(lat, lon, centers, radius_km=DEFAULT_RADIUS_KM):
    """
    Find blood centers within radius_km of a point

    Args:
        lat, lon: Reference point
        centers: Iterable of objects with latitude/longitude (None = unknown)
        radius_km: Inclusive search radius

    Returns:
        List of (center, distance_km) tuples, nearest first
    """
    nearby = []

    for center in centers:
        if center.latitude is None or center.longitude is None:
            continue
        distance = haversine_distance(lat, lon, center.latitude, center.longitude)
        if distance <= radius_km:
            nearby.append((center, distance))

    nearby.sort(key=lambda x: x[1])
    return nearby

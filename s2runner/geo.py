"""Spherical helpers for working around a position.

Distances are in meters on a sphere of radius ``EARTH_RADIUS``; angles and
coordinates are in degrees.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

EARTH_RADIUS = 6378137  # meters


@dataclass(frozen=True)
class LatLng:
    """A latitude/longitude pair in degrees."""

    lat: float
    lng: float

    def destination(self, bearing: float, distance: float) -> "LatLng":
        """Point reached after ``distance`` meters along ``bearing``.

        The distance is truncated to whole meters.
        """
        angular = int(distance) / EARTH_RADIUS
        bearing = math.radians(float(bearing))

        rlat = math.radians(self.lat)
        rlng = math.radians(self.lng)

        lat = math.asin(
            math.sin(rlat) * math.cos(angular)
            + math.cos(rlat) * math.sin(angular) * math.cos(bearing)
        )
        lng = rlng + math.atan2(
            math.sin(bearing) * math.sin(angular) * math.cos(rlat),
            math.cos(angular) - math.sin(rlat) * math.sin(lat),
        )
        return LatLng(math.degrees(lat), math.degrees(lng))

    def to_string(self) -> str:
        return "%0.6f,%0.6f" % (self.lat, self.lng)

    def to_e6_string(self) -> str:
        """Hex E6 form; negatives as 32-bit two's complement."""
        lat_e6 = int(self.lat * 1e6) & 0xFFFFFFFF
        lng_e6 = int(self.lng * 1e6) & 0xFFFFFFFF
        return "%08x,%08x" % (lat_e6, lng_e6)


def get_bounds(center: LatLng, radius: float) -> Tuple[LatLng, LatLng]:
    """Return the (south-west, north-east) corners of the square around ``center``."""
    north = center.destination(0, radius)
    east = center.destination(90, radius)
    south = center.destination(180, radius)
    west = center.destination(270, radius)
    return LatLng(south.lat, west.lng), LatLng(north.lat, east.lng)


def get_distance(a: LatLng, b: LatLng) -> int:
    """Great-circle distance in whole meters (spherical law of cosines)."""
    lat1, lng1 = math.radians(a.lat), math.radians(a.lng)
    lat2, lng2 = math.radians(b.lat), math.radians(b.lng)

    cos_angle = (
        math.sin(lat1) * math.sin(lat2)
        + math.cos(lat1) * math.cos(lat2) * math.cos(lng2 - lng1)
    )
    # rounding can push identical points just past 1
    cos_angle = max(-1.0, min(1.0, cos_angle))
    return int(round(math.acos(cos_angle) * EARTH_RADIUS))


def wrap_longitude(lng: float) -> float:
    """Wrap to [-180, 180)."""
    return math.fmod(math.fmod(lng + 180, 360) + 360, 360) - 180


def get_heading(origin: LatLng, target: LatLng) -> float:
    """Initial bearing from ``origin`` to ``target``."""
    from_lat = math.radians(origin.lat)
    to_lat = math.radians(target.lat)
    dlng = math.radians(target.lng) - math.radians(origin.lng)

    heading = math.atan2(
        math.sin(dlng) * math.cos(to_lat),
        math.cos(from_lat) * math.sin(to_lat) - math.sin(from_lat) * math.cos(to_lat) * math.cos(dlng),
    )
    return wrap_longitude(math.degrees(heading))


def offset_distance(origin: LatLng, target: LatLng, distance: float) -> LatLng:
    """Move ``distance`` meters from ``origin`` towards ``target``."""
    angular = float(distance) / EARTH_RADIUS
    heading = math.radians(get_heading(origin, target))

    from_lat = math.radians(origin.lat)
    cos_distance = math.cos(angular)
    sin_distance = math.sin(angular)
    sin_from_lat = math.sin(from_lat)
    cos_from_lat = math.cos(from_lat)
    sc = cos_distance * sin_from_lat + sin_distance * cos_from_lat * math.cos(heading)

    lat = math.degrees(math.asin(sc))
    lng = math.degrees(
        math.radians(origin.lng)
        + math.atan2(sin_distance * cos_from_lat * math.sin(heading), cos_distance - sin_from_lat * sc)
    )
    return LatLng(lat, lng)

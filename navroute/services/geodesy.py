"""Great-circle geodesy on a spherical Earth (distances in NM).

All functions are pure.  Point arguments are anything exposing ``latitude``
and ``longitude`` in decimal degrees (``GeoPoint``, ``Airport``, ``Navaid``...).
"""

from __future__ import annotations

import math
from typing import Protocol

from navroute.contracts.common import GeoPoint

EARTH_RADIUS_NM = 3440.065
NM_PER_DEGREE_LAT = 60.0


class Located(Protocol):
    latitude: float
    longitude: float


def haversine_nm(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance in nautical miles."""
    la1, lo1 = math.radians(lat1), math.radians(lon1)
    la2, lo2 = math.radians(lat2), math.radians(lon2)
    dlat = la2 - la1
    dlon = lo2 - lo1
    a = math.sin(dlat / 2) ** 2 + math.cos(la1) * math.cos(la2) * math.sin(dlon / 2) ** 2
    return 2 * math.asin(min(1.0, math.sqrt(a))) * EARTH_RADIUS_NM


def distance_nm(a: Located, b: Located) -> float:
    """Great-circle distance between two points in NM."""
    return haversine_nm(a.latitude, a.longitude, b.latitude, b.longitude)


def initial_bearing_deg(a: Located, b: Located) -> float:
    """Initial true bearing from *a* to *b*, in [0, 360)."""
    la1, la2 = math.radians(a.latitude), math.radians(b.latitude)
    dlon = math.radians(b.longitude - a.longitude)
    y = math.sin(dlon) * math.cos(la2)
    x = math.cos(la1) * math.sin(la2) - math.sin(la1) * math.cos(la2) * math.cos(dlon)
    return (math.degrees(math.atan2(y, x)) + 360.0) % 360.0


def interpolate(a: Located, b: Located, fraction: float) -> GeoPoint:
    """Point at *fraction* of the great-circle arc from *a* to *b*.

    Spherical linear interpolation, accurate over long legs where a
    lat/lon lerp would drift off the great circle.  Returns *a* when both
    points coincide (zero angular distance).
    """
    start = GeoPoint(latitude=a.latitude, longitude=a.longitude)
    if fraction <= 0.0:
        return start
    if fraction >= 1.0:
        return GeoPoint(latitude=b.latitude, longitude=b.longitude)

    angular = distance_nm(a, b) / EARTH_RADIUS_NM
    if angular < 1e-12:
        return start

    la1, lo1 = math.radians(a.latitude), math.radians(a.longitude)
    la2, lo2 = math.radians(b.latitude), math.radians(b.longitude)

    sin_d = math.sin(angular)
    wa = math.sin((1.0 - fraction) * angular) / sin_d
    wb = math.sin(fraction * angular) / sin_d

    x = wa * math.cos(la1) * math.cos(lo1) + wb * math.cos(la2) * math.cos(lo2)
    y = wa * math.cos(la1) * math.sin(lo1) + wb * math.cos(la2) * math.sin(lo2)
    z = wa * math.sin(la1) + wb * math.sin(la2)

    lat = math.atan2(z, math.sqrt(x * x + y * y))
    lon = math.atan2(y, x)
    return GeoPoint(latitude=math.degrees(lat), longitude=math.degrees(lon))


def wrap_longitude(delta_deg: float) -> float:
    """Normalise a longitude difference into [-180, 180)."""
    return (delta_deg + 180.0) % 360.0 - 180.0


def point_to_segment_nm(point: Located, seg_start: Located, seg_end: Located) -> float:
    """Distance from *point* to the segment *seg_start*-*seg_end* in NM.

    Flat-earth projection centred on the segment; adequate below ~200 NM.
    Longitude differences take the short way round, so segments crossing
    the antimeridian are measured correctly.
    """
    cos_lat = math.cos(math.radians((seg_start.latitude + seg_end.latitude) / 2))
    bx = wrap_longitude(seg_end.longitude - seg_start.longitude) * cos_lat * NM_PER_DEGREE_LAT
    by = (seg_end.latitude - seg_start.latitude) * NM_PER_DEGREE_LAT
    px = wrap_longitude(point.longitude - seg_start.longitude) * cos_lat * NM_PER_DEGREE_LAT
    py = (point.latitude - seg_start.latitude) * NM_PER_DEGREE_LAT

    len_sq = bx * bx + by * by
    if len_sq == 0:
        return distance_nm(point, seg_start)

    t = max(0.0, min(1.0, (px * bx + py * by) / len_sq))
    return math.hypot(px - t * bx, py - t * by)


def bounding_box(
    points: list[Located], buffer_nm: float
) -> tuple[float, float, float | None, float | None]:
    """Lat/lon box enclosing *points* plus *buffer_nm* on every side.

    Returns ``(lat_min, lat_max, lon_min, lon_max)``.  The longitude bounds
    are ``None`` when the box wraps the antimeridian or reaches a pole, in
    which case callers must not filter on longitude.  *points* is read as a
    polyline: a leg spanning more than 180 degrees of longitude crosses the
    antimeridian.
    """
    lats = [p.latitude for p in points]
    lons = [p.longitude for p in points]
    lat_buffer = buffer_nm / NM_PER_DEGREE_LAT
    lat_min = min(lats) - lat_buffer
    lat_max = max(lats) + lat_buffer
    if lat_min <= -90.0 or lat_max >= 90.0:
        return max(lat_min, -90.0), min(lat_max, 90.0), None, None

    widest = max(abs(lat_min), abs(lat_max))
    lon_buffer = buffer_nm / (NM_PER_DEGREE_LAT * max(0.01, math.cos(math.radians(widest))))
    lon_min = min(lons) - lon_buffer
    lon_max = max(lons) + lon_buffer
    crosses = any(abs(b - a) > 180.0 for a, b in zip(lons, lons[1:]))
    if crosses or lon_min < -180.0 or lon_max > 180.0:
        return lat_min, lat_max, None, None
    return lat_min, lat_max, lon_min, lon_max


def format_coordinate(value: float, is_latitude: bool) -> str:
    """Degrees + decimal minutes, e.g. ``3851.483N`` / ``09029.093W``."""
    if is_latitude:
        hemisphere = "N" if value >= 0 else "S"
    else:
        hemisphere = "E" if value >= 0 else "W"

    magnitude = abs(value)
    degrees = int(magnitude)
    minutes = round((magnitude - degrees) * 60, 3)
    if minutes >= 60.0:
        degrees += 1
        minutes = 0.0

    width = 2 if is_latitude else 3
    return f"{degrees:0{width}d}{minutes:06.3f}{hemisphere}"

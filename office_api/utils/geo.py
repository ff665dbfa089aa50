# ================================
# GEO UTILITIES (utils/geo.py)
# ================================

import math
from typing import Optional

from sqlalchemy.sql.elements import ColumnElement

EARTH_RADIUS_KM = 6371.0

def parse_coordinate(value: Optional[str], limit: float) -> Optional[float]:
    """
    Parse a latitude/longitude query value.

    Args:
        value: Raw query string value (e.g. "38.7206613")
        limit: Absolute bound (90 for latitude, 180 for longitude)

    Returns:
        The coordinate as float, or None when missing, malformed,
        non-finite or out of range
    """
    if value is None:
        return None

    try:
        coordinate = float(str(value).strip())
    except ValueError:
        return None

    if not math.isfinite(coordinate) or abs(coordinate) > limit:
        return None

    return coordinate

def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two points in kilometers"""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))

def distance_order_expression(lat_column, lng_column, lat: float, lng: float) -> ColumnElement:
    """
    SQL expression ordering rows by distance from (lat, lng).

    Uses the squared equirectangular distance. The longitude scale
    cos(lat) is computed here, so the expression is plain arithmetic
    and works on every SQL backend. Only relative order is meaningful.
    """
    lng_scale = math.cos(math.radians(lat))
    d_lat = lat_column - lat
    d_lng = (lng_column - lng) * lng_scale
    return d_lat * d_lat + d_lng * d_lng

# ================================
# UTILS PACKAGE INITIALIZATION (utils/__init__.py)
# ================================

"""
Utils Package

- geo: coordinate parsing and distance ordering
- pagination: links/meta blocks of paginated responses
- email: AWS SES / SMTP email delivery (import office_api.utils.email directly)
"""

from office_api.utils.geo import parse_coordinate, haversine_km, distance_order_expression
from office_api.utils.pagination import build_pagination

__all__ = [
    "parse_coordinate",
    "haversine_km",
    "distance_order_expression",
    "build_pagination",
]

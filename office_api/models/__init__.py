# ================================
# DATABASE INITIALIZATION (models/__init__.py)
# ================================

"""
Database Models Package

Imports every model so Base.metadata knows all tables
"""

from office_api.models.base import Base

from office_api.models.user import User
from office_api.models.business import Office, Tag, OfficeImage, Reservation, office_tags

# Export all models
__all__ = [
    "Base",
    "User",
    "Office",
    "Tag",
    "OfficeImage",
    "Reservation",
    "office_tags",
]

# ================================
# SCHEMAS PACKAGE INITIALIZATION (schemas/__init__.py)
# ================================

"""
Pydantic Schemas Package

Central imports for all schemas
"""

# Base Schemas
from office_api.schemas.base import (
    BaseSchema,
    PaginationLinks,
    PaginationMeta,
    ErrorResponse
)

# Office Schemas
from office_api.schemas.office import (
    TagSchema,
    OfficeImageSchema,
    UserBasicInfo,
    OfficeCreate,
    OfficeUpdate,
    OfficeFilter,
    OfficeResponse,
    OfficeEnvelope,
    OfficeListResponse,
    TagListResponse
)

__all__ = [
    "BaseSchema",
    "PaginationLinks",
    "PaginationMeta",
    "ErrorResponse",
    "TagSchema",
    "OfficeImageSchema",
    "UserBasicInfo",
    "OfficeCreate",
    "OfficeUpdate",
    "OfficeFilter",
    "OfficeResponse",
    "OfficeEnvelope",
    "OfficeListResponse",
    "TagListResponse",
]

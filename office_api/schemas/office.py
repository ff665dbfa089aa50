# ================================
# OFFICE SCHEMAS (schemas/office.py)
# ================================

from typing import Optional, List
from datetime import datetime
from pydantic import Field, field_validator

from office_api.schemas.base import BaseSchema, PaginationLinks, PaginationMeta
from office_api.utils.geo import parse_coordinate

# ================================
# RELATED RESOURCES
# ================================

class TagSchema(BaseSchema):
    """Tag resource"""
    id: int
    name: str

class OfficeImageSchema(BaseSchema):
    """Image resource"""
    id: int
    path: str

class UserBasicInfo(BaseSchema):
    """Public view of an office owner"""
    id: int
    name: str

# ================================
# INPUT SCHEMAS
# ================================

class OfficeCreate(BaseSchema):
    """Schema for creating an office"""
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    address_line1: str = Field(..., min_length=1, max_length=255)
    address_line2: Optional[str] = Field(None, max_length=255)
    price_per_day: int = Field(..., ge=100)
    monthly_discount: int = Field(0, ge=0, le=90)
    hidden: bool = False
    tags: Optional[List[int]] = None

class OfficeUpdate(BaseSchema):
    """Schema for updating an office; only fields sent are applied"""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    lat: Optional[float] = Field(None, ge=-90, le=90)
    lng: Optional[float] = Field(None, ge=-180, le=180)
    address_line1: Optional[str] = Field(None, min_length=1, max_length=255)
    address_line2: Optional[str] = Field(None, max_length=255)
    price_per_day: Optional[int] = Field(None, ge=100)
    monthly_discount: Optional[int] = Field(None, ge=0, le=90)
    hidden: Optional[bool] = None
    tags: Optional[List[int]] = None

    @field_validator(
        "title", "description", "lat", "lng", "address_line1",
        "price_per_day", "monthly_discount", "hidden", "tags"
    )
    @classmethod
    def reject_null(cls, v):
        # Validators don't run for omitted fields, only for an explicit null
        if v is None:
            raise ValueError("This field may not be null")
        return v

# ================================
# LISTING FILTER
# ================================

def _parse_positive_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        number = int(str(value).strip())
    except ValueError:
        return None
    return number if number > 0 else None

class OfficeFilter(BaseSchema):
    """Listing filter; every criterion is optional and they combine with AND"""
    owner_id: Optional[int] = None
    visitor_id: Optional[int] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    page: int = Field(default=1, ge=1)

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lng is not None

    @classmethod
    def from_query(
        cls,
        user_id: Optional[str] = None,
        visitor_id: Optional[str] = None,
        lat: Optional[str] = None,
        lng: Optional[str] = None,
        page: Optional[str] = None
    ) -> "OfficeFilter":
        """
        Build a filter from raw query strings.

        Malformed values are dropped instead of rejected: a bad user_id
        means "no owner filter", a bad coordinate means default ordering.
        """
        return cls(
            owner_id=_parse_positive_int(user_id),
            visitor_id=_parse_positive_int(visitor_id),
            lat=parse_coordinate(lat, 90),
            lng=parse_coordinate(lng, 180),
            page=_parse_positive_int(page) or 1,
        )

# ================================
# RESPONSE SCHEMAS
# ================================

class OfficeResponse(BaseSchema):
    """Office resource"""
    id: int
    title: str
    description: str
    lat: float
    lng: float
    address_line1: str
    address_line2: Optional[str] = None
    price_per_day: int
    monthly_discount: int
    hidden: bool
    approval_status: str
    reservations_count: Optional[int] = None
    tags: List[TagSchema] = []
    images: List[OfficeImageSchema] = []
    user: Optional[UserBasicInfo] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class OfficeEnvelope(BaseSchema):
    """Single office response"""
    data: OfficeResponse

class OfficeListResponse(BaseSchema):
    """Paginated office list"""
    data: List[OfficeResponse]
    links: PaginationLinks
    meta: PaginationMeta

class TagListResponse(BaseSchema):
    """Tag list"""
    data: List[TagSchema]

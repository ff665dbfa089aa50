# ================================
# BASE SCHEMAS (schemas/base.py)
# ================================

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, List

class BaseSchema(BaseModel):
    """Base schema with shared configuration"""
    model_config = ConfigDict(
        from_attributes=True,  # Pydantic v2: ORM integration
        str_strip_whitespace=True,
        validate_assignment=True,
    )

# ================================
# PAGINATION SCHEMAS
# ================================

class PaginationLinks(BaseSchema):
    """Navigation links of a paginated response"""
    first: str
    last: str
    prev: Optional[str] = None
    next: Optional[str] = None

class PaginationMeta(BaseSchema):
    """Page bookkeeping of a paginated response"""
    current_page: int
    from_: Optional[int] = Field(None, alias="from", serialization_alias="from")
    last_page: int
    path: str
    per_page: int
    to: Optional[int] = None
    total: int

    model_config = ConfigDict(populate_by_name=True)

# ================================
# ERROR RESPONSE SCHEMAS
# ================================

class ErrorResponse(BaseSchema):
    """Standard Error Response Schema"""
    detail: str = Field(..., description="Error message")
    error_code: Optional[str] = Field(None, description="Application-specific error code")
    field_errors: Optional[Dict[str, List[str]]] = Field(None, description="Validation errors by field")
    request_id: Optional[str] = None

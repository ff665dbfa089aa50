# ================================
# API PACKAGE INITIALIZATION (api/__init__.py)
# ================================

"""
API Package

Root package for all API routes
"""

from fastapi import APIRouter

from office_api.api.v1 import offices, tags
from office_api.schemas.base import ErrorResponse

# Version Info
API_VERSION = "1.0.0"
API_TITLE = "Office Listings API"
API_DESCRIPTION = """
Coworking office marketplace API

## Features
- Public office listing with owner, visitor and distance filters
- Office creation and updates for hosts
- Approval workflow: location or price changes go back to review
- Tag catalogue

## Authentication
- Bearer JWT carrying token abilities (`office.create`, `office.update`, `*`)
"""

# Base router for the whole API
api_router = APIRouter()

api_router.include_router(
    offices.router,
    prefix="/offices",
    tags=["Offices"],
    responses={
        401: {"model": ErrorResponse, "description": "Authentication required"},
        403: {"model": ErrorResponse, "description": "Missing ability or not the owner"},
        404: {"model": ErrorResponse, "description": "Office not found"},
        422: {"model": ErrorResponse, "description": "Validation failed"}
    }
)

api_router.include_router(
    tags.router,
    prefix="/tags",
    tags=["Tags"]
)

# ================================
# TAGS API (api/v1/tags.py)
# ================================

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from office_api.dependencies import get_db
from office_api.schemas.office import TagListResponse
from office_api.services.tag_service import TagService

router = APIRouter()

@router.get("", response_model=TagListResponse)
async def list_tags(db: Session = Depends(get_db)):
    """List all tags"""
    return {"data": TagService.list_tags(db)}

# ================================
# OFFICES API (api/v1/offices.py)
# ================================

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request, Path, status
from sqlalchemy.orm import Session
from typing import Optional

from office_api.core.security import Principal, ABILITY_OFFICE_CREATE
from office_api.dependencies import (
    get_db,
    get_verified_principal,
    get_notification_service,
    get_updatable_office,
    require_ability,
)
from office_api.models.business import Office
from office_api.schemas.office import (
    OfficeCreate,
    OfficeUpdate,
    OfficeFilter,
    OfficeEnvelope,
    OfficeListResponse,
)
from office_api.services.office_service import OfficeService
from office_api.services.notification_service import NotificationService
from office_api.mappers.office_mapper import map_office_to_response
from office_api.utils.pagination import build_pagination

router = APIRouter()

@router.get("", response_model=OfficeListResponse)
async def list_offices(
    request: Request,
    user_id: Optional[str] = Query(None, description="Only offices owned by this host"),
    visitor_id: Optional[str] = Query(None, description="Only offices this visitor has reserved"),
    lat: Optional[str] = Query(None, description="Latitude to order by distance from"),
    lng: Optional[str] = Query(None, description="Longitude to order by distance from"),
    page: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    """List approved, visible offices (20 per page)"""
    # Raw strings: malformed numbers are ignored rather than rejected
    filter_params = OfficeFilter.from_query(
        user_id=user_id, visitor_id=visitor_id, lat=lat, lng=lng, page=page
    )
    result = OfficeService.list_offices(db, filter_params)

    data = [map_office_to_response(office, count) for office, count in result["items"]]
    return {
        "data": data,
        **build_pagination(request.url, result["page"], result["per_page"], result["total"], len(data))
    }

@router.get("/{office_id}", response_model=OfficeEnvelope)
async def get_office(
    office_id: int = Path(..., description="Office ID"),
    db: Session = Depends(get_db)
):
    """Get office details"""
    office, reservations_count = OfficeService.get_office(db, office_id)
    return {"data": map_office_to_response(office, reservations_count)}

@router.post("", response_model=OfficeEnvelope, status_code=status.HTTP_201_CREATED)
async def create_office(
    office_data: OfficeCreate,
    principal: Principal = Depends(require_ability(ABILITY_OFFICE_CREATE)),
    db: Session = Depends(get_db)
):
    """Create a new office (pending approval)"""
    office = OfficeService.create_office(db, office_data, principal)
    return {"data": map_office_to_response(office)}

@router.put("/{office_id}", response_model=OfficeEnvelope)
async def update_office(
    office_data: OfficeUpdate,
    background_tasks: BackgroundTasks,
    office: Office = Depends(get_updatable_office),
    principal: Principal = Depends(get_verified_principal),
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notification_service)
):
    """Update an office; location or price changes send it back to review"""
    office, requires_review = OfficeService.update_office(db, office, office_data, principal)

    if requires_review:
        notifier.notify_office_pending_approval(db, office, background_tasks)

    return {"data": map_office_to_response(office)}

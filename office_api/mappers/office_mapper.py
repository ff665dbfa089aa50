"""
Office Mapper Module
Handles conversion of Office ORM objects to response dictionaries
"""
from typing import Dict, Any, Optional
from office_api.models.business import Office


def map_office_to_response(office: Office, reservations_count: Optional[int] = None) -> Dict[str, Any]:
    """
    Map an Office ORM object to the OfficeResponse format

    Args:
        office: Office ORM object with tags, images and user loaded
        reservations_count: Active reservation count, None when not computed

    Returns:
        Dictionary matching OfficeResponse schema
    """
    return {
        "id": office.id,
        "title": office.title,
        "description": office.description,
        "lat": office.lat,
        "lng": office.lng,
        "address_line1": office.address_line1,
        "address_line2": office.address_line2,
        "price_per_day": office.price_per_day,
        "monthly_discount": office.monthly_discount,
        "hidden": office.hidden,
        "approval_status": office.approval_status,
        "reservations_count": reservations_count,
        "tags": [{"id": tag.id, "name": tag.name} for tag in office.tags],
        "images": [{"id": image.id, "path": image.path} for image in office.images],
        "user": {"id": office.user.id, "name": office.user.name} if office.user else None,
        "created_at": office.created_at,
        "updated_at": office.updated_at,
    }

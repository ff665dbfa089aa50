# ================================
# TAG SERVICE (services/tag_service.py)
# ================================

from sqlalchemy.orm import Session
from typing import List

from office_api.models.business import Tag

class TagService:
    """Service for reading tags"""

    @staticmethod
    def list_tags(db: Session) -> List[Tag]:
        return db.query(Tag).order_by(Tag.id.asc()).all()

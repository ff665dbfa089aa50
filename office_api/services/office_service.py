# ================================
# OFFICE SERVICE (services/office_service.py)
# ================================

from sqlalchemy.orm import Session, selectinload
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select, func
from typing import List, Optional, Dict, Any, Tuple
import logging

from office_api.core.exceptions import AuthorizationError, NotFoundError, ValidationError, TransactionFailure
from office_api.core.security import Principal, ABILITY_OFFICE_CREATE, ABILITY_OFFICE_UPDATE
from office_api.models.business import Office, Tag, Reservation
from office_api.schemas.office import OfficeCreate, OfficeUpdate, OfficeFilter
from office_api.utils.geo import distance_order_expression
from office_api.config import settings

logger = logging.getLogger(__name__)

class OfficeService:
    """Service for listing, creating and updating offices"""

    @staticmethod
    def _active_reservations_count():
        """Correlated count of a listed office's active reservations"""
        return (
            select(func.count(Reservation.id))
            .where(
                Reservation.office_id == Office.id,
                Reservation.status == Reservation.STATUS_ACTIVE
            )
            .correlate(Office)
            .scalar_subquery()
            .label("reservations_count")
        )

    @staticmethod
    def _with_relations(query):
        return query.options(
            selectinload(Office.tags),
            selectinload(Office.images),
            selectinload(Office.user)
        )

    @staticmethod
    def list_offices(
        db: Session,
        filter_params: OfficeFilter,
        per_page: Optional[int] = None
    ) -> Dict[str, Any]:
        """List approved, visible offices with filtering, ordering and pagination"""
        per_page = per_page or settings.OFFICES_PER_PAGE

        query = OfficeService._with_relations(
            db.query(Office, OfficeService._active_reservations_count())
        ).filter(
            Office.approval_status == Office.APPROVAL_APPROVED,
            Office.hidden.is_(False)
        )

        if filter_params.owner_id:
            query = query.filter(Office.user_id == filter_params.owner_id)

        if filter_params.visitor_id:
            # EXISTS, so an office reserved several times is listed once
            query = query.filter(
                Office.reservations.any(Reservation.user_id == filter_params.visitor_id)
            )

        total = query.count()

        if filter_params.has_coordinates:
            query = query.order_by(
                distance_order_expression(Office.lat, Office.lng, filter_params.lat, filter_params.lng),
                Office.id.asc()
            )
        else:
            query = query.order_by(Office.id.asc())

        offset = (filter_params.page - 1) * per_page
        rows = query.offset(offset).limit(per_page).all()

        return {
            "items": [(office, count) for office, count in rows],
            "total": total,
            "page": filter_params.page,
            "per_page": per_page,
            "last_page": max(1, (total + per_page - 1) // per_page)
        }

    @staticmethod
    def get_office(db: Session, office_id: int) -> Tuple[Office, int]:
        """Get a single office with its active reservation count"""
        row = OfficeService._with_relations(
            db.query(Office, OfficeService._active_reservations_count())
        ).filter(Office.id == office_id).first()

        if not row:
            raise NotFoundError("Office not found")

        office, reservations_count = row
        return office, reservations_count

    @staticmethod
    def _load_office(db: Session, office_id: int) -> Office:
        return OfficeService._with_relations(
            db.query(Office)
        ).populate_existing().filter(Office.id == office_id).one()

    @staticmethod
    def _resolve_tags(db: Session, tag_ids: List[int]) -> List[Tag]:
        """Load the referenced tags; unknown ids are validation errors"""
        unique_ids = list(dict.fromkeys(tag_ids))
        if not unique_ids:
            return []

        tags = {tag.id: tag for tag in db.query(Tag).filter(Tag.id.in_(unique_ids)).all()}

        field_errors = {}
        for index, tag_id in enumerate(tag_ids):
            if tag_id not in tags:
                field_errors[f"tags.{index}"] = [f"The selected tags.{index} is invalid."]

        if field_errors:
            raise ValidationError(field_errors=field_errors)

        return [tags[tag_id] for tag_id in unique_ids]

    @staticmethod
    def _sync_tags(office: Office, tags: List[Tag]) -> Tuple[List[int], List[int]]:
        """Make office.tags exactly `tags`; returns (attached, detached) ids"""
        wanted = {tag.id for tag in tags}
        current = {tag.id for tag in office.tags}

        detached = []
        for tag in list(office.tags):
            if tag.id not in wanted:
                office.tags.remove(tag)
                detached.append(tag.id)

        attached = []
        for tag in tags:
            if tag.id not in current:
                office.tags.append(tag)
                attached.append(tag.id)

        return attached, detached

    @staticmethod
    def create_office(
        db: Session,
        office_data: OfficeCreate,
        principal: Principal
    ) -> Office:
        """Create a new office owned by the actor; it starts pending approval"""
        if not principal.token_can(ABILITY_OFFICE_CREATE):
            raise AuthorizationError("Token lacks the office.create ability")

        tags = OfficeService._resolve_tags(db, office_data.tags) if office_data.tags else []

        office = Office(
            **office_data.model_dump(exclude={"tags"}),
            user_id=principal.id,
            approval_status=Office.APPROVAL_PENDING
        )
        office.tags = tags

        try:
            db.add(office)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to create office for user {principal.id}: {e}")
            raise TransactionFailure("Failed to create office")

        logger.info(f"Office {office.id} created by user {principal.id} with tags {[t.id for t in tags]}")

        return OfficeService._load_office(db, office.id)

    @staticmethod
    def get_updatable_office(db: Session, office_id: int, principal: Principal) -> Office:
        """Load an office the actor may update: 404, then ability, then ownership"""
        office = db.query(Office).filter(Office.id == office_id).first()
        if not office:
            raise NotFoundError("Office not found")

        if not principal.token_can(ABILITY_OFFICE_UPDATE):
            raise AuthorizationError("Token lacks the office.update ability")

        if office.user_id != principal.id:
            raise AuthorizationError("You can only update your own offices")

        return office

    @staticmethod
    def update_office(
        db: Session,
        office: Office,
        office_data: OfficeUpdate,
        principal: Principal
    ) -> Tuple[Office, bool]:
        """
        Update an office returned by get_updatable_office.

        Changing lat, lng or price_per_day sends the office back to
        pending. Field changes and the tag sync commit together.

        Returns:
            The reloaded office and whether it now requires review
        """
        office_id = office.id

        changes = office_data.model_dump(exclude_unset=True)
        tag_ids = changes.pop("tags", None)
        tags = OfficeService._resolve_tags(db, tag_ids) if tag_ids is not None else None

        requires_review = any(
            field in changes and changes[field] != getattr(office, field)
            for field in Office.REVIEW_FIELDS
        )

        for field, value in changes.items():
            setattr(office, field, value)

        if requires_review:
            office.approval_status = Office.APPROVAL_PENDING

        attached, detached = [], []
        if tags is not None:
            attached, detached = OfficeService._sync_tags(office, tags)

        try:
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to update office {office_id}: {e}")
            raise TransactionFailure("Failed to update office")

        logger.info(
            f"Office {office_id} updated by user {principal.id}: fields={sorted(changes)}, "
            f"tags attached={attached} detached={detached}, requires_review={requires_review}"
        )

        return OfficeService._load_office(db, office_id), requires_review

# ================================
# NOTIFICATION SERVICE (services/notification_service.py)
# ================================

from fastapi import BackgroundTasks
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import Optional, Dict, Any
import logging

from office_api.config import settings
from office_api.core.exceptions import NotificationDeliveryError
from office_api.models.business import Office
from office_api.models.user import User
from office_api.utils.email import EmailService, email_service

logger = logging.getLogger(__name__)

class NotificationService:
    """Tells the reviewer account about offices waiting for approval"""

    def __init__(self, mailer: Optional[EmailService] = None, reviewer_name: Optional[str] = None):
        self.mailer = mailer or email_service
        self.reviewer_name = reviewer_name or settings.OFFICE_REVIEWER_NAME

    def find_reviewer(self, db: Session) -> Optional[User]:
        """First user carrying the configured reviewer name"""
        return db.query(User).filter(User.name == self.reviewer_name).order_by(User.id).first()

    def notify_office_pending_approval(
        self,
        db: Session,
        office: Office,
        background_tasks: BackgroundTasks
    ) -> bool:
        """
        Schedule a pending-approval notice for the reviewer.

        Must be called after the office update has been committed. The
        reviewer lookup happens now, while the session is open; delivery
        runs as a background task once the response is sent. Nothing here
        raises: failures are logged and reported through the return value.

        Returns:
            True when a delivery was scheduled
        """
        try:
            reviewer = self.find_reviewer(db)
        except SQLAlchemyError as e:
            logger.error(f"Reviewer lookup failed for office {office.id}: {e}")
            return False

        if not reviewer:
            logger.warning(
                f"No reviewer named '{self.reviewer_name}', office {office.id} stays pending without notice"
            )
            return False

        office_snapshot = {
            "id": office.id,
            "title": office.title,
            "address_line1": office.address_line1,
            "lat": office.lat,
            "lng": office.lng,
            "price_per_day": office.price_per_day,
        }
        background_tasks.add_task(self.deliver, reviewer.email, reviewer.name, office_snapshot)

        logger.info(f"Pending approval notice for office {office.id} queued for reviewer {reviewer.id}")
        return True

    async def deliver(self, to_email: str, reviewer_name: str, office: Dict[str, Any]) -> None:
        """Sends the notice; delivery errors never reach the caller"""
        try:
            await self.mailer.send_office_pending_approval(to_email, reviewer_name, office)
            logger.info(f"Pending approval notice for office {office['id']} delivered to {to_email}")
        except NotificationDeliveryError as e:
            logger.error(f"Pending approval notice for office {office['id']} not delivered: {e}")
        except Exception as e:
            logger.error(f"Unexpected error delivering notice for office {office['id']}: {e}", exc_info=True)

# Singleton Instance
notification_service = NotificationService()

# ================================
# DEPENDENCIES (dependencies.py)
# ================================

from fastapi import Depends, Path
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Generator, Optional

from office_api.core.database import SessionLocal
from office_api.core.exceptions import AuthenticationError, AuthorizationError
from office_api.core.security import Principal, verify_token
from office_api.models.business import Office
from office_api.models.user import User
from office_api.services.notification_service import NotificationService, notification_service
from office_api.services.office_service import OfficeService

security = HTTPBearer(auto_error=False)

# ================================
# BASIC DEPENDENCIES
# ================================

def get_db() -> Generator[Session, None, None]:
    """Dependency for a request-scoped database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_notification_service() -> NotificationService:
    """Dependency for the reviewer notification dispatcher"""
    return notification_service

# ================================
# USER AUTHENTICATION DEPENDENCIES
# ================================

async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> Principal:
    """Dependency for the authenticated actor and its token abilities"""
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    payload = verify_token(credentials.credentials)
    if not payload:
        raise AuthenticationError("Invalid authentication credentials")

    user_id = payload.get("sub")
    if not user_id:
        raise AuthenticationError("Invalid token payload")

    try:
        user_id = int(user_id)
    except (TypeError, ValueError):
        raise AuthenticationError("Invalid token payload")

    user = db.query(User).filter(User.id == user_id).first()
    if not user or not user.is_active:
        raise AuthenticationError("User not found or inactive")

    abilities = payload.get("abilities") or []
    return Principal(user=user, abilities=frozenset(abilities))

async def get_verified_principal(
    principal: Principal = Depends(get_current_principal)
) -> Principal:
    """Dependency for an actor whose email address is verified"""
    if not principal.user.is_verified:
        raise AuthorizationError("Email address not verified", error_code="EMAIL_NOT_VERIFIED")
    return principal

# ================================
# ABILITY-BASED DEPENDENCIES
# ================================

def require_ability(ability: str):
    """Factory for token-ability dependencies"""

    async def ability_dependency(
        principal: Principal = Depends(get_verified_principal)
    ) -> Principal:
        if not principal.token_can(ability):
            raise AuthorizationError(f"Token lacks the {ability} ability")
        return principal

    return ability_dependency

# ================================
# RESOURCE DEPENDENCIES
# ================================

async def get_updatable_office(
    office_id: int = Path(..., description="Office ID"),
    principal: Principal = Depends(get_verified_principal),
    db: Session = Depends(get_db)
) -> Office:
    """Dependency for an office the actor may update; resolved before the body is validated"""
    return OfficeService.get_updatable_office(db, office_id, principal)

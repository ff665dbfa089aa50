# ================================
# SECURITY CORE (core/security.py)
# ================================

from jose import JWTError, jwt
from datetime import datetime, timedelta, timezone
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Iterable, FrozenSet

from office_api.config import settings

# Token abilities
ABILITY_ALL = "*"
ABILITY_OFFICE_CREATE = "office.create"
ABILITY_OFFICE_UPDATE = "office.update"

def create_access_token(
    user_id: int,
    abilities: Iterable[str] = (ABILITY_ALL,),
    expires_delta: Optional[timedelta] = None
) -> str:
    """Creates a JWT access token carrying the user's abilities"""
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {
        "sub": str(user_id),
        "abilities": list(abilities),
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def verify_token(token: str, expected_type: str = "access") -> Optional[Dict[str, Any]]:
    """Verifies a JWT token and returns its payload"""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        if payload.get("type") != expected_type:
            return None
        return payload
    except JWTError:
        return None

# ================================
# AUTHENTICATED ACTOR
# ================================

@dataclass(frozen=True)
class Principal:
    """Authenticated user plus the abilities granted to the presented token"""
    user: Any
    abilities: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def id(self) -> int:
        return self.user.id

    def token_can(self, ability: str) -> bool:
        return ABILITY_ALL in self.abilities or ability in self.abilities

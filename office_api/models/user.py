# ================================
# USER MODELS (models/user.py)
# ================================

from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from office_api.models.base import Base

class User(Base):
    """User Model (hosts own offices, visitors hold reservations)"""
    __tablename__ = "users"

    # Basic Information
    name = Column(String(255), nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)

    # Account Status
    is_active = Column(Boolean, default=True, nullable=False)
    email_verified_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    offices = relationship("Office", back_populates="user")
    reservations = relationship("Reservation", back_populates="user")

    @property
    def is_verified(self) -> bool:
        return self.email_verified_at is not None

    def __repr__(self):
        return f"<User(id={self.id}, name='{self.name}')>"
